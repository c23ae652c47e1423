"""
Logging Configuration
Sets up the 'spaanalysis' logger for one analysis run: console output, and
optionally a run log stored next to the rendered figures.
"""
import logging
import os
import sys
from typing import Optional

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def setup_logging(level: int = logging.INFO, log_file: Optional[str] = None) -> None:
    """
    Configures the logger of the 'spaanalysis' namespace.

    Args:
        level: Logging level (e.g. logging.DEBUG shows reference selection
            and truncation details of every side group).
        log_file: Optional path of the run log; its directory is created.
    """
    logger = logging.getLogger("spaanalysis")
    logger.setLevel(level)

    # Repeated runs in one interpreter (notebooks, tests) must not stack handlers
    if logger.hasHandlers():
        for handler in list(logger.handlers):
            handler.close()
        logger.handlers.clear()

    formatter = logging.Formatter(LOG_FORMAT, datefmt='%H:%M:%S')

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        log_dir = os.path.dirname(os.path.abspath(log_file))
        os.makedirs(log_dir, exist_ok=True)
        file_handler = logging.FileHandler(log_file, mode='w', encoding='utf-8')
        file_handler.setLevel(level)
        # The run log keeps the full date, it outlives the console session
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt='%Y-%m-%d %H:%M:%S'))
        logger.addHandler(file_handler)

    # The figures ask for Times New Roman; a missing font is not worth a warning per label
    logging.getLogger("matplotlib.font_manager").setLevel(logging.ERROR)

    if log_file:
        logger.info(f"Logging initialized, run log: {log_file}")
    else:
        logger.info("Logging initialized.")
