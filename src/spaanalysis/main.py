"""
Analysis Entry Point
====================
Runs the complete experimental analysis of the zig-zag soft actuator.

Why is this file needed?
------------------------
It is the only place where the layers meet. It:
1. Sets up logging (console, plus a run log next to the figures).
2. Loads the dataset (Model).
3. Runs the analysis (Analysis).
4. Prints the t-test report and renders the figures (View).
"""
import logging
import os
import sys
from typing import List, Optional

import matplotlib.pyplot as plt

from spaanalysis.analysis.pipeline import AnalysisResult, analyze
from spaanalysis.config import DEFAULT_DATASET_PATH, FIGURES_PATH, LOG_FILENAME
from spaanalysis.logging_config import setup_logging
from spaanalysis.model.io import load_dataset
from spaanalysis.view.plots import create_figures, save_figures
from spaanalysis.view.report import format_ttest_report

logger = logging.getLogger(__name__)


def main(
    dataset_path: Optional[str] = None,
    output_dir: Optional[str] = None,
    show: bool = True,
    level: int = logging.INFO,
) -> AnalysisResult:
    """
    Run the analysis on one dataset.

    Args:
        dataset_path: Dataset file; defaults to the recorded OverLapMat.mat.
        output_dir: When given, the figures and the run log are written there.
        show: Open the figures in interactive windows.
        level: Logging level of the run.

    Returns:
        The computed analysis.
    """
    # 1. Setup Logging (Console + run log next to the figures)
    log_file = os.path.join(output_dir, LOG_FILENAME) if output_dir else None
    setup_logging(level=level, log_file=log_file)

    # 2. Load the recorded trajectories
    configurations = load_dataset(dataset_path or DEFAULT_DATASET_PATH)

    # 3. Compute curvature, RMSD and statistics
    result = analyze(configurations)

    # 4. Report
    print(format_ttest_report(result))
    logger.info(
        f"p(material) = {result.material_test.p_value:.4f}, "
        f"p(side) = {result.side_test.p_value:.4f}"
    )

    figures = create_figures(configurations, result)
    if output_dir:
        save_figures(figures, output_dir)
    if show:
        plt.show()
    else:
        for fig in figures.values():
            plt.close(fig)

    return result


def cli(argv: Optional[List[str]] = None) -> None:
    """Console entry: ``spaanalysis [dataset_path]``; figures go to FIGURES_PATH."""
    args = sys.argv[1:] if argv is None else argv
    main(
        dataset_path=args[0] if args else None,
        output_dir=FIGURES_PATH,
    )


if __name__ == "__main__":
    cli()
