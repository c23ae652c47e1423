import logging

import matplotlib

matplotlib.use("Agg")

import numpy as np
import pytest

from spaanalysis.model.configuration import Configuration
from spaanalysis.model.materials import Material


@pytest.fixture(autouse=True)
def reset_package_logger():
    yield
    logger = logging.getLogger("spaanalysis")
    for handler in list(logger.handlers):
        handler.close()
    logger.handlers.clear()


@pytest.fixture
def make_config():
    def _make(index, x, y, material=Material.DRAGON_SKIN_ONLY):
        return Configuration(index=index, x=np.asarray(x, dtype=float), y=np.asarray(y, dtype=float), material=material)
    return _make


@pytest.fixture
def small_dataset(make_config):
    """
    Three positive-side runs (5, 5 and 3 samples) and two negative-side runs
    of equal length. The first three are Dragon Skin only.
    """
    eco = Material.DRAGON_SKIN_ECOFLEX
    return [
        make_config(1, [0, 1, 2, 3, 4], [1, 2, 3, 4, 5]),
        make_config(2, [3, 1, 2, 9, 9], [4, 1, 2, 9, 9]),
        make_config(3, [0, 1, 2], [0, 1, 2]),
        make_config(4, [0, 1, 2, 3], [-1, -2, -3, -4], eco),
        make_config(5, [0, 1, 2, 3], [-2, -3, -4, -5], eco),
    ]
