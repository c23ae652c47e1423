import numpy as np
import pytest

from spaanalysis.model.configuration import Configuration, DatasetValidationError
from spaanalysis.model.materials import Material


def test_mismatched_lengths_name_the_configuration():
    with pytest.raises(DatasetValidationError, match="Configuration 7") as excinfo:
        Configuration(index=7, x=[0.0, 1.0, 2.0], y=[0.0, 1.0], material=Material.DRAGON_SKIN_ONLY)

    assert excinfo.value.index == 7
    assert isinstance(excinfo.value, ValueError)


@pytest.mark.parametrize("x, y", [([], []), ([0.0, np.nan], [1.0, 2.0]), ([0.0, 1.0], [np.inf, 2.0])])
def test_unusable_samples_are_rejected(x, y):
    with pytest.raises(DatasetValidationError):
        Configuration(index=1, x=x, y=y, material=Material.DRAGON_SKIN_ONLY)


def test_unknown_material_is_rejected():
    with pytest.raises(DatasetValidationError, match="material"):
        Configuration(index=2, x=[0.0], y=[0.0], material="Silicone")


def test_samples_are_read_only():
    config = Configuration(index=1, x=[0, 1, 2], y=[3, 4, 5], material="DragonSkin+Ecoflex")

    assert config.material == Material.DRAGON_SKIN_ECOFLEX
    assert config.x.dtype == np.float64
    with pytest.raises(ValueError):
        config.x[0] = 10.0
    np.testing.assert_array_equal(config.points, [[0, 3], [1, 4], [2, 5]])
    assert config.mean_y == pytest.approx(4.0)
    assert config.n_samples == 3
