from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

from spaanalysis.model.configuration import Side

if TYPE_CHECKING:
    import numpy.typing as npt


def classify_side(y: list[float] | npt.NDArray[np.float64]) -> Side:
    """
    Deflection side of a trajectory from the sign of its mean Y.

    A mean of exactly zero counts as positive.
    """
    y = np.asarray(y, dtype=np.float64)
    if y.size == 0:
        raise ValueError("Cannot classify an empty trajectory.")
    if np.mean(y) >= 0:
        return Side.POSITIVE
    return Side.NEGATIVE
