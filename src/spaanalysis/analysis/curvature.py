from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    import numpy.typing as npt


def compute_curvature(
    x: list[float] | npt.NDArray[np.float64],
    y: list[float] | npt.NDArray[np.float64],
) -> npt.NDArray[np.float64]:
    """
    Compute the curvature along a sampled planar path.

    Derivatives are taken with respect to the sample index using
    ``numpy.gradient`` (central differences inside, one-sided differences at
    both ends). Samples where the speed vanishes give a non-finite value and
    are reported as zero curvature.

    Args:
        x: X-coordinates of the path samples.
        y: Y-coordinates of the path samples.

    Returns:
        Curvature (1/unit of x, y) for every sample; same length as the input.
    """
    x = np.asarray(x, dtype=np.float64).ravel()
    y = np.asarray(y, dtype=np.float64).ravel()
    if x.size != y.size:
        raise ValueError(f"x and y must have the same length ({x.size} != {y.size}).")

    # A gradient needs at least two samples
    if x.size < 2:
        return np.zeros(x.size, dtype=np.float64)

    dx = np.gradient(x)
    dy = np.gradient(y)
    ddx = np.gradient(dx)
    ddy = np.gradient(dy)

    with np.errstate(divide='ignore', invalid='ignore'):
        curvature = np.abs(dx * ddy - dy * ddx) / (dx**2 + dy**2)**1.5
    curvature[~np.isfinite(curvature)] = 0.0

    return curvature
