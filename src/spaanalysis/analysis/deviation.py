"""
Reference Deviation
===================
Root mean square deviation of trajectories against the reference trajectory
of their side group.

The reference is the shortest trajectory of the group. Trajectories are
compared sample by sample after truncating both to the shorter length, so the
tail of a longer trajectory does not contribute to its RMSD. Nothing is
resampled or aligned by arc length.
"""
from __future__ import annotations

import logging
from typing import Sequence, Tuple, TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    import numpy.typing as npt

logger = logging.getLogger(__name__)


def select_reference(trajectories: Sequence[npt.NDArray[np.float64]]) -> int:
    """
    Position of the shortest trajectory.

    On a tie the first trajectory in the given order wins.
    """
    if len(trajectories) == 0:
        raise ValueError("Cannot select a reference from an empty group.")

    best = 0
    for i, trajectory in enumerate(trajectories):
        if len(trajectory) < len(trajectories[best]):
            best = i
    return best


def rmsd(
    candidate: npt.NDArray[np.float64],
    reference: npt.NDArray[np.float64],
) -> float:
    """
    RMSD between two (N, 2) point sequences over their common leading samples.

    Args:
        candidate: Points of the compared trajectory.
        reference: Points of the reference trajectory.

    Returns:
        sqrt(mean(|candidate[i] - reference[i]|^2)) for i < min(len(candidate), len(reference)).
    """
    candidate = np.asarray(candidate, dtype=np.float64)
    reference = np.asarray(reference, dtype=np.float64)
    n = min(len(candidate), len(reference))
    if n == 0:
        raise ValueError("Cannot compute RMSD of an empty trajectory.")

    diff = candidate[:n] - reference[:n]
    return float(np.sqrt(np.mean(np.sum(diff**2, axis=1))))


def compute_group_rmsd(
    trajectories: Sequence[npt.NDArray[np.float64]],
) -> Tuple[int, npt.NDArray[np.float64]]:
    """
    RMSD of every trajectory of one side group against the group reference.

    Args:
        trajectories: (N_i, 2) point arrays in original configuration order.

    Returns:
        Position of the reference within ``trajectories`` and one RMSD value
        per trajectory, in the same order.
    """
    ref_pos = select_reference(trajectories)
    reference = trajectories[ref_pos]
    values = np.array([rmsd(t, reference) for t in trajectories], dtype=np.float64)

    truncated = sum(1 for t in trajectories if len(t) > len(reference))
    logger.debug(
        f"Reference at position {ref_pos} ({len(reference)} samples); "
        f"{truncated} of {len(trajectories)} trajectories truncated."
    )
    return ref_pos, values
