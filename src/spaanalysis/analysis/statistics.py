"""
Two-sample t-tests on the RMSD values.
"""
from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import TYPE_CHECKING

import numpy as np
import scipy as sp

from spaanalysis.config import SIGNIFICANCE_LEVEL, EQUAL_VARIANCE

if TYPE_CHECKING:
    import numpy.typing as npt

logger = logging.getLogger(__name__)

MIN_GROUP_SIZE = 2


class InsufficientSampleError(ValueError):
    """A compared group has too few samples for a t-test."""


class DegenerateSampleError(ValueError):
    """The t-test is undefined for the given samples (e.g. zero variance in both groups)."""


@dataclass(frozen=True)
class TTestResult:
    label: str
    group_a: str
    group_b: str
    n_a: int
    n_b: int
    mean_a: float
    mean_b: float
    statistic: float
    p_value: float
    alpha: float
    equal_var: bool

    @property
    def significant(self) -> bool:
        """Null hypothesis of equal means rejected (p <= alpha, as MATLAB's ttest2)."""
        return self.p_value <= self.alpha


def two_sample_ttest(
    a: list[float] | npt.NDArray[np.float64],
    b: list[float] | npt.NDArray[np.float64],
    label: str,
    group_a: str,
    group_b: str,
    alpha: float = SIGNIFICANCE_LEVEL,
    equal_var: bool = EQUAL_VARIANCE,
) -> TTestResult:
    """
    Unpaired two-sided t-test between two groups.

    Args:
        a: Samples of the first group.
        b: Samples of the second group.
        label: Name of the comparison (e.g. "material").
        group_a: Name of the first group.
        group_b: Name of the second group.
        alpha: Significance level.
        equal_var: True for the pooled-variance (Student) test, False for Welch's test.

    Returns:
        Test statistic, p-value and decision.
    """
    a = np.asarray(a, dtype=np.float64).ravel()
    b = np.asarray(b, dtype=np.float64).ravel()

    for name, samples in ((group_a, a), (group_b, b)):
        if samples.size < MIN_GROUP_SIZE:
            msg = (
                f"t-test '{label}': group '{name}' has {samples.size} sample(s), "
                f"at least {MIN_GROUP_SIZE} are required."
            )
            logger.error(msg)
            raise InsufficientSampleError(msg)

    statistic, p_value = sp.stats.ttest_ind(a, b, equal_var=equal_var)
    if not np.isfinite(p_value):
        msg = f"t-test '{label}' is undefined: both groups have zero variance."
        logger.error(msg)
        raise DegenerateSampleError(msg)

    result = TTestResult(
        label=label,
        group_a=group_a,
        group_b=group_b,
        n_a=int(a.size),
        n_b=int(b.size),
        mean_a=float(np.mean(a)),
        mean_b=float(np.mean(b)),
        statistic=float(statistic),
        p_value=float(p_value),
        alpha=alpha,
        equal_var=equal_var,
    )
    logger.debug(f"t-test '{label}': t = {result.statistic:.4f}, p = {result.p_value:.4f}")
    return result
