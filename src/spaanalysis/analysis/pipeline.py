"""
Analysis Pipeline
=================
Turns the loaded configurations into per-configuration result records and
the two RMSD t-tests.

Steps:
1. Curvature of every trajectory (independently).
2. Side of every trajectory (sign of the mean Y).
3. RMSD within each side group against the group's shortest trajectory.
4. t-tests of RMSD between materials and between sides.
"""
from __future__ import annotations

from dataclasses import dataclass, field
import logging
from typing import Dict, List, Sequence, TYPE_CHECKING

import numpy as np

from spaanalysis.analysis.classification import classify_side
from spaanalysis.analysis.curvature import compute_curvature
from spaanalysis.analysis.deviation import compute_group_rmsd
from spaanalysis.analysis.statistics import TTestResult, two_sample_ttest
from spaanalysis.config import SIGNIFICANCE_LEVEL, EQUAL_VARIANCE
from spaanalysis.model.configuration import Configuration, ConfigurationResult, Side, SIDE_METADATA, SIDE_ORDER
from spaanalysis.model.materials import Material, MATERIAL_METADATA, MATERIAL_ORDER

if TYPE_CHECKING:
    import numpy.typing as npt

logger = logging.getLogger(__name__)


@dataclass
class AnalysisResult:
    results: List[ConfigurationResult]
    material_test: TTestResult
    side_test: TTestResult
    references: Dict[Side, int] = field(default_factory=dict)

    def rmsd_values(self) -> npt.NDArray[np.float64]:
        """RMSD of every configuration, in configuration order."""
        return np.array([r.rmsd for r in self.results], dtype=np.float64)

    def rmsd_by(self, key: Material | Side) -> npt.NDArray[np.float64]:
        """RMSD values of all configurations with the given material or side."""
        if isinstance(key, Material):
            return np.array([r.rmsd for r in self.results if r.material == key], dtype=np.float64)
        return np.array([r.rmsd for r in self.results if r.side == key], dtype=np.float64)

    def curvature_by_material(self) -> Dict[Material, npt.NDArray[np.float64]]:
        """Curvature samples of all trajectories of each material, pooled."""
        pooled = {}
        for material in MATERIAL_ORDER:
            curves = [r.curvature for r in self.results if r.material == material]
            pooled[material] = np.concatenate(curves) if curves else np.empty(0, dtype=np.float64)
        return pooled


def analyze(
    configurations: Sequence[Configuration],
    alpha: float = SIGNIFICANCE_LEVEL,
    equal_var: bool = EQUAL_VARIANCE,
) -> AnalysisResult:
    """
    Run the full analysis on a dataset.

    Args:
        configurations: Configurations in recorded order.
        alpha: Significance level of both t-tests.
        equal_var: Pooled-variance (True) or Welch (False) t-test.

    Returns:
        Per-configuration records (same order as the input) and both t-tests.
    """
    if len(configurations) == 0:
        raise ValueError("Cannot analyse an empty dataset.")
    indices = [c.index for c in configurations]
    if len(set(indices)) != len(indices):
        raise ValueError("Configuration indices must be unique.")

    logger.info(f"Analysing {len(configurations)} configurations.")

    # 1. + 2. Per configuration
    curvatures = [compute_curvature(c.x, c.y) for c in configurations]
    sides = [classify_side(c.y) for c in configurations]

    # 3. Per side group, in original order
    rmsd = np.zeros(len(configurations), dtype=np.float64)
    reference_of = np.zeros(len(configurations), dtype=np.int64)
    references: Dict[Side, int] = {}
    for side in SIDE_ORDER:
        members = [i for i, s in enumerate(sides) if s == side]
        if not members:
            logger.warning(f"No configurations on the {side.value} side.")
            continue
        ref_pos, values = compute_group_rmsd([configurations[i].points for i in members])
        ref_index = configurations[members[ref_pos]].index
        references[side] = ref_index
        rmsd[members] = values
        reference_of[members] = ref_index
        logger.info(
            f"{SIDE_METADATA[side].label}: {len(members)} configurations, "
            f"reference = configuration {ref_index}."
        )

    results = [
        ConfigurationResult(
            index=c.index,
            side=sides[i],
            material=c.material,
            rmsd=float(rmsd[i]),
            reference_index=int(reference_of[i]),
            curvature=curvatures[i],
        )
        for i, c in enumerate(configurations)
    ]

    # 4. Statistics
    first, second = MATERIAL_ORDER
    material_rmsd = {
        m: np.array([r.rmsd for r in results if r.material == m], dtype=np.float64) for m in MATERIAL_ORDER
    }
    material_test = two_sample_ttest(
        material_rmsd[first], material_rmsd[second],
        label="material",
        group_a=MATERIAL_METADATA[first].label,
        group_b=MATERIAL_METADATA[second].label,
        alpha=alpha,
        equal_var=equal_var,
    )

    pos, neg = SIDE_ORDER
    side_rmsd = {
        s: np.array([r.rmsd for r in results if r.side == s], dtype=np.float64) for s in SIDE_ORDER
    }
    side_test = two_sample_ttest(
        side_rmsd[pos], side_rmsd[neg],
        label="side",
        group_a=SIDE_METADATA[pos].label,
        group_b=SIDE_METADATA[neg].label,
        alpha=alpha,
        equal_var=equal_var,
    )

    logger.info("Analysis finished.")
    return AnalysisResult(
        results=results,
        material_test=material_test,
        side_test=side_test,
        references=references,
    )
