"""
Configuration Records (Data Model)
==================================
This module defines the immutable records passed between the loader, the
analysis and the reports.

Classes:
    Side: Deflection side of a trajectory (sign of its mean Y).
    Configuration: One experimental run with its recorded x/y samples.
    ConfigurationResult: Everything the analysis derives for one run.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Dict, Tuple, TYPE_CHECKING
import logging

import numpy as np

from spaanalysis.model.materials import Material

if TYPE_CHECKING:
    import numpy.typing as npt

logger = logging.getLogger(__name__)


class DatasetValidationError(ValueError):
    """A configuration of the dataset cannot be analysed."""

    def __init__(self, index: int, reason: str) -> None:
        self.index = index
        self.reason = reason
        super().__init__(f"Configuration {index}: {reason}")


class Side(StrEnum):
    POSITIVE = "positive"
    NEGATIVE = "negative"


@dataclass(frozen=True)
class SideMetadata:
    label: str
    color: Tuple[float, float, float]


SIDE_METADATA: Dict[Side, SideMetadata] = {
    Side.POSITIVE: SideMetadata(label="Positive Y Side", color=(0.0, 0.5, 0.8)),
    Side.NEGATIVE: SideMetadata(label="Negative Y Side", color=(0.85, 0.33, 0.1)),
}

SIDE_ORDER: Tuple[Side, Side] = (Side.POSITIVE, Side.NEGATIVE)


def _as_trajectory_axis(index: int, name: str, values) -> npt.NDArray[np.float64]:
    try:
        arr = np.array(values, dtype=np.float64).ravel()
    except (TypeError, ValueError) as e:
        raise DatasetValidationError(index, f"'{name}' is not numeric ({e}).") from e
    arr.flags.writeable = False
    return arr


@dataclass(frozen=True, eq=False)
class Configuration:
    """
    One experimental run of the actuator.

    The x/y samples are stored as read-only float64 arrays; their order is the
    order along the deformation path and is never changed.
    """
    index: int
    x: npt.NDArray[np.float64]
    y: npt.NDArray[np.float64]
    material: Material

    def __post_init__(self) -> None:
        x = _as_trajectory_axis(self.index, "x", self.x)
        y = _as_trajectory_axis(self.index, "y", self.y)

        if self.index < 1:
            raise DatasetValidationError(self.index, "index must be 1-based.")
        if x.size != y.size:
            raise DatasetValidationError(
                self.index, f"x and y have different lengths ({x.size} != {y.size})."
            )
        if x.size == 0:
            raise DatasetValidationError(self.index, "trajectory is empty.")
        if not (np.all(np.isfinite(x)) and np.all(np.isfinite(y))):
            raise DatasetValidationError(self.index, "trajectory contains non-finite samples.")

        try:
            material = Material(self.material)
        except ValueError as e:
            raise DatasetValidationError(self.index, f"unknown material '{self.material}'.") from e

        object.__setattr__(self, "x", x)
        object.__setattr__(self, "y", y)
        object.__setattr__(self, "material", material)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(index={self.index}, n_samples={self.n_samples}, material={self.material.value})"

    @property
    def n_samples(self) -> int:
        return int(self.x.size)

    @property
    def points(self) -> npt.NDArray[np.float64]:
        """Samples as an (N, 2) array of [x, y] rows."""
        return np.column_stack((self.x, self.y))

    @property
    def mean_y(self) -> float:
        return float(np.mean(self.y))


@dataclass(frozen=True, eq=False)
class ConfigurationResult:
    """Derived values for one configuration."""
    index: int
    side: Side
    material: Material
    rmsd: float
    reference_index: int
    curvature: npt.NDArray[np.float64] = field(repr=False)

    @property
    def is_reference(self) -> bool:
        return self.index == self.reference_index
