"""
Actuator Materials
==================
Defines the material groups of the printed actuators and the rule that maps a
configuration index of the recorded dataset onto its material.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Dict, Tuple
import logging

from spaanalysis.config import MATERIAL_SPLIT_INDEX

logger = logging.getLogger(__name__)


class Material(StrEnum):
    DRAGON_SKIN_ONLY = "DragonSkinOnly"
    DRAGON_SKIN_ECOFLEX = "DragonSkin+Ecoflex"


@dataclass(frozen=True)
class MaterialMetadata:
    label: str
    color: str
    marker: str


# Centralized Metadata for Reports and Plotting
MATERIAL_METADATA: Dict[Material, MaterialMetadata] = {
    Material.DRAGON_SKIN_ONLY: MaterialMetadata(label="Dragon Skin Only", color="k", marker="s"),
    Material.DRAGON_SKIN_ECOFLEX: MaterialMetadata(label="Dragon Skin + Ecoflex", color="r", marker="^"),
}

# Order in which the two groups are compared and drawn
MATERIAL_ORDER: Tuple[Material, Material] = (Material.DRAGON_SKIN_ONLY, Material.DRAGON_SKIN_ECOFLEX)


def material_for_index(index: int, split: int = MATERIAL_SPLIT_INDEX) -> Material:
    """
    Positional material rule of the recorded dataset.

    Configurations were recorded in two blocks: the first ``split`` runs use
    actuators printed in Dragon Skin only, all later runs use Dragon Skin with
    Ecoflex segments. This is a property of the dataset, not of the data.

    Args:
        index: 1-based configuration index.
        split: Last index that belongs to the Dragon Skin only block.

    Returns:
        The material of the configuration.
    """
    if index < 1:
        raise ValueError(f"Configuration index must be 1-based, got {index}.")
    if index <= split:
        return Material.DRAGON_SKIN_ONLY
    return Material.DRAGON_SKIN_ECOFLEX


def parse_material(value: str) -> Material:
    """Accept either the stored value ('DragonSkinOnly') or the display label."""
    text = value.strip()
    for material, meta in MATERIAL_METADATA.items():
        if text in (material.value, meta.label):
            return material
    raise ValueError(f"Unknown material: '{value}'")
