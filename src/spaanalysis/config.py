"""
Configuration & Path Management
===============================
This module serves as the central registry for file paths and the constants
that are specific to the zig-zag actuator dataset.

Why is this file needed?
------------------------
1. Abstraction: It prevents hardcoded paths (e.g., "C:/Users/...") scattered
   throughout the code.
2. Reproducibility: The positional material split and the statistical
   settings of the published analysis live in one place instead of being
   repeated as magic numbers.

Exports:
    ASSETS_PATH (str): Absolute path to the assets directory.
    DEFAULT_DATASET_PATH (str): Absolute path to the recorded trajectories.
    FIGURES_PATH (str): Default output directory for the rendered figures.
    MATERIAL_SPLIT_INDEX (int): Last configuration index printed in Dragon Skin only.
"""
import sys
import os
from pathlib import Path


def get_resource_path(relative_path: str) -> str:
    """
    Get absolute path to resource, works for dev and for PyInstaller.
    """
    if hasattr(sys, '_MEIPASS'):
        # PyInstaller temp folder
        base_path: str = getattr(sys, '_MEIPASS')
        return os.path.join(base_path, relative_path)

    # Development mode: resolve relative to this file
    # config.py is in src/spaanalysis/
    current_file_path: Path = Path(__file__)
    project_root: Path = current_file_path.parent.parent.parent
    return os.path.join(str(project_root), relative_path)


# Global Constants
ASSETS_PATH: str = get_resource_path("assets")
DEFAULT_DATASET_PATH: str = os.path.join(ASSETS_PATH, "OverLapMat.mat")
FIGURES_PATH: str = get_resource_path("figures")

# Configurations 1..26 of the recorded dataset are Dragon Skin only,
# 27..N are Dragon Skin + Ecoflex. Only valid for this dataset.
MATERIAL_SPLIT_INDEX: int = 26

# Statistics
SIGNIFICANCE_LEVEL: float = 0.05
EQUAL_VARIANCE: bool = True  # pooled (Student) t-test, as in the published analysis

# Plotting
RMSD_MARKER_OFFSET: float = 1.8  # mm between bar top and material marker
FIGURE_DPI: int = 300

# Run log written next to the figures
LOG_FILENAME: str = "analysis.log"
