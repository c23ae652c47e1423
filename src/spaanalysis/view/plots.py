"""
Figures of the experimental analysis.

Every function only draws what the analysis already computed and returns the
matplotlib Figure; showing or saving is left to the caller.
"""
from __future__ import annotations

import logging
import os
from typing import Dict, List, Sequence

import numpy as np
import matplotlib.pyplot as plt
from matplotlib.figure import Figure
from matplotlib.lines import Line2D
from matplotlib.patches import Patch

from spaanalysis.analysis.pipeline import AnalysisResult
from spaanalysis.config import RMSD_MARKER_OFFSET, FIGURE_DPI
from spaanalysis.model.configuration import Configuration, SIDE_METADATA, SIDE_ORDER
from spaanalysis.model.materials import MATERIAL_METADATA, MATERIAL_ORDER

logger = logging.getLogger(__name__)

FONT_NAME = "Times New Roman"
LABEL_FONT = {'fontweight': 'bold', 'fontsize': 13, 'fontname': FONT_NAME}
TITLE_FONT = {'fontweight': 'bold', 'fontsize': 13, 'fontname': FONT_NAME}

TRAJECTORY_XLIM = (-85, 50)
TRAJECTORY_YLIM = (-120, 120)


def plot_trajectories(configurations: Sequence[Configuration]) -> Figure:
    """Scatter of all recorded trajectories, coloured by material."""
    fig, ax = plt.subplots(figsize=(7, 6))

    for config in configurations:
        color = MATERIAL_METADATA[config.material].color
        ax.scatter(config.x, config.y, marker='o', facecolors='none', edgecolors=color, linewidths=1.5)

    handles = [
        Line2D([], [], marker='o', linestyle='none', markerfacecolor='none',
               markeredgecolor=MATERIAL_METADATA[m].color, markeredgewidth=1.5,
               label=MATERIAL_METADATA[m].label)
        for m in MATERIAL_ORDER
    ]

    ax.set_xlabel("X Displacement: mm", **LABEL_FONT)
    ax.set_ylabel("Y Displacement: mm", **LABEL_FONT)
    ax.set_title("Trajectory of the SPA (Experimental)", **TITLE_FONT)
    ax.legend(handles=handles, prop={'family': FONT_NAME, 'size': 11})
    ax.set_xlim(*TRAJECTORY_XLIM)
    ax.set_ylim(*TRAJECTORY_YLIM)
    return fig


def plot_rmsd_bars(result: AnalysisResult) -> Figure:
    """RMSD per configuration: bar colour = side, symbol on top = material."""
    fig, ax = plt.subplots(figsize=(10, 5))

    indices = [r.index for r in result.results]
    values = result.rmsd_values()
    colors = [SIDE_METADATA[r.side].color for r in result.results]
    ax.bar(indices, values, color=colors, edgecolor='none')

    for r in result.results:
        meta = MATERIAL_METADATA[r.material]
        ax.plot(r.index, r.rmsd + RMSD_MARKER_OFFSET, linestyle='none', marker=meta.marker,
                color=meta.color, markerfacecolor=meta.color, markersize=6)

    handles: List = [Patch(facecolor=SIDE_METADATA[s].color, label=SIDE_METADATA[s].label) for s in SIDE_ORDER]
    handles += [
        Line2D([], [], linestyle='none', marker=MATERIAL_METADATA[m].marker,
               color=MATERIAL_METADATA[m].color, markerfacecolor=MATERIAL_METADATA[m].color,
               label=MATERIAL_METADATA[m].label)
        for m in MATERIAL_ORDER
    ]

    ax.set_xlabel("Configuration Index", fontweight='bold', fontsize=12, fontname=FONT_NAME)
    ax.set_ylabel("RMSD (mm)", fontweight='bold', fontsize=12, fontname=FONT_NAME)
    ax.set_title("RMSD of All Configurations by Side and Material (Experimental)", **TITLE_FONT)
    ax.legend(handles=handles, loc='upper left', fontsize=11)
    ax.grid(False)
    return fig


def plot_curvature_histogram(result: AnalysisResult) -> Figure:
    """Probability-normalised curvature distributions of both materials."""
    fig, ax = plt.subplots(figsize=(7, 5))

    for material, samples in result.curvature_by_material().items():
        if samples.size == 0:
            logger.warning(f"No curvature samples for {MATERIAL_METADATA[material].label}.")
            continue
        # numpy cannot estimate bins for weighted data, so the edges come from the raw samples.
        # The weights make the bar heights sum to 1 (probability normalisation).
        edges = np.histogram_bin_edges(samples, bins='auto')
        ax.hist(samples, bins=edges, weights=np.full(samples.size, 1.0 / samples.size),
                color=MATERIAL_METADATA[material].color, alpha=0.5,
                label=MATERIAL_METADATA[material].label)

    ax.set_xlabel("Curvature (1/mm)", **LABEL_FONT)
    ax.set_ylabel("Probability", **LABEL_FONT)
    ax.set_title("Curvature Distribution Comparison (Experimental)",
                 fontweight='bold', fontsize=14, fontname=FONT_NAME)
    ax.legend(loc='upper right', fontsize=11)
    ax.grid(False)
    return fig


def create_figures(configurations: Sequence[Configuration], result: AnalysisResult) -> Dict[str, Figure]:
    """All three figures keyed by their file stem."""
    return {
        "trajectories": plot_trajectories(configurations),
        "rmsd": plot_rmsd_bars(result),
        "curvature_distribution": plot_curvature_histogram(result),
    }


def save_figures(figures: Dict[str, Figure], output_dir: str) -> List[str]:
    """Write every figure as PNG into ``output_dir`` and return the file paths."""
    os.makedirs(output_dir, exist_ok=True)
    paths = []
    for name, fig in figures.items():
        path = os.path.join(output_dir, f"{name}.png")
        fig.savefig(path, dpi=FIGURE_DPI, bbox_inches='tight')
        logger.info(f"Saved figure: {path}")
        paths.append(path)
    return paths
