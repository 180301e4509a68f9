"""
HSI Heatmap — matplotlib rendering of an HSI grid with PFZ outlines.

    build_hsi_heatmap()     HSI surface + zone rectangles
    build_factor_heatmaps() 2x2 panel of per-factor suitability
"""

import numpy as np
import matplotlib
matplotlib.use('Agg')  # non-interactive backend
import matplotlib.pyplot as plt
from matplotlib.patches import Polygon as MplPolygon

from config.constants import POTENTIAL_TIERS
from config.species import get_species_display_name
from analysis.hsi_grid import grid_to_matrix


def _extent(lat_axis, lon_axis, resolution):
    half = resolution / 2
    return [lon_axis[0] - half, lon_axis[-1] + half, lat_axis[0] - half, lat_axis[-1] + half]


def build_hsi_heatmap(grid, polygons=(), title: str | None = None, cmap: str = 'viridis'):
    """
    Args:
        grid: HSIGrid
        polygons: PFZPolygon sequence to outline, coloured by potential tier
        title: defaults to the species display name

    Returns:
        matplotlib Figure
    """
    matrix, lat_axis, lon_axis = grid_to_matrix(grid)

    fig, ax = plt.subplots(figsize=(10, 8))
    if matrix.size == 0:
        ax.text(0.5, 0.5, 'No data', ha='center', va='center')
        ax.set_title(title or 'Habitat Suitability Index')
        return fig

    im = ax.imshow(
        matrix,
        origin='lower',
        cmap=cmap,
        vmin=0,
        vmax=1,
        extent=_extent(lat_axis, lon_axis, grid.resolution),
        aspect='auto',
    )
    plt.colorbar(im, ax=ax, label='HSI (0-1)')

    for p in polygons:
        color = POTENTIAL_TIERS.get(p.potential, {}).get("color", "#ffffff")
        ax.add_patch(MplPolygon(
            np.array(p.boundary),
            closed=True,
            fill=False,
            edgecolor=color,
            linewidth=1.8,
        ))
        ax.annotate(
            p.nearest_port,
            (p.centroid.lon, p.centroid.lat),
            color='white',
            fontsize=7,
            ha='center',
        )

    ax.set_title(title or f'Habitat Suitability — {get_species_display_name(grid.species)}')
    ax.set_xlabel('Longitude')
    ax.set_ylabel('Latitude')
    fig.tight_layout()
    return fig


def build_factor_heatmaps(grid):
    """2x2 figure of factor suitability surfaces (sst, chlorophyll, depth, DO)."""
    configs = [
        ('sst_suitability', 'Sea Surface Temperature', 'coolwarm'),
        ('chlorophyll_suitability', 'Chlorophyll-a', 'YlGn'),
        ('depth_suitability', 'Depth', 'Blues'),
        ('dissolved_oxygen_suitability', 'Dissolved Oxygen', 'PuBu'),
    ]

    fig, axes = plt.subplots(2, 2, figsize=(14, 10))
    axes = axes.flatten()

    for idx, (key, title, cmap) in enumerate(configs):
        ax = axes[idx]
        try:
            data, lat_axis, lon_axis = grid_to_matrix(grid, key)
        except KeyError:
            data = np.empty((0, 0))
        if data.size == 0:
            ax.text(0.5, 0.5, 'No data', ha='center', va='center')
            ax.set_title(title)
            continue

        im = ax.imshow(
            data, origin='lower', cmap=cmap, vmin=0, vmax=1,
            extent=_extent(lat_axis, lon_axis, grid.resolution), aspect='auto',
        )
        plt.colorbar(im, ax=ax, label='Suitability', fraction=0.046, pad=0.04)
        ax.set_title(title, fontsize=11)
        ax.set_xlabel('Longitude', fontsize=8)
        ax.set_ylabel('Latitude', fontsize=8)

    fig.suptitle(f'Factor Suitability — {get_species_display_name(grid.species)}', fontsize=13)
    fig.tight_layout()
    return fig
