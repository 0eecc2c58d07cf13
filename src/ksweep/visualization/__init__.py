"""Visualization utilities for clustering results."""

from .plot_clusters import (
    plot_clusters_2d,
    plot_sweep_metrics
)

__all__ = [
    'plot_clusters_2d',
    'plot_sweep_metrics'
]
