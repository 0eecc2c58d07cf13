"""
Cluster visualization utilities.

Scatter plots of 2-feature tables colored by cluster, and elbow curves of
the distance metrics across a sweep.
"""

from typing import Optional, List, Sequence
import matplotlib.pyplot as plt
import numpy as np

from ..base.data_structures import Centroid, ClusterAssignment
from ..data.table import Table


def plot_clusters_2d(table: Table,
                     assignments: Sequence[ClusterAssignment],
                     centroids: Optional[Sequence[Centroid]] = None,
                     ax: Optional[plt.Axes] = None,
                     colors: Optional[List[str]] = None,
                     alpha: float = 0.7,
                     center_marker: str = 'X',
                     center_size: int = 200,
                     point_size: int = 50,
                     show_legend: bool = True,
                     title: Optional[str] = None) -> plt.Axes:
    """Plot 2D clustering results.
    
    Args:
        table: Table with exactly two features
        assignments: One ClusterAssignment per row
        centroids: Optional centroids to overlay
        ax: Matplotlib axes (created if None)
        colors: List of colors for clusters
        alpha: Point transparency
        center_marker: Marker for centers
        center_size: Size of center markers
        point_size: Size of data points
        show_legend: Whether to show legend
        title: Plot title
        
    Returns:
        Matplotlib axes
    """
    if table.feature_count != 2:
        raise ValueError(f"plot_clusters_2d needs 2 features, got {table.feature_count}")
    if len(assignments) != table.row_count:
        raise ValueError(f"Expected {table.row_count} assignments, got {len(assignments)}")
        
    if ax is None:
        fig, ax = plt.subplots(figsize=(8, 6))
        
    X_np = table.features.cpu().numpy()
    labels_np = np.array([a.predicted_cluster_id for a in assignments])
    n_clusters = assignments[0].n_clusters if assignments else 0
    
    if colors is None:
        cmap = plt.get_cmap('tab10' if n_clusters <= 10 else 'tab20')
        colors = [cmap(i % cmap.N) for i in range(max(n_clusters, 1))]
        
    for cluster_id in np.unique(labels_np):
        mask = labels_np == cluster_id
        ax.scatter(X_np[mask, 0], X_np[mask, 1],
                   c=[colors[(cluster_id - 1) % len(colors)]],
                   s=point_size,
                   alpha=alpha,
                   edgecolors='black',
                   linewidth=0.5,
                   label=f'Cluster {cluster_id}')
                  
    if centroids:
        centers_np = np.array([c.features for c in centroids])
        ax.scatter(centers_np[:, 0], centers_np[:, 1],
                   c='black',
                   marker=center_marker,
                   s=center_size,
                   edgecolors='white',
                   linewidth=2,
                   label='Centers',
                   zorder=10)
                  
    ax.set_xlabel('Feature0')
    ax.set_ylabel('Feature1')
    
    if title:
        ax.set_title(title)
        
    if show_legend:
        ax.legend()
        
    return ax


def plot_sweep_metrics(entries: Sequence,
                       ax: Optional[plt.Axes] = None,
                       title: Optional[str] = 'Distance by cluster count') -> plt.Axes:
    """Plot average, best and worst distance against K (elbow curve).
    
    Args:
        entries: SweepEntry objects; failed entries are skipped
        ax: Matplotlib axes (created if None)
        title: Plot title
        
    Returns:
        Matplotlib axes
    """
    if ax is None:
        fig, ax = plt.subplots(figsize=(8, 5))
        
    done = sorted((e for e in entries if e.ok), key=lambda e: e.k)
    ks = [e.k for e in done]
    
    ax.plot(ks, [e.metrics.average_distance for e in done], marker='o', label='Average')
    ax.plot(ks, [e.metrics.best_distance for e in done], linestyle='--', label='Best')
    ax.plot(ks, [e.metrics.worst_distance for e in done], linestyle=':', label='Worst')
    
    ax.set_xlabel('Cluster count')
    ax.set_ylabel('Distance to assigned cluster')
    if ks:
        ax.set_xticks(ks)
    if title:
        ax.set_title(title)
    ax.legend()
    
    return ax
