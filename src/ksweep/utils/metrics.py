"""
Clustering quality metrics.

Reduces per-row assignments into the aggregate numbers reported for each
cluster count of a sweep.
"""

from typing import Dict, List, Optional, Sequence
import torch
from torch import Tensor

from ..base.data_structures import ClusterAssignment, ClusterMetrics
from ..exceptions import ParameterError


def assigned_distances(assignments: Sequence[ClusterAssignment]) -> Tensor:
    """(n,) distance of every row to its own cluster."""
    return torch.tensor([a.assigned_distance for a in assignments], dtype=torch.float64)


def cluster_populations(assignments: Sequence[ClusterAssignment],
                        n_clusters: int) -> Dict[int, int]:
    """Members per cluster id 1..n_clusters, with explicit zeros."""
    ids = torch.tensor([a.predicted_cluster_id for a in assignments], dtype=torch.long)
    counts = torch.bincount(ids - 1, minlength=n_clusters)
    return {cluster_id: int(counts[cluster_id - 1].item())
            for cluster_id in range(1, n_clusters + 1)}


def first_index_of(values: Tensor, target: Tensor) -> int:
    """Position of the first element equal to target."""
    return int(torch.nonzero(values == target)[0, 0].item())


class MetricsAggregator:
    """Computes ClusterMetrics from the assignments of one run.
    
    Ties for best and worst distance go to the first row in input order.
    """

    def aggregate(self, assignments: Sequence[ClusterAssignment],
                  labels: Optional[Sequence[str]] = None) -> ClusterMetrics:
        """Reduce assignments to average/best/worst distance and populations.
        
        Args:
            assignments: One ClusterAssignment per row
            labels: Optional row labels, used to name the best/worst rows
            
        Raises:
            ParameterError: If assignments is empty or inconsistent
        """
        if len(assignments) == 0:
            raise ParameterError("Cannot compute metrics for an empty set of assignments")
        if labels is not None and len(labels) != len(assignments):
            raise ParameterError(f"Expected {len(assignments)} labels, got {len(labels)}")
            
        n_clusters = assignments[0].n_clusters
        for idx, assignment in enumerate(assignments):
            if assignment.n_clusters != n_clusters:
                raise ParameterError(
                    f"Row {idx} has {assignment.n_clusters} distances, expected {n_clusters}"
                )
            if not 1 <= assignment.predicted_cluster_id <= n_clusters:
                raise ParameterError(
                    f"Row {idx} is assigned to cluster {assignment.predicted_cluster_id}, "
                    f"outside [1, {n_clusters}]"
                )
                
        distances = assigned_distances(assignments)
        best_index = first_index_of(distances, distances.min())
        worst_index = first_index_of(distances, distances.max())
        
        return ClusterMetrics(
            cluster_count=n_clusters,
            average_distance=distances.mean().item(),
            best_distance=distances[best_index].item(),
            worst_distance=distances[worst_index].item(),
            population_by_cluster=cluster_populations(assignments, n_clusters),
            best_index=best_index,
            worst_index=worst_index,
            best_label=labels[best_index] if labels is not None else None,
            worst_label=labels[worst_index] if labels is not None else None
        )


def format_metrics_summary(metrics: ClusterMetrics) -> List[str]:
    """Human readable report lines for one run."""
    lines = [
        f"Clusters: {metrics.cluster_count}",
        f"Average Distance: {metrics.average_distance}",
        f"Best fit Label={metrics.best_label} Distance={metrics.best_distance}",
        f"Worst fit Label={metrics.worst_label} Distance={metrics.worst_distance}",
        "Cluster Populations",
    ]
    for cluster_id, count in sorted(metrics.population_by_cluster.items()):
        lines.append(f"ClusterId:{cluster_id} : {count} members")
    return lines
