"""
Hard assignment strategy for clustering algorithms.

Assigns each point to its nearest cluster based on the distance metric.
"""

from typing import List, Tuple
import torch
from torch import Tensor

from ..base.interfaces import AssignmentStrategy, ClusterRepresentation


class HardAssignment(AssignmentStrategy):
    """Hard (discrete) assignment to nearest cluster.
    
    Each point is assigned to exactly one cluster based on minimum distance.
    Ties go to the lowest cluster index.
    """
        
    def compute_assignments(self, points: Tensor, 
                            representations: List[ClusterRepresentation],
                            **kwargs) -> Tuple[Tensor, Tensor]:
        """Assign each point to nearest cluster.
        
        Args:
            points: (n, d) data points
            representations: List of K cluster representations
            **kwargs: Ignored for basic hard assignment
            
        Returns:
            assignments: (n,) tensor of 0-based cluster indices
            distances: (n, K) distance matrix
        """
        distances = distance_matrix(points, representations)
        return nearest_cluster(distances), distances


def distance_matrix(points: Tensor, representations: List[ClusterRepresentation]) -> Tensor:
    """Stack per-cluster distances into an (n, K) matrix."""
    n_points = points.shape[0]
    distances = torch.zeros(n_points, len(representations),
                            device=points.device, dtype=points.dtype)
    for k, representation in enumerate(representations):
        distances[:, k] = representation.distance_to_point(points)
    return distances


def nearest_cluster(distances: Tensor) -> Tensor:
    """Index of the minimum of each row, lowest index on ties."""
    n_clusters = distances.shape[1]
    row_min = distances.min(dim=1, keepdim=True)[0]
    columns = torch.arange(n_clusters, device=distances.device).unsqueeze(0)
    candidates = torch.where(distances == row_min, columns, n_clusters)
    return candidates.min(dim=1)[0]
