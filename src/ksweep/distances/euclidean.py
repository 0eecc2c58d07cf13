"""
Euclidean distance metric for clustering.
"""

import torch
from torch import Tensor

from ..base.interfaces import DistanceMetric, ClusterRepresentation


class EuclideanDistance(DistanceMetric):
    """Euclidean distance to the cluster center.
    
    Computes ||x - μ||² or ||x - μ|| where μ is the cluster center.
    """
    
    def __init__(self, squared: bool = True):
        """
        Args:
            squared: If True, return squared distances (default).
                    If False, return actual Euclidean distances.
        """
        self.squared = squared
        
    def compute(self, points: Tensor, representation: ClusterRepresentation,
                **kwargs) -> Tensor:
        """Compute Euclidean distances from points to cluster center.
        
        Args:
            points: (n, d) tensor of points
            representation: Cluster representation with 'mean' parameter
            
        Returns:
            (n,) tensor of distances
        """
        params = representation.get_parameters()
        if 'mean' not in params:
            raise ValueError("Euclidean distance requires representation with 'mean' parameter")
            
        center = params['mean']
        
        diff = points - center.unsqueeze(0)
        squared_distances = torch.sum(diff * diff, dim=1)
        
        if self.squared:
            return squared_distances
        else:
            return torch.sqrt(squared_distances)

    def pairwise(self, points: Tensor, representations) -> Tensor:
        """(n, K) distances from every point to every representation."""
        columns = [self.compute(points, rep) for rep in representations]
        return torch.stack(columns, dim=1)
