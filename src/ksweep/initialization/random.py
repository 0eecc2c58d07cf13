"""
Random initialization strategy for clustering algorithms.

Selects random points from the dataset as initial cluster centers.
"""

from typing import List, Optional
import torch
from torch import Tensor

from ..base.interfaces import InitializationStrategy, ClusterRepresentation
from ..exceptions import ParameterError
from ..representations.centroid import CentroidRepresentation


class RandomInit(InitializationStrategy):
    """Random initialization by selecting points from the dataset.
    
    Selects n_clusters distinct rows (sampling without replacement) as
    initial centers. The generator is the only source of randomness, so a
    fixed seed reproduces the same centers.
    """
    
    def initialize(self, points: Tensor, n_clusters: int,
                   generator: Optional[torch.Generator] = None,
                   **kwargs) -> List[ClusterRepresentation]:
        """Initialize clusters with random points.
        
        Args:
            points: (n, d) data points
            n_clusters: Number of clusters
            generator: Random stream
            
        Returns:
            List of initialized CentroidRepresentations
        """
        n_points, dimension = points.shape
        
        if n_clusters > n_points:
            raise ParameterError(f"Cannot create {n_clusters} clusters from {n_points} points")
            
        indices = torch.randperm(n_points, generator=generator)[:n_clusters]
        
        representations = []
        for idx in indices.tolist():
            rep = CentroidRepresentation(dimension, points.device, dtype=points.dtype)
            rep.mean = points[idx].clone()
            representations.append(rep)
            
        return representations
