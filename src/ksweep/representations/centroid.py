"""
Centroid representation for K-means clustering.

The simplest cluster representation - just a mean point in space.
"""

from typing import Dict
import torch
from torch import Tensor

from .base_representation import BaseRepresentation


class CentroidRepresentation(BaseRepresentation):
    """Cluster represented by a single centroid point."""
    
    def distance_to_point(self, points: Tensor) -> Tensor:
        """Compute squared Euclidean distance from points to centroid.
        
        Args:
            points: (n, d) tensor of data points
            
        Returns:
            (n,) tensor of squared Euclidean distances
        """
        self._check_points_shape(points)
        
        # Computed from explicit differences so a point equal to the
        # centroid is at distance exactly 0
        diff = points - self._mean.unsqueeze(0)
        return torch.sum(diff * diff, dim=1)
        
    def update_from_points(self, points: Tensor, **kwargs) -> None:
        """Move the centroid to the mean of its assigned points.
        
        Args:
            points: (m, d) tensor of assigned points
        """
        self._check_points_shape(points)
        
        if len(points) == 0:
            # No points assigned - keep current mean
            return
            
        self._mean = points.mean(dim=0)
                
    def get_parameters(self) -> Dict[str, Tensor]:
        """Return parameters defining this centroid."""
        return {'mean': self._mean.clone()}
        
    def set_parameters(self, params: Dict[str, Tensor]) -> None:
        """Set centroid parameters."""
        if 'mean' in params:
            self.mean = params['mean']
            
    def __repr__(self) -> str:
        return f"CentroidRepresentation(dimension={self._dimension}, mean_norm={self._mean.norm():.3f})"
