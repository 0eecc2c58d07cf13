"""
K-means++ initialization strategy.

Selects initial cluster centers using the K-means++ algorithm, which chooses
centers that are far apart to improve convergence speed and quality.
"""

import math
from typing import List, Optional
import torch
from torch import Tensor

from ..base.interfaces import InitializationStrategy, ClusterRepresentation
from ..exceptions import ParameterError
from ..representations.centroid import CentroidRepresentation


class KMeansPlusPlusInit(InitializationStrategy):
    """K-means++ initialization for better starting positions.
    
    Algorithm:
    1. Choose first center uniformly at random
    2. For each remaining center:
       - Compute distance from each point to nearest existing center
       - Choose next center with probability proportional to squared distance
       
    A row is never chosen twice. When every remaining row coincides with an
    existing center, the next center is drawn uniformly from unchosen rows.
    """
    
    def __init__(self, n_local_trials: Optional[int] = None):
        """
        Args:
            n_local_trials: Number of candidates to try for each center.
                           If None, uses 2 + log(k) as in sklearn
        """
        self.n_local_trials = n_local_trials
        
    def initialize(self, points: Tensor, n_clusters: int,
                   generator: Optional[torch.Generator] = None,
                   **kwargs) -> List[ClusterRepresentation]:
        """Initialize cluster centers using K-means++.
        
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
            
        if self.n_local_trials is None:
            n_local_trials = 2 + int(math.log(n_clusters))
        else:
            n_local_trials = self.n_local_trials
            
        chosen = torch.zeros(n_points, dtype=torch.bool, device=points.device)
        
        first_idx = int(torch.randint(n_points, (1,), generator=generator).item())
        center_indices = [first_idx]
        chosen[first_idx] = True
        
        distances = squared_distances_to(points, points[first_idx])
        
        for _ in range(1, n_clusters):
            # Chosen rows are at distance 0, so they carry no probability mass
            weights = torch.where(chosen, torch.zeros_like(distances), distances)
            total = weights.sum()
            
            if total.item() <= 0:
                remaining = torch.where(~chosen)[0]
                pick = int(torch.randint(len(remaining), (1,), generator=generator).item())
                best_candidate = int(remaining[pick].item())
            else:
                candidates_idx = torch.multinomial(
                    weights / total, n_local_trials, replacement=True, generator=generator
                )
                
                # Keep the candidate that lowers the potential the most
                best_potential = float('inf')
                best_candidate = None
                for idx in candidates_idx.tolist():
                    candidate_distances = squared_distances_to(points, points[idx])
                    potential = torch.minimum(distances, candidate_distances).sum().item()
                    if potential < best_potential:
                        best_potential = potential
                        best_candidate = idx
                        
            center_indices.append(best_candidate)
            chosen[best_candidate] = True
            distances = torch.minimum(distances, squared_distances_to(points, points[best_candidate]))
            
        representations = []
        for idx in center_indices:
            rep = CentroidRepresentation(dimension, points.device, dtype=points.dtype)
            rep.mean = points[idx].clone()
            representations.append(rep)
            
        return representations


def squared_distances_to(points: Tensor, center: Tensor) -> Tensor:
    """(n,) squared distances from points to a single center."""
    diff = points - center.unsqueeze(0)
    return torch.sum(diff * diff, dim=1)
