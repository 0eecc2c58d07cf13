"""Point-to-cluster assignment strategies."""

from .hard import HardAssignment, distance_matrix, nearest_cluster

__all__ = [
    'HardAssignment',
    'distance_matrix',
    'nearest_cluster'
]
