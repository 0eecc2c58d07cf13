"""
Core interfaces for the centroid clustering engine.

This module defines the abstract base classes that the engine components
implement, so initialization, assignment, update and convergence can be
swapped independently.
"""

from abc import ABC, abstractmethod
from typing import Optional, Tuple, Dict, Any, List
import torch
from torch import Tensor


class ClusterRepresentation(ABC):
    """Abstract base class for cluster representations."""
    
    @abstractmethod
    def distance_to_point(self, points: Tensor) -> Tensor:
        """Compute distance/cost from points to this cluster representation.
        
        Args:
            points: (n, d) tensor of data points
            
        Returns:
            (n,) tensor of distances/costs
        """
        pass
    
    @abstractmethod
    def update_from_points(self, points: Tensor, **kwargs) -> None:
        """Update cluster parameters given assigned points.
        
        Args:
            points: (n, d) tensor of assigned points
            **kwargs: Additional update-specific parameters
        """
        pass
    
    @abstractmethod
    def get_parameters(self) -> Dict[str, Tensor]:
        """Return all parameters defining this cluster representation."""
        pass
    
    @abstractmethod
    def set_parameters(self, params: Dict[str, Tensor]) -> None:
        """Set cluster parameters from dictionary."""
        pass
    
    @property
    @abstractmethod
    def dimension(self) -> int:
        """Ambient dimension of the data."""
        pass


class AssignmentStrategy(ABC):
    """Abstract base class for point-to-cluster assignment strategies."""
    
    @abstractmethod
    def compute_assignments(self, points: Tensor, 
                            representations: List[ClusterRepresentation],
                            **kwargs) -> Tuple[Tensor, Tensor]:
        """Compute cluster assignments for points.
        
        Args:
            points: (n, d) tensor of data points
            representations: List of K cluster representations
            **kwargs: Strategy-specific parameters
            
        Returns:
            assignments: (n,) tensor of 0-based cluster indices
            distances: (n, K) tensor of the costs used to decide them
        """
        pass


class ParameterUpdater(ABC):
    """Abstract base class for cluster parameter update strategies."""
    
    @abstractmethod
    def update(self, representation: ClusterRepresentation,
               points: Tensor,
               **kwargs) -> None:
        """Update cluster parameters from the points assigned to it.
        
        Args:
            representation: Cluster representation to update
            points: (m, d) tensor of points assigned to this cluster
            **kwargs: Update-specific parameters
        """
        pass


class DistanceMetric(ABC):
    """Abstract base class for distance/cost computations."""
    
    @abstractmethod
    def compute(self, points: Tensor, representation: ClusterRepresentation,
                **kwargs) -> Tensor:
        """Compute distances from points to cluster.
        
        Args:
            points: (n, d) tensor of points
            representation: Cluster representation
            **kwargs: Metric-specific parameters
            
        Returns:
            (n,) tensor of distances/costs
        """
        pass


class InitializationStrategy(ABC):
    """Abstract base class for cluster initialization strategies."""
    
    @abstractmethod
    def initialize(self, points: Tensor, n_clusters: int,
                   generator: Optional[torch.Generator] = None,
                   **kwargs) -> List[ClusterRepresentation]:
        """Initialize cluster representations.
        
        Args:
            points: (n, d) tensor of data points
            n_clusters: Number of clusters to initialize
            generator: Random stream; the only source of randomness
            **kwargs: Strategy-specific parameters
            
        Returns:
            List of initialized cluster representations
        """
        pass


class ConvergenceCriterion(ABC):
    """Abstract base class for convergence checking."""
    
    def __init__(self):
        self.history = []
    
    @abstractmethod
    def check(self, current_state: Dict[str, Any]) -> bool:
        """Check if algorithm has converged.
        
        Args:
            current_state: Dictionary containing current algorithm state
            
        Returns:
            True if converged, False otherwise
        """
        pass
    
    def reset(self):
        """Reset convergence history."""
        self.history = []


class ClusteringObjective(ABC):
    """Abstract base class for clustering objective functions."""
    
    @abstractmethod
    def compute(self, points: Tensor, 
                representations: List[ClusterRepresentation],
                assignments: Tensor) -> Tensor:
        """Compute objective function value.
        
        Args:
            points: (n, d) tensor of data points
            representations: List of cluster representations
            assignments: (n,) hard cluster assignments
            
        Returns:
            Scalar objective value
        """
        pass
    
    @property
    @abstractmethod
    def minimize(self) -> bool:
        """Whether to minimize (True) or maximize (False) this objective."""
        pass
