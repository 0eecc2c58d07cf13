"""
Base class for centroid clustering algorithms.

Provides the common algorithmic skeleton for alternating optimization
between assignment and update steps (Lloyd's iteration).
"""

from abc import abstractmethod
from typing import Optional, Dict, Any, List, Union
import torch
from torch import Tensor
import time
import warnings

from .interfaces import (
    ClusterRepresentation, AssignmentStrategy, ParameterUpdater,
    InitializationStrategy, ConvergenceCriterion, ClusteringObjective
)
from .data_structures import ClusterState, AlgorithmState
from ..exceptions import ParameterError
from ..utils.validation import validate_data, check_n_clusters, check_random_state


class BaseClusteringAlgorithm:
    """Base class implementing the alternating optimization framework.
    
    Subclasses need to specify:
    - Assignment strategy  
    - Parameter update strategy
    - Initialization strategy
    - Convergence criterion
    - Objective function
    """
    
    def __init__(self,
                 n_clusters: int,
                 max_iter: int = 100,
                 verbose: int = 0,
                 random_state: Optional[Union[int, torch.Generator]] = None,
                 device: Optional[torch.device] = None):
        """
        Args:
            n_clusters: Number of clusters K
            max_iter: Maximum number of assignment steps
            verbose: Verbosity level (0=silent, 1=progress, 2=detailed)
            random_state: Seed for the private random stream
            device: Torch device (None for CPU)
        """
        self.n_clusters = n_clusters
        self.max_iter = max_iter
        self.verbose = verbose
        self.random_state = random_state
        self.device = device if device is not None else torch.device('cpu')
                
        # These will be set by subclasses
        self.representations: Optional[List[ClusterRepresentation]] = None
        self.assignment_strategy: Optional[AssignmentStrategy] = None
        self.update_strategy: Optional[ParameterUpdater] = None
        self.initialization_strategy: Optional[InitializationStrategy] = None
        self.convergence_criterion: Optional[ConvergenceCriterion] = None
        self.objective: Optional[ClusteringObjective] = None
        
        # Algorithm state
        self.fitted_ = False
        self.converged_ = False
        self.n_iter_ = 0
        self.history_: List[AlgorithmState] = []
        self.labels_: Optional[Tensor] = None
        
    @abstractmethod
    def _create_components(self) -> None:
        """Create algorithm-specific components.
        
        Subclasses must implement this to instantiate:
        - self.assignment_strategy
        - self.update_strategy  
        - self.initialization_strategy
        - self.convergence_criterion
        - self.objective
        """
        pass
        
    def fit(self, X: Tensor, y: Optional[Tensor] = None) -> 'BaseClusteringAlgorithm':
        """Fit the clustering model.
        
        Args:
            X: (n, d) data tensor
            y: Ignored (for sklearn compatibility)
            
        Returns:
            Self
        """
        return self._fit(X)
        
    def fit_predict(self, X: Tensor, y: Optional[Tensor] = None) -> Tensor:
        """Fit and return 0-based cluster assignments."""
        self._fit(X)
        return self.labels_
        
    def predict(self, X: Tensor) -> Tensor:
        """Predict 0-based cluster assignments for data.
        
        Args:
            X: (n, d) data tensor
            
        Returns:
            (n,) tensor of cluster assignments
        """
        self._check_fitted()
        X = self._validate_data(X)
        assignments, _ = self.assignment_strategy.compute_assignments(X, self.representations)
        return assignments
        
    def _fit(self, X: Tensor) -> 'BaseClusteringAlgorithm':
        """Internal fit method implementing the alternating optimization."""
        X = self._validate_data(X)
        n_points = X.shape[0]
        check_n_clusters(self.n_clusters, n_points)
        if self.max_iter < 1:
            raise ParameterError(f"max_iter must be at least 1, got {self.max_iter}")

        self._create_components()
        generator = check_random_state(self.random_state)
        
        if self.verbose:
            print(f"Initializing {self.n_clusters} clusters...")
            
        start_time = time.time()
        self.representations = self.initialization_strategy.initialize(
            X, self.n_clusters, generator=generator
        )
        
        self.n_iter_ = 0
        self.history_ = []
        self.converged_ = False
        self.convergence_criterion.reset()
        assignments = None
        
        for iteration in range(self.max_iter):
            iter_start_time = time.time()
            
            # Assignment step
            assignments, _ = self.assignment_strategy.compute_assignments(
                X, self.representations
            )
            self.n_iter_ = iteration + 1
            
            objective_value = self.objective.compute(X, self.representations, assignments)
            converged = self.convergence_criterion.check({
                'iteration': iteration,
                'objective': objective_value.item(),
                'assignments': assignments
            })
            self.history_.append(AlgorithmState(
                iteration=iteration,
                objective_value=objective_value.item(),
                n_changed=getattr(self.convergence_criterion, 'last_n_changed', None)
            ))
            
            if self.verbose >= 2:
                iter_time = time.time() - iter_start_time
                print(f"Iteration {iteration:3d}: objective = {objective_value.item():.6f} "
                      f"({iter_time:.3f}s)")
                      
            if converged:
                self.converged_ = True
                if self.verbose:
                    print(f"Converged at iteration {iteration}")
                break
                
            # Update step; empty clusters keep their previous position
            for k, representation in enumerate(self.representations):
                cluster_indices = torch.where(assignments == k)[0]
                if len(cluster_indices) > 0:
                    self.update_strategy.update(representation, X[cluster_indices])
            
        if not self.converged_:
            if self.verbose:
                warnings.warn(f"Failed to converge after {self.max_iter} iterations")
            # Report the assignment that matches the final centers
            assignments, _ = self.assignment_strategy.compute_assignments(
                X, self.representations
            )
                
        self.labels_ = assignments
        self.fitted_ = True
        
        if self.verbose:
            print(f"Total fitting time: {time.time() - start_time:.3f}s")
            
        return self
        
    def _validate_data(self, X: Tensor) -> Tensor:
        """Validate and prepare input data."""
        return validate_data(X, dtype=torch.float64, device=self.device)

    def _check_fitted(self) -> None:
        if not self.fitted_:
            raise RuntimeError("Model must be fitted first")
        
    def _extract_cluster_state(self) -> ClusterState:
        """Extract current cluster centers into a ClusterState object."""
        means = torch.stack([
            rep.get_parameters()['mean'] 
            for rep in self.representations
        ])
        return ClusterState(
            means=means,
            n_clusters=self.n_clusters,
            dimension=means.shape[1]
        )
        
    @property
    def cluster_centers_(self) -> Tensor:
        """Get cluster centers/means."""
        self._check_fitted()
        return self._extract_cluster_state().means
        
    @property 
    def inertia_(self) -> float:
        """Objective value of the last assignment step."""
        self._check_fitted()
        return self.history_[-1].objective_value
        
    def get_params(self, deep: bool = True) -> Dict[str, Any]:
        """Get parameters (sklearn compatibility)."""
        return {
            'n_clusters': self.n_clusters,
            'max_iter': self.max_iter,
            'verbose': self.verbose,
            'random_state': self.random_state,
            'device': self.device
        }
        
    def set_params(self, **params) -> 'BaseClusteringAlgorithm':
        """Set parameters (sklearn compatibility)."""
        for key, value in params.items():
            setattr(self, key, value)
        return self
