"""
K-means clustering algorithm.

The classic K-means algorithm (Lloyd's iteration) implemented using the
modular framework, plus the ClusterEngine facade that runs it on a Table
and reports 1-based assignments with Euclidean distances to every centroid.
"""

from typing import Optional, List, Tuple, Union
import torch
from torch import Tensor

from ..base.clustering_base import BaseClusteringAlgorithm
from ..base.data_structures import Centroid, ClusterAssignment
from ..base.interfaces import ClusterRepresentation, ClusteringObjective
from ..assignments.hard import HardAssignment, nearest_cluster
from ..data.table import Table
from ..distances.euclidean import EuclideanDistance
from ..exceptions import ParameterError
from ..initialization.kmeans_plusplus import KMeansPlusPlusInit
from ..initialization.random import RandomInit
from ..updates.mean import MeanUpdater
from ..utils.convergence import ChangeInAssignments
from ..utils.validation import check_n_clusters

INIT_METHODS = ('random', 'k-means++')


class KMeansObjective(ClusteringObjective):
    """K-means objective: sum of squared distances to centroids."""
    
    def compute(self, points: Tensor, representations: List[ClusterRepresentation],
                assignments: Tensor) -> Tensor:
        """Compute within-cluster sum of squares."""
        total = torch.zeros((), dtype=points.dtype, device=points.device)
        
        for k, rep in enumerate(representations):
            cluster_points_mask = (assignments == k)
            if cluster_points_mask.any():
                total = total + rep.distance_to_point(points[cluster_points_mask]).sum()
                
        return total
        
    @property
    def minimize(self) -> bool:
        return True


class KMeans(BaseClusteringAlgorithm):
    """K-means clustering algorithm.
    
    Partitions data into K clusters by minimizing within-cluster sum of
    squared distances.
    
    Parameters
    ----------
    n_clusters : int
        Number of clusters
    init : str, default='random'
        Initialization method:
        - 'random' : K distinct rows sampled without replacement
        - 'k-means++' : K-means++ initialization
    max_iter : int, default=100
        Maximum number of assignment steps
    verbose : int, default=0
        Verbosity level
    random_state : int or torch.Generator, optional
        Seed for reproducibility (None means seed 0)
    device : torch.device, optional
        Device for computation
        
    Attributes
    ----------
    cluster_centers_ : Tensor of shape (n_clusters, n_features)
        Cluster centroids
    labels_ : Tensor of shape (n_samples,)
        0-based cluster assignments for training data
    inertia_ : float
        Sum of squared distances to nearest cluster center
    n_iter_ : int
        Number of assignment steps run
    converged_ : bool
        Whether the assignments stopped changing before max_iter
    """
    
    def __init__(self,
                 n_clusters: int,
                 init: str = 'random',
                 max_iter: int = 100,
                 verbose: int = 0,
                 random_state: Optional[Union[int, torch.Generator]] = None,
                 device: Optional[torch.device] = None):
        super().__init__(
            n_clusters=n_clusters,
            max_iter=max_iter,
            verbose=verbose,
            random_state=random_state,
            device=device
        )
        if init not in INIT_METHODS:
            raise ParameterError(f"Unknown init method: {init}")
        self.init = init
        
    def _create_components(self) -> None:
        """Create K-means specific components."""
        self.assignment_strategy = HardAssignment()
        self.update_strategy = MeanUpdater()
        
        if self.init == 'k-means++':
            self.initialization_strategy = KMeansPlusPlusInit()
        else:
            self.initialization_strategy = RandomInit()
            
        self.convergence_criterion = ChangeInAssignments(max_change_fraction=0.0)
        self.objective = KMeansObjective()
        
    def transform(self, X: Tensor) -> Tensor:
        """Euclidean distance from every point to every center.
        
        Parameters
        ----------
        X : Tensor of shape (n_samples, n_features)
            
        Returns
        -------
        distances : Tensor of shape (n_samples, n_clusters)
        """
        self._check_fitted()
        X = self._validate_data(X)
        return EuclideanDistance(squared=False).pairwise(X, self.representations)
        
    def score(self, X: Tensor, y: Optional[Tensor] = None) -> float:
        """Opposite of the value of X on the K-means objective."""
        self._check_fitted()
        X = self._validate_data(X)
        labels = self.predict(X)
        return -self.objective.compute(X, self.representations, labels).item()

    def get_params(self, deep: bool = True):
        params = super().get_params(deep)
        params['init'] = self.init
        return params


class ClusterEngine:
    """Runs K-means on a Table and reports per-row results.
    
    Every call builds its own KMeans instance and random stream, so one
    engine can serve concurrent runs over the same read-only table.
    
    Args:
        init: 'random' or 'k-means++'
        max_iter: Iteration cap; hitting it is not an error
        verbose: Verbosity level passed to KMeans
    """
    
    def __init__(self, init: str = 'random', max_iter: int = 100, verbose: int = 0):
        if init not in INIT_METHODS:
            raise ParameterError(f"Unknown init method: {init}")
        self.init = init
        self.max_iter = max_iter
        self.verbose = verbose
        
    def run(self, table: Table, k: int,
            seed: int = 0) -> Tuple[List[Centroid], List[ClusterAssignment]]:
        """Cluster table into k groups.
        
        Args:
            table: Read-only input rows
            k: Number of clusters, 1 <= k <= table.row_count
            seed: Seed for centroid initialization
            
        Returns:
            centroids: K centroids with ids 1..K
            assignments: One ClusterAssignment per row, in table order
            
        Raises:
            ParameterError: If k is outside [1, row_count]
        """
        check_n_clusters(k, table.row_count)
        
        if self.verbose:
            print(f"Running KMeans with {k} clusters.")
            
        model = KMeans(
            n_clusters=k,
            init=self.init,
            max_iter=self.max_iter,
            verbose=max(self.verbose - 1, 0),
            random_state=seed
        )
        model.fit(table.features)
        
        distances = model.transform(table.features)
        predicted = nearest_cluster(distances) + 1
        
        centroids = [
            Centroid(cluster_id=idx + 1, features=tuple(center))
            for idx, center in enumerate(model.cluster_centers_.tolist())
        ]
        assignments = [
            ClusterAssignment(predicted_cluster_id=int(cluster_id), distances=tuple(row))
            for cluster_id, row in zip(predicted.tolist(), distances.tolist())
        ]
        
        if self.verbose:
            print(f"Generated {len(assignments)} results for {k} clusters "
                  f"in {model.n_iter_} iterations.")
            
        return centroids, assignments

    def get_params(self, deep: bool = True):
        return {'init': self.init, 'max_iter': self.max_iter, 'verbose': self.verbose}

    def set_params(self, **params) -> 'ClusterEngine':
        for key, value in params.items():
            setattr(self, key, value)
        return self
