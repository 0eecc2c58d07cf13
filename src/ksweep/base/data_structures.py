"""
Core data structures for the clustering engine.

Centroid, ClusterAssignment and ClusterMetrics are the public results of a
run; ClusterState and AlgorithmState track the engine while it iterates.
"""

from types import MappingProxyType
from typing import Any, List, Mapping, Optional, Tuple

from torch import Tensor
from dataclasses import dataclass


@dataclass(frozen=True)
class Centroid:
    """Final position of one cluster. Cluster ids run 1..K."""

    cluster_id: int
    features: Tuple[float, ...]


@dataclass(frozen=True)
class ClusterAssignment:
    """Result of clustering for a single row.

    distances[i] is the Euclidean distance to cluster i + 1, and
    predicted_cluster_id is the 1-based index of the smallest entry
    (lowest id on ties).
    """

    predicted_cluster_id: int
    distances: Tuple[float, ...]

    @property
    def n_clusters(self) -> int:
        return len(self.distances)

    @property
    def assigned_distance(self) -> float:
        """Distance to the row's own cluster."""
        return self.distances[self.predicted_cluster_id - 1]


@dataclass(frozen=True)
class ClusterMetrics:
    """Aggregate quality of one clustering run.

    population_by_cluster is stored as a read-only mapping.
    """

    cluster_count: int
    average_distance: float
    best_distance: float
    worst_distance: float
    population_by_cluster: Mapping[int, int]
    best_index: int = 0
    worst_index: int = 0
    best_label: Optional[str] = None
    worst_label: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, 'population_by_cluster',
                           MappingProxyType(dict(self.population_by_cluster)))

    def as_row(self) -> List[Any]:
        """Values in ClusterCount,AverageDistance,BestDistance,WorstDistance order."""
        return [self.cluster_count, self.average_distance, self.best_distance, self.worst_distance]


@dataclass
class ClusterState:
    """Container for all cluster centers at a given iteration."""
    
    means: Tensor  # (K, d) cluster centers
    n_clusters: int
    dimension: int
    
    def __post_init__(self):
        """Validate dimensions."""
        assert self.means.shape == (self.n_clusters, self.dimension)


@dataclass
class AlgorithmState:
    """Snapshot of one assignment step."""
    
    iteration: int
    objective_value: float
    n_changed: Optional[int] = None
