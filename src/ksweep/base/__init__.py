"""Base classes and interfaces for the clustering engine."""

from .interfaces import (
    ClusterRepresentation,
    AssignmentStrategy,
    ParameterUpdater,
    InitializationStrategy,
    ConvergenceCriterion,
    ClusteringObjective
)

from .data_structures import (
    Centroid,
    ClusterAssignment,
    ClusterMetrics,
    ClusterState,
    AlgorithmState
)

from .clustering_base import BaseClusteringAlgorithm

__all__ = [
    # Interfaces
    'ClusterRepresentation',
    'AssignmentStrategy', 
    'ParameterUpdater',
    'InitializationStrategy',
    'ConvergenceCriterion',
    'ClusteringObjective',
    
    # Data structures
    'Centroid',
    'ClusterAssignment',
    'ClusterMetrics',
    'ClusterState',
    'AlgorithmState',
    
    # Base algorithm
    'BaseClusteringAlgorithm'
]
