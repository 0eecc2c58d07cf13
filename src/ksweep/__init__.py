"""
ksweep: K-means clustering of labeled feature vectors from delimited files.

The package validates and loads a CSV/TSV table, optionally min-max
normalizes it, clusters it with Lloyd's algorithm for one or many cluster
counts, and reports per-row assignments and aggregate distance metrics.

Example usage:
    >>> from ksweep import TableLoader, TableValidator, ClusterEngine, read_rows
    >>> 
    >>> n = TableValidator().validate(read_rows('data.csv'), has_header=True)
    >>> table = TableLoader().load(read_rows('data.csv'), n)
    >>> 
    >>> centroids, assignments = ClusterEngine().run(table, k=3, seed=0)
    >>> assignments[0].predicted_cluster_id
    2
"""

__version__ = '0.1.0'

from .exceptions import (
    KSweepError,
    InputFileError,
    InputFormatError,
    SchemaError,
    EmptyInputError,
    ParseError,
    ParameterError
)

from .data import (
    read_rows,
    Row,
    Table,
    TableValidator,
    TableLoader,
    Normalizer,
    NormalizationBounds
)

from .base import (
    Centroid,
    ClusterAssignment,
    ClusterMetrics
)

from .algorithms import KMeans, ClusterEngine
from .utils.metrics import MetricsAggregator
from .sweep import (
    SweepCoordinator,
    SweepEntry,
    CSVMetricsSink,
    MemoryMetricsSink,
    write_cluster_results
)

from .visualization import (
    plot_clusters_2d,
    plot_sweep_metrics
)

__all__ = [
    # Errors
    'KSweepError',
    'InputFileError',
    'InputFormatError',
    'SchemaError',
    'EmptyInputError',
    'ParseError',
    'ParameterError',
    
    # Input
    'read_rows',
    'Row',
    'Table',
    'TableValidator',
    'TableLoader',
    'Normalizer',
    'NormalizationBounds',
    
    # Clustering
    'KMeans',
    'ClusterEngine',
    'Centroid',
    'ClusterAssignment',
    'ClusterMetrics',
    'MetricsAggregator',
    
    # Sweep
    'SweepCoordinator',
    'SweepEntry',
    'CSVMetricsSink',
    'MemoryMetricsSink',
    'write_cluster_results',
    
    # Visualization
    'plot_clusters_2d',
    'plot_sweep_metrics',
    
    # Version
    '__version__'
]
