"""Clustering algorithm implementations."""

from .kmeans import KMeans, KMeansObjective, ClusterEngine

__all__ = [
    'KMeans',
    'KMeansObjective',
    'ClusterEngine'
]
