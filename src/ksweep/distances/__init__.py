"""Distance metrics."""

from .euclidean import EuclideanDistance

__all__ = ['EuclideanDistance']
