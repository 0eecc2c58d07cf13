"""Cluster parameter update strategies."""

from .mean import MeanUpdater

__all__ = ['MeanUpdater']
