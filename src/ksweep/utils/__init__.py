"""Utility functions for validation, convergence and metrics."""

from .validation import validate_data, check_n_clusters, check_k_range, check_random_state
from .convergence import ChangeInAssignments
from .metrics import MetricsAggregator, format_metrics_summary

__all__ = [
    'validate_data',
    'check_n_clusters',
    'check_k_range',
    'check_random_state',
    'ChangeInAssignments',
    'MetricsAggregator',
    'format_metrics_summary'
]
