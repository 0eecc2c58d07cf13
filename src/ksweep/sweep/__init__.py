"""Sweeps over cluster counts and their CSV outputs."""

from .coordinator import SweepCoordinator, SweepEntry
from .writer import (
    CSVMetricsSink,
    MemoryMetricsSink,
    cluster_results_frame,
    write_cluster_results,
    result_path,
    metrics_path,
    METRICS_HEADER
)

__all__ = [
    'SweepCoordinator',
    'SweepEntry',
    'CSVMetricsSink',
    'MemoryMetricsSink',
    'cluster_results_frame',
    'write_cluster_results',
    'result_path',
    'metrics_path',
    'METRICS_HEADER'
]
