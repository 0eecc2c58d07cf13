"""
CSV output for clustering results.

Per-K result files hold every row with its features, cluster id and
distances to all clusters. The metrics sinks receive one record per
completed K; the sweep coordinator calls them under its lock, so sinks do
no locking of their own.
"""

import os
from pathlib import Path
from typing import List, Sequence, Union

import pandas as pd

from ..base.data_structures import ClusterAssignment, ClusterMetrics
from ..data.table import Table
from ..exceptions import ParameterError

PathLike = Union[str, os.PathLike]

METRICS_HEADER = ['ClusterCount', 'AverageDistance', 'BestDistance', 'WorstDistance']


def result_path(output: PathLike, k: int) -> Path:
    """<output>-<k>.csv"""
    return Path(f"{os.fspath(output)}-{k}.csv")


def metrics_path(output: PathLike) -> Path:
    """<output>-clusterMetrics.csv"""
    return Path(f"{os.fspath(output)}-clusterMetrics.csv")


def result_header(feature_count: int, n_clusters: int) -> List[str]:
    header = ['Label']
    header += [f"Feature{i}" for i in range(feature_count)]
    header.append('ClusterID')
    # Distance columns are 1-based to line up with ClusterID values
    header += [f"DistanceToCluster{i + 1}" for i in range(n_clusters)]
    return header


def cluster_results_frame(table: Table,
                          assignments: Sequence[ClusterAssignment]) -> pd.DataFrame:
    """One row per input row: label, features, cluster id, distances."""
    n_clusters = assignments[0].n_clusters
    records = [
        [row.label, *row.features, assignment.predicted_cluster_id, *assignment.distances]
        for row, assignment in zip(table.rows, assignments)
    ]
    return pd.DataFrame(records, columns=result_header(table.feature_count, n_clusters))


def write_cluster_results(path: PathLike, table: Table,
                          assignments: Sequence[ClusterAssignment]) -> Path:
    """Write one row per input row with its cluster id and distances.
    
    Parent directories are created as needed.
    
    Raises:
        ParameterError: If assignments is empty or does not match the table
    """
    if len(assignments) < 1:
        raise ParameterError("Cannot write out an empty data set.")
    if len(assignments) != table.row_count:
        raise ParameterError(
            f"Got {len(assignments)} assignments for a table of {table.row_count} rows"
        )
        
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    cluster_results_frame(table, assignments).to_csv(path, index=False)
    return path


class MemoryMetricsSink:
    """Collects metrics rows in memory, in the order they are written."""
    
    def __init__(self):
        self.rows: List[List] = []
        
    def write(self, metrics: ClusterMetrics) -> None:
        self.rows.append(metrics.as_row())
        
    def close(self) -> None:
        pass


class CSVMetricsSink:
    """Appends one metrics line per completed K to a CSV file.
    
    The header is written on open and every line is flushed immediately.
    """
    
    def __init__(self, path: PathLike):
        self.path = Path(path)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self._handle = open(self.path, 'w', newline='', encoding='utf-8')
        pd.DataFrame(columns=METRICS_HEADER).to_csv(self._handle, index=False)
        self._handle.flush()
        
    def write(self, metrics: ClusterMetrics) -> None:
        frame = pd.DataFrame([metrics.as_row()], columns=METRICS_HEADER)
        frame.to_csv(self._handle, header=False, index=False)
        self._handle.flush()
        
    def close(self) -> None:
        if not self._handle.closed:
            self._handle.close()
            
    def __enter__(self) -> 'CSVMetricsSink':
        return self
        
    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
