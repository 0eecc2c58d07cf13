"""
Parallel sweep over a range of cluster counts.

Each K runs as an independent task over the shared read-only table. Tasks
never talk to each other while computing; their results meet at a single
lock that appends to the report, writes the metrics sink and prints the
summary, so output lines from different K never interleave.
"""

from concurrent.futures import ThreadPoolExecutor
import copy
from dataclasses import dataclass
import threading
from typing import Callable, List, Optional, Tuple

from ..algorithms.kmeans import ClusterEngine
from ..base.data_structures import Centroid, ClusterAssignment, ClusterMetrics
from ..data.table import Table
from ..utils.metrics import MetricsAggregator, format_metrics_summary
from ..utils.validation import check_k_range


@dataclass
class SweepEntry:
    """Outcome of one K in a sweep.
    
    error is set when the run, the result callback or the metrics sink
    failed for this K; metrics may still be present in the last case.
    """
    
    k: int
    metrics: Optional[ClusterMetrics] = None
    assignments: Optional[List[ClusterAssignment]] = None
    centroids: Optional[List[Centroid]] = None
    error: Optional[Exception] = None
    
    @property
    def ok(self) -> bool:
        return self.error is None


ResultCallback = Callable[[Table, SweepEntry], None]


class SweepCoordinator:
    """Runs the clustering engine for every K in an inclusive range.
    
    Args:
        engine: ClusterEngine shared by all tasks (it keeps no per-run state)
        aggregator: MetricsAggregator used for every K
        n_jobs: Worker threads (None lets the executor decide)
        sink: Optional metrics sink with write(metrics); written in completion order
        on_result: Optional callback run in the worker after a successful K,
            e.g. to write the per-K result file. An exception it raises marks
            that K as failed.
        verbose: Print a summary for each K when > 0. Engine progress output is
            kept only when n_jobs == 1 or the range holds a single K.
    """
    
    def __init__(self,
                 engine: Optional[ClusterEngine] = None,
                 aggregator: Optional[MetricsAggregator] = None,
                 n_jobs: Optional[int] = None,
                 sink=None,
                 on_result: Optional[ResultCallback] = None,
                 verbose: int = 0):
        self.engine = engine if engine is not None else ClusterEngine()
        self.aggregator = aggregator if aggregator is not None else MetricsAggregator()
        self.n_jobs = n_jobs
        self.sink = sink
        self.on_result = on_result
        self.verbose = verbose
        self._lock = threading.Lock()
        self.completion_order_: List[int] = []
        
    def sweep(self, table: Table, k_range: Tuple[int, int], seed: int = 0) -> List[SweepEntry]:
        """Cluster table once per K in [k_start, k_end].
        
        Args:
            table: Read-only input rows
            k_range: Inclusive (k_start, k_end)
            seed: Seed used for every K
            
        Returns:
            One SweepEntry per K, ordered by ascending K
            
        Raises:
            ParameterError: If k_start > k_end or a bound is outside [1, row_count]
        """
        k_start, k_end = check_k_range(k_range, table.row_count)
        report: List[SweepEntry] = []
        self.completion_order_ = []
        engine = self.engine
        if self.n_jobs != 1 and k_end > k_start and getattr(engine, 'verbose', 0):
            # Engine progress is printed only when one K runs at a time
            engine = copy.copy(engine)
            engine.verbose = 0
        
        with ThreadPoolExecutor(max_workers=self.n_jobs) as executor:
            futures = [
                executor.submit(self._run_one, engine, table, k, seed, report)
                for k in range(k_start, k_end + 1)
            ]
            for future in futures:
                future.result()
                
        return sorted(report, key=lambda entry: entry.k)
        
    def _run_one(self, engine: ClusterEngine, table: Table, k: int, seed: int,
                 report: List[SweepEntry]) -> None:
        entry = SweepEntry(k=k)
        try:
            centroids, assignments = engine.run(table, k, seed)
            entry.metrics = self.aggregator.aggregate(assignments, table.labels)
            entry.assignments = assignments
            entry.centroids = centroids
            if self.on_result is not None:
                self.on_result(table, entry)
        except Exception as exc:
            # A failing K is reported in its entry; sibling runs continue
            entry.error = exc
        self._record(entry, report)
        
    def _record(self, entry: SweepEntry, report: List[SweepEntry]) -> None:
        with self._lock:
            if entry.ok and self.sink is not None:
                try:
                    self.sink.write(entry.metrics)
                except Exception as exc:
                    entry.error = exc
            report.append(entry)
            self.completion_order_.append(entry.k)
            if self.verbose:
                if entry.ok:
                    for line in format_metrics_summary(entry.metrics):
                        print(line)
                else:
                    print(f"Clustering with {entry.k} clusters failed: {entry.error}")
