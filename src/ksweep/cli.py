"""
Command line entry point.

Validates and loads a labeled CSV/TSV file, optionally normalizes it, runs
K-means for a single cluster count or a sweep of counts, and writes one
result file per K plus a metrics file for the whole sweep.

Example:
    ksweep -i data.csv -o out/run -s 2 -e 8
"""

import argparse
import sys
from typing import List, Optional, Tuple

from .algorithms.kmeans import ClusterEngine, INIT_METHODS
from .data.loader import TableLoader
from .data.normalization import Normalizer
from .data.reader import check_input_file, read_rows
from .data.table import Table
from .data.validation import TableValidator
from .exceptions import KSweepError, ParameterError
from .sweep.coordinator import SweepCoordinator, SweepEntry
from .sweep.writer import CSVMetricsSink, metrics_path, result_path, write_cluster_results
from .utils.validation import check_k_range
from .visualization import plot_sweep_metrics

EXIT_OK = 0
EXIT_FATAL = 1
EXIT_PARTIAL = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='ksweep',
        description='Cluster labeled feature vectors from a CSV file with K-means.'
    )
    parser.add_argument('-i', '--input', required=True,
                        help='CSV/TSV file with a label column followed by feature columns.')
    parser.add_argument('-o', '--output', required=True,
                        help='Output prefix; writes <output>-<k>.csv and <output>-clusterMetrics.csv.')
    parser.add_argument('--header-row', action=argparse.BooleanOptionalAction, default=True,
                        help='Whether the first non-empty row is a header (default: yes).')
    parser.add_argument('-c', '--clusters', type=int, default=None,
                        help='Number of clusters to generate.')
    parser.add_argument('-s', '--start', type=int, default=None,
                        help='First cluster count of a sweep.')
    parser.add_argument('-e', '--end', type=int, default=None,
                        help='Last cluster count of a sweep (inclusive).')
    parser.add_argument('--normalize', action=argparse.BooleanOptionalAction, default=True,
                        help='Min-max normalize every feature to [0, 1] (default: yes).')
    parser.add_argument('--seed', type=int, default=0,
                        help='Seed for centroid initialization (default: 0).')
    parser.add_argument('--max-iter', type=int, default=100,
                        help='Iteration cap per run (default: 100).')
    parser.add_argument('--init', choices=INIT_METHODS, default='random',
                        help='Centroid initialization (default: random).')
    parser.add_argument('-j', '--jobs', type=int, default=None,
                        help='Worker threads for a sweep (default: executor default).')
    parser.add_argument('--plot', action='store_true',
                        help='Save an elbow plot to <output>-clusterMetrics.png.')
    parser.add_argument('-v', '--verbose', action='count', default=0,
                        help='Increase output verbosity; -vv adds per-run progress for single-K or --jobs 1 runs.')
    return parser


def resolve_k_range(clusters: Optional[int], start: Optional[int],
                    end: Optional[int]) -> Tuple[int, int]:
    """Exactly one of a fixed K or a full start/end range must be given."""
    has_range = start is not None or end is not None
    if clusters is not None and has_range:
        raise ParameterError("Provide either --clusters or --start/--end, not both")
    if clusters is not None:
        return clusters, clusters
    if start is None or end is None:
        raise ParameterError(
            "A value must be provided for either --clusters, or for both --start and --end"
        )
    return start, end


def load_table(path: str, has_header: bool = True, normalize: bool = True,
               verbose: int = 0) -> Table:
    """Validate, load and optionally normalize the input file."""
    check_input_file(path)
    
    if verbose:
        print(f"Validating {path}")
    feature_count = TableValidator(source_name=path).validate(read_rows(path), has_header)
    if verbose:
        print(f"Detected {feature_count} features in input CSV.")
        print(f"Loading {path}")
    table = TableLoader(source_name=path).load(read_rows(path), feature_count, has_header)
    
    if normalize:
        if verbose:
            print("Scaling data")
        table, _ = Normalizer().fit_transform(table)
    return table


def run(args: argparse.Namespace) -> List[SweepEntry]:
    k_range = resolve_k_range(args.clusters, args.start, args.end)
    table = load_table(args.input, args.header_row, args.normalize, args.verbose)
    check_k_range(k_range, table.row_count)
    
    def write_result(table: Table, entry: SweepEntry) -> None:
        write_cluster_results(result_path(args.output, entry.k), table, entry.assignments)
        
    engine = ClusterEngine(init=args.init, max_iter=args.max_iter,
                           verbose=max(args.verbose - 1, 0))
    with CSVMetricsSink(metrics_path(args.output)) as sink:
        coordinator = SweepCoordinator(
            engine=engine,
            n_jobs=args.jobs,
            sink=sink,
            on_result=write_result,
            verbose=args.verbose
        )
        entries = coordinator.sweep(table, k_range, seed=args.seed)
        
    if args.plot:
        ax = plot_sweep_metrics(entries)
        ax.figure.savefig(metrics_path(args.output).with_suffix('.png'))
        
    return entries


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        entries = run(args)
    except KSweepError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return EXIT_FATAL
        
    failed = [entry for entry in entries if not entry.ok]
    for entry in failed:
        print(f"Error: clustering with {entry.k} clusters failed: {entry.error}", file=sys.stderr)
    return EXIT_PARTIAL if failed else EXIT_OK


if __name__ == '__main__':
    sys.exit(main())
