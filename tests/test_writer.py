# tests/test_writer.py
"""
CSV outputs: per-K result file layout and the metrics sinks.
"""

from __future__ import annotations

import csv

import pytest

from ksweep.algorithms.kmeans import ClusterEngine
from ksweep.exceptions import ParameterError
from ksweep.sweep.writer import (
    CSVMetricsSink,
    cluster_results_frame,
    METRICS_HEADER,
    metrics_path,
    result_path,
    write_cluster_results,
)
from ksweep.utils.metrics import MetricsAggregator


def _read(path):
    with open(path, newline="", encoding="utf-8") as handle:
        return list(csv.reader(handle))


def test_output_naming(tmp_path):
    assert result_path(tmp_path / "run", 3) == tmp_path / "run-3.csv"
    assert metrics_path(tmp_path / "run") == tmp_path / "run-clusterMetrics.csv"


def test_result_file_layout(tmp_path, make_table):
    table = make_table([("a", 0.0, 1.0), ("b", 0.0, 1.5), ("c", 9.0, 9.0)])
    _, assignments = ClusterEngine().run(table, 2, seed=0)

    path = write_cluster_results(tmp_path / "nested" / "out-2.csv", table, assignments)
    rows = _read(path)

    assert rows[0] == [
        "Label", "Feature0", "Feature1", "ClusterID", "DistanceToCluster1", "DistanceToCluster2"
    ]
    assert [row[0] for row in rows[1:]] == ["a", "b", "c"]
    for row, assignment in zip(rows[1:], assignments):
        assert int(row[3]) == assignment.predicted_cluster_id
        assert [float(v) for v in row[4:]] == list(assignment.distances)
    assert [float(v) for v in rows[3][1:3]] == [9.0, 9.0]


def test_empty_result_set_is_rejected(tmp_path, make_table):
    table = make_table([("a", 0.0)])
    with pytest.raises(ParameterError):
        write_cluster_results(tmp_path / "out.csv", table, [])


def test_csv_metrics_sink_writes_header_and_rows(tmp_path, make_table):
    table = make_table([("a", 0.0), ("b", 2.0)])
    _, assignments = ClusterEngine().run(table, 1, seed=0)
    metrics = MetricsAggregator().aggregate(assignments)

    path = tmp_path / "deep" / "m.csv"
    with CSVMetricsSink(path) as sink:
        sink.write(metrics)
        # flushed per line, readable before close
        assert len(_read(path)) == 2

    rows = _read(path)
    assert rows[0] == METRICS_HEADER
    assert rows[1] == ["1", "1.0", "1.0", "1.0"]


def test_results_frame_columns_and_types(make_table):
    table = make_table([("a", 0.0), ("b", 0.5), ("c", 8.0)])
    _, assignments = ClusterEngine().run(table, 2, seed=0)

    frame = cluster_results_frame(table, assignments)
    assert list(frame.columns) == [
        "Label", "Feature0", "ClusterID", "DistanceToCluster1", "DistanceToCluster2"
    ]
    assert frame["Label"].tolist() == ["a", "b", "c"]
    assert frame["ClusterID"].tolist() == [a.predicted_cluster_id for a in assignments]
    assert frame["ClusterID"].dtype.kind == "i"


def test_labels_with_commas_are_quoted(tmp_path, make_table):
    table = make_table([("Smith, J", 1.0), ("Doe", 2.0)])
    _, assignments = ClusterEngine().run(table, 1, seed=0)
    rows = _read(write_cluster_results(tmp_path / "out.csv", table, assignments))
    assert [row[0] for row in rows[1:]] == ["Smith, J", "Doe"]
