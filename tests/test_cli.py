# tests/test_cli.py
"""
Command line: end-to-end sweep, argument combinations and exit codes.
"""

from __future__ import annotations

import csv

import pytest

from ksweep.cli import main, resolve_k_range, load_table, EXIT_OK, EXIT_FATAL
from ksweep.exceptions import ParameterError

from data_gen import make_blobs, blobs_csv_text


def _read(path):
    with open(path, newline="", encoding="utf-8") as handle:
        return list(csv.reader(handle))


@pytest.fixture
def blobs_csv(write_csv):
    X, _ = make_blobs(n_per=10, seed=0)
    return write_csv(blobs_csv_text(X, header=True))


def test_sweep_writes_result_and_metrics_files(blobs_csv, tmp_path):
    out = tmp_path / "results" / "run"
    code = main(["-i", str(blobs_csv), "-o", str(out), "-s", "2", "-e", "4", "-j", "2"])
    assert code == EXIT_OK

    for k in (2, 3, 4):
        rows = _read(f"{out}-{k}.csv")
        assert len(rows) == 31
        assert rows[0][-1] == f"DistanceToCluster{k}"

    metrics = _read(f"{out}-clusterMetrics.csv")
    assert metrics[0] == ["ClusterCount", "AverageDistance", "BestDistance", "WorstDistance"]
    assert sorted(int(row[0]) for row in metrics[1:]) == [2, 3, 4]


def test_fixed_k_with_tab_delimited_input_and_plot(write_csv, tmp_path):
    X, _ = make_blobs(n_per=5, seed=1)
    path = write_csv(blobs_csv_text(X, header=False, delimiter="\t"), name="in.tsv")
    out = tmp_path / "run"
    code = main(["-i", str(path), "-o", str(out), "--no-header-row", "-c", "3", "--plot"])
    assert code == EXIT_OK
    assert len(_read(f"{out}-3.csv")) == 16
    assert (tmp_path / "run-clusterMetrics.png").exists()


def test_normalization_flag(blobs_csv):
    scaled = load_table(str(blobs_csv), has_header=True, normalize=True)
    raw = load_table(str(blobs_csv), has_header=True, normalize=False)
    assert float(scaled.features.max()) == 1.0
    assert float(raw.features.max()) > 1.0


def test_missing_input_file_is_fatal(tmp_path, capsys):
    code = main(["-i", str(tmp_path / "missing.csv"), "-o", str(tmp_path / "out"), "-c", "2"])
    assert code == EXIT_FATAL
    assert "could not be found" in capsys.readouterr().err


def test_schema_error_is_fatal_and_lists_rows(write_csv, tmp_path, capsys):
    path = write_csv("Label,x,y\na,1,2\nb,1\nc,1,2,3\n")
    code = main(["-i", str(path), "-o", str(tmp_path / "out"), "-c", "1"])
    assert code == EXIT_FATAL
    err = capsys.readouterr().err
    assert "Row 3 has 1 columns" in err
    assert "Row 4 has 3 columns" in err
    assert not (tmp_path / "out-1.csv").exists()


def test_k_larger_than_row_count_is_fatal(write_csv, tmp_path):
    path = write_csv("Label,x\na,1\nb,2\n")
    assert main(["-i", str(path), "-o", str(tmp_path / "out"), "-c", "3"]) == EXIT_FATAL
    assert not (tmp_path / "out-clusterMetrics.csv").exists()


@pytest.mark.parametrize("clusters,start,end", [
    (None, None, None),
    (2, 1, 3),
    (None, 2, None),
    (None, None, 4),
])
def test_exactly_one_of_k_or_range(clusters, start, end):
    with pytest.raises(ParameterError):
        resolve_k_range(clusters, start, end)


def test_resolve_k_range_accepts_either_form():
    assert resolve_k_range(3, None, None) == (3, 3)
    assert resolve_k_range(None, 2, 5) == (2, 5)


def test_undecodable_input_is_fatal(tmp_path, capsys):
    path = tmp_path / "bad.csv"
    path.write_bytes(b"Label,x\nb,\xff\xfe2\n")
    code = main(["-i", str(path), "-o", str(tmp_path / "out"), "-c", "1"])
    assert code == EXIT_FATAL
    err = capsys.readouterr().err
    assert str(path) in err
    assert "line 2" in err
