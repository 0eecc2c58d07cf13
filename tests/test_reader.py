# tests/test_reader.py
"""
Delimited reader: comma/tab splitting, trimming, blank lines, missing files.
"""

from __future__ import annotations

import pytest

from ksweep.data.reader import read_rows, check_input_file, is_blank
from ksweep.exceptions import InputFileError, InputFormatError


def test_read_rows_splits_on_commas_and_tabs(write_csv):
    path = write_csv("Label,F0\tF1\na,1.0,2.0\nb\t3.5\t-4\n")
    rows = list(read_rows(path))
    assert rows == [
        ["Label", "F0", "F1"],
        ["a", "1.0", "2.0"],
        ["b", "3.5", "-4"],
    ]


def test_read_rows_trims_cells_and_keeps_blank_lines(write_csv):
    path = write_csv(" a , 1 , 2 \n\n b,3,4\n")
    rows = list(read_rows(path))
    assert rows == [["a", "1", "2"], [], ["b", "3", "4"]]
    assert is_blank(rows[1])


def test_quoted_label_with_comma_is_one_cell(write_csv):
    path = write_csv('"Smith, J",1,2\n')
    assert list(read_rows(path)) == [["Smith, J", "1", "2"]]


def test_missing_file_raises_input_file_error(tmp_path):
    missing = tmp_path / "nope.csv"
    with pytest.raises(InputFileError):
        check_input_file(missing)
    with pytest.raises(FileNotFoundError):
        list(read_rows(missing))


def test_undecodable_line_names_file_and_line(tmp_path):
    path = tmp_path / "latin.csv"
    path.write_bytes(b"Label,x\nb,\xff\xfe2\n")
    with pytest.raises(InputFormatError) as info:
        list(read_rows(path))
    assert info.value.row_index == 2
    assert str(path) in str(info.value)
    assert "line 2" in str(info.value)


def test_carriage_return_line_endings(tmp_path):
    path = tmp_path / "mac.csv"
    path.write_bytes(b"a,1\rb,2\r\nc,3\n")
    assert list(read_rows(path)) == [["a", "1"], ["b", "2"], ["c", "3"]]


def test_oversized_field_is_a_format_error(write_csv):
    path = write_csv("Label,x\na," + "1" * 200_000 + "\n")
    with pytest.raises(InputFormatError) as info:
        list(read_rows(path))
    assert info.value.row_index == 2
