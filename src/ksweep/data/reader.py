"""
Delimited text reader.

Rows may be separated by commas, tabs, or a mix of both. Cells are trimmed
of surrounding whitespace. Blank lines are yielded as empty lists so that
row numbering stays aligned with physical lines.
"""

import csv
import os
from typing import Iterator, List, Union

from ..exceptions import InputFileError, InputFormatError

PathLike = Union[str, os.PathLike]

DELIMITERS = (',', '\t')


def check_input_file(path: PathLike) -> None:
    """Raise InputFileError if path does not name an existing file."""
    if not os.path.isfile(path):
        raise InputFileError(f"The input file {os.fspath(path)} could not be found")


def split_cells(cells: List[str]) -> List[str]:
    """Split comma-separated cells further on tabs and trim each one."""
    out = []
    for cell in cells:
        out.extend(part.strip() for part in cell.split('\t'))
    return out


def _decoded_lines(handle, name: str, encoding: str) -> Iterator[str]:
    """Decode a binary handle one physical line at a time.

    Lines end at \\n, \\r\\n or \\r and keep their terminators for csv.reader.
    """
    line_number = 0
    for chunk in handle:
        for raw in chunk.splitlines(keepends=True):
            line_number += 1
            try:
                yield raw.decode(encoding)
            except UnicodeDecodeError as exc:
                raise InputFormatError(
                    f"The input file {name} is not valid {encoding} text at line {line_number}",
                    name, line_number
                ) from exc


def read_rows(path: PathLike, encoding: str = 'utf-8') -> Iterator[List[str]]:
    """Yield the cells of every line in a delimited text file.

    Args:
        path: File to read
        encoding: ASCII-compatible text encoding of the file

    Yields:
        List of trimmed cell strings per line (empty list for blank lines)

    Raises:
        InputFileError: If the file does not exist
        InputFormatError: If a line cannot be decoded or tokenized
    """
    check_input_file(path)
    name = os.fspath(path)
    with open(path, 'rb') as handle:
        reader = csv.reader(_decoded_lines(handle, name, encoding), delimiter=',')
        try:
            for cells in reader:
                yield split_cells(cells) if cells else []
        except csv.Error as exc:
            raise InputFormatError(
                f"The input file {name} could not be parsed at line {reader.line_num}: {exc}",
                name, reader.line_num
            ) from exc


def is_blank(cells: List[str]) -> bool:
    """A row is blank when it has no cells or only empty ones."""
    return all(not cell.strip() for cell in cells)
