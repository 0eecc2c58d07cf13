"""
Schema validation for raw delimited rows.

The validator never fails fast: it scans the whole input and reports every
row whose feature count differs from the first data row in one SchemaError.
"""

from typing import Iterable, List, Optional, Sequence, Tuple

from ..exceptions import EmptyInputError, SchemaError
from .reader import is_blank

DEFAULT_LABEL = 'notSpecified'


def iter_data_rows(rows: Iterable[Sequence[str]],
                   has_header: bool) -> Iterable[Tuple[int, Sequence[str]]]:
    """Yield (row_index, cells) for data rows only.

    Row indices are 1-based positions in the source, counting header and
    blank rows. Blank rows are skipped; the first non-blank row is skipped
    when has_header is True.
    """
    skip_header = has_header
    for row_index, cells in enumerate(rows, start=1):
        if cells is None or is_blank(cells):
            continue
        if skip_header:
            skip_header = False
            continue
        yield row_index, cells


def row_label(cells: Sequence[str]) -> str:
    """Column 0 is the label; missing or empty labels get a sentinel."""
    if not cells or not cells[0]:
        return DEFAULT_LABEL
    return cells[0]


class TableValidator:
    """Confirms that every data row carries the same number of features.

    Args:
        source_name: Name used in error messages (usually the file name)
    """

    def __init__(self, source_name: Optional[str] = None):
        self.source_name = source_name

    def validate(self, rows: Iterable[Sequence[str]], has_header: bool = True) -> int:
        """Scan all rows and return the shared feature count.

        Raises:
            EmptyInputError: No data rows were found
            SchemaError: One or more rows disagree with the first data row,
                or the first data row has no feature columns
        """
        feature_count = None
        violations: List[Tuple[int, int]] = []

        for row_index, cells in iter_data_rows(rows, has_header):
            current = len(cells) - 1
            if feature_count is None:
                feature_count = current
            elif current != feature_count:
                violations.append((row_index, current))

        where = f" in {self.source_name}" if self.source_name else ""

        if feature_count is None:
            raise EmptyInputError(f"No data rows were found{where}")

        if feature_count < 1:
            raise SchemaError(
                f"The first data row{where} has no feature columns",
                expected=feature_count
            )

        if violations:
            lines = [
                f"Row {row_index} has {count} columns of features instead of "
                f"the expected {feature_count}"
                for row_index, count in violations
            ]
            raise SchemaError(
                f"Errors were encountered while processing{where or ' the input'}. "
                f"These errors are as follows:\n" + "\n".join(lines),
                violations=violations,
                expected=feature_count
            )

        return feature_count
