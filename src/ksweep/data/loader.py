"""
Typed loading of validated rows into a Table.
"""

import math
from typing import Iterable, Optional, Sequence

from ..exceptions import ParseError, SchemaError
from .table import Row, Table
from .validation import iter_data_rows, row_label


def parse_feature(value: str, row_index: int, column_index: int) -> float:
    """Parse one feature cell as a finite float."""
    try:
        parsed = float(value)
    except (TypeError, ValueError):
        raise ParseError(
            f"Row {row_index}, column {column_index}: {value!r} is not a number",
            row_index, column_index, value
        ) from None
    if not math.isfinite(parsed):
        raise ParseError(
            f"Row {row_index}, column {column_index}: {value!r} is not a finite number",
            row_index, column_index, value
        )
    return parsed


class TableLoader:
    """Parses data rows into a Table of labels and float64 features.

    Rows are re-checked against feature_count while loading, so a source
    that changed since validation can never load inconsistent rows.
    """

    def __init__(self, source_name: Optional[str] = None):
        self.source_name = source_name

    def load(self, rows: Iterable[Sequence[str]], feature_count: int,
             has_header: bool = True) -> Table:
        """Load rows into a Table.

        Args:
            rows: Iterable of cell lists (column 0 is the label)
            feature_count: Number of feature columns after the label
            has_header: Skip the first non-blank row

        Raises:
            SchemaError: A row does not carry feature_count features
            ParseError: A feature cell is not a finite float
        """
        loaded = []
        for row_index, cells in iter_data_rows(rows, has_header):
            if len(cells) - 1 != feature_count:
                raise SchemaError(
                    f"Row {row_index} has {len(cells) - 1} columns of features "
                    f"instead of the expected {feature_count}",
                    violations=[(row_index, len(cells) - 1)],
                    expected=feature_count
                )
            features = tuple(
                parse_feature(cells[col], row_index, col)
                for col in range(1, feature_count + 1)
            )
            loaded.append(Row(row_label(cells), features))

        return Table(rows=tuple(loaded), feature_count=feature_count)
