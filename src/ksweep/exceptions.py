"""
Exception hierarchy for ksweep.

Everything raised on purpose by the package derives from KSweepError, so
callers (the CLI in particular) can separate input problems from bugs.
"""

from typing import List, Optional, Tuple


class KSweepError(Exception):
    """Base class for all ksweep errors."""


class InputFileError(KSweepError, FileNotFoundError):
    """The input file could not be found."""


class SchemaError(KSweepError, ValueError):
    """Rows disagree on the number of feature columns.

    Attributes:
        violations: List of (row_index, feature_count) for every offending row
        expected: Feature count fixed by the first data row
    """

    def __init__(self, message: str,
                 violations: Optional[List[Tuple[int, int]]] = None,
                 expected: Optional[int] = None):
        super().__init__(message)
        self.violations = list(violations or [])
        self.expected = expected


class EmptyInputError(SchemaError):
    """No data rows were found after skipping the header and blank rows."""


class ParseError(KSweepError, ValueError):
    """A feature cell is not a finite floating point number."""

    def __init__(self, message: str, row_index: int, column_index: int, value: str):
        super().__init__(message)
        self.row_index = row_index
        self.column_index = column_index
        self.value = value


class ParameterError(KSweepError, ValueError):
    """Invalid cluster count, sweep range or other call parameter."""


class InputFormatError(KSweepError, ValueError):
    """The input file is not decodable text or not parseable as delimited rows."""

    def __init__(self, message: str, path: str, row_index: int):
        super().__init__(message)
        self.path = path
        self.row_index = row_index
