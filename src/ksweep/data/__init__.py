"""Input handling: reading, validation, loading and normalization of tables."""

from .reader import read_rows, check_input_file
from .table import Row, Table
from .validation import TableValidator, DEFAULT_LABEL
from .loader import TableLoader
from .normalization import Normalizer, NormalizationBounds

__all__ = [
    'read_rows',
    'check_input_file',
    'Row',
    'Table',
    'TableValidator',
    'TableLoader',
    'Normalizer',
    'NormalizationBounds',
    'DEFAULT_LABEL'
]
