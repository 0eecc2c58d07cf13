"""
Typed in-memory table of labeled feature vectors.

A Table is built once per run and then shared, read-only, by every
clustering run of a sweep.
"""

from dataclasses import dataclass, field
from typing import Iterator, List, Sequence, Tuple

import torch
from torch import Tensor

from ..exceptions import SchemaError


@dataclass(frozen=True)
class Row:
    """One labeled feature vector."""

    label: str
    features: Tuple[float, ...]

    @property
    def feature_count(self) -> int:
        return len(self.features)


@dataclass(frozen=True)
class Table:
    """Ordered sequence of rows sharing the same feature count.

    The (n, d) float64 feature matrix is materialized once at construction
    and must be treated as read-only by consumers.
    """

    rows: Tuple[Row, ...]
    feature_count: int
    _features: Tensor = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        if self.feature_count < 1:
            raise SchemaError(f"A table needs at least one feature column, got {self.feature_count}")
        for row_idx, row in enumerate(self.rows):
            if row.feature_count != self.feature_count:
                raise SchemaError(
                    f"Row {row_idx} has {row.feature_count} features instead of "
                    f"the expected {self.feature_count}",
                    violations=[(row_idx, row.feature_count)],
                    expected=self.feature_count
                )

        if self.rows:
            matrix = torch.tensor([row.features for row in self.rows], dtype=torch.float64)
        else:
            matrix = torch.zeros(0, self.feature_count, dtype=torch.float64)
        object.__setattr__(self, '_features', matrix)

    @classmethod
    def from_tensor(cls, labels: Sequence[str], features: Tensor) -> 'Table':
        """Build a table from labels and an (n, d) tensor."""
        if features.dim() != 2:
            raise ValueError(f"Expected 2D tensor, got {features.dim()}D")
        if len(labels) != features.shape[0]:
            raise ValueError(f"Expected {features.shape[0]} labels, got {len(labels)}")
        values = features.detach().to(dtype=torch.float64, device='cpu').tolist()
        rows = tuple(Row(str(label), tuple(vec)) for label, vec in zip(labels, values))
        return cls(rows=rows, feature_count=features.shape[1])

    @property
    def features(self) -> Tensor:
        """(n, d) float64 feature matrix."""
        return self._features

    @property
    def labels(self) -> List[str]:
        return [row.label for row in self.rows]

    @property
    def row_count(self) -> int:
        return len(self.rows)

    def __len__(self) -> int:
        return len(self.rows)

    def __iter__(self) -> Iterator[Row]:
        return iter(self.rows)

    def __getitem__(self, idx: int) -> Row:
        return self.rows[idx]
