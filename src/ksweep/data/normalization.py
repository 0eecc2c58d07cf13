"""
Min-max feature normalization.

Each feature is rescaled independently to [0, 1]. A constant feature
(max == min) maps to 0 for every row.
"""

from dataclasses import dataclass
from typing import Dict, Tuple

import torch
from torch import Tensor

from ..exceptions import ParameterError
from .table import Table


@dataclass(frozen=True)
class NormalizationBounds:
    """Per-feature (min, max) observed over a table."""

    minimums: Tuple[float, ...]
    maximums: Tuple[float, ...]

    @property
    def feature_count(self) -> int:
        return len(self.minimums)

    def as_dict(self) -> Dict[int, Tuple[float, float]]:
        """Mapping from feature index to (min, max)."""
        return {i: (lo, hi) for i, (lo, hi) in enumerate(zip(self.minimums, self.maximums))}

    def is_degenerate(self, feature_idx: int) -> bool:
        return self.maximums[feature_idx] == self.minimums[feature_idx]


class Normalizer:
    """Fits min/max bounds over a table and rescales features with them."""

    def fit(self, table: Table) -> NormalizationBounds:
        if table.row_count == 0:
            raise ParameterError("Cannot fit normalization bounds on an empty table")
        X = table.features
        min_vals = X.min(dim=0)[0]
        max_vals = X.max(dim=0)[0]
        return NormalizationBounds(
            minimums=tuple(min_vals.tolist()),
            maximums=tuple(max_vals.tolist())
        )

    def transform(self, table: Table, bounds: NormalizationBounds) -> Table:
        """Return a new table with every feature rescaled by bounds."""
        if bounds.feature_count != table.feature_count:
            raise ParameterError(
                f"Bounds cover {bounds.feature_count} features, table has {table.feature_count}"
            )
        scaled = apply_min_max(table.features, bounds)
        return Table.from_tensor(table.labels, scaled)

    def fit_transform(self, table: Table) -> Tuple[Table, NormalizationBounds]:
        bounds = self.fit(table)
        return self.transform(table, bounds), bounds


def apply_min_max(X: Tensor, bounds: NormalizationBounds) -> Tensor:
    """Scale an (n, d) tensor with precomputed bounds.

    Degenerate columns are 0 for every row.
    """
    min_vals = torch.tensor(bounds.minimums, dtype=X.dtype, device=X.device).unsqueeze(0)
    max_vals = torch.tensor(bounds.maximums, dtype=X.dtype, device=X.device).unsqueeze(0)
    range_vals = max_vals - min_vals
    degenerate = range_vals == 0
    range_vals = torch.where(degenerate, torch.ones_like(range_vals), range_vals)
    scaled = (X - min_vals) / range_vals
    return torch.where(degenerate, torch.zeros_like(scaled), scaled)
