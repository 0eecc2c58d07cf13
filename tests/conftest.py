"""
Global pytest fixtures for the ksweep tests.

- Provides deterministic seeding across Python, NumPy, and PyTorch.
- Forces single-threaded torch to stabilize timings and reduce flakiness.
- Uses a non-interactive matplotlib backend.
"""

from __future__ import annotations

import os
import random
import sys
from pathlib import Path
from typing import Callable, Generator, Sequence

os.environ.setdefault("MPLBACKEND", "Agg")

import numpy as np
import pytest
import torch

# Add the project's src directory to the Python path so tests can import the code
ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if SRC.exists():
    sys.path.insert(0, str(SRC))

from ksweep.data.table import Row, Table  # noqa: E402


def _get_seed() -> int:
    """Resolve the test seed from env or default."""
    env = os.getenv("TEST_RANDOM_SEED", "1337")
    try:
        return int(env)
    except ValueError:
        return 1337


@pytest.fixture(scope="session", autouse=True)
def seed_all() -> None:
    """
    Seed Python, NumPy, and PyTorch RNGs once per session.

    The engine never reads these global streams (it uses a private
    torch.Generator), so this only pins down the test data itself.
    """
    seed = _get_seed()
    random.seed(seed)
    np.random.seed(seed)
    torch.manual_seed(seed)


@pytest.fixture(scope="session", autouse=True)
def set_torch_threads() -> None:
    """
    Reduce PyTorch to a single thread for stability and consistent timing.
    """
    torch.set_num_threads(1)


@pytest.fixture(scope="function")
def rng(seed_all: None) -> Generator[np.random.Generator, None, None]:
    """
    Per-test NumPy Generator seeded from the session seed.
    """
    gen = np.random.default_rng(_get_seed())
    yield gen


@pytest.fixture
def make_table() -> Callable[..., Table]:
    """Build a Table from (label, features...) tuples."""
    def _make(items: Sequence[tuple]) -> Table:
        rows = tuple(Row(str(item[0]), tuple(float(v) for v in item[1:])) for item in items)
        return Table(rows=rows, feature_count=len(rows[0].features))
    return _make


@pytest.fixture
def write_csv(tmp_path: Path) -> Callable[[str, str], Path]:
    """Write text to a file under tmp_path and return its path."""
    def _write(text: str, name: str = "input.csv") -> Path:
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return path
    return _write
