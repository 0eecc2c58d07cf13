# tests/test_convergence.py
"""
ChangeInAssignments: stops only when no assignment changes (default), with
optional tolerance and patience.
"""

from __future__ import annotations

import pytest
import torch

from ksweep.utils.convergence import ChangeInAssignments


def test_converges_when_no_point_moves():
    crit = ChangeInAssignments()
    a0 = torch.tensor([0, 0, 1, 1])

    assert crit.check({"iteration": 0, "assignments": a0}) is False   # first call only records
    assert crit.check({"iteration": 1, "assignments": a0.clone()}) is True
    assert crit.last_n_changed == 0


def test_single_move_blocks_convergence_by_default():
    crit = ChangeInAssignments()
    a0 = torch.zeros(10, dtype=torch.long)
    a1 = a0.clone()
    a1[3] = 1

    assert crit.check({"iteration": 0, "assignments": a0}) is False
    assert crit.check({"iteration": 1, "assignments": a1}) is False
    assert crit.last_n_changed == 1
    assert crit.history[-1]["change_fraction"] == pytest.approx(0.1)
    assert crit.check({"iteration": 2, "assignments": a1.clone()}) is True


def test_fraction_threshold_and_patience():
    crit = ChangeInAssignments(max_change_fraction=0.2, patience=2)
    a0 = torch.zeros(10, dtype=torch.long)
    a1 = a0.clone()
    a1[0] = 1
    a2 = a1.clone()
    a2[1] = 1

    assert crit.check({"iteration": 0, "assignments": a0}) is False
    assert crit.check({"iteration": 1, "assignments": a1}) is False  # stable_count = 1
    assert crit.check({"iteration": 2, "assignments": a2}) is True   # stable_count = 2


def test_reset_forgets_previous_assignments():
    crit = ChangeInAssignments()
    a0 = torch.tensor([0, 1])
    crit.check({"assignments": a0})
    crit.reset()
    assert crit.history == []
    assert crit.check({"assignments": a0}) is False


def test_invalid_settings():
    with pytest.raises(ValueError):
        ChangeInAssignments(max_change_fraction=-0.1)
    with pytest.raises(ValueError):
        ChangeInAssignments(patience=0)
