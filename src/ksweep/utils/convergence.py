"""
Convergence criteria for the clustering loop.
"""

from typing import Dict, Any
import torch
from torch import Tensor

from ..base.interfaces import ConvergenceCriterion


class ChangeInAssignments(ConvergenceCriterion):
    """Convergence based on the fraction of points that change clusters.
    
    With the default max_change_fraction of 0 the loop stops only when no
    point moves between consecutive assignment steps.
    """
    
    def __init__(self, max_change_fraction: float = 0.0, 
                 patience: int = 1):
        """
        Args:
            max_change_fraction: Largest fraction of changed points still considered stable
            patience: Number of stable iterations required before declaring convergence
        """
        super().__init__()
        if max_change_fraction < 0:
            raise ValueError(f"max_change_fraction must be >= 0, got {max_change_fraction}")
        if patience < 1:
            raise ValueError(f"patience must be >= 1, got {patience}")
        self.max_change_fraction = max_change_fraction
        self.patience = patience
        self._prev_assignments = None
        self._stable_count = 0
        self.last_n_changed = None
        
    def check(self, current_state: Dict[str, Any]) -> bool:
        """Check if assignments have stabilized."""
        current_assignments: Tensor = current_state['assignments']
            
        if self._prev_assignments is None:
            self._prev_assignments = current_assignments.clone()
            self.last_n_changed = None
            return False
            
        n_changed = int((current_assignments != self._prev_assignments).sum().item())
        n_total = len(current_assignments)
        change_fraction = n_changed / n_total if n_total else 0.0
        self.last_n_changed = n_changed
        
        self.history.append({
            'iteration': current_state.get('iteration', len(self.history)),
            'n_changed': n_changed,
            'change_fraction': change_fraction
        })
        
        if change_fraction <= self.max_change_fraction:
            self._stable_count += 1
            converged = self._stable_count >= self.patience
        else:
            self._stable_count = 0
            converged = False
            
        self._prev_assignments = current_assignments.clone()
        
        return converged

    def reset(self):
        """Reset history and remembered assignments."""
        super().reset()
        self._prev_assignments = None
        self._stable_count = 0
        self.last_n_changed = None
