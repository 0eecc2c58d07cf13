"""
Input validation utilities.

Provides checks for data tensors, cluster counts, sweep ranges and random
state before any clustering work starts.
"""

from typing import Optional, Union, Tuple
import torch
from torch import Tensor
import numpy as np

from ..exceptions import ParameterError


def validate_data(X: Union[Tensor, np.ndarray, list], 
                  dtype: torch.dtype = torch.float64,
                  device: Optional[torch.device] = None,
                  ensure_finite: bool = True,
                  ensure_min_samples: int = 1,
                  ensure_min_features: int = 1) -> Tensor:
    """Validate and convert input data to a 2D tensor.
    
    Args:
        X: Input data (tensor, numpy array, or list)
        dtype: Target data type
        device: Target device
        ensure_finite: Whether to check for inf/nan
        ensure_min_samples: Minimum number of samples required
        ensure_min_features: Minimum number of features required  
        
    Returns:
        Validated tensor
        
    Raises:
        ValueError: If validation fails
    """
    if isinstance(X, Tensor):
        if X.dtype != dtype or (device is not None and X.device != device):
            X = X.to(dtype=dtype, device=device)
    elif isinstance(X, np.ndarray):
        X = torch.from_numpy(X).to(dtype=dtype, device=device)
    elif isinstance(X, list):
        X = torch.tensor(X, dtype=dtype, device=device)
    else:
        raise TypeError(f"Cannot convert {type(X)} to tensor")
        
    if X.dim() == 1:
        X = X.unsqueeze(1)
    elif X.dim() != 2:
        raise ValueError(f"Expected 2D array, got {X.dim()}D")
            
    n_samples, n_features = X.shape
    
    if n_samples < ensure_min_samples:
        raise ValueError(f"Found {n_samples} samples, but need at least "
                         f"{ensure_min_samples}")
                         
    if n_features < ensure_min_features:
        raise ValueError(f"Found {n_features} features, but need at least "
                         f"{ensure_min_features}")
                           
    if ensure_finite:
        if torch.isnan(X).any():
            raise ValueError("Input contains NaN values")
        if torch.isinf(X).any():
            raise ValueError("Input contains infinite values")
            
    return X


def check_n_clusters(n_clusters: int, n_samples: int) -> None:
    """Validate number of clusters against the number of rows.
    
    Raises:
        ParameterError: If n_clusters is not in [1, n_samples]
    """
    if isinstance(n_clusters, bool) or not isinstance(n_clusters, (int, np.integer)):
        raise ParameterError(f"n_clusters must be int, got {type(n_clusters).__name__}")
        
    if n_clusters <= 0:
        raise ParameterError(f"n_clusters must be positive, got {n_clusters}")
        
    if n_clusters > n_samples:
        raise ParameterError(f"n_clusters ({n_clusters}) cannot be larger than "
                             f"the number of rows ({n_samples})")


def check_k_range(k_range: Tuple[int, int], n_samples: int) -> Tuple[int, int]:
    """Validate an inclusive (start, end) sweep range.
    
    Raises:
        ParameterError: If start > end or either bound is outside [1, n_samples]
    """
    try:
        k_start, k_end = k_range
    except (TypeError, ValueError):
        raise ParameterError(f"Expected a (start, end) pair, got {k_range!r}") from None

    if k_start > k_end:
        raise ParameterError(f"Sweep start ({k_start}) is greater than sweep end ({k_end})")

    for bound in (k_start, k_end):
        if bound < 1 or bound > n_samples:
            raise ParameterError(f"Sweep bound {bound} is outside [1, {n_samples}]")

    return int(k_start), int(k_end)


def check_random_state(random_state: Optional[Union[int, torch.Generator]]) -> torch.Generator:
    """Create a private generator from a seed.
    
    Args:
        random_state: Seed, generator, or None for seed 0
        
    Returns:
        torch.Generator
    """
    if random_state is None:
        random_state = 0
    if isinstance(random_state, torch.Generator):
        return random_state
    if isinstance(random_state, (int, np.integer)) and not isinstance(random_state, bool):
        generator = torch.Generator()
        generator.manual_seed(int(random_state))
        return generator
    raise TypeError(f"random_state must be int or Generator, got {type(random_state)}")
