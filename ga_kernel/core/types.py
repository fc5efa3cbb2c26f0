"""
Type aliases and validation helpers for GA-Kernel.

Storage Convention:
===================

Every coefficient table in this library is a 1-D torch tensor.

    Multivector:  (2^N,)        slot `mask` holds the blade with that bitmask
    PackedBlade:  (C(N, G),)    slot i holds the i-th grade-G mask in
                                ascending mask order

The numeric type of the coefficients is the tensor dtype. Integer dtypes
(torch.int32, torch.int64) give exact arithmetic; floating dtypes follow
IEEE rules, so near-zero residues are NOT treated as zero by the
non-zero/grade queries.
"""

from typing import Iterable, Optional, Tuple, Union

import torch


# =============================================================================
# Basic Type Aliases
# =============================================================================

# Basis-blade identity: bit i set <=> basis vector i participates
Mask = int

# A single coefficient as accepted by the setters
Coefficient = Union[int, float, complex, bool, torch.Tensor]

# Dtypes may be given as torch.dtype or by name ("float32", "int64", ...)
DTypeLike = Union[str, torch.dtype]

DeviceLike = Union[str, torch.device]

# (mask, coefficient) pair as produced by Multivector.non_zero_blades()
BladeTerm = Tuple[Mask, Union[int, float, complex, bool]]

IndexList = Iterable[int]


# =============================================================================
# Resolution Helpers
# =============================================================================

def resolve_dtype(dtype: Optional[DTypeLike] = None) -> torch.dtype:
    """
    Turn a dtype name or torch.dtype into a torch.dtype.

    Args:
        dtype: torch.dtype, a name such as "float64", or None for the
               configured default

    Returns:
        torch.dtype

    Raises:
        ValueError: If the name does not denote a torch dtype
    """
    if dtype is None:
        from ..utils.config import get_config
        dtype = get_config().dtype

    if isinstance(dtype, torch.dtype):
        return dtype

    resolved = getattr(torch, str(dtype), None)
    if not isinstance(resolved, torch.dtype):
        raise ValueError(f"Unknown dtype: {dtype!r}")
    return resolved


def resolve_device(device: Optional[DeviceLike] = None) -> torch.device:
    """Turn a device name or torch.device into a torch.device."""
    if device is None:
        from ..utils.config import get_config
        device = get_config().device
    return torch.device(device)


def is_index(value) -> bool:
    """True for plain integers (bool excluded) and integer-valued 0-d tensors."""
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return True
    if isinstance(value, torch.Tensor):
        return value.ndim == 0 and not value.is_floating_point() and not value.is_complex() \
            and value.dtype != torch.bool
    return False


def validate_count(value, name: str, upper: Optional[int] = None) -> int:
    """
    Validate a non-negative integer parameter such as a dimension or grade.

    Args:
        value: Value to validate
        name: Name for error messages
        upper: Optional inclusive upper bound

    Returns:
        The value as a Python int

    Raises:
        ValueError: If value is not a non-negative integer or exceeds upper
    """
    if not is_index(value):
        raise ValueError(f"{name} must be a non-negative integer, got {value!r}")
    value = int(value)
    if value < 0:
        raise ValueError(f"{name} must be non-negative, got {value}")
    if upper is not None and value > upper:
        raise ValueError(f"{name} must be at most {upper}, got {value}")
    return value
