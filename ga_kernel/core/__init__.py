"""
Core module for GA-Kernel.

Contains:
- Constants: Basis word width, dimension limits and storage defaults
- Types: Type aliases and dtype/device resolution
- Base: Abstract base class shared by dense and packed coefficient tables
"""

from .constants import (
    BASIS_WORD_BITS,
    MAX_MASK,
    SCALAR_MASK,
    DEFAULT_MAX_DIMENSION,
    MAX_PACKED_DIMENSION,
    DEFAULT_DTYPE,
    DEFAULT_DEVICE,
    GRADE_SCALAR,
    GRADE_VECTOR,
    GRADE_BIVECTOR,
    GRADE_TRIVECTOR,
)

from .types import (
    Mask,
    Coefficient,
    DTypeLike,
    DeviceLike,
    BladeTerm,
    resolve_dtype,
    resolve_device,
    validate_count,
)

from .base import BaseCoefficientTable

__all__ = [
    # Constants
    "BASIS_WORD_BITS",
    "MAX_MASK",
    "SCALAR_MASK",
    "DEFAULT_MAX_DIMENSION",
    "MAX_PACKED_DIMENSION",
    "DEFAULT_DTYPE",
    "DEFAULT_DEVICE",
    "GRADE_SCALAR",
    "GRADE_VECTOR",
    "GRADE_BIVECTOR",
    "GRADE_TRIVECTOR",
    # Types
    "Mask",
    "Coefficient",
    "DTypeLike",
    "DeviceLike",
    "BladeTerm",
    "resolve_dtype",
    "resolve_device",
    "validate_count",
    # Base classes
    "BaseCoefficientTable",
]
