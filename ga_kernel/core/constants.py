"""
Centralized constants for GA-Kernel.

This module defines the numeric limits and default values used throughout
the library. Using these constants ensures consistency and makes it easy to
adjust defaults globally.

Usage:
    from ga_kernel.core.constants import BASIS_WORD_BITS, DEFAULT_DTYPE

    def my_function(dtype: str = DEFAULT_DTYPE):
        ...
"""

# =============================================================================
# Basis Encoding
# =============================================================================

# Width of the machine word holding a basis-blade bitmask.
# Basis vector indices run from 0 to BASIS_WORD_BITS - 1.
BASIS_WORD_BITS: int = 64

# Exclusive upper bound on a valid bitmask
MAX_MASK: int = 1 << BASIS_WORD_BITS

# Mask of the scalar (grade 0) blade
SCALAR_MASK: int = 0


# =============================================================================
# Dimension Limits
# =============================================================================

# Dense multivectors store 2^N coefficients, so N is capped by default.
# Override through Config.max_dimension.
DEFAULT_MAX_DIMENSION: int = 16

# Packed blades never allocate 2^N storage, but basis indices must still fit
# into the mask word.
MAX_PACKED_DIMENSION: int = BASIS_WORD_BITS


# =============================================================================
# Storage Defaults
# =============================================================================

DEFAULT_DTYPE: str = "float32"
DEFAULT_DEVICE: str = "cpu"


# =============================================================================
# Named Grades
# =============================================================================

GRADE_SCALAR: int = 0
GRADE_VECTOR: int = 1
GRADE_BIVECTOR: int = 2
GRADE_TRIVECTOR: int = 3
