"""
Basis blades: one elementary blade identified by a bitmask, plus a coefficient.

Named blades follow the 1-based naming convention, so bit 0 is e1:

- Grade 0 (scalar): 1
- Grade 1 (vectors): e1, e2, e3, e4
- Grade 2 (bivectors): e12, e13, e23, e14, e24, e34
- Grade 3 (trivectors): e123, e124, e134, e234
- Grade 4 (quadvector): e1234
"""

from __future__ import annotations
from dataclasses import dataclass, replace
from typing import Iterable, List, Optional

from ..core.constants import SCALAR_MASK
from ..core.types import Coefficient, Mask, validate_count
from .bits import (
    validate_mask,
    grade_of,
    min_dim_of,
    contains_basis,
    basis_indices,
    mask_from_indices,
)


# Bitmasks of the named blades
SCALAR = SCALAR_MASK
E1 = 0b0001    # e₁
E2 = 0b0010    # e₂
E3 = 0b0100    # e₃
E4 = 0b1000    # e₄
E12 = 0b0011   # e₁∧e₂
E13 = 0b0101   # e₁∧e₃
E23 = 0b0110   # e₂∧e₃
E14 = 0b1001   # e₁∧e₄
E24 = 0b1010   # e₂∧e₄
E34 = 0b1100   # e₃∧e₄
E123 = 0b0111  # e₁∧e₂∧e₃
E124 = 0b1011  # e₁∧e₂∧e₄
E134 = 0b1101  # e₁∧e₃∧e₄
E234 = 0b1110  # e₂∧e₃∧e₄
E1234 = 0b1111 # e₁∧e₂∧e₃∧e₄


@dataclass(frozen=True)
class BasisBlade:
    """
    A single basis element with its coefficient.

    The mask is fixed at construction and validated against the mask word
    width. Grade, minimum dimension and basis indices are derived from the
    mask alone, so two blades with the same mask always agree on them.

    Attributes:
        mask: Bitmask of participating basis vectors
        coefficient: Scalar weight (Python number or 0-d tensor)
    """
    mask: Mask
    coefficient: Coefficient = 1

    def __post_init__(self):
        object.__setattr__(self, 'mask', validate_mask(self.mask))

    @classmethod
    def create(
        cls,
        mask: Mask,
        coefficient: Coefficient = 1,
        dimension: Optional[int] = None,
    ) -> 'BasisBlade':
        """
        Build a blade, optionally checking that it fits `dimension`.

        Args:
            mask: Bitmask of participating basis vectors
            coefficient: Scalar weight
            dimension: If given, the mask must satisfy mask < 2^dimension

        Raises:
            ValueError: If the mask is invalid or does not fit the dimension
        """
        blade = cls(mask, coefficient)
        if dimension is not None:
            dimension = validate_count(dimension, "dimension")
            if blade.min_dim > dimension:
                raise ValueError(
                    f"Basis mask {blade.mask:#b} needs {blade.min_dim} dimensions, "
                    f"only {dimension} available"
                )
        return blade

    @classmethod
    def from_indices(cls, indices: Iterable[int], coefficient: Coefficient = 1) -> 'BasisBlade':
        """Build a blade from the indices of its basis vectors."""
        return cls(mask_from_indices(indices), coefficient)

    @property
    def grade(self) -> int:
        """Number of basis vectors in the blade."""
        return grade_of(self.mask)

    @property
    def min_dim(self) -> int:
        """Smallest N whose basis vectors 0..N-1 cover this blade."""
        return min_dim_of(self.mask)

    def contains_basis(self, index: int) -> bool:
        """Check if this blade contains basis vector `index`."""
        return contains_basis(self.mask, index)

    def basis_indices(self) -> List[int]:
        """All basis vector indices in this blade, ascending."""
        return basis_indices(self.mask)

    def with_coefficient(self, coefficient: Coefficient) -> 'BasisBlade':
        """Copy of this blade carrying a different coefficient."""
        return replace(self, coefficient=coefficient)

    def __repr__(self) -> str:
        return f"BasisBlade(mask={self.mask:#b}, coefficient={self.coefficient!r})"


# === Factory functions for named blades ===

def scalar(coeff: Coefficient = 1) -> BasisBlade:
    """Create a scalar (grade 0) blade."""
    return BasisBlade(SCALAR, coeff)


def e1(coeff: Coefficient = 1) -> BasisBlade:
    """Create e₁."""
    return BasisBlade(E1, coeff)


def e2(coeff: Coefficient = 1) -> BasisBlade:
    """Create e₂."""
    return BasisBlade(E2, coeff)


def e3(coeff: Coefficient = 1) -> BasisBlade:
    """Create e₃."""
    return BasisBlade(E3, coeff)


def e4(coeff: Coefficient = 1) -> BasisBlade:
    """Create e₄ (needs at least 4 dimensions)."""
    return BasisBlade(E4, coeff)


def e12(coeff: Coefficient = 1) -> BasisBlade:
    """Create e₁₂ basis bivector."""
    return BasisBlade(E12, coeff)


def e13(coeff: Coefficient = 1) -> BasisBlade:
    """Create e₁₃ basis bivector."""
    return BasisBlade(E13, coeff)


def e23(coeff: Coefficient = 1) -> BasisBlade:
    """Create e₂₃ basis bivector."""
    return BasisBlade(E23, coeff)


def e14(coeff: Coefficient = 1) -> BasisBlade:
    """Create e₁₄ basis bivector."""
    return BasisBlade(E14, coeff)


def e24(coeff: Coefficient = 1) -> BasisBlade:
    """Create e₂₄ basis bivector."""
    return BasisBlade(E24, coeff)


def e34(coeff: Coefficient = 1) -> BasisBlade:
    """Create e₃₄ basis bivector."""
    return BasisBlade(E34, coeff)


def e123(coeff: Coefficient = 1) -> BasisBlade:
    """Create e₁₂₃ basis trivector (the 3D pseudoscalar)."""
    return BasisBlade(E123, coeff)


def e124(coeff: Coefficient = 1) -> BasisBlade:
    """Create e₁₂₄ basis trivector."""
    return BasisBlade(E124, coeff)


def e134(coeff: Coefficient = 1) -> BasisBlade:
    """Create e₁₃₄ basis trivector."""
    return BasisBlade(E134, coeff)


def e234(coeff: Coefficient = 1) -> BasisBlade:
    """Create e₂₃₄ basis trivector."""
    return BasisBlade(E234, coeff)


def e1234(coeff: Coefficient = 1) -> BasisBlade:
    """Create e₁₂₃₄ (the 4D pseudoscalar)."""
    return BasisBlade(E1234, coeff)
