"""
Algebra module.

Implements the representation layer of a geometric (Clifford) algebra over
N basis vectors: bitmask-identified basis blades, dense 2^N-slot multivectors
with grade bookkeeping, and grade-restricted packed blades sized by the
binomial coefficient.
"""

from .bits import (
    validate_mask,
    grade_of,
    min_dim_of,
    contains_basis,
    basis_indices,
    mask_from_indices,
    masks_of_grade,
    grade_table,
)

from .blade import (
    BasisBlade,
    SCALAR,
    E1, E2, E3, E4,
    E12, E13, E23, E14, E24, E34,
    E123, E124, E134, E234,
    E1234,
    scalar,
    e1, e2, e3, e4,
    e12, e13, e23, e14, e24, e34,
    e123, e124, e134, e234,
    e1234,
)

from .multivector import Multivector

from .packed import (
    binomial,
    PackedBlade,
    Vector,
    Bivector,
    Trivector,
)

__all__ = [
    # Mask derivations
    "validate_mask",
    "grade_of",
    "min_dim_of",
    "contains_basis",
    "basis_indices",
    "mask_from_indices",
    "masks_of_grade",
    "grade_table",
    # Basis blades
    "BasisBlade",
    "SCALAR",
    "E1", "E2", "E3", "E4",
    "E12", "E13", "E23", "E14", "E24", "E34",
    "E123", "E124", "E134", "E234",
    "E1234",
    "scalar",
    "e1", "e2", "e3", "e4",
    "e12", "e13", "e23", "e14", "e24", "e34",
    "e123", "e124", "e134", "e234",
    "e1234",
    # Dense storage
    "Multivector",
    # Packed storage
    "binomial",
    "PackedBlade",
    "Vector",
    "Bivector",
    "Trivector",
]
