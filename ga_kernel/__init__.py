"""
GA-Kernel: Representation Kernel for Geometric (Clifford) Algebra

A PyTorch library for the bookkeeping layer of geometric algebra: basis
blade identities, dense multivectors and grade-restricted packed blades.

Key Features:
- Bitmask basis blades with grade / minimum-dimension derivation
- Dense 2^N-slot multivectors with grade projection and grade queries
- Packed single-grade storage sized by the binomial coefficient
- Any torch dtype as coefficient type (integer dtypes for exact arithmetic)

API Design:
- Slot access is bounds-checked; out-of-range masks or indices raise IndexError
- Invalid construction parameters raise ValueError
- Defaults for dtype, device and dimension limits come from utils.Config

Example:
    >>> import ga_kernel
    >>> from ga_kernel.algebra import Multivector, e1, e12
    >>> mv = Multivector.from_blades([e1(2), e12(5)], dimension=3, dtype="int64")
    >>> mv.non_zero_blades()
    [(1, 2), (3, 5)]
    >>> mv.max_grade()
    2
"""

__version__ = "0.1.0"
__author__ = "GA-Kernel Contributors"

from . import core
from . import utils
from . import algebra

from .algebra import (
    BasisBlade,
    Multivector,
    PackedBlade,
    Vector,
    Bivector,
    Trivector,
    binomial,
)

__all__ = [
    "core",
    "utils",
    "algebra",
    "BasisBlade",
    "Multivector",
    "PackedBlade",
    "Vector",
    "Bivector",
    "Trivector",
    "binomial",
]
