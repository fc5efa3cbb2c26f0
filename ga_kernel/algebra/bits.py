"""
Bitmask derivations for basis blades.

A basis blade is identified by the set of basis vectors wedged together,
encoded as a bitmask: bit i set <=> basis vector i participates.

    0b000 (0) = scalar
    0b001 (1) = e1
    0b010 (2) = e2
    0b011 (3) = e1 ^ e2
    0b111 (7) = e1 ^ e2 ^ e3

Wedge order is not tracked; the encoding carries no sign or orientation.
All functions here are pure and total over valid masks, including 0.
"""

from functools import lru_cache
import logging
from typing import Iterable, List, Tuple

import torch

from ..core.constants import BASIS_WORD_BITS, MAX_MASK
from ..core.types import Mask, is_index

logger = logging.getLogger(__name__)


def validate_mask(mask) -> Mask:
    """
    Check that `mask` is a representable basis-blade bitmask.

    Raises:
        ValueError: If mask is not an integer in [0, 2^BASIS_WORD_BITS)
    """
    if not is_index(mask):
        raise ValueError(f"Basis mask must be an integer, got {mask!r}")
    mask = int(mask)
    if mask < 0 or mask >= MAX_MASK:
        raise ValueError(
            f"Basis mask {mask} outside [0, 2^{BASIS_WORD_BITS})"
        )
    return mask


def grade_of(mask: Mask) -> int:
    """Grade of the blade: number of participating basis vectors."""
    return bin(mask).count('1')


def min_dim_of(mask: Mask) -> int:
    """
    Minimum embedding dimension: 1 + position of the highest set bit.

    The scalar mask 0 has minimum dimension 0.
    """
    if mask == 0:
        return 0
    pos = 0
    while mask > 1:
        mask >>= 1
        pos += 1
    return pos + 1


def contains_basis(mask: Mask, index: int) -> bool:
    """
    True iff basis vector `index` participates in the blade.

    Raises:
        ValueError: If index is negative
    """
    if index < 0:
        raise ValueError(f"Basis index must be non-negative, got {index}")
    return (mask >> index) & 1 == 1


def basis_indices(mask: Mask) -> List[int]:
    """Indices of the participating basis vectors, ascending."""
    return [i for i in range(BASIS_WORD_BITS) if (mask >> i) & 1]


def mask_from_indices(indices: Iterable[int]) -> Mask:
    """
    Build a mask by OR-ing 1 << i for each index.

    Repeated indices collapse; order does not matter.

    Raises:
        ValueError: If an index is negative or does not fit the mask word
    """
    mask = 0
    for i in indices:
        if not is_index(i) or not 0 <= int(i) < BASIS_WORD_BITS:
            raise ValueError(
                f"Basis index must be an integer in [0, {BASIS_WORD_BITS}), got {i!r}"
            )
        mask |= 1 << int(i)
    return mask


# === Grade tables ===

@lru_cache(maxsize=None)
def masks_of_grade(dimension: int, grade: int) -> Tuple[Mask, ...]:
    """
    All grade-`grade` masks in `dimension` dimensions, ascending.

    This is the slot order of PackedBlade storage. The count equals
    binomial(dimension, grade).
    """
    if grade > dimension:
        return ()
    # Gosper's hack: next larger integer with the same popcount
    limit = 1 << dimension
    result = []
    mask = (1 << grade) - 1
    while mask < limit:
        result.append(mask)
        if mask == 0:
            break
        lowest = mask & -mask
        ripple = mask + lowest
        mask = (((ripple ^ mask) >> 2) // lowest) | ripple
    return tuple(result)


@lru_cache(maxsize=None)
def _grade_table_cpu(dimension: int) -> torch.Tensor:
    logger.debug(f"Building grade table for dimension {dimension}")
    return torch.tensor([grade_of(m) for m in range(1 << dimension)], dtype=torch.long)


def grade_table(dimension: int, device: torch.device = None) -> torch.Tensor:
    """
    Popcount of every mask in [0, 2^dimension), as a long tensor.

    Tables are built once per dimension and cached on the CPU. The returned
    tensor is a fresh copy, so writing into it never affects the cache.
    """
    table = _grade_table_cpu(dimension)
    if device is None:
        return table.clone()
    return table.to(device, copy=True)
