"""
Abstract base class for coefficient tables.

Both the dense Multivector and the grade-restricted PackedBlade store their
coefficients in a single 1-D tensor whose length is fixed at construction.
This module holds the behaviour they share: slot bounds checking, exact
zero tests, device/dtype handling and slot-wise arithmetic.

Class Hierarchy:
    BaseCoefficientTable (abstract)
    ├── Multivector              2^N slots, indexed by bitmask
    └── PackedBlade              C(N, G) slots, one grade only
        ├── Vector               G = 1
        ├── Bivector             G = 2
        └── Trivector            G = 3
"""

from abc import ABC, abstractmethod
from typing import Hashable, Tuple

import torch

from .types import Coefficient, DeviceLike, is_index


class BaseCoefficientTable(ABC):
    """
    Abstract base class for fixed-length coefficient tables.

    Subclasses must implement:
        - signature(): Hashable tuple of the type parameters. Two tables
          combine slot-wise only when their signatures match.
        - _new_like(data): Build a table of the same type parameters around
          a new tensor.
    """

    # Used in error messages ("mask", "index", ...)
    slot_name: str = "slot"

    def __init__(self, data: torch.Tensor):
        if data.ndim != 1:
            raise ValueError(f"Expected a 1-D coefficient tensor, got shape {tuple(data.shape)}")
        self.data = data

    @abstractmethod
    def signature(self) -> Tuple[Hashable, ...]:
        """Type parameters that must agree for slot-wise arithmetic."""
        pass

    @abstractmethod
    def _new_like(self, data: torch.Tensor) -> 'BaseCoefficientTable':
        """Wrap `data` in a table with the same type parameters as self."""
        pass

    # === Storage properties ===

    @property
    def num_slots(self) -> int:
        """Number of coefficient slots (fixed for the life of the value)."""
        return self.data.shape[0]

    @property
    def dtype(self) -> torch.dtype:
        return self.data.dtype

    @property
    def device(self) -> torch.device:
        return self.data.device

    def __len__(self) -> int:
        return self.num_slots

    def clone(self) -> 'BaseCoefficientTable':
        """Create an independent copy."""
        return self._new_like(self.data.clone())

    def to(self, device: DeviceLike) -> 'BaseCoefficientTable':
        """Move to specified device."""
        return self._new_like(self.data.to(device, copy=True))

    # === Slot access ===

    def _check_slot(self, slot) -> int:
        """
        Validate a slot index against the table length.

        Negative indices are rejected rather than wrapped.

        Raises:
            IndexError: If slot is not an integer in [0, num_slots)
        """
        if not is_index(slot):
            raise IndexError(f"{self.slot_name} must be an integer, got {slot!r}")
        slot = int(slot)
        if slot < 0 or slot >= self.num_slots:
            raise IndexError(
                f"{self.slot_name} {slot} out of range for {type(self).__name__} "
                f"with {self.num_slots} slots"
            )
        return slot

    def _read(self, slot: int):
        return self.data[slot].item()

    def _check_value(self, value: Coefficient) -> Coefficient:
        """
        Validate a value for storage in this table's dtype.

        Integer and bool tables only accept values that convert exactly;
        integral floats such as 2.0 are returned as int.

        Raises:
            ValueError: If storing value would truncate it
        """
        if self.data.is_floating_point() or self.data.is_complex():
            return value
        if isinstance(value, torch.Tensor):
            value = value.item()
        if isinstance(value, complex):
            raise ValueError(f"Cannot store complex value {value!r} in a {self.dtype} table")
        if isinstance(value, float):
            if not value.is_integer():
                raise ValueError(
                    f"Cannot store {value!r} in a {self.dtype} table without truncation"
                )
            return int(value)
        return value

    def _write(self, slot: int, value: Coefficient) -> None:
        self.data[slot] = self._check_value(value)

    def nonzero_mask(self) -> torch.Tensor:
        """Boolean tensor marking slots that differ from the additive identity."""
        return self.data != 0

    # === Slot-wise arithmetic ===

    def _check_compatible(self, other: 'BaseCoefficientTable') -> None:
        if self.signature() != other.signature():
            raise ValueError(
                f"Cannot combine {type(self).__name__}{self.signature()} "
                f"with {type(other).__name__}{other.signature()}"
            )

    def __add__(self, other: 'BaseCoefficientTable') -> 'BaseCoefficientTable':
        """Slot-wise addition."""
        if not isinstance(other, BaseCoefficientTable):
            return NotImplemented
        self._check_compatible(other)
        return self._new_like(self.data + other.data)

    def __sub__(self, other: 'BaseCoefficientTable') -> 'BaseCoefficientTable':
        """Slot-wise subtraction."""
        if not isinstance(other, BaseCoefficientTable):
            return NotImplemented
        self._check_compatible(other)
        return self._new_like(self.data - other.data)

    def __neg__(self) -> 'BaseCoefficientTable':
        """Negation."""
        return self._new_like(-self.data)

    def __eq__(self, other) -> bool:
        """Exact equality of type parameters and every coefficient."""
        if not isinstance(other, BaseCoefficientTable):
            return NotImplemented
        if self.signature() != other.signature():
            return False
        return bool(torch.equal(self.data, other.data.to(self.device)))

    __hash__ = None
