"""
Dense multivectors over an N-dimensional space.

A multivector stores one coefficient per basis blade, 2^N slots in total.
Slot `mask` holds the coefficient of the blade identified by that bitmask,
so slot 0 is always the scalar part. In 3D:

    [1, e1, e2, e12, e3, e13, e23, e123]
     0  1   2   3    4   5    6    7

Grade extraction, non-zero enumeration, homogeneity and max-grade are
computed from the table on demand; nothing derived is stored.

A coefficient counts as zero only when it equals the dtype's additive
identity exactly. Floating-point residues such as 1e-17 are non-zero.
"""

from __future__ import annotations
from typing import Iterable, List, Optional, Sequence, Union

import torch

from ..core.base import BaseCoefficientTable
from ..core.types import (
    BladeTerm,
    Coefficient,
    DTypeLike,
    DeviceLike,
    Mask,
    resolve_dtype,
    resolve_device,
    validate_count,
)
from ..utils.config import get_config
from .bits import _grade_table_cpu, grade_of
from .blade import BasisBlade


class Multivector(BaseCoefficientTable):
    """
    A multivector in N dimensions with up to grade G.

    Coefficients are stored in the tensor `mv` of shape (2^N,). Storage always
    covers all 2^N blades; the grade limit G only restricts which slots may
    hold a value. Writing to a slot whose mask has more than G basis vectors
    raises ValueError.

    The algebra supports:
    - Per-mask coefficient access and blade accumulation
    - Grade projection and grade queries
    - Slot-wise addition, subtraction and negation
    """

    slot_name = "mask"

    def __init__(
        self,
        dimension: int,
        grade_limit: Optional[int] = None,
        dtype: Optional[DTypeLike] = None,
        device: Optional[DeviceLike] = None,
        coefficients: Optional[Union[torch.Tensor, Sequence[Coefficient]]] = None,
    ):
        """
        Initialize a multivector, zero-filled unless coefficients are given.

        Args:
            dimension: Number of basis vectors N
            grade_limit: Highest grade allowed to hold a value (default N)
            dtype: Coefficient dtype (default from the active Config)
            device: Storage device (default from the active Config)
            coefficients: Optional initial table of length 2^N. A tensor is
                          copied, so later writes to it do not show here.
        """
        self.dimension = validate_count(dimension, "dimension", get_config().max_dimension)
        if grade_limit is None:
            grade_limit = self.dimension
        self.grade_limit = validate_count(grade_limit, "grade_limit", self.dimension)

        size = 1 << self.dimension
        if coefficients is None:
            data = torch.zeros(size, dtype=resolve_dtype(dtype), device=resolve_device(device))
        elif isinstance(coefficients, torch.Tensor):
            data = coefficients.to(
                dtype=resolve_dtype(dtype) if dtype is not None else coefficients.dtype,
                device=resolve_device(device) if device is not None else coefficients.device,
                copy=True,
            )
        else:
            data = torch.as_tensor(list(coefficients), dtype=resolve_dtype(dtype), device=resolve_device(device))

        if data.shape != (size,):
            raise ValueError(
                f"Expected {size} coefficients for dimension {self.dimension}, "
                f"got shape {tuple(data.shape)}"
            )
        super().__init__(data)

        if self.grade_limit < self.dimension:
            above = (self._grades() > self.grade_limit) & self.nonzero_mask()
            if bool(above.any()):
                raise ValueError(
                    f"Coefficients above grade limit {self.grade_limit} at masks "
                    f"{torch.nonzero(above).flatten().tolist()}"
                )

    @classmethod
    def from_scalar(
        cls,
        value: Coefficient,
        dimension: int,
        grade_limit: Optional[int] = None,
        dtype: Optional[DTypeLike] = None,
        device: Optional[DeviceLike] = None,
    ) -> 'Multivector':
        """Create a multivector whose only non-zero slot is the scalar part."""
        result = cls(dimension, grade_limit=grade_limit, dtype=dtype, device=device)
        result.set_coefficient(0, value)
        return result

    @classmethod
    def from_blades(
        cls,
        blades: Iterable[BasisBlade],
        dimension: int,
        grade_limit: Optional[int] = None,
        dtype: Optional[DTypeLike] = None,
        device: Optional[DeviceLike] = None,
    ) -> 'Multivector':
        """Create a multivector by accumulating each blade into its slot."""
        result = cls(dimension, grade_limit=grade_limit, dtype=dtype, device=device)
        for blade in blades:
            result.add_blade(blade)
        return result

    def signature(self):
        return ("multivector", self.dimension, self.grade_limit, self.dtype)

    def _new_like(self, data: torch.Tensor) -> 'Multivector':
        return Multivector(self.dimension, grade_limit=self.grade_limit, coefficients=data)

    @property
    def mv(self) -> torch.Tensor:
        """The (2^N,) coefficient tensor."""
        return self.data

    def _grades(self) -> torch.Tensor:
        return _grade_table_cpu(self.dimension).to(self.device)

    def _check_grade(self, mask: Mask) -> None:
        if grade_of(mask) > self.grade_limit:
            raise ValueError(
                f"Mask {mask:#b} has grade {grade_of(mask)}, "
                f"above the grade limit {self.grade_limit}"
            )

    # === Coefficient access ===

    def get_coefficient(self, mask: Mask):
        """
        Get coefficient for a specific basis blade.

        Raises:
            IndexError: If mask is outside [0, 2^N)
        """
        return self._read(self._check_slot(mask))

    def set_coefficient(self, mask: Mask, value: Coefficient) -> None:
        """
        Set coefficient for a specific basis blade.

        Raises:
            IndexError: If mask is outside [0, 2^N)
            ValueError: If the mask's grade exceeds the grade limit
        """
        mask = self._check_slot(mask)
        self._check_grade(mask)
        self._write(mask, value)

    def __getitem__(self, mask: Mask):
        return self.get_coefficient(mask)

    def __setitem__(self, mask: Mask, value: Coefficient) -> None:
        self.set_coefficient(mask, value)

    def add_blade(self, blade: BasisBlade) -> None:
        """
        Add a basis blade's coefficient into the slot at its mask.

        Raises:
            IndexError: If the blade needs more than N dimensions
            ValueError: If the blade's grade exceeds the grade limit, or its
                        coefficient would be truncated by an integer dtype
        """
        mask = self._check_slot(blade.mask)
        self._check_grade(mask)
        self.data[mask] += self._check_value(blade.coefficient)

    # === Grade queries ===

    def scalar(self):
        """Extract the scalar part (slot 0)."""
        return self._read(0)

    def non_zero_blades(self) -> List[BladeTerm]:
        """All (mask, coefficient) pairs with non-zero coefficient, by ascending mask."""
        present = self.nonzero_mask()
        masks = torch.nonzero(present).flatten().tolist()
        values = self.data[present].tolist()
        return list(zip(masks, values))

    def _present_grades(self) -> torch.Tensor:
        return self._grades()[self.nonzero_mask()]

    def grades(self) -> List[int]:
        """Sorted grades that have at least one non-zero coefficient."""
        return torch.unique(self._present_grades()).tolist()

    def max_grade(self) -> int:
        """
        Get the maximum grade present in this multivector.

        By convention the all-zero multivector has max grade 0, the same as
        a pure scalar.
        """
        present = self._present_grades()
        if present.numel() == 0:
            return 0
        return int(present.max())

    def is_homogeneous(self) -> bool:
        """Check if all non-zero coefficients share one grade (zero counts as homogeneous)."""
        return torch.unique(self._present_grades()).numel() <= 1

    def grade(self, k: int) -> 'Multivector':
        """Extract grade-k part of the multivector. Grades outside [0, N] give zero."""
        keep = self._grades() == k
        return self._new_like(torch.where(keep, self.data, torch.zeros_like(self.data)))

    def to_packed(self, k: int) -> 'PackedBlade':
        """Grade-k slots in packed storage; other grades are dropped."""
        from .packed import PackedBlade
        return PackedBlade.from_multivector(self, k)

    def __repr__(self) -> str:
        return (
            f"Multivector(dimension={self.dimension}, grade_limit={self.grade_limit}, "
            f"dtype={self.dtype}, terms={self.non_zero_blades()})"
        )
