"""
Packed (homogeneous) blades: storage for a single grade only.

A grade-G element of an N-dimensional space has binomial(N, G) basis blades,
so packed storage holds exactly that many coefficients instead of the 2^N
slots of a dense Multivector.

Slot order is ascending bitmask among the grade-G masks. In 3D:

    Vector     (G=1): [e1, e2, e3]        masks 0b001, 0b010, 0b100
    Bivector   (G=2): [e12, e13, e23]     masks 0b011, 0b101, 0b110
    Trivector  (G=3): [e123]              mask  0b111

A grade above the dimension gives binomial(N, G) = 0 slots. Such a value
can be constructed, but every index access fails.
"""

from __future__ import annotations
import logging
from typing import Optional, Sequence, Tuple, Union

import torch

from ..core.base import BaseCoefficientTable
from ..core.constants import (
    MAX_PACKED_DIMENSION,
    GRADE_VECTOR,
    GRADE_BIVECTOR,
    GRADE_TRIVECTOR,
)
from ..core.types import (
    Coefficient,
    DTypeLike,
    DeviceLike,
    Mask,
    resolve_dtype,
    resolve_device,
    validate_count,
)
from .bits import masks_of_grade
from .multivector import Multivector

logger = logging.getLogger(__name__)


def binomial(n: int, k: int) -> int:
    """
    Binomial coefficient C(n, k): the number of grade-k blades in n dimensions.

    Computed with the iterative multiplicative formula in exact integer
    arithmetic. Each partial product is itself a binomial coefficient, so
    the floor division never truncates.

    Returns 0 when k > n and 1 when k is 0 or n.

    Raises:
        ValueError: If n or k is negative or not an integer
    """
    n = validate_count(n, "n")
    k = validate_count(k, "k")
    if k > n:
        return 0
    k = min(k, n - k)
    result = 1
    for i in range(1, k + 1):
        result = result * (n - k + i) // i
    return result


class PackedBlade(BaseCoefficientTable):
    """
    A homogeneous grade-G element of an N-dimensional space.

    Coefficients are stored in the tensor `components` of shape
    (binomial(N, G),). The length is fixed at construction and every index
    access is checked against it, never against 2^N.
    """

    slot_name = "index"

    # Fixed grade of the named subclasses; None means grade is a constructor argument
    GRADE: Optional[int] = None

    def __init__(
        self,
        grade: int,
        dimension: int,
        components: Optional[Union[torch.Tensor, Sequence[Coefficient]]] = None,
        dtype: Optional[DTypeLike] = None,
        device: Optional[DeviceLike] = None,
    ):
        """
        Initialize a packed blade, zero-filled unless components are given.

        Args:
            grade: Grade G of every stored blade
            dimension: Number of basis vectors N
            components: Optional initial coefficients, exactly binomial(N, G) of them
            dtype: Coefficient dtype (default from the active Config)
            device: Storage device (default from the active Config)
        """
        self.grade = validate_count(grade, "grade")
        self.dimension = validate_count(dimension, "dimension", MAX_PACKED_DIMENSION)

        size = binomial(self.dimension, self.grade)
        if size == 0:
            logger.warning(
                f"Grade {self.grade} exceeds dimension {self.dimension}; "
                f"packed blade has no slots"
            )

        if components is None:
            data = torch.zeros(size, dtype=resolve_dtype(dtype), device=resolve_device(device))
        elif isinstance(components, torch.Tensor):
            data = components.to(
                dtype=resolve_dtype(dtype) if dtype is not None else components.dtype,
                device=resolve_device(device) if device is not None else components.device,
                copy=True,
            )
        else:
            data = torch.as_tensor(list(components), dtype=resolve_dtype(dtype), device=resolve_device(device))

        if data.shape != (size,):
            raise ValueError(
                f"Expected {size} components for grade {self.grade} in dimension "
                f"{self.dimension}, got shape {tuple(data.shape)}"
            )
        super().__init__(data)

    @classmethod
    def _build(cls, grade: int, dimension: int, components: torch.Tensor) -> 'PackedBlade':
        if cls.GRADE is None:
            return cls(grade, dimension, components=components)
        if grade != cls.GRADE:
            raise ValueError(f"{cls.__name__} has grade {cls.GRADE}, got {grade}")
        return cls(dimension, components=components)

    @classmethod
    def from_multivector(cls, mv: Multivector, grade: Optional[int] = None) -> 'PackedBlade':
        """
        Pack the grade-k slots of a dense multivector.

        Coefficients of other grades are dropped, as with Multivector.grade(k).
        """
        if grade is None:
            if cls.GRADE is None:
                raise ValueError("grade is required for PackedBlade.from_multivector")
            grade = cls.GRADE
        grade = validate_count(grade, "grade")
        index = torch.tensor(masks_of_grade(mv.dimension, grade), dtype=torch.long, device=mv.device)
        return cls._build(grade, mv.dimension, mv.mv[index].clone())

    def signature(self):
        return ("packed", self.grade, self.dimension, self.dtype)

    def _new_like(self, data: torch.Tensor) -> 'PackedBlade':
        return type(self)._build(self.grade, self.dimension, data)

    @property
    def components(self) -> torch.Tensor:
        """The (binomial(N, G),) coefficient tensor."""
        return self.data

    def masks(self) -> Tuple[Mask, ...]:
        """Bitmask of the blade held in each slot, in slot order."""
        return masks_of_grade(self.dimension, self.grade)

    def __getitem__(self, index: int):
        return self._read(self._check_slot(index))

    def __setitem__(self, index: int, value: Coefficient) -> None:
        self._write(self._check_slot(index), value)

    def to_multivector(self, grade_limit: Optional[int] = None) -> Multivector:
        """
        Expand into dense storage.

        Raises:
            ValueError: If 2^N slots exceed the configured max_dimension, or
                        a non-zero coefficient lies above grade_limit
        """
        result = Multivector(self.dimension, grade_limit=grade_limit, dtype=self.dtype, device=self.device)
        if self.grade > result.grade_limit and bool(self.nonzero_mask().any()):
            raise ValueError(
                f"Grade {self.grade} coefficients exceed the grade limit {result.grade_limit}"
            )
        if self.num_slots:
            index = torch.tensor(self.masks(), dtype=torch.long, device=self.device)
            result.mv[index] = self.data
        return result

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(grade={self.grade}, dimension={self.dimension}, "
            f"components={self.data.tolist()})"
        )


class _FixedGradeBlade(PackedBlade):
    """Packed blade whose grade is fixed by the class."""

    def __init__(
        self,
        dimension: int,
        components: Optional[Union[torch.Tensor, Sequence[Coefficient]]] = None,
        dtype: Optional[DTypeLike] = None,
        device: Optional[DeviceLike] = None,
    ):
        super().__init__(self.GRADE, dimension, components=components, dtype=dtype, device=device)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(dimension={self.dimension}, components={self.data.tolist()})"


class Vector(_FixedGradeBlade):
    """
    Grade-1 packed blade: one coefficient per basis vector.

    In 3D the components are also reachable as x, y, z. For any other
    dimension those attributes do not exist.
    """

    GRADE = GRADE_VECTOR

    def _named(self, index: int, name: str) -> int:
        if self.dimension != 3:
            raise AttributeError(
                f"'{name}' is only defined for 3-dimensional vectors, "
                f"this vector has dimension {self.dimension}"
            )
        return index

    @property
    def x(self):
        return self[self._named(0, 'x')]

    @x.setter
    def x(self, value: Coefficient) -> None:
        self[self._named(0, 'x')] = value

    @property
    def y(self):
        return self[self._named(1, 'y')]

    @y.setter
    def y(self, value: Coefficient) -> None:
        self[self._named(1, 'y')] = value

    @property
    def z(self):
        return self[self._named(2, 'z')]

    @z.setter
    def z(self, value: Coefficient) -> None:
        self[self._named(2, 'z')] = value


class Bivector(_FixedGradeBlade):
    """Grade-2 packed blade."""

    GRADE = GRADE_BIVECTOR


class Trivector(_FixedGradeBlade):
    """Grade-3 packed blade."""

    GRADE = GRADE_TRIVECTOR
