"""
Tests for basis blade identity and mask derivations.

These tests DEFINE how a basis blade is identified:
1. Bitmask encoding (bit i <=> basis vector i)
2. Grade as population count
3. Minimum embedding dimension from the highest set bit
4. Ascending basis index enumeration and its round trip back to the mask
"""

import dataclasses

import pytest
import torch

from ga_kernel.algebra.bits import (
    validate_mask,
    grade_of,
    min_dim_of,
    contains_basis,
    basis_indices,
    mask_from_indices,
    masks_of_grade,
    grade_table,
)
from ga_kernel.algebra.blade import (
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
from ga_kernel.algebra.packed import binomial


ALL_6D_MASKS = range(1 << 6)


# =============================================================================
# Grade
# =============================================================================

class TestGrade:
    """grade(m) is the population count of m."""

    def test_scalar_has_grade_zero(self):
        """The empty mask is the scalar, grade 0."""
        assert grade_of(0) == 0
        assert BasisBlade(0).grade == 0

    def test_grade_is_popcount(self):
        """For every mask in 6D, grade equals the number of set bits."""
        for m in ALL_6D_MASKS:
            assert grade_of(m) == bin(m).count('1')
            assert BasisBlade(m).grade == bin(m).count('1')

    def test_full_word_mask(self):
        """The widest mask has grade 64."""
        assert BasisBlade((1 << 64) - 1).grade == 64


# =============================================================================
# Minimum Embedding Dimension
# =============================================================================

class TestMinDim:
    """min_dim(m) is 1 + index of the highest set bit, 0 for the scalar."""

    def test_scalar_min_dim_is_zero(self):
        """mask 0 has minimum dimension 0 (special case, not an error)."""
        assert min_dim_of(0) == 0
        assert BasisBlade(0).min_dim == 0

    def test_zero_only_for_scalar(self):
        """min_dim(m) == 0 iff m == 0."""
        for m in ALL_6D_MASKS:
            assert (min_dim_of(m) == 0) == (m == 0)

    def test_matches_highest_set_bit(self):
        """min_dim(m) = 1 + highest set bit index."""
        for m in range(1, 1 << 6):
            assert min_dim_of(m) == max(basis_indices(m)) + 1
            assert min_dim_of(m) == m.bit_length()

    def test_known_values(self):
        """e1 needs 1 dimension, e3 needs 3, e1^e4 needs 4."""
        assert e1().min_dim == 1
        assert e3().min_dim == 3
        assert e14().min_dim == 4
        assert e23().min_dim == 3

    def test_highest_bit_of_word(self):
        """Bit 63 gives minimum dimension 64."""
        assert BasisBlade(1 << 63).min_dim == 64


# =============================================================================
# Basis Indices
# =============================================================================

class TestBasisIndices:
    """basis_indices(m) lists set bits in ascending order."""

    def test_scalar_has_no_indices(self):
        """The scalar has an empty index list."""
        assert basis_indices(0) == []
        assert scalar().basis_indices() == []

    def test_known_values(self):
        """0b1011 -> [0, 1, 3]."""
        assert basis_indices(0b1011) == [0, 1, 3]
        assert e23().basis_indices() == [1, 2]

    def test_strictly_ascending(self):
        """Indices are strictly ascending for all masks."""
        for m in ALL_6D_MASKS:
            idx = basis_indices(m)
            assert all(a < b for a, b in zip(idx, idx[1:]))

    def test_round_trip_to_mask(self):
        """OR-ing 1 << i over the indices reproduces the mask exactly."""
        for m in ALL_6D_MASKS:
            rebuilt = 0
            for i in basis_indices(m):
                rebuilt |= 1 << i
            assert rebuilt == m
            assert mask_from_indices(basis_indices(m)) == m

    def test_full_word(self):
        """All 64 indices are enumerated for the widest mask."""
        assert basis_indices((1 << 64) - 1) == list(range(64))

    def test_length_equals_grade(self):
        """Number of indices equals the grade."""
        for m in ALL_6D_MASKS:
            assert len(basis_indices(m)) == grade_of(m)


class TestContainsBasis:
    """Membership test of a basis vector in a blade."""

    def test_membership(self):
        """e1^e3 contains basis vectors 0 and 2 only."""
        blade = e13()
        assert blade.contains_basis(0)
        assert not blade.contains_basis(1)
        assert blade.contains_basis(2)
        assert not blade.contains_basis(3)

    def test_scalar_contains_nothing(self):
        """The scalar contains no basis vector."""
        assert not any(contains_basis(0, i) for i in range(64))

    def test_agrees_with_indices(self):
        """contains_basis(m, i) <=> i in basis_indices(m)."""
        for m in ALL_6D_MASKS:
            for i in range(8):
                assert contains_basis(m, i) == (i in basis_indices(m))

    def test_index_beyond_word_is_absent(self):
        """Indices past the mask word are never set."""
        assert not contains_basis((1 << 64) - 1, 64)

    def test_negative_index_rejected(self):
        """Negative basis index is an error."""
        with pytest.raises(ValueError, match="non-negative"):
            contains_basis(0b1, -1)


# =============================================================================
# Construction
# =============================================================================

class TestBasisBladeConstruction:
    """Tests for the smart constructor and immutability."""

    def test_default_coefficient_is_one(self):
        """Blades default to coefficient 1."""
        assert BasisBlade(E12).coefficient == 1

    def test_coefficient_stored(self):
        """Coefficient is kept as given."""
        assert BasisBlade(E1, 2.5).coefficient == 2.5

    def test_tensor_coefficient(self):
        """0-d tensors are accepted as coefficients."""
        blade = BasisBlade(E2, torch.tensor(3.0))
        assert blade.coefficient.item() == 3.0

    def test_tensor_mask(self):
        """An integer 0-d tensor mask is normalized to int."""
        blade = BasisBlade(torch.tensor(5))
        assert blade.mask == 5
        assert isinstance(blade.mask, int)

    @pytest.mark.parametrize("mask", [-1, 1 << 64])
    def test_out_of_word_masks_rejected(self, mask):
        """Masks outside [0, 2^64) are rejected."""
        with pytest.raises(ValueError, match="outside"):
            BasisBlade(mask)

    @pytest.mark.parametrize("mask", [1.0, True, "3", None])
    def test_non_integer_masks_rejected(self, mask):
        """Masks must be integers."""
        with pytest.raises(ValueError, match="must be an integer"):
            BasisBlade(mask)

    def test_validate_mask_returns_int(self):
        """validate_mask passes valid masks through."""
        assert validate_mask(7) == 7

    def test_create_checks_dimension(self):
        """create() rejects masks that need more dimensions than given."""
        assert BasisBlade.create(E3, 1, dimension=3).mask == E3
        with pytest.raises(ValueError, match="needs 3 dimensions"):
            BasisBlade.create(E3, 1, dimension=2)

    def test_create_scalar_in_zero_dimensions(self):
        """The scalar fits in 0 dimensions."""
        assert BasisBlade.create(SCALAR, 4, dimension=0).grade == 0

    def test_create_rejects_negative_dimension(self):
        """Dimension must be non-negative."""
        with pytest.raises(ValueError):
            BasisBlade.create(E1, 1, dimension=-1)

    def test_from_indices(self):
        """from_indices ignores order and duplicates."""
        blade = BasisBlade.from_indices([2, 0, 2], coefficient=7)
        assert blade.mask == 0b101
        assert blade.coefficient == 7

    def test_from_indices_rejects_out_of_word(self):
        """Basis indices must fit the mask word."""
        with pytest.raises(ValueError):
            BasisBlade.from_indices([64])
        with pytest.raises(ValueError):
            mask_from_indices([-1])

    def test_blade_is_immutable(self):
        """Mask and coefficient cannot be reassigned."""
        blade = e1(1.0)
        with pytest.raises(dataclasses.FrozenInstanceError):
            blade.mask = 2
        with pytest.raises(dataclasses.FrozenInstanceError):
            blade.coefficient = 2.0

    def test_with_coefficient_copies(self):
        """with_coefficient returns a new blade with the same mask."""
        blade = e12(1)
        other = blade.with_coefficient(9)
        assert other.mask == E12
        assert other.coefficient == 9
        assert blade.coefficient == 1

    def test_same_mask_same_derivations(self):
        """Two blades with the same mask agree on grade and min_dim."""
        a, b = BasisBlade(E134, 1.0), BasisBlade(E134, -3.0)
        assert a.grade == b.grade
        assert a.min_dim == b.min_dim
        assert a.basis_indices() == b.basis_indices()

    def test_equality(self):
        """Blades compare by mask and coefficient."""
        assert e1(2) == BasisBlade(E1, 2)
        assert e1(2) != e2(2)
        assert e1(2) != e1(3)

    def test_repr_shows_binary_mask(self):
        """repr renders the mask in binary."""
        assert "0b11" in repr(e12(1))


# =============================================================================
# Named Blades
# =============================================================================

class TestNamedBlades:
    """Factory functions DEFINE the named basis (bit 0 is e1)."""

    def test_named_masks(self):
        """Factories produce the expected bitmasks."""
        pairs = [
            (scalar, SCALAR), (e1, E1), (e2, E2), (e3, E3), (e4, E4),
            (e12, E12), (e13, E13), (e23, E23), (e14, E14), (e24, E24), (e34, E34),
            (e123, E123), (e124, E124), (e134, E134), (e234, E234),
            (e1234, E1234),
        ]
        for func, mask in pairs:
            blade = func(1.0)
            assert blade.mask == mask
            assert blade.coefficient == 1.0

    def test_named_grades(self):
        """Vectors are grade 1, bivectors grade 2, and so on."""
        assert [f().grade for f in (scalar, e1, e2, e3, e4)] == [0, 1, 1, 1, 1]
        assert {f().grade for f in (e12, e13, e23, e14, e24, e34)} == {2}
        assert {f().grade for f in (e123, e124, e134, e234)} == {3}
        assert e1234().grade == 4

    def test_factories_are_documented(self):
        """Every named factory carries a docstring naming its blade."""
        for func in (e14, e24, e34, e124, e134, e234, e12, e123):
            assert func.__doc__
            assert func.__doc__.startswith("Create e")

    def test_bivector_indices(self):
        """e1^e2 is basis vectors 0 and 1."""
        assert E12 == 0b011
        assert e12().basis_indices() == [0, 1]


# =============================================================================
# Grade Tables
# =============================================================================

class TestGradeTables:
    """Helpers that enumerate masks per grade."""

    def test_masks_of_grade_3d(self):
        """Grade-2 masks in 3D are e12, e13, e23 in ascending order."""
        assert masks_of_grade(3, 2) == (E12, E13, E23)
        assert masks_of_grade(3, 1) == (E1, E2, E3)
        assert masks_of_grade(3, 0) == (SCALAR,)
        assert masks_of_grade(3, 3) == (E123,)

    def test_masks_of_grade_above_dimension(self):
        """No masks exist for grade > dimension."""
        assert masks_of_grade(2, 3) == ()

    def test_masks_of_grade_counts_match_binomial(self):
        """Number of grade-k masks is binomial(n, k)."""
        for n in range(9):
            for k in range(n + 2):
                masks = masks_of_grade(n, k)
                assert len(masks) == binomial(n, k)
                assert list(masks) == sorted(masks)
                assert all(grade_of(m) == k and m < (1 << n) for m in masks)

    def test_grade_table(self):
        """grade_table holds the popcount of each mask."""
        table = grade_table(3)
        assert table.tolist() == [0, 1, 1, 2, 1, 2, 2, 3]
        assert table.dtype == torch.long
