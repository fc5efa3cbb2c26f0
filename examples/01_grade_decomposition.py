"""
Example 01: Blades, Grades & Packed Storage

Demonstrates:
1. Building basis blades from bitmasks and reading their derived properties.
2. Accumulating blades into a dense multivector and querying its grades.
3. Splitting a multivector into grade projections and summing them back.
4. Moving a single grade into binomially-sized packed storage.
"""

import torch

from ga_kernel.algebra import (
    BasisBlade,
    Multivector,
    Bivector,
    Vector,
    binomial,
    scalar,
    e1, e2, e3, e12, e23, e123,
)

# =============================================================================
# 1. Basis Blades
# =============================================================================

print("=== Basis blades ===")
for blade in [scalar(1), e1(1), e23(1), e123(1), BasisBlade.from_indices([0, 5])]:
    print(
        f"{blade!r:45s} grade={blade.grade} min_dim={blade.min_dim} "
        f"indices={blade.basis_indices()}"
    )

# =============================================================================
# 2. Dense Multivector
# =============================================================================

print("\n=== Dense multivector (N=3, int64) ===")
mv = Multivector.from_blades(
    [scalar(4), e1(2), e2(-1), e12(5), e23(3), e123(7)],
    dimension=3,
    dtype=torch.int64,
)
print(f"slots:            {mv.num_slots}")
print(f"non-zero blades:  {mv.non_zero_blades()}")
print(f"grades present:   {mv.grades()}")
print(f"max grade:        {mv.max_grade()}")
print(f"homogeneous:      {mv.is_homogeneous()}")

# =============================================================================
# 3. Grade Decomposition
# =============================================================================

print("\n=== Grade decomposition ===")
total = Multivector(3, dtype=torch.int64)
for k in range(mv.dimension + 1):
    part = mv.grade(k)
    print(f"grade {k}: {part.non_zero_blades()}  homogeneous={part.is_homogeneous()}")
    total = total + part
print(f"re-summed equals original: {total == mv}")

# =============================================================================
# 4. Packed Storage
# =============================================================================

print("\n=== Packed storage ===")
for n in range(1, 7):
    sizes = [binomial(n, k) for k in range(n + 1)]
    print(f"N={n}: dense {1 << n:3d} slots, per-grade packed {sizes}")

bv = Bivector.from_multivector(mv)
print(f"\n{bv!r}  masks={[bin(m) for m in bv.masks()]}")

v = Vector(3, components=[1.0, 2.0, 3.0])
v.z = 10.0
print(f"{v!r}  x={v.x} y={v.y} z={v.z}")
print(f"as multivector: {v.to_multivector().non_zero_blades()}")
