"""
Geometry kernel boundary.

Feature builders talk to the kernel only through ``GeometryKernel``: two
primitive constructors, three boolean operations, mesh extraction and STL
export. The production implementation is ``Build123dKernel`` (OpenCascade via
build123d); ``default_kernel()`` imports it lazily so pure profile/curve code
stays importable without build123d.
"""

from functools import reduce
from typing import Optional, Sequence

from .curves import Point3


class GeometryError(RuntimeError):
    """A boolean result is empty, fragmented, or has invalid topology."""


class GeometryKernel:
    """Interface to a volumetric solid modeller.

    Boolean operations never mutate their operands; each returns a new solid.
    Kernel failures propagate to the caller unchanged, and a kernel raises
    ``GeometryError`` rather than returning a result it knows to be broken.
    """

    def make_capsule(self, p0: Point3, p1: Point3, r0: float, r1: float):
        raise NotImplementedError

    def make_sphere(self, center: Point3, radius: float):
        raise NotImplementedError

    def union(self, a, b):
        raise NotImplementedError

    def subtract(self, a, b):
        raise NotImplementedError

    def intersect(self, a, b):
        raise NotImplementedError

    def union_all(self, solids: Sequence):
        """Left fold of ``union`` over an ordered, non-empty solid sequence."""
        if not solids:
            raise ValueError("union_all needs at least one solid")
        return reduce(self.union, solids)

    def solid_count(self, solid) -> int:
        """Number of disconnected solid bodies in ``solid``."""
        raise NotImplementedError

    def to_mesh(self, solid):
        raise NotImplementedError

    def save_stl(self, mesh, path) -> None:
        raise NotImplementedError


_default: Optional[GeometryKernel] = None


def default_kernel() -> GeometryKernel:
    """Shared build123d kernel instance (created on first use)."""
    global _default
    if _default is None:
        from .occ_kernel import Build123dKernel
        _default = Build123dKernel()
    return _default
