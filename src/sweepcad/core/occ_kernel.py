"""
build123d (OpenCascade) implementation of the geometry kernel.

Capsules are frustums with flat caps: a Cylinder when both radii match,
otherwise a Cone, placed on a plane whose Z axis runs from p0 to p1. Each
frustum is stretched by ``joint_overlap`` past both of its end points (radius
extrapolated along its taper), so consecutive sweep segments interpenetrate
instead of meeting on a shared cap disk.

Every boolean result is checked: an empty result raises ``GeometryError``,
and invalid topology is repaired or raises.
"""

import logging
import math
from pathlib import Path
from typing import Sequence, Union

from build123d import (
    Align, Cone, Cylinder, Location, Mesher, Plane, Pos, Sphere, Unit, Vector,
)

from .curves import Point3
from .kernel import GeometryError, GeometryKernel
from .occ_repair import repair_solid
from .primitives import DEGENERATE_LENGTH_MM

logger = logging.getLogger(__name__)

# Mesh settings for STL export
LINEAR_DEFLECTION = 0.01
ANGULAR_DEFLECTION = 0.1

# Segment end extension (mm); capped at a fraction of the segment length
JOINT_OVERLAP_MM = 0.02
JOINT_OVERLAP_MAX_FRACTION = 0.1

_BASE_ALIGN = (Align.CENTER, Align.CENTER, Align.MIN)


class Build123dKernel(GeometryKernel):
    """Geometry kernel backed by build123d Part algebra."""

    def __init__(
        self,
        linear_deflection: float = LINEAR_DEFLECTION,
        angular_deflection: float = ANGULAR_DEFLECTION,
        joint_overlap: float = JOINT_OVERLAP_MM,
    ):
        self.linear_deflection = linear_deflection
        self.angular_deflection = angular_deflection
        self.joint_overlap = joint_overlap

    def make_capsule(self, p0: Point3, p1: Point3, r0: float, r1: float):
        axis = Vector(*p1) - Vector(*p0)
        length = axis.length
        if length < DEGENERATE_LENGTH_MM:
            return self.make_sphere(p0, max(r0, r1))

        extend = min(self.joint_overlap, JOINT_OVERLAP_MAX_FRACTION * length)
        if extend > 0:
            taper = (r1 - r0) / length
            r0 = max(r0 - taper * extend, 0.0)
            r1 = max(r1 + taper * extend, 0.0)
            origin = Vector(*p0) - axis.normalized() * extend
            length += 2 * extend
        else:
            origin = Vector(*p0)

        # OCC cones reject equal radii
        if math.isclose(r0, r1, rel_tol=1e-9, abs_tol=1e-9):
            body = Cylinder(radius=r0, height=length, align=_BASE_ALIGN)
        else:
            body = Cone(bottom_radius=r0, top_radius=r1, height=length, align=_BASE_ALIGN)

        return Location(Plane(origin=origin, z_dir=axis)) * body

    def make_sphere(self, center: Point3, radius: float):
        return Pos(*center) * Sphere(radius=radius)

    def _checked(self, result, operation: str):
        """Reject empty results and repair (or reject) invalid topology."""
        if not result.solids():
            raise GeometryError(f"{operation} produced an empty result")
        if not result.is_valid:
            logger.debug(f"{operation} produced invalid topology, repairing...")
            result = repair_solid(result, operation)
            if not result.is_valid:
                raise GeometryError(f"{operation} produced invalid topology that could not be repaired")
        return result

    def union(self, a, b):
        return self._checked(a + b, "union")

    def subtract(self, a, b):
        return self._checked(a - b, "subtract")

    def intersect(self, a, b):
        return self._checked(a & b, "intersect")

    def union_all(self, solids: Sequence):
        # One multi-argument fuse is far cheaper in OCC than a pairwise chain
        if not solids:
            raise ValueError("union_all needs at least one solid")
        if len(solids) == 1:
            return solids[0]
        return self._checked(solids[0] + list(solids[1:]), f"union of {len(solids)} solids")

    def solid_count(self, solid) -> int:
        return len(solid.solids())

    def to_mesh(self, solid) -> Mesher:
        mesher = Mesher(unit=Unit.MM)
        mesher.add_shape(
            solid,
            linear_deflection=self.linear_deflection,
            angular_deflection=self.angular_deflection,
        )
        return mesher

    def save_stl(self, mesh: Mesher, path: Union[str, Path]) -> None:
        path = Path(path)
        if path.suffix.lower() != ".stl":
            raise ValueError(f"STL output path must end in .stl, got {path}")
        mesh.write(str(path))
        logger.info(f"Wrote {path}")
