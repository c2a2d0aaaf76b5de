"""
Mounting base generation: base plate, boss or flange.

A mount is a large-radius disk below z=0 (optionally reaching ``overlap_mm``
above it so it fuses with the body), an optional blend sphere for peel
strength, and bolt holes evenly spaced on a bolt circle.
"""

import logging
from typing import List, Optional, Tuple

from .curves import TWO_PI, polar_point
from .kernel import GeometryKernel, default_kernel
from .primitives import Capsule, Primitive, Sphere, build_primitive, fold_primitives

logger = logging.getLogger(__name__)


def bolt_hole_positions(mount) -> List[Tuple[float, float]]:
    """(x, y) of each bolt hole, starting on +X and going counter-clockwise."""
    positions = []
    for i in range(mount.bolt_holes):
        x, y, _ = polar_point(mount.bolt_circle_radius_mm, i * TWO_PI / mount.bolt_holes, 0.0)
        positions.append((x, y))
    return positions


def mount_body_primitives(mount) -> List[Primitive]:
    """Disk capsule followed by the blend sphere (if any)."""
    primitives: List[Primitive] = [Capsule(
        p0=(0.0, 0.0, -mount.thickness_mm),
        p1=(0.0, 0.0, mount.overlap_mm),
        r0=mount.radius_mm,
        r1=mount.radius_mm,
    )]
    if mount.blend_fraction > 0:
        primitives.append(Sphere(
            center=(0.0, 0.0, mount.blend_z_mm),
            radius=mount.radius_mm * mount.blend_fraction,
        ))
    return primitives


def bolt_hole_primitives(mount) -> List[Capsule]:
    r = mount.bolt_hole_radius_mm
    z_bottom = -mount.thickness_mm - mount.hole_extension_below_mm
    return [
        Capsule(p0=(x, y, z_bottom), p1=(x, y, mount.hole_extension_above_mm), r0=r, r1=r)
        for x, y in bolt_hole_positions(mount)
    ]


def create_mount(mount, kernel: Optional[GeometryKernel] = None):
    """
    Create the mount solid (additive feature).

    Bolt holes are cut from the mount itself, before it joins the assembly.

    Args:
        mount: MountParams, or None for no mount
        kernel: Geometry kernel (default: build123d)

    Returns:
        Mount solid, or None if ``mount`` is None
    """
    if mount is None:
        return None
    kernel = kernel or default_kernel()
    logger.info(
        f"Creating mount (radius={mount.radius_mm:.1f}mm, thickness={mount.thickness_mm:.1f}mm, "
        f"{mount.bolt_holes} bolt holes)..."
    )
    body = fold_primitives(kernel, mount_body_primitives(mount))
    for hole in bolt_hole_primitives(mount):
        body = kernel.subtract(body, build_primitive(kernel, hole))
    return body
