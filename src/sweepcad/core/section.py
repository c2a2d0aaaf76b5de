"""
Inspection cross-sections.

A slab is a grid of parallel, overlapping capsules in the plane z = section z,
spanning +/- half_span in X and Y. Intersecting the finished solid with the
slab gives a thin slice for visual inspection; it is never fed back into
downstream geometry.
"""

import logging
import math
from typing import List, Optional

from .kernel import GeometryKernel, default_kernel
from .primitives import Capsule, fold_primitives

logger = logging.getLogger(__name__)

# Beam spacing as a multiple of beam radius; below 2 neighbours overlap
SLAB_PITCH_FACTOR = 1.1


def slab_primitives(section) -> List[Capsule]:
    radius = section.thickness_mm / 2
    step = radius * SLAB_PITCH_FACTOR
    half = section.half_span_mm
    count = int(math.floor(2 * half / step + 1e-9)) + 1
    z = section.z_mm
    return [
        Capsule(p0=(-half, -half + i * step, z), p1=(half, -half + i * step, z), r0=radius, r1=radius)
        for i in range(count)
    ]


def create_slab(section, kernel: Optional[GeometryKernel] = None):
    kernel = kernel or default_kernel()
    return fold_primitives(kernel, slab_primitives(section))


def create_cross_section(solid, section, kernel: Optional[GeometryKernel] = None):
    """Intersect ``solid`` with the section slab; the result lies inside ``solid``."""
    kernel = kernel or default_kernel()
    logger.info(f"Creating cross-section at z={section.z_mm:.1f}mm...")
    return kernel.intersect(solid, create_slab(section, kernel))
