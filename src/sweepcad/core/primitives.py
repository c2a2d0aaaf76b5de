"""
Primitive records and the sweeper that turns sampled curves into them.

Primitives are plain data: a ``Capsule`` (frustum between two points with
independent end radii) or a ``Sphere``. Feature builders produce ordered
primitive lists; ``fold_primitives`` hands them to a geometry kernel and folds
the resulting solids into one union. Nothing here imports the kernel, so
primitive counts and placement can be checked without building geometry.
"""

import logging
from dataclasses import dataclass
from typing import Iterable, List, Sequence, Union

from .curves import Point3, Sample, distance

logger = logging.getLogger(__name__)

# Segments shorter than this are treated as a single point
DEGENERATE_LENGTH_MM = 1e-6


@dataclass(frozen=True)
class Capsule:
    """Frustum between p0 and p1 with radius r0 at p0 and r1 at p1."""
    p0: Point3
    p1: Point3
    r0: float
    r1: float


@dataclass(frozen=True)
class Sphere:
    center: Point3
    radius: float


Primitive = Union[Capsule, Sphere]


def capsule_or_sphere(p0: Point3, p1: Point3, r0: float, r1: float) -> Primitive:
    """Capsule between two points, or a sphere if the points coincide."""
    if distance(p0, p1) < DEGENERATE_LENGTH_MM:
        return Sphere(center=p0, radius=max(r0, r1))
    return Capsule(p0=p0, p1=p1, r0=r0, r1=r1)


def sweep_primitives(samples: Sequence[Sample], radius_offset: float = 0.0) -> List[Primitive]:
    """
    One primitive per consecutive sample pair, with the pair's radii.

    ``radius_offset`` grows every radius uniformly: a wall-thickness addend
    turns a channel sweep into its thick-walled envelope.

    Degenerate input never reaches the kernel as a zero-length capsule:
    - a single sample becomes one sphere
    - a curve whose samples all coincide becomes one sphere
    - an individual zero-length pair becomes a sphere in its slot

    Raises:
        ValueError: If ``samples`` is empty
    """
    if not samples:
        raise ValueError("Cannot sweep an empty sample sequence")

    first = samples[0]
    if len(samples) == 1 or all(
        distance(first.point, s.point) < DEGENERATE_LENGTH_MM for s in samples[1:]
    ):
        radius = max(s.radius for s in samples) + radius_offset
        return [Sphere(center=first.point, radius=radius)]

    return [
        capsule_or_sphere(a.point, b.point, a.radius + radius_offset, b.radius + radius_offset)
        for a, b in zip(samples, samples[1:])
    ]


def build_primitive(kernel, primitive: Primitive):
    """Create the kernel solid for one primitive record."""
    if isinstance(primitive, Sphere):
        return kernel.make_sphere(primitive.center, primitive.radius)
    return kernel.make_capsule(primitive.p0, primitive.p1, primitive.r0, primitive.r1)


def fold_primitives(kernel, primitives: Iterable[Primitive]):
    """Fold an ordered primitive sequence into a single union solid."""
    solids = [build_primitive(kernel, p) for p in primitives]
    logger.debug(f"Folding {len(solids)} primitives into one solid")
    return kernel.union_all(solids)


def sweep(kernel, samples: Sequence[Sample], radius_offset: float = 0.0):
    """Sweep a sampled curve into one solid (union of its segment primitives)."""
    return fold_primitives(kernel, sweep_primitives(samples, radius_offset))
