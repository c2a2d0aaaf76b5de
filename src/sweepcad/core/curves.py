"""
Curve evaluation: parametric space curves sampled into ordered point sequences.

Each curve maps a parameter t in [0, 1] to a ``Sample`` - a 3D point with the
tube radius to sweep at that point. Supported curves:
- Cubic Bezier with smoothstep-blended radius (manifold flow paths)
- Helix with twist, radial profile and optional breathing (channels, fins, ribs)
- Revolution profile along the Z axis (shell and flow-path envelopes)
"""

import math
from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple

from .profiles import lerp, smoothstep

Point3 = Tuple[float, float, float]

TWO_PI = 2.0 * math.pi


@dataclass(frozen=True)
class Sample:
    """A sampled curve point with the sweep radius at that point."""
    point: Point3
    radius: float
    t: float = 0.0


def lerp_point(a: Point3, b: Point3, t: float) -> Point3:
    return (lerp(a[0], b[0], t), lerp(a[1], b[1], t), lerp(a[2], b[2], t))


def distance(a: Point3, b: Point3) -> float:
    return math.sqrt((b[0] - a[0]) ** 2 + (b[1] - a[1]) ** 2 + (b[2] - a[2]) ** 2)


def polar_point(radius: float, angle: float, z: float) -> Point3:
    return (radius * math.cos(angle), radius * math.sin(angle), z)


class ControlCurve:
    """Base class for curves that can be sampled uniformly in t."""

    def evaluate(self, t: float) -> Sample:
        raise NotImplementedError

    def sample(self, segments: int) -> List[Sample]:
        """Sample ``segments + 1`` points with t stepping uniformly over [0, 1].

        A segment count below 1 clamps to a single sample at t=0, which the
        sweeper turns into one sphere.
        """
        if segments < 1:
            return [self.evaluate(0.0)]
        return [self.evaluate(i / segments) for i in range(segments + 1)]


@dataclass(frozen=True)
class BezierCurve(ControlCurve):
    """Cubic Bezier through four control points with radius r0 -> r1."""
    p0: Point3
    p1: Point3
    p2: Point3
    p3: Point3
    r0: float
    r1: float

    def point_at(self, t: float) -> Point3:
        u = 1.0 - t
        b0 = u * u * u
        b1 = 3.0 * u * u * t
        b2 = 3.0 * u * t * t
        b3 = t * t * t
        return tuple(
            b0 * self.p0[i] + b1 * self.p1[i] + b2 * self.p2[i] + b3 * self.p3[i]
            for i in range(3)
        )

    def radius_at(self, t: float) -> float:
        return lerp(self.r0, self.r1, smoothstep(t))

    def evaluate(self, t: float) -> Sample:
        return Sample(point=self.point_at(t), radius=self.radius_at(t), t=t)


@dataclass(frozen=True)
class HelixCurve(ControlCurve):
    """
    Helix around the Z axis.

    angle(t) = start_angle + 2*pi*twists*t, z(t) = lerp(z_start, z_end, t).
    The radial distance is ``radial_profile(z)`` plus an optional
    ``radial_offset(t)``; ``breathing`` scales x/y by (1 + k*sin(2*pi*t)).

    With ``twists == 0`` the curve is a straight line along the profile; with
    ``z_start == z_end`` and ``twists == 1`` it is a closed ring.
    """
    start_angle: float
    z_start: float
    z_end: float
    twists: float
    radial_profile: Callable[[float], float]
    tube_radius: float
    breathing: float = 0.0
    radial_offset: Optional[Callable[[float], float]] = None

    def angle_at(self, t: float) -> float:
        return self.start_angle + TWO_PI * self.twists * t

    def evaluate(self, t: float) -> Sample:
        z = lerp(self.z_start, self.z_end, t)
        angle = self.angle_at(t)
        r = self.radial_profile(z)
        if self.radial_offset is not None:
            r += self.radial_offset(t)
        x, y, _ = polar_point(r, angle, z)
        if self.breathing:
            scale = 1.0 + self.breathing * math.sin(TWO_PI * t)
            x, y = x * scale, y * scale
        return Sample(point=(x, y, z), radius=self.tube_radius, t=t)


@dataclass(frozen=True)
class RevolutionProfile(ControlCurve):
    """Straight axial line whose sweep radius follows a profile function.

    Swept, it approximates a solid of revolution as a stack of thin frustums.
    """
    radius_fn: Callable[[float], float]
    z_start: float
    z_end: float

    def evaluate(self, t: float) -> Sample:
        z = lerp(self.z_start, self.z_end, t)
        return Sample(point=(0.0, 0.0, z), radius=self.radius_fn(z), t=t)
