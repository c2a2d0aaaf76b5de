"""Profile functions: pure mappings from axial position to radius or depth.

These are pure calculation functions that don't depend on build123d geometry,
so they can be evaluated and tested without a geometry kernel.
"""

import math
from dataclasses import dataclass

from ..enums import ProfileBlend


def lerp(a: float, b: float, t: float) -> float:
    """Linear interpolation from a (t=0) to b (t=1)."""
    return a + (b - a) * t


def smoothstep(t: float) -> float:
    """Cubic ease t^2(3-2t): zero slope at t=0 and t=1."""
    return t * t * (3.0 - 2.0 * t)


def smootherstep(t: float) -> float:
    """Quintic ease 6t^5-15t^4+10t^3: zero slope and curvature at both ends."""
    return t * t * t * (t * (6.0 * t - 15.0) + 10.0)


def clamp01(t: float) -> float:
    return min(max(t, 0.0), 1.0)


def ease(t: float, blend: ProfileBlend) -> float:
    """Apply the easing selected by ``blend`` to a normalized parameter."""
    if blend is ProfileBlend.SMOOTHSTEP:
        return smoothstep(t)
    if blend is ProfileBlend.SMOOTHERSTEP:
        return smootherstep(t)
    return t


@dataclass(frozen=True)
class NozzleProfile:
    """
    Three-region de Laval flow profile: cylindrical chamber, converging cone,
    diverging cone.

    ``flow_radius`` is the hot-gas side radius. ``outer_radius`` adds the
    structural wall and the cosmetic skin offset.

    Callers must keep ``z`` inside ``[0, total_length]``; positions below the
    chamber start read as chamber radius and positions past the exit read as
    exit radius.
    """
    chamber_radius: float
    chamber_length: float
    throat_radius: float
    exit_radius: float
    converging_length: float
    diverging_length: float
    wall_thickness: float
    outer_skin_offset: float = 0.0
    blend: ProfileBlend = ProfileBlend.SMOOTHSTEP

    @classmethod
    def from_params(cls, nozzle) -> "NozzleProfile":
        """Build from a ``NozzleParams`` configuration record."""
        return cls(
            chamber_radius=nozzle.chamber_radius_mm,
            chamber_length=nozzle.chamber_length_mm,
            throat_radius=nozzle.throat_radius_mm,
            exit_radius=nozzle.exit_radius_mm,
            converging_length=nozzle.converging_length_mm,
            diverging_length=nozzle.diverging_length_mm,
            wall_thickness=nozzle.wall_thickness_mm,
            outer_skin_offset=nozzle.outer_skin_offset_mm,
            blend=nozzle.blend,
        )

    @property
    def throat_z(self) -> float:
        return self.chamber_length + self.converging_length

    @property
    def total_length(self) -> float:
        return self.chamber_length + self.converging_length + self.diverging_length

    def flow_radius(self, z: float) -> float:
        if z < self.chamber_length:
            return self.chamber_radius
        if z < self.throat_z:
            t = (z - self.chamber_length) / self.converging_length
            return lerp(self.chamber_radius, self.throat_radius, ease(t, self.blend))
        t = clamp01((z - self.throat_z) / self.diverging_length)
        return lerp(self.throat_radius, self.exit_radius, ease(t, self.blend))

    def outer_radius(self, z: float) -> float:
        return self.flow_radius(z) + self.wall_thickness + self.outer_skin_offset

    def region_boundaries(self) -> tuple[float, float]:
        """Axial positions of the chamber/converging and throat seams."""
        return (self.chamber_length, self.throat_z)


@dataclass(frozen=True)
class ChannelDepthProfile:
    """
    Cooling channel depth below the outer surface.

    Gaussian bump centred on the throat, where heat flux peaks:
    ``lerp(depth_min, depth_max, exp(-d^2 / spread))``.
    """
    depth_min: float
    depth_max: float
    throat_z: float
    spread: float

    def depth(self, z: float) -> float:
        distance = abs(z - self.throat_z)
        factor = math.exp(-distance * distance / self.spread)
        return lerp(self.depth_min, self.depth_max, factor)
