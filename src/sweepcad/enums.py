"""Type-safe enums for model selection and profile/pattern policies."""

from enum import Enum


class ModelKind(Enum):
    """Which generator a configuration drives"""
    ENGINE = "engine"  # Rocket engine shell (all engine variants)
    MANIFOLD = "manifold"  # Branching fluid manifold


class ProfileBlend(Enum):
    """Easing applied inside each nozzle region"""
    LINEAR = "linear"  # Raw lerp - slope jumps at region seams
    SMOOTHSTEP = "smoothstep"  # t^2(3-2t) - zero slope at seams (C1)
    SMOOTHERSTEP = "smootherstep"  # 6t^5-15t^4+10t^3 - zero slope and curvature (C2)


class HoleCountPolicy(Enum):
    """Injector holes per ring as a function of ring index (starting at 1)"""
    MULTIPLY = "multiply"  # per_ring * ring
    PLUS_TWO = "plus_two"  # per_ring + 2 * ring
    PLUS_THREE = "plus_three"  # per_ring + 3 * ring

    def holes_for_ring(self, per_ring: int, ring: int) -> int:
        if self is HoleCountPolicy.MULTIPLY:
            return per_ring * ring
        if self is HoleCountPolicy.PLUS_TWO:
            return per_ring + 2 * ring
        return per_ring + 3 * ring
