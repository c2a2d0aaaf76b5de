"""
Named model profiles.

Each preset is a complete, validated configuration for one generator variant.
The injector hole-count policy is chosen per profile:
- rocket_engine: per_ring * ring
- functional_rocket_engine: per_ring + 2 * ring
- sculpted_rocket_engine: per_ring + 3 * ring
"""

from typing import Dict

from ..enums import HoleCountPolicy
from .loaders import (
    CoolingChannelParams,
    EngineConfig,
    FlowRibParams,
    GeneratorConfig,
    GrooveParams,
    InjectorParams,
    ManifoldConfig,
    MountParams,
    NozzleParams,
    RibParams,
    SectionParams,
    TwistFinParams,
)


ROCKET_ENGINE = EngineConfig(
    name="RocketEngine",
    nozzle=NozzleParams(
        chamber_radius_mm=30.0,
        chamber_length_mm=100.0,
        throat_radius_mm=15.0,  # critical dimension
        exit_radius_mm=45.0,
        converging_length_mm=40.0,
        diverging_length_mm=120.0,
        wall_thickness_mm=3.0,
        outer_skin_offset_mm=2.0,
    ),
    profile_steps=200,
    cooling=CoolingChannelParams(
        count=24,
        width_mm=2.0,
        depth_min_mm=1.5,
        depth_max_mm=3.0,
        depth_spread_mm2=2000.0,
        start_z_mm=20.0,
        end_offset_mm=10.0,
        steps=150,
    ),
    injector=InjectorParams(
        rings=4,
        holes_per_ring=8,
        hole_radius_mm=1.5,
        depth_mm=5.0,
        face_overlap_mm=1.0,
        hole_policy=HoleCountPolicy.MULTIPLY,
    ),
    ribs=RibParams(
        count=6,
        height_mm=4.0,
        width_mm=6.0,
        start_fraction=0.2,
        region_fraction=0.5,
        beam_fraction=0.5,
        segments=36,
    ),
    section=SectionParams(z_mm=114.0, thickness_mm=4.0, half_span_mm=65.0),
)


FUNCTIONAL_ROCKET_ENGINE = EngineConfig(
    name="FunctionalRocketEngine",
    nozzle=NozzleParams(
        chamber_radius_mm=32.0,
        chamber_length_mm=110.0,
        throat_radius_mm=12.0,
        exit_radius_mm=52.0,
        converging_length_mm=40.0,
        diverging_length_mm=150.0,
        wall_thickness_mm=3.0,
        outer_skin_offset_mm=2.0,
    ),
    profile_steps=240,
    cooling=CoolingChannelParams(
        count=12,
        width_mm=2.2,
        depth_min_mm=1.6,
        depth_max_mm=3.2,
        depth_spread_mm2=1800.0,
        start_z_mm=20.0,
        end_offset_mm=15.0,
        twists=1.35,
        breathing=0.01,
        steps=220,
    ),
    injector=InjectorParams(
        rings=3,
        holes_per_ring=10,
        hole_radius_mm=1.4,
        depth_mm=6.0,
        face_overlap_mm=2.0,
        hole_policy=HoleCountPolicy.PLUS_TWO,
    ),
    ribs=RibParams(
        count=5,
        height_mm=2.5,
        width_mm=6.0,
        start_fraction=0.15,
        region_fraction=0.7,
        inset_fraction=0.35,
        beam_fraction=0.45,
        segments=48,
    ),
    mount=MountParams(
        radius_mm=32.0 + 3.0 + 12.0,  # chamber + wall + flange margin
        thickness_mm=7.0,
        bolt_holes=6,
        bolt_circle_radius_mm=42.0,
        bolt_hole_radius_mm=2.7,
        hole_extension_below_mm=2.0,
        hole_extension_above_mm=4.0,
    ),
    section=SectionParams(z_mm=124.0, thickness_mm=4.0, half_span_mm=72.0),
)


SCULPTED_ROCKET_ENGINE = EngineConfig(
    name="SculptedRocketEngine",
    nozzle=NozzleParams(
        chamber_radius_mm=34.0,
        chamber_length_mm=120.0,
        throat_radius_mm=11.0,
        exit_radius_mm=58.0,
        converging_length_mm=45.0,
        diverging_length_mm=160.0,
        wall_thickness_mm=3.2,
        outer_skin_offset_mm=1.5,
    ),
    profile_steps=260,
    injector=InjectorParams(
        rings=3,
        holes_per_ring=12,
        hole_radius_mm=1.3,
        depth_mm=6.0,
        face_overlap_mm=2.0,
        hole_policy=HoleCountPolicy.PLUS_THREE,
    ),
    twist_fins=TwistFinParams(
        count=36,
        height_mm=4.0,
        width_mm=4.0,
        z_start_mm=90.0,
        z_end_mm=130.0,
        turns=1.25,
        steps=120,
    ),
    flow_ribs=FlowRibParams(count=28, height_mm=2.0, width_mm=4.0),
    grooves=GrooveParams(count=18, depth_mm=1.4, width_mm=2.4),
    mount=MountParams(
        radius_mm=30.0,
        thickness_mm=16.0,
        overlap_mm=6.0,
        blend_fraction=0.6,
        bolt_holes=6,
        bolt_circle_radius_mm=20.0,
        bolt_hole_radius_mm=2.6,
        hole_extension_below_mm=3.0,
        hole_extension_above_mm=3.0,
    ),
    section=SectionParams(z_mm=142.5, thickness_mm=4.0, half_span_mm=83.0),
)


FLUID_MANIFOLD = ManifoldConfig(
    name="FluidManifold",
    section=SectionParams(z_mm=75.0, thickness_mm=3.0, half_span_mm=90.0),
)


PRESETS: Dict[str, GeneratorConfig] = {
    "rocket_engine": ROCKET_ENGINE,
    "functional_rocket_engine": FUNCTIONAL_ROCKET_ENGINE,
    "sculpted_rocket_engine": SCULPTED_ROCKET_ENGINE,
    "fluid_manifold": FLUID_MANIFOLD,
}


def get_preset(name: str) -> GeneratorConfig:
    """
    Get a named model configuration.

    Args:
        name: Preset name (case-insensitive, '-' and '_' interchangeable)

    Returns:
        EngineConfig or ManifoldConfig

    Raises:
        ValueError: If the preset name is unknown
    """
    key = name.lower().replace("-", "_")
    if key not in PRESETS:
        valid = ", ".join(PRESETS.keys())
        raise ValueError(f"Unknown preset '{name}'. Valid presets: {valid}")
    return PRESETS[key]
