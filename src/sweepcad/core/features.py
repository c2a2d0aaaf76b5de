"""
Engine feature generation.

Supports:
- Outer shell and inner flow path (revolution sweeps of the nozzle profile)
- Regenerative cooling channels (straight or helical, variable depth)
- Injector face pattern (central bore plus concentric rings of axial bores)
- Structural ribs (circumferential rings bolted to the shell by struts)
- Twisted fins, sculpted flow ribs and grooves

Every feature has a pure ``*_primitives`` / ``*_curves`` function describing
its placement and a ``create_*`` function that folds it into one kernel solid.
``create_*`` returns None when the feature group is absent from the config.
"""

import logging
import math
from typing import List, Optional

from ..io.loaders import EngineConfig
from .curves import HelixCurve, RevolutionProfile, TWO_PI, polar_point
from .kernel import GeometryKernel, default_kernel
from .primitives import Capsule, Primitive, Sphere, fold_primitives, sweep, sweep_primitives
from .profiles import ChannelDepthProfile, NozzleProfile

logger = logging.getLogger(__name__)

# Flow rib radial build-up, in rib heights above the outer skin
FLOW_RIB_INSET = 0.35
FLOW_RIB_SWELL = 0.2


def nozzle_profile(config: EngineConfig) -> NozzleProfile:
    return NozzleProfile.from_params(config.nozzle)


def revolution_curve(config: EngineConfig) -> RevolutionProfile:
    """Flow-radius profile along the full engine axis."""
    profile = nozzle_profile(config)
    return RevolutionProfile(radius_fn=profile.flow_radius, z_start=0.0, z_end=profile.total_length)


def create_outer_shell(config: EngineConfig, kernel: Optional[GeometryKernel] = None):
    """Solid body: flow profile grown by wall thickness plus skin offset."""
    kernel = kernel or default_kernel()
    nozzle = config.nozzle
    logger.info("Creating outer shell...")
    samples = revolution_curve(config).sample(config.profile_steps)
    return sweep(kernel, samples, nozzle.wall_thickness_mm + nozzle.outer_skin_offset_mm)


def create_inner_flow(config: EngineConfig, kernel: Optional[GeometryKernel] = None):
    """Hot-gas flow path (de Laval profile) to be subtracted from the shell."""
    kernel = kernel or default_kernel()
    logger.info("Creating internal flow path...")
    samples = revolution_curve(config).sample(config.profile_steps)
    return sweep(kernel, samples, 0.0)


# ─── Cooling channels ───────────────────────────────────────────────────────


def channel_depth_profile(config: EngineConfig) -> ChannelDepthProfile:
    cooling = config.cooling
    return ChannelDepthProfile(
        depth_min=cooling.depth_min_mm,
        depth_max=cooling.depth_max_mm,
        throat_z=config.nozzle.throat_z_mm,
        spread=cooling.depth_spread_mm2,
    )


def cooling_channel_curves(config: EngineConfig) -> List[HelixCurve]:
    """One helix per channel, evenly distributed in start angle.

    Channel centreline sits ``depth(z)`` below the outer skin, so channels run
    deepest at the throat.
    """
    cooling = config.cooling
    if cooling is None:
        return []
    profile = nozzle_profile(config)
    depth = channel_depth_profile(config)
    z_end = profile.total_length - cooling.end_offset_mm

    def radial(z: float) -> float:
        return profile.outer_radius(z) - depth.depth(z)

    return [
        HelixCurve(
            start_angle=c * TWO_PI / cooling.count,
            z_start=cooling.start_z_mm,
            z_end=z_end,
            twists=cooling.twists,
            radial_profile=radial,
            tube_radius=cooling.width_mm / 2,
            breathing=cooling.breathing,
        )
        for c in range(cooling.count)
    ]


def create_cooling_channels(config: EngineConfig, kernel: Optional[GeometryKernel] = None):
    """Union of all channel sweeps (one solid, subtracted from the shell)."""
    cooling = config.cooling
    if cooling is None:
        return None
    kernel = kernel or default_kernel()
    kind = "helical" if cooling.twists else "axial"
    logger.info(f"Adding {cooling.count} {kind} regenerative cooling channels...")
    channels = [sweep(kernel, curve.sample(cooling.steps)) for curve in cooling_channel_curves(config)]
    return kernel.union_all(channels)


# ─── Injector face ──────────────────────────────────────────────────────────


def injector_ring_radius(config: EngineConfig, ring: int) -> float:
    injector = config.injector
    usable = config.nozzle.chamber_radius_mm - injector.hole_radius_mm * 3
    return ring * usable / (injector.rings + 1)


def injector_primitives(config: EngineConfig) -> List[Primitive]:
    """Central bore sphere followed by ring bores, innermost ring first.

    Ring ``i`` (from 1) holds ``holes_for_ring(i)`` axial bores from
    z=-depth up to z=face_overlap.
    """
    injector = config.injector
    if injector is None:
        return []
    r = injector.hole_radius_mm
    primitives: List[Primitive] = [Sphere(center=(0.0, 0.0, 0.0), radius=r)]

    for ring in range(1, injector.rings + 1):
        ring_radius = injector_ring_radius(config, ring)
        holes = injector.holes_for_ring(ring)
        for i in range(holes):
            x, y, _ = polar_point(ring_radius, i * TWO_PI / holes, 0.0)
            primitives.append(Capsule(
                p0=(x, y, -injector.depth_mm),
                p1=(x, y, injector.face_overlap_mm),
                r0=r,
                r1=r,
            ))
    return primitives


def create_injector_pattern(config: EngineConfig, kernel: Optional[GeometryKernel] = None):
    if config.injector is None:
        return None
    kernel = kernel or default_kernel()
    logger.info("Adding injector face pattern...")
    logger.debug(f"Injector ring hole counts: {config.injector.ring_hole_counts()}")
    return fold_primitives(kernel, injector_primitives(config))


# ─── Structural ribs ────────────────────────────────────────────────────────


def rib_positions(config: EngineConfig) -> List[float]:
    """Axial rib centres spread over the chamber and part of the converging section."""
    ribs = config.ribs
    nozzle = config.nozzle
    region = nozzle.chamber_length_mm + nozzle.converging_length_mm * ribs.region_fraction
    start = nozzle.chamber_length_mm * ribs.start_fraction
    return [start + i * region / ribs.count for i in range(ribs.count)]


def rib_primitives(config: EngineConfig, z: float) -> List[Primitive]:
    """
    One rib: two circumferential rings at z +/- width/2 joined by axial struts.

    The ring centreline sits ``inset_fraction`` heights above the outer skin
    and the beam radius is ``beam_fraction`` heights, so the rib overlaps the
    shell and fuses with it.
    """
    ribs = config.ribs
    profile = nozzle_profile(config)
    r = profile.outer_radius(z) + ribs.height_mm * ribs.inset_fraction
    beam = ribs.height_mm * ribs.beam_fraction

    def ring(z_ring: float) -> List[Primitive]:
        curve = HelixCurve(
            start_angle=0.0, z_start=z_ring, z_end=z_ring, twists=1.0,
            radial_profile=lambda _z: r, tube_radius=beam,
        )
        return sweep_primitives(curve.sample(ribs.segments))

    lower = ring(z - ribs.width_mm / 2)
    upper = ring(z + ribs.width_mm / 2)
    struts = [
        Capsule(p0=a.p0, p1=b.p0, r0=beam, r1=beam)
        for a, b in zip(lower, upper)
    ]
    return lower + upper + struts


def create_structural_ribs(config: EngineConfig, kernel: Optional[GeometryKernel] = None):
    if config.ribs is None:
        return None
    kernel = kernel or default_kernel()
    logger.info("Adding structural reinforcement ribs...")
    return kernel.union_all([
        fold_primitives(kernel, rib_primitives(config, z)) for z in rib_positions(config)
    ])


# ─── Sculpted surface features ──────────────────────────────────────────────


def twist_fin_curves(config: EngineConfig) -> List[HelixCurve]:
    fins = config.twist_fins
    if fins is None:
        return []
    profile = nozzle_profile(config)

    def radial(z: float) -> float:
        return profile.outer_radius(z) + fins.height_mm * fins.radial_fraction

    return [
        HelixCurve(
            start_angle=i * TWO_PI / fins.count,
            z_start=fins.z_start_mm,
            z_end=fins.z_end_mm,
            twists=fins.turns,
            radial_profile=radial,
            tube_radius=fins.width_mm * fins.beam_fraction,
        )
        for i in range(fins.count)
    ]


def create_twist_fins(config: EngineConfig, kernel: Optional[GeometryKernel] = None):
    fins = config.twist_fins
    if fins is None:
        return None
    kernel = kernel or default_kernel()
    logger.info(f"Adding {fins.count} twisted fins...")
    return kernel.union_all([sweep(kernel, c.sample(fins.steps)) for c in twist_fin_curves(config)])


def flow_rib_curves(config: EngineConfig) -> List[HelixCurve]:
    """Rippled flow lines biased inward so they touch the shell."""
    ribs = config.flow_ribs
    if ribs is None:
        return []
    profile = nozzle_profile(config)
    base = ribs.height_mm * (FLOW_RIB_INSET + FLOW_RIB_SWELL)
    swell = ribs.height_mm * FLOW_RIB_SWELL * ribs.ripple
    tube_radius = max(ribs.min_radius_mm, ribs.width_mm * 0.35)

    def radial(z: float) -> float:
        return profile.outer_radius(z) + base

    curves = []
    for i in range(ribs.count):
        phase = i * TWO_PI / ribs.count

        def ripple(t: float, phase=phase) -> float:
            return swell * math.sin(TWO_PI * ribs.ripple_waves * t + phase)

        curves.append(HelixCurve(
            start_angle=phase,
            z_start=0.0,
            z_end=profile.total_length,
            twists=ribs.turns,
            radial_profile=radial,
            tube_radius=tube_radius,
            radial_offset=ripple,
        ))
    return curves


def create_flow_ribs(config: EngineConfig, kernel: Optional[GeometryKernel] = None):
    ribs = config.flow_ribs
    if ribs is None:
        return None
    kernel = kernel or default_kernel()
    logger.info(f"Adding {ribs.count} sculpted flow ribs...")
    return kernel.union_all([sweep(kernel, c.sample(ribs.steps)) for c in flow_rib_curves(config)])


def groove_curves(config: EngineConfig) -> List[HelixCurve]:
    """Groove centrelines ``depth`` below the outer skin."""
    grooves = config.grooves
    if grooves is None:
        return []
    profile = nozzle_profile(config)

    def radial(z: float) -> float:
        return profile.outer_radius(z) - grooves.depth_mm

    return [
        HelixCurve(
            start_angle=i * TWO_PI / grooves.count,
            z_start=0.0,
            z_end=profile.total_length,
            twists=grooves.turns,
            radial_profile=radial,
            tube_radius=grooves.width_mm / 2,
        )
        for i in range(grooves.count)
    ]


def create_grooves(config: EngineConfig, kernel: Optional[GeometryKernel] = None):
    grooves = config.grooves
    if grooves is None:
        return None
    kernel = kernel or default_kernel()
    logger.info(f"Cutting {grooves.count} surface grooves...")
    return kernel.union_all([sweep(kernel, c.sample(grooves.steps)) for c in groove_curves(config)])
