"""
Branching fluid manifold generation.

The flow graph is an inlet trunk rising to a split node, then one branch per
outlet. Every edge is a cubic Bezier swept as a tapered tube:
- the exterior envelope sweeps each edge grown by the wall thickness, plus
  blend spheres at the inlet and split nodes to remove stress risers
- the channels sweep the same edges with no offset and are subtracted

Channels ascend from inlet to outlets so the part prints without internal
supports.
"""

import logging
from typing import List, Optional

from ..io.loaders import ManifoldConfig, MountParams
from .curves import BezierCurve, lerp_point
from .kernel import GeometryKernel, default_kernel
from .primitives import Primitive, Sphere, fold_primitives, sweep_primitives

logger = logging.getLogger(__name__)

# Inlet blend sphere uses this share of the junction blend allowance
INLET_BLEND_SHARE = 0.3


def manifold_flow_paths(config: ManifoldConfig) -> List[BezierCurve]:
    """Trunk first, then one branch per outlet in configuration order."""
    inlet = (0.0, 0.0, config.inlet_z_mm)
    trunk_mid = (0.0, 0.0, config.trunk_mid_z_mm)
    split = (0.0, 0.0, config.split_z_mm)

    paths = [BezierCurve(
        p0=inlet,
        p1=lerp_point(inlet, trunk_mid, 0.4),
        p2=lerp_point(trunk_mid, split, 0.6),
        p3=split,
        r0=config.inlet_radius_mm,
        r1=config.trunk_radius_mm,
    )]

    for x, y in config.outlets:
        outlet = (x, y, config.height_mm)
        lead = lerp_point(split, outlet, 0.35)
        mid = lerp_point(split, outlet, 0.7)
        paths.append(BezierCurve(
            p0=split,
            # gentle flare before turn
            p1=(lead[0] * config.flare_factor, lead[1] * config.flare_factor, lead[2]),
            p2=mid,
            p3=outlet,
            r0=config.branch_radius_mm,
            r1=config.outlet_radius_mm,
        ))
    return paths


def junction_spheres(config: ManifoldConfig) -> List[Sphere]:
    """Blend spheres at the inlet and split nodes, sized past the wall."""
    wall = config.wall_thickness_mm
    return [
        Sphere(
            center=(0.0, 0.0, config.inlet_z_mm),
            radius=config.inlet_radius_mm + wall + config.junction_blend_mm * INLET_BLEND_SHARE,
        ),
        Sphere(
            center=(0.0, 0.0, config.split_z_mm),
            radius=config.trunk_radius_mm + wall + config.junction_blend_mm,
        ),
    ]


def envelope_primitives(config: ManifoldConfig) -> List[Primitive]:
    primitives: List[Primitive] = []
    for path in manifold_flow_paths(config):
        primitives.extend(sweep_primitives(path.sample(config.tube_segments), config.wall_thickness_mm))
    return primitives + junction_spheres(config)


def channel_primitives(config: ManifoldConfig) -> List[Primitive]:
    primitives: List[Primitive] = []
    for path in manifold_flow_paths(config):
        primitives.extend(sweep_primitives(path.sample(config.tube_segments)))
    return primitives


def create_manifold_envelope(config: ManifoldConfig, kernel: Optional[GeometryKernel] = None):
    """Union of thick tubes plus blended junctions forming the exterior."""
    kernel = kernel or default_kernel()
    logger.info(f"Creating manifold envelope ({1 + len(config.outlets)} flow paths)...")
    return fold_primitives(kernel, envelope_primitives(config))


def create_manifold_channels(config: ManifoldConfig, kernel: Optional[GeometryKernel] = None):
    """Hollow channels following the flow graph."""
    kernel = kernel or default_kernel()
    logger.info("Creating manifold channels...")
    return fold_primitives(kernel, channel_primitives(config))


def base_plate_params(config: ManifoldConfig) -> MountParams:
    """Printable pad under the inlet, filleted for peel strength."""
    return MountParams(
        radius_mm=config.inlet_radius_mm + config.wall_thickness_mm + config.base_plate_margin_mm,
        thickness_mm=config.base_plate_thickness_mm,
        blend_fraction=config.base_blend_fraction,
        blend_z_mm=0.0,
    )
