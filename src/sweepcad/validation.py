"""
Manufacturability validation rules.

Configuration models already reject non-physical parameters. These checks
look at the geometry the configuration will produce:
- Sweep sampling density (too few samples per radius facets or disconnects a sweep)
- Cooling channel wall margins towards the hot-gas side and the outer skin
- Groove depth against the wall
- Fusion of additive ribs and fins with the shell
- Injector hole and bolt hole spacing
- Manifold channel ascent (support-free printing) and outlet taper
"""

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Sequence

from .core.curves import Sample, distance
from .core.features import (
    FLOW_RIB_INSET,
    FLOW_RIB_SWELL,
    cooling_channel_curves,
    injector_ring_radius,
    nozzle_profile,
)
from .core.manifold import manifold_flow_paths
from .enums import ModelKind

# Thinnest wall left between a channel/groove and a surface before warning (mm)
MIN_WALL_MM = 0.5

# Minimum samples across the converging section for a smooth throat
MIN_CONVERGING_SAMPLES = 8


class Severity(Enum):
    """Validation message severity"""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


@dataclass
class ValidationMessage:
    """A single validation finding"""
    severity: Severity
    code: str
    message: str
    suggestion: Optional[str] = None


@dataclass
class ValidationResult:
    """Complete validation result"""
    valid: bool  # True if no errors
    messages: List[ValidationMessage] = field(default_factory=list)

    @property
    def errors(self) -> List[ValidationMessage]:
        return [m for m in self.messages if m.severity == Severity.ERROR]

    @property
    def warnings(self) -> List[ValidationMessage]:
        return [m for m in self.messages if m.severity == Severity.WARNING]

    @property
    def infos(self) -> List[ValidationMessage]:
        return [m for m in self.messages if m.severity == Severity.INFO]

    @property
    def codes(self) -> List[str]:
        return [m.code for m in self.messages]


def _result(messages: List[ValidationMessage]) -> ValidationResult:
    has_errors = any(m.severity == Severity.ERROR for m in messages)
    return ValidationResult(valid=not has_errors, messages=messages)


def validate_config(config) -> ValidationResult:
    """Validate an EngineConfig or ManifoldConfig."""
    if config.kind is ModelKind.MANIFOLD:
        return validate_manifold(config)
    return validate_engine(config)


def validate_engine(config) -> ValidationResult:
    """
    Validate a rocket engine configuration against manufacturing rules.

    Returns:
        ValidationResult with all findings
    """
    messages: List[ValidationMessage] = []
    messages.extend(_validate_profile_resolution(config))
    messages.extend(_validate_cooling_channels(config))
    messages.extend(_validate_grooves(config))
    messages.extend(_validate_additive_fusion(config))
    messages.extend(_validate_injector(config))
    messages.extend(_validate_mount(config))
    messages.extend(_validate_section(config))
    return _result(messages)


def validate_manifold(config) -> ValidationResult:
    """Validate a fluid manifold configuration."""
    messages: List[ValidationMessage] = []
    messages.extend(_validate_manifold_paths(config))
    messages.extend(_validate_manifold_taper(config))
    messages.extend(_validate_section(config))
    return _result(messages)


def _sweep_density(samples: Sequence[Sample], feature: str) -> List[ValidationMessage]:
    """Compare segment length with tube radius along a sampled sweep."""
    if len(samples) < 2:
        return []
    ratio = max(
        distance(a.point, b.point) / max(min(a.radius, b.radius), 1e-9)
        for a, b in zip(samples, samples[1:])
    )
    if ratio > 2.0:
        return [ValidationMessage(
            severity=Severity.WARNING,
            code="SWEEP_DISCONNECTED",
            message=f"{feature}: segments up to {ratio:.1f}x the tube radius may not overlap",
            suggestion="Increase the step count for this feature",
        )]
    if ratio > 1.0:
        return [ValidationMessage(
            severity=Severity.INFO,
            code="SWEEP_FACETED",
            message=f"{feature}: segments up to {ratio:.1f}x the tube radius will look faceted",
            suggestion="Increase the step count for a smoother sweep",
        )]
    return []


def _validate_profile_resolution(config) -> List[ValidationMessage]:
    nozzle = config.nozzle
    step = nozzle.total_length_mm / config.profile_steps
    across = nozzle.converging_length_mm / step
    if across < MIN_CONVERGING_SAMPLES:
        return [ValidationMessage(
            severity=Severity.WARNING,
            code="PROFILE_COARSE",
            message=f"Only {across:.1f} profile samples across the converging section",
            suggestion=f"Increase profile_steps above "
                       f"{math.ceil(MIN_CONVERGING_SAMPLES * nozzle.total_length_mm / nozzle.converging_length_mm)}",
        )]
    return []


def _validate_cooling_channels(config) -> List[ValidationMessage]:
    cooling = config.cooling
    if cooling is None:
        return []
    messages = []
    profile = nozzle_profile(config)
    curve = cooling_channel_curves(config)[0]
    samples = curve.sample(cooling.steps)
    tube = cooling.width_mm / 2

    hot_margin = math.inf
    skin_margin = math.inf
    min_radial = math.inf
    for s in samples:
        x, y, z = s.point
        radial = math.hypot(x, y)
        min_radial = min(min_radial, radial)
        hot_margin = min(hot_margin, radial - tube - profile.flow_radius(z))
        skin_margin = min(skin_margin, profile.outer_radius(z) - radial - tube)

    if hot_margin <= 0:
        messages.append(ValidationMessage(
            severity=Severity.ERROR,
            code="CHANNEL_BREACHES_FLOW",
            message=f"Cooling channels cut into the flow path (margin {hot_margin:.2f}mm)",
            suggestion="Reduce depth_max_mm or channel width, or thicken the wall",
        ))
    elif hot_margin < MIN_WALL_MM:
        messages.append(ValidationMessage(
            severity=Severity.WARNING,
            code="CHANNEL_HOT_WALL_THIN",
            message=f"Hot-gas wall under the channels is only {hot_margin:.2f}mm",
            suggestion=f"Keep at least {MIN_WALL_MM}mm between channel and flow path",
        ))

    if skin_margin <= 0:
        messages.append(ValidationMessage(
            severity=Severity.ERROR,
            code="CHANNEL_BREACHES_SKIN",
            message=f"Cooling channels break through the outer skin (margin {skin_margin:.2f}mm)",
            suggestion="Increase depth_min_mm or reduce breathing",
        ))
    elif skin_margin < MIN_WALL_MM:
        messages.append(ValidationMessage(
            severity=Severity.WARNING,
            code="CHANNEL_SKIN_THIN",
            message=f"Outer skin over the channels is only {skin_margin:.2f}mm",
        ))

    pitch = 2 * math.pi * min_radial / cooling.count
    if pitch <= cooling.width_mm:
        messages.append(ValidationMessage(
            severity=Severity.ERROR,
            code="CHANNELS_OVERLAP",
            message=f"{cooling.count} channels of {cooling.width_mm}mm do not fit at radius {min_radial:.1f}mm",
            suggestion="Reduce channel count or width",
        ))

    messages.extend(_sweep_density(samples, "Cooling channels"))
    return messages


def _validate_grooves(config) -> List[ValidationMessage]:
    grooves = config.grooves
    if grooves is None:
        return []
    nozzle = config.nozzle
    remaining = nozzle.wall_thickness_mm + nozzle.outer_skin_offset_mm - grooves.depth_mm - grooves.width_mm / 2
    if remaining <= 0:
        return [ValidationMessage(
            severity=Severity.ERROR,
            code="GROOVE_BREACHES_WALL",
            message=f"Grooves cut through the wall (remaining {remaining:.2f}mm)",
            suggestion="Reduce groove depth or width",
        )]
    if remaining < MIN_WALL_MM:
        return [ValidationMessage(
            severity=Severity.WARNING,
            code="GROOVE_WALL_THIN",
            message=f"Only {remaining:.2f}mm of wall remains under the grooves",
        )]
    return []


def _detached(feature: str, offset: float, radius: float) -> List[ValidationMessage]:
    if offset >= radius:
        return [ValidationMessage(
            severity=Severity.WARNING,
            code="FEATURE_DETACHED",
            message=f"{feature} sit {offset:.2f}mm off the skin with {radius:.2f}mm beams and will not fuse",
            suggestion="Lower the radial offset or thicken the beams",
        )]
    return []


def _validate_additive_fusion(config) -> List[ValidationMessage]:
    messages = []
    if config.ribs is not None:
        ribs = config.ribs
        messages.extend(_detached(
            "Structural ribs", ribs.height_mm * ribs.inset_fraction, ribs.height_mm * ribs.beam_fraction
        ))
    if config.twist_fins is not None:
        fins = config.twist_fins
        messages.extend(_detached(
            "Twisted fins", fins.height_mm * fins.radial_fraction, fins.width_mm * fins.beam_fraction
        ))
    if config.flow_ribs is not None:
        ribs = config.flow_ribs
        offset = ribs.height_mm * (FLOW_RIB_INSET + FLOW_RIB_SWELL * (1 + ribs.ripple))
        messages.extend(_detached("Flow ribs", offset, max(ribs.min_radius_mm, ribs.width_mm * 0.35)))
    return messages


def _validate_injector(config) -> List[ValidationMessage]:
    injector = config.injector
    if injector is None:
        return []
    messages = []
    r = injector.hole_radius_mm

    for ring in range(1, injector.rings + 1):
        ring_radius = injector_ring_radius(config, ring)
        holes = injector.holes_for_ring(ring)
        chord = 2 * ring_radius * math.sin(math.pi / holes) if holes > 1 else math.inf
        if chord <= 2 * r:
            messages.append(ValidationMessage(
                severity=Severity.ERROR,
                code="INJECTOR_HOLES_OVERLAP",
                message=f"Ring {ring}: {holes} holes of radius {r}mm overlap at ring radius {ring_radius:.1f}mm",
                suggestion="Reduce holes_per_ring or pick a gentler hole policy",
            ))

    ring_pitch = injector_ring_radius(config, 1)
    if ring_pitch <= 2 * r:
        messages.append(ValidationMessage(
            severity=Severity.WARNING,
            code="INJECTOR_RINGS_MERGE",
            message=f"Ring spacing {ring_pitch:.2f}mm is below the hole diameter {2 * r}mm",
            suggestion="Reduce ring count or hole radius",
        ))

    if config.mount is None:
        messages.append(ValidationMessage(
            severity=Severity.INFO,
            code="INJECTOR_NO_FACE",
            message="No mount/flange: injector bores only cut the open chamber end",
        ))
    return messages


def _validate_mount(config) -> List[ValidationMessage]:
    mount = config.mount
    if mount is None or mount.bolt_holes == 0:
        return []
    messages = []
    r = mount.bolt_hole_radius_mm
    if mount.bolt_holes > 1:
        chord = 2 * mount.bolt_circle_radius_mm * math.sin(math.pi / mount.bolt_holes)
        if chord <= 2 * r:
            messages.append(ValidationMessage(
                severity=Severity.ERROR,
                code="BOLT_HOLES_OVERLAP",
                message=f"{mount.bolt_holes} bolt holes overlap on a {mount.bolt_circle_radius_mm}mm circle",
            ))

    shell_radius = nozzle_profile(config).outer_radius(0.0)
    if mount.bolt_circle_radius_mm - r < shell_radius:
        messages.append(ValidationMessage(
            severity=Severity.INFO,
            code="BOLT_HOLES_BLIND",
            message=f"Bolt circle lies under the shell (radius {shell_radius:.1f}mm); holes are blind from below",
        ))
    return messages


def _validate_section(config) -> List[ValidationMessage]:
    section = config.section
    if section is None:
        return []
    if config.kind is ModelKind.MANIFOLD:
        reach = max(math.hypot(x, y) for x, y in config.outlets) + config.outlet_radius_mm + config.wall_thickness_mm
    else:
        reach = nozzle_profile(config).outer_radius(section.z_mm)
    if section.half_span_mm < reach:
        return [ValidationMessage(
            severity=Severity.WARNING,
            code="SECTION_CLIPPED",
            message=f"Section half span {section.half_span_mm}mm does not cover the body ({reach:.1f}mm)",
            suggestion="Increase section half_span_mm",
        )]
    return []


def _validate_manifold_paths(config) -> List[ValidationMessage]:
    messages = []
    for index, path in enumerate(manifold_flow_paths(config)):
        name = "Trunk" if index == 0 else f"Branch {index}"
        samples = path.sample(config.tube_segments)
        worst = 0.0
        for a, b in zip(samples, samples[1:]):
            dz = b.point[2] - a.point[2]
            length = distance(a.point, b.point)
            if length == 0:
                continue
            if dz <= 0:
                messages.append(ValidationMessage(
                    severity=Severity.WARNING,
                    code="CHANNEL_DESCENDS",
                    message=f"{name} runs level or downward at z={a.point[2]:.1f}mm; it will need support",
                ))
                break
            worst = max(worst, math.degrees(math.acos(min(dz / length, 1.0))))
        else:
            if worst > 60.0:
                messages.append(ValidationMessage(
                    severity=Severity.INFO,
                    code="BRANCH_SHALLOW",
                    message=f"{name} leans {worst:.0f} deg from vertical; check overhang on your printer",
                ))
        messages.extend(_sweep_density(samples, name))
    return messages


def _validate_manifold_taper(config) -> List[ValidationMessage]:
    if config.outlet_radius_mm > config.branch_radius_mm:
        return [ValidationMessage(
            severity=Severity.WARNING,
            code="OUTLET_NOT_TAPERED",
            message=f"Outlet radius {config.outlet_radius_mm}mm exceeds branch radius {config.branch_radius_mm}mm",
            suggestion="Taper branches towards the outlets for balanced outlet velocity",
        )]
    return []
