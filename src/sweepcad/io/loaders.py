"""
Configuration models and JSON input/output for generator parameters.

Every model is a frozen Pydantic model: a configuration is read-only for the
whole pipeline, and non-physical values (negative radii, zero-length regions,
rings without holes) are rejected at construction, before any geometry is
built.
"""

import json
from pathlib import Path
from typing import Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator

from ..enums import HoleCountPolicy, ModelKind, ProfileBlend


class _Params(BaseModel):
    model_config = ConfigDict(extra='ignore', frozen=True)


class NozzleParams(_Params):
    """De Laval flow path and wall build-up (all mm)."""
    chamber_radius_mm: float = Field(gt=0)
    chamber_length_mm: float = Field(gt=0)
    throat_radius_mm: float = Field(gt=0)
    exit_radius_mm: float = Field(gt=0)
    converging_length_mm: float = Field(gt=0)
    diverging_length_mm: float = Field(gt=0)
    wall_thickness_mm: float = Field(gt=0)
    outer_skin_offset_mm: float = Field(default=0.0, ge=0)  # cosmetic allowance outside wall
    blend: ProfileBlend = ProfileBlend.SMOOTHSTEP

    @model_validator(mode='after')
    def check_throat(self):
        if self.throat_radius_mm >= self.chamber_radius_mm:
            raise ValueError(
                f"Throat radius ({self.throat_radius_mm}mm) must be smaller than "
                f"chamber radius ({self.chamber_radius_mm}mm)"
            )
        if self.throat_radius_mm >= self.exit_radius_mm:
            raise ValueError(
                f"Throat radius ({self.throat_radius_mm}mm) must be smaller than "
                f"exit radius ({self.exit_radius_mm}mm)"
            )
        return self

    @property
    def total_length_mm(self) -> float:
        return self.chamber_length_mm + self.converging_length_mm + self.diverging_length_mm

    @property
    def throat_z_mm(self) -> float:
        return self.chamber_length_mm + self.converging_length_mm


class CoolingChannelParams(_Params):
    """Regenerative cooling channels evenly spaced around the circumference."""
    count: int = Field(gt=0)
    width_mm: float = Field(gt=0)
    depth_min_mm: float = Field(gt=0)  # at chamber/exit
    depth_max_mm: float = Field(gt=0)  # at throat (highest heat flux)
    depth_spread_mm2: float = Field(default=2000.0, gt=0)
    start_z_mm: float = Field(default=20.0, ge=0)  # start after injector face
    end_offset_mm: float = Field(default=10.0, ge=0)  # stop before exit
    twists: float = 0.0  # turns from start to end, 0 = straight axial
    breathing: float = Field(default=0.0, ge=0, lt=1)
    steps: int = Field(default=150, ge=1)

    @model_validator(mode='after')
    def check_depths(self):
        if self.depth_min_mm > self.depth_max_mm:
            raise ValueError(
                f"Channel depth_min ({self.depth_min_mm}mm) exceeds depth_max ({self.depth_max_mm}mm)"
            )
        return self


class InjectorParams(_Params):
    """Concentric rings of axial injector bores plus one central bore."""
    rings: int = Field(ge=1)
    holes_per_ring: int = Field(ge=0)
    hole_radius_mm: float = Field(gt=0)
    depth_mm: float = Field(gt=0)
    face_overlap_mm: float = Field(default=1.0, ge=0)  # bore reach past z=0 into chamber
    hole_policy: HoleCountPolicy = HoleCountPolicy.MULTIPLY

    @model_validator(mode='after')
    def check_hole_counts(self):
        for ring in range(1, self.rings + 1):
            if self.holes_for_ring(ring) < 1:
                raise ValueError(
                    f"Injector ring {ring} would have no holes "
                    f"(policy={self.hole_policy.value}, holes_per_ring={self.holes_per_ring})"
                )
        return self

    def holes_for_ring(self, ring: int) -> int:
        return self.hole_policy.holes_for_ring(self.holes_per_ring, ring)

    def ring_hole_counts(self) -> list[int]:
        return [self.holes_for_ring(ring) for ring in range(1, self.rings + 1)]


class RibParams(_Params):
    """External circumferential reinforcement ribs along chamber and converging section."""
    count: int = Field(ge=1)
    height_mm: float = Field(gt=0)
    width_mm: float = Field(gt=0)
    start_fraction: float = Field(default=0.2, ge=0)  # first rib at chamber_length * fraction
    region_fraction: float = Field(default=0.5, ge=0)  # of converging length covered
    inset_fraction: float = Field(default=0.35, ge=0)  # rib centre above outer skin, in heights
    beam_fraction: float = Field(default=0.45, gt=0)  # beam radius, in heights
    segments: int = Field(default=36, ge=3)


class TwistFinParams(_Params):
    """Helical fins on an axial band."""
    count: int = Field(ge=1)
    height_mm: float = Field(gt=0)
    width_mm: float = Field(gt=0)
    z_start_mm: float
    z_end_mm: float
    turns: float
    radial_fraction: float = Field(default=0.55, ge=0)
    beam_fraction: float = Field(default=0.6, gt=0)
    steps: int = Field(default=120, ge=1)

    @model_validator(mode='after')
    def check_band(self):
        if self.z_end_mm <= self.z_start_mm:
            raise ValueError(
                f"Fin band end ({self.z_end_mm}mm) must be above its start ({self.z_start_mm}mm)"
            )
        return self


class FlowRibParams(_Params):
    """Rippled helical flow lines over the whole engine length."""
    count: int = Field(ge=1)
    height_mm: float = Field(gt=0)
    width_mm: float = Field(gt=0)
    turns: float = 0.6
    ripple: float = Field(default=0.05, ge=0)
    ripple_waves: float = 3.0
    min_radius_mm: float = Field(default=0.8, gt=0)
    steps: int = Field(default=200, ge=1)


class GrooveParams(_Params):
    """Subtractive helical grooves cut into the outer skin."""
    count: int = Field(ge=1)
    depth_mm: float = Field(gt=0)
    width_mm: float = Field(gt=0)
    turns: float = 0.4
    steps: int = Field(default=200, ge=1)


class MountParams(_Params):
    """Base plate / boss / flange disk below z=0 with an optional bolt circle."""
    radius_mm: float = Field(gt=0)
    thickness_mm: float = Field(gt=0)
    overlap_mm: float = Field(default=0.0, ge=0)  # extension above z=0 to fuse with the body
    blend_fraction: float = Field(default=0.0, ge=0)  # blend sphere radius / mount radius, 0 = none
    blend_z_mm: float = 0.0
    bolt_holes: int = Field(default=0, ge=0)
    bolt_circle_radius_mm: float = Field(default=0.0, ge=0)
    bolt_hole_radius_mm: float = Field(default=2.5, gt=0)
    hole_extension_below_mm: float = Field(default=2.0, ge=0)
    hole_extension_above_mm: float = Field(default=4.0, ge=0)

    @model_validator(mode='after')
    def check_bolt_circle(self):
        if self.bolt_holes == 0:
            return self
        if self.bolt_circle_radius_mm <= 0:
            raise ValueError("Bolt holes require a positive bolt_circle_radius_mm")
        if self.bolt_circle_radius_mm + self.bolt_hole_radius_mm > self.radius_mm:
            raise ValueError(
                f"Bolt circle ({self.bolt_circle_radius_mm}mm) plus hole radius "
                f"({self.bolt_hole_radius_mm}mm) exceeds mount radius ({self.radius_mm}mm)"
            )
        return self


class SectionParams(_Params):
    """Thin inspection slab perpendicular to Z."""
    z_mm: float
    thickness_mm: float = Field(default=4.0, gt=0)
    half_span_mm: float = Field(gt=0)


class EngineConfig(_Params):
    """Complete rocket engine configuration.

    Optional feature groups that are ``None`` are not built.
    """
    kind: ModelKind = ModelKind.ENGINE
    name: str = "RocketEngine"
    nozzle: NozzleParams
    profile_steps: int = Field(default=200, ge=1)
    cooling: Optional[CoolingChannelParams] = None
    injector: Optional[InjectorParams] = None
    ribs: Optional[RibParams] = None
    twist_fins: Optional[TwistFinParams] = None
    flow_ribs: Optional[FlowRibParams] = None
    grooves: Optional[GrooveParams] = None
    mount: Optional[MountParams] = None
    section: Optional[SectionParams] = None

    @model_validator(mode='after')
    def check_engine(self):
        if self.kind is not ModelKind.ENGINE:
            raise ValueError(f"EngineConfig requires kind 'engine', got '{self.kind.value}'")
        total = self.nozzle.total_length_mm
        if self.cooling is not None:
            end = total - self.cooling.end_offset_mm
            if self.cooling.start_z_mm >= end:
                raise ValueError(
                    f"Cooling channels start ({self.cooling.start_z_mm}mm) at or after "
                    f"their end ({end}mm)"
                )
        if self.injector is not None:
            usable = self.nozzle.chamber_radius_mm - 3 * self.injector.hole_radius_mm
            if usable <= 0:
                raise ValueError(
                    f"Injector holes (radius {self.injector.hole_radius_mm}mm) leave no ring "
                    f"space inside chamber radius {self.nozzle.chamber_radius_mm}mm"
                )
        if self.section is not None and not 0 <= self.section.z_mm <= total:
            raise ValueError(f"Section z ({self.section.z_mm}mm) outside engine length 0-{total}mm")
        return self


class ManifoldConfig(_Params):
    """Branching fluid manifold: one inlet trunk splitting into several outlets."""
    kind: ModelKind = ModelKind.MANIFOLD
    name: str = "FluidManifold"
    wall_thickness_mm: float = Field(default=2.5, gt=0)
    junction_blend_mm: float = Field(default=6.0, ge=0)
    base_plate_thickness_mm: float = Field(default=6.0, gt=0)
    base_plate_margin_mm: float = Field(default=12.0, ge=0)
    base_blend_fraction: float = Field(default=0.65, ge=0)
    height_mm: float = Field(default=110.0, gt=0)  # outlet plane

    inlet_radius_mm: float = Field(default=8.0, gt=0)
    trunk_radius_mm: float = Field(default=6.0, gt=0)
    branch_radius_mm: float = Field(default=5.0, gt=0)
    outlet_radius_mm: float = Field(default=4.0, gt=0)

    inlet_z_mm: float = -20.0
    trunk_mid_z_mm: float = 35.0
    split_z_mm: float = 70.0
    outlets: Tuple[Tuple[float, float], ...] = (
        (35.0, 25.0), (-35.0, 25.0), (35.0, -25.0), (-35.0, -25.0),
    )
    flare_factor: float = Field(default=0.6, gt=0)  # lateral pull-in of the first branch handle

    tube_segments: int = Field(default=80, ge=1)
    section: Optional[SectionParams] = None

    @model_validator(mode='after')
    def check_manifold(self):
        if self.kind is not ModelKind.MANIFOLD:
            raise ValueError(f"ManifoldConfig requires kind 'manifold', got '{self.kind.value}'")
        if not self.inlet_z_mm < self.trunk_mid_z_mm < self.split_z_mm < self.height_mm:
            raise ValueError(
                "Flow graph heights must ascend: inlet_z < trunk_mid_z < split_z < height "
                f"(got {self.inlet_z_mm}, {self.trunk_mid_z_mm}, {self.split_z_mm}, {self.height_mm})"
            )
        if not self.outlets:
            raise ValueError("Manifold needs at least one outlet")
        return self


GeneratorConfig = Union[EngineConfig, ManifoldConfig]


def config_from_dict(data: dict) -> GeneratorConfig:
    """Build the configuration model selected by the ``kind`` field.

    Raises:
        ValueError: If ``kind`` is unknown or any parameter is invalid
    """
    kind = ModelKind(data.get('kind', ModelKind.ENGINE.value))
    if kind is ModelKind.MANIFOLD:
        return ManifoldConfig(**data)
    return EngineConfig(**data)


def load_config_json(filepath: Union[str, Path]) -> GeneratorConfig:
    """
    Load a generator configuration from JSON.

    Args:
        filepath: Path to JSON file (optionally wrapped in a "config" key)

    Returns:
        EngineConfig or ManifoldConfig

    Raises:
        FileNotFoundError: If file doesn't exist
        ValueError: If the JSON is malformed or parameters are invalid
    """
    filepath = Path(filepath)

    if not filepath.exists():
        raise FileNotFoundError(f"Config file not found: {filepath}")

    with open(filepath, 'r') as f:
        data = json.load(f)

    if 'config' in data:
        data = data['config']

    return config_from_dict(data)


def save_config_json(config: GeneratorConfig, filepath: Union[str, Path]) -> None:
    """Write a configuration to JSON (enums stored by value)."""
    filepath = Path(filepath)
    filepath.parent.mkdir(parents=True, exist_ok=True)
    with open(filepath, 'w') as f:
        f.write(config.model_dump_json(indent=2))
