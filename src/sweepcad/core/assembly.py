"""
Assembly pipeline: feature solids -> composition plan -> final solid + section.

Composition order is fixed and explicit:

    shell = (base U additive...) - subtractive[0] - subtractive[1] - ...

Additive features (mount, ribs, fins) are unioned before anything is
subtracted, so a channel or bore carved through a region also removes the
material an additive feature put there.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple

from ..enums import ModelKind
from .features import (
    create_cooling_channels,
    create_flow_ribs,
    create_grooves,
    create_injector_pattern,
    create_inner_flow,
    create_outer_shell,
    create_structural_ribs,
    create_twist_fins,
)
from .geometry_base import BaseGeometry
from .kernel import GeometryError, GeometryKernel, default_kernel
from .manifold import base_plate_params, create_manifold_channels, create_manifold_envelope
from .mounting import create_mount
from .section import create_cross_section

logger = logging.getLogger(__name__)

# Stage order for engines; absent features are skipped, order never changes
ENGINE_ADDITIVE_STAGES = ("mount", "ribs", "twist_fins", "flow_ribs")
ENGINE_SUBTRACTIVE_STAGES = ("flow", "channels", "grooves", "injector")

MANIFOLD_ADDITIVE_STAGES = ("base_plate",)
MANIFOLD_SUBTRACTIVE_STAGES = ("channels",)


@dataclass(frozen=True)
class CompositionPlan:
    """Named solids in the order they are combined."""
    base: Any
    additive: Tuple[Tuple[str, Any], ...] = ()
    subtractive: Tuple[Tuple[str, Any], ...] = ()

    @classmethod
    def from_features(
        cls,
        features: Dict[str, Any],
        base: str,
        additive_stages: Tuple[str, ...],
        subtractive_stages: Tuple[str, ...],
    ) -> "CompositionPlan":
        return cls(
            base=features[base],
            additive=tuple((n, features[n]) for n in additive_stages if features.get(n) is not None),
            subtractive=tuple((n, features[n]) for n in subtractive_stages if features.get(n) is not None),
        )

    @property
    def stages(self) -> Tuple[str, ...]:
        return tuple(f"+{n}" for n, _ in self.additive) + tuple(f"-{n}" for n, _ in self.subtractive)


def _require_single_body(body, stage: str, kernel: GeometryKernel):
    count = kernel.solid_count(body)
    if count != 1:
        raise GeometryError(f"Stage '{stage}' left {count} separate solids; expected one connected body")


def compose(plan: CompositionPlan, kernel: GeometryKernel):
    """
    Union the base with every additive solid, then subtract in order.

    Raises:
        GeometryError: If any stage leaves other than one connected body
    """
    body = kernel.union_all([plan.base] + [solid for _, solid in plan.additive])
    _require_single_body(body, f"+{plan.additive[-1][0]}" if plan.additive else "base", kernel)
    for name, solid in plan.subtractive:
        logger.debug(f"Subtracting {name}")
        body = kernel.subtract(body, solid)
        _require_single_body(body, f"-{name}", kernel)
    return body


@dataclass
class AssemblyResult:
    """Final solid plus solids kept for visualization only."""
    name: str
    shell: Any
    section: Optional[Any] = None
    auxiliary: Dict[str, Any] = field(default_factory=dict)
    stages: Tuple[str, ...] = ()


def engine_features(config, kernel: GeometryKernel) -> Dict[str, Any]:
    """Build every engine feature independently (absent groups map to None)."""
    return {
        "outer": create_outer_shell(config, kernel),
        "flow": create_inner_flow(config, kernel),
        "mount": create_mount(config.mount, kernel),
        "ribs": create_structural_ribs(config, kernel),
        "twist_fins": create_twist_fins(config, kernel),
        "flow_ribs": create_flow_ribs(config, kernel),
        "channels": create_cooling_channels(config, kernel),
        "grooves": create_grooves(config, kernel),
        "injector": create_injector_pattern(config, kernel),
    }


def manifold_features(config, kernel: GeometryKernel) -> Dict[str, Any]:
    return {
        "envelope": create_manifold_envelope(config, kernel),
        "base_plate": create_mount(base_plate_params(config), kernel),
        "channels": create_manifold_channels(config, kernel),
    }


def assemble(config, kernel: Optional[GeometryKernel] = None) -> AssemblyResult:
    """
    Build the complete solid for an engine or manifold configuration.

    Deterministic for a given configuration: the same config always yields
    the same primitives in the same combination order.

    Args:
        config: EngineConfig or ManifoldConfig
        kernel: Geometry kernel (default: build123d)

    Returns:
        AssemblyResult with the shell, optional cross-section, and the raw
        channel / flow solids for visualization
    """
    kernel = kernel or default_kernel()
    logger.info(f"Assembling {config.name}...")

    if config.kind is ModelKind.MANIFOLD:
        features = manifold_features(config, kernel)
        plan = CompositionPlan.from_features(
            features, "envelope", MANIFOLD_ADDITIVE_STAGES, MANIFOLD_SUBTRACTIVE_STAGES
        )
        auxiliary = {"channels": features["channels"]}
    else:
        features = engine_features(config, kernel)
        plan = CompositionPlan.from_features(
            features, "outer", ENGINE_ADDITIVE_STAGES, ENGINE_SUBTRACTIVE_STAGES
        )
        auxiliary = {"flow": features["flow"]}
        if features["channels"] is not None:
            auxiliary["channels"] = features["channels"]

    logger.debug(f"Composition stages: {' '.join(plan.stages)}")
    shell = compose(plan, kernel)

    section = None
    if config.section is not None:
        section = create_cross_section(shell, config.section, kernel)

    return AssemblyResult(
        name=config.name,
        shell=shell,
        section=section,
        auxiliary=auxiliary,
        stages=plan.stages,
    )


class EngineGeometry(BaseGeometry):
    """
    Generates a rocket engine shell: de Laval flow path, optional cooling
    channels, injector pattern, ribs, fins, grooves and mounting flange/boss.
    """

    _part_name = "engine"

    def __init__(self, config, kernel: Optional[GeometryKernel] = None):
        if config.kind is not ModelKind.ENGINE:
            raise ValueError(f"EngineGeometry needs an engine config, got '{config.kind.value}'")
        super().__init__(config, kernel)


class ManifoldGeometry(BaseGeometry):
    """Generates a branching fluid manifold with blended junctions and base plate."""

    _part_name = "manifold"

    def __init__(self, config, kernel: Optional[GeometryKernel] = None):
        if config.kind is not ModelKind.MANIFOLD:
            raise ValueError(f"ManifoldGeometry needs a manifold config, got '{config.kind.value}'")
        super().__init__(config, kernel)


def geometry_for(config, kernel: Optional[GeometryKernel] = None) -> BaseGeometry:
    """Geometry generator matching ``config.kind``."""
    if config.kind is ModelKind.MANIFOLD:
        return ManifoldGeometry(config, kernel)
    return EngineGeometry(config, kernel)
