"""
Sweepcad Core - swept-volume geometry pipeline.

Profile functions and curve evaluation are pure Python; primitives are plain
records. Solids only appear when a ``GeometryKernel`` builds them, and the
build123d kernel is imported on first use, so everything here imports
without build123d installed.

Example:
    >>> from sweepcad.core import EngineGeometry
    >>> from sweepcad.io import get_preset
    >>>
    >>> engine = EngineGeometry(get_preset("functional_rocket_engine"))
    >>> result = engine.build()
    >>> result.stages
    ('+mount', '+ribs', '-flow', '-channels', '-injector')
"""

from .profiles import (
    lerp,
    smoothstep,
    smootherstep,
    NozzleProfile,
    ChannelDepthProfile,
)
from .curves import Sample, BezierCurve, HelixCurve, RevolutionProfile
from .primitives import Capsule, Sphere, sweep_primitives, fold_primitives, sweep
from .kernel import GeometryError, GeometryKernel, default_kernel
from .assembly import (
    AssemblyResult,
    CompositionPlan,
    EngineGeometry,
    ManifoldGeometry,
    assemble,
    compose,
    geometry_for,
)
from .section import create_cross_section

__all__ = [
    # Profiles
    "lerp",
    "smoothstep",
    "smootherstep",
    "NozzleProfile",
    "ChannelDepthProfile",

    # Curves and primitives
    "Sample",
    "BezierCurve",
    "HelixCurve",
    "RevolutionProfile",
    "Capsule",
    "Sphere",
    "sweep_primitives",
    "fold_primitives",
    "sweep",

    # Kernel
    "GeometryError",
    "GeometryKernel",
    "default_kernel",

    # Assembly
    "AssemblyResult",
    "CompositionPlan",
    "EngineGeometry",
    "ManifoldGeometry",
    "assemble",
    "compose",
    "geometry_for",
    "create_cross_section",
]
