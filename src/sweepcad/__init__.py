"""
Sweepcad - Procedural swept-volume solids for additive manufacturing.

Turns a small set of numeric design parameters into a closed, printable solid
(rocket engine shell with flow path, cooling channels and injector face, or a
branching fluid manifold) plus a thin inspection cross-section.

Example:
    >>> from sweepcad.io import get_preset
    >>> from sweepcad.core import EngineGeometry
    >>> from sweepcad.validation import validate_config
    >>>
    >>> config = get_preset("rocket_engine")
    >>> validate_config(config).valid
    True
    >>> engine = EngineGeometry(config)
    >>> engine.export_stl("RocketEngine.stl")

Note: All imports are lazy-loaded. Profile, curve and validation code never
imports build123d; only building a solid does.
"""

__version__ = "1.0.0-alpha"

# Define which names come from which submodule
# All imports are lazy to minimize startup time

_ENUMS = {"ModelKind", "HoleCountPolicy", "ProfileBlend"}

_VALIDATION = {
    "validate_config",
    "validate_engine",
    "validate_manifold",
    "Severity",
    "ValidationMessage",
    "ValidationResult",
}

_IO = {
    "load_config_json",
    "save_config_json",
    "config_from_dict",
    "EngineConfig",
    "ManifoldConfig",
    "NozzleParams",
    "CoolingChannelParams",
    "InjectorParams",
    "RibParams",
    "TwistFinParams",
    "FlowRibParams",
    "GrooveParams",
    "MountParams",
    "SectionParams",
    "PRESETS",
    "get_preset",
    "save_outputs",
}

_CORE = {
    "EngineGeometry",
    "ManifoldGeometry",
    "geometry_for",
    "assemble",
    "AssemblyResult",
    "CompositionPlan",
    "GeometryError",
    "GeometryKernel",
    "default_kernel",
    "NozzleProfile",
    "ChannelDepthProfile",
    "smoothstep",
}

# Cache for lazy-loaded modules
_modules = {}


def __getattr__(name):
    """Lazy load submodules when their attributes are accessed."""
    global _modules

    if name in _ENUMS:
        if "enums" not in _modules:
            from . import enums
            _modules["enums"] = enums
        return getattr(_modules["enums"], name)

    if name in _VALIDATION:
        if "validation" not in _modules:
            from . import validation
            _modules["validation"] = validation
        return getattr(_modules["validation"], name)

    if name in _IO:
        if "io" not in _modules:
            from . import io
            _modules["io"] = io
        return getattr(_modules["io"], name)

    if name in _CORE:
        if "core" not in _modules:
            from . import core
            _modules["core"] = core
        return getattr(_modules["core"], name)

    raise AttributeError(f"module 'sweepcad' has no attribute {name!r}")


__all__ = ["__version__"] + sorted(_ENUMS | _VALIDATION | _IO | _CORE)
