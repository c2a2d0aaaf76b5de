"""
Sweepcad IO - configuration models, presets and output files.

Example:
    >>> from sweepcad.io import get_preset, save_config_json, load_config_json
    >>>
    >>> save_config_json(get_preset("fluid_manifold"), "manifold.json")
    >>> config = load_config_json("manifold.json")
"""

from .loaders import (
    GeneratorConfig,
    EngineConfig,
    ManifoldConfig,
    NozzleParams,
    CoolingChannelParams,
    InjectorParams,
    RibParams,
    TwistFinParams,
    FlowRibParams,
    GrooveParams,
    MountParams,
    SectionParams,
    config_from_dict,
    load_config_json,
    save_config_json,
)
from .presets import PRESETS, get_preset
from .package import OutputFiles, save_outputs

__all__ = [
    # Configuration
    "GeneratorConfig",
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

    # JSON
    "config_from_dict",
    "load_config_json",
    "save_config_json",

    # Presets
    "PRESETS",
    "get_preset",

    # Output
    "OutputFiles",
    "save_outputs",
]
