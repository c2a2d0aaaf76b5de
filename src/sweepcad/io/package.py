"""
Shared output logic: writes the STL set (and optionally the config JSON) for
one generated model.

File naming follows ``<Name>.stl`` and ``<Name>_CrossSection.stl``.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from .loaders import GeneratorConfig, save_config_json

logger = logging.getLogger(__name__)


@dataclass
class OutputFiles:
    """Paths written for one model."""
    shell_stl: Path
    section_stl: Optional[Path] = None
    config_json: Optional[Path] = None


def save_outputs(
    geometry,
    output_dir: Union[str, Path],
    include_section: bool = True,
    save_config: bool = False,
) -> OutputFiles:
    """
    Build (if needed) and write a geometry's output files.

    Args:
        geometry: EngineGeometry or ManifoldGeometry
        output_dir: Directory to write into (created if missing)
        include_section: Also write the cross-section STL when one is configured
        save_config: Also write ``<Name>.json`` with the full configuration

    Returns:
        OutputFiles with the paths written
    """
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    config: GeneratorConfig = geometry.config
    result = geometry.build()

    files = OutputFiles(shell_stl=output_dir / f"{config.name}.stl")
    geometry.export_stl(files.shell_stl)

    if include_section and result.section is not None:
        files.section_stl = output_dir / f"{config.name}_CrossSection.stl"
        geometry.export_section_stl(files.section_stl)

    if save_config:
        files.config_json = output_dir / f"{config.name}.json"
        save_config_json(config, files.config_json)
        logger.info(f"Saved configuration to {files.config_json}")

    return files
