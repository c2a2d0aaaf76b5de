"""
Base class for sweepcad geometry classes.

Provides the shared build cache and export/display methods used by
EngineGeometry and ManifoldGeometry.
"""

import logging
from pathlib import Path
from typing import Optional, Union

from .kernel import GeometryKernel, default_kernel

logger = logging.getLogger(__name__)


class BaseGeometry:
    """Base class providing build caching and export methods.

    Subclasses set the ``_part_name`` class attribute for log messages.
    """

    _part_name: str = "part"

    def __init__(self, config, kernel: Optional[GeometryKernel] = None):
        self.config = config
        self.kernel = kernel or default_kernel()
        # Cache for built geometry (avoids rebuilding on export)
        self._result = None

    def build(self):
        """
        Build the complete assembly.

        Returns:
            AssemblyResult (cached after the first call)
        """
        if self._result is not None:
            return self._result

        from .assembly import assemble
        self._result = assemble(self.config, self.kernel)
        return self._result

    def show(self):
        """Display in OCP viewer (requires ocp_vscode)."""
        result = self.build()
        try:
            from ocp_vscode import show as ocp_show
            shapes = [result.shell] + ([result.section] if result.section is not None else [])
            ocp_show(*shapes)
        except ImportError:
            pass
        return result

    def export_stl(self, filepath: Union[str, Path]):
        """Export the shell to an STL file (builds if not already built)."""
        result = self.build()
        self.kernel.save_stl(self.kernel.to_mesh(result.shell), filepath)
        logger.info(f"Exported {self._part_name} to {filepath}")

    def export_section_stl(self, filepath: Union[str, Path]):
        """Export the inspection cross-section to an STL file.

        Raises:
            ValueError: If the configuration defines no section
        """
        result = self.build()
        if result.section is None:
            raise ValueError(f"{self.config.name} has no cross-section configured")
        self.kernel.save_stl(self.kernel.to_mesh(result.section), filepath)
        logger.info(f"Exported {self._part_name} cross-section to {filepath}")
