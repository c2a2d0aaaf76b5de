"""Tests that the pure pipeline works without loading build123d.

Profiles, curves, primitives, configuration and validation never need the
geometry kernel; only building a solid with the default kernel imports it.
"""

import subprocess
import sys

import pytest


def _python(code):
    return subprocess.run([sys.executable, "-c", code], capture_output=True, text=True)


def test_pure_modules_do_not_import_build123d():
    result = _python(
        "import sys\n"
        "import sweepcad.core, sweepcad.io, sweepcad.validation\n"
        "from sweepcad.io import get_preset\n"
        "from sweepcad.validation import validate_config\n"
        "assert validate_config(get_preset('rocket_engine')).valid\n"
        "assert 'build123d' not in sys.modules, 'build123d imported eagerly'\n"
    )
    assert result.returncode == 0, result.stderr


def test_lazy_top_level_attributes():
    import sweepcad

    assert sweepcad.__version__
    assert sweepcad.get_preset("fluid_manifold").name == "FluidManifold"
    assert sweepcad.HoleCountPolicy.PLUS_TWO.holes_for_ring(10, 3) == 16
    assert callable(sweepcad.validate_config)
    assert sweepcad.EngineGeometry.__name__ == "EngineGeometry"


def test_unknown_top_level_attribute():
    import sweepcad

    with pytest.raises(AttributeError):
        sweepcad.NotAThing
