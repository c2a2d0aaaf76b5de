"""
Pytest configuration and shared fixtures for sweepcad tests.
"""

import pytest

from sweepcad.enums import ModelKind
from sweepcad.io.presets import (
    FLUID_MANIFOLD,
    FUNCTIONAL_ROCKET_ENGINE,
    ROCKET_ENGINE,
    SCULPTED_ROCKET_ENGINE,
)
from tests.helpers.recording_kernel import RecordingKernel


def _with_steps(group, **steps):
    return None if group is None else group.model_copy(update=steps)


def coarse(config):
    """Copy of a preset with low sampling counts (same features, fewer primitives)."""
    if config.kind is ModelKind.MANIFOLD:
        return config.model_copy(update={"tube_segments": 8})
    return config.model_copy(update={
        "profile_steps": 16,
        "cooling": _with_steps(config.cooling, steps=40),
        "ribs": _with_steps(config.ribs, segments=8),
        "twist_fins": _with_steps(config.twist_fins, steps=24),
        "flow_ribs": _with_steps(config.flow_ribs, steps=24),
        "grooves": _with_steps(config.grooves, steps=24),
    })


# ─── Kernels ─────────────────────────────────────────────────────────────


@pytest.fixture
def kernel():
    """Fresh recording kernel (expression trees instead of solids)."""
    return RecordingKernel()


# ─── Preset configurations ───────────────────────────────────────────────


@pytest.fixture
def rocket_config():
    return ROCKET_ENGINE


@pytest.fixture
def functional_config():
    return FUNCTIONAL_ROCKET_ENGINE


@pytest.fixture
def sculpted_config():
    return SCULPTED_ROCKET_ENGINE


@pytest.fixture
def manifold_config():
    return FLUID_MANIFOLD


@pytest.fixture(params=["rocket", "functional", "sculpted", "manifold"])
def any_coarse_config(request):
    """Every model variant at low resolution."""
    return coarse({
        "rocket": ROCKET_ENGINE,
        "functional": FUNCTIONAL_ROCKET_ENGINE,
        "sculpted": SCULPTED_ROCKET_ENGINE,
        "manifold": FLUID_MANIFOLD,
    }[request.param])


@pytest.fixture
def coarse_rocket():
    return coarse(ROCKET_ENGINE)


@pytest.fixture
def coarse_functional():
    return coarse(FUNCTIONAL_ROCKET_ENGINE)


@pytest.fixture
def coarse_sculpted():
    return coarse(SCULPTED_ROCKET_ENGINE)


@pytest.fixture
def coarse_manifold():
    return coarse(FLUID_MANIFOLD)
