"""
Tests for base plate / boss / flange generation.
"""

import math

import pytest

from sweepcad.core.mounting import (
    bolt_hole_positions,
    bolt_hole_primitives,
    create_mount,
    mount_body_primitives,
)
from sweepcad.core.primitives import Capsule, Sphere
from sweepcad.io.loaders import MountParams
from tests.helpers.recording_kernel import subtraction_chain


@pytest.fixture
def flange():
    return MountParams(
        radius_mm=47.0, thickness_mm=7.0, bolt_holes=6, bolt_circle_radius_mm=42.0,
        bolt_hole_radius_mm=2.7, hole_extension_below_mm=2.0, hole_extension_above_mm=4.0,
    )


@pytest.fixture
def boss():
    return MountParams(
        radius_mm=30.0, thickness_mm=16.0, overlap_mm=6.0, blend_fraction=0.6,
        bolt_holes=6, bolt_circle_radius_mm=20.0, bolt_hole_radius_mm=2.6,
    )


class TestBoltCircle:

    def test_evenly_spaced(self, flange):
        positions = bolt_hole_positions(flange)
        assert len(positions) == 6
        assert positions[0] == pytest.approx((42.0, 0.0))
        for i, (x, y) in enumerate(positions):
            assert math.hypot(x, y) == pytest.approx(42.0)
            assert math.atan2(y, x) % (2 * math.pi) == pytest.approx(i * math.pi / 3, abs=1e-9)

    def test_hole_span(self, flange):
        holes = bolt_hole_primitives(flange)
        assert all(h.p0[2] == -9.0 and h.p1[2] == 4.0 for h in holes)
        assert all(h.r0 == h.r1 == 2.7 for h in holes)

    def test_no_holes(self):
        plate = MountParams(radius_mm=26.0, thickness_mm=6.0)
        assert bolt_hole_positions(plate) == []


class TestMountBody:

    def test_flange_is_single_disk(self, flange):
        (disk,) = mount_body_primitives(flange)
        assert isinstance(disk, Capsule)
        assert disk.p0 == (0.0, 0.0, -7.0)
        assert disk.p1 == (0.0, 0.0, 0.0)
        assert disk.r0 == disk.r1 == 47.0

    def test_boss_overlap_and_blend(self, boss):
        disk, blend = mount_body_primitives(boss)
        assert disk.p1 == (0.0, 0.0, 6.0)
        assert isinstance(blend, Sphere)
        assert blend.center == (0.0, 0.0, 0.0)
        assert blend.radius == pytest.approx(18.0)


class TestCreateMount:

    def test_holes_subtracted_in_order(self, flange, kernel):
        solid = create_mount(flange, kernel)
        body, holes = subtraction_chain(solid)
        assert body.op == "capsule"
        assert len(holes) == 6
        for hole, (x, y) in zip(holes, bolt_hole_positions(flange)):
            assert hole.args[0][:2] == pytest.approx((x, y))

    def test_plain_plate_has_no_subtraction(self, kernel):
        solid = create_mount(MountParams(radius_mm=26.0, thickness_mm=6.0, blend_fraction=0.65), kernel)
        assert solid.op == "union"
        assert "subtract" not in kernel.calls

    def test_none_mount(self, kernel):
        assert create_mount(None, kernel) is None
        assert kernel.calls == []


class TestMountValidation:

    def test_bolt_circle_must_fit(self):
        with pytest.raises(ValueError, match="exceeds mount radius"):
            MountParams(radius_mm=30.0, thickness_mm=5.0, bolt_holes=4, bolt_circle_radius_mm=29.0)

    def test_bolt_holes_need_circle(self):
        with pytest.raises(ValueError, match="bolt_circle_radius_mm"):
            MountParams(radius_mm=30.0, thickness_mm=5.0, bolt_holes=4)
