"""
Tests for engine feature builders.

Placement is checked on the pure ``*_primitives`` / ``*_curves`` functions;
``create_*`` builders run against the recording kernel.
"""

import math
import typing

import pytest

from sweepcad.core.features import (
    FLOW_RIB_INSET,
    FLOW_RIB_SWELL,
    channel_depth_profile,
    cooling_channel_curves,
    create_cooling_channels,
    create_flow_ribs,
    create_grooves,
    create_injector_pattern,
    create_inner_flow,
    create_outer_shell,
    create_structural_ribs,
    create_twist_fins,
    flow_rib_curves,
    groove_curves,
    injector_primitives,
    injector_ring_radius,
    nozzle_profile,
    rib_positions,
    rib_primitives,
    twist_fin_curves,
)
from sweepcad.core.primitives import Capsule, Sphere
from sweepcad.enums import HoleCountPolicy
from sweepcad.core import features, manifold
from sweepcad.io.loaders import EngineConfig, InjectorParams, ManifoldConfig
from tests.helpers.recording_kernel import primitives


def _radial(point):
    return math.hypot(point[0], point[1])


class TestShellAndFlow:
    """Test revolution sweeps for the shell and flow path."""

    def test_flow_path_follows_profile(self, coarse_rocket, kernel):
        flow = create_inner_flow(coarse_rocket, kernel)
        profile = nozzle_profile(coarse_rocket)
        leaves = primitives(flow)
        assert len(leaves) == coarse_rocket.profile_steps
        for leaf in leaves:
            p0, p1, r0, r1 = leaf.args
            assert r0 == pytest.approx(profile.flow_radius(p0[2]))
            assert r1 == pytest.approx(profile.flow_radius(p1[2]))

    def test_shell_grows_by_wall_and_skin(self, coarse_rocket, kernel):
        shell = create_outer_shell(coarse_rocket, kernel)
        profile = nozzle_profile(coarse_rocket)
        for leaf in primitives(shell):
            p0, _, r0, _ = leaf.args
            assert r0 == pytest.approx(profile.outer_radius(p0[2]))

    def test_shell_axial_extent(self, coarse_rocket, kernel):
        leaves = primitives(create_outer_shell(coarse_rocket, kernel))
        assert leaves[0].args[0] == (0.0, 0.0, 0.0)
        assert leaves[-1].args[1][2] == pytest.approx(260.0)


class TestCoolingChannels:
    """Test cooling channel placement."""

    def test_one_curve_per_channel_evenly_spaced(self, rocket_config):
        curves = cooling_channel_curves(rocket_config)
        assert len(curves) == 24
        for i, curve in enumerate(curves):
            assert curve.start_angle == pytest.approx(i * 2 * math.pi / 24)

    def test_straight_channels(self, rocket_config):
        curve = cooling_channel_curves(rocket_config)[3]
        samples = curve.sample(20)
        angles = {round(math.atan2(s.point[1], s.point[0]), 9) for s in samples}
        assert len(angles) == 1

    def test_axial_span(self, rocket_config):
        curve = cooling_channel_curves(rocket_config)[0]
        assert curve.z_start == 20.0
        assert curve.z_end == pytest.approx(250.0)

    def test_channel_sits_depth_below_outer_skin(self, rocket_config):
        profile = nozzle_profile(rocket_config)
        depth = channel_depth_profile(rocket_config)
        for s in cooling_channel_curves(rocket_config)[0].sample(30):
            z = s.point[2]
            assert _radial(s.point) == pytest.approx(profile.outer_radius(z) - depth.depth(z))

    def test_deepest_at_throat(self, rocket_config):
        depth = channel_depth_profile(rocket_config)
        assert depth.depth(rocket_config.nozzle.throat_z_mm) == pytest.approx(3.0)

    def test_channels_stay_inside_wall(self, rocket_config):
        profile = nozzle_profile(rocket_config)
        tube = rocket_config.cooling.width_mm / 2
        for s in cooling_channel_curves(rocket_config)[0].sample(100):
            r = _radial(s.point)
            z = s.point[2]
            assert r - tube > profile.flow_radius(z)
            assert r + tube < profile.outer_radius(z)

    def test_helical_channels_twist(self, functional_config):
        curve = cooling_channel_curves(functional_config)[0]
        assert curve.twists == 1.35
        assert curve.breathing == 0.01

    def test_create_unions_all_channels(self, coarse_rocket, kernel):
        channels = create_cooling_channels(coarse_rocket, kernel)
        assert channels.primitive_count == 24 * coarse_rocket.cooling.steps

    def test_absent_group_returns_none(self, coarse_sculpted, kernel):
        assert cooling_channel_curves(coarse_sculpted) == []
        assert create_cooling_channels(coarse_sculpted, kernel) is None
        assert kernel.calls == []


class TestInjectorPattern:
    """Test injector ring placement and hole-count policies."""

    def test_plus_two_policy_regression(self):
        injector = InjectorParams(
            rings=3, holes_per_ring=10, hole_radius_mm=1.4, depth_mm=6.0,
            hole_policy=HoleCountPolicy.PLUS_TWO,
        )
        assert injector.ring_hole_counts() == [12, 14, 16]

    @pytest.mark.parametrize("policy,expected", [
        (HoleCountPolicy.MULTIPLY, [8, 16, 24, 32]),
        (HoleCountPolicy.PLUS_TWO, [10, 12, 14, 16]),
        (HoleCountPolicy.PLUS_THREE, [11, 14, 17, 20]),
    ])
    def test_policies_increase_with_ring(self, policy, expected):
        injector = InjectorParams(
            rings=4, holes_per_ring=8, hole_radius_mm=1.5, depth_mm=5.0, hole_policy=policy,
        )
        assert injector.ring_hole_counts() == expected

    def test_policy_is_a_plain_function_of_ring(self):
        assert HoleCountPolicy.PLUS_THREE.holes_for_ring(12, 2) == 18

    def test_ring_radius(self, rocket_config):
        # (30 - 3 * 1.5) / (4 + 1) = 5.1
        assert [injector_ring_radius(rocket_config, i) for i in range(1, 5)] == pytest.approx(
            [5.1, 10.2, 15.3, 20.4]
        )

    def test_central_bore_first(self, rocket_config):
        prims = injector_primitives(rocket_config)
        assert prims[0] == Sphere(center=(0.0, 0.0, 0.0), radius=1.5)
        assert all(isinstance(p, Capsule) for p in prims[1:])

    def test_hole_count(self, rocket_config):
        assert len(injector_primitives(rocket_config)) == 1 + 8 + 16 + 24 + 32

    def test_holes_are_axial_bores(self, functional_config):
        for hole in injector_primitives(functional_config)[1:]:
            assert hole.p0[:2] == hole.p1[:2]
            assert hole.p0[2] == -6.0
            assert hole.p1[2] == 2.0

    def test_holes_on_their_ring(self, rocket_config):
        holes = injector_primitives(rocket_config)[1:]
        first_ring = holes[:8]
        assert all(_radial(h.p0) == pytest.approx(5.1) for h in first_ring)
        assert _radial(holes[-1].p0) == pytest.approx(20.4)

    def test_create_injector(self, functional_config, kernel):
        injector = create_injector_pattern(functional_config, kernel)
        assert injector.primitive_count == 1 + 12 + 14 + 16

    def test_absent_injector(self, rocket_config, kernel):
        config = rocket_config.model_copy(update={"injector": None})
        assert injector_primitives(config) == []
        assert create_injector_pattern(config, kernel) is None


class TestStructuralRibs:
    """Test circumferential rib placement."""

    def test_positions(self, rocket_config):
        # start 100 * 0.2, region 100 + 40 * 0.5 = 120 spread over 6 ribs
        assert rib_positions(rocket_config) == pytest.approx([20.0, 40.0, 60.0, 80.0, 100.0, 120.0])

    def test_rib_primitive_count(self, rocket_config):
        assert len(rib_primitives(rocket_config, 40.0)) == 3 * 36

    def test_rib_rings_overlap_shell(self, rocket_config):
        profile = nozzle_profile(rocket_config)
        z = 40.0
        ring = rib_primitives(rocket_config, z)[0]
        centre = _radial(ring.p0)
        assert centre == pytest.approx(profile.outer_radius(z) + 4.0 * 0.35)
        assert centre - ring.r0 < profile.outer_radius(z)

    def test_rings_at_rib_faces(self, rocket_config):
        prims = rib_primitives(rocket_config, 40.0)
        lower, upper, struts = prims[:36], prims[36:72], prims[72:]
        assert all(p.p0[2] == 37.0 for p in lower)
        assert all(p.p0[2] == 43.0 for p in upper)
        assert all(s.p0[2] == 37.0 and s.p1[2] == 43.0 for s in struts)

    def test_create_ribs(self, coarse_rocket, kernel):
        ribs = create_structural_ribs(coarse_rocket, kernel)
        assert ribs.primitive_count == 6 * 3 * coarse_rocket.ribs.segments


class TestSculptedFeatures:
    """Test twisted fins, flow ribs and grooves."""

    def test_twist_fin_band(self, sculpted_config):
        curves = twist_fin_curves(sculpted_config)
        assert len(curves) == 36
        assert curves[0].z_start == 90.0
        assert curves[0].z_end == 130.0
        assert curves[0].twists == 1.25

    def test_twist_fins_overlap_shell(self, sculpted_config):
        profile = nozzle_profile(sculpted_config)
        curve = twist_fin_curves(sculpted_config)[0]
        for s in curve.sample(12):
            assert _radial(s.point) - s.radius < profile.outer_radius(s.point[2])

    def test_flow_ribs_span_engine(self, sculpted_config):
        curves = flow_rib_curves(sculpted_config)
        assert len(curves) == 28
        assert curves[0].z_start == 0.0
        assert curves[0].z_end == pytest.approx(325.0)

    def test_flow_rib_ripple_bounds(self, sculpted_config):
        profile = nozzle_profile(sculpted_config)
        ribs = sculpted_config.flow_ribs
        curve = flow_rib_curves(sculpted_config)[5]
        base = ribs.height_mm * (FLOW_RIB_INSET + FLOW_RIB_SWELL)
        swell = ribs.height_mm * FLOW_RIB_SWELL * ribs.ripple
        for s in curve.sample(50):
            offset = _radial(s.point) - profile.outer_radius(s.point[2])
            assert base - swell - 1e-9 <= offset <= base + swell + 1e-9

    def test_flow_rib_tube_radius(self, sculpted_config):
        assert flow_rib_curves(sculpted_config)[0].tube_radius == pytest.approx(4.0 * 0.35)

    def test_grooves_cut_below_skin(self, sculpted_config):
        profile = nozzle_profile(sculpted_config)
        curve = groove_curves(sculpted_config)[0]
        for s in curve.sample(20):
            radial = _radial(s.point)
            assert radial == pytest.approx(profile.outer_radius(s.point[2]) - 1.4)
            assert radial - s.radius > profile.flow_radius(s.point[2])

    def test_create_sculpted(self, coarse_sculpted, kernel):
        assert create_twist_fins(coarse_sculpted, kernel).primitive_count == 36 * coarse_sculpted.twist_fins.steps
        assert create_flow_ribs(coarse_sculpted, kernel).primitive_count == 28 * coarse_sculpted.flow_ribs.steps
        assert create_grooves(coarse_sculpted, kernel).primitive_count == 18 * coarse_sculpted.grooves.steps

    def test_absent_groups(self, coarse_rocket, kernel):
        assert create_twist_fins(coarse_rocket, kernel) is None
        assert create_flow_ribs(coarse_rocket, kernel) is None
        assert create_grooves(coarse_rocket, kernel) is None
        assert twist_fin_curves(coarse_rocket) == []
        assert kernel.calls == []


class TestBuilderSignatures:
    """Builders declare which configuration they take."""

    @pytest.mark.parametrize("module, expected", [(features, EngineConfig), (manifold, ManifoldConfig)])
    def test_config_parameter_annotated(self, module, expected):
        builders = [
            getattr(module, name) for name in dir(module)
            if name.startswith("create_") and getattr(module, name).__module__ == module.__name__
        ]
        assert builders
        for builder in builders:
            assert typing.get_type_hints(builder)["config"] is expected, builder.__name__
