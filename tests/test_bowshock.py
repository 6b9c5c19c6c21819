"""
Tests for the Wilkin (1996) bow shock geometry.

Covers the shape function and its edge-angle policy, the single R_0
derivation, the 2D profile, the triangulated surface, the inside test,
and the near-apex parabolic approximation.
"""

import math

import numpy as np
import pytest

from physics.bowshock import (
    INSIDE_CORE_RADIUS,
    SHOCK_ANGLE_EPS,
    inside_shock,
    parabolic_approx,
    shock_profile,
    shock_radius,
    standoff_radius,
    surface_sample,
)

R0 = 1.2


class TestShockRadius:

    def test_positive_over_open_interval(self):
        for k in range(1, 400):
            theta = math.pi * k / 400
            assert shock_radius(theta, R0) > 0

    def test_apex_returns_r0(self):
        assert shock_radius(0.0, R0) == R0
        assert shock_radius(SHOCK_ANGLE_EPS, R0) == R0

    def test_continuous_at_apex(self):
        """Just past the apex cutoff the closed form is close to R0."""
        assert shock_radius(0.01, R0) == pytest.approx(R0, rel=1e-3)

    def test_wilkin_value_at_90_degrees(self):
        """R(pi/2) = R0 * sqrt(3)."""
        assert shock_radius(math.pi / 2, R0) == pytest.approx(R0 * math.sqrt(3.0), rel=1e-12)

    def test_monotonic_increasing(self):
        prev = shock_radius(0.01, R0)
        for k in range(2, 300):
            theta = 0.01 * k
            if theta >= math.pi - SHOCK_ANGLE_EPS:
                break
            r = shock_radius(theta, R0)
            assert r > prev
            prev = r

    def test_tail_clamp_is_finite_and_constant(self):
        clamped = shock_radius(math.pi - SHOCK_ANGLE_EPS, R0)
        assert math.isfinite(clamped)
        assert shock_radius(math.pi, R0) == clamped
        assert shock_radius(math.pi + 0.5, R0) == clamped

    def test_tail_clamp_continuous(self):
        just_before = shock_radius(math.pi - 1.001 * SHOCK_ANGLE_EPS, R0)
        clamped = shock_radius(math.pi - SHOCK_ANGLE_EPS, R0)
        assert just_before == pytest.approx(clamped, rel=1e-2)

    def test_scales_linearly_with_r0(self):
        assert shock_radius(1.0, 2.0 * R0) == pytest.approx(2.0 * shock_radius(1.0, R0))

    def test_nan_propagates(self):
        assert math.isnan(shock_radius(float("nan"), R0))
        assert math.isnan(shock_radius(1.0, float("nan")))

    def test_infinity_propagates(self):
        assert shock_radius(math.inf, R0) == shock_radius(math.pi, R0)
        assert shock_radius(-math.inf, R0) == R0
        assert shock_radius(1.0, math.inf) == math.inf


class TestStandoffRadius:

    def test_two_thirds(self):
        for R_c in [0.5, 1.0, 1.8, 3.3, 5.0]:
            assert standoff_radius(R_c) == (2.0 / 3.0) * R_c

    def test_paper_value(self):
        assert standoff_radius(1.8) == pytest.approx(1.2, abs=1e-12)


class TestShockProfile:

    def test_point_count_and_order(self):
        profile = shock_profile(R0, 200)
        assert len(profile) == 201
        thetas = [p["theta"] for p in profile]
        assert thetas == sorted(thetas)
        assert thetas[0] == pytest.approx(0.01)
        assert thetas[-1] == pytest.approx(math.pi - 0.01)

    def test_cartesian_consistent_with_radius(self):
        for p in shock_profile(R0, 50):
            assert math.hypot(p["x"], p["y"]) == pytest.approx(p["R"], rel=1e-12)
            assert p["R"] == shock_radius(p["theta"], R0)

    def test_apex_on_negative_axis(self):
        apex = shock_profile(R0, 100)[0]
        assert apex["y"] == pytest.approx(-R0, rel=1e-3)
        assert abs(apex["x"]) < 0.02


class TestSurfaceSample:

    def test_buffer_shapes(self):
        s = surface_sample(R0, n_theta=10, n_phi=8)
        n_vertices = 11 * 9
        assert s.positions.shape == (n_vertices, 3)
        assert s.normals.shape == (n_vertices, 3)
        assert s.uvs.shape == (n_vertices, 2)
        assert s.indices.shape == (2 * 10 * 8, 3)

    def test_default_resolution(self):
        s = surface_sample(R0)
        assert (s.n_theta, s.n_phi) == (80, 64)
        assert s.positions.shape[0] == 81 * 65

    def test_normals_are_unit_radial(self):
        s = surface_sample(R0, n_theta=12, n_phi=12)
        lengths = np.linalg.norm(s.normals, axis=1)
        assert np.allclose(lengths, 1.0)
        # Radial approximation: normal is parallel to the position vector.
        radial = s.positions / np.linalg.norm(s.positions, axis=1, keepdims=True)
        assert np.allclose(s.normals, radial)

    def test_vertex_radii_follow_wilkin(self):
        n_theta, n_phi = 6, 4
        s = surface_sample(R0, n_theta, n_phi)
        for i in range(n_theta + 1):
            theta = 0.01 + 0.85 * math.pi * i / n_theta
            row = s.positions[i * (n_phi + 1):(i + 1) * (n_phi + 1)]
            radii = np.linalg.norm(row, axis=1)
            assert np.allclose(radii, shock_radius(theta, R0))

    def test_first_cell_triangles(self):
        s = surface_sample(R0, n_theta=3, n_phi=4)
        row = 5
        assert s.indices[0].tolist() == [0, row, 1]
        assert s.indices[1].tolist() == [row, row + 1, 1]

    def test_indices_in_range(self):
        s = surface_sample(R0, n_theta=7, n_phi=5)
        assert s.indices.min() == 0
        assert s.indices.max() < s.positions.shape[0]

    def test_uv_corners(self):
        s = surface_sample(R0, n_theta=4, n_phi=4)
        assert s.uvs[0].tolist() == [0.0, 0.0]
        assert s.uvs[-1].tolist() == [1.0, 1.0]

    def test_seam_duplicated(self):
        s = surface_sample(R0, n_theta=4, n_phi=8)
        first = s.positions[0 * 9 + 0]
        last = s.positions[0 * 9 + 8]
        assert np.allclose(first, last)

    def test_to_dict_flat_buffers(self):
        s = surface_sample(R0, n_theta=4, n_phi=4)
        d = s.to_dict()
        assert len(d["vertices"]) == 25 * 3
        assert len(d["normals"]) == 25 * 3
        assert len(d["uvs"]) == 25 * 2
        assert len(d["indices"]) == 2 * 16 * 3
        assert all(isinstance(k, int) for k in d["indices"])


class TestInsideShock:

    def test_origin_inside(self):
        assert inside_shock((0.0, 0.0, 0.0), R0)

    def test_core_radius_inside(self):
        assert inside_shock((0.5 * INSIDE_CORE_RADIUS, 0.0, 0.0), R0)

    def test_ahead_of_apex_outside(self):
        assert not inside_shock((0.0, 0.0, -1.5 * R0), R0)

    def test_just_behind_apex_inside(self):
        assert inside_shock((0.0, 0.0, -0.9 * R0), R0)

    def test_side_at_90_degrees(self):
        edge = R0 * math.sqrt(3.0)
        assert inside_shock((0.95 * edge, 0.0, 0.0), R0)
        assert not inside_shock((1.05 * edge, 0.0, 0.0), R0)

    def test_surface_vertices_on_boundary(self):
        """Points scaled just inside/outside mesh vertices agree with the test."""
        s = surface_sample(R0, n_theta=8, n_phi=8)
        for pos in s.positions[9:]:
            assert inside_shock(tuple(0.98 * pos), R0)
            assert not inside_shock(tuple(1.02 * pos), R0)


class TestParabolicApprox:

    def test_formula(self):
        assert parabolic_approx(2.0, 1.8) == pytest.approx(math.sqrt(2 * 1.8 * 2.0))

    def test_symmetric_in_dr(self):
        assert parabolic_approx(-3.0, 1.8) == parabolic_approx(3.0, 1.8)

    def test_zero_at_apex(self):
        assert parabolic_approx(0.0, 1.8) == 0.0

    def test_negative_curvature_is_nan(self):
        assert math.isnan(parabolic_approx(1.0, -1.8))

    def test_infinity_propagates(self):
        assert parabolic_approx(math.inf, 1.8) == math.inf
        assert math.isnan(parabolic_approx(math.nan, 1.8))

    def test_matches_wilkin_near_apex(self):
        """Near the apex the Wilkin half-width is within 10% of the parabola."""
        R_c = 1.8
        R0_local = standoff_radius(R_c)
        theta = 0.05
        R = shock_radius(theta, R0_local)
        half_width = R * math.sin(theta)
        dr = R0_local - R * math.cos(theta)
        assert half_width == pytest.approx(parabolic_approx(dr, R_c), rel=0.1)
