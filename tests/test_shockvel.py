"""
Tests for the shock velocity profile along the wake (Eq 13).
"""

import math

import pytest

from physics.params import ParameterSet
from physics.shockvel import shock_velocity, shock_velocity_curve


class TestShockVelocity:

    def test_apex_moves_with_black_hole(self):
        ps = ParameterSet()
        assert shock_velocity(ps.r_star, ps) == ps.v_star
        assert shock_velocity(62.0) == 954.0

    def test_ahead_of_apex_returns_v_star(self):
        ps = ParameterSet()
        assert shock_velocity(ps.r_star + 0.5, ps) == ps.v_star
        assert shock_velocity(1000.0, ps) == ps.v_star

    def test_formula_at_galaxy(self):
        ps = ParameterSet()
        expected = ps.v_star / math.sqrt(1.0 + 2.0 * ps.r_star / ps.R_c)
        assert shock_velocity(0.0, ps) == pytest.approx(expected, rel=1e-12)
        assert 110.0 < shock_velocity(0.0, ps) < 120.0

    def test_decreases_behind_apex(self):
        ps = ParameterSet()
        prev = shock_velocity(ps.r_star, ps)
        for k in range(1, 62):
            val = shock_velocity(ps.r_star - k, ps)
            assert val < prev
            prev = val

    def test_positive_for_valid_parameters(self):
        ps = ParameterSet()
        for k in range(63):
            assert shock_velocity(float(k), ps) > 0

    def test_larger_curvature_weakens_slower(self):
        r = 30.0
        tight = shock_velocity(r, ParameterSet(R_c=0.5))
        wide = shock_velocity(r, ParameterSet(R_c=5.0))
        assert wide > tight

    def test_non_positive_base_returns_zero(self):
        ps = ParameterSet(R_c=-1.0)
        assert shock_velocity(ps.r_star - 1.0, ps) == 0.0

    def test_nan_propagates(self):
        assert math.isnan(shock_velocity(10.0, ParameterSet(v_star=float("nan"))))


class TestShockVelocityCurve:

    def test_default_sampling(self):
        curve = shock_velocity_curve()
        assert len(curve["r"]) == 301
        assert len(curve["v"]) == 301

    def test_ends_at_v_star(self):
        ps = ParameterSet(v_star=1200.0)
        curve = shock_velocity_curve(ps, 50)
        assert curve["r"][-1] == pytest.approx(ps.r_star)
        assert curve["v"][-1] == pytest.approx(1200.0)

    def test_ascending_in_r(self):
        vs = shock_velocity_curve(n_points=60)["v"]
        assert all(b >= a for a, b in zip(vs, vs[1:]))
