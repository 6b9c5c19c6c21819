"""
Tests for the ParameterSet snapshot and boundary validation.

The snapshot must be immutable, must always derive R_0 from R_c, and
must never validate (NaN in, NaN out). validate_parameters() is where
ranges are enforced.
"""

import dataclasses
import math

import pytest

from physics.bowshock import standoff_radius
from physics.constants import DEFAULTS
from physics.params import (
    PARAMETER_RANGES,
    SLIDER_GROUPS,
    ParameterSet,
    validate_parameters,
)


class TestParameterSetDefaults:

    def test_defaults_match_paper(self):
        ps = ParameterSet()
        for key, value in DEFAULTS.items():
            assert getattr(ps, key) == value

    def test_every_default_is_a_field(self):
        assert set(DEFAULTS) == set(ParameterSet.field_names())

    def test_default_standoff_radius(self):
        assert ParameterSet().R_0 == pytest.approx(1.2, abs=1e-12)


class TestSnapshotSemantics:

    def test_frozen(self):
        ps = ParameterSet()
        with pytest.raises(dataclasses.FrozenInstanceError):
            ps.v_star = 1000.0

    def test_r0_not_assignable(self):
        ps = ParameterSet()
        with pytest.raises(AttributeError):
            ps.R_0 = 2.0

    def test_with_changes_returns_new_snapshot(self):
        ps = ParameterSet()
        changed = ps.with_changes(v_star=1200)
        assert changed.v_star == 1200.0
        assert ps.v_star == 954.0

    def test_r0_follows_rc(self):
        ps = ParameterSet().with_changes(R_c=3.0)
        assert ps.R_0 == standoff_radius(3.0)
        assert ps.R_0 == pytest.approx(2.0)

    def test_equal_snapshots_compare_equal(self):
        assert ParameterSet() == ParameterSet.from_mapping({})

    def test_as_dict_includes_derived_r0(self):
        d = ParameterSet(R_c=0.9).as_dict()
        assert d["R_0"] == pytest.approx(0.6)
        assert d["R_c"] == 0.9
        assert d["v_star"] == 954.0


class TestFromMapping:

    def test_partial_mapping_uses_defaults(self):
        ps = ParameterSet.from_mapping({"v0": -301, "r_star": 62})
        assert ps.v0 == -301.0
        assert ps.l_mix == DEFAULTS["l_mix"]

    def test_supplied_r0_is_ignored(self):
        """A stale R_0 from the caller cannot break R_0 = 2/3 R_c."""
        ps = ParameterSet.from_mapping({"R_c": 1.8, "R_0": 5.0})
        assert ps.R_0 == pytest.approx(1.2)

    def test_unknown_keys_ignored(self):
        ps = ParameterSet.from_mapping({"n_points": 50, "M_BH": 2e7})
        assert ps == ParameterSet()

    def test_none_gives_defaults(self):
        assert ParameterSet.from_mapping(None) == ParameterSet()

    def test_nan_is_not_rejected(self):
        ps = ParameterSet.from_mapping({"v_star": float("nan")})
        assert math.isnan(ps.v_star)


class TestValidateParameters:

    def test_empty_gives_defaults(self):
        assert validate_parameters({}) == ParameterSet()
        assert validate_parameters(None) == ParameterSet()

    def test_in_range_values_accepted(self):
        ps = validate_parameters({"v_star": 1600, "i": 15, "R_c": 5.0})
        assert ps.v_star == 1600.0
        assert ps.R_0 == pytest.approx(5.0 * 2.0 / 3.0)

    @pytest.mark.parametrize("key", sorted(PARAMETER_RANGES))
    def test_out_of_range_rejected(self, key):
        lo, hi = PARAMETER_RANGES[key]
        with pytest.raises(ValueError):
            validate_parameters({key: hi + 1.0})
        with pytest.raises(ValueError):
            validate_parameters({key: lo - 1.0})

    @pytest.mark.parametrize("key", ["r_star", "wake_length", "T_cgm", "rho_ext", "epsilon"])
    def test_non_positive_rejected(self, key):
        with pytest.raises(ValueError):
            validate_parameters({key: 0})

    def test_non_numeric_rejected(self):
        with pytest.raises(ValueError, match="v_star"):
            validate_parameters({"v_star": "fast"})

    def test_boolean_rejected(self):
        with pytest.raises(ValueError):
            validate_parameters({"chi": True})

    def test_non_finite_rejected(self):
        with pytest.raises(ValueError):
            validate_parameters({"r_star": float("inf")})
        with pytest.raises(ValueError):
            validate_parameters({"p": float("nan")})

    def test_non_dict_rejected(self):
        with pytest.raises(ValueError):
            validate_parameters([1, 2, 3])

    def test_numeric_strings_accepted(self):
        assert validate_parameters({"v_star": "1000"}).v_star == 1000.0


class TestSliderGroups:

    def test_slider_params_have_ranges(self):
        for group in SLIDER_GROUPS.values():
            for slider in group:
                assert slider["param"] in PARAMETER_RANGES

    def test_defaults_inside_ranges(self):
        for key, (lo, hi) in PARAMETER_RANGES.items():
            assert lo <= DEFAULTS[key] <= hi
