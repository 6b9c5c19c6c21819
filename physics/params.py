"""
Parameter snapshot for the physics core.

Every physics function reads a ParameterSet: an immutable record of the
model parameters at one instant. The interactive "current state" is owned
by the caller; a slider change produces a new snapshot via with_changes()
and the old one is never mutated, so a computation that reads several
fields always sees one consistent set of values.

R_0 is not a stored field. It is derived from R_c through
physics.bowshock.standoff_radius every time it is read.

Range checks live in validate_parameters(), which the HTTP service layer
calls once per request. ParameterSet itself does no validation: NaN in,
NaN out.

IMPORTANT: No unicode characters allowed (Windows charmap constraint).
"""

import math
from dataclasses import dataclass, fields, replace

from physics.bowshock import standoff_radius
from physics.constants import DEFAULTS


# Interactive ranges (inclusive), matching the control panels.
PARAMETER_RANGES = {
    "v_star": (400.0, 1600.0),
    "i": (15.0, 75.0),
    "chi": (2.0, 4.0),
    "theta": (30.0, 80.0),
    "p": (0.2, 3.0),
    "R_ring": (0.5, 4.0),
    "v0": (-600.0, -50.0),
    "dr_delay": (0.0, 40.0),
    "l_mix": (5.0, 60.0),
    "R_c": (0.5, 5.0),
}

# Fixed-default physical quantities: only required to be > 0.
POSITIVE_PARAMETERS = ("r_star", "wake_length", "T_cgm", "rho_ext", "epsilon")

# Control panels and the step size of each slider they own.
SLIDER_GROUPS = {
    "pv": [
        {"param": "v_star", "step": 10, "unit": "km/s"},
        {"param": "i", "step": 1, "unit": "deg"},
        {"param": "chi", "step": 0.1, "unit": ""},
        {"param": "theta", "step": 1, "unit": "deg"},
        {"param": "p", "step": 0.1, "unit": ""},
        {"param": "R_ring", "step": 0.1, "unit": "kpc"},
    ],
    "wake": [
        {"param": "v0", "step": 5, "unit": "km/s"},
        {"param": "dr_delay", "step": 1, "unit": "kpc"},
        {"param": "l_mix", "step": 1, "unit": "kpc"},
        {"param": "v_star", "step": 10, "unit": "km/s"},
        {"param": "R_c", "step": 0.1, "unit": "kpc"},
    ],
}


@dataclass(frozen=True)
class ParameterSet:
    """
    Immutable snapshot of the RBH-1 model parameters.

    Parameters
    ----------
    v_star : float
        Black hole space velocity (km/s).
    i : float
        Inclination angle (degrees).
    chi : float
        Shock/wake velocity compression ratio.
    theta : float
        Shock half-opening angle (degrees).
    p : float
        Emissivity power-law index.
    R_ring : float
        PV aperture radius (kpc).
    v0 : float
        Initial wake velocity (km/s, negative = receding).
    dr_delay : float
        Delay distance before wake mixing (kpc).
    l_mix : float
        Wake mixing length (kpc).
    R_c : float
        Shock radius of curvature (kpc).
    r_star : float
        Host galaxy to black hole distance (kpc).
    wake_length : float
        Observed wake length (kpc).
    T_cgm : float
        CGM temperature (K).
    rho_ext : float
        Ambient CGM mass density (kg/m^3).
    epsilon : float
        Momentum-coupling efficiency.
    """

    v_star: float = DEFAULTS["v_star"]
    i: float = DEFAULTS["i"]
    chi: float = DEFAULTS["chi"]
    theta: float = DEFAULTS["theta"]
    p: float = DEFAULTS["p"]
    R_ring: float = DEFAULTS["R_ring"]
    v0: float = DEFAULTS["v0"]
    dr_delay: float = DEFAULTS["dr_delay"]
    l_mix: float = DEFAULTS["l_mix"]
    R_c: float = DEFAULTS["R_c"]
    r_star: float = DEFAULTS["r_star"]
    wake_length: float = DEFAULTS["wake_length"]
    T_cgm: float = DEFAULTS["T_cgm"]
    rho_ext: float = DEFAULTS["rho_ext"]
    epsilon: float = DEFAULTS["epsilon"]

    @property
    def R_0(self):
        """Standoff radius (kpc), always 2/3 of the current R_c."""
        return standoff_radius(self.R_c)

    @classmethod
    def field_names(cls):
        return [f.name for f in fields(cls)]

    @classmethod
    def from_mapping(cls, mapping=None):
        """
        Build a snapshot from a partial mapping.

        Missing fields take their defaults, known fields are coerced to
        float, and anything else (including a caller-supplied R_0) is
        ignored.
        """
        if not mapping:
            return cls()
        known = set(cls.field_names())
        values = {k: float(v) for k, v in mapping.items() if k in known}
        return cls(**values)

    def with_changes(self, **changes):
        """Return a new snapshot with the given fields replaced."""
        return replace(self, **{k: float(v) for k, v in changes.items()})

    def as_dict(self):
        """Flat record of every field plus the derived R_0."""
        out = {name: getattr(self, name) for name in self.field_names()}
        out["R_0"] = self.R_0
        return out


def validate_parameters(mapping):
    """
    Validate raw parameter input and return a ParameterSet.

    Parameters
    ----------
    mapping : dict or None
        Partial parameter mapping. Missing fields take their defaults.

    Returns
    -------
    ParameterSet

    Raises
    ------
    ValueError
        If a value is non-numeric, non-finite, or outside its range.
    """
    if mapping is None:
        mapping = {}
    if not isinstance(mapping, dict):
        raise ValueError("Parameters must be a JSON object")

    known = set(ParameterSet.field_names())
    values = {}
    for key, raw in mapping.items():
        if key not in known:
            continue
        if isinstance(raw, bool):
            raise ValueError("Parameter '{}' must be a number".format(key))
        try:
            value = float(raw)
        except (TypeError, ValueError):
            raise ValueError("Parameter '{}' must be a number".format(key))
        if not math.isfinite(value):
            raise ValueError("Parameter '{}' must be finite".format(key))

        if key in PARAMETER_RANGES:
            lo, hi = PARAMETER_RANGES[key]
            if not (lo <= value <= hi):
                raise ValueError(
                    "Parameter '{}' must be between {:g} and {:g}".format(key, lo, hi)
                )
        elif key in POSITIVE_PARAMETERS and value <= 0:
            raise ValueError("Parameter '{}' must be positive".format(key))

        values[key] = value

    return ParameterSet(**values)
