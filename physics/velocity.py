"""
Position-velocity (PV) model: Equations 1, 3, 6, 7 and 8.

Line-of-sight velocity across the bow shock as a function of projected
position x, for an aperture of radius R_ring:

    v_model(x) = -v_LOS,wake
                 + v_* sin(theta) cos(theta) cos(i) <cos phi>(xi) W_p(xi)

with xi = x / R_ring. Outside the aperture (|xi| >= 1) only the wake
baseline remains.

Sign convention: wake_baseline_velocity() is positive for a receding wake
and the PV model reports it with a minus sign (negative = receding), the
same convention as the wake profile v0.

IMPORTANT: No unicode characters allowed (Windows charmap constraint).
"""

import math

from physics.constants import deg_to_rad, ieee_divide, nan_cos, nan_sin
from physics.params import ParameterSet

# Saturation thresholds for |xi|
XI_EDGE = 0.999
XI_CENTER = 0.001

# Below this |p| the emissivity is uniform and W_p = 1 exactly.
UNIFORM_EMISSIVITY_P = 0.01

# Midpoint-rule samples over phi in (-pi/2, pi/2) for W_p. Changing this
# changes every PV curve.
LIMB_QUADRATURE_SAMPLES = 80

# Floor on the chord weight d(phi) before raising to -p.
CHORD_FLOOR = 0.01


def wake_baseline_velocity(v_star, chi, i_deg):
    """
    Eq 3: wake baseline line-of-sight velocity (km/s).

    v_LOS,wake = v_* (1 - 1/chi) sin(i)
    """
    i = deg_to_rad(i_deg)
    return v_star * (1.0 - ieee_divide(1.0, chi)) * nan_sin(i)


def tangential_velocity(theta, v_star):
    """Eq 1: tangential flow speed on the shock surface, v_t = v_* sin(theta). theta in radians."""
    return v_star * nan_sin(theta)


def azimuthal_average(xi):
    """
    Eq 6: azimuthally averaged cos(phi) at normalized position xi.

    <cos phi>(xi) = (xi / sqrt(1 - xi^2)) * asinh(sqrt(1 - xi^2) / |xi|)

    Saturates to 1.0 at the aperture edge (|xi| >= 0.999) and to 0.0 at
    the center (|xi| < 0.001). The result carries the sign of xi.
    """
    abs_xi = abs(xi)
    if abs_xi >= XI_EDGE:
        return 1.0
    if abs_xi < XI_CENTER:
        return 0.0
    root = math.sqrt(1.0 - xi * xi)
    return (xi / root) * math.asinh(root / abs_xi)


def limb_brightening_weight(xi, p):
    """
    Eq 7: emissivity-weighted projection factor W_p(xi).

    Midpoint rule over the half-shell facing the observer,
    phi_k = -pi/2 + pi (k + 1/2) / N with N = LIMB_QUADRATURE_SAMPLES:

        d(phi)   = sqrt(xi^2 cos^2 phi + sin^2 phi)
        eps(phi) = max(d, 0.01)^(-p)
        W_p      = sum(eps cos phi) / sum(eps)

    Parameters
    ----------
    xi : float
        Projected position over aperture radius.
    p : float
        Emissivity power-law index.

    Returns
    -------
    float
        1.0 at the aperture edge, for uniform emissivity (|p| < 0.01),
        or when the weight sum underflows; NaN when a weight overflows;
        the quadrature otherwise.
    """
    abs_xi = abs(xi)
    if abs_xi >= XI_EDGE:
        return 1.0
    if abs(p) < UNIFORM_EMISSIVITY_P:
        return 1.0

    n = LIMB_QUADRATURE_SAMPLES
    xi2 = abs_xi * abs_xi
    sum_num = 0.0
    sum_den = 0.0
    for k in range(n):
        phi = -math.pi / 2.0 + math.pi * (k + 0.5) / n
        cos_phi = math.cos(phi)
        sin_phi = math.sin(phi)
        d = math.sqrt(xi2 * cos_phi * cos_phi + sin_phi * sin_phi)
        if d < CHORD_FLOOR:
            d = CHORD_FLOOR
        try:
            eps = d ** (-p)
        except OverflowError:
            eps = math.inf
        sum_num += eps * cos_phi
        sum_den += eps

    if sum_den < 1e-10:
        return 1.0
    return sum_num / sum_den


def pv_model_velocity(x_kpc, params=None):
    """
    Eq 8: modeled line-of-sight velocity (km/s) at projected position x.

    Parameters
    ----------
    x_kpc : float
        Projected position along the slit (kpc).
    params : ParameterSet, optional
        Model snapshot (defaults when omitted). theta and i are the
        configured shell half-angle and inclination, not functions of x.

    Returns
    -------
    float
        Velocity in km/s (negative = receding).
    """
    if params is None:
        params = ParameterSet()

    v_wake = wake_baseline_velocity(params.v_star, params.chi, params.i)
    xi = ieee_divide(x_kpc, params.R_ring)
    if abs(xi) >= 1.0:
        return -v_wake

    i = deg_to_rad(params.i)
    theta = deg_to_rad(params.theta)
    avg_cos = azimuthal_average(xi)
    w_p = limb_brightening_weight(xi, params.p)

    return -v_wake + (params.v_star * nan_sin(theta) * nan_cos(theta)
                      * nan_cos(i) * avg_cos * w_p)


def pv_model_curve(params=None, n_points=200):
    """
    Sample the PV model over x in [-R_ring, +R_ring].

    Returns
    -------
    dict
        {'x': [...], 'v': [...]}, n_points + 1 samples each (kpc, km/s).
    """
    if params is None:
        params = ParameterSet()

    R_ring = params.R_ring
    xs = []
    vs = []
    for k in range(n_points + 1):
        x = -R_ring + 2.0 * R_ring * k / n_points
        xs.append(x)
        vs.append(pv_model_velocity(x, params))
    return {"x": xs, "v": vs}
