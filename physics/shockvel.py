"""
Shock velocity along the wake (Equation 13).

    v_s(r) = v_* * (1 + 2 (r_* - r) / R_c)^(-1/2)

At the apex (r = r_*) the shock moves with the BH; it weakens with
distance behind the apex as the shock surface turns oblique.
"""

from physics.constants import ieee_divide
from physics.params import ParameterSet


def shock_velocity(r, params=None):
    """
    Eq 13: shock velocity (km/s) at distance r (kpc) from the galaxy.

    Ahead of the apex (r > r_star) the model does not apply and v_star is
    returned unchanged. A non-positive power base returns 0.
    """
    if params is None:
        params = ParameterSet()

    dr = params.r_star - r
    if dr < 0:
        return params.v_star

    factor = 1.0 + ieee_divide(2.0 * dr, params.R_c)
    if factor <= 0:
        return 0.0
    return params.v_star * factor ** -0.5


def shock_velocity_curve(params=None, n_points=300):
    """
    Sample the shock velocity over r in [0, r_star].

    Returns
    -------
    dict
        {'r': [...], 'v': [...]}, n_points + 1 samples each (kpc, km/s).
    """
    if params is None:
        params = ParameterSet()

    rs = []
    vs = []
    for k in range(n_points + 1):
        r = params.r_star * k / n_points
        rs.append(r)
        vs.append(shock_velocity(r, params))
    return {"r": rs, "v": vs}
