"""
Wake velocity profile: delayed-mixing model (Equation 19).

    v(r) = v_0 * exp(-max(0, (r_* - r) - dr_delay) / l_mix)

r is the distance from the host galaxy (0 = galaxy, r_* = BH). Gas keeps
its post-shock velocity v_0 for dr_delay behind the BH, then relaxes
exponentially toward the ambient medium over l_mix.
"""

import math

from physics.params import ParameterSet


def wake_velocity(r, params=None):
    """
    Eq 19: wake velocity (km/s) at distance r (kpc) from the galaxy.

    The mixing distance (distance behind the apex minus the delay) is
    clamped at zero, so gas inside the delay zone (and ahead of the BH)
    stays at v0 rather than growing. For l_mix <= 0 the profile is the
    step-function limit: v0 inside the delay zone, 0 beyond it.
    """
    if params is None:
        params = ParameterSet()

    dist_behind = params.r_star - r
    mixing_dist = dist_behind - params.dr_delay
    if mixing_dist < 0:
        mixing_dist = 0.0

    if params.l_mix <= 0:
        return params.v0 if mixing_dist == 0 else 0.0
    return params.v0 * math.exp(-mixing_dist / params.l_mix)


def wake_velocity_curve(params=None, n_points=300):
    """
    Sample the wake profile over r in [0, r_star].

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
        vs.append(wake_velocity(r, params))
    return {"r": rs, "v": vs}
