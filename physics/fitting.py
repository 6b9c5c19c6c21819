"""
Model-versus-observation comparison and wake profile fitting.

Observed points come from the digitized figure fixtures
({'x' or 'r', 'v', 'v_err'}). compute_fit_metrics() is the single source
of the fit-quality numbers shown next to the PV and wake plots, and
fit_wake_profile() recovers the delayed-mixing parameters from observed
wake points.

IMPORTANT: No unicode characters (Windows charmap constraint).
"""

import logging
import math

from scipy.optimize import differential_evolution, minimize

from physics.params import PARAMETER_RANGES, ParameterSet
from physics.wake import wake_velocity

log = logging.getLogger(__name__)

# Parameters fitted by fit_wake_profile(), in optimizer order.
WAKE_FIT_PARAMETERS = ("v0", "dr_delay", "l_mix")

# Error bar assumed for points that carry none (km/s).
DEFAULT_VELOCITY_ERROR = 10.0


def _point_error(obs):
    err = obs.get("v_err", obs.get("err", 0))
    return float(err) if err else 0.0


def _interpolate(xs, ys, x_target):
    """
    Linear interpolation of ys at x_target.

    xs must be ascending. Returns None if x_target is outside [xs[0], xs[-1]].
    """
    if not xs or x_target < xs[0] or x_target > xs[-1]:
        return None
    for k in range(len(xs) - 1):
        x0, x1 = xs[k], xs[k + 1]
        if x0 <= x_target <= x1:
            if x1 == x0:
                return ys[k]
            t = (x_target - x0) / (x1 - x0)
            return ys[k] + t * (ys[k + 1] - ys[k])
    return ys[-1]


def compute_fit_metrics(positions, model_velocities, observations, key="x"):
    """
    Compare a sampled model curve with observed points.

    Parameters
    ----------
    positions : list of float
        Ascending model sample positions (kpc).
    model_velocities : list of float
        Model velocity at each position (km/s).
    observations : list of dict or None
        Each dict has `key` (position, kpc), 'v' (km/s) and optionally
        'v_err' (km/s).
    key : str
        Position field of the observations: 'x' for PV, 'r' for wake.

    Returns
    -------
    dict
        - fit_quality: { rms_km_s, chi2, chi2_reduced, within_1sigma,
                         within_2sigma, n_obs } or None
        - observation_summary: { n_points, pos_min_kpc, pos_max_kpc,
                                 mean_error_km_s } or None
        - residuals: list of { pos_kpc, v_obs, v_model, delta_v, sigma }
    """
    result = {}

    if not observations:
        result["fit_quality"] = None
        result["observation_summary"] = None
        result["residuals"] = []
        return result

    obs_pos = [o[key] for o in observations]
    obs_errors = [_point_error(o) for o in observations if _point_error(o) > 0]
    mean_err = sum(obs_errors) / len(obs_errors) if obs_errors else 0.0

    result["observation_summary"] = {
        "n_points": len(observations),
        "pos_min_kpc": round(min(obs_pos), 3),
        "pos_max_kpc": round(max(obs_pos), 3),
        "mean_error_km_s": round(mean_err, 1),
    }

    residuals = []
    sum_sq = 0.0
    chi2 = 0.0
    within_1s = 0
    within_2s = 0
    n_valid = 0

    for obs in observations:
        pos = obs[key]
        v_obs = obs["v"]
        err = _point_error(obs)

        v_model = _interpolate(positions, model_velocities, pos)
        if v_model is None:
            continue

        dv = v_obs - v_model
        sum_sq += dv * dv
        n_valid += 1

        sigma = None
        if err > 0:
            chi2 += (dv * dv) / (err * err)
            sigma = abs(dv) / err
            if sigma <= 1.0:
                within_1s += 1
            if sigma <= 2.0:
                within_2s += 1
        else:
            # No error bar: count as within both bands
            within_1s += 1
            within_2s += 1

        residuals.append({
            "pos_kpc": round(pos, 3),
            "v_obs": round(v_obs, 2),
            "v_model": round(v_model, 2),
            "delta_v": round(dv, 2),
            "sigma": round(sigma, 2) if sigma is not None else None,
        })

    result["residuals"] = residuals

    if n_valid > 0:
        dof = max(n_valid - 1, 1)
        result["fit_quality"] = {
            "rms_km_s": round(math.sqrt(sum_sq / n_valid), 2),
            "chi2": round(chi2, 3),
            "chi2_reduced": round(chi2 / dof, 3),
            "within_1sigma": within_1s,
            "within_2sigma": within_2s,
            "n_obs": n_valid,
        }
    else:
        result["fit_quality"] = None

    return result


def _wake_chi2(x, obs_r, obs_v, obs_err, base):
    trial = base.with_changes(v0=x[0], dr_delay=x[1], l_mix=x[2])
    chi2 = 0.0
    for r, v, err in zip(obs_r, obs_v, obs_err):
        dv = v - wake_velocity(r, trial)
        chi2 += (dv * dv) / (err * err)
    return chi2


def fit_wake_profile(observations, params=None, seed=42):
    """
    Fit the delayed-mixing wake model to observed wake velocities.

    Uses differential_evolution (global) then L-BFGS-B (local polish)
    over the interactive ranges of v0, dr_delay and l_mix. r_star and the
    remaining fields are held at the values in `params`.

    Parameters
    ----------
    observations : list of dict
        Each dict has 'r' (kpc), 'v' (km/s) and optionally 'v_err' (km/s);
        points without a positive error use DEFAULT_VELOCITY_ERROR.
    params : ParameterSet, optional
        Snapshot supplying the fixed fields.
    seed : int
        Seed for the global search, so repeated fits agree.

    Returns
    -------
    dict or None
        {'v0', 'dr_delay', 'l_mix', 'chi2', 'chi2_reduced', 'n_obs',
         'n_params', 'params' (the best-fit ParameterSet)}, or None with
        fewer than three usable points.
    """
    if params is None:
        params = ParameterSet()
    if not observations:
        return None

    obs_r, obs_v, obs_err = [], [], []
    for o in observations:
        r = o.get("r")
        v = o.get("v")
        if r is None or v is None:
            continue
        if not (math.isfinite(r) and math.isfinite(v)):
            continue
        err = _point_error(o)
        obs_r.append(float(r))
        obs_v.append(float(v))
        obs_err.append(err if err > 0 else DEFAULT_VELOCITY_ERROR)

    n_params = len(WAKE_FIT_PARAMETERS)
    if len(obs_r) < n_params:
        return None

    bounds = [PARAMETER_RANGES[name] for name in WAKE_FIT_PARAMETERS]
    args = (obs_r, obs_v, obs_err, params)

    result = differential_evolution(
        _wake_chi2,
        bounds=bounds,
        args=args,
        seed=seed,
        maxiter=300,
        tol=1e-8,
        popsize=20,
        polish=False,
    )

    polished = minimize(
        _wake_chi2,
        result.x,
        args=args,
        method="L-BFGS-B",
        bounds=bounds,
    )

    if polished.success and polished.fun <= result.fun:
        best, chi2_val = polished.x, float(polished.fun)
    else:
        best, chi2_val = result.x, float(result.fun)

    fitted = params.with_changes(v0=best[0], dr_delay=best[1], l_mix=best[2])
    dof = max(len(obs_r) - n_params, 1)

    log.info(
        "Wake fit: v0=%.1f km/s dr_delay=%.2f kpc l_mix=%.2f kpc chi2=%.3f (n=%d)",
        fitted.v0, fitted.dr_delay, fitted.l_mix, chi2_val, len(obs_r),
    )

    return {
        "v0": fitted.v0,
        "dr_delay": fitted.dr_delay,
        "l_mix": fitted.l_mix,
        "chi2": chi2_val,
        "chi2_reduced": chi2_val / dof,
        "n_obs": len(obs_r),
        "n_params": n_params,
        "params": fitted,
    }
