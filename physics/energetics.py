"""
Energetics and derived quantities (Equation 23 and the dashboard).

Mass estimate from momentum balance on the bow shock:

    M_* >~ 2 eps rho_ext v_* pi R_0^2 t_wake

evaluated in SI internally and returned in solar masses. It is a lower
bound, not a measurement.

compute_dashboard() is the single aggregation point for every derived
number shown together in the UI. It reads one ParameterSet snapshot, so
all values in one result belong to the same instant.

IMPORTANT: No unicode characters allowed (Windows charmap constraint).
"""

import math

from physics.bowshock import standoff_radius
from physics.constants import (
    C_LIGHT_KM_S,
    KM_S_TO_M_S,
    KPC_TO_M,
    MYR_TO_S,
    M_SUN,
    deg_to_rad,
    ieee_divide,
    mach_number,
    nan_cos,
    sound_speed,
)
from physics.params import ParameterSet
from physics.velocity import wake_baseline_velocity

# Same function as physics.bowshock.standoff_radius, under the name the
# dashboard uses.
standoff_from_rc = standoff_radius


def wake_age(params=None):
    """
    Time (Myr) for the BH to cover the observed wake length at its
    inclination-corrected velocity: t = L_wake / (v_* cos i).
    """
    if params is None:
        params = ParameterSet()

    i = deg_to_rad(params.i)
    L_m = params.wake_length * KPC_TO_M
    v_m = params.v_star * KM_S_TO_M_S
    t_s = ieee_divide(L_m, v_m * nan_cos(i))
    return t_s / MYR_TO_S


def bh_mass_estimate(params=None, t_wake=None, R0=None):
    """
    Eq 23: lower-bound BH mass from momentum balance (solar masses).

    Parameters
    ----------
    params : ParameterSet, optional
        Snapshot supplying rho_ext, v_star, epsilon and R_c (for R_0).
    t_wake : float, optional
        Wake age in Myr. Defaults to wake_age(params).
    R0 : float, optional
        Standoff radius in kpc. Defaults to params.R_0.

    Returns
    -------
    float
        Mass in solar masses.
    """
    if params is None:
        params = ParameterSet()
    if t_wake is None:
        t_wake = wake_age(params)
    if R0 is None:
        R0 = params.R_0

    R0_m = R0 * KPC_TO_M
    v_m = params.v_star * KM_S_TO_M_S
    t_s = t_wake * MYR_TO_S

    M_kg = 2.0 * params.epsilon * params.rho_ext * v_m * math.pi * R0_m * R0_m * t_s
    return M_kg / M_SUN


def compute_dashboard(params=None):
    """
    Compute every derived dashboard quantity from one snapshot.

    Order: R_0 from R_c, sound speed and Mach number, wake age, mass
    estimate (from that R_0 and wake age), shock velocity at the tip,
    wake LOS baseline, v/c.

    Returns
    -------
    dict
        M_BH (M_sun), R_0 (kpc), R_c (kpc), mach, c_s (km/s),
        t_wake (Myr), v_shock_tip (km/s), v_los_wake (km/s),
        v_frac_c, v_star (km/s).
    """
    if params is None:
        params = ParameterSet()

    v_star = params.v_star
    R_c = params.R_c

    R0 = standoff_from_rc(R_c)
    c_s = sound_speed(params.T_cgm)
    mach = mach_number(v_star, params.T_cgm)
    age = wake_age(params)
    mass = bh_mass_estimate(params, t_wake=age, R0=R0)

    # The shock moves with the BH at the apex.
    v_shock_tip = v_star

    v_los_wake = wake_baseline_velocity(v_star, params.chi, params.i)
    v_frac_c = v_star / C_LIGHT_KM_S

    return {
        "M_BH": mass,
        "R_0": R0,
        "R_c": R_c,
        "mach": mach,
        "c_s": c_s,
        "t_wake": age,
        "v_shock_tip": v_shock_tip,
        "v_los_wake": v_los_wake,
        "v_frac_c": v_frac_c,
        "v_star": v_star,
    }
