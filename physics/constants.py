"""
Physical constants, unit converters and the paper default parameter set
for the RBH-1 runaway black hole (van Dokkum et al. 2026, ApJL 998 L27).

Boundary units: angles in degrees, distances in kpc, velocities in km/s,
masses in solar masses, temperatures in K, times in Myr. SI values appear
only inside the physics functions.

The converters are plain arithmetic: NaN in, NaN out.

IMPORTANT: No unicode characters allowed in this file (Windows charmap constraint).
"""

import math

# Gravitational constant
G = 6.674e-11  # m^3 kg^-1 s^-2

# Solar mass
M_SUN = 1.989e30  # kg

# Solar radius
R_SUN = 6.957e8  # m

# Parsec and kiloparsec
PC_TO_M = 3.086e16  # meters
KPC_TO_M = 3.086e19  # meters

# Astronomical unit
AU_TO_M = 1.496e11  # meters

# Velocity
KM_S_TO_M_S = 1.0e3  # m/s per km/s

# Time
YR_TO_S = 3.156e7  # seconds per year
MYR_TO_S = 3.156e13  # seconds per Myr

# Speed of light
C_LIGHT_KM_S = 2.998e5  # km/s

# Sound speed coefficient: c_s = 0.013 * sqrt(T) km/s
# (ideal gas, gamma = 5/3, mean molecular weight mu = 0.6)
SOUND_SPEED_COEFF = 0.013


# ---------------------------------------------------------------------------
# Paper default parameter set
# ---------------------------------------------------------------------------

DEFAULTS = {
    # Black hole
    "v_star": 954.0,        # km/s, space velocity
    "i": 29.0,              # deg, inclination

    # Bow shock geometry
    "R_c": 1.8,             # kpc, radius of curvature (R_0 = 2/3 R_c)

    # PV model (Eqs 1-8)
    "chi": 3.0,             # shock/wake velocity ratio
    "theta": 55.0,          # deg, half-opening angle of the visible shell
    "p": 1.0,               # emissivity power-law index
    "R_ring": 1.5,          # kpc, aperture radius

    # Wake model (Eq 19)
    "v0": -301.0,           # km/s, initial wake velocity (negative = receding)
    "dr_delay": 16.0,       # kpc, delay before mixing starts
    "l_mix": 26.0,          # kpc, mixing length

    # Wake geometry
    "r_star": 62.0,         # kpc, galaxy to BH distance
    "wake_length": 62.0,    # kpc, observed wake length

    # CGM
    "T_cgm": 1.0e6,         # K
    "rho_ext": 1.67e-25,    # kg/m^3 (~0.1 m_p/cm^3)

    # Momentum coupling efficiency (Eq 23)
    "epsilon": 1.0,
}


# ---------------------------------------------------------------------------
# Unit converters
# ---------------------------------------------------------------------------

def deg_to_rad(deg):
    return deg * math.pi / 180.0


def rad_to_deg(rad):
    return rad * 180.0 / math.pi


def kpc_to_m(kpc):
    return kpc * KPC_TO_M


def m_to_kpc(m):
    return m / KPC_TO_M


def solar_to_kg(m_solar):
    return m_solar * M_SUN


def kg_to_solar(kg):
    return kg / M_SUN


# ---------------------------------------------------------------------------
# CGM thermodynamics
# ---------------------------------------------------------------------------

def sound_speed(T=DEFAULTS["T_cgm"]):
    """Adiabatic sound speed in km/s for CGM temperature T in K."""
    return SOUND_SPEED_COEFF * nan_sqrt(T)


def mach_number(v_star=DEFAULTS["v_star"], T=DEFAULTS["T_cgm"]):
    """Mach number of the black hole relative to the CGM sound speed."""
    return ieee_divide(v_star, sound_speed(T))


# ---------------------------------------------------------------------------
# Arithmetic
# ---------------------------------------------------------------------------

def ieee_divide(num, den):
    """
    num / den with IEEE-754 semantics for a zero denominator.

    Python floats raise ZeroDivisionError; the physics core instead
    returns +/-inf (or NaN for 0/0) so degenerate inputs flow through as
    numbers.
    """
    if den == 0:
        if num == 0 or math.isnan(num):
            return math.nan
        return math.copysign(math.inf, num) * math.copysign(1.0, den)
    return num / den


def nan_sin(x):
    """math.sin, but NaN for an infinite argument instead of ValueError."""
    if math.isinf(x):
        return math.nan
    return math.sin(x)


def nan_cos(x):
    """math.cos, but NaN for an infinite argument instead of ValueError."""
    if math.isinf(x):
        return math.nan
    return math.cos(x)


def nan_sqrt(x):
    """math.sqrt, but NaN for a negative argument instead of ValueError."""
    if x < 0:
        return math.nan
    return math.sqrt(x)
