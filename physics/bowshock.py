"""
Bow shock geometry: Wilkin (1996) thin-shell solution.

Shape (polar angle theta measured from the apex, BH at the focus):

    R(theta) = R_0 * csc(theta) * sqrt(3 * (1 - theta * cot(theta)))

The closed form is singular at both ends of 0 < theta < pi:
  - theta <= SHOCK_ANGLE_EPS: return R_0 (physical limit at the apex).
  - theta >= pi - SHOCK_ANGLE_EPS: the angle is clamped to
    pi - SHOCK_ANGLE_EPS and the closed form is evaluated there, so the
    tail radius is finite, continuous, and the same for every angle past
    the clamp.
  - A negative radicand (round-off near the apex) returns R_0.

Axis convention for 3D samples: BH at the origin moving along +Z, apex at
z = -R_0 with theta = acos(-z / r). inside_shock() uses the same convention
as surface_sample() so a point on the mesh is on the boundary of the test.

IMPORTANT: No unicode characters allowed (Windows charmap constraint).
"""

import math
from dataclasses import dataclass

import numpy as np

from physics.constants import nan_sqrt

SHOCK_ANGLE_EPS = 1.0e-3  # rad

# Points closer than this to the BH are always inside the shock (kpc).
INSIDE_CORE_RADIUS = 0.01

# Surface mesh: theta runs over (SURFACE_THETA_START, SURFACE_THETA_START + 0.85 pi]
SURFACE_THETA_START = 0.01
SURFACE_THETA_SPAN = 0.85 * math.pi

# Profile: theta runs over [0.01, pi - 0.01]
PROFILE_THETA_MARGIN = 0.01


def standoff_radius(R_c):
    """
    Standoff radius from the apex radius of curvature: R_0 = (2/3) R_c.

    This is the only place the relation is defined. Everything that needs
    R_0 for a given R_c calls this function.
    """
    return (2.0 / 3.0) * R_c


def shock_radius(theta, R0):
    """
    Wilkin (1996) shock radius at polar angle theta.

    Parameters
    ----------
    theta : float
        Polar angle from the apex in radians, 0 < theta < pi.
    R0 : float
        Standoff radius (kpc).

    Returns
    -------
    float
        Distance from the BH to the shock surface (kpc).
    """
    if theta <= SHOCK_ANGLE_EPS:
        return R0
    if theta >= math.pi - SHOCK_ANGLE_EPS:
        theta = math.pi - SHOCK_ANGLE_EPS

    sin_t = math.sin(theta)
    inner = 3.0 * (1.0 - theta * math.cos(theta) / sin_t)
    if inner < 0:
        return R0
    return R0 * math.sqrt(inner) / sin_t


def parabolic_approx(dr, R_c):
    """
    Near-apex parabolic shock half-width: R_phot(dr) = sqrt(2 R_c |dr|).

    Cheap stand-in for shock_radius() in per-particle collision checks.
    A negative R_c gives NaN.
    """
    return nan_sqrt(2.0 * R_c * abs(dr))


def shock_profile(R0, n_points=200):
    """
    Sample the 2D shock outline.

    Returns
    -------
    list of dict
        n_points + 1 samples ordered by theta, each with keys
        'theta' (rad), 'R' (kpc), 'x' (perpendicular to motion, kpc) and
        'y' (along the motion axis, kpc; apex at y = -R0).
    """
    span = math.pi - 2.0 * PROFILE_THETA_MARGIN
    points = []
    for k in range(n_points + 1):
        theta = PROFILE_THETA_MARGIN + span * k / n_points
        R = shock_radius(theta, R0)
        points.append({
            "theta": theta,
            "R": R,
            "x": R * math.sin(theta),
            "y": -R * math.cos(theta),
        })
    return points


@dataclass(frozen=True)
class SurfaceSample:
    """
    Triangulated shock surface.

    Attributes
    ----------
    positions : ndarray, shape ((n_theta+1)*(n_phi+1), 3)
        Vertex positions (kpc).
    normals : ndarray, same shape as positions
        Approximate outward unit normals: the radial direction
        (sin t cos f, sin t sin f, -cos t), not the gradient of R(theta).
    uvs : ndarray, shape ((n_theta+1)*(n_phi+1), 2)
        Parametric coordinates (i/n_theta, j/n_phi).
    indices : ndarray of int, shape (2*n_theta*n_phi, 3)
        Two triangles per grid cell.
    n_theta, n_phi : int
        Grid resolution.
    """

    positions: np.ndarray
    normals: np.ndarray
    uvs: np.ndarray
    indices: np.ndarray
    n_theta: int
    n_phi: int

    def to_dict(self, decimals=6):
        """Flattened, JSON-serializable buffers for a WebGL consumer."""
        return {
            "vertices": np.round(self.positions, decimals).ravel().tolist(),
            "normals": np.round(self.normals, decimals).ravel().tolist(),
            "uvs": np.round(self.uvs, decimals).ravel().tolist(),
            "indices": self.indices.ravel().tolist(),
            "n_theta": self.n_theta,
            "n_phi": self.n_phi,
        }


def surface_sample(R0, n_theta=80, n_phi=64):
    """
    Build the 3D shock surface on a (theta, phi) grid.

    theta spans SURFACE_THETA_START .. SURFACE_THETA_START + 0.85 pi in
    n_theta steps; phi spans 0 .. 2 pi in n_phi steps with the seam
    vertex duplicated so uvs wrap cleanly.
    """
    thetas = SURFACE_THETA_START + SURFACE_THETA_SPAN * np.arange(n_theta + 1) / n_theta
    phis = 2.0 * np.pi * np.arange(n_phi + 1) / n_phi
    radii = np.array([shock_radius(float(t), R0) for t in thetas])

    t_grid, p_grid = np.meshgrid(thetas, phis, indexing="ij")
    r_grid = radii[:, np.newaxis]

    nx = np.sin(t_grid) * np.cos(p_grid)
    ny = np.sin(t_grid) * np.sin(p_grid)
    nz = -np.cos(t_grid)
    normals = np.stack([nx, ny, nz], axis=-1)
    normals /= np.linalg.norm(normals, axis=-1, keepdims=True)

    positions = np.stack([r_grid * nx, r_grid * ny, r_grid * nz], axis=-1)

    u_grid, v_grid = np.meshgrid(
        np.arange(n_theta + 1) / n_theta,
        np.arange(n_phi + 1) / n_phi,
        indexing="ij",
    )
    uvs = np.stack([u_grid, v_grid], axis=-1)

    # Cell (i, j) corners: a = (i, j), b = (i+1, j)
    row = n_phi + 1
    i_idx, j_idx = np.meshgrid(np.arange(n_theta), np.arange(n_phi), indexing="ij")
    a = (i_idx * row + j_idx).ravel()
    b = a + row
    first = np.stack([a, b, a + 1], axis=-1)
    second = np.stack([b, b + 1, a + 1], axis=-1)
    indices = np.stack([first, second], axis=1).reshape(-1, 3).astype(np.int64)

    return SurfaceSample(
        positions=positions.reshape(-1, 3),
        normals=normals.reshape(-1, 3),
        uvs=uvs.reshape(-1, 2),
        indices=indices,
        n_theta=n_theta,
        n_phi=n_phi,
    )


def inside_shock(position, R0):
    """
    True if a point in the BH rest frame lies within the shock surface.

    Parameters
    ----------
    position : sequence of 3 floats
        (x, y, z) in kpc, BH at the origin, motion along +Z.
    R0 : float
        Standoff radius (kpc).
    """
    x, y, z = position
    r = math.sqrt(x * x + y * y + z * z)
    if r < INSIDE_CORE_RADIUS:
        return True
    cos_t = max(-1.0, min(1.0, -z / r))
    theta = math.acos(cos_t)
    return r < shock_radius(theta, R0)
