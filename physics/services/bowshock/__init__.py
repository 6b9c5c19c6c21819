"""
Bow Shock Geometry Service.

Serves the Wilkin (1996) shock shape to the renderers: the 2D outline for
the schematic, the triangulated 3D surface for the scene, and the
inside/outside test used for particle collisions.

Endpoints:
    POST /api/bowshock/profile - 2D outline (theta, R, x, y) and R_0
    POST /api/bowshock/surface - triangulated 3D surface buffers
    POST /api/bowshock/inside  - inside test for a list of 3D points

IMPORTANT: No unicode characters allowed (Windows charmap constraint).
"""

import math

from physics.bowshock import (
    inside_shock,
    parabolic_approx,
    shock_profile,
    surface_sample,
)
from physics.params import validate_parameters
from physics.services import RunawayService, clamp_points, round_list

MAX_INSIDE_POINTS = 10000


def _parse_positions(raw):
    if raw is None:
        return []
    if not isinstance(raw, list):
        raise ValueError("'positions' must be a list of [x, y, z]")
    if len(raw) > MAX_INSIDE_POINTS:
        raise ValueError(
            "At most {} positions per request".format(MAX_INSIDE_POINTS)
        )
    out = []
    for idx, pos in enumerate(raw):
        if not isinstance(pos, (list, tuple)) or len(pos) != 3:
            raise ValueError("Position {} must be [x, y, z]".format(idx))
        coords = []
        for c in pos:
            if isinstance(c, bool) or not isinstance(c, (int, float)):
                raise ValueError("Position {} must be numeric".format(idx))
            if not math.isfinite(c):
                raise ValueError("Position {} must be finite".format(idx))
            coords.append(float(c))
        out.append(tuple(coords))
    return out


class BowShockService(RunawayService):

    id = "bowshock"
    name = "Bow Shock Geometry"
    description = "Wilkin thin-shell shock shape, surface mesh and inside test"
    category = "geometry"

    def __init__(self, max_points=2000, max_grid=256):
        self.max_points = max_points
        self.max_grid = max_grid

    def validate(self, config):
        """Validate geometry request payload."""
        return {
            "params": validate_parameters(config),
            "n_points": clamp_points(config.get("n_points"), 200, 10, self.max_points),
            "n_theta": clamp_points(config.get("n_theta"), 80, 4, self.max_grid, "n_theta"),
            "n_phi": clamp_points(config.get("n_phi"), 64, 4, self.max_grid, "n_phi"),
            "positions": _parse_positions(config.get("positions")),
        }

    def compute(self, config):
        """2D shock outline for the current R_c."""
        params = config["params"]
        R0 = params.R_0
        profile = shock_profile(R0, config["n_points"])
        return {
            "R_0": R0,
            "R_c": params.R_c,
            "theta": round_list([p["theta"] for p in profile], 6),
            "R": round_list([p["R"] for p in profile], 6),
            "x": round_list([p["x"] for p in profile], 6),
            "y": round_list([p["y"] for p in profile], 6),
        }

    def compute_surface(self, config):
        """Triangulated 3D surface buffers for the current R_c."""
        params = config["params"]
        surface = surface_sample(params.R_0, config["n_theta"], config["n_phi"])
        result = surface.to_dict()
        result["R_0"] = params.R_0
        return result

    def compute_inside(self, config):
        """Inside test plus the near-apex parabolic half-width per point."""
        params = config["params"]
        R0 = params.R_0
        inside = []
        parabolic = []
        for pos in config["positions"]:
            inside.append(inside_shock(pos, R0))
            # Distance behind the apex along the motion axis.
            parabolic.append(round(parabolic_approx(pos[2] + R0, params.R_c), 6))
        return {
            "R_0": R0,
            "inside": inside,
            "parabolic_radius": parabolic,
        }

    def register_routes(self, bp):
        """Register bow shock API endpoints on the given blueprint."""
        service = self

        @bp.route("/bowshock/profile", methods=["POST"])
        def bowshock_profile():
            return service.handle(service.compute)

        @bp.route("/bowshock/surface", methods=["POST"])
        def bowshock_surface():
            return service.handle(service.compute_surface)

        @bp.route("/bowshock/inside", methods=["POST"])
        def bowshock_inside():
            return service.handle(service.compute_inside)
