"""
Position-Velocity Service.

Serves the PV model curve (Eq 8) over the aperture [-R_ring, +R_ring] and
its comparison with observed PV points.

Endpoints:
    POST /api/pv/curve   - model curve {x, v} plus the wake baseline
    POST /api/pv/compare - model curve plus fit metrics against
                           caller-supplied observations

IMPORTANT: No unicode characters allowed (Windows charmap constraint).
"""

from data.observations import validate_points
from physics.fitting import compute_fit_metrics
from physics.params import validate_parameters
from physics.services import RunawayService, clamp_points, round_list
from physics.velocity import pv_model_curve, wake_baseline_velocity


class PVService(RunawayService):

    id = "pv"
    name = "PV Model"
    description = "Line-of-sight velocity across the bow shock (Eqs 1-8)"
    category = "kinematics"

    def __init__(self, max_points=2000):
        self.max_points = max_points

    def validate(self, config):
        """Validate PV request payload."""
        observations = config.get("observations")
        return {
            "params": validate_parameters(config),
            "n_points": clamp_points(config.get("n_points"), 200, 10, self.max_points),
            "observations": (
                validate_points(observations, "x") if observations is not None else None
            ),
        }

    def _curve_result(self, params, curve):
        return {
            "x": round_list(curve["x"], 6),
            "v": round_list(curve["v"], 4),
            "R_ring": params.R_ring,
            "v_los_wake": wake_baseline_velocity(params.v_star, params.chi, params.i),
        }

    def compute(self, config):
        """PV model curve for one parameter snapshot."""
        params = config["params"]
        curve = pv_model_curve(params, config["n_points"])
        return self._curve_result(params, curve)

    def compute_comparison(self, config):
        """PV curve plus fit metrics against the supplied observations."""
        params = config["params"]
        curve = pv_model_curve(params, config["n_points"])
        result = self._curve_result(params, curve)
        result["metrics"] = compute_fit_metrics(
            curve["x"], curve["v"], config["observations"], key="x"
        )
        return result

    def register_routes(self, bp):
        """Register PV API endpoints on the given blueprint."""
        service = self

        @bp.route("/pv/curve", methods=["POST"])
        def pv_curve():
            return service.handle(service.compute)

        @bp.route("/pv/compare", methods=["POST"])
        def pv_compare():
            return service.handle(service.compute_comparison)
