"""
Dashboard Service.

Serves the derived-quantity readout: mass estimate (Eq 23), standoff
radius, Mach number, sound speed, wake age, shock velocity at the tip,
wake LOS velocity and v/c, all from one parameter snapshot.

Endpoints:
    POST /api/dashboard - derived scalars for the given parameters
"""

from physics.energetics import compute_dashboard
from physics.params import validate_parameters
from physics.services import RunawayService


class DashboardService(RunawayService):

    id = "dashboard"
    name = "Dashboard"
    description = "Mass estimate, Mach number, wake age and derived scalars"
    category = "energetics"

    def validate(self, config):
        """Validate dashboard request payload."""
        return {"params": validate_parameters(config)}

    def compute(self, config):
        """Derived scalars for one parameter snapshot."""
        return compute_dashboard(config["params"])

    def register_routes(self, bp):
        """Register the dashboard endpoint on the given blueprint."""
        service = self

        @bp.route("/dashboard", methods=["POST"])
        def dashboard():
            return service.handle(service.compute)
