# coding: utf8
from flask_restx import Namespace, Resource
from app.decorators import staff_required
from app.lib.response import Response
from app.services.dashboard import DashboardService

ns = Namespace(name="dashboard", description="Dashboard API")


@ns.route("/stats")
class APIDashboardStats(Resource):

    @staff_required()
    def get(self):
        return Response(
            data=DashboardService.get_stats(),
            message="Dashboard statistics retrieved successfully",
        ).to_dict()
