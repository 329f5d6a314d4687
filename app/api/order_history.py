# coding: utf8
from flask_jwt_extended import jwt_required
from flask_restx import Namespace, Resource
from app.decorators import staff_required
from app.errors.exceptions import AccessDeniedError
from app.lib.response import Response
from app.services.auth import AuthService
from app.services.order_history import OrderHistoryService

ns = Namespace(name="order_history", description="Order history API")


@ns.route("/")
class APIOrderHistories(Resource):

    @staff_required()
    def get(self):
        entries = OrderHistoryService.get_all()
        return Response(data=[entry._to_json() for entry in entries]).to_dict()


@ns.route("/<int:id>")
class APIOrderHistory(Resource):

    @jwt_required()
    def get(self, id):
        current_user = AuthService.require_current_user()
        entry = OrderHistoryService.get_by_id(id)
        if entry.user_id != current_user.id and not current_user.is_staff:
            raise AccessDeniedError()
        return Response(data=entry._to_json()).to_dict()


@ns.route("/user/<int:user_id>")
class APIUserOrderHistory(Resource):

    @jwt_required()
    def get(self, user_id):
        current_user = AuthService.require_current_user()
        if user_id != current_user.id and not current_user.is_staff:
            raise AccessDeniedError()
        entries = OrderHistoryService.get_by_user(user_id)
        return Response(data=[entry._to_json() for entry in entries]).to_dict()
