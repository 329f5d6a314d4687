# coding: utf8
from flask import request
from flask_jwt_extended import jwt_required
from flask_restx import Namespace, Resource
from app.decorators import parameters, staff_required
from app.lib.response import Response
from app.services.auth import AuthService
from app.services.order import OrderService
import const

ns = Namespace(name="order", description="Order API")


@ns.route("/create")
class APICreateOrder(Resource):

    @jwt_required()
    @parameters(
        type="object",
        properties={
            "payment_method": {"type": "string", "enum": list(const.PAYMENT_METHODS)},
            "delivery_address": {"type": "string"},
            "user_info": {
                "type": ["object", "null"],
                "properties": {
                    "name": {"type": "string"},
                    "email": {"type": "string"},
                    "mobile": {"type": "string"},
                },
            },
        },
        required=["payment_method", "delivery_address"],
    )
    def post(self, args):
        result = OrderService.place_order(
            AuthService.get_user_id(),
            args.get("payment_method"),
            args.get("delivery_address"),
            args.get("user_info"),
        )
        return Response(
            code=201,
            status=201,
            data=result,
            message="Order created successfully",
        ).to_dict()


@ns.route("/user")
class APIUserOrders(Resource):

    @jwt_required()
    def get(self):
        orders = OrderService.list_orders(AuthService.get_user_id())
        return Response(
            data=[order.to_dict() for order in orders],
            message="Orders retrieved successfully",
        ).to_dict()


@ns.route("/all")
class APIAllOrders(Resource):

    @staff_required()
    def get(self):
        page = request.args.get("page", const.DEFAULT_PAGE, type=int)
        per_page = request.args.get("per_page", const.DEFAULT_PER_PAGE, type=int)
        result = OrderService.paginate_orders(page, per_page)
        return Response(
            data={
                "total": result.get("total", 0),
                "page": result.get("page", 0),
                "per_page": result.get("per_page", 0),
                "total_pages": result.get("pages", 0),
                "items": [order.to_dict() for order in result.get("items", [])],
            },
            message="All orders retrieved successfully",
        ).to_dict()


@ns.route("/<int:order_id>")
class APIOrder(Resource):

    @jwt_required()
    def get(self, order_id):
        current_user = AuthService.require_current_user()
        order = OrderService.get_order_for(order_id, current_user)
        return Response(
            data=order.to_dict(with_items=True),
            message="Order retrieved successfully",
        ).to_dict()


@ns.route("/<int:order_id>/status")
class APIOrderStatus(Resource):

    @staff_required()
    @parameters(
        type="object",
        properties={"status": {"type": "string"}},
        required=["status"],
    )
    def put(self, args, order_id):
        order = OrderService.update_status(order_id, args.get("status"))
        return Response(
            data=order.to_dict(),
            message="Order status updated successfully",
        ).to_dict()


@ns.route("/stats/overview")
class APIOrderStats(Resource):

    @staff_required()
    def get(self):
        return Response(
            data=OrderService.get_stats(),
            message="Order statistics retrieved successfully",
        ).to_dict()
