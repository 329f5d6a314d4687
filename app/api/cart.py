# coding: utf8
from flask_jwt_extended import jwt_required
from flask_restx import Namespace, Resource
from app.decorators import parameters
from app.lib.response import Response
from app.services.auth import AuthService
from app.services.cart import CartService

ns = Namespace(name="cart", description="Cart API")


def _cart_payload(user_id):
    lines = CartService.get_cart(user_id)
    return {
        "items": [line.to_dict() for line in lines],
        **CartService.get_cart_total(user_id),
    }


@ns.route("/")
class APICart(Resource):

    @jwt_required()
    def get(self):
        user_id = AuthService.get_user_id()
        return Response(data=_cart_payload(user_id), message="Success").to_dict()


@ns.route("/add")
class APICartAdd(Resource):

    @jwt_required()
    @parameters(
        type="object",
        properties={
            "food_id": {"type": "integer", "minimum": 1},
            "quantity": {"type": "integer", "minimum": 1},
        },
        required=["food_id"],
    )
    def post(self, args):
        user_id = AuthService.get_user_id()
        quantity = CartService.add_item(
            user_id, args.get("food_id"), args.get("quantity", 1)
        )
        return Response(
            data={"food_id": args.get("food_id"), "quantity": quantity},
            message="Item added to cart",
        ).to_dict()


@ns.route("/update")
class APICartUpdate(Resource):

    @jwt_required()
    @parameters(
        type="object",
        properties={
            "food_id": {"type": "integer", "minimum": 1},
            "quantity": {"type": "integer"},
        },
        required=["food_id", "quantity"],
    )
    def put(self, args):
        user_id = AuthService.get_user_id()
        CartService.update_quantity(user_id, args.get("food_id"), args.get("quantity"))
        return Response(data=_cart_payload(user_id), message="Cart updated").to_dict()


@ns.route("/remove/<int:food_id>")
class APICartRemove(Resource):

    @jwt_required()
    def delete(self, food_id):
        user_id = AuthService.get_user_id()
        CartService.remove_item(user_id, food_id)
        return Response(
            data=_cart_payload(user_id), message="Item removed from cart"
        ).to_dict()


@ns.route("/clear")
class APICartClear(Resource):

    @jwt_required()
    def delete(self):
        CartService.clear_cart(AuthService.get_user_id())
        return Response(message="Cart cleared").to_dict()
