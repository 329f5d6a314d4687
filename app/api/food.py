# coding: utf8
from flask import request
from flask_restx import Namespace, Resource
from app.decorators import parameters, staff_required
from app.lib.response import Response
from app.services.food import FoodService

ns = Namespace(name="food", description="Food API")

FOOD_PROPERTIES = {
    "name": {"type": "string", "minLength": 1},
    "image": {"type": ["string", "null"]},
    "offer_details": {"type": ["string", "null"]},
    "customer_rate": {"type": ["number", "string", "null"]},
    "food_type": {"type": ["string", "null"]},
    "amount": {"type": ["number", "string"]},
    "discount": {"type": ["number", "string", "null"]},
    "description": {"type": ["string", "null"]},
    "subcategory_id": {"type": ["integer", "null"]},
}


@ns.route("/")
class APIFoods(Resource):

    def get(self):
        subcategory_id = request.args.get("subcategory_id", None, type=int)
        foods = FoodService.get_foods(subcategory_id)
        return Response(data=[food._to_json() for food in foods]).to_dict()

    @staff_required()
    @parameters(type="object", properties=FOOD_PROPERTIES, required=["name", "amount"])
    def post(self, args):
        food = FoodService.create_food(**args)
        return Response(
            code=201,
            status=201,
            data=food._to_json(),
            message="Food created successfully",
        ).to_dict()


@ns.route("/<int:id>")
class APIFood(Resource):

    def get(self, id):
        return Response(data=FoodService.get_food(id)._to_json()).to_dict()

    @staff_required()
    @parameters(type="object", properties=FOOD_PROPERTIES)
    def put(self, args, id):
        food = FoodService.update_food(id, **args)
        return Response(
            data=food._to_json(), message="Food updated successfully"
        ).to_dict()

    @staff_required()
    def delete(self, id):
        FoodService.delete_food(id)
        return Response(message="Food deleted successfully").to_dict()
