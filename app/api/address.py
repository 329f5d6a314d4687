# coding: utf8
from flask_jwt_extended import jwt_required
from flask_restx import Namespace, Resource
from app.decorators import parameters
from app.lib.response import Response
from app.services.address import AddressService
from app.services.auth import AuthService

ns = Namespace(name="address", description="Address API")

ADDRESS_PROPERTIES = {
    "label": {"type": "string", "minLength": 1},
    "full_address": {"type": "string", "minLength": 1},
    "flat_no": {"type": ["string", "null"]},
    "landmark": {"type": ["string", "null"]},
    "city": {"type": ["string", "null"]},
    "state": {"type": ["string", "null"]},
    "pincode": {"type": ["string", "null"]},
    "latitude": {"type": ["number", "null"]},
    "longitude": {"type": ["number", "null"]},
    "is_default": {"type": "boolean"},
}


@ns.route("/")
class APIAddresses(Resource):

    @jwt_required()
    def get(self):
        addresses = AddressService.list_for(AuthService.get_user_id())
        return Response(data=[address._to_json() for address in addresses]).to_dict()

    @jwt_required()
    @parameters(
        type="object",
        properties=ADDRESS_PROPERTIES,
        required=["label", "full_address"],
    )
    def post(self, args):
        address = AddressService.create(AuthService.get_user_id(), **args)
        return Response(
            code=201,
            status=201,
            data=address._to_json(),
            message="Address added successfully",
        ).to_dict()


@ns.route("/<int:id>")
class APIAddress(Resource):

    @jwt_required()
    @parameters(type="object", properties=ADDRESS_PROPERTIES)
    def put(self, args, id):
        address = AddressService.update(id, AuthService.get_user_id(), **args)
        return Response(
            data=address._to_json(), message="Address updated successfully"
        ).to_dict()

    @jwt_required()
    def delete(self, id):
        AddressService.delete(id, AuthService.get_user_id())
        return Response(message="Address deleted successfully").to_dict()
