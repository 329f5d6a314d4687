# coding: utf8
from flask_jwt_extended import jwt_required
from flask_restx import Namespace, Resource
from app.decorators import parameters, staff_required
from app.lib.response import Response
from app.services.auth import AuthService
from app.services.user import UserService

ns = Namespace(name="user", description="User API")


@ns.route("/profile")
class APIUserProfile(Resource):

    @jwt_required()
    def get(self):
        user = AuthService.require_current_user()
        return Response(data=user.to_dict(), message="Success").to_dict()


@ns.route("/update")
class APIUpdateUser(Resource):

    @jwt_required()
    @parameters(
        type="object",
        properties={
            "name": {"type": "string", "minLength": 1},
            "email": {"type": "string"},
            "mobile": {"type": "string", "pattern": "^[0-9]{10}$"},
            "profile_image": {"type": ["string", "null"]},
            "address": {"type": ["string", "null"]},
            "bio": {"type": ["string", "null"]},
        },
    )
    def post(self, args):
        user_id = AuthService.get_user_id()
        user = UserService.update_user(user_id, **args)
        return Response(data=user.to_dict(), message="Profile updated").to_dict()


@ns.route("/update-password")
class APIUpdatePassword(Resource):

    @jwt_required()
    @parameters(
        type="object",
        properties={
            "current_password": {"type": "string"},
            "new_password": {"type": "string"},
        },
        required=["current_password", "new_password"],
    )
    def post(self, args):
        UserService.update_password(
            AuthService.get_user_id(),
            args.get("current_password"),
            args.get("new_password"),
        )
        return Response(message="Password updated successfully").to_dict()


@ns.route("/users")
class APIUsers(Resource):

    @staff_required()
    def get(self):
        users = UserService.find_users()
        return Response(
            data=[user.to_dict() for user in users], message="Success"
        ).to_dict()


@ns.route("/check-user")
class APICheckUser(Resource):

    @parameters(
        type="object",
        properties={"mobile": {"type": "string"}},
        required=["mobile"],
    )
    def get(self, args):
        user = UserService.find_user_by_mobile(args.get("mobile"))
        return Response(data={"exists": user is not None}).to_dict()


@ns.route("/<int:id>")
class APIUserById(Resource):

    @staff_required()
    @parameters(
        type="object",
        properties={
            "name": {"type": "string", "minLength": 1},
            "email": {"type": "string"},
            "mobile": {"type": "string", "pattern": "^[0-9]{10}$"},
        },
    )
    def put(self, args, id):
        user = UserService.update_user(id, **args)
        return Response(data=user.to_dict(), message="User updated").to_dict()
