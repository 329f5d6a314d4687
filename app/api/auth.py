# coding: utf8
from flask_jwt_extended import jwt_required
from flask_restx import Namespace, Resource
from app.decorators import parameters
from app.lib.response import Response
from app.services.auth import AuthService
import const

ns = Namespace(name="auth", description="Auth API")


@ns.route("/register")
class APIRegister(Resource):

    @parameters(
        type="object",
        properties={
            "name": {"type": "string"},
            "email": {"type": "string"},
            "mobile": {"type": "string"},
            "password": {"type": "string"},
            "role": {"type": "string", "enum": list(const.ROLES)},
            "profile_image": {"type": ["string", "null"]},
        },
        required=["name", "email", "mobile", "password", "role"],
    )
    def post(self, args):
        user = AuthService.register(
            name=args.get("name"),
            email=args.get("email"),
            mobile=args.get("mobile"),
            password=args.get("password"),
            role=args.get("role"),
            profile_image=args.get("profile_image"),
        )
        return Response(
            code=201,
            status=201,
            data=user.to_dict(),
            message="User registered successfully",
        ).to_dict()


@ns.route("/login")
class APILogin(Resource):

    @parameters(
        type="object",
        properties={
            "mobile": {"type": "string"},
            "password": {"type": "string"},
        },
        required=["mobile", "password"],
    )
    def post(self, args):
        user = AuthService.login(args.get("mobile"), args.get("password"))

        tokens = AuthService.generate_token(user)
        tokens.update(
            {
                "type": "Bearer",
                "expires_in": const.TOKEN_EXPIRES_IN,
            }
        )

        return Response(
            data=tokens,
            message="Login successful",
        ).to_dict()


@ns.route("/refresh")
class APIRefreshToken(Resource):

    @jwt_required(refresh=True)
    def post(self):
        return Response(
            data=AuthService.refresh_token(),
            message="Token refreshed",
        ).to_dict()


@ns.route("/me")
class APIMe(Resource):

    @jwt_required()
    def get(self):
        user = AuthService.require_current_user()
        return Response(
            data=user.to_dict(),
            message="Success",
        ).to_dict()
