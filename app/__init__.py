# coding: utf8
import os

from werkzeug.exceptions import default_exceptions

from app.lib.logger import logger

from .errors.exceptions import ApiError
from .errors.handler import api_error_handler

from flask import Flask, jsonify
from flask_cors import CORS
from .extensions import db, bcrypt, jwt, make_celery


def create_app(config_app):
    app = Flask(__name__)

    cors_scheme = os.environ.get("CORS_SCHEME") or "*"

    CORS(app, resources={r"/*": {"origins": cors_scheme}})
    app.config.from_object(config_app)
    __init_app(app)
    __config_logging(app)
    __register_blueprint(app)
    __config_error_handlers(app)

    return app


def __config_logging(app):
    logger.info("Start flask...")


def __register_blueprint(app):
    from app.api import bp as api_bp

    app.register_blueprint(api_bp)


def __init_app(app):
    # Tables are only known to the metadata once their modules are imported
    from app.models import (  # noqa
        address,
        cart,
        category,
        food,
        notification,
        order,
        order_history,
        user,
    )

    db.init_app(app)
    bcrypt.init_app(app)
    jwt.init_app(app)

    celery = make_celery(app)
    app.extensions["celery"] = celery

    with app.app_context():
        db.create_all()

    logger.info("Initial app...")


def __config_error_handlers(app):
    for exp in default_exceptions:
        app.register_error_handler(exp, api_error_handler)
    app.register_error_handler(ApiError, api_error_handler)
    app.register_error_handler(Exception, api_error_handler)

    @jwt.expired_token_loader
    def expired_token_callback(jwt_header, jwt_payload):
        return (
            jsonify(
                {"code": 401, "error": "AUTH_ERROR", "message": "The token has expired"}
            ),
            401,
        )

    @jwt.invalid_token_loader
    def invalid_token_callback(reason):
        return (
            jsonify({"code": 401, "error": "AUTH_ERROR", "message": "Invalid token"}),
            401,
        )

    @jwt.unauthorized_loader
    def unauthorized_callback(reason):
        return (
            jsonify(
                {
                    "code": 401,
                    "error": "AUTH_ERROR",
                    "message": "Missing Authorization Header",
                }
            ),
            401,
        )
