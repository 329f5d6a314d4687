# coding: utf8
from flask import Blueprint
from flask_restx import Api

from app.api.auth import ns as auth_ns
from app.api.user import ns as user_ns
from app.api.category import ns as category_ns
from app.api.food import ns as food_ns
from app.api.cart import ns as cart_ns
from app.api.order import ns as order_ns
from app.api.order_history import ns as order_history_ns
from app.api.address import ns as address_ns
from app.api.notification import ns as notification_ns
from app.api.dashboard import ns as dashboard_ns

bp = Blueprint("api", __name__, url_prefix="/api/v1")

api = Api(
    bp,
    version="1.0",
    title="Food Order API",
    description="Food ordering backend",
    doc="/docs/",
)


api.add_namespace(ns=auth_ns)
api.add_namespace(ns=user_ns)
api.add_namespace(ns=category_ns)
api.add_namespace(ns=food_ns)
api.add_namespace(ns=cart_ns)
api.add_namespace(ns=order_ns)
api.add_namespace(ns=order_history_ns)
api.add_namespace(ns=address_ns)
api.add_namespace(ns=notification_ns)
api.add_namespace(ns=dashboard_ns)
