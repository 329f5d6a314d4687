from decimal import Decimal

import pytest
from flask_jwt_extended import create_access_token

from app import create_app
from app.config import TestingConfig
from app.extensions import db
from app.models.category import Category, Subcategory
from app.models.food import Food
from app.models.user import User
import const

PASSWORD = "secret123"


@pytest.fixture
def app(tmp_path):
    class Config(TestingConfig):
        SQLALCHEMY_DATABASE_URI = "sqlite:///{}".format(tmp_path / "food_order.db")

    application = create_app(Config)
    yield application

    with application.app_context():
        db.session.remove()
        db.drop_all()
        db.engine.dispose()


@pytest.fixture
def client(app):
    return app.test_client()


def _create_user(name, email, mobile, role):
    user = User(name=name, email=email, mobile=mobile, role=role)
    user.set_password(PASSWORD)
    db.session.add(user)
    db.session.commit()
    return user.id


@pytest.fixture
def users(app):
    """Ids of one account per role plus a second customer."""
    with app.app_context():
        return {
            "customer": _create_user(
                "Asha", "asha@example.com", "9000000001", const.ROLE_CUSTOMER
            ),
            "other": _create_user(
                "Ravi", "ravi@example.com", "9000000002", const.ROLE_CUSTOMER
            ),
            "owner": _create_user(
                "Owner", "owner@example.com", "9000000003", const.ROLE_OWNER
            ),
            "admin": _create_user(
                "Admin", "admin@example.com", "9000000004", const.ROLE_ADMIN
            ),
        }


@pytest.fixture
def headers(app, users):
    roles = {
        "customer": const.ROLE_CUSTOMER,
        "other": const.ROLE_CUSTOMER,
        "owner": const.ROLE_OWNER,
        "admin": const.ROLE_ADMIN,
    }
    with app.app_context():
        return {
            key: {
                "Authorization": "Bearer "
                + create_access_token(
                    identity=str(user_id), additional_claims={"role": roles[key]}
                )
            }
            for key, user_id in users.items()
        }


@pytest.fixture
def catalog(app):
    """Two biryanis priced 230 and 195 after discount."""
    with app.app_context():
        category = Category(name="Main Course")
        db.session.add(category)
        db.session.flush()
        subcategory = Subcategory(name="Biryani", category_id=category.id)
        db.session.add(subcategory)
        db.session.flush()

        chicken = Food(
            name="Chicken Biryani",
            image="chicken.jpg",
            amount=Decimal("250.00"),
            discount=Decimal("20.00"),
            subcategory_id=subcategory.id,
        )
        paneer = Food(
            name="Paneer Biryani",
            image="paneer.jpg",
            amount=Decimal("195.00"),
            subcategory_id=subcategory.id,
        )
        db.session.add_all([chicken, paneer])
        db.session.commit()
        return {
            "category": category.id,
            "subcategory": subcategory.id,
            "chicken": chicken.id,
            "paneer": paneer.id,
        }


@pytest.fixture
def filled_cart(client, headers, catalog):
    client.post(
        "/api/v1/cart/add",
        json={"food_id": catalog["chicken"], "quantity": 2},
        headers=headers["customer"],
    )
    client.post(
        "/api/v1/cart/add",
        json={"food_id": catalog["paneer"], "quantity": 1},
        headers=headers["customer"],
    )
    return catalog
