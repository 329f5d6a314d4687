import json
from dataclasses import FrozenInstanceError
from datetime import datetime

import pytest
from sqlalchemy import func, select, update

from app.errors.exceptions import InvalidStatus, InvalidTransition, OrderNotFound
from app.extensions import db
from app.models.cart import Cart
from app.models.notification import Notification
from app.models.order import Order, OrderItem
from app.models.order_history import OrderHistory
from app.services.cart import CartService
from app.services.order import OrderService, OrderSnapshot, OrderStatusMachine
from app.services.order_history import OrderHistoryService
import const


def _place(client, headers, **overrides):
    payload = {
        "payment_method": "cash_on_delivery",
        "delivery_address": "12 MG Road, Pune",
    }
    payload.update(overrides)
    return client.post("/api/v1/order/create", json=payload, headers=headers)


def _count(model, *filters):
    return db.session.execute(
        select(func.count()).select_from(model).where(*filters)
    ).scalar_one()


def test_place_order_scenario(app, client, headers, users, filled_cart):
    res = _place(client, headers["customer"])

    assert res.status_code == 201
    data = res.get_json()["data"]
    assert data["total_amount"] == 655.0
    order_id = data["order_id"]

    with app.app_context():
        order = db.session.get(Order, order_id)
        assert order.order_status == const.ORDER_PENDING
        assert order.user_name == "Asha"
        assert order.user_mobile == "9000000001"
        assert _count(OrderItem, OrderItem.order_id == order_id) == 2
        assert _count(OrderHistory, OrderHistory.order_id == order_id) == 2
        assert _count(Cart, Cart.user_id == users["customer"]) == 0

        notifications = (
            db.session.execute(
                select(Notification).where(Notification.order_id == order_id)
            )
            .unique()
            .scalars()
            .all()
        )
        assert sorted(n.receiver_id for n in notifications) == sorted(
            [users["owner"], users["admin"]]
        )
        assert all(not n.is_read for n in notifications)
        assert notifications[0].message == (
            f"New Order #{order_id} placed by Asha. Amount: 655.00"
        )


def test_history_details_snapshot(app, client, headers, users, filled_cart):
    order_id = _place(client, headers["customer"]).get_json()["data"]["order_id"]

    with app.app_context():
        entries = OrderHistoryService.get_by_user(users["customer"])
        details = sorted(
            (json.loads(entry.order_details) for entry in entries),
            key=lambda item: item["food_name"],
        )
        assert {entry.order_id for entry in entries} == {order_id}
        assert details[0] == {
            "food_name": "Chicken Biryani",
            "price": 230.0,
            "quantity": 2,
            "image": "chicken.jpg",
            "total_item_price": 460.0,
        }


def test_order_total_survives_price_change(app, client, headers, filled_cart):
    order_id = _place(client, headers["customer"]).get_json()["data"]["order_id"]

    client.put(
        f"/api/v1/food/{filled_cart['chicken']}",
        json={"amount": 999, "discount": 0},
        headers=headers["admin"],
    )

    res = client.get(f"/api/v1/order/{order_id}", headers=headers["customer"])
    order = res.get_json()["data"]
    assert order["total_amount"] == 655.0
    assert sum(item["price"] * item["quantity"] for item in order["items"]) == 655.0


def test_failure_rolls_back_everything(
    app, client, headers, users, filled_cart, monkeypatch
):
    def broken_record(*args, **kwargs):
        raise RuntimeError("disk full")

    monkeypatch.setattr(OrderHistoryService, "record", broken_record)

    res = _place(client, headers["customer"])
    assert res.status_code == 500
    assert res.get_json()["error"] == "STORAGE_ERROR"

    with app.app_context():
        assert _count(Order) == 0
        assert _count(OrderItem) == 0
        assert _count(OrderHistory) == 0
        assert _count(Notification) == 0
        assert _count(Cart, Cart.user_id == users["customer"]) == 2


def test_notification_failure_does_not_fail_order(
    app, client, headers, users, filled_cart, monkeypatch
):
    from app.tasks.send_notification import send_staff_notification

    def broken_delay(*args, **kwargs):
        raise ConnectionError("broker unavailable")

    monkeypatch.setattr(send_staff_notification, "delay", broken_delay)

    res = _place(client, headers["customer"])
    assert res.status_code == 201

    with app.app_context():
        assert _count(Order) == 1
        assert _count(Notification) == 0
        assert _count(Cart, Cart.user_id == users["customer"]) == 0


def test_empty_cart(client, headers, catalog):
    res = _place(client, headers["customer"])
    assert res.status_code == 400
    assert res.get_json()["error"] == "EMPTY_CART"


def test_invalid_payment_method(client, headers, filled_cart):
    res = _place(client, headers["customer"], payment_method="bitcoin")
    assert res.status_code == 400
    assert res.get_json()["error"] == "VALIDATION_ERROR"


def test_missing_delivery_address(client, headers, filled_cart):
    res = _place(client, headers["customer"], delivery_address="")
    assert res.status_code == 400
    assert res.get_json()["error"] == "MISSING_FIELDS"


def test_user_info_overrides_profile(app, client, headers, filled_cart):
    res = _place(
        client,
        headers["customer"],
        payment_method="upi",
        user_info={"name": "Asha K", "email": "k@example.com", "mobile": "9999999999"},
    )
    order_id = res.get_json()["data"]["order_id"]

    with app.app_context():
        order = db.session.get(Order, order_id)
        assert order.user_name == "Asha K"
        assert order.payment_method == "upi"


def test_staff_order_does_not_notify_self(app, client, headers, users, catalog):
    client.post(
        "/api/v1/cart/add",
        json={"food_id": catalog["paneer"]},
        headers=headers["owner"],
    )
    order_id = _place(client, headers["owner"]).get_json()["data"]["order_id"]

    with app.app_context():
        receivers = db.session.execute(
            select(Notification.receiver_id).where(Notification.order_id == order_id)
        ).scalars().all()
        assert receivers == [users["admin"]]


def test_order_ownership(client, headers, filled_cart):
    order_id = _place(client, headers["customer"]).get_json()["data"]["order_id"]

    assert (
        client.get(f"/api/v1/order/{order_id}", headers=headers["customer"]).status_code
        == 200
    )
    assert (
        client.get(f"/api/v1/order/{order_id}", headers=headers["admin"]).status_code
        == 200
    )
    res = client.get(f"/api/v1/order/{order_id}", headers=headers["other"])
    assert res.status_code == 403
    assert res.get_json()["error"] == "ACCESS_DENIED"


def test_order_lists(client, headers, filled_cart):
    _place(client, headers["customer"])

    mine = client.get("/api/v1/order/user", headers=headers["customer"]).get_json()
    assert len(mine["data"]) == 1
    theirs = client.get("/api/v1/order/user", headers=headers["other"]).get_json()
    assert theirs["data"] == []

    assert client.get("/api/v1/order/all", headers=headers["customer"]).status_code == 403
    everything = client.get(
        "/api/v1/order/all?page=1&per_page=5", headers=headers["owner"]
    ).get_json()["data"]
    assert everything["total"] == 1
    assert everything["total_pages"] == 1
    assert len(everything["items"]) == 1


def test_missing_order(client, headers, users):
    res = client.get("/api/v1/order/404", headers=headers["admin"])
    assert res.status_code == 404
    assert res.get_json()["error"] == "ORDER_NOT_FOUND"


def test_status_update(client, headers, filled_cart):
    order_id = _place(client, headers["customer"]).get_json()["data"]["order_id"]

    res = client.put(
        f"/api/v1/order/{order_id}/status",
        json={"status": "approved"},
        headers=headers["admin"],
    )
    assert res.status_code == 200
    assert res.get_json()["data"]["order_status"] == "approved"


def test_status_update_requires_staff(client, headers, filled_cart):
    order_id = _place(client, headers["customer"]).get_json()["data"]["order_id"]

    res = client.put(
        f"/api/v1/order/{order_id}/status",
        json={"status": "approved"},
        headers=headers["customer"],
    )
    assert res.status_code == 403


def test_shipped_is_rejected(app, client, headers, filled_cart):
    order_id = _place(client, headers["customer"]).get_json()["data"]["order_id"]

    res = client.put(
        f"/api/v1/order/{order_id}/status",
        json={"status": "shipped"},
        headers=headers["admin"],
    )
    assert res.status_code == 400
    assert res.get_json()["error"] == "INVALID_STATUS"

    with app.app_context():
        assert db.session.get(Order, order_id).order_status == const.ORDER_PENDING
        with pytest.raises(InvalidStatus):
            OrderStatusMachine.apply(order_id, "shipped")


def test_terminal_status_cannot_change(app, client, headers, filled_cart):
    order_id = _place(client, headers["customer"]).get_json()["data"]["order_id"]

    with app.app_context():
        OrderStatusMachine.apply(order_id, const.ORDER_REJECTED)
        # re-applying the current status is accepted
        OrderStatusMachine.apply(order_id, const.ORDER_REJECTED)
        with pytest.raises(InvalidTransition):
            OrderStatusMachine.apply(order_id, const.ORDER_APPROVED)

    res = client.put(
        f"/api/v1/order/{order_id}/status",
        json={"status": "delivered"},
        headers=headers["admin"],
    )
    assert res.status_code == 409
    assert res.get_json()["error"] == "INVALID_TRANSITION"


def test_transition_table_is_configurable(app, client, headers, filled_cart):
    order_id = _place(client, headers["customer"]).get_json()["data"]["order_id"]
    app.config["ORDER_STATUS_TRANSITIONS"] = {
        const.ORDER_PENDING: (const.ORDER_APPROVED,),
        const.ORDER_APPROVED: (const.ORDER_DELIVERED,),
    }

    with app.app_context():
        with pytest.raises(InvalidTransition):
            OrderStatusMachine.apply(order_id, const.ORDER_DELIVERED)
        OrderStatusMachine.apply(order_id, const.ORDER_APPROVED)
        OrderStatusMachine.apply(order_id, const.ORDER_DELIVERED)
        assert db.session.get(Order, order_id).order_status == const.ORDER_DELIVERED


def test_status_of_missing_order(app, users):
    with app.app_context():
        with pytest.raises(OrderNotFound):
            OrderStatusMachine.apply(12345, const.ORDER_APPROVED)


def test_stats(client, headers, filled_cart):
    order_id = _place(client, headers["customer"]).get_json()["data"]["order_id"]
    client.put(
        f"/api/v1/order/{order_id}/status",
        json={"status": "approved"},
        headers=headers["admin"],
    )

    res = client.get("/api/v1/order/stats/overview", headers=headers["owner"])
    assert res.get_json()["data"] == {
        "total_orders": 1,
        "pending_orders": 0,
        "approved_orders": 1,
        "rejected_orders": 0,
        "delivered_orders": 0,
        "total_revenue": 655.0,
    }


def test_items_survive_food_deletion(app, client, headers, filled_cart):
    order_id = _place(client, headers["customer"]).get_json()["data"]["order_id"]

    res = client.delete(
        f"/api/v1/food/{filled_cart['chicken']}", headers=headers["admin"]
    )
    assert res.status_code == 200

    order = client.get(f"/api/v1/order/{order_id}", headers=headers["customer"])
    items = {item["food_name"]: item for item in order.get_json()["data"]["items"]}
    assert items["Chicken Biryani"]["food_id"] is None
    assert items["Chicken Biryani"]["price"] == 230.0
    assert order.get_json()["data"]["total_amount"] == 655.0


def test_snapshot_total(app, users, filled_cart):
    with app.app_context():
        snapshot = OrderSnapshot.from_cart_lines(
            CartService.priced_lines(users["customer"])
        )
        assert len(snapshot.lines) == 2
        assert float(snapshot.total_amount) == 655.0
        with pytest.raises(FrozenInstanceError):
            snapshot.lines[0].quantity = 10


def test_place_order_service_directly(app, users, filled_cart):
    with app.app_context():
        result = OrderService.place_order(
            users["customer"], "upi", "Flat 4, Baner Road"
        )
        assert result["total_amount"] == 655.0
        order = OrderService.get_order(result["order_id"])
        assert [item.food_name for item in order.items] == [
            "Chicken Biryani",
            "Paneer Biryani",
        ]


def test_order_history_access(client, headers, users, filled_cart):
    _place(client, headers["customer"])

    res = client.get(
        f"/api/v1/order_history/user/{users['customer']}", headers=headers["customer"]
    )
    entries = res.get_json()["data"]
    assert len(entries) == 2
    assert {e["order_details"]["food_name"] for e in entries} == {
        "Chicken Biryani",
        "Paneer Biryani",
    }

    entry_id = entries[0]["id"]
    assert (
        client.get(
            f"/api/v1/order_history/{entry_id}", headers=headers["other"]
        ).status_code
        == 403
    )
    assert (
        client.get(
            f"/api/v1/order_history/user/{users['customer']}", headers=headers["other"]
        ).status_code
        == 403
    )

    res = client.get("/api/v1/order_history/", headers=headers["admin"])
    assert len(res.get_json()["data"]) == 2
    assert client.get("/api/v1/order_history/", headers=headers["other"]).status_code == 403


def test_partial_user_info_is_filled_from_profile(app, client, headers, filled_cart):
    res = _place(client, headers["customer"], user_info={"name": "Asha K", "email": ""})
    order_id = res.get_json()["data"]["order_id"]

    with app.app_context():
        order = db.session.get(Order, order_id)
        assert order.user_name == "Asha K"
        assert order.user_email == "asha@example.com"
        assert order.user_mobile == "9000000001"


def test_cart_clear_failure_rolls_back_order(
    app, client, headers, users, filled_cart, monkeypatch
):
    def broken_clear(session, user_id):
        raise RuntimeError("lock timeout")

    monkeypatch.setattr(CartService, "clear_lines", staticmethod(broken_clear))

    res = _place(client, headers["customer"])
    assert res.status_code == 500
    assert res.get_json()["error"] == "STORAGE_ERROR"

    with app.app_context():
        assert _count(Order) == 0
        assert _count(OrderItem) == 0
        assert _count(OrderHistory) == 0
        assert _count(Cart, Cart.user_id == users["customer"]) == 2


def test_status_update_refreshes_updated_at(app, client, headers, filled_cart):
    order_id = _place(client, headers["customer"]).get_json()["data"]["order_id"]
    long_ago = datetime(2020, 1, 1)

    with app.app_context():
        db.session.execute(
            update(Order).where(Order.id == order_id).values(updated_at=long_ago)
        )
        db.session.commit()

        OrderStatusMachine.apply(order_id, const.ORDER_APPROVED)
        db.session.expire_all()
        order = db.session.get(Order, order_id)
        assert order.order_status == const.ORDER_APPROVED
        assert order.updated_at > long_ago
