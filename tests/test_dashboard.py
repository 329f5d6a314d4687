from datetime import datetime

from sqlalchemy import update

from app.extensions import db
from app.models.user import User
from app.services.dashboard import DashboardService


def _stats(client, headers):
    res = client.get("/api/v1/dashboard/stats", headers=headers)
    assert res.status_code == 200
    return res.get_json()["data"]


def test_dashboard_requires_staff(client, headers):
    res = client.get("/api/v1/dashboard/stats", headers=headers["customer"])
    assert res.status_code == 403

    res = client.get("/api/v1/dashboard/stats")
    assert res.status_code == 401


def test_dashboard_totals(client, headers, users, filled_cart):
    data = _stats(client, headers["owner"])
    assert data["stats"] == {"total_users": 4, "total_orders": 0, "total_sales": 0.0}
    assert data["order_trends"] == []
    assert sum(month["count"] for month in data["user_growth"]) == 4

    res = client.post(
        "/api/v1/order/create",
        json={
            "payment_method": "cash_on_delivery",
            "delivery_address": "12 MG Road, Pune",
        },
        headers=headers["customer"],
    )
    order_id = res.get_json()["data"]["order_id"]

    data = _stats(client, headers["admin"])
    assert data["stats"]["total_orders"] == 1
    # only delivered orders count as sales
    assert data["stats"]["total_sales"] == 0.0
    assert [month["count"] for month in data["order_trends"]] == [1]

    res = client.put(
        f"/api/v1/order/{order_id}/status",
        json={"status": "delivered"},
        headers=headers["admin"],
    )
    assert res.status_code == 200

    data = _stats(client, headers["admin"])
    assert data["stats"]["total_sales"] == 655.0


def test_monthly_counts_are_grouped_and_ordered(app, users):
    with app.app_context():
        months = [
            datetime(2025, 1, 10),
            datetime(2025, 3, 5),
            datetime(2025, 3, 20),
            datetime(2025, 9, 1),
        ]
        for user_id, created_at in zip(sorted(users.values()), months):
            db.session.execute(
                update(User).where(User.id == user_id).values(created_at=created_at)
            )
        db.session.commit()

        growth = DashboardService.monthly_counts(User)
        assert growth == [
            {"month": "2025-01", "label": "Jan", "count": 1},
            {"month": "2025-03", "label": "Mar", "count": 2},
            {"month": "2025-09", "label": "Sep", "count": 1},
        ]

        assert DashboardService.monthly_counts(User, months=2) == growth[1:]
