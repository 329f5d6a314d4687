import calendar

from sqlalchemy import extract, func, select

from app.extensions import db
from app.models.order import Order
from app.models.user import User
import const

TREND_MONTHS = 6


class DashboardService:

    @staticmethod
    def monthly_counts(model, months=TREND_MONTHS):
        """Row counts of `model` per calendar month of `created_at`.

        Only the latest `months` months that have rows are returned,
        oldest first.
        """
        year = extract("year", model.created_at)
        month = extract("month", model.created_at)
        rows = db.session.execute(
            select(year, month, func.count(model.id))
            .where(model.created_at.isnot(None))
            .group_by(year, month)
            .order_by(year.desc(), month.desc())
            .limit(months)
        ).all()

        return [
            {
                "month": "{:04d}-{:02d}".format(int(row[0]), int(row[1])),
                "label": calendar.month_abbr[int(row[1])],
                "count": row[2],
            }
            for row in reversed(rows)
        ]

    @staticmethod
    def get_stats():
        total_users = db.session.execute(select(func.count(User.id))).scalar_one()
        total_orders = db.session.execute(select(func.count(Order.id))).scalar_one()
        total_sales = db.session.execute(
            select(func.coalesce(func.sum(Order.total_amount), 0)).where(
                Order.order_status == const.ORDER_DELIVERED
            )
        ).scalar_one()

        return {
            "user_growth": DashboardService.monthly_counts(User),
            "order_trends": DashboardService.monthly_counts(Order),
            "stats": {
                "total_users": total_users,
                "total_orders": total_orders,
                "total_sales": float(total_sales),
            },
        }
