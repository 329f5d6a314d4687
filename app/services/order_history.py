import json

from app.models.order_history import OrderHistory
from app.errors.exceptions import NotFoundError
from app.lib.query import select_by_id, select_with_filter


class OrderHistoryService:

    @staticmethod
    def record(session, user_id, order_id, line):
        """Stage one history entry for an order line in `session`.

        Nothing is committed here, the entry lands with the rest of the order.
        """
        entry = OrderHistory(
            user_id=user_id,
            order_id=order_id,
            food_id=line.food_id,
            order_details=json.dumps(
                {
                    "food_name": line.name,
                    "price": float(line.price),
                    "quantity": line.quantity,
                    "image": line.image,
                    "total_item_price": float(line.total),
                }
            ),
        )
        session.add(entry)
        return entry

    @staticmethod
    def get_all():
        return select_with_filter(
            OrderHistory, [], [OrderHistory.created_at.desc(), OrderHistory.id.desc()]
        )

    @staticmethod
    def get_by_id(id):
        entry = select_by_id(OrderHistory, id)
        if not entry:
            raise NotFoundError("Order history not found")
        return entry

    @staticmethod
    def get_by_user(user_id):
        return select_with_filter(
            OrderHistory,
            [OrderHistory.user_id == user_id],
            [OrderHistory.created_at.desc(), OrderHistory.id.desc()],
        )
