from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Tuple

from flask import current_app
from sqlalchemy import case, func, select, update
from sqlalchemy.orm import selectinload

from app.extensions import db
from app.models.order import Order, OrderItem
from app.services.cart import CartService
from app.services.notification import NotificationServices
from app.services.order_history import OrderHistoryService
from app.services.user import UserService
from app.errors.exceptions import (
    AccessDeniedError,
    ApiError,
    EmptyCart,
    InvalidStatus,
    InvalidTransition,
    MissingFields,
    OrderNotFound,
    StorageError,
    ValidationError,
)
from app.lib.logger import logger, log_critical_infrastructure
from app.lib.query import select_by_id, select_with_filter, select_with_pagination
import const


@dataclass(frozen=True)
class OrderLineSnapshot:
    food_id: int
    name: str
    image: str
    price: Decimal
    quantity: int

    @property
    def total(self):
        return self.price * self.quantity


@dataclass(frozen=True)
class OrderSnapshot:
    """Prices and quantities frozen at checkout.

    Built once from the locked cart read; the order total and every order
    item come from here, the catalog is not consulted again.
    """

    lines: Tuple[OrderLineSnapshot, ...]

    @classmethod
    def from_cart_lines(cls, cart_lines):
        return cls(
            lines=tuple(
                OrderLineSnapshot(
                    food_id=line.food_id,
                    name=line.name,
                    image=line.image,
                    price=line.unit_price,
                    quantity=line.quantity,
                )
                for line in cart_lines
            )
        )

    @property
    def total_amount(self):
        return sum((line.total for line in self.lines), Decimal("0"))


class OrderStatusMachine:

    @staticmethod
    def transitions():
        return current_app.config.get(
            "ORDER_STATUS_TRANSITIONS", const.DEFAULT_ORDER_STATUS_TRANSITIONS
        )

    @staticmethod
    def validate_status(status):
        if status not in const.ORDER_STATUSES:
            raise InvalidStatus(
                "Invalid status. Must be one of: " + ", ".join(const.ORDER_STATUSES)
            )
        return status

    @staticmethod
    def can_transition(current, new_status):
        # writing the current status again is a no-op
        if current == new_status:
            return True
        return new_status in OrderStatusMachine.transitions().get(current, ())

    @staticmethod
    def apply(order_id, new_status):
        OrderStatusMachine.validate_status(new_status)

        current = db.session.execute(
            select(Order.order_status).where(Order.id == order_id)
        ).scalar_one_or_none()
        if current is None:
            raise OrderNotFound()
        if not OrderStatusMachine.can_transition(current, new_status):
            raise InvalidTransition(
                f"Order #{order_id} cannot move from {current} to {new_status}"
            )

        # the row must still hold the status the check above was made against
        result = db.session.execute(
            update(Order)
            .where(Order.id == order_id, Order.order_status == current)
            .values(order_status=new_status, updated_at=datetime.utcnow())
        )
        db.session.commit()
        if result.rowcount == 0:
            raise InvalidTransition(
                f"Order #{order_id} was changed by another request"
            )

        logger.bind(order_id=order_id).info(
            f"Order status changed from {current} to {new_status}"
        )
        return new_status


class OrderService:

    @staticmethod
    def place_order(user_id, payment_method, delivery_address, user_info=None):
        """Turn the user's cart into an order in a single transaction.

        Order, order items and history entries are written and the cart is
        emptied together, or not at all. Staff are notified after commit and
        a notification failure never fails the order.
        Returns `{"order_id", "total_amount"}`.
        """
        if payment_method not in const.PAYMENT_METHODS:
            raise ValidationError(
                "Payment method must be one of: " + ", ".join(const.PAYMENT_METHODS)
            )
        if not delivery_address or not str(delivery_address).strip():
            raise MissingFields("Delivery address is required")

        supplied = {key: value for key, value in (user_info or {}).items() if value}
        profile = supplied
        if any(not supplied.get(key) for key in ("name", "email", "mobile")):
            profile = {**UserService.get_profile(user_id), **supplied}

        session = db.session
        try:
            cart_lines = CartService.priced_lines(
                user_id, session=session, for_update=True
            )
            if not cart_lines:
                raise EmptyCart()

            snapshot = OrderSnapshot.from_cart_lines(cart_lines)
            total_amount = snapshot.total_amount

            order = Order(
                user_id=user_id,
                total_amount=total_amount,
                payment_method=payment_method,
                delivery_address=delivery_address,
                user_name=profile.get("name"),
                user_email=profile.get("email"),
                user_mobile=profile.get("mobile"),
                order_status=const.ORDER_PENDING,
            )
            session.add(order)
            session.flush()
            order_id = order.id

            for line in snapshot.lines:
                session.add(
                    OrderItem(
                        order_id=order_id,
                        food_id=line.food_id,
                        food_name=line.name,
                        food_image=line.image,
                        price=line.price,
                        quantity=line.quantity,
                    )
                )
                OrderHistoryService.record(session, user_id, order_id, line)

            CartService.clear_lines(session, user_id)
            session.commit()
        except ApiError:
            session.rollback()
            raise
        except Exception as e:
            session.rollback()
            log_critical_infrastructure(
                f"Checkout rolled back for user {user_id}: {e}", "DATABASE"
            )
            raise StorageError("Failed to create order")
        finally:
            session.remove()

        logger.bind(order_id=order_id).info(
            f"Order placed by user {user_id}, {len(snapshot.lines)} lines, "
            f"total {total_amount:.2f}"
        )

        NotificationServices.dispatch_staff_notification(
            sender_id=user_id,
            message=(
                f"New Order #{order_id} placed by {profile.get('name')}. "
                f"Amount: {total_amount:.2f}"
            ),
            order_id=order_id,
            exclude_user_id=user_id,
        )

        return {"order_id": order_id, "total_amount": float(total_amount)}

    @staticmethod
    def list_orders(user_id=None):
        filters = []
        if user_id is not None:
            filters.append(Order.user_id == user_id)
        return select_with_filter(
            Order, filters, [Order.created_at.desc(), Order.id.desc()]
        )

    @staticmethod
    def paginate_orders(page, per_page):
        per_page = max(1, min(per_page, const.MAX_PER_PAGE))
        return select_with_pagination(
            Order,
            max(page, 1),
            per_page,
            order_by=[Order.created_at.desc(), Order.id.desc()],
        )

    @staticmethod
    def get_order(order_id):
        order = select_by_id(Order, order_id, [selectinload(Order.items)])
        if not order:
            raise OrderNotFound()
        return order

    @staticmethod
    def get_order_for(order_id, user):
        order = OrderService.get_order(order_id)
        if order.user_id != user.id and not user.is_staff:
            raise AccessDeniedError()
        return order

    @staticmethod
    def update_status(order_id, new_status):
        OrderStatusMachine.apply(order_id, new_status)
        return OrderService.get_order(order_id)

    @staticmethod
    def get_stats():
        def count_of(status):
            return func.count(case((Order.order_status == status, 1)))

        row = db.session.execute(
            select(
                func.count(Order.id),
                count_of(const.ORDER_PENDING),
                count_of(const.ORDER_APPROVED),
                count_of(const.ORDER_REJECTED),
                count_of(const.ORDER_DELIVERED),
                func.coalesce(func.sum(Order.total_amount), 0),
            )
        ).one()
        return {
            "total_orders": row[0],
            "pending_orders": row[1],
            "approved_orders": row[2],
            "rejected_orders": row[3],
            "delivered_orders": row[4],
            "total_revenue": float(row[5]),
        }
