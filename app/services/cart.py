from dataclasses import dataclass
from decimal import Decimal

from sqlalchemy import delete, func, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from app.extensions import db
from app.errors.exceptions import StorageError, ValidationError
from app.lib.logger import logger
from app.models.cart import Cart
from app.models.food import Food
from app.services.food import FoodService


@dataclass(frozen=True)
class CartLine:
    """One cart row joined with the live catalog price."""

    cart_id: int
    food_id: int
    name: str
    image: str
    description: str
    quantity: int
    amount: Decimal
    discount: Decimal

    @property
    def unit_price(self):
        return self.amount - self.discount

    @property
    def line_total(self):
        return self.unit_price * self.quantity

    def to_dict(self):
        return {
            "id": self.cart_id,
            "food_id": self.food_id,
            "name": self.name,
            "image": self.image,
            "description": self.description,
            "quantity": self.quantity,
            "amount": float(self.amount),
            "discount": float(self.discount),
            "price": float(self.unit_price),
            "total": float(self.line_total),
        }


def _as_quantity(quantity):
    # JSON numbers like 2.0 pass the "integer" schema type
    if isinstance(quantity, float) and quantity.is_integer():
        return int(quantity)
    if isinstance(quantity, bool) or not isinstance(quantity, int):
        raise ValidationError("Quantity must be an integer")
    return quantity


def _positive_quantity(quantity):
    quantity = _as_quantity(quantity)
    if quantity < 1:
        raise ValidationError("Quantity must be a positive integer")
    return quantity


class CartService:

    @staticmethod
    def priced_lines(user_id, session=None, for_update=False):
        """Cart lines of `user_id` priced from the catalog, oldest first.

        Pass the caller's `session` to read inside an open transaction;
        `for_update` locks the cart rows until that transaction ends.
        """
        session = session or db.session
        stmt = (
            select(Cart, Food)
            .join(Food, Food.id == Cart.food_id)
            .where(Cart.user_id == user_id)
            .order_by(Cart.id.asc())
        )
        if for_update:
            stmt = stmt.with_for_update(of=Cart)

        lines = []
        for cart, food in session.execute(stmt).all():
            lines.append(
                CartLine(
                    cart_id=cart.id,
                    food_id=food.id,
                    name=food.name,
                    image=food.image,
                    description=food.description,
                    quantity=cart.quantity,
                    amount=Decimal(food.amount),
                    discount=Decimal(food.discount or 0),
                )
            )
        return lines

    @staticmethod
    def get_cart(user_id):
        """Live-priced lines, most recently added first."""
        try:
            return list(reversed(CartService.priced_lines(user_id)))
        finally:
            db.session.remove()

    @staticmethod
    def add_item(user_id, food_id, quantity=1):
        """Add `quantity` of a food, merging into an existing line.

        Returns the resulting quantity of that line.
        """
        quantity = _positive_quantity(quantity)
        FoodService.get_food(food_id)

        # a concurrent insert of the same line loses the unique race once
        for attempt in range(2):
            try:
                result = db.session.execute(
                    update(Cart)
                    .where(Cart.user_id == user_id, Cart.food_id == food_id)
                    .values(quantity=Cart.quantity + quantity)
                )
                if result.rowcount == 0:
                    db.session.add(
                        Cart(user_id=user_id, food_id=food_id, quantity=quantity)
                    )
                db.session.commit()
                break
            except IntegrityError:
                db.session.rollback()
                if attempt:
                    raise StorageError("Could not add item to cart")
            except SQLAlchemyError as e:
                db.session.rollback()
                logger.error(f"Failed to add food {food_id} to cart: {e}")
                raise StorageError("Could not add item to cart")

        try:
            return db.session.execute(
                select(Cart.quantity).where(
                    Cart.user_id == user_id, Cart.food_id == food_id
                )
            ).scalar_one()
        finally:
            db.session.remove()

    @staticmethod
    def update_quantity(user_id, food_id, quantity):
        """Set the line quantity; zero or less removes the line.

        Setting a quantity on a line that is not in the cart changes nothing.
        """
        quantity = _as_quantity(quantity)
        if quantity <= 0:
            CartService.remove_item(user_id, food_id)
            return 0

        db.session.execute(
            update(Cart)
            .where(Cart.user_id == user_id, Cart.food_id == food_id)
            .values(quantity=quantity)
        )
        db.session.commit()
        return quantity

    @staticmethod
    def remove_item(user_id, food_id):
        # removing an absent line is not an error
        db.session.execute(
            delete(Cart).where(Cart.user_id == user_id, Cart.food_id == food_id)
        )
        db.session.commit()
        return True

    @staticmethod
    def clear_lines(session, user_id):
        """Delete every line of `user_id` without committing."""
        return session.execute(delete(Cart).where(Cart.user_id == user_id)).rowcount

    @staticmethod
    def clear_cart(user_id):
        removed = CartService.clear_lines(db.session, user_id)
        db.session.commit()
        return removed

    @staticmethod
    def get_cart_total(user_id):
        unit_price = Food.amount - func.coalesce(Food.discount, 0)
        row = db.session.execute(
            select(
                func.count(Cart.id),
                func.coalesce(func.sum(unit_price * Cart.quantity), 0),
            )
            .join(Food, Food.id == Cart.food_id)
            .where(Cart.user_id == user_id)
        ).one()
        return {
            "item_count": row[0],
            "total_amount": float(Decimal(str(row[1])).quantize(Decimal("0.01"))),
        }
