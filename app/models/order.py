from app.extensions import db
from app.models.base import BaseModel
import const


class Order(db.Model, BaseModel):
    __tablename__ = "orders"

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(
        db.Integer, db.ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    total_amount = db.Column(db.Numeric(10, 2), nullable=False)
    payment_method = db.Column(db.String(50), nullable=False)
    delivery_address = db.Column(db.Text, nullable=False)
    user_name = db.Column(db.String(100))
    user_email = db.Column(db.String(100))
    user_mobile = db.Column(db.String(15))
    order_status = db.Column(
        db.String(50), nullable=False, default=const.ORDER_PENDING
    )

    items = db.relationship(
        "OrderItem",
        back_populates="order",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="OrderItem.id",
    )

    def to_dict(self, with_items=False):
        data = self._to_json()
        if with_items:
            data["items"] = [item._to_json() for item in self.items]
        return data


class OrderItem(db.Model, BaseModel):
    __tablename__ = "order_items"

    id = db.Column(db.Integer, primary_key=True)
    order_id = db.Column(
        db.Integer, db.ForeignKey("orders.id", ondelete="CASCADE"), nullable=False
    )
    # survives catalog deletion, the snapshot columns below keep the data
    food_id = db.Column(
        db.Integer, db.ForeignKey("foods.id", ondelete="SET NULL"), nullable=True
    )
    food_name = db.Column(db.String(255), nullable=False)
    food_image = db.Column(db.String(255))
    price = db.Column(db.Numeric(10, 2), nullable=False)
    quantity = db.Column(db.Integer, nullable=False)

    order = db.relationship("Order", back_populates="items")

    to_json_filter = ("updated_at",)
