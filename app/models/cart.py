from app.extensions import db
from app.models.base import BaseModel


class Cart(db.Model, BaseModel):
    __tablename__ = "cart"
    __table_args__ = (
        db.UniqueConstraint("user_id", "food_id", name="uq_cart_user_food"),
    )

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(
        db.Integer, db.ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    food_id = db.Column(
        db.Integer, db.ForeignKey("foods.id", ondelete="CASCADE"), nullable=False
    )
    quantity = db.Column(db.Integer, nullable=False, default=1)

    food = db.relationship("Food")
