from app.extensions import db
from app.models.base import BaseModel


class OrderHistory(db.Model, BaseModel):
    __tablename__ = "order_history"

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(
        db.Integer, db.ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    order_id = db.Column(
        db.Integer, db.ForeignKey("orders.id", ondelete="CASCADE"), nullable=True
    )
    food_id = db.Column(
        db.Integer, db.ForeignKey("foods.id", ondelete="SET NULL"), nullable=True
    )
    order_details = db.Column(db.Text)

    to_json_parse = ("order_details",)
    to_json_filter = ("updated_at",)
