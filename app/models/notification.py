from app.extensions import db
from app.models.base import BaseModel


class Notification(db.Model, BaseModel):
    __tablename__ = "notifications"

    id = db.Column(db.Integer, primary_key=True)
    sender_id = db.Column(
        db.Integer, db.ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    receiver_id = db.Column(
        db.Integer, db.ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    message = db.Column(db.Text, nullable=False)
    is_read = db.Column(db.Boolean, nullable=False, default=False)
    food_id = db.Column(
        db.Integer, db.ForeignKey("foods.id", ondelete="SET NULL"), nullable=True
    )
    order_id = db.Column(
        db.Integer, db.ForeignKey("orders.id", ondelete="CASCADE"), nullable=True
    )

    sender = db.relationship("User", foreign_keys=[sender_id], lazy="joined")

    to_json_filter = ("updated_at",)

    def to_dict(self):
        data = self._to_json()
        data["sender_name"] = self.sender.name if self.sender else None
        data["sender_image"] = self.sender.profile_image if self.sender else None
        return data
