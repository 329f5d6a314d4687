from app.extensions import db
from app.models.base import BaseModel


class Address(db.Model, BaseModel):
    __tablename__ = "addresses"

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(
        db.Integer, db.ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    label = db.Column(db.String(50), nullable=False)
    full_address = db.Column(db.Text, nullable=False)
    flat_no = db.Column(db.String(100))
    landmark = db.Column(db.String(255))
    city = db.Column(db.String(100))
    state = db.Column(db.String(100))
    pincode = db.Column(db.String(20))
    latitude = db.Column(db.Numeric(10, 8))
    longitude = db.Column(db.Numeric(11, 8))
    is_default = db.Column(db.Boolean, nullable=False, default=False)
