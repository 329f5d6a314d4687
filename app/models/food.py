from decimal import Decimal

from app.extensions import db
from app.models.base import BaseModel


class Food(db.Model, BaseModel):
    __tablename__ = "foods"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(255), nullable=False)
    image = db.Column(db.String(255))
    offer_details = db.Column(db.String(255))
    customer_rate = db.Column(db.Numeric(2, 1))
    food_type = db.Column(db.String(500))
    amount = db.Column(db.Numeric(10, 2), nullable=False)
    discount = db.Column(db.Numeric(10, 2))
    description = db.Column(db.Text)
    subcategory_id = db.Column(
        db.Integer,
        db.ForeignKey("subcategories.id", ondelete="CASCADE"),
        nullable=True,
    )

    @property
    def unit_price(self):
        return Decimal(self.amount) - Decimal(self.discount or 0)
