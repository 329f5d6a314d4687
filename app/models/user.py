from app.extensions import db, bcrypt
from app.models.base import BaseModel

import const


class User(db.Model, BaseModel):
    __tablename__ = "users"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(100), nullable=True, default="")
    email = db.Column(db.String(100), unique=True, nullable=True)
    mobile = db.Column(db.String(15), unique=True, nullable=True)
    password = db.Column(db.String(255), nullable=True)
    role = db.Column(db.String(20), nullable=False, default=const.ROLE_CUSTOMER)
    profile_image = db.Column(db.String(255), nullable=True)
    address = db.Column(db.Text, nullable=True)
    bio = db.Column(db.Text, nullable=True)

    print_filter = ("password",)
    to_json_filter = ("password",)

    @property
    def is_staff(self):
        return self.role in const.STAFF_ROLES

    def set_password(self, password):
        self.password = bcrypt.generate_password_hash(password).decode("utf-8")

    def check_password(self, password):
        if not self.password:
            return False
        return bcrypt.check_password_hash(self.password, password)

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "mobile": self.mobile,
            "role": self.role,
            "profile_image": self.profile_image,
            "address": self.address,
            "bio": self.bio,
        }
