import re

from app.errors.exceptions import AuthError, ConflictError, NotFoundError, ValidationError
from app.lib.logger import logger
from app.lib.query import select_by_id
from app.models.user import User
from app.services.notification import NotificationServices
from app.services.user import UserService
from flask_jwt_extended import (
    create_access_token,
    create_refresh_token,
    get_jwt_identity,
)
from sqlalchemy.exc import IntegrityError
from app.extensions import db
import const

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


class AuthService:

    @staticmethod
    def validate_registration(name, email, mobile, password, role):
        missing = [
            field
            for field, value in (
                ("name", name),
                ("email", email),
                ("mobile", mobile),
                ("password", password),
                ("role", role),
            )
            if not value
        ]
        if missing:
            raise ValidationError(
                "All fields are required", data={"missing": missing}
            )
        if len(password) < const.MIN_PASSWORD_LENGTH:
            raise ValidationError(
                f"Password must be at least {const.MIN_PASSWORD_LENGTH} characters long"
            )
        if len(mobile) != const.MOBILE_LENGTH or not mobile.isdigit():
            raise ValidationError(f"Mobile number must be {const.MOBILE_LENGTH} digits")
        if not EMAIL_PATTERN.match(email):
            raise ValidationError("Please enter a valid email address")
        if role not in const.ROLES:
            raise ValidationError("Invalid role")

    @staticmethod
    def register(name, email, mobile, password, role, profile_image=None):
        AuthService.validate_registration(name, email, mobile, password, role)

        if UserService.exists_email_or_mobile(email, mobile):
            raise ConflictError("This email or mobile number is already registered")

        user = User(
            name=name,
            email=email,
            mobile=mobile,
            role=role,
            profile_image=profile_image,
        )
        user.set_password(password)
        try:
            user.save()
        except IntegrityError:
            db.session.rollback()
            raise ConflictError("This email or mobile number is already registered")

        logger.info(f"Created user {user.id} with role {role}")

        NotificationServices.dispatch_staff_notification(
            sender_id=user.id,
            message=f"New {role} account created: {name}",
            exclude_user_id=user.id,
        )
        return user

    @staticmethod
    def login(mobile, password):
        user = UserService.find_user_by_mobile(mobile)
        if not user:
            raise NotFoundError("User not found")
        if not user.check_password(password):
            raise AuthError("Invalid credentials")
        return user

    @staticmethod
    def generate_token(user):
        subject = str(user.id)
        claims = {"role": user.role}
        access_token = create_access_token(identity=subject, additional_claims=claims)
        refresh_token = create_refresh_token(identity=subject, additional_claims=claims)
        return {
            "access_token": access_token,
            "refresh_token": refresh_token,
            "user": user.to_dict(),
        }

    @staticmethod
    def refresh_token():
        current_user = AuthService.get_current_identity()
        if not current_user:
            raise AuthError("User not found")
        access_token = create_access_token(
            identity=str(current_user.id), additional_claims={"role": current_user.role}
        )
        return {"access_token": access_token}

    @staticmethod
    def get_user_id():
        subject = get_jwt_identity()
        if subject is None:
            return None

        return int(subject)

    @staticmethod
    def get_current_identity():
        user_id = AuthService.get_user_id()
        if user_id is None:
            return None
        return select_by_id(User, user_id)

    @staticmethod
    def require_current_user():
        user = AuthService.get_current_identity()
        if not user:
            raise AuthError("User not found")
        return user
