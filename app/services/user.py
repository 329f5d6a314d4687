from app.models.user import User
from app.errors.exceptions import ConflictError, NotFoundError, ValidationError
from app.extensions import db
from app.lib.logger import logger
from sqlalchemy import select, or_
from sqlalchemy.exc import IntegrityError
from app.lib.query import (
    select_with_filter,
    select_by_id,
    select_with_filter_one,
    update_by_id,
)
import const


class UserService:

    UPDATABLE_FIELDS = ("name", "email", "mobile", "profile_image", "address", "bio")

    @staticmethod
    def find_user(id):
        user = select_by_id(User, id)
        return user

    @staticmethod
    def find_user_by_mobile(mobile):
        return select_with_filter_one(User, [User.mobile == mobile])

    @staticmethod
    def find_users():
        return select_with_filter(User, [], [User.id.asc()])

    @staticmethod
    def find_ids_by_role(roles):
        """User ids holding any of `roles`, the staff fan-out target list."""
        rows = db.session.execute(select(User.id).where(User.role.in_(roles)))
        return {row[0] for row in rows}

    @staticmethod
    def get_profile(user_id):
        user = UserService.find_user(user_id)
        if not user:
            raise NotFoundError("User not found")
        return {"name": user.name, "email": user.email, "mobile": user.mobile}

    @staticmethod
    def exists_email_or_mobile(email, mobile, exclude_id=None):
        conditions = []
        if email:
            conditions.append(User.email == email)
        if mobile:
            conditions.append(User.mobile == mobile)
        if not conditions:
            return False
        filters = [or_(*conditions)]
        if exclude_id:
            filters.append(User.id != exclude_id)
        return select_with_filter_one(User, filters) is not None

    @staticmethod
    def update_user(user_id, **kwargs):
        data = {
            key: value
            for key, value in kwargs.items()
            if key in UserService.UPDATABLE_FIELDS and value is not None
        }
        if not data:
            raise ValidationError("Nothing to update")

        if UserService.exists_email_or_mobile(
            data.get("email"), data.get("mobile"), exclude_id=user_id
        ):
            raise ConflictError("This email or mobile number is already registered")

        try:
            user = update_by_id(User, user_id, data)
        except IntegrityError:
            raise ConflictError("This email or mobile number is already registered")
        if not user:
            raise NotFoundError("User not found")
        return user

    @staticmethod
    def update_password(user_id, current_password, new_password):
        if not new_password or len(new_password) < const.MIN_PASSWORD_LENGTH:
            raise ValidationError(
                f"Password must be at least {const.MIN_PASSWORD_LENGTH} characters long"
            )

        user = db.session.get(User, user_id)
        if not user:
            raise NotFoundError("User not found")
        if not user.check_password(current_password):
            raise ValidationError("Current password is incorrect")

        user.set_password(new_password)
        db.session.commit()
        logger.info(f"Password updated for user {user_id}")
        return True
