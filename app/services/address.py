from sqlalchemy import select, update
from sqlalchemy.exc import SQLAlchemyError

from app.extensions import db
from app.models.address import Address
from app.errors.exceptions import NotFoundError, StorageError, ValidationError
from app.lib.logger import logger
from app.lib.query import select_with_filter

ADDRESS_FIELDS = (
    "label",
    "full_address",
    "flat_no",
    "landmark",
    "city",
    "state",
    "pincode",
    "latitude",
    "longitude",
    "is_default",
)


class AddressService:

    @staticmethod
    def list_for(user_id):
        return select_with_filter(
            Address,
            [Address.user_id == user_id],
            [Address.is_default.desc(), Address.created_at.desc(), Address.id.desc()],
        )

    @staticmethod
    def _unset_default(user_id, keep_id=None):
        stmt = update(Address).where(
            Address.user_id == user_id, Address.is_default.is_(True)
        )
        if keep_id is not None:
            stmt = stmt.where(Address.id != keep_id)
        db.session.execute(stmt.values(is_default=False))

    @staticmethod
    def create(user_id, **kwargs):
        data = {key: kwargs[key] for key in ADDRESS_FIELDS if key in kwargs}
        if not data.get("label") or not data.get("full_address"):
            raise ValidationError("Label and full address are required")
        data["is_default"] = bool(data.get("is_default"))

        try:
            if data["is_default"]:
                AddressService._unset_default(user_id)
            address = Address(user_id=user_id, **data)
            db.session.add(address)
            db.session.commit()
            return address
        except SQLAlchemyError as e:
            db.session.rollback()
            logger.error(f"Failed to save address for user {user_id}: {e}")
            raise StorageError("Could not save address")

    @staticmethod
    def _owned(id, user_id):
        address = db.session.execute(
            select(Address).where(Address.id == id, Address.user_id == user_id)
        ).scalar_one_or_none()
        if not address:
            raise NotFoundError("Address not found")
        return address

    @staticmethod
    def update(id, user_id, **kwargs):
        address = AddressService._owned(id, user_id)
        data = {key: kwargs[key] for key in ADDRESS_FIELDS if key in kwargs}
        for key in ("label", "full_address"):
            if key in data and not data[key]:
                raise ValidationError(f"Field '{key}' must not be empty")

        try:
            if data.get("is_default"):
                AddressService._unset_default(user_id, keep_id=address.id)
            return address.update(**data)
        except SQLAlchemyError as e:
            db.session.rollback()
            logger.error(f"Failed to update address {id}: {e}")
            raise StorageError("Could not update address")

    @staticmethod
    def delete(id, user_id):
        AddressService._owned(id, user_id).delete()
        return True
