from app.models.notification import Notification
from app.services.user import UserService
from app.errors.exceptions import NotFoundError
from app.lib.logger import logger
from app.lib.query import select_with_filter
from sqlalchemy import select, update, delete, func
from app.extensions import db
import const


class NotificationServices:

    @staticmethod
    def resolve_staff():
        return UserService.find_ids_by_role(const.STAFF_ROLES)

    @staticmethod
    def notify(sender_id, receiver_id, message, food_id=None, order_id=None):
        notification = Notification(
            sender_id=sender_id,
            receiver_id=receiver_id,
            message=message,
            food_id=food_id,
            order_id=order_id,
            is_read=False,
        )
        notification.save()
        return notification

    @staticmethod
    def fan_out(
        sender_id, message, order_id=None, food_id=None, exclude_user_id=None
    ):
        """Create one unread notification per staff account.

        The acting user is skipped when given as `exclude_user_id`, so a staff
        member placing an order is not notified about their own order.
        Returns the number of notifications written.
        """
        receivers = sorted(
            receiver_id
            for receiver_id in NotificationServices.resolve_staff()
            if receiver_id != exclude_user_id
        )
        if not receivers:
            return 0

        db.session.add_all(
            [
                Notification(
                    sender_id=sender_id,
                    receiver_id=receiver_id,
                    message=message,
                    food_id=food_id,
                    order_id=order_id,
                    is_read=False,
                )
                for receiver_id in receivers
            ]
        )
        db.session.commit()
        return len(receivers)

    @staticmethod
    def dispatch_staff_notification(
        sender_id, message, order_id=None, food_id=None, exclude_user_id=None
    ):
        # Best effort: the caller's own work is already committed
        from app.tasks.send_notification import send_staff_notification

        try:
            send_staff_notification.delay(
                sender_id=sender_id,
                message=message,
                order_id=order_id,
                food_id=food_id,
                exclude_user_id=exclude_user_id,
            )
            return True
        except Exception as e:
            logger.error(f"Failed to enqueue staff notification: {e}")
            return False

    @staticmethod
    def list_for(user_id):
        return select_with_filter(
            Notification,
            filters=[Notification.receiver_id == user_id],
            order_by=[Notification.created_at.desc(), Notification.id.desc()],
        )

    @staticmethod
    def mark_read(id, user_id):
        result = db.session.execute(
            update(Notification)
            .where(Notification.id == id, Notification.receiver_id == user_id)
            .values(is_read=True)
        )
        db.session.commit()
        if result.rowcount == 0:
            raise NotFoundError("Notification not found or access denied")
        return True

    @staticmethod
    def mark_all_read(user_id):
        result = db.session.execute(
            update(Notification)
            .where(
                Notification.receiver_id == user_id,
                Notification.is_read.is_(False),
            )
            .values(is_read=True)
        )
        db.session.commit()
        return result.rowcount

    @staticmethod
    def delete(id, user_id):
        result = db.session.execute(
            delete(Notification).where(
                Notification.id == id, Notification.receiver_id == user_id
            )
        )
        db.session.commit()
        if result.rowcount == 0:
            raise NotFoundError("Notification not found or access denied")
        return True

    @staticmethod
    def unread_count(user_id):
        return db.session.execute(
            select(func.count(Notification.id)).where(
                Notification.receiver_id == user_id,
                Notification.is_read.is_(False),
            )
        ).scalar_one()
