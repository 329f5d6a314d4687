from celery import shared_task

from app.extensions import db
from app.lib.logger import logger
from app.services.notification import NotificationServices


@shared_task(name="send_staff_notification", ignore_result=True)
def send_staff_notification(
    sender_id,
    message,
    order_id=None,
    food_id=None,
    exclude_user_id=None,
):
    """
    kwargs = {
      "sender_id": …,
      "message": …,
      "order_id": …,
      "food_id": …,
      "exclude_user_id": …,
    }
    Runs in its own application context, hence its own database session.
    """
    try:
        created = NotificationServices.fan_out(
            sender_id=sender_id,
            message=message,
            order_id=order_id,
            food_id=food_id,
            exclude_user_id=exclude_user_id,
        )
        logger.bind(order_id=order_id or "-").info(
            f"Sent {created} staff notification(s) from user {sender_id}"
        )
        return created
    except Exception as e:
        logger.bind(order_id=order_id or "-").error(
            f"Failed to create staff notifications: {e}"
        )
        db.session.rollback()
        return 0
    finally:
        db.session.remove()
