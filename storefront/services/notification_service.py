# storefront/services/notification_service.py
from storefront.celery_worker import celery_app
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class NotificationService:
    """
    Powiadomienia o zamowieniach, przetwarzane asynchronicznie przez Celery.
    Wywolywane dopiero po commicie zmiany zamowienia.
    """

    @staticmethod
    def send_order_notification(user_id: int, order_id: int, status: str):
        try:
            send_order_notification_task.delay(user_id, order_id, status)
        except Exception as e:
            #zamowienie jest juz zapisane, brak powiadomienia go nie cofa
            logger.warning(
                f"Failed to enqueue notification for order {order_id} ({status}): {e}"
            )


@celery_app.task(name="storefront.services.notification_service.send_order_notification_task")
def send_order_notification_task(user_id: int, order_id: int, status: str):
    """
    Tu bylby email/SMS/push. Na razie tylko log.
    """
    logger.info(f"[NOTIFICATION] User {user_id}: order {order_id} is now {status}")

    return {"user_id": user_id, "order_id": order_id, "status": status, "sent": True}
