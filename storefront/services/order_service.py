# storefront/services/order_service.py
from typing import Any, Dict, List

from sqlalchemy.orm import Session

from storefront.data.database import transaction
from storefront.data.models.order import OrderModel
from storefront.domain.errors import (
    Forbidden,
    InvalidArgument,
    InvalidState,
    OrderCannotBeCancelled,
    OrderNotFound,
)
from storefront.domain.order_status import OrderStatus, TRACKABLE, allowed_sources
from storefront.repos.order_repo import OrderRepo
from storefront.services.notification_service import NotificationService
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class OrderService:
    """
    Odczyt zamowien i maszyna stanow statusu.
    Zamowienia nie sa nigdy usuwane, najwyzej trafiaja do statusu koncowego.
    """

    def __init__(self, db: Session):
        self.db = db
        self.repo = OrderRepo(db)
        self.notification_service = NotificationService()

    #query
    def get_order(self, order_id: int, user_id: int) -> Dict[str, Any]:
        """
        Use Case: Pobranie zamowienia razem z pozycjami (Query).
        """
        order = self._get_owned_order(order_id, user_id)
        items = self.repo.get_order_items(order.id)

        return {
            "id": order.id,
            "user_id": order.user_id,
            "shipping_address_id": order.shipping_address_id,
            "status": order.status,
            "total": order.total,
            "tracking_number": order.tracking_number,
            "created_at": order.created_at,
            "updated_at": order.updated_at,
            "items": items,
        }

    def list_orders(self, user_id: int) -> List[OrderModel]:
        return self.repo.list_user_orders(user_id)

    #commands
    def cancel_order(self, order_id: int, user_id: int) -> OrderModel:
        self._get_owned_order(order_id, user_id)
        return self.update_status(order_id, OrderStatus.CANCELLED)

    def update_status(self, order_id: int, new_status: OrderStatus) -> OrderModel:
        """
        Przejscie statusu jednym warunkowym UPDATE - dwa rownolegle
        anulowania albo anulowanie po wyslaniu nie moga oba "wygrac".
        """
        try:
            new_status = OrderStatus(new_status)
        except ValueError:
            raise InvalidArgument(f"unknown order status: {new_status}") from None

        with transaction(self.db, "update order status"):
            rowcount = self.repo.update_status(order_id, new_status, allowed_sources(new_status))

            if rowcount == 0:
                #0 wierszy: albo nie ma zamowienia, albo status nie pozwala
                if not self.repo.order_exists(order_id):
                    raise OrderNotFound()
                if new_status == OrderStatus.CANCELLED:
                    raise OrderCannotBeCancelled()
                current = self.repo.get_order(order_id)
                raise InvalidState(
                    f"cannot change order status from {current.status} to {new_status.value}"
                )

        order = self.repo.get_order(order_id)
        logger.info(f"Order {order_id} moved to status {order.status}")

        self.notification_service.send_order_notification(order.user_id, order.id, order.status)
        return order

    def set_tracking_number(self, order_id: int, tracking_number: str) -> OrderModel:
        """
        Waska aktualizacja - numer przesylki nie zmienia statusu.
        """
        tracking_number = (tracking_number or "").strip()
        if not tracking_number:
            raise InvalidArgument("tracking number is required")

        with transaction(self.db, "update tracking number"):
            if self.repo.update_tracking_number(order_id, tracking_number, TRACKABLE) == 0:
                if not self.repo.order_exists(order_id):
                    raise OrderNotFound()
                raise InvalidState(
                    "tracking number can only be set while the order is processing or shipped"
                )

        logger.info(f"Order {order_id} tracking number set to {tracking_number}")
        return self.repo.get_order(order_id)

    def _get_owned_order(self, order_id: int, user_id: int) -> OrderModel:
        order = self.repo.get_order(order_id)

        if not order:
            raise OrderNotFound()

        if order.user_id != user_id:
            logger.warning(f"User {user_id} tried to access order {order_id}")
            raise Forbidden("forbidden")

        return order
