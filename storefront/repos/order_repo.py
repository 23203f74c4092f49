# storefront/repos/order_repo.py
from typing import Iterable, List

from sqlalchemy import select, update, exists
from sqlalchemy.orm import Session

from storefront.data.models.order import OrderModel
from storefront.data.models.order_item import OrderItemModel
from storefront.data.models.mixins import utcnow
from storefront.domain.order_status import OrderStatus


class OrderRepo:
    def __init__(self, db: Session):
        self.db = db

    def add_order(self, order: OrderModel) -> OrderModel:
        self.db.add(order)
        #flush zeby dostac id przed wstawieniem pozycji
        self.db.flush()
        return order

    def add_order_items(self, items: List[OrderItemModel]) -> List[OrderItemModel]:
        self.db.add_all(items)
        self.db.flush()
        return items

    def get_order(self, order_id: int) -> OrderModel | None:
        return self.db.get(OrderModel, order_id, populate_existing=True)

    def order_exists(self, order_id: int) -> bool:
        return bool(self.db.scalar(select(exists().where(OrderModel.id == order_id))))

    def get_order_items(self, order_id: int) -> List[OrderItemModel]:
        stmt = (
            select(OrderItemModel)
            .where(OrderItemModel.order_id == order_id)
            .order_by(OrderItemModel.created_at.asc(), OrderItemModel.id.asc())
        )
        return list(self.db.scalars(stmt).all())

    def list_user_orders(self, user_id: int) -> List[OrderModel]:
        stmt = (
            select(OrderModel)
            .where(OrderModel.user_id == user_id)
            .order_by(OrderModel.created_at.desc(), OrderModel.id.desc())
        )
        return list(self.db.scalars(stmt).all())

    def update_status(
        self,
        order_id: int,
        status: OrderStatus,
        allowed_from: Iterable[OrderStatus],
    ) -> int:
        """
        Warunkowy UPDATE - status zmienia sie tylko jesli obecny jest na
        liscie dozwolonych. 0 wierszy = brak zamowienia albo niedozwolone
        przejscie, rozroznia to wywolujacy.
        """
        sources = [OrderStatus(s).value for s in allowed_from]
        if not sources:
            return 0

        stmt = (
            update(OrderModel)
            .where(OrderModel.id == order_id, OrderModel.status.in_(sources))
            .values(status=OrderStatus(status).value, updated_at=utcnow())
            .execution_options(synchronize_session="fetch")
        )
        return self.db.execute(stmt).rowcount

    def update_tracking_number(
        self,
        order_id: int,
        tracking_number: str,
        allowed_statuses: Iterable[OrderStatus],
    ) -> int:
        stmt = (
            update(OrderModel)
            .where(
                OrderModel.id == order_id,
                OrderModel.status.in_([OrderStatus(s).value for s in allowed_statuses]),
            )
            .values(tracking_number=tracking_number, updated_at=utcnow())
            .execution_options(synchronize_session="fetch")
        )
        return self.db.execute(stmt).rowcount
