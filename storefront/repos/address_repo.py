# storefront/repos/address_repo.py
from typing import List

from sqlalchemy import select, update, delete, exists
from sqlalchemy.orm import Session

from storefront.data.models.address import AddressModel
from storefront.data.models.order import OrderModel
from storefront.data.models.mixins import utcnow


class AddressRepo:
    """
    Dostep do tabeli addresses. Kazde zapytanie jest zawezone do
    (user_id, address_id) - samo id adresu niczego nie autoryzuje.
    Repo nie commituje, granice transakcji wyznacza serwis.
    """

    def __init__(self, db: Session):
        self.db = db

    def list_for_user(self, user_id: int) -> List[AddressModel]:
        stmt = (
            select(AddressModel)
            .where(AddressModel.user_id == user_id)
            .order_by(
                AddressModel.is_default.desc(),
                AddressModel.created_at.desc(),
                AddressModel.id.desc(),
            )
        )
        return list(self.db.scalars(stmt).all())

    def get_for_user(self, user_id: int, address_id: int) -> AddressModel | None:
        stmt = select(AddressModel).where(
            AddressModel.id == address_id,
            AddressModel.user_id == user_id,
        )
        return self.db.scalars(stmt).one_or_none()

    def lock_user_addresses(self, user_id: int) -> None:
        #SELECT ... FOR UPDATE, sqlite pomija klauzule
        stmt = (
            select(AddressModel.id)
            .where(AddressModel.user_id == user_id)
            .with_for_update()
        )
        self.db.execute(stmt).all()

    def clear_default(self, user_id: int) -> int:
        stmt = (
            update(AddressModel)
            .where(AddressModel.user_id == user_id, AddressModel.is_default.is_(True))
            .values(is_default=False, updated_at=utcnow())
            .execution_options(synchronize_session="fetch")
        )
        return self.db.execute(stmt).rowcount

    def mark_default(self, user_id: int, address_id: int) -> int:
        stmt = (
            update(AddressModel)
            .where(AddressModel.id == address_id, AddressModel.user_id == user_id)
            .values(is_default=True, updated_at=utcnow())
            .execution_options(synchronize_session="fetch")
        )
        return self.db.execute(stmt).rowcount

    def add(self, address: AddressModel) -> AddressModel:
        self.db.add(address)
        self.db.flush()
        return address

    def is_referenced_by_order(self, address_id: int) -> bool:
        stmt = select(exists().where(OrderModel.shipping_address_id == address_id))
        return bool(self.db.scalar(stmt))

    def delete_for_user(self, user_id: int, address_id: int) -> int:
        stmt = (
            delete(AddressModel)
            .where(AddressModel.id == address_id, AddressModel.user_id == user_id)
            .execution_options(synchronize_session="fetch")
        )
        return self.db.execute(stmt).rowcount
