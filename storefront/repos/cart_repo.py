# storefront/repos/cart_repo.py
from decimal import Decimal
from typing import List

from sqlalchemy import select, update, delete
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.orm import Session

from storefront.data.models.cart import CartModel
from storefront.data.models.cart_item import CartItemModel
from storefront.data.models.mixins import utcnow

#dialekty z INSERT ... ON CONFLICT DO UPDATE
_UPSERT_INSERTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


class CartRepo:
    def __init__(self, db: Session):
        self.db = db

    #carts
    def get_cart_by_user(self, user_id: int) -> CartModel | None:
        stmt = select(CartModel).where(CartModel.user_id == user_id)
        return self.db.scalars(stmt).one_or_none()

    def create_cart(self, cart: CartModel) -> CartModel:
        self.db.add(cart)
        self.db.flush()
        return cart

    def lock_cart(self, cart_id: int) -> CartModel | None:
        stmt = (
            select(CartModel)
            .where(CartModel.id == cart_id)
            .with_for_update()
            .execution_options(populate_existing=True)
        )
        return self.db.scalars(stmt).one_or_none()

    #cart items
    def get_cart_items(self, cart_id: int) -> List[CartItemModel]:
        stmt = (
            select(CartItemModel)
            .where(CartItemModel.cart_id == cart_id)
            .order_by(CartItemModel.created_at.asc(), CartItemModel.id.asc())
            .execution_options(populate_existing=True)
        )
        return list(self.db.scalars(stmt).all())

    def lock_cart_items(self, cart_id: int) -> List[CartItemModel]:
        #SELECT ... FOR UPDATE - czyta ostatnia zatwierdzona wersje wierszy
        stmt = (
            select(CartItemModel)
            .where(CartItemModel.cart_id == cart_id)
            .order_by(CartItemModel.id.asc())
            .with_for_update()
            .execution_options(populate_existing=True)
        )
        return list(self.db.scalars(stmt).all())

    def get_cart_item(self, cart_id: int, product_id: int) -> CartItemModel | None:
        stmt = (
            select(CartItemModel)
            .where(
                CartItemModel.cart_id == cart_id,
                CartItemModel.product_id == product_id,
            )
            .execution_options(populate_existing=True)
        )
        return self.db.scalars(stmt).one_or_none()

    def upsert_cart_item(
        self,
        cart_id: int,
        product_id: int,
        quantity: int,
        price: Decimal,
    ) -> CartItemModel:
        """
        Dodaje produkt albo zwieksza ilosc istniejacej pozycji.
        Cena zawsze nadpisywana najnowsza - kolejne dodania odzwierciedlaja
        aktualny cennik.
        """
        insert = _UPSERT_INSERTS.get(self.db.get_bind().dialect.name)
        if insert is None:
            return self._merge_cart_item(cart_id, product_id, quantity, price)

        table = CartItemModel.__table__
        now = utcnow()
        stmt = insert(table).values(
            cart_id=cart_id,
            product_id=product_id,
            quantity=quantity,
            price=price,
            created_at=now,
            updated_at=now,
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=["cart_id", "product_id"],
            set_={
                "quantity": table.c.quantity + stmt.excluded.quantity,
                "price": stmt.excluded.price,
                "updated_at": now,
            },
        )
        self.db.execute(stmt)
        return self.get_cart_item(cart_id, product_id)

    def _merge_cart_item(self, cart_id, product_id, quantity, price) -> CartItemModel:
        #bez upsertu: blokada wiersza i zwykly update albo insert
        stmt = (
            select(CartItemModel)
            .where(
                CartItemModel.cart_id == cart_id,
                CartItemModel.product_id == product_id,
            )
            .with_for_update()
        )
        existing_item = self.db.scalars(stmt).one_or_none()

        if existing_item:
            existing_item.quantity += quantity
            existing_item.price = price
        else:
            existing_item = CartItemModel(
                cart_id=cart_id,
                product_id=product_id,
                quantity=quantity,
                price=price,
            )
            self.db.add(existing_item)

        self.db.flush()
        return existing_item

    def update_item_quantity(self, cart_id: int, product_id: int, quantity: int) -> int:
        stmt = (
            update(CartItemModel)
            .where(
                CartItemModel.cart_id == cart_id,
                CartItemModel.product_id == product_id,
            )
            .values(quantity=quantity, updated_at=utcnow())
            .execution_options(synchronize_session="fetch")
        )
        return self.db.execute(stmt).rowcount

    def delete_cart_item(self, cart_id: int, product_id: int) -> int:
        stmt = (
            delete(CartItemModel)
            .where(
                CartItemModel.cart_id == cart_id,
                CartItemModel.product_id == product_id,
            )
            .execution_options(synchronize_session="fetch")
        )
        return self.db.execute(stmt).rowcount

    def clear_cart(self, cart_id: int) -> int:
        stmt = (
            delete(CartItemModel)
            .where(CartItemModel.cart_id == cart_id)
            .execution_options(synchronize_session="fetch")
        )
        return self.db.execute(stmt).rowcount
