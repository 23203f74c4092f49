# storefront/services/checkout_service.py
from collections import Counter
from typing import Sequence

from sqlalchemy.orm import Session

from storefront.data.database import transaction
from storefront.data.models.order import OrderModel
from storefront.data.models.order_item import OrderItemModel
from storefront.domain.errors import InvalidArgument, InvalidState, StorageFailure
from storefront.domain.order_status import OrderStatus
from storefront.repos.address_repo import AddressRepo
from storefront.repos.cart_repo import CartRepo
from storefront.repos.order_repo import OrderRepo
from storefront.services.cart_service import CartService, cart_total
from storefront.services.notification_service import NotificationService
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class CheckoutService:
    """
    Zamiana koszyka w zamowienie.

    Zamowienie, jego pozycje i wyczyszczenie koszyka to jedna transakcja:
    albo powstaje dokladnie jedno wycenione zamowienie i koszyk jest pusty,
    albo baza zostaje dokladnie taka jak przed wywolaniem.
    """

    def __init__(self, db: Session, cart_service: CartService):
        self.db = db
        self.cart_service = cart_service
        self.cart_repo = CartRepo(db)
        self.address_repo = AddressRepo(db)
        self.order_repo = OrderRepo(db)
        self.notification_service = NotificationService()

    def checkout(self, user_id: int, shipping_address_id: int) -> OrderModel:
        """
        Use case: zamowienie z aktualnej zawartosci koszyka uzytkownika.

        1. Adres musi nalezec do uzytkownika (zapytanie zawezone do user_id)
        2. Koszyk zablokowany do konca transakcji, pozycje czytane pod blokada
        3. Pusty koszyk -> InvalidState, zanim cokolwiek zostanie zapisane
        4. create_order_from_cart
        5. Powiadomienie dopiero po commicie
        """
        if not self.address_repo.get_for_user(user_id, shipping_address_id):
            raise InvalidArgument("shipping address not found or does not belong to user")

        cart = self.cart_service.get_or_create_cart(user_id)

        #blokada koszyka do commitu: druga finalizacja i zmiany koszyka czekaja na nia
        self.cart_repo.lock_cart(cart.id)
        cart_items = self.cart_repo.get_cart_items(cart.id)

        if not cart_items:
            self.db.rollback()
            raise InvalidState("cannot create order from empty cart")

        order = self.create_order_from_cart(user_id, cart.id, shipping_address_id, cart_items)

        self.notification_service.send_order_notification(user_id, order.id, order.status)
        return order

    def create_order_from_cart(
        self,
        user_id: int,
        cart_id: int,
        shipping_address_id: int,
        cart_items: Sequence,
    ) -> OrderModel:
        """
        Tworzy zamowienie z podanych pozycji koszyka w jednej transakcji.

        cart_items to obiekty z product_id, quantity i price (CartItemModel).
        Cena i ilosc kopiowane sa wprost z pozycji, nie z katalogu.
        """
        if not cart_items:
            raise InvalidState("cannot create order from empty cart")

        #snapshot - wartosci kopiowane zanim wiersze koszyka znikna
        snapshot = [(i.product_id, i.quantity, i.price) for i in cart_items]
        total = cart_total(cart_items)

        with transaction(self.db, "create order"):
            order = self.order_repo.add_order(
                OrderModel(
                    user_id=user_id,
                    shipping_address_id=shipping_address_id,
                    status=OrderStatus.PENDING.value,
                    total=total,
                )
            )

            self.order_repo.add_order_items(
                [
                    OrderItemModel(
                        order_id=order.id,
                        product_id=product_id,
                        quantity=quantity,
                        price=price,
                    )
                    for product_id, quantity, price in snapshot
                ]
            )

            #wiersze pod blokada musza byc dokladnie tymi, z ktorych powstalo zamowienie
            locked = [
                (i.product_id, i.quantity, i.price)
                for i in self.cart_repo.lock_cart_items(cart_id)
            ]
            if Counter(locked) != Counter(snapshot):
                logger.warning(
                    f"Cart {cart_id} changed during checkout: ordered {snapshot}, cart holds {locked}"
                )
                raise StorageFailure("cart changed during checkout, retry", retryable=True)

            removed = self.cart_repo.clear_cart(cart_id)
            if removed != len(snapshot):
                logger.warning(
                    f"Cart {cart_id} changed during checkout: expected {len(snapshot)} "
                    f"item(s), removed {removed}"
                )
                raise StorageFailure("cart changed during checkout, retry", retryable=True)

        self.db.refresh(order)
        logger.info(
            f"Order {order.id} created for user {user_id} from cart {cart_id}: "
            f"{len(snapshot)} item(s), total {order.total}"
        )
        return order
