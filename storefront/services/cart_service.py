# storefront/services/cart_service.py
from decimal import Decimal
from typing import Dict, Any, List

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from storefront.data.database import transaction
from storefront.data.models.cart import CartModel
from storefront.data.models.cart_item import CartItemModel
from storefront.domain.errors import (
    InvalidArgument,
    ProductNotFound,
    ProductNotInCart,
    StorageFailure,
)
from storefront.repos.cart_repo import CartRepo
from storefront.services.product_client import ProductClient
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


def cart_total(items: List[CartItemModel]) -> Decimal:
    #suma liczona zawsze z pozycji, nigdy nie zapisywana
    return sum((i.price * i.quantity for i in items), Decimal("0.00"))


class CartService:
    """
    Prosta implementacja cqrs dla domeny cart
    commands (add, update, remove, clear) modyfikuja stan
    query (get) tylko odczyt - ale koszyk tworzony leniwie przy pierwszym dostepie
    """

    def __init__(self, db: Session, product_client: ProductClient):
        self.db = db
        self.repo = CartRepo(db)
        self.product_client = product_client

    def get_or_create_cart(self, user_id: int) -> CartModel:
        existing = self.repo.get_cart_by_user(user_id)
        if existing:
            return existing

        try:
            created = self.repo.create_cart(CartModel(user_id=user_id))
            self.db.commit()
        except IntegrityError as e:
            #rownolegle zapytanie utworzylo koszyk pierwsze - czytamy jego wiersz
            self.db.rollback()
            existing = self.repo.get_cart_by_user(user_id)
            if existing is None:
                logger.error(f"Creating cart for user {user_id} failed: {e}")
                raise StorageFailure("failed to create cart") from e
            logger.info(f"Cart for user {user_id} created concurrently, re-read cart {existing.id}")
            return existing

        logger.info(f"Created cart {created.id} for user {user_id}")
        return created

    #query
    def get_cart(self, user_id: int) -> Dict[str, Any]:
        cart = self.get_or_create_cart(user_id)
        return self._cart_view(cart)

    def list_items(self, user_id: int) -> List[CartItemModel]:
        cart = self.get_or_create_cart(user_id)
        return self.repo.get_cart_items(cart.id)

    #commands
    def add_product(self, user_id: int, product_id: int, quantity: int) -> Dict[str, Any]:
        if quantity <= 0:
            raise InvalidArgument("quantity must be positive")

        logger.info(f"Fetching product {product_id} from product-service")
        pdata = self.product_client.fetch_product(product_id)
        if pdata is None:
            raise ProductNotFound()
        price = Decimal(str(pdata["price"]))

        cart = self.get_or_create_cart(user_id)

        with transaction(self.db, "add item to cart"):
            #mutacje koszyka kolejkuja sie za blokada trzymana przez checkout
            self.repo.lock_cart(cart.id)
            item = self.repo.upsert_cart_item(cart.id, product_id, quantity, price)

        logger.info(
            f"Product {product_id} in cart {cart.id}: quantity {item.quantity}, price {price}"
        )
        return self._cart_view(cart)

    def update_quantity(self, user_id: int, product_id: int, quantity: int) -> Dict[str, Any]:
        #0 albo mniej to jawne usuniecie, nie update
        if quantity <= 0:
            return self.remove_product(user_id, product_id)

        cart = self.get_or_create_cart(user_id)

        with transaction(self.db, "update cart item"):
            self.repo.lock_cart(cart.id)
            if self.repo.update_item_quantity(cart.id, product_id, quantity) == 0:
                raise ProductNotInCart()

        logger.info(f"Product {product_id} in cart {cart.id} set to quantity {quantity}")
        return self._cart_view(cart)

    def remove_product(self, user_id: int, product_id: int) -> Dict[str, Any]:
        cart = self.get_or_create_cart(user_id)

        with transaction(self.db, "remove cart item"):
            self.repo.lock_cart(cart.id)
            if self.repo.delete_cart_item(cart.id, product_id) == 0:
                raise ProductNotInCart()

        logger.info(f"Removed product {product_id} from cart {cart.id}")
        return self._cart_view(cart)

    def clear_cart(self, user_id: int) -> None:
        cart = self.get_or_create_cart(user_id)

        with transaction(self.db, "clear cart"):
            self.repo.lock_cart(cart.id)
            removed = self.repo.clear_cart(cart.id)

        logger.info(f"Cleared cart {cart.id} ({removed} item(s))")

    def _cart_view(self, cart: CartModel) -> Dict[str, Any]:
        items = self.repo.get_cart_items(cart.id)

        return {
            "cart_id": cart.id,
            "user_id": cart.user_id,
            "items": [
                {
                    "product_id": i.product_id,
                    "quantity": i.quantity,
                    "price": i.price,
                    "created_at": i.created_at,
                }
                for i in items
            ],
            "total": cart_total(items),
        }
