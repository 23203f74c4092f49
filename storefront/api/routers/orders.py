# storefront/api/routers/orders.py
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from storefront.api.auth import get_current_user_id
from storefront.api.routers.carts import get_product_client
from storefront.data.database import get_db
from storefront.domain.schemas import CheckoutIn, OrderDetailOut, OrderOut
from storefront.services.cart_service import CartService
from storefront.services.checkout_service import CheckoutService
from storefront.services.order_service import OrderService
from storefront.services.product_client import ProductClient

router = APIRouter(prefix="/orders", tags=["orders"])


def get_service(db: Session):
    return OrderService(db)


@router.post("", response_model=OrderDetailOut, status_code=201)
def checkout(
    payload: CheckoutIn,
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
    product_client: ProductClient = Depends(get_product_client),
):
    """
    Tworzy zamowienie z aktualnej zawartosci koszyka.
    Koszyk jest czyszczony w tej samej transakcji.
    """
    checkout_service = CheckoutService(db, CartService(db, product_client))
    order = checkout_service.checkout(user_id, payload.shipping_address_id)
    return get_service(db).get_order(order.id, user_id)


@router.get("", response_model=List[OrderOut])
def list_orders(
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    return get_service(db).list_orders(user_id)


@router.get("/{order_id}", response_model=OrderDetailOut)
def get_order(
    order_id: int,
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    return get_service(db).get_order(order_id, user_id)


@router.post("/{order_id}/cancel", response_model=OrderOut)
def cancel_order(
    order_id: int,
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    return get_service(db).cancel_order(order_id, user_id)
