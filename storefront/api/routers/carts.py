# storefront/api/routers/carts.py
from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from storefront.api.auth import get_current_user_id
from storefront.data.database import get_db
from storefront.domain.schemas import CartOut, ItemIn, ItemQuantityIn
from storefront.services.cart_service import CartService
from storefront.services.product_client import ProductClient

router = APIRouter(prefix="/cart", tags=["cart"])


def get_product_client() -> ProductClient:
    return ProductClient()


def get_service(db: Session, product_client: ProductClient):
    return CartService(db=db, product_client=product_client)


@router.get("", response_model=CartOut)
def get_cart(
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
    product_client: ProductClient = Depends(get_product_client),
):
    return get_service(db, product_client).get_cart(user_id)


@router.delete("", status_code=204)
def clear_cart(
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
    product_client: ProductClient = Depends(get_product_client),
):
    get_service(db, product_client).clear_cart(user_id)
    return Response(status_code=204)


@router.post("/items", response_model=CartOut)
def add_item(
    payload: ItemIn,
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
    product_client: ProductClient = Depends(get_product_client),
):
    """
    Dodaje produkt do koszyka. Cena pobierana z product-service;
    ponowne dodanie zwieksza ilosc i nadpisuje cene.
    """
    svc = get_service(db, product_client)
    return svc.add_product(
        user_id=user_id,
        product_id=payload.product_id,
        quantity=payload.quantity,
    )


@router.put("/items/{product_id}", response_model=CartOut)
def update_item(
    product_id: int,
    payload: ItemQuantityIn,
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
    product_client: ProductClient = Depends(get_product_client),
):
    return get_service(db, product_client).update_quantity(user_id, product_id, payload.quantity)


@router.delete("/items/{product_id}", response_model=CartOut)
def remove_item(
    product_id: int,
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
    product_client: ProductClient = Depends(get_product_client),
):
    return get_service(db, product_client).remove_product(user_id, product_id)
