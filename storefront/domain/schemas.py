# storefront/domain/schemas.py
from pydantic import BaseModel, Field, ConfigDict
from typing import List
from decimal import Decimal
from datetime import datetime

from storefront.domain.order_status import OrderStatus


#users
class UserCreate(BaseModel):
    """Rejestracja uzytkownika, do ktorego odwoluja sie inne tabele."""

    id: int = Field(..., gt=0, description="ID uzytkownika (musi byc > 0)")
    name: str = Field(..., min_length=1, max_length=100, description="Nazwa uzytkownika")


class UserRead(BaseModel):
    id: int
    name: str

    model_config = ConfigDict(from_attributes=True)


#addresses
class AddressCreate(BaseModel):
    """Nowy adres wysylki. Wszystkie pola adresu sa wymagane."""

    street: str = Field(..., min_length=1, max_length=255)
    city: str = Field(..., min_length=1, max_length=100)
    state: str = Field(..., min_length=1, max_length=100)
    postal_code: str = Field(..., min_length=1, max_length=20)
    country: str = Field(..., min_length=1, max_length=100)
    is_default: bool = False

    model_config = ConfigDict(str_strip_whitespace=True)


class AddressUpdate(BaseModel):
    """Czesciowa aktualizacja - zmieniane tylko pola wyslane przez klienta."""

    street: str | None = Field(None, min_length=1, max_length=255)
    city: str | None = Field(None, min_length=1, max_length=100)
    state: str | None = Field(None, min_length=1, max_length=100)
    postal_code: str | None = Field(None, min_length=1, max_length=20)
    country: str | None = Field(None, min_length=1, max_length=100)
    is_default: bool | None = None

    model_config = ConfigDict(str_strip_whitespace=True)


class AddressOut(BaseModel):
    id: int
    user_id: int
    street: str
    city: str
    state: str
    postal_code: str
    country: str
    is_default: bool
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


#cart
class ItemIn(BaseModel):
    """Dodanie produktu do koszyka."""

    product_id: int = Field(..., gt=0, description="ID produktu (musi byc > 0)")
    quantity: int = Field(..., gt=0, description="Ilosc do dodania (musi byc > 0)")


class ItemQuantityIn(BaseModel):
    """Ilosc <= 0 usuwa produkt z koszyka."""

    quantity: int


class CartItemOut(BaseModel):
    product_id: int
    quantity: int
    price: Decimal
    created_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)


class CartOut(BaseModel):
    cart_id: int
    user_id: int
    items: List[CartItemOut]
    total: Decimal


#orders
class CheckoutIn(BaseModel):
    shipping_address_id: int = Field(..., gt=0, description="Adres wysylki nalezacy do uzytkownika")


class OrderItemOut(BaseModel):
    id: int
    product_id: int
    quantity: int
    price: Decimal

    model_config = ConfigDict(from_attributes=True)


class OrderOut(BaseModel):
    id: int
    user_id: int
    shipping_address_id: int
    status: OrderStatus
    total: Decimal
    tracking_number: str | None = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class OrderDetailOut(OrderOut):
    items: List[OrderItemOut]
