# storefront/api/routers/addresses.py
from typing import List

from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from storefront.api.auth import get_current_user_id
from storefront.data.database import get_db
from storefront.domain.schemas import AddressCreate, AddressOut, AddressUpdate
from storefront.services.address_service import AddressService

router = APIRouter(prefix="/addresses", tags=["addresses"])


def get_service(db: Session):
    return AddressService(db)


@router.get("", response_model=List[AddressOut])
def list_addresses(
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    return get_service(db).list_addresses(user_id)


@router.post("", response_model=AddressOut, status_code=201)
def create_address(
    payload: AddressCreate,
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    return get_service(db).create_address(user_id, payload)


@router.get("/{address_id}", response_model=AddressOut)
def get_address(
    address_id: int,
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    return get_service(db).get_address(user_id, address_id)


@router.patch("/{address_id}", response_model=AddressOut)
def update_address(
    address_id: int,
    payload: AddressUpdate,
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    return get_service(db).update_address(user_id, address_id, payload)


@router.post("/{address_id}/default", response_model=AddressOut)
def set_default_address(
    address_id: int,
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """
    Ustawia adres jako domyslny. Poprzedni domyslny traci flage
    w tej samej transakcji.
    """
    return get_service(db).set_default(user_id, address_id)


@router.delete("/{address_id}", status_code=204)
def delete_address(
    address_id: int,
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    get_service(db).delete_address(user_id, address_id)
    return Response(status_code=204)
