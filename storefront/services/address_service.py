# storefront/services/address_service.py
from typing import List

from sqlalchemy.orm import Session

from storefront.data.database import transaction
from storefront.data.models.address import AddressModel
from storefront.domain.errors import AddressNotFound, InvalidArgument, InvalidState
from storefront.domain.schemas import AddressCreate, AddressUpdate
from storefront.repos.address_repo import AddressRepo
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class AddressService:
    """
    Adresy uzytkownika i niezmiennik "co najwyzej jeden domyslny".

    Zmiana domyslnego to zawsze: wyczysc is_default u wszystkich adresow
    uzytkownika, potem ustaw na docelowym - w jednej transakcji. Indeks
    unikalny na (user_id) WHERE is_default pilnuje tego samego w bazie.
    """

    def __init__(self, db: Session):
        self.db = db
        self.repo = AddressRepo(db)

    #query
    def list_addresses(self, user_id: int) -> List[AddressModel]:
        return self.repo.list_for_user(user_id)

    def get_address(self, user_id: int, address_id: int) -> AddressModel:
        address = self.repo.get_for_user(user_id, address_id)
        if not address:
            raise AddressNotFound()
        return address

    #commands
    def create_address(self, user_id: int, payload: AddressCreate) -> AddressModel:
        with transaction(self.db, "create address"):
            if payload.is_default:
                self.repo.lock_user_addresses(user_id)
                cleared = self.repo.clear_default(user_id)
                logger.info(f"Cleared {cleared} default address(es) of user {user_id}")

            address = self.repo.add(AddressModel(user_id=user_id, **payload.model_dump()))

        self.db.refresh(address)
        logger.info(
            f"Created address {address.id} for user {user_id} (default={address.is_default})"
        )
        return address

    def update_address(
        self,
        user_id: int,
        address_id: int,
        patch: AddressUpdate,
    ) -> AddressModel:
        changes = patch.model_dump(exclude_unset=True)

        nulls = [field for field, value in changes.items() if value is None]
        if nulls:
            raise InvalidArgument(f"fields cannot be null: {', '.join(sorted(nulls))}")

        with transaction(self.db, "update address"):
            address = self.repo.get_for_user(user_id, address_id)
            if not address:
                raise AddressNotFound()

            if changes.get("is_default"):
                self.repo.lock_user_addresses(user_id)
                self.repo.clear_default(user_id)

            for field, value in changes.items():
                setattr(address, field, value)
            self.db.flush()

        self.db.refresh(address)
        logger.info(f"Updated address {address_id} of user {user_id}: {sorted(changes)}")
        return address

    def set_default(self, user_id: int, address_id: int) -> AddressModel:
        with transaction(self.db, "set default address"):
            self.repo.lock_user_addresses(user_id)
            self.repo.clear_default(user_id)

            #0 wierszy -> rollback, wyczyszczenie tez sie nie zapisze
            if self.repo.mark_default(user_id, address_id) == 0:
                raise AddressNotFound()

        logger.info(f"Address {address_id} is now the default of user {user_id}")
        return self.get_address(user_id, address_id)

    def delete_address(self, user_id: int, address_id: int) -> None:
        with transaction(self.db, "delete address"):
            address = self.repo.get_for_user(user_id, address_id)
            if not address:
                raise AddressNotFound()

            #zamowienia sa niezmienne i trzymaja referencje do adresu
            if self.repo.is_referenced_by_order(address_id):
                raise InvalidState("address is used by an existing order")

            if self.repo.delete_for_user(user_id, address_id) == 0:
                raise AddressNotFound()

        logger.info(f"Deleted address {address_id} of user {user_id}")
