"""Testy adresow wysylki i jednego adresu domyslnego."""

import pytest
from pydantic import ValidationError
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError

from conftest import ALICE, BOB
from storefront.data.models import AddressModel
from storefront.domain.errors import AddressNotFound, InvalidArgument, InvalidState
from storefront.domain.schemas import AddressCreate, AddressUpdate


def default_ids(db, user_id):
    stmt = select(AddressModel.id).where(
        AddressModel.user_id == user_id,
        AddressModel.is_default.is_(True),
    )
    return list(db.scalars(stmt).all())


@pytest.fixture
def create(address_service, address_payload):
    def make(user_id=ALICE, **overrides):
        return address_service.create_address(user_id, AddressCreate(**address_payload(**overrides)))

    return make


class TestCreateAddress:
    def test_create_plain_address(self, create, db):
        address = create(street="2 Oak Ave")
        assert address.id is not None
        assert address.user_id == ALICE
        assert address.street == "2 Oak Ave"
        assert address.is_default is False
        assert default_ids(db, ALICE) == []

    def test_new_default_replaces_previous_default(self, create, db):
        first = create(is_default=True)
        second = create(is_default=True)

        db.refresh(first)
        assert first.is_default is False
        assert second.is_default is True
        assert default_ids(db, ALICE) == [second.id]

    def test_default_is_per_user(self, create, db):
        alice_default = create(ALICE, is_default=True)
        bob_default = create(BOB, is_default=True)

        assert default_ids(db, ALICE) == [alice_default.id]
        assert default_ids(db, BOB) == [bob_default.id]

    def test_blank_fields_rejected(self, address_payload):
        with pytest.raises(ValidationError):
            AddressCreate(**address_payload(street="   "))

    def test_missing_field_rejected(self, address_payload):
        data = address_payload()
        del data["country"]
        with pytest.raises(ValidationError):
            AddressCreate(**data)


class TestSetDefault:
    def test_swap_default(self, create, address_service, db):
        x = create(is_default=True)
        y = create()

        result = address_service.set_default(ALICE, y.id)

        db.refresh(x)
        assert result.id == y.id
        assert result.is_default is True
        assert x.is_default is False

    def test_at_most_one_default_after_many_swaps(self, create, address_service, db):
        addresses = [create() for _ in range(4)]

        for address in addresses + addresses[::-1] + addresses[1:3]:
            address_service.set_default(ALICE, address.id)
            assert default_ids(db, ALICE) == [address.id]

    def test_unknown_address_keeps_previous_default(self, create, address_service, db):
        x = create(is_default=True)

        with pytest.raises(AddressNotFound):
            address_service.set_default(ALICE, 9999)

        assert default_ids(db, ALICE) == [x.id]

    def test_foreign_address_is_not_found(self, create, address_service, db):
        alice_default = create(ALICE, is_default=True)
        bob_address = create(BOB)

        with pytest.raises(AddressNotFound):
            address_service.set_default(ALICE, bob_address.id)

        assert default_ids(db, ALICE) == [alice_default.id]
        assert default_ids(db, BOB) == []

    def test_database_rejects_second_default(self, create, db):
        create(is_default=True)
        db.add(
            AddressModel(
                user_id=ALICE,
                street="x",
                city="x",
                state="x",
                postal_code="x",
                country="x",
                is_default=True,
            )
        )
        with pytest.raises(IntegrityError):
            db.commit()
        db.rollback()


class TestUpdateAddress:
    def test_partial_update(self, create, address_service):
        address = create(city="Springfield")

        updated = address_service.update_address(
            ALICE, address.id, AddressUpdate(city="Shelbyville")
        )

        assert updated.city == "Shelbyville"
        assert updated.street == "1 Main St"

    def test_update_to_default_clears_others(self, create, address_service, db):
        x = create(is_default=True)
        y = create()

        address_service.update_address(ALICE, y.id, AddressUpdate(is_default=True))

        assert default_ids(db, ALICE) == [y.id]
        db.refresh(x)
        assert x.is_default is False

    def test_foreign_address_not_updated(self, create, address_service, db):
        bob_address = create(BOB, city="Ogdenville")

        with pytest.raises(AddressNotFound):
            address_service.update_address(ALICE, bob_address.id, AddressUpdate(city="Hacked"))

        db.refresh(bob_address)
        assert bob_address.city == "Ogdenville"

    def test_explicit_null_rejected(self, create, address_service):
        address = create()
        with pytest.raises(InvalidArgument):
            address_service.update_address(ALICE, address.id, AddressUpdate(city=None))


class TestListAndDelete:
    def test_list_default_first(self, create, address_service):
        first = create()
        default = create(is_default=True)
        last = create()

        listed = [a.id for a in address_service.list_addresses(ALICE)]

        assert listed[0] == default.id
        assert set(listed) == {first.id, default.id, last.id}

    def test_list_only_own_addresses(self, create, address_service):
        create(ALICE)
        create(BOB)
        assert all(a.user_id == ALICE for a in address_service.list_addresses(ALICE))
        assert len(address_service.list_addresses(ALICE)) == 1

    def test_get_foreign_address(self, create, address_service):
        bob_address = create(BOB)
        with pytest.raises(AddressNotFound):
            address_service.get_address(ALICE, bob_address.id)

    def test_delete_address(self, create, address_service, db):
        address = create()
        address_service.delete_address(ALICE, address.id)
        assert db.scalar(select(func.count()).select_from(AddressModel)) == 0

    def test_delete_foreign_address(self, create, address_service, db):
        bob_address = create(BOB)
        with pytest.raises(AddressNotFound):
            address_service.delete_address(ALICE, bob_address.id)
        assert db.scalar(select(func.count()).select_from(AddressModel)) == 1

    def test_delete_address_used_by_order(self, create, address_service, cart_service, checkout_service):
        address = create()
        cart_service.add_product(ALICE, 1, 1)
        checkout_service.checkout(ALICE, address.id)

        with pytest.raises(InvalidState):
            address_service.delete_address(ALICE, address.id)

        assert address_service.get_address(ALICE, address.id).id == address.id
