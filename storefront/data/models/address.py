# storefront/data/models/address.py
from sqlalchemy import Column, Integer, ForeignKey, String, Boolean, Index, text

from storefront.data.database import Base
from storefront.data.models.mixins import TimestampMixin


class AddressModel(TimestampMixin, Base):
    __tablename__ = "addresses"

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

    street = Column(String(255), nullable=False)
    city = Column(String(100), nullable=False)
    state = Column(String(100), nullable=False)
    postal_code = Column(String(20), nullable=False)
    country = Column(String(100), nullable=False)
    is_default = Column(Boolean, nullable=False, default=False)

    __table_args__ = (
        #co najwyzej jeden domyslny adres na uzytkownika, pilnuje baza
        Index(
            "uq_addresses_user_default",
            "user_id",
            unique=True,
            postgresql_where=text("is_default"),
            sqlite_where=text("is_default"),
        ),
    )
