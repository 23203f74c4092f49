from sqlalchemy import Column, Integer, String
from storefront.data.database import Base
from storefront.data.models.mixins import TimestampMixin


class UserModel(TimestampMixin, Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True)
    name = Column(String(100), nullable=False)
