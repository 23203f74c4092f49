from sqlalchemy import Column, Integer, ForeignKey, String, Numeric
from sqlalchemy.orm import relationship

from storefront.data.database import Base
from storefront.data.models.mixins import TimestampMixin
from storefront.domain.order_status import OrderStatus


class OrderModel(TimestampMixin, Base):
    __tablename__ = "orders"

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    shipping_address_id = Column(Integer, ForeignKey("addresses.id"), nullable=False)

    status = Column(String(20), nullable=False, default=OrderStatus.PENDING.value)
    #liczone raz przy checkout, nigdy ponownie
    total = Column(Numeric(10, 2), nullable=False)
    tracking_number = Column(String(100), nullable=True)

    items = relationship(
        "OrderItemModel",
        back_populates="order",
        order_by="OrderItemModel.id",
    )
