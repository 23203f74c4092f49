# storefront/domain/order_status.py
from enum import Enum
from typing import Dict, FrozenSet


class OrderStatus(str, Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


#status docelowy -> statusy, z ktorych mozna do niego przejsc
ALLOWED_SOURCES: Dict[OrderStatus, FrozenSet[OrderStatus]] = {
    OrderStatus.PENDING: frozenset(),
    OrderStatus.PROCESSING: frozenset({OrderStatus.PENDING}),
    OrderStatus.SHIPPED: frozenset({OrderStatus.PROCESSING}),
    OrderStatus.DELIVERED: frozenset({OrderStatus.SHIPPED}),
    OrderStatus.CANCELLED: frozenset({OrderStatus.PENDING, OrderStatus.PROCESSING}),
}

CANCELLABLE = ALLOWED_SOURCES[OrderStatus.CANCELLED]

#numer przesylki nadawany w okolicy wysylki, status bez zmian
TRACKABLE = frozenset({OrderStatus.PROCESSING, OrderStatus.SHIPPED})


def allowed_sources(target: OrderStatus) -> FrozenSet[OrderStatus]:
    return ALLOWED_SOURCES[OrderStatus(target)]


def can_transition(current: OrderStatus, target: OrderStatus) -> bool:
    return OrderStatus(current) in allowed_sources(target)
