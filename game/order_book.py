"""The collection of live orders and the single active-order slot."""
from __future__ import annotations

from typing import Dict, Iterator, Optional

from config import ACTIVE_STATUSES, ORDER_CAPACITY, WAITING
from game.entities import Order, Preparing
from game.errors import OrderAlreadyActive, OrderNotFound, OrderNotWaiting


class OrderBook:
    """Orders in arrival order.

    At most one order is active (preparing, cooking or ready).  Selecting a
    waiting order while another one is active is refused rather than
    switching focus, so a half-prepared dish is never silently dropped.
    """

    def __init__(self, capacity: int = ORDER_CAPACITY) -> None:
        self.capacity = capacity
        self._orders: Dict[str, Order] = {}
        self.active_id: Optional[str] = None

    def __len__(self) -> int:
        return len(self._orders)

    def __iter__(self) -> Iterator[Order]:
        return iter(list(self._orders.values()))

    def __contains__(self, order_id: str) -> bool:
        return order_id in self._orders

    @property
    def is_full(self) -> bool:
        return len(self._orders) >= self.capacity

    @property
    def active(self) -> Optional[Order]:
        if self.active_id is None:
            return None
        return self._orders.get(self.active_id)

    def add(self, order: Order) -> bool:
        if self.is_full or order.order_id in self._orders:
            return False
        self._orders[order.order_id] = order
        return True

    def get(self, order_id: str) -> Order:
        try:
            return self._orders[order_id]
        except KeyError:
            raise OrderNotFound(order_id) from None

    def remove(self, order_id: str) -> Order:
        order = self.get(order_id)
        del self._orders[order_id]
        if self.active_id == order_id:
            self.active_id = None
        return order

    def select(self, order_id: str) -> Order:
        order = self.get(order_id)
        active = self.active
        if active is not None and active.order_id != order_id and active.status in ACTIVE_STATUSES:
            raise OrderAlreadyActive(active.order_id)
        if order.status != WAITING:
            raise OrderNotWaiting(order_id, order.status)
        order.state = Preparing()
        self.active_id = order_id
        return order
