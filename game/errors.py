"""Exceptions raised by rejected kitchen actions.

Every player-facing error is recoverable: the action is refused, state is left
untouched and ``str(exc)`` is a message fit for a notification.
"""
from __future__ import annotations


class KitchenError(Exception):
    """Base class for all Fraction Kitchen errors."""


class CatalogError(KitchenError):
    """The recipe catalog cannot serve the current level."""


class SessionNotRunning(KitchenError):
    def __init__(self) -> None:
        super().__init__("No session is running")


# ---------------------------------------------------------------------------
# Selection
# ---------------------------------------------------------------------------


class SelectionError(KitchenError):
    pass


class ServiceError(KitchenError):
    pass


class OrderNotFound(SelectionError, ServiceError):
    def __init__(self, order_id: str) -> None:
        super().__init__(f"Order {order_id} not found")
        self.order_id = order_id


class OrderAlreadyActive(SelectionError):
    def __init__(self, active_id: str) -> None:
        super().__init__(f"Finish order {active_id} before starting another")
        self.active_id = active_id


class OrderNotWaiting(SelectionError):
    def __init__(self, order_id: str, status: str) -> None:
        super().__init__(f"Order {order_id} is already {status}")
        self.order_id = order_id
        self.status = status


# ---------------------------------------------------------------------------
# Commit
# ---------------------------------------------------------------------------


class CommitError(KitchenError):
    pass


class NoActiveOrder(CommitError):
    def __init__(self, order_id: str) -> None:
        super().__init__(f"Order {order_id} is not being prepared")
        self.order_id = order_id


class ValidationFailed(CommitError):
    def __init__(self, ingredient: str, expected: float, tolerance: float) -> None:
        super().__init__(f"{ingredient} amount is incorrect. Expected: {expected:.2f}")
        self.ingredient = ingredient
        self.expected = expected
        self.tolerance = tolerance


class InsufficientInventory(CommitError):
    def __init__(self, ingredient: str, have: float, need: float) -> None:
        super().__init__(f"Not enough {ingredient} in inventory! (have {have:.2f}, need {need:.2f})")
        self.ingredient = ingredient
        self.have = have
        self.need = need


class UnknownIngredient(CommitError):
    def __init__(self, ingredient: str) -> None:
        super().__init__(f"{ingredient} is not part of this recipe")
        self.ingredient = ingredient


class InvalidStation(CommitError):
    def __init__(self, station: str) -> None:
        super().__init__(f"Cannot cook at station {station!r}")
        self.station = station


# ---------------------------------------------------------------------------
# Stations and service
# ---------------------------------------------------------------------------


class StationError(KitchenError):
    pass


class OrderNotReady(StationError):
    def __init__(self, order_id: str) -> None:
        super().__init__(f"Order {order_id} is not ready for plating")
        self.order_id = order_id


class WrongStation(ServiceError):
    def __init__(self, order_id: str, station: str | None) -> None:
        super().__init__(f"Order {order_id} must be at the plating station to serve (at {station or 'none'})")
        self.order_id = order_id
        self.station = station
