"""Fraction Kitchen game package.

Public API:
    from game import KitchenSim, Order, ServiceReceipt, SessionState
"""
from game.entities import Order, ServiceReceipt
from game.session import SessionState
from game.simulation import KitchenSim

__all__ = ["KitchenSim", "Order", "ServiceReceipt", "SessionState"]
