"""Shared ingredient stock."""
from __future__ import annotations

from typing import Dict, List, Mapping, Optional

from config import LOW_STOCK_THRESHOLD
from game.errors import InsufficientInventory


class InventoryLedger:
    """Ingredient → available quantity.

    Quantities only go down, and only through :meth:`deduct`, which either
    takes every requested amount or nothing at all.
    """

    def __init__(self, stock: Mapping[str, float]) -> None:
        self._stock: Dict[str, float] = {name: max(0.0, float(qty)) for name, qty in stock.items()}

    def __getitem__(self, ingredient: str) -> float:
        return self._stock.get(ingredient, 0.0)

    def has(self, ingredient: str, amount: float) -> bool:
        return self[ingredient] >= amount

    def shortfall(self, amounts: Mapping[str, float]) -> Optional[InsufficientInventory]:
        for ingredient, need in amounts.items():
            if not self.has(ingredient, need):
                return InsufficientInventory(ingredient, self[ingredient], need)
        return None

    def deduct(self, amounts: Mapping[str, float]) -> None:
        missing = self.shortfall(amounts)
        if missing is not None:
            raise missing
        for ingredient, need in amounts.items():
            self._stock[ingredient] = self[ingredient] - need

    def low_stock(self, threshold: float = LOW_STOCK_THRESHOLD) -> List[str]:
        return [name for name, qty in self._stock.items() if qty < threshold]

    def snapshot(self) -> Dict[str, float]:
        return dict(self._stock)
