"""Order factory: draws new customer orders from the catalog."""
from __future__ import annotations

import random
from typing import Dict, Sequence

from config import BASE_PATIENCE_MS, SERVING_OPTIONS
from game.entities import Order, Waiting
from game.errors import CatalogError
from recipe_catalog import RecipeDefinition, available_recipes


class OrderFactory:
    """Creates orders from one seedable random source.

    Every random draw (recipe, serving count, customer) goes through
    ``self.rng`` so a seeded factory replays the same sequence of orders.
    """

    def __init__(
        self,
        rng: random.Random,
        serving_options: Sequence[int] = SERVING_OPTIONS,
        base_patience: float = BASE_PATIENCE_MS,
    ) -> None:
        self.rng = rng
        self.serving_options = tuple(serving_options)
        self.base_patience = base_patience
        self._next_id = 1

    def _new_id(self) -> str:
        order_id = f"order-{self._next_id:04d}"
        self._next_id += 1
        return order_id

    def create_order(
        self,
        level: int,
        catalog: Dict[str, RecipeDefinition],
        names: Sequence[str],
    ) -> Order:
        candidates = available_recipes(catalog, level)
        if not candidates:
            raise CatalogError(f"No recipes available at level {level}")
        if not names:
            raise CatalogError("Customer name pool is empty")
        recipe = self.rng.choice(candidates)
        serving = self.rng.choice(self.serving_options)
        customer = self.rng.choice(list(names))
        return Order(
            order_id=self._new_id(),
            recipe=recipe,
            requested_serving=serving,
            patience=self.base_patience,
            max_patience=self.base_patience,
            customer_name=customer,
            state=Waiting(),
        )
