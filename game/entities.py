"""Core dataclasses for the Fraction Kitchen simulation."""
from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import ClassVar, Dict, Optional, Union

from config import COOKING, PREPARING, READY, WAITING
from recipe_catalog import RecipeDefinition


@dataclass
class Waiting:
    """Customer has ordered; nobody has started on it."""

    status: ClassVar[str] = WAITING


@dataclass
class Preparing:
    """At the prep station.  ``inputs`` holds the raw text typed per ingredient."""

    inputs: Dict[str, str] = field(default_factory=dict)
    status: ClassVar[str] = PREPARING


@dataclass
class Cooking:
    """Ingredients committed and deducted; the dish is on the stove or in the oven."""

    station: str
    scaled_amounts: Dict[str, float]
    cook_time_ms: int
    cooked_ms: float = 0.0
    status: ClassVar[str] = COOKING

    @property
    def progress(self) -> float:
        return min(100.0, self.cooked_ms * 100.0 / self.cook_time_ms)


@dataclass
class Ready:
    """Cooked and waiting to be plated and served."""

    station: str
    scaled_amounts: Dict[str, float]
    status: ClassVar[str] = READY

    @property
    def progress(self) -> float:
        return 100.0


OrderState = Union[Waiting, Preparing, Cooking, Ready]


@dataclass
class Order:
    """A customer order held by the order book until it is plated or abandoned.

    ``patience`` only decays while the order is waiting or preparing, so once
    it is cooking the value is frozen and feeds the time bonus at service.
    """

    order_id: str
    recipe: RecipeDefinition
    requested_serving: int
    patience: float
    max_patience: float
    customer_name: str
    state: OrderState = field(default_factory=Waiting)

    @property
    def status(self) -> str:
        return self.state.status

    @property
    def scaled_amounts(self) -> Optional[Dict[str, float]]:
        if isinstance(self.state, (Cooking, Ready)):
            return dict(self.state.scaled_amounts)
        return None

    @property
    def cooking_progress(self) -> Optional[float]:
        if isinstance(self.state, (Cooking, Ready)):
            return self.state.progress
        return None

    @property
    def patience_pct(self) -> float:
        return (self.patience / self.max_patience) * 100.0 if self.max_patience > 0 else 0.0

    @property
    def patience_seconds(self) -> int:
        return max(0, math.ceil(self.patience / 1000.0))

    def to_dict(self) -> Dict:
        data: Dict = {
            "order_id": self.order_id,
            "recipe_key": self.recipe.key,
            "recipe_name": self.recipe.display_name,
            "requested_serving": self.requested_serving,
            "patience": self.patience,
            "max_patience": self.max_patience,
            "customer_name": self.customer_name,
            "status": self.status,
        }
        if isinstance(self.state, Preparing):
            data["inputs"] = dict(self.state.inputs)
        if isinstance(self.state, (Cooking, Ready)):
            data["station"] = self.state.station
            data["scaled_amounts"] = dict(self.state.scaled_amounts)
            data["cooking_progress"] = self.state.progress
        return data


@dataclass(frozen=True)
class ServiceReceipt:
    """What serving an order earned."""

    order_id: str
    customer_name: str
    recipe_key: str
    points: int
    base_points: int
    time_bonus: int
    leveled_up: bool = False
    won: bool = False
