"""KitchenSim — deterministic, headless-compatible kitchen simulation.

All gameplay constants are imported from ``config``.  The simulation has no
pygame dependency and is safe to import in headless / test contexts.
"""
from __future__ import annotations

import random
from typing import Dict, List, Mapping, Optional, Sequence, Tuple

from config import (
    COOKING_STATIONS,
    CUSTOMERS_FILE,
    DECAYING_STATUSES,
    EVENT_LOG_LIMIT,
    PATIENCE_DECAY_PER_TICK,
    PLATING,
    PREP,
    RECIPES_FILE,
    SPAWN_INTERVAL_BASE_MS,
    SPAWN_INTERVAL_FLOOR_MS,
    SPAWN_INTERVAL_STEP_MS,
    STARTING_INVENTORY,
    STARTING_LEVEL,
    TICK_INTERVAL_MS,
)
from customer_catalog import load_customer_names
from game import events
from game.entities import Cooking, Order, Preparing, Ready, ServiceReceipt
from game.errors import (
    CatalogError,
    InvalidStation,
    KitchenError,
    NoActiveOrder,
    OrderNotFound,
    OrderNotReady,
    SessionNotRunning,
    UnknownIngredient,
    WrongStation,
)
from game.factory import OrderFactory
from game.fractions import check_ingredients, first_failure, parse_amount, scale
from game.inventory import InventoryLedger
from game.order_book import OrderBook
from game.session import SessionState, service_points
from recipe_catalog import RecipeDefinition, available_recipes, load_recipe_catalog

RECIPES = load_recipe_catalog(RECIPES_FILE)
CUSTOMER_NAMES = load_customer_names(CUSTOMERS_FILE)


def spawn_interval_ms(level: int) -> int:
    return max(SPAWN_INTERVAL_BASE_MS - level * SPAWN_INTERVAL_STEP_MS, SPAWN_INTERVAL_FLOOR_MS)


def _check_elapsed(elapsed_ms: float) -> None:
    if elapsed_ms < 0:
        raise ValueError(f"elapsed_ms must be non-negative, got {elapsed_ms}")


class KitchenSim:
    """Tick-based kitchen simulation.

    The host drives time by calling :meth:`tick` (one fixed step) or
    :meth:`advance` (wall-clock milliseconds split into fixed steps).  Player
    actions are plain method calls that either succeed or raise a
    :class:`~game.errors.KitchenError` and leave state untouched.
    """

    def __init__(
        self,
        seed: int = 7,
        *,
        recipes: Optional[Dict[str, RecipeDefinition]] = None,
        customer_names: Optional[Sequence[str]] = None,
        inventory: Optional[Mapping[str, float]] = None,
    ) -> None:
        self.rng = random.Random(seed)
        self.recipes: Dict[str, RecipeDefinition] = dict(RECIPES if recipes is None else recipes)
        if not available_recipes(self.recipes, STARTING_LEVEL):
            raise CatalogError(f"Recipe catalog has nothing for level {STARTING_LEVEL}")
        self.customer_names: List[str] = list(CUSTOMER_NAMES if customer_names is None else customer_names)
        if not self.customer_names:
            raise CatalogError("Customer name pool is empty")
        self._starting_inventory: Dict[str, float] = dict(STARTING_INVENTORY if inventory is None else inventory)
        self.events = events.EventBus()
        self._reset()

    def _reset(self) -> None:
        self.factory = OrderFactory(self.rng)
        self.book = OrderBook()
        self.inventory = InventoryLedger(self._starting_inventory)
        self.session = SessionState()
        self.station: Optional[str] = None
        self.time_ms: float = 0.0
        self.spawn_timer_ms: float = 0.0
        self._frame_accum_ms: float = 0.0
        self.running: bool = False
        self.event_log: List[str] = []
        self._pending_events: List[Tuple[str, dict]] = []

    def _log_event(self, message: str) -> None:
        self.event_log.append(message)
        self.event_log = self.event_log[-EVENT_LOG_LIMIT:]

    def _emit(self, event_type: str, data: dict) -> None:
        self._pending_events.append((event_type, data))

    def _flush_events(self) -> None:
        """Deliver queued events once the state change that raised them is complete.

        Every queued event is published even if a listener raises; the first
        listener error is re-raised afterwards.
        """
        pending, self._pending_events = self._pending_events, []
        failure: Optional[Exception] = None
        for event_type, data in pending:
            try:
                self.events.publish(event_type, data)
            except Exception as exc:
                if failure is None:
                    failure = exc
        if failure is not None:
            raise failure

    def log_rejection(self, exc: KitchenError) -> None:
        """Record a refused action in the event log so the player sees why."""
        self._log_event(str(exc))

    def _require_running(self) -> None:
        if not self.running:
            raise SessionNotRunning()

    # ------------------------------------------------------------------
    # Session control
    # ------------------------------------------------------------------

    def start_session(self) -> SessionState:
        self._reset()
        self.session.started = True
        self.running = True
        self._log_event("Kitchen open")
        self.maybe_spawn_order()
        return self.session

    def stop(self) -> None:
        """Cancel the tick and spawn schedules together.

        A tick already running finishes; every later :meth:`tick` or
        :meth:`advance` call is a no-op.
        """
        self.running = False
        self._frame_accum_ms = 0.0

    @property
    def spawn_interval_ms(self) -> int:
        return spawn_interval_ms(self.session.level)

    # ------------------------------------------------------------------
    # Clock
    # ------------------------------------------------------------------

    def advance(self, elapsed_ms: float) -> int:
        """Run as many whole ticks as ``elapsed_ms`` covers; returns how many ran."""
        _check_elapsed(elapsed_ms)
        if not self.running:
            return 0
        self._frame_accum_ms += elapsed_ms
        ticks = 0
        while self.running and self._frame_accum_ms >= TICK_INTERVAL_MS:
            self._frame_accum_ms -= TICK_INTERVAL_MS
            self.tick(TICK_INTERVAL_MS)
            ticks += 1
        return ticks

    def tick(self, elapsed_ms: float = TICK_INTERVAL_MS) -> None:
        _check_elapsed(elapsed_ms)
        if not self.running:
            return
        self.time_ms += elapsed_ms
        self._decay_patience(elapsed_ms)
        self._advance_cooking(elapsed_ms)

        self.spawn_timer_ms += elapsed_ms
        while self.spawn_timer_ms >= self.spawn_interval_ms:
            self.spawn_timer_ms -= self.spawn_interval_ms
            self._spawn_order()
        self._flush_events()

    def _decay_patience(self, elapsed_ms: float) -> None:
        decay = PATIENCE_DECAY_PER_TICK * (elapsed_ms / TICK_INTERVAL_MS)
        decaying = [order for order in self.book if order.status in DECAYING_STATUSES]
        expired: List[Order] = []
        for order in decaying:
            order.patience = max(0.0, order.patience - decay)
            if order.patience <= 0:
                expired.append(order)
        for order in expired:
            self._abandon(order)

    def _abandon(self, order: Order) -> None:
        was_active = self.book.active_id == order.order_id
        self.book.remove(order.order_id)
        if was_active:
            self.station = None
        self.session.record_abandonment()
        self._log_event(f"{order.customer_name} left disappointed!")
        self._emit(events.ORDER_ABANDONED, {"order": order})

    def _advance_cooking(self, elapsed_ms: float) -> None:
        for order in self.book:
            state = order.state
            if not isinstance(state, Cooking):
                continue
            state.cooked_ms += elapsed_ms
            if state.cooked_ms >= state.cook_time_ms:
                order.state = Ready(station=state.station, scaled_amounts=state.scaled_amounts)
                self._log_event(f"{order.recipe.display_name} is ready for plating!")
                self._emit(events.ORDER_READY, {"order": order})

    def _spawn_order(self) -> Optional[Order]:
        if not self.running or self.session.won or self.book.is_full:
            return None
        order = self.factory.create_order(self.session.level, self.recipes, self.customer_names)
        self.book.add(order)
        self._emit(events.ORDER_SPAWNED, {"order": order})
        return order

    def maybe_spawn_order(self) -> Optional[Order]:
        order = self._spawn_order()
        self._flush_events()
        return order

    # ------------------------------------------------------------------
    # Player actions
    # ------------------------------------------------------------------

    def select_order(self, order_id: str) -> None:
        self._require_running()
        self.book.select(order_id)
        self.station = PREP

    def _preparing_order(self, order_id: str) -> tuple[Order, Preparing]:
        active = self.book.active
        if active is None or active.order_id != order_id or not isinstance(active.state, Preparing):
            raise NoActiveOrder(order_id)
        return active, active.state

    @staticmethod
    def _parsed_inputs(state: Preparing) -> Dict[str, Optional[float]]:
        return {name: parse_amount(text) for name, text in state.inputs.items()}

    def ingredient_feedback(self, order_id: str) -> Dict[str, bool]:
        order, state = self._preparing_order(order_id)
        scaled = scale(order.recipe, order.requested_serving)
        return check_ingredients(scaled, self._parsed_inputs(state), self.inventory.snapshot())

    def set_ingredient_input(self, order_id: str, ingredient: str, value: str | float | None) -> Dict[str, bool]:
        self._require_running()
        order, state = self._preparing_order(order_id)
        if ingredient not in order.recipe.ingredient_names:
            raise UnknownIngredient(ingredient)
        state.inputs[ingredient] = "" if value is None else str(value)
        return self.ingredient_feedback(order_id)

    def commit_to_cooking(self, order_id: str, station: str = COOKING_STATIONS[0]) -> None:
        self._require_running()
        order, state = self._preparing_order(order_id)
        if station not in COOKING_STATIONS:
            raise InvalidStation(station)
        scaled = scale(order.recipe, order.requested_serving)
        error = first_failure(scaled, self._parsed_inputs(state), self.inventory.snapshot())
        if error is not None:
            raise error
        self.inventory.deduct(scaled)
        order.state = Cooking(station=station, scaled_amounts=scaled, cook_time_ms=order.recipe.cook_time_ms)
        self.station = station
        self._log_event("Ingredients prepared! Now cooking...")

    def advance_to_plating(self, order_id: str) -> None:
        self._require_running()
        active = self.book.active
        if active is None or active.order_id != order_id or not isinstance(active.state, Ready):
            raise OrderNotReady(order_id)
        self.station = PLATING

    def serve_order(self, order_id: str) -> ServiceReceipt:
        self._require_running()
        if order_id not in self.book:
            raise OrderNotFound(order_id)
        order = self.book.get(order_id)
        if self.book.active_id != order_id or self.station != PLATING or not isinstance(order.state, Ready):
            raise WrongStation(order_id, self.station if self.book.active_id == order_id else None)

        base_points, time_bonus = service_points(order.recipe.difficulty, order.patience)
        points = base_points + time_bonus
        self.book.remove(order_id)
        self.station = None
        leveled_up, won = self.session.record_service(points)
        self._log_event(f"Order completed! +{points} points")

        if leveled_up:
            self._log_event(f"Level {self.session.level} unlocked! Customers are arriving faster!")
            self._emit(events.LEVEL_UP, {"level": self.session.level})
        if won:
            self._log_event(f"Congratulations! Fraction Kitchen completed with {self.session.score} points!")
            self._emit(events.SESSION_WON, {"score": self.session.score, "completed": self.session.completed})
            self.stop()

        receipt = ServiceReceipt(
            order_id=order_id,
            customer_name=order.customer_name,
            recipe_key=order.recipe.key,
            points=points,
            base_points=base_points,
            time_bonus=time_bonus,
            leveled_up=leveled_up,
            won=won,
        )
        self._flush_events()
        return receipt

    # ------------------------------------------------------------------
    # Snapshots
    # ------------------------------------------------------------------

    def orders_snapshot(self) -> List[Dict]:
        snapshot = []
        for order in self.book:
            data = order.to_dict()
            data["active"] = order.order_id == self.book.active_id
            snapshot.append(data)
        return snapshot

    def inventory_snapshot(self) -> Dict[str, float]:
        return self.inventory.snapshot()

    def session_snapshot(self) -> Dict:
        return self.session.to_dict()

    def to_dict(self) -> Dict:
        return {
            "orders": self.orders_snapshot(),
            "inventory": self.inventory_snapshot(),
            "low_stock": self.inventory.low_stock(),
            "session": self.session_snapshot(),
            "active_id": self.book.active_id,
            "station": self.station,
            "time_ms": self.time_ms,
            "running": self.running,
            "event_log": list(self.event_log),
        }
