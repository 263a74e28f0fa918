"""Centralised configuration constants for Fraction Kitchen."""
from __future__ import annotations

from pathlib import Path

# ---------------------------------------------------------------------------
# Display
# ---------------------------------------------------------------------------
SCREEN_W: int = 1100
SCREEN_H: int = 720
FPS: int = 60

# ---------------------------------------------------------------------------
# File paths
# ---------------------------------------------------------------------------
RECIPES_FILE: Path = Path("data/recipes.json")
CUSTOMERS_FILE: Path = Path("data/customers.json")

# ---------------------------------------------------------------------------
# Order status constants
# ---------------------------------------------------------------------------
WAITING: str = "waiting"
PREPARING: str = "preparing"
COOKING: str = "cooking"
READY: str = "ready"

# Statuses that hold the single active-order slot
ACTIVE_STATUSES: tuple[str, ...] = (PREPARING, COOKING, READY)

# Statuses whose patience decays each tick
DECAYING_STATUSES: tuple[str, ...] = (WAITING, PREPARING)

# ---------------------------------------------------------------------------
# Station pointer values
# ---------------------------------------------------------------------------
PREP: str = "prep"
STOVE: str = "stove"
OVEN: str = "oven"
PLATING: str = "plating"

COOKING_STATIONS: tuple[str, ...] = (STOVE, OVEN)

# ---------------------------------------------------------------------------
# Simulation tuning (all durations in milliseconds)
# ---------------------------------------------------------------------------
TICK_INTERVAL_MS: int = 100            # fast tick granularity
BASE_PATIENCE_MS: int = 40000          # patience every new customer starts with
PATIENCE_DECAY_PER_TICK: int = 50      # patience lost per reference tick
SPAWN_INTERVAL_BASE_MS: int = 8000     # spawn interval before level scaling
SPAWN_INTERVAL_STEP_MS: int = 500      # spawn interval reduction per level
SPAWN_INTERVAL_FLOOR_MS: int = 3000    # spawn interval never drops below this
ORDER_CAPACITY: int = 15               # maximum orders held in the book

# Requested serving counts; several are deliberately not multiples of common
# base servings.
SERVING_OPTIONS: tuple[int, ...] = (2, 3, 6, 8, 9, 12)

# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------
INPUT_TOLERANCE: float = 0.1           # absolute, never scaled by magnitude
FLOAT_EPSILON: float = 1e-9            # slack for binary rounding at the tolerance edge

# ---------------------------------------------------------------------------
# Progression and scoring
# ---------------------------------------------------------------------------
STARTING_LEVEL: int = 1
LEVEL_UP_EVERY: int = 3                # completed orders per level
WIN_THRESHOLD: int = 15                # completed orders to finish the session
POINTS_PER_DIFFICULTY: int = 100
TIME_BONUS_DIVISOR_MS: int = 100       # one bonus point per 100ms of patience left

# ---------------------------------------------------------------------------
# Event log
# ---------------------------------------------------------------------------
EVENT_LOG_LIMIT: int = 12

# ---------------------------------------------------------------------------
# Inventory
# ---------------------------------------------------------------------------
LOW_STOCK_THRESHOLD: float = 3.0

STARTING_INVENTORY: dict[str, float] = {
    "flour": 20.0,
    "milk": 15.0,
    "eggs": 24.0,
    "sugar": 10.0,
    "butter": 8.0,
    "chocolate": 6.0,
    "broth": 12.0,
    "vegetables": 18.0,
    "herbs": 4.0,
    "salt": 2.0,
}
