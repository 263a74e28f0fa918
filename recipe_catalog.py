from __future__ import annotations

import json
import math
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Iterable, List

RECIPES_FILE = Path("data/recipes.json")
ITEM_ID_RE = re.compile(r"^[a-z][a-z0-9_]*$")
MAX_INGREDIENTS = 8


@dataclass(frozen=True)
class RecipeDefinition:
    key: str
    display_name: str
    base_serving: int
    ingredients: tuple[tuple[str, float], ...]
    cook_time_ms: int = 3000
    difficulty: int = 1

    @property
    def ingredient_names(self) -> List[str]:
        return [name for name, _ in self.ingredients]


DEFAULT_RECIPE_DEFINITIONS: Dict[str, RecipeDefinition] = {
    "pancakes": RecipeDefinition(
        key="pancakes",
        display_name="Fluffy Pancakes",
        base_serving=4,
        ingredients=(("flour", 2.0), ("milk", 1.5), ("eggs", 2.0), ("sugar", 0.5)),
        cook_time_ms=3000,
        difficulty=1,
    ),
    "cookies": RecipeDefinition(
        key="cookies",
        display_name="Chocolate Cookies",
        base_serving=6,
        ingredients=(("flour", 3.0), ("butter", 1.0), ("sugar", 1.5), ("chocolate", 0.75)),
        cook_time_ms=4000,
        difficulty=2,
    ),
    "soup": RecipeDefinition(
        key="soup",
        display_name="Vegetable Soup",
        base_serving=8,
        ingredients=(("broth", 4.0), ("vegetables", 2.0), ("herbs", 0.25), ("salt", 0.125)),
        cook_time_ms=5000,
        difficulty=3,
    ),
}


def _is_valid_item_id(value: str) -> bool:
    return bool(ITEM_ID_RE.fullmatch(value))


def _coerce_int(value: Any, *, minimum: int | None = None) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        result = value
    elif isinstance(value, float) and value.is_integer():
        result = int(value)
    else:
        return None

    if minimum is not None and result < minimum:
        return None
    return result


def _is_positive_number(value: Any) -> bool:
    if isinstance(value, bool):
        return False
    return isinstance(value, (int, float)) and math.isfinite(value) and value > 0


def _parse_ingredients(value: Any) -> tuple[tuple[str, float], ...] | None:
    if not isinstance(value, dict) or not value or len(value) > MAX_INGREDIENTS:
        return None
    parsed: List[tuple[str, float]] = []
    for name, amount in value.items():
        if not isinstance(name, str) or not _is_valid_item_id(name):
            return None
        if not _is_positive_number(amount):
            return None
        parsed.append((name, float(amount)))
    return tuple(parsed)


def _parse_recipe_entry(key: str, entry: Dict[str, Any]) -> RecipeDefinition | None:
    if not _is_valid_item_id(key):
        return None

    display_name = entry.get("display_name")
    base_serving = _coerce_int(entry.get("base_serving"), minimum=1)
    cook_time_ms = _coerce_int(entry.get("cook_time_ms", 3000), minimum=1)
    difficulty = _coerce_int(entry.get("difficulty", 1), minimum=1)
    ingredients = _parse_ingredients(entry.get("ingredients"))

    if not isinstance(display_name, str) or not display_name.strip():
        return None
    if base_serving is None:
        return None
    if cook_time_ms is None:
        return None
    if difficulty is None:
        return None
    if ingredients is None:
        return None

    return RecipeDefinition(
        key=key,
        display_name=display_name,
        base_serving=base_serving,
        ingredients=ingredients,
        cook_time_ms=cook_time_ms,
        difficulty=difficulty,
    )


def _ordered_catalog(recipes: Iterable[RecipeDefinition]) -> Dict[str, RecipeDefinition]:
    ordered = sorted(recipes, key=lambda recipe: (recipe.difficulty, recipe.key))
    return {recipe.key: recipe for recipe in ordered}


def load_recipe_catalog(path: Path = RECIPES_FILE) -> Dict[str, RecipeDefinition]:
    if not path.exists():
        return _ordered_catalog(DEFAULT_RECIPE_DEFINITIONS.values())

    try:
        raw = json.loads(path.read_text())
    except (json.JSONDecodeError, OSError):
        return _ordered_catalog(DEFAULT_RECIPE_DEFINITIONS.values())

    if not isinstance(raw, dict):
        return _ordered_catalog(DEFAULT_RECIPE_DEFINITIONS.values())

    recipes: Dict[str, RecipeDefinition] = {}
    for key, entry in raw.items():
        if not isinstance(key, str) or not isinstance(entry, dict):
            continue
        recipe = _parse_recipe_entry(key, entry)
        if recipe is None:
            continue
        recipes[key] = recipe

    if not recipes:
        return _ordered_catalog(DEFAULT_RECIPE_DEFINITIONS.values())

    return _ordered_catalog(recipes.values())


def available_recipes(catalog: Dict[str, RecipeDefinition], level: int) -> List[RecipeDefinition]:
    """Recipes whose difficulty tier is unlocked at ``level``."""
    return [recipe for recipe in catalog.values() if recipe.difficulty <= level]
