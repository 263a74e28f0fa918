"""Fraction engine: scale a recipe to a requested serving and check answers.

Everything here is pure.  ``check_ingredients`` is cheap enough to call on
every keystroke; ``first_failure`` is the final gate before cooking.
"""
from __future__ import annotations

import math
from fractions import Fraction
from typing import Dict, Mapping, Optional

from config import FLOAT_EPSILON, INPUT_TOLERANCE
from game.errors import CommitError, InsufficientInventory, ValidationFailed
from recipe_catalog import RecipeDefinition

Amount = Optional[float]


def multiplier(recipe: RecipeDefinition, requested_serving: int) -> Fraction:
    return Fraction(requested_serving, recipe.base_serving)


def multiplier_text(recipe: RecipeDefinition, requested_serving: int) -> str:
    """Hint shown at the prep station, e.g. ``6/4 = 1.50``."""
    factor = multiplier(recipe, requested_serving)
    return f"{requested_serving}/{recipe.base_serving} = {float(factor):.2f}"


def scale(recipe: RecipeDefinition, requested_serving: int) -> Dict[str, float]:
    factor = multiplier(recipe, requested_serving)
    return {name: float(Fraction(amount) * factor) for name, amount in recipe.ingredients}


def parse_amount(value: str | float | int | None) -> Amount:
    """Turn raw input into a number.

    Blank input is ``None`` (treated as zero).  Text that is not a number
    parses to NaN, which never validates.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    text = value.strip()
    if not text:
        return None
    try:
        return float(text)
    except ValueError:
        return math.nan


def _candidate(inputs: Mapping[str, Amount], ingredient: str) -> float:
    value = inputs.get(ingredient)
    return 0.0 if value is None else value


def _ingredient_error(
    ingredient: str,
    expected: float,
    candidate: float,
    inventory: Mapping[str, float],
    tolerance: float,
) -> Optional[CommitError]:
    if math.isnan(candidate) or candidate < 0 or abs(candidate - expected) > tolerance + FLOAT_EPSILON:
        return ValidationFailed(ingredient, expected, tolerance)
    have = inventory.get(ingredient, 0.0)
    if have < candidate:
        return InsufficientInventory(ingredient, have, candidate)
    return None


def check_ingredients(
    scaled_amounts: Mapping[str, float],
    inputs: Mapping[str, Amount],
    inventory: Mapping[str, float],
    tolerance: float = INPUT_TOLERANCE,
) -> Dict[str, bool]:
    """Per-ingredient validity, for live highlighting."""
    return {
        ingredient: _ingredient_error(ingredient, expected, _candidate(inputs, ingredient), inventory, tolerance) is None
        for ingredient, expected in scaled_amounts.items()
    }


def first_failure(
    scaled_amounts: Mapping[str, float],
    inputs: Mapping[str, Amount],
    inventory: Mapping[str, float],
    tolerance: float = INPUT_TOLERANCE,
) -> Optional[CommitError]:
    for ingredient, expected in scaled_amounts.items():
        error = _ingredient_error(ingredient, expected, _candidate(inputs, ingredient), inventory, tolerance)
        if error is not None:
            return error
    return None


def validate(
    scaled_amounts: Mapping[str, float],
    inputs: Mapping[str, Amount],
    inventory: Mapping[str, float],
    tolerance: float = INPUT_TOLERANCE,
) -> bool:
    return first_failure(scaled_amounts, inputs, inventory, tolerance) is None
