"""Tests for the fraction engine: scaling and answer checking."""
from __future__ import annotations

import math
import unittest
from pathlib import Path

from config import INPUT_TOLERANCE, SERVING_OPTIONS
from game.errors import InsufficientInventory, ValidationFailed
from game.fractions import (
    check_ingredients,
    first_failure,
    multiplier_text,
    parse_amount,
    scale,
    validate,
)
from recipe_catalog import load_recipe_catalog

CATALOG = load_recipe_catalog(Path("does_not_exist.json"))
PANCAKES = CATALOG["pancakes"]
SOUP = CATALOG["soup"]
PLENTY = {name: 1000.0 for recipe in CATALOG.values() for name in recipe.ingredient_names}


class TestScale(unittest.TestCase):
    def test_scale_matches_proportional_formula(self):
        for recipe in CATALOG.values():
            for serving in SERVING_OPTIONS:
                scaled = scale(recipe, serving)
                self.assertEqual(set(scaled), set(recipe.ingredient_names))
                for name, amount in recipe.ingredients:
                    self.assertAlmostEqual(
                        scaled[name], amount * serving / recipe.base_serving, delta=1e-9, msg=f"{recipe.key}/{name}/{serving}"
                    )

    def test_pancakes_for_six(self):
        scaled = scale(PANCAKES, 6)
        self.assertEqual(scaled["flour"], 3.0)
        self.assertEqual(scaled["milk"], 2.25)
        self.assertEqual(scaled["eggs"], 3.0)
        self.assertEqual(scaled["sugar"], 0.75)

    def test_fractional_multipliers(self):
        cookies = CATALOG["cookies"]
        self.assertEqual(scale(cookies, 2)["chocolate"], 0.25)
        self.assertEqual(scale(cookies, 2)["flour"], 1.0)
        self.assertEqual(scale(SOUP, 3)["herbs"], 0.25 * 3 / 8)

    def test_multiplier_text(self):
        self.assertEqual(multiplier_text(PANCAKES, 6), "6/4 = 1.50")
        self.assertEqual(multiplier_text(SOUP, 6), "6/8 = 0.75")


class TestParseAmount(unittest.TestCase):
    def test_blank_is_missing(self):
        self.assertIsNone(parse_amount(""))
        self.assertIsNone(parse_amount("   "))
        self.assertIsNone(parse_amount(None))

    def test_numbers_and_text(self):
        self.assertEqual(parse_amount("3.00"), 3.0)
        self.assertEqual(parse_amount(" 2.5 "), 2.5)
        self.assertEqual(parse_amount(2), 2.0)

    def test_garbage_is_nan(self):
        self.assertTrue(math.isnan(parse_amount("three")))


class TestValidate(unittest.TestCase):
    def setUp(self):
        self.scaled = scale(PANCAKES, 6)

    def test_example_answer_accepted(self):
        inputs = dict(self.scaled)
        inputs["flour"] = parse_amount("3.00")
        self.assertTrue(validate(self.scaled, inputs, {**PLENTY, "flour": 20.0}))

    def test_example_wrong_answer_rejected(self):
        inputs = dict(self.scaled)
        inputs["flour"] = parse_amount("2.5")
        self.assertFalse(validate(self.scaled, inputs, PLENTY))
        error = first_failure(self.scaled, inputs, PLENTY)
        self.assertIsInstance(error, ValidationFailed)
        self.assertEqual(error.ingredient, "flour")
        self.assertEqual(error.expected, 3.0)
        self.assertEqual(error.tolerance, INPUT_TOLERANCE)

    def test_tolerance_edges_are_inclusive(self):
        for offset in (INPUT_TOLERANCE, -INPUT_TOLERANCE):
            inputs = {name: amount + offset for name, amount in self.scaled.items()}
            self.assertTrue(validate(self.scaled, inputs, PLENTY), offset)

    def test_just_beyond_tolerance_fails(self):
        for offset in (0.1001, -0.1001, 0.5):
            for name in self.scaled:
                inputs = dict(self.scaled)
                inputs[name] += offset
                self.assertFalse(validate(self.scaled, inputs, PLENTY), f"{name} {offset}")

    def test_missing_inputs_count_as_zero(self):
        self.assertFalse(validate(self.scaled, {}, PLENTY))
        tiny = scale(SOUP, 2)
        self.assertLess(tiny["herbs"], INPUT_TOLERANCE)
        self.assertLess(tiny["salt"], INPUT_TOLERANCE)
        inputs = {"broth": tiny["broth"], "vegetables": tiny["vegetables"], "herbs": None}
        self.assertTrue(validate(tiny, inputs, PLENTY))

    def test_negative_input_fails_even_inside_tolerance(self):
        tiny = scale(SOUP, 2)
        inputs = dict(tiny)
        inputs["salt"] = -0.05
        self.assertLessEqual(abs(inputs["salt"] - tiny["salt"]), INPUT_TOLERANCE)
        self.assertFalse(validate(tiny, inputs, PLENTY))
        self.assertIsInstance(first_failure(tiny, inputs, PLENTY), ValidationFailed)

    def test_nan_input_fails(self):
        inputs = dict(self.scaled)
        inputs["milk"] = math.nan
        self.assertFalse(validate(self.scaled, inputs, PLENTY))

    def test_insufficient_inventory_reported(self):
        inputs = dict(self.scaled)
        error = first_failure(self.scaled, inputs, {**PLENTY, "flour": 2.0})
        self.assertIsInstance(error, InsufficientInventory)
        self.assertEqual((error.ingredient, error.have, error.need), ("flour", 2.0, 3.0))

    def test_check_ingredients_gives_per_ingredient_feedback(self):
        inputs = {"flour": 3.0, "milk": 9.0}
        feedback = check_ingredients(self.scaled, inputs, PLENTY)
        self.assertEqual(feedback, {"flour": True, "milk": False, "eggs": False, "sugar": False})

    def test_validate_does_not_mutate_arguments(self):
        inputs = dict(self.scaled)
        inventory = dict(PLENTY)
        validate(self.scaled, inputs, inventory)
        self.assertEqual(inputs, self.scaled)
        self.assertEqual(inventory, PLENTY)
