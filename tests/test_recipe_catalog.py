import json
import tempfile
import unittest
from pathlib import Path

from recipe_catalog import (
    DEFAULT_RECIPE_DEFINITIONS,
    available_recipes,
    load_recipe_catalog,
)


def _entry(**overrides):
    entry = {
        "display_name": "Valid",
        "base_serving": 4,
        "ingredients": {"flour": 2, "milk": 1.5},
        "cook_time_ms": 3000,
        "difficulty": 1,
    }
    entry.update(overrides)
    return entry


class RecipeCatalogTests(unittest.TestCase):
    def _load(self, payload) -> dict:
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "recipes.json"
            path.write_text(json.dumps(payload))
            return load_recipe_catalog(path)

    def test_repository_recipe_catalog_has_a_tier_one_recipe(self):
        catalog = load_recipe_catalog(Path("data/recipes.json"))

        self.assertIn("pancakes", catalog)
        self.assertEqual(catalog["pancakes"].base_serving, 4)
        self.assertEqual(dict(catalog["pancakes"].ingredients)["flour"], 2.0)
        self.assertTrue(available_recipes(catalog, 1))
        for recipe in catalog.values():
            self.assertGreaterEqual(recipe.difficulty, 1)
            self.assertGreater(recipe.cook_time_ms, 0)

    def test_loads_defaults_when_file_missing(self):
        catalog = load_recipe_catalog(Path("does_not_exist.json"))
        self.assertEqual(set(catalog), set(DEFAULT_RECIPE_DEFINITIONS))
        self.assertEqual(dict(catalog["soup"].ingredients)["salt"], 0.125)

    def test_loads_defaults_for_non_object_payload(self):
        catalog = self._load(["pancakes"])
        self.assertEqual(set(catalog), set(DEFAULT_RECIPE_DEFINITIONS))

    def test_loads_defaults_for_unreadable_json(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "recipes.json"
            path.write_text("{not json")
            catalog = load_recipe_catalog(path)
        self.assertIn("pancakes", catalog)

    def test_filters_invalid_entries(self):
        catalog = self._load(
            {
                "valid": _entry(),
                "zero_serving": _entry(base_serving=0),
                "fractional_serving": _entry(base_serving=2.5),
                "negative_amount": _entry(ingredients={"flour": -1}),
                "no_ingredients": _entry(ingredients={}),
                "Bad Key": _entry(),
                "blank_name": _entry(display_name="  "),
                "zero_difficulty": _entry(difficulty=0),
                "bool_cook_time": _entry(cook_time_ms=True),
            }
        )
        self.assertEqual(set(catalog), {"valid"})

    def test_falls_back_when_every_entry_is_invalid(self):
        catalog = self._load({"broken": _entry(base_serving=-4)})
        self.assertEqual(set(catalog), set(DEFAULT_RECIPE_DEFINITIONS))

    def test_ingredient_order_is_preserved(self):
        catalog = self._load({"crepes": _entry(ingredients={"milk": 2, "flour": 1, "eggs": 3})})
        self.assertEqual(catalog["crepes"].ingredient_names, ["milk", "flour", "eggs"])

    def test_catalog_is_ordered_by_difficulty_then_key(self):
        catalog = self._load(
            {
                "zeppole": _entry(difficulty=1),
                "brioche": _entry(difficulty=2),
                "apple_pie": _entry(difficulty=2),
            }
        )
        self.assertEqual(list(catalog), ["zeppole", "apple_pie", "brioche"])


class AvailableRecipesTests(unittest.TestCase):
    def setUp(self):
        self.catalog = load_recipe_catalog(Path("does_not_exist.json"))

    def test_level_one_only_offers_tier_one(self):
        self.assertEqual([r.key for r in available_recipes(self.catalog, 1)], ["pancakes"])

    def test_higher_levels_unlock_harder_recipes(self):
        self.assertEqual({r.key for r in available_recipes(self.catalog, 2)}, {"pancakes", "cookies"})
        self.assertEqual({r.key for r in available_recipes(self.catalog, 9)}, {"pancakes", "cookies", "soup"})
