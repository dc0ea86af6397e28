import random
import unittest

from recipebox.domain.ShoppingItem import ShoppingItem
from recipebox.logic.shopping.list_builder import (
    HEAD, TAIL, add_items, add_single_item, format_block, generate_from_open_recipes, recipe_lines
)
from recipebox.utilities.constants import BLOCK_SEPARATOR
from recipebox.utilities.errors import DuplicateItem


def _items(*texts):
    return [ShoppingItem(t) for t in texts]


class TestGenerateFromOpenRecipes(unittest.TestCase):

    def test_recipe_lines_filters_and_truncates(self):
        lines = recipe_lines("1 cup sugar\nsalt\n2 eggs, beaten", ["salt"], {})
        self.assertEqual(lines, ["1 cup sugar", "2 eggs"])

    def test_block_layout(self):
        text = generate_from_open_recipes([("Cake", "1 cup sugar\nsalt\n2 eggs, beaten")], ["salt"], {}, "")
        self.assertEqual(text.split("\n"), ["Cake:", "1 cup sugar", "2 eggs", BLOCK_SEPARATOR])

    def test_blocks_follow_supplied_order(self):
        text = generate_from_open_recipes([("B", "bread"), ("A", "apples")], [], {}, "")
        self.assertLess(text.index("B:"), text.index("A:"))

    def test_appends_after_existing_text(self):
        first = generate_from_open_recipes([("Cake", "flour")], [], {}, "")
        second = generate_from_open_recipes([("Cake", "flour")], [], {}, first)
        self.assertTrue(second.startswith(first))
        self.assertIn(f"\n\n{BLOCK_SEPARATOR}\n\n", second)
        # not idempotent: the block is there twice
        self.assertEqual(second.count("Cake:"), 2)

    def test_blank_existing_text_regenerates(self):
        text = generate_from_open_recipes([("Cake", "flour")], [], {}, "   \n")
        self.assertEqual(text, format_block("Cake", ["flour"]))

    def test_recipe_with_no_surviving_lines_keeps_header(self):
        text = generate_from_open_recipes([("Brine", "water\nsalt")], ["salt", "water"], {}, "")
        self.assertEqual(text, f"Brine:\n{BLOCK_SEPARATOR}")


class TestAddItems(unittest.TestCase):

    def test_dedup_and_tail_insert(self):
        current = _items("milk", "eggs")
        result = add_items(current, ["Milk", " Bread "], TAIL)
        self.assertEqual([i.text for i in result], ["milk", "eggs", "bread"])

    def test_head_insert_preserves_relative_order(self):
        current = _items("milk")
        result = add_items(current, ["Apples", "", "bananas"], HEAD)
        self.assertEqual([i.text for i in result], ["apples", "bananas", "milk"])

    def test_does_not_mutate_input(self):
        current = _items("milk")
        add_items(current, ["bread"], TAIL)
        self.assertEqual([i.text for i in current], ["milk"])

    def test_existing_items_keep_identity(self):
        current = _items("milk")
        result = add_items(current, ["bread"], TAIL)
        self.assertIs(result[0], current[0])

    def test_repeats_inside_new_texts_collapse(self):
        result = add_items([], ["Tea", "tea ", "TEA"], TAIL)
        self.assertEqual([i.text for i in result], ["tea"])

    def test_unknown_position_rejected(self):
        with self.assertRaises(ValueError):
            add_items([], ["tea"], "middle")

    def test_never_produces_duplicates(self):
        rng = random.Random(7)
        vocabulary = ["Milk", "milk ", "EGGS", "eggs", "bread", " Bread", "", "tea", "Tea"]
        items = []
        for _ in range(200):
            batch = [rng.choice(vocabulary) for _ in range(rng.randint(0, 4))]
            items = add_items(items, batch, rng.choice([HEAD, TAIL]))
            texts = [i.text for i in items]
            self.assertEqual(len(texts), len(set(texts)))
            self.assertNotIn("", texts)

    def test_add_single_item_rejects_duplicate(self):
        current = _items("milk")
        with self.assertRaises(DuplicateItem):
            add_single_item(current, " MILK", prepend=True)

    def test_add_single_item_prepends(self):
        result = add_single_item(_items("milk"), "Bread", prepend=True)
        self.assertEqual([i.text for i in result], ["bread", "milk"])
        result = add_single_item(_items("milk"), "Bread", prepend=False)
        self.assertEqual([i.text for i in result], ["milk", "bread"])

    def test_add_single_item_ignores_blank(self):
        current = _items("milk")
        self.assertEqual(add_single_item(current, "   "), current)

    def test_add_single_item_rejects_separator(self):
        current = _items("milk")
        with self.assertRaises(ValueError):
            add_single_item(current, "eggs, large")

    def test_add_items_splits_on_separator(self):
        result = add_items(_items("milk"), ["Eggs, large", "milk,tea"])
        self.assertEqual([i.text for i in result], ["milk", "eggs", "large", "tea"])
