"""StateStore: in-memory recipe cache and shopping suggestion set.

One instance is owned by the composition root and handed to every
component that needs it. It never talks to the network.
"""
from typing import Dict, Iterable, List, Optional

from recipebox.domain.Recipe import Recipe
from recipebox.domain.ShoppingItem import normalize_text
from recipebox.utilities.errors import DuplicateId, LookupFailure


class StateStore:
    def __init__(self):
        # dicts keep insertion order, which is the sidebar order
        self._recipes: Dict[str, Recipe] = {}
        self._suggestions: set = set()

    # --- Recipes -----------------------------------------------------------
    def set_recipes(self, recipes: Iterable[Recipe]):
        '''Replaces the whole cache. Later duplicates of an id win.'''
        self._recipes = {}
        for recipe in recipes:
            self._recipes[recipe.id] = recipe
        return self

    def add_recipe(self, recipe: Recipe) -> Recipe:
        if recipe.id in self._recipes:
            raise DuplicateId(recipe.id)
        self._recipes[recipe.id] = recipe
        return recipe

    def get_recipe_by_id(self, recipe_id: str) -> Optional[Recipe]:
        return self._recipes.get(recipe_id)

    def require_recipe(self, recipe_id: str) -> Recipe:
        recipe = self._recipes.get(recipe_id)
        if recipe is None:
            raise LookupFailure(recipe_id)
        return recipe

    def get_recipes(self) -> List[Recipe]:
        return list(self._recipes.values())

    def set_recipe_section(self, recipe_id: str, section: str, value: str) -> Recipe:
        recipe = self.require_recipe(recipe_id)
        recipe.set_section(section, value)
        return recipe

    # --- Suggestions -------------------------------------------------------
    def add_suggestions(self, items: Iterable[str]) -> List[str]:
        for item in items:
            text = normalize_text(item)
            if text:
                self._suggestions.add(text)
        return self.get_suggestions()

    def set_suggestions(self, items: Iterable[str]) -> List[str]:
        self._suggestions = set()
        return self.add_suggestions(items)

    def delete_suggestion(self, item: str) -> List[str]:
        '''Removes item (case-insensitive) and returns the remaining set, sorted.'''
        self._suggestions.discard(normalize_text(item))
        return self.get_suggestions()

    def get_suggestions(self) -> List[str]:
        return sorted(self._suggestions)

    def __len__(self) -> int:
        return len(self._recipes)

    def __str__(self) -> str:
        return f"StateStore({len(self._recipes)} recipes, {len(self._suggestions)} suggestions)"

    __repr__ = __str__
