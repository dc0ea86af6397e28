from typing import Final

# Editable recipe fields, in form order
RECIPE_SECTIONS: Final[tuple[str, ...]] = (
    "title", "ingredients", "method", "notes", "category", "tags", "related"
)
NEW_RECIPE_TITLE: Final[str] = "New Recipe"

# Remote paths
PATH_RECIPES: Final[str] = "recipes"
PATH_RECIPE_CREATE: Final[str] = "recipe-create"
PATH_RECIPE_UPDATE: Final[str] = "recipe-update"
PATH_RECIPE_ACCESS: Final[str] = "recipe-access"
PATH_SHOPPING_LIST_UPDATE: Final[str] = "shopping-list-update"
PATH_SHOPPING_SUGGESTIONS_UPDATE: Final[str] = "shopping-suggestions-update"

# Optional fields of the recipe-list response holding the persisted shopping state
FIELD_SHOPPING_LIST: Final[str] = "shoppingList"
FIELD_SHOPPING_SUGGESTIONS: Final[str] = "shoppingSuggestions"

# Consolidated shopping text layout
BLOCK_HEADER_FORMAT: Final[str] = "{title}:"
BLOCK_SEPARATOR: Final[str] = "----------"

# Shown in the recall view while nothing has been remembered yet
DEFAULT_SUGGESTIONS: Final[tuple[str, ...]] = ("apples", "carrots", "berries")

# Used when shopping_rules.json is missing or unreadable
DEFAULT_SKIP_WORDS: Final[tuple[str, ...]] = (
    "salt", "pepper", "water", "ice", "to taste", "optional"
)
DEFAULT_TRANSFORMS: Final[dict[str, str]] = {
    "tablespoons": "tbsp",
    "tablespoon": "tbsp",
    "teaspoons": "tsp",
    "teaspoon": "tsp",
    "ounces": "oz",
    "pounds": "lb",
}

DUPLICATE_ITEM_MESSAGE: Final[str] = "Already in list"

# Persisted shopping list and suggestion set are joined with this
ITEM_SEPARATOR: Final[str] = ","
