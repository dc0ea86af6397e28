"""Error kinds raised by the RecipeBox core.

Read failures (NetworkFailure, ApplicationError) reach the caller.
Write/sync failures are logged by the SyncClient and never raised.
"""


class RecipeBoxError(Exception):
    """Base class for all RecipeBox errors."""


class NetworkFailure(RecipeBoxError):
    """The transport could not complete the request."""


class ApplicationError(RecipeBoxError):
    """The backend answered with a non-empty ``error`` field."""


class LookupFailure(RecipeBoxError, LookupError):
    """A recipe id is not present in the cache."""

    def __init__(self, recipe_id: str):
        super().__init__(f"Recipe not found for id: {recipe_id}")
        self.recipe_id = recipe_id


class DuplicateItem(RecipeBoxError, ValueError):
    """A shopping item with the same normalized text already exists."""

    def __init__(self, text: str):
        super().__init__(f"'{text}' is already in the shopping list")
        self.text = text


class DuplicateId(RecipeBoxError, ValueError):
    """A recipe with the same id is already cached."""

    def __init__(self, recipe_id: str):
        super().__init__(f"Recipe id already cached: {recipe_id}")
        self.recipe_id = recipe_id
