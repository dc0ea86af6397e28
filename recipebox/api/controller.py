"""Composition root: turns rendering-layer intents into core mutations.

The controller owns one StateStore, TabWorkspace, ShoppingList and EventBus
and shares them with nothing else. Every intent mutates local state first,
then (where the mutation is mirrored remotely) issues a SyncClient push
without waiting for it, then publishes the events the rendering layer
re-renders from.

Intents that push are coroutines because pushes are scheduled on the running
event loop; they never await the push itself.
"""
import logging
from typing import Any, Dict, Iterable, List, Optional

from recipebox.domain.Recipe import Recipe
from recipebox.domain.ShoppingItem import ShoppingItem
from recipebox.domain.ShoppingList import ShoppingList
from recipebox.domain.StateStore import StateStore
from recipebox.domain.SyncOperation import SyncOperation
from recipebox.domain.TabWorkspace import (
    TabWorkspace, SOURCE_RELATED, SOURCE_SIDEBAR, SOURCE_TAB
)
from recipebox.events.Event_Bus import EventBus, SHOPPING_LIST_CHANGED
from recipebox.events.event_helpers import (
    publish_fetch_failed, publish_message, publish_recipes_ready,
    publish_shopping_text, publish_suggestions, publish_tab_state
)
from recipebox.infra.Shopping_Rules_Repository import ShoppingRules, reading_shopping_rules
from recipebox.infra.Sync_Client import SyncClient
from recipebox.logic.recipes.related import resolve_related
from recipebox.logic.shopping import list_builder
from recipebox.logic.shopping.suggestions import visible_suggestions
from recipebox.utilities.constants import (
    DEFAULT_SUGGESTIONS, DUPLICATE_ITEM_MESSAGE, NEW_RECIPE_TITLE
)
from recipebox.utilities.errors import (
    DuplicateId, DuplicateItem, LookupFailure, RecipeBoxError
)

logger = logging.getLogger(__name__)

SOURCES = (SOURCE_SIDEBAR, SOURCE_RELATED, SOURCE_TAB)


class RecipeBoxController:
    def __init__(self, sync: SyncClient, rules: Optional[ShoppingRules] = None,
                 bus: Optional[EventBus] = None, store: Optional[StateStore] = None,
                 workspace: Optional[TabWorkspace] = None):
        self.sync = sync
        self.rules = rules or ShoppingRules()
        self.bus = bus or EventBus()
        self.store = store or StateStore()
        self.workspace = workspace or TabWorkspace()
        self.shopping = ShoppingList(self.bus)
        self.shopping_text = ""
        self.sort_mode = False
        self.suggest_mode = False
        # registered first so suggestions are updated before renderers hear about the list
        self.bus.subscribe(SHOPPING_LIST_CHANGED, self._on_list_changed)

    # ------------------------------------------------------------------ recipes
    async def load_recipes(self) -> Optional[List[Recipe]]:
        """Fetch the recipe list. None means the fetch failed (renderer shows 'could not load').

        A persisted shopping list or suggestion set sent along with the recipes
        replaces the local one without being mirrored back.
        """
        try:
            listing = await self.sync.fetch_latest()
        except RecipeBoxError as e:
            logger.error("getLatestRecipes failed: %s", e)
            publish_fetch_failed(self.bus, str(e))
            return None
        self.store.set_recipes(listing.recipes)
        if listing.shopping_list is not None or listing.suggestions is not None:
            self.init_shopping(
                self.shopping.to_text() if listing.shopping_list is None else listing.shopping_list,
                ",".join(self.store.get_suggestions()) if listing.suggestions is None else listing.suggestions,
            )
            publish_suggestions(self.bus, self.visible_suggestions())
        publish_recipes_ready(self.bus, self.store.get_recipes())
        return self.store.get_recipes()

    async def search(self, query: str) -> Optional[List[Recipe]]:
        q = (query or "").lower().strip()
        if not q:
            return self.store.get_recipes()
        try:
            recipes = await self.sync.search_recipes(q)
        except RecipeBoxError as e:
            logger.error("Search for %r failed: %s", q, e)
            publish_fetch_failed(self.bus, str(e))
            return None
        self.store.set_recipes(recipes)
        publish_recipes_ready(self.bus, self.store.get_recipes())
        return self.store.get_recipes()

    async def create_recipe(self) -> Optional[Recipe]:
        """Obtain a server id, cache a blank recipe and open it."""
        try:
            recipe_id = await self.sync.create_recipe()
        except RecipeBoxError as e:
            logger.error("Recipe creation failed: %s", e)
            return None
        recipe = Recipe(recipe_id, title=NEW_RECIPE_TITLE)
        try:
            self.store.add_recipe(recipe)
        except DuplicateId as e:
            logger.error("Recipe creation aborted: %s", e)
            return None
        publish_recipes_ready(self.bus, self.store.get_recipes())
        await self.open_recipe(recipe_id, SOURCE_SIDEBAR)
        return recipe

    def active_recipe(self) -> Optional[Recipe]:
        active_id = self.workspace.active_id
        return self.store.get_recipe_by_id(active_id) if active_id else None

    async def edit_field(self, section: str, value: str) -> Optional[Recipe]:
        """Edit one section of the active recipe and mirror it."""
        recipe_id = self.workspace.active_id
        if recipe_id is None:
            logger.warning("edit_field(%s) ignored: no recipe is open", section)
            return None
        try:
            recipe = self.store.set_recipe_section(recipe_id, section, value)
        except LookupFailure as e:
            logger.warning("edit_field error: %s", e)
            return None
        self.sync.push(SyncOperation.recipe_update(recipe_id, section, recipe.get_section(section)))
        if section == "title":
            # tab label and sidebar entry show the title
            publish_tab_state(self.bus, self.tab_snapshot())
            publish_recipes_ready(self.bus, self.store.get_recipes())
        return recipe

    def related_recipes(self, recipe_id: str) -> List[Recipe]:
        recipe = self.store.get_recipe_by_id(recipe_id)
        if recipe is None:
            logger.warning("related_recipes error: %s", LookupFailure(recipe_id))
            return []
        return resolve_related(self.store, recipe)

    # --------------------------------------------------------------------- tabs
    async def open_recipe(self, recipe_id: str, source: str = SOURCE_SIDEBAR) -> Optional[Recipe]:
        if source not in SOURCES:
            raise ValueError(f"Unknown open source '{source}'")
        recipe = self.store.get_recipe_by_id(recipe_id)
        if recipe is None:
            logger.warning("open_recipe error: Recipe not found for id: %s (%d cached)",
                           recipe_id, len(self.store))
            return None
        if source == SOURCE_TAB:
            try:
                self.workspace.activate_tab(recipe_id)
            except LookupFailure as e:
                logger.warning("Tab activation error: %s", e)
                return None
        elif source == SOURCE_RELATED:
            self.workspace.activate_from_related_link(recipe_id)
        else:
            self.workspace.activate_from_sidebar(recipe_id)
        publish_tab_state(self.bus, self.tab_snapshot())
        if source != SOURCE_TAB:
            self.sync.push(SyncOperation.recipe_access(recipe_id))
        return recipe

    async def close_tab(self, recipe_id: str) -> Dict[str, Any]:
        """Close a tab; the recipe itself stays cached."""
        newly_active = self.workspace.close(recipe_id)
        snapshot = self.tab_snapshot()
        publish_tab_state(self.bus, snapshot)
        if newly_active is not None:
            self.sync.push(SyncOperation.recipe_access(newly_active))
        return snapshot

    def open_recipes(self) -> List[Recipe]:
        """Open recipes in tab order; ids no longer cached are skipped."""
        recipes = []
        for rid in self.workspace.open_ids:
            recipe = self.store.get_recipe_by_id(rid)
            if recipe is None:
                logger.warning("Open tab skipped: %s", LookupFailure(rid))
                continue
            recipes.append(recipe)
        return recipes

    def tab_snapshot(self) -> Dict[str, Any]:
        snapshot = self.workspace.snapshot()
        snapshot["tabs"] = [
            {"id": r.id, "title": r.title, "active": r.id == self.workspace.active_id}
            for r in self.open_recipes()
        ]
        return snapshot

    # ------------------------------------------------------------ shopping list
    def init_shopping(self, shopping_list: str, suggestions: str):
        """Load the persisted list and suggestion set without mirroring them back."""
        self.shopping.load_text(shopping_list)
        self.store.set_suggestions((suggestions or "").split(","))
        return self.shopping.get_items()

    async def add_shopping_items(self, texts: Iterable[str], position: str = list_builder.TAIL) -> List[ShoppingItem]:
        self.shopping.clear_selection()
        return self.shopping.add_items(texts, position)

    async def add_shopping_item(self, text: str, prepend: bool = True) -> Optional[ShoppingItem]:
        """Manual entry. A repeat is reported as a message and re-raised as DuplicateItem."""
        publish_message(self.bus, "")
        self.shopping.clear_selection()
        try:
            return self.shopping.add_item(text, prepend)
        except DuplicateItem:
            publish_message(self.bus, DUPLICATE_ITEM_MESSAGE)
            raise

    async def edit_shopping_item(self, item_id: str, text: str) -> ShoppingItem:
        publish_message(self.bus, "")
        try:
            return self.shopping.edit_item(item_id, text)
        except DuplicateItem:
            publish_message(self.bus, DUPLICATE_ITEM_MESSAGE)
            raise
        finally:
            self.shopping.clear_selection()

    async def delete_shopping_item(self, item_id: str) -> ShoppingItem:
        self.shopping.clear_selection()
        return self.shopping.remove_item(item_id)

    async def reorder_shopping_items(self, ids: List[str]):
        if not self.sort_mode:
            raise ValueError("Items can only be reordered in sort mode")
        self.shopping.reorder(ids)

    def select_shopping_item(self, item_id: str) -> Optional[ShoppingItem]:
        """Toggle the edit selection; disabled while sorting."""
        if self.sort_mode:
            return None
        return self.shopping.toggle_selection(item_id)

    def toggle_sort_mode(self) -> bool:
        self.sort_mode = not self.sort_mode
        if self.sort_mode:
            self.shopping.clear_selection()
        return self.sort_mode

    def toggle_suggest_mode(self) -> bool:
        self.shopping.clear_selection()
        self.suggest_mode = not self.suggest_mode
        if self.suggest_mode:
            publish_suggestions(self.bus, self.visible_suggestions())
        return self.suggest_mode

    def regenerate_shopping_list_from_open_tabs(self, clear: bool = False) -> str:
        """Append consolidated ingredient blocks of the open tabs to the shopping text."""
        pairs = [(r.title, r.ingredients) for r in self.open_recipes()]
        existing = "" if clear else self.shopping_text
        self.shopping_text = list_builder.generate_from_open_recipes(
            pairs, self.rules.skip_words, self.rules.transforms, existing
        )
        publish_shopping_text(self.bus, self.shopping_text)
        return self.shopping_text

    def _on_list_changed(self, event_name: str, payload: Any):
        texts = self.shopping.texts()
        self.store.add_suggestions(texts)
        self.sync.push(SyncOperation.shopping_list_update(texts))
        publish_suggestions(self.bus, self.visible_suggestions())

    # -------------------------------------------------------------- suggestions
    def visible_suggestions(self) -> List[str]:
        return visible_suggestions(self.store.get_suggestions(), self.shopping.texts(), DEFAULT_SUGGESTIONS)

    async def add_suggestion_to_list(self, text: str) -> List[ShoppingItem]:
        return self.shopping.add_items([text], list_builder.HEAD)

    async def delete_suggestion(self, text: str) -> List[str]:
        """Forget one remembered item. Nothing is pushed unless the set changed."""
        before = len(self.store.get_suggestions())
        remaining = self.store.delete_suggestion(text)
        if len(remaining) == before:
            logger.info("delete_suggestion(%r) ignored: not a remembered item", text)
            return remaining
        self.sync.push(SyncOperation.suggestions_update(remaining))
        publish_suggestions(self.bus, self.visible_suggestions())
        return remaining

    # ------------------------------------------------------------------ lifecycle
    async def aclose(self):
        await self.sync.aclose()


def build_controller() -> RecipeBoxController:
    """Controller wired from configuration (backend URL, shopping rules file)."""
    return RecipeBoxController(SyncClient(), rules=reading_shopping_rules())


__all__ = ['RecipeBoxController', 'build_controller', 'SOURCES']
