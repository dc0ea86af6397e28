"""ShoppingList aggregate: ordered ShoppingItem collection with edit selection.

Every mutation publishes shopping.list_changed on the attached bus unless the
caller asks to stay quiet (initial load from persisted text).
"""
from typing import Iterable, List, Optional

from recipebox.domain.ShoppingItem import ShoppingItem, normalize_text
from recipebox.events.Event_Bus import EventBus
from recipebox.events.event_helpers import publish_list_changed
from recipebox.logic.shopping import list_builder
from recipebox.utilities.errors import DuplicateItem


class ShoppingList:
    def __init__(self, bus: Optional[EventBus] = None):
        self.items: List[ShoppingItem] = []
        self._event_bus = bus

    # --- Observer helpers -------------------------------------------------
    def set_event_bus(self, bus: EventBus):
        self._event_bus = bus
        return self

    def _notify_changed(self):
        if self._event_bus is not None:
            publish_list_changed(self._event_bus, self.items)

    # --- Mutations ----------------------------------------------------------
    def add_items(self, texts: Iterable[str], position: str = list_builder.TAIL, quiet: bool = False) -> List[ShoppingItem]:
        '''
        Adds several texts, skipping empties and anything already listed.
        Returns the items that were actually added.
        '''
        before = {item.id for item in self.items}
        self.items = list_builder.add_items(self.items, texts, position)
        added = [item for item in self.items if item.id not in before]
        if not quiet:
            self._notify_changed()
        return added

    def add_item(self, text: str, prepend: bool = True) -> Optional[ShoppingItem]:
        '''
        Adds one manually entered item. Raises DuplicateItem if already listed.
        '''
        before = {item.id for item in self.items}
        self.items = list_builder.add_single_item(self.items, text, prepend)
        added = [item for item in self.items if item.id not in before]
        if not added:
            return None
        self._notify_changed()
        return added[0]

    def edit_item(self, item_id: str, text: str) -> ShoppingItem:
        '''
        Replaces the text of an item in place (same position, same id).
        '''
        item = self.require(item_id)
        norm = normalize_text(text)
        if not norm:
            raise ValueError("Shopping item text cannot be empty")
        list_builder.check_item_text(norm)
        if any(other.text == norm for other in self.items if other is not item):
            raise DuplicateItem(norm)
        item.text = norm
        item.checked = False
        self._notify_changed()
        return item

    def remove_item(self, item_id: str) -> ShoppingItem:
        item = self.require(item_id)
        self.items.remove(item)
        self._notify_changed()
        return item

    def reorder(self, ids: List[str]):
        '''
        Applies a drag-and-drop result. ids must be a permutation of the current ids.
        '''
        index = {item.id: item for item in self.items}
        if len(ids) != len(index) or set(ids) != set(index):
            raise ValueError("Reorder ids must list every shopping item exactly once")
        self.items = [index[i] for i in ids]
        self._notify_changed()

    # --- Selection ------------------------------------------------------------
    def toggle_selection(self, item_id: str) -> Optional[ShoppingItem]:
        '''
        Toggles the checked flag of one item; at most one item is checked.
        Returns the selected item, or None when the selection was cleared.
        '''
        item = self.require(item_id)
        selected = not item.checked
        self.clear_selection()
        item.checked = selected
        return item if selected else None

    def clear_selection(self):
        for item in self.items:
            item.checked = False

    def selected(self) -> Optional[ShoppingItem]:
        for item in self.items:
            if item.checked:
                return item
        return None

    # --- Queries ----------------------------------------------------------------
    def require(self, item_id: str) -> ShoppingItem:
        item = list_builder.find_item(self.items, item_id)
        if item is None:
            raise KeyError(f"Shopping item '{item_id}' not found")
        return item

    def contains(self, text: str) -> bool:
        norm = normalize_text(text)
        return any(item.text == norm for item in self.items)

    def get_items(self) -> List[ShoppingItem]:
        return self.items

    def texts(self) -> List[str]:
        return [item.text for item in self.items]

    # --- Persistence format ----------------------------------------------------
    def load_text(self, text: str):
        '''
        Populates the list from the persisted comma-joined text without notifying.
        '''
        self.items = []
        if text and text.strip():
            self.add_items(text.split(','), quiet=True)
        return self

    def to_text(self) -> str:
        return ",".join(self.texts())

    def __len__(self) -> int:
        return len(self.items)

    def __str__(self) -> str:
        items_str = ",\n\t".join(str(item) for item in self.items)
        return f"Shopping List Items:\n\t{items_str}"

    def __repr__(self) -> str:
        return self.__str__()
