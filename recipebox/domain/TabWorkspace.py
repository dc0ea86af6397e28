"""TabWorkspace: which recipes are open as tabs and which one is active.

States:
  EMPTY -> no open tabs, detail view hidden
  OPEN  -> active_id is one of open_ids

The workspace only tracks ids. Whether an id exists in the recipe cache is
checked by the caller before opening.
"""
from typing import Any, Dict, List, Optional

from recipebox.utilities.errors import LookupFailure

EMPTY = "empty"
OPEN = "open"

SOURCE_SIDEBAR = "sidebar"
SOURCE_RELATED = "related"
SOURCE_TAB = "tab"


class TabWorkspace:
    def __init__(self):
        self._open_ids: List[str] = []
        self._active_id: Optional[str] = None
        # sidebar entry carrying the "active" marker, may differ from tab origin
        self._sidebar_active_id: Optional[str] = None

    @property
    def state(self) -> str:
        return OPEN if self._open_ids else EMPTY

    @property
    def active_id(self) -> Optional[str]:
        return self._active_id

    @property
    def open_ids(self) -> List[str]:
        return list(self._open_ids)

    @property
    def sidebar_active_id(self) -> Optional[str]:
        return self._sidebar_active_id

    def is_open(self, recipe_id: str) -> bool:
        return recipe_id in self._open_ids

    def open(self, recipe_id: str) -> bool:
        '''
        Activates recipe_id, appending a new tab when it is not open yet.
        Returns True when a tab was created.
        '''
        created = recipe_id not in self._open_ids
        if created:
            self._open_ids.append(recipe_id)
        self._active_id = recipe_id
        self._sidebar_active_id = recipe_id
        return created

    def activate_from_sidebar(self, recipe_id: str) -> bool:
        return self.open(recipe_id)

    def activate_from_related_link(self, recipe_id: str) -> bool:
        # the sidebar entry is marked even though the click came from the detail view
        return self.open(recipe_id)

    def activate_tab(self, recipe_id: str):
        '''Switches to an already open tab.'''
        if recipe_id not in self._open_ids:
            raise LookupFailure(recipe_id)
        self.open(recipe_id)

    def close(self, recipe_id: str) -> Optional[str]:
        '''
        Removes the tab for recipe_id. Closing the active tab activates the
        first remaining tab, or empties the workspace.
        Returns the newly activated id, if the active tab changed to another one.
        '''
        if recipe_id not in self._open_ids:
            return None
        self._open_ids.remove(recipe_id)
        if recipe_id != self._active_id:
            return None
        if not self._open_ids:
            self._active_id = None
            self._sidebar_active_id = None
            return None
        self.open(self._open_ids[0])
        return self._active_id

    def snapshot(self) -> Dict[str, Any]:
        return {
            "state": self.state,
            "active_id": self._active_id,
            "open_ids": list(self._open_ids),
            "sidebar_active_id": self._sidebar_active_id,
        }

    def __str__(self) -> str:
        if not self._open_ids:
            return "TabWorkspace(empty)"
        tabs = ", ".join(f"*{rid}" if rid == self._active_id else rid for rid in self._open_ids)
        return f"TabWorkspace({tabs})"

    __repr__ = __str__
