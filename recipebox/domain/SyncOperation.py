"""SyncOperation: one local mutation serialized for the remote mirror."""
from typing import Iterable, Literal, Optional

from pydantic import BaseModel

from recipebox.utilities.constants import (
    PATH_RECIPE_ACCESS, PATH_RECIPE_UPDATE, PATH_SHOPPING_LIST_UPDATE,
    PATH_SHOPPING_SUGGESTIONS_UPDATE, RECIPE_SECTIONS,
)

SyncPath = Literal['recipe-update', 'recipe-access', 'shopping-list-update', 'shopping-suggestions-update']


class SyncOperation(BaseModel):
    path: SyncPath
    id: Optional[str] = None
    value: Optional[str] = None
    section: Optional[str] = None

    def to_payload(self) -> dict:
        """JSON body for POST <base>; unset fields are left out."""
        return self.model_dump(exclude_none=True)

    @classmethod
    def recipe_update(cls, recipe_id: str, section: str, value: str) -> "SyncOperation":
        if section not in RECIPE_SECTIONS:
            raise ValueError(f"Unknown recipe section '{section}'")
        return cls(path=PATH_RECIPE_UPDATE, id=recipe_id, section=section, value=value)

    @classmethod
    def recipe_access(cls, recipe_id: str) -> "SyncOperation":
        return cls(path=PATH_RECIPE_ACCESS, id=recipe_id)

    @classmethod
    def shopping_list_update(cls, texts: Iterable[str]) -> "SyncOperation":
        return cls(path=PATH_SHOPPING_LIST_UPDATE, value=",".join(texts))

    @classmethod
    def suggestions_update(cls, suggestions: Iterable[str]) -> "SyncOperation":
        return cls(path=PATH_SHOPPING_SUGGESTIONS_UPDATE, value=",".join(suggestions))

    def __str__(self) -> str:
        target = f" {self.id}" if self.id else ""
        section = f".{self.section}" if self.section else ""
        return f"{self.path}{target}{section}"
