"""ShoppingItem domain entity: one line of the live shopping list."""
from typing import Optional
from uuid import uuid4


def normalize_text(text) -> str:
    """Shopping texts are compared trimmed and lowercased."""
    return str(text if text is not None else '').strip().lower()


class ShoppingItem:
    def __init__(self, text: str, id: Optional[str] = None, checked: bool = False):
        self.id = id or str(uuid4())
        self.text = normalize_text(text)
        # selection flag for editing, never persisted
        self.checked = checked

    def __str__(self) -> str:
        return self.text

    def __repr__(self) -> str:
        mark = "x" if self.checked else " "
        return f"ShoppingItem([{mark}] {self.text!r}, id={self.id})"

    def to_dict(self):
        return {"id": self.id, "text": self.text, "checked": self.checked}
