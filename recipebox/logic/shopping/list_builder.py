"""Shopping list builder.

Two jobs:
  * generate_from_open_recipes: consolidate the ingredient text of the open
    recipes into a block of shopping text (append-only, see below).
  * add_items / add_single_item: merge new texts into the live item list
    without ever creating two items with the same normalized text.
"""
from typing import Iterable, List, Mapping, Optional, Sequence, Tuple

from recipebox.domain.ShoppingItem import ShoppingItem, normalize_text
from recipebox.logic.shopping.ingredient_pipeline import process_line
from recipebox.utilities.constants import BLOCK_HEADER_FORMAT, BLOCK_SEPARATOR, ITEM_SEPARATOR
from recipebox.utilities.errors import DuplicateItem

HEAD = 'head'
TAIL = 'tail'


def recipe_lines(ingredients_text: str, skip_words: Iterable[str], transform_table: Mapping[str, str]) -> List[str]:
    """Surviving shopping lines of one recipe, in original order."""
    skip_words = list(skip_words)
    lines = []
    for raw in (ingredients_text or '').split('\n'):
        processed = process_line(raw, skip_words, transform_table)
        if processed is not None:
            lines.append(processed)
    return lines


def format_block(title: str, lines: Sequence[str]) -> str:
    return "\n".join([BLOCK_HEADER_FORMAT.format(title=title), *lines, BLOCK_SEPARATOR])


def generate_from_open_recipes(open_recipes: Sequence[Tuple[str, str]], skip_words: Iterable[str],
                               transform_table: Mapping[str, str], existing_list_text: str = '') -> str:
    """Build consolidated shopping text for (title, ingredients_text) pairs in tab order.

    Existing text is kept and the new blocks are appended after it, so calling
    this twice with the same recipes duplicates the blocks. Pass an empty
    existing_list_text to regenerate from scratch.
    """
    skip_words = list(skip_words)
    blocks = [format_block(title, recipe_lines(text, skip_words, transform_table))
              for title, text in open_recipes]
    generated = "\n".join(blocks)
    existing = (existing_list_text or '').strip()
    if not existing:
        return generated
    if not generated:
        return existing
    return f"{existing}\n\n{BLOCK_SEPARATOR}\n\n{generated}"


def check_item_text(norm: str) -> str:
    """Reject text that would split into several items once the list is persisted."""
    if ITEM_SEPARATOR in norm:
        raise ValueError(f"Shopping item text cannot contain '{ITEM_SEPARATOR}'")
    return norm


def _survivors(current_texts: set, new_texts: Iterable[str]) -> List[str]:
    kept = []
    for text in new_texts:
        # "eggs, milk" is two items, the same as after a reload
        for part in (text or '').split(ITEM_SEPARATOR):
            norm = normalize_text(part)
            if not norm or norm in current_texts:
                continue
            current_texts.add(norm)
            kept.append(norm)
    return kept


def add_items(current_items: Sequence[ShoppingItem], new_texts: Iterable[str], position: str = TAIL) -> List[ShoppingItem]:
    """Return a new list with the non-empty, not yet present texts inserted at head or tail.

    The relative order of new_texts is preserved. The input list is not modified.
    """
    if position not in (HEAD, TAIL):
        raise ValueError(f"position must be '{HEAD}' or '{TAIL}', got {position!r}")
    present = {item.text for item in current_items}
    added = [ShoppingItem(text) for text in _survivors(present, new_texts)]
    if position == HEAD:
        return added + list(current_items)
    return list(current_items) + added


def add_single_item(current_items: Sequence[ShoppingItem], text: str, prepend: bool = True) -> List[ShoppingItem]:
    """Manual entry. Raises DuplicateItem instead of silently ignoring a repeat.

    Text containing the item separator raises ValueError.
    """
    norm = normalize_text(text)
    if not norm:
        return list(current_items)
    check_item_text(norm)
    if any(item.text == norm for item in current_items):
        raise DuplicateItem(norm)
    return add_items(current_items, [norm], HEAD if prepend else TAIL)


def find_item(items: Sequence[ShoppingItem], item_id: str) -> Optional[ShoppingItem]:
    for item in items:
        if item.id == item_id:
            return item
    return None


__all__ = [
    'HEAD', 'TAIL', 'recipe_lines', 'format_block', 'generate_from_open_recipes',
    'add_items', 'add_single_item', 'check_item_text', 'find_item'
]
