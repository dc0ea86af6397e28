"""Recall list derivation: remembered items not already on the shopping list."""
from typing import Iterable, List, Optional

from recipebox.domain.ShoppingItem import normalize_text


def visible_suggestions(suggestion_set: Iterable[str], current_list_texts: Iterable[str],
                        default_seed: Optional[Iterable[str]] = None) -> List[str]:
    """Return suggestion_set minus current_list_texts (case-insensitive), sorted ascending.

    default_seed replaces an empty suggestion_set for display only.
    """
    suggestions = {normalize_text(s) for s in suggestion_set}
    suggestions.discard('')
    if not suggestions and default_seed is not None:
        suggestions = {normalize_text(s) for s in default_seed}
    on_list = {normalize_text(t) for t in current_list_texts}
    return sorted(suggestions - on_list)


__all__ = ['visible_suggestions']
