"""Related recipe resolution.

The related field is free text, not a validated graph: ids that are not in
the cache are logged and skipped.
"""
import logging
from typing import List

from recipebox.domain.Recipe import Recipe
from recipebox.domain.StateStore import StateStore
from recipebox.utilities.errors import LookupFailure

logger = logging.getLogger(__name__)


def resolve_related(store: StateStore, recipe: Recipe) -> List[Recipe]:
    related: List[Recipe] = []
    seen = set()
    for rid in recipe.related_ids():
        if rid in seen or rid == recipe.id:
            continue
        seen.add(rid)
        try:
            related.append(store.require_recipe(rid))
        except LookupFailure as e:
            logger.warning("Related link of %s skipped: %s", recipe.id, e)
    return related


__all__ = ['resolve_related']
