"""Recipe domain entity: id, title and free-text sections (ingredients, method, notes, category, tags, related)."""
import re
from typing import List

from recipebox.utilities.constants import RECIPE_SECTIONS
from recipebox.utilities.validators import RecipeInput

_RELATED_SPLIT = re.compile(r'[\s,]+')


class Recipe:
    def __init__(self, id: str, title: str = "", ingredients: str = "", method: str = "",
                 notes: str = "", category: str = "", tags: str = "", related: str = ""):
        self.id = id
        self.title = title
        self.ingredients = ingredients
        self.method = method
        self.notes = notes
        self.category = category
        self.tags = tags
        # never None, an unset related list is an empty string
        self.related = related or ""

    def __str__(self) -> str:
        return f"{self.title} ({self.id})"

    __repr__ = __str__

    def __eq__(self, other) -> bool:
        if not isinstance(other, Recipe):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def get_section(self, section: str) -> str:
        if section not in RECIPE_SECTIONS:
            raise ValueError(f"Unknown recipe section '{section}'")
        return getattr(self, section)

    def set_section(self, section: str, value: str):
        '''Sets one of the editable sections. Unknown section names are rejected.'''
        if section not in RECIPE_SECTIONS:
            raise ValueError(f"Unknown recipe section '{section}'")
        setattr(self, section, "" if value is None else str(value))

    def ingredient_lines(self) -> List[str]:
        return self.ingredients.split("\n") if self.ingredients else []

    def related_ids(self) -> List[str]:
        """Ids listed in the related field, split on commas, whitespace and newlines."""
        return [part for part in _RELATED_SPLIT.split(self.related.strip()) if part]

    @staticmethod
    def from_dict(data):
        '''Creates a Recipe from a backend record. Ignores unknown keys, None becomes "".'''
        record = RecipeInput.model_validate(dict(data) if isinstance(data, dict) else {})
        return Recipe(**record.model_dump())

    def to_dict(self):
        d = {"id": self.id}
        for section in RECIPE_SECTIONS:
            d[section] = getattr(self, section)
        return d
