"""
Input validation schemas using Pydantic for backend records and the HTTP surface.
"""
from pydantic import BaseModel, Field, field_validator
from typing import List, Literal


class RecipeInput(BaseModel):
    """Schema for a recipe record received from the backend."""
    id: str
    title: str = ""
    ingredients: str = ""
    method: str = ""
    notes: str = ""
    category: str = ""
    tags: str = ""
    related: str = ""

    @field_validator('id', mode='before')
    @classmethod
    def strip_id(cls, v):
        """Ids are opaque but never padded."""
        v = '' if v is None else str(v).strip()
        if not v:
            raise ValueError('Recipe id cannot be empty')
        return v

    @field_validator('title', 'ingredients', 'method', 'notes', 'category', 'tags', 'related', mode='before')
    @classmethod
    def none_to_empty(cls, v):
        """Missing text fields are stored as empty strings."""
        return '' if v is None else str(v)


class FieldUpdateInput(BaseModel):
    """Schema for editing one section of the active recipe."""
    value: str = ""


class ShoppingItemsInput(BaseModel):
    """Schema for adding several shopping items at once."""
    texts: List[str] = Field(default_factory=list)
    position: Literal['head', 'tail'] = 'tail'


class ShoppingItemInput(BaseModel):
    """Schema for a single manually entered shopping item."""
    text: str = Field(..., max_length=200)
    prepend: bool = True

    @field_validator('text')
    @classmethod
    def strip_whitespace(cls, v):
        """Remove leading/trailing whitespace."""
        return v.strip()


class ReorderInput(BaseModel):
    ids: List[str]


class GenerateInput(BaseModel):
    """Regenerate consolidated text; clear=True starts from an empty text."""
    clear: bool = False


class ShoppingBootstrapInput(BaseModel):
    shopping_list: str = ""
    suggestions: str = ""
