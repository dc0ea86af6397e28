"""Core business logic layer.

Subpackages:
- shopping: ingredient pipeline, shopping list consolidation, recall list
- recipes: related recipe resolution
"""
__all__ = ["shopping", "recipes"]
