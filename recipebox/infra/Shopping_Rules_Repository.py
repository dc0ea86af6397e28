import json
import logging
from pathlib import Path
from typing import Dict, List, Optional

from recipebox.infra.paths import SHOPPING_RULES_FILE
from recipebox.utilities.constants import DEFAULT_SKIP_WORDS, DEFAULT_TRANSFORMS

logger = logging.getLogger(__name__)


class ShoppingRules:
    """Skip words and the ordered transform table used by the ingredient pipeline."""

    def __init__(self, skip_words: Optional[List[str]] = None, transforms: Optional[Dict[str, str]] = None):
        self.skip_words = list(skip_words) if skip_words is not None else list(DEFAULT_SKIP_WORDS)
        self.transforms = dict(transforms) if transforms is not None else dict(DEFAULT_TRANSFORMS)

    def __repr__(self) -> str:
        return f"ShoppingRules(skip_words={self.skip_words!r}, transforms={self.transforms!r})"

    @staticmethod
    def from_dict(data):
        d = data if isinstance(data, dict) else {}
        skip = d.get("skip_words")
        transforms = d.get("transforms")
        if skip is not None and not isinstance(skip, list):
            raise ValueError("'skip_words' must be a list")
        if transforms is not None and not isinstance(transforms, dict):
            raise ValueError("'transforms' must be an object")
        return ShoppingRules(
            [str(w) for w in skip] if skip is not None else None,
            # lines are lowercased before transforms run
            {str(k).lower(): str(v) for k, v in transforms.items()} if transforms is not None else None,
        )

    def to_dict(self):
        return {"skip_words": self.skip_words, "transforms": self.transforms}


def reading_shopping_rules(path: Optional[Path] = None) -> ShoppingRules:
    """Read skip words and transforms from JSON, falling back to defaults on any problem."""
    rules_file = Path(path) if path else SHOPPING_RULES_FILE
    try:
        with open(rules_file, 'r', encoding='utf-8') as f:
            data = json.load(f)
        return ShoppingRules.from_dict(data)
    except FileNotFoundError:
        logger.warning(f"Shopping rules file not found: {rules_file}. Using defaults.")
        return ShoppingRules()
    except json.JSONDecodeError as e:
        logger.error(f"Invalid JSON in shopping rules file: {e}")
        return ShoppingRules()
    except ValueError as e:
        logger.error(f"Invalid shopping rules in {rules_file}: {e}")
        return ShoppingRules()
