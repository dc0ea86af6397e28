"""Ingredient line pipeline: normalize -> filter -> transform -> truncate.

process_line(line, skip_words, transform_table) turns one free-text
ingredient line into a shopping line, or None when the line is filtered out.
"""
import re
from functools import lru_cache
from typing import Iterable, Mapping, Optional

# three letters in a row, digits and punctuation do not count
_WORD_RUN = re.compile(r'[^\W\d_]{3,}')


@lru_cache(maxsize=256)
def _skip_pattern(word: str) -> re.Pattern:
    # lookarounds instead of \b so entries like "(optional)" still match
    return re.compile(r'(?<!\w)' + re.escape(word) + r'(?!\w)', re.IGNORECASE)


def _normalize(line: str) -> str:
    return (line or '').strip().lower()


def is_skipped(line: str, skip_words: Iterable[str]) -> bool:
    """True if any skip word occurs in line as a whole word."""
    for word in skip_words:
        word = _normalize(word)
        if word and _skip_pattern(word).search(line):
            return True
    return False


def passes_filter(line: str, skip_words: Iterable[str]) -> bool:
    if not _WORD_RUN.search(line):
        return False
    return not is_skipped(line, skip_words)


def apply_transforms(line: str, transform_table: Mapping[str, str]) -> str:
    """Replace the first occurrence of each key, in table order."""
    for key, replacement in transform_table.items():
        if key and key in line:
            line = line.replace(key, replacement, 1)
    return line


def truncate(line: str) -> str:
    # ", diced" and similar preparation notes go
    return line.split(',', 1)[0].rstrip()


def process_line(line: str, skip_words: Iterable[str] = (), transform_table: Optional[Mapping[str, str]] = None) -> Optional[str]:
    """Return the shopping line for one ingredient line, or None if it is filtered out."""
    text = _normalize(line)
    if not passes_filter(text, skip_words):
        return None
    text = truncate(apply_transforms(text, transform_table or {}))
    return text or None


__all__ = ['process_line', 'passes_filter', 'apply_transforms', 'truncate', 'is_skipped']
