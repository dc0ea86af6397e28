from pathlib import Path

from recipebox.utilities.config import DATA_DIR as _CONFIG_DATA_DIR, SHOPPING_RULES_FILE as _CONFIG_RULES_FILE

# Centralized paths for data files (single source of truth)
DATA_DIR = Path(_CONFIG_DATA_DIR).resolve()
TOKEN_FILE = DATA_DIR / 'token.json'
SHOPPING_RULES_FILE = Path(_CONFIG_RULES_FILE).resolve()

__all__ = ['DATA_DIR', 'TOKEN_FILE', 'SHOPPING_RULES_FILE']
