"""Configuration management for the RecipeBox client."""
import os
from typing import Final, Optional
from pathlib import Path

from dotenv import load_dotenv

# Load environment variables from .env file if it exists
env_path = Path(__file__).parent.parent / '.env'
if env_path.exists():
    load_dotenv(env_path)


def _optional_float(value: str) -> Optional[float]:
    value = (value or '').strip()
    return float(value) if value else None


# Remote backend
WEB_APP_URL: Final[str] = os.getenv('RECIPES_WEB_APP_URL', 'http://localhost:8080/exec')
# Empty means no timeout: sync pushes are never cut short
HTTP_TIMEOUT: Final[Optional[float]] = _optional_float(os.getenv('RECIPEBOX_HTTP_TIMEOUT', ''))

# Application Settings
APP_HOST: Final[str] = os.getenv('RECIPEBOX_HOST', '127.0.0.1')
APP_PORT: Final[int] = int(os.getenv('RECIPEBOX_PORT', '8000'))
LOG_LEVEL: Final[str] = os.getenv('RECIPEBOX_LOG_LEVEL', 'INFO').upper()

# File Paths
BASE_DIR: Final[Path] = Path(__file__).parent.parent
DATA_DIR: Final[Path] = Path(os.getenv('RECIPEBOX_DATA_DIR', str(BASE_DIR / 'data')))
SHOPPING_RULES_FILE: Final[Path] = Path(os.getenv('RECIPEBOX_SHOPPING_RULES', str(DATA_DIR / 'shopping_rules.json')))
