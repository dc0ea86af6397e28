"""Durable client storage for the auth token handed out by the recipe list read."""
import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Optional

from recipebox.infra.paths import TOKEN_FILE

logger = logging.getLogger(__name__)


class TokenStore:
    def __init__(self, path: Optional[Path] = None):
        self.path = Path(path) if path else TOKEN_FILE

    def save(self, token: str) -> None:
        """Write the token atomically so a crash never leaves half a file."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(dir=str(self.path.parent), prefix=".token_", suffix=".json")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as tmp:
                json.dump({"token": token}, tmp)
            os.replace(tmp_path, self.path)
        finally:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)

    def load(self) -> Optional[str]:
        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except FileNotFoundError:
            return None
        except (json.JSONDecodeError, OSError) as e:
            logger.warning("Unreadable token file %s: %s", self.path, e)
            return None
        token = data.get("token") if isinstance(data, dict) else None
        return token or None
