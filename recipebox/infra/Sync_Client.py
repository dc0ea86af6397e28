"""Remote backend client.

Reads (recipe list, search, recipe creation) are awaited and raise
NetworkFailure / ApplicationError to the caller.

Writes go through SyncClient.push, which is best-effort, non-blocking and
non-retrying: the request is scheduled on the running event loop, its outcome
is only logged, and nothing is ever rolled back locally. Two pushes issued
back to back are independent; whichever the backend receives last wins.
"""
import asyncio
import logging
from typing import Any, Dict, List, NamedTuple, Optional, Set

import httpx

from recipebox.domain.Recipe import Recipe
from recipebox.domain.SyncOperation import SyncOperation
from recipebox.infra.Token_Store import TokenStore
from recipebox.utilities.config import HTTP_TIMEOUT, WEB_APP_URL
from recipebox.utilities.constants import (
    FIELD_SHOPPING_LIST, FIELD_SHOPPING_SUGGESTIONS, PATH_RECIPE_CREATE, PATH_RECIPES
)
from recipebox.utilities.errors import ApplicationError, NetworkFailure

logger = logging.getLogger(__name__)


def _decode(response: httpx.Response) -> Optional[Dict[str, Any]]:
    try:
        data = response.json()
    except ValueError:
        return None
    return data if isinstance(data, dict) else None


def _optional_text(data: Dict[str, Any], key: str) -> Optional[str]:
    value = data.get(key)
    return None if value is None else str(value)


class RecipeListing(NamedTuple):
    """Recipe-list response. The shopping fields are None when the backend omits them."""
    recipes: List[Recipe]
    shopping_list: Optional[str] = None
    suggestions: Optional[str] = None


class SyncClient:
    def __init__(self, base_url: str = WEB_APP_URL, token_store: Optional[TokenStore] = None,
                 transport: Optional[httpx.AsyncBaseTransport] = None, timeout: Optional[float] = HTTP_TIMEOUT):
        self.base_url = base_url
        self.token_store = token_store or TokenStore()
        self._client = httpx.AsyncClient(transport=transport, timeout=timeout)
        self._pending: Set[asyncio.Task] = set()

    # --- Reads -----------------------------------------------------------------
    async def _get(self, path: str, **params) -> Dict[str, Any]:
        query = {"path": path}
        query.update({k: v for k, v in params.items() if v is not None})
        try:
            response = await self._client.get(self.base_url, params=query)
        except httpx.HTTPError as e:
            raise NetworkFailure(f"GET {path} failed: {e}") from e
        data = _decode(response)
        # an error field wins over whatever the status code says
        if data and data.get("error"):
            raise ApplicationError(str(data["error"]))
        if response.is_error:
            raise NetworkFailure(f"GET {path} failed: HTTP {response.status_code}")
        if data is None:
            raise NetworkFailure(f"GET {path} returned a non-JSON body")
        return data

    @staticmethod
    def _parse_recipes(data: Dict[str, Any]) -> List[Recipe]:
        recipes = []
        for entry in data.get("recipes") or []:
            try:
                recipes.append(Recipe.from_dict(entry))
            except ValueError as e:
                logger.warning("Skipping malformed recipe record %r: %s", entry, e)
        return recipes

    async def fetch_latest(self) -> RecipeListing:
        """Latest recipe list plus the persisted shopping list and suggestion set, when sent.

        A token in the response is persisted for later requests.
        """
        data = await self._get(PATH_RECIPES)
        token = data.get("token")
        if token:
            try:
                self.token_store.save(str(token))
            except OSError as e:
                logger.error("Could not persist token to %s: %s", self.token_store.path, e)
        return RecipeListing(
            self._parse_recipes(data),
            _optional_text(data, FIELD_SHOPPING_LIST),
            _optional_text(data, FIELD_SHOPPING_SUGGESTIONS),
        )

    async def fetch_recipes(self) -> List[Recipe]:
        return (await self.fetch_latest()).recipes

    async def search_recipes(self, q: str) -> List[Recipe]:
        data = await self._get(PATH_RECIPES, q=q)
        return self._parse_recipes(data)

    async def create_recipe(self) -> str:
        """Ask the backend for a fresh recipe id."""
        data = await self._get(PATH_RECIPE_CREATE)
        recipe_id = str(data.get("id") or "").strip()
        if not recipe_id:
            raise ApplicationError("recipe-create returned no id")
        return recipe_id

    # --- Fire-and-forget writes ----------------------------------------------
    def push(self, operation: SyncOperation) -> None:
        """Schedule operation on the running loop and return immediately.

        Must be called from code running on the event loop.
        """
        task = asyncio.get_running_loop().create_task(self._send(operation))
        self._pending.add(task)
        task.add_done_callback(self._task_done)

    def _task_done(self, task: asyncio.Task):
        self._pending.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.error("Sync push crashed: %r", exc)

    async def _send(self, operation: SyncOperation):
        try:
            response = await self._client.post(self.base_url, json=operation.to_payload())
        except httpx.HTTPError as e:
            logger.error("Sync %s failed: %s", operation, e)
            return
        data = _decode(response)
        if data and data.get("error"):
            logger.error("Sync %s rejected: %s", operation, data["error"])
            return
        if response.is_error:
            logger.error("Sync %s failed: HTTP %s", operation, response.status_code)
            return
        message = data.get("message") if data else None
        if message:
            logger.info("Sync %s: %s", operation, message)

    @property
    def pending(self) -> int:
        return len(self._pending)

    async def drain(self):
        """Wait for every push issued so far (shutdown and tests only)."""
        while self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)

    async def aclose(self):
        await self.drain()
        await self._client.aclose()
