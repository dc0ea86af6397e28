"""In-memory stand-in for the remote backend, served through httpx.MockTransport."""
import json
from typing import Any, Dict, List, Optional

import httpx

from recipebox.api.controller import RecipeBoxController
from recipebox.infra.Shopping_Rules_Repository import ShoppingRules
from recipebox.infra.Sync_Client import SyncClient
from recipebox.infra.Token_Store import TokenStore

BASE_URL = "http://backend.test/exec"

SAMPLE_RECIPES = [
    {"id": "r1", "title": "Pancakes", "ingredients": "2 cups flour, sifted\n1 cup milk\nsalt\n2 eggs, beaten",
     "method": "Mix and fry", "notes": "", "category": "breakfast", "tags": "sweet", "related": "r2, r9"},
    {"id": "r2", "title": "Omelette", "ingredients": "3 eggs\n50 g cheese, grated\n1 tablespoon butter",
     "method": "Beat and cook", "notes": "", "category": "breakfast", "tags": "", "related": None},
    {"id": "r3", "title": "Tomato Soup", "ingredients": "4 tomatoes, chopped\n1 onion\nwater",
     "method": "Simmer", "notes": "freezes well", "category": "lunch", "tags": "vegan", "related": ""},
]


class FakeBackend:
    def __init__(self, recipes: Optional[List[Dict[str, Any]]] = None, token: Optional[str] = None):
        self.recipes = [dict(r) for r in (SAMPLE_RECIPES if recipes is None else recipes)]
        self.token = token
        # sent with the unfiltered recipe list when set
        self.shopping_list: Optional[str] = None
        self.shopping_suggestions: Optional[str] = None
        self.gets: List[Dict[str, str]] = []
        self.posts: List[Dict[str, Any]] = []
        self.read_error: Optional[str] = None
        self.write_error: Optional[str] = None
        self._next_id = 100

    def handler(self, request: httpx.Request) -> httpx.Response:
        if request.method == "GET":
            params = dict(request.url.params)
            self.gets.append(params)
            if self.read_error:
                return httpx.Response(200, json={"error": self.read_error})
            path = params.get("path")
            if path == "recipes":
                q = params.get("q")
                recipes = [r for r in self.recipes if not q or q in (r.get("title") or "").lower()]
                body: Dict[str, Any] = {"recipes": recipes}
                if self.token and not q:
                    body["token"] = self.token
                if self.shopping_list is not None and not q:
                    body["shoppingList"] = self.shopping_list
                if self.shopping_suggestions is not None and not q:
                    body["shoppingSuggestions"] = self.shopping_suggestions
                return httpx.Response(200, json=body)
            if path == "recipe-create":
                self._next_id += 1
                return httpx.Response(200, json={"id": f"r{self._next_id}"})
            return httpx.Response(404, json={"error": f"unknown path {path}"})
        body = json.loads(request.content)
        self.posts.append(body)
        if self.write_error:
            return httpx.Response(200, json={"error": self.write_error})
        return httpx.Response(200, json={"message": f"{body['path']} ok"})

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def posts_for(self, path: str) -> List[Dict[str, Any]]:
        return [p for p in self.posts if p["path"] == path]


def make_sync_client(backend: FakeBackend, token_path) -> SyncClient:
    return SyncClient(base_url=BASE_URL, token_store=TokenStore(token_path), transport=backend.transport())


def make_controller(backend: FakeBackend, token_path, skip_words=("salt", "water"), transforms=None) -> RecipeBoxController:
    rules = ShoppingRules(list(skip_words), dict(transforms or {"tablespoon": "tbsp"}))
    return RecipeBoxController(make_sync_client(backend, token_path), rules=rules)
