from contextlib import asynccontextmanager
from typing import Optional
import logging

from fastapi import FastAPI

from recipebox.api.controller import RecipeBoxController, build_controller
from recipebox.api.routes import events, recipes, shopping, tabs
from recipebox.events.web_observers import EventFeed

# Logging
logger = logging.getLogger("recipebox_app")


def create_app(controller: Optional[RecipeBoxController] = None, load_on_startup: bool = True) -> FastAPI:
    """Build the HTTP surface around one controller (built from config when omitted)."""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if load_on_startup:
            recipes_loaded = await app.state.controller.load_recipes()
            if recipes_loaded is None:
                logger.warning("Starting without recipes; the backend could not be reached")
            else:
                logger.info("Loaded %d recipes", len(recipes_loaded))
        yield
        await app.state.controller.aclose()

    app = FastAPI(title="RecipeBox", lifespan=lifespan)
    app.state.controller = controller or build_controller()
    app.state.event_feed = EventFeed().start(app.state.controller.bus)

    # Routers
    app.include_router(recipes.router)
    app.include_router(tabs.router)
    app.include_router(shopping.router)
    app.include_router(events.router)
    return app
