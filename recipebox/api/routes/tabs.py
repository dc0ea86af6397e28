from fastapi import APIRouter, Depends, HTTPException, Query

from recipebox.api.controller import RecipeBoxController, SOURCES
from recipebox.api.deps import get_controller
from recipebox.domain.TabWorkspace import SOURCE_SIDEBAR

router = APIRouter(prefix="/api/tabs", tags=["tabs"])


@router.get("")
async def get_tabs(controller: RecipeBoxController = Depends(get_controller)):
    return controller.tab_snapshot()


@router.post("/{recipe_id}")
async def open_tab(recipe_id: str, source: str = Query(default=SOURCE_SIDEBAR),
                   controller: RecipeBoxController = Depends(get_controller)):
    """Open (or switch to) a recipe tab. source: sidebar | related | tab."""
    if source not in SOURCES:
        raise HTTPException(status_code=422, detail=f"Unknown source '{source}'")
    recipe = await controller.open_recipe(recipe_id, source)
    if recipe is None:
        raise HTTPException(status_code=404, detail="Recipe not found")
    return {"recipe": recipe.to_dict(), "tabs": controller.tab_snapshot()}


@router.delete("/{recipe_id}")
async def close_tab(recipe_id: str, controller: RecipeBoxController = Depends(get_controller)):
    return await controller.close_tab(recipe_id)
