from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from recipebox.api.controller import RecipeBoxController
from recipebox.api.deps import get_controller
from recipebox.utilities.constants import RECIPE_SECTIONS
from recipebox.utilities.validators import FieldUpdateInput

router = APIRouter(prefix="/api/recipes", tags=["recipes"])

LOAD_FAILED = "Could not load recipes"


@router.get("")
async def list_recipes(controller: RecipeBoxController = Depends(get_controller)):
    recipes = controller.store.get_recipes()
    return {"count": len(recipes), "recipes": [r.to_dict() for r in recipes]}


@router.post("/reload")
async def reload_recipes(controller: RecipeBoxController = Depends(get_controller)):
    recipes = await controller.load_recipes()
    if recipes is None:
        raise HTTPException(status_code=502, detail=LOAD_FAILED)
    return {"count": len(recipes), "recipes": [r.to_dict() for r in recipes]}


@router.get("/search")
async def search_recipes(q: Optional[str] = Query(default=None),
                         controller: RecipeBoxController = Depends(get_controller)):
    recipes = await controller.search(q or "")
    if recipes is None:
        raise HTTPException(status_code=502, detail=LOAD_FAILED)
    return {"count": len(recipes), "recipes": [r.to_dict() for r in recipes]}


@router.post("")
async def create_recipe(controller: RecipeBoxController = Depends(get_controller)):
    recipe = await controller.create_recipe()
    if recipe is None:
        raise HTTPException(status_code=502, detail="Could not create recipe")
    return {"recipe": recipe.to_dict(), "tabs": controller.tab_snapshot()}


@router.put("/active/{section}")
async def edit_active_recipe(section: str, payload: FieldUpdateInput,
                             controller: RecipeBoxController = Depends(get_controller)):
    """Edit one section of the recipe shown in the active tab."""
    if section not in RECIPE_SECTIONS:
        raise HTTPException(status_code=422, detail=f"Unknown recipe section '{section}'")
    recipe = await controller.edit_field(section, payload.value)
    if recipe is None:
        raise HTTPException(status_code=404, detail="No open recipe to edit")
    return {"recipe": recipe.to_dict()}


@router.get("/{recipe_id}")
async def get_recipe(recipe_id: str, controller: RecipeBoxController = Depends(get_controller)):
    recipe = controller.store.get_recipe_by_id(recipe_id)
    if recipe is None:
        raise HTTPException(status_code=404, detail="Recipe not found")
    return {"recipe": recipe.to_dict()}


@router.get("/{recipe_id}/related")
async def get_related(recipe_id: str, controller: RecipeBoxController = Depends(get_controller)):
    if controller.store.get_recipe_by_id(recipe_id) is None:
        raise HTTPException(status_code=404, detail="Recipe not found")
    related = controller.related_recipes(recipe_id)
    return {"related": [{"id": r.id, "title": r.title} for r in related]}
