from fastapi import APIRouter, Depends, HTTPException

from recipebox.api.controller import RecipeBoxController
from recipebox.api.deps import get_controller
from recipebox.utilities.constants import DUPLICATE_ITEM_MESSAGE
from recipebox.utilities.errors import DuplicateItem
from recipebox.utilities.validators import (
    GenerateInput, ReorderInput, ShoppingBootstrapInput, ShoppingItemInput, ShoppingItemsInput
)

router = APIRouter(tags=["shopping"])


def _list_response(controller: RecipeBoxController):
    items = controller.shopping.get_items()
    return {
        "items": [i.to_dict() for i in items],
        "count": len(items),
        "sort_mode": controller.sort_mode,
        "suggest_mode": controller.suggest_mode,
    }


# -------------------- Shopping list --------------------
@router.get('/api/shopping-list')
async def get_shopping_list(controller: RecipeBoxController = Depends(get_controller)):
    return _list_response(controller)


@router.post('/api/shopping-list/init')
async def init_shopping_list(payload: ShoppingBootstrapInput,
                             controller: RecipeBoxController = Depends(get_controller)):
    controller.init_shopping(payload.shopping_list, payload.suggestions)
    return _list_response(controller)


@router.post('/api/shopping-list/items')
async def add_items(payload: ShoppingItemsInput, controller: RecipeBoxController = Depends(get_controller)):
    added = await controller.add_shopping_items(payload.texts, payload.position)
    return {"added": [i.to_dict() for i in added], **_list_response(controller)}


@router.post('/api/shopping-list/item')
async def add_item(payload: ShoppingItemInput, controller: RecipeBoxController = Depends(get_controller)):
    try:
        item = await controller.add_shopping_item(payload.text, payload.prepend)
    except DuplicateItem:
        raise HTTPException(status_code=409, detail=DUPLICATE_ITEM_MESSAGE)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return {"added": item.to_dict() if item else None, **_list_response(controller)}


@router.put('/api/shopping-list/item/{item_id}')
async def edit_item(item_id: str, payload: ShoppingItemInput,
                    controller: RecipeBoxController = Depends(get_controller)):
    try:
        await controller.edit_shopping_item(item_id, payload.text)
    except DuplicateItem:
        raise HTTPException(status_code=409, detail=DUPLICATE_ITEM_MESSAGE)
    except KeyError:
        raise HTTPException(status_code=404, detail="Shopping item not found")
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return _list_response(controller)


@router.delete('/api/shopping-list/item/{item_id}')
async def delete_item(item_id: str, controller: RecipeBoxController = Depends(get_controller)):
    try:
        await controller.delete_shopping_item(item_id)
    except KeyError:
        raise HTTPException(status_code=404, detail="Shopping item not found")
    return _list_response(controller)


@router.post('/api/shopping-list/item/{item_id}/select')
async def select_item(item_id: str, controller: RecipeBoxController = Depends(get_controller)):
    try:
        selected = controller.select_shopping_item(item_id)
    except KeyError:
        raise HTTPException(status_code=404, detail="Shopping item not found")
    return {"selected": selected.to_dict() if selected else None}


@router.post('/api/shopping-list/reorder')
async def reorder(payload: ReorderInput, controller: RecipeBoxController = Depends(get_controller)):
    try:
        await controller.reorder_shopping_items(payload.ids)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return _list_response(controller)


@router.post('/api/shopping-list/sort-mode')
async def toggle_sort(controller: RecipeBoxController = Depends(get_controller)):
    return {"sort_mode": controller.toggle_sort_mode()}


@router.post('/api/shopping-list/suggest-mode')
async def toggle_suggest(controller: RecipeBoxController = Depends(get_controller)):
    on = controller.toggle_suggest_mode()
    return {"suggest_mode": on, "suggestions": controller.visible_suggestions() if on else []}


@router.post('/api/shopping-list/generate')
async def generate(payload: GenerateInput, controller: RecipeBoxController = Depends(get_controller)):
    """Consolidate the ingredients of the open tabs into the shopping text."""
    text = controller.regenerate_shopping_list_from_open_tabs(clear=payload.clear)
    return {"text": text}


# -------------------- Suggestions (recall view) --------------------
@router.get('/api/suggestions')
async def get_suggestions(controller: RecipeBoxController = Depends(get_controller)):
    return {"suggestions": controller.visible_suggestions()}


@router.delete('/api/suggestions/{text}')
async def delete_suggestion(text: str, controller: RecipeBoxController = Depends(get_controller)):
    remaining = await controller.delete_suggestion(text)
    return {"remaining": remaining, "suggestions": controller.visible_suggestions()}


@router.post('/api/suggestions/{text}/add')
async def add_suggestion(text: str, controller: RecipeBoxController = Depends(get_controller)):
    await controller.add_suggestion_to_list(text)
    return {"suggestions": controller.visible_suggestions(), **_list_response(controller)}
