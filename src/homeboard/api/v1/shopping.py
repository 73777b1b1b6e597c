# Shopping router — lists, items, reorder and clear-completed.
# Created: 2026-10-04

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Query

from homeboard.api.deps import get_store
from homeboard.api.v1.schemas.common import ClearedResponse, SuccessResponse
from homeboard.api.v1.schemas.reorder import (
    ClearCompletedRequest,
    ItemReorderRequest,
    ListReorderRequest,
)
from homeboard.models import (
    ShoppingItemCreate,
    ShoppingItemPatch,
    ShoppingList,
    ShoppingListCreate,
    ShoppingListItem,
    ShoppingListPatch,
)
from homeboard.store import FileHouseholdStore

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Shopping"])


# ============================================================================
# Lists
# ============================================================================


@router.get("/shopping-lists", response_model=list[ShoppingList])
async def list_shopping_lists(
    limit: int | None = Query(None),
    offset: int | None = Query(None),
    store: FileHouseholdStore = Depends(get_store),
):
    """Lists with their items. Bad or oversized paging values are clamped."""
    return await store.list_shopping_lists(limit=limit, offset=offset)


@router.post("/shopping-lists", response_model=ShoppingList)
async def create_shopping_list(
    body: ShoppingListCreate, store: FileHouseholdStore = Depends(get_store)
):
    return await store.create_shopping_list(body)


@router.put("/shopping-lists/reorder", response_model=SuccessResponse)
async def reorder_shopping_lists(
    body: ListReorderRequest, store: FileHouseholdStore = Depends(get_store)
):
    if not await store.reorder_shopping_lists(body.list_ids):
        raise HTTPException(status_code=404, detail="Shopping list not found")
    return SuccessResponse()


@router.put("/shopping-lists/{list_id}", response_model=ShoppingList)
async def update_shopping_list(
    list_id: str,
    body: ShoppingListPatch,
    store: FileHouseholdStore = Depends(get_store),
):
    lst = await store.update_shopping_list(list_id, body)
    if lst is None:
        raise HTTPException(status_code=404, detail="Shopping list not found")
    return lst


@router.delete("/shopping-lists/{list_id}", response_model=SuccessResponse)
async def delete_shopping_list(list_id: str, store: FileHouseholdStore = Depends(get_store)):
    if not await store.delete_shopping_list(list_id):
        raise HTTPException(status_code=404, detail="Shopping list not found")
    return SuccessResponse()


# ============================================================================
# Items
# ============================================================================


@router.post("/shopping-lists/{list_id}/items", response_model=ShoppingListItem)
async def add_item(
    list_id: str,
    body: ShoppingItemCreate,
    store: FileHouseholdStore = Depends(get_store),
):
    item = await store.add_item(list_id, body)
    if item is None:
        raise HTTPException(status_code=404, detail="Shopping list not found")
    return item


@router.post("/shopping-lists/{list_id}/items/clear-completed", response_model=ClearedResponse)
async def clear_completed_items(
    list_id: str,
    body: ClearCompletedRequest | None = None,
    store: FileHouseholdStore = Depends(get_store),
):
    ids = body.completed_item_ids if body else None
    deleted = await store.clear_completed_items(list_id, ids)
    if deleted is None:
        raise HTTPException(status_code=404, detail="Shopping list not found")
    return ClearedResponse(deleted=deleted)


@router.put("/shopping-list-items/reorder", response_model=SuccessResponse)
async def reorder_items(body: ItemReorderRequest, store: FileHouseholdStore = Depends(get_store)):
    if not await store.reorder_items(body.item_ids):
        raise HTTPException(status_code=404, detail="Shopping list item not found")
    return SuccessResponse()


@router.put("/shopping-list-items/{item_id}", response_model=ShoppingListItem)
async def update_item(
    item_id: str,
    body: ShoppingItemPatch,
    store: FileHouseholdStore = Depends(get_store),
):
    item = await store.update_item(item_id, body)
    if item is None:
        raise HTTPException(status_code=404, detail="Shopping list item not found")
    return item


@router.delete("/shopping-list-items/{item_id}", response_model=SuccessResponse)
async def delete_item(item_id: str, store: FileHouseholdStore = Depends(get_store)):
    if not await store.delete_item(item_id):
        raise HTTPException(status_code=404, detail="Shopping list item not found")
    return SuccessResponse()
