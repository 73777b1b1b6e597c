# Todos router — todo columns and todos.
# Created: 2026-10-04

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Query

from homeboard.api.deps import get_store
from homeboard.api.v1.schemas.common import ClearedResponse, SuccessResponse
from homeboard.api.v1.schemas.reorder import (
    ClearCompletedTodosRequest,
    ColumnReorderRequest,
    TodoReorderRequest,
)
from homeboard.models import (
    Todo,
    TodoColumn,
    TodoColumnCreate,
    TodoColumnPatch,
    TodoCreate,
    TodoPatch,
)
from homeboard.store import FileHouseholdStore

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Todos"])


# ============================================================================
# Columns
# ============================================================================


@router.get("/todo-columns", response_model=list[TodoColumn])
async def list_todo_columns(store: FileHouseholdStore = Depends(get_store)):
    return await store.list_todo_columns()


@router.post("/todo-columns", response_model=TodoColumn)
async def create_todo_column(body: TodoColumnCreate, store: FileHouseholdStore = Depends(get_store)):
    return await store.create_todo_column(body)


@router.put("/todo-columns/reorder", response_model=list[TodoColumn])
async def reorder_todo_columns(
    body: ColumnReorderRequest, store: FileHouseholdStore = Depends(get_store)
):
    """Apply explicit orders and return every column in its new order."""
    columns = await store.reorder_todo_columns([(r.id, r.order) for r in body.reorders])
    if columns is None:
        raise HTTPException(status_code=404, detail="Todo column not found")
    return columns


@router.put("/todo-columns/{column_id}", response_model=TodoColumn)
async def update_todo_column(
    column_id: str,
    body: TodoColumnPatch,
    store: FileHouseholdStore = Depends(get_store),
):
    column = await store.update_todo_column(column_id, body)
    if column is None:
        raise HTTPException(status_code=404, detail="Todo column not found")
    return column


@router.delete("/todo-columns/{column_id}", response_model=SuccessResponse)
async def delete_todo_column(column_id: str, store: FileHouseholdStore = Depends(get_store)):
    if not await store.delete_todo_column(column_id):
        raise HTTPException(status_code=404, detail="Todo column not found")
    return SuccessResponse()


@router.post("/todo-columns/{column_id}/todos/clear-completed", response_model=ClearedResponse)
async def clear_completed_todos(
    column_id: str,
    body: ClearCompletedTodosRequest | None = None,
    store: FileHouseholdStore = Depends(get_store),
):
    ids = body.completed_todo_ids if body else None
    deleted = await store.clear_completed_todos(column_id, ids)
    if deleted is None:
        raise HTTPException(status_code=404, detail="Todo column not found")
    return ClearedResponse(deleted=deleted)


# ============================================================================
# Todos
# ============================================================================


@router.get("/todos", response_model=list[Todo])
async def list_todos(
    todo_column_id: str | None = Query(None),
    history: bool = Query(False),
    store: FileHouseholdStore = Depends(get_store),
):
    return await store.list_todos(column_id=todo_column_id, history=history)


@router.post("/todos", response_model=Todo)
async def create_todo(body: TodoCreate, store: FileHouseholdStore = Depends(get_store)):
    return await store.create_todo(body)


@router.put("/todos/reorder", response_model=SuccessResponse)
async def reorder_todos(body: TodoReorderRequest, store: FileHouseholdStore = Depends(get_store)):
    if not await store.reorder_todos(body.todo_ids):
        raise HTTPException(status_code=404, detail="Todo not found")
    return SuccessResponse()


@router.put("/todos/{todo_id}", response_model=Todo)
async def update_todo(
    todo_id: str,
    body: TodoPatch,
    store: FileHouseholdStore = Depends(get_store),
):
    todo = await store.update_todo(todo_id, body)
    if todo is None:
        raise HTTPException(status_code=404, detail="Todo not found")
    return todo


@router.delete("/todos/{todo_id}", response_model=SuccessResponse)
async def delete_todo(todo_id: str, store: FileHouseholdStore = Depends(get_store)):
    if not await store.delete_todo(todo_id):
        raise HTTPException(status_code=404, detail="Todo not found")
    return SuccessResponse()
