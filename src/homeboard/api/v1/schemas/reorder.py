# Reorder schemas.
# Created: 2026-10-03

from __future__ import annotations

from pydantic import BaseModel, Field

_MAX_REORDER = 1000


class ListReorderRequest(BaseModel):
    list_ids: list[str] = Field(..., max_length=_MAX_REORDER)


class ItemReorderRequest(BaseModel):
    item_ids: list[str] = Field(..., max_length=_MAX_REORDER)


class TodoReorderRequest(BaseModel):
    todo_ids: list[str] = Field(..., max_length=_MAX_REORDER)


class ColumnOrder(BaseModel):
    id: str
    order: int = Field(..., ge=0, le=10000)


class ColumnReorderRequest(BaseModel):
    reorders: list[ColumnOrder] = Field(..., max_length=_MAX_REORDER)


class ClearCompletedRequest(BaseModel):
    """Explicit ids to delete; omitted means every checked item."""

    completed_item_ids: list[str] | None = None


class ClearCompletedTodosRequest(BaseModel):
    """Explicit ids to delete; omitted means every completed todo of the column."""

    completed_todo_ids: list[str] | None = None
