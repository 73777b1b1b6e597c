# Todo columns client — board columns with optimistic mutations.
# Created: 2026-10-06

from __future__ import annotations

import logging

from homeboard.client.base import CollectionClient
from homeboard.client.cache import new_temp_id
from homeboard.client.ordering import Direction, find_adjacent_swap, sort_by_order
from homeboard.models import TodoColumn, TodoColumnCreate, TodoColumnPatch

logger = logging.getLogger(__name__)


class TodoColumnsClient(CollectionClient[TodoColumn]):
    resource = "todo-columns"
    label = "todo column"
    model = TodoColumn

    async def _fetch(self) -> list[TodoColumn]:
        data = await self.api.get("/todo-columns")
        return [TodoColumn.model_validate(c) for c in data]

    async def create_todo_column(self, data: TodoColumnCreate) -> TodoColumn:
        orders = [c.order for c in self.items]
        optimistic = TodoColumn(
            id=new_temp_id(),
            name=data.name,
            user_id=data.user_id,
            is_default=data.is_default,
            order=max(orders) + 1 if orders else 0,
        )
        return await self._create(
            optimistic,
            lambda: self.api.post("/todo-columns", json=data.model_dump(mode="json")),
            "Failed to create todo column",
        )

    async def update_todo_column(self, column_id: str, patch: TodoColumnPatch) -> TodoColumn:
        return await self._update(
            column_id,
            patch,
            lambda: self.api.put(
                f"/todo-columns/{column_id}",
                json=patch.model_dump(mode="json", exclude_unset=True),
            ),
            "Failed to update todo column",
        )

    async def delete_todo_column(self, column_id: str) -> bool:
        return await self._delete(
            column_id,
            lambda: self.api.delete(f"/todo-columns/{column_id}"),
            "Failed to delete todo column",
        )

    async def move_todo_column(self, from_index: int, to_index: int) -> bool:
        """Drag a column from one board position to another.

        Every column is renumbered ``order = position``; the server replies
        with the full re-ordered collection, which replaces the cache.
        """
        columns = sort_by_order(self.items)
        if from_index == to_index or not (
            0 <= from_index < len(columns) and 0 <= to_index < len(columns)
        ):
            return False

        moved = columns.pop(from_index)
        columns.insert(to_index, moved)
        reorders = [{"id": c.id, "order": i} for i, c in enumerate(columns)]

        def apply() -> None:
            self.items[:] = [c.model_copy(update={"order": i}) for i, c in enumerate(columns)]

        data = await self._mutate(
            lambda: self.api.put("/todo-columns/reorder", json={"reorders": reorders}),
            apply,
            "Failed to reorder todo columns",
        )
        if isinstance(data, list):
            self.cache.replace(self.resource, [TodoColumn.model_validate(c) for c in data])
        return True

    async def reorder_todo_column(self, column_id: str, direction: Direction) -> bool:
        """Move a column one position left ("up") or right ("down")."""
        positions = find_adjacent_swap(self.items, column_id, direction)
        if positions is None:
            return False
        return await self.move_todo_column(*positions)
