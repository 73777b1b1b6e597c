# Todos client — cached todos with optimistic mutations.
# Created: 2026-10-06

from __future__ import annotations

import logging

from homeboard.client.base import CollectionClient
from homeboard.client.cache import new_temp_id
from homeboard.client.ordering import Direction
from homeboard.models import Todo, TodoCreate, TodoPatch

logger = logging.getLogger(__name__)


class TodosClient(CollectionClient[Todo]):
    """Todos across all columns, cached under ``"todos"``.

    Ordering is per section: todos sharing a column and a completion state.
    """

    resource = "todos"
    label = "todo"
    model = Todo

    async def _fetch(self) -> list[Todo]:
        data = await self.api.get("/todos")
        return [Todo.model_validate(t) for t in data]

    def section(self, todo_column_id: str | None, completed: bool) -> list[Todo]:
        return [
            t
            for t in self.items
            if t.todo_column_id == todo_column_id and t.completed == completed
        ]

    async def create_todo(self, data: TodoCreate) -> Todo:
        order = data.order
        if order is None:
            orders = [t.order for t in self.section(data.todo_column_id, data.completed)]
            order = max(orders) + 1 if orders else 0
        optimistic = Todo(
            id=new_temp_id(),
            title=data.title,
            description=data.description,
            priority=data.priority,
            due_date=data.due_date,
            completed=data.completed,
            order=order,
            todo_column_id=data.todo_column_id,
        )
        return await self._create(
            optimistic,
            lambda: self.api.post("/todos", json=data.model_dump(mode="json")),
            "Failed to create todo",
        )

    async def update_todo(self, todo_id: str, patch: TodoPatch) -> Todo:
        return await self._update(
            todo_id,
            patch,
            lambda: self.api.put(
                f"/todos/{todo_id}", json=patch.model_dump(mode="json", exclude_unset=True)
            ),
            "Failed to update todo",
        )

    async def toggle_todo(self, todo_id: str, completed: bool) -> Todo:
        return await self.update_todo(todo_id, TodoPatch(completed=completed))

    async def delete_todo(self, todo_id: str) -> bool:
        return await self._delete(
            todo_id,
            lambda: self.api.delete(f"/todos/{todo_id}"),
            "Failed to delete todo",
        )

    async def reorder_todo(self, todo_id: str, direction: Direction) -> bool:
        """Swap a todo with its neighbour in the same section.

        Returns False (and does nothing) for unknown todos or at the edge.
        """
        todo = self.get(todo_id)
        if todo is None:
            return False
        return await self._swap_adjacent(
            self.section(todo.todo_column_id, todo.completed),
            todo_id,
            direction,
            lambda ids: self.api.put("/todos/reorder", json={"todo_ids": ids}),
            "Failed to reorder todo",
        )

    async def clear_completed(self, column_id: str, todo_ids: list[str] | None = None) -> int:
        """Remove completed todos (or exactly *todo_ids*) of a column.

        The ids removed locally are the ids sent, so the server never deletes
        a todo the cache still shows. Returns how many were removed.
        """
        if todo_ids is not None:
            doomed = list(dict.fromkeys(todo_ids))
        else:
            doomed = [t.id for t in self.section(column_id, True)]
        if not doomed:
            return 0

        def apply() -> None:
            wanted = set(doomed)
            self.items[:] = [t for t in self.items if t.id not in wanted]

        await self._mutate(
            lambda: self.api.post(
                f"/todo-columns/{column_id}/todos/clear-completed",
                json={"completed_todo_ids": doomed},
            ),
            apply,
            "Failed to clear completed todos",
        )
        return len(doomed)
