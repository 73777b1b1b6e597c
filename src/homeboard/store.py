"""File-based household store.

Created: 2026-10-03

Storage layout:
~/.homeboard/
    users.json            # Household members (PIN hashes included)
    household.json        # Household settings (adult PIN)
    shopping_lists.json   # Lists, without items
    shopping_items.json   # Items, keyed to a list by shopping_list_id
    todo_columns.json     # Todo board columns
    todos.json            # Todos, keyed to a column by todo_column_id
    calendar_events.json  # Local calendar events

Design notes:
- Single JSON file per entity type
- In-memory index for lookups, whole file rewritten on change
- Atomic writes using temp file + rename
- Composite views (list items, column todo counts) are built on read
- Methods return None / False for unknown ids; routers map that to 404
"""

from __future__ import annotations

import json
import logging
from datetime import UTC, datetime, timedelta
from pathlib import Path
from typing import Any

from pydantic import BaseModel

from homeboard.models import (
    CalendarEvent,
    CalendarEventCreate,
    CalendarEventPatch,
    EventUser,
    HouseholdSettings,
    ShoppingItemCreate,
    ShoppingItemPatch,
    ShoppingList,
    ShoppingListCreate,
    ShoppingListItem,
    ShoppingListPatch,
    Todo,
    TodoColumn,
    TodoColumnCreate,
    TodoColumnPatch,
    TodoCreate,
    TodoPatch,
    User,
    apply_patch,
    now_iso,
    patch_fields,
)

logger = logging.getLogger(__name__)

# Completed todos older than this are hidden unless history is requested
_TODO_HISTORY_DAYS = 7

_DEFAULT_PAGE = 50
_MAX_PAGE = 100


def _next_order(orders: list[int]) -> int:
    return max(orders) + 1 if orders else 0


def _event_color(users: list[EventUser]) -> str | list[str] | None:
    """Event color derived from its attendees' colors."""
    colors = [u.color for u in users if u.color]
    if not colors:
        return None
    if len(colors) == 1:
        return colors[0]
    return colors


def _parse_iso(value: str) -> datetime:
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


class FileHouseholdStore:
    """JSON-file persistence for all household entities."""

    def __init__(self, base_path: Path):
        self.base_path = Path(base_path)
        self.base_path.mkdir(parents=True, exist_ok=True)

        self._users_file = self.base_path / "users.json"
        self._household_file = self.base_path / "household.json"
        self._lists_file = self.base_path / "shopping_lists.json"
        self._items_file = self.base_path / "shopping_items.json"
        self._columns_file = self.base_path / "todo_columns.json"
        self._todos_file = self.base_path / "todos.json"
        self._events_file = self.base_path / "calendar_events.json"

        self._users: dict[str, User] = {}
        self._household: HouseholdSettings | None = None
        self._lists: dict[str, ShoppingList] = {}
        self._items: dict[str, ShoppingListItem] = {}
        self._columns: dict[str, TodoColumn] = {}
        self._todos: dict[str, Todo] = {}
        self._events: dict[str, CalendarEvent] = {}

        self._load_all()

    # =========================================================================
    # File I/O Helpers
    # =========================================================================

    def _load_json(self, path: Path) -> Any:
        if not path.exists():
            return []
        try:
            with open(path, encoding="utf-8") as f:
                return json.load(f)
        except (json.JSONDecodeError, OSError) as e:
            logger.error("Error loading %s: %s", path, e)
            return []

    def _save_json(self, path: Path, data: Any) -> None:
        """Save data to JSON file atomically."""
        temp_path = path.with_suffix(".tmp")
        try:
            with open(temp_path, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2, ensure_ascii=False)
            temp_path.replace(path)
        except OSError as e:
            logger.error("Error saving %s: %s", path, e)
            if temp_path.exists():
                temp_path.unlink()
            raise

    def _save_models(self, path: Path, models: dict[str, BaseModel]) -> None:
        self._save_json(path, [m.model_dump(mode="json") for m in models.values()])

    def _load_all(self) -> None:
        for data in self._load_json(self._users_file):
            user = User.model_validate(data)
            self._users[user.id] = user
        household = self._load_json(self._household_file)
        if isinstance(household, dict):
            self._household = HouseholdSettings.model_validate(household)
        for data in self._load_json(self._lists_file):
            lst = ShoppingList.model_validate(data)
            self._lists[lst.id] = lst
        for data in self._load_json(self._items_file):
            item = ShoppingListItem.model_validate(data)
            self._items[item.id] = item
        for data in self._load_json(self._columns_file):
            column = TodoColumn.model_validate(data)
            self._columns[column.id] = column
        for data in self._load_json(self._todos_file):
            todo = Todo.model_validate(data)
            self._todos[todo.id] = todo
        for data in self._load_json(self._events_file):
            event = CalendarEvent.model_validate(data)
            self._events[event.id] = event

        logger.info(
            "Household store loaded: %d users, %d lists, %d items, %d columns, %d todos, %d events",
            len(self._users),
            len(self._lists),
            len(self._items),
            len(self._columns),
            len(self._todos),
            len(self._events),
        )

    # =========================================================================
    # Users & household settings
    # =========================================================================

    async def list_users(self) -> list[User]:
        return sorted(self._users.values(), key=lambda u: (u.order, u.created_at))

    async def get_user(self, user_id: str) -> User | None:
        return self._users.get(user_id)

    async def save_user(self, user: User) -> User:
        """Insert or replace a user."""
        user.updated_at = now_iso()
        self._users[user.id] = user
        self._save_models(self._users_file, self._users)
        return user

    async def delete_user(self, user_id: str) -> bool:
        if self._users.pop(user_id, None) is None:
            return False
        self._save_models(self._users_file, self._users)
        return True

    async def get_household_settings(self) -> HouseholdSettings | None:
        return self._household

    async def save_household_settings(self, settings: HouseholdSettings) -> HouseholdSettings:
        settings.updated_at = now_iso()
        self._household = settings
        self._save_json(self._household_file, settings.model_dump(mode="json"))
        return settings

    # =========================================================================
    # Shopping lists
    # =========================================================================

    def _items_of(self, list_id: str) -> list[ShoppingListItem]:
        items = [i for i in self._items.values() if i.shopping_list_id == list_id]
        return sorted(items, key=lambda i: (i.order, i.checked))

    def _compose_list(self, lst: ShoppingList) -> ShoppingList:
        items = self._items_of(lst.id)
        return lst.model_copy(update={"items": items, "item_count": len(items)})

    async def list_shopping_lists(
        self, limit: int | None = None, offset: int | None = None
    ) -> list[ShoppingList]:
        """Lists ordered by ``order``, with items. Limit is clamped to 1..100."""
        limit = _DEFAULT_PAGE if limit is None or limit < 1 else min(limit, _MAX_PAGE)
        offset = 0 if offset is None or offset < 0 else offset
        ordered = sorted(self._lists.values(), key=lambda lst: (lst.order, lst.created_at))
        return [self._compose_list(lst) for lst in ordered[offset : offset + limit]]

    async def get_shopping_list(self, list_id: str) -> ShoppingList | None:
        lst = self._lists.get(list_id)
        return self._compose_list(lst) if lst else None

    async def create_shopping_list(self, data: ShoppingListCreate) -> ShoppingList:
        order = data.order
        if order is None:
            order = _next_order([lst.order for lst in self._lists.values()])
        lst = ShoppingList(name=data.name, order=order)
        self._lists[lst.id] = lst
        self._save_models(self._lists_file, self._lists)
        return self._compose_list(lst)

    async def update_shopping_list(
        self, list_id: str, patch: ShoppingListPatch
    ) -> ShoppingList | None:
        lst = self._lists.get(list_id)
        if lst is None:
            return None
        lst = apply_patch(lst, patch)
        lst.updated_at = now_iso()
        self._lists[list_id] = lst
        self._save_models(self._lists_file, self._lists)
        return self._compose_list(lst)

    async def delete_shopping_list(self, list_id: str) -> bool:
        if self._lists.pop(list_id, None) is None:
            return False
        for item in self._items_of(list_id):
            del self._items[item.id]
        self._save_models(self._lists_file, self._lists)
        self._save_models(self._items_file, self._items)
        return True

    async def reorder_shopping_lists(self, list_ids: list[str]) -> bool:
        """Assign ``order = index`` for each id. False if any id is unknown."""
        if any(i not in self._lists for i in list_ids):
            return False
        lists = dict(self._lists)
        for index, list_id in enumerate(list_ids):
            lists[list_id] = lists[list_id].model_copy(update={"order": index})
        self._save_models(self._lists_file, lists)
        self._lists = lists
        return True

    # =========================================================================
    # Shopping list items
    # =========================================================================

    async def add_item(self, list_id: str, data: ShoppingItemCreate) -> ShoppingListItem | None:
        lst = self._lists.get(list_id)
        if lst is None:
            return None
        order = data.order
        if order is None:
            order = _next_order([i.order for i in self._items_of(list_id)])
        item = ShoppingListItem(
            shopping_list_id=list_id,
            **data.model_dump(exclude={"order"}),
            order=order,
        )
        self._items[item.id] = item
        lst.updated_at = now_iso()
        self._save_models(self._items_file, self._items)
        self._save_models(self._lists_file, self._lists)
        return item

    async def update_item(self, item_id: str, patch: ShoppingItemPatch) -> ShoppingListItem | None:
        item = self._items.get(item_id)
        if item is None:
            return None
        item = apply_patch(item, patch)
        self._items[item_id] = item
        self._save_models(self._items_file, self._items)
        return item

    async def delete_item(self, item_id: str) -> bool:
        if self._items.pop(item_id, None) is None:
            return False
        self._save_models(self._items_file, self._items)
        return True

    async def reorder_items(self, item_ids: list[str]) -> bool:
        if any(i not in self._items for i in item_ids):
            return False
        items = dict(self._items)
        for index, item_id in enumerate(item_ids):
            items[item_id] = items[item_id].model_copy(update={"order": index})
        self._save_models(self._items_file, items)
        self._items = items
        return True

    async def clear_completed_items(
        self, list_id: str, item_ids: list[str] | None = None
    ) -> int | None:
        """Delete checked items (or exactly *item_ids*) of a list. Returns count."""
        if list_id not in self._lists:
            return None
        items = self._items_of(list_id)
        if item_ids is not None:
            wanted = set(item_ids)
            doomed = [i.id for i in items if i.id in wanted]
        else:
            doomed = [i.id for i in items if i.checked]
        for item_id in doomed:
            del self._items[item_id]
        if doomed:
            self._save_models(self._items_file, self._items)
        return len(doomed)

    # =========================================================================
    # Todo columns
    # =========================================================================

    def _compose_column(self, column: TodoColumn) -> TodoColumn:
        count = sum(1 for t in self._todos.values() if t.todo_column_id == column.id)
        return column.model_copy(update={"todo_count": count})

    async def list_todo_columns(self) -> list[TodoColumn]:
        ordered = sorted(self._columns.values(), key=lambda c: (c.order, c.created_at))
        return [self._compose_column(c) for c in ordered]

    async def get_todo_column(self, column_id: str) -> TodoColumn | None:
        column = self._columns.get(column_id)
        return self._compose_column(column) if column else None

    async def create_todo_column(self, data: TodoColumnCreate) -> TodoColumn:
        column = TodoColumn(
            name=data.name,
            user_id=data.user_id,
            is_default=data.is_default,
            order=_next_order([c.order for c in self._columns.values()]),
        )
        self._columns[column.id] = column
        self._save_models(self._columns_file, self._columns)
        return self._compose_column(column)

    async def update_todo_column(self, column_id: str, patch: TodoColumnPatch) -> TodoColumn | None:
        column = self._columns.get(column_id)
        if column is None:
            return None
        column = apply_patch(column, patch)
        column.updated_at = now_iso()
        self._columns[column_id] = column
        self._save_models(self._columns_file, self._columns)
        return self._compose_column(column)

    async def delete_todo_column(self, column_id: str) -> bool:
        """Delete a column; its todos are kept but detached."""
        if column_id not in self._columns:
            return False
        columns = {k: c for k, c in self._columns.items() if k != column_id}
        todos = {
            k: t.model_copy(update={"todo_column_id": None}) if t.todo_column_id == column_id else t
            for k, t in self._todos.items()
        }
        if any(t.todo_column_id == column_id for t in self._todos.values()):
            self._save_models(self._todos_file, todos)
        self._save_models(self._columns_file, columns)
        self._columns = columns
        self._todos = todos
        return True

    async def reorder_todo_columns(self, reorders: list[tuple[str, int]]) -> list[TodoColumn] | None:
        """Apply explicit (id, order) pairs and return the re-ordered columns."""
        if any(column_id not in self._columns for column_id, _ in reorders):
            return None
        columns = dict(self._columns)
        for column_id, order in reorders:
            columns[column_id] = columns[column_id].model_copy(update={"order": order})
        self._save_models(self._columns_file, columns)
        self._columns = columns
        return await self.list_todo_columns()

    # =========================================================================
    # Todos
    # =========================================================================

    async def list_todos(self, column_id: str | None = None, history: bool = False) -> list[Todo]:
        """Todos ordered by column, completion, order.

        Without *history*, completed todos untouched for a week are hidden.
        """
        cutoff = datetime.now(UTC) - timedelta(days=_TODO_HISTORY_DAYS)
        todos = []
        for todo in self._todos.values():
            if column_id and todo.todo_column_id != column_id:
                continue
            if not history and todo.completed and _parse_iso(todo.updated_at) < cutoff:
                continue
            todos.append(todo)
        return sorted(todos, key=lambda t: (t.todo_column_id or "", t.completed, t.order))

    async def get_todo(self, todo_id: str) -> Todo | None:
        return self._todos.get(todo_id)

    async def create_todo(self, data: TodoCreate) -> Todo:
        order = data.order
        if order is None:
            order = _next_order(
                [
                    t.order
                    for t in self._todos.values()
                    if t.todo_column_id == data.todo_column_id and t.completed == data.completed
                ]
            )
        todo = Todo(**data.model_dump(exclude={"order"}), order=order)
        self._todos[todo.id] = todo
        self._save_models(self._todos_file, self._todos)
        return todo

    async def update_todo(self, todo_id: str, patch: TodoPatch) -> Todo | None:
        todo = self._todos.get(todo_id)
        if todo is None:
            return None
        todo = apply_patch(todo, patch)
        todo.updated_at = now_iso()
        self._todos[todo_id] = todo
        self._save_models(self._todos_file, self._todos)
        return todo

    async def delete_todo(self, todo_id: str) -> bool:
        if self._todos.pop(todo_id, None) is None:
            return False
        self._save_models(self._todos_file, self._todos)
        return True

    async def reorder_todos(self, todo_ids: list[str]) -> bool:
        if any(i not in self._todos for i in todo_ids):
            return False
        todos = dict(self._todos)
        for index, todo_id in enumerate(todo_ids):
            todos[todo_id] = todos[todo_id].model_copy(update={"order": index})
        self._save_models(self._todos_file, todos)
        self._todos = todos
        return True

    async def clear_completed_todos(
        self, column_id: str, todo_ids: list[str] | None = None
    ) -> int | None:
        """Delete completed todos (or exactly *todo_ids*) of a column. Returns count."""
        if column_id not in self._columns:
            return None
        in_column = [t for t in self._todos.values() if t.todo_column_id == column_id]
        if todo_ids is not None:
            wanted = set(todo_ids)
            doomed = [t.id for t in in_column if t.id in wanted]
        else:
            doomed = [t.id for t in in_column if t.completed]
        for todo_id in doomed:
            del self._todos[todo_id]
        if doomed:
            self._save_models(self._todos_file, self._todos)
        return len(doomed)

    # =========================================================================
    # Calendar events
    # =========================================================================

    async def list_calendar_events(self) -> list[CalendarEvent]:
        return sorted(self._events.values(), key=lambda e: e.start)

    async def get_calendar_event(self, event_id: str) -> CalendarEvent | None:
        return self._events.get(event_id)

    async def create_calendar_event(self, data: CalendarEventCreate) -> CalendarEvent:
        event = CalendarEvent(**data.model_dump())
        if event.color is None:
            event.color = _event_color(event.users)
        self._events[event.id] = event
        self._save_models(self._events_file, self._events)
        return event

    async def update_calendar_event(
        self, event_id: str, patch: CalendarEventPatch
    ) -> CalendarEvent | None:
        event = self._events.get(event_id)
        if event is None:
            return None
        changed = patch_fields(patch)
        event = apply_patch(event, patch)
        if "users" in changed and changed.get("color") is None:
            event.color = _event_color(event.users)
        event.updated_at = now_iso()
        self._events[event_id] = event
        self._save_models(self._events_file, self._events)
        return event

    async def delete_calendar_event(self, event_id: str) -> bool:
        if self._events.pop(event_id, None) is None:
            return False
        self._save_models(self._events_file, self._events)
        return True
