# Tests for store.py — JSON persistence of household data.
# Created: 2026-10-10

import json

import pytest

from homeboard.models import (
    CalendarEventCreate,
    CalendarEventPatch,
    EventUser,
    HouseholdSettings,
    ShoppingItemCreate,
    ShoppingListCreate,
    TodoColumnCreate,
    TodoCreate,
    TodoPatch,
    User,
)
from homeboard.store import FileHouseholdStore


@pytest.fixture
def store(tmp_path):
    return FileHouseholdStore(tmp_path)


class TestPersistence:
    async def test_reload_from_disk(self, tmp_path, store):
        lst = await store.create_shopping_list(ShoppingListCreate(name="Groceries"))
        await store.add_item(lst.id, ShoppingItemCreate(name="Milk"))
        await store.save_user(User(name="Sam", pin="salt:key"))
        await store.save_household_settings(HouseholdSettings(adult_pin="1234"))

        reloaded = FileHouseholdStore(tmp_path)
        lists = await reloaded.list_shopping_lists()
        assert [i.name for i in lists[0].items] == ["Milk"]
        assert (await reloaded.list_users())[0].pin == "salt:key"
        assert (await reloaded.get_household_settings()).adult_pin == "1234"

    async def test_no_temp_files_left(self, tmp_path, store):
        await store.create_todo(TodoCreate(title="A"))
        assert not list(tmp_path.glob("*.tmp"))
        assert json.loads((tmp_path / "todos.json").read_text())[0]["title"] == "A"

    def test_corrupt_file_is_ignored(self, tmp_path):
        (tmp_path / "todos.json").write_text("{not json")
        store = FileHouseholdStore(tmp_path)
        assert store._todos == {}


class TestTodoHistory:
    async def test_old_completed_todos_hidden(self, store):
        old = await store.create_todo(TodoCreate(title="Old", completed=True))
        old.updated_at = "2020-01-01T00:00:00+00:00"
        await store.create_todo(TodoCreate(title="Recent", completed=True))
        await store.create_todo(TodoCreate(title="Open"))

        visible = [t.title for t in await store.list_todos()]
        assert "Old" not in visible
        assert set(visible) == {"Recent", "Open"}

        history = [t.title for t in await store.list_todos(history=True)]
        assert "Old" in history

    async def test_sorted_by_column_completed_order(self, store):
        await store.create_todo(TodoCreate(title="done", completed=True, todo_column_id="a"))
        await store.create_todo(TodoCreate(title="second", todo_column_id="a", order=2))
        await store.create_todo(TodoCreate(title="first", todo_column_id="a", order=1))
        titles = [t.title for t in await store.list_todos(column_id="a")]
        assert titles == ["first", "second", "done"]

    async def test_update_touches_timestamp(self, store):
        todo = await store.create_todo(TodoCreate(title="A"))
        todo.updated_at = "2020-01-01T00:00:00+00:00"
        updated = await store.update_todo(todo.id, TodoPatch(completed=True))
        assert updated.completed is True
        assert updated.updated_at != "2020-01-01T00:00:00+00:00"


class TestColumns:
    async def test_reorder_unknown_column(self, store):
        await store.create_todo_column(TodoColumnCreate(name="Mum"))
        assert await store.reorder_todo_columns([("nope", 0)]) is None

    async def test_clear_completed_unknown_column(self, store):
        assert await store.clear_completed_todos("nope") is None


class TestCalendar:
    async def test_color_derivation_skips_users_without_color(self, store):
        event = await store.create_calendar_event(
            CalendarEventCreate(
                title="Dentist",
                start="2026-10-12T09:00:00",
                end="2026-10-12T09:30:00",
                users=[EventUser(id="u1", name="Sam"), EventUser(id="u2", name="Kim", color="#0f0")],
            )
        )
        assert event.color == "#0f0"

    async def test_explicit_color_wins_on_update(self, store):
        event = await store.create_calendar_event(
            CalendarEventCreate(title="Dentist", start="2026-10-12T09:00:00", end="2026-10-12T09:30:00")
        )
        updated = await store.update_calendar_event(
            event.id,
            CalendarEventPatch(users=[EventUser(id="u1", name="Sam", color="#f00")], color="#abc"),
        )
        assert updated.color == "#abc"

    async def test_unknown_event(self, store):
        assert await store.update_calendar_event("nope", CalendarEventPatch(title="x")) is None
        assert await store.delete_calendar_event("nope") is False


def _raise_oserror(path, data):
    raise OSError("disk full")


class TestFailedWrites:
    async def test_reorder_todos_keeps_memory(self, monkeypatch, store):
        a = await store.create_todo(TodoCreate(title="A"))
        b = await store.create_todo(TodoCreate(title="B"))
        monkeypatch.setattr(store, "_save_json", _raise_oserror)
        with pytest.raises(OSError):
            await store.reorder_todos([b.id, a.id])
        assert (store._todos[a.id].order, store._todos[b.id].order) == (0, 1)

    async def test_reorder_columns_keeps_memory(self, monkeypatch, store):
        mum = await store.create_todo_column(TodoColumnCreate(name="Mum"))
        dad = await store.create_todo_column(TodoColumnCreate(name="Dad"))
        monkeypatch.setattr(store, "_save_json", _raise_oserror)
        with pytest.raises(OSError):
            await store.reorder_todo_columns([(mum.id, 1), (dad.id, 0)])
        assert [c.name for c in await store.list_todo_columns()] == ["Mum", "Dad"]

    async def test_reorder_items_keeps_memory(self, monkeypatch, store):
        lst = await store.create_shopping_list(ShoppingListCreate(name="Groceries"))
        milk = await store.add_item(lst.id, ShoppingItemCreate(name="Milk"))
        eggs = await store.add_item(lst.id, ShoppingItemCreate(name="Eggs"))
        monkeypatch.setattr(store, "_save_json", _raise_oserror)
        with pytest.raises(OSError):
            await store.reorder_items([eggs.id, milk.id])
        with pytest.raises(OSError):
            await store.reorder_shopping_lists([lst.id])
        assert [i.name for i in (await store.get_shopping_list(lst.id)).items] == ["Milk", "Eggs"]

    async def test_column_delete_keeps_todos_attached(self, monkeypatch, store):
        col = await store.create_todo_column(TodoColumnCreate(name="Mum"))
        todo = await store.create_todo(TodoCreate(title="A", todo_column_id=col.id))
        monkeypatch.setattr(store, "_save_json", _raise_oserror)
        with pytest.raises(OSError):
            await store.delete_todo_column(col.id)
        assert await store.get_todo_column(col.id) is not None
        assert store._todos[todo.id].todo_column_id == col.id
