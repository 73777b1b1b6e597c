# End-to-end: DashboardClient against the real app through httpx.ASGITransport.
# Created: 2026-10-11

import httpx
import pytest

from homeboard.api.serve import create_app
from homeboard.client import ApiClient, ApiError, DashboardClient
from homeboard.client.cache import is_temp_id
from homeboard.config import Settings
from homeboard.models import (
    ShoppingItemCreate,
    ShoppingItemPatch,
    ShoppingListCreate,
    TodoColumnCreate,
    TodoCreate,
)
from homeboard.security.pin_limiter import PinAttemptLimiter
from homeboard.store import FileHouseholdStore


@pytest.fixture
def app(tmp_path):
    return create_app(
        settings=Settings(data_dir=tmp_path),
        store=FileHouseholdStore(tmp_path),
        pin_limiter=PinAttemptLimiter(max_attempts=2, lockout_seconds=60),
    )


@pytest.fixture
async def board(app):
    api = ApiClient(
        "http://homeboard.test/api/v1",
        timeout=5.0,
        transport=httpx.ASGITransport(app=app),
    )
    async with DashboardClient(api=api) as client:
        yield client


class TestShoppingRoundTrip:
    async def test_list_and_item_survive_refetch(self, board):
        lst = await board.shopping.create_shopping_list(ShoppingListCreate(name="Groceries"))
        assert not is_temp_id(lst.id)

        item = await board.shopping.add_item(lst.id, ShoppingItemCreate(name="Milk"))
        assert not is_temp_id(item.id)

        await board.shopping.fetch()
        fetched = board.shopping.get(lst.id)
        assert [i.id for i in fetched.items] == [item.id]
        assert fetched.item_count == 1

    async def test_reorder_items_then_clear(self, board):
        lst = await board.shopping.create_shopping_list(ShoppingListCreate(name="Groceries"))
        eggs = await board.shopping.add_item(lst.id, ShoppingItemCreate(name="Eggs"))
        ham = await board.shopping.add_item(lst.id, ShoppingItemCreate(name="Ham"))

        assert await board.shopping.reorder_item(ham.id, "up") is True
        assert [i.name for i in board.shopping.get(lst.id).items] == ["Ham", "Eggs"]

        await board.shopping.toggle_item(eggs.id, True)
        assert await board.shopping.clear_completed_items(lst.id) == 1
        await board.shopping.fetch()
        assert [i.name for i in board.shopping.get(lst.id).items] == ["Ham"]

    async def test_unknown_item_surfaces_404(self, board):
        with pytest.raises(ApiError) as exc_info:
            await board.shopping.update_item("nope", ShoppingItemPatch(name="x"))
        assert exc_info.value.status_code == 404
        assert board.toasts.errors[-1].message == "Shopping list item not found"


class TestTodosRoundTrip:
    async def test_create_reorder_and_move_columns(self, board):
        mum = await board.todo_columns.create_todo_column(TodoColumnCreate(name="Mum"))
        dad = await board.todo_columns.create_todo_column(TodoColumnCreate(name="Dad"))
        assert await board.todo_columns.reorder_todo_column(dad.id, "up") is True
        assert [c.name for c in board.todo_columns.items] == ["Dad", "Mum"]

        a = await board.todos.create_todo(TodoCreate(title="A", todo_column_id=mum.id))
        b = await board.todos.create_todo(TodoCreate(title="B", todo_column_id=mum.id))
        assert await board.todos.reorder_todo(b.id, "up") is True
        section = sorted(board.todos.section(mum.id, False), key=lambda t: t.order)
        assert [t.id for t in section] == [b.id, a.id]

    async def test_validation_error_message(self, board):
        with pytest.raises(ApiError) as exc_info:
            await board.api.post("/todos", json={"title": ""})
        assert exc_info.value.status_code == 422
        assert "at least 1 character" in exc_info.value.message


class TestPinRoundTrip:
    async def test_lockout_message_reaches_client(self, board):
        await board.api.put("/household/settings", json={"adult_pin": "1234"})
        assert await board.pin.verify_household_pin("1234") is True
        assert await board.pin.verify_household_pin("0000") is False
        assert await board.pin.verify_household_pin("0000") is False

        with pytest.raises(ApiError) as exc_info:
            await board.pin.verify_household_pin("1234")
        assert exc_info.value.status_code == 429
        assert board.toasts.errors[-1].message == (
            "Too many PIN attempts. Please try again in 1 minute."
        )
