# Tests for client/cache.py and client/ordering.py.
# Created: 2026-10-09

import pytest

from homeboard.client.cache import (
    ResourceCache,
    find_index,
    is_temp_id,
    new_temp_id,
    reconcile_entity,
)
from homeboard.client.ordering import find_adjacent_swap, sort_by_order, swapped_ids
from homeboard.models import CalendarEvent, CalendarEventPatch, Todo, TodoPatch, apply_patch

# ============================================================================
# Cache helpers
# ============================================================================


class TestTempIds:
    def test_prefix(self):
        assert new_temp_id().startswith("temp-")
        assert is_temp_id(new_temp_id())
        assert not is_temp_id("srv-1")

    def test_unique(self):
        assert len({new_temp_id() for _ in range(100)}) == 100


class TestReconcileEntity:
    def test_replaces_in_place(self):
        items = [Todo(id="a", title="A"), Todo(id="temp-1", title="B"), Todo(id="c", title="C")]
        assert reconcile_entity(items, "temp-1", Todo(id="srv-1", title="B")) is True
        assert [t.id for t in items] == ["a", "srv-1", "c"]

    def test_missing_target_is_noop(self):
        items = [Todo(id="a", title="A")]
        assert reconcile_entity(items, "temp-gone", Todo(id="srv-1", title="X")) is False
        assert [t.id for t in items] == ["a"]

    def test_never_duplicates_ids(self):
        items = [Todo(id="srv-1", title="fetched"), Todo(id="temp-1", title="optimistic")]
        reconcile_entity(items, "temp-1", Todo(id="srv-1", title="server"))
        assert [t.id for t in items] == ["srv-1"]
        assert items[0].title == "server"


class TestApplyPatch:
    def test_only_set_fields_change(self):
        todo = apply_patch(Todo(id="a", title="A", description="x"), TodoPatch(completed=True))
        assert (todo.title, todo.description, todo.completed) == ("A", "x", True)

    def test_null_skips_required_fields(self):
        todo = Todo(id="a", title="A", description="x")
        patched = apply_patch(todo, TodoPatch(title=None, description=None))
        assert patched.title == "A"
        assert patched.description is None

    def test_times_become_utc(self):
        event = CalendarEvent(title="Swim", start="2026-10-11T09:00:00", end="2026-10-11T10:00:00Z")
        assert event.start.tzinfo is not None
        patched = apply_patch(event, CalendarEventPatch(start="2026-10-11T08:00:00"))
        assert patched.start < patched.end


class TestResourceCache:
    async def test_refresh_replaces_in_place(self):
        cache = ResourceCache()
        live = cache.collection("todos")

        async def fetch():
            return [Todo(id="a", title="A")]

        cache.register("todos", fetch)
        await cache.refresh("todos")
        assert live is cache.collection("todos")
        assert [t.id for t in live] == ["a"]

    async def test_refresh_without_fetcher(self):
        with pytest.raises(KeyError):
            await ResourceCache().refresh("nothing")

    def test_snapshot_is_deep(self):
        cache = ResourceCache()
        cache.collection("todos").append(Todo(id="a", title="A", order=1))
        snap = cache.snapshot("todos")
        cache.collection("todos")[0].order = 99
        cache.collection("todos").append(Todo(id="b", title="B"))

        cache.restore("todos", snap)
        assert len(cache.collection("todos")) == 1
        assert cache.collection("todos")[0].order == 1

    def test_find_index(self):
        items = [Todo(id="a", title="A"), Todo(id="b", title="B")]
        assert find_index(items, "b") == 1
        assert find_index(items, "z") is None


# ============================================================================
# Ordering
# ============================================================================


@pytest.fixture
def group():
    # Deliberately unsorted
    return [
        Todo(id="c", title="C", order=2),
        Todo(id="a", title="A", order=0),
        Todo(id="b", title="B", order=1),
    ]


class TestAdjacentSwap:
    def test_sort_by_order(self, group):
        assert [t.id for t in sort_by_order(group)] == ["a", "b", "c"]

    def test_move_down(self, group):
        assert find_adjacent_swap(group, "a", "down") == (0, 1)

    def test_move_up(self, group):
        assert find_adjacent_swap(group, "c", "up") == (2, 1)

    def test_boundaries(self, group):
        assert find_adjacent_swap(group, "a", "up") is None
        assert find_adjacent_swap(group, "c", "down") is None

    def test_unknown_id(self, group):
        assert find_adjacent_swap(group, "zzz", "up") is None

    def test_invalid_direction(self, group):
        with pytest.raises(ValueError):
            find_adjacent_swap(group, "a", "sideways")

    def test_swapped_ids(self, group):
        assert swapped_ids(group, 0, 1) == ["b", "a", "c"]
