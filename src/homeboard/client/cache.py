"""Named client-side collections: the single source of UI truth.

Each resource name (``"todos"``, ``"shopping-lists"``...) maps to one ordered
list of entities. Callers hold on to that list object; refresh and restore
replace its *contents* in place so existing references stay live.

Snapshots are deep copies, because optimistic mutations write into the same
list (and, for nested items, into entities inside it).
"""

from __future__ import annotations

import copy
import logging
import secrets
from collections.abc import Awaitable, Callable
from typing import Any, Protocol

logger = logging.getLogger(__name__)

Fetcher = Callable[[], Awaitable[list[Any]]]

TEMP_ID_PREFIX = "temp-"


class HasId(Protocol):
    id: str


def new_temp_id() -> str:
    """Locally unique id for an entity the server has not seen yet."""
    return f"{TEMP_ID_PREFIX}{secrets.token_hex(8)}"


def is_temp_id(entity_id: str) -> bool:
    return entity_id.startswith(TEMP_ID_PREFIX)


def find_index(collection: list, entity_id: str) -> int | None:
    for index, entity in enumerate(collection):
        if entity.id == entity_id:
            return index
    return None


def reconcile_entity(collection: list, target_id: str, entity: HasId) -> bool:
    """Replace the entity *target_id* in place with the authoritative *entity*.

    No-op (returns False) when *target_id* is gone, e.g. deleted meanwhile.
    If *entity*'s id already sits elsewhere in the collection that copy is
    dropped, so an id never appears twice.
    """
    index = find_index(collection, target_id)
    if index is None:
        return False
    duplicate = find_index(collection, entity.id)
    collection[index] = entity
    if duplicate is not None and duplicate != index:
        del collection[duplicate]
    return True


class ResourceCache:
    """Resource name -> ordered entity list, with snapshot/restore."""

    def __init__(self) -> None:
        self._collections: dict[str, list[Any]] = {}
        self._fetchers: dict[str, Fetcher] = {}

    def __contains__(self, name: str) -> bool:
        return name in self._collections

    def collection(self, name: str) -> list[Any]:
        """The live list for *name* (created empty on first use)."""
        return self._collections.setdefault(name, [])

    def register(self, name: str, fetcher: Fetcher) -> None:
        """Set the coroutine that loads the authoritative copy of *name*."""
        self._fetchers[name] = fetcher
        self.collection(name)

    async def refresh(self, name: str) -> list[Any]:
        """Replace the cached collection with a freshly fetched one."""
        fetcher = self._fetchers.get(name)
        if fetcher is None:
            raise KeyError(f"No fetcher registered for {name!r}")
        fresh = await fetcher()
        self.replace(name, fresh)
        logger.debug("Refreshed %s (%d entities)", name, len(fresh))
        return self.collection(name)

    def replace(self, name: str, entities: list[Any]) -> None:
        self.collection(name)[:] = entities

    def snapshot(self, name: str) -> list[Any]:
        return copy.deepcopy(self.collection(name))

    def restore(self, name: str, snapshot: list[Any]) -> None:
        self.replace(name, snapshot)
        logger.debug("Rolled back %s", name)
