"""Base class for cached, optimistically-mutated API collections.

Subclasses name a cache resource and supply ``_fetch()``; the helpers here
turn a create / update / delete / reorder into one call to
``perform_optimistic_update`` with a whole-collection snapshot as rollback,
then reconcile the cache with the server's answer.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable, Sequence
from typing import Any, Generic, TypeVar

from pydantic import BaseModel

from homeboard.client.api_client import ApiClient
from homeboard.client.cache import ResourceCache, find_index, reconcile_entity
from homeboard.client.errors import get_error_message
from homeboard.client.optimistic import perform_optimistic_update
from homeboard.client.ordering import Direction, find_adjacent_swap, sort_by_order, swapped_ids
from homeboard.client.toasts import AlertToasts
from homeboard.models import apply_patch

logger = logging.getLogger(__name__)

E = TypeVar("E", bound=BaseModel)
T = TypeVar("T")


class CollectionClient(Generic[E]):
    """Cached collection of one entity type.

    Attributes:
        resource: Cache key for the collection.
        label: Human name used in default error messages.
        loading: True while ``fetch()`` runs.
        error: Message of the last failed fetch or mutation, else None.
    """

    resource: str = ""
    label: str = "item"
    model: type[BaseModel]

    def __init__(
        self,
        api: ApiClient,
        cache: ResourceCache | None = None,
        toasts: AlertToasts | None = None,
    ):
        self.api = api
        self.cache = cache if cache is not None else ResourceCache()
        self.toasts = toasts if toasts is not None else AlertToasts()
        self.loading = False
        self.error: str | None = None
        self.cache.register(self.resource, self._fetch)

    @property
    def items(self) -> list[E]:
        """Live cached collection."""
        return self.cache.collection(self.resource)

    def get(self, entity_id: str) -> E | None:
        index = find_index(self.items, entity_id)
        return self.items[index] if index is not None else None

    async def _fetch(self) -> list[E]:
        raise NotImplementedError

    async def fetch(self) -> list[E]:
        """Load the authoritative collection into the cache."""
        self.loading = True
        self.error = None
        try:
            await self.cache.refresh(self.resource)
            return self.items
        except Exception as err:
            self.error = get_error_message(err, f"Failed to fetch {self.label}s")
            logger.error("Error fetching %s: %s", self.resource, err)
            raise
        finally:
            self.loading = False

    # =========================================================================
    # Optimistic mutation plumbing
    # =========================================================================

    async def _mutate(
        self,
        request: Callable[[], Awaitable[T]],
        apply: Callable[[], None],
        failure: str,
        title: str = "Error",
    ) -> T:
        """Snapshot, apply, request; on failure roll back, toast, re-raise."""
        snapshot = self.cache.snapshot(self.resource)
        try:
            result = await perform_optimistic_update(
                request,
                apply,
                lambda: self.cache.restore(self.resource, snapshot),
            )
        except Exception as err:
            self.error = get_error_message(err, failure)
            self.toasts.show_error(title, self.error)
            raise
        self.error = None
        return result

    async def _refresh_after_reorder(self) -> None:
        """Reconcile a reorder with the server's renumbering."""
        try:
            await self.cache.refresh(self.resource)
        except Exception as err:
            # The reorder itself succeeded; keep the optimistic order.
            logger.warning("Refresh after reorder of %s failed: %s", self.resource, err)

    async def _create(
        self,
        optimistic: E,
        request: Callable[[], Awaitable[Any]],
        failure: str,
        title: str = "Error",
    ) -> E:
        """Append *optimistic* now, swap in the server entity at the same index."""
        data = await self._mutate(request, lambda: self.items.append(optimistic), failure, title)
        created = self.model.model_validate(data)
        reconcile_entity(self.items, optimistic.id, created)
        return created

    async def _update(
        self,
        entity_id: str,
        patch: BaseModel,
        request: Callable[[], Awaitable[Any]],
        failure: str,
        title: str = "Error",
    ) -> E:
        def apply() -> None:
            index = find_index(self.items, entity_id)
            if index is not None:
                self.items[index] = apply_patch(self.items[index], patch)

        data = await self._mutate(request, apply, failure, title)
        updated = self.model.model_validate(data)
        reconcile_entity(self.items, entity_id, updated)
        return updated

    async def _delete(
        self,
        entity_id: str,
        request: Callable[[], Awaitable[Any]],
        failure: str,
        title: str = "Error",
    ) -> bool:
        def apply() -> None:
            index = find_index(self.items, entity_id)
            if index is not None:
                del self.items[index]

        await self._mutate(request, apply, failure, title)
        return True

    async def _swap_adjacent(
        self,
        group: Sequence[Any],
        entity_id: str,
        direction: Direction,
        request: Callable[[list[str]], Awaitable[Any]],
        failure: str,
    ) -> bool:
        """Move *entity_id* one step within *group*.

        Returns False without touching cache or network at a boundary.
        Otherwise the two ``order`` values are swapped locally, the full
        ordered id list is sent, and the collection is refreshed.
        """
        positions = find_adjacent_swap(group, entity_id, direction)
        if positions is None:
            return False

        current, target = positions
        ordered = sort_by_order(group)
        moving_id, other_id = ordered[current].id, ordered[target].id
        new_ids = swapped_ids(group, current, target)

        def swap_orders() -> None:
            a, b = self._find_deep(moving_id), self._find_deep(other_id)
            if a is not None and b is not None:
                a.order, b.order = b.order, a.order

        await self._mutate(lambda: request(new_ids), swap_orders, failure)
        await self._refresh_after_reorder()
        return True

    def _find_deep(self, entity_id: str) -> Any:
        """Entity (top-level or nested) to edit in place. Nested collections override."""
        return self.get(entity_id)
