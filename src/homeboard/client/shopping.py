# Shopping lists client — lists and their nested items.
# Created: 2026-10-06

from __future__ import annotations

import logging

from homeboard.client.base import CollectionClient
from homeboard.client.cache import find_index, new_temp_id
from homeboard.client.ordering import Direction
from homeboard.models import (
    ShoppingItemCreate,
    ShoppingItemPatch,
    ShoppingList,
    ShoppingListCreate,
    ShoppingListItem,
    ShoppingListPatch,
    apply_patch,
)

logger = logging.getLogger(__name__)


class ShoppingListsClient(CollectionClient[ShoppingList]):
    """Shopping lists cached under ``"shopping-lists"``; items live inside
    their list, so item mutations snapshot and restore the whole collection."""

    resource = "shopping-lists"
    label = "shopping list"
    model = ShoppingList

    async def _fetch(self) -> list[ShoppingList]:
        data = await self.api.get("/shopping-lists")
        return [ShoppingList.model_validate(lst) for lst in data]

    # =========================================================================
    # Lookups
    # =========================================================================

    def _list_index_of_item(self, item_id: str) -> int | None:
        for index, lst in enumerate(self.items):
            if find_index(lst.items, item_id) is not None:
                return index
        return None

    def find_item(self, item_id: str) -> ShoppingListItem | None:
        list_index = self._list_index_of_item(item_id)
        if list_index is None:
            return None
        lst = self.items[list_index]
        return lst.items[find_index(lst.items, item_id)]

    def _find_deep(self, entity_id: str):
        return self.get(entity_id) or self.find_item(entity_id)

    def _replace_item(self, item_id: str, item: ShoppingListItem) -> bool:
        """Swap an item in place inside whichever list holds it."""
        list_index = self._list_index_of_item(item_id)
        if list_index is None:
            return False
        lst = self.items[list_index]
        items = list(lst.items)
        items[find_index(items, item_id)] = item
        self.items[list_index] = lst.model_copy(update={"items": items})
        return True

    # =========================================================================
    # Lists
    # =========================================================================

    async def create_shopping_list(self, data: ShoppingListCreate) -> ShoppingList:
        order = data.order
        if order is None:
            order = len(self.items) + 1
        optimistic = ShoppingList(id=new_temp_id(), name=data.name, order=order)
        return await self._create(
            optimistic,
            lambda: self.api.post("/shopping-lists", json=data.model_dump(mode="json")),
            "Failed to create shopping list",
        )

    async def update_shopping_list(self, list_id: str, patch: ShoppingListPatch) -> ShoppingList:
        return await self._update(
            list_id,
            patch,
            lambda: self.api.put(
                f"/shopping-lists/{list_id}",
                json=patch.model_dump(mode="json", exclude_unset=True),
            ),
            "Failed to update shopping list",
        )

    async def delete_shopping_list(self, list_id: str) -> bool:
        return await self._delete(
            list_id,
            lambda: self.api.delete(f"/shopping-lists/{list_id}"),
            "Failed to delete shopping list",
        )

    async def reorder_shopping_list(self, list_id: str, direction: Direction) -> bool:
        return await self._swap_adjacent(
            self.items,
            list_id,
            direction,
            lambda ids: self.api.put("/shopping-lists/reorder", json={"list_ids": ids}),
            "Failed to reorder shopping list",
        )

    # =========================================================================
    # Items
    # =========================================================================

    async def add_item(self, list_id: str, data: ShoppingItemCreate) -> ShoppingListItem:
        temp_id = new_temp_id()

        def apply() -> None:
            index = find_index(self.items, list_id)
            if index is None:
                return
            lst = self.items[index]
            orders = [i.order for i in lst.items]
            optimistic = ShoppingListItem(
                id=temp_id,
                shopping_list_id=list_id,
                **data.model_dump(exclude={"order"}),
                order=data.order if data.order is not None else (max(orders) + 1 if orders else 0),
            )
            self.items[index] = lst.model_copy(
                update={"items": [*lst.items, optimistic], "item_count": lst.item_count + 1}
            )

        result = await self._mutate(
            lambda: self.api.post(
                f"/shopping-lists/{list_id}/items", json=data.model_dump(mode="json")
            ),
            apply,
            "Failed to add item",
        )
        created = ShoppingListItem.model_validate(result)
        self._replace_item(temp_id, created)
        return created

    async def update_item(self, item_id: str, patch: ShoppingItemPatch) -> ShoppingListItem:
        def apply() -> None:
            item = self.find_item(item_id)
            if item is not None:
                self._replace_item(item_id, apply_patch(item, patch))

        result = await self._mutate(
            lambda: self.api.put(
                f"/shopping-list-items/{item_id}",
                json=patch.model_dump(mode="json", exclude_unset=True),
            ),
            apply,
            "Failed to update item",
        )
        updated = ShoppingListItem.model_validate(result)
        self._replace_item(item_id, updated)
        return updated

    async def toggle_item(self, item_id: str, checked: bool) -> ShoppingListItem:
        return await self.update_item(item_id, ShoppingItemPatch(checked=checked))

    async def delete_item(self, item_id: str) -> bool:
        def apply() -> None:
            list_index = self._list_index_of_item(item_id)
            if list_index is None:
                return
            lst = self.items[list_index]
            items = [i for i in lst.items if i.id != item_id]
            self.items[list_index] = lst.model_copy(
                update={"items": items, "item_count": max(0, lst.item_count - 1)}
            )

        await self._mutate(
            lambda: self.api.delete(f"/shopping-list-items/{item_id}"),
            apply,
            "Failed to delete item",
        )
        return True

    async def reorder_item(self, item_id: str, direction: Direction) -> bool:
        """Swap an item with its neighbour in the same list."""
        list_index = self._list_index_of_item(item_id)
        if list_index is None:
            return False
        return await self._swap_adjacent(
            self.items[list_index].items,
            item_id,
            direction,
            lambda ids: self.api.put("/shopping-list-items/reorder", json={"item_ids": ids}),
            "Failed to reorder item",
        )

    async def clear_completed_items(self, list_id: str, item_ids: list[str] | None = None) -> int:
        """Delete checked items (or exactly *item_ids*). Returns how many were removed."""
        index = find_index(self.items, list_id)
        if item_ids is not None:
            doomed = list(dict.fromkeys(item_ids))
        elif index is not None:
            doomed = [i.id for i in self.items[index].items if i.checked]
        else:
            doomed = []
        if not doomed:
            return 0

        def apply() -> None:
            i = find_index(self.items, list_id)
            if i is None:
                return
            lst = self.items[i]
            items = [item for item in lst.items if item.id not in doomed]
            removed = len(lst.items) - len(items)
            self.items[i] = lst.model_copy(
                update={"items": items, "item_count": max(0, lst.item_count - removed)}
            )

        await self._mutate(
            lambda: self.api.post(
                f"/shopping-lists/{list_id}/items/clear-completed",
                json={"completed_item_ids": doomed},
            ),
            apply,
            "Failed to clear completed items",
        )
        return len(doomed)
