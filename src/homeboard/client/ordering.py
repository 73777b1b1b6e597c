# Adjacent-swap reordering helpers.
# Created: 2026-10-05

from __future__ import annotations

from collections.abc import Sequence
from typing import Literal, Protocol

Direction = Literal["up", "down"]


class Ordered(Protocol):
    id: str
    order: int


def sort_by_order(group: Sequence[Ordered]) -> list[Ordered]:
    return sorted(group, key=lambda e: e.order or 0)


def find_adjacent_swap(
    group: Sequence[Ordered], entity_id: str, direction: Direction
) -> tuple[int, int] | None:
    """Positions (current, target) within the order-sorted *group*.

    None when the entity is unknown or already at the boundary it would move
    past.
    """
    if direction not in ("up", "down"):
        raise ValueError(f"Invalid direction: {direction!r}")

    ordered = sort_by_order(group)
    current = next((i for i, e in enumerate(ordered) if e.id == entity_id), None)
    if current is None:
        return None
    if direction == "up" and current > 0:
        return current, current - 1
    if direction == "down" and current < len(ordered) - 1:
        return current, current + 1
    return None


def swapped_ids(group: Sequence[Ordered], current: int, target: int) -> list[str]:
    """Ids of the order-sorted *group* with positions *current*/*target* exchanged."""
    ids = [e.id for e in sort_by_order(group)]
    ids[current], ids[target] = ids[target], ids[current]
    return ids
