"""Household data models.

Created: 2026-10-02

These models are shared by the server (store + REST routers) and the client
cache, so the same shapes travel over the wire in both directions:

- Shopping lists and their items
- Todo columns and todos
- Calendar events (local, non-integration events)
- Users and household settings (PIN holders)

Design notes:
- Pydantic models (like APIKeyRecord) so JSON persistence is model_dump()
- IDs are UUID4 strings; optimistic client entities use ``temp-`` ids
- Timestamps are ISO 8601 strings, as produced by ``now_iso()``
- Each mutable entity has a matching *Patch* model with every field optional;
  only explicitly-set fields are merged by ``apply_patch()``
"""

from __future__ import annotations

import types
import uuid
from datetime import UTC, datetime
from enum import Enum
from typing import Annotated, TypeVar, Union, get_args, get_origin

from pydantic import AfterValidator, BaseModel, Field

# ============================================================================
# Enums
# ============================================================================


class TodoPriority(str, Enum):
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    URGENT = "URGENT"


class UserRole(str, Enum):
    ADULT = "ADULT"
    CHILD = "CHILD"


# ============================================================================
# Helper Functions
# ============================================================================


def generate_id() -> str:
    """Generate a unique ID."""
    return str(uuid.uuid4())


def now_iso() -> str:
    """Get current UTC time as ISO 8601 string."""
    return datetime.now(UTC).isoformat()


def as_utc(value: datetime | None) -> datetime | None:
    """Timezone-aware copy of *value*; naive datetimes are taken as UTC."""
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


# Stored and compared as aware UTC so naive and aware inputs sort together
UtcDatetime = Annotated[datetime, AfterValidator(as_utc)]


# ============================================================================
# Entities
# ============================================================================


class ShoppingListItem(BaseModel):
    id: str = Field(default_factory=generate_id)
    shopping_list_id: str | None = None
    name: str = ""
    checked: bool = False
    order: int = 0
    notes: str | None = None
    quantity: float = 1
    unit: str | None = None
    label: str | None = None
    food: str | None = None
    source: str = "native"


class ShoppingList(BaseModel):
    id: str = Field(default_factory=generate_id)
    name: str
    order: int = 0
    items: list[ShoppingListItem] = Field(default_factory=list)
    item_count: int = 0
    created_at: str = Field(default_factory=now_iso)
    updated_at: str = Field(default_factory=now_iso)


class TodoColumn(BaseModel):
    id: str = Field(default_factory=generate_id)
    name: str
    order: int = 0
    is_default: bool = False
    user_id: str | None = None
    todo_count: int = 0
    created_at: str = Field(default_factory=now_iso)
    updated_at: str = Field(default_factory=now_iso)


class Todo(BaseModel):
    id: str = Field(default_factory=generate_id)
    title: str
    description: str | None = None
    priority: TodoPriority = TodoPriority.MEDIUM
    due_date: datetime | None = None
    completed: bool = False
    order: int = 0
    todo_column_id: str | None = None
    created_at: str = Field(default_factory=now_iso)
    updated_at: str = Field(default_factory=now_iso)


class EventUser(BaseModel):
    id: str
    name: str
    avatar: str | None = None
    color: str | None = None


class CalendarEvent(BaseModel):
    id: str = Field(default_factory=generate_id)
    title: str
    description: str | None = None
    start: UtcDatetime
    end: UtcDatetime
    all_day: bool = False
    color: str | list[str] | None = None
    location: str | None = None
    users: list[EventUser] = Field(default_factory=list)
    created_at: str = Field(default_factory=now_iso)
    updated_at: str = Field(default_factory=now_iso)


class User(BaseModel):
    """A household member. ``pin`` holds a hash or a legacy plaintext PIN."""

    id: str = Field(default_factory=generate_id)
    name: str
    color: str | None = None
    avatar: str | None = None
    role: UserRole = UserRole.ADULT
    pin: str | None = None
    order: int = 0
    created_at: str = Field(default_factory=now_iso)
    updated_at: str = Field(default_factory=now_iso)


class HouseholdSettings(BaseModel):
    id: str = "household"
    adult_pin: str | None = None
    updated_at: str = Field(default_factory=now_iso)


# ============================================================================
# Create inputs
# ============================================================================


class ShoppingListCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    order: int | None = None


class ShoppingItemCreate(BaseModel):
    name: str = Field(default="", max_length=200)
    checked: bool = False
    order: int | None = None
    notes: str | None = None
    quantity: float = 1
    unit: str | None = None
    label: str | None = None
    food: str | None = None


class TodoColumnCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    user_id: str | None = None
    is_default: bool = False


class TodoCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=200)
    description: str | None = None
    priority: TodoPriority = TodoPriority.MEDIUM
    due_date: datetime | None = None
    completed: bool = False
    order: int | None = None
    todo_column_id: str | None = None


class CalendarEventCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=200)
    description: str | None = None
    start: UtcDatetime
    end: UtcDatetime
    all_day: bool = False
    color: str | list[str] | None = None
    location: str | None = None
    users: list[EventUser] = Field(default_factory=list)


# ============================================================================
# Patches
# ============================================================================


class ShoppingListPatch(BaseModel):
    name: str | None = None


class ShoppingItemPatch(BaseModel):
    name: str | None = None
    checked: bool | None = None
    notes: str | None = None
    quantity: float | None = None
    unit: str | None = None
    label: str | None = None
    food: str | None = None


class TodoColumnPatch(BaseModel):
    name: str | None = None
    is_default: bool | None = None


class TodoPatch(BaseModel):
    title: str | None = None
    description: str | None = None
    priority: TodoPriority | None = None
    due_date: datetime | None = None
    completed: bool | None = None
    todo_column_id: str | None = None


class CalendarEventPatch(BaseModel):
    title: str | None = None
    description: str | None = None
    start: UtcDatetime | None = None
    end: UtcDatetime | None = None
    all_day: bool | None = None
    color: str | list[str] | None = None
    location: str | None = None
    users: list[EventUser] | None = None


E = TypeVar("E", bound=BaseModel)


def patch_fields(patch: BaseModel) -> dict:
    """Return only the fields the caller explicitly set on *patch*."""
    return {name: getattr(patch, name) for name in patch.model_fields_set}


def _nullable(annotation) -> bool:
    if get_origin(annotation) in (Union, types.UnionType):
        return type(None) in get_args(annotation)
    return annotation is None or annotation is type(None)


def apply_patch(entity: E, patch: BaseModel) -> E:
    """Shallow-merge *patch* into a copy of *entity*.

    Fields the patch does not name are left untouched, including fields
    explicitly absent from the patch model (ids, order, timestamps).
    An explicit null only clears fields the entity allows to be null;
    for required fields it is ignored.
    """
    fields = type(entity).model_fields
    updates = {
        k: v
        for k, v in patch_fields(patch).items()
        if k in fields and (v is not None or _nullable(fields[k].annotation))
    }
    return entity.model_copy(update=updates)
