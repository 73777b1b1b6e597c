"""homeboard dashboard client.

Cached collections kept in sync with the REST API through optimistic
updates: local state changes first and is rolled back if the server
rejects the change.

``DashboardClient`` wires one shared cache and toast feed into every
entity client::

    async with DashboardClient() as board:
        await board.todos.fetch()
        await board.todos.create_todo(TodoCreate(title="Buy milk"))
"""

from __future__ import annotations

import httpx

from homeboard.client.api_client import ApiClient
from homeboard.client.cache import ResourceCache
from homeboard.client.calendar_events import CalendarEventsClient
from homeboard.client.errors import ApiError, get_error_message
from homeboard.client.optimistic import perform_optimistic_update
from homeboard.client.pin import PinClient
from homeboard.client.shopping import ShoppingListsClient
from homeboard.client.todo_columns import TodoColumnsClient
from homeboard.client.todos import TodosClient
from homeboard.client.toasts import AlertToasts, Toast, ToastLevel

__all__ = [
    "AlertToasts",
    "ApiClient",
    "ApiError",
    "CalendarEventsClient",
    "DashboardClient",
    "PinClient",
    "ResourceCache",
    "ShoppingListsClient",
    "Toast",
    "ToastLevel",
    "TodoColumnsClient",
    "TodosClient",
    "get_error_message",
    "perform_optimistic_update",
]


class DashboardClient:
    def __init__(
        self,
        base_url: str | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
        api: ApiClient | None = None,
    ):
        self.api = api or ApiClient(base_url, transport=transport)
        self.cache = ResourceCache()
        self.toasts = AlertToasts()
        self.shopping = ShoppingListsClient(self.api, self.cache, self.toasts)
        self.todos = TodosClient(self.api, self.cache, self.toasts)
        self.todo_columns = TodoColumnsClient(self.api, self.cache, self.toasts)
        self.calendar = CalendarEventsClient(self.api, self.cache, self.toasts)
        self.pin = PinClient(self.api, self.toasts)

    async def __aenter__(self) -> DashboardClient:
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.api.aclose()
