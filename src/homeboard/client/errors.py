# Client-side API errors and user-facing messages.
# Created: 2026-10-05

from __future__ import annotations

from typing import Any

import httpx

__all__ = ["ApiError", "get_error_message"]

DEFAULT_ERROR_MESSAGE = "An unexpected error occurred"


class ApiError(Exception):
    """A non-2xx response from the homeboard API."""

    def __init__(
        self,
        status_code: int,
        message: str,
        data: Any = None,
        status_message: str | None = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.message = message
        self.data = data
        self.status_message = status_message

    @classmethod
    def from_response(cls, response: httpx.Response) -> ApiError:
        try:
            data = response.json()
        except ValueError:
            data = None
        message = _message_from_data(data) or response.reason_phrase or f"HTTP {response.status_code}"
        return cls(response.status_code, message, data=data, status_message=response.reason_phrase)

    def __repr__(self) -> str:
        return f"ApiError({self.status_code}, {self.message!r})"


def _message_from_data(data: Any) -> str | None:
    if not isinstance(data, dict):
        return None
    message = data.get("message")
    if isinstance(message, str) and message:
        return message
    detail = data.get("detail")
    if isinstance(detail, str) and detail:
        return detail
    if isinstance(detail, list):
        # FastAPI validation errors
        msgs = [d["msg"] for d in detail if isinstance(d, dict) and d.get("msg")]
        if msgs:
            return "; ".join(msgs)
    return None


def get_error_message(err: Any, fallback: str = DEFAULT_ERROR_MESSAGE) -> str:
    """Best human-readable message for *err*, else *fallback*."""
    if not err:
        return fallback
    if isinstance(err, str):
        return err

    from_data = _message_from_data(getattr(err, "data", None))
    if from_data:
        return from_data

    status_message = getattr(err, "status_message", None)
    if isinstance(status_message, str) and status_message:
        return status_message

    if isinstance(err, BaseException):
        text = str(err)
        if text:
            return text

    return fallback
