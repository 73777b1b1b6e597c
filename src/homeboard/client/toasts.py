# AlertToasts — user-visible notifications raised by client operations.
# Created: 2026-10-05

from __future__ import annotations

import logging
from collections import deque
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum

from homeboard.models import now_iso

logger = logging.getLogger(__name__)


class ToastLevel(str, Enum):
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"


@dataclass
class Toast:
    level: ToastLevel
    title: str
    message: str
    created_at: str = field(default_factory=now_iso)


_LOG_LEVELS = {
    ToastLevel.SUCCESS: logging.INFO,
    ToastLevel.WARNING: logging.WARNING,
    ToastLevel.ERROR: logging.ERROR,
}


class AlertToasts:
    """Keeps recent toasts and fans them out to subscribers (the UI)."""

    def __init__(self, max_history: int = 50):
        self.history: deque[Toast] = deque(maxlen=max_history)
        self._listeners: list[Callable[[Toast], None]] = []

    def subscribe(self, listener: Callable[[Toast], None]) -> None:
        self._listeners.append(listener)

    def show(self, level: ToastLevel, title: str, message: str) -> Toast:
        toast = Toast(level=level, title=title, message=message)
        self.history.append(toast)
        logger.log(_LOG_LEVELS[level], "%s: %s", title, message)
        for listener in self._listeners:
            try:
                listener(toast)
            except Exception:
                logger.exception("Toast listener failed")
        return toast

    def show_success(self, title: str, message: str) -> Toast:
        return self.show(ToastLevel.SUCCESS, title, message)

    def show_warning(self, title: str, message: str) -> Toast:
        return self.show(ToastLevel.WARNING, title, message)

    def show_error(self, title: str, message: str) -> Toast:
        return self.show(ToastLevel.ERROR, title, message)

    @property
    def errors(self) -> list[Toast]:
        return [t for t in self.history if t.level == ToastLevel.ERROR]
