"""Toast-style feedback for admin operations."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, List, Optional

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Notification:
    level: str  # success, error, info
    title: str
    detail: Optional[str] = None


class Notifier:
    def __init__(self):
        self.history: List[Notification] = []
        self._listeners: List[Callable[[Notification], None]] = []

    def subscribe(self, callback: Callable[[Notification], None]) -> None:
        self._listeners.append(callback)

    def notify(self, level: str, title: str, detail: Optional[str] = None) -> Notification:
        note = Notification(level, title, detail)
        self.history.append(note)
        logger.debug("[%s] %s %s", level, title, detail or "")
        for callback in self._listeners:
            callback(note)
        return note

    def success(self, title, detail=None):
        return self.notify("success", title, detail)

    def error(self, title, detail=None):
        return self.notify("error", title, detail)

    def info(self, title, detail=None):
        return self.notify("info", title, detail)

    @property
    def last(self) -> Optional[Notification]:
        return self.history[-1] if self.history else None
