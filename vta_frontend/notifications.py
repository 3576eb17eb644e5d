"""Transient user notifications raised by the workspace services."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Literal

NotificationLevel = Literal["info", "success", "error"]

LOGGER = logging.getLogger(__name__)


@dataclass(slots=True)
class Notification:
    """A toast-style message shown once to the user."""

    title: str
    description: str
    level: NotificationLevel = "info"
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


class NotificationCenter:
    """Collect notifications until the UI layer drains them."""

    def __init__(self) -> None:
        self._pending: list[Notification] = []

    def push(self, title: str, description: str, level: NotificationLevel = "info") -> Notification:
        notification = Notification(title=title, description=description, level=level)
        self._pending.append(notification)
        LOGGER.debug("Notification queued | level=%s title=%s", level, title)
        return notification

    def info(self, title: str, description: str) -> Notification:
        return self.push(title, description, "info")

    def success(self, title: str, description: str) -> Notification:
        return self.push(title, description, "success")

    def error(self, title: str, description: str) -> Notification:
        return self.push(title, description, "error")

    def drain(self) -> list[Notification]:
        """Return and forget every queued notification."""

        drained, self._pending = self._pending, []
        return drained


__all__ = ["Notification", "NotificationCenter", "NotificationLevel"]
