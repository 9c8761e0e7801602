"""Notification port — pushes milestone messages (achievements) to users.

Core modules depend on this protocol, never on a specific messaging provider.
"""

from __future__ import annotations

from typing import Protocol


class NotificationError(Exception):
    """Raised when a messaging provider cannot deliver a message."""


class NotificationPort(Protocol):
    """Abstract messaging interface used by the milestone notifier."""

    async def send_message(self, user_id: int, text: str) -> None: ...
