"""Celebration overlay timer.

Dismisses the transient celebration shown after a task is completed
once a short delay has passed. Re-triggering restarts the delay;
cancel() disarms the timer without calling on_dismiss.

Needs a running asyncio event loop.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Callable

logger = logging.getLogger(__name__)


class CelebrationTimer:
    def __init__(self, delay_seconds: float, on_dismiss: Callable[[], None]) -> None:
        self._delay = delay_seconds
        self._on_dismiss = on_dismiss
        self._handle: asyncio.TimerHandle | None = None

    @property
    def active(self) -> bool:
        return self._handle is not None

    def trigger(self) -> None:
        self.cancel()
        loop = asyncio.get_running_loop()
        self._handle = loop.call_later(self._delay, self._fire)

    def cancel(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def _fire(self) -> None:
        self._handle = None
        try:
            self._on_dismiss()
        except Exception:
            logger.exception("Celebration dismiss callback failed")
