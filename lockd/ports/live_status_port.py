"""Live status port — the always-visible "now / next" surface.

Called after every mutation that can change the current or next task.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from lockd.data.models import PlannerTask


class LiveStatusPort(Protocol):
    """Abstract live-status presenter used by core modules."""

    def announce(
        self, current: PlannerTask | None, next_task: PlannerTask | None,
    ) -> None: ...

    def clear(self, has_open_tasks_today: bool) -> None: ...
