"""
Lockd — Entry Point.

`python main.py` builds the planner (with sample data unless disabled),
publishes today's live status and logs a snapshot of the week.
"""

import asyncio
import logging

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)

from lockd.app import build_planner
from lockd.core import formatting

logger = logging.getLogger("lockd")


async def run() -> None:
    planner = build_planner()
    store = planner.store
    planner.live_status.sync()

    for day in store.history()[:7]:
        logger.info(
            "%s: %d of %d complete (%s)",
            day.date.strftime("%a %d %b"), day.completed_tasks, day.total_tasks,
            formatting.percent(day.completion_rate),
        )

    for name in store.exercise_names():
        points = store.trend(name)
        if points:
            latest = points[-1]
            logger.info(
                "%s: top set %s, volume %s%s",
                name, formatting.weight(latest.top_set_weight),
                formatting.volume(latest.total_volume),
                " (PR)" if latest.is_personal_record else "",
            )

    if planner.milestones is not None:
        await planner.milestones.deliver_pending()


def main() -> None:
    asyncio.run(run())


if __name__ == "__main__":
    main()
