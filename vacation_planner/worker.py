"""Worker process for the daily absence conflict check.

Runs an asyncio loop that cancels upcoming vacations overlapping long
absences, once per configured interval.
"""

from __future__ import annotations

import asyncio
import logging
from datetime import date

from vacation_planner.config import get_settings
from vacation_planner.db import get_session_factory
from vacation_planner.services.reconciliation import reconcile_conflicts

logger = logging.getLogger(__name__)


async def run_reconciliation_once(today: date | None = None) -> int:
    """Run one reconciliation pass in its own session. Returns the cancelled count."""
    if today is None:
        today = date.today()
    session_factory = get_session_factory()
    async with session_factory() as session:
        result = await reconcile_conflicts(session, today=today)
    logger.info("Reconciliation run for %s: cancelled=%d", today, result.cancelled_count)
    return result.cancelled_count


async def run_reconciliation_loop() -> None:
    """Main worker loop. A failed run is logged and retried on the next tick."""
    settings = get_settings()
    logger.info("Reconciliation worker started, interval=%ds", settings.reconcile_interval_seconds)

    while True:
        try:
            await run_reconciliation_once()
        except Exception:
            logger.exception("Reconciliation run failed")

        await asyncio.sleep(settings.reconcile_interval_seconds)


def main() -> None:
    """Entry point for the worker process."""
    settings = get_settings()
    logging.basicConfig(level=settings.log_level.upper(), format="%(asctime)s %(name)s %(levelname)s %(message)s")
    asyncio.run(run_reconciliation_loop())


if __name__ == "__main__":
    main()
