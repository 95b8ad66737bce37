import logging
from typing import Any

from arq import cron

from rentbill.core.config import settings
from rentbill.core.database import SessionLocal
from rentbill.services.overdue_batch import BatchMode, OverdueBatchRunner
from rentbill.tasks import redis_settings

logger = logging.getLogger(__name__)


async def process_overdue_task(ctx: dict[str, Any], mode: str = BatchMode.ALL.value) -> int:
    """Background task: daily overdue charges and reminder calls.

    Runs once a day; operators may re-trigger it, repeat runs on the same
    day are no-ops for rentals already handled.

    Returns:
        Number of rentals processed (0 on a skipped day or a config error).
    """
    db = SessionLocal()
    try:
        summary = OverdueBatchRunner(db).run(BatchMode(mode))
        if summary.skipped:
            logger.info("Overdue batch skipped (rest day or holiday)")
        elif not summary.success:
            logger.error("Overdue batch failed: %s", summary.error)
        return summary.processed
    finally:
        db.close()


class WorkerSettings:
    functions = [
        process_overdue_task,
    ]
    cron_jobs = [
        cron(process_overdue_task, hour={settings.OVERDUE_RUN_HOUR}, minute={0}),  # daily
    ]
    redis_settings = redis_settings
