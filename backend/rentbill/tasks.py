from typing import Any

from arq import create_pool
from arq.connections import ArqRedis, RedisSettings
from arq.jobs import Job

from rentbill.core.config import settings

redis_settings = RedisSettings.from_dsn(settings.REDIS_URL)


async def get_redis_pool() -> ArqRedis:
    return await create_pool(redis_settings)


async def enqueue_task(task_name: str, *args: Any, **kwargs: Any) -> Job:
    """Queue ``task_name`` on the worker, opening a short-lived pool for the call."""
    pool = await get_redis_pool()
    try:
        return await pool.enqueue_job(task_name, *args, **kwargs)  # type: ignore[return-value]
    finally:
        await pool.close()


async def enqueue_process_overdue(mode: str = "all") -> Job:
    """Queue an extra overdue batch run outside the daily schedule."""
    return await enqueue_task("process_overdue_task", mode)
