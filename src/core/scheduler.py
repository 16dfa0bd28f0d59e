# src/core/scheduler.py
from __future__ import annotations

import asyncio
import logging
from typing import Callable, Optional
from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.cron import CronTrigger

from .dates import GameDates, get_game_date

logger = logging.getLogger(__name__)

_scheduler: Optional[AsyncIOScheduler] = None

def _ensure_scheduler() -> AsyncIOScheduler:
    global _scheduler
    if _scheduler is None:
        _scheduler = AsyncIOScheduler()
        _scheduler.start()
    return _scheduler

async def _run_callback(coro_func: Callable) -> None:
    # Coroutine job: AsyncIOExecutor runs it on the scheduler's event loop
    result = coro_func()
    if asyncio.iscoroutine(result):
        await result

def rollover_trigger(dates: GameDates | None = None) -> CronTrigger:
    """Cron trigger firing at midnight of the reference zone (not the host zone)."""
    dates = dates or get_game_date()
    return CronTrigger(hour=0, minute=0, second=1, timezone=dates.tz)

def schedule_daily_rollover(coro_func: Callable, *, job_id: str = "daily_rollover", dates: GameDates | None = None):
    """
    Schedule a task to run right after each reference-zone midnight.
    - coro_func can be an async function or a callable returning a coroutine.
    - job_id ensures idempotency (replace_existing=True).
    """
    sched = _ensure_scheduler()
    job = sched.add_job(
        _run_callback,
        rollover_trigger(dates),
        args=[coro_func],
        id=job_id,
        replace_existing=True
    )
    logger.info("schedule_daily_rollover: job %s registered", job_id)
    return job
