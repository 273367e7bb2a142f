"""
SCHEDULER BOOTSTRAP

Initializes and manages the APScheduler instance.
Scheduler is orchestration-only and contains no business logic.
"""

import logging
from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.cron import CronTrigger

import pytz

from app.config import settings
from app.scheduler.jobs import (
    run_score_recalculation_job,
    run_monthly_rollup_job,
    run_pattern_detection_job,
    run_weekly_summary_job,
)

_logger = logging.getLogger(__name__)

_SCHEDULER: AsyncIOScheduler | None = None


def build_scheduler() -> AsyncIOScheduler:
    """
    Create a scheduler with all jobs registered (not started).
    """
    timezone = pytz.timezone(settings.TIMEZONE)
    scheduler = AsyncIOScheduler(timezone=timezone)

    # ------------------------------------------------------------
    # SCORE RECALCULATION JOB
    # Daily @ RECALC_HOUR:RECALC_MINUTE
    # ------------------------------------------------------------
    scheduler.add_job(
        run_score_recalculation_job,
        trigger=CronTrigger(hour=settings.RECALC_HOUR, minute=settings.RECALC_MINUTE, timezone=timezone),
        id="score_recalculation_job",
        replace_existing=True,
        max_instances=1,
        coalesce=True,
    )

    # ------------------------------------------------------------
    # MONTHLY ROLLUP JOB
    # 1st of month @ ROLLUP_HOUR:00
    # ------------------------------------------------------------
    scheduler.add_job(
        run_monthly_rollup_job,
        trigger=CronTrigger(day=1, hour=settings.ROLLUP_HOUR, minute=0, timezone=timezone),
        id="monthly_rollup_job",
        replace_existing=True,
        max_instances=1,
        coalesce=True,
    )

    # ------------------------------------------------------------
    # PATTERN DETECTION JOB
    # Daily @ PATTERN_HOUR:PATTERN_MINUTE
    # ------------------------------------------------------------
    scheduler.add_job(
        run_pattern_detection_job,
        trigger=CronTrigger(hour=settings.PATTERN_HOUR, minute=settings.PATTERN_MINUTE, timezone=timezone),
        id="pattern_detection_job",
        replace_existing=True,
        max_instances=1,
        coalesce=True,
    )

    # ------------------------------------------------------------
    # WEEKLY SUMMARY JOB
    # WEEKLY_SUMMARY_DAY @ WEEKLY_SUMMARY_HOUR:00
    # ------------------------------------------------------------
    scheduler.add_job(
        run_weekly_summary_job,
        trigger=CronTrigger(
            day_of_week=settings.WEEKLY_SUMMARY_DAY,
            hour=settings.WEEKLY_SUMMARY_HOUR,
            minute=0,
            timezone=timezone,
        ),
        id="weekly_summary_job",
        replace_existing=True,
        max_instances=1,
        coalesce=True,
    )

    return scheduler


def start_scheduler() -> AsyncIOScheduler:
    """
    Start the scheduler on the running event loop.
    """
    global _SCHEDULER

    if _SCHEDULER is not None:
        return _SCHEDULER

    scheduler = build_scheduler()
    scheduler.start()
    _SCHEDULER = scheduler

    _logger.info("✅ Scheduler started with all jobs registered")
    return scheduler


def shutdown_scheduler():
    """
    Shutdown the scheduler safely.
    """
    global _SCHEDULER

    if _SCHEDULER:
        _SCHEDULER.shutdown(wait=False)
        _SCHEDULER = None
        _logger.info("🛑 Scheduler shut down")
