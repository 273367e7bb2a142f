"""
SCHEDULER JOB DEFINITIONS

Jobs are thin wrappers that:
- Log execution
- Obtain the session factory
- Call existing services
- Enforce idempotency by service design

NO business logic is allowed here.
"""

import logging
from typing import Optional

from sqlalchemy.ext.asyncio import async_sessionmaker

from app.infrastructure.db.database import get_session_factory
from app.services.insight_service import PatternDetectionService, WeeklySummaryService
from app.services.recalculation_service import ScoreRecalculationService
from app.services.rollup_service import MonthlyRollupService

_logger = logging.getLogger(__name__)


# -------------------------------------------------------------------
# SCORE RECALCULATION JOB (DAILY)
# -------------------------------------------------------------------

async def run_score_recalculation_job(session_factory: Optional[async_sessionmaker] = None) -> Optional[list]:
    """
    Recalculate fulfillment scores for all active life areas.
    """
    _logger.info("🔄 Running score recalculation job")

    try:
        service = ScoreRecalculationService(session_factory or get_session_factory())
        return await service.recalculate_all()
    except Exception as exc:
        _logger.warning(f"Score recalculation job failed safely: {exc}")
        return None


# -------------------------------------------------------------------
# MONTHLY ROLLUP JOB
# -------------------------------------------------------------------

async def run_monthly_rollup_job(session_factory: Optional[async_sessionmaker] = None) -> Optional[dict]:
    """
    Snapshot last month's metrics for every active life area.
    """
    _logger.info("📊 Running monthly rollup job")

    try:
        service = MonthlyRollupService(session_factory or get_session_factory())
        return await service.run()
    except Exception as exc:
        _logger.warning(f"Monthly rollup job failed safely: {exc}")
        return None


# -------------------------------------------------------------------
# PATTERN DETECTION JOB (DAILY)
# -------------------------------------------------------------------

async def run_pattern_detection_job(session_factory: Optional[async_sessionmaker] = None) -> Optional[dict]:
    """
    Detect patterns over the trailing event window and store insights.
    """
    _logger.info("🧭 Running pattern detection job")

    try:
        service = PatternDetectionService(session_factory or get_session_factory())
        return await service.run()
    except Exception as exc:
        _logger.warning(f"Pattern detection job failed safely: {exc}")
        return None


# -------------------------------------------------------------------
# WEEKLY SUMMARY JOB
# -------------------------------------------------------------------

async def run_weekly_summary_job(session_factory: Optional[async_sessionmaker] = None) -> Optional[dict]:
    """
    Store a seven-day reflection (event count, average charge, summary text).
    """
    _logger.info("🗓️ Running weekly summary job")

    try:
        service = WeeklySummaryService(session_factory or get_session_factory())
        return await service.run()
    except Exception as exc:
        _logger.warning(f"Weekly summary job failed safely: {exc}")
        return None
