"""
SERVICE — MONTHLY METRIC ROLLUP

Writes one MetricSnapshot per active life area for the previous month.

• Idempotent (one snapshot per life area per month)
• Per-life-area failures are isolated
"""

import logging
from datetime import date, datetime, time, timedelta
from typing import Optional

from sqlalchemy.ext.asyncio import async_sessionmaker

from app.domain.services.snapshot_engine import build_snapshot
from app.infrastructure.db.repositories.commitment_repository import CommitmentRepository
from app.infrastructure.db.repositories.event_repository import EventRepository
from app.infrastructure.db.repositories.life_area_repository import LifeAreaRepository
from app.infrastructure.db.repositories.metric_snapshot_repository import MetricSnapshotRepository
from app.utils.time import now_utc_naive, previous_month_bounds

logger = logging.getLogger(__name__)


class MonthlyRollupService:
    """Snapshots life area metrics at month end"""

    def __init__(self, session_factory: async_sessionmaker) -> None:
        self.session_factory = session_factory

    async def run(self, today: Optional[date] = None) -> dict:
        """
        Create snapshots for the month preceding `today`.

        Returns a summary payload with created / skipped / failed life areas.
        """
        today = today or now_utc_naive().date()
        first_day, last_day = previous_month_bounds(today)
        month = first_day.strftime("%Y-%m")

        async with self.session_factory() as session:
            life_areas = await LifeAreaRepository(session).list_all()

        summary = {"month": month, "snapshot_date": last_day.isoformat(), "created": [], "skipped": [], "failed": []}

        start = datetime.combine(first_day, time.min)
        end = datetime.combine(last_day + timedelta(days=1), time.min)

        for life_area in life_areas:
            try:
                async with self.session_factory() as session:
                    snapshot_repo = MetricSnapshotRepository(session)
                    if await snapshot_repo.get_for_date(life_area.id, last_day):
                        summary["skipped"].append(life_area.id)
                        continue

                    month_events = await EventRepository(session).fetch_events_between(life_area.id, start, end)
                    commitments = await CommitmentRepository(session).fetch_commitments(life_area.id)

                    snapshot = build_snapshot(life_area, last_day, month_events, commitments)
                    await snapshot_repo.create(snapshot)
                    await session.commit()
                    summary["created"].append(life_area.id)
            except Exception as exc:
                logger.error(f"❌ Monthly rollup failed for life area {life_area.id}: {exc}")
                summary["failed"].append(life_area.id)

        logger.info(
            f"📊 Monthly rollup {month}: {len(summary['created'])} created, "
            f"{len(summary['skipped'])} skipped, {len(summary['failed'])} failed"
        )
        return summary
