"""
SERVICE — PATTERN INSIGHTS

Runs the pattern engine over recent events and stores the results as
insights, plus a weekly reflection.

• At most one detection batch and one weekly summary per UTC day
• Data-access failures propagate (jobs decide how to report them)
"""

import logging
from datetime import datetime, time, timedelta
from typing import Callable

from sqlalchemy.ext.asyncio import async_sessionmaker

from app.config import settings
from app.domain.models import Insight, InsightCategory, InsightType
from app.domain.services.pattern_engine import build_weekly_summary, category_for, detect_patterns
from app.infrastructure.db.repositories.event_repository import EventRepository
from app.infrastructure.db.repositories.insight_repository import InsightRepository
from app.utils.time import now_utc_naive, window_start

logger = logging.getLogger(__name__)

WEEK = timedelta(days=7)
WEEKLY_SUMMARY_TITLE = "Weekly Reflection"


def _day_start(now: datetime) -> datetime:
    return datetime.combine(now.date(), time.min)


class PatternDetectionService:
    """Detects cross-area patterns and stores them as insights"""

    def __init__(
        self,
        session_factory: async_sessionmaker,
        window_days: int = settings.PATTERN_WINDOW_DAYS,
        clock: Callable[[], datetime] = now_utc_naive,
    ) -> None:
        if window_days < 1:
            raise ValueError("window_days must be at least 1")
        self.session_factory = session_factory
        self.window_days = window_days
        self.clock = clock

    async def run(self) -> dict:
        now = self.clock()
        start = window_start(now, self.window_days)

        async with self.session_factory() as session:
            insight_repo = InsightRepository(session)
            events = await EventRepository(session).fetch_events_in_window(start, now)
            analysis = detect_patterns(events, start, now)

            summary = {
                "window_start": start.isoformat(),
                "window_end": now.isoformat(),
                "total_events": analysis.total_events,
                "patterns_detected": analysis.total_patterns,
                "insights_created": 0,
                "skipped": False,
            }

            if await insight_repo.count_since(_day_start(now), InsightType.PATTERN_RECOGNIZED):
                logger.info("🔁 Pattern insights already recorded today, skipping")
                summary["skipped"] = True
                return summary

            for pattern in analysis.patterns:
                await insight_repo.create(
                    Insight(
                        type=InsightType.PATTERN_RECOGNIZED,
                        category=category_for(pattern.type),
                        title=pattern.title,
                        description=pattern.description,
                        confidence=pattern.confidence,
                        metadata={
                            **pattern.metadata,
                            "pattern_type": pattern.type.value,
                            "affected_areas": list(pattern.affected_areas),
                        },
                        source_event_ids=pattern.evidence_event_ids,
                        created_at=now,
                    )
                )
            await session.commit()

        summary["insights_created"] = analysis.total_patterns
        logger.info(
            f"🧭 Pattern detection: {analysis.total_patterns} patterns "
            f"from {analysis.total_events} events over {self.window_days} days"
        )
        return summary


class WeeklySummaryService:
    """Summarizes the last seven days of events and recognized patterns"""

    def __init__(
        self,
        session_factory: async_sessionmaker,
        clock: Callable[[], datetime] = now_utc_naive,
    ) -> None:
        self.session_factory = session_factory
        self.clock = clock

    async def run(self) -> dict:
        now = self.clock()
        week_start = now - WEEK

        async with self.session_factory() as session:
            insight_repo = InsightRepository(session)
            events = await EventRepository(session).fetch_events_in_window(week_start, now)
            pattern_count = await insight_repo.count_since(week_start, InsightType.PATTERN_RECOGNIZED)
            weekly = build_weekly_summary(events, pattern_count, week_start, now)

            payload = {
                "week_start": weekly.week_start.isoformat(),
                "week_end": weekly.week_end.isoformat(),
                "event_count": weekly.event_count,
                "insight_count": weekly.insight_count,
                "avg_emotional_charge": weekly.avg_emotional_charge,
            }

            created = not await insight_repo.count_since(_day_start(now), InsightType.WEEKLY_SUMMARY)
            if created:
                await insight_repo.create(
                    Insight(
                        type=InsightType.WEEKLY_SUMMARY,
                        category=InsightCategory.SYSTEMIC,
                        title=WEEKLY_SUMMARY_TITLE,
                        description=weekly.description,
                        confidence=1.0,
                        metadata=payload,
                        created_at=now,
                    )
                )
                await session.commit()

        logger.info(
            f"🗓️ Weekly summary: {weekly.event_count} events, "
            f"{weekly.insight_count} patterns, created={created}"
        )
        return {**payload, "description": weekly.description, "created": created}
