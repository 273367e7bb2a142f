"""
SERVICE — FULFILLMENT SCORE RECALCULATION

Loads a life area's events, commitments and boundaries, runs the scoring
engine and persists the derived score/status.

• One session per life area (consistent read, single write)
• Per-life-area failures are isolated in batch runs
• Listing failures propagate
"""

import asyncio
import logging
import time
from datetime import datetime
from typing import Callable, List, Optional

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.config import settings
from app.domain.models import LifeAreaNotFoundError, RecalculationResult, ScoreResult
from app.domain.services.scoring_engine import calculate_score
from app.infrastructure.db.repositories.boundary_repository import BoundaryRepository
from app.infrastructure.db.repositories.commitment_repository import CommitmentRepository
from app.infrastructure.db.repositories.event_repository import EventRepository
from app.infrastructure.db.repositories.life_area_repository import LifeAreaRepository
from app.utils.time import now_utc_naive, window_start

logger = logging.getLogger(__name__)


class ScoreRecalculationService:
    """Drives the scoring engine against stored life areas"""

    def __init__(
        self,
        session_factory: async_sessionmaker,
        window_days: int = settings.SCORING_WINDOW_DAYS,
        concurrency: int = settings.RECALC_CONCURRENCY,
        clock: Callable[[], datetime] = now_utc_naive,
    ) -> None:
        if window_days < 1:
            raise ValueError("window_days must be at least 1")
        if concurrency < 1:
            raise ValueError("concurrency must be at least 1")
        self.session_factory = session_factory
        self.window_days = window_days
        self.concurrency = concurrency
        self.clock = clock

    async def preview_life_area(self, session: AsyncSession, life_area_id: str) -> ScoreResult:
        """
        Compute a score without persisting it.
        """
        if await LifeAreaRepository(session).get(life_area_id) is None:
            raise LifeAreaNotFoundError(life_area_id)
        return await self._score(session, life_area_id, self.clock())

    async def recalculate_life_area(self, session: AsyncSession, life_area_id: str) -> ScoreResult:
        """
        Compute and persist the score of one life area.
        The caller owns the transaction (commit/rollback).
        """
        now = self.clock()
        life_area_repo = LifeAreaRepository(session)
        if await life_area_repo.get(life_area_id) is None:
            raise LifeAreaNotFoundError(life_area_id)

        result = await self._score(session, life_area_id, now)

        persisted = await life_area_repo.persist_score(
            life_area_id,
            score=result.score,
            status=result.status,
            calculated_at=now,
        )
        if not persisted:
            raise LifeAreaNotFoundError(life_area_id)

        logger.info(
            f"Life area {life_area_id}: score={result.score} status={result.status.value} "
            f"events={result.event_count} commitments={result.commitment_count} "
            f"boundaries={result.boundary_count}"
        )
        return result

    async def recalculate_all(self, life_area_ids: Optional[List[str]] = None) -> List[RecalculationResult]:
        """
        Recalculate every active life area (or the given ids).

        Returns:
            One RecalculationResult per life area, in id order
        """
        if life_area_ids is None:
            async with self.session_factory() as session:
                life_area_ids = await LifeAreaRepository(session).list_all_life_area_ids()

        logger.info(f"🔄 Recalculating {len(life_area_ids)} life areas (concurrency={self.concurrency})")

        semaphore = asyncio.Semaphore(self.concurrency)
        results = await asyncio.gather(
            *(self._recalculate_isolated(life_area_id, semaphore) for life_area_id in life_area_ids)
        )

        succeeded = sum(1 for r in results if r.success)
        failed = len(results) - succeeded
        logger.info(f"✅ Recalculation complete: {succeeded} succeeded, {failed} failed")
        return list(results)

    async def _recalculate_isolated(
        self,
        life_area_id: str,
        semaphore: asyncio.Semaphore,
    ) -> RecalculationResult:
        async with semaphore:
            started = time.perf_counter()
            try:
                async with self.session_factory() as session:
                    result = await self.recalculate_life_area(session, life_area_id)
                    await session.commit()
            except Exception as exc:
                elapsed = (time.perf_counter() - started) * 1000
                logger.error(f"❌ Recalculation failed for life area {life_area_id}: {exc}")
                return RecalculationResult(
                    life_area_id=life_area_id,
                    success=False,
                    error=str(exc) or exc.__class__.__name__,
                    execution_ms=elapsed,
                )

            return RecalculationResult(
                life_area_id=life_area_id,
                success=True,
                score=result.score,
                status=result.status,
                execution_ms=(time.perf_counter() - started) * 1000,
                details=result.breakdown.to_dict(),
            )

    async def _score(self, session: AsyncSession, life_area_id: str, now: datetime) -> ScoreResult:
        since = window_start(now, self.window_days)
        events = await EventRepository(session).fetch_recent_events(life_area_id, since)
        commitments = await CommitmentRepository(session).fetch_commitments(life_area_id)
        boundaries = await BoundaryRepository(session).fetch_boundaries(life_area_id)
        return calculate_score(life_area_id, events, commitments, boundaries)
