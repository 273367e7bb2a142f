"""
Event Repository
Read-only access to journaled events
"""

from datetime import datetime
from typing import List

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.domain.models import Event, EventType
from app.infrastructure.db.models import EventModel
from app.utils.time import to_naive_utc


class EventRepository:
    """Repository for Event data access"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def fetch_recent_events(self, life_area_id: str, since: datetime) -> List[Event]:
        """
        Events that occurred at or after `since`, most-recent-first
        """
        result = await self.session.execute(
            select(EventModel)
            .where(
                EventModel.life_area_id == life_area_id,
                EventModel.occurred_at >= to_naive_utc(since),
            )
            .order_by(EventModel.occurred_at.desc(), EventModel.id.desc())
        )
        return [self._to_domain(m) for m in result.scalars().all()]

    async def fetch_events_between(
        self,
        life_area_id: str,
        start: datetime,
        end: datetime,
    ) -> List[Event]:
        """
        Events with start <= occurred_at < end, most-recent-first
        """
        result = await self.session.execute(
            select(EventModel)
            .where(
                EventModel.life_area_id == life_area_id,
                EventModel.occurred_at >= to_naive_utc(start),
                EventModel.occurred_at < to_naive_utc(end),
            )
            .order_by(EventModel.occurred_at.desc(), EventModel.id.desc())
        )
        return [self._to_domain(m) for m in result.scalars().all()]

    async def fetch_events_in_window(self, start: datetime, end: datetime) -> List[Event]:
        """
        Events of every life area with start <= occurred_at <= end, oldest first
        """
        result = await self.session.execute(
            select(EventModel)
            .where(
                EventModel.occurred_at >= to_naive_utc(start),
                EventModel.occurred_at <= to_naive_utc(end),
            )
            .order_by(EventModel.occurred_at.asc(), EventModel.id.asc())
        )
        return [self._to_domain(m) for m in result.scalars().all()]

    @staticmethod
    def _to_domain(model: EventModel) -> Event:
        return Event(
            id=model.id,
            life_area_id=model.life_area_id,
            type=EventType(model.type.value),
            emotional_charge=int(model.emotional_charge),
            occurred_at=model.occurred_at,
            title=model.title or "",
            description=model.description or "",
            tags=tuple(model.tags or ()),
        )
