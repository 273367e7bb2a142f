"""
Metric Snapshot Repository
Insert-only monthly snapshots
"""

from datetime import date
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.domain.models import LifeAreaStatus, MetricSnapshot
from app.infrastructure.db.models import LifeAreaStatusEnum, MetricSnapshotModel


class MetricSnapshotRepository:
    """Repository for MetricSnapshot data access"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, snapshot: MetricSnapshot) -> MetricSnapshot:
        model = MetricSnapshotModel(
            life_area_id=snapshot.life_area_id,
            snapshot_date=snapshot.snapshot_date,
            score=snapshot.score,
            status=LifeAreaStatusEnum(snapshot.status.value),
            event_count=snapshot.event_count,
            commitment_count=snapshot.commitment_count,
            commitment_completion_rate=snapshot.commitment_completion_rate,
            avg_emotional_charge=snapshot.avg_emotional_charge,
        )
        self.session.add(model)
        await self.session.flush()
        return self._to_domain(model)

    async def get_for_date(self, life_area_id: str, snapshot_date: date) -> Optional[MetricSnapshot]:
        result = await self.session.execute(
            select(MetricSnapshotModel).where(
                MetricSnapshotModel.life_area_id == life_area_id,
                MetricSnapshotModel.snapshot_date == snapshot_date,
            )
        )
        model = result.scalars().first()
        return self._to_domain(model) if model else None

    async def list_for_life_area(self, life_area_id: str, limit: int = 12) -> List[MetricSnapshot]:
        """Newest first"""
        result = await self.session.execute(
            select(MetricSnapshotModel)
            .where(MetricSnapshotModel.life_area_id == life_area_id)
            .order_by(MetricSnapshotModel.snapshot_date.desc())
            .limit(limit)
        )
        return [self._to_domain(m) for m in result.scalars().all()]

    @staticmethod
    def _to_domain(model: MetricSnapshotModel) -> MetricSnapshot:
        return MetricSnapshot(
            id=model.id,
            life_area_id=model.life_area_id,
            snapshot_date=model.snapshot_date,
            score=float(model.score),
            status=LifeAreaStatus(model.status.value),
            event_count=int(model.event_count),
            commitment_count=int(model.commitment_count),
            commitment_completion_rate=float(model.commitment_completion_rate),
            avg_emotional_charge=float(model.avg_emotional_charge),
            created_at=model.created_at,
        )
