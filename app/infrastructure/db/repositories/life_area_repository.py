"""
Life Area Repository
Reads life areas and persists their derived score/status
"""

from datetime import datetime
from typing import List, Optional

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.domain.models import LifeArea, LifeAreaStatus
from app.infrastructure.db.models import LifeAreaModel, LifeAreaStatusEnum


class LifeAreaRepository:
    """Repository for LifeArea data access"""

    def __init__(self, session: AsyncSession):
        """Initialize with database session"""
        self.session = session

    async def get(self, life_area_id: str) -> Optional[LifeArea]:
        result = await self.session.execute(
            select(LifeAreaModel).where(LifeAreaModel.id == life_area_id)
        )
        model = result.scalar_one_or_none()

        return self._to_domain(model) if model else None

    async def list_all_life_area_ids(self, active_only: bool = True) -> List[str]:
        """
        List life area identifiers

        Args:
            active_only: Skip areas flagged inactive

        Returns:
            Identifiers in stable (id) order
        """
        query = select(LifeAreaModel.id).order_by(LifeAreaModel.id)
        if active_only:
            query = query.where(LifeAreaModel.is_active.is_(True))

        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def list_all(self, active_only: bool = True) -> List[LifeArea]:
        query = select(LifeAreaModel).order_by(LifeAreaModel.id)
        if active_only:
            query = query.where(LifeAreaModel.is_active.is_(True))

        result = await self.session.execute(query)
        return [self._to_domain(m) for m in result.scalars().all()]

    async def persist_score(
        self,
        life_area_id: str,
        score: float,
        status: LifeAreaStatus,
        calculated_at: datetime,
    ) -> bool:
        """
        Overwrite current_score and status on a life area

        Returns:
            False when no life area matched
        """
        result = await self.session.execute(
            update(LifeAreaModel)
            .where(LifeAreaModel.id == life_area_id)
            .values(
                current_score=score,
                status=LifeAreaStatusEnum(status.value),
                last_calculated_at=calculated_at,
            )
        )
        await self.session.flush()
        return result.rowcount > 0

    @staticmethod
    def _to_domain(model: LifeAreaModel) -> LifeArea:
        """Convert ORM model to domain entity"""
        return LifeArea(
            id=model.id,
            name=model.name,
            current_score=float(model.current_score),
            status=LifeAreaStatus(model.status.value),
            is_active=bool(model.is_active),
            last_calculated_at=model.last_calculated_at,
        )
