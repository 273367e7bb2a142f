"""
Insight Repository
Stores recognized patterns and weekly summaries
"""

from datetime import datetime
from typing import List, Optional

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.domain.models import Insight, InsightCategory, InsightStatus, InsightType
from app.infrastructure.db.models import (
    InsightCategoryEnum,
    InsightModel,
    InsightStatusEnum,
    InsightTypeEnum,
)


class InsightRepository:
    """Repository for Insight data access"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, insight: Insight) -> Insight:
        model = InsightModel(
            type=InsightTypeEnum(insight.type.value),
            category=InsightCategoryEnum(insight.category.value),
            title=insight.title,
            description=insight.description,
            confidence=insight.confidence,
            details=insight.metadata,
            source_event_ids=list(insight.source_event_ids),
            status=InsightStatusEnum(insight.status.value),
        )
        if insight.created_at is not None:
            model.created_at = insight.created_at
        self.session.add(model)
        await self.session.flush()
        return self._to_domain(model)

    async def count_since(self, since: datetime, insight_type: Optional[InsightType] = None) -> int:
        query = select(func.count(InsightModel.id)).where(
            InsightModel.status == InsightStatusEnum.ACTIVE,
            InsightModel.created_at >= since,
        )
        if insight_type is not None:
            query = query.where(InsightModel.type == InsightTypeEnum(insight_type.value))
        result = await self.session.execute(query)
        return int(result.scalar_one())

    async def list_recent(
        self,
        limit: int = 20,
        insight_type: Optional[InsightType] = None,
    ) -> List[Insight]:
        """Active insights, newest first (ties by confidence)"""
        query = select(InsightModel).where(InsightModel.status == InsightStatusEnum.ACTIVE)
        if insight_type is not None:
            query = query.where(InsightModel.type == InsightTypeEnum(insight_type.value))
        result = await self.session.execute(
            query.order_by(
                InsightModel.created_at.desc(),
                InsightModel.confidence.desc(),
                InsightModel.id.asc(),
            ).limit(limit)
        )
        return [self._to_domain(m) for m in result.scalars().all()]

    @staticmethod
    def _to_domain(model: InsightModel) -> Insight:
        return Insight(
            id=model.id,
            type=InsightType(model.type.value),
            category=InsightCategory(model.category.value),
            title=model.title,
            description=model.description,
            confidence=float(model.confidence),
            metadata=dict(model.details or {}),
            source_event_ids=tuple(model.source_event_ids or ()),
            status=InsightStatus(model.status.value),
            created_at=model.created_at,
        )
