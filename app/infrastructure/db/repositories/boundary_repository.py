"""
Boundary Repository
Read-only access to boundaries and their violation counters
"""

from typing import List

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.domain.models import Boundary
from app.infrastructure.db.models import BoundaryModel


class BoundaryRepository:
    """Repository for Boundary data access"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def fetch_boundaries(self, life_area_id: str) -> List[Boundary]:
        result = await self.session.execute(
            select(BoundaryModel)
            .where(BoundaryModel.life_area_id == life_area_id)
            .order_by(BoundaryModel.id)
        )
        return [
            Boundary(
                id=m.id,
                life_area_id=m.life_area_id,
                violation_count=int(m.violation_count),
                title=m.title or "",
            )
            for m in result.scalars().all()
        ]
