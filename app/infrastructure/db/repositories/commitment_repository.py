"""
Commitment Repository
Read-only access to commitments
"""

from typing import List

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.domain.models import Commitment, CommitmentStatus
from app.infrastructure.db.models import CommitmentModel


class CommitmentRepository:
    """Repository for Commitment data access"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def fetch_commitments(self, life_area_id: str) -> List[Commitment]:
        result = await self.session.execute(
            select(CommitmentModel)
            .where(CommitmentModel.life_area_id == life_area_id)
            .order_by(CommitmentModel.id)
        )
        return [
            Commitment(
                id=m.id,
                life_area_id=m.life_area_id,
                status=CommitmentStatus(m.status.value),
                title=m.title or "",
            )
            for m in result.scalars().all()
        ]
