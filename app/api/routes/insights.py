"""
Insight API Routes
Recognized patterns and weekly summaries
"""

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession

from app.domain.models import InsightType
from app.infrastructure.db.database import get_db
from app.infrastructure.db.repositories.insight_repository import InsightRepository

router = APIRouter()


class InsightResponse(BaseModel):
    id: int
    type: str
    category: str
    title: str
    description: str
    confidence: float
    metadata: Dict[str, Any]
    source_event_ids: List[int]
    created_at: str


@router.get("", response_model=List[InsightResponse])
async def list_insights(
    limit: int = Query(20, ge=1, le=200),
    type: Optional[InsightType] = Query(None),
    db: AsyncSession = Depends(get_db),
):
    """Active insights, newest first"""
    insights = await InsightRepository(db).list_recent(limit=limit, insight_type=type)
    return [
        InsightResponse(
            id=i.id,
            type=i.type.value,
            category=i.category.value,
            title=i.title,
            description=i.description,
            confidence=i.confidence,
            metadata=i.metadata,
            source_event_ids=list(i.source_event_ids),
            created_at=i.created_at.isoformat(),
        )
        for i in insights
    ]
