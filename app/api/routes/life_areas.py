"""
Life Area Scoring API Routes
Preview, recalculate and inspect fulfillment scores
"""

from fastapi import APIRouter, HTTPException, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from pydantic import BaseModel
from typing import Optional, List, Dict
import logging

from app.infrastructure.db.database import get_db, get_session_factory
from app.infrastructure.db.repositories.life_area_repository import LifeAreaRepository
from app.infrastructure.db.repositories.metric_snapshot_repository import MetricSnapshotRepository
from app.domain.models import LifeAreaNotFoundError, ScoreResult
from app.services.recalculation_service import ScoreRecalculationService

logger = logging.getLogger(__name__)
router = APIRouter()


# Response models
class ScoreResponse(BaseModel):
    life_area_id: str
    score: float
    status: str
    breakdown: Dict[str, float]
    event_count: int
    commitment_count: int
    boundary_count: int
    persisted: bool


class RecalculationItem(BaseModel):
    life_area_id: str
    success: bool
    score: Optional[float]
    status: Optional[str]
    error: Optional[str]
    execution_ms: float


class BatchRecalculationResponse(BaseModel):
    total: int
    succeeded: int
    failed: int
    results: List[RecalculationItem]


class SnapshotResponse(BaseModel):
    month: str
    snapshot_date: str
    score: float
    status: str
    event_count: int
    commitment_count: int
    commitment_completion_rate: float
    avg_emotional_charge: float


def get_recalculation_service(
    session_factory: async_sessionmaker = Depends(get_session_factory),
) -> ScoreRecalculationService:
    return ScoreRecalculationService(session_factory)


def _score_response(result: ScoreResult, persisted: bool) -> ScoreResponse:
    return ScoreResponse(
        life_area_id=result.life_area_id,
        score=result.score,
        status=result.status.value,
        breakdown=result.breakdown.to_dict(),
        event_count=result.event_count,
        commitment_count=result.commitment_count,
        boundary_count=result.boundary_count,
        persisted=persisted,
    )


@router.get("/{life_area_id}/score", response_model=ScoreResponse)
async def preview_score(
    life_area_id: str,
    db: AsyncSession = Depends(get_db),
    service: ScoreRecalculationService = Depends(get_recalculation_service),
):
    """Compute the current score without writing it"""
    try:
        result = await service.preview_life_area(db, life_area_id)
    except LifeAreaNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc))
    return _score_response(result, persisted=False)


@router.post("/{life_area_id}/recalculate", response_model=ScoreResponse)
async def recalculate_life_area(
    life_area_id: str,
    db: AsyncSession = Depends(get_db),
    service: ScoreRecalculationService = Depends(get_recalculation_service),
):
    """Recalculate and persist one life area"""
    try:
        result = await service.recalculate_life_area(db, life_area_id)
    except LifeAreaNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc))
    return _score_response(result, persisted=True)


@router.post("/recalculate", response_model=BatchRecalculationResponse)
async def recalculate_all(
    service: ScoreRecalculationService = Depends(get_recalculation_service),
):
    """Recalculate every active life area"""
    results = await service.recalculate_all()
    succeeded = sum(1 for r in results if r.success)

    return BatchRecalculationResponse(
        total=len(results),
        succeeded=succeeded,
        failed=len(results) - succeeded,
        results=[
            RecalculationItem(
                life_area_id=r.life_area_id,
                success=r.success,
                score=r.score,
                status=r.status.value if r.status else None,
                error=r.error,
                execution_ms=round(r.execution_ms, 2),
            )
            for r in results
        ],
    )


@router.get("/{life_area_id}/snapshots", response_model=List[SnapshotResponse])
async def list_snapshots(
    life_area_id: str,
    limit: int = Query(12, ge=1, le=120),
    db: AsyncSession = Depends(get_db),
):
    """Monthly snapshot history, newest first"""
    if await LifeAreaRepository(db).get(life_area_id) is None:
        raise HTTPException(status_code=404, detail=f"Life area not found: {life_area_id}")

    snapshots = await MetricSnapshotRepository(db).list_for_life_area(life_area_id, limit=limit)
    return [
        SnapshotResponse(
            month=s.month,
            snapshot_date=s.snapshot_date.isoformat(),
            score=s.score,
            status=s.status.value,
            event_count=s.event_count,
            commitment_count=s.commitment_count,
            commitment_completion_rate=s.commitment_completion_rate,
            avg_emotional_charge=s.avg_emotional_charge,
        )
        for s in snapshots
    ]
