"""Monthly metric snapshot builder for a single life area."""
from __future__ import annotations

from datetime import date
from typing import Sequence

from app.domain.models import Commitment, Event, LifeArea, MetricSnapshot
from app.domain.services.scoring_engine import COMPLETED_STATUSES


def completion_rate(commitments: Sequence[Commitment]) -> float:
    if not commitments:
        return 0.0
    completed = sum(1 for c in commitments if c.status in COMPLETED_STATUSES)
    return completed / len(commitments)


def average_emotional_charge(events: Sequence[Event]) -> float:
    if not events:
        return 0.0
    return sum(e.emotional_charge for e in events) / len(events)


def build_snapshot(
    life_area: LifeArea,
    snapshot_date: date,
    month_events: Sequence[Event],
    commitments: Sequence[Commitment],
) -> MetricSnapshot:
    """
    Freeze a life area's current score together with the month's activity.

    Notes:
    - month_events must already be restricted to the snapshot month.
    - Score and status are copied, not recomputed.
    """
    return MetricSnapshot(
        life_area_id=life_area.id,
        snapshot_date=snapshot_date,
        score=life_area.current_score,
        status=life_area.status,
        event_count=len(month_events),
        commitment_count=len(commitments),
        commitment_completion_rate=completion_rate(commitments),
        avg_emotional_charge=average_emotional_charge(month_events),
    )
