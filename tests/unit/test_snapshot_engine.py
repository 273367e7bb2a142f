from datetime import date, datetime

import pytest

from app.domain.models import (
    Commitment,
    CommitmentStatus,
    Event,
    EventType,
    LifeArea,
    LifeAreaStatus,
)
from app.domain.services.snapshot_engine import (
    average_emotional_charge,
    build_snapshot,
    completion_rate,
)


def _area(score: float = 72.5, status: LifeAreaStatus = LifeAreaStatus.THRIVING) -> LifeArea:
    return LifeArea(id="career", name="Career", current_score=score, status=status)


def test_empty_month_yields_zero_rates():
    snapshot = build_snapshot(_area(), date(2026, 9, 30), [], [])

    assert snapshot.event_count == 0
    assert snapshot.commitment_count == 0
    assert snapshot.commitment_completion_rate == 0.0
    assert snapshot.avg_emotional_charge == 0.0
    assert snapshot.month == "2026-09"


def test_snapshot_copies_score_and_aggregates_activity():
    events = [
        Event("career", EventType.PROGRESS, 4, datetime(2026, 9, 3)),
        Event("career", EventType.SETBACK, -1, datetime(2026, 9, 20)),
    ]
    commitments = [
        Commitment("career", CommitmentStatus.COMPLETED),
        Commitment("career", CommitmentStatus.INTEGRATED),
        Commitment("career", CommitmentStatus.ACTIVE),
        Commitment("career", CommitmentStatus.ABANDONED),
    ]

    snapshot = build_snapshot(_area(), date(2026, 9, 30), events, commitments)

    assert snapshot.score == 72.5
    assert snapshot.status == LifeAreaStatus.THRIVING
    assert snapshot.event_count == 2
    assert snapshot.avg_emotional_charge == pytest.approx(1.5)
    assert snapshot.commitment_completion_rate == pytest.approx(0.5)


def test_helpers_handle_empty_inputs():
    assert completion_rate([]) == 0.0
    assert average_emotional_charge([]) == 0.0
