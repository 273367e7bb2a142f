"""
FULFILLMENT SCORING ENGINE
Aggregate a life area's records into a bounded 0-100 score

RESPONSIBILITIES:
- Event momentum with linear recency decay
- Commitment integrity (completion ratio + active engagement)
- Capped boundary / upset penalties
- Capped breakthrough bonus
- Status classification from the final score

RULES (LOCKED):
❌ No database access
❌ No mutation of inputs
✅ Empty inputs contribute zero
✅ Final score clamped to [0, 100], one decimal
"""

from __future__ import annotations

import math
from typing import Iterable, List, Sequence

from app.domain.models import (
    Boundary,
    Commitment,
    CommitmentStatus,
    Event,
    EventType,
    LifeAreaStatus,
    ScoreBreakdown,
    ScoreResult,
)


BASE_SCORE = 50.0

MOMENTUM_LIMIT = 20.0
CHARGE_MULTIPLIER = 2
RECENCY_DECAY = 0.5

COMPLETION_WEIGHT = 10.0
ACTIVE_BONUS_PER_COMMITMENT = 2
ACTIVE_BONUS_CAP = 5

VIOLATION_PENALTY = 10
VIOLATION_PENALTY_CAP = 30

UPSET_PENALTY = 5
UPSET_PENALTY_CAP = 20

BREAKTHROUGH_BONUS = 15
BREAKTHROUGH_BONUS_CAP = 30

COMPLETED_STATUSES = frozenset({CommitmentStatus.COMPLETED, CommitmentStatus.INTEGRATED})
BREAKTHROUGH_TYPES = frozenset({EventType.BREAKTHROUGH, EventType.MILESTONE})

# Lower bound inclusive, checked top-down
STATUS_BANDS = (
    (90.0, LifeAreaStatus.FLOURISHING),
    (70.0, LifeAreaStatus.THRIVING),
    (40.0, LifeAreaStatus.BALANCED),
    (20.0, LifeAreaStatus.STRUGGLING),
)


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def _round_one_decimal(value: float) -> float:
    # Half-up, not banker's rounding
    return math.floor(value * 10 + 0.5) / 10


def order_most_recent_first(events: Iterable[Event]) -> List[Event]:
    """Stable sort by occurred_at, newest first."""
    return sorted(events, key=lambda e: e.occurred_at, reverse=True)


def event_momentum(events: Sequence[Event]) -> float:
    """
    Recency-weighted average of event scores, clamped to [-20, 20].

    The event at position i (0 = most recent) of n carries weight
    1 - (i/n) * 0.5, so weights fall linearly from 1.0 towards 0.5.

    Args:
        events: Events ordered most-recent-first

    Returns:
        Momentum contribution
    """
    n = len(events)
    if n == 0:
        return 0.0

    weighted_sum = 0.0
    total_weight = 0.0
    for i, event in enumerate(events):
        weight = 1 - (i / n) * RECENCY_DECAY
        weighted_sum += event.emotional_charge * CHARGE_MULTIPLIER * weight
        total_weight += weight

    return _clamp(weighted_sum / total_weight, -MOMENTUM_LIMIT, MOMENTUM_LIMIT)


def commitment_integrity(commitments: Sequence[Commitment]) -> float:
    """
    Completion ratio * 10 plus active engagement bonus (capped at 5).
    """
    total = len(commitments)
    if total == 0:
        return 0.0

    completed = sum(1 for c in commitments if c.status in COMPLETED_STATUSES)
    active = sum(1 for c in commitments if c.status == CommitmentStatus.ACTIVE)

    completion_ratio = completed / total
    active_bonus = min(active * ACTIVE_BONUS_PER_COMMITMENT, ACTIVE_BONUS_CAP)
    return completion_ratio * COMPLETION_WEIGHT + active_bonus


def boundary_penalty(boundaries: Sequence[Boundary]) -> float:
    total_violations = sum(b.violation_count for b in boundaries)
    return float(min(total_violations * VIOLATION_PENALTY, VIOLATION_PENALTY_CAP))


def upset_penalty(events: Sequence[Event]) -> float:
    upsets = sum(1 for e in events if e.type == EventType.UPSET)
    return float(min(upsets * UPSET_PENALTY, UPSET_PENALTY_CAP))


def breakthrough_bonus(events: Sequence[Event]) -> float:
    breakthroughs = sum(1 for e in events if e.type in BREAKTHROUGH_TYPES)
    return float(min(breakthroughs * BREAKTHROUGH_BONUS, BREAKTHROUGH_BONUS_CAP))


def classify_status(score: float) -> LifeAreaStatus:
    """Map a clamped score to its status band."""
    for lower_bound, status in STATUS_BANDS:
        if score >= lower_bound:
            return status
    return LifeAreaStatus.CRISIS


def calculate_score(
    life_area_id: str,
    events: Iterable[Event],
    commitments: Iterable[Commitment],
    boundaries: Iterable[Boundary],
) -> ScoreResult:
    """
    Compute the fulfillment score for one life area.

    Args:
        life_area_id: Life area being scored
        events: Events inside the trailing scoring window (any order)
        commitments: All commitments of the life area
        boundaries: All boundaries of the life area

    Returns:
        ScoreResult with clamped score, status and breakdown
    """
    ordered_events = order_most_recent_first(events)
    commitment_list = list(commitments)
    boundary_list = list(boundaries)

    breakdown = ScoreBreakdown(
        base=BASE_SCORE,
        event_momentum=event_momentum(ordered_events),
        commitment_integrity=commitment_integrity(commitment_list),
        boundary_penalty=boundary_penalty(boundary_list),
        upset_penalty=upset_penalty(ordered_events),
        breakthrough_bonus=breakthrough_bonus(ordered_events),
    )

    score = _round_one_decimal(_clamp(breakdown.raw_total, 0.0, 100.0))

    return ScoreResult(
        life_area_id=life_area_id,
        score=score,
        status=classify_status(score),
        breakdown=breakdown,
        event_count=len(ordered_events),
        commitment_count=len(commitment_list),
        boundary_count=len(boundary_list),
    )
