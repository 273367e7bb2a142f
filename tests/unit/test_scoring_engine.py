"""
Unit Tests for the fulfillment scoring engine

Each sub-score is exercised in isolation, then composed.
"""

from datetime import datetime, timedelta

import pytest

from app.domain.models import (
    Boundary,
    Commitment,
    CommitmentStatus,
    Event,
    EventType,
    LifeAreaStatus,
)
from app.domain.services.scoring_engine import (
    boundary_penalty,
    breakthrough_bonus,
    calculate_score,
    classify_status,
    commitment_integrity,
    event_momentum,
    order_most_recent_first,
    upset_penalty,
)


NOW = datetime(2026, 10, 1, 12, 0)
AREA = "health"


def _event(charge: int = 0, event_type: EventType = EventType.PROGRESS, days_ago: int = 0) -> Event:
    return Event(
        life_area_id=AREA,
        type=event_type,
        emotional_charge=charge,
        occurred_at=NOW - timedelta(days=days_ago),
    )


def _commitments(*statuses: CommitmentStatus):
    return [Commitment(life_area_id=AREA, status=s) for s in statuses]


def _boundaries(*violations: int):
    return [Boundary(life_area_id=AREA, violation_count=v) for v in violations]


# ----------------------------------------------------------------------
# Event momentum
# ----------------------------------------------------------------------

def test_momentum_zero_without_events():
    assert event_momentum([]) == 0.0


def test_momentum_single_max_positive_event():
    assert event_momentum([_event(5)]) == pytest.approx(10.0)


def test_momentum_recency_weighting():
    # weights: 1.0 for most recent, 1 - (1/2)*0.5 = 0.75 for the older one
    events = [_event(5, days_ago=1), _event(-5, days_ago=10)]
    expected = (10 * 1.0 + -10 * 0.75) / 1.75
    assert event_momentum(events) == pytest.approx(expected)


def test_momentum_clamped_to_upper_limit():
    assert event_momentum([_event(15)]) == 20.0


def test_momentum_clamped_to_lower_limit():
    assert event_momentum([_event(-12), _event(-15, days_ago=2)]) == -20.0


def test_unsorted_events_are_ordered_before_weighting():
    newest = _event(4, days_ago=0)
    middle = _event(-2, days_ago=5)
    oldest = _event(-5, days_ago=30)

    sorted_result = calculate_score(AREA, [newest, middle, oldest], [], [])
    shuffled_result = calculate_score(AREA, [oldest, newest, middle], [], [])

    assert order_most_recent_first([oldest, newest, middle]) == [newest, middle, oldest]
    assert shuffled_result == sorted_result


# ----------------------------------------------------------------------
# Commitment integrity
# ----------------------------------------------------------------------

def test_commitment_integrity_zero_without_commitments():
    assert commitment_integrity([]) == 0.0


def test_commitment_integrity_example_mix():
    commitments = _commitments(
        CommitmentStatus.COMPLETED,
        CommitmentStatus.ACTIVE,
        CommitmentStatus.ACTIVE,
    )
    assert commitment_integrity(commitments) == pytest.approx(10 / 3 + 4)


def test_commitment_active_bonus_is_capped():
    commitments = _commitments(*[CommitmentStatus.ACTIVE] * 5)
    assert commitment_integrity(commitments) == pytest.approx(5.0)


def test_integrated_counts_as_completed_and_unscored_statuses_dilute():
    commitments = _commitments(
        CommitmentStatus.INTEGRATED,
        CommitmentStatus.PAUSED,
        CommitmentStatus.ABANDONED,
        CommitmentStatus.COMPLETED,
    )
    assert commitment_integrity(commitments) == pytest.approx(5.0)


# ----------------------------------------------------------------------
# Penalties and bonus
# ----------------------------------------------------------------------

@pytest.mark.parametrize(
    "violations,expected",
    [
        ((), 0.0),
        ((1,), 10.0),
        ((2, 1), 30.0),
        ((1,) * 10, 30.0),
        ((0, 0, 0), 0.0),
    ],
)
def test_boundary_penalty(violations, expected):
    assert boundary_penalty(_boundaries(*violations)) == expected


@pytest.mark.parametrize("upsets,expected", [(0, 0.0), (1, 5.0), (4, 20.0), (5, 20.0), (6, 20.0)])
def test_upset_penalty_caps_at_twenty(upsets, expected):
    events = [_event(-1, EventType.UPSET, days_ago=i) for i in range(upsets)]
    events.append(_event(0, EventType.SETBACK))
    assert upset_penalty(events) == expected


def test_breakthrough_bonus_counts_breakthroughs_and_milestones():
    assert breakthrough_bonus([_event(3, EventType.BREAKTHROUGH)]) == 15.0
    assert breakthrough_bonus(
        [_event(3, EventType.BREAKTHROUGH), _event(2, EventType.MILESTONE, days_ago=3)]
    ) == 30.0
    assert breakthrough_bonus(
        [_event(1, EventType.MILESTONE, days_ago=i) for i in range(3)]
    ) == 30.0
    assert breakthrough_bonus([_event(5, EventType.LEARNING)]) == 0.0


# ----------------------------------------------------------------------
# Status classification
# ----------------------------------------------------------------------

@pytest.mark.parametrize(
    "score,status",
    [
        (0.0, LifeAreaStatus.CRISIS),
        (19.9, LifeAreaStatus.CRISIS),
        (20.0, LifeAreaStatus.STRUGGLING),
        (39.9, LifeAreaStatus.STRUGGLING),
        (40.0, LifeAreaStatus.BALANCED),
        (69.9, LifeAreaStatus.BALANCED),
        (70.0, LifeAreaStatus.THRIVING),
        (89.9, LifeAreaStatus.THRIVING),
        (90.0, LifeAreaStatus.FLOURISHING),
        (100.0, LifeAreaStatus.FLOURISHING),
    ],
)
def test_classify_status_band_edges(score, status):
    assert classify_status(score) == status


# ----------------------------------------------------------------------
# Composition
# ----------------------------------------------------------------------

def test_empty_life_area_scores_fifty_balanced():
    result = calculate_score(AREA, [], [], [])

    assert result.score == 50.0
    assert result.status == LifeAreaStatus.BALANCED
    assert result.breakdown.to_dict() == {
        "base": 50.0,
        "event_momentum": 0.0,
        "commitment_integrity": 0.0,
        "boundary_penalty": 0.0,
        "upset_penalty": 0.0,
        "breakthrough_bonus": 0.0,
    }


def test_single_positive_event_adds_ten():
    result = calculate_score(AREA, [_event(5)], [], [])
    assert result.breakdown.event_momentum == pytest.approx(10.0)
    assert result.score == 60.0
    assert result.event_count == 1


def test_commitment_example_scores_57_3():
    commitments = _commitments(
        CommitmentStatus.COMPLETED,
        CommitmentStatus.ACTIVE,
        CommitmentStatus.ACTIVE,
    )
    result = calculate_score(AREA, [], commitments, [])

    assert result.score == 57.3
    assert result.status == LifeAreaStatus.BALANCED
    assert result.commitment_count == 3


def test_rounding_is_half_up():
    # 1 of 8 completed -> 1.25; 51.25 rounds to 51.3, not 51.2
    commitments = _commitments(CommitmentStatus.COMPLETED, *[CommitmentStatus.PAUSED] * 7)
    assert calculate_score(AREA, [], commitments, []).score == 51.3


def test_score_clamped_at_zero_under_heavy_penalties():
    events = [_event(-5, EventType.UPSET, days_ago=i) for i in range(10)]
    result = calculate_score(AREA, events, [], _boundaries(50, 50))

    assert result.breakdown.raw_total < 0
    assert result.score == 0.0
    assert result.status == LifeAreaStatus.CRISIS


def test_score_clamped_at_hundred_under_large_bonuses():
    events = [_event(10, EventType.BREAKTHROUGH, days_ago=i) for i in range(4)]
    commitments = _commitments(CommitmentStatus.COMPLETED, CommitmentStatus.ACTIVE, CommitmentStatus.ACTIVE)
    result = calculate_score(AREA, events, commitments, [])

    assert result.breakdown.raw_total > 100
    assert result.score == 100.0
    assert result.status == LifeAreaStatus.FLOURISHING


def test_recalculation_is_idempotent_and_does_not_mutate_inputs():
    events = [_event(-3, EventType.UPSET, days_ago=40), _event(4, EventType.MILESTONE, days_ago=2)]
    commitments = _commitments(CommitmentStatus.ACTIVE, CommitmentStatus.INTEGRATED)
    boundaries = _boundaries(1)
    events_before = list(events)

    first = calculate_score(AREA, events, commitments, boundaries)
    second = calculate_score(AREA, events, commitments, boundaries)

    assert first == second
    assert events == events_before


def test_composed_score_matches_breakdown():
    events = [
        _event(3, EventType.BREAKTHROUGH, days_ago=1),
        _event(-2, EventType.UPSET, days_ago=4),
    ]
    commitments = _commitments(CommitmentStatus.COMPLETED, CommitmentStatus.ABANDONED)
    result = calculate_score(AREA, events, commitments, _boundaries(1))

    # momentum: (6*1.0 + -4*0.75) / 1.75
    momentum = (6 - 3) / 1.75
    expected = 50 + momentum + 5 - 10 - 5 + 15
    assert result.breakdown.event_momentum == pytest.approx(momentum)
    assert result.score == pytest.approx(round(expected, 1))
    assert result.status == LifeAreaStatus.BALANCED
