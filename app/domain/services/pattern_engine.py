"""
PATTERN RECOGNITION ENGINE
Detect recurring patterns across a window of journaled events

RESPONSIBILITIES:
- Recurring themes (shared tags, repeated keywords)
- Emotional cycles (mood swings, prolonged positive / negative runs)
- Cross-area correlations (one area followed by another within a week)
- Per-area trends (first half vs second half of the window)
- Weekly reflection text

RULES (LOCKED):
❌ No database access
❌ No mutation of inputs
✅ Fewer than MIN_EVENTS events → no patterns
✅ Confidence always within [0, 1]
"""

from __future__ import annotations

import re
from collections import Counter
from datetime import datetime, timedelta
from typing import Dict, Iterable, List, Sequence, Tuple

from app.domain.models import (
    Event,
    InsightCategory,
    PatternAnalysis,
    PatternResult,
    PatternType,
    WeeklySummary,
)
from app.domain.services.snapshot_engine import average_emotional_charge


MIN_EVENTS = 3

THEME_MIN_OCCURRENCES = 3
TAG_CONFIDENCE_SCALE = 10
KEYWORD_CONFIDENCE_SCALE = 8
MAX_KEYWORDS = 10
KEYWORD_RE = re.compile(r"\b[a-z]{4,}\b")
STOP_WORDS = frozenset({
    "the", "a", "an", "and", "or", "but", "in", "on", "at", "to", "for",
    "of", "with", "by", "from", "up", "about", "into", "through", "during",
    "is", "was", "are", "were", "been", "be", "have", "has", "had", "do",
    "does", "did", "will", "would", "could", "should", "may", "might",
    "i", "me", "my", "we", "our", "you", "your", "it", "its", "this", "that",
})

# Charges beyond ±CHARGE_THRESHOLD count as clearly positive / negative
CHARGE_THRESHOLD = 2
CYCLE_MIN_EVENTS = 5
MIN_SWINGS = 3
SWING_CONFIDENCE_SCALE = 5
TONE_MIN_EVENTS = 5
TONE_CONFIDENCE = 0.8

CORRELATION_MIN_EVENTS = 6
CORRELATION_GAP = timedelta(days=7)
MIN_CORRELATIONS = 3
CORRELATION_CONFIDENCE_SCALE = 5

TREND_MIN_EVENTS = 4
TREND_THRESHOLD = 2
TREND_CONFIDENCE_SCALE = 5

CATEGORY_BY_PATTERN = {
    PatternType.RECURRING_THEME: InsightCategory.BEHAVIORAL,
    PatternType.EMOTIONAL_CYCLE: InsightCategory.EMOTIONAL,
    PatternType.CORRELATION: InsightCategory.RELATIONAL,
    PatternType.TREND: InsightCategory.SYSTEMIC,
}


def _chronological(events: Iterable[Event]) -> List[Event]:
    return sorted(events, key=lambda e: e.occurred_at)


def _unique(values: Iterable[str]) -> Tuple[str, ...]:
    return tuple(dict.fromkeys(values))


def _event_ids(events: Iterable[Event]) -> Tuple[int, ...]:
    return tuple(dict.fromkeys(e.id for e in events if e.id is not None))


def category_for(pattern_type: PatternType) -> InsightCategory:
    return CATEGORY_BY_PATTERN[pattern_type]


# ----------------------------------------------------------------------
# Recurring themes
# ----------------------------------------------------------------------

def extract_keywords(events: Sequence[Event]) -> List[str]:
    """
    Words of 4+ letters (stop words excluded) seen at least
    THEME_MIN_OCCURRENCES times, most frequent first, at most MAX_KEYWORDS.
    """
    counts: Counter = Counter()
    for event in events:
        text = f"{event.title} {event.description}".lower()
        counts.update(w for w in KEYWORD_RE.findall(text) if w not in STOP_WORDS)

    frequent = [(word, n) for word, n in counts.items() if n >= THEME_MIN_OCCURRENCES]
    frequent.sort(key=lambda item: item[1], reverse=True)
    return [word for word, _ in frequent[:MAX_KEYWORDS]]


def detect_recurring_themes(events: Sequence[Event], window_days: int = 90) -> List[PatternResult]:
    ordered = _chronological(events)
    patterns: List[PatternResult] = []

    tag_groups: Dict[str, List[Event]] = {}
    for event in ordered:
        for tag in dict.fromkeys(event.tags):
            tag_groups.setdefault(tag, []).append(event)

    for tag, tagged in tag_groups.items():
        if len(tagged) < THEME_MIN_OCCURRENCES:
            continue
        areas = _unique(e.life_area_id for e in tagged)
        patterns.append(
            PatternResult(
                type=PatternType.RECURRING_THEME,
                confidence=min(1.0, len(tagged) / TAG_CONFIDENCE_SCALE),
                title=f'Recurring pattern: "{tag}"',
                description=(
                    f"This theme appeared {len(tagged)} times across {len(areas)} "
                    f"life area(s) in the last {window_days} days."
                ),
                affected_areas=areas,
                evidence_event_ids=_event_ids(tagged),
                metadata={
                    "tag": tag,
                    "frequency": len(tagged),
                    "first_occurrence": tagged[0].occurred_at.isoformat(),
                    "last_occurrence": tagged[-1].occurred_at.isoformat(),
                },
            )
        )

    for keyword in extract_keywords(ordered):
        matching = [
            e for e in ordered
            if keyword in e.description.lower() or keyword in e.title.lower()
        ]
        if len(matching) < THEME_MIN_OCCURRENCES:
            continue
        patterns.append(
            PatternResult(
                type=PatternType.RECURRING_THEME,
                confidence=min(1.0, len(matching) / KEYWORD_CONFIDENCE_SCALE),
                title=f'Recurring topic: "{keyword}"',
                description=f'Events related to "{keyword}" occurred {len(matching)} times.',
                affected_areas=_unique(e.life_area_id for e in matching),
                evidence_event_ids=_event_ids(matching),
                metadata={"keyword": keyword, "frequency": len(matching)},
            )
        )

    return patterns


# ----------------------------------------------------------------------
# Emotional cycles
# ----------------------------------------------------------------------

def _is_swing(previous: int, current: int) -> bool:
    return (
        (previous > CHARGE_THRESHOLD and current < -CHARGE_THRESHOLD)
        or (previous < -CHARGE_THRESHOLD and current > CHARGE_THRESHOLD)
    )


def count_mood_swings(events: Sequence[Event]) -> int:
    ordered = _chronological(events)
    return sum(
        1 for prev, cur in zip(ordered, ordered[1:])
        if _is_swing(prev.emotional_charge, cur.emotional_charge)
    )


def detect_emotional_cycles(events: Sequence[Event], window_days: int = 90) -> List[PatternResult]:
    if len(events) < CYCLE_MIN_EVENTS:
        return []

    ordered = _chronological(events)
    patterns: List[PatternResult] = []

    swings = count_mood_swings(ordered)
    if swings >= MIN_SWINGS:
        patterns.append(
            PatternResult(
                type=PatternType.EMOTIONAL_CYCLE,
                confidence=min(1.0, swings / SWING_CONFIDENCE_SCALE),
                title="Emotional fluctuation detected",
                description=(
                    f"You experienced {swings} significant mood swings in the last "
                    f"{window_days} days. Consider exploring what triggers these emotional shifts."
                ),
                affected_areas=_unique(e.life_area_id for e in ordered),
                evidence_event_ids=_event_ids(ordered),
                metadata={
                    "swing_count": swings,
                    "average_charge": average_emotional_charge(ordered),
                },
            )
        )

    negative = [e for e in ordered if e.emotional_charge < -CHARGE_THRESHOLD]
    if len(negative) >= TONE_MIN_EVENTS:
        patterns.append(
            PatternResult(
                type=PatternType.EMOTIONAL_CYCLE,
                confidence=TONE_CONFIDENCE,
                title="Prolonged challenging period",
                description=(
                    f"{len(negative)} challenging events recorded. This may indicate areas "
                    f"needing support or boundaries that need reinforcement."
                ),
                affected_areas=_unique(e.life_area_id for e in negative),
                evidence_event_ids=_event_ids(negative),
                metadata={"negative_event_count": len(negative), "tone": "NEGATIVE"},
            )
        )

    positive = [e for e in ordered if e.emotional_charge > CHARGE_THRESHOLD]
    if len(positive) >= TONE_MIN_EVENTS:
        patterns.append(
            PatternResult(
                type=PatternType.EMOTIONAL_CYCLE,
                confidence=TONE_CONFIDENCE,
                title="Period of growth and breakthrough",
                description=(
                    f"{len(positive)} positive events recorded. You're experiencing momentum. "
                    f"Consider what's working and how to sustain it."
                ),
                affected_areas=_unique(e.life_area_id for e in positive),
                evidence_event_ids=_event_ids(positive),
                metadata={"positive_event_count": len(positive), "tone": "POSITIVE"},
            )
        )

    return patterns


# ----------------------------------------------------------------------
# Cross-area correlations
# ----------------------------------------------------------------------

def detect_cross_area_correlations(events: Sequence[Event]) -> List[PatternResult]:
    """
    Consecutive events in different areas, at most CORRELATION_GAP apart,
    counted per ordered (area_a -> area_b) pair.
    """
    if len(events) < CORRELATION_MIN_EVENTS:
        return []

    ordered = _chronological(events)
    links: Dict[Tuple[str, str], List[Event]] = {}
    for first, second in zip(ordered, ordered[1:]):
        if first.life_area_id == second.life_area_id:
            continue
        if second.occurred_at - first.occurred_at > CORRELATION_GAP:
            continue
        links.setdefault((first.life_area_id, second.life_area_id), []).extend((first, second))

    patterns: List[PatternResult] = []
    for (area_a, area_b), linked in links.items():
        count = len(linked) // 2
        if count < MIN_CORRELATIONS:
            continue
        patterns.append(
            PatternResult(
                type=PatternType.CORRELATION,
                confidence=min(1.0, count / CORRELATION_CONFIDENCE_SCALE),
                title="Cross-area connection detected",
                description=(
                    f"Events in one life area often precede events in another "
                    f"({count} instances). These areas may be interconnected."
                ),
                affected_areas=(area_a, area_b),
                evidence_event_ids=_event_ids(linked),
                metadata={"correlation": f"{area_a}->{area_b}", "frequency": count},
            )
        )
    return patterns


# ----------------------------------------------------------------------
# Trends
# ----------------------------------------------------------------------

def detect_trends(events: Sequence[Event]) -> List[PatternResult]:
    by_area: Dict[str, List[Event]] = {}
    for event in _chronological(events):
        by_area.setdefault(event.life_area_id, []).append(event)

    patterns: List[PatternResult] = []
    for life_area_id, area_events in by_area.items():
        if len(area_events) < TREND_MIN_EVENTS:
            continue

        midpoint = len(area_events) // 2
        avg_first = average_emotional_charge(area_events[:midpoint])
        avg_second = average_emotional_charge(area_events[midpoint:])
        difference = avg_second - avg_first
        if abs(difference) <= TREND_THRESHOLD:
            continue

        improving = difference > 0
        patterns.append(
            PatternResult(
                type=PatternType.TREND,
                confidence=min(1.0, abs(difference) / TREND_CONFIDENCE_SCALE),
                title="Upward trend detected" if improving else "Downward trend detected",
                description=(
                    "This life area shows improvement over time. Recent events are "
                    "more positive than earlier ones."
                    if improving else
                    "This life area shows decline over time. Recent events are more "
                    "challenging than earlier ones. Consider reviewing boundaries and commitments."
                ),
                affected_areas=(life_area_id,),
                evidence_event_ids=_event_ids(area_events),
                metadata={
                    "trend_direction": "IMPROVING" if improving else "DECLINING",
                    "avg_charge_first": avg_first,
                    "avg_charge_second": avg_second,
                    "difference": difference,
                },
            )
        )
    return patterns


# ----------------------------------------------------------------------
# Orchestration
# ----------------------------------------------------------------------

def detect_patterns(
    events: Sequence[Event],
    window_start: datetime,
    window_end: datetime,
) -> PatternAnalysis:
    """
    Run every detector over events already restricted to the window.

    Detector order is fixed: themes, emotional cycles, correlations, trends.
    """
    ordered = _chronological(events)
    if len(ordered) < MIN_EVENTS:
        return PatternAnalysis([], window_start, window_end, len(ordered))

    window_days = (window_end - window_start).days
    patterns = [
        *detect_recurring_themes(ordered, window_days),
        *detect_emotional_cycles(ordered, window_days),
        *detect_cross_area_correlations(ordered),
        *detect_trends(ordered),
    ]
    return PatternAnalysis(patterns, window_start, window_end, len(ordered))


def describe_week(event_count: int, insight_count: int, avg_charge: float) -> str:
    if avg_charge > CHARGE_THRESHOLD:
        mood, closing = "positive and uplifting", "Keep building on this momentum!"
    elif avg_charge < -CHARGE_THRESHOLD:
        mood, closing = (
            "challenging",
            "Consider reviewing your boundaries and commitments for areas that need support.",
        )
    else:
        mood, closing = (
            "balanced",
            "Continue tracking your progress and stay mindful of emerging patterns.",
        )

    events_word = "event" if event_count == 1 else "events"
    patterns_phrase = "pattern was" if insight_count == 1 else "patterns were"
    return (
        f"This week you logged {event_count} {events_word} with an overall {mood} tone. "
        f"{insight_count} {patterns_phrase} detected in your life areas. {closing}"
    )


def build_weekly_summary(
    events: Sequence[Event],
    insight_count: int,
    week_start: datetime,
    week_end: datetime,
) -> WeeklySummary:
    avg_charge = average_emotional_charge(events)
    return WeeklySummary(
        week_start=week_start,
        week_end=week_end,
        event_count=len(events),
        insight_count=insight_count,
        avg_emotional_charge=avg_charge,
        description=describe_week(len(events), insight_count, avg_charge),
    )
