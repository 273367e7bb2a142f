"""
Domain Models Package
Export all domain entities
"""

from .entities import (
    # Enums
    CommitmentStatus,
    EventType,
    InsightCategory,
    InsightStatus,
    InsightType,
    LifeAreaStatus,
    PatternType,

    # Entities
    Boundary,
    Commitment,
    Event,
    Insight,
    LifeArea,
    MetricSnapshot,
    PatternAnalysis,
    PatternResult,
    RecalculationResult,
    ScoreBreakdown,
    ScoreResult,
    WeeklySummary,
)
from .errors import LifeAreaNotFoundError, ScoringError

__all__ = [
    # Enums
    "CommitmentStatus",
    "EventType",
    "InsightCategory",
    "InsightStatus",
    "InsightType",
    "LifeAreaStatus",
    "PatternType",

    # Entities
    "Boundary",
    "Commitment",
    "Event",
    "Insight",
    "LifeArea",
    "MetricSnapshot",
    "PatternAnalysis",
    "PatternResult",
    "RecalculationResult",
    "ScoreBreakdown",
    "ScoreResult",
    "WeeklySummary",

    # Errors
    "LifeAreaNotFoundError",
    "ScoringError",
]
