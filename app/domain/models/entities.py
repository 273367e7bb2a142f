"""
Domain Models - Entities
Pure domain objects with no infrastructure dependencies
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import List, Optional, Tuple


class EventType(str, Enum):
    """Category of a journaled life event"""
    BREAKTHROUGH = "BREAKTHROUGH"
    PROGRESS = "PROGRESS"
    SETBACK = "SETBACK"
    UPSET = "UPSET"
    MILESTONE = "MILESTONE"
    PATTERN = "PATTERN"
    LEARNING = "LEARNING"


class CommitmentStatus(str, Enum):
    """Lifecycle status of a commitment"""
    ACTIVE = "ACTIVE"
    COMPLETED = "COMPLETED"
    INTEGRATED = "INTEGRATED"
    PAUSED = "PAUSED"
    ABANDONED = "ABANDONED"


class LifeAreaStatus(str, Enum):
    """Derived wellbeing status of a life area"""
    CRISIS = "CRISIS"
    STRUGGLING = "STRUGGLING"
    BALANCED = "BALANCED"
    THRIVING = "THRIVING"
    FLOURISHING = "FLOURISHING"


class PatternType(str, Enum):
    """Kind of pattern found in an event window"""
    RECURRING_THEME = "RECURRING_THEME"
    EMOTIONAL_CYCLE = "EMOTIONAL_CYCLE"
    CORRELATION = "CORRELATION"
    TREND = "TREND"


class InsightType(str, Enum):
    PATTERN_RECOGNIZED = "PATTERN_RECOGNIZED"
    WEEKLY_SUMMARY = "WEEKLY_SUMMARY"


class InsightCategory(str, Enum):
    BEHAVIORAL = "BEHAVIORAL"
    EMOTIONAL = "EMOTIONAL"
    RELATIONAL = "RELATIONAL"
    SYSTEMIC = "SYSTEMIC"


class InsightStatus(str, Enum):
    ACTIVE = "ACTIVE"
    ARCHIVED = "ARCHIVED"


@dataclass(frozen=True)
class Event:
    """Timestamped occurrence in a life area - Immutable"""
    life_area_id: str
    type: EventType
    emotional_charge: int
    occurred_at: datetime
    id: Optional[int] = None
    title: str = ""
    description: str = ""
    tags: Tuple[str, ...] = ()

    def __post_init__(self):
        if not self.life_area_id:
            raise ValueError("Event life_area_id cannot be empty")


@dataclass(frozen=True)
class Commitment:
    """Tracked promise or goal"""
    life_area_id: str
    status: CommitmentStatus
    id: Optional[int] = None
    title: str = ""

    def __post_init__(self):
        if not self.life_area_id:
            raise ValueError("Commitment life_area_id cannot be empty")


@dataclass(frozen=True)
class Boundary:
    """Personal limit with cumulative violation counter"""
    life_area_id: str
    violation_count: int = 0
    id: Optional[int] = None
    title: str = ""

    def __post_init__(self):
        if not self.life_area_id:
            raise ValueError("Boundary life_area_id cannot be empty")
        if self.violation_count < 0:
            raise ValueError("Boundary violation_count cannot be negative")


@dataclass(frozen=True)
class LifeArea:
    """Aggregate root carrying the derived score and status"""
    id: str
    name: str
    current_score: float
    status: LifeAreaStatus
    is_active: bool = True
    last_calculated_at: Optional[datetime] = None

    def __post_init__(self):
        if not self.id:
            raise ValueError("LifeArea id cannot be empty")
        if not 0 <= self.current_score <= 100:
            raise ValueError(f"LifeArea score {self.current_score} outside [0, 100]")


@dataclass(frozen=True)
class ScoreBreakdown:
    """Named sub-scores that add up to the raw (unclamped) score"""
    base: float
    event_momentum: float
    commitment_integrity: float
    boundary_penalty: float
    upset_penalty: float
    breakthrough_bonus: float

    @property
    def raw_total(self) -> float:
        return (
            self.base
            + self.event_momentum
            + self.commitment_integrity
            - self.boundary_penalty
            - self.upset_penalty
            + self.breakthrough_bonus
        )

    def to_dict(self) -> dict:
        return {
            "base": self.base,
            "event_momentum": self.event_momentum,
            "commitment_integrity": self.commitment_integrity,
            "boundary_penalty": self.boundary_penalty,
            "upset_penalty": self.upset_penalty,
            "breakthrough_bonus": self.breakthrough_bonus,
        }


@dataclass(frozen=True)
class ScoreResult:
    """Outcome of one fulfillment score calculation"""
    life_area_id: str
    score: float
    status: LifeAreaStatus
    breakdown: ScoreBreakdown
    event_count: int = 0
    commitment_count: int = 0
    boundary_count: int = 0

    def __post_init__(self):
        if not 0 <= self.score <= 100:
            raise ValueError(f"Score {self.score} outside [0, 100]")


@dataclass(frozen=True)
class MetricSnapshot:
    """Monthly frozen copy of a life area's score and activity"""
    life_area_id: str
    snapshot_date: date
    score: float
    status: LifeAreaStatus
    event_count: int
    commitment_count: int
    commitment_completion_rate: float
    avg_emotional_charge: float
    id: Optional[int] = None
    created_at: Optional[datetime] = None

    def __post_init__(self):
        if not self.life_area_id:
            raise ValueError("Snapshot life_area_id cannot be empty")
        if not 0 <= self.score <= 100:
            raise ValueError(f"Snapshot score {self.score} outside [0, 100]")
        if not 0 <= self.commitment_completion_rate <= 1:
            raise ValueError("Completion rate must be within [0, 1]")

    @property
    def month(self) -> str:
        return self.snapshot_date.strftime("%Y-%m")


@dataclass
class RecalculationResult:
    """Per life area outcome of a batch job"""
    life_area_id: str
    success: bool
    score: Optional[float] = None
    status: Optional[LifeAreaStatus] = None
    error: Optional[str] = None
    execution_ms: float = 0.0
    details: dict = field(default_factory=dict)


@dataclass(frozen=True)
class PatternResult:
    """Pattern detected across an event window"""
    type: PatternType
    confidence: float
    title: str
    description: str
    affected_areas: Tuple[str, ...]
    evidence_event_ids: Tuple[int, ...] = ()
    metadata: dict = field(default_factory=dict, compare=False)

    def __post_init__(self):
        if not 0 <= self.confidence <= 1:
            raise ValueError(f"Confidence {self.confidence} outside [0, 1]")


@dataclass(frozen=True)
class PatternAnalysis:
    """Detected patterns plus the window they were drawn from"""
    patterns: List[PatternResult]
    window_start: datetime
    window_end: datetime
    total_events: int

    @property
    def total_patterns(self) -> int:
        return len(self.patterns)


@dataclass(frozen=True)
class WeeklySummary:
    """Seven-day reflection over events and recognized patterns"""
    week_start: datetime
    week_end: datetime
    event_count: int
    insight_count: int
    avg_emotional_charge: float
    description: str


@dataclass(frozen=True)
class Insight:
    """Stored pattern or summary"""
    type: InsightType
    category: InsightCategory
    title: str
    description: str
    confidence: float
    metadata: dict = field(default_factory=dict, compare=False)
    source_event_ids: Tuple[int, ...] = ()
    status: InsightStatus = InsightStatus.ACTIVE
    id: Optional[int] = None
    created_at: Optional[datetime] = None

    def __post_init__(self):
        if not self.title:
            raise ValueError("Insight title cannot be empty")
        if not 0 <= self.confidence <= 1:
            raise ValueError(f"Confidence {self.confidence} outside [0, 1]")
