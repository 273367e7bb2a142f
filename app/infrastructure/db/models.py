"""
Database Models (SQLAlchemy ORM)
Life areas, the records that feed their fulfillment score, and insights
"""

from sqlalchemy import (
    Column, Integer, String, Float, Date, DateTime,
    Boolean, CheckConstraint, ForeignKey, Text, Enum as SQLEnum, Index, JSON, UniqueConstraint
)
from sqlalchemy.orm import relationship
import enum

from app.infrastructure.db.database import Base
from app.utils.time import now_utc_naive


# Enums
class EventTypeEnum(str, enum.Enum):
    BREAKTHROUGH = "BREAKTHROUGH"
    PROGRESS = "PROGRESS"
    SETBACK = "SETBACK"
    UPSET = "UPSET"
    MILESTONE = "MILESTONE"
    PATTERN = "PATTERN"
    LEARNING = "LEARNING"


class CommitmentStatusEnum(str, enum.Enum):
    ACTIVE = "ACTIVE"
    COMPLETED = "COMPLETED"
    INTEGRATED = "INTEGRATED"
    PAUSED = "PAUSED"
    ABANDONED = "ABANDONED"


class LifeAreaStatusEnum(str, enum.Enum):
    CRISIS = "CRISIS"
    STRUGGLING = "STRUGGLING"
    BALANCED = "BALANCED"
    THRIVING = "THRIVING"
    FLOURISHING = "FLOURISHING"


class InsightTypeEnum(str, enum.Enum):
    PATTERN_RECOGNIZED = "PATTERN_RECOGNIZED"
    WEEKLY_SUMMARY = "WEEKLY_SUMMARY"


class InsightCategoryEnum(str, enum.Enum):
    BEHAVIORAL = "BEHAVIORAL"
    EMOTIONAL = "EMOTIONAL"
    RELATIONAL = "RELATIONAL"
    SYSTEMIC = "SYSTEMIC"


class InsightStatusEnum(str, enum.Enum):
    ACTIVE = "ACTIVE"
    ARCHIVED = "ARCHIVED"


# Tables

class LifeAreaModel(Base):
    """Life area - current_score/status are derived, written by recalculation only"""
    __tablename__ = "life_area"

    id = Column(String(64), primary_key=True)
    name = Column(String(120), nullable=False)
    description = Column(Text, nullable=True)
    is_active = Column(Boolean, nullable=False, default=True, index=True)

    current_score = Column(Float, nullable=False, default=50.0)
    status = Column(SQLEnum(LifeAreaStatusEnum), nullable=False, default=LifeAreaStatusEnum.BALANCED)
    last_calculated_at = Column(DateTime, nullable=True)

    created_at = Column(DateTime, nullable=False, default=now_utc_naive)

    # Relationships
    events = relationship("EventModel", back_populates="life_area")
    commitments = relationship("CommitmentModel", back_populates="life_area")
    boundaries = relationship("BoundaryModel", back_populates="life_area")
    snapshots = relationship("MetricSnapshotModel", back_populates="life_area")


class EventModel(Base):
    """Journaled event - immutable once created"""
    __tablename__ = "event"

    id = Column(Integer, primary_key=True, autoincrement=True)
    life_area_id = Column(String(64), ForeignKey("life_area.id"), nullable=False)
    type = Column(SQLEnum(EventTypeEnum), nullable=False)
    emotional_charge = Column(Integer, nullable=False, default=0)
    title = Column(String(200), nullable=True)
    description = Column(Text, nullable=True)
    tags = Column(JSON, nullable=True)
    occurred_at = Column(DateTime, nullable=False)
    created_at = Column(DateTime, nullable=False, default=now_utc_naive)

    # Relationships
    life_area = relationship("LifeAreaModel", back_populates="events")

    # Indexes
    __table_args__ = (
        Index('ix_event_life_area_occurred', 'life_area_id', 'occurred_at'),
    )


class CommitmentModel(Base):
    """Commitment tracked against a life area"""
    __tablename__ = "commitment"

    id = Column(Integer, primary_key=True, autoincrement=True)
    life_area_id = Column(String(64), ForeignKey("life_area.id"), nullable=False, index=True)
    title = Column(String(200), nullable=False, default="")
    status = Column(SQLEnum(CommitmentStatusEnum), nullable=False, default=CommitmentStatusEnum.ACTIVE)
    created_at = Column(DateTime, nullable=False, default=now_utc_naive)

    # Relationships
    life_area = relationship("LifeAreaModel", back_populates="commitments")


class BoundaryModel(Base):
    """Personal boundary with cumulative violation count"""
    __tablename__ = "boundary"

    id = Column(Integer, primary_key=True, autoincrement=True)
    life_area_id = Column(String(64), ForeignKey("life_area.id"), nullable=False, index=True)
    title = Column(String(200), nullable=False, default="")
    violation_count = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime, nullable=False, default=now_utc_naive)

    # Relationships
    life_area = relationship("LifeAreaModel", back_populates="boundaries")

    __table_args__ = (
        CheckConstraint('violation_count >= 0', name='ck_boundary_violation_count_non_negative'),
    )


class MetricSnapshotModel(Base):
    """Monthly snapshot - insert only"""
    __tablename__ = "metric_snapshot"

    id = Column(Integer, primary_key=True, autoincrement=True)
    life_area_id = Column(String(64), ForeignKey("life_area.id"), nullable=False)
    snapshot_date = Column(Date, nullable=False, index=True)

    score = Column(Float, nullable=False)
    status = Column(SQLEnum(LifeAreaStatusEnum), nullable=False)
    event_count = Column(Integer, nullable=False)
    commitment_count = Column(Integer, nullable=False)
    commitment_completion_rate = Column(Float, nullable=False)
    avg_emotional_charge = Column(Float, nullable=False)

    created_at = Column(DateTime, nullable=False, default=now_utc_naive)

    # Relationships
    life_area = relationship("LifeAreaModel", back_populates="snapshots")

    __table_args__ = (
        UniqueConstraint('life_area_id', 'snapshot_date', name='uq_metric_snapshot_area_date'),
    )


class InsightModel(Base):
    """Recognized pattern or weekly summary - not tied to a single life area"""
    __tablename__ = "insight"

    id = Column(Integer, primary_key=True, autoincrement=True)
    type = Column(SQLEnum(InsightTypeEnum), nullable=False)
    category = Column(SQLEnum(InsightCategoryEnum), nullable=False)
    title = Column(String(200), nullable=False)
    description = Column(Text, nullable=False)
    confidence = Column(Float, nullable=False)
    details = Column(JSON, nullable=True)
    source_event_ids = Column(JSON, nullable=True)
    status = Column(SQLEnum(InsightStatusEnum), nullable=False, default=InsightStatusEnum.ACTIVE)

    created_at = Column(DateTime, nullable=False, default=now_utc_naive, index=True)

    __table_args__ = (
        Index('ix_insight_status_created', 'status', 'created_at'),
    )
