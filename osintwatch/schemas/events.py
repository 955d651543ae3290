"""
Event record data models.

These models are the raw material and the product of the enrichment
pipeline: records fetched from source adapters, the enriched events built
from them, and the ranked collections handed to the transport layer.

Hierarchy: RawRecord → EnrichedEvent → RankedEventSet
"""

from datetime import datetime, timezone
from typing import List, Optional
from pydantic import BaseModel, Field, validator

from .base import (
    EventCategory, Severity, SourceSystem, SignalCategory, TrendDirection,
    MilitaryBranch, Location, GLOBAL_LOCATION,
)

NO_DATA_AVAILABLE = "No Data Available"


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(value: Optional[datetime]) -> datetime:
    """None means now; naive values are taken as UTC."""
    if value is None:
        return utc_now()
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class RawRecord(BaseModel):
    """
    Normalized record produced by a source adapter.

    Immutable. Lives for one aggregation cycle. Missing text fields are
    coerced to "" so classification routes to the default branches.
    """
    title: str = ""
    summary: str = ""
    source: str = ""
    url: str = ""
    published_at: datetime = Field(default_factory=utc_now)
    source_system: SourceSystem = SourceSystem.RSS

    @validator("title", "summary", "source", "url", pre=True, always=True)
    def _none_to_empty(cls, v):
        if v is None:
            return ""
        return str(v)

    @validator("published_at", pre=True, always=True)
    def _default_now(cls, v):
        if v is None or v == "":
            return utc_now()
        return v

    @validator("published_at")
    def _ensure_utc(cls, v):
        # Naive datetimes from feeds are UTC
        return as_utc(v)

    class Config:
        use_enum_values = True
        frozen = True


class EnrichedEvent(BaseModel):
    """RawRecord plus the derived classification, location and relevance."""
    title: str
    summary: str = ""
    source: str = ""
    url: str = ""
    published_at: datetime
    source_system: SourceSystem = SourceSystem.RSS

    category: EventCategory = EventCategory.GEOPOLITICAL
    severity: Severity = Severity.LOW
    location: Location = GLOBAL_LOCATION
    relevance_score: int = 0
    relevance_category: str = "general"

    class Config:
        use_enum_values = True
        frozen = True

    @classmethod
    def from_raw(
        cls,
        raw: RawRecord,
        *,
        category: str,
        severity: str,
        location: Location,
        relevance_score: int = 0,
        relevance_category: str = "general",
    ) -> "EnrichedEvent":
        return cls(
            title=raw.title,
            summary=raw.summary,
            source=raw.source,
            url=raw.url,
            published_at=raw.published_at,
            source_system=raw.source_system,
            category=category,
            severity=severity,
            location=location,
            relevance_score=relevance_score,
            relevance_category=relevance_category,
        )


class RankedEventSet(BaseModel):
    """
    Ordered, deduplicated, filtered and truncated events for one endpoint.

    Rebuilt fully every cycle. An empty set is a valid result and carries
    the "No Data Available" marker instead of placeholder content.
    """
    events: List[EnrichedEvent] = Field(default_factory=list)
    last_updated: datetime = Field(default_factory=utc_now)
    total_count: int = 0
    data_source: str = NO_DATA_AVAILABLE
    sources_used: List[str] = Field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.events

    @classmethod
    def empty(cls, data_source: str = NO_DATA_AVAILABLE) -> "RankedEventSet":
        return cls(events=[], total_count=0, data_source=data_source, sources_used=[])


# ══════════════════════════════════════════════════════════════════════════════
# SIBLING MODULE OUTPUTS
# ══════════════════════════════════════════════════════════════════════════════

class Signal(BaseModel):
    """Early-warning signal derived from a GDELT article."""
    title: str
    url: str = ""
    source: str = ""
    category: SignalCategory = SignalCategory.GENERAL
    confidence: float = Field(ge=0.0, le=1.0, default=0.5)
    region: str = "Global"
    severity: Severity = Severity.LOW
    location: Location = GLOBAL_LOCATION
    published_at: datetime = Field(default_factory=utc_now)
    data_source: str = SourceSystem.GDELT.value

    class Config:
        use_enum_values = True


class SignalSet(BaseModel):
    signals: List[Signal] = Field(default_factory=list)
    last_updated: datetime = Field(default_factory=utc_now)
    total_count: int = 0
    data_source: str = "No Data"
    sources_used: List[str] = Field(default_factory=list)


class Prediction(BaseModel):
    """One regional forecast indicator."""
    id: str
    category: str
    title: str
    question: str
    indicator: str
    trend: TrendDirection = TrendDirection.STABLE
    probability: float = Field(ge=0.0, le=1.0)
    timeframe: str
    factors: List[str] = Field(default_factory=list)
    confidence: float = Field(ge=0.0, le=1.0)
    last_updated: datetime = Field(default_factory=utc_now)

    class Config:
        use_enum_values = True


class PredictionSet(BaseModel):
    predictions: List[Prediction] = Field(default_factory=list)
    last_updated: datetime = Field(default_factory=utc_now)
    events_analyzed: int = 0
    data_source: str = NO_DATA_AVAILABLE
    methodology: str = (
        "Keyword frequency comparison of the last 24 hours against the "
        "preceding 48 hours across OSINT event sources"
    )


class MilitaryZone(BaseModel):
    """Located military activity derived from one event."""
    name: str
    branch: MilitaryBranch = MilitaryBranch.COMBINED
    latitude: float
    longitude: float
    intensity: float = Field(ge=0.0, le=1.0)
    country: str = "XX"
    source: str = ""
    url: str = ""
    title: str = ""
    severity: Severity = Severity.LOW
    published_at: datetime = Field(default_factory=utc_now)

    class Config:
        use_enum_values = True


class MilitaryActivity(BaseModel):
    zones: List[MilitaryZone] = Field(default_factory=list)
    counts: dict = Field(default_factory=lambda: {b.value: 0 for b in MilitaryBranch})
    total_zones: int = 0
    last_updated: datetime = Field(default_factory=utc_now)
    data_source: str = "No Military Activity Data"
