"""
Schemas package: all data models for the OSINT enrichment pipeline.

Models are organized by domain in submodules:
  - base.py: Common enums and the Location value object
  - events.py: RawRecord, EnrichedEvent, RankedEventSet, signals, predictions
"""

# base.py: enums and value objects
from osintwatch.schemas.base import (
    EventCategory, Severity, SEVERITY_RANK, SourceSystem, SourceType, SourceTier,
    SignalCategory, TrendDirection, MilitaryBranch,
    Location, GLOBAL_LOCATION,
)

# events.py: record models
from osintwatch.schemas.events import (
    NO_DATA_AVAILABLE, RawRecord, EnrichedEvent, RankedEventSet,
    Signal, SignalSet, Prediction, PredictionSet, MilitaryZone, MilitaryActivity,
    utc_now, as_utc,
)
