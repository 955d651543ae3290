"""
Common enums and value objects used across the entire application.

These define the vocabulary of the enrichment pipeline: event categories,
severity levels, source provenance, and the location value object every
enriched record carries.
"""

from enum import Enum
from pydantic import BaseModel, Field


# ══════════════════════════════════════════════════════════════════════════════
# ENUMS - Classification Types
# ══════════════════════════════════════════════════════════════════════════════

class EventCategory(str, Enum):
    """Fixed event taxonomy. Order mirrors classifier priority."""
    ARMED_CONFLICT = "armed-conflict"
    TERRORISM = "terrorism"
    POLITICAL_INSTABILITY = "political-instability"
    DIPLOMATIC_TENSIONS = "diplomatic-tensions"
    HUMANITARIAN = "humanitarian"
    CYBER_WARFARE = "cyber-warfare"
    MARITIME_SECURITY = "maritime-security"
    HEALTH_EMERGENCY = "health-emergency"
    ENVIRONMENTAL = "environmental"
    ECONOMIC = "economic"
    GEOPOLITICAL = "geopolitical"


class Severity(str, Enum):
    """Event severity levels."""
    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


# Higher = more severe. Used as a ranking key.
SEVERITY_RANK = {
    Severity.CRITICAL.value: 3,
    Severity.HIGH.value: 2,
    Severity.MEDIUM.value: 1,
    Severity.LOW.value: 0,
}


class SourceSystem(str, Enum):
    """Upstream provenance of a record, used for prioritization."""
    GDELT = "GDELT"
    GDELT_EMERGENCY = "GDELT-Emergency"
    GDELT_ALT = "GDELT-Alt"
    ACLED = "ACLED"
    RELIEFWEB = "ReliefWeb"
    WIKIPEDIA = "Wikipedia"
    UN_OCHA = "UN OCHA"
    RSS = "RSS"


class SourceType(str, Enum):
    """Data source type."""
    RSS = "rss"
    API = "api"


class SourceTier(str, Enum):
    """
    Feed tier.

    Tier 1: international wires and broadcasters (BBC, Guardian, DW, NHK).
    Tier 2: regional outlets, defence and security trade press.
    """
    TIER_1 = "tier_1"
    TIER_2 = "tier_2"


class SignalCategory(str, Enum):
    MILITARY = "military"
    POLITICAL = "political"
    ECONOMIC = "economic"
    SECURITY = "security"
    STRATEGIC = "strategic"
    GENERAL = "general"


class TrendDirection(str, Enum):
    ESCALATING = "escalating"
    STABLE = "stable"
    DE_ESCALATING = "de-escalating"


class MilitaryBranch(str, Enum):
    ARMY = "army"
    NAVY = "navy"
    AIR_FORCE = "air-force"
    COMBINED = "combined"


# ══════════════════════════════════════════════════════════════════════════════
# VALUE OBJECTS
# ══════════════════════════════════════════════════════════════════════════════

class Location(BaseModel):
    """Resolved geographic location of an event."""
    lat: float = Field(ge=-90.0, le=90.0)
    lng: float = Field(ge=-180.0, le=180.0)
    country: str = "XX"       # ISO 3166-1 alpha-2, XX = unknown
    place_name: str = ""

    class Config:
        frozen = True

    @property
    def is_global(self) -> bool:
        return self == GLOBAL_LOCATION


# Sentinel returned when no place name matches
GLOBAL_LOCATION = Location(lat=20.0, lng=0.0, country="XX", place_name="Global")
