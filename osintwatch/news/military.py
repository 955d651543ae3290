"""
Military activity zones from enriched events.

An event becomes a zone when its text contains a military keyword, matches
no exclusion pattern (commentary about the military rather than activity),
and resolves to a real location (not the Global sentinel). Zones sit at the
located coordinates; nothing is synthesized when no event qualifies.
"""

import logging
import re
from typing import Iterable, Optional

from osintwatch.schemas import (
    GLOBAL_LOCATION, Location, MilitaryActivity, MilitaryBranch, MilitaryZone,
    SEVERITY_RANK, utc_now,
)
from osintwatch.shared.geo import locate
from osintwatch.shared.lexicons import (
    DEFAULT_MILITARY_INTENSITY, Lexicon, MILITARY_BRANCHES, MILITARY_EXCLUSIONS,
    MILITARY_INTENSITY, MILITARY_KEYWORDS,
)

logger = logging.getLogger(__name__)

NO_MILITARY_DATA = "No Military Activity Data"

_EXCLUSIONS = [re.compile(p, re.IGNORECASE) for p in MILITARY_EXCLUSIONS]
_BRANCHES = [(branch, re.compile(p)) for branch, p in MILITARY_BRANCHES]
_INTENSITY = [(value, re.compile(p)) for value, p in MILITARY_INTENSITY]

# Minimum intensity implied by the event's severity
SEVERITY_INTENSITY_FLOOR = {
    "critical": 0.95,
    "high": 0.8,
    "medium": 0.6,
}


def _event_text(event) -> str:
    return f"{getattr(event, 'title', '') or ''} {getattr(event, 'summary', '') or ''}".lower()


def is_military_event(text_lower: str) -> bool:
    if any(p.search(text_lower) for p in _EXCLUSIONS):
        return False
    return any(kw in text_lower for kw in MILITARY_KEYWORDS)


def categorize_military_branch(text_lower: str) -> MilitaryBranch:
    for branch, pattern in _BRANCHES:
        if pattern.search(text_lower):
            return MilitaryBranch(branch)
    return MilitaryBranch.COMBINED


def estimate_intensity(text_lower: str, severity: Optional[str] = None) -> float:
    intensity = DEFAULT_MILITARY_INTENSITY
    for value, pattern in _INTENSITY:
        if pattern.search(text_lower):
            intensity = value
            break
    return max(intensity, SEVERITY_INTENSITY_FLOOR.get(severity or "", 0.0))


def detect_military_activity(events: Iterable, lexicon: Optional[Lexicon] = None) -> MilitaryActivity:
    """Build military zones from EnrichedEvent (or RawRecord) sequences."""
    now = utc_now()
    zones = []
    counts = {b.value: 0 for b in MilitaryBranch}
    scanned = 0

    for event in events or []:
        scanned += 1
        text = _event_text(event)
        if not is_military_event(text):
            continue

        location: Location = getattr(event, "location", None) or GLOBAL_LOCATION
        if location.is_global:
            location = locate(getattr(event, "title", ""), lexicon)
        if location.is_global:
            continue

        severity = getattr(event, "severity", "low") or "low"
        branch = categorize_military_branch(text)
        zones.append(MilitaryZone(
            name=location.place_name or "Military Activity Zone",
            branch=branch,
            latitude=location.lat,
            longitude=location.lng,
            intensity=estimate_intensity(text, severity),
            country=location.country,
            source=getattr(event, "source", "") or "",
            url=getattr(event, "url", "") or "",
            title=getattr(event, "title", "") or "",
            severity=severity if severity in SEVERITY_RANK else "low",
            published_at=getattr(event, "published_at", None) or now,
        ))
        counts[branch.value] += 1

    logger.info(
        f"Military activity: {len(zones)} zones from {scanned} events "
        f"(army={counts['army']}, navy={counts['navy']}, "
        f"air-force={counts['air-force']}, combined={counts['combined']})"
    )

    if not zones:
        return MilitaryActivity(last_updated=now, data_source=NO_MILITARY_DATA)

    return MilitaryActivity(
        zones=zones,
        counts=counts,
        total_zones=len(zones),
        last_updated=now,
        data_source="Combined OSINT Analysis",
    )
