"""
Enrich → filter → dedup → rank → truncate.

One pass over the merged RawRecord stream of an aggregation cycle:

  1. ENRICH:   classifier strategy (category, severity, relevance) and
               locator on each record. Source-level overrides from config
               (e.g. GDELT-Emergency is at least "high") are applied here.
  2. FILTER:   blocklisted source/domain/URL path, non-Latin headline,
               outside the endpoint's retention window.
  3. DEDUP:    EventDeduplicator over the displayable records only, so a
               blocked or stale copy never suppresses a clean one.
               First-seen wins.
  4. RANK:     stable sort by provenance, severity, relevance, recency.
  5. TRUNCATE: endpoint page size.

Nothing here raises for data. An empty stream (or one where nothing
survives) yields RankedEventSet.empty(), never placeholder events.
"""

import logging
import re
from datetime import datetime, timedelta
from typing import Iterable, List, Optional

from osintwatch.config import (
    EndpointProfile, SOURCE_OVERRIDES, SOURCE_PRIORITY, get_endpoint_profile,
)
from osintwatch.news.dedup import EventDeduplicator
from osintwatch.news.event_classifier import ClassifierStrategy, KeywordEventClassifier
from osintwatch.schemas.base import SEVERITY_RANK
from osintwatch.schemas.events import EnrichedEvent, RankedEventSet, RawRecord, as_utc
from osintwatch.shared.geo import extract_location
from osintwatch.shared.lexicons import Lexicon, get_lexicon

logger = logging.getLogger(__name__)

# Headlines must open with a Latin letter (accented Latin-1 letters allowed)
_NON_LATIN_START = re.compile(r"^[^A-Za-zÀ-ÿ]")


def provenance_priority(source_system: str) -> int:
    """Index in SOURCE_PRIORITY; unknown systems sort after every known one."""
    try:
        return SOURCE_PRIORITY.index(source_system)
    except ValueError:
        return len(SOURCE_PRIORITY)


def enrich_record(
    raw: RawRecord,
    classifier: ClassifierStrategy,
    lexicon: Lexicon,
) -> EnrichedEvent:
    """Pure per-record enrichment."""
    relevance = classifier.assess_relevance(raw.title, raw.summary)
    fields = {
        "category": classifier.categorize(raw.title, raw.summary),
        "severity": classifier.estimate_severity(raw.title, raw.summary),
    }
    fields.update(SOURCE_OVERRIDES.get(raw.source_system, {}))

    return EnrichedEvent.from_raw(
        raw,
        category=fields["category"],
        severity=fields["severity"],
        location=extract_location(raw.title, lexicon),
        relevance_score=relevance.score,
        relevance_category=relevance.category,
    )


def _filter_events(
    events: List[EnrichedEvent],
    profile: EndpointProfile,
    now: datetime,
) -> List[EnrichedEvent]:
    cutoff = now - timedelta(days=profile.retention_days)
    kept = []
    blocked = non_latin = stale = 0

    for event in events:
        if profile.is_blocked(event.source, event.url):
            blocked += 1
            logger.debug(f"Blocked source: {event.source} ({event.url[:60]})")
            continue
        if _NON_LATIN_START.match(event.title.strip()):
            non_latin += 1
            continue
        if event.published_at < cutoff:
            stale += 1
            continue
        kept.append(event)

    logger.info(
        f"Filter: {len(events)} → {len(kept)} "
        f"(blocked={blocked}, non_latin={non_latin}, stale={stale})"
    )
    return kept


def _rank_key(event: EnrichedEvent):
    return (
        provenance_priority(event.source_system),
        -SEVERITY_RANK.get(event.severity, 0),
        -event.relevance_score,
        -event.published_at.timestamp(),
    )


def enrich_and_rank(
    raw_records: Iterable[RawRecord],
    *,
    lexicon: Optional[Lexicon] = None,
    classifier: Optional[ClassifierStrategy] = None,
    profile: Optional[EndpointProfile] = None,
    now: Optional[datetime] = None,
) -> RankedEventSet:
    """
    Build the ranked event set for one endpoint.

    Args:
        raw_records: merged adapter output, in provenance order.
        lexicon: lexicon variant. Defaults to the profile's variant.
        classifier: ClassifierStrategy. Defaults to KeywordEventClassifier(lexicon).
        profile: endpoint profile. Defaults to "events".
        now: reference time for the retention window (tests pin this).
    """
    profile = profile or get_endpoint_profile("events")
    lexicon = lexicon or get_lexicon(profile.lexicon)
    classifier = classifier or KeywordEventClassifier(lexicon)
    now = as_utc(now)

    records = list(raw_records or [])
    if not records:
        logger.info(f"[{profile.name}] No records to rank")
        return RankedEventSet.empty()

    enriched = [enrich_record(raw, classifier, lexicon) for raw in records]
    filtered = _filter_events(enriched, profile, now)
    unique = EventDeduplicator().deduplicate(filtered)

    if not unique:
        logger.info(f"[{profile.name}] Nothing survived filtering ({len(records)} records in)")
        return RankedEventSet.empty()

    ranked = sorted(unique, key=_rank_key)
    page = ranked[:profile.page_size]

    sources_used = []
    for event in page:
        if event.source_system not in sources_used:
            sources_used.append(event.source_system)

    logger.info(
        f"[{profile.name}] Ranked {len(records)} → {len(page)} events "
        f"({len(unique)} after filtering and dedup, sources: {', '.join(sources_used)})"
    )
    return RankedEventSet(
        events=page,
        last_updated=now,
        total_count=len(unique),
        data_source=page[0].source_system,
        sources_used=sources_used,
    )
