"""
Early-warning signals from GDELT query results.

A signal is a lightly processed headline: signal category, source
confidence, coarse region, severity and location. Signals are not run
through the full ranker; they are deduplicated by exact title, stripped
of blocked, academic and stale items and ordered by confidence.
"""

import logging
from datetime import datetime, timedelta
from typing import Iterable, List, Optional

from osintwatch.config import ACADEMIC_TERMS, EndpointProfile, get_endpoint_profile
from osintwatch.news.dedup import normalize_title
from osintwatch.news.event_classifier import estimate_severity
from osintwatch.schemas import (
    RawRecord, Signal, SignalCategory, SignalSet, SourceSystem, as_utc,
)
from osintwatch.shared.geo import extract_region, locate
from osintwatch.shared.lexicons import (
    DEFAULT_SOURCE_CONFIDENCE, Lexicon, SIGNAL_CATEGORIES, SOURCE_CONFIDENCE, get_lexicon,
)

logger = logging.getLogger(__name__)

NO_SIGNAL_DATA = "No Data"

# Alternate-query results are less targeted
ALT_CONFIDENCE_PENALTY = 0.1
ALT_CONFIDENCE_FLOOR = 0.3


def categorize_signal(title: Optional[str]) -> SignalCategory:
    lower = (title or "").lower()
    for group in SIGNAL_CATEGORIES:
        if group.matches(lower):
            return SignalCategory(group.label)
    return SignalCategory.GENERAL


def estimate_confidence(source: Optional[str]) -> float:
    """Source reputation by substring of the lowercased source/domain."""
    lower = (source or "").lower()
    for confidence, markers in SOURCE_CONFIDENCE:
        if any(marker in lower for marker in markers):
            return confidence
    return DEFAULT_SOURCE_CONFIDENCE


def _is_academic_title(title: str) -> bool:
    lower = (title or "").lower()
    return any(term in lower for term in ACADEMIC_TERMS)


def build_signals(
    records: Iterable[RawRecord],
    *,
    now: Optional[datetime] = None,
    limit: Optional[int] = None,
    lexicon: Optional[Lexicon] = None,
    profile: Optional[EndpointProfile] = None,
) -> SignalSet:
    """Turn GDELT records into a confidence-ordered SignalSet.

    The signals profile supplies the blocklist (academic sources included),
    the retention window and the default page size.
    """
    profile = profile or get_endpoint_profile("signals")
    lexicon = lexicon or get_lexicon(profile.lexicon)
    limit = limit if limit is not None else profile.page_size
    now = as_utc(now)
    cutoff = now - timedelta(days=profile.retention_days)

    seen_titles = set()
    signals: List[Signal] = []
    dropped = 0

    for record in records or []:
        key = normalize_title(record.title)
        if not key or key in seen_titles:
            continue
        seen_titles.add(key)

        if (profile.is_blocked(record.source, record.url)
                or _is_academic_title(record.title)
                or record.published_at < cutoff):
            dropped += 1
            continue

        confidence = estimate_confidence(record.source)
        if record.source_system == SourceSystem.GDELT_ALT.value:
            confidence = max(confidence - ALT_CONFIDENCE_PENALTY, ALT_CONFIDENCE_FLOOR)

        signals.append(Signal(
            title=record.title,
            url=record.url,
            source=record.source,
            category=categorize_signal(record.title),
            confidence=round(confidence, 2),
            region=extract_region(record.title),
            severity=estimate_severity(record.title, record.summary, lexicon),
            location=locate(record.title, lexicon),
            published_at=record.published_at,
            data_source=record.source_system,
        ))

    if dropped:
        logger.debug(f"Signals: dropped {dropped} blocked, academic or stale items")

    if not signals:
        logger.info("Signals: no usable records")
        return SignalSet(last_updated=now, data_source=NO_SIGNAL_DATA)

    signals.sort(key=lambda s: s.confidence, reverse=True)
    page = signals[:limit]

    sources_used = []
    for signal in page:
        if signal.data_source not in sources_used:
            sources_used.append(signal.data_source)

    logger.info(f"Signals: {len(signals)} built, returning {len(page)}")
    return SignalSet(
        signals=page,
        last_updated=now,
        total_count=len(signals),
        data_source=sources_used[0],
        sources_used=sources_used,
    )
