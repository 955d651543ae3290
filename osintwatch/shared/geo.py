"""
Location extraction: single source for turning headlines into coordinates.

Used by:
  - osintwatch.news.ranker (per-record enrichment)
  - osintwatch.news.signals (signal location + region)
  - osintwatch.news.military (activity zones)

Two passes over an ordered place table:
  1. Disambiguation: US states whose names contain a country name
     ("Indiana" contains "India") are checked first and short-circuit.
  2. General: every place name, word-boundary regex, first match in table
     order wins. "China" wins over "Beijing" because it comes first.

No match returns GLOBAL_LOCATION (20, 0, "XX").
"""
from __future__ import annotations

import functools
import logging
import re
from typing import Optional

from osintwatch.schemas.base import Location, GLOBAL_LOCATION
from osintwatch.shared.lexicons import Lexicon, PlaceEntry, REGIONS, get_lexicon

logger = logging.getLogger(__name__)


@functools.lru_cache(maxsize=512)
def get_place_pattern(name: str) -> re.Pattern:
    """Word-boundary pattern for one place name.

    LRU-cached per name, compiled once per process.
    """
    return re.compile(rf"\b{re.escape(name)}\b", re.IGNORECASE)


def _to_location(entry: PlaceEntry) -> Location:
    return Location(
        lat=entry.lat,
        lng=entry.lng,
        country=entry.country,
        place_name=entry.place_name,
    )


def extract_location(title: Optional[str], lexicon: Optional[Lexicon] = None) -> Location:
    """Resolve the first place named in `title`, or the Global sentinel."""
    if not title:
        return GLOBAL_LOCATION
    table = (lexicon if lexicon is not None else get_lexicon()).location

    for name in table.disambiguation:
        if get_place_pattern(name).search(title):
            return _to_location(table.find(name))

    for entry in table.places:
        if get_place_pattern(entry.name).search(title):
            return _to_location(entry)

    return GLOBAL_LOCATION


def locate(text: Optional[str], lexicon: Optional[Lexicon] = None) -> Location:
    """Reusable locate primitive for sibling modules (signals, military)."""
    return extract_location(text, lexicon)


def extract_region(text: Optional[str]) -> str:
    """Coarse region bucket by substring: Middle East, Europe, Asia, Americas, else Global."""
    lower = (text or "").lower()
    for group in REGIONS:
        if group.matches(lower):
            return group.label
    return "Global"
