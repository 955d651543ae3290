"""
Multi-stage headline deduplication for merged OSINT streams.

DEDUP PIPELINE (3 stages, first-seen record always wins):
  1. EXACT:        same URL, or same normalized title (lowercased, trimmed,
                   whitespace collapsed). Catches case/whitespace variants
                   and the same article returned by two GDELT queries.
  2. CONTAINMENT:  one punctuation-stripped title contains the other and the
                   shorter covers >= containment_threshold of the longer.
                   Catches wire headlines with a publisher suffix appended.
  3. KEYWORD JACCARD: keyword sets (stopwords removed, words > 2 chars) with
                   Jaccard >= jaccard_threshold. Catches reordered headlines.

Input order is preserved. Callers order the merged stream by provenance
before deduplicating, so "first seen" means "from the preferred source".

WHY MinHash for stage 3 on large batches:
  Pairwise Jaccard is O(n^2). A single aggregation cycle is a few hundred
  records, which is fine, but the news tiers plus GDELT can exceed that.
  Above lsh_min_records, MinHash LSH proposes candidate pairs and the exact
  Jaccard check confirms them, so LSH never removes a record on its own.

REF: Broder, "On the resemblance and containment of documents" (1997)
"""

import logging
import re
from typing import FrozenSet, List, Optional, Sequence

from datasketch import MinHash, MinHashLSH

from osintwatch.shared.stopwords import TITLE_STOP

logger = logging.getLogger(__name__)

_PUNCT = re.compile(r"[^a-z0-9\s]")
_SPACES = re.compile(r"\s+")
_WORDS = re.compile(r"[a-z0-9]+")


def normalize_title(title: Optional[str]) -> str:
    """Lowercase, trim and collapse whitespace."""
    return _SPACES.sub(" ", (title or "").lower()).strip()


def strip_title(title: Optional[str]) -> str:
    """normalize_title() with punctuation removed."""
    return _SPACES.sub(" ", _PUNCT.sub("", (title or "").lower())).strip()


def title_keywords(title: Optional[str]) -> FrozenSet[str]:
    """Significant words of a title (len > 2, not a stopword)."""
    return frozenset(
        w for w in _WORDS.findall((title or "").lower())
        if len(w) > 2 and w not in TITLE_STOP
    )


def jaccard(a: FrozenSet[str], b: FrozenSet[str]) -> float:
    if not a or not b:
        return 0.0
    return len(a & b) / len(a | b)


def is_contained(a: str, b: str, threshold: float) -> bool:
    """True when one stripped title contains the other with enough coverage."""
    if not a or not b:
        return False
    shorter, longer = (a, b) if len(a) <= len(b) else (b, a)
    if shorter not in longer:
        return False
    return len(shorter) / len(longer) >= threshold


class EventDeduplicator:
    """
    Headline deduplicator for records exposing `.title` and `.url`.

    Works on RawRecord and EnrichedEvent alike. Never creates records:
    the output is always an order-preserving subsequence of the input.
    """

    def __init__(
        self,
        containment_threshold: Optional[float] = None,
        jaccard_threshold: Optional[float] = None,
        lsh_min_records: Optional[int] = None,
        num_perm: Optional[int] = None,
    ):
        """
        Args:
            containment_threshold: shorter/longer length ratio for stage 2.
                       0.7 drops "X" vs "X, officials say" style variants.
                       0.85 only drops near-identical truncations.
            jaccard_threshold: keyword-set Jaccard for stage 3 (0.6 default).
            lsh_min_records: batch size at which stage 3 switches from
                       pairwise comparison to MinHash LSH candidates.
            num_perm: MinHash permutations. 128 is the standard tradeoff.

        Unset values come from settings (DEDUP_* env vars).
        """
        if None in (containment_threshold, jaccard_threshold, lsh_min_records, num_perm):
            from osintwatch.config import get_settings
            s = get_settings()
            if containment_threshold is None:
                containment_threshold = s.dedup_containment_threshold
            if jaccard_threshold is None:
                jaccard_threshold = s.dedup_jaccard_threshold
            if lsh_min_records is None:
                lsh_min_records = s.dedup_lsh_min_records
            if num_perm is None:
                num_perm = s.dedup_num_perm
        self.containment_threshold = containment_threshold
        self.jaccard_threshold = jaccard_threshold
        self.lsh_min_records = lsh_min_records
        self.num_perm = num_perm

    def deduplicate(self, records: Sequence) -> list:
        """Run all three stages. Returns the surviving records in input order."""
        if not records:
            return []

        initial_count = len(records)
        kept = self._exact_dedup(list(records))
        kept = self._containment_dedup(kept)
        kept = self._keyword_overlap_dedup(kept)

        total_removed = initial_count - len(kept)
        if total_removed > 0:
            logger.info(
                f"Dedup summary: {initial_count} → {len(kept)} "
                f"(removed {total_removed} = {total_removed/initial_count*100:.1f}%)"
            )
        return kept

    def is_duplicate(self, a, b) -> bool:
        """Pairwise check used by callers that merge two small lists."""
        url_a, url_b = getattr(a, "url", ""), getattr(b, "url", "")
        if url_a and url_a == url_b:
            return True
        norm_a, norm_b = normalize_title(a.title), normalize_title(b.title)
        if norm_a and norm_a == norm_b:
            return True
        if is_contained(strip_title(a.title), strip_title(b.title), self.containment_threshold):
            return True
        return jaccard(title_keywords(a.title), title_keywords(b.title)) >= self.jaccard_threshold

    def _exact_dedup(self, records: list) -> list:
        """Stage 1: URL or normalized title already seen."""
        seen_urls = set()
        seen_titles = set()
        unique = []
        dup_count = 0

        for record in records:
            url = (getattr(record, "url", "") or "").strip()
            title = normalize_title(getattr(record, "title", ""))

            if (url and url in seen_urls) or (title and title in seen_titles):
                dup_count += 1
                continue

            if url:
                seen_urls.add(url)
            if title:
                seen_titles.add(title)
            unique.append(record)

        logger.info(f"Exact dedup: {len(records)} → {len(unique)} ({dup_count} duplicates)")
        return unique

    def _containment_dedup(self, records: list) -> list:
        """Stage 2: one title contains the other with enough length coverage."""
        kept_titles: List[str] = []
        unique = []
        dup_examples = []

        for record in records:
            stripped = strip_title(getattr(record, "title", ""))
            match = None
            if stripped:
                for existing in kept_titles:
                    if is_contained(stripped, existing, self.containment_threshold):
                        match = existing
                        break

            if match is not None:
                if len(dup_examples) < 5:
                    dup_examples.append({"removed": stripped[:60], "kept": match[:60]})
                continue

            kept_titles.append(stripped)
            unique.append(record)

        dup_count = len(records) - len(unique)
        logger.info(f"Containment dedup: {len(records)} → {len(unique)} ({dup_count} duplicates)")
        if dup_examples:
            logger.debug(f"  Containment dedup examples: {dup_examples}")
        return unique

    def _keyword_overlap_dedup(self, records: list) -> list:
        """Stage 3: keyword-set Jaccard, pairwise or via MinHash LSH candidates."""
        if len(records) >= self.lsh_min_records:
            unique = self._minhash_dedup(records)
        else:
            unique = self._pairwise_dedup(records)

        dup_count = len(records) - len(unique)
        logger.info(f"Keyword dedup: {len(records)} → {len(unique)} ({dup_count} duplicates)")
        return unique

    def _pairwise_dedup(self, records: list) -> list:
        kept_sets: List[FrozenSet[str]] = []
        unique = []

        for record in records:
            words = title_keywords(getattr(record, "title", ""))
            if words and any(jaccard(words, other) >= self.jaccard_threshold for other in kept_sets):
                continue
            kept_sets.append(words)
            unique.append(record)

        return unique

    def _minhash_dedup(self, records: list) -> list:
        """LSH proposes candidates, exact Jaccard confirms."""
        lsh = MinHashLSH(threshold=self.jaccard_threshold, num_perm=self.num_perm)
        kept_sets = {}
        unique = []

        for i, record in enumerate(records):
            words = title_keywords(getattr(record, "title", ""))
            if not words:
                unique.append(record)
                continue

            minhash = self._build_minhash(words)
            candidates = lsh.query(minhash)
            if any(jaccard(words, kept_sets[key]) >= self.jaccard_threshold for key in candidates):
                continue

            key = f"record_{i}"
            lsh.insert(key, minhash)
            kept_sets[key] = words
            unique.append(record)

        return unique

    def _build_minhash(self, words: FrozenSet[str]) -> MinHash:
        m = MinHash(num_perm=self.num_perm)
        for word in sorted(words):
            m.update(word.encode("utf-8"))
        return m
