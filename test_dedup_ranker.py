"""
Diagnostic tests for deduplication and the enrich → rank pipeline.
"""
import sys
import os
import time
import logging
from datetime import datetime, timedelta, timezone

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

logging.basicConfig(level=logging.INFO, format='%(levelname)s: %(message)s')
logger = logging.getLogger(__name__)

NOW = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)


def _raw(title, url="", source="example-news.com", system="GDELT", hours_ago=1, summary=""):
    from osintwatch.schemas import RawRecord
    return RawRecord(
        title=title,
        summary=summary,
        source=source,
        url=url or f"https://example-news.com/{abs(hash(title))}",
        published_at=NOW - timedelta(hours=hours_ago),
        source_system=system,
    )


def _profile(**overrides):
    from osintwatch.config import EndpointProfile, BLOCKED_SOURCE_TERMS
    fields = dict(name="test", retention_days=7, page_size=50,
                  lexicon="standard", blocked_terms=BLOCKED_SOURCE_TERMS)
    fields.update(overrides)
    return EndpointProfile(**fields)


def _dedup(**overrides):
    from osintwatch.news.dedup import EventDeduplicator
    fields = dict(containment_threshold=0.7, jaccard_threshold=0.6,
                  lsh_min_records=200, num_perm=128)
    fields.update(overrides)
    return EventDeduplicator(**fields)


def test_1_exact_dedup():
    """Test 1: Case/whitespace variants and repeated URLs collapse to the first record."""
    print("\n" + "=" * 60)
    print("TEST 1: Exact dedup")
    print("=" * 60)

    records = [
        _raw("Ceasefire agreed in Gaza", url="https://a.example/1"),
        _raw("  CEASEFIRE   agreed in gaza ", url="https://b.example/2"),
        _raw("Totally different headline", url="https://a.example/1"),
        _raw("Port strike halts shipping", url="https://c.example/3"),
    ]
    unique = _dedup().deduplicate(records)
    print(f"  {len(records)} → {len(unique)}")
    assert [r.url for r in unique] == ["https://a.example/1", "https://c.example/3"]


def test_2_containment_and_keywords():
    """Test 2: Containment >= 70% and keyword Jaccard >= 0.6 keep the first-seen."""
    print("\n" + "=" * 60)
    print("TEST 2: Containment + keyword overlap")
    print("=" * 60)

    from osintwatch.news.dedup import is_contained, jaccard, title_keywords

    first = _raw("Russia masses troops near border")
    longer = _raw("Russia masses troops near border again")
    unique = _dedup().deduplicate([first, longer])
    assert unique == [first]

    # Below containment coverage, still caught by keyword overlap
    assert not is_contained("russia masses troops near border",
                            "russia masses troops near border officials say", 0.7)
    a = title_keywords("Russia masses troops near border")
    b = title_keywords("Russia masses troops near border, officials say")
    print(f"  jaccard = {jaccard(a, b):.2f}")
    assert jaccard(a, b) >= 0.6
    assert _dedup().is_duplicate(first, _raw("Russia masses troops near border, officials say"))
    assert not _dedup().is_duplicate(first, _raw("Earthquake strikes northern Japan"))

    reordered = [
        _raw("Ukraine grain deal talks collapse in Istanbul"),
        _raw("Istanbul talks collapse on Ukraine grain deal"),
        _raw("Earthquake strikes northern Japan"),
    ]
    unique = _dedup().deduplicate(reordered)
    assert [r.title for r in unique] == [
        "Ukraine grain deal talks collapse in Istanbul",
        "Earthquake strikes northern Japan",
    ]


def test_3_minhash_path_and_empty_titles():
    """Test 3: LSH candidates on large batches; empty titles only match by URL."""
    print("\n" + "=" * 60)
    print("TEST 3: MinHash LSH path + empty titles")
    print("=" * 60)

    reordered = [
        _raw("Ukraine grain deal talks collapse in Istanbul"),
        _raw("Istanbul talks collapse on Ukraine grain deal"),
        _raw("Earthquake strikes northern Japan"),
        _raw("Parliament dissolved ahead of snap election"),
    ]
    unique = _dedup(lsh_min_records=2).deduplicate(reordered)
    print(f"  LSH: {len(reordered)} → {len(unique)}")
    assert len(unique) == 3
    assert unique[0].title.startswith("Ukraine grain")

    blanks = [
        _raw("", url="https://x.example/1"),
        _raw("", url="https://x.example/2"),
        _raw("", url="https://x.example/1"),
    ]
    unique = _dedup().deduplicate(blanks)
    assert [r.url for r in unique] == ["https://x.example/1", "https://x.example/2"]
    assert _dedup().deduplicate([]) == []


def test_4_empty_ranking():
    """Test 4: No input → explicit empty set, never placeholders."""
    print("\n" + "=" * 60)
    print("TEST 4: Empty ranking")
    print("=" * 60)

    from osintwatch.news.ranker import enrich_and_rank

    for records in ([], None):
        result = enrich_and_rank(records, profile=_profile(), now=NOW)
        assert result.events == []
        assert result.total_count == 0
        assert result.data_source == "No Data Available"
        assert result.sources_used == []
        assert result.is_empty

    # Everything filtered out is also empty
    stale = [_raw("Old news from Kenya", hours_ago=24 * 30)]
    result = enrich_and_rank(stale, profile=_profile(), now=NOW)
    assert result.is_empty and result.data_source == "No Data Available"


def test_5_rank_order():
    """Test 5: Provenance, then severity, relevance, recency; stable for ties."""
    print("\n" + "=" * 60)
    print("TEST 5: Rank order")
    print("=" * 60)

    from osintwatch.news.ranker import enrich_and_rank, provenance_priority

    records = [
        _raw("Massacre reported in Sudan village", system="RSS", source="BBC World"),
        _raw("Farmers gather for harvest fair", hours_ago=1),
        _raw("Chess club elects captain", hours_ago=1),
        _raw("Library extends opening hours", hours_ago=1),
        _raw("Massacre reported near Kenya camp", hours_ago=2),
        _raw("Election observers arrive in Kenya", hours_ago=3, system="ReliefWeb"),
    ]
    result = enrich_and_rank(records, profile=_profile(), now=NOW)
    titles = [e.title for e in result.events]
    for e in result.events:
        print(f"  [{e.source_system:12}] {e.severity:8} {e.relevance_score:3} {e.title}")

    assert titles == [
        "Massacre reported near Kenya camp",      # GDELT, critical
        "Farmers gather for harvest fair",        # GDELT low ties keep input order
        "Chess club elects captain",
        "Library extends opening hours",
        "Election observers arrive in Kenya",     # ReliefWeb
        "Massacre reported in Sudan village",     # RSS
    ]
    assert result.total_count == 6
    assert result.data_source == "GDELT"
    assert result.sources_used == ["GDELT", "ReliefWeb", "RSS"]
    assert provenance_priority("Mystery Feed") > provenance_priority("RSS")


def test_6_filters_and_truncation():
    """Test 6: Blocklist, non-Latin titles, retention window, page size."""
    print("\n" + "=" * 60)
    print("TEST 6: Filters + truncation")
    print("=" * 60)

    from osintwatch.news.ranker import enrich_and_rank

    records = [
        _raw("Blogger posts about border", url="https://someone.medium.com/post"),
        _raw("Война продолжается на востоке"),
        _raw("«Quoted» headline"),
        _raw("Élections anticipées annoncées"),
        _raw("Ports reopen after storm in Florida", hours_ago=24 * 8),
        _raw("Storm batters coast of Mexico"),
        _raw("Talks resume in Qatar"),
        _raw("Drought worsens across Somalia"),
    ]
    result = enrich_and_rank(records, profile=_profile(page_size=2), now=NOW)
    titles = [e.title for e in result.events]
    print(f"  kept: {titles} (total {result.total_count})")
    assert result.total_count == 4
    assert len(result.events) == 2
    surviving = {"Élections anticipées annoncées", "Storm batters coast of Mexico",
                 "Talks resume in Qatar", "Drought worsens across Somalia"}
    assert set(titles) <= surviving

    # The news profile keeps 14 days
    result = enrich_and_rank(records[4:5], profile=_profile(retention_days=14), now=NOW)
    assert result.total_count == 1

    # Academic domains and feed listings never reach an endpoint
    from osintwatch.config import get_endpoint_profile
    blocked = [
        _raw("Scholars debate sanctions policy", source="stanford.edu",
             url="https://news.stanford.edu/2026/03/sanctions"),
        _raw("Ceasefire holds in Lebanon", source="example.com",
             url="https://example.com/feed/item-1"),
    ]
    result = enrich_and_rank(blocked, profile=get_endpoint_profile("events"), now=NOW)
    assert result.is_empty
    assert get_endpoint_profile("news").is_blocked("Example World", "https://feed.example/nigeria") is False


def test_7_overrides_and_strategy():
    """Test 7: Source overrides and an injected classifier strategy."""
    print("\n" + "=" * 60)
    print("TEST 7: Source overrides + injected classifier")
    print("=" * 60)

    from osintwatch.news.event_classifier import RelevanceAssessment
    from osintwatch.news.ranker import enrich_and_rank
    from osintwatch.schemas import EventCategory, Severity

    records = [
        _raw("Chess club elects captain", system="GDELT-Emergency"),
        _raw("Situation report for Mali", system="UN OCHA", source="UN OCHA"),
    ]
    result = enrich_and_rank(records, profile=_profile(), now=NOW)
    by_system = {e.source_system: e for e in result.events}
    assert by_system["GDELT-Emergency"].severity == "high"
    assert by_system["UN OCHA"].category == "humanitarian"
    assert by_system["UN OCHA"].severity == "high"
    assert by_system["UN OCHA"].location.country == "ML"

    class AlwaysCyber:
        def categorize(self, title, summary=""):
            return EventCategory.CYBER_WARFARE

        def estimate_severity(self, title, summary=""):
            return Severity.MEDIUM

        def assess_relevance(self, title, summary=""):
            return RelevanceAssessment(score=7, category="stub")

    inputs = [_raw("Farmers gather for harvest fair"), _raw("Talks resume in Qatar")]
    result = enrich_and_rank(inputs, classifier=AlwaysCyber(), profile=_profile(), now=NOW)
    assert {e.category for e in result.events} == {"cyber-warfare"}
    assert {e.relevance_score for e in result.events} == {7}
    # Never fabricates records
    assert {e.url for e in result.events} <= {r.url for r in inputs}


def test_8_filter_before_dedup():
    """Test 8: A blocked or stale copy never suppresses a displayable duplicate."""
    print("\n" + "=" * 60)
    print("TEST 8: Filter before dedup")
    print("=" * 60)

    from osintwatch.news.ranker import enrich_and_rank

    records = [
        _raw("Ceasefire talks stall in Sudan", source="research-blog.net",
             url="https://research-blog.net/sudan"),
        _raw("Ceasefire talks stall in Sudan", source="ReliefWeb", system="ReliefWeb",
             url="https://reliefweb.int/report/sudan"),
        _raw("Cholera outbreak spreads in Yemen", hours_ago=24 * 30,
             url="https://example-news.com/old-yemen"),
        _raw("Cholera outbreak spreads in Yemen", system="RSS", source="BBC World",
             url="https://bbc.example/yemen"),
    ]
    result = enrich_and_rank(records, profile=_profile(), now=NOW)
    for e in result.events:
        print(f"  [{e.source_system}] {e.title} ({e.url})")

    assert result.total_count == 2
    assert [e.url for e in result.events] == [
        "https://reliefweb.int/report/sudan",
        "https://bbc.example/yemen",
    ]

    # A naive reference time is read as UTC
    naive = enrich_and_rank(records, profile=_profile(), now=NOW.replace(tzinfo=None))
    assert [e.url for e in naive.events] == [e.url for e in result.events]


def main():
    """Run all dedup/ranker tests."""
    print("=" * 60)
    print("DEDUP + RANKER TEST SUITE")
    print(f"Time: {time.strftime('%Y-%m-%d %H:%M:%S')}")
    print("=" * 60)

    tests = [
        ("Exact dedup", test_1_exact_dedup),
        ("Containment + keywords", test_2_containment_and_keywords),
        ("MinHash + empty titles", test_3_minhash_path_and_empty_titles),
        ("Empty ranking", test_4_empty_ranking),
        ("Rank order", test_5_rank_order),
        ("Filters + truncation", test_6_filters_and_truncation),
        ("Overrides + strategy", test_7_overrides_and_strategy),
        ("Filter before dedup", test_8_filter_before_dedup),
    ]

    results = {}
    for name, test_func in tests:
        try:
            test_func()
            results[name] = "PASS"
        except Exception as e:
            print(f"\n  *** TEST EXCEPTION: {e}")
            import traceback
            traceback.print_exc()
            results[name] = f"ERROR: {e}"

    print("\n" + "=" * 60)
    print("TEST RESULTS SUMMARY")
    print("=" * 60)
    for name, result in results.items():
        status = "PASS" if result == "PASS" else "FAIL"
        print(f"  [{status}] {name}: {result}")


if __name__ == "__main__":
    main()
