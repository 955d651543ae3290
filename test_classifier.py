"""
Diagnostic tests for keyword classification.
Checks category priority, severity tiers per lexicon variant, relevance scoring
and the pluggable classifier interface.
"""
import sys
import os
import time
import logging

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

logging.basicConfig(level=logging.INFO, format='%(levelname)s: %(message)s')
logger = logging.getLogger(__name__)


def test_1_categorize():
    """Test 1: First matching category wins, default is geopolitical."""
    print("\n" + "=" * 60)
    print("TEST 1: Categorize")
    print("=" * 60)

    from osintwatch.news.event_classifier import categorize
    from osintwatch.schemas import EventCategory

    cases = [
        ("Troops clash near the border", EventCategory.ARMED_CONFLICT),
        ("Markets rally on inflation data", EventCategory.ECONOMIC),
        ("Outbreak of cholera confirmed", EventCategory.HEALTH_EMERGENCY),
        # Substring matching: "war" inside "warning"
        ("Storm warning issued", EventCategory.ARMED_CONFLICT),
        ("", EventCategory.GEOPOLITICAL),
        (None, EventCategory.GEOPOLITICAL),
    ]
    for title, expected in cases:
        got = categorize(title)
        print(f"  {title!r:40} → {got.value}")
        assert got == expected

    # Summary text participates in matching
    assert categorize("Officials meet", "refugee numbers rise") == EventCategory.HUMANITARIAN


def test_2_severity_variants():
    """Test 2: Severity tiers differ by lexicon variant."""
    print("\n" + "=" * 60)
    print("TEST 2: Severity per lexicon variant")
    print("=" * 60)

    from osintwatch.news.event_classifier import estimate_severity
    from osintwatch.shared.lexicons import STANDARD, COMPACT, NEWS
    from osintwatch.schemas import Severity

    assert estimate_severity("Massacre reported in region", lexicon=STANDARD) == Severity.CRITICAL
    assert estimate_severity("Minister visits school", lexicon=STANDARD) == Severity.MEDIUM
    assert estimate_severity("Quiet day at the park", lexicon=STANDARD) == Severity.LOW
    assert estimate_severity(None, None, STANDARD) == Severity.LOW

    # "tensions" is a critical keyword only in the standard tables
    assert estimate_severity("Tensions rise", lexicon=STANDARD) == Severity.CRITICAL
    assert estimate_severity("Tensions rise", lexicon=COMPACT) == Severity.MEDIUM

    # Headline-tuned news tiers know "airstrike" without a space
    assert estimate_severity("Airstrike hits convoy", lexicon=NEWS) == Severity.CRITICAL
    assert estimate_severity("Airstrike hits convoy", lexicon=STANDARD) == Severity.LOW
    print("  standard / compact / news tiers OK")


def test_3_relevance():
    """Test 3: Hotspot + topic scores are additive."""
    print("\n" + "=" * 60)
    print("TEST 3: Geopolitical relevance")
    print("=" * 60)

    from osintwatch.news.event_classifier import assess_geopolitical_relevance

    r = assess_geopolitical_relevance("Putin warns NATO over sanctions")
    print(f"  hotspot + sanctions: {r.score} ({r.category})")
    assert r.score == 40
    assert r.category == "Ukraine-Russia"

    # No hotspot: first matching topic names the category, all topics add up
    r = assess_geopolitical_relevance("Protest over oil pipeline")
    print(f"  topics only: {r.score} ({r.category})")
    assert r.score == 18
    assert r.category == "Unrest"

    # Only the first hotspot counts even when several match
    r = assess_geopolitical_relevance("Ukraine and Taiwan discussed")
    assert r.score == 25
    assert r.category == "Ukraine-Russia"

    r = assess_geopolitical_relevance("", None)
    assert r.score == 0 and r.category == "general"


def test_4_classify_and_strategy():
    """Test 4: classify() and the ClassifierStrategy interface."""
    print("\n" + "=" * 60)
    print("TEST 4: classify() + strategy")
    print("=" * 60)

    from osintwatch.news.event_classifier import (
        classify, ClassifierStrategy, KeywordEventClassifier,
    )
    from osintwatch.shared.lexicons import COMPACT, get_lexicon

    c = classify("Massacre reported in region")
    print(f"  classify → {c.category} / {c.severity}")
    assert c.category == "humanitarian"
    assert c.severity == "critical"

    clf = KeywordEventClassifier(COMPACT)
    assert isinstance(clf, ClassifierStrategy)
    assert clf.estimate_severity("Tensions rise") == "medium"
    assert "compact" in repr(clf)

    assert get_lexicon("standard").name == "standard"
    try:
        get_lexicon("klingon")
        raise AssertionError("unknown lexicon should raise KeyError")
    except KeyError:
        pass


def main():
    """Run all classifier tests."""
    print("=" * 60)
    print("CLASSIFIER TEST SUITE")
    print(f"Time: {time.strftime('%Y-%m-%d %H:%M:%S')}")
    print("=" * 60)

    tests = [
        ("Categorize", test_1_categorize),
        ("Severity variants", test_2_severity_variants),
        ("Relevance", test_3_relevance),
        ("Classify + strategy", test_4_classify_and_strategy),
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
