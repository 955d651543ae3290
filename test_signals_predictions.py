"""
Diagnostic tests for signals, trend predictions and military activity zones.
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


def _raw(title, source="example.org", system="GDELT", hours_ago=1, url=""):
    from osintwatch.schemas import RawRecord
    return RawRecord(
        title=title,
        source=source,
        url=url or f"https://{source}/{abs(hash(title))}",
        published_at=NOW - timedelta(hours=hours_ago),
        source_system=system,
    )


def test_1_signal_helpers():
    """Test 1: Signal category and source confidence tables."""
    print("\n" + "=" * 60)
    print("TEST 1: Signal category + confidence")
    print("=" * 60)

    from osintwatch.news.signals import categorize_signal, estimate_confidence
    from osintwatch.schemas import SignalCategory

    assert categorize_signal("Troop buildup reported") == SignalCategory.MILITARY
    assert categorize_signal("Regime faces election challenge") == SignalCategory.POLITICAL
    assert categorize_signal("New sanction package announced") == SignalCategory.ECONOMIC
    assert categorize_signal("Missile test over sea") == SignalCategory.STRATEGIC
    assert categorize_signal("Local bakery wins prize") == SignalCategory.GENERAL
    assert categorize_signal(None) == SignalCategory.GENERAL

    assert estimate_confidence("reuters.com") == 0.9
    assert estimate_confidence("crisisgroup.org") == 0.7
    assert estimate_confidence("example.org") == 0.5
    assert estimate_confidence(None) == 0.5


def test_2_build_signals():
    """Test 2: Title dedup, academic filter, alternate-query penalty, ordering."""
    print("\n" + "=" * 60)
    print("TEST 2: build_signals")
    print("=" * 60)

    from osintwatch.news.signals import build_signals

    records = [
        _raw("Border skirmish reported in Kashmir", source="example.org"),
        _raw("Missile launch detected off Japan", source="reuters.com"),
        _raw("missile launch detected off japan ", source="example.org"),
        _raw("Seminar on deterrence theory", source="stanford.edu"),
        _raw("Drone strike hits depot in Yemen", source="reuters.com", system="GDELT-Alt"),
        _raw("Protest grows in Caracas", source="example.org", system="GDELT-Alt"),
    ]
    result = build_signals(records, now=NOW, limit=10)
    for s in result.signals:
        print(f"  {s.confidence:.2f} [{s.data_source}] {s.category:9} {s.region:12} {s.title}")

    titles = [s.title for s in result.signals]
    assert titles == [
        "Missile launch detected off Japan",       # 0.9
        "Drone strike hits depot in Yemen",        # 0.9 - 0.1
        "Border skirmish reported in Kashmir",     # 0.5
        "Protest grows in Caracas",                # 0.5 - 0.1
    ]
    assert [s.confidence for s in result.signals] == [0.9, 0.8, 0.5, 0.4]
    assert result.total_count == 4
    assert result.data_source == "GDELT"
    assert result.sources_used == ["GDELT", "GDELT-Alt"]

    japan = result.signals[0]
    assert japan.region == "Asia"
    assert japan.location.country == "JP"
    assert japan.category == "strategic"

    empty = build_signals([], now=NOW)
    assert empty.signals == [] and empty.data_source == "No Data"

    assert len(build_signals(records, now=NOW, limit=2).signals) == 2

    # The signals profile supplies the blocklist and the retention window
    from osintwatch.config import get_endpoint_profile
    profile = get_endpoint_profile("signals")
    mixed = [
        _raw("Troop convoy spotted near border", source="someone.medium.com"),
        _raw("Missile drills announced by navy", hours_ago=24 * (profile.retention_days + 1)),
        _raw("Coup rumours swirl in capital"),
    ]
    kept = build_signals(mixed, now=NOW, profile=profile)
    assert [s.title for s in kept.signals] == ["Coup rumours swirl in capital"]
    short = profile.copy(update={"retention_days": 0})
    assert build_signals(mixed[2:], now=NOW, profile=short).signals == []


def test_3_trend_analysis():
    """Test 3: Last 24h vs the 48h before decides the trend."""
    print("\n" + "=" * 60)
    print("TEST 3: analyze_event_trend")
    print("=" * 60)

    from osintwatch.news.predictions import analyze_event_trend
    from osintwatch.schemas import TrendDirection

    keywords = ("iran",)
    rising = [_raw("Iran news", hours_ago=h) for h in (1, 2, 3)] + [_raw("Iran news", hours_ago=30)]
    falling = [_raw("Iran news", hours_ago=h) for h in (30, 40, 50)]
    steady = [_raw("Iran news", hours_ago=h) for h in (1, 30)]
    too_old = [_raw("Iran news", hours_ago=100)]

    assert analyze_event_trend(rising, keywords, NOW) == TrendDirection.ESCALATING
    assert analyze_event_trend(falling, keywords, NOW) == TrendDirection.DE_ESCALATING
    assert analyze_event_trend(steady, keywords, NOW) == TrendDirection.STABLE
    assert analyze_event_trend(too_old, keywords, NOW) == TrendDirection.STABLE
    assert analyze_event_trend([], keywords, NOW) == TrendDirection.STABLE


def test_4_predictions():
    """Test 4: Five indicators from events; no events → no forecasts."""
    print("\n" + "=" * 60)
    print("TEST 4: generate_predictions")
    print("=" * 60)

    from osintwatch.news.predictions import generate_predictions

    empty = generate_predictions([], now=NOW)
    assert empty.predictions == []
    assert empty.data_source == "No Data Available"

    events = [
        _raw("Iran fires drones", hours_ago=2),
        _raw("Iran talks stall", hours_ago=3),
        _raw("Gaza ceasefire holds", hours_ago=4),
        _raw("Israel cabinet meets", hours_ago=30),
    ]
    result = generate_predictions(events, now=NOW)
    by_id = {p.id: p for p in result.predictions}
    for p in result.predictions:
        print(f"  {p.id:14} {p.title:30} p={p.probability:.2f} ({p.trend})")

    assert len(result.predictions) == 5
    assert result.events_analyzed == 4
    assert result.data_source == "GDELT"

    me = by_id["pred-me-001"]
    assert me.trend == "escalating"
    assert me.title == "Middle East: Escalating"
    assert me.probability == 0.72

    assert by_id["pred-eur-001"].probability == 0.42
    assert by_id["pred-gl-001"].indicator == "elevated"
    assert by_id["pred-gl-001"].title == "Global Markets: Elevated"
    assert by_id["pred-str-001"].indicator == "moderate"
    assert by_id["pred-hlth-001"].indicator == "low"

    # A naive reference time is read as UTC
    naive = generate_predictions(events, now=NOW.replace(tzinfo=None))
    assert [p.probability for p in naive.predictions] == [p.probability for p in result.predictions]


def test_5_military_activity():
    """Test 5: Keyword + exclusion + location gating, branch and intensity."""
    print("\n" + "=" * 60)
    print("TEST 5: detect_military_activity")
    print("=" * 60)

    from osintwatch.news.military import (
        detect_military_activity, categorize_military_branch, estimate_intensity,
    )
    from osintwatch.news.ranker import enrich_record
    from osintwatch.news.event_classifier import KeywordEventClassifier
    from osintwatch.shared.lexicons import NEWS

    airstrike = enrich_record(_raw("Airstrike hits convoy in Syria"), KeywordEventClassifier(NEWS), NEWS)
    events = [
        airstrike,
        _raw("Troop deployment near Sudan"),
        _raw("Military aid to Ukraine debated"),          # commentary, excluded
        _raw("Troops deployed along the frontier"),       # no location
        _raw("Bakery opens in Kenya"),                    # not military
    ]
    activity = detect_military_activity(events)
    for z in activity.zones:
        print(f"  {z.branch:9} {z.intensity:.2f} {z.name}")

    assert activity.total_zones == 2
    first, second = activity.zones
    assert first.branch == "air-force"
    assert first.intensity == 0.95          # critical severity floor
    assert first.country == "SY"
    assert (first.latitude, first.longitude) == (34.8021, 38.9968)
    assert second.branch == "army"
    assert second.intensity == 0.6
    assert activity.counts == {"army": 1, "navy": 0, "air-force": 1, "combined": 0}

    assert categorize_military_branch("naval blockade tightens") == "navy"
    assert categorize_military_branch("special forces operation") == "combined"
    assert estimate_intensity("clash at checkpoint") == 0.75
    assert estimate_intensity("quiet patrol", "high") == 0.8

    none = detect_military_activity([_raw("Bakery opens in Kenya")])
    assert none.zones == [] and none.data_source == "No Military Activity Data"


def main():
    """Run all signal/prediction/military tests."""
    print("=" * 60)
    print("SIGNALS + PREDICTIONS TEST SUITE")
    print(f"Time: {time.strftime('%Y-%m-%d %H:%M:%S')}")
    print("=" * 60)

    tests = [
        ("Signal helpers", test_1_signal_helpers),
        ("Build signals", test_2_build_signals),
        ("Trend analysis", test_3_trend_analysis),
        ("Predictions", test_4_predictions),
        ("Military activity", test_5_military_activity),
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
