"""
Regional trend indicators from event keyword frequency.

For each indicator in PREDICTION_INDICATORS, count headlines mentioning
any of its keywords in the last 24 hours and in the 48 hours before that.
The ratio drives the trend direction, and the direction selects the
published level and probability from the indicator row.

No events means no forecasts: the result is an empty PredictionSet
marked "No Data Available".
"""

import logging
from datetime import datetime, timedelta
from typing import Iterable, Optional, Sequence

from osintwatch.schemas import (
    NO_DATA_AVAILABLE, Prediction, PredictionSet, TrendDirection, as_utc,
)
from osintwatch.shared.lexicons import PREDICTION_INDICATORS, PredictionIndicator

logger = logging.getLogger(__name__)

ESCALATION_RATIO = 1.5
DEESCALATION_RATIO = 0.7


def _mentions(event, keywords: Sequence[str]) -> bool:
    title = (getattr(event, "title", "") or "").lower()
    return any(kw in title for kw in keywords)


def analyze_event_trend(
    events: Iterable,
    keywords: Sequence[str],
    now: Optional[datetime] = None,
) -> TrendDirection:
    """Compare keyword hits in (now-24h, now] against (now-72h, now-24h]."""
    now = as_utc(now)
    one_day_ago = now - timedelta(days=1)
    three_days_ago = now - timedelta(days=3)

    recent = previous = 0
    for event in events:
        if not _mentions(event, keywords):
            continue
        published = event.published_at
        if published > one_day_ago:
            recent += 1
        elif published > three_days_ago:
            previous += 1

    if recent == 0 and previous == 0:
        return TrendDirection.STABLE
    if recent > previous * ESCALATION_RATIO:
        return TrendDirection.ESCALATING
    if recent < previous * DEESCALATION_RATIO:
        return TrendDirection.DE_ESCALATING
    return TrendDirection.STABLE


def build_prediction(
    indicator: PredictionIndicator,
    trend: TrendDirection,
    now: datetime,
) -> Prediction:
    level = indicator.level_for(trend.value)
    probability = (
        indicator.escalating_probability if trend == TrendDirection.ESCALATING
        else indicator.baseline_probability
    )
    return Prediction(
        id=indicator.id,
        category=indicator.category,
        title=f"{indicator.name}: {level.capitalize()}",
        question=indicator.question,
        indicator=level,
        trend=trend,
        probability=probability,
        timeframe=indicator.timeframe,
        factors=list(indicator.factors),
        confidence=indicator.confidence,
        last_updated=now,
    )


def generate_predictions(
    events: Iterable,
    now: Optional[datetime] = None,
    indicators: Sequence[PredictionIndicator] = PREDICTION_INDICATORS,
) -> PredictionSet:
    now = as_utc(now)
    events = list(events or [])

    if not events:
        logger.info("Predictions: no events to analyze")
        return PredictionSet(last_updated=now, data_source=NO_DATA_AVAILABLE)

    predictions = []
    for indicator in indicators:
        trend = analyze_event_trend(events, indicator.keywords, now)
        predictions.append(build_prediction(indicator, trend, now))
        logger.debug(f"Prediction {indicator.id}: {trend.value}")

    sources = []
    for event in events:
        system = getattr(event, "source_system", "")
        if system and system not in sources:
            sources.append(system)

    logger.info(f"Predictions: {len(predictions)} indicators from {len(events)} events")
    return PredictionSet(
        predictions=predictions,
        last_updated=now,
        events_analyzed=len(events),
        data_source=", ".join(sources) or NO_DATA_AVAILABLE,
    )
