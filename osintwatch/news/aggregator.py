"""
Source fan-out / fan-in for one aggregation cycle.

Every upstream call is a Branch: a name, a zero-argument coroutine factory
and an optional timeout. gather_branches() runs them concurrently under a
semaphore; a branch that times out or raises contributes [] and a warning,
so one dead source never fails the cycle. No retries: the next cycle is
the retry.

Results are concatenated in branch order, then stably sorted by
provenance before ranking, so deduplication keeps the copy from the most
preferred source.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Awaitable, Callable, List, Optional, Sequence

import httpx

from osintwatch.config import (
    FEED_TIERS, GDELT_ALT_SIGNAL_QUERIES, GDELT_EMERGENCY_QUERY, GDELT_EVENT_QUERIES,
    GDELT_PREDICTION_QUERIES, GDELT_SIGNAL_QUERIES, get_endpoint_profile, get_settings,
)
from osintwatch.news.event_classifier import ClassifierStrategy
from osintwatch.news.military import detect_military_activity
from osintwatch.news.predictions import generate_predictions
from osintwatch.news.ranker import enrich_and_rank, provenance_priority
from osintwatch.news.signals import build_signals
from osintwatch.schemas import (
    MilitaryActivity, PredictionSet, RankedEventSet, RawRecord, SignalSet, SourceSystem, SourceTier,
)
from osintwatch.shared.lexicons import Lexicon
from osintwatch.tools.event_sources import EventSourcesTool
from osintwatch.tools.gdelt_tool import GDELTTool
from osintwatch.tools.rss_tool import RSSTool

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Branch:
    name: str
    fetch: Callable[[], Awaitable[list]]
    timeout: Optional[float] = None


async def gather_branches(
    branches: Sequence[Branch],
    timeout: float = 15.0,
    concurrency: int = 6,
    total_timeout: Optional[float] = None,
) -> list:
    """
    Run branches concurrently and concatenate their results in branch order.

    Args:
        branches: work to run
        timeout: per-branch timeout when the branch sets none
        concurrency: max branches in flight
        total_timeout: cancel whatever is still running after this many
                       seconds; finished branches keep their results
    """
    if not branches:
        return []

    semaphore = asyncio.Semaphore(concurrency)

    async def _run_limited(branch: Branch):
        branch_timeout = branch.timeout or timeout
        async with semaphore:
            try:
                return await asyncio.wait_for(branch.fetch(), timeout=branch_timeout)
            except asyncio.TimeoutError:
                logger.warning(f"[TIMEOUT] {branch.name}: no response in {branch_timeout:.0f}s, skipping")
                return []

    tasks = [asyncio.ensure_future(_run_limited(b)) for b in branches]

    if total_timeout is not None:
        _, pending = await asyncio.wait(tasks, timeout=total_timeout)
        if pending:
            logger.warning(f"[TIMEOUT] {len(pending)}/{len(tasks)} branches still running after {total_timeout:.0f}s, cancelled")
            for task in pending:
                task.cancel()

    results = await asyncio.gather(*tasks, return_exceptions=True)

    merged = []
    for branch, result in zip(branches, results):
        if isinstance(result, asyncio.CancelledError):
            continue
        if isinstance(result, BaseException):
            logger.warning(f"[FAIL] {branch.name}: {result}")
        elif isinstance(result, list):
            merged.extend(result)
    return merged


def order_by_provenance(records: List[RawRecord]) -> List[RawRecord]:
    """Stable sort so the preferred source's copy of a story comes first."""
    return sorted(records, key=lambda r: provenance_priority(r.source_system))


class EventAggregator:
    """
    Wires the source registry in config.py to the enrichment pipeline.

    Each aggregate_* method is one endpoint's full cycle: fetch all of its
    branches, then rank (events, news) or build (signals, predictions,
    military activity).
    """

    def __init__(
        self,
        mock_mode: bool = False,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        lexicon: Optional[Lexicon] = None,
        classifier: Optional[ClassifierStrategy] = None,
    ):
        self.settings = get_settings()
        self.gdelt = GDELTTool(mock_mode=mock_mode, transport=transport)
        self.rss = RSSTool(mock_mode=mock_mode, transport=transport)
        self.sources = EventSourcesTool(mock_mode=mock_mode, transport=transport)
        self.lexicon = lexicon
        self.classifier = classifier

    # ── Branch builders ──

    def _gdelt_branch(self, query: str, max_records: int, source_system: SourceSystem,
                      timeout: float) -> Branch:
        return Branch(
            name=f"{source_system.value}: {query[:40]}",
            fetch=lambda: self.gdelt.fetch_query(query, max_records, source_system, timeout),
            timeout=timeout,
        )

    def _source_branch(self, source_id: str, timeout: float) -> Branch:
        return Branch(
            name=source_id,
            fetch=lambda: self.sources.fetch_source(source_id, timeout),
            timeout=timeout,
        )

    def _event_branches(self) -> List[Branch]:
        s = self.settings
        branches = [
            self._gdelt_branch(q, n, SourceSystem.GDELT, s.gdelt_timeout)
            for q, n in GDELT_EVENT_QUERIES
        ]
        query, n = GDELT_EMERGENCY_QUERY
        branches.append(self._gdelt_branch(query, n, SourceSystem.GDELT_EMERGENCY, s.gdelt_timeout))
        branches.append(self._source_branch("reliefweb", s.reliefweb_timeout))
        branches.append(self._source_branch("wikipedia", s.wikipedia_timeout))
        branches.append(self._source_branch("un_ocha", s.reliefweb_timeout))
        if s.acled_api_key:
            branches.append(self._source_branch("acled", s.acled_timeout))
        return branches

    # ── Endpoints ──

    async def fetch_event_records(self) -> List[RawRecord]:
        records = await gather_branches(
            self._event_branches(),
            timeout=self.settings.gdelt_timeout,
            concurrency=self.settings.source_concurrency,
        )
        logger.info(f"[EVENTS] {len(records)} raw records")
        return order_by_provenance(records)

    async def aggregate_events(self) -> RankedEventSet:
        records = await self.fetch_event_records()
        return enrich_and_rank(
            records,
            lexicon=self.lexicon,
            classifier=self.classifier,
            profile=get_endpoint_profile("events"),
        )

    async def fetch_news_records(self, tier: str = "tier_1") -> List[RawRecord]:
        """Raises ValueError for an unknown tier."""
        tier = SourceTier(tier).value
        s = self.settings
        branches = [
            Branch(
                name=feed_id,
                fetch=lambda fid=feed_id: self.rss.fetch_feed(fid, s.news_items_per_feed),
                timeout=s.news_feed_timeout,
            )
            for feed_id in FEED_TIERS[tier]
        ]
        records = await gather_branches(
            branches,
            timeout=s.news_feed_timeout,
            concurrency=s.source_concurrency,
            total_timeout=s.news_total_timeout,
        )
        logger.info(f"[NEWS {tier}] {len(records)} raw records from {len(branches)} feeds")
        return records

    async def aggregate_news(self, tier: str = "tier_1") -> RankedEventSet:
        records = await self.fetch_news_records(tier)
        # News keeps the news lexicon variant unless one was injected
        return enrich_and_rank(
            records,
            lexicon=self.lexicon,
            classifier=self.classifier,
            profile=get_endpoint_profile("news"),
        )

    async def fetch_signal_records(self) -> List[RawRecord]:
        s = self.settings
        primary = [
            self._gdelt_branch(q, n, SourceSystem.GDELT, s.signals_timeout)
            for q, n in GDELT_SIGNAL_QUERIES
        ]
        records = await gather_branches(primary, timeout=s.signals_timeout,
                                        concurrency=s.source_concurrency)
        if records:
            return records

        logger.info("[SIGNALS] Primary queries empty, trying alternate queries")
        alternate = [
            self._gdelt_branch(q, n, SourceSystem.GDELT_ALT, s.signals_timeout)
            for q, n in GDELT_ALT_SIGNAL_QUERIES
        ]
        return await gather_branches(alternate, timeout=s.signals_timeout,
                                     concurrency=s.source_concurrency)

    async def aggregate_signals(self) -> SignalSet:
        records = await self.fetch_signal_records()
        return build_signals(records, lexicon=self.lexicon,
                             profile=get_endpoint_profile("signals"))

    async def build_predictions(self) -> PredictionSet:
        s = self.settings
        branches = [
            self._gdelt_branch(q, n, SourceSystem.GDELT, s.gdelt_timeout)
            for q, n in GDELT_PREDICTION_QUERIES
        ]
        records = await gather_branches(branches, timeout=s.gdelt_timeout,
                                        concurrency=s.source_concurrency)
        return generate_predictions(records)

    async def detect_military_activity(self) -> MilitaryActivity:
        """Military zones from the ranked events plus both news tiers."""
        results = await asyncio.gather(
            self.aggregate_events(),
            self.aggregate_news("tier_1"),
            self.aggregate_news("tier_2"),
        )
        events = [event for ranked in results for event in ranked.events]
        return detect_military_activity(events, self.lexicon)
