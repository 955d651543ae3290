"""
RSS Tool for fetching international news feeds.

Feeds are configured in osintwatch.config.FEED_SOURCES and grouped into
tier_1 (broadcasters, papers of record) and tier_2 (regional, defence,
cyber). Each feed is fetched with httpx and parsed with feedparser.
"""

import html
import logging
import re
from datetime import datetime, timezone
from typing import Dict, List, Optional

import feedparser
import httpx
from langdetect import detect, LangDetectException
from langdetect import DetectorFactory
DetectorFactory.seed = 0  # Deterministic language detection

from osintwatch.config import FEED_SOURCES, get_settings
from osintwatch.schemas import RawRecord, SourceSystem, SourceType

logger = logging.getLogger(__name__)


class RSSTool:
    """Fetches one RSS/Atom feed and maps entries to RawRecord."""

    _USER_AGENT = "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/121.0.0.0 Safari/537.36"

    @staticmethod
    def _is_target_language(text: str, target_lang: str = "en") -> bool:
        """Check if text is in the target language using langdetect.

        Returns True if detected language matches target, or if text is too
        short for reliable detection (< 20 chars).
        """
        if not text or len(text.strip()) < 20:
            return True  # Too short to reliably detect
        try:
            detected = detect(text[:500])  # Cap input for speed
            return detected == target_lang
        except LangDetectException:
            return True  # Ambiguous, let through

    def __init__(self, mock_mode: bool = False,
                 transport: Optional[httpx.AsyncBaseTransport] = None):
        self.settings = get_settings()
        self.mock_mode = mock_mode or self.settings.mock_mode
        self.transport = transport

    async def fetch_feed(self, feed_id: str, max_items: Optional[int] = None) -> List[RawRecord]:
        """Fetch up to `max_items` entries of one configured feed.

        Network and parse failures are logged and yield [].
        """
        feed = FEED_SOURCES.get(feed_id)
        if not feed or self.mock_mode or feed.get("source_type") != SourceType.RSS.value:
            return []
        if max_items is None:
            max_items = self.settings.news_items_per_feed

        try:
            return await self._fetch_rss_source(feed, max_items)
        except Exception as e:
            logger.warning(f"[FAIL] {feed.get('name', feed_id)}: {e}")
            return []

    async def _fetch_rss_source(self, feed: Dict, max_items: int) -> List[RawRecord]:
        rss_url = feed.get("rss_url")
        if not rss_url:
            return []

        headers = {"User-Agent": self._USER_AGENT}
        async with httpx.AsyncClient(timeout=12.0, transport=self.transport) as client:
            response = await client.get(rss_url, follow_redirects=True, headers=headers)
            response.raise_for_status()

        parsed = feedparser.parse(response.text)
        records = []
        for entry in parsed.entries[:max_items]:
            record = self._parse_rss_entry(entry, feed)
            if record:
                records.append(record)

        logger.debug(f"RSS {feed['name']}: {len(records)}/{len(parsed.entries)} entries kept")
        return records

    def _parse_rss_entry(self, entry: Dict, feed: Dict) -> Optional[RawRecord]:
        """Parse RSS entry to RawRecord."""
        try:
            title = entry.get("title", "") or ""
            # Remove source suffix from title (e.g., "Headline - Reuters")
            if " - " in title:
                title = title.rsplit(" - ", 1)[0]

            summary = entry.get("summary", "") or entry.get("description", "") or ""
            summary = re.sub(r'<[^>]+>', '', summary)  # Strip HTML tags
            summary = html.unescape(summary)[:500]     # Decode &nbsp; &amp; etc.
            title = html.unescape(title).strip()

            target_lang = feed.get("language", "en")
            check_text = f"{title} {summary[:200]}"
            if not self._is_target_language(check_text, target_lang):
                logger.debug(f"Filtered non-{target_lang} article: {title[:60]}...")
                return None

            published = None
            if entry.get("published_parsed"):
                try:
                    published = datetime(*entry.published_parsed[:6], tzinfo=timezone.utc)
                except (TypeError, ValueError):
                    published = None

            return RawRecord(
                title=title,
                summary=summary,
                source=feed["name"],
                url=entry.get("link", ""),
                published_at=published,
                source_system=SourceSystem.RSS,
            )

        except Exception as e:
            logger.warning(f"Failed to parse entry: {e}")
            return None
