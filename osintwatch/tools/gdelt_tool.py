"""
GDELT DOC API v2 adapter.

GDELT indexes ~300k articles/day across 100+ languages. We use the
artlist mode, which returns title/url/domain/seendate but no summaries.

The API is flaky in well-known ways, all of which yield [] rather than
an exception:
  - 429 when rate limited
  - an HTML error page with a 200 status
  - JSONP-wrapped or otherwise malformed JSON
"""

import json
import logging
from datetime import datetime, timezone
from typing import Dict, List, Optional

import httpx

from osintwatch.config import GDELT_DOC_API, get_settings
from osintwatch.schemas import RawRecord, SourceSystem

logger = logging.getLogger(__name__)


def parse_gdelt_date(date_str: str) -> datetime:
    """Parse GDELT date format: '20260205T143000Z' → aware UTC datetime."""
    now = datetime.now(timezone.utc)
    if not date_str:
        return now
    try:
        # Format: YYYYMMDDTHHMMSSZ
        parsed = datetime.strptime(date_str, "%Y%m%dT%H%M%SZ")
    except ValueError:
        try:
            # Sometimes just YYYYMMDDHHMMSS
            parsed = datetime.strptime(date_str[:14], "%Y%m%d%H%M%S")
        except ValueError:
            return now
    return parsed.replace(tzinfo=timezone.utc)


class GDELTTool:
    """Runs one GDELT DOC query and maps articles to RawRecord."""

    def __init__(self, mock_mode: bool = False,
                 transport: Optional[httpx.AsyncBaseTransport] = None):
        self.settings = get_settings()
        self.mock_mode = mock_mode or self.settings.mock_mode
        self.transport = transport

    async def fetch_query(
        self,
        query: str,
        max_records: int = 50,
        source_system: SourceSystem = SourceSystem.GDELT,
        timeout: Optional[float] = None,
    ) -> List[RawRecord]:
        """
        Fetch articles for one query.

        Args:
            query: GDELT query string (include sourcelang:english)
            max_records: GDELT maxrecords (capped at 250 by the API)
            source_system: provenance tag stamped on every record
            timeout: HTTP timeout in seconds (defaults to GDELT_TIMEOUT)
        """
        if self.mock_mode:
            return []

        params = {
            "query": query,
            "mode": "artlist",
            "format": "json",
            "maxrecords": str(min(max_records, 250)),
            "sort": "DateDesc",
        }
        timeout = timeout or self.settings.gdelt_timeout

        try:
            async with httpx.AsyncClient(timeout=timeout, transport=self.transport) as client:
                response = await client.get(GDELT_DOC_API, params=params)
        except httpx.TimeoutException:
            logger.warning(f"GDELT timeout ({timeout:.0f}s): {query[:50]}")
            return []
        except httpx.HTTPError as e:
            logger.warning(f"GDELT fetch failed: {e}")
            return []

        data = self._decode(response)
        if data is None:
            return []

        raw_articles = data.get("articles", []) or []
        records = self.parse_articles(raw_articles, source_system)
        logger.info(f"GDELT ({SourceSystem(source_system).value}): {len(records)} records from {len(raw_articles)} raw")
        return records

    def _decode(self, response: httpx.Response) -> Optional[Dict]:
        # GDELT returns 429 on rate limit, HTML on error
        if response.status_code == 429:
            logger.warning("GDELT rate limited (429), skipping")
            return None
        if response.status_code != 200:
            logger.debug(f"GDELT HTTP {response.status_code}")
            return None

        content_type = response.headers.get("content-type", "")
        if "text/html" in content_type:
            logger.debug("GDELT returned HTML (error page), skipping")
            return None

        text = response.text.strip()
        if not text:
            return None
        try:
            data = json.loads(text)
        except ValueError:
            # Try stripping JSONP wrapper: callback({...})
            if text.startswith("(") and text.endswith(")"):
                text = text[1:-1]
            try:
                data = json.loads(text)
            except ValueError:
                logger.debug(f"GDELT returned unparseable response ({len(text)} chars)")
                return None

        return data if isinstance(data, dict) else None

    def parse_articles(self, raw_articles: List[Dict], source_system: SourceSystem) -> List[RawRecord]:
        records = []
        for item in raw_articles:
            if not isinstance(item, dict):
                continue
            title = (item.get("title") or "").strip()
            url = (item.get("url") or "").strip()
            if not title or not url:
                continue

            records.append(RawRecord(
                title=title,
                summary="",  # artlist doesn't return summaries
                source=item.get("domain") or "GDELT",
                url=url,
                published_at=parse_gdelt_date(item.get("seendate", "")),
                source_system=source_system,
            ))
        return records
