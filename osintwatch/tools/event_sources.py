"""
Structured event APIs: ReliefWeb, ACLED, Wikipedia and UN OCHA.

Each fetcher returns RawRecord lists stamped with its SourceSystem.
Classification is not done here; the ranker enriches every record the
same way regardless of where it came from.
"""

import logging
import re
import html
from datetime import datetime, timezone
from typing import Dict, List, Optional

import httpx

from osintwatch.config import (
    ACLED_API, RELIEFWEB_EVENTS_API, UN_OCHA_API, WIKIPEDIA_FEATURED_API, get_settings,
)
from osintwatch.schemas import RawRecord, SourceSystem

logger = logging.getLogger(__name__)

_TAGS = re.compile(r"<[^>]+>")
_COMMENTS = re.compile(r"<!--.*?-->", re.DOTALL)


def parse_iso_datetime(date_str: Optional[str]) -> Optional[datetime]:
    """ISO-8601 (with Z or offset) or plain YYYY-MM-DD. None if unparseable."""
    if not date_str:
        return None
    value = str(date_str).strip().replace("Z", "+00:00")
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError:
        try:
            parsed = datetime.strptime(value[:10], "%Y-%m-%d")
        except ValueError:
            return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def strip_html(text: Optional[str]) -> str:
    text = _COMMENTS.sub("", text or "")
    return html.unescape(_TAGS.sub("", text)).strip()


class EventSourcesTool:
    """Fetchers for the non-GDELT event APIs, selected by source id."""

    # Dispatch table mapping source IDs to their fetch methods.
    _API_DISPATCH = {
        "reliefweb": "_fetch_reliefweb",
        "acled": "_fetch_acled",
        "wikipedia": "_fetch_wikipedia",
        "un_ocha": "_fetch_un_ocha",
    }

    def __init__(self, mock_mode: bool = False,
                 transport: Optional[httpx.AsyncBaseTransport] = None):
        self.settings = get_settings()
        self.mock_mode = mock_mode or self.settings.mock_mode
        self.transport = transport

    @property
    def source_ids(self) -> List[str]:
        return list(self._API_DISPATCH)

    async def fetch_source(self, source_id: str, timeout: Optional[float] = None) -> List[RawRecord]:
        """Fetch one source. Unknown ids and upstream failures yield []."""
        method_name = self._API_DISPATCH.get(source_id)
        if not method_name or self.mock_mode:
            return []

        method = getattr(self, method_name)
        try:
            return await method(timeout or 15.0)
        except httpx.TimeoutException:
            logger.warning(f"[TIMEOUT] {source_id}: no response, skipping")
            return []
        except (httpx.HTTPError, ValueError) as e:
            logger.warning(f"[FAIL] {source_id}: {e}")
            return []

    async def _get_json(self, url: str, params: Optional[Dict], timeout: float) -> Dict:
        async with httpx.AsyncClient(timeout=timeout, transport=self.transport) as client:
            response = await client.get(url, params=params, follow_redirects=True,
                                        headers={"Accept": "application/json"})
            response.raise_for_status()
            data = response.json()
        return data if isinstance(data, dict) else {}

    async def _fetch_reliefweb(self, timeout: float) -> List[RawRecord]:
        """ReliefWeb disasters/emergencies feed (free, appname required)."""
        params = {
            "appname": self.settings.reliefweb_appname,
            "limit": 50,
            "profile": "full",
            "sort[]": "date:desc",
        }
        data = await self._get_json(RELIEFWEB_EVENTS_API, params, timeout)

        records = []
        for item in data.get("data", []) or []:
            fields = item.get("fields") or {}
            name = fields.get("name")
            if not name:
                continue
            url = fields.get("url") or f"https://reliefweb.int{fields.get('url_alias', '')}"
            records.append(RawRecord(
                title=name,
                summary=strip_html(fields.get("description"))[:500],
                source="ReliefWeb",
                url=url,
                published_at=parse_iso_datetime((fields.get("date") or {}).get("created")),
                source_system=SourceSystem.RELIEFWEB,
            ))

        logger.info(f"ReliefWeb: {len(records)} events")
        return records

    async def _fetch_acled(self, timeout: float) -> List[RawRecord]:
        """ACLED conflict events. Requires ACLED_API_KEY and ACLED_EMAIL."""
        if not self.settings.acled_api_key or not self.settings.acled_email:
            logger.debug("ACLED_API_KEY/ACLED_EMAIL not set, skipping")
            return []

        params = {
            "key": self.settings.acled_api_key,
            "email": self.settings.acled_email,
            "format": "json",
            "limit": 50,
        }
        data = await self._get_json(ACLED_API, params, timeout)

        records = []
        for event in data.get("data", []) or []:
            event_type = event.get("event_type") or ""
            if not event_type:
                continue
            # Name the place in the title so the locator can resolve it
            place = ", ".join(p for p in (event.get("location"), event.get("country")) if p)
            title = f"{event_type} in {place}" if place else event_type
            records.append(RawRecord(
                title=title,
                summary=event.get("notes") or event.get("sub_event_type") or "",
                source="ACLED",
                url=f"https://acleddata.com/event/{event.get('event_id_cnty', '')}",
                published_at=parse_iso_datetime(event.get("event_date")),
                source_system=SourceSystem.ACLED,
            ))

        logger.info(f"ACLED: {len(records)} events")
        return records

    async def _fetch_wikipedia(self, timeout: float) -> List[RawRecord]:
        """Wikipedia "In the news" items from today's featured feed."""
        today = datetime.now(timezone.utc)
        url = f"{WIKIPEDIA_FEATURED_API}/{today:%Y/%m/%d}"
        data = await self._get_json(url, None, timeout)

        records = []
        for item in (data.get("news") or [])[:20]:
            story = strip_html(item.get("story"))
            if not story:
                continue
            links = item.get("links") or []
            page_url = ""
            summary = ""
            if links:
                page_url = ((links[0].get("content_urls") or {}).get("desktop") or {}).get("page", "")
                summary = (links[0].get("extract") or "")[:500]
            records.append(RawRecord(
                title=story,
                summary=summary,
                source="Wikipedia",
                url=page_url,
                published_at=today,
                source_system=SourceSystem.WIKIPEDIA,
            ))

        logger.info(f"Wikipedia: {len(records)} current events")
        return records

    async def _fetch_un_ocha(self, timeout: float) -> List[RawRecord]:
        """UN OCHA situation reports."""
        data = await self._get_json(UN_OCHA_API, {"limit": 30}, timeout)

        records = []
        for report in data.get("data", []) or []:
            title = report.get("title")
            if not title:
                continue
            records.append(RawRecord(
                title=title,
                summary=strip_html(report.get("description"))[:500],
                source="UN OCHA",
                url=report.get("webUrl") or "",
                published_at=parse_iso_datetime(report.get("dateCreated")),
                source_system=SourceSystem.UN_OCHA,
            ))

        logger.info(f"UN OCHA: {len(records)} reports")
        return records
