"""
Configuration management for the OSINT event enrichment pipeline.

Settings come from environment variables (or a local .env file).
Source registries, query lists and endpoint profiles are module-level data.
"""

from functools import lru_cache
from typing import Dict, List, Tuple
from urllib.parse import urlparse

from pydantic_settings import BaseSettings
from pydantic import BaseModel, Field


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # ── Enrichment ──
    # Lexicon variant used when a caller does not pass one: standard | compact | news
    lexicon_variant: str = Field(default="standard", alias="LEXICON_VARIANT")

    # ── Endpoint output ──
    events_page_size: int = Field(default=50, alias="EVENTS_PAGE_SIZE")
    events_retention_days: int = Field(default=7, alias="EVENTS_RETENTION_DAYS")
    news_page_size: int = Field(default=50, alias="NEWS_PAGE_SIZE")
    news_retention_days: int = Field(default=14, alias="NEWS_RETENTION_DAYS")
    signals_page_size: int = Field(default=50, alias="SIGNALS_PAGE_SIZE")
    signals_retention_days: int = Field(default=7, alias="SIGNALS_RETENTION_DAYS")

    # ── Source fan-out ──
    # Per-branch timeouts (seconds). A branch that exceeds its timeout contributes nothing.
    gdelt_timeout: float = Field(default=15.0, alias="GDELT_TIMEOUT")
    signals_timeout: float = Field(default=8.0, alias="SIGNALS_TIMEOUT")
    wikipedia_timeout: float = Field(default=10.0, alias="WIKIPEDIA_TIMEOUT")
    reliefweb_timeout: float = Field(default=15.0, alias="RELIEFWEB_TIMEOUT")
    acled_timeout: float = Field(default=15.0, alias="ACLED_TIMEOUT")
    source_concurrency: int = Field(default=6, alias="SOURCE_CONCURRENCY")

    # RSS news tiers
    news_items_per_feed: int = Field(default=5, alias="NEWS_ITEMS_PER_FEED")
    news_feed_timeout: float = Field(default=5.0, alias="NEWS_FEED_TIMEOUT")
    news_total_timeout: float = Field(default=25.0, alias="NEWS_TOTAL_TIMEOUT")

    # ── Deduplication ──
    # Shorter/longer normalized-title length ratio for containment duplicates.
    # 0.7 = "Russia masses troops" inside "Russia masses troops near border" counts only
    # when the shorter title covers at least 70% of the longer one.
    dedup_containment_threshold: float = Field(default=0.7, alias="DEDUP_CONTAINMENT_THRESHOLD")
    # Jaccard similarity of title keyword sets (stopwords removed)
    dedup_jaccard_threshold: float = Field(default=0.6, alias="DEDUP_JACCARD_THRESHOLD")
    # Batches at least this large use MinHash LSH to find candidate pairs
    dedup_lsh_min_records: int = Field(default=200, alias="DEDUP_LSH_MIN_RECORDS")
    dedup_num_perm: int = Field(default=128, alias="DEDUP_NUM_PERM")

    # ── Upstream credentials ──
    acled_api_key: str = Field(default="", alias="ACLED_API_KEY")
    acled_email: str = Field(default="", alias="ACLED_EMAIL")
    reliefweb_appname: str = Field(default="osintwatch", alias="RELIEFWEB_APPNAME")

    # Skip network access entirely (adapters return no records)
    mock_mode: bool = Field(default=False, alias="MOCK_MODE")

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# ══════════════════════════════════════════════════════════════════════════════
# ENDPOINT PROFILES
# ══════════════════════════════════════════════════════════════════════════════

# Matched as substrings of the lowercased source name and URL
BLOCKED_SOURCE_TERMS: Tuple[str, ...] = (
    # Academic / press-release noise
    "university", "college", "academic", "research",
    # Content farms and lifestyle spam
    "seduction", "dating", "romance", "relationship advice", "horoscope",
    "astrology", "lottery", "prize winner", "clickbait", "viral trend",
    # Blogs and social platforms
    "blogspot", "wordpress.com", "medium.com", "substack.com",
    "youtube.com", "youtu.be", "facebook.com", "twitter.com",
    "instagram.com", "tiktok", "reddit", "pinterest",
)

# Signals additionally drop academic sources by title
ACADEMIC_TERMS: Tuple[str, ...] = (
    ".edu", "university", "college", "academic", "research",
    "harvard", "stanford", "mit.edu", "yale", "princeton",
)

# Source domains (the source itself, or the URL host) ending in one of these are dropped
BLOCKED_DOMAIN_SUFFIXES: Tuple[str, ...] = (".edu",)

# Matched against the lowercased URL path, so feed listings never pass as articles
BLOCKED_PATH_TERMS: Tuple[str, ...] = ("/feed",)


class EndpointProfile(BaseModel):
    """Retention, page size, lexicon and blocklist for one output endpoint."""
    name: str
    retention_days: int = 7
    page_size: int = 50
    lexicon: str = "standard"
    blocked_terms: Tuple[str, ...] = ()
    blocked_domain_suffixes: Tuple[str, ...] = BLOCKED_DOMAIN_SUFFIXES
    blocked_path_terms: Tuple[str, ...] = BLOCKED_PATH_TERMS

    class Config:
        frozen = True

    def is_blocked(self, source: str, url: str) -> bool:
        """True when the source name or URL hits any of the profile's blocklists."""
        source = (source or "").lower().strip()
        url = (url or "").lower()
        if any(term in f"{source} {url}" for term in self.blocked_terms):
            return True
        try:
            parsed = urlparse(url)
            host, path = parsed.hostname or "", parsed.path
        except ValueError:
            host, path = "", url
        if any(domain.endswith(suffix) for domain in (source, host)
               for suffix in self.blocked_domain_suffixes):
            return True
        return any(term in path for term in self.blocked_path_terms)


# Provenance priority when merging sources. Unknown systems sort last.
SOURCE_PRIORITY: List[str] = [
    "GDELT",
    "ACLED",
    "ReliefWeb",
    "GDELT-Emergency",
    "GDELT-Alt",
    "Wikipedia",
    "UN OCHA",
    "RSS",
]

# Source-level classification overrides applied after keyword enrichment.
# Emergency and OCHA feeds are curated upstream, so their records are at least "high".
SOURCE_OVERRIDES: Dict[str, Dict[str, str]] = {
    "GDELT-Emergency": {"severity": "high"},
    "UN OCHA": {"category": "humanitarian", "severity": "high"},
}


def get_endpoint_profile(name: str) -> EndpointProfile:
    """Build the profile for an endpoint from current settings.

    Raises KeyError for unknown endpoint names.
    """
    s = get_settings()
    profiles = {
        "events": EndpointProfile(
            name="events",
            retention_days=s.events_retention_days,
            page_size=s.events_page_size,
            lexicon=s.lexicon_variant,
            blocked_terms=BLOCKED_SOURCE_TERMS,
        ),
        "news": EndpointProfile(
            name="news",
            retention_days=s.news_retention_days,
            page_size=s.news_page_size,
            lexicon="news",
            blocked_terms=BLOCKED_SOURCE_TERMS,
        ),
        "signals": EndpointProfile(
            name="signals",
            retention_days=s.signals_retention_days,
            page_size=s.signals_page_size,
            lexicon=s.lexicon_variant,
            blocked_terms=BLOCKED_SOURCE_TERMS + ACADEMIC_TERMS,
        ),
    }
    return profiles[name]


# ══════════════════════════════════════════════════════════════════════════════
# GDELT QUERIES
# ══════════════════════════════════════════════════════════════════════════════

GDELT_DOC_API = "https://api.gdeltproject.org/api/v2/doc/doc"

# (query, maxrecords)
GDELT_EVENT_QUERIES: List[Tuple[str, int]] = [
    ("conflict war attack invasion offensive Ukraine Gaza Sudan Ethiopia Myanmar Yemen Syria Iraq sourcelang:english", 50),
    ("tension crisis summit negotiation sanctions election protest coup political instability sourcelang:english", 50),
    ("terrorism terrorist attack bombing militant insurgency extremist ISIS Al-Qaeda Hamas Hezbollah sourcelang:english", 40),
    ("humanitarian crisis refugee displacement famine aid genocide atrocity sourcelang:english", 30),
    ("China Taiwan South China Sea Iran Israel Russia NATO India Pakistan North Korea sourcelang:english", 40),
]

GDELT_EMERGENCY_QUERY: Tuple[str, int] = (
    "disaster emergency crisis earthquake flood hurricane fire sourcelang:english", 30,
)

GDELT_SIGNAL_QUERIES: List[Tuple[str, int]] = [
    ("military conflict violence sourcelang:english", 20),
    ("political unrest protest sourcelang:english", 20),
    ("nuclear missile threat sourcelang:english", 20),
    ("terrorist attack sourcelang:english", 20),
    ("diplomatic tension sourcelang:english", 20),
]

# Used only when every primary signal query comes back empty
GDELT_ALT_SIGNAL_QUERIES: List[Tuple[str, int]] = [
    ("government instability sourcelang:english", 20),
    ("border conflict sourcelang:english", 20),
    ("cyber attack sourcelang:english", 20),
    ("energy crisis sourcelang:english", 20),
    ("refugee displacement sourcelang:english", 20),
]

GDELT_PREDICTION_QUERIES: List[Tuple[str, int]] = [
    ("transcript sourcelang:english", 200),
    ("tension escalation threat assessment sourcelang:english", 100),
]


# ══════════════════════════════════════════════════════════════════════════════
# OTHER EVENT APIS
# ══════════════════════════════════════════════════════════════════════════════

RELIEFWEB_EVENTS_API = "https://api.reliefweb.int/v1/events"
ACLED_API = "https://api.acleddata.com/acled/read"
WIKIPEDIA_FEATURED_API = "https://en.wikipedia.org/api/rest_v1/feed/featured"
UN_OCHA_API = "https://api.hpc.tools/v1/public/situation-reports"


# ══════════════════════════════════════════════════════════════════════════════
# RSS FEEDS - international news tiers
# ══════════════════════════════════════════════════════════════════════════════

def _feed(feed_id: str, name: str, rss_url: str, tier: str, country: str,
          credibility: float = 0.9, categories: List[str] = None) -> Dict:
    return {
        "id": feed_id,
        "name": name,
        "source_type": "rss",
        "tier": tier,
        "credibility_score": credibility,
        "rss_url": rss_url,
        "categories": categories or ["world"],
        "language": "en",
        "country": country,
    }


FEED_SOURCES: Dict[str, Dict] = {
    # ─────────────────────────────────────────────────────────────────────────
    # TIER 1: International broadcasters and papers of record
    # ─────────────────────────────────────────────────────────────────────────
    "bbc_world": _feed("bbc_world", "BBC World", "https://feeds.bbci.co.uk/news/world/rss.xml", "tier_1", "GB", 0.95),
    "guardian_world": _feed("guardian_world", "The Guardian World", "https://www.theguardian.com/world/rss", "tier_1", "GB", 0.93),
    "cnn_world": _feed("cnn_world", "CNN World", "https://rss.cnn.com/rss/cnn_world.rss", "tier_1", "US", 0.9),
    "nyt_world": _feed("nyt_world", "NY Times", "https://rss.nytimes.com/services/xml/rss/nyt/World.xml", "tier_1", "US", 0.95),
    "wapo_world": _feed("wapo_world", "Washington Post", "https://feeds.washingtonpost.com/rss/world", "tier_1", "US", 0.93),
    "the_week": _feed("the_week", "The Week", "https://www.theweek.co.uk/rss.xml", "tier_1", "GB", 0.85),
    "euronews": _feed("euronews", "Euronews English", "https://www.euronews.com/rss", "tier_1", "FR", 0.88),
    "sky_news": _feed("sky_news", "Sky News", "https://news.sky.com/rss", "tier_1", "GB", 0.88),
    "france24": _feed("france24", "France 24", "https://www.france24.com/en/rss", "tier_1", "FR", 0.9),
    "dw_english": _feed("dw_english", "DW English", "https://www.dw.com/rss/en.rss", "tier_1", "DE", 0.92),
    "trt_world": _feed("trt_world", "TRT World", "https://www.trtworld.com/rss", "tier_1", "TR", 0.8),
    "irish_times": _feed("irish_times", "Irish Times", "https://www.irishtimes.com/rss/news", "tier_1", "IE", 0.88),
    "abc_au": _feed("abc_au", "ABC News Australia", "https://www.abc.net.au/news/feed/51120/rss.xml", "tier_1", "AU", 0.9),
    "abc_au_intl": _feed("abc_au_intl", "ABC News International", "https://www.abc.net.au/news/feed/1009/rss.xml", "tier_1", "AU", 0.9),
    "nhk_world": _feed("nhk_world", "NHK World", "https://www3.nhk.or.jp/rss/news/world-eng.xml", "tier_1", "JP", 0.9),
    "japan_times": _feed("japan_times", "The Japan Times", "https://www.japantimes.co.jp/feed/", "tier_1", "JP", 0.88),

    # ─────────────────────────────────────────────────────────────────────────
    # TIER 2: Regional outlets, defence and security press
    # ─────────────────────────────────────────────────────────────────────────
    "times_of_india": _feed("times_of_india", "The Times of India", "https://timesofindia.indiatimes.com/rssfeeds/-2128934595.cms", "tier_2", "IN", 0.8),
    "hindustan_times": _feed("hindustan_times", "Hindustan Times", "https://www.hindustantimes.com/feeds/rssIndia.xml", "tier_2", "IN", 0.8),
    "cna": _feed("cna", "Channel News Asia", "https://www.channelnewsasia.com/rss/cnews/world/rss.xml", "tier_2", "SG", 0.85),
    "scmp": _feed("scmp", "SCMP", "https://www.scmp.com/rss/feed/2/feed.xml", "tier_2", "HK", 0.85),
    "times_of_israel": _feed("times_of_israel", "Times of Israel", "https://www.timesofisrael.com/feed/", "tier_2", "IL", 0.82),
    "arab_news": _feed("arab_news", "Arab News", "https://www.arabnews.com/rss/category/middle-east", "tier_2", "SA", 0.8),
    "defense_news": _feed("defense_news", "Defense News", "https://www.defensenews.com/arc/outboundfeeds/rss/", "tier_2", "US", 0.85, ["defense"]),
    "defense_one": _feed("defense_one", "Defense One", "https://www.defenseone.com/feed/", "tier_2", "US", 0.85, ["defense"]),
    "military_times": _feed("military_times", "Military Times", "https://www.militarytimes.com/arc/outboundfeeds/rss/", "tier_2", "US", 0.82, ["defense"]),
    "hacker_news": _feed("hacker_news", "The Hacker News", "https://feeds.feedburner.com/TheHackersNews", "tier_2", "US", 0.78, ["cyber"]),
    "bleepingcomputer": _feed("bleepingcomputer", "BleepingComputer", "https://www.bleepingcomputer.com/feed/", "tier_2", "US", 0.82, ["cyber"]),
    "krebs": _feed("krebs", "Krebs on Security", "https://krebsonsecurity.com/feed/", "tier_2", "US", 0.85, ["cyber"]),
    "securityweek": _feed("securityweek", "SecurityWeek", "https://www.securityweek.com/rss", "tier_2", "US", 0.8, ["cyber"]),
    "dark_reading": _feed("dark_reading", "Dark Reading", "https://www.darkreading.com/rss", "tier_2", "US", 0.8, ["cyber"]),
    "techcrunch": _feed("techcrunch", "TechCrunch", "https://techcrunch.com/feed/", "tier_2", "US", 0.78, ["technology"]),
    "wired": _feed("wired", "Wired", "https://www.wired.com/feed/rss", "tier_2", "US", 0.8, ["technology"]),
}

# Quick access lists
TIER_1_FEEDS = [src["id"] for src in FEED_SOURCES.values() if src["tier"] == "tier_1"]
TIER_2_FEEDS = [src["id"] for src in FEED_SOURCES.values() if src["tier"] == "tier_2"]
FEED_TIERS = {"tier_1": TIER_1_FEEDS, "tier_2": TIER_2_FEEDS}
