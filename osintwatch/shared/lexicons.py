"""
Keyword lexicons for event enrichment: single source for every keyword table.

Used by:
  - osintwatch.news.event_classifier (category, severity, relevance)
  - osintwatch.shared.geo (ordered place table)
  - osintwatch.news.signals / predictions / military (sibling tables)

All tables are frozen dataclasses holding tuples, built once at import time
and passed into the classifier/locator as parameters. Ordered data (category
priority, place table) is always a tuple, never a dict, so iteration order is
part of the contract.

Variants:
  - STANDARD: events endpoint (largest curated lists)
  - COMPACT:  edge events endpoint (shorter category/severity lists)
  - NEWS:     news feed tiers (headline-tuned severity lists)

NOTE: severity tiers intentionally contain bare country/region names
("ukraine", "gaza", "sudan"). A plain mention elevates severity so that
active theatres stay visible on the dashboard.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Tuple


@dataclass(frozen=True)
class KeywordGroup:
    """Label assigned when any keyword is a substring of the lowercased text."""
    label: str
    keywords: Tuple[str, ...]

    def matches(self, text_lower: str) -> bool:
        return any(kw in text_lower for kw in self.keywords)


@dataclass(frozen=True)
class ScoredGroup:
    """Keyword group that contributes points to a relevance score."""
    label: str
    points: int
    keywords: Tuple[str, ...]

    def matches(self, text_lower: str) -> bool:
        return any(kw in text_lower for kw in self.keywords)


@dataclass(frozen=True)
class PlaceEntry:
    """One row of the location table."""
    name: str
    lat: float
    lng: float
    country: str
    place_name: str


@dataclass(frozen=True)
class CategoryLexicon:
    groups: Tuple[KeywordGroup, ...]
    default: str = "geopolitical"


@dataclass(frozen=True)
class SeverityLexicon:
    critical: Tuple[str, ...]
    high: Tuple[str, ...]
    medium: Tuple[str, ...]

    def tiers(self) -> Tuple[Tuple[str, Tuple[str, ...]], ...]:
        """Tiers in evaluation order."""
        return (
            ("critical", self.critical),
            ("high", self.high),
            ("medium", self.medium),
        )


@dataclass(frozen=True)
class RelevanceLexicon:
    hotspots: Tuple[ScoredGroup, ...]
    high_priority: Tuple[ScoredGroup, ...]
    medium_priority: Tuple[ScoredGroup, ...]


@dataclass(frozen=True)
class LocationLexicon:
    # Names checked first (word boundary) because they contain a country name
    disambiguation: Tuple[str, ...]
    places: Tuple[PlaceEntry, ...]

    def find(self, name: str) -> PlaceEntry:
        for entry in self.places:
            if entry.name == name:
                return entry
        raise KeyError(name)


@dataclass(frozen=True)
class Lexicon:
    """Everything the classifier and locator need for one variant."""
    name: str
    category: CategoryLexicon
    severity: SeverityLexicon
    relevance: RelevanceLexicon
    location: LocationLexicon


# ══════════════════════════════════════════════════════════════════════════════
# CATEGORY TABLES (priority order is significant)
# ══════════════════════════════════════════════════════════════════════════════

STANDARD_CATEGORIES = CategoryLexicon(groups=(
    KeywordGroup("armed-conflict", (
        "war", "battle", "combat", "clash", "fighting", "offensive",
        "invasion", "counter-offensive", "drone strike", "air strike",
        "bombardment", "artillery",
    )),
    KeywordGroup("terrorism", (
        "terror", "attack", "bombing", "explosion", "suicide", "militant",
        "insurgency", "extremist", "isis", "al qaeda", "hamas", "hezbollah",
    )),
    KeywordGroup("political-instability", (
        "coup", "revolution", "insurrection", "protest", "unrest",
        "demonstration", "political crisis", "government collapse", "regime",
        "election", "vote", "parliament", "opposition", "dissident",
    )),
    KeywordGroup("diplomatic-tensions", (
        "tension", "sanction", "diplomat", "expulsion", "summit",
        "negotiation", "treaty", "agreement", "deal", "breaking", "crisis",
        "escalation",
    )),
    KeywordGroup("humanitarian", (
        "humanitarian", "refugee", "displacement", "famine", "crisis", "aid",
        "starvation", "genocide", "atrocity", "ethnic cleansing", "massacre",
    )),
    KeywordGroup("cyber-warfare", (
        "cyber", "hack", "disinformation", "propaganda", "misinformation",
        "cyberattack",
    )),
    KeywordGroup("maritime-security", (
        "maritime", "naval", "border", "coast guard", "shipping", "piracy",
        "straits", "exclusive economic zone",
    )),
    KeywordGroup("health-emergency", (
        "health", "virus", "pandemic", "disease", "outbreak", "covid", "flu",
        "infection", "epidemic",
    )),
    KeywordGroup("environmental", (
        "climate", "environment", "disaster", "flood", "earthquake",
        "hurricane", "storm", "wildfire", "drought",
    )),
    KeywordGroup("economic", (
        "econom", "trade war", "tariff", "sanctions", "embargo", "market",
        "inflation", "recession", "financial",
    )),
))

COMPACT_CATEGORIES = CategoryLexicon(groups=(
    KeywordGroup("armed-conflict", (
        "war", "battle", "combat", "clash", "fighting", "offensive",
        "invasion", "counter-offensive",
    )),
    KeywordGroup("terrorism", (
        "terror", "attack", "bombing", "explosion", "suicide", "militant",
    )),
    KeywordGroup("political-instability", (
        "coup", "revolution", "protest", "unrest", "demonstration",
        "political crisis",
    )),
    KeywordGroup("diplomatic-tensions", (
        "tension", "sanction", "diplomat", "summit", "negotiation", "treaty",
    )),
    KeywordGroup("humanitarian", (
        "humanitarian", "refugee", "displacement", "famine", "aid", "genocide",
    )),
    KeywordGroup("cyber-warfare", ("cyber", "hack", "disinformation")),
    KeywordGroup("maritime-security", ("maritime", "naval", "border")),
    KeywordGroup("health-emergency", ("health", "virus", "pandemic")),
    KeywordGroup("environmental", ("climate", "environment", "disaster")),
    KeywordGroup("economic", (
        "econom", "trade war", "tariff", "sanctions", "embargo",
    )),
))


# ══════════════════════════════════════════════════════════════════════════════
# SEVERITY TABLES (critical → high → medium, default low)
# ══════════════════════════════════════════════════════════════════════════════

STANDARD_SEVERITY = SeverityLexicon(
    critical=(
        "critical", "emergency", "crisis", "massacre", "genocide",
        "ethnic cleansing", "apocalypse", "catastroph", "holocaust",
        "atrocity", "war crime", "crimes against humanity", "major disaster",
        "famine", "starvation", "refugee crisis", "humanitarian catastrophe",
        "full-scale war", "world war", "nuclear", "biological weapon",
        "chemical weapon", "tens killed", "hundreds killed",
        "mass casualties", "civilians killed", "ukraine war", "gaza",
        "israel-hamas", "russia ukraine", "israel iran", "taiwan",
        "south china sea", "tensions", "conflict", "invasion", "offensive",
    ),
    high=(
        "attack", "death", "killed", "murder", "shooting", "assassination",
        "assassinat", "bomb", "explosion", "explosive", "terror", "hostage",
        "kidnap", "suicide", "militant", "clash", "fighting", "battle",
        "air strike", "coup", "revolution", "insurrection", "riot",
        "violent protest", "sanctions", "expulsion", "breaking", "escalat",
        "military operation", "counter-terrorism", "counterinsurgency",
        "sudan", "mali", "nigeria", "myanmar", "afghanistan", "ethiopia",
        "israel", "palestine", "lebanon", "syria", "iraq", "yemen",
        "ukraine", "russia", "poland", "baltic", "crimea",
        "china", "taiwan", "indo-pacific", "south china sea",
        "north korea", "pakistan", "india", "kashmir",
        "colombia", "mexico", "haiti", "venezuela",
        "dozens killed", "casualties", "injured",
    ),
    medium=(
        "tension", "tensions", "threat", "warning", "alert",
        "protest", "demonstration", "rally", "march",
        "election", "vote", "ballot", "polling",
        "diplomat", "diplomatic", "summit", "negotiation",
        "treaty", "agreement", "deal", "pact",
        "border", "frontier", "coast", "maritime",
        "sanction", "tariff", "trade dispute",
        "cyber", "hack", "disinformation",
        "humanitarian", "aid", "refugee", "displaced",
        "trial", "court", "arrest", "detention", "prisoner",
        "political", "government", "minister", "president", "parliament",
        "rebel", "insurgent", "militia", "armed group",
        "pipeline", "energy", "oil", "gas", "natural resource",
        "arms", "weapons", "military aid", "security",
        "regional", "international", "global",
        "crisis", "instability", "volatile",
        "iran", "israel", "saudi", "uae", "gulf",
        "somalia", "kenya", "ethiopia", "eritrea", "horn of africa",
        "congo", "drc", "central african", "cameroon",
        "armenia", "azerbaijan", "nagorno-karabakh",
        "thailand", "myanmar", "cambodia", "southeast asia",
        "peru", "ecuador", "bolivia", "latin america",
        "several killed", "many dead", "multiple dead",
    ),
)

COMPACT_SEVERITY = SeverityLexicon(
    critical=(
        "critical", "crisis", "massacre", "genocide", "ethnic cleansing",
        "major disaster", "famine", "refugee crisis",
        "humanitarian catastrophe", "full-scale war", "world war", "nuclear",
        "biological weapon", "chemical weapon", "tens killed",
        "hundreds killed", "mass casualties", "civilians killed",
        "ukraine war", "gaza", "israel-hamas", "russia ukraine", "israel iran",
    ),
    high=(
        "attack", "death", "killed", "murder", "shooting", "assassination",
        "bomb", "explosion", "terror", "hostage", "kidnap",
        "suicide", "militant", "clash", "fighting", "battle", "air strike",
        "coup", "revolution", "insurrection", "riot", "violent protest",
        "sanctions", "expulsion", "escalat", "military operation",
        "sudan", "mali", "nigeria", "myanmar", "afghanistan", "ethiopia",
        "israel", "palestine", "lebanon", "syria", "iraq", "yemen",
        "ukraine", "russia", "poland", "baltic", "crimea",
        "china", "taiwan", "indo-pacific", "south china sea",
        "north korea", "pakistan", "india", "kashmir",
        "dozens killed", "casualties", "injured",
    ),
    medium=(
        "tension", "threat", "warning", "alert",
        "protest", "demonstration", "rally", "march",
        "election", "vote", "ballot", "polling",
        "diplomat", "diplomatic", "summit", "negotiation",
        "treaty", "agreement", "deal", "pact",
        "border", "coast", "maritime",
        "sanction", "tariff", "trade dispute",
        "cyber", "hack", "disinformation",
        "humanitarian", "aid", "refugee", "displaced",
        "trial", "court", "arrest", "detention", "prisoner",
        "political", "government", "minister", "president", "parliament",
        "regional", "international", "global",
        "iran", "israel", "saudi", "uae", "gulf",
        "somalia", "kenya", "ethiopia", "eritrea", "horn of africa",
        "congo", "drc", "central african", "cameroon",
    ),
)

# Headline-tuned tiers for the news feeds. Leading/trailing spaces in
# " wwiii" and " missile " are part of the keyword.
NEWS_SEVERITY = SeverityLexicon(
    critical=(
        "terror attack", "terrorist attack", "mass shooting", "mass casualty",
        "war crime", "genocide", "ethnic cleansing", "holocaust",
        "nuclear escalation", "nuclear war", "world war", " wwiii",
        "military coup", "state collapse", "civil war escalation",
        "isis", "al-qaeda", "terror group", "suicide bombing", "suicide bomb",
        "hostage crisis", "mass kidnapping", "massacre",
        "biological weapon", "chemical weapon", "chemical attack",
        "air strike", "airstrike", "bombing", " missile ", "rocket attack",
        "iran and israel", "israel and iran", "israel-iran conflict",
        "russia nato war", "nato russia war", "putin nuclear",
    ),
    high=(
        "military operation", "combat operation", "special operation",
        "invasion", "offensive", "counter-offensive", "front line",
        "border conflict", "cross-border", "clash", "firefight",
        "abduction", "kidnapping", "hostage", "detention", "arrest",
        "protest", "demonstration", "uprising", "rebellion", "revolution",
        "crackdown", "violence", "attack", "assassination", "killing",
        "sanctions", "embargo", "blockade", "economic war",
        "china taiwan", "taiwan strait", "north korea", "south korea",
        "ukraine war", "russia ukraine", "gaza", "israel hamas",
        "ethiopia", "eritrea", "sudan conflict", "congo", "mali",
        "ice arrest", "ice raid", "deportation", "detention center",
        "crime shooting", "violent crime", "gang violence", "mass shooting",
    ),
    medium=(
        "tension", "diplomatic", "talks", "negotiation", "summit",
        "election", "political", "policy", "legislation", "law",
        "military exercise", "war games", "deployment", "troop",
        "proposal", "plan", "strategy", "agreement", "deal",
        "investigation", "probe", "inquiry", "allegation",
        "human rights", "refugee", "migration", "border security",
        "crime", "scandal", "corruption",
    ),
)


# ══════════════════════════════════════════════════════════════════════════════
# GEOPOLITICAL RELEVANCE
# ══════════════════════════════════════════════════════════════════════════════

RELEVANCE = RelevanceLexicon(
    # Only the first matching hotspot counts
    hotspots=(
        ScoredGroup("Ukraine-Russia", 25, (
            "ukraine", "kiev", "kyiv", "russia", "moscow", "putin", "zelensky",
            "nato",
        )),
        ScoredGroup("Middle East", 25, (
            "iran", "israel", "gaza", "hezbollah", "lebanon", "palestine",
            "netanyahu",
        )),
        ScoredGroup("Taiwan-China", 22, (
            "taiwan", "china", "xi jinping", "beijing", "south china sea",
        )),
        ScoredGroup("North Korea", 22, (
            "north korea", "pyongyang", "kim jong", "missile", "nuclear test",
        )),
        ScoredGroup("South China Sea", 20, (
            "south china sea", "spratly", "parcel", " scarborough",
        )),
    ),
    high_priority=(
        ScoredGroup("Sanctions/Trade", 15, ("sanctions", "embargo", "trade war", "tariff")),
        ScoredGroup("Military Deployment", 15, ("military base", "troop deployment", "soldiers", "armored")),
        ScoredGroup("Political Crisis", 15, ("election", "political crisis", "regime change", "coup")),
        ScoredGroup("Cyber Security", 12, ("cyber attack", "hack", "ransomware", "data breach")),
        ScoredGroup("Humanitarian", 12, ("refugee", "migration crisis", "humanitarian")),
        ScoredGroup("Combat Operations", 18, ("air strike", "airstrike", "bombing", "missile attack")),
        ScoredGroup("War Crimes", 20, ("war crime", "human rights abuse", "atrocity")),
        ScoredGroup("Intelligence", 12, ("intelligence", "espionage", "surveillance", "spy")),
        ScoredGroup("Alliances", 14, ("defense pact", "alliance", "security agreement", "treaty")),
        ScoredGroup("Nuclear", 18, ("nuclear", "atomic", "fissile", "enrichment")),
    ),
    medium_priority=(
        ScoredGroup("Diplomacy", 10, ("diplomatic", "summit", "negotiation", "peace talks")),
        ScoredGroup("Unrest", 10, ("protest", "demonstration", "unrest", "riot")),
        ScoredGroup("Border Issues", 10, ("border", "frontier", "boundary", "territorial")),
        ScoredGroup("Energy", 8, ("energy", "oil", "gas", "pipeline", "energy crisis")),
        ScoredGroup("Climate/Environment", 5, ("climate", "environmental", "natural disaster")),
    ),
)


# ══════════════════════════════════════════════════════════════════════════════
# LOCATION TABLE (first match in this order wins)
# ══════════════════════════════════════════════════════════════════════════════

_US = "United States"

PLACES: Tuple[PlaceEntry, ...] = (
    # US states first: "Indiana" must never resolve to India
    PlaceEntry("Indiana", 40.2672, -86.1349, "US", f"Indiana, {_US}"),
    PlaceEntry("California", 36.7783, -119.4179, "US", f"California, {_US}"),
    PlaceEntry("Texas", 31.9686, -99.9018, "US", f"Texas, {_US}"),
    PlaceEntry("Florida", 27.6648, -81.5158, "US", f"Florida, {_US}"),
    PlaceEntry("New York", 40.7128, -74.0060, "US", f"New York, {_US}"),

    # Middle East
    PlaceEntry("Iran", 32.4279, 53.6880, "IR", "Iran"),
    PlaceEntry("Tehran", 35.6892, 51.3890, "IR", "Tehran, Iran"),
    PlaceEntry("Israel", 31.0461, 34.8516, "IL", "Israel"),
    PlaceEntry("Gaza", 31.3547, 34.3108, "PS", "Gaza"),
    PlaceEntry("Lebanon", 33.8547, 35.8623, "LB", "Lebanon"),
    PlaceEntry("Beirut", 33.8886, 35.4955, "LB", "Beirut, Lebanon"),
    PlaceEntry("Syria", 34.8021, 38.9968, "SY", "Syria"),
    PlaceEntry("Damascus", 33.5138, 36.2765, "SY", "Damascus, Syria"),
    PlaceEntry("Iraq", 33.3152, 44.3661, "IQ", "Iraq"),
    PlaceEntry("Baghdad", 33.3152, 44.3661, "IQ", "Baghdad, Iraq"),
    PlaceEntry("Yemen", 15.5527, 48.5164, "YE", "Yemen"),
    PlaceEntry("Jordan", 30.5852, 36.2384, "JO", "Jordan"),
    PlaceEntry("Saudi", 23.8859, 45.0792, "SA", "Saudi Arabia"),
    PlaceEntry("UAE", 23.4241, 53.8478, "AE", "UAE"),
    PlaceEntry("Qatar", 25.3548, 51.1839, "QA", "Qatar"),
    PlaceEntry("Kuwait", 29.3117, 47.4818, "KW", "Kuwait"),

    # Americas
    PlaceEntry("United States", 37.0902, -95.7129, "US", _US),
    PlaceEntry("USA", 37.0902, -95.7129, "US", _US),
    PlaceEntry("America", 37.0902, -95.7129, "US", _US),
    PlaceEntry("Washington", 38.9072, -77.0369, "US", "Washington D.C."),
    PlaceEntry("Los Angeles", 34.0522, -118.2437, "US", "Los Angeles"),
    PlaceEntry("Colombia", 4.5709, -74.2973, "CO", "Colombia"),
    PlaceEntry("Brazil", -14.2350, -51.9253, "BR", "Brazil"),
    PlaceEntry("Mexico", 23.6345, -102.5528, "MX", "Mexico"),
    PlaceEntry("Canada", 56.1304, -106.3468, "CA", "Canada"),

    # Europe
    PlaceEntry("Russia", 61.5240, 105.3188, "RU", "Russia"),
    PlaceEntry("Moscow", 55.7558, 37.6173, "RU", "Moscow, Russia"),
    PlaceEntry("Ukraine", 48.3794, 31.1656, "UA", "Ukraine"),
    PlaceEntry("Kiev", 50.4501, 30.5234, "UA", "Kyiv, Ukraine"),
    PlaceEntry("Kyiv", 50.4501, 30.5234, "UA", "Kyiv, Ukraine"),
    PlaceEntry("Poland", 51.9194, 19.1451, "PL", "Poland"),
    PlaceEntry("Germany", 51.1657, 10.4515, "DE", "Germany"),
    PlaceEntry("France", 46.2276, 2.2137, "FR", "France"),
    PlaceEntry("UK", 55.3781, -3.4360, "GB", "United Kingdom"),
    PlaceEntry("Britain", 55.3781, -3.4360, "GB", "United Kingdom"),
    PlaceEntry("London", 51.5074, -0.1278, "GB", "London, UK"),
    PlaceEntry("Spain", 40.4637, -3.7492, "ES", "Spain"),
    PlaceEntry("Italy", 41.8719, 12.5674, "IT", "Italy"),

    # Asia
    PlaceEntry("China", 35.8617, 104.1954, "CN", "China"),
    PlaceEntry("Beijing", 39.9042, 116.4074, "CN", "Beijing, China"),
    PlaceEntry("Taiwan", 23.6978, 120.9605, "TW", "Taiwan"),
    PlaceEntry("North Korea", 40.3399, 127.5101, "KP", "North Korea"),
    PlaceEntry("South Korea", 35.9078, 127.7669, "KR", "South Korea"),
    PlaceEntry("Seoul", 37.5665, 126.9780, "KR", "Seoul, South Korea"),
    PlaceEntry("Japan", 36.2048, 138.2529, "JP", "Japan"),
    PlaceEntry("Tokyo", 35.6762, 139.6503, "JP", "Tokyo, Japan"),
    PlaceEntry("Pakistan", 30.3753, 69.3451, "PK", "Pakistan"),
    PlaceEntry("India", 20.5937, 78.9629, "IN", "India"),
    PlaceEntry("New Delhi", 28.6139, 77.2090, "IN", "New Delhi, India"),
    PlaceEntry("Thailand", 15.8700, 100.9925, "TH", "Thailand"),
    PlaceEntry("Bangkok", 13.7563, 100.5018, "TH", "Bangkok, Thailand"),
    PlaceEntry("Cambodia", 12.5657, 104.9910, "KH", "Cambodia"),
    PlaceEntry("Vietnam", 14.0583, 108.2772, "VN", "Vietnam"),
    PlaceEntry("Myanmar", 21.9140, 95.9560, "MM", "Myanmar"),
    PlaceEntry("Afghanistan", 33.9391, 67.7100, "AF", "Afghanistan"),

    # Africa
    PlaceEntry("Somalia", 5.1521, 46.1996, "SO", "Somalia"),
    PlaceEntry("Mogadishu", 2.0469, 45.3182, "SO", "Mogadishu, Somalia"),
    PlaceEntry("Sudan", 12.8628, 7.9573, "SD", "Sudan"),
    PlaceEntry("Ethiopia", 9.1450, 40.4897, "ET", "Ethiopia"),
    PlaceEntry("Nigeria", 9.0820, 8.6753, "NG", "Nigeria"),
    PlaceEntry("Kenya", -0.0236, 37.9062, "KE", "Kenya"),
    PlaceEntry("South Africa", -30.5595, 22.9375, "ZA", "South Africa"),
    PlaceEntry("Egypt", 26.8206, 30.8025, "EG", "Egypt"),
    PlaceEntry("Libya", 26.3351, 17.2283, "LY", "Libya"),
    PlaceEntry("Tunisia", 33.8869, 9.5375, "TN", "Tunisia"),
    PlaceEntry("Algeria", 28.0339, 1.6596, "DZ", "Algeria"),
    PlaceEntry("Morocco", 31.7917, -7.0926, "MA", "Morocco"),
    PlaceEntry("DRC", -4.0383, 21.7587, "CD", "Democratic Republic of Congo"),
    PlaceEntry("Mali", 17.5707, -3.9962, "ML", "Mali"),
    PlaceEntry("Niger", 17.6078, 8.0817, "NE", "Niger"),
    PlaceEntry("Burkina Faso", 12.2383, -1.5616, "BF", "Burkina Faso"),
    PlaceEntry("Chad", 15.4542, 18.7322, "TD", "Chad"),
    PlaceEntry("Mozambique", -18.7669, 35.5295, "MZ", "Mozambique"),
)

LOCATIONS = LocationLexicon(
    disambiguation=("Indiana", "California", "Texas", "Florida"),
    places=PLACES,
)


# ══════════════════════════════════════════════════════════════════════════════
# VARIANTS
# ══════════════════════════════════════════════════════════════════════════════

STANDARD = Lexicon(
    name="standard",
    category=STANDARD_CATEGORIES,
    severity=STANDARD_SEVERITY,
    relevance=RELEVANCE,
    location=LOCATIONS,
)

COMPACT = Lexicon(
    name="compact",
    category=COMPACT_CATEGORIES,
    severity=COMPACT_SEVERITY,
    relevance=RELEVANCE,
    location=LOCATIONS,
)

NEWS = Lexicon(
    name="news",
    category=STANDARD_CATEGORIES,
    severity=NEWS_SEVERITY,
    relevance=RELEVANCE,
    location=LOCATIONS,
)

LEXICONS: Dict[str, Lexicon] = {lex.name: lex for lex in (STANDARD, COMPACT, NEWS)}


def get_lexicon(name: str = "") -> Lexicon:
    """Look up a lexicon variant by name.

    Empty name resolves to the configured default (LEXICON_VARIANT).
    Raises KeyError for unknown variants.
    """
    if not name:
        from osintwatch.config import get_settings
        name = get_settings().lexicon_variant
    return LEXICONS[name.lower()]


# ══════════════════════════════════════════════════════════════════════════════
# SIBLING MODULE TABLES
# ══════════════════════════════════════════════════════════════════════════════

# Signals: first match wins
SIGNAL_CATEGORIES: Tuple[KeywordGroup, ...] = (
    KeywordGroup("military", ("military", "troop", "weapon")),
    KeywordGroup("political", ("political", "election", "regime")),
    KeywordGroup("economic", ("econom", "trade", "sanction")),
    KeywordGroup("security", ("terror", "attack", "security")),
    KeywordGroup("strategic", ("nuclear", "missile", "drone")),
)

# Source substring → confidence, checked in order
SOURCE_CONFIDENCE: Tuple[Tuple[float, Tuple[str, ...]], ...] = (
    (0.9, ("gdelt", "reuters", "ap", "bbc", "un", "state.gov")),
    (0.7, ("crisisgroup", "chatham", "ecfr", "al jazeera")),
)
DEFAULT_SOURCE_CONFIDENCE = 0.5

REGIONS: Tuple[KeywordGroup, ...] = (
    KeywordGroup("Middle East", ("iran", "israel", "gaza", "lebanon", "syria", "iraq", "yemen", "jordan")),
    KeywordGroup("Europe", ("europe", "ukraine", "russia", "poland", "germany", "france", "uk", "britain")),
    KeywordGroup("Asia", ("china", "korea", "japan", "india", "pakistan", "taiwan", "indo-pacific")),
    KeywordGroup("Americas", ("usa", "america", "canada", "mexico", "brazil", "argentina", "colombia")),
)


@dataclass(frozen=True)
class PredictionIndicator:
    """Regional forecast row.

    `levels` maps a trend direction to the published indicator level.
    Directions missing from `levels` publish `default_level`, or the
    direction itself when no default is set.
    """
    id: str
    name: str
    category: str
    question: str
    keywords: Tuple[str, ...]
    escalating_probability: float
    baseline_probability: float
    confidence: float
    timeframe: str
    factors: Tuple[str, ...]
    levels: Tuple[Tuple[str, str], ...] = ()
    default_level: str = ""

    def level_for(self, direction: str) -> str:
        for trend, level in self.levels:
            if trend == direction:
                return level
        return self.default_level or direction


PREDICTION_INDICATORS: Tuple[PredictionIndicator, ...] = (
    PredictionIndicator(
        id="pred-me-001",
        name="Middle East",
        category="regional",
        question="What is the likely trajectory of tensions in the Middle East?",
        keywords=("iran", "israel", "gaza", "lebanon", "syria", "iraq"),
        escalating_probability=0.72,
        baseline_probability=0.45,
        confidence=0.65,
        timeframe="24-72 hours",
        factors=("Ongoing regional conflicts", "Geopolitical tensions", "Media coverage intensity"),
    ),
    PredictionIndicator(
        id="pred-eur-001",
        name="Eastern Europe",
        category="regional",
        question="How will conflict activity in Eastern Europe develop?",
        keywords=("ukraine", "russia", "war", "military"),
        escalating_probability=0.68,
        baseline_probability=0.42,
        confidence=0.70,
        timeframe="24-48 hours",
        factors=("Military activity reports", "Diplomatic developments", "Economic indicators"),
    ),
    PredictionIndicator(
        id="pred-gl-001",
        name="Global Markets",
        category="economic",
        question="What is the expected volatility in global markets?",
        keywords=("econom", "market", "trade", "sanction", "oil", "energy"),
        escalating_probability=0.55,
        baseline_probability=0.55,
        confidence=0.60,
        timeframe="24 hours",
        factors=("Geopolitical developments", "Energy market fluctuations", "Currency movements"),
        levels=(("stable", "elevated"),),
    ),
    PredictionIndicator(
        id="pred-str-001",
        name="Asia-Pacific",
        category="strategic",
        question="What is the geopolitical risk level for the tech sector?",
        keywords=("china", "taiwan", "tech", "semiconductor", "nuclear"),
        escalating_probability=0.50,
        baseline_probability=0.50,
        confidence=0.55,
        timeframe="1 week",
        factors=("Chip industry developments", "Taiwan Strait developments", "US-China relations"),
        levels=(("escalating", "elevated"),),
        default_level="moderate",
    ),
    PredictionIndicator(
        id="pred-hlth-001",
        name="Global Health",
        category="health",
        question="What is the alert level for global health threats?",
        keywords=("health", "virus", "pandemic", "outbreak", "disease"),
        escalating_probability=0.35,
        baseline_probability=0.35,
        confidence=0.50,
        timeframe="1 month",
        factors=("Disease surveillance data", "Healthcare capacity", "International travel patterns"),
        levels=(("escalating", "elevated"),),
        default_level="low",
    ),
)


# Military activity detection
MILITARY_KEYWORDS: Tuple[str, ...] = (
    # Combat operations
    "airstrike", "air strike", "air strikes", "airstrikes",
    "military strike", "missile strike", "rocket attack", "bombing", "bomb",
    "combat operation", "military operation", "special operation",
    "troop deployment", "troop withdrawal", "soldiers deployed", "troops deployed",
    "armored convoy", "tank deployment", "military convoy", "armored column",
    # Naval
    "naval operation", "naval exercise", "warship", "aircraft carrier",
    "submarine", "maritime patrol", "naval forces", "naval blockade",
    # Air
    "military aircraft", "fighter jet", "combat aircraft", "bomber",
    "drone strike", "uav", "unmanned aircraft", "reconnaissance drone",
    "closed airspace", "no fly zone", "airspace restriction",
    # Bases and exercises
    "military base", "army base", "naval base", "air base", "forward operating base",
    "military exercise", "war games", "joint exercise", "military drills",
    # Front lines
    "front line", "frontline", "battlefield", "combat zone", "war zone",
    "invasion", "offensive", "counter-offensive", "defensive position",
    "military engagement", "armed clash", "armed confrontation",
    # Security force actions
    "military crackdown", "military raid", "military arrest", "military detention",
    "military abduction", "kidnap by military", "forcibly disappeared",
    "military checkpoint", "military patrol", "military curfews",
    "deadly crackdown", "violent crackdown", "brutal crackdown",
    "security forces", "paramilitary forces",
    # Interstate conflict
    "cross-border attack", "border attack", "transborder attack",
    "war between", "conflict between", "tensions between",
    "iran and israel", "israel and iran", "russia ukraine", "ukraine russia",
    "us and china", "china and us", "nato and russia", "russia nato",
    "north korea", "south korea", "pakistan india", "india pakistan",
    "china taiwan", "taiwan china", "armenia azerbaijan", "azerbaijan armenia",
    "ethiopia eritrea", "eritrea ethiopia", "sudan war", "congo war",
    "mexico cartels", "colombia conflict", "syria war", "syria conflict",
    "israel hezbollah", "hezbollah israel", "israel hamas", "hamas israel",
    # Border enforcement
    "ice arrest", "ice raid", "ice operation", "ice detention",
    "border patrol", "border security", "immigration raid",
    "deportation", "detention center", "immigration detention",
    "ice agents", "immigration enforcement",
    # Other
    "military action", "special forces operation", "paramilitary operation",
    "armed forces",
)

# Commentary about the military rather than operations
MILITARY_EXCLUSIONS: Tuple[str, ...] = (
    r"military\s+aid\s+\w+",
    r"military\s+to\s+\w+",
    r"according\s+to\s+(?:the\s+)?military\s+\w+",
    r"military\s+(?:plan|proposal|strategy|policy)\s+\w+",
)

# Branch regexes, checked in order
MILITARY_BRANCHES: Tuple[Tuple[str, str], ...] = (
    ("navy", r"naval|ship|maritime|sea|port|coast"),
    ("air-force", r"air|aircraft|drone|airstrike|airspace|flight"),
    ("army", r"ground|troop|land|army|battalion"),
)

# Intensity tiers, checked in order
MILITARY_INTENSITY: Tuple[Tuple[float, str], ...] = (
    (0.9, r"airstrike|attack|invasion|war|combat|strike|bomb|killing|death|massacre|crackdown|abduction|kidnap"),
    (0.75, r"raid|arrest|detention|deportation|clash|confrontation|offensive"),
    (0.6, r"deployment|exercise|operation|blockade"),
)
DEFAULT_MILITARY_INTENSITY = 0.5
