"""
Keyword-based event classification for OSINT records.

Every decision here is a substring scan of the lowercased
"title + summary" text against a lexicon (osintwatch.shared.lexicons):

  1. CATEGORY:  first category group with any match, in fixed priority order
  2. SEVERITY:  first tier with any match, critical → high → medium, else low
  3. RELEVANCE: additive score from hotspot, high- and medium-priority groups

Matching is substring-based, not tokenized: "war" also matches "warning".
The keyword tables are written for that.

The classifier never raises for data. None or empty text routes to the
default branch of each function (geopolitical / low / score 0).

EXTENSIBILITY: To plug in a statistical or embedding classifier, implement
the ClassifierStrategy protocol and pass the instance to enrich_and_rank().
"""

import logging
from typing import Optional, Protocol, runtime_checkable

from pydantic import BaseModel

from osintwatch.schemas.base import EventCategory, Severity
from osintwatch.shared.lexicons import Lexicon, get_lexicon

logger = logging.getLogger(__name__)


class RelevanceAssessment(BaseModel):
    """Additive geopolitical relevance score and the label that drove it."""
    score: int = 0
    category: str = "general"


class Classification(BaseModel):
    category: EventCategory
    severity: Severity

    class Config:
        use_enum_values = True


def _text(title: Optional[str], summary: Optional[str] = None) -> str:
    return f"{title or ''} {summary or ''}".lower()


def _resolve(lexicon: Optional[Lexicon]) -> Lexicon:
    return lexicon if lexicon is not None else get_lexicon()


def categorize(title: Optional[str], summary: Optional[str] = None,
               lexicon: Optional[Lexicon] = None) -> EventCategory:
    """Return the first matching category in priority order, else geopolitical."""
    lex = _resolve(lexicon)
    text = _text(title, summary)
    for group in lex.category.groups:
        if group.matches(text):
            return EventCategory(group.label)
    return EventCategory(lex.category.default)


def estimate_severity(title: Optional[str], summary: Optional[str] = None,
                      lexicon: Optional[Lexicon] = None) -> Severity:
    """Return the first severity tier with a keyword hit, else low."""
    lex = _resolve(lexicon)
    text = _text(title, summary)
    for level, keywords in lex.severity.tiers():
        if any(kw in text for kw in keywords):
            return Severity(level)
    return Severity.LOW


def assess_geopolitical_relevance(title: Optional[str], summary: Optional[str] = None,
                                  lexicon: Optional[Lexicon] = None) -> RelevanceAssessment:
    """
    Score geopolitical relevance.

    Hotspots: only the first matching hotspot counts (+20..25, sets category).
    High/medium topics: every matching group adds its points; the category
    is taken from a topic only while it is still "general".
    """
    lex = _resolve(lexicon)
    text = _text(title, summary)
    score = 0
    category = "general"

    for hotspot in lex.relevance.hotspots:
        if hotspot.matches(text):
            score += hotspot.points
            category = hotspot.label
            break

    for topic in lex.relevance.high_priority + lex.relevance.medium_priority:
        if topic.matches(text):
            score += topic.points
            if category == "general":
                category = topic.label

    return RelevanceAssessment(score=score, category=category)


def classify(text: Optional[str], lexicon: Optional[Lexicon] = None) -> Classification:
    """Category and severity of a free-text string, for reuse by sibling modules."""
    lex = _resolve(lexicon)
    return Classification(
        category=categorize(text, None, lex),
        severity=estimate_severity(text, None, lex),
    )


@runtime_checkable
class ClassifierStrategy(Protocol):
    """Interface for anything that can enrich a (title, summary) pair."""

    def categorize(self, title: str, summary: str = "") -> EventCategory: ...

    def estimate_severity(self, title: str, summary: str = "") -> Severity: ...

    def assess_relevance(self, title: str, summary: str = "") -> RelevanceAssessment: ...


class KeywordEventClassifier:
    """
    Default ClassifierStrategy: lexicon substring matching.

    Binds one lexicon variant so the ranker does not need to thread it
    through every call.
    """

    def __init__(self, lexicon: Optional[Lexicon] = None):
        self.lexicon = _resolve(lexicon)

    def categorize(self, title: str, summary: str = "") -> EventCategory:
        return categorize(title, summary, self.lexicon)

    def estimate_severity(self, title: str, summary: str = "") -> Severity:
        return estimate_severity(title, summary, self.lexicon)

    def assess_relevance(self, title: str, summary: str = "") -> RelevanceAssessment:
        return assess_geopolitical_relevance(title, summary, self.lexicon)

    def __repr__(self) -> str:
        return f"KeywordEventClassifier(lexicon={self.lexicon.name!r})"
