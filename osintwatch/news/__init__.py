"""
Event enrichment and ranking.

Modules:
- event_classifier: Keyword category / severity / relevance classification
- dedup: Exact, containment and keyword-overlap headline deduplication
- ranker: enrich_and_rank(), the per-endpoint pipeline
- signals, predictions, military: outputs derived from the same records
- aggregator: Concurrent source fan-out feeding the pipeline
"""

from osintwatch.news.event_classifier import (
    categorize, estimate_severity, assess_geopolitical_relevance, classify,
    ClassifierStrategy, KeywordEventClassifier,
)
from osintwatch.news.dedup import EventDeduplicator
from osintwatch.news.ranker import enrich_and_rank
from osintwatch.news.aggregator import EventAggregator, gather_branches
