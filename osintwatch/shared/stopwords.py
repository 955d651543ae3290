"""
Consolidated stopword sets: single source for headline comparison.

Used by:
  - osintwatch.news.dedup (keyword-set Jaccard and MinHash shingles)
"""
from __future__ import annotations

# Title vocabulary stopwords: function words and wire-copy filler that carry
# no information about which event a headline describes.
TITLE_STOP = frozenset({
    "the", "a", "an", "in", "on", "at", "to", "for", "of", "and", "or",
    "is", "are", "was", "were", "be", "been", "has", "have", "had",
    "with", "from", "by", "its", "it", "this", "that", "how", "what",
    "why", "who", "will", "can", "may", "could", "would", "should",
    "not", "no", "but", "if", "as", "up", "out", "about", "after",
    "new", "more", "most", "top", "big", "all", "over", "into",
    "says", "said", "set", "get", "gets", "here", "now", "also",
    "amid", "than", "then", "they", "their", "his", "her", "our",
    "live", "latest", "update", "updates", "breaking", "report", "reports",
    "news", "today", "watch", "video", "exclusive",
})
