"""
Shared tables and helpers used across the enrichment layers.

- lexicons.py: Immutable keyword, severity, relevance and place tables
- geo.py: extract_location / locate over the ordered place table
- stopwords.py: Headline stopwords for deduplication
"""

from osintwatch.shared.lexicons import Lexicon, get_lexicon, LEXICONS
from osintwatch.shared.geo import extract_location, locate, extract_region
