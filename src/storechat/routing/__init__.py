"""Intent routing: lexical scoring plus a cached LLM classifier."""

from storechat.routing.cache import IntentCache
from storechat.routing.classifier import IntentClassifier, IntentDecision
from storechat.routing.patterns import PatternMatch, match_patterns
from storechat.routing.stems import CategoryScores, score_stems

__all__ = [
    "CategoryScores",
    "IntentCache",
    "IntentClassifier",
    "IntentDecision",
    "PatternMatch",
    "match_patterns",
    "score_stems",
]
