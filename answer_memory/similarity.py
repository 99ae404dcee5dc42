"""
SimilarityScorer: term-weighted overlap of two questions.

Both questions are normalized, then treated as a two-document corpus:

    weight(t, d) = tf(t, d) * (1 + ln(N / (1 + df(t))))     N = 2

and the score is the sum, over the distinct terms of the first question, of
weight(t, a) * weight(t, b). The score is an unnormalized dot product: it
grows with question length and term repetition, so it is only meaningful for
ranking candidates against one incoming question. The matcher thresholds are
calibrated against this exact weighting.
"""

import math
from collections import Counter
from typing import Dict, FrozenSet, List, Optional

from answer_memory.normalizer import TextNormalizer

# Checked against stemmed tokens, so inflected forms such as "doe" (does) or
# "ha" (has) survive the filter.
STOP_WORDS: FrozenSet[str] = frozenset({
    "about", "above", "after", "again", "all", "also", "am", "an", "and",
    "another", "any", "are", "as", "at", "be", "because", "been", "before",
    "being", "below", "between", "both", "but", "by", "came", "can", "cannot",
    "come", "could", "did", "do", "does", "doing", "during", "each", "few",
    "for", "from", "further", "get", "got", "has", "had", "he", "have", "her",
    "here", "him", "himself", "his", "how", "if", "in", "into", "is", "it",
    "its", "itself", "like", "make", "many", "me", "might", "more", "most",
    "much", "must", "my", "myself", "never", "now", "of", "on", "only", "or",
    "other", "our", "ours", "ourselves", "out", "over", "own", "said", "same",
    "see", "should", "since", "so", "some", "still", "such", "take", "than",
    "that", "the", "their", "theirs", "them", "themselves", "then", "there",
    "these", "they", "this", "those", "through", "to", "too", "under", "until",
    "up", "very", "was", "way", "we", "well", "were", "what", "where", "when",
    "which", "while", "who", "whom", "why", "with", "would", "you", "your",
    "yours", "yourself", "_", "$",
    *"abcdefghijklmnopqrstuvwxyz",
    *"0123456789",
})

CORPUS_SIZE = 2


class SimilarityScorer:
    """Scores how close two raw questions are."""

    def __init__(
        self,
        normalizer: Optional[TextNormalizer] = None,
        stop_words: FrozenSet[str] = STOP_WORDS,
    ):
        self.normalizer = normalizer or TextNormalizer()
        self.stop_words = stop_words

    def terms(self, question: str) -> List[str]:
        """Scoring terms of a question: normalized tokens minus stop words."""
        return [t for t in self.normalizer.tokenize(question) if t not in self.stop_words]

    @staticmethod
    def _idf(term: str, documents: List[Counter]) -> float:
        docs_with_term = sum(1 for doc in documents if term in doc)
        return 1 + math.log(CORPUS_SIZE / (1 + docs_with_term))

    def weights(self, a: str, b: str) -> List[Dict[str, float]]:
        """tf-idf weight of every term of both questions, per question."""
        documents = [Counter(self.terms(a)), Counter(self.terms(b))]
        return [
            {term: count * self._idf(term, documents) for term, count in doc.items()}
            for doc in documents
        ]

    def score(self, a: str, b: str) -> float:
        weights_a, weights_b = self.weights(a, b)
        return sum(weight * weights_b.get(term, 0.0) for term, weight in weights_a.items())


_default_scorer: Optional[SimilarityScorer] = None


def score(a: str, b: str) -> float:
    """Score two questions with the default normalizer."""
    global _default_scorer
    if _default_scorer is None:
        _default_scorer = SimilarityScorer()
    return _default_scorer.score(a, b)
