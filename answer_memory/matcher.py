"""
QuestionMatcher: find the stored question closest to an incoming one.

Priority order:
1. exact key match -> similarity 1.0, no scoring;
2. stored questions containing a domain keyword, boosted when the incoming
   question contains a keyword too;
3. only when step 2 found nothing, stored questions without keywords;
4. discard the best candidate when it scores below the acceptance floor.

Two thresholds apply to a result: the acceptance floor (worth reporting) and
the stricter reuse threshold (safe to apply the stored answer unattended).
"""

import logging
from typing import Iterable, List, Optional

from answer_memory.keywords import KeywordSet
from answer_memory.models import MatchResult
from answer_memory.similarity import SimilarityScorer
from core.logger import get_structured_logger

logger = logging.getLogger(__name__)
structured_logger = get_structured_logger(__name__)

ACCEPTANCE_FLOOR = 0.4
REUSE_THRESHOLD = 0.7
KEYWORD_BOOST = 1.2


class QuestionMatcher:
    """Ranks stored questions against an incoming question."""

    def __init__(
        self,
        scorer: Optional[SimilarityScorer] = None,
        keywords: Optional[KeywordSet] = None,
        acceptance_floor: float = ACCEPTANCE_FLOOR,
        reuse_threshold: float = REUSE_THRESHOLD,
        keyword_boost: float = KEYWORD_BOOST,
    ):
        self.scorer = scorer if scorer is not None else SimilarityScorer()
        self.keywords = keywords if keywords is not None else KeywordSet()
        self.acceptance_floor = acceptance_floor
        self.reuse_threshold = reuse_threshold
        self.keyword_boost = keyword_boost

    def match(self, question: str, store: Iterable[str]) -> Optional[MatchResult]:
        """
        Return the best stored question for `question`, or None.

        Args:
            question: Raw question text as extracted from the form.
            store: Anything iterable over stored questions that supports `in`
                (an AnswerStore or a plain dict).
        """
        if question in store:
            structured_logger.debug("question_exact_match", question=question)
            return MatchResult(matched_question=question, similarity=1.0, exact=True)

        stored: List[str] = list(store)
        if not stored:
            return None

        keyword_pool, plain_pool = [], []
        for q in stored:
            (keyword_pool if self.keywords.contains_keyword(q) else plain_pool).append(q)
        input_has_keyword = self.keywords.contains_keyword(question)

        best_question, best_similarity = self._best_of(
            question, keyword_pool, boost=self.keyword_boost if input_has_keyword else 1.0,
            input_has_keyword=input_has_keyword, pool_has_keyword=True,
        )

        if best_question is None:
            best_question, best_similarity = self._best_of(
                question, plain_pool, boost=1.0,
                input_has_keyword=input_has_keyword, pool_has_keyword=False,
            )

        if best_question is None or best_similarity < self.acceptance_floor:
            logger.debug(
                f"No stored question reaches the acceptance floor {self.acceptance_floor} "
                f"for: \"{question}\""
            )
            return None

        return MatchResult(matched_question=best_question, similarity=best_similarity)

    def _best_of(self, question, candidates, boost, input_has_keyword, pool_has_keyword):
        best_question = None
        best_similarity = -1.0
        for candidate in candidates:
            similarity = self.scorer.score(question, candidate) * boost
            logger.debug(
                f"Question: \"{candidate}\", Similarity: {similarity:.2f}, "
                f"Input Contains Keywords: {input_has_keyword}, "
                f"DB Contains Keywords: {pool_has_keyword}"
            )
            if similarity > best_similarity:
                best_similarity = similarity
                best_question = candidate
        return best_question, best_similarity

    def is_reusable(self, result: Optional[MatchResult]) -> bool:
        """True when a match is strong enough to apply its answer without the operator."""
        return result is not None and result.is_reusable(self.reuse_threshold)
