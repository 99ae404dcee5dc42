"""
AnswerMemory: the API the form orchestrator talks to.

    memory = AnswerMemory.from_config(config)
    answer = memory.get_answer(question, "free_text")
    if answer is None:
        answer = await memory.resolve(question, "free_text")
"""

import logging
from typing import Dict, Mapping, Optional, Union

from answer_memory.answer_store import AnswerStore
from answer_memory.keywords import KeywordSet, load_vocabulary
from answer_memory.matcher import QuestionMatcher
from answer_memory.models import MatchResult, QuestionCategory
from answer_memory.normalizer import TextNormalizer
from answer_memory.resolver import Probe, Prompt, UnknownQuestionResolver
from answer_memory.similarity import SimilarityScorer
from core.logger import get_structured_logger

logger = logging.getLogger(__name__)
structured_logger = get_structured_logger(__name__)

Category = Union[QuestionCategory, str]


class AnswerMemory:
    """Stores, matcher and resolver wired together for one run."""

    def __init__(
        self,
        stores: Mapping[QuestionCategory, AnswerStore],
        matcher: QuestionMatcher,
        resolver: UnknownQuestionResolver,
    ):
        missing = [c.value for c in QuestionCategory if c not in stores]
        if missing:
            raise ValueError(f"Missing answer stores for: {', '.join(missing)}")
        self.stores: Dict[QuestionCategory, AnswerStore] = dict(stores)
        self.matcher = matcher
        self.resolver = resolver

    @classmethod
    def from_config(cls, app_config, prompt: Optional[Prompt] = None) -> "AnswerMemory":
        """
        Load the three stores and build matcher and resolver from settings.

        Raises:
            AnswerStoreMissingError: the free-text answers file does not exist.
        """
        answers_config = app_config.answers
        resolver_config = app_config.resolver

        vocabulary = load_vocabulary(answers_config.vocabulary_path)
        normalizer = TextNormalizer(vocabulary.get("prefixes"))
        matcher = QuestionMatcher(
            scorer=SimilarityScorer(normalizer),
            keywords=KeywordSet(vocabulary.get("keywords")),
            acceptance_floor=answers_config.acceptance_floor,
            reuse_threshold=answers_config.reuse_threshold,
            keyword_boost=answers_config.keyword_boost,
        )

        stores = {
            QuestionCategory.FREE_TEXT: AnswerStore.open(
                answers_config.free_text_path, QuestionCategory.FREE_TEXT, required=True
            ),
            QuestionCategory.BINARY: AnswerStore.open(
                answers_config.binary_path, QuestionCategory.BINARY
            ),
            QuestionCategory.SINGLE_CHOICE: AnswerStore.open(
                answers_config.single_choice_path, QuestionCategory.SINGLE_CHOICE
            ),
        }

        resolver = UnknownQuestionResolver(
            stores,
            prompt=prompt,
            binary_poll_interval=resolver_config.binary_poll_interval,
            dropdown_poll_interval=resolver_config.dropdown_poll_interval,
            timeout=resolver_config.operator_timeout,
            unset_option_label=resolver_config.unset_option_label,
        )
        return cls(stores, matcher, resolver)

    def store(self, category: Category) -> AnswerStore:
        return self.stores[QuestionCategory.parse(category)]

    def normalize(self, question: str) -> str:
        return self.matcher.scorer.normalizer.normalize(question)

    def score(self, a: str, b: str) -> float:
        return self.matcher.scorer.score(a, b)

    def match(self, question: str, category: Category) -> Optional[MatchResult]:
        return self.matcher.match(question, self.store(category))

    def get_answer(self, question: str, category: Category) -> Optional[str]:
        """
        Stored answer for `question` when the best match is safe to reuse.

        Matches between the acceptance floor and the reuse threshold are
        logged and reported as no answer.
        """
        category = QuestionCategory.parse(category)
        result = self.match(question, category)
        if result is None:
            return None

        if not self.matcher.is_reusable(result):
            structured_logger.info(
                "ambiguous_match_skipped",
                category=category.value,
                question=question,
                matched_question=result.matched_question,
                similarity=round(result.similarity, 4),
                reuse_threshold=self.matcher.reuse_threshold,
            )
            return None

        logger.info(
            f"Most similar question: \"{result.matched_question}\" "
            f"with similarity score: {result.similarity:.2f}"
        )
        return self.store(category).get(result.matched_question)

    async def resolve(self, question: str, category: Category, probe: Optional[Probe] = None) -> str:
        return await self.resolver.resolve(question, category, probe)

    async def resolve_and_store(self, question: str) -> str:
        """Ask the operator for a free-text answer and store it."""
        return await self.resolve(question, QuestionCategory.FREE_TEXT)

    async def answer(self, question: str, category: Category, probe: Optional[Probe] = None) -> str:
        """Reuse a stored answer, or capture and persist a new one."""
        answer = self.get_answer(question, category)
        if answer is not None:
            return answer
        return await self.resolve(question, category, probe)
