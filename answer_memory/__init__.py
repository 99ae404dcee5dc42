"""
Answer memory - question-answer store with fuzzy question matching, lazy exports.
"""

from importlib import import_module
from typing import Any, TYPE_CHECKING

if TYPE_CHECKING:
    from .answer_store import AnswerStore
    from .keywords import KeywordSet
    from .matcher import QuestionMatcher
    from .models import MatchResult, QuestionCategory
    from .normalizer import TextNormalizer, normalize
    from .resolver import UnknownQuestionResolver
    from .service import AnswerMemory
    from .similarity import SimilarityScorer, score

__all__ = [
    "AnswerMemory",
    "AnswerStore",
    "KeywordSet",
    "MatchResult",
    "QuestionCategory",
    "QuestionMatcher",
    "SimilarityScorer",
    "TextNormalizer",
    "UnknownQuestionResolver",
    "normalize",
    "score",
]

_LAZY_IMPORTS = {
    "AnswerMemory": "answer_memory.service",
    "AnswerStore": "answer_memory.answer_store",
    "KeywordSet": "answer_memory.keywords",
    "MatchResult": "answer_memory.models",
    "QuestionCategory": "answer_memory.models",
    "QuestionMatcher": "answer_memory.matcher",
    "SimilarityScorer": "answer_memory.similarity",
    "TextNormalizer": "answer_memory.normalizer",
    "UnknownQuestionResolver": "answer_memory.resolver",
    "normalize": "answer_memory.normalizer",
    "score": "answer_memory.similarity",
}


def __getattr__(name: str) -> Any:
    if name not in _LAZY_IMPORTS:
        raise AttributeError(f"module 'answer_memory' has no attribute '{name}'")
    module = import_module(_LAZY_IMPORTS[name])
    value = getattr(module, name)
    globals()[name] = value
    return value
