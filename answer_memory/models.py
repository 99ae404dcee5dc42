from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class QuestionCategory(str, Enum):
    """Kind of form field a question belongs to; selects store and resolution strategy."""

    FREE_TEXT = "free_text"
    BINARY = "binary"
    SINGLE_CHOICE = "single_choice"

    @classmethod
    def parse(cls, value: "QuestionCategory | str") -> "QuestionCategory":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower().replace("-", "_"))
        except ValueError:
            valid = ", ".join(c.value for c in cls)
            raise ValueError(f"Unknown question category: {value!r}. Must be one of {valid}") from None


BINARY_VALUES = ("Yes", "No")


@dataclass(frozen=True)
class MatchResult:
    """Best stored question found for an incoming question."""

    matched_question: str
    similarity: float
    exact: bool = False

    def is_reusable(self, reuse_threshold: float) -> bool:
        return self.similarity > reuse_threshold
