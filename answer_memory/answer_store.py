"""
AnswerStore: persistent question -> answer table for one question category.

Each store owns an in-memory dict mirrored to a flat JSON object on disk:

    {
      "How many years of experience with Java?": "5",
      ...
    }

Every `put` rewrites the whole file before returning, so a resolved answer is
durable before the caller moves to the next field.
"""

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Dict, Iterator, List, Optional, Union

from answer_memory.exceptions import (
    AnswerStoreCorruptError,
    AnswerStoreMissingError,
    AnswerStorePersistenceError,
)
from answer_memory.models import BINARY_VALUES, QuestionCategory
from core.logger import get_structured_logger

logger = logging.getLogger(__name__)
structured_logger = get_structured_logger(__name__)


class AnswerStore:
    """
    Mapping of raw question text to answer value, persisted as JSON.

    A store marked `required` must find its backing file at load time
    (the free-text answers file); other stores start empty and create the
    file on first load.
    """

    def __init__(
        self,
        path: Union[str, Path],
        category: Union[QuestionCategory, str],
        required: bool = False,
    ):
        self.path = Path(path)
        self.category = QuestionCategory.parse(category)
        self.required = required
        self._answers: Dict[str, str] = {}

    @classmethod
    def open(
        cls,
        path: Union[str, Path],
        category: Union[QuestionCategory, str],
        required: bool = False,
    ) -> "AnswerStore":
        """Create a store and load its backing file."""
        store = cls(path, category, required=required)
        store.load()
        return store

    def load(self) -> None:
        """
        Replace the in-memory table with the content of the backing file.

        Raises:
            AnswerStoreMissingError: required store without a backing file.
            AnswerStoreCorruptError: file is not a flat JSON object of strings.
        """
        if not self.path.exists():
            if self.required:
                raise AnswerStoreMissingError(self.path)
            logger.info(f"{self.path.name} file not found. Creating a new one.")
            self._answers = {}
            self.flush()
            return

        try:
            raw = self.path.read_text(encoding="utf-8")
        except OSError as e:
            raise AnswerStoreCorruptError(self.path, str(e)) from e

        if not raw.strip():
            if self.required:
                raise AnswerStoreCorruptError(self.path, "file is empty")
            self._answers = {}
            return

        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            raise AnswerStoreCorruptError(self.path, f"invalid JSON ({e})") from e

        self._answers = self._validate_table(data)
        logger.info(f"Loaded {len(self._answers)} {self.category.value} answers from {self.path}")

    def _validate_table(self, data) -> Dict[str, str]:
        if not isinstance(data, dict):
            raise AnswerStoreCorruptError(self.path, "top-level value must be an object")
        table = {}
        for question, answer in data.items():
            if isinstance(answer, (dict, list)) or answer is None:
                raise AnswerStoreCorruptError(
                    self.path, f"answer for {question!r} must be a string"
                )
            # Hand-edited files may contain bare numbers ("5" vs 5)
            raw = answer if isinstance(answer, str) else json.dumps(answer)
            try:
                table[question] = self.normalize_value(raw)
            except ValueError as e:
                raise AnswerStoreCorruptError(self.path, f"answer for {question!r}: {e}") from e
        return table

    def flush(self) -> None:
        """Atomically rewrite the backing file with the whole table."""
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    json.dump(self._answers, f, ensure_ascii=False, indent=2)
                os.replace(tmp_name, self.path)
            except BaseException:
                if os.path.exists(tmp_name):
                    os.unlink(tmp_name)
                raise
        except OSError as e:
            raise AnswerStorePersistenceError(self.path) from e

    def normalize_value(self, value: str) -> str:
        """Canonical form of an answer for this store's category."""
        value = str(value).strip()
        if self.category is QuestionCategory.BINARY:
            canonical = value.capitalize()
            if canonical not in BINARY_VALUES:
                raise ValueError(f"Binary answer must be one of {BINARY_VALUES}, got {value!r}")
            return canonical
        return value

    def get(self, question: str) -> Optional[str]:
        return self._answers.get(question)

    def put(self, question: str, value: str) -> str:
        """
        Store an answer (last write wins) and persist the table immediately.

        Returns:
            The stored, canonical value.

        Raises:
            AnswerStorePersistenceError: the backing file could not be written.
        """
        value = self.normalize_value(value)
        previous = self._answers.get(question)
        self._answers[question] = value
        try:
            self.flush()
        except AnswerStorePersistenceError as e:
            # Keep memory in line with what is on disk
            if previous is None:
                del self._answers[question]
            else:
                self._answers[question] = previous
            raise AnswerStorePersistenceError(self.path, question) from e.__cause__
        structured_logger.info(
            "answer_persisted",
            category=self.category.value,
            question=question,
            path=str(self.path),
        )
        return value

    def questions(self) -> List[str]:
        return list(self._answers)

    def __contains__(self, question: object) -> bool:
        return question in self._answers

    def __len__(self) -> int:
        return len(self._answers)

    def __iter__(self) -> Iterator[str]:
        return iter(self._answers)
