"""
UnknownQuestionResolver: obtain an answer for a question nobody answered yet
and persist it into the store of its category.

- free text: ask the operator on the terminal;
- binary: poll the page until the operator ticks Yes or No;
- single choice: poll the page until the select leaves its placeholder.

Polling is bounded by `timeout`; when it expires OperatorTimeoutError is
raised and nothing is stored.
"""

import asyncio
import logging
from typing import Awaitable, Callable, Mapping, Optional, Union

from answer_memory.answer_store import AnswerStore
from answer_memory.exceptions import OperatorTimeoutError
from answer_memory.models import BINARY_VALUES, QuestionCategory
from core.logger import get_structured_logger
from core.utils import ask_user_async

logger = logging.getLogger(__name__)
structured_logger = get_structured_logger(__name__)

Prompt = Callable[[str], Awaitable[str]]
Probe = Callable[[], Awaitable[Optional[str]]]


class UnknownQuestionResolver:
    """Captures new answers from the operator and writes them to the stores."""

    def __init__(
        self,
        stores: Mapping[QuestionCategory, AnswerStore],
        prompt: Optional[Prompt] = None,
        binary_poll_interval: float = 1.0,
        dropdown_poll_interval: float = 0.5,
        timeout: float = 300.0,
        unset_option_label: str = "Select an option",
    ):
        self.stores = stores
        self.prompt = prompt or ask_user_async
        self.binary_poll_interval = binary_poll_interval
        self.dropdown_poll_interval = dropdown_poll_interval
        self.timeout = timeout
        self.unset_option_label = unset_option_label

    async def resolve(
        self,
        question: str,
        category: Union[QuestionCategory, str],
        probe: Optional[Probe] = None,
    ) -> str:
        """
        Obtain, persist and return the answer to `question`.

        Args:
            question: Raw question text; becomes the store key.
            category: Which store and strategy to use.
            probe: Reads the operator's current choice from the page. Required
                for binary and single-choice questions.

        Raises:
            OperatorTimeoutError: no usable choice was observed in time.
            AnswerStorePersistenceError: the answer could not be saved.
        """
        category = QuestionCategory.parse(category)
        if category is QuestionCategory.FREE_TEXT:
            answer = await self._ask_free_text(question)
        elif probe is None:
            raise ValueError(f"A probe is required to resolve {category.value} questions")
        elif category is QuestionCategory.BINARY:
            answer = await self._poll(
                question, category, probe, self.binary_poll_interval, self._as_binary
            )
        else:
            answer = await self._poll(
                question, category, probe, self.dropdown_poll_interval, self._as_choice
            )

        stored = self.stores[category].put(question, answer)
        structured_logger.info("question_resolved", category=category.value, question=question)
        return stored

    async def _ask_free_text(self, question: str) -> str:
        logger.info(
            f"No sufficiently similar question found for: \"{question}\". Please provide an answer."
        )
        answer = await self.prompt(f"Answer for \"{question}\": ")
        return answer.strip()

    @staticmethod
    def _as_binary(observed: str) -> Optional[str]:
        canonical = observed.strip().capitalize()
        return canonical if canonical in BINARY_VALUES else None

    def _as_choice(self, observed: str) -> Optional[str]:
        value = observed.strip()
        if not value or value == self.unset_option_label:
            return None
        return value

    async def _poll(
        self,
        question: str,
        category: QuestionCategory,
        probe: Probe,
        interval: float,
        accept: Callable[[str], Optional[str]],
    ) -> str:
        loop = asyncio.get_running_loop()
        deadline = loop.time() + self.timeout
        logger.info(f"Please answer \"{question}\" via the browser UI.")

        while True:
            try:
                observed = await probe()
            except Exception as e:
                # Field re-rendered or detached; the operator may still answer
                logger.warning(f"Could not read the {category.value} selection: {e}", exc_info=True)
                observed = None

            if observed is not None:
                answer = accept(observed)
                if answer is not None:
                    return answer

            if loop.time() >= deadline:
                structured_logger.warning(
                    "operator_timeout",
                    category=category.value,
                    question=question,
                    timeout=self.timeout,
                )
                raise OperatorTimeoutError(question, category.value, self.timeout)

            logger.debug(f"No selection made via UI yet for \"{question}\".")
            await asyncio.sleep(interval)
