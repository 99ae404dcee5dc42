from playwright.async_api import Page, ElementHandle
import logging
from typing import Optional

from answer_memory import AnswerMemory, QuestionCategory
from answer_memory.exceptions import AnswerStorePersistenceError, OperatorTimeoutError
from core.selectors import selectors

logger = logging.getLogger(__name__)


def _checked_radio_probe(fieldset: ElementHandle):
    """Reads the value of the radio the operator ticked inside `fieldset`."""
    async def probe() -> Optional[str]:
        checked = await fieldset.query_selector(selectors["radio_checked"])
        if not checked:
            return None
        return await checked.get_attribute("value")
    return probe


async def _click_answer(fieldset: ElementHandle, question_text: str, answer: str):
    radio = await fieldset.query_selector(selectors["radio_by_value"].format(value=answer))
    if not radio:
        logger.info(f"No suitable answer found for: \"{question_text}\". Skipping.")
        return
    await radio.scroll_into_view_if_needed()
    await radio.click(force=True)
    logger.debug(f"Selected '{answer}' for radio group '{question_text}'.")


async def _process_binary_fieldset(fieldset: ElementHandle, memory: AnswerMemory):
    title_element = await fieldset.query_selector(selectors["radio_title"])
    if not title_element:
        return
    question_text = ((await title_element.text_content()) or "").strip()
    if not question_text:
        return
    logger.info(f"Binary Question: {question_text}")

    answer = memory.get_answer(question_text, QuestionCategory.BINARY)
    if answer is None:
        # The operator's own click is the answer; it is persisted by the resolver
        answer = await memory.resolve(
            question_text, QuestionCategory.BINARY, probe=_checked_radio_probe(fieldset)
        )

    await _click_answer(fieldset, question_text, answer)


async def answer_binary_questions(page: Page, memory: AnswerMemory) -> None:
    """
    Answers every Yes/No radio question of the current form step.
    """
    fieldsets = await page.query_selector_all(selectors["radio_fieldset"])
    for fieldset in fieldsets:
        try:
            await _process_binary_fieldset(fieldset, memory)
        except AnswerStorePersistenceError:
            raise
        except OperatorTimeoutError as e:
            logger.warning(f"{e}. Skipping the radio group.")
        except Exception as e:
            logger.warning(f"Could not process a radio button fieldset: {e}", exc_info=True)
