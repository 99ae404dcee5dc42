from playwright.async_api import Page, ElementHandle
import logging

from answer_memory import AnswerMemory, QuestionCategory
from answer_memory.exceptions import AnswerStorePersistenceError, OperatorTimeoutError
from core.selectors import selectors
from .change_text_input import change_text_input

logger = logging.getLogger(__name__)


async def _process_text_question(page: Page, label_element: ElementHandle, memory: AnswerMemory):
    """Answers the free-text question of one label and types it into its input."""
    question_text = ((await label_element.text_content()) or "").strip()
    if not question_text:
        return
    logger.info(f"Question: {question_text}")

    answer_element = None
    input_id = await label_element.get_attribute("for")
    if input_id:
        answer_element = await page.query_selector(selectors["input_by_id"].format(id=input_id))

    answer = memory.get_answer(question_text, QuestionCategory.FREE_TEXT)
    if answer is None:
        answer = await memory.resolve(question_text, QuestionCategory.FREE_TEXT)

    if answer_element:
        await change_text_input(answer_element, "", answer)
        logger.debug(f"Filled '{question_text}' with stored answer.")
    else:
        logger.warning(f"No input found for question: \"{question_text}\".")


async def answer_text_questions(page: Page, memory: AnswerMemory) -> None:
    """
    Answers every free-text question of the current form step.
    """
    labels = await page.query_selector_all(selectors["text_question_label"])
    for label_element in labels:
        try:
            await _process_text_question(page, label_element, memory)
        except AnswerStorePersistenceError:
            raise
        except OperatorTimeoutError as e:
            logger.warning(f"{e}. Leaving the field empty.")
        except Exception as e:
            logger.warning(f"Could not process a text question: {e}", exc_info=True)
