from playwright.async_api import Page, ElementHandle
import logging
from typing import List, Optional

from rapidfuzz import fuzz, process
from rapidfuzz.utils import default_process

from answer_memory import AnswerMemory, QuestionCategory
from answer_memory.exceptions import AnswerStorePersistenceError, OperatorTimeoutError
from core.selectors import selectors

logger = logging.getLogger(__name__)

OPTION_MATCH_THRESHOLD = 85


def choose_option_label(answer: str, option_labels: List[str], threshold: int = OPTION_MATCH_THRESHOLD) -> Optional[str]:
    """
    Pick the option label to select for a stored answer.

    Exact (case and whitespace insensitive) matches win; otherwise the closest
    label by token-set ratio, when it reaches `threshold`.
    """
    wanted = answer.strip().lower()
    for label in option_labels:
        if label.strip().lower() == wanted:
            return label

    result = process.extractOne(
        answer,
        option_labels,
        scorer=fuzz.token_set_ratio,
        processor=default_process,
        score_cutoff=threshold,
    )
    if result:
        matched_label, score, _ = result
        logger.debug(f"Option '{matched_label}' matched answer '{answer}' with score {score:.0f}.")
        return matched_label
    return None


async def _option_labels(select_element: ElementHandle) -> List[str]:
    options = await select_element.query_selector_all(selectors["select_option"])
    labels = []
    for option in options:
        labels.append(((await option.text_content()) or "").strip())
    return labels


async def _process_dropdown(dropdown_element: ElementHandle, memory: AnswerMemory):
    label_element = await dropdown_element.query_selector(selectors["dropdown_label"])
    select_element = await dropdown_element.query_selector(selectors["select"])
    if not label_element or not select_element:
        return
    question_text = ((await label_element.text_content()) or "").strip()
    if not question_text:
        return
    logger.info(f"Dropdown Question: {question_text}")

    answer = memory.get_answer(question_text, QuestionCategory.SINGLE_CHOICE)
    if answer is None:
        logger.info(f"Please select the answer for \"{question_text}\" via the browser UI.")
        await select_element.focus()
        await memory.resolve(
            question_text, QuestionCategory.SINGLE_CHOICE, probe=select_element.input_value
        )
        # Already selected by the operator
        return

    option_label = choose_option_label(answer, await _option_labels(select_element))
    if option_label is None:
        logger.warning(f"Stored answer '{answer}' is not an option of \"{question_text}\". Skipping.")
        return
    await select_element.select_option(label=option_label)
    logger.debug(f"Selected option '{option_label}' for select field '{question_text}'.")


async def answer_dropdown_questions(page: Page, memory: AnswerMemory) -> None:
    """
    Answers every dropdown question of the current form step.
    """
    dropdowns = await page.query_selector_all(selectors["dropdown_container"])
    for dropdown_element in dropdowns:
        try:
            await _process_dropdown(dropdown_element, memory)
        except AnswerStorePersistenceError:
            raise
        except OperatorTimeoutError as e:
            logger.warning(f"{e}. Skipping the dropdown.")
        except Exception as e:
            logger.warning(f"Could not process a dropdown question: {e}", exc_info=True)
