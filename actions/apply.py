from playwright.async_api import Page, ElementHandle, TimeoutError as PlaywrightTimeoutError
import logging
from dataclasses import dataclass

from answer_memory import AnswerMemory
from apply_form.fill_fields import fill_fields
from config import AppConfig
from core.logger import get_structured_logger
from core.resilience import RetryExhaustedError, retry_async
from core.selectors import selectors

logger = logging.getLogger(__name__)
structured_logger = get_structured_logger(__name__)

STATUS_ALREADY_APPLIED = "already_applied"
STATUS_NO_EASY_APPLY = "no_easy_apply"
STATUS_SUBMITTED = "submitted"
STATUS_DRY_RUN = "dry_run"
STATUS_INCOMPLETE = "incomplete"


@dataclass
class ApplyResult:
    """Outcome of one application attempt."""

    status: str
    steps: int = 0

    @property
    def submitted(self) -> bool:
        return self.status == STATUS_SUBMITTED


async def dismiss_confirmation(page: Page, app_config: AppConfig) -> bool:
    """
    Closes the dialog LinkedIn shows after a submission.

    Retries a bounded number of times; returns False when the dialog never
    became dismissable.
    """
    async def click_dismiss():
        button = await page.query_selector(selectors["confirmation_dismiss"])
        if not button:
            raise LookupError("Confirmation dialog not shown yet")
        await button.click()

    try:
        await retry_async(
            click_dismiss,
            operation_name="dismiss_confirmation",
            max_attempts=app_config.confirmation.max_attempts,
            wait_seconds=app_config.confirmation.backoff_seconds,
        )
        return True
    except RetryExhaustedError as e:
        logger.warning(f"{e}. Continuing with the next job.")
        return False


async def _discard_application(page: Page) -> None:
    """Closes the modal without submitting (dry-run mode)."""
    await page.keyboard.press("Escape")
    discard = await page.query_selector(selectors["discard_button"])
    if discard:
        await discard.click()


async def apply_to_job(
    page: Page,
    job_card: ElementHandle,
    app_config: AppConfig,
    memory: AnswerMemory,
) -> ApplyResult:
    """
    Opens a job card, starts Easy Apply and walks the modal step by step,
    answering every question through the answer memory. Submits only when
    `general_settings.should_submit` is enabled.
    """
    await job_card.click()

    if await page.query_selector(selectors["already_applied"]):
        logger.info("Already applied to this job. Skipping.")
        return ApplyResult(STATUS_ALREADY_APPLIED)

    try:
        easy_apply_button = await page.wait_for_selector(
            selectors["easy_apply_button"], timeout=app_config.performance.selector_timeout
        )
    except PlaywrightTimeoutError:
        easy_apply_button = None
    if not easy_apply_button:
        logger.info("No Easy Apply button found. Skipping this job.")
        return ApplyResult(STATUS_NO_EASY_APPLY)

    await easy_apply_button.click()
    await page.wait_for_timeout(app_config.general_settings.wait_between_steps_ms)

    for step in range(1, app_config.general_settings.max_form_steps + 1):
        structured_logger.debug("form_step_started", step=step)
        await fill_fields(page, app_config, memory)

        submit_button = await page.query_selector(selectors["submit"])
        if submit_button:
            if not app_config.general_settings.should_submit:
                logger.info("Dry run: form is ready but will not be submitted.")
                await _discard_application(page)
                return ApplyResult(STATUS_DRY_RUN, steps=step)
            await submit_button.click()
            structured_logger.info("application_submitted", steps=step)
            await dismiss_confirmation(page, app_config)
            return ApplyResult(STATUS_SUBMITTED, steps=step)

        next_button = (
            await page.query_selector(selectors["review_button"])
            or await page.query_selector(selectors["next_button"])
        )
        if not next_button:
            logger.warning(f"No Next, Review or Submit button on step {step}. Giving up on this job.")
            return ApplyResult(STATUS_INCOMPLETE, steps=step)

        await next_button.click()
        await page.wait_for_timeout(app_config.general_settings.wait_between_steps_ms)

    logger.warning(
        f"Form not finished after {app_config.general_settings.max_form_steps} steps. Giving up on this job."
    )
    return ApplyResult(STATUS_INCOMPLETE, steps=app_config.general_settings.max_form_steps)
