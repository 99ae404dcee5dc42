from playwright.async_api import Page
import logging
from pathlib import Path
from typing import Optional

from core.selectors import selectors
from .change_text_input import change_text_input

logger = logging.getLogger(__name__)


async def fill_contact_info(page: Page, email: str, phone: str) -> None:
    """
    Fills the static contact step: email address select and mobile phone.
    Fields absent from the current step are skipped.
    """
    if email:
        email_select = await page.query_selector(selectors["contact_email_select"])
        if email_select:
            await email_select.select_option(label=email)
            logger.debug("Selected contact email.")

    if phone and await page.query_selector(selectors["phone"]):
        await change_text_input(page, selectors["phone"], phone)
        logger.debug("Filled mobile phone number.")


async def upload_resume(page: Page, cv_path: Optional[Path]) -> None:
    """
    Uploads the resume if the current step has a file input.
    """
    if not cv_path:
        return
    input_element = await page.query_selector(selectors["resume_input"])
    if input_element:
        await input_element.set_input_files(str(cv_path))
        logger.debug(f"Uploaded resume {cv_path}.")
