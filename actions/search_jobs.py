from playwright.async_api import Page, ElementHandle
import logging
from typing import List

from core.selectors import selectors
from config import config

logger = logging.getLogger(__name__)

JOBS_URL = "https://www.linkedin.com/jobs/"


async def search_jobs(page: Page, keywords: str) -> List[ElementHandle]:
    """
    Searches LinkedIn jobs by keyword and returns the job cards of the first
    result page, capped at `job_search.max_jobs_per_run`.
    """
    logger.info(f"Searching jobs for '{keywords}'...")
    await page.goto(JOBS_URL)

    search_box = page.locator(selectors["job_search_box"]).first
    await search_box.click()
    await search_box.fill(keywords)
    await search_box.press("Enter")
    await page.wait_for_timeout(config.general_settings.wait_after_search_ms)

    try:
        await page.wait_for_selector(
            selectors["easy_apply_filter"], timeout=config.performance.selector_timeout
        )
        logger.info("Easy Apply filter is available.")
    except Exception as e:
        logger.debug(f"Easy Apply filter button not found, continuing. Exception: {e}")

    job_cards = await page.query_selector_all(selectors["job_card"])
    logger.info(f"Number of jobs listed: {len(job_cards)}")
    return job_cards[: config.job_search.max_jobs_per_run]
