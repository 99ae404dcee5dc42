import asyncio
import sys
import os
import logging
from playwright.async_api import async_playwright

# It's important to set up logging before other imports that might use it.
from core.logger import setup_logging
from config import AppConfig, config

setup_logging()
logger = logging.getLogger(__name__)


def load_answer_memory(app_config: AppConfig):
    """
    Loads the three answer stores. Returns None when the free-text answers
    file is missing or unreadable, which is fatal for the run.
    """
    from answer_memory import AnswerMemory
    from answer_memory.exceptions import AnswerStoreCorruptError, AnswerStoreMissingError

    try:
        return AnswerMemory.from_config(app_config)
    except (AnswerStoreMissingError, AnswerStoreCorruptError) as e:
        logger.critical(str(e))
        return None


async def apply_to_jobs(page, app_config: AppConfig, memory) -> dict:
    """Searches jobs and applies to each listed one. Returns a count per status."""
    from actions.apply import apply_to_job
    from actions.search_jobs import search_jobs
    from answer_memory.exceptions import AnswerStorePersistenceError

    summary: dict = {}
    job_cards = await search_jobs(page, app_config.job_search.keywords)
    for index, job_card in enumerate(job_cards, start=1):
        logger.info(f"Processing job {index}/{len(job_cards)}")
        try:
            result = await apply_to_job(page, job_card, app_config, memory)
        except AnswerStorePersistenceError:
            raise
        except Exception as e:
            logger.error(f"Application {index} failed: {e}", exc_info=True)
            summary["failed"] = summary.get("failed", 0) + 1
            continue
        summary[result.status] = summary.get(result.status, 0) + 1
    return summary


# --- Main Orchestrator ---
async def main() -> int:
    """Main orchestrator function for the LinkedIn Easy Apply bot."""
    from actions.login import login

    memory = load_answer_memory(config)
    if memory is None:
        return 1

    mode = "SUBMIT" if config.general_settings.should_submit else "DRY RUN"
    logger.info(f"Bot starting in {mode} mode.")

    os.makedirs(config.session.user_data_dir, exist_ok=True)

    async with async_playwright() as p:
        logger.info(f"Launching browser with persistent context from: {config.session.user_data_dir}")
        context = await p.chromium.launch_persistent_context(
            str(config.session.user_data_dir),
            headless=config.general_settings.browser_headless,
        )
        try:
            page = context.pages[0] if context.pages else await context.new_page()
            await login(page)
            summary = await apply_to_jobs(page, config, memory)
            logger.info(f"Run finished: {summary}")
        finally:
            await context.close()

    return 0


def run() -> None:
    sys.exit(asyncio.run(main()))


if __name__ == "__main__":
    run()
