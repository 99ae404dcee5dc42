import asyncio
import logging
from typing import Optional

from playwright.async_api import Page, ElementHandle

logger = logging.getLogger(__name__)


def ask_user(prompt: str) -> str:
    """
    Asks the user for input and returns the response.
    """
    print(prompt, end="", flush=True)
    return input()


async def ask_user_async(prompt: str) -> str:
    """
    Same as ask_user, but reads the terminal in a worker thread so the
    browser's event loop keeps running while the operator types.
    """
    return await asyncio.to_thread(ask_user, prompt)


async def wait_for_any_selector(
    page: Page,
    selectors: list[str],
    timeout: int = 10000,
    state: str = "visible"
) -> Optional[tuple[str, ElementHandle]]:
    """
    Waits until one of `selectors` reaches `state` on the page.

    Args:
        page: Playwright page instance.
        selectors: Selectors to race against each other.
        timeout: Maximum time to wait in milliseconds.
        state: Element state to wait for ("visible", "attached", "hidden").

    Returns:
        (matched_selector, element_handle) for the first selector found, None otherwise.
    """
    async def wait_single(selector: str):
        try:
            return selector, await page.wait_for_selector(selector, state=state, timeout=timeout)
        except Exception as e:
            logger.debug(f"Selector '{selector}' not found: {e}")
            return selector, None

    tasks = [asyncio.create_task(wait_single(selector)) for selector in selectors]
    try:
        for finished in asyncio.as_completed(tasks, timeout=timeout / 1000.0):
            selector, element = await finished
            if element:
                logger.debug(f"Found element with selector: {selector}")
                return selector, element
    except asyncio.TimeoutError:
        pass
    finally:
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)

    logger.debug(f"None of the selectors found: {selectors}")
    return None
