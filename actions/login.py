from playwright.async_api import Page
import logging

from core.selectors import selectors
from core.utils import wait_for_any_selector
from config import config

logger = logging.getLogger(__name__)

LOGIN_URL = "https://www.linkedin.com/login"


async def login(page: Page) -> None:
    """Log into LinkedIn.

    Credentials are typed in when configured; either way the operator gets
    `performance.login_timeout` to finish the login (2FA, captcha) by hand.

    Raises:
        TimeoutError: If the authenticated navigation bar never appears.
    """
    logger.info("Opening LinkedIn login page...")
    await page.goto(LOGIN_URL)

    if config.login.email and config.login.password:
        logger.debug("Entering login credentials.")
        await page.fill(selectors["email_input"], config.login.email)
        await page.fill(selectors["password_input"], config.login.password)
        await page.click(selectors["login_submit"])
    else:
        logger.info("No credentials configured.")

    logger.info("Please complete the LinkedIn login in the browser if prompted.")
    result = await wait_for_any_selector(
        page,
        [selectors["login_indicator"]],
        timeout=config.performance.login_timeout,
    )
    if not result:
        raise TimeoutError(
            f"Login was not completed within {config.performance.login_timeout / 1000:.0f}s"
        )

    logger.info("Successfully logged in to LinkedIn.")
