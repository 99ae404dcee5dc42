import pytest
from unittest.mock import AsyncMock, MagicMock, patch
from types import SimpleNamespace

from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from actions.apply import (
    STATUS_ALREADY_APPLIED,
    STATUS_DRY_RUN,
    STATUS_INCOMPLETE,
    STATUS_NO_EASY_APPLY,
    STATUS_SUBMITTED,
    apply_to_job,
    dismiss_confirmation,
)
from core.selectors import selectors


@pytest.fixture
def app_config():
    return SimpleNamespace(
        general_settings=SimpleNamespace(
            should_submit=False,
            max_form_steps=3,
            wait_between_steps_ms=0,
        ),
        performance=SimpleNamespace(selector_timeout=100),
        confirmation=SimpleNamespace(max_attempts=3, backoff_seconds=0),
    )


def make_page(present=(), easy_apply_button=None):
    """Page mock whose query_selector returns an element for each selector key in `present`."""
    page = AsyncMock()
    page.keyboard = AsyncMock()
    elements = {selectors[key]: AsyncMock(name=key) for key in present}

    async def query_selector_side_effect(selector):
        return elements.get(selector)

    page.query_selector.side_effect = query_selector_side_effect
    page.wait_for_selector.return_value = easy_apply_button
    page.elements = elements
    return page


class TestDismissConfirmation:

    @pytest.mark.asyncio
    async def test_clicks_dismiss_when_shown(self, app_config):
        page = make_page(present=["confirmation_dismiss"])

        assert await dismiss_confirmation(page, app_config) is True

        page.elements[selectors["confirmation_dismiss"]].click.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_waits_for_dialog_to_appear(self, app_config):
        page = AsyncMock()
        dismiss_button = AsyncMock()
        page.query_selector.side_effect = [None, None, dismiss_button]

        assert await dismiss_confirmation(page, app_config) is True

        assert page.query_selector.await_count == 3
        dismiss_button.click.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_gives_up_after_attempt_budget(self, app_config):
        page = make_page()

        assert await dismiss_confirmation(page, app_config) is False

        assert page.query_selector.await_count == 3


@pytest.mark.asyncio
class TestApplyToJob:

    async def test_already_applied(self, app_config):
        page = make_page(present=["already_applied"])
        job_card = AsyncMock()

        result = await apply_to_job(page, job_card, app_config, MagicMock())

        job_card.click.assert_awaited_once()
        assert result.status == STATUS_ALREADY_APPLIED
        page.wait_for_selector.assert_not_called()

    async def test_no_easy_apply_button(self, app_config):
        page = make_page()
        page.wait_for_selector.side_effect = PlaywrightTimeoutError("timeout")

        result = await apply_to_job(page, AsyncMock(), app_config, MagicMock())

        assert result.status == STATUS_NO_EASY_APPLY

    @patch("actions.apply.dismiss_confirmation", new_callable=AsyncMock)
    @patch("actions.apply.fill_fields", new_callable=AsyncMock)
    async def test_dry_run_discards_ready_form(self, mock_fill_fields, mock_dismiss, app_config):
        easy_apply_button = AsyncMock()
        page = make_page(present=["submit", "discard_button"], easy_apply_button=easy_apply_button)
        memory = MagicMock()

        result = await apply_to_job(page, AsyncMock(), app_config, memory)

        easy_apply_button.click.assert_awaited_once()
        mock_fill_fields.assert_awaited_once_with(page, app_config, memory)
        assert result.status == STATUS_DRY_RUN
        assert result.submitted is False
        page.elements[selectors["submit"]].click.assert_not_called()
        page.keyboard.press.assert_awaited_once_with("Escape")
        page.elements[selectors["discard_button"]].click.assert_awaited_once()
        mock_dismiss.assert_not_awaited()

    @patch("actions.apply.dismiss_confirmation", new_callable=AsyncMock)
    @patch("actions.apply.fill_fields", new_callable=AsyncMock)
    async def test_submit_mode(self, mock_fill_fields, mock_dismiss, app_config):
        app_config.general_settings.should_submit = True
        page = make_page(present=["submit"], easy_apply_button=AsyncMock())

        result = await apply_to_job(page, AsyncMock(), app_config, MagicMock())

        assert result.status == STATUS_SUBMITTED
        assert result.submitted is True
        assert result.steps == 1
        page.elements[selectors["submit"]].click.assert_awaited_once()
        mock_dismiss.assert_awaited_once_with(page, app_config)

    @patch("actions.apply.fill_fields", new_callable=AsyncMock)
    async def test_walks_steps_until_submit(self, mock_fill_fields, app_config):
        next_button = AsyncMock()
        submit_button = AsyncMock()
        page = AsyncMock()
        page.keyboard = AsyncMock()
        page.wait_for_selector.return_value = AsyncMock()
        step = {"number": 1}

        async def query_selector_side_effect(selector):
            if selector == selectors["next_button"] and step["number"] == 1:
                return next_button
            if selector == selectors["submit"] and step["number"] == 2:
                return submit_button
            return None

        async def advance():
            step["number"] += 1

        page.query_selector.side_effect = query_selector_side_effect
        next_button.click.side_effect = advance

        result = await apply_to_job(page, AsyncMock(), app_config, MagicMock())

        assert result.status == STATUS_DRY_RUN
        assert result.steps == 2
        assert mock_fill_fields.await_count == 2

    @patch("actions.apply.fill_fields", new_callable=AsyncMock)
    async def test_no_navigation_button(self, mock_fill_fields, app_config):
        page = make_page(easy_apply_button=AsyncMock())

        result = await apply_to_job(page, AsyncMock(), app_config, MagicMock())

        assert result.status == STATUS_INCOMPLETE
        assert result.steps == 1

    @patch("actions.apply.fill_fields", new_callable=AsyncMock)
    async def test_step_limit(self, mock_fill_fields, app_config):
        page = make_page(present=["next_button"], easy_apply_button=AsyncMock())

        result = await apply_to_job(page, AsyncMock(), app_config, MagicMock())

        assert result.status == STATUS_INCOMPLETE
        assert result.steps == 3
        assert mock_fill_fields.await_count == 3
