import pytest
from unittest.mock import AsyncMock, patch
from types import SimpleNamespace

from actions.login import LOGIN_URL, login
from core.selectors import selectors


def make_config(email="", password=""):
    return SimpleNamespace(
        login=SimpleNamespace(email=email, password=password),
        performance=SimpleNamespace(login_timeout=300000),
    )


class TestLogin:

    @pytest.mark.asyncio
    @patch("actions.login.wait_for_any_selector", new_callable=AsyncMock)
    async def test_login_with_credentials(self, mock_wait_for_any_selector, monkeypatch):
        """Credentials are typed in, then the bot waits for the navigation bar."""
        monkeypatch.setattr("actions.login.config", make_config("jane@example.com", "secret"))
        mock_page = AsyncMock()
        mock_wait_for_any_selector.return_value = (selectors["login_indicator"], AsyncMock())

        await login(mock_page)

        mock_page.goto.assert_awaited_once_with(LOGIN_URL)
        mock_page.fill.assert_any_await(selectors["email_input"], "jane@example.com")
        mock_page.fill.assert_any_await(selectors["password_input"], "secret")
        mock_page.click.assert_awaited_once_with(selectors["login_submit"])
        mock_wait_for_any_selector.assert_awaited_once_with(
            mock_page, [selectors["login_indicator"]], timeout=300000
        )

    @pytest.mark.asyncio
    @patch("actions.login.wait_for_any_selector", new_callable=AsyncMock)
    async def test_login_without_credentials_waits_for_operator(self, mock_wait_for_any_selector, monkeypatch):
        """Without credentials the operator logs in by hand."""
        monkeypatch.setattr("actions.login.config", make_config())
        mock_page = AsyncMock()
        mock_wait_for_any_selector.return_value = (selectors["login_indicator"], AsyncMock())

        await login(mock_page)

        mock_page.fill.assert_not_called()
        mock_page.click.assert_not_called()
        mock_wait_for_any_selector.assert_awaited_once()

    @pytest.mark.asyncio
    @patch("actions.login.wait_for_any_selector", new_callable=AsyncMock)
    async def test_login_not_completed(self, mock_wait_for_any_selector, monkeypatch):
        monkeypatch.setattr("actions.login.config", make_config("jane@example.com", "secret"))
        mock_wait_for_any_selector.return_value = None

        with pytest.raises(TimeoutError, match="300s"):
            await login(AsyncMock())
