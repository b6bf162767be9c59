"""
================================================================================
Login Page Object (Async / Playwright)
================================================================================

PolicyCenter login screen.

Credentials default to configuration (``auth.username`` / ``auth.password``,
overridable with ``PC_USERNAME`` / ``PC_PASSWORD``) so no secrets live in
test code.

================================================================================
"""

from __future__ import annotations

from typing import Optional

import allure
from loguru import logger

from autotest_tools.common import get_config
from testsuites.ui_testing.framework.page_base import BasePage
from testsuites.ui_testing.framework.page_ready import element_visible


class LoginPage(BasePage):
    """Login page object (async)."""

    PAGE_NAME = "login"
    PAGE_READY = element_visible("login.username_input")

    # Landmark that only exists once the user is signed in
    LOGGED_IN_MARKER = "header.settings_button"

    @allure.step("Open login page")
    async def open(self) -> "LoginPage":
        """Navigate to the PolicyCenter entry URL and wait for the form."""
        await self.navigate()
        return self

    @allure.step("Login (username={username})")
    async def login(
        self,
        username: Optional[str] = None,
        password: Optional[str] = None,
        verify: bool = True,
    ) -> None:
        """
        Perform login.

        Args:
            username: PolicyCenter user. Defaults to config ``auth.username``.
            password: Password. Defaults to config ``auth.password``.
            verify: Wait for the logged-in header before returning.
        """
        if username is None:
            username = get_config("auth.username", "su")
        if password is None:
            password = get_config("auth.password", "gw")

        logger.info(f"Logging in as {username}")

        await self.web.fill(self.el("username_input"), username)
        await self.web.fill(self.el("password_input"), password)
        await self.web.click(self.el("login_button"))

        if verify:
            await self.verify_element_present(self.LOGGED_IN_MARKER)
            logger.info("Login successful")

    async def is_login_successful(self, timeout: int = 5000) -> bool:
        return await self.web.is_visible(self.LOGGED_IN_MARKER, timeout=timeout)

    async def get_error_message(self, timeout: int = 5000) -> str:
        """Text of the login error banner."""
        return (await self.web.get_text(self.el("error_message"), timeout=timeout)).strip()
