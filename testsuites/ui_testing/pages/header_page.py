"""
================================================================================
Header Page Object
================================================================================

PolicyCenter tab bar: top-level navigation and logout.

================================================================================
"""

import allure
from loguru import logger

from testsuites.ui_testing.framework.page_base import BasePage


class HeaderPage(BasePage):
    """Top tab bar, present on every screen after login."""

    PAGE_NAME = "header"

    @allure.step("Logout")
    async def logout(self) -> None:
        logger.info("Logging out")
        await self.web.click(self.el("settings_button"))
        await self.click_and_wait(self.el("logout_option"))

        await self.verify_element_present("login.username_input")
        logger.info("Logout successful")

    @allure.step("Navigate to Desktop")
    async def navigate_to_desktop(self) -> None:
        await self.click_and_wait(self.el("desktop_tab"))

    @allure.step("Navigate to Accounts")
    async def navigate_to_accounts(self) -> None:
        await self.click_and_wait(self.el("account_tab"))

    @allure.step("Navigate to Policies")
    async def navigate_to_policies(self) -> None:
        await self.click_and_wait(self.el("policy_tab"))

    @allure.step("Navigate to Search")
    async def navigate_to_search(self) -> None:
        await self.click_and_wait(self.el("search_tab"))

    @allure.step("Navigate to Administration")
    async def navigate_to_administration(self) -> None:
        await self.click_and_wait(self.el("administration_tab"))
