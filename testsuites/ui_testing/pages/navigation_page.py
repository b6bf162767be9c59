"""
================================================================================
Navigation Page Object
================================================================================

Cross-screen flows that are not owned by a single PolicyCenter screen:
starting a submission, picking the account and product, moving between
wizard steps, and opening an existing policy for an endorsement.

Targets that depend on test data (account links, product rows, wizard
menu items) are resolved as children of cataloged containers.

================================================================================
"""

from typing import Dict

import allure
from loguru import logger

from testsuites.ui_testing.framework.exceptions import AutomationError
from testsuites.ui_testing.framework.page_base import BasePage


# Business line key -> product name shown in the Product Selection list
BUSINESS_LINES: Dict[str, str] = {
    "Businessowners": "ESB Businessowners",
    "CommercialAuto": "ESB Commercial Auto",
}

# How long to look for a wizard tab by aria-label before using its label text
POLICY_TAB_TIMEOUT = 5000


class NavigationPage(BasePage):
    """Submission / policy navigation."""

    PAGE_NAME = "navigation"

    @allure.step("Navigate to new submission")
    async def navigate_to_new_submission(self) -> None:
        logger.info("Navigating to new submission")
        await self.click_and_wait(self.el("new_submission_menu_item"))

    @allure.step("Select account from search: {account_number}")
    async def select_account_from_search(self, account_number: str) -> None:
        logger.info(f"Selecting account: {account_number}")
        await self.web.fill(self.el("account_number_input"), account_number)
        await self.click_and_wait("common.search_button")

        await self.web.click_within("common.screen", f'a:has-text("{account_number}")')
        await self.wait_until_ready()

    @allure.step("Select business line: {business_line}")
    async def select_business_line(self, business_line: str) -> None:
        """
        Pick a product on the Product Selection screen.

        Args:
            business_line: 'Businessowners' or 'CommercialAuto'

        Raises:
            ValueError: Unknown business line
        """
        if business_line not in BUSINESS_LINES:
            raise ValueError(
                f"Unknown business line: {business_line}. "
                f"Expected one of {sorted(BUSINESS_LINES)}"
            )

        product = BUSINESS_LINES[business_line]
        logger.info(f"Selecting business line: {business_line} ({product})")
        await self.web.click_within(self.el("product_selection_list"), f'text="{product}"')
        await self.click_and_wait("common.select_button")

    @allure.step("Navigate to policy tab: {tab_name}")
    async def navigate_to_policy_tab(self, tab_name: str) -> None:
        """
        Open a wizard step from the left-hand menu.

        Menu items are matched by aria-label first; some PolicyCenter
        versions only render the label text, which is tried second.
        """
        logger.info(f"Navigating to policy tab: {tab_name}")
        try:
            await self.web.click_within(
                "common.screen",
                f'div[role="menuitem"][aria-label="{tab_name}"]',
                timeout=POLICY_TAB_TIMEOUT,
            )
        except AutomationError:
            logger.warning(
                f'Failed to find tab "{tab_name}" by aria-label. Trying label text.'
            )
            await self.web.click_within("common.screen", f'div.gw-label:text-is("{tab_name}")')

        await self.wait_until_ready()

    @allure.step("Search policy: {policy_number}")
    async def search_policy(self, policy_number: str) -> None:
        """Find a policy from the Policy tab and open it."""
        logger.info(f"Searching for policy: {policy_number}")
        await self.click_and_wait("header.policy_tab")
        await self.web.fill(self.el("policy_number_search_input"), policy_number)
        await self.click_and_wait("common.search_button")

        await self.web.click_within("common.screen", f'a:has-text("{policy_number}")')
        await self.wait_until_ready()

    @allure.step("Start endorsement effective {endorsement_date}")
    async def start_endorsement(self, endorsement_date: str) -> None:
        """
        Start a policy change on the open policy.

        Args:
            endorsement_date: Effective date in MM/dd/yyyy
        """
        logger.info(f"Starting endorsement effective {endorsement_date}")
        await self.click_and_wait(self.el("start_endorsement_button"))
        await self.web.fill(self.el("endorsement_date_input"), endorsement_date)
        await self.click_and_wait("common.next_button")
