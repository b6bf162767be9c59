"""
================================================================================
Quote Page Object
================================================================================

Quote screen reached at the end of a submission or policy change, and the
bind step of an endorsement.

================================================================================
"""

import allure
from loguru import logger

from testsuites.ui_testing.framework.page_base import BasePage
from testsuites.ui_testing.framework.page_ready import all_of, element_visible, no_processing_overlay

# Quoting a policy runs rating on the server and can take a while
QUOTE_TIMEOUT = 60000


class QuotePage(BasePage):
    """Quote / premium summary screen."""

    PAGE_NAME = "quote"
    PAGE_READY = all_of(
        no_processing_overlay(timeout=QUOTE_TIMEOUT),
        element_visible("quote.premium_summary", timeout=QUOTE_TIMEOUT),
    )

    @allure.step("Wait for quote")
    async def wait_for_quote(self) -> None:
        logger.info("Waiting for premium summary")
        await self.wait_until_ready()

    async def get_policy_number(self) -> str:
        policy_number = (await self.web.get_text(self.el("policy_number"))).strip()
        logger.info(f"Policy number: {policy_number}")
        return policy_number

    async def get_total_premium(self) -> str:
        premium = (await self.web.get_text(self.el("total_premium"))).strip()
        logger.info(f"Total premium: {premium}")
        return premium

    @allure.step("Quote and bind endorsement")
    async def bind_endorsement(self) -> str:
        """
        Quote the policy change and issue it.

        Returns:
            Transaction number of the issued endorsement
        """
        await self.click_and_wait(self.el("quote_button"))
        await self.click_and_wait(self.el("bind_endorsement_button"))
        await self.verify_element_present(self.el("endorsement_issued_message"), timeout=QUOTE_TIMEOUT)

        transaction_number = (await self.web.get_text(self.el("transaction_number"))).strip()
        logger.info(f"Endorsement completed with transaction number: {transaction_number}")
        return transaction_number
