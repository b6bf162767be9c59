"""
================================================================================
Account Page Object
================================================================================

Account search, person account creation and account updates.

Key Features:
- PersonAccount value object built from test data
- Account search with row verification in the results table
- Partial account updates driven by a field -> element map

================================================================================
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any, Dict, Mapping

import allure
from loguru import logger

from testsuites.ui_testing.framework.page_base import BasePage
from testsuites.ui_testing.framework.page_ready import all_of, network_idle, no_processing_overlay


@dataclass
class PersonAccount:
    """Data entered on the Create Account screen for a person."""

    first_name: str
    last_name: str
    date_of_birth: str
    mobile_phone: str
    email: str
    address_line1: str
    city: str
    state: str
    zip_code: str
    country: str = "United States"
    gender: str = "Male"
    marital_status: str = "Single"
    primary_phone: str = "Mobile"
    address_type: str = "Home"
    organization: str = ""
    producer_code_index: int = 1

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "PersonAccount":
        """Build from a test data mapping, ignoring keys the form does not use."""
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in data.items() if k in known})


# update_account field -> (element, how it is set)
UPDATABLE_FIELDS: Dict[str, tuple] = {
    "mobile_phone": ("mobile_phone_input", "fill"),
    "email": ("primary_email_input", "fill"),
    "address_line1": ("address_line1_input", "fill"),
    "city": ("city_input", "fill"),
    "state": ("state_dropdown", "select"),
    "zip_code": ("zip_code_input", "fill"),
}


class AccountPage(BasePage):
    """Account screens."""

    PAGE_NAME = "account"
    PAGE_READY = all_of(no_processing_overlay(), network_idle())

    # =========================================================================
    # Search
    # =========================================================================

    @allure.step("Search account: {account_number}")
    async def search_account(self, account_number: str) -> None:
        logger.info(f"Searching for account: {account_number}")
        await self.web.fill(self.el("account_number_input"), account_number)
        await self.click_and_wait("common.search_button")

    @allure.step("Verify account in search results: {account_number}")
    async def verify_account_in_search_results(self, account_number: str) -> None:
        logger.info(f"Verifying account {account_number} in search results")
        await self.web.wait_within(
            self.el("search_results_table"), f'tr:has-text("{account_number}")'
        )

    async def get_account_number(self) -> str:
        return (await self.web.get_text(self.el("account_number_label"))).strip()

    # =========================================================================
    # Create / Update
    # =========================================================================

    @allure.step("Create person account")
    async def create_person_account(self, account: PersonAccount) -> str:
        """
        Create a person account through the New Account flow.

        PolicyCenter requires a name search before it offers "Create New
        Account", so the search is run first.

        Returns:
            Account number shown on the account summary
        """
        logger.info(f"Creating a new account for {account.first_name} {account.last_name}")

        await self.web.click(self.el("actions_button"))
        await self.click_and_wait(self.el("new_account_menu_item"))

        await self.web.fill(self.el("search_first_name_input"), account.first_name)
        await self.web.fill(self.el("search_last_name_input"), account.last_name)
        await self.click_and_wait("common.search_button")

        await self.web.click(self.el("create_new_account_button"))
        await self.click_and_wait(self.el("person_option"))

        await self.web.fill(self.el("date_of_birth_input"), account.date_of_birth)
        await self.web.select_by_text(self.el("gender_dropdown"), account.gender)
        await self.web.select_by_text(self.el("marital_status_dropdown"), account.marital_status)
        await self.web.select_by_text(self.el("primary_phone_dropdown"), account.primary_phone)
        await self.web.fill(self.el("mobile_phone_input"), account.mobile_phone)
        await self.web.fill(self.el("primary_email_input"), account.email)

        # Country drives which state list and postal code format are shown
        await self.web.select_by_text(self.el("country_dropdown"), account.country)
        await self.wait_until_ready()
        await self.web.fill(self.el("address_line1_input"), account.address_line1)
        await self.web.fill(self.el("city_input"), account.city)
        await self.web.select_by_text(self.el("state_dropdown"), account.state)
        await self.web.fill(self.el("zip_code_input"), account.zip_code)
        await self.web.select_by_text(self.el("address_type_dropdown"), account.address_type)

        if account.organization:
            await self.web.fill(self.el("organization_input"), account.organization)
            # Producer codes load once the organization field loses focus
            await self.web.press_key(self.el("organization_input"), "Tab")
            await self.wait_until_ready()
        await self.web.select_by_index(self.el("producer_code_dropdown"), account.producer_code_index)

        await self.click_and_wait("common.update_button")

        account_number = await self.get_account_number()
        logger.info(f"Account created: {account_number}")
        return account_number

    @allure.step("Update account: {account_number}")
    async def update_account(self, account_number: str, updates: Mapping[str, str]) -> None:
        """
        Change contact details of an existing account.

        Args:
            account_number: Account to open
            updates: Subset of ``UPDATABLE_FIELDS`` keys with new values

        Raises:
            ValueError: A key of ``updates`` cannot be updated
        """
        unknown = set(updates) - set(UPDATABLE_FIELDS)
        if unknown:
            raise ValueError(f"Cannot update account fields: {sorted(unknown)}")

        logger.info(f"Updating account: {account_number}")
        await self.search_account(account_number)
        await self.web.click_within(
            self.el("search_results_table"), f'tr:has-text("{account_number}") a'
        )
        await self.wait_until_ready()
        await self.click_and_wait("common.edit_button")

        for field_name, value in updates.items():
            element, how = UPDATABLE_FIELDS[field_name]
            if how == "select":
                await self.web.select_by_text(self.el(element), value)
            else:
                await self.web.fill(self.el(element), value)

        await self.click_and_wait("common.update_button")
