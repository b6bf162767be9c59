"""
================================================================================
ESB Commercial Auto Policy UI Tests
================================================================================

CA submission through to quote, and a vehicle endorsement on an
existing policy.

================================================================================
"""

import allure
import pytest

from autotest_tools.data_generator.policy_data import DataManager, FakerHelper
from testsuites.ui_testing.framework.web_interactions import WebInteractions
from testsuites.ui_testing.pages.commercial_auto_pages import (
    CACoveragesPage,
    CADriversPage,
    CAPolicyInfoPage,
    CAVehiclesPage,
)
from testsuites.ui_testing.pages.navigation_page import NavigationPage
from testsuites.ui_testing.pages.quote_page import QuotePage


@allure.epic("PolicyCenter")
@allure.feature("ESB Commercial Auto")
class TestCAPolicy:
    """Commercial Auto policy scenarios."""

    @allure.story("Submission")
    @allure.title("Create a new CA policy")
    @allure.severity(allure.severity_level.CRITICAL)
    @pytest.mark.P0
    @pytest.mark.commercial_auto
    @pytest.mark.asyncio
    async def test_create_ca_policy(
        self,
        auto_login: WebInteractions,
        nav_page: NavigationPage,
        quote_page: QuotePage,
        data_manager: DataManager,
    ):
        test_data = data_manager.get_test_data("commercial_auto", "ca-testdata")
        account_number = data_manager.get_base_config()["existing_account_number"]

        await nav_page.navigate_to_new_submission()
        await nav_page.select_account_from_search(account_number)
        await nav_page.select_business_line("CommercialAuto")

        await CAPolicyInfoPage(auto_login).fill_policy_info(test_data["policy_info"])
        await CAVehiclesPage(auto_login).add_vehicle(test_data["vehicles"][0])

        drivers_page = CADriversPage(auto_login)
        driver = test_data["drivers"][0]
        await drivers_page.add_driver(driver)
        await drivers_page.verify_driver_in_list(f"{driver['first_name']} {driver['last_name']}")
        await drivers_page.click_and_wait("common.next_button")

        await CACoveragesPage(auto_login).select_coverages(test_data["coverages"])

        await quote_page.wait_for_quote()
        assert await quote_page.get_policy_number()
        assert "Quote" in await quote_page.get_page_title()

    @allure.story("Endorsement")
    @allure.title("Add vehicle to existing CA policy")
    @allure.severity(allure.severity_level.CRITICAL)
    @pytest.mark.P1
    @pytest.mark.commercial_auto
    @pytest.mark.asyncio
    async def test_ca_add_vehicle_endorsement(
        self,
        auto_login: WebInteractions,
        nav_page: NavigationPage,
        quote_page: QuotePage,
        data_manager: DataManager,
        faker_helper: FakerHelper,
    ):
        test_data = data_manager.get_test_data("commercial_auto", "ca-testdata")
        policy_number = data_manager.get_base_config()["existing_policies"]["commercial_auto"]

        await nav_page.search_policy(policy_number)
        await nav_page.start_endorsement(faker_helper.random_date(2024, 2025))

        await nav_page.navigate_to_policy_tab("Vehicles")
        await CAVehiclesPage(auto_login).add_vehicle(test_data["vehicles"][1], proceed=False)

        await nav_page.navigate_to_policy_tab("Quote")
        await quote_page.wait_for_quote()
        allure.attach(
            await quote_page.get_total_premium(),
            name="Endorsement premium",
            attachment_type=allure.attachment_type.TEXT,
        )

        transaction_number = await quote_page.bind_endorsement()
        assert transaction_number
