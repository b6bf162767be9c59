"""
================================================================================
ESB Businessowners Policy UI Tests
================================================================================

BOP submission through to quote, and a location endorsement on an
existing policy.

================================================================================
"""

import allure
import pytest

from autotest_tools.data_generator.policy_data import DataManager, FakerHelper
from testsuites.ui_testing.framework.web_interactions import WebInteractions
from testsuites.ui_testing.pages.businessowners_pages import (
    BOPCoveragesPage,
    BOPLocationsPage,
    BOPPolicyInfoPage,
    BusinessownersLinePage,
)
from testsuites.ui_testing.pages.navigation_page import NavigationPage
from testsuites.ui_testing.pages.quote_page import QuotePage


@allure.epic("PolicyCenter")
@allure.feature("ESB Businessowners")
class TestBOPPolicy:
    """Businessowners policy scenarios."""

    @allure.story("Submission")
    @allure.title("Create a new BOP policy")
    @allure.severity(allure.severity_level.CRITICAL)
    @pytest.mark.P0
    @pytest.mark.businessowners
    @pytest.mark.asyncio
    async def test_create_bop_policy(
        self,
        auto_login: WebInteractions,
        nav_page: NavigationPage,
        quote_page: QuotePage,
        data_manager: DataManager,
    ):
        test_data = data_manager.get_test_data("businessowners", "bop-testdata")
        account_number = data_manager.get_base_config()["existing_account_number"]

        await nav_page.navigate_to_new_submission()
        await nav_page.select_account_from_search(account_number)
        await nav_page.select_business_line("Businessowners")

        await BOPPolicyInfoPage(auto_login).fill_policy_info(test_data["policy_info"])
        await BOPLocationsPage(auto_login).add_location(test_data["locations"][0])
        await BOPCoveragesPage(auto_login).select_coverages(test_data["coverages"])

        await quote_page.wait_for_quote()
        policy_number = await quote_page.get_policy_number()
        assert policy_number

        assert "Quote" in await quote_page.get_page_title()

    @allure.story("Line Coverages")
    @allure.title("Fill Businessowners line coverage tabs")
    @allure.severity(allure.severity_level.NORMAL)
    @pytest.mark.P1
    @pytest.mark.businessowners
    @pytest.mark.asyncio
    async def test_bop_line_coverages(
        self,
        auto_login: WebInteractions,
        nav_page: NavigationPage,
        data_manager: DataManager,
    ):
        test_data = data_manager.get_test_data("businessowners", "bop-testdata")
        line = test_data["line_coverages"]
        account_number = data_manager.get_base_config()["existing_account_number"]

        await nav_page.navigate_to_new_submission()
        await nav_page.select_account_from_search(account_number)
        await nav_page.select_business_line("Businessowners")
        await nav_page.navigate_to_policy_tab("Businessowners Line")

        line_page = BusinessownersLinePage(auto_login)
        await line_page.navigate_to_tab("Line Standard Coverages")
        deductibles = await line_page.verify_line_standard_coverages()
        assert deductibles
        await line_page.fill_line_standard_coverages(line["standard"])

        await line_page.navigate_to_tab("Line Additional Liability Coverages")
        await line_page.fill_line_additional_liability_coverages(line["additional_liability"])

        await line_page.navigate_to_tab("Line Additional Property Coverages")
        await line_page.fill_line_additional_property_coverages(line["additional_property"])

        await line_page.navigate_to_tab("Line Exclusions")
        await line_page.fill_line_exclusions(line["exclusions"])

        assert not await line_page.has_errors()

    @allure.story("Endorsement")
    @allure.title("Add location to existing BOP policy")
    @allure.severity(allure.severity_level.CRITICAL)
    @pytest.mark.P1
    @pytest.mark.businessowners
    @pytest.mark.asyncio
    async def test_bop_add_location_endorsement(
        self,
        auto_login: WebInteractions,
        nav_page: NavigationPage,
        quote_page: QuotePage,
        data_manager: DataManager,
        faker_helper: FakerHelper,
    ):
        test_data = data_manager.get_test_data("businessowners", "bop-testdata")
        policy_number = data_manager.get_base_config()["existing_policies"]["businessowners"]

        await nav_page.search_policy(policy_number)
        await nav_page.start_endorsement(faker_helper.random_date(2024, 2025))

        await nav_page.navigate_to_policy_tab("Locations")
        await BOPLocationsPage(auto_login).add_location(test_data["locations"][1], proceed=False)

        await nav_page.navigate_to_policy_tab("Quote")
        await quote_page.wait_for_quote()
        allure.attach(
            await quote_page.get_total_premium(),
            name="Endorsement premium",
            attachment_type=allure.attachment_type.TEXT,
        )

        transaction_number = await quote_page.bind_endorsement()
        assert transaction_number
