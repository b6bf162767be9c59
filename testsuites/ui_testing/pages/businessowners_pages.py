"""
================================================================================
Businessowners (BOP) Page Objects
================================================================================

Wizard screens of an ESB Businessowners submission or policy change:

    Policy Info -> Locations -> Buildings -> Classifications -> Coverages
    Businessowners Line (coverage tabs)

Test data keys are snake_case and mirror the element names in the
``bop_*`` locator files.

================================================================================
"""

from typing import Any, Dict, List, Mapping

import allure
from loguru import logger

from testsuites.ui_testing.framework.page_base import BasePage


# ================================================================================
# Policy Info
# ================================================================================

class BOPPolicyInfoPage(BasePage):
    """Policy Info step of the BOP wizard."""

    PAGE_NAME = "bop_policy_info"

    @allure.step("Fill BOP policy information")
    async def fill_policy_info(self, policy_data: Mapping[str, Any]) -> None:
        """
        Fill the Policy Info step and continue.

        Args:
            policy_data: effective_date, organization_type, annual_revenue,
                num_employees, years_in_business and optional expiration_date
        """
        logger.info("Filling BOP policy information")

        await self.web.fill(self.el("effective_date_input"), str(policy_data["effective_date"]))
        if policy_data.get("expiration_date"):
            await self.web.fill(self.el("expiration_date_input"), str(policy_data["expiration_date"]))

        await self.web.select_by_text(self.el("organization_type_dropdown"), policy_data["organization_type"])
        await self.web.type_currency_field(self.el("annual_revenue_input"), str(policy_data["annual_revenue"]))
        await self.web.fill(self.el("num_employees_input"), str(policy_data["num_employees"]))
        await self.web.fill(self.el("years_in_business_input"), str(policy_data["years_in_business"]))

        await self.click_and_wait("common.next_button")


# ================================================================================
# Locations
# ================================================================================

class BOPLocationsPage(BasePage):
    """Locations step of the BOP wizard."""

    PAGE_NAME = "bop_locations"

    @allure.step("Add BOP location")
    async def add_location(self, location: Mapping[str, Any], proceed: bool = True) -> None:
        """
        Add a location and verify it is listed.

        Args:
            location: address_line1, city, state, zip_code
            proceed: Click Next once the location is listed
        """
        logger.info(f"Adding BOP location: {location['address_line1']}")

        await self.click_and_wait(self.el("add_location_button"))

        await self.web.fill(self.el("address_line1_input"), location["address_line1"])
        await self.web.fill(self.el("city_input"), location["city"])
        await self.web.select_by_text(self.el("state_dropdown"), location["state"])
        await self.web.fill(self.el("zip_code_input"), str(location["zip_code"]))

        await self.click_and_wait(self.el("ok_button"))
        await self.verify_text(self.el("locations_list"), location["address_line1"])

        if proceed:
            await self.click_and_wait("common.next_button")


# ================================================================================
# Buildings
# ================================================================================

class BOPBuildingsPage(BasePage):
    """Buildings step of the BOP wizard."""

    PAGE_NAME = "bop_buildings"

    @allure.step("Add building")
    async def add_building(self, building: Mapping[str, Any]) -> None:
        """Add a building (``name``, ``address``) and save it."""
        logger.info(f"Adding a new building: {building['name']}")

        await self.click_and_wait(self.el("add_building_button"))
        await self.web.fill(self.el("building_name_input"), building["name"])
        await self.web.fill(self.el("building_address_input"), building["address"])

        await self.click_and_wait("common.save_button")

    @allure.step("Verify building in list: {building_name}")
    async def verify_building_in_list(self, building_name: str) -> None:
        logger.info(f"Verifying building: {building_name}")
        await self.web.wait_within(self.el("buildings_list"), f'tr:has-text("{building_name}")')


# ================================================================================
# Classifications
# ================================================================================

class BOPClassificationsPage(BasePage):
    """Classifications step of the BOP wizard."""

    PAGE_NAME = "bop_classifications"

    @allure.step("Add classification")
    async def add_classification(self, classification: Mapping[str, Any]) -> None:
        """Add a classification (``name``, ``code``) and save it."""
        logger.info(f"Adding a new classification: {classification['name']}")

        await self.click_and_wait(self.el("add_classification_button"))
        await self.web.fill(self.el("classification_name_input"), classification["name"])
        await self.web.fill(self.el("classification_code_input"), str(classification["code"]))

        await self.click_and_wait("common.save_button")

    @allure.step("Verify classification in list: {classification_name}")
    async def verify_classification_in_list(self, classification_name: str) -> None:
        logger.info(f"Verifying classification: {classification_name}")
        await self.web.wait_within(
            self.el("classifications_list"), f'tr:has-text("{classification_name}")'
        )


# ================================================================================
# Coverages
# ================================================================================

class BOPCoveragesPage(BasePage):
    """Coverages step of the BOP wizard."""

    PAGE_NAME = "bop_coverages"

    @allure.step("Select BOP coverages")
    async def select_coverages(self, coverages: Mapping[str, Any]) -> None:
        """Pick liability_limit, medical_payments_limit and deductible, then continue."""
        logger.info("Selecting BOP coverages")

        await self.web.select_by_text(self.el("liability_limit_dropdown"), coverages["liability_limit"])
        await self.web.select_by_text(
            self.el("medical_payments_limit_dropdown"), coverages["medical_payments_limit"]
        )
        await self.web.select_by_text(self.el("deductible_dropdown"), coverages["deductible"])

        await self.click_and_wait("common.next_button")


# ================================================================================
# Businessowners Line
# ================================================================================

class BusinessownersLinePage(BasePage):
    """
    Businessowners Line screen.

    Coverages are split over four tabs. Each ``fill_*`` method fills the
    tab that is currently open; call ``navigate_to_tab`` first.
    """

    PAGE_NAME = "bop_line"

    TABS: Dict[str, str] = {
        "Line Standard Coverages": "line_standard_coverages_tab",
        "Line Additional Liability Coverages": "line_additional_liability_coverages_tab",
        "Line Additional Property Coverages": "line_additional_property_coverages_tab",
        "Line Exclusions": "line_exclusions_tab",
    }

    @allure.step("Navigate to line tab: {tab_name}")
    async def navigate_to_tab(self, tab_name: str) -> None:
        """
        Raises:
            ValueError: Unknown tab name
        """
        if tab_name not in self.TABS:
            raise ValueError(f"Invalid tab name: {tab_name}")

        logger.info(f"Navigating to tab: {tab_name}")
        await self.click_and_wait(self.el(self.TABS[tab_name]))

    async def get_coinsurance_percentage(self) -> str:
        """Read-only coinsurance percentage on the standard coverages tab."""
        value = await self.web.get_input_value(self.el("coinsurance_percentage_input"))
        logger.info(f"Coinsurance Percentage (Non-Editable): {value}")
        return value

    @allure.step("Fill Line Standard Coverages")
    async def fill_line_standard_coverages(self, coverages: Mapping[str, Any]) -> str:
        """
        Args:
            coverages: building_coverage_limit, deductible and optional
                business_income_coverage flag

        Returns:
            The coinsurance percentage PolicyCenter calculated
        """
        logger.info("Filling Line Standard Coverages")

        await self.web.type_currency_field(
            self.el("building_coverage_limit_input"), str(coverages["building_coverage_limit"])
        )
        if coverages.get("business_income_coverage"):
            await self.web.check(self.el("business_income_coverage_checkbox"))

        await self.web.select_by_text(self.el("deductible_dropdown"), str(coverages["deductible"]))
        return await self.get_coinsurance_percentage()

    @allure.step("Fill Line Additional Liability Coverages")
    async def fill_line_additional_liability_coverages(self, coverages: Mapping[str, Any]) -> None:
        logger.info("Filling Line Additional Liability Coverages")

        if coverages.get("employee_benefits_liability"):
            await self.web.check(self.el("employee_benefits_liability_checkbox"))

        await self.web.type_currency_field(
            self.el("personal_and_advertising_injury_limit_input"),
            str(coverages["personal_and_advertising_injury_limit"]),
        )

    @allure.step("Fill Line Additional Property Coverages")
    async def fill_line_additional_property_coverages(self, coverages: Mapping[str, Any]) -> None:
        logger.info("Filling Line Additional Property Coverages")

        if coverages.get("equipment_breakdown_coverage"):
            await self.web.check(self.el("equipment_breakdown_coverage_checkbox"))

        await self.web.type_currency_field(
            self.el("outdoor_signs_coverage_limit_input"),
            str(coverages["outdoor_signs_coverage_limit"]),
        )

    @allure.step("Fill Line Exclusions")
    async def fill_line_exclusions(self, exclusions: Mapping[str, Any]) -> None:
        logger.info("Filling Line Exclusions")

        await self.web.set_checked(
            self.el("earthquake_exclusion_checkbox"), bool(exclusions.get("earthquake_exclusion"))
        )
        await self.web.set_checked(
            self.el("flood_exclusion_checkbox"), bool(exclusions.get("flood_exclusion"))
        )

    @allure.step("Verify Line Standard Coverages")
    async def verify_line_standard_coverages(self) -> List[str]:
        """
        Check the standard coverages tab is rendered.

        Returns:
            The deductible options offered by default
        """
        logger.info("Verifying Line Standard Coverages")

        await self.verify_element_present(self.el("building_coverage_limit_input"))
        await self.verify_element_present(self.el("business_income_coverage_checkbox"))
        await self.get_coinsurance_percentage()

        options = await self.web.get_dropdown_options(self.el("deductible_dropdown"))
        logger.info(f"Deductible Options: {', '.join(options)}")
        return options
