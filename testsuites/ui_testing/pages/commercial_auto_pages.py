"""
================================================================================
Commercial Auto (CA) Page Objects
================================================================================

Wizard screens of an ESB Commercial Auto submission:

    Policy Info -> Vehicles -> Drivers -> Coverages

================================================================================
"""

from typing import Any, Mapping

import allure
from loguru import logger

from testsuites.ui_testing.framework.page_base import BasePage


# ================================================================================
# Policy Info
# ================================================================================

class CAPolicyInfoPage(BasePage):
    """Policy Info step of the CA wizard."""

    PAGE_NAME = "ca_policy_info"

    @allure.step("Fill CA policy information")
    async def fill_policy_info(self, policy_data: Mapping[str, Any]) -> None:
        """
        Args:
            policy_data: effective_date, business_type, years_in_business,
                num_employees and optional expiration_date
        """
        logger.info("Filling CA policy information")

        await self.web.fill(self.el("effective_date_input"), str(policy_data["effective_date"]))
        if policy_data.get("expiration_date"):
            await self.web.fill(self.el("expiration_date_input"), str(policy_data["expiration_date"]))

        await self.web.select_by_text(self.el("business_type_dropdown"), policy_data["business_type"])
        await self.web.fill(self.el("years_in_business_input"), str(policy_data["years_in_business"]))
        await self.web.fill(self.el("num_employees_input"), str(policy_data["num_employees"]))

        await self.click_and_wait("common.next_button")


# ================================================================================
# Vehicles
# ================================================================================

class CAVehiclesPage(BasePage):
    """Vehicles step of the CA wizard."""

    PAGE_NAME = "ca_vehicles"

    @allure.step("Add CA vehicle")
    async def add_vehicle(self, vehicle: Mapping[str, Any], proceed: bool = True) -> None:
        """
        Add a vehicle and verify its VIN is listed.

        Args:
            vehicle: vin, year, make, model, cost_new, vehicle_type
            proceed: Click Next once the vehicle is listed
        """
        logger.info(f"Adding CA vehicle: {vehicle['vin']}")

        await self.click_and_wait(self.el("add_vehicle_button"))

        await self.web.fill(self.el("vin_input"), vehicle["vin"])
        await self.web.fill(self.el("year_input"), str(vehicle["year"]))
        await self.web.fill(self.el("make_input"), vehicle["make"])
        await self.web.fill(self.el("model_input"), vehicle["model"])
        await self.web.type_currency_field(self.el("cost_new_input"), str(vehicle["cost_new"]))
        await self.web.select_by_text(self.el("vehicle_type_dropdown"), vehicle["vehicle_type"])

        await self.click_and_wait(self.el("ok_button"))
        await self.verify_text(self.el("vehicles_list"), vehicle["vin"])

        if proceed:
            await self.click_and_wait("common.next_button")


# ================================================================================
# Drivers
# ================================================================================

class CADriversPage(BasePage):
    """Drivers step of the CA wizard."""

    PAGE_NAME = "ca_drivers"

    @allure.step("Add driver")
    async def add_driver(self, driver: Mapping[str, Any]) -> None:
        """Add a driver (first_name, last_name, license_number) and save it."""
        logger.info(f"Adding a new driver: {driver['first_name']} {driver['last_name']}")

        await self.click_and_wait(self.el("add_driver_button"))
        await self.web.fill(self.el("first_name_input"), driver["first_name"])
        await self.web.fill(self.el("last_name_input"), driver["last_name"])
        await self.web.fill(self.el("license_number_input"), str(driver["license_number"]))

        await self.click_and_wait("common.save_button")

    @allure.step("Verify driver in list: {driver_name}")
    async def verify_driver_in_list(self, driver_name: str) -> None:
        logger.info(f"Verifying driver: {driver_name}")
        await self.web.wait_within(self.el("drivers_list"), f'tr:has-text("{driver_name}")')


# ================================================================================
# Coverages
# ================================================================================

class CACoveragesPage(BasePage):
    """Coverages step of the CA wizard."""

    PAGE_NAME = "ca_coverages"

    COVERAGE_DROPDOWNS = (
        ("liability_limit", "liability_limit_dropdown"),
        ("medical_payments", "medical_payments_dropdown"),
        ("uninsured_motorist", "uninsured_motorist_dropdown"),
        ("comprehensive_deductible", "comprehensive_deductible_dropdown"),
        ("collision_deductible", "collision_deductible_dropdown"),
    )

    @allure.step("Select CA coverages")
    async def select_coverages(self, coverages: Mapping[str, Any]) -> None:
        logger.info("Selecting CA coverages")

        for key, element in self.COVERAGE_DROPDOWNS:
            await self.web.select_by_text(self.el(element), str(coverages[key]))

        await self.click_and_wait("common.next_button")
