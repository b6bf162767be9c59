"""
================================================================================
UI Testing Pytest Configuration
================================================================================

This module configures pytest for the PolicyCenter scenarios, providing
fixtures for browser management, the interaction layer, page objects, and
test setup/teardown.

Key Features:
- One LocatorCatalog per worker process, loaded once
- Isolated browser per scenario
- Page Object fixtures sharing one WebInteractions
- Failure capture (screenshot, URL, PolicyCenter errors) to Allure

Scenarios need a reachable PolicyCenter and only run with RUN_E2E=1.

================================================================================
"""

import os
from typing import AsyncGenerator

import pytest
from loguru import logger
from playwright.async_api import Error as PlaywrightError, Page

from autotest_tools.common import get_config
from autotest_tools.data_generator.policy_data import DataManager, FakerHelper
from testsuites.ui_testing.framework.browser_manager import BrowserManager
from testsuites.ui_testing.framework.exceptions import AutomationError
from testsuites.ui_testing.framework.locator_catalog import LocatorCatalog
from testsuites.ui_testing.framework.page_base import BasePage
from testsuites.ui_testing.framework.web_interactions import WebInteractions
from testsuites.ui_testing.pages import (
    AccountPage,
    HeaderPage,
    LoginPage,
    NavigationPage,
    QuotePage,
)


# ================================================================================
# Pytest Hooks
# ================================================================================

@pytest.hookimpl(hookwrapper=True)
def pytest_runtest_makereport(item, call):
    """Expose each phase's report on the item for fixture teardown."""
    outcome = yield
    report = outcome.get_result()
    setattr(item, f"rep_{report.when}", report)


@pytest.fixture(autouse=True)
def _require_e2e():
    """Skip scenarios unless a live PolicyCenter was requested."""
    if os.getenv("RUN_E2E") != "1":
        pytest.skip("PolicyCenter scenarios run only with RUN_E2E=1")


# ================================================================================
# Framework Fixtures
# ================================================================================

@pytest.fixture(scope="session")
def locator_catalog() -> LocatorCatalog:
    """
    Session-scoped locator catalog.

    Loaded once per worker; invalid locator files fail the session here.
    """
    return LocatorCatalog.load()


@pytest.fixture(scope="session")
def data_manager() -> DataManager:
    return DataManager()


@pytest.fixture
def faker_helper() -> FakerHelper:
    return FakerHelper()


@pytest.fixture
async def browser_manager() -> AsyncGenerator[BrowserManager, None]:
    """Browser for one scenario, closed afterwards."""
    async with BrowserManager() as manager:
        yield manager


@pytest.fixture
async def page(browser_manager: BrowserManager) -> Page:
    return await browser_manager.new_page()


@pytest.fixture
async def web(request, page: Page, locator_catalog: LocatorCatalog) -> AsyncGenerator[WebInteractions, None]:
    """
    Interaction layer bound to the scenario's page.

    Captures failure details to Allure when the test body failed.
    """
    web = WebInteractions(
        page,
        locator_catalog,
        default_timeout=get_config("ui.default_timeout", 30000),
    )
    yield web

    report = getattr(request.node, "rep_call", None)
    if report is not None and report.failed:
        try:
            await BasePage(web).capture_failure(request.node.name)
        except (AutomationError, PlaywrightError) as e:
            # Log but don't fail if capture fails
            logger.warning(f"Failed to capture failure details: {e}")


# ================================================================================
# Page Object Fixtures
# ================================================================================

@pytest.fixture
def login_page(web: WebInteractions) -> LoginPage:
    return LoginPage(web)


@pytest.fixture
def header_page(web: WebInteractions) -> HeaderPage:
    return HeaderPage(web)


@pytest.fixture
def nav_page(web: WebInteractions) -> NavigationPage:
    return NavigationPage(web)


@pytest.fixture
def account_page(web: WebInteractions) -> AccountPage:
    return AccountPage(web)


@pytest.fixture
def quote_page(web: WebInteractions) -> QuotePage:
    return QuotePage(web)


# ================================================================================
# Authentication Fixtures
# ================================================================================

@pytest.fixture
async def auto_login(login_page: LoginPage) -> WebInteractions:
    """
    Logs in with the configured credentials before the test body.
    """
    await login_page.open()
    await login_page.login()
    return login_page.web
