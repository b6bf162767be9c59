"""
================================================================================
Base Page Object
================================================================================

Foundation class for the PolicyCenter Page Object Model.

Provides:
    - Access to the shared WebInteractions layer (composition, not inheritance
      of interaction helpers)
    - Per-page readiness predicate (``PAGE_READY``)
    - Navigation, verification and error-banner helpers
    - Screenshot and failure capture for Allure

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import List, Optional

import allure
from loguru import logger
from playwright.async_api import Page, expect

from autotest_tools.common import get_config

from .page_ready import ReadyPredicate, no_processing_overlay
from .web_interactions import WebInteractions


# Default output directory for screenshots
SCREENSHOT_DIR = Path(__file__).parent.parent / "screenshots"

DEFAULT_BASE_URL = "https://gwdemo.ey.com/pc/"


class BasePage:
    """
    Base class for all page objects.

    Subclasses declare which locator file they use and how their screen
    signals that it has settled:

        class LoginPage(BasePage):
            PAGE_NAME = "login"
            PAGE_READY = element_visible("login.username_input")

            async def login(self, username: str, password: str):
                await self.web.fill(self.el("username_input"), username)
                await self.web.fill(self.el("password_input"), password)
                await self.click_and_wait(self.el("login_button"))
    """

    # Override in subclasses
    PAGE_NAME: str = ""
    URL_PATH: str = ""
    PAGE_READY: ReadyPredicate = no_processing_overlay()

    def __init__(
        self,
        web: WebInteractions,
        base_url: str = "",
        page_ready: Optional[ReadyPredicate] = None,
    ):
        """
        Initialize page object.

        Args:
            web: Interaction layer shared by the scenario's page objects
            base_url: PolicyCenter base URL (config ``ui.base_url`` if empty)
            page_ready: Readiness predicate overriding ``PAGE_READY``
        """
        self.web = web
        if not base_url:
            base_url = get_config("ui.base_url", DEFAULT_BASE_URL)
        self.base_url = base_url.rstrip("/")
        self.page_ready = page_ready or type(self).PAGE_READY

    @property
    def page(self) -> Page:
        """Active Playwright page."""
        return self.web.page

    @property
    def url(self) -> str:
        """Full URL of this page."""
        return f"{self.base_url}/{self.URL_PATH.lstrip('/')}" if self.URL_PATH else f"{self.base_url}/"

    def el(self, element_name: str) -> str:
        """Qualify an element name with this page's locator namespace."""
        return f"{self.PAGE_NAME}.{element_name}"

    # =========================================================================
    # Navigation / Readiness
    # =========================================================================

    async def navigate(self, wait_for: str = "domcontentloaded") -> None:
        """
        Navigate to this page and wait until it is ready.

        Args:
            wait_for: Playwright load state for goto ('load', 'domcontentloaded', 'networkidle')
        """
        with allure.step(f"Navigate to {self.url}"):
            await self.page.goto(self.url, wait_until=wait_for)
            logger.debug(f"Navigated to: {self.url}")
            await self.wait_until_ready()

    async def wait_until_ready(self) -> None:
        """Wait for this screen's readiness predicate."""
        await self.web.wait_for_page_ready(self.page_ready)

    async def click_and_wait(self, element: str, timeout: Optional[int] = None) -> None:
        """Click an element that triggers a server round-trip, then wait for readiness."""
        await self.web.click(element, timeout)
        await self.wait_until_ready()

    async def get_page_title(self) -> str:
        await self.wait_until_ready()
        return await self.page.title()

    # =========================================================================
    # Verification
    # =========================================================================

    async def verify_element_present(self, element: str, timeout: Optional[int] = None) -> None:
        """Raise unless ``element`` becomes visible."""
        logger.info(f"Verifying element present: {element}")
        await self.web.wait_for_element(element, "visible", timeout)

    async def verify_text(self, element: str, text: str, timeout: Optional[int] = None) -> None:
        """Assert that ``element`` contains ``text``."""
        logger.info(f"Verifying text '{text}' in {element}")
        timeout = self.web.default_timeout if timeout is None else timeout
        locator = await self.web.wait_for_element(element, "visible", timeout)
        await expect(locator).to_contain_text(text, timeout=timeout)

    async def has_errors(self) -> bool:
        """Whether PolicyCenter shows validation / error messages."""
        return await self.web.get_element_count("common.error_message") > 0

    async def get_error_messages(self) -> List[str]:
        messages = await self.web.get_all_text_contents("common.error_message")
        return [message.strip() for message in messages if message.strip()]

    # =========================================================================
    # Screenshot and Debug Utilities
    # =========================================================================

    async def screenshot(
        self,
        name: str,
        full_page: bool = False,
        attach_to_allure: bool = True,
    ) -> Path:
        """
        Take screenshot and optionally attach to Allure.

        Args:
            name: Screenshot name (without extension)
            full_page: Capture full scrollable page
            attach_to_allure: Whether to attach to Allure report

        Returns:
            Path to saved screenshot
        """
        SCREENSHOT_DIR.mkdir(parents=True, exist_ok=True)

        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        filepath = SCREENSHOT_DIR / f"{name}_{timestamp}.png"

        await self.page.screenshot(path=str(filepath), full_page=full_page)

        if attach_to_allure:
            allure.attach.file(
                str(filepath),
                name=name,
                attachment_type=allure.attachment_type.PNG,
            )

        logger.debug(f"Screenshot saved: {filepath}")
        return filepath

    async def capture_failure(self, test_name: str) -> None:
        """
        Capture debugging information on test failure.

        Saves the screenshot, current URL and any PolicyCenter error banners.
        """
        with allure.step("Capture failure details"):
            await self.screenshot(f"failure_{test_name}", full_page=True)

            allure.attach(
                self.page.url,
                name="Current URL",
                attachment_type=allure.attachment_type.TEXT,
            )

            errors = await self.get_error_messages()
            if errors:
                allure.attach(
                    "\n".join(errors),
                    name="PolicyCenter Errors",
                    attachment_type=allure.attachment_type.TEXT,
                )


__all__ = [
    "BasePage",
]
