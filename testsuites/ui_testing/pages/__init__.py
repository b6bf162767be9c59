"""
================================================================================
Page Objects
================================================================================

Page Object Model implementations for PolicyCenter screens.

Each page class encapsulates:
    - The locator file it reads (``PAGE_NAME``)
    - How the screen signals it has settled (``PAGE_READY``)
    - Page-specific actions and verification methods

Author: Automation Team
License: MIT
================================================================================
"""

from .account_page import AccountPage, PersonAccount
from .businessowners_pages import (
    BOPBuildingsPage,
    BOPClassificationsPage,
    BOPCoveragesPage,
    BOPLocationsPage,
    BOPPolicyInfoPage,
    BusinessownersLinePage,
)
from .commercial_auto_pages import (
    CACoveragesPage,
    CADriversPage,
    CAPolicyInfoPage,
    CAVehiclesPage,
)
from .header_page import HeaderPage
from .login_page import LoginPage
from .navigation_page import NavigationPage
from .quote_page import QuotePage

__all__ = [
    "AccountPage",
    "PersonAccount",
    "BOPPolicyInfoPage",
    "BOPLocationsPage",
    "BOPBuildingsPage",
    "BOPClassificationsPage",
    "BOPCoveragesPage",
    "BusinessownersLinePage",
    "CAPolicyInfoPage",
    "CAVehiclesPage",
    "CADriversPage",
    "CACoveragesPage",
    "HeaderPage",
    "LoginPage",
    "NavigationPage",
    "QuotePage",
]
