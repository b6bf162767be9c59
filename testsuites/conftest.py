"""
================================================================================
Root Pytest Configuration
================================================================================

This module provides the root pytest configuration for the entire test suite.
It registers common markers and tags tests by the directory they live in.

================================================================================
"""

import pytest


def pytest_configure(config):
    """Configure pytest with project-wide custom markers."""

    # Priority markers
    config.addinivalue_line(
        "markers", "P0: Critical priority tests - must pass for deployment"
    )
    config.addinivalue_line(
        "markers", "P1: High priority tests - important functionality"
    )
    config.addinivalue_line(
        "markers", "P2: Medium priority tests - edge cases and minor features"
    )
    config.addinivalue_line(
        "markers", "P3: Low priority tests - extensive validation"
    )

    # Test type markers
    config.addinivalue_line(
        "markers", "smoke: Quick verification tests"
    )
    config.addinivalue_line(
        "markers", "regression: Full regression test suite"
    )
    config.addinivalue_line(
        "markers", "e2e: End-to-end tests against a live PolicyCenter"
    )

    # Domain markers
    config.addinivalue_line(
        "markers", "unit: Framework unit tests (no browser)"
    )
    config.addinivalue_line(
        "markers", "ui: UI-specific tests"
    )

    # Feature markers
    config.addinivalue_line(
        "markers", "auth: Tests related to login and logout"
    )
    config.addinivalue_line(
        "markers", "account: Tests related to account management"
    )
    config.addinivalue_line(
        "markers", "businessowners: ESB Businessowners policy tests"
    )
    config.addinivalue_line(
        "markers", "commercial_auto: ESB Commercial Auto policy tests"
    )


def pytest_collection_modifyitems(config, items):
    """
    Modify collected test items.

    Adds the domain marker matching the directory of each test.
    """
    for item in items:
        path = str(item.fspath)
        if "ui_testing" in path:
            item.add_marker(pytest.mark.ui)
            item.add_marker(pytest.mark.e2e)
        elif "unit" in path:
            item.add_marker(pytest.mark.unit)


def pytest_report_header(config):
    """Add custom header to pytest output."""
    return [
        "",
        "=" * 60,
        "PolicyCenter UI Automation Suite",
        "=" * 60,
        "",
    ]
