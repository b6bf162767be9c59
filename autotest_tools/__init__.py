"""
================================================================================
Autotest Tools
================================================================================

A collection of automation utilities for test infrastructure management.

Modules:
    - common: Shared configuration and logging utilities
    - data_generator: YAML test data loading and Faker-based generation
    - report_tools: Allure attachments, run summary and HTML report

Example:
    from autotest_tools.common import get_config, init_logger
    from autotest_tools.data_generator.policy_data import DataManager

    init_logger()
    base_url = get_config("ui.base_url")

    manager = DataManager()
    bop = manager.get_test_data("businessowners", "bop-testdata")

================================================================================
"""

__version__ = "1.0.0"

__all__ = [
    "common",
    "data_generator",
    "report_tools",
]
