"""
Repository-level pytest configuration.

Provides safe defaults for local runs (no secrets embedded) and makes sure
every run starts from a freshly loaded configuration.

Important:
  Credentials below are PolicyCenter demo defaults. CI should inject real
  values through PC_USERNAME / PC_PASSWORD from its secret store.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Generator

import pytest

from autotest_tools.common import GlobalConfig, init_logger


@pytest.fixture(scope="session")
def project_root() -> Path:
    """Return repo root path."""
    return Path(__file__).parent


@pytest.fixture(scope="session", autouse=True)
def _demo_safe_env_defaults() -> Generator[None, None, None]:
    """
    Set demo-safe environment defaults if not already provided by the user/CI.
    """
    defaults = {
        "ENV": "dev",
        "BASE_URL": "https://gwdemo.ey.com/pc/",
        "PC_USERNAME": "su",
        "PC_PASSWORD": "gw",
    }

    for k, v in defaults.items():
        os.environ.setdefault(k, v)

    GlobalConfig.reset()
    init_logger()

    yield
