"""
================================================================================
PolicyCenter Test Data
================================================================================

Test data loading and generation for PolicyCenter UI scenarios.

Features:
- YAML test data per business line, cached per file
- ``{{faker.<provider>}}`` placeholders expanded with Faker at load time
- Realistic businesses, people, addresses and vehicles (FakerHelper)
- Unique policy numbers for negative / search scenarios

Usage:
    manager = DataManager()
    credentials = manager.get_base_config()
    bop = manager.get_test_data("businessowners", "bop-testdata")

================================================================================
"""

import random
import re
import time
from datetime import date
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml
from faker import Faker
from loguru import logger


DEFAULT_DATA_DIR = Path(__file__).resolve().parent.parent.parent / "testsuites" / "ui_testing" / "data"

BASE_CONFIG_FILE = "testdata.yaml"

FAKER_PATTERN = re.compile(r"\{\{faker\.([^}]+)\}\}")

# Characters allowed in a VIN (no I, O or Q)
VIN_CHARACTERS = "ABCDEFGHJKLMNPRSTUVWXYZ0123456789"

VEHICLE_MODELS: Dict[str, list] = {
    "Ford": ["F-150", "Transit", "Ranger", "E-Series"],
    "Chevrolet": ["Silverado", "Express", "Colorado"],
    "Ram": ["1500", "ProMaster", "2500"],
    "Toyota": ["Tacoma", "Tundra", "Hiace"],
    "Nissan": ["NV200", "Frontier", "Titan"],
}


# ================================================================================
# Faker Helper
# ================================================================================

class FakerHelper:
    """
    Generates realistic PolicyCenter entities.

    Pass a seed to make a run reproducible.
    """

    def __init__(self, seed: Optional[int] = None, locale: str = "en_US"):
        self.fake = Faker(locale)
        if seed is not None:
            self.fake.seed_instance(seed)

    def business_name(self) -> str:
        return self.fake.company()

    def address(self) -> Dict[str, str]:
        return {
            "address_line1": self.fake.street_address(),
            "city": self.fake.city(),
            "state": self.fake.state(),
            "zip_code": self.fake.zipcode(),
        }

    def person_name(self) -> Dict[str, str]:
        return {
            "first_name": self.fake.first_name(),
            "last_name": self.fake.last_name(),
        }

    def phone_number(self) -> str:
        return self.fake.numerify("##########")

    def email(self, first_name: Optional[str] = None, last_name: Optional[str] = None) -> str:
        if first_name and last_name:
            return f"{first_name}.{last_name}@{self.fake.free_email_domain()}".lower()
        return self.fake.email().lower()

    def vin(self) -> str:
        return self.fake.pystr_format(string_format="?" * 17, letters=VIN_CHARACTERS)

    def vehicle(self) -> Dict[str, str]:
        make = self.fake.random_element(sorted(VEHICLE_MODELS))
        return {
            "vin": self.vin(),
            "year": str(self.fake.date_between(start_date="-10y", end_date="today").year),
            "make": make,
            "model": self.fake.random_element(VEHICLE_MODELS[make]),
            "cost_new": str(self.fake.pyint(min_value=20000, max_value=80000)),
        }

    def random_date(self, start_year: int, end_year: int, fmt: str = "%m/%d/%Y") -> str:
        """Random date between Jan 1 of ``start_year`` and Dec 31 of ``end_year``."""
        value = self.fake.date_between_dates(
            date_start=date(start_year, 1, 1), date_end=date(end_year, 12, 31)
        )
        return value.strftime(fmt)


# ================================================================================
# Policy Number Generator
# ================================================================================

class PolicyNumberGenerator:
    """Builds policy numbers like ``BOP-12345678-042``."""

    PREFIXES: Dict[str, str] = {
        "businessowners": "BOP",
        "commercial_auto": "CA",
    }

    @classmethod
    def generate(cls, business_line: str) -> str:
        """
        Args:
            business_line: 'businessowners' or 'commercial_auto'

        Raises:
            ValueError: Unknown business line
        """
        if business_line not in cls.PREFIXES:
            raise ValueError(
                f"Unknown business line: {business_line}. Expected one of {sorted(cls.PREFIXES)}"
            )
        timestamp = str(int(time.time() * 1000))[-8:]
        suffix = f"{random.randint(0, 999):03d}"
        return f"{cls.PREFIXES[business_line]}-{timestamp}-{suffix}"


# ================================================================================
# Data Manager
# ================================================================================

class DataManager:
    """
    Loads YAML test data.

    Files live under ``data_dir``:
        testdata.yaml                       base config (credentials, URLs)
        <business_line>/<test_case>.yaml    scenario data
    """

    def __init__(
        self,
        data_dir: Union[str, Path] = DEFAULT_DATA_DIR,
        faker: Optional[Faker] = None,
    ):
        self.data_dir = Path(data_dir)
        self.fake = faker or Faker()
        self._cache: Dict[str, Any] = {}

    def get_base_config(self) -> Dict[str, Any]:
        """Shared settings from ``testdata.yaml``."""
        if "base_config" not in self._cache:
            self._cache["base_config"] = self._load(self.data_dir / BASE_CONFIG_FILE)
        return self._cache["base_config"]

    def get_test_data(self, business_line: str, test_case: str) -> Dict[str, Any]:
        """
        Scenario data with faker placeholders expanded.

        The same (business_line, test_case) returns the same object for the
        lifetime of the manager, so generated values stay consistent within
        a scenario.

        Raises:
            FileNotFoundError: No such data file
        """
        cache_key = f"{business_line}-{test_case}"
        if cache_key not in self._cache:
            path = self.data_dir / business_line / f"{test_case}.yaml"
            self._cache[cache_key] = self.expand(self._load(path))
            logger.debug(f"Loaded test data: {path}")
        return self._cache[cache_key]

    @staticmethod
    def _load(path: Path) -> Dict[str, Any]:
        if not path.exists():
            raise FileNotFoundError(f"Test data file not found: {path}")
        with open(path, "r", encoding="utf-8") as f:
            return yaml.safe_load(f) or {}

    def expand(self, data: Any) -> Any:
        """Recursively replace faker placeholders in strings, lists and dicts."""
        if isinstance(data, str):
            return FAKER_PATTERN.sub(self._fake_value, data)
        if isinstance(data, list):
            return [self.expand(item) for item in data]
        if isinstance(data, dict):
            return {key: self.expand(value) for key, value in data.items()}
        return data

    def _fake_value(self, match: "re.Match") -> str:
        value: Any = self.fake
        for segment in match.group(1).split("."):
            try:
                value = getattr(value, segment)
            except AttributeError:
                logger.warning(f"Unknown faker provider in test data: {match.group(0)}")
                return match.group(0)
            if callable(value):
                value = value()
        return str(value)


__all__ = [
    "DataManager",
    "FakerHelper",
    "PolicyNumberGenerator",
]
