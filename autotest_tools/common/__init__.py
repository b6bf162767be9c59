"""
================================================================================
Autotest Tools Common Utilities
================================================================================

This module provides shared configuration management and logging setup for
the PolicyCenter automation suite.

Exports:
    - GlobalConfig: Singleton configuration manager
    - get_config: Convenience function to get configuration values
    - init_logger: Function to initialize loguru logger with standard settings

Usage:
    from autotest_tools.common import get_config, init_logger

    init_logger()
    base_url = get_config("ui.base_url", "https://gwdemo.ey.com/pc/")

================================================================================
"""

import os
import sys
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from loguru import logger

# ============================================================
# Configuration Management
# ============================================================

PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
DEFAULT_CONFIG_DIR = PROJECT_ROOT / "config"

# Environment variables that override configuration keys
ENV_MAPPING: Dict[str, str] = {
    "BASE_URL": "ui.base_url",
    "HEADLESS": "ui.headless",
    "BROWSER": "ui.browser",
    "DEFAULT_TIMEOUT": "ui.default_timeout",
    "NAVIGATION_TIMEOUT": "ui.navigation_timeout",
    "PC_USERNAME": "auth.username",
    "PC_PASSWORD": "auth.password",
    "LOG_LEVEL": "logging.level",
    "LOG_FILE": "logging.file",
}


def _deep_merge(base: Dict, override: Dict) -> Dict:
    """
    Deep merges two dictionaries, with override taking precedence.
    """
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def _convert_type(value: Any, reference: Any) -> Any:
    """
    Convert a string value to match the type of the reference default.

    Environment variables are always strings.
    """
    if not isinstance(value, str) or reference is None:
        return value

    if isinstance(reference, bool):
        return value.strip().lower() in ("true", "1", "yes", "on")
    if isinstance(reference, int):
        try:
            return int(value)
        except ValueError:
            return value
    if isinstance(reference, float):
        try:
            return float(value)
        except ValueError:
            return value

    return value


class GlobalConfig:
    """
    Singleton class to manage global configuration.

    Loading order (later wins):
        1. config/config.yaml
        2. config/{ENV}.yaml (ENV defaults to "dev")
        3. Environment variables listed in ENV_MAPPING
    """
    _instance: Optional["GlobalConfig"] = None

    def __new__(cls, config_dir: Optional[Path] = None) -> "GlobalConfig":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._initialized = False
        return cls._instance

    def __init__(self, config_dir: Optional[Path] = None):
        if self._initialized:
            return
        self._config_dir = Path(config_dir) if config_dir else DEFAULT_CONFIG_DIR
        self._config: Dict[str, Any] = {}
        self._load_configs()
        self._initialized = True

    def _load_configs(self) -> None:
        """
        Loads configurations from YAML files and environment variables.
        """
        default_path = self._config_dir / "config.yaml"
        if default_path.exists():
            self._config = self._read_yaml(default_path)
            logger.debug(f"Loaded configuration from {default_path}")
        else:
            logger.warning(f"Configuration file not found: {default_path}. Using defaults.")
            self._config = {}

        env = os.getenv("ENVIRONMENT", os.getenv("ENV", "dev"))
        env_path = self._config_dir / f"{env}.yaml"
        if env_path.exists():
            self._config = _deep_merge(self._config, self._read_yaml(env_path))
            logger.debug(f"Merged environment config: {env_path}")

        for env_key, config_key in ENV_MAPPING.items():
            if env_key in os.environ:
                self._set_nested(config_key, os.environ[env_key])

    @staticmethod
    def _read_yaml(path: Path) -> Dict[str, Any]:
        with open(path, "r", encoding="utf-8") as f:
            return yaml.safe_load(f) or {}

    def _set_nested(self, key: str, value: Any) -> None:
        """
        Sets a nested configuration value using dot notation.
        """
        keys = key.split(".")
        current = self._config
        for k in keys[:-1]:
            if not isinstance(current.get(k), dict):
                current[k] = {}
            current = current[k]
        current[keys[-1]] = value

    def get(self, key: str, default: Any = None) -> Any:
        """
        Retrieves a configuration value using dot notation.

        Args:
            key: Configuration key (e.g., "ui.default_timeout")
            default: Default value if key is not found; its type is also
                used to convert string values coming from the environment

        Returns:
            Configuration value or default
        """
        value = self._config
        for k in key.split("."):
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default
        return _convert_type(value, default)

    def set(self, key: str, value: Any) -> None:
        """
        Sets a configuration value.
        """
        self._set_nested(key, value)

    def get_all(self) -> Dict[str, Any]:
        """
        Returns the entire configuration dictionary.
        """
        return self._config.copy()

    @classmethod
    def reset(cls) -> None:
        """
        Reset singleton instance.

        Useful for testing when configuration needs to be reloaded.
        """
        cls._instance = None


def get_config(key: str, default: Any = None) -> Any:
    """
    Convenience function to get a configuration value.

    Example:
        timeout = get_config("ui.default_timeout", 30000)
    """
    return GlobalConfig().get(key, default)


def set_config(key: str, value: Any) -> None:
    """
    Convenience function to set a configuration value.
    """
    GlobalConfig().set(key, value)


# ============================================================
# Logging Setup
# ============================================================

_logger_initialized = False

DEFAULT_LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
    "<level>{message}</level>"
)


def init_logger(
    level: str = None,
    format_string: str = None,
    log_dir: str = None,
) -> None:
    """
    Initializes the loguru logger with standard settings.

    Adds a console sink and, when a log directory is configured, a
    ``combined.log`` sink for every record and an ``error.log`` sink for
    errors only.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR). Defaults to config value.
        format_string: Log format string. Uses default if not provided.
        log_dir: Directory for log files. Defaults to config ``logging.dir``.
            When not given, config ``logging.file`` (env ``LOG_FILE``) names the
            combined log directly and ``error.log`` is written beside it.

    Example:
        init_logger()  # Use defaults
        init_logger(level="DEBUG", log_dir="logs")
    """
    global _logger_initialized

    if _logger_initialized:
        return

    # Remove default handler
    logger.remove()

    level = (level or get_config("logging.level", "INFO")).upper()
    format_string = format_string or get_config("logging.format", DEFAULT_LOG_FORMAT)

    logger.add(
        sys.stderr,
        format=format_string,
        level=level,
        colorize=True,
    )

    log_file = None if log_dir else get_config("logging.file")
    log_dir = log_dir or get_config("logging.dir")
    if log_file or log_dir:
        combined_log = Path(log_file) if log_file else Path(log_dir) / "combined.log"
        log_path = combined_log.parent
        log_path.mkdir(parents=True, exist_ok=True)
        file_format = format_string.replace("{level: <8}", "{level}")

        logger.add(
            combined_log,
            format=file_format,
            level=level,
            rotation=get_config("logging.rotation", "10 MB"),
            retention=get_config("logging.retention", "7 days"),
            colorize=False,
        )
        logger.add(
            log_path / "error.log",
            format=file_format,
            level="ERROR",
            rotation=get_config("logging.rotation", "10 MB"),
            retention=get_config("logging.retention", "7 days"),
            colorize=False,
        )

    _logger_initialized = True
    logger.debug("Logger initialized successfully")


# ============================================================
# Common Utilities
# ============================================================

def ensure_directory(path: str) -> str:
    """
    Ensures a directory exists, creating it if necessary.
    """
    os.makedirs(path, exist_ok=True)
    return path


# Export public API
__all__ = [
    "GlobalConfig",
    "get_config",
    "set_config",
    "init_logger",
    "ensure_directory",
    "PROJECT_ROOT",
]
