import sys

import pytest
import yaml
from loguru import logger

import autotest_tools.common as common
from autotest_tools.common import GlobalConfig, get_config, init_logger, set_config


@pytest.fixture
def config_dir(tmp_path, monkeypatch):
    for name in ("ENVIRONMENT", "ENV", *common.ENV_MAPPING):
        monkeypatch.delenv(name, raising=False)
    (tmp_path / "config.yaml").write_text(
        yaml.dump({
            "ui": {"base_url": "https://pc.example.com/pc/", "headless": True, "default_timeout": 30000},
            "auth": {"username": "su", "password": "gw"},
        }),
        encoding="utf-8",
    )
    GlobalConfig.reset()
    yield tmp_path
    GlobalConfig.reset()


def test_reads_defaults(config_dir):
    config = GlobalConfig(config_dir=config_dir)

    assert config.get("ui.base_url") == "https://pc.example.com/pc/"
    assert config.get("ui.default_timeout", 1000) == 30000
    assert config.get("ui.browser", "chromium") == "chromium"
    assert config.get("auth.username.first") is None


def test_environment_file_is_merged(config_dir, monkeypatch):
    (config_dir / "qa.yaml").write_text(
        yaml.dump({"ui": {"base_url": "https://qa.example.com/pc/"}}), encoding="utf-8"
    )
    monkeypatch.setenv("ENV", "qa")

    config = GlobalConfig(config_dir=config_dir)

    assert config.get("ui.base_url") == "https://qa.example.com/pc/"
    assert config.get("ui.default_timeout") == 30000


def test_env_variables_override_and_convert(config_dir, monkeypatch):
    monkeypatch.setenv("HEADLESS", "false")
    monkeypatch.setenv("DEFAULT_TIMEOUT", "5000")
    monkeypatch.setenv("PC_USERNAME", "underwriter")

    config = GlobalConfig(config_dir=config_dir)

    assert config.get("ui.headless", True) is False
    assert config.get("ui.default_timeout", 30000) == 5000
    assert config.get("auth.username") == "underwriter"


def test_unparsable_number_is_left_as_string(config_dir, monkeypatch):
    monkeypatch.setenv("DEFAULT_TIMEOUT", "soon")

    assert GlobalConfig(config_dir=config_dir).get("ui.default_timeout", 30000) == "soon"


def test_singleton_until_reset(config_dir, tmp_path_factory):
    first = GlobalConfig(config_dir=config_dir)
    set_config("ui.browser", "firefox")

    assert GlobalConfig() is first
    assert get_config("ui.browser") == "firefox"

    GlobalConfig.reset()
    other_dir = tmp_path_factory.mktemp("other")
    assert GlobalConfig(config_dir=other_dir).get_all() == {}


def test_log_file_setting_names_the_combined_log(config_dir, monkeypatch):
    log_file = config_dir / "logs" / "run.log"
    monkeypatch.setenv("LOG_FILE", str(log_file))
    monkeypatch.setattr(common, "_logger_initialized", False)
    GlobalConfig(config_dir=config_dir)

    try:
        init_logger(level="INFO")
        logger.info("quote requested")
        logger.error("quote failed")
    finally:
        logger.remove()
        logger.add(sys.stderr, level="INFO")

    assert "quote requested" in log_file.read_text(encoding="utf-8")
    error_log = (config_dir / "logs" / "error.log").read_text(encoding="utf-8")
    assert "quote failed" in error_log
    assert "quote requested" not in error_log
