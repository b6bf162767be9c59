import sys

from autotest_tools.common import GlobalConfig, set_config
from run_tests import TestRunner, build_parser


def test_unit_command_without_browser_env(monkeypatch):
    monkeypatch.delenv("RUN_E2E", raising=False)
    runner = TestRunner(suite="unit", allure_report=False)

    assert runner.build_pytest_command() == [sys.executable, "-m", "pytest", "testsuites/unit", "-q"]
    assert "RUN_E2E" not in runner.build_env()


def test_ui_command_with_tags_and_workers():
    runner = TestRunner(
        suite="ui",
        tags=["P0", "smoke"],
        parallel=4,
        browser="firefox",
        headless=False,
        base_url="https://qa.example.com/pc/",
        verbose=True,
    )

    cmd = runner.build_pytest_command()
    assert cmd[3:] == [
        "testsuites/ui_testing/tests",
        "-m", "P0 or smoke",
        "-n", "4",
        "--alluredir", str(runner.allure_results),
        "-v",
    ]

    env = runner.build_env()
    assert env["RUN_E2E"] == "1"
    assert env["BROWSER"] == "firefox"
    assert env["HEADLESS"] == "false"
    assert env["BASE_URL"] == "https://qa.example.com/pc/"


def test_parser_defaults():
    args = build_parser().parse_args([])

    assert args.suite == "all"
    assert args.parallel == 1
    assert not args.no_headless


def test_report_paths_come_from_config():
    set_config("report.results_dir", "out/allure-results")
    set_config("report.summary_file", "out/summary.json")
    try:
        runner = TestRunner(suite="unit")
    finally:
        GlobalConfig.reset()

    assert runner.allure_results == runner.root_dir / "out" / "allure-results"
    assert runner.summary_file == runner.root_dir / "out" / "summary.json"
    assert runner.allure_report_dir == runner.root_dir / "reports" / "allure-report"
    assert "--alluredir" in runner.build_pytest_command()
