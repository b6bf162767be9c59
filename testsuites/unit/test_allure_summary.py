import json

from autotest_tools.report_tools.allure_utils import (
    AllureReportProcessor,
    TestCaseResult,
    TestResultSummary,
)


def write_result(results_dir, name, status, start=1000, stop=2500, message=None):
    data = {"name": name, "status": status, "start": start, "stop": stop}
    if message:
        data["statusDetails"] = {"message": message}
    (results_dir / f"{name}-result.json").write_text(json.dumps(data), encoding="utf-8")


def test_summary_counts_statuses(tmp_path):
    results_dir = tmp_path / "allure-results"
    results_dir.mkdir()
    write_result(results_dir, "a_login", "passed")
    write_result(results_dir, "b_bop", "failed", message="Timeout waiting for element")
    write_result(results_dir, "c_ca", "broken")
    write_result(results_dir, "d_account", "skipped", start=0, stop=0)
    (results_dir / "e-result.json").write_text("{not json", encoding="utf-8")
    (results_dir / "f-container.json").write_text("{}", encoding="utf-8")

    summary = AllureReportProcessor(results_dir).generate_summary()

    assert (summary.total, summary.passed, summary.failed, summary.broken, summary.skipped) == (4, 1, 1, 1, 1)
    assert summary.duration_ms == 4500
    assert summary.pass_rate == 25.0
    assert summary.results[1].error == "Timeout waiting for element"


def test_write_summary_document(tmp_path):
    results_dir = tmp_path / "allure-results"
    results_dir.mkdir()
    write_result(results_dir, "login", "passed")
    write_result(results_dir, "logout", "unknown")

    path = AllureReportProcessor(results_dir).write_summary(tmp_path / "test-results" / "custom-report.json")

    document = json.loads(path.read_text(encoding="utf-8"))
    assert document["summary"]["total"] == 2
    assert document["summary"]["unknown"] == 1
    assert document["summary"]["pass_rate"] == "50.00%"
    assert document["results"][0] == {"title": "login", "status": "passed", "duration": 1500}
    assert "timestamp" in document


def test_empty_summary():
    summary = TestResultSummary()
    summary.add(TestCaseResult(title="t", status="skipped"))

    assert summary.pass_rate == 0.0
    assert TestResultSummary().to_dict()["summary"]["pass_rate"] == "0.00%"


def test_missing_allure_cli_is_reported(tmp_path, monkeypatch):
    monkeypatch.setenv("PATH", str(tmp_path))
    processor = AllureReportProcessor(tmp_path / "allure-results")

    assert processor.generate_report() is False
