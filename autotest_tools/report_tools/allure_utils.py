"""
================================================================================
Allure Report Utilities
================================================================================

This module provides utilities for enhancing Allure test reports and for
post-processing Allure results after a run.

Features:
- Attachment helpers (text, JSON, screenshots)
- Result parsing and summary generation
- JSON run summary (test-results/custom-report.json) for CI dashboards
- HTML report generation with history

================================================================================
"""

import json
import shutil
import subprocess
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional

import allure
from loguru import logger


DEFAULT_SUMMARY_FILE = Path("test-results") / "custom-report.json"


# ================================================================================
# Attachment Helpers
# ================================================================================

def attach_json(data: Any, name: str = "Data"):
    """
    Attach JSON data to Allure report.

    Args:
        data: Data to attach (will be JSON serialized)
        name: Attachment name
    """
    allure.attach(
        json.dumps(data, indent=2, default=str),
        name=name,
        attachment_type=allure.attachment_type.JSON
    )


def attach_text(text: str, name: str = "Text"):
    allure.attach(
        text,
        name=name,
        attachment_type=allure.attachment_type.TEXT
    )


def attach_screenshot(png: bytes, name: str = "Screenshot"):
    """Attach PNG bytes (e.g. ``await page.screenshot()``) to the report."""
    allure.attach(
        png,
        name=name,
        attachment_type=allure.attachment_type.PNG
    )


# ================================================================================
# Report Processing
# ================================================================================

@dataclass
class TestCaseResult:
    """One test as recorded by allure-pytest."""
    # Keeps pytest from collecting Test* classes
    __test__ = False

    title: str
    status: str
    duration_ms: int = 0
    error: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "title": self.title,
            "status": self.status,
            "duration": self.duration_ms,
        }
        if self.error:
            data["error"] = self.error
        return data


@dataclass
class TestResultSummary:
    """Summary of test execution results."""
    total: int = 0
    passed: int = 0
    failed: int = 0
    broken: int = 0
    skipped: int = 0
    unknown: int = 0
    duration_ms: int = 0
    timestamp: str = field(default_factory=lambda: datetime.now().isoformat())
    results: List[TestCaseResult] = field(default_factory=list)

    __test__ = False

    @property
    def pass_rate(self) -> float:
        """Calculate pass rate percentage."""
        if self.total == 0:
            return 0.0
        return (self.passed / self.total) * 100

    def add(self, result: TestCaseResult) -> None:
        self.results.append(result)
        self.total += 1
        self.duration_ms += result.duration_ms
        if result.status in ("passed", "failed", "broken", "skipped"):
            setattr(self, result.status, getattr(self, result.status) + 1)
        else:
            self.unknown += 1

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the custom report document."""
        return {
            "timestamp": self.timestamp,
            "results": [result.to_dict() for result in self.results],
            "summary": {
                "total": self.total,
                "passed": self.passed,
                "failed": self.failed,
                "broken": self.broken,
                "skipped": self.skipped,
                "unknown": self.unknown,
                "pass_rate": f"{self.pass_rate:.2f}%",
                "duration_ms": self.duration_ms,
            },
        }


class AllureReportProcessor:
    """
    Processes Allure results and generates reports.

    Provides methods for analyzing results, generating summaries,
    and managing report history.
    """

    def __init__(
        self,
        results_dir: Path,
        report_dir: Optional[Path] = None,
        history_dir: Optional[Path] = None
    ):
        """
        Initialize processor.

        Args:
            results_dir: Allure results directory
            report_dir: Output report directory
            history_dir: History data directory
        """
        self.results_dir = Path(results_dir)
        self.report_dir = Path(report_dir or self.results_dir.parent / "allure-report")
        self.history_dir = Path(history_dir or self.results_dir.parent / "allure-history")

    def parse_results(self) -> List[Dict[str, Any]]:
        """
        Parse Allure result files.

        Unreadable files are skipped with a warning.
        """
        results = []

        for result_file in sorted(self.results_dir.glob("*-result.json")):
            try:
                with open(result_file, encoding="utf-8") as f:
                    results.append(json.load(f))
            except (OSError, json.JSONDecodeError) as e:
                logger.warning(f"Failed to parse {result_file}: {e}")

        return results

    def generate_summary(self) -> TestResultSummary:
        summary = TestResultSummary()

        for result in self.parse_results():
            details = result.get("statusDetails") or {}
            summary.add(TestCaseResult(
                title=result.get("name", "unknown"),
                status=result.get("status", "unknown"),
                duration_ms=result.get("stop", 0) - result.get("start", 0),
                error=details.get("message"),
            ))

        return summary

    def write_summary(self, path: Path = DEFAULT_SUMMARY_FILE) -> Path:
        """
        Write the JSON run summary.

        Returns:
            Path of the written file
        """
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        summary = self.generate_summary()

        with open(path, "w", encoding="utf-8") as f:
            json.dump(summary.to_dict(), f, indent=2)

        logger.info(f"Custom report written to {path}")
        return path

    def copy_history(self):
        """Copy history from previous report to results."""
        history_source = self.report_dir / "history"
        history_dest = self.results_dir / "history"

        if history_source.exists():
            if history_dest.exists():
                shutil.rmtree(history_dest)
            shutil.copytree(history_source, history_dest)
            logger.info("Copied history from previous report")

    def generate_report(self) -> bool:
        """
        Generate Allure HTML report.

        Returns:
            True if successful
        """
        self.copy_history()

        cmd = [
            "allure", "generate",
            str(self.results_dir),
            "-o", str(self.report_dir),
            "--clean"
        ]

        try:
            result = subprocess.run(cmd, capture_output=True, text=True)
        except FileNotFoundError:
            logger.error("Allure command not found. Install allure-commandline.")
            return False

        if result.returncode != 0:
            logger.error(f"Report generation failed: {result.stderr}")
            return False

        logger.info(f"Report generated at {self.report_dir}")
        return True

    def save_history(self):
        """Keep the latest report history for trend charts."""
        history_source = self.report_dir / "history"

        if history_source.exists():
            current_dir = self.history_dir / "current"
            if current_dir.exists():
                shutil.rmtree(current_dir)
            shutil.copytree(history_source, current_dir)

            logger.info(f"History saved to {self.history_dir}")

    def print_summary(self):
        """Print summary to console."""
        summary = self.generate_summary()

        print("\n" + "=" * 60)
        print("TEST EXECUTION SUMMARY")
        print("=" * 60)
        print(f"Total Tests:    {summary.total}")
        print(f"Passed:         {summary.passed}")
        print(f"Failed:         {summary.failed}")
        print(f"Broken:         {summary.broken}")
        print(f"Skipped:        {summary.skipped}")
        print(f"Pass Rate:      {summary.pass_rate:.2f}%")
        print(f"Duration:       {summary.duration_ms / 1000:.2f}s")
        print("=" * 60 + "\n")


# ================================================================================
# Convenience Functions
# ================================================================================

def generate_allure_report(
    results_dir: str,
    output_dir: Optional[str] = None,
    summary_file: Optional[str] = None,
    open_report: bool = False
) -> bool:
    """
    Write the JSON summary and generate the Allure HTML report.

    Args:
        results_dir: Path to allure-results directory
        output_dir: Optional output directory
        summary_file: JSON summary path (test-results/custom-report.json)
        open_report: Whether to open report in browser

    Returns:
        True if the HTML report was generated
    """
    processor = AllureReportProcessor(
        Path(results_dir),
        Path(output_dir) if output_dir else None
    )

    processor.write_summary(Path(summary_file) if summary_file else DEFAULT_SUMMARY_FILE)
    success = processor.generate_report()

    if success:
        processor.print_summary()
        processor.save_history()

        if open_report:
            subprocess.run(["allure", "open", str(processor.report_dir)])

    return success
