"""検証結果モデルのユニットテスト。"""

import pytest
from pydantic import ValidationError

from commitgate.models.validation import BatchSummary, Diagnostic, Location, ValidationReport


def _diag(rule: str, severity: str, message: str = "problem", location: Location | None = None) -> Diagnostic:
    return Diagnostic(rule_name=rule, severity=severity, message=message, location=location)  # type: ignore[arg-type]


class TestDiagnostic:
    def test_render_without_location(self) -> None:
        assert _diag("capitalized", "error", "Bad").render() == "error: [capitalized] Bad"

    def test_render_with_body_line(self) -> None:
        d = _diag("bodyMaxLineLength", "warning", "Too long", Location(part="body", line=3))
        assert d.render() == "warning: [bodyMaxLineLength] Too long (body line 3)"

    def test_render_with_title_location(self) -> None:
        d = _diag("capitalized", "error", "Bad", Location(part="title"))
        assert d.render() == "error: [capitalized] Bad (title)"

    def test_invalid_severity_rejected(self) -> None:
        with pytest.raises(ValidationError):
            _diag("capitalized", "fatal")

    def test_diagnostic_is_immutable(self) -> None:
        d = _diag("capitalized", "error")
        with pytest.raises(ValidationError):
            d.message = "changed"  # type: ignore[misc]


class TestValidationReport:
    def test_empty_report(self) -> None:
        report = ValidationReport(message="Fix bug")
        assert not report.has_errors()
        assert not report.has_warnings()
        assert report.is_valid
        assert report.render() == ""

    def test_warning_only_report_is_valid(self) -> None:
        report = ValidationReport(message="m", diagnostics=(_diag("titlePreferredMaxLineLength", "warning"),))
        assert report.has_warnings()
        assert not report.has_errors()
        assert report.is_valid

    def test_error_report_is_invalid(self) -> None:
        report = ValidationReport(message="m", diagnostics=(_diag("capitalized", "error"),))
        assert report.has_errors()
        assert not report.is_valid

    def test_render_lists_errors_before_warnings(self) -> None:
        report = ValidationReport(
            message="m",
            diagnostics=(
                _diag("titlePreferredMaxLineLength", "warning", "w1"),
                _diag("titleMaxLineLength", "error", "e1"),
                _diag("bodyMaxLineLength", "warning", "w2"),
                _diag("strictTypes", "error", "e2"),
            ),
        )
        assert report.render().splitlines() == [
            "error: [titleMaxLineLength] e1",
            "error: [strictTypes] e2",
            "warning: [titlePreferredMaxLineLength] w1",
            "warning: [bodyMaxLineLength] w2",
        ]

    def test_errors_and_warnings_views(self) -> None:
        report = ValidationReport(
            message="m",
            diagnostics=(_diag("a", "warning"), _diag("b", "error")),
        )
        assert [d.rule_name for d in report.errors] == ["b"]
        assert [d.rule_name for d in report.warnings] == ["a"]


class TestBatchSummary:
    def test_record_counts(self) -> None:
        summary = BatchSummary()
        summary.record(ValidationReport(message="ok"))
        summary.record(ValidationReport(message="warn", diagnostics=(_diag("a", "warning"),)), message_id="w")
        summary.record(ValidationReport(message="bad", diagnostics=(_diag("b", "error"),)), message_id="abc123")

        assert summary.total == 3
        assert summary.valid == 2
        assert summary.warned == 1
        assert summary.invalid == 1
        assert summary.failed_ids == ["abc123"]
        assert not summary.all_valid

    def test_empty_summary_is_all_valid(self) -> None:
        assert BatchSummary().all_valid
