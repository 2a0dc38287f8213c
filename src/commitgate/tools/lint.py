"""コミットメッセージ検証のMCPツール定義。"""

from typing import Any

from fastmcp import FastMCP

from commitgate.models.errors import CommitGateError
from commitgate.models.validation import ValidationReport
from commitgate.services.linter import LintService


def _report_to_dict(report: ValidationReport) -> dict[str, Any]:
    return {
        "valid": report.is_valid,
        "has_errors": report.has_errors(),
        "has_warnings": report.has_warnings(),
        "diagnostics": [d.model_dump() for d in report.diagnostics],
        "rendered": report.render(),
    }


def register_lint_tools(mcp: FastMCP, lint_service: LintService) -> None:
    """検証関連のMCPツールを登録する。"""

    @mcp.tool()
    async def validate_commit_message(
        message: str,
        overrides: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """コミットメッセージを検証する。

        タイトル・本文の形式、タイトルの長さや使用文字、issue参照の位置などを
        プロジェクトのルール設定に従ってチェックします。

        Args:
            message: コミットメッセージ全文。
            overrides: この呼び出しだけに適用するルール設定の上書き（任意）。
                例: {"titleMaxLineLength": {"length": 60}, "references": false}
        """
        try:
            report = lint_service.validate_message(message, overrides)
            return _report_to_dict(report)
        except CommitGateError as e:
            return {"error": type(e).__name__, "message": str(e)}

    @mcp.tool()
    async def validate_commit_messages(
        messages: list[str],
        overrides: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """複数のコミットメッセージをまとめて検証する。

        各メッセージの結果と、全体の集計（total/valid/warned/invalid）を返します。

        Args:
            messages: コミットメッセージのリスト。
            overrides: ルール設定の上書き（任意）。
        """
        try:
            reports, summary = lint_service.validate_messages(messages, overrides)
            return {
                "results": [_report_to_dict(r) for r in reports],
                "summary": summary.model_dump(),
            }
        except CommitGateError as e:
            return {"error": type(e).__name__, "message": str(e)}
