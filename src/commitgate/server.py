"""FastMCPベースのMCPサーバーエントリポイント。"""

from typing import Any

from fastmcp import FastMCP
from starlette.requests import Request
from starlette.responses import JSONResponse

from commitgate.config import CheckerSettings
from commitgate.resources.rules import register_rule_resources
from commitgate.services.config import resolve_config
from commitgate.services.linter import LintService
from commitgate.tools.lint import register_lint_tools


def create_server(
    settings: CheckerSettings | None = None,
    overrides: dict[str, Any] | None = None,
) -> FastMCP:
    """commitgate MCPサーバーを作成し、ツール・リソースを登録する。

    ルール設定は起動時に1度だけ解決する。

    Args:
        settings: 実行時設定。Noneの場合はデフォルト設定を使用。
        overrides: プロジェクト設定に重ねるルール設定の上書き。

    Returns:
        設定済みのFastMCPインスタンス。

    Raises:
        ConfigError: プロジェクト設定が不正な場合。
    """
    if settings is None:
        settings = CheckerSettings()

    mcp = FastMCP("commitgate")

    lint_service = LintService(config=resolve_config(overrides, source=settings.config_source))

    register_lint_tools(mcp, lint_service)
    register_rule_resources(mcp, lint_service)

    # ヘルスチェックエンドポイント
    @mcp.custom_route("/health", methods=["GET"])
    async def health_check(request: Request) -> JSONResponse:
        return JSONResponse({"status": "ok"})

    return mcp
