"""ルール設定関連のMCPリソース定義。"""

import yaml
from fastmcp import FastMCP

from commitgate.models.rules import DEFAULT_RULES
from commitgate.services.config import rules_to_dict
from commitgate.services.linter import LintService


def register_rule_resources(mcp: FastMCP, lint_service: LintService) -> None:
    """ルール設定関連のMCPリソースを登録する。"""

    @mcp.resource("commitgate://rules/config")
    async def rule_config() -> str:
        """解決済みのルール設定を取得する。

        デフォルト設定にプロジェクト設定を重ねた、実際の検証に使われる設定を返します。
        """
        return yaml.safe_dump(rules_to_dict(lint_service.config), allow_unicode=True, sort_keys=False)

    @mcp.resource("commitgate://rules/defaults")
    async def rule_defaults() -> str:
        """組み込みのデフォルトルール設定を取得する。"""
        return yaml.safe_dump(rules_to_dict(DEFAULT_RULES), allow_unicode=True, sort_keys=False)
