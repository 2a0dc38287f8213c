"""コミットメッセージの検証（解析 → ルール評価 → 集約）を行うサービス。"""

import logging
from collections.abc import Iterable, Mapping, Sequence
from concurrent.futures import ThreadPoolExecutor
from typing import Any

from commitgate.models.message import ParsedMessage, StructuralParseError
from commitgate.models.rules import RuleConfig
from commitgate.models.validation import BatchSummary, Diagnostic, Location, ValidationReport
from commitgate.services.config import merge_rules
from commitgate.services.parser import parse_message
from commitgate.validators.rules import RuleEngine

logger = logging.getLogger(__name__)


def aggregate(parsed: ParsedMessage, diagnostics: Iterable[Diagnostic]) -> ValidationReport:
    """診断結果を1件の検証レポートにまとめる。"""
    return ValidationReport(message=parsed.raw, diagnostics=tuple(diagnostics))


def validate(raw_message: str, config: RuleConfig) -> ValidationReport:
    """コミットメッセージを検証する。

    メッセージの形式が不正でも例外は送出せず、構造エラーを含むレポートを返す。

    Args:
        raw_message: コミットメッセージ全文。
        config: 解決済みのルール設定。

    Returns:
        検証レポート。
    """
    parsed = parse_message(raw_message, config)
    prior: list[Diagnostic] = []
    if isinstance(parsed, StructuralParseError):
        logger.warning("Commit message has an invalid structure; checking best-effort split")
        prior.append(
            Diagnostic(
                rule_name="pattern",
                severity="error",
                message=parsed.reason,
                location=Location(part="title"),
            )
        )
        parsed = parsed.fallback

    diagnostics = RuleEngine(config).run(parsed, prior)
    return aggregate(parsed, diagnostics)


def validate_many(
    messages: Sequence[str],
    config: RuleConfig,
    max_workers: int | None = None,
) -> list[ValidationReport]:
    """複数メッセージをスレッドプールで検証し、入力順のレポートを返す。"""
    if len(messages) <= 1:
        return [validate(m, config) for m in messages]
    with ThreadPoolExecutor(max_workers=max_workers) as pool:
        return list(pool.map(lambda m: validate(m, config), messages))


class LintService:
    """解決済み設定を保持し、MCPツールからの検証要求を処理する。"""

    def __init__(self, config: RuleConfig) -> None:
        self._config = config

    @property
    def config(self) -> RuleConfig:
        return self._config

    def _effective_config(self, overrides: Mapping[str, Any] | None) -> RuleConfig:
        if not overrides:
            return self._config
        return merge_rules(overrides, self._config)

    def validate_message(self, message: str, overrides: Mapping[str, Any] | None = None) -> ValidationReport:
        """1件のメッセージを検証する。

        Raises:
            ConfigError: overridesが不正な場合。
        """
        return validate(message, self._effective_config(overrides))

    def validate_messages(
        self,
        messages: Sequence[str],
        overrides: Mapping[str, Any] | None = None,
    ) -> tuple[list[ValidationReport], BatchSummary]:
        """複数メッセージを検証し、レポートと集計を返す。"""
        reports = validate_many(messages, self._effective_config(overrides))
        summary = BatchSummary()
        for index, report in enumerate(reports):
            summary.record(report, message_id=str(index))
        return reports, summary
