"""コミットメッセージのルール評価ロジック。"""

import logging
import re

from commitgate.models.message import ParsedMessage
from commitgate.models.rules import (
    CapitalizedRule,
    ImperativeVerbsRule,
    InvalidCharsRule,
    LineLengthRule,
    ReferencesRule,
    RuleConfig,
    StrictTypesRule,
)
from commitgate.models.validation import Diagnostic, Location
from commitgate.validators.imperative import imperative_form

logger = logging.getLogger(__name__)

# 評価順（診断結果の表示順もこの順になる）
RULE_ORDER: tuple[str, ...] = (
    "capitalized",
    "invalidCharsInTitle",
    "titlePreferredMaxLineLength",
    "titleMaxLineLength",
    "bodyMaxLineLength",
    "strictTypes",
    "references",
    "imperativeVerbsInTitle",
)

_FIRST_WORD_RE = re.compile(r"[^\W\d_]+")

_TITLE = Location(part="title")


class RuleEngine:
    """ルール設定に基づいてコミットメッセージを検証する。"""

    def __init__(self, config: RuleConfig) -> None:
        self._config = config

    def run(self, message: ParsedMessage, prior: list[Diagnostic] | None = None) -> list[Diagnostic]:
        """有効な全ルールを評価順に適用する。

        Args:
            message: 解析済みメッセージ。
            prior: 評価前に既に検出されている診断結果（構造エラー等）。

        Returns:
            priorに続けて各ルールの診断結果を評価順に並べたリスト。
        """
        config = self._config
        results: list[Diagnostic] = list(prior or [])

        if config.capitalized:
            results.extend(self._check_capitalized(message, config.capitalized))
        if config.invalid_chars_in_title:
            results.extend(self._check_invalid_chars(message, config.invalid_chars_in_title))
        if config.title_preferred_max_line_length:
            results.extend(
                self._check_title_length(
                    message, config.title_preferred_max_line_length, "titlePreferredMaxLineLength"
                )
            )
        if config.title_max_line_length:
            results.extend(self._check_title_length(message, config.title_max_line_length, "titleMaxLineLength"))
        if config.body_max_line_length:
            results.extend(self._check_body_length(message, config.body_max_line_length))
        if config.strict_types:
            results.extend(self._check_strict_types(message, config.strict_types))
        if config.references:
            results.extend(self._check_references(message, config.references))

        imperative = config.imperative_verbs_in_title
        if imperative:
            if imperative.always_check or not any(d.severity == "error" for d in results):
                results.extend(self._check_imperative(message, imperative))
            else:
                logger.debug("Skipping imperativeVerbsInTitle: message already has errors")

        return results

    @staticmethod
    def _check_capitalized(message: ParsedMessage, rule: CapitalizedRule) -> list[Diagnostic]:
        """タイトル中の最初の文字（letter）が小文字でないかチェックする。

        先頭の記号や数字は読み飛ばす（``(ui) fix bug`` は ``f`` を見る）。
        """
        letter = _FIRST_WORD_RE.search(message.title)
        if letter is not None and letter.group(0)[0].islower():
            return [
                Diagnostic(
                    rule_name="capitalized",
                    severity=rule.type,
                    message="Title must start with a capital letter",
                    location=_TITLE,
                )
            ]
        return []

    @staticmethod
    def _check_invalid_chars(message: ParsedMessage, rule: InvalidCharsRule) -> list[Diagnostic]:
        """タイトル中の使用禁止文字をまとめて1件の診断にする。"""
        found = [m.group(0) for m in rule.allowed_chars.finditer(message.title) if m.group(0)]
        if not found:
            return []
        unique = list(dict.fromkeys(found))
        # 制御文字などの表示できない文字はエスケープして示す
        listed = ", ".join(f'"{c}"' if c.isprintable() else repr(c) for c in unique)
        return [
            Diagnostic(
                rule_name="invalidCharsInTitle",
                severity=rule.type,
                message=f"Title contains invalid characters: {listed}",
                location=_TITLE,
            )
        ]

    @staticmethod
    def _check_title_length(message: ParsedMessage, rule: LineLengthRule, rule_name: str) -> list[Diagnostic]:
        length = len(message.title)
        if length <= rule.length:
            return []
        return [
            Diagnostic(
                rule_name=rule_name,
                severity=rule.type,
                message=f"Title is longer than {rule.length} characters ({length})",
                location=_TITLE,
            )
        ]

    @staticmethod
    def _check_body_length(message: ParsedMessage, rule: LineLengthRule) -> list[Diagnostic]:
        """本文の各行を個別に長さチェックする。"""
        results: list[Diagnostic] = []
        for lineno, line in enumerate(message.body_lines(), start=1):
            if len(line) > rule.length:
                results.append(
                    Diagnostic(
                        rule_name="bodyMaxLineLength",
                        severity=rule.type,
                        message=f"Line is longer than {rule.length} characters ({len(line)})",
                        location=Location(part="body", line=lineno),
                    )
                )
        return results

    @staticmethod
    def _check_strict_types(message: ParsedMessage, rule: StrictTypesRule) -> list[Diagnostic]:
        """allowedTypesで除去されずに残ったtype接頭辞を検出する。"""
        match = rule.invalid_types.search(message.title)
        if match is None or not match.group(0):
            return []
        tag = match.group(0).strip()
        return [
            Diagnostic(
                rule_name="strictTypes",
                severity=rule.type,
                message=f'Title starts with an unrecognized type "{tag}"',
                location=_TITLE,
            )
        ]

    @staticmethod
    def _check_references(message: ParsedMessage, rule: ReferencesRule) -> list[Diagnostic]:
        """issue参照が本文の最終段落以外に置かれていないかチェックする。

        required がTrueの場合は、最終段落に参照が無いことも検出する。
        """
        results: list[Diagnostic] = []
        misplaced = "Issue references must be placed in the last paragraph of the body"

        for m in rule.pattern.finditer(message.title):
            results.append(
                Diagnostic(
                    rule_name="references",
                    severity=rule.type,
                    message=f'{misplaced}: "{m.group(0)}"',
                    location=_TITLE,
                )
            )

        paragraphs = message.paragraphs()
        for paragraph in paragraphs[:-1]:
            for m in rule.pattern.finditer(paragraph):
                results.append(
                    Diagnostic(
                        rule_name="references",
                        severity=rule.type,
                        message=f'{misplaced}: "{m.group(0)}"',
                        location=Location(part="body"),
                    )
                )

        if rule.required and not (paragraphs and rule.pattern.search(paragraphs[-1])):
            results.append(
                Diagnostic(
                    rule_name="references",
                    severity=rule.type,
                    message="Missing issue reference in the last paragraph of the body",
                    location=Location(part="body"),
                )
            )
        return results

    @staticmethod
    def _check_imperative(message: ParsedMessage, rule: ImperativeVerbsRule) -> list[Diagnostic]:
        """タイトル先頭語が命令形でない動詞かチェックする。"""
        match = _FIRST_WORD_RE.match(message.title)
        if match is None:
            return []
        word = match.group(0)
        base = imperative_form(word)
        if base is None:
            return []
        suggestion = base.capitalize() if word[0].isupper() else base
        return [
            Diagnostic(
                rule_name="imperativeVerbsInTitle",
                severity=rule.type,
                message=f'Use the imperative mood in the title: "{suggestion}" instead of "{word}"',
                location=_TITLE,
            )
        ]
