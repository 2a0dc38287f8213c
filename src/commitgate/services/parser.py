"""コミットメッセージをタイトルと本文に分割する。"""

import logging

from commitgate.models.message import ParsedMessage, StructuralParseError
from commitgate.models.rules import RuleConfig

logger = logging.getLogger(__name__)


def parse_message(raw: str, config: RuleConfig) -> ParsedMessage | StructuralParseError:
    """分割パターンに従ってメッセージを解析する。

    パターンに一致しない場合も例外は送出せず、暫定的な分割結果を持つ
    StructuralParseErrorを返す。

    Args:
        raw: コミットメッセージ全文。
        config: ルール設定（pattern と allowed_types を使用）。

    Returns:
        解析結果、またはパターン不一致を表す値。
    """
    # CRLF改行はLFとして扱う（rawはそのまま保持する）
    text = raw.replace("\r\n", "\n")
    match = config.pattern.match(text)
    if match is None:
        logger.debug("Message does not match the split pattern")
        return StructuralParseError(
            reason="Message must be a single title line, optionally followed by a blank line and a body",
            fallback=_fallback_split(raw, text, config),
        )

    # グループ数の少ないユーザー定義パターンも受け付ける
    groups = match.groups()
    title = (groups[0] if groups else match.group(0)) or ""
    body = groups[1] if len(groups) > 1 else None
    return _build(raw, title, body, config)


def _fallback_split(raw: str, text: str, config: RuleConfig) -> ParsedMessage:
    """先頭と末尾の改行を除き、1行目をタイトル、残りを本文とみなす。"""
    title, _, rest = text.strip("\n").partition("\n")
    return _build(raw, title, rest.strip("\n") or None, config)


def _build(raw: str, title: str, body: str | None, config: RuleConfig) -> ParsedMessage:
    stripped_type: str | None = None
    type_match = config.allowed_types.match(title)
    if type_match is not None and type_match.end() > 0:
        stripped_type = type_match.group(0).rstrip()
        title = title[type_match.end() :]
    return ParsedMessage(raw=raw, title=title, body=body, stripped_type=stripped_type)
