"""コミットメッセージ関連のデータモデル。"""

import re

from pydantic import BaseModel, ConfigDict

_PARAGRAPH_SPLIT_RE = re.compile(r"\n[ \t]*\n")


class ParsedMessage(BaseModel):
    """タイトルと本文に分割されたコミットメッセージ。"""

    model_config = ConfigDict(frozen=True)

    raw: str
    title: str
    body: str | None = None
    stripped_type: str | None = None

    def paragraphs(self) -> list[str]:
        """本文を空行で段落に分割する。本文が無い場合は空リスト。"""
        if not self.body:
            return []
        return [p for p in _PARAGRAPH_SPLIT_RE.split(self.body) if p.strip()]

    def body_lines(self) -> list[str]:
        if self.body is None:
            return []
        return self.body.split("\n")


class StructuralParseError(BaseModel):
    """メッセージが分割パターンに一致しなかったことを表す値。

    例外としては送出せず、パーサーの戻り値として扱う。
    fallback には以降のチェックで使う暫定的な分割結果を保持する。
    """

    model_config = ConfigDict(frozen=True)

    reason: str
    fallback: ParsedMessage
