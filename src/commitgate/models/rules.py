"""ルール設定関連のデータモデル。

設定ファイルのキーはcamelCase（例: ``titleMaxLineLength``）、
Pythonコード上の属性はsnake_caseで扱う。各ルールは ``false`` で無効化できる。
"""

import re
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from commitgate.models.validation import Severity

# タイトルと本文の分割パターン
#   - タイトルは改行で始まってはならない
#   - 本文はタイトルとちょうど1つの空行で区切る
#   - キャプチャ: 1=タイトル, 2=本文（末尾の改行は捨てる）
DEFAULT_PATTERN = re.compile(r"^([^\n]+)(?:\n\n([^\n][\S\s]*[^\n]))?\n*$")

# タイトル先頭に付けられるtype（例: "perf: ", "fix: i18n: "）
DEFAULT_ALLOWED_TYPES = re.compile(
    r"^(fix|docs|feature|security|chore|refactor|test|config|perf|WIP):( [\w\-.()]+:)? "
)

# タイトルに使用できない文字（許可文字の否定クラス）
DEFAULT_ALLOWED_CHARS = re.compile(r"[^A-Za-z0-9_(), '\"`\-:./~\[\]*$={}&;#]")

# allowedTypesで除去されなかった "xxx: " 形式のtype
DEFAULT_INVALID_TYPES = re.compile(r"(^[\w\-.()]+:( [\w\-.()]+:)? )")

# GitHubのissueクローズ参照
# https://docs.github.com/en/issues/tracking-your-work-with-issues/linking-a-pull-request-to-an-issue
DEFAULT_REFERENCES = re.compile(
    r"(?i)\b(?:close[sd]?|fix(?:e[sd])?|resolve[sd]?):?[ \t]+"
    r"(?:(?:[\w.\-]+/[\w.\-]+)?#\d+|https?://\S+/issues/\d+)"
)


class _Options(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


class _RuleOptions(_Options):
    type: Severity = "error"

    @field_validator("type", mode="before")
    @classmethod
    def _normalize_type(cls, value: object) -> object:
        # 設定ファイルでは ERROR / WARNING の表記も受け付ける
        if isinstance(value, str):
            return value.lower()
        return value


class CapitalizedRule(_RuleOptions):
    """タイトル先頭を大文字で始めることを要求する。"""


class InvalidCharsRule(_RuleOptions):
    """タイトル中の使用禁止文字を検出する。"""

    allowed_chars: re.Pattern[str] = DEFAULT_ALLOWED_CHARS


class LineLengthRule(_RuleOptions):
    """行の最大長（文字数）。"""

    length: int = Field(gt=0)


class StrictTypesRule(_RuleOptions):
    """許可されていないtypeの接頭辞を検出する。"""

    invalid_types: re.Pattern[str] = DEFAULT_INVALID_TYPES


class ReferencesRule(_RuleOptions):
    """issue参照は本文の最終段落にのみ置く。"""

    pattern: re.Pattern[str] = DEFAULT_REFERENCES
    required: bool = False


class ImperativeVerbsRule(_RuleOptions):
    """タイトル先頭の動詞が命令形でない場合に検出する。

    always_check がFalseの場合、他のルールがerrorを出していれば実行しない。
    """

    always_check: bool = False


class RuleConfig(_Options):
    """ルール設定全体。1回の実行中は変更しない。"""

    pattern: re.Pattern[str] = DEFAULT_PATTERN
    allowed_types: re.Pattern[str] = DEFAULT_ALLOWED_TYPES
    capitalized: CapitalizedRule | Literal[False] = Field(default_factory=CapitalizedRule)
    invalid_chars_in_title: InvalidCharsRule | Literal[False] = Field(default_factory=InvalidCharsRule)
    title_preferred_max_line_length: LineLengthRule | Literal[False] = Field(
        default_factory=lambda: LineLengthRule(length=50, type="warning")
    )
    # GitHubは70文字を超えるタイトルを省略表示する
    title_max_line_length: LineLengthRule | Literal[False] = Field(
        default_factory=lambda: LineLengthRule(length=70, type="error")
    )
    body_max_line_length: LineLengthRule | Literal[False] = Field(
        default_factory=lambda: LineLengthRule(length=72, type="warning")
    )
    strict_types: StrictTypesRule | Literal[False] = Field(default_factory=StrictTypesRule)
    references: ReferencesRule | Literal[False] = Field(default_factory=ReferencesRule)
    imperative_verbs_in_title: ImperativeVerbsRule | Literal[False] = Field(default_factory=ImperativeVerbsRule)


DEFAULT_RULES = RuleConfig()
