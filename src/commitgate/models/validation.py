"""バリデーション結果関連のデータモデル。"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

Severity = Literal["error", "warning"]
MessagePart = Literal["title", "body"]

# 表示順: errorを先にwarningを後に
_SEVERITY_ORDER: dict[str, int] = {"error": 0, "warning": 1}


class Location(BaseModel):
    """診断結果が指すメッセージ内の位置。"""

    model_config = ConfigDict(frozen=True)

    part: MessagePart
    line: int | None = None

    def __str__(self) -> str:
        if self.line is None:
            return self.part
        return f"{self.part} line {self.line}"


class Diagnostic(BaseModel):
    """単一ルールが検出した個別の問題。"""

    model_config = ConfigDict(frozen=True)

    rule_name: str
    severity: Severity
    message: str
    location: Location | None = None

    def render(self) -> str:
        """1行の表示用文字列を返す。"""
        text = f"{self.severity}: [{self.rule_name}] {self.message}"
        if self.location is not None:
            text += f" ({self.location})"
        return text


class ValidationReport(BaseModel):
    """1件のコミットメッセージに対する検証結果。

    診断結果はルールの評価順に保持される。
    """

    model_config = ConfigDict(frozen=True)

    message: str
    diagnostics: tuple[Diagnostic, ...] = ()

    @property
    def errors(self) -> list[Diagnostic]:
        return [d for d in self.diagnostics if d.severity == "error"]

    @property
    def warnings(self) -> list[Diagnostic]:
        return [d for d in self.diagnostics if d.severity == "warning"]

    @property
    def is_valid(self) -> bool:
        """errorが1件もなければTrue。warningは受理を妨げない。"""
        return not self.has_errors()

    def has_errors(self) -> bool:
        return any(d.severity == "error" for d in self.diagnostics)

    def has_warnings(self) -> bool:
        return any(d.severity == "warning" for d in self.diagnostics)

    def render(self) -> str:
        """診断結果を1行1件で整形する。

        errorを先に、warningを後に並べ、同じ重要度の中ではルールの評価順を保つ。
        同一入力に対しては常に同一の文字列を返す。
        """
        ordered = sorted(self.diagnostics, key=lambda d: _SEVERITY_ORDER[d.severity])
        return "\n".join(d.render() for d in ordered)


class BatchSummary(BaseModel):
    """複数メッセージを検証した際の集計。"""

    total: int = 0
    valid: int = 0
    warned: int = 0
    invalid: int = 0
    failed_ids: list[str] = Field(default_factory=list)

    def record(self, report: ValidationReport, message_id: str | None = None) -> None:
        """検証結果を1件分集計に加える。"""
        self.total += 1
        if report.has_errors():
            self.invalid += 1
            if message_id is not None:
                self.failed_ids.append(message_id)
            return
        self.valid += 1
        if report.has_warnings():
            self.warned += 1

    @property
    def all_valid(self) -> bool:
        return self.invalid == 0
