"""commitgateのカスタム例外クラス。"""


class CommitGateError(Exception):
    """commitgateの基底例外クラス。"""


class ConfigError(CommitGateError):
    """ルール設定の読み込み・検証に失敗した場合の例外。"""

    def __init__(self, message: str, source: str | None = None) -> None:
        if source is not None:
            message = f"{message} ({source})"
        super().__init__(message)
        self.source = source


class MessageSourceError(CommitGateError):
    """コミットメッセージの読み込みに失敗した場合の例外。"""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"Cannot read commit message from {path}: {reason}")
        self.path = path
        self.reason = reason


class GitCommandError(CommitGateError):
    """gitコマンド実行エラー。"""

    def __init__(self, message: str, stderr: str, exit_code: int) -> None:
        super().__init__(message)
        self.stderr = stderr
        self.exit_code = exit_code
