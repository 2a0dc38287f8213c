"""commitgate: コミットメッセージ検証ツール。"""

from commitgate.services.config import resolve_config
from commitgate.services.linter import validate

__all__ = ["resolve_config", "validate"]
