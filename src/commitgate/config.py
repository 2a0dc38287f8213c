"""commitgateの実行時設定管理。"""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings


class CheckerSettings(BaseSettings):
    """実行時設定。環境変数から読み込み可能。"""

    model_config = {"env_prefix": "COMMITGATE_"}

    # プロジェクト設定（.commitgate.yaml 等）の探索ディレクトリ
    config_dir: Path = Field(default_factory=Path.cwd)
    # 明示的に指定する設定ファイル（config_dirより優先）
    config_file: Path | None = None
    log_level: str = "WARNING"

    # MCPサーバー
    host: str = "127.0.0.1"
    port: int = 8000

    @property
    def config_source(self) -> Path:
        """プロジェクト設定の読み込み元。"""
        return self.config_file if self.config_file is not None else self.config_dir
