"""テスト共通フィクスチャ。"""

from pathlib import Path

import pytest

from commitgate.config import CheckerSettings
from commitgate.models.rules import DEFAULT_RULES, RuleConfig
from commitgate.services.linter import LintService


@pytest.fixture
def rules() -> RuleConfig:
    """デフォルトのルール設定。"""
    return DEFAULT_RULES


@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
    """プロジェクト設定ファイルを置く一時ディレクトリ。"""
    project = tmp_path / "project"
    project.mkdir()
    return project


@pytest.fixture
def lint_service(rules: RuleConfig) -> LintService:
    """テスト用LintService。"""
    return LintService(config=rules)


@pytest.fixture
def settings(project_dir: Path) -> CheckerSettings:
    """テスト用CheckerSettings。"""
    return CheckerSettings(config_dir=project_dir)
