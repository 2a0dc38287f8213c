"""ルール設定の解決（デフォルト・プロジェクト設定・上書きのマージ）を行う。"""

import logging
import re
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError
from pydantic.alias_generators import to_camel

from commitgate.models.errors import ConfigError
from commitgate.models.rules import DEFAULT_RULES, RuleConfig

logger = logging.getLogger(__name__)

# ディレクトリ指定時に探索するプロジェクト設定ファイル（先に見つかったものを使用）
CONFIG_FILE_NAMES: tuple[str, ...] = (".commitgate.yaml", ".commitgate.yml", ".commitgate.json")

ConfigSource = Mapping[str, Any] | Path | str


def merge_rules(overrides: Mapping[str, Any] | None, base: RuleConfig = DEFAULT_RULES) -> RuleConfig:
    """ベース設定に上書き設定をマージした新しいRuleConfigを返す。

    ベース設定は変更しない。文字列で指定された正規表現オプションはここでコンパイルする。
    ベース設定で無効化（``false``）されたルールにオプションを指定した場合は、
    そのルールの組み込みデフォルトに重ねて再有効化する。

    Args:
        overrides: 上書き設定。キーはcamelCaseとsnake_caseのどちらでもよい。
        base: マージ元の設定。

    Returns:
        マージ済みの設定。

    Raises:
        ConfigError: 正規表現が不正な場合、または値の型が不正な場合。
    """
    aliased = _to_aliases(overrides or {})
    base_data = base.model_dump(by_alias=True)
    for key, value in aliased.items():
        if base_data.get(key) is False and isinstance(value, Mapping):
            base_data[key] = DEFAULT_RULES.model_dump(by_alias=True)[key]
    merged = _merge(base_data, aliased)
    try:
        return RuleConfig.model_validate(merged)
    except ValidationError as e:
        raise ConfigError(f"Invalid rule configuration: {e}") from e


def resolve_config(
    overrides: Mapping[str, Any] | None = None,
    source: ConfigSource | None = None,
) -> RuleConfig:
    """デフォルト・プロジェクト設定・上書き設定の順にマージしたRuleConfigを返す。

    Args:
        overrides: プロセス内で与える上書き設定。
        source: プロジェクト設定。マッピング、設定ファイルのパス、
            または設定ファイルを探索するディレクトリ。

    Raises:
        ConfigError: 設定ファイルが存在しない・読み込めない・形式が不正な場合。
    """
    config = DEFAULT_RULES
    project = load_project_config(source) if source is not None else None
    if project:
        config = merge_rules(project, config)
    if overrides:
        logger.debug("Applying in-process overrides: %s", sorted(overrides))
        config = merge_rules(overrides, config)
    return config


def load_project_config(source: ConfigSource) -> dict[str, Any]:
    """プロジェクト設定をマッピングとして読み込む。

    ディレクトリ内に設定ファイルが無い場合は空のマッピングを返す。
    """
    if isinstance(source, Mapping):
        return dict(source)

    path = Path(source)
    if path.is_dir():
        for name in CONFIG_FILE_NAMES:
            candidate = path / name
            if candidate.is_file():
                path = candidate
                break
        else:
            logger.debug("No project config found in %s", path)
            return {}

    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except FileNotFoundError:
        raise ConfigError("Config file not found", source=str(path)) from None
    except OSError as e:
        raise ConfigError(f"Cannot read config file: {e.strerror}", source=str(path)) from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Config file is not valid YAML/JSON: {e}", source=str(path)) from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError("Config file must contain a mapping at the top level", source=str(path))
    logger.debug("Loaded project config from %s", path)
    return data


def rules_to_dict(config: RuleConfig) -> dict[str, Any]:
    """設定ファイルと同じ形式（camelCaseキー、正規表現は文字列）のマッピングに変換する。"""
    return _plain(config.model_dump(by_alias=True))


def _plain(value: Any) -> Any:
    if isinstance(value, dict):
        return {k: _plain(v) for k, v in value.items()}
    if isinstance(value, re.Pattern):
        return value.pattern
    return value


def _merge(base: Any, override: Any) -> Any:
    if isinstance(base, dict) and isinstance(override, Mapping):
        merged = dict(base)
        for key, value in override.items():
            merged[key] = _merge(base.get(key), value)
        return merged
    if isinstance(base, re.Pattern) and isinstance(override, str):
        try:
            return re.compile(override)
        except re.error as e:
            raise ConfigError(f"Invalid regular expression {override!r}: {e}") from e
    return override


def _to_aliases(overrides: Mapping[str, Any]) -> dict[str, Any]:
    """snake_caseのキーをcamelCaseに揃える。未知のキーはそのまま残す。"""
    aliases = {name: to_camel(name) for name in RuleConfig.model_fields}
    result: dict[str, Any] = {}
    for key, value in overrides.items():
        key = aliases.get(key, key)
        if isinstance(value, Mapping):
            value = {_option_alias(k): v for k, v in value.items()}
        result[key] = value
    return result


def _option_alias(key: str) -> str:
    return to_camel(key) if "_" in key else key
