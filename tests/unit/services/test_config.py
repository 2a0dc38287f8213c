"""ルール設定解決のユニットテスト。"""

import json
import re
from pathlib import Path

import pytest

from commitgate.models.errors import ConfigError
from commitgate.models.rules import DEFAULT_RULES, CapitalizedRule, LineLengthRule, ReferencesRule
from commitgate.services.config import load_project_config, merge_rules, resolve_config, rules_to_dict


class TestMergeRules:
    def test_no_overrides_returns_equivalent_config(self) -> None:
        config = merge_rules(None)
        assert rules_to_dict(config) == rules_to_dict(DEFAULT_RULES)

    def test_disable_rule(self) -> None:
        config = merge_rules({"capitalized": False})
        assert config.capitalized is False

    def test_base_is_not_mutated(self) -> None:
        merge_rules({"capitalized": False, "titleMaxLineLength": {"length": 10}})
        assert DEFAULT_RULES.capitalized == CapitalizedRule()
        assert DEFAULT_RULES.title_max_line_length is not False
        assert DEFAULT_RULES.title_max_line_length.length == 70

    def test_nested_merge_keeps_other_options(self) -> None:
        config = merge_rules({"titleMaxLineLength": {"length": 60}})
        assert config.title_max_line_length is not False
        assert config.title_max_line_length.length == 60
        assert config.title_max_line_length.type == "error"

    def test_snake_case_keys(self) -> None:
        config = merge_rules({"title_max_line_length": {"length": 60}, "imperative_verbs_in_title": {"always_check": True}})
        assert config.title_max_line_length is not False
        assert config.title_max_line_length.length == 60
        assert config.imperative_verbs_in_title is not False
        assert config.imperative_verbs_in_title.always_check is True

    def test_string_regex_is_compiled(self) -> None:
        config = merge_rules({"strictTypes": {"invalidTypes": "^wip: "}})
        assert config.strict_types is not False
        assert isinstance(config.strict_types.invalid_types, re.Pattern)
        assert config.strict_types.invalid_types.pattern == "^wip: "

    def test_compiled_regex_accepted(self) -> None:
        pattern = re.compile(r"^(feat|fix): ")
        config = merge_rules({"allowedTypes": pattern})
        assert config.allowed_types.pattern == pattern.pattern

    def test_invalid_regex_raises_config_error(self) -> None:
        with pytest.raises(ConfigError):
            merge_rules({"pattern": "(unclosed"})

    def test_invalid_value_raises_config_error(self) -> None:
        with pytest.raises(ConfigError):
            merge_rules({"titleMaxLineLength": {"length": "long"}})

    def test_pattern_cannot_be_disabled(self) -> None:
        with pytest.raises(ConfigError):
            merge_rules({"allowedTypes": False})

    def test_reenable_disabled_rule(self) -> None:
        base = merge_rules({"references": False})
        config = merge_rules({"references": {"required": True}}, base)
        assert config.references == ReferencesRule(required=True)

    def test_reenable_length_rule_with_severity_only(self) -> None:
        base = merge_rules({"titlePreferredMaxLineLength": False})
        config = merge_rules({"titlePreferredMaxLineLength": {"type": "warning"}}, base)
        assert config.title_preferred_max_line_length == LineLengthRule(length=50, type="warning")

    def test_reenable_length_rule_keeps_default_severity(self) -> None:
        config = resolve_config(
            {"titlePreferredMaxLineLength": {"length": 40}},
            source={"titlePreferredMaxLineLength": False},
        )
        assert config.title_preferred_max_line_length == LineLengthRule(length=40, type="warning")

    def test_unknown_keys_have_no_effect(self) -> None:
        config = merge_rules({"noSuchRule": {"type": "error"}})
        assert rules_to_dict(config) == rules_to_dict(DEFAULT_RULES)


class TestLoadProjectConfig:
    def test_mapping_source(self) -> None:
        assert load_project_config({"capitalized": False}) == {"capitalized": False}

    def test_directory_without_config(self, project_dir: Path) -> None:
        assert load_project_config(project_dir) == {}

    def test_yaml_file_in_directory(self, project_dir: Path) -> None:
        (project_dir / ".commitgate.yaml").write_text("capitalized: false\n", encoding="utf-8")
        assert load_project_config(project_dir) == {"capitalized": False}

    def test_json_file_in_directory(self, project_dir: Path) -> None:
        (project_dir / ".commitgate.json").write_text(
            json.dumps({"titleMaxLineLength": {"length": 60}}), encoding="utf-8"
        )
        assert load_project_config(project_dir) == {"titleMaxLineLength": {"length": 60}}

    def test_empty_file(self, project_dir: Path) -> None:
        config_file = project_dir / "rules.yaml"
        config_file.write_text("", encoding="utf-8")
        assert load_project_config(config_file) == {}

    def test_missing_file_raises(self, project_dir: Path) -> None:
        with pytest.raises(ConfigError) as exc_info:
            load_project_config(project_dir / "missing.yaml")
        assert exc_info.value.source == str(project_dir / "missing.yaml")

    def test_unparsable_file_raises(self, project_dir: Path) -> None:
        config_file = project_dir / "rules.yaml"
        config_file.write_text("capitalized: [unclosed\n", encoding="utf-8")
        with pytest.raises(ConfigError):
            load_project_config(config_file)

    def test_non_mapping_file_raises(self, project_dir: Path) -> None:
        config_file = project_dir / "rules.yaml"
        config_file.write_text("- capitalized\n", encoding="utf-8")
        with pytest.raises(ConfigError):
            load_project_config(config_file)


class TestResolveConfig:
    def test_defaults(self) -> None:
        assert resolve_config() is DEFAULT_RULES

    def test_project_config_then_overrides(self, project_dir: Path) -> None:
        (project_dir / ".commitgate.yaml").write_text(
            "titleMaxLineLength:\n  length: 60\n  type: WARNING\nbodyMaxLineLength: false\n",
            encoding="utf-8",
        )
        config = resolve_config({"titleMaxLineLength": {"length": 65}}, source=project_dir)
        assert config.title_max_line_length is not False
        assert config.title_max_line_length.length == 65
        assert config.title_max_line_length.type == "warning"
        assert config.body_max_line_length is False

    def test_project_regex_from_string(self, project_dir: Path) -> None:
        (project_dir / ".commitgate.yaml").write_text(
            "allowedTypes: '^(feat|fix):( [\\w\\-.()]+:)? '\n",
            encoding="utf-8",
        )
        config = resolve_config(source=project_dir)
        assert config.allowed_types.match("feat: Add login")
        assert not config.allowed_types.match("docs: Add login")

    def test_mapping_source(self) -> None:
        config = resolve_config(source={"references": False})
        assert config.references is False

    def test_missing_config_file_raises(self, project_dir: Path) -> None:
        with pytest.raises(ConfigError):
            resolve_config(source=project_dir / "nope.json")


class TestRulesToDict:
    def test_patterns_become_strings(self) -> None:
        data = rules_to_dict(DEFAULT_RULES)
        assert data["pattern"] == DEFAULT_RULES.pattern.pattern
        assert isinstance(data["invalidCharsInTitle"]["allowedChars"], str)

    def test_camel_case_keys(self) -> None:
        data = rules_to_dict(DEFAULT_RULES)
        assert data["titleMaxLineLength"] == {"type": "error", "length": 70}
        assert data["imperativeVerbsInTitle"] == {"type": "error", "alwaysCheck": False}

    def test_disabled_rule(self) -> None:
        assert rules_to_dict(merge_rules({"capitalized": False}))["capitalized"] is False

    def test_round_trip_through_merge(self) -> None:
        config = merge_rules(rules_to_dict(DEFAULT_RULES))
        assert rules_to_dict(config) == rules_to_dict(DEFAULT_RULES)
