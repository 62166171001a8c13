"""Tests for configuration management."""

import pytest
import yaml

from src.mochawesome_merger.config import (
    ConfigurationError,
    MergeConfig,
    _parse_env_bool,
    _parse_env_int,
    load_config,
    validate_config,
)

ENV_VARS = [
    "MERGE_OUTPUT",
    "MERGE_REPORT_FORMAT",
    "MERGE_INDENT",
    "MERGE_TIMEOUT",
    "MERGE_AUTH_TOKEN",
    "MERGE_SUMMARY",
]


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for var in ENV_VARS:
        monkeypatch.delenv(var, raising=False)


class TestMergeConfig:
    """Tests for MergeConfig dataclass."""

    def test_defaults(self):
        config = MergeConfig()
        assert config.sources == []
        assert config.output is None
        assert config.report_format == "mochawesome"
        assert config.indent is None
        assert config.summary is True
        assert config.timeout_seconds == 10
        assert config.auth_token is None

    def test_single_source_string_becomes_list(self):
        config = MergeConfig(sources="report.json")
        assert config.sources == ["report.json"]


class TestParseEnv:
    """Tests for the environment parsing helpers."""

    def test_int_not_set(self):
        assert _parse_env_int("NONEXISTENT_VAR_12345") is None

    def test_int_valid(self, monkeypatch):
        monkeypatch.setenv("TEST_INT_VAR", "42")
        assert _parse_env_int("TEST_INT_VAR") == 42

    def test_int_invalid(self, monkeypatch):
        monkeypatch.setenv("TEST_INT_VAR", "abc")
        with pytest.raises(ConfigurationError, match="must be a valid integer"):
            _parse_env_int("TEST_INT_VAR")

    @pytest.mark.parametrize("value,expected", [("1", True), ("yes", True), ("OFF", False)])
    def test_bool_valid(self, monkeypatch, value, expected):
        monkeypatch.setenv("TEST_BOOL_VAR", value)
        assert _parse_env_bool("TEST_BOOL_VAR") is expected

    def test_bool_invalid(self, monkeypatch):
        monkeypatch.setenv("TEST_BOOL_VAR", "maybe")
        with pytest.raises(ConfigurationError, match="must be a boolean"):
            _parse_env_bool("TEST_BOOL_VAR")


class TestLoadConfig:
    """Tests for load_config."""

    def test_defaults_without_file(self):
        config = load_config()
        assert config.report_format == "mochawesome"

    def test_from_file(self, tmp_path):
        config_file = tmp_path / "merge.yaml"
        config_file.write_text(
            yaml.safe_dump(
                {
                    "sources": ["a.json", "b.json"],
                    "output": "merged.json",
                    "indent": 2,
                    "summary": False,
                }
            )
        )
        config = load_config(str(config_file))
        assert config.sources == ["a.json", "b.json"]
        assert config.output == "merged.json"
        assert config.indent == 2
        assert config.summary is False

    def test_empty_file(self, tmp_path):
        config_file = tmp_path / "empty.yaml"
        config_file.write_text("")
        assert load_config(str(config_file)) == MergeConfig()

    def test_env_overrides_file(self, tmp_path, monkeypatch):
        config_file = tmp_path / "merge.yaml"
        config_file.write_text("output: from-file.json\ntimeout_seconds: 20\n")
        monkeypatch.setenv("MERGE_OUTPUT", "from-env.json")
        monkeypatch.setenv("MERGE_TIMEOUT", "45")
        monkeypatch.setenv("MERGE_SUMMARY", "false")
        config = load_config(str(config_file))
        assert config.output == "from-env.json"
        assert config.timeout_seconds == 45
        assert config.summary is False

    def test_env_report_format_and_token(self, monkeypatch):
        monkeypatch.setenv("MERGE_REPORT_FORMAT", "junit")
        monkeypatch.setenv("MERGE_AUTH_TOKEN", "secret")
        monkeypatch.setenv("MERGE_INDENT", "4")
        config = load_config()
        assert config.report_format == "junit"
        assert config.auth_token == "secret"
        assert config.indent == 4

    def test_non_positive_env_timeout(self, monkeypatch):
        monkeypatch.setenv("MERGE_TIMEOUT", "0")
        with pytest.raises(ConfigurationError, match="positive integer"):
            load_config()

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(str(tmp_path / "nope.yaml"))

    def test_invalid_yaml(self, tmp_path):
        config_file = tmp_path / "bad.yaml"
        config_file.write_text("sources: [a.json\n")
        with pytest.raises(ConfigurationError, match="Invalid YAML"):
            load_config(str(config_file))

    def test_non_mapping_yaml(self, tmp_path):
        config_file = tmp_path / "list.yaml"
        config_file.write_text("- a.json\n- b.json\n")
        with pytest.raises(ConfigurationError, match="mapping"):
            load_config(str(config_file))

    def test_unknown_key(self, tmp_path):
        config_file = tmp_path / "unknown.yaml"
        config_file.write_text("colour: blue\n")
        with pytest.raises(ConfigurationError, match="Invalid configuration"):
            load_config(str(config_file))


class TestValidateConfig:
    """Tests for validate_config."""

    def test_valid_defaults(self):
        assert validate_config(MergeConfig()) == []

    def test_invalid_report_format(self):
        errors = validate_config(MergeConfig(report_format="html"))
        assert any("report_format" in e for e in errors)

    @pytest.mark.parametrize("indent", [-1, "2", True])
    def test_invalid_indent(self, indent):
        errors = validate_config(MergeConfig(indent=indent))
        assert any("indent" in e for e in errors)

    def test_zero_indent_valid(self):
        assert validate_config(MergeConfig(indent=0)) == []

    def test_timeout_bounds(self):
        assert any("positive" in e for e in validate_config(MergeConfig(timeout_seconds=0)))
        assert any("too large" in e for e in validate_config(MergeConfig(timeout_seconds=301)))

    def test_sources_not_checked_here(self):
        assert validate_config(MergeConfig(sources=[], output=None)) == []
