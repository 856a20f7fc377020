"""Tests for configuration loading and validation."""

import warnings
from pathlib import Path

import pytest

from salary_ingest.config import (
    DEFAULT_SOURCES,
    AppConfig,
    ConfigurationError,
    FieldMapping,
    FieldType,
    SourceConfig,
    build_app_config,
    label_pattern,
    load_config,
    validate_config_file,
)
from salary_ingest.config.duration import (
    DurationParseError,
    format_seconds,
    parse_duration,
    validate_duration_range,
)
from salary_ingest.config.environment import load_environment_config
from salary_ingest.config.sources import BESALARY
from salary_ingest.config.validators import check_for_warnings

FIXTURES_DIR = Path(__file__).parent / "fixtures"


class TestConfigurationLoading:
    """Test configuration loading from YAML files."""

    def test_load_valid_config(self, mock_env_vars):
        with warnings.catch_warnings():
            warnings.simplefilter("ignore")
            app_config, env_config = load_config(FIXTURES_DIR / "valid_config.yaml")

        assert app_config.scan_interval_seconds == 12 * 3600
        assert app_config.run_budget_seconds == 600
        assert app_config.normalization.fuzzy_threshold == 0.85
        assert app_config.normalization.min_substring_length == 4
        assert app_config.logging.level == "DEBUG"
        assert app_config.logging.format == "json"
        assert app_config.advanced.fetch_comments is False
        assert app_config.advanced.max_posts_per_source == 25
        assert env_config.environment == "test"

        names = [source.name for source in app_config.get_sources()]
        assert names == ["BESalary", "NLSalaris"]

        source = app_config.get_source("nlsalaris")
        assert source.country == "Netherlands"
        assert source.required_flair == ""
        assert list(source.field_mappings) == ["age", "job_title", "gross_salary", "work_city"]
        assert source.field_mappings["gross_salary"].type is FieldType.CURRENCY
        assert source.field_mappings["work_city"].type is FieldType.TEXT
        assert source.required_fields == ["job_title", "gross_salary"]

    def test_load_minimal_config(self, mock_env_vars):
        app_config, _ = load_config(FIXTURES_DIR / "minimal_config.yaml")

        assert app_config.sources == []
        assert app_config.get_enabled_sources() == list(DEFAULT_SOURCES)
        assert app_config.scan_interval_seconds == 86400
        assert app_config.run_budget_seconds == 300
        assert app_config.schedule is None

    def test_load_cron_config(self, mock_env_vars):
        app_config, _ = load_config(FIXTURES_DIR / "cron_config.yaml")
        assert app_config.schedule == "30 6 * * *"
        assert app_config.run_budget_seconds == 120

    def test_no_config_file_uses_defaults(self, tmp_path, monkeypatch, mock_env_vars):
        monkeypatch.chdir(tmp_path)
        app_config, _ = load_config()
        assert [s.name for s in app_config.get_sources()] == ["BESalary"]

    def test_fallback_to_config_directory(self, tmp_path, monkeypatch, mock_env_vars):
        (tmp_path / "config").mkdir()
        (tmp_path / "config" / "config.yaml").write_text('scan_interval: "6h"\n')
        monkeypatch.chdir(tmp_path)

        app_config, _ = load_config()
        assert app_config.scan_interval_seconds == 6 * 3600

    def test_config_file_not_found(self, mock_env_vars):
        with pytest.raises(ConfigurationError) as exc_info:
            load_config(Path("nonexistent.yaml"))
        assert "not found" in str(exc_info.value).lower()

    def test_invalid_yaml_syntax(self, tmp_path, mock_env_vars):
        invalid_yaml = tmp_path / "invalid.yaml"
        invalid_yaml.write_text("sources:\n  - name: 'test\n    invalid yaml")

        with pytest.raises(ConfigurationError) as exc_info:
            load_config(invalid_yaml)
        assert "yaml" in str(exc_info.value).lower()

    def test_top_level_must_be_mapping(self, tmp_path, mock_env_vars):
        path = tmp_path / "list.yaml"
        path.write_text("- a\n- b\n")
        with pytest.raises(ConfigurationError, match="mapping"):
            load_config(path)

    def test_empty_file_uses_defaults(self, tmp_path, mock_env_vars):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        app_config, _ = load_config(path)
        assert app_config.get_source("BESalary") is BESALARY


class TestSourceValidation:
    def test_invalid_pattern_fails_fast(self, mock_env_vars):
        with pytest.raises(ConfigurationError) as exc_info:
            load_config(FIXTURES_DIR / "invalid_pattern_config.yaml")

        error = exc_info.value
        assert any("does not compile" in message for message in error.errors)
        assert error.suggestions

    def test_pattern_without_capture_group(self, mock_env_vars):
        with pytest.raises(ConfigurationError) as exc_info:
            load_config(FIXTURES_DIR / "no_group_pattern_config.yaml")
        assert any("exactly one capture group" in message for message in exc_info.value.errors)

    def test_pattern_with_two_groups(self):
        with pytest.raises(ValueError):
            FieldMapping(pattern=r"^(Age): (\d+)$")

    def test_duplicate_source_names(self, mock_env_vars):
        with pytest.raises(ConfigurationError) as exc_info:
            load_config(FIXTURES_DIR / "duplicate_sources_config.yaml")
        assert "Duplicate source" in str(exc_info.value)

    def test_source_without_fields(self):
        with pytest.raises(ConfigurationError):
            build_app_config({"sources": [{"name": "Empty", "country": "Belgium", "field_mappings": {}}]})

    def test_no_enabled_source(self):
        with pytest.raises(ConfigurationError, match="At least one source"):
            build_app_config({"include_default_sources": False})

    def test_configured_source_overrides_default(self):
        app_config = build_app_config(
            {
                "sources": [
                    {
                        "name": "besalary",
                        "country": "Belgium",
                        "enabled": False,
                        "field_mappings": {"age": label_pattern("Age:")},
                    },
                    {
                        "name": "Other",
                        "country": "Netherlands",
                        "field_mappings": {"age": label_pattern("Leeftijd:")},
                    },
                ]
            }
        )
        assert [s.name for s in app_config.get_sources()] == ["besalary", "Other"]
        assert [s.name for s in app_config.get_enabled_sources()] == ["Other"]

    def test_source_normalizes_fields(self):
        source = SourceConfig(
            name="  Test  ",
            country="Belgium",
            currency="eur",
            platform="Reddit",
            field_mappings={"age": label_pattern("Age:")},
        )
        assert source.name == "Test"
        assert source.currency == "EUR"
        assert source.platform == "reddit"

    def test_compiled_regex_is_cached(self):
        mapping = FieldMapping(pattern=label_pattern("Age:"))
        assert mapping.regex is mapping.regex
        assert mapping.regex.search("- AGE: 30").group(1) == "30"

    def test_invalid_schedule(self):
        with pytest.raises(ConfigurationError, match="crontab"):
            build_app_config({"schedule": "every day"})

    def test_scan_interval_bounds(self):
        with pytest.raises(ConfigurationError, match="too short"):
            build_app_config({"scan_interval": "1m"})
        with pytest.raises(ConfigurationError, match="too long"):
            build_app_config({"scan_interval": "8d"})

    def test_run_budget_bounds(self):
        with pytest.raises(ConfigurationError):
            build_app_config({"run_budget": "5s"})

    def test_threshold_bounds(self):
        with pytest.raises(ConfigurationError):
            build_app_config({"normalization": {"fuzzy_threshold": 1.5}})


class TestDefaultSources:
    def test_besalary_layout(self):
        assert BESALARY.country == "Belgium"
        assert BESALARY.currency == "EUR"
        assert len(BESALARY.section_titles) == 6
        assert BESALARY.required_fields == ["job_title", "gross_salary", "work_city"]

    def test_label_pattern_skips_bullets(self):
        mapping = FieldMapping(pattern=label_pattern("Age:"))
        assert mapping.regex.search("  * Age:   29").group(1) == "29"
        assert mapping.regex.search("Average: 29") is None


class TestWarnings:
    def test_suspicious_settings(self):
        messages = check_for_warnings(
            {
                "sources": [
                    {
                        "name": "Quiet",
                        "enabled": False,
                        "required_flair": "",
                        "field_mappings": {"age": "^Age: (.+)$"},
                    }
                ],
                "normalization": {"fuzzy_threshold": 0.5, "min_substring_length": 2},
            }
        )
        assert any("disabled" in m for m in messages)
        assert any("required_flair" in m for m in messages)
        assert any("section_titles" in m for m in messages)
        assert any("no required fields" in m for m in messages)
        assert any("fuzzy_threshold" in m for m in messages)
        assert any("min_substring_length" in m for m in messages)

    def test_no_warnings_for_defaults(self):
        assert check_for_warnings({}) == []

    def test_warnings_emitted_on_load(self, tmp_path, mock_env_vars):
        path = tmp_path / "config.yaml"
        path.write_text("normalization:\n  fuzzy_threshold: 0.5\n")
        with pytest.warns(UserWarning, match="fuzzy_threshold"):
            load_config(path)


class TestValidateConfigFile:
    def test_valid_file(self, capsys):
        assert validate_config_file(FIXTURES_DIR / "cron_config.yaml") is True
        assert "is valid" in capsys.readouterr().out

    def test_invalid_file(self, capsys):
        assert validate_config_file(FIXTURES_DIR / "invalid_pattern_config.yaml") is False
        assert "failed" in capsys.readouterr().out


class TestEnvironment:
    def test_defaults(self, mock_env_vars, monkeypatch):
        monkeypatch.delenv("ENVIRONMENT")
        env = load_environment_config()
        assert env.environment == "local"
        assert env.log_level is None
        assert env.user_agent is None

    def test_overrides(self, monkeypatch):
        monkeypatch.setenv("ENVIRONMENT", "production")
        monkeypatch.setenv("LOG_LEVEL", "debug")
        monkeypatch.setenv("USER_AGENT", "my-bot/2.0")
        env = load_environment_config()
        assert env.environment == "production"
        assert env.log_level == "DEBUG"
        assert env.user_agent == "my-bot/2.0"

    def test_invalid_log_level(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "LOUD")
        with pytest.raises(ConfigurationError, match="Invalid LOG_LEVEL"):
            load_environment_config()


class TestDuration:
    @pytest.mark.parametrize(
        "text,seconds",
        [
            ("15m", 900),
            ("1h30m", 5400),
            ("1d", 86400),
            ("30s", 30),
            ("PT15M", 900),
            ("P1D", 86400),
            ("P1DT12H", 129600),
            ("pt5m", 300),
        ],
    )
    def test_parse(self, text, seconds):
        assert parse_duration(text) == seconds

    @pytest.mark.parametrize("text", ["", "   ", "15x", "abc", "1h and 5m", "P1Y", "0m"])
    def test_parse_errors(self, text):
        with pytest.raises(DurationParseError):
            parse_duration(text)

    def test_range(self):
        validate_duration_range(600, min_seconds=300, max_seconds=900)
        with pytest.raises(DurationParseError, match="Budget too short"):
            validate_duration_range(5, min_seconds=10, max_seconds=60, label="Budget")

    def test_format_seconds(self):
        assert format_seconds(5400) == "1 hour"
        assert format_seconds(7200) == "2 hours"
        assert format_seconds(59) == "59 seconds"
        assert format_seconds(1) == "1 second"
