"""Tests for runtime settings."""

import pytest

from ptce.infrastructure.config import PTCESettings, load_config_file, load_settings

ENV_VARS = [
    "OPEN_AI_API_KEY",
    "OPENAI_API_KEY",
    "PTCE_OPENAI_MODEL",
    "PTCE_EVALUATION_TIMEOUT",
    "PTCE_VARIANCE_THRESHOLD",
    "PTCE_FALLBACK_CONFIDENCE",
    "DATABASE_URL",
    "LOG_LEVEL",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


class TestPTCESettings:
    """Test cases for PTCESettings."""

    def test_defaults(self):
        settings = PTCESettings.from_env()

        assert settings.openai_api_key == ""
        assert not settings.has_openai_credentials
        assert settings.variance_threshold == 2.0
        assert settings.evaluation_timeout == 30.0
        assert settings.fallback_confidence == "fixed"

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("OPEN_AI_API_KEY", "sk-primary")
        monkeypatch.setenv("OPENAI_API_KEY", "sk-secondary")
        monkeypatch.setenv("PTCE_VARIANCE_THRESHOLD", "1.5")
        monkeypatch.setenv("PTCE_FALLBACK_CONFIDENCE", "RANDOM")
        monkeypatch.setenv("LOG_LEVEL", "debug")

        settings = PTCESettings.from_env()

        assert settings.openai_api_key == "sk-primary"
        assert settings.variance_threshold == 1.5
        assert settings.fallback_confidence == "random"
        assert settings.log_level == "DEBUG"

    def test_secondary_key_name(self, monkeypatch):
        monkeypatch.setenv("OPENAI_API_KEY", "sk-secondary")

        assert PTCESettings.from_env().openai_api_key == "sk-secondary"

    @pytest.mark.parametrize(
        "overrides",
        [
            {"fallback_confidence": "sometimes"},
            {"evaluation_timeout": 0},
            {"variance_threshold": -0.5},
        ],
    )
    def test_invalid_values(self, overrides):
        with pytest.raises(ValueError):
            PTCESettings(**overrides)

    def test_merged_with_aliases(self):
        settings = PTCESettings().merged_with({"model": "gpt-4o", "timeout": 12})

        assert settings.openai_model == "gpt-4o"
        assert settings.evaluation_timeout == 12

    def test_merged_with_unknown_key(self):
        with pytest.raises(ValueError, match="Unknown setting 'colour'"):
            PTCESettings().merged_with({"colour": "blue"})

    def test_to_dict_masks_key(self):
        assert PTCESettings(openai_api_key="sk-secret").to_dict()["openai_api_key"] == "***"


class TestConfigFile:
    """Test cases for YAML settings files."""

    def test_nested_sections_are_flattened(self, tmp_path, monkeypatch):
        monkeypatch.setenv("TEST_PTCE_KEY", "sk-from-env")
        config = tmp_path / "ptce.yaml"
        config.write_text(
            "ptce:\n"
            "  openai:\n"
            "    api_key: ${TEST_PTCE_KEY}\n"
            "    model: gpt-4o\n"
            "  variance_threshold: 3.0\n"
            "  fallback_confidence: random\n"
        )

        values = load_config_file(str(config))

        assert values == {
            "openai_api_key": "sk-from-env",
            "openai_model": "gpt-4o",
            "variance_threshold": 3.0,
            "fallback_confidence": "random",
        }

    def test_load_settings_overlays_file(self, tmp_path):
        config = tmp_path / "ptce.yaml"
        config.write_text("variance_threshold: 0.5\ntimeout: 5\n")

        settings = load_settings(str(config))

        assert settings.variance_threshold == 0.5
        assert settings.evaluation_timeout == 5
        assert settings.openai_model == "gpt-4o-mini"

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config_file(str(tmp_path / "absent.yaml"))

    def test_non_mapping_file(self, tmp_path):
        config = tmp_path / "list.yaml"
        config.write_text("- a\n- b\n")

        with pytest.raises(ValueError):
            load_config_file(str(config))
