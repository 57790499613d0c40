"""Unit tests for config_template module."""

import os
from pathlib import Path
from unittest.mock import patch

import pytest

from src.app.runtime.config.config_data import ConfigData
from src.app.runtime.config.config_template import (
    apply_environment_overrides,
    load_config,
    load_templated_yaml,
    substitute_env_vars,
)


class TestSubstituteEnvVars:
    """Test cases for substitute_env_vars function."""

    def test_substitute_simple_env_var(self):
        with patch.dict(os.environ, {"TEST_VAR": "test_value"}):
            assert substitute_env_vars("${TEST_VAR}") == "test_value"

    def test_substitute_env_var_in_text(self):
        with patch.dict(os.environ, {"HOST": "localhost", "PORT": "8080"}):
            result = substitute_env_vars("http://${HOST}:${PORT}/api")
            assert result == "http://localhost:8080/api"

    def test_default_used_when_missing(self):
        with patch.dict(os.environ, {}, clear=True):
            assert substitute_env_vars("${MISSING_VAR:-fallback}") == "fallback"

    def test_default_ignored_when_set(self):
        with patch.dict(os.environ, {"PRESENT_VAR": "actual"}):
            assert substitute_env_vars("${PRESENT_VAR:-fallback}") == "actual"

    def test_empty_default(self):
        with patch.dict(os.environ, {}, clear=True):
            assert substitute_env_vars("${MISSING_VAR:-}") == ""

    def test_required_env_var_missing(self):
        with patch.dict(os.environ, {}, clear=True):
            with pytest.raises(
                ValueError, match="Required environment variable MISSING_VAR not set"
            ):
                substitute_env_vars("${MISSING_VAR}")

    def test_custom_error_message(self):
        with patch.dict(os.environ, {}, clear=True):
            with pytest.raises(
                ValueError,
                match="Required environment variable DB_URL: database is required",
            ):
                substitute_env_vars("${DB_URL:?database is required}")

    def test_text_without_placeholders_is_unchanged(self):
        assert substitute_env_vars("plain: value") == "plain: value"


class TestEnvironmentOverrides:
    def test_prefixed_variables_are_copied(self):
        with patch.dict(os.environ, {"TEST_DATABASE_URL": "sqlite://"}, clear=True):
            applied = apply_environment_overrides("test")

            assert applied == ["DATABASE_URL"]
            assert os.environ["DATABASE_URL"] == "sqlite://"

    def test_other_environments_are_ignored(self):
        with patch.dict(os.environ, {"PRODUCTION_DATABASE_URL": "x"}, clear=True):
            assert apply_environment_overrides("test") == []
            assert "DATABASE_URL" not in os.environ


class TestLoadTemplatedYaml:
    def test_load_with_substitution(self, tmp_path: Path):
        config_file = tmp_path / "config.yaml"
        config_file.write_text(
            "config:\n"
            "  database:\n"
            "    url: ${DATABASE_URL:-sqlite:///./default.db}\n"
            "  cache:\n"
            "    products_ttl_seconds: ${PRODUCTS_CACHE_TTL:-600}\n"
        )

        with patch.dict(
            os.environ, {"APP_ENVIRONMENT": "test", "PRODUCTS_CACHE_TTL": "30"}, clear=True
        ):
            config = load_templated_yaml(config_file)

        assert config.database.url == "sqlite:///./default.db"
        assert config.cache.products_ttl_seconds == 30
        assert config.cache.products_key == "products"

    def test_environment_prefixed_override_wins(self, tmp_path: Path):
        config_file = tmp_path / "config.yaml"
        config_file.write_text("config:\n  database:\n    url: ${DATABASE_URL:-sqlite://}\n")

        env = {
            "APP_ENVIRONMENT": "test",
            "DATABASE_URL": "sqlite:///./dev.db",
            "TEST_DATABASE_URL": "sqlite:///./test.db",
        }
        with patch.dict(os.environ, env, clear=True):
            config = load_templated_yaml(config_file)

        assert config.database.url == "sqlite:///./test.db"

    def test_empty_file_is_rejected(self, tmp_path: Path):
        config_file = tmp_path / "config.yaml"
        config_file.write_text("")

        with pytest.raises(ValueError, match="Failed to parse YAML"):
            load_templated_yaml(config_file)

    def test_invalid_yaml_is_rejected(self, tmp_path: Path):
        config_file = tmp_path / "config.yaml"
        config_file.write_text("config: [unclosed\n")

        with pytest.raises(ValueError, match="Error parsing YAML"):
            load_templated_yaml(config_file)

    def test_invalid_values_are_rejected(self, tmp_path: Path):
        config_file = tmp_path / "config.yaml"
        config_file.write_text("config:\n  cache:\n    backend: memcached\n")

        with pytest.raises(ValueError, match="Invalid configuration"):
            load_templated_yaml(config_file)

    def test_missing_file_raises(self, tmp_path: Path):
        with pytest.raises(FileNotFoundError):
            load_templated_yaml(tmp_path / "absent.yaml")


class TestLoadConfig:
    def test_missing_file_falls_back_to_defaults(self, tmp_path: Path):
        config = load_config(tmp_path / "absent.yaml")

        assert isinstance(config, ConfigData)
        assert config.cache.products_ttl_seconds == 600

    def test_repository_config_file_loads(self):
        unset = (
            "LOG_FILE",
            "REDIS_URL",
            "REDIS_ENABLED",
            "PRODUCTS_CACHE_TTL",
            "APP_ENVIRONMENT",
        )
        env = {k: v for k, v in os.environ.items() if k not in unset}

        with patch.dict(os.environ, env, clear=True):
            config = load_config(Path(__file__).parents[5] / "config.yaml")

        assert config.logging.file == ""
        assert config.redis.url == ""
        assert config.redis.enabled is False
        assert config.cache.products_key == "products"
        assert config.cache.products_ttl_seconds == 600
