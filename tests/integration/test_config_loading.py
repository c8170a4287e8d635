"""Integration tests for configuration loading with layered precedence.

Tests the real load_config() function with actual YAML files, environment
variables, and CLI overrides to verify precedence: defaults < YAML < ENV < CLI.
"""

from __future__ import annotations

from pathlib import Path

import pytest
import yaml
from pydantic import ValidationError

from tubestream.infrastructure.config.load import (
    _FLAT_KEYS,
    _TOP_LEVEL_KEYS,
    load_config,
)
from tubestream.infrastructure.config.schema import EnvOverrides
from tubestream.infrastructure.logging.setup import build_logging_config

pytestmark = pytest.mark.integration


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (
        "TUBESTREAM_LOG_LEVEL",
        "TUBESTREAM_ENVIRONMENT",
        "TUBESTREAM_INVIDIOUS_URL",
        "TUBESTREAM_HTTP_TIMEOUT_SECONDS",
        "TUBESTREAM_INVIDIOUS_LOCAL",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture()
def yaml_config(tmp_path: Path) -> Path:
    """Write a minimal YAML config and return its path."""
    config = {
        "app_name": "tubestream-test",
        "environment": "test",
        "http": {"timeout_seconds": 5.0, "user_agent": "TestAgent/1.0"},
        "logging": {"level": "DEBUG", "format": "console"},
        "resolver": {"invidious_url": "https://inv.example/", "local": True},
    }
    path = tmp_path / "config.yaml"
    path.write_text(yaml.dump(config), encoding="utf-8")
    return path


class TestDefaultsOnly:
    def test_defaults_produce_valid_config(self) -> None:
        config = load_config()
        assert config.app_name == "tubestream"
        assert config.environment == "dev"
        assert config.source_name == "YouTube"
        assert config.http_timeout_seconds == 15.0
        assert config.log_level == "INFO"
        assert config.log_format == "console"
        assert config.resolver.local is False

    def test_prod_derives_json_logs(self) -> None:
        config = load_config(cli_overrides={"environment": "prod"})
        assert config.log_format == "json"


class TestSectionedDump:
    def test_dump_reloads_identically(self, tmp_path: Path, yaml_config: Path) -> None:
        original = load_config(config_path=yaml_config)
        dumped = original.to_sectioned_dict()
        assert dumped["resolver"] == {
            "invidious_url": "https://inv.example",
            "local": True,
        }

        path = tmp_path / "dumped.yaml"
        path.write_text(yaml.dump(dumped), encoding="utf-8")
        assert load_config(config_path=path) == original


class TestYamlOverrides:
    def test_yaml_overrides_defaults(self, yaml_config: Path) -> None:
        config = load_config(config_path=yaml_config)
        assert config.app_name == "tubestream-test"
        assert config.http_timeout_seconds == 5.0
        assert config.http_user_agent == "TestAgent/1.0"
        assert config.log_level == "DEBUG"
        assert config.resolver.invidious_url == "https://inv.example"
        assert config.resolver.local is True

    def test_yaml_file_not_found_raises(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            load_config(config_path=tmp_path / "nonexistent.yaml")

    def test_yaml_must_be_mapping(self, tmp_path: Path) -> None:
        path = tmp_path / "list.yaml"
        path.write_text("- a\n- b\n", encoding="utf-8")
        with pytest.raises(ValueError, match="mapping"):
            load_config(config_path=path)

    def test_invalid_resolver_url_rejected(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.yaml"
        path.write_text(
            yaml.dump({"resolver": {"invidious_url": "ftp://nope"}}), encoding="utf-8"
        )
        with pytest.raises(ValidationError):
            load_config(config_path=path)


class TestEnvAndCliPrecedence:
    def test_env_overrides_yaml(
        self, yaml_config: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("TUBESTREAM_LOG_LEVEL", "WARNING")
        monkeypatch.setenv("TUBESTREAM_INVIDIOUS_URL", "https://env.example")
        config = load_config(config_path=yaml_config)
        assert config.log_level == "WARNING"
        assert config.resolver.invidious_url == "https://env.example"

    def test_cli_overrides_env(
        self, yaml_config: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("TUBESTREAM_LOG_LEVEL", "WARNING")
        config = load_config(
            config_path=yaml_config, cli_overrides={"log_level": "ERROR"}
        )
        assert config.log_level == "ERROR"

    def test_dotenv_file(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        # setenv+delenv registers removal of the value load_dotenv writes
        monkeypatch.setenv("TUBESTREAM_HTTP_TIMEOUT_SECONDS", "1")
        monkeypatch.delenv("TUBESTREAM_HTTP_TIMEOUT_SECONDS")
        dotenv = tmp_path / ".env"
        dotenv.write_text("TUBESTREAM_HTTP_TIMEOUT_SECONDS=42\n", encoding="utf-8")
        config = load_config(dotenv_path=dotenv)
        assert config.http_timeout_seconds == 42.0

    def test_env_invidious_local_maps_to_resolver_section(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("TUBESTREAM_INVIDIOUS_LOCAL", "true")
        assert load_config().resolver.local is True

    def test_every_env_field_reaches_the_config(self) -> None:
        mapped = set(_FLAT_KEYS) | set(_TOP_LEVEL_KEYS)
        assert set(EnvOverrides.model_fields) == mapped

    def test_missing_dotenv_raises(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            load_config(dotenv_path=tmp_path / ".env")

    def test_negative_timeout_rejected(self) -> None:
        with pytest.raises(ValidationError):
            load_config(cli_overrides={"http_timeout_seconds": 0})


class TestLoggingConfig:
    def test_root_level_follows_config(self) -> None:
        cfg = build_logging_config(load_config(cli_overrides={"log_level": "ERROR"}))
        assert cfg["root"]["level"] == "ERROR"
        assert cfg["handlers"]["default"]["formatter"] == "structlog"
        assert cfg["loggers"]["httpx"]["level"] == "WARNING"

    def test_debug_unmutes_transport_loggers(self) -> None:
        cfg = build_logging_config(load_config(cli_overrides={"log_level": "DEBUG"}))
        assert cfg["loggers"]["httpx"]["level"] == "DEBUG"
