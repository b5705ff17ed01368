"""Tests for validator configuration."""

from pathlib import Path

import pytest

from qpool_lint.core.config import (
    CONFIG_ENV_VAR,
    DEFAULT_MAX_BYTES,
    MAX_BYTES_ENV_VAR,
    ValidatorConfig,
    load_config,
    resolve_max_bytes,
)
from qpool_lint.core.parser import ConfigError


class TestLoadConfig:
    """Tests for load_config function."""

    def test_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test defaults apply without a file."""
        monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
        config = load_config()
        assert config.max_field_length == 1000
        assert config.max_bytes is None

    def test_load_yaml(self, tmp_path: Path) -> None:
        path = tmp_path / "qpool.yaml"
        path.write_text("max_field_length: 250\nmax_bytes: 2048\n", encoding="utf-8")
        config = load_config(path)
        assert config == ValidatorConfig(max_field_length=250, max_bytes=2048)

    def test_empty_yaml(self, tmp_path: Path) -> None:
        path = tmp_path / "qpool.yaml"
        path.write_text("", encoding="utf-8")
        assert load_config(path) == ValidatorConfig()

    def test_env_var(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test the config path can come from the environment."""
        path = tmp_path / "qpool.yaml"
        path.write_text("max_field_length: 10\n", encoding="utf-8")
        monkeypatch.setenv(CONFIG_ENV_VAR, str(path))
        assert load_config().max_field_length == 10

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError, match="not found"):
            load_config(tmp_path / "nope.yaml")

    def test_invalid_yaml(self, tmp_path: Path) -> None:
        path = tmp_path / "qpool.yaml"
        path.write_text("max_field_length: [1, 2\n", encoding="utf-8")
        with pytest.raises(ConfigError, match="Invalid YAML"):
            load_config(path)

    def test_not_a_mapping(self, tmp_path: Path) -> None:
        path = tmp_path / "qpool.yaml"
        path.write_text("- 1\n- 2\n", encoding="utf-8")
        with pytest.raises(ConfigError, match="mapping"):
            load_config(path)

    def test_invalid_value(self, tmp_path: Path) -> None:
        path = tmp_path / "qpool.yaml"
        path.write_text("max_field_length: 0\n", encoding="utf-8")
        with pytest.raises(ConfigError, match="Invalid config"):
            load_config(path)

    def test_unknown_key(self, tmp_path: Path) -> None:
        path = tmp_path / "qpool.yaml"
        path.write_text("max_len: 5\n", encoding="utf-8")
        with pytest.raises(ConfigError):
            load_config(path)


class TestResolveMaxBytes:
    """Tests for resolve_max_bytes function."""

    def test_explicit_value(self) -> None:
        assert resolve_max_bytes(500) == 500

    def test_zero_is_unlimited(self) -> None:
        assert resolve_max_bytes(0) is None

    def test_config_value(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv(MAX_BYTES_ENV_VAR, "99")
        assert resolve_max_bytes(None, ValidatorConfig(max_bytes=1234)) == 1234

    def test_env_value(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv(MAX_BYTES_ENV_VAR, "99")
        assert resolve_max_bytes(None) == 99

    def test_env_not_integer(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv(MAX_BYTES_ENV_VAR, "lots")
        with pytest.raises(ConfigError):
            resolve_max_bytes(None)

    def test_default(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv(MAX_BYTES_ENV_VAR, raising=False)
        assert resolve_max_bytes(None) == DEFAULT_MAX_BYTES
