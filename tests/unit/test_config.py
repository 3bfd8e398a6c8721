"""Unit tests for configuration loading."""

import pytest

from pgrec.core.config import (
    AppConfig,
    RecConfig,
    get_example_config,
    init_config,
)
from pgrec.core.exceptions import ConfigurationError
from pgrec.core.validation import GIB


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep host environment overrides out of these tests."""
    monkeypatch.delenv("PGREC_TOTAL_MEMORY", raising=False)
    monkeypatch.delenv("PGREC_CORE_COUNT", raising=False)


class TestRecConfig:
    """Tests for RecConfig loading."""

    def test_defaults(self):
        config = RecConfig()
        assert config.output.format == "alter-system"
        assert config.output.include_reload is False
        assert config.hardware.total_memory is None
        assert config.hardware.total_memory_bytes is None

    def test_load_yaml(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text(
            "hardware:\n"
            "  total_memory: 64GB\n"
            "  core_count: 16\n"
            "output:\n"
            "  format: conf\n"
        )
        config = RecConfig.load(path)
        assert config.hardware.total_memory_bytes == 64 * GIB
        assert config.hardware.core_count == 16
        assert config.output.format == "conf"

    def test_empty_file_gives_defaults(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("")
        assert RecConfig.load(path) == RecConfig()

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigurationError) as exc:
            RecConfig.load(tmp_path / "missing.yaml")
        assert "pgrec config init" in exc.value.hint

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("hardware: [unclosed\n")
        with pytest.raises(ConfigurationError) as exc:
            RecConfig.load(path)
        assert "Invalid YAML" in str(exc.value)

    def test_non_mapping(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("- a\n- b\n")
        with pytest.raises(ConfigurationError):
            RecConfig.load(path)

    @pytest.mark.parametrize("body", [
        "output:\n  format: yaml\n",
        "hardware:\n  total_memory: lots\n",
        "hardware:\n  total_memory: 0GB\n",
        "hardware:\n  core_count: 0\n",
    ])
    def test_invalid_values(self, tmp_path, body):
        path = tmp_path / "config.yaml"
        path.write_text(body)
        with pytest.raises(ConfigurationError) as exc:
            RecConfig.load(path)
        assert exc.value.exit_code == 2

    def test_load_or_default_missing(self, tmp_path):
        assert RecConfig.load_or_default(tmp_path / "missing.yaml") == RecConfig()

    def test_to_yaml_round_trip(self, tmp_path):
        config = RecConfig(output={"format": "conf", "include_reload": True})
        path = tmp_path / "config.yaml"
        path.write_text(config.to_yaml())
        assert RecConfig.load(path) == config


class TestAppConfig:
    """Tests for AppConfig override precedence."""

    def test_config_file_values(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("hardware:\n  total_memory: 8GB\n  core_count: 4\n")
        app_config = AppConfig(config_path=path)
        assert app_config.total_memory_bytes == 8 * GIB
        assert app_config.core_count == 4

    def test_env_overrides_file(self, tmp_path, monkeypatch):
        path = tmp_path / "config.yaml"
        path.write_text("hardware:\n  total_memory: 8GB\n  core_count: 4\n")
        monkeypatch.setenv("PGREC_TOTAL_MEMORY", "32GB")
        monkeypatch.setenv("PGREC_CORE_COUNT", "12")

        app_config = AppConfig(config_path=path)
        assert app_config.total_memory_bytes == 32 * GIB
        assert app_config.core_count == 12

    def test_no_overrides(self, tmp_path):
        app_config = AppConfig(config_path=tmp_path / "missing.yaml")
        assert app_config.total_memory_bytes is None
        assert app_config.core_count is None

    def test_invalid_env(self, tmp_path, monkeypatch):
        monkeypatch.setenv("PGREC_CORE_COUNT", "many")
        app_config = AppConfig(config_path=tmp_path / "missing.yaml")
        with pytest.raises(ConfigurationError) as exc:
            app_config.core_count
        assert "PGREC_CORE_COUNT" in str(exc.value)


class TestInitConfig:
    """Tests for config file initialization."""

    def test_creates_file(self, tmp_path):
        path = tmp_path / "nested" / "config.yaml"
        init_config(path)
        assert path.read_text() == get_example_config()
        # The example must itself be a valid config
        assert RecConfig.load(path) == RecConfig()

    def test_refuses_overwrite(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("output: {}\n")
        with pytest.raises(ConfigurationError) as exc:
            init_config(path)
        assert "--force" in exc.value.hint

    def test_force_overwrites(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("output: {}\n")
        init_config(path, force=True)
        assert path.read_text() == get_example_config()
