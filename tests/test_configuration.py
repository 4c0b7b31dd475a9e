"""Configuration merging and validation."""

import pytest

from appshell.shared.core.configuration import (
    DEFAULT_URL,
    ConfigManager,
    ShellConfig,
    ValidationLevel,
    get_config,
)

ENV_KEYS = [
    "APPSHELL_DEFAULT_URL",
    "APPSHELL_EXPOSE_LEGACY_STORE",
    "APPSHELL_DEVTOOLS",
    "APPSHELL_STORAGE_PATH",
    "LOG_LEVEL",
    "APPSHELL_LOG_FILE",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for key in ENV_KEYS:
        monkeypatch.delenv(key, raising=False)


def test_defaults():
    config = get_config()

    assert config == ShellConfig()
    assert config.app.default_url == DEFAULT_URL
    assert config.storage.path is None


def test_yaml_file_overrides_defaults(tmp_path):
    path = tmp_path / "appshell.yaml"
    path.write_text("app:\n  default_url: https://file.example\n  devtools: true\n", encoding="utf-8")

    config = get_config(path)

    assert config.app.default_url == "https://file.example"
    assert config.app.devtools is True
    assert config.app.expose_legacy_store is False


def test_environment_overrides_file(tmp_path, monkeypatch):
    path = tmp_path / "appshell.yaml"
    path.write_text("app:\n  default_url: https://file.example\n", encoding="utf-8")
    monkeypatch.setenv("APPSHELL_DEFAULT_URL", "https://env.example")
    monkeypatch.setenv("APPSHELL_EXPOSE_LEGACY_STORE", "yes")
    monkeypatch.setenv("APPSHELL_STORAGE_PATH", "/tmp/state.json")

    config = get_config(path)

    assert config.app.default_url == "https://env.example"
    assert config.app.expose_legacy_store is True
    assert config.storage.path == "/tmp/state.json"


def test_invalid_config_strict_raises(tmp_path):
    path = tmp_path / "appshell.yaml"
    path.write_text("app:\n  unknown_key: 1\n", encoding="utf-8")

    with pytest.raises(ValueError):
        get_config(path)


def test_invalid_config_lenient_falls_back(tmp_path):
    path = tmp_path / "appshell.yaml"
    path.write_text("logging:\n  backup_count: -3\n", encoding="utf-8")

    config = ConfigManager(path).get_config(ValidationLevel.LENIENT)

    assert config == ShellConfig()


def test_unparseable_yaml_is_ignored(tmp_path):
    path = tmp_path / "appshell.yaml"
    path.write_text("app: [unclosed\n", encoding="utf-8")

    assert get_config(path) == ShellConfig()
