"""Command-line entry point."""

import json
import logging

import pytest

from appshell import main as cli


@pytest.fixture(autouse=True)
def isolated(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("APPSHELL_LOG_FILE", str(tmp_path / "logs" / "appshell.log"))
    for key in ("APPSHELL_DEFAULT_URL", "APPSHELL_STORAGE_PATH", "APPSHELL_DEVTOOLS", "LOG_LEVEL"):
        monkeypatch.delenv(key, raising=False)
    yield
    root = logging.getLogger()
    for handler in list(root.handlers):
        handler.close()
        root.removeHandler(handler)


def test_opens_room_url(capsys):
    assert cli.main(["https://example.com/room1"]) == 0

    out = capsys.readouterr().out
    assert "url:  https://example.com/room1" in out
    assert "room: room1" in out
    assert "view: RoomView" in out


def test_uses_default_url_and_welcome_view(capsys):
    assert cli.main(["--default-url", "https://custom.example"]) == 0

    out = capsys.readouterr().out
    assert "url:  https://custom.example" in out
    assert "view: WelcomeView" in out


def test_location_wins_over_default(capsys):
    cli.main(["--default-url", "https://custom.example", "--location", "https://here.example/lobby"])

    assert "url:  https://here.example/lobby" in capsys.readouterr().out


def test_persisted_server_url_from_storage_file(tmp_path, capsys):
    storage = tmp_path / "state.json"
    storage.write_text(
        json.dumps({"appshell-state/features/base/settings": {"server_url": "https://saved.example"}}),
        encoding="utf-8",
    )

    cli.main(["--storage", str(storage)])

    assert "url:  https://saved.example" in capsys.readouterr().out


def test_log_file_is_written(tmp_path):
    cli.main(["https://example.com/room1"])

    for handler in logging.getLogger().handlers:
        handler.flush()
    assert "App activated" in (tmp_path / "logs" / "appshell.log").read_text(encoding="utf-8")
