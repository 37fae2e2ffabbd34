"""Tests for the CLI entry point."""

from __future__ import annotations

import base64
import io
import json
from pathlib import Path
from types import SimpleNamespace

import pytest

from slot_store.__main__ import main as cli_main
from slot_store.errors import ResolutionError


@pytest.fixture()
def config_file(tmp_path: Path) -> Path:
    path = tmp_path / "store.json"
    path.write_text(
        json.dumps(
            {
                "save_root": str(tmp_path / "saves"),
                "config_root": str(tmp_path / "config"),
                "durable_writes": False,
            }
        ),
        encoding="utf-8",
    )
    return path


def _run(config_file: Path, capsys, *argv: str) -> tuple[int, str]:
    code = cli_main(["--config", str(config_file), *argv])
    return code, capsys.readouterr().out


def test_cli_requires_subcommand():
    with pytest.raises(SystemExit):
        cli_main([])


def test_cli_write_read_list_delete(config_file, tmp_path, capsys):
    payload = tmp_path / "payload.json"
    payload.write_text('{"callsign": "Rook"}', encoding="utf-8")

    code, out = _run(config_file, capsys, "write", "autosave", "--file", str(payload))
    assert code == 0
    assert json.loads(out) == {"ok": True, "value": None}

    code, out = _run(config_file, capsys, "read", "autosave")
    assert json.loads(out)["value"] == '{"callsign": "Rook"}'

    code, out = _run(config_file, capsys, "read", "autosave", "--raw")
    assert out == '{"callsign": "Rook"}'

    code, out = _run(config_file, capsys, "list")
    assert [entry["slot"] for entry in json.loads(out)["value"]] == ["autosave"]

    code, out = _run(config_file, capsys, "exists", "autosave")
    assert json.loads(out)["value"] is True

    code, out = _run(config_file, capsys, "info", "autosave")
    assert json.loads(out)["value"]["slot"] == "autosave"

    code, out = _run(config_file, capsys, "delete", "autosave")
    assert code == 0
    assert (tmp_path / "saves").is_dir()
    assert list((tmp_path / "saves").iterdir()) == []


def test_cli_write_reads_stdin(monkeypatch, config_file, capsys):
    monkeypatch.setattr("sys.stdin", SimpleNamespace(buffer=io.BytesIO(b"from stdin")))

    code, _ = _run(config_file, capsys, "write", "piped")
    assert code == 0

    code, out = _run(config_file, capsys, "read", "piped", "--raw")
    assert out == "from stdin"


def test_cli_reports_not_found(config_file, capsys):
    code, out = _run(config_file, capsys, "read", "missing")

    assert code == 1
    assert json.loads(out)["error"]["kind"] == "not_found"


def test_cli_rejects_unsafe_identifier(config_file, tmp_path, capsys):
    payload = tmp_path / "payload.json"
    payload.write_text("{}", encoding="utf-8")

    code, out = _run(config_file, capsys, "write", "../escape", "--file", str(payload))

    assert code == 1
    assert json.loads(out)["error"]["kind"] == "invalid_identifier"
    assert not (tmp_path / "escape.json").exists()


def test_cli_missing_payload_file(config_file, tmp_path, capsys):
    code, out = _run(config_file, capsys, "write", "slot", "--file", str(tmp_path / "nope"))

    assert code == 1
    assert json.loads(out)["error"]["kind"] == "io"


def test_cli_settings_commands(config_file, tmp_path, capsys):
    code, out = _run(config_file, capsys, "settings-read")
    assert code == 1
    assert json.loads(out)["error"]["kind"] == "not_found"

    payload = tmp_path / "settings-in.json"
    payload.write_text('{"largeText": true}', encoding="utf-8")
    code, _ = _run(config_file, capsys, "settings-write", "--file", str(payload))
    assert code == 0

    code, out = _run(config_file, capsys, "settings-read", "--raw")
    assert out == '{"largeText": true}'
    assert (tmp_path / "config" / "settings.json").exists()


def test_cli_paths(config_file, tmp_path, capsys):
    code, out = _run(config_file, capsys, "paths")

    assert code == 0
    assert json.loads(out) == {
        "save_root": str(tmp_path / "saves"),
        "config_root": str(tmp_path / "config"),
        "settings_path": str(tmp_path / "config" / "settings.json"),
    }


def test_cli_reports_resolution_failure(monkeypatch, capsys):
    def fail(config):
        raise ResolutionError("Could not determine the user profile directory")

    monkeypatch.setattr("slot_store.__main__.StorageCommands.from_config", fail)

    code = cli_main(["list"])

    assert code == 1
    assert json.loads(capsys.readouterr().out)["error"]["kind"] == "resolution"


def test_cli_reports_invalid_config(tmp_path, capsys):
    path = tmp_path / "bad.json"
    path.write_text(json.dumps({"log_level": "chatty"}), encoding="utf-8")

    code = cli_main(["--config", str(path), "list"])

    assert code == 1
    assert json.loads(capsys.readouterr().out)["error"]["kind"] == "config"


def test_cli_binary_payload_round_trip(config_file, tmp_path, capsys):
    payload = tmp_path / "payload.bin"
    payload.write_bytes(b"\xff\x00binary\r\n")

    assert cli_main(["--config", str(config_file), "write", "bin", "--file", str(payload)]) == 0
    capsys.readouterr()

    assert cli_main(["--config", str(config_file), "read", "bin"]) == 0
    result = json.loads(capsys.readouterr().out)
    assert result["encoding"] == "base64"
    assert base64.b64decode(result["value"]) == b"\xff\x00binary\r\n"


def test_cli_raw_read_writes_exact_bytes(config_file, tmp_path, capsysbinary):
    payload = tmp_path / "payload.bin"
    payload.write_bytes(b"\xff\x00line\r\nnext\n")
    cli_main(["--config", str(config_file), "write", "bin", "--file", str(payload)])
    capsysbinary.readouterr()

    assert cli_main(["--config", str(config_file), "read", "bin", "--raw"]) == 0
    assert capsysbinary.readouterr().out == b"\xff\x00line\r\nnext\n"
