"""Tests for the settings store helpers."""

from __future__ import annotations

import pytest

from slot_store.errors import NotFoundError, StorageIOError
from slot_store.io import atomic as atomic_module
from slot_store.saves import SlotStore
from slot_store.settings_store import SettingsStore


def test_settings_store_round_trip(tmp_path):
    store = SettingsStore(tmp_path / "config")
    payload = '{"masterVolume": 80, "uiTheme": "ardycia"}'

    store.write(payload)

    assert store.read() == payload
    assert store.path == tmp_path / "config" / "settings.json"
    assert store.exists() is True


def test_settings_read_before_write_is_not_found(tmp_path):
    store = SettingsStore(tmp_path / "config")

    with pytest.raises(NotFoundError):
        store.read()
    assert store.exists() is False
    assert not store.path.exists()


def test_settings_overwrite_in_place(tmp_path):
    store = SettingsStore(tmp_path, filename="prefs.json")
    store.write(b"first")
    store.write(b"second")

    assert store.read_bytes() == b"second"
    assert [p.name for p in tmp_path.iterdir()] == ["prefs.json"]


def test_settings_failed_write_keeps_previous(monkeypatch, tmp_path):
    store = SettingsStore(tmp_path)
    store.write("stable")

    def crash(src, dst):
        raise OSError(30, "Read-only file system")

    monkeypatch.setattr(atomic_module.os, "replace", crash)

    with pytest.raises(StorageIOError):
        store.write("broken")

    monkeypatch.undo()
    assert store.read() == "stable"


def test_settings_and_slots_are_isolated(tmp_path):
    slots = SlotStore(tmp_path / "data" / "saves")
    settings = SettingsStore(tmp_path / "config")
    slots.write("autosave", "slot-data")

    settings.write("settings-data")

    assert slots.read("autosave") == "slot-data"
    assert [info.slot for info in slots.list()] == ["autosave"]

    slots.write("autosave", "changed")
    slots.delete("autosave")

    assert settings.read() == "settings-data"
