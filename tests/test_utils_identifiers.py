"""Tests for slot identifier validation."""

from __future__ import annotations

import pytest

from slot_store.errors import InvalidIdentifierError
from slot_store.saves import SlotStore
from slot_store.utils.identifiers import (
    MAX_FILENAME_BYTES,
    MAX_SLOT_FILENAME_BYTES,
    is_valid_identifier,
    validate_identifier,
)


@pytest.mark.parametrize(
    "identifier",
    ["autosave", "save_1", "Slot 2", "campaign-α", "a.json", "v1.2"],
)
def test_valid_identifiers_are_returned_unchanged(identifier):
    assert validate_identifier(identifier) == identifier
    assert is_valid_identifier(identifier)


@pytest.mark.parametrize(
    "identifier",
    [
        "",
        ".",
        "..",
        "../escape",
        "nested/slot",
        "nested\\slot",
        "C:slot",
        ".hidden",
        "trailing.",
        "trailing ",
        "nul\x00byte",
        "tab\tname",
        "what?",
    ],
)
def test_unsafe_identifiers_are_rejected(identifier):
    with pytest.raises(InvalidIdentifierError):
        validate_identifier(identifier)
    assert not is_valid_identifier(identifier)


def test_identifier_length_accounts_for_extension():
    longest = "x" * (MAX_SLOT_FILENAME_BYTES - len(".json"))
    assert validate_identifier(longest) == longest

    with pytest.raises(InvalidIdentifierError):
        validate_identifier(longest + "x")

    with pytest.raises(InvalidIdentifierError):
        validate_identifier(longest, extension="slot1")


def test_non_string_identifier_is_rejected():
    with pytest.raises(InvalidIdentifierError):
        validate_identifier(42)  # type: ignore[arg-type]


def test_invalid_identifier_is_a_value_error():
    with pytest.raises(ValueError):
        validate_identifier("../escape")


def test_longest_accepted_identifier_is_writable(tmp_path):
    store = SlotStore(tmp_path, durable=False)
    longest = "x" * (MAX_SLOT_FILENAME_BYTES - len(".json"))

    store.write(longest, "payload")

    assert store.read(longest) == "payload"
    assert [info.slot for info in store.list()] == [longest]
    assert [p.name for p in tmp_path.iterdir()] == [f"{longest}.json"]


def test_names_near_the_filesystem_limit_are_rejected_up_front(tmp_path):
    store = SlotStore(tmp_path, durable=False)
    too_long = "x" * (MAX_FILENAME_BYTES - len(".json"))

    with pytest.raises(InvalidIdentifierError):
        store.write(too_long, "payload")
    assert list(tmp_path.iterdir()) == []


def test_length_limit_counts_utf8_bytes():
    multibyte = "é" * ((MAX_SLOT_FILENAME_BYTES - len(".json")) // 2 + 1)

    assert not is_valid_identifier(multibyte)
    assert is_valid_identifier(multibyte[:-1])
