"""Validation for caller-supplied slot identifiers."""

from __future__ import annotations

import re

from ..errors import InvalidIdentifierError
from ..io.atomic import TEMP_NAME_OVERHEAD

# Separators, characters Windows refuses in file names, and control characters.
_FORBIDDEN_PATTERN = re.compile(r'[/\\:*?"<>|\x00-\x1f\x7f]')

MAX_FILENAME_BYTES = 255
# The temporary sibling written before each rename must fit as well.
MAX_SLOT_FILENAME_BYTES = MAX_FILENAME_BYTES - TEMP_NAME_OVERHEAD


def validate_identifier(identifier: str, *, extension: str = "json") -> str:
    """Return ``identifier`` unchanged if it names exactly one file in the save root.

    Raises :class:`InvalidIdentifierError` otherwise. Identifiers are never
    rewritten, so the on-disk stem always round-trips to the same value.
    """
    if not isinstance(identifier, str):
        raise InvalidIdentifierError(f"Slot identifier must be a string, got {type(identifier).__name__}.")
    if not identifier:
        raise InvalidIdentifierError("Slot identifier must not be empty.")
    if identifier in {".", ".."}:
        raise InvalidIdentifierError(f"Slot identifier {identifier!r} refers to a directory.")
    match = _FORBIDDEN_PATTERN.search(identifier)
    if match:
        raise InvalidIdentifierError(
            f"Slot identifier {identifier!r} contains forbidden character {match.group()!r}."
        )
    if identifier.startswith("."):
        raise InvalidIdentifierError(f"Slot identifier {identifier!r} must not start with '.'.")
    if identifier.endswith((".", " ")):
        raise InvalidIdentifierError(
            f"Slot identifier {identifier!r} must not end with '.' or a space."
        )
    filename = f"{identifier}.{extension}"
    if len(filename.encode("utf-8")) > MAX_SLOT_FILENAME_BYTES:
        raise InvalidIdentifierError(
            f"Slot identifier is too long; file names are limited to {MAX_SLOT_FILENAME_BYTES} bytes."
        )
    return identifier


def is_valid_identifier(identifier: str, *, extension: str = "json") -> bool:
    try:
        validate_identifier(identifier, extension=extension)
    except InvalidIdentifierError:
        return False
    return True
