"""Utility helpers for the slot store."""

from .identifiers import is_valid_identifier, validate_identifier
from .paths import (
    AppIdentity,
    StorageRoots,
    ensure_directory,
    iter_slot_files,
    resolve_storage_roots,
)

__all__ = [
    "AppIdentity",
    "StorageRoots",
    "ensure_directory",
    "is_valid_identifier",
    "iter_slot_files",
    "resolve_storage_roots",
    "validate_identifier",
]
