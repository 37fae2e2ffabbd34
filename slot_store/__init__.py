"""Top-level package for the slot store persistence library."""

from .config import StoreConfig
from .errors import (
    ErrorKind,
    InvalidIdentifierError,
    NotFoundError,
    ResolutionError,
    StorageError,
    StorageIOError,
)
from .models import SaveInfo
from .saves import SlotStore
from .services.commands import CommandResult, StorageCommands
from .settings_store import SettingsStore
from .utils.paths import AppIdentity, StorageRoots, resolve_storage_roots

__all__ = [
    "AppIdentity",
    "CommandResult",
    "ErrorKind",
    "InvalidIdentifierError",
    "NotFoundError",
    "ResolutionError",
    "SaveInfo",
    "SettingsStore",
    "SlotStore",
    "StorageCommands",
    "StorageError",
    "StorageIOError",
    "StorageRoots",
    "StoreConfig",
    "resolve_storage_roots",
]
