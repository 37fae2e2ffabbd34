"""Command surface exposed to the application shell."""

from __future__ import annotations

import base64
import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from ..config import StoreConfig
from ..errors import ErrorKind, StorageError
from ..models import Payload, SaveInfo
from ..saves import SlotStore
from ..settings_store import SettingsStore
from ..utils.paths import StorageRoots, ensure_directory, resolve_storage_roots

logger = logging.getLogger(__name__)

COMMAND_NAMES = (
    "write_slot",
    "read_slot",
    "slot_exists",
    "delete_slot",
    "list_slots",
    "slot_info",
    "write_settings",
    "read_settings",
)


@dataclass(slots=True)
class CommandResult:
    """Discriminated outcome of a single command: a value or a typed error."""

    ok: bool
    value: Any = None
    error_kind: ErrorKind | None = None
    error_message: str | None = None

    @classmethod
    def success(cls, value: Any = None) -> CommandResult:
        return cls(ok=True, value=value)

    @classmethod
    def failure(cls, error: StorageError) -> CommandResult:
        return cls(ok=False, error_kind=error.kind, error_message=str(error))

    def as_dict(self) -> dict[str, Any]:
        if not self.ok:
            kind = self.error_kind.value if self.error_kind is not None else None
            return {"ok": False, "error": {"kind": kind, "message": self.error_message}}
        if isinstance(self.value, bytes):
            encoded = base64.b64encode(self.value).decode("ascii")
            return {"ok": True, "value": encoded, "encoding": "base64"}
        return {"ok": True, "value": _serialise(self.value)}


def _serialise(value: Any) -> Any:
    if isinstance(value, SaveInfo):
        return value.as_dict()
    if isinstance(value, list):
        return [_serialise(item) for item in value]
    return value


def _payload_value(data: bytes) -> str | bytes:
    """UTF-8 payloads come back as text, anything else as the stored bytes."""
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError:
        return data


class StorageCommands:
    """Runs store operations and reports each outcome as a :class:`CommandResult`.

    Store exceptions never escape a command; anything that is not a
    :class:`StorageError` (a programming error) propagates unchanged.
    """

    def __init__(self, slots: SlotStore, settings: SettingsStore) -> None:
        self.slots = slots
        self.settings = settings

    @classmethod
    def from_config(cls, config: StoreConfig) -> StorageCommands:
        """Resolve the storage roots once and build both stores.

        Raises :class:`ResolutionError` or :class:`StorageIOError` when the
        roots cannot be located or created.
        """
        roots = _roots_for(config)
        slots = SlotStore(
            roots.save_root,
            extension=config.slot_extension,
            durable=config.durable_writes,
        )
        settings = SettingsStore(
            roots.config_root,
            filename=config.settings_filename,
            durable=config.durable_writes,
        )
        return cls(slots, settings)

    def write_slot(self, identifier: str, payload: Payload) -> CommandResult:
        return self._run("write_slot", lambda: self.slots.write(identifier, payload))

    def read_slot(self, identifier: str) -> CommandResult:
        return self._run("read_slot", lambda: _payload_value(self.slots.read_bytes(identifier)))

    def slot_exists(self, identifier: str) -> CommandResult:
        return self._run("slot_exists", lambda: self.slots.exists(identifier))

    def delete_slot(self, identifier: str) -> CommandResult:
        return self._run("delete_slot", lambda: self.slots.delete(identifier))

    def list_slots(self) -> CommandResult:
        return self._run("list_slots", self.slots.list)

    def slot_info(self, identifier: str) -> CommandResult:
        return self._run("slot_info", lambda: self.slots.info(identifier))

    def write_settings(self, payload: Payload) -> CommandResult:
        return self._run("write_settings", lambda: self.settings.write(payload))

    def read_settings(self) -> CommandResult:
        return self._run("read_settings", lambda: _payload_value(self.settings.read_bytes()))

    def invoke(self, command: str, **arguments: Any) -> CommandResult:
        """Dispatch ``command`` by name with keyword ``arguments``."""
        if command not in COMMAND_NAMES:
            available = ", ".join(COMMAND_NAMES)
            raise KeyError(f"Unknown command '{command}'. Available: {available}")
        handler: Callable[..., CommandResult] = getattr(self, command)
        return handler(**arguments)

    @staticmethod
    def _run(command: str, operation: Callable[[], Any]) -> CommandResult:
        try:
            value = operation()
        except StorageError as exc:
            if exc.kind is ErrorKind.NOT_FOUND:
                logger.debug("%s: %s", command, exc)
            elif exc.kind is ErrorKind.INVALID_IDENTIFIER:
                logger.info("%s rejected: %s", command, exc)
            else:
                logger.warning("%s failed: %s", command, exc)
            return CommandResult.failure(exc)
        return CommandResult.success(value)


def _roots_for(config: StoreConfig) -> StorageRoots:
    if config.save_root is not None and config.config_root is not None:
        roots = StorageRoots(save_root=config.save_root, config_root=config.config_root)
        ensure_directory(roots.save_root)
        ensure_directory(roots.config_root)
        return roots

    resolved = resolve_storage_roots(
        config.identity(),
        saves_subdirectory=config.saves_subdirectory,
        create=False,
    )
    roots = StorageRoots(
        save_root=config.save_root or resolved.save_root,
        config_root=config.config_root or resolved.config_root,
    )
    ensure_directory(roots.save_root)
    ensure_directory(roots.config_root)
    return roots
