"""Persistence for the single application settings payload."""

from __future__ import annotations

import logging
import stat
from pathlib import Path

from .errors import NotFoundError, StorageIOError, translate_os_errors
from .io.atomic import atomic_write_bytes, coerce_payload, read_file_bytes
from .models import Payload
from .utils.paths import ensure_directory, settings_path

logger = logging.getLogger(__name__)

SETTINGS_FILENAME = "settings.json"


class SettingsStore:
    """Load and save the opaque settings payload at a well-known path."""

    def __init__(
        self,
        root: Path,
        *,
        filename: str = SETTINGS_FILENAME,
        durable: bool = True,
    ) -> None:
        self._root = Path(root)
        self._path = settings_path(self._root, filename)
        self._durable = durable

    @property
    def path(self) -> Path:
        return self._path

    def write(self, payload: Payload) -> None:
        data = coerce_payload(payload)
        ensure_directory(self._root)
        with translate_os_errors("write settings", self._path):
            atomic_write_bytes(self._path, data, durable=self._durable)
        logger.info("Settings saved (%d bytes)", len(data))

    def read_bytes(self) -> bytes:
        ensure_directory(self._root)
        try:
            data = read_file_bytes(self._path)
        except FileNotFoundError as exc:
            logger.debug("No settings file at %s", self._path)
            raise NotFoundError("No settings file found") from exc
        except OSError as exc:
            raise StorageIOError("read settings", self._path, exc) from exc
        logger.debug("Settings loaded (%d bytes)", len(data))
        return data

    def read(self, *, encoding: str = "utf-8") -> str:
        data = self.read_bytes()
        try:
            return data.decode(encoding)
        except UnicodeDecodeError as exc:
            raise StorageIOError("decode settings", self._path, exc) from exc

    def exists(self) -> bool:
        try:
            mode = self._path.stat().st_mode
        except (FileNotFoundError, NotADirectoryError):
            return False
        except OSError as exc:
            raise StorageIOError("inspect settings", self._path, exc) from exc
        return stat.S_ISREG(mode)
