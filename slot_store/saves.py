"""Slot-keyed payload storage under the save root."""

from __future__ import annotations

import logging
import stat
from pathlib import Path

from .errors import NotFoundError, StorageIOError, translate_os_errors
from .io.atomic import atomic_write_bytes, coerce_payload, read_file_bytes
from .models import Payload, SaveInfo
from .utils.identifiers import is_valid_identifier
from .utils.paths import ensure_directory, iter_slot_files, slot_path

logger = logging.getLogger(__name__)

DEFAULT_EXTENSION = "json"


class SlotStore:
    """Read, write and enumerate save slots, one file per identifier.

    Every write is an atomic replace, so a concurrent or later read sees
    either the previous payload or the new one in full. Writers racing on the
    same identifier are not serialized: the last rename wins.
    """

    def __init__(
        self,
        root: Path,
        *,
        extension: str = DEFAULT_EXTENSION,
        durable: bool = True,
    ) -> None:
        self._root = Path(root)
        self._extension = extension.lstrip(".")
        self._durable = durable

    @property
    def root(self) -> Path:
        return self._root

    @property
    def extension(self) -> str:
        return self._extension

    def path_for(self, identifier: str) -> Path:
        """Return the file backing ``identifier``; validates the identifier."""
        return slot_path(self._root, identifier, self._extension)

    def write(self, identifier: str, payload: Payload) -> None:
        path = self.path_for(identifier)
        data = coerce_payload(payload)
        ensure_directory(self._root)
        with translate_os_errors("write slot", path):
            atomic_write_bytes(path, data, durable=self._durable)
        logger.info("Saved slot '%s' (%d bytes)", identifier, len(data))

    def read_bytes(self, identifier: str) -> bytes:
        path = self.path_for(identifier)
        ensure_directory(self._root)
        try:
            data = read_file_bytes(path)
        except FileNotFoundError as exc:
            logger.debug("No save file for slot '%s'", identifier)
            raise NotFoundError(f"No save file found for slot: {identifier}") from exc
        except OSError as exc:
            raise StorageIOError("read slot", path, exc) from exc
        logger.debug("Loaded slot '%s' (%d bytes)", identifier, len(data))
        return data

    def read(self, identifier: str, *, encoding: str = "utf-8") -> str:
        data = self.read_bytes(identifier)
        try:
            return data.decode(encoding)
        except UnicodeDecodeError as exc:
            raise StorageIOError("decode slot", self.path_for(identifier), exc) from exc

    def exists(self, identifier: str) -> bool:
        path = self.path_for(identifier)
        try:
            mode = path.stat().st_mode
        except (FileNotFoundError, NotADirectoryError):
            return False
        except OSError as exc:
            raise StorageIOError("inspect slot", path, exc) from exc
        return stat.S_ISREG(mode)

    def delete(self, identifier: str) -> None:
        """Remove the slot; deleting a slot that does not exist is a no-op."""
        path = self.path_for(identifier)
        try:
            path.unlink()
        except FileNotFoundError:
            logger.debug("Slot '%s' already absent", identifier)
            return
        except OSError as exc:
            raise StorageIOError("delete slot", path, exc) from exc
        logger.info("Deleted slot '%s'", identifier)

    def info(self, identifier: str) -> SaveInfo:
        path = self.path_for(identifier)
        try:
            st = path.stat()
        except (FileNotFoundError, NotADirectoryError) as exc:
            raise NotFoundError(f"No save file found for slot: {identifier}") from exc
        except OSError as exc:
            raise StorageIOError("inspect slot", path, exc) from exc
        if not stat.S_ISREG(st.st_mode):
            raise NotFoundError(f"No save file found for slot: {identifier}")
        return SaveInfo(slot=identifier, timestamp=int(st.st_mtime))

    def list(self) -> list[SaveInfo]:
        """Return every slot, newest first, ties broken by identifier.

        Files whose metadata cannot be read, or whose name is not a valid
        identifier, are skipped instead of failing the whole listing.
        """
        ensure_directory(self._root)
        infos: list[SaveInfo] = []
        for path in iter_slot_files(self._root, extension=self._extension):
            identifier = path.stem
            if not is_valid_identifier(identifier, extension=self._extension):
                logger.debug("Ignoring %s: not a valid slot identifier", path.name)
                continue
            try:
                mtime = path.stat().st_mtime
            except OSError as exc:
                logger.debug("Skipping %s: %s", path, exc)
                continue
            infos.append(SaveInfo(slot=identifier, timestamp=int(mtime)))

        infos.sort(key=SaveInfo.sort_key)
        logger.debug("Listed %d slot(s) in %s", len(infos), self._root)
        return infos
