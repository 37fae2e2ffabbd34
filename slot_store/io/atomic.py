"""Crash-safe file replacement and plain reads."""

from __future__ import annotations

import errno
import logging
import os
import stat
import tempfile
from pathlib import Path

from ..models import Payload

logger = logging.getLogger(__name__)

TEMP_SUFFIX = ".tmp"
# ".<name>." + eight random characters from tempfile + TEMP_SUFFIX
TEMP_NAME_OVERHEAD = len("..") + 8 + len(TEMP_SUFFIX)


def coerce_payload(payload: Payload) -> bytes:
    """Return the exact bytes to persist for ``payload``."""
    if isinstance(payload, str):
        return payload.encode("utf-8")
    if isinstance(payload, bytes):
        return payload
    if isinstance(payload, (bytearray, memoryview)):
        return bytes(payload)
    raise TypeError(f"Payload must be str or bytes-like, got {type(payload).__name__}.")


def atomic_write_bytes(path: Path, data: bytes, *, durable: bool = True) -> None:
    """Replace ``path`` with ``data`` so readers never see a partial file.

    The data goes to a uniquely named temporary file in the same directory,
    which is then renamed over the target. If anything fails before the rename
    the temporary file is removed and the previous content is left as it was.
    ``OSError`` propagates to the caller.
    """
    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=TEMP_SUFFIX)
    tmp_path = Path(tmp_name)
    try:
        with os.fdopen(fd, "wb") as handle:
            handle.write(data)
            if durable:
                handle.flush()
                os.fsync(handle.fileno())
        _copy_mode(path, tmp_path)
        os.replace(tmp_path, path)
    except BaseException:
        _discard(tmp_path)
        raise

    if durable:
        _fsync_directory(path.parent)


def read_file_bytes(path: Path) -> bytes:
    with path.open("rb") as handle:
        return handle.read()


def _copy_mode(source: Path, target: Path) -> None:
    try:
        mode = source.stat().st_mode
    except FileNotFoundError:
        return
    os.chmod(target, stat.S_IMODE(mode))


def _discard(path: Path) -> None:
    try:
        path.unlink()
    except FileNotFoundError:
        pass
    except OSError as exc:
        logger.warning("Could not remove temporary file %s: %s", path, exc)


def _fsync_directory(directory: Path) -> None:
    if os.name == "nt":
        return
    fd = os.open(directory, os.O_RDONLY)
    try:
        os.fsync(fd)
    except OSError as exc:
        # Some filesystems cannot fsync a directory handle.
        if exc.errno not in (errno.EINVAL, errno.ENOTSUP, errno.EBADF):
            raise
    finally:
        os.close(fd)
