"""Error taxonomy shared by the storage components."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from enum import Enum
from pathlib import Path


class ErrorKind(str, Enum):
    """Discriminator carried by every storage error."""

    RESOLUTION = "resolution"
    IO = "io"
    NOT_FOUND = "not_found"
    INVALID_IDENTIFIER = "invalid_identifier"


class StorageError(RuntimeError):
    """Base class for failures raised by the storage layer."""

    kind: ErrorKind = ErrorKind.IO


class ResolutionError(StorageError):
    """Raised when no per-user storage location can be determined."""

    kind = ErrorKind.RESOLUTION


class StorageIOError(StorageError):
    """Wraps an ``OSError`` raised while touching the filesystem."""

    kind = ErrorKind.IO

    def __init__(self, operation: str, path: Path, error: BaseException) -> None:
        detail = getattr(error, "strerror", None) or str(error) or type(error).__name__
        super().__init__(f"Failed to {operation} {path}: {detail}")
        self.operation = operation
        self.path = path


class NotFoundError(StorageError, LookupError):
    """Raised when a slot or the settings file does not exist."""

    kind = ErrorKind.NOT_FOUND


class InvalidIdentifierError(StorageError, ValueError):
    """Raised when a slot identifier could escape or alias the save root."""

    kind = ErrorKind.INVALID_IDENTIFIER


@contextmanager
def translate_os_errors(operation: str, path: Path) -> Iterator[None]:
    """Re-raise any ``OSError`` from the block as :class:`StorageIOError`."""
    try:
        yield
    except OSError as exc:
        raise StorageIOError(operation, path, exc) from exc
