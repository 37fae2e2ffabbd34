"""Per-user storage root resolution and path helpers."""

from __future__ import annotations

import logging
import re
import stat
import sys
from dataclasses import dataclass
from pathlib import Path

from platformdirs import user_config_dir, user_data_dir

from ..errors import ResolutionError, translate_os_errors
from .identifiers import validate_identifier

logger = logging.getLogger(__name__)

SAVES_SUBDIRECTORY = "saves"

_WHITESPACE = re.compile(r"\s+")


@dataclass(frozen=True, slots=True)
class AppIdentity:
    """Reverse-domain style identity that scopes the storage roots."""

    qualifier: str
    organization: str
    application: str

    @property
    def bundle_id(self) -> str:
        parts = (self.qualifier, self.organization, self.application)
        return ".".join(_WHITESPACE.sub("-", part.strip()) for part in parts if part.strip())

    @property
    def slug(self) -> str:
        return _WHITESPACE.sub("", self.application).lower()


@dataclass(frozen=True, slots=True)
class StorageRoots:
    """The two directories every store operation is rooted under."""

    save_root: Path
    config_root: Path


def platform_directories(identity: AppIdentity) -> tuple[Path, Path]:
    """Return the ``(data_dir, config_dir)`` pair for the current platform."""
    try:
        if sys.platform == "darwin":
            data_dir = Path(user_data_dir(identity.bundle_id, appauthor=False))
            config_dir = Path(user_config_dir(identity.bundle_id, appauthor=False))
        elif sys.platform.startswith("win"):
            base = Path(
                user_data_dir(identity.application, appauthor=identity.organization, roaming=True)
            )
            data_dir = base / "data"
            config_dir = base / "config"
        else:
            data_dir = Path(user_data_dir(identity.slug, appauthor=False))
            config_dir = Path(user_config_dir(identity.slug, appauthor=False))
    except (KeyError, OSError, RuntimeError) as exc:
        raise ResolutionError(f"Could not determine the user profile directory: {exc}") from exc

    for candidate in (data_dir, config_dir):
        if not candidate.is_absolute() or "~" in candidate.parts:
            raise ResolutionError(
                f"Could not determine the user profile directory (resolved {candidate})."
            )
    return data_dir, config_dir


def resolve_storage_roots(
    identity: AppIdentity,
    *,
    saves_subdirectory: str = SAVES_SUBDIRECTORY,
    create: bool = True,
) -> StorageRoots:
    """Resolve and optionally create the save and config roots for ``identity``."""
    data_dir, config_dir = platform_directories(identity)
    roots = StorageRoots(save_root=data_dir / saves_subdirectory, config_root=config_dir)
    if create:
        ensure_directory(roots.save_root)
        ensure_directory(roots.config_root)
    logger.debug("Storage roots for %s: %s", identity.bundle_id, roots)
    return roots


def ensure_directory(path: Path) -> Path:
    """Create ``path`` and any missing parents; existing contents are untouched."""
    with translate_os_errors("create directory", path):
        path.mkdir(parents=True, exist_ok=True)
    return path


def slot_path(root: Path, identifier: str, extension: str) -> Path:
    validate_identifier(identifier, extension=extension)
    return root / f"{identifier}.{extension}"


def settings_path(root: Path, filename: str) -> Path:
    return root / filename


def is_slot_file(path: Path, *, extension: str) -> bool:
    """Return True if ``path`` has the slot extension and is not hidden."""
    return path.suffix == f".{extension}" and not _is_hidden(path)


def iter_slot_files(root: Path, *, extension: str) -> list[Path]:
    """Collect candidate slot files directly under ``root`` (no recursion).

    Entries that disappear or cannot be inspected while scanning are skipped.
    Failing to open ``root`` itself raises :class:`StorageIOError`.
    """
    with translate_os_errors("list directory", root):
        entries = list(root.iterdir())

    collected: list[Path] = []
    for path in entries:
        if not is_slot_file(path, extension=extension):
            continue
        try:
            mode = path.stat().st_mode
        except OSError as exc:
            logger.debug("Skipping %s: %s", path, exc)
            continue
        if stat.S_ISREG(mode):
            collected.append(path)

    collected.sort()
    return collected


def _is_hidden(path: Path) -> bool:
    # Temporary files written during atomic replacement start with a dot.
    return path.name.startswith(".")
