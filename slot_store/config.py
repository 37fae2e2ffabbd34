"""Configuration model for wiring the stores and persistence helpers."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, ValidationError, model_validator

from .io.atomic import atomic_write_bytes
from .utils.paths import SAVES_SUBDIRECTORY, AppIdentity

_SEPARATORS = ("/", "\\")


class StoreConfig(BaseModel):
    """Validates the identity and layout options used to build the stores."""

    qualifier: str = Field(
        default="org",
        description="First part of the reverse-domain application identity.",
    )
    organization: str = Field(
        default="SlotStore",
        description="Organization or vendor part of the application identity.",
    )
    application: str = Field(
        default="slot-store",
        description="Product name; determines the per-user directory names.",
    )
    saves_subdirectory: str = Field(
        default=SAVES_SUBDIRECTORY,
        description="Directory under the user data dir that holds slot files.",
    )
    slot_extension: str = Field(
        default="json",
        description="File extension used for slot files.",
    )
    settings_filename: str = Field(
        default="settings.json",
        description="Name of the settings file inside the config root.",
    )
    durable_writes: bool = Field(
        default=True,
        description="If true, fsync files and their directory after every write.",
    )
    save_root: Path | None = Field(
        default=None,
        description="Optional explicit save root, bypassing platform resolution.",
    )
    config_root: Path | None = Field(
        default=None,
        description="Optional explicit config root, bypassing platform resolution.",
    )
    log_level: str = Field(
        default="WARNING",
        description="Root log level used by the command-line tool.",
    )

    @model_validator(mode="after")
    def _validate_identity(self) -> StoreConfig:
        for name in ("qualifier", "organization", "application"):
            value = getattr(self, name).strip()
            if not value:
                raise ValueError(f"The application {name} must not be empty.")
            setattr(self, name, value)
        return self

    @model_validator(mode="after")
    def _validate_layout(self) -> StoreConfig:
        extension = self.slot_extension.strip().lstrip(".")
        if not extension:
            raise ValueError("A slot extension must be configured.")
        for label, value in (
            ("slot extension", extension),
            ("settings filename", self.settings_filename),
            ("saves subdirectory", self.saves_subdirectory),
        ):
            if any(sep in value for sep in _SEPARATORS) or value in {"", ".", ".."}:
                raise ValueError(f"The {label} {value!r} must be a single path component.")
        self.slot_extension = extension
        return self

    @model_validator(mode="after")
    def _normalise_log_level(self) -> StoreConfig:
        level = self.log_level.strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {self.log_level!r}.")
        self.log_level = level
        return self

    def identity(self) -> AppIdentity:
        return AppIdentity(
            qualifier=self.qualifier,
            organization=self.organization,
            application=self.application,
        )

    def as_dict(self) -> dict[str, Any]:
        """Serialize the configuration to primitive Python types."""
        payload = self.model_dump(mode="json")
        for key in ("save_root", "config_root"):
            value = getattr(self, key)
            if value is not None:
                payload[key] = str(value)
        return payload

    @classmethod
    def load(cls, path: Path) -> StoreConfig:
        """Load configuration from a YAML or JSON file."""
        data = _read_config_file(path)
        try:
            return cls.model_validate(data)
        except ValidationError as exc:  # pragma: no cover - pass through details
            raise ValueError(f"Invalid configuration file at {path}: {exc}") from exc

    def save(self, path: Path) -> None:
        """Persist configuration to a YAML or JSON file."""
        _write_config_file(path, self.as_dict())


def _read_config_file(path: Path) -> dict[str, Any]:
    if not path.exists():
        raise FileNotFoundError(path)

    text = path.read_text(encoding="utf-8")
    try:
        if path.suffix.lower() in {".yaml", ".yml"}:
            data = yaml.safe_load(text) or {}
        else:
            data = json.loads(text)
    except (yaml.YAMLError, json.JSONDecodeError) as exc:
        raise ValueError(f"Could not parse configuration file at {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ValueError(f"Configuration file at {path} must contain a mapping.")
    return data


def _write_config_file(path: Path, data: dict[str, Any]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    if path.suffix.lower() in {".yaml", ".yml"}:
        text = yaml.safe_dump(
            data,
            allow_unicode=False,
            sort_keys=False,
        )
    else:
        text = json.dumps(data, indent=2) + "\n"
    atomic_write_bytes(path, text.encode("utf-8"))
