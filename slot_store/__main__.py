"""Command line entry point for inspecting and editing the slot store."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any

from . import StorageCommands, StoreConfig
from .errors import StorageError
from .services.commands import CommandResult

LOG_FORMAT = "[%(asctime)s] [%(levelname)s] %(name)s: %(message)s"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="slot-store", description="Slot store")
    parser.add_argument(
        "--config",
        "-c",
        type=Path,
        help="YAML or JSON file with identity and layout options.",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Log debug output to stderr.",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("paths", help="Print the resolved storage locations.")
    sub.add_parser("list", help="List save slots, newest first.")

    write = sub.add_parser("write", help="Write a slot payload from a file or stdin.")
    write.add_argument("slot")
    write.add_argument("--file", "-f", type=Path, help="Read the payload from this file.")

    read = sub.add_parser("read", help="Read a slot payload.")
    read.add_argument("slot")
    read.add_argument("--raw", action="store_true", help="Print the payload verbatim.")

    for name, help_text in (
        ("exists", "Report whether a slot exists."),
        ("info", "Show slot metadata."),
        ("delete", "Delete a slot."),
    ):
        command = sub.add_parser(name, help=help_text)
        command.add_argument("slot")

    settings_write = sub.add_parser("settings-write", help="Write the settings payload.")
    settings_write.add_argument("--file", "-f", type=Path, help="Read the payload from this file.")

    settings_read = sub.add_parser("settings-read", help="Read the settings payload.")
    settings_read.add_argument("--raw", action="store_true", help="Print the payload verbatim.")
    return parser


def configure_logging(level: str) -> None:
    logging.basicConfig(level=getattr(logging, level, logging.WARNING), format=LOG_FORMAT)


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = StoreConfig.load(args.config) if args.config else StoreConfig()
    except (FileNotFoundError, ValueError) as exc:
        _emit({"ok": False, "error": {"kind": "config", "message": str(exc)}})
        return 1

    configure_logging("DEBUG" if args.verbose else config.log_level)

    try:
        commands = StorageCommands.from_config(config)
    except StorageError as exc:
        _emit(CommandResult.failure(exc).as_dict())
        return 1

    if args.command == "paths":
        _emit(
            {
                "save_root": str(commands.slots.root),
                "config_root": str(commands.settings.path.parent),
                "settings_path": str(commands.settings.path),
            }
        )
        return 0

    try:
        result = _dispatch(commands, args)
    except OSError as exc:
        _emit({"ok": False, "error": {"kind": "io", "message": f"Could not read payload: {exc}"}})
        return 1
    if getattr(args, "raw", False) and result.ok:
        _emit_raw(result.value)
        return 0
    _emit(result.as_dict())
    return 0 if result.ok else 1


def _dispatch(commands: StorageCommands, args: argparse.Namespace) -> CommandResult:
    if args.command == "list":
        return commands.list_slots()
    if args.command == "write":
        return commands.write_slot(args.slot, _read_payload(args.file))
    if args.command == "read":
        return commands.read_slot(args.slot)
    if args.command == "exists":
        return commands.slot_exists(args.slot)
    if args.command == "info":
        return commands.slot_info(args.slot)
    if args.command == "delete":
        return commands.delete_slot(args.slot)
    if args.command == "settings-write":
        return commands.write_settings(_read_payload(args.file))
    if args.command == "settings-read":
        return commands.read_settings()
    raise ValueError(f"Unhandled command: {args.command}")  # pragma: no cover


def _read_payload(path: Path | None) -> bytes:
    if path is not None:
        return path.read_bytes()
    return sys.stdin.buffer.read()


def _emit(payload: dict[str, Any]) -> None:
    json.dump(payload, sys.stdout, indent=2)
    sys.stdout.write("\n")


def _emit_raw(value: str | bytes) -> None:
    data = value.encode("utf-8") if isinstance(value, str) else value
    sys.stdout.flush()
    sys.stdout.buffer.write(data)
    sys.stdout.buffer.flush()


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
