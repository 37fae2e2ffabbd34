"""Service layer exposing the storage commands to application shells."""

from .commands import COMMAND_NAMES, CommandResult, StorageCommands

__all__ = ["COMMAND_NAMES", "CommandResult", "StorageCommands"]
