"""PySide6 bridge between a Qt shell and the storage commands."""

from .bridge import StorageBridge
from .workers import CommandWorker, WorkerSignals

__all__ = ["CommandWorker", "StorageBridge", "WorkerSignals"]
