"""Qt worker objects used to run storage commands off the main thread."""

from __future__ import annotations

from typing import Any

from PySide6.QtCore import QObject, QRunnable, Signal

from ..services.commands import StorageCommands


class WorkerSignals(QObject):
    finished = Signal(str, object)
    error = Signal(str, str)


class CommandWorker(QRunnable):
    """Runs one named command on a pool thread and reports its result."""

    def __init__(
        self,
        commands: StorageCommands,
        request_id: str,
        command: str,
        arguments: dict[str, Any] | None = None,
    ) -> None:
        super().__init__()
        self.commands = commands
        self.request_id = request_id
        self.command = command
        self.arguments = dict(arguments or {})
        self.signals = WorkerSignals()

    def run(self) -> None:
        try:
            result = self.commands.invoke(self.command, **self.arguments)
        except Exception as exc:  # pragma: no cover - safety net for pool threads
            self.signals.error.emit(self.request_id, str(exc))
            return
        self.signals.finished.emit(self.request_id, result)
