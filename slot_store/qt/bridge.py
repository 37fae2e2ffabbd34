"""Asynchronous access to the storage commands for Qt application shells."""

from __future__ import annotations

import logging
import uuid
from typing import Any

from PySide6.QtCore import QObject, QThreadPool, Signal, Slot

from ..services.commands import COMMAND_NAMES, StorageCommands
from .workers import CommandWorker

logger = logging.getLogger(__name__)


class StorageBridge(QObject):
    """Dispatches named storage commands onto a thread pool.

    ``invoke`` returns a request id immediately; the matching
    :class:`CommandResult` arrives later through ``completed``. Unexpected
    exceptions raised by a command are reported through ``failed``.
    """

    completed = Signal(str, object)
    failed = Signal(str, str)

    def __init__(
        self,
        commands: StorageCommands,
        *,
        thread_pool: QThreadPool | None = None,
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)
        self.commands = commands
        self.thread_pool = thread_pool or QThreadPool.globalInstance()
        self._pending: dict[str, CommandWorker] = {}

    @property
    def pending_requests(self) -> tuple[str, ...]:
        return tuple(self._pending)

    def invoke(self, command: str, **arguments: Any) -> str:
        if command not in COMMAND_NAMES:
            available = ", ".join(COMMAND_NAMES)
            raise KeyError(f"Unknown command '{command}'. Available: {available}")

        request_id = uuid.uuid4().hex
        worker = CommandWorker(self.commands, request_id, command, arguments)
        worker.setAutoDelete(False)
        worker.signals.finished.connect(self._on_worker_finished)
        worker.signals.error.connect(self._on_worker_error)
        self._pending[request_id] = worker
        logger.debug("Dispatching %s as request %s", command, request_id)
        self.thread_pool.start(worker)
        return request_id

    @Slot(str, object)
    def _on_worker_finished(self, request_id: str, result: object) -> None:
        self._pending.pop(request_id, None)
        self.completed.emit(request_id, result)

    @Slot(str, str)
    def _on_worker_error(self, request_id: str, message: str) -> None:
        self._pending.pop(request_id, None)
        logger.error("Storage request %s failed: %s", request_id, message)
        self.failed.emit(request_id, message)
