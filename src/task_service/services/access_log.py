"""Append-only access log written after each successful API operation."""

from collections.abc import Callable
from datetime import datetime
from pathlib import Path
from typing import Protocol

from task_service.models.responses import format_timestamp
from task_service.services.store import utcnow


class AccessLog(Protocol):
    def log_operation(self, method: str, path: str, message: str) -> None: ...


class FileAccessLog:
    """Writes ``[<timestamp>] <METHOD> <path> - <message>`` lines to a text file.

    Writes are synchronous and errors are left to propagate: a log that
    cannot be written is a server fault.
    """

    def __init__(self, path: str | Path, clock: Callable[[], datetime] = utcnow) -> None:
        self.path = Path(path)
        self._clock = clock

    def log_operation(self, method: str, path: str, message: str) -> None:
        line = f"[{format_timestamp(self._clock())}] {method} {path} - {message}\n"
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with self.path.open("a", encoding="utf-8") as fh:
            fh.write(line)
