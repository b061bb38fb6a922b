"""JSON-lines log files and a logger that writes to them and the console."""

from __future__ import annotations

import json
import logging
import threading
from contextlib import suppress
from dataclasses import asdict, dataclass, replace
from datetime import datetime, timedelta
from pathlib import Path
from typing import Callable, Protocol

_log = logging.getLogger(__name__)

_JSON_ESCAPES = str.maketrans(
    {
        "<": "\\u003c",
        ">": "\\u003e",
        "&": "\\u0026",
        "\u2028": "\\u2028",
        "\u2029": "\\u2029",
    }
)


class LogWriteError(Exception):
    """A log entry could not be formatted or written."""


@dataclass(frozen=True)
class LogEntry:
    """One log record as stored in a log file."""

    timestamp: str = ""
    level: str = ""
    message: str = ""


def _rfc3339(moment: datetime) -> str:
    if moment.tzinfo is None:
        moment = moment.astimezone()
    text = moment.replace(microsecond=0).isoformat()
    if moment.utcoffset() == timedelta(0):
        return text[:-6] + "Z"
    return text


class LogFormatter:
    """Turns log entries into JSON lines stamped with the current time."""

    def __init__(
        self, level: str, clock: Callable[[], datetime] | None = None
    ) -> None:
        self.level = level
        self._clock = clock or (lambda: datetime.now().astimezone())

    def format(self, entry: LogEntry) -> bytes:
        """Return the entry as one JSON line; an empty level gets the default."""
        stamped = replace(
            entry,
            timestamp=_rfc3339(self._clock()),
            level=entry.level or self.level,
        )
        text = json.dumps(asdict(stamped), ensure_ascii=False, separators=(",", ":"))
        return (text.translate(_JSON_ESCAPES) + "\n").encode("utf-8")


class _Formatter(Protocol):
    def format(self, entry: LogEntry) -> bytes: ...


class _EntryWriter(Protocol):
    def write_entry(self, entry: LogEntry) -> None: ...


class LogFileWriter:
    """Appends formatted entries to ``<level>_logs.jsonl``."""

    def __init__(
        self,
        level: str,
        formatter: _Formatter,
        directory: str | Path | None = None,
    ) -> None:
        self.level = level
        self.path = Path(directory if directory is not None else ".") / f"{level}_logs.jsonl"
        self._formatter = formatter
        self._lock = threading.Lock()
        self._file = self.path.open("ab")

    def write_entry(self, entry: LogEntry) -> None:
        """Format the entry and append it to the file."""
        try:
            data = self._formatter.format(entry)
        except (TypeError, ValueError) as exc:
            raise LogWriteError("failed to marshal to json") from exc
        try:
            with self._lock:
                self._file.write(data)
                self._file.flush()
        except (OSError, ValueError) as exc:
            raise LogWriteError("failed to write logs to file") from exc

    def close(self) -> None:
        """Close the underlying file."""
        with self._lock:
            self._file.close()

    def __enter__(self) -> LogFileWriter:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


class LogsWriter:
    """Writes messages to a log file and, when enabled, to the console."""

    def __init__(self, writer: _EntryWriter, log_flag: bool) -> None:
        self.writer = writer
        self.log_flag = log_flag

    def _write(self, message: str) -> None:
        with suppress(LogWriteError):
            self.writer.write_entry(LogEntry(message=message))

    def log_info(self, message: str) -> None:
        """Record an informational message."""
        self._write(message)
        if self.log_flag:
            _log.info("%s", message)

    def log_error(self, message: str) -> None:
        """Record an error message."""
        self._write(message)
        self._error_to_terminal(message)

    def log_errorf(self, fmt: str, *args: object) -> None:
        """Record an error message built with %-style formatting."""
        message = fmt % args if args else fmt
        self.log_error(message)
        self._error_to_terminal(message)

    def _error_to_terminal(self, message: str) -> None:
        if self.log_flag:
            _log.error("%s", message)