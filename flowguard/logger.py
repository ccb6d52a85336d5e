"""Thread-safe logger writing timestamped lines to a file and to stderr."""

import enum
import sys
import threading
from pathlib import Path
from typing import TextIO

from flowguard.utils import current_timestamp


class LogLevel(enum.Enum):
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    DEBUG = "DEBUG"


class Logger:
    """Writes ``[timestamp] [LEVEL] message`` lines to an optional file and stderr."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._file: TextIO | None = None
        self._console = True

    def set_log_file(self, file_path: str | Path) -> None:
        """Append log lines to ``file_path``; report on stderr if it cannot be opened."""
        with self._lock:
            if self._file is not None:
                self._file.close()
                self._file = None
            try:
                self._file = open(file_path, "a", encoding="utf-8")
            except OSError:
                print(f"[Logger] Failed to open log file: {file_path}", file=sys.stderr)

    def enable_console_output(self, enable: bool) -> None:
        with self._lock:
            self._console = enable

    def log(self, level: LogLevel, message: str) -> None:
        with self._lock:
            entry = f"[{current_timestamp()}] [{level.value}] {message}"
            if self._file is not None:
                self._file.write(entry + "\n")
                self._file.flush()
            if self._console:
                print(entry, file=sys.stderr, flush=True)

    def close(self) -> None:
        """Close the log file, if one is open."""
        with self._lock:
            if self._file is not None:
                self._file.close()
                self._file = None


_shared = Logger()


def get_logger() -> Logger:
    """Return the process-wide logger."""
    return _shared