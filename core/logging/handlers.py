"""Logging handlers for per-module log files.

ModuleDispatchHandler routes first-party records to one file per mapped
module group (see MODULE_TO_LOG). ThirdPartyHandler collects every other
library's records in a single run-3p.log. Both rotate their files at run
boundaries: current.log becomes previous.log on the first write of a run.

File writes are synchronous. From async code that blocks the event loop
for the duration of a write and flush, which is negligible next to the
network calls the flow makes.
"""

import logging
from pathlib import Path
from typing import TextIO

FIRST_PARTY_PREFIXES = ("core", "workflows", "testing", "__main__")


def _rotate_log_file(log_dir: Path, log_name: str, stream: TextIO | None) -> TextIO:
    """Move <name>.log to <name>.previous.log and open a fresh <name>.log.

    Args:
        log_dir: Directory containing log files
        log_name: Base name of the log file (without .log extension)
        stream: Existing stream to close, or None

    Returns:
        Newly opened file handle for appending.
    """
    current = log_dir / f"{log_name}.log"
    previous = log_dir / f"{log_name}.previous.log"

    if stream:
        stream.close()

    if previous.exists():
        previous.unlink()
    if current.exists():
        current.rename(previous)

    return current.open("a", encoding="utf-8")


def is_first_party(logger_name: str) -> bool:
    """True for loggers that belong to this project's packages."""
    return any(
        logger_name == prefix or logger_name.startswith(prefix + ".")
        for prefix in FIRST_PARTY_PREFIXES
    )


class FirstPartyFilter(logging.Filter):
    """Pass first-party records (or, inverted, only third-party ones)."""

    def __init__(self, invert: bool = False):
        super().__init__()
        self.invert = invert

    def filter(self, record: logging.LogRecord) -> bool:
        return is_first_party(record.name) != self.invert


class ModuleDispatchHandler(logging.Handler):
    """Single handler that fans records out to per-module log files.

    Keeps one open handle per log name in an internal cache instead of one
    FileHandler per module, so the number of open files stays bounded by
    the size of MODULE_TO_LOG.

    Usage:
        handler = ModuleDispatchHandler(Path("logs"))
        handler.setFormatter(logging.Formatter("%(asctime)s - %(message)s"))
        logging.getLogger().addHandler(handler)
    """

    def __init__(self, log_dir: Path):
        super().__init__()
        self.log_dir = log_dir
        self._file_cache: dict[str, TextIO] = {}

    def emit(self, record: logging.LogRecord) -> None:
        try:
            from core.logging.run_manager import module_to_log_name, should_rotate

            log_name = module_to_log_name(record.name)

            if should_rotate(log_name):
                existing = self._file_cache.pop(log_name, None)
                self._file_cache[log_name] = _rotate_log_file(
                    self.log_dir, log_name, existing
                )

            stream = self._file_cache.get(log_name)
            if stream is None:
                stream = (self.log_dir / f"{log_name}.log").open("a", encoding="utf-8")
                self._file_cache[log_name] = stream

            stream.write(self.format(record) + "\n")
            stream.flush()

        except Exception:
            self.handleError(record)

    def close(self) -> None:
        """Close every cached file handle."""
        self.acquire()
        try:
            for stream in self._file_cache.values():
                try:
                    stream.close()
                except OSError:
                    continue
            self._file_cache.clear()
        finally:
            self.release()
        super().close()


class ThirdPartyHandler(logging.FileHandler):
    """All third-party library records go to run-3p.log."""

    LOG_NAME = "run-3p"

    def __init__(self, log_dir: Path, **kwargs):
        self.log_dir = log_dir
        super().__init__(
            log_dir / f"{self.LOG_NAME}.log", mode="a", encoding="utf-8", **kwargs
        )

    def emit(self, record: logging.LogRecord) -> None:
        try:
            from core.logging.run_manager import should_rotate

            if should_rotate(self.LOG_NAME):
                self.stream = _rotate_log_file(self.log_dir, self.LOG_NAME, self.stream)

            super().emit(record)

        except Exception:
            self.handleError(record)
