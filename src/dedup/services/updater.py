"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

services/updater.py
Run status shared by the scanner and the resolution loop:
error counter and cooperative cancellation flag.
"""
import logging
import threading

from dedup.core.interfaces import Updater

logger = logging.getLogger(__name__)


class UpdaterImpl(Updater):
    """
    Thread-safe status sink.
    Cancellation may be requested from a signal handler or another thread;
    long-running work polls is_cancelled().
    """

    def __init__(self, logger_name: str = "dedup"):
        self._logger = logging.getLogger(logger_name)
        self._errors = 0
        self._cancelled = threading.Event()
        self._lock = threading.Lock()

    @property
    def errors(self) -> int:
        with self._lock:
            return self._errors

    def log(self, level: int, msg: str, *args) -> None:
        self._logger.log(level, msg, *args)

    def increase_errors(self) -> None:
        with self._lock:
            self._errors += 1

    def cancel(self) -> None:
        """Requests cooperative cancellation."""
        if not self._cancelled.is_set():
            logger.debug("Cancellation requested")
        self._cancelled.set()

    def is_cancelled(self) -> bool:
        return self._cancelled.is_set()
