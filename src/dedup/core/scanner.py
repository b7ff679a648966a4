"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/scanner.py
Walks one root path and keeps its fingerprint cache up to date.
Features:
- Breadth-first traversal with an explicit work queue (no recursion depth limit)
- Files whose size and modification time match the cache are not read again
- Per-entry I/O errors are logged and counted, never fatal
- Cooperative cancellation checked before each directory, entry and hash buffer
"""

import os
import stat
import logging
from collections import deque
from typing import Deque, Dict, Optional

from dedup.core.cache import FingerprintCache, cache_file_name
from dedup.core.errors import OperationCancelled
from dedup.core.hasher import HasherImpl
from dedup.core.interfaces import FileScanner, Filter, Hasher, Updater
from dedup.core.models import FileRecord
from dedup.core.paths import get_abs_path

logger = logging.getLogger(__name__)


class FileScannerImpl(FileScanner):
    """
    Scans one root (a directory tree or a single file).

    Attributes:
        root: Absolute root path
        filter: Decides which entries are skipped
        updater: Receives error counts, provides the cancellation flag
        hasher: Digest engine
        cache: Fingerprint cache owned exclusively by this scanner
        total_files / total_folders / total_bytes: Totals of the last scan
    """

    def __init__(
        self,
        root: str,
        filter: Filter,
        updater: Updater,
        hasher: Optional[Hasher] = None,
        cache: Optional[FingerprintCache] = None,
    ):
        self.root = get_abs_path(root)
        self.filter = filter
        self.updater = updater
        self.hasher = hasher or HasherImpl()

        if cache is None:
            name = cache_file_name(self.root, filter.spec, self.hasher.algorithm.name)
            cache = FingerprintCache(os.path.join(filter.cache_dir, name), self.hasher.digest_size)
        self.cache = cache

        self.total_files = 0
        self.total_folders = 0
        self.total_bytes = 0

    def load_cache(self) -> bool:
        """Loads the persisted cache; a malformed cache leaves an empty table."""
        return self.cache.load()

    def save_cache(self) -> bool:
        """Persists the cache if anything changed."""
        return self.cache.persist()

    def get_files(self) -> Dict[str, FileRecord]:
        """Records confirmed by the last scan, keyed by path."""
        return {record.path: record for record in self.cache.records() if record.confirmed}

    def remove(self, path: str) -> None:
        """Drops a record from the table; does not touch the file on disk."""
        self.cache.remove(path)

    def scan(self) -> None:
        """
        Scans the root, then drops cache records for files that were not seen.

        Raises:
            OperationCancelled: when the updater reports cancellation
        """
        logger.debug(f"Starting scan of {self.root}")
        self.total_files = 0
        self.total_folders = 0
        self.total_bytes = 0
        for record in self.cache.records():
            record.confirmed = False

        self._check_cancelled()

        try:
            st = os.stat(self.root)
        except OSError as e:
            self._report_error(f"Could not open {self.root}. Error: {e}")
            self.cache.prune()
            return

        if stat.S_ISDIR(st.st_mode):
            if not self.filter.should_skip(self.root, True):
                self._scan_folder()
        elif stat.S_ISREG(st.st_mode):
            if not self.filter.should_skip(self.root, False):
                self._scan_file(self.root, st)

        # Some files do not exist in disk any more (or are filtered out now).
        self.cache.prune()
        logger.debug(
            f"Scan of {self.root} completed: {self.total_files} files, "
            f"{self.total_folders} folders, {self.total_bytes} bytes")

    def _scan_folder(self) -> None:
        folders: Deque[str] = deque([self.root])

        while folders:
            self._check_cancelled()
            path = folders.popleft()

            if path != self.root:
                logger.debug(f"Scanning {path}...")

            try:
                it = os.scandir(path)
            except OSError as e:
                self._report_error(f"Could not open folder {path}. Error: {e}")
                continue

            with it:
                while True:
                    self._check_cancelled()
                    try:
                        entry = next(it)
                    except StopIteration:
                        break
                    except OSError as e:
                        self._report_error(f"Could not enumerate folder {path}. Error: {e}")
                        break

                    sub_path = os.path.join(path, entry.name)
                    try:
                        if entry.is_symlink():
                            continue
                        is_dir = entry.is_dir(follow_symlinks=False)
                    except OSError as e:
                        self._report_error(f"Could not inspect {sub_path}. Error: {e}")
                        continue

                    if self.filter.should_skip(sub_path, is_dir):
                        continue

                    if is_dir:
                        folders.append(sub_path)
                        self.total_folders += 1
                        continue

                    try:
                        st = entry.stat(follow_symlinks=False)
                    except OSError as e:
                        self._report_error(f"Could not stat file {sub_path}. Error: {e}")
                        continue
                    if stat.S_ISREG(st.st_mode):
                        self._scan_file(sub_path, st)

    def _scan_file(self, path: str, st: os.stat_result) -> None:
        """Confirms a cached record or hashes the file and stores a new one."""
        size = st.st_size
        # The cache format only stores non-negative times.
        mod_time = max(st.st_mtime_ns, 0)

        if self.cache.validate(path, size, mod_time):
            record = self.cache.lookup(path)
            record.confirmed = True
            self.total_files += 1
            self.total_bytes += size
            logger.debug(f"{path} ({record.hex_digest})")
            return

        try:
            digest = self.hasher.compute_digest(path, stopped_flag=self.updater.is_cancelled)
        except OSError as e:
            self._report_error(f"Could not read file {path}. Error: {e}")
            return

        record = FileRecord(path=path, mod_time=mod_time, size=size, digest=digest, confirmed=True)
        self.cache.upsert(record)
        self.total_files += 1
        self.total_bytes += size
        logger.debug(f"{path} ({record.hex_digest})")

    def _check_cancelled(self) -> None:
        if self.updater.is_cancelled():
            logger.debug(f"Scan of {self.root} interrupted")
            raise OperationCancelled(f"Scan of {self.root} cancelled")

    def _report_error(self, message: str) -> None:
        self.updater.increase_errors()
        logger.error(message)
