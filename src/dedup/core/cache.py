"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/cache.py
Persistent fingerprint cache: path -> (modification time, size, digest).

On-disk format, one record per line:
    <absolute path>|<modTime nanoseconds>|<size bytes>|<lowercase hex digest>

A malformed line invalidates the whole file; the scan then starts from an
empty cache. Writes go to a temporary file that is renamed into place, so a
failed write never leaves a truncated cache behind.
"""

import os
import re
import hashlib
import logging
import tempfile
from typing import Dict, Iterator, List, Optional

from dedup.core.errors import CacheFormatError
from dedup.core.models import FileRecord
from dedup.core.paths import path_key

logger = logging.getLogger(__name__)

FIELD_SEPARATOR = "|"
CACHE_FILE_SUFFIX = ".dat"
_NON_NEGATIVE_INT = re.compile(r"[0-9]+")
_LOWER_HEX = re.compile(r"[0-9a-f]+")


def cache_file_name(root: str, filter_spec: str = "", algorithm_name: str = "sha256") -> str:
    """
    Deterministic cache file name for one scan configuration.
    Different roots, filters or digest algorithms never share a file.
    """
    identity = "\n".join([path_key(root), filter_spec, algorithm_name])
    return hashlib.sha256(identity.encode("utf-8", "surrogateescape")).hexdigest() + CACHE_FILE_SUFFIX


def _parse_int(value: str, field_name: str, line_number: Optional[int]) -> int:
    if not _NON_NEGATIVE_INT.fullmatch(value):
        raise CacheFormatError(f"invalid {field_name} '{value}'", line_number)
    return int(value)


def parse_line(line: str, digest_size: int, line_number: Optional[int] = None) -> FileRecord:
    """
    Parses one cache line into a FileRecord.

    Raises:
        CacheFormatError: if the line does not follow the cache format
    """
    fields = line.rstrip("\r\n").split(FIELD_SEPARATOR)
    if len(fields) != 4:
        raise CacheFormatError(f"expected 4 fields, got {len(fields)}", line_number)

    path, mod_time_str, size_str, digest_str = fields
    if not os.path.isabs(path):
        raise CacheFormatError(f"path is not absolute: '{path}'", line_number)
    if not os.path.basename(path):
        raise CacheFormatError(f"path has no file name: '{path}'", line_number)

    mod_time = _parse_int(mod_time_str, "modification time", line_number)
    size = _parse_int(size_str, "size", line_number)

    if len(digest_str) != 2 * digest_size:
        raise CacheFormatError(
            f"digest has {len(digest_str)} hex digits, expected {2 * digest_size}", line_number)
    if not _LOWER_HEX.fullmatch(digest_str):
        raise CacheFormatError(f"invalid digest '{digest_str}'", line_number)
    digest = bytes.fromhex(digest_str)

    return FileRecord(path=path, mod_time=mod_time, size=size, digest=digest)


def format_record(record: FileRecord) -> str:
    """Serializes a FileRecord into one cache line (with trailing newline)."""
    return f"{record.path}|{record.mod_time}|{record.size}|{record.hex_digest}\n"


class FingerprintCache:
    """
    In-memory table of FileRecords keyed by path, backed by one cache file.

    Attributes:
        cache_file: Full path of the persisted table
        digest_size: Expected digest length in bytes, used to validate loaded lines
        dirty: True when the table differs from what was loaded
    """

    def __init__(self, cache_file: str, digest_size: int):
        self.cache_file = cache_file
        self.digest_size = digest_size
        self.dirty = False
        self._records: Dict[str, FileRecord] = {}

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, path: str) -> bool:
        return path_key(path) in self._records

    def records(self) -> Iterator[FileRecord]:
        return iter(list(self._records.values()))

    def load(self) -> bool:
        """
        Loads the persisted table, replacing the in-memory one.
        Returns False if the file was malformed or unreadable (the cache is then empty).
        """
        logger.debug(f"Reading cache {self.cache_file}...")
        self._records.clear()

        loaded: Dict[str, FileRecord] = {}
        try:
            with open(self.cache_file, "r", encoding="utf-8", errors="surrogateescape", newline="\n") as f:
                for line_number, line in enumerate(f, 1):
                    record = parse_line(line, self.digest_size, line_number)
                    logger.debug(f"Cache info: {record}")
                    loaded[path_key(record.path)] = record
        except FileNotFoundError:
            return True
        except CacheFormatError as e:
            logger.warning(f"Ignoring invalid cache file {self.cache_file}: {e}")
            # Rewrite the broken file on the next persist.
            self.dirty = True
            return False
        except (OSError, UnicodeDecodeError) as e:
            logger.warning(f"Could not read cache file {self.cache_file}: {e}")
            return False

        self._records = loaded
        return True

    def lookup(self, path: str) -> Optional[FileRecord]:
        return self._records.get(path_key(path))

    def validate(self, path: str, size: int, mod_time: int) -> bool:
        """True if a cached record exists whose size and modification time both match."""
        record = self.lookup(path)
        return record is not None and record.size == size and record.mod_time == mod_time

    def upsert(self, record: FileRecord) -> None:
        self._records[path_key(record.path)] = record
        self.dirty = True

    def remove(self, path: str) -> bool:
        if self._records.pop(path_key(path), None) is None:
            return False
        self.dirty = True
        return True

    def prune(self) -> int:
        """Drops every record not confirmed by the current scan. Returns how many were dropped."""
        stale: List[str] = [key for key, record in self._records.items() if not record.confirmed]
        for key in stale:
            del self._records[key]
        if stale:
            self.dirty = True
            logger.debug(f"Pruned {len(stale)} stale cache entries")
        return len(stale)

    def persist(self) -> bool:
        """
        Writes the table to disk if it is dirty.
        Returns True if a file was written.

        Raises:
            OSError: if the cache directory or file cannot be written
        """
        if not self.dirty:
            return False

        cache_dir = os.path.dirname(self.cache_file)
        os.makedirs(cache_dir, exist_ok=True)
        logger.debug(f"Updating cache {self.cache_file}...")

        fd, tmp_path = tempfile.mkstemp(prefix=".", suffix=".tmp", dir=cache_dir)
        try:
            with os.fdopen(fd, "w", encoding="utf-8", errors="surrogateescape", newline="\n") as f:
                for record in sorted(self._records.values(), key=lambda r: r.path):
                    if FIELD_SEPARATOR in record.path or "\n" in record.path or "\r" in record.path:
                        logger.debug(f"Not caching {record.path!r}: path cannot be stored")
                        continue
                    f.write(format_record(record))
            os.replace(tmp_path, self.cache_file)
        except BaseException:
            try:
                os.remove(tmp_path)
            except OSError:
                pass
            raise

        self.dirty = False
        return True
