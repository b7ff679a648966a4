"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

interfaces.py

Defines core interfaces (Protocols) used throughout the deduplication system.
These protocols enforce structural typing using Python's `typing.Protocol` so the
scan, index and resolution layers can be wired with any conforming collaborator.

Key Components:
---------------
- HashAlgorithm: Factory of streaming hash contexts (SHA-256, xxHash, ...).
- Hasher: Streams file content through a HashAlgorithm into a digest.
- Filter: Decides which directories and files the scanner skips.
- Updater: Sink for error counting and cooperative cancellation.
- ConfirmationChannel: Asks the operator what to do with a duplicate group.
- FileScanner: Walks one root and owns its fingerprint cache.
"""

from typing import Protocol, Dict, List, Optional, Callable, BinaryIO

from dedup.core.models import FileRecord, PromptAnswer


# ===== Interfaces =====

class HashContext(Protocol):
    def update(self, data: bytes) -> None: ...
    def digest(self) -> bytes: ...


class HashAlgorithm(Protocol):
    """
    Interface for generic hash algorithms.

    Allows plugging in different hashing functions like SHA-256 or xxHash
    without affecting the rest of the deduplication logic.
    """
    name: str
    digest_size: int

    def new(self) -> HashContext:
        """Creates a fresh streaming hash context."""
        ...


class Hasher(Protocol):
    """Interface for computing the content digest of a file."""
    algorithm: HashAlgorithm
    digest_size: int

    def reset(self) -> None: ...

    def compute_digest(self, path: str, stopped_flag: Optional[Callable[[], bool]] = None) -> bytes: ...

    def compute_stream_digest(self, stream: BinaryIO,
                              stopped_flag: Optional[Callable[[], bool]] = None) -> bytes: ...


class Filter(Protocol):
    """
    Decides whether the scanner skips a directory or a file.
    Implementations must skip the fingerprint cache directory itself.
    """
    cache_dir: str
    spec: str

    def should_skip(self, path: str, is_dir: bool) -> bool: ...


class Updater(Protocol):
    """Status sink shared by the scanner and the resolution loop."""
    @property
    def errors(self) -> int: ...

    def log(self, level: int, msg: str, *args) -> None: ...

    def increase_errors(self) -> None: ...

    def is_cancelled(self) -> bool: ...


class ConfirmationChannel(Protocol):
    """Asks what to do with the removable members of one duplicate group."""
    def ask(self, keeper: FileRecord, removable: List[FileRecord]) -> PromptAnswer: ...


class FileScanner(Protocol):
    """
    Interface for scanning one root path and keeping its fingerprint cache.

    Methods:
        scan: Walks the root, hashing files the cache cannot vouch for.
    """
    root: str
    total_files: int
    total_folders: int
    total_bytes: int

    def load_cache(self) -> bool: ...

    def scan(self) -> None: ...

    def save_cache(self) -> bool: ...

    def get_files(self) -> Dict[str, FileRecord]: ...

    def remove(self, path: str) -> None: ...
