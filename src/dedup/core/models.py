"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/models.py
Data models for scanning, caching and resolving duplicate files.
"""

from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Any, Dict, List, Optional
import os

from dedup.core.errors import ConfigurationError
from dedup.utils.convert_utils import ConvertUtils


# =============================
# Enums
# =============================

class DeleteWhich(Enum):
    """Outcome of comparing two files with equal digests."""
    FIRST = "first"
    SECOND = "second"
    EITHER = "either"
    NEITHER = "neither"


class PolicyCategory(Enum):
    """Attribute compared by a single policy rule."""
    MOD_TIME = "mod-time"
    NAME = "name-length"
    PATH = "path-length"

    @property
    def display_name(self) -> str:
        """Human-readable name for help text."""
        mapping = {
            PolicyCategory.MOD_TIME: "Modification time",
            PolicyCategory.NAME: "File name length",
            PolicyCategory.PATH: "Full path length",
        }
        return mapping.get(self, self.value)


class PromptAnswer(Enum):
    """Operator answer for one duplicate group."""
    CONFIRM = "confirm"
    SKIP = "skip"
    CONFIRM_ALL = "confirm-all"
    ABORT = "abort"


class GroupState(Enum):
    PENDING = "pending"
    RESOLVED = "resolved"
    SKIPPED = "skipped"
    ABORTED = "aborted"


class ExitStatus(IntEnum):
    """Process exit codes reported by the command layer."""
    OK = 0
    ABORTED = 1
    CONFIGURATION_ERROR = 2


# ======================
#  Core Data Models
# ======================

@dataclass
class FileRecord:
    """
    A file observed on disk together with its content digest.

    `confirmed` is transient: it is set when the current scan sees the file
    and is never persisted.
    """
    path: str
    mod_time: int  # nanoseconds since the epoch
    size: int  # in bytes
    digest: bytes
    name: Optional[str] = None
    confirmed: bool = field(default=False, compare=False)

    def __post_init__(self):
        if self.name is None:
            self.name = os.path.basename(self.path)
        if self.size < 0:
            raise ValueError("File size cannot be negative")
        if self.mod_time < 0:
            raise ValueError("Modification time cannot be negative")
        if not isinstance(self.digest, bytes):
            raise ValueError("Digest must be bytes")

    @property
    def hex_digest(self) -> str:
        return self.digest.hex()

    def __repr__(self):
        return f"<FileRecord path={self.path}, size={self.size}, digest={self.hex_digest}>"


@dataclass(frozen=True)
class PolicyRule:
    """
    One ordered rule of a Policy.
    direction > 0 deletes the longer/newer file, direction < 0 the shorter/older one.
    """
    category: PolicyCategory
    direction: int

    def __post_init__(self):
        if self.direction not in (-1, 1):
            raise ValueError("Policy rule direction must be -1 or 1")


@dataclass
class DuplicateGroup:
    """
    Files sharing one digest that passed the collision-safety checks.
    `owners` maps a member path to the scanner whose cache holds its record.
    """
    digest: bytes
    files: List[FileRecord] = field(default_factory=list)
    owners: Dict[str, Any] = field(default_factory=dict, repr=False)

    @property
    def size(self) -> int:
        return self.files[0].size if self.files else 0

    @property
    def duplicate_count(self) -> int:
        """How many files are in this group."""
        return len(self.files)

    def add_file(self, file: FileRecord, owner: Any = None) -> None:
        if file.digest != self.digest:
            raise ValueError("Cannot add file with different digest to a group.")
        self.files.append(file)
        self.owners[file.path] = owner

    def owner_of(self, file: FileRecord) -> Any:
        return self.owners.get(file.path)

    def is_duplicate(self) -> bool:
        """True if this group contains at least two files."""
        return self.duplicate_count >= 2

    def __repr__(self):
        return f"<DuplicateGroup digest={self.digest.hex()}, count={len(self.files)}>"


@dataclass
class DeduplicationStats:
    """
    Totals collected while scanning and resolving.
    In list mode `removed_*` counts duplicated files instead of deleted ones.
    """
    total_files: int = 0
    total_folders: int = 0
    total_bytes: int = 0
    removed_files: int = 0
    removed_bytes: int = 0
    groups_resolved: int = 0
    groups_skipped: int = 0
    errors: int = 0

    def add_scan_totals(self, files: int, folders: int, size: int) -> None:
        self.total_files += files
        self.total_folders += folders
        self.total_bytes += size

    def add_removed(self, size: int) -> None:
        self.removed_files += 1
        self.removed_bytes += size

    def print_summary(self, list_only: bool = False) -> str:
        removed_label = "Duplicated" if list_only else "Deleted"
        lines = [
            "<Summary>",
            f"{'Scanned Files:':<18}{self.total_files}",
            f"{'Scanned Folders:':<18}{self.total_folders}",
            f"{'Scanned Size:':<18}{ConvertUtils.bytes_to_human(self.total_bytes)}",
            f"{removed_label + ' Files:':<18}{self.removed_files}",
            f"{removed_label + ' Size:':<18}{ConvertUtils.bytes_to_human(self.removed_bytes)}",
        ]
        if self.errors > 0:
            lines.append(f"{'Errors:':<18}{self.errors}")
        return "\n".join(lines)


"""
DTO for deduplication parameters with built-in validation.
"""

DEFAULT_CACHE_DIR = os.path.join(os.path.expanduser("~"), ".dedup")


@dataclass
class DeduplicationParams:
    """Parameters for one deduplication run."""
    roots: List[str]
    list_only: bool = False
    force: bool = False
    permanent: bool = False
    includes: str = ""
    excludes: str = ""
    excluded_dirs: List[str] = field(default_factory=list)
    policy: str = ""
    hash_algorithm: str = "sha256"
    cache_dir: str = DEFAULT_CACHE_DIR

    def __post_init__(self):
        """Validate parameters immediately after creation."""
        if not self.roots:
            raise ValueError("At least one root path is required")

        if not self.cache_dir:
            raise ValueError("Cache directory cannot be empty")

        # Imported here: hasher depends on this module.
        from dedup.core.hasher import HASH_ALGORITHMS

        self.hash_algorithm = self.hash_algorithm.strip().lower()
        if self.hash_algorithm not in HASH_ALGORITHMS:
            raise ConfigurationError(
                f"Unknown hash algorithm: '{self.hash_algorithm}'. "
                f"Valid options: {', '.join(HASH_ALGORITHMS)}")

        self.cache_dir = os.path.abspath(os.path.expanduser(self.cache_dir))
