"""
dedup — remove byte-identical files across directory trees.

Core features:
- Content equality by SHA-256 digest (xxHash128 optional), never by name
- Fingerprint cache keyed by path, size and modification time: unchanged trees are not re-read
- Deterministic keep/delete policy (name length, path length, modification time)
- Safe deletion to system trash by default (via send2trash)
- Interactive confirmation, list-only and force modes
"""

# Get version
try:
    from importlib.metadata import version as _version, PackageNotFoundError
    __version__ = _version("dedup")
except PackageNotFoundError:
    __version__ = "0.0.0"

# Public API — only what users should import directly
from dedup.commands import DeduplicationCommand
from dedup.core import (
    DeduplicationParams, DeduplicationStats, ExitStatus, FileRecord, DuplicateGroup,
    Policy, ConfigurationError)
from dedup.utils.convert_utils import ConvertUtils
from dedup.services import FileService, AutoConfirmation, TerminalConfirmation, UpdaterImpl

__all__ = [
    "DeduplicationCommand",
    "DeduplicationParams",
    "DeduplicationStats",
    "ExitStatus",
    "FileRecord",
    "DuplicateGroup",
    "Policy",
    "ConfigurationError",
    "ConvertUtils",
    "FileService",
    "AutoConfirmation",
    "TerminalConfirmation",
    "UpdaterImpl",
    "__version__",
]
