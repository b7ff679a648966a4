"""
Core deduplication engine — digest engine, fingerprint cache, scanner, index, policy and resolver.

This package contains the performance-critical foundation of dedup:
- HasherImpl + Sha256AlgorithmImpl / XXHashAlgorithmImpl: streaming content digests
- FingerprintCache: path -> (mtime, size, digest) table persisted between runs
- FileScannerImpl: breadth-first traversal that re-hashes only changed files
- DuplicateIndex: digest grouping with collision-safety checks
- Policy: ordered rules choosing which copy to keep
- Resolver: confirmation and deletion loop
- Models: FileRecord, DuplicateGroup, and configuration objects

All components are pure Python with no UI dependencies.
"""

from .errors import ConfigurationError, CacheFormatError, OperationCancelled
from .models import (
    FileRecord, DuplicateGroup, DeduplicationParams, DeduplicationStats,
    DeleteWhich, ExitStatus, GroupState, PolicyCategory, PolicyRule, PromptAnswer)
from .hasher import HasherImpl, Sha256AlgorithmImpl, XXHashAlgorithmImpl, get_hash_algorithm
from .cache import FingerprintCache, cache_file_name
from .filter import FilterImpl
from .scanner import FileScannerImpl
from .grouper import DuplicateIndex
from .policy import Policy
from .resolver import Resolver

__all__ = [
    "ConfigurationError",
    "CacheFormatError",
    "OperationCancelled",
    "FileRecord",
    "DuplicateGroup",
    "DeduplicationParams",
    "DeduplicationStats",
    "DeleteWhich",
    "ExitStatus",
    "GroupState",
    "PolicyCategory",
    "PolicyRule",
    "PromptAnswer",
    "HasherImpl",
    "Sha256AlgorithmImpl",
    "XXHashAlgorithmImpl",
    "get_hash_algorithm",
    "FingerprintCache",
    "cache_file_name",
    "FilterImpl",
    "FileScannerImpl",
    "DuplicateIndex",
    "Policy",
    "Resolver",
]
