"""
Unified command orchestrator for deduplication.
This is the SINGLE source of truth for the workflow — the CLI only parses arguments
and prints results.
"""
import functools
import logging
from typing import List, Optional, Tuple

from dedup.core.errors import OperationCancelled
from dedup.core.filter import FilterImpl
from dedup.core.grouper import DuplicateIndex
from dedup.core.hasher import HasherImpl, get_hash_algorithm
from dedup.core.interfaces import ConfirmationChannel, Updater
from dedup.core.models import DeduplicationParams, DeduplicationStats, ExitStatus
from dedup.core.paths import normalize_roots
from dedup.core.policy import Policy
from dedup.core.resolver import Resolver
from dedup.core.scanner import FileScannerImpl
from dedup.services.confirmation import AutoConfirmation
from dedup.services.file_service import FileService
from dedup.services.updater import UpdaterImpl

logger = logging.getLogger(__name__)


class DeduplicationCommand:
    """
    Orchestrates the entire deduplication workflow:
    1. Build policy, filter and hasher (configuration errors surface here, before any I/O)
    2. Scan every root with its own scanner and fingerprint cache
    3. Group confirmed files by digest
    4. Resolve groups (list, confirm, delete)
    5. Persist every cache that changed

    Usage:
        params = DeduplicationParams(roots=["~/Photos", "/mnt/backup"])
        command = DeduplicationCommand()
        status, stats = command.execute(params, confirmation=TerminalConfirmation())
    """

    def __init__(self):
        self._scanners: List[FileScannerImpl] = []

    def execute(
            self,
            params: DeduplicationParams,
            updater: Optional[Updater] = None,
            confirmation: Optional[ConfirmationChannel] = None,
    ) -> Tuple[ExitStatus, DeduplicationStats]:
        """
        Execute deduplication with given parameters.

        Args:
            params: Validated deduplication parameters
            updater: Error counter and cancellation flag (a fresh one if omitted)
            confirmation: Asked before deleting; defaults to auto-confirm

        Returns:
            Tuple of (exit status, statistics)

        Raises:
            ConfigurationError: If policy, filter, hash algorithm or roots are invalid
        """
        updater = updater or UpdaterImpl()
        confirmation = confirmation or AutoConfirmation()

        policy = Policy.from_spec(params.policy)
        filter = FilterImpl(
            cache_dir=params.cache_dir,
            includes=params.includes,
            excludes=params.excludes,
            excluded_dirs=params.excluded_dirs,
        )
        algorithm = get_hash_algorithm(params.hash_algorithm)
        roots = normalize_roots(params.roots)

        stats = DeduplicationStats()
        hasher = HasherImpl(algorithm)
        self._scanners = [FileScannerImpl(root, filter, updater, hasher=hasher) for root in roots]

        try:
            for scanner in self._scanners:
                # A broken cache only costs a full re-hash.
                scanner.load_cache()
                scanner.scan()
                stats.add_scan_totals(scanner.total_files, scanner.total_folders, scanner.total_bytes)
        except OperationCancelled:
            logger.warning("Scan cancelled")
            self.save_caches(updater)
            stats.errors = updater.errors
            return ExitStatus.ABORTED, stats

        groups = DuplicateIndex.build(self._scanners)

        resolver = Resolver(
            policy=policy,
            updater=updater,
            confirmation=confirmation,
            delete_file=functools.partial(FileService.delete, permanent=params.permanent),
            list_only=params.list_only,
            force=params.force,
        )
        status = resolver.resolve(groups, stats)

        self.save_caches(updater)
        stats.errors = updater.errors
        return status, stats

    def save_caches(self, updater: Updater) -> None:
        """Persists every dirty cache; failures are counted, never raised."""
        for scanner in self._scanners:
            try:
                scanner.save_cache()
            except OSError as e:
                updater.increase_errors()
                logger.error(f"Could not save cache {scanner.cache.cache_file}. Error: {e}")

    def get_scanners(self) -> List[FileScannerImpl]:
        """Scanners of the last execution."""
        return list(self._scanners)
