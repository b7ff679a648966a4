"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/grouper.py
Groups confirmed file records by digest.

Equal digests alone are not trusted: a record joins an existing bucket only if it
passes the collision-safety check against at least one member (same size, distinct
path, distinct filesystem object). Records failing against every bucket start their
own bucket, so they are never lost, merely not grouped.
"""

import logging
from collections import defaultdict
from typing import Any, Dict, Iterable, List, Tuple

from dedup.core.interfaces import FileScanner
from dedup.core.models import DuplicateGroup, FileRecord
from dedup.core.paths import same_path, same_underlying_file

logger = logging.getLogger(__name__)


def is_safe_pair(first: FileRecord, second: FileRecord) -> bool:
    """Collision-safety check for two records with equal digests."""
    if first.size != second.size:
        logger.warning(
            f"Digest collision: {first.path} and {second.path} share a digest but differ in size")
        return False
    if same_path(first.path, second.path):
        return False
    if same_underlying_file(first.path, second.path):
        logger.debug(f"{first.path} and {second.path} are the same file")
        return False
    return True


class DuplicateIndex:
    """Builds duplicate groups from the confirmed records of one or more scanners."""

    @staticmethod
    def build(scanners: Iterable[FileScanner]) -> List[DuplicateGroup]:
        """
        Returns actionable groups (2+ members).

        Groups are ordered by the path of their first member and members by path,
        so resolution order is reproducible between runs over unchanged trees.
        """
        entries: List[Tuple[FileRecord, Any]] = []
        for scanner in scanners:
            for record in scanner.get_files().values():
                entries.append((record, scanner))
        entries.sort(key=lambda entry: entry[0].path)

        return DuplicateIndex.group_records(entries)

    @staticmethod
    def group_records(entries: Iterable[Tuple[FileRecord, Any]]) -> List[DuplicateGroup]:
        """Groups (record, owner) pairs; see module docstring for bucket placement."""
        buckets: Dict[bytes, List[DuplicateGroup]] = defaultdict(list)

        for record, owner in entries:
            for group in buckets[record.digest]:
                if any(is_safe_pair(member, record) for member in group.files):
                    group.add_file(record, owner)
                    break
            else:
                group = DuplicateGroup(digest=record.digest)
                group.add_file(record, owner)
                buckets[record.digest].append(group)

        result = [group for groups in buckets.values() for group in groups if group.is_duplicate()]
        result.sort(key=lambda g: g.files[0].path)
        logger.debug(f"Found {len(result)} duplicate groups")
        return result
