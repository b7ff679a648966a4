"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/paths.py
Path helpers shared by the filter, scanner, cache and policy.
Paths are compared case-sensitively on POSIX and case-insensitively on Windows.
"""

import os
import logging
from typing import List

from dedup.core.errors import ConfigurationError

logger = logging.getLogger(__name__)

CASE_INSENSITIVE = os.sep != "/"


def path_key(path: str) -> str:
    """Key used for path-indexed tables."""
    return path.lower() if CASE_INSENSITIVE else path


def same_path(path1: str, path2: str) -> bool:
    return path_key(path1) == path_key(path2)


def same_or_in_folder(parent: str, child: str) -> bool:
    """True if `child` is `parent` itself or lies somewhere below it."""
    if len(parent) > len(child):
        return False
    if len(parent) == len(child):
        return same_path(parent, child)
    if parent.endswith(os.sep):
        return path_key(child).startswith(path_key(parent))
    if child[len(parent)] != os.sep:
        return False
    return path_key(child[:len(parent)]) == path_key(parent)


def get_abs_path(path: str) -> str:
    """
    Absolute, normalized path without a trailing separator.
    The filesystem root yields an empty string.
    """
    abs_path = os.path.normpath(os.path.abspath(os.path.expanduser(path)))
    drive, tail = os.path.splitdrive(abs_path)
    return drive + tail.rstrip(os.sep)


def normalize_roots(paths: List[str]) -> List[str]:
    """
    Convert input paths to absolute ones and collapse overlapping entries
    so that every file is reachable from exactly one root.

    Raises:
        ConfigurationError: for the filesystem root or a path that does not exist
    """
    unique: List[str] = []

    for path in paths:
        abs_path = get_abs_path(path)
        if not abs_path or abs_path == os.path.splitdrive(abs_path)[0]:
            raise ConfigurationError(f"Root path is not permitted: {path}")

        if any(same_or_in_folder(existing, abs_path) for existing in unique):
            logger.debug(f"Skipping {abs_path}: already covered by another root")
            continue

        if not os.path.exists(abs_path):
            raise ConfigurationError(f"Path does not exist: {path}")

        # A new parent replaces all of its children.
        unique = [existing for existing in unique if not same_or_in_folder(abs_path, existing)]
        unique.append(abs_path)

    return unique


def same_underlying_file(path1: str, path2: str) -> bool:
    """
    True if both paths reach the same filesystem object (hardlinks, bind mounts).
    Falls back to path equality when the platform reports no file identity.
    """
    try:
        stat1 = os.stat(path1)
        stat2 = os.stat(path2)
    except OSError as e:
        logger.debug(f"Could not compare file identity of {path1} and {path2}: {e}")
        return same_path(path1, path2)

    if stat1.st_ino == 0 or stat2.st_ino == 0:
        return same_path(path1, path2)
    return os.path.samestat(stat1, stat2)
