"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/filter.py
Decides which directories and files the scanner skips.

Always skipped:
- the fingerprint cache directory (otherwise cache files would be hashed and deduplicated)
- OS trash / recycle bin directories
- user-excluded directories
Files are additionally filtered by include/exclude type lists.
"""

import os
import sys
import logging
from typing import Dict, Iterable, List

from dedup.core.errors import ConfigurationError
from dedup.core.interfaces import Filter
from dedup.core.paths import get_abs_path, same_or_in_folder

logger = logging.getLogger(__name__)

FILE_TYPE_EXTENSIONS: Dict[str, List[str]] = {
    "audio": [".aac", ".aiff", ".ape", ".flac", ".m4a", ".mp3", ".ogg", ".wav", ".wma"],
    "office": [".doc", ".docx", ".pdf", ".ppt", ".pptx", ".rtf", ".xls", ".xlsx"],
    "photo": [".bmp", ".gif", ".heic", ".jpeg", ".jpg", ".png", ".raw", ".tif", ".tiff", ".webp"],
    "video": [".3gp", ".avi", ".flv", ".m4v", ".mkv", ".mov", ".mp4", ".mpeg", ".mpg", ".rm",
              ".rmvb", ".webm", ".wmv"],
    "tarball": [".7z", ".bz2", ".cab", ".gz", ".iso", ".rar", ".tar", ".tgz", ".xz", ".zip"],
}


def parse_types(types: str) -> List[str]:
    """
    Converts a comma-separated list of type names (photo, video, ...) and/or
    literal extensions (.iso) into a sorted list of lowercase extensions.

    Raises:
        ConfigurationError: for an unknown token
    """
    result = set()
    if not types or not types.strip():
        return []

    for token in types.lower().split(","):
        token = token.strip()
        if token in FILE_TYPE_EXTENSIONS:
            result.update(FILE_TYPE_EXTENSIONS[token])
        elif token.startswith(".") and len(token) > 1 and os.sep not in token:
            result.add(token)
        else:
            raise ConfigurationError(
                f"Invalid file type: '{token}'. "
                f"Valid options: {', '.join(FILE_TYPE_EXTENSIONS)} or an extension such as .iso"
            )

    return sorted(result)


class FilterImpl(Filter):
    """
    Attributes:
        cache_dir: Fingerprint cache directory, never scanned
        include_exts: When non-empty, only files with these extensions are scanned
        exclude_exts: Files with these extensions are never scanned
        excluded_dirs: Directories skipped together with everything below them
    """

    def __init__(self, cache_dir: str, includes: str = "", excludes: str = "",
                 excluded_dirs: Iterable[str] = ()):
        self.cache_dir = get_abs_path(cache_dir)
        self.include_exts = parse_types(includes)
        self.exclude_exts = parse_types(excludes)
        self.excluded_dirs = sorted(get_abs_path(d) for d in excluded_dirs if d)

    @property
    def spec(self) -> str:
        """Stable description of this filter, part of the cache identity."""
        return ";".join([
            "include=" + ",".join(self.include_exts),
            "exclude=" + ",".join(self.exclude_exts),
            "dirs=" + ",".join(self.excluded_dirs),
        ])

    def should_skip(self, path: str, is_dir: bool) -> bool:
        if same_or_in_folder(self.cache_dir, path):
            logger.debug(f"Skipping cache directory: {path}")
            return True

        if is_dir:
            if FilterImpl._is_system_trash(path):
                logger.debug(f"Skipping system trash directory: {path}")
                return True
            if any(same_or_in_folder(d, path) for d in self.excluded_dirs):
                logger.debug(f"Skipping excluded directory: {path}")
                return True
            return False

        ext = os.path.splitext(path)[1].lower()
        if self.include_exts and ext not in self.include_exts:
            return True
        if ext in self.exclude_exts:
            return True
        return False

    @staticmethod
    def _is_system_trash(path: str) -> bool:
        """Check if path is an OS trash/recycle bin directory (cross-platform)."""
        name = os.path.basename(path)
        if sys.platform == "win32":
            return name.lower() in ("$recycle.bin", "recycler")
        if sys.platform == "darwin":
            return name == ".Trash"
        # Linux/BSD: freedesktop.org standard locations
        return (
            name.startswith(".Trash-")
            or name == ".Trash"
            or path.endswith(os.path.join(".local", "share", "Trash"))
        )
