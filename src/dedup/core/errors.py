"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/errors.py
Exception types shared by the scan, cache and resolution layers.
"""

from typing import Optional


class ConfigurationError(ValueError):
    """
    Invalid run configuration (policy, filter, hash algorithm or root paths).
    Raised before any scanning starts; nothing is persisted.
    """


class CacheFormatError(ValueError):
    """A persisted fingerprint cache contains a malformed line."""

    def __init__(self, message: str, line_number: Optional[int] = None):
        if line_number is not None:
            message = f"line {line_number}: {message}"
        super().__init__(message)
        self.line_number = line_number


class OperationCancelled(RuntimeError):
    """Cooperative cancellation was requested while work was in progress."""
