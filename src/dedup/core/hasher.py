"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

hasher.py
Implements file hashing utilities with pluggable hash algorithms.

HasherImpl streams file content through a fixed-size buffer, so peak memory
does not depend on file size. A single hash context is reused and reset
between files.
"""

import hashlib
from typing import BinaryIO, Callable, Dict, Optional

import xxhash

from dedup.core.errors import ConfigurationError, OperationCancelled
from dedup.core.interfaces import Hasher, HashAlgorithm, HashContext

DEFAULT_BUFFER_SIZE = 512 * 1024


class Sha256AlgorithmImpl(HashAlgorithm):
    name = "sha256"
    digest_size = 32

    def new(self) -> HashContext:
        return hashlib.sha256()


# Use the same way to implement and use any other hashing algorithm
class XXHashAlgorithmImpl(HashAlgorithm):
    """xxHash 128-bit. Much faster than SHA-256 but not cryptographic."""
    name = "xxh128"
    digest_size = 16

    def new(self) -> HashContext:
        return xxhash.xxh3_128()


HASH_ALGORITHMS: Dict[str, Callable[[], HashAlgorithm]] = {
    Sha256AlgorithmImpl.name: Sha256AlgorithmImpl,
    XXHashAlgorithmImpl.name: XXHashAlgorithmImpl,
}


def get_hash_algorithm(name: str) -> HashAlgorithm:
    """Returns the algorithm registered under `name`."""
    try:
        return HASH_ALGORITHMS[name.strip().lower()]()
    except KeyError:
        raise ConfigurationError(
            f"Unknown hash algorithm: '{name}'. Valid options: {', '.join(HASH_ALGORITHMS)}"
        ) from None


class HasherImpl(Hasher):
    """
    A hasher implementation that supports any algorithm via the HashAlgorithm interface.
    Read errors are propagated to the caller.
    """

    def __init__(self, algorithm: Optional[HashAlgorithm] = None, buffer_size: int = DEFAULT_BUFFER_SIZE):
        if buffer_size <= 0:
            raise ValueError("Buffer size must be positive")
        self.algorithm = algorithm or Sha256AlgorithmImpl()
        self.buffer_size = buffer_size
        self._buffer = bytearray(buffer_size)
        self._context = self.algorithm.new()

    @property
    def digest_size(self) -> int:
        return self.algorithm.digest_size

    def reset(self) -> None:
        """Discards the current hash state."""
        self._context = self.algorithm.new()

    def compute_digest(self, path: str, stopped_flag: Optional[Callable[[], bool]] = None) -> bytes:
        """Computes the digest of the whole file at `path`."""
        with open(path, 'rb') as f:
            return self.compute_stream_digest(f, stopped_flag=stopped_flag)

    def compute_stream_digest(self, stream: BinaryIO,
                              stopped_flag: Optional[Callable[[], bool]] = None) -> bytes:
        """
        Computes the digest of everything left in `stream`.

        Raises:
            OperationCancelled: if stopped_flag returns True between two reads
            OSError: on read failure
        """
        self.reset()
        view = memoryview(self._buffer)
        while True:
            if stopped_flag and stopped_flag():
                raise OperationCancelled("Hashing cancelled")
            n = stream.readinto(view)
            if not n:
                break
            self._context.update(view[:n])
        return self._context.digest()
