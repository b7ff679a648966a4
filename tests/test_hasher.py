"""
Unit tests for HasherImpl with SHA-256 and xxHash128 algorithms.
Verifies streaming digests are content-only, fixed-length and errors propagate.
"""
import hashlib
import io
import pytest
from dedup.core.errors import ConfigurationError, OperationCancelled
from dedup.core.hasher import HasherImpl, Sha256AlgorithmImpl, XXHashAlgorithmImpl, get_hash_algorithm


class TestHasherImpl:
    """Test digest computation with bounded-buffer streaming."""

    def test_same_content_produces_same_digest(self, temp_dir):
        """Identical bytes must produce identical digests regardless of name or mtime."""
        content = b"test content " * 1000
        first = temp_dir / "first.bin"
        second = temp_dir / "a_much_longer_name.dat"
        first.write_bytes(content)
        second.write_bytes(content)

        hasher = HasherImpl(Sha256AlgorithmImpl())
        digest1 = hasher.compute_digest(str(first))
        digest2 = hasher.compute_digest(str(second))

        assert digest1 == digest2
        assert isinstance(digest1, bytes)
        assert len(digest1) == 32  # SHA-256 = 32 bytes

    def test_different_content_produces_different_digests(self, temp_dir):
        (temp_dir / "a").write_bytes(b"A" * 1024)
        (temp_dir / "b").write_bytes(b"B" * 1024)

        hasher = HasherImpl()
        assert hasher.compute_digest(str(temp_dir / "a")) != hasher.compute_digest(str(temp_dir / "b"))

    def test_digest_matches_hashlib_across_buffer_boundaries(self, temp_dir):
        """
        Small buffer forces many reads; the streamed digest must equal the one-shot digest.
        Also proves the context is reset between files.
        """
        content = bytes(range(256)) * 41  # not a multiple of the buffer size
        path = temp_dir / "data.bin"
        path.write_bytes(content)

        hasher = HasherImpl(Sha256AlgorithmImpl(), buffer_size=100)
        hasher.compute_digest(str(path))
        assert hasher.compute_digest(str(path)) == hashlib.sha256(content).digest()

    def test_empty_file_has_digest_of_empty_content(self, temp_dir):
        path = temp_dir / "empty"
        path.write_bytes(b"")

        assert HasherImpl().compute_digest(str(path)) == hashlib.sha256(b"").digest()

    def test_xxhash_algorithm_produces_16_byte_digest(self):
        hasher = HasherImpl(XXHashAlgorithmImpl())
        digest = hasher.compute_stream_digest(io.BytesIO(b"hello world"))

        assert len(digest) == 16
        assert hasher.digest_size == 16
        assert digest == hasher.compute_stream_digest(io.BytesIO(b"hello world"))

    def test_missing_file_raises_os_error(self, temp_dir):
        """Read failures are propagated, never swallowed."""
        with pytest.raises(OSError):
            HasherImpl().compute_digest(str(temp_dir / "does_not_exist"))

    def test_cancellation_between_buffers(self):
        calls = {"count": 0}

        def stopped_flag():
            calls["count"] += 1
            return calls["count"] > 2

        hasher = HasherImpl(buffer_size=10)
        with pytest.raises(OperationCancelled):
            hasher.compute_stream_digest(io.BytesIO(b"x" * 100), stopped_flag=stopped_flag)

    def test_rejects_non_positive_buffer(self):
        with pytest.raises(ValueError):
            HasherImpl(buffer_size=0)


class TestGetHashAlgorithm:

    def test_known_names(self):
        assert get_hash_algorithm("sha256").name == "sha256"
        assert get_hash_algorithm(" XXH128 ").name == "xxh128"

    def test_unknown_name_is_configuration_error(self):
        with pytest.raises(ConfigurationError, match="Unknown hash algorithm"):
            get_hash_algorithm("md5")
