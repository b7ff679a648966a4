"""
Shared fixtures for deduplication core tests.
Creates isolated temporary directories with controlled test files.
"""
import os
import pytest
import tempfile
from pathlib import Path
from typing import Dict
import sys

# Add src/ to sys.path so the 'dedup' package is importable without installation
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root / "src"))

from dedup.core.filter import FilterImpl
from dedup.services.updater import UpdaterImpl


@pytest.fixture
def temp_dir():
    """Creates isolated temporary directory, auto-cleanup after test."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(os.path.realpath(tmpdir))


@pytest.fixture
def cache_dir(temp_dir) -> Path:
    """Fingerprint cache directory outside of the scanned tree."""
    path = temp_dir / "cache"
    path.mkdir()
    return path


@pytest.fixture
def scan_root(temp_dir) -> Path:
    path = temp_dir / "data"
    path.mkdir()
    return path


@pytest.fixture
def updater():
    return UpdaterImpl()


@pytest.fixture
def file_filter(cache_dir):
    return FilterImpl(cache_dir=str(cache_dir))


def _set_mtime(path: Path, seconds: int) -> None:
    os.utime(path, ns=(seconds * 1_000_000_000, seconds * 1_000_000_000))


@pytest.fixture
def set_mtime():
    """Sets a deterministic modification time (whole seconds)."""
    return _set_mtime


@pytest.fixture
def test_files(scan_root) -> Dict[str, Path]:
    """
    Creates controlled test files for deduplication scenarios:
    - 2 identical files (duplicates)
    - 2 identical files in a different size class (duplicates)
    - 2 unique files (different content)
    - 1 copy of the first pair inside a subdirectory
    """
    files = {}

    content_a = b"A" * 1024
    files["dup1_a"] = scan_root / "dup1_a.txt"
    files["dup1_b"] = scan_root / "dup1_bb.txt"
    files["dup1_a"].write_bytes(content_a)
    files["dup1_b"].write_bytes(content_a)

    content_b = b"B" * 2048
    files["dup2_a"] = scan_root / "dup2_a.txt"
    files["dup2_b"] = scan_root / "dup2_bb.txt"
    files["dup2_a"].write_bytes(content_b)
    files["dup2_b"].write_bytes(content_b)

    files["unique1"] = scan_root / "unique1.txt"
    files["unique1"].write_bytes(b"C" * 1500)
    files["unique2"] = scan_root / "unique2.jpg"
    files["unique2"].write_bytes(b"D" * 2500)

    subdir = scan_root / "subdir"
    subdir.mkdir()
    files["sub_dup"] = subdir / "dup1_in_subdir.txt"
    files["sub_dup"].write_bytes(content_a)

    for i, path in enumerate(files.values()):
        _set_mtime(path, 1_600_000_000 + i)

    return files
