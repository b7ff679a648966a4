"""
Tests for path helpers: root normalization, folder containment and file identity.
"""
import os
import pytest
from dedup.core.errors import ConfigurationError
from dedup.core.paths import get_abs_path, normalize_roots, same_or_in_folder, same_underlying_file


class TestSameOrInFolder:

    def test_same_path(self):
        assert same_or_in_folder("/data/photos", "/data/photos") is True

    def test_child(self):
        assert same_or_in_folder("/data", "/data/photos/a.jpg") is True

    def test_sibling_with_common_prefix(self):
        assert same_or_in_folder("/data/photo", "/data/photos") is False

    def test_parent_longer_than_child(self):
        assert same_or_in_folder("/data/photos", "/data") is False


class TestNormalizeRoots:

    def test_trailing_separator_is_removed(self, scan_root):
        assert normalize_roots([str(scan_root) + os.sep]) == [str(scan_root)]

    def test_nested_roots_collapse_to_outermost(self, scan_root):
        inner = scan_root / "inner"
        inner.mkdir()

        assert normalize_roots([str(inner), str(scan_root)]) == [str(scan_root)]
        assert normalize_roots([str(scan_root), str(inner)]) == [str(scan_root)]

    def test_duplicate_roots_collapse(self, scan_root):
        assert normalize_roots([str(scan_root), str(scan_root / ".")]) == [str(scan_root)]

    def test_independent_roots_are_kept_in_order(self, temp_dir):
        a = temp_dir / "a"
        b = temp_dir / "b"
        a.mkdir()
        b.mkdir()

        assert normalize_roots([str(b), str(a)]) == [str(b), str(a)]

    def test_filesystem_root_is_rejected(self):
        with pytest.raises(ConfigurationError, match="not permitted"):
            normalize_roots([os.path.abspath(os.sep)])

    def test_missing_path_is_rejected(self, temp_dir):
        with pytest.raises(ConfigurationError, match="does not exist"):
            normalize_roots([str(temp_dir / "missing")])

    def test_get_abs_path_is_absolute(self):
        result = get_abs_path("relative/dir/")
        assert os.path.isabs(result)
        assert not result.endswith(os.sep)


class TestSameUnderlyingFile:

    def test_distinct_files(self, temp_dir):
        (temp_dir / "a").write_bytes(b"x")
        (temp_dir / "b").write_bytes(b"x")

        assert same_underlying_file(str(temp_dir / "a"), str(temp_dir / "b")) is False

    @pytest.mark.skipif(not hasattr(os, "link"), reason="hardlinks not supported")
    def test_hardlink_is_same_file(self, temp_dir):
        (temp_dir / "a").write_bytes(b"x")
        try:
            os.link(temp_dir / "a", temp_dir / "b")
        except OSError:
            pytest.skip("cannot create hardlinks")

        assert same_underlying_file(str(temp_dir / "a"), str(temp_dir / "b")) is True

    def test_missing_files_fall_back_to_path_equality(self, temp_dir):
        missing = str(temp_dir / "missing")
        assert same_underlying_file(missing, missing) is True
        assert same_underlying_file(missing, str(temp_dir / "other")) is False
