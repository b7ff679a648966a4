"""
Tests for file type parsing and FilterImpl skip decisions.
"""
import os
import sys
import pytest
from dedup.core.errors import ConfigurationError
from dedup.core.filter import FILE_TYPE_EXTENSIONS, FilterImpl, parse_types


class TestParseTypes:

    def test_empty_means_no_restriction(self):
        assert parse_types("") == []
        assert parse_types("   ") == []

    def test_type_names_expand_to_extensions(self):
        result = parse_types("photo")
        assert result == sorted(FILE_TYPE_EXTENSIONS["photo"])
        assert ".jpg" in result

    def test_mixed_names_and_literal_extensions(self):
        result = parse_types(" Audio , .ISO ")
        assert ".mp3" in result
        assert ".iso" in result
        assert result == sorted(result)

    @pytest.mark.parametrize("types", ["pictures", "photo,", ".", "iso"])
    def test_invalid_token_raises(self, types):
        with pytest.raises(ConfigurationError, match="Invalid file type"):
            parse_types(types)


class TestFilterImpl:

    def test_cache_directory_is_always_skipped(self, cache_dir):
        file_filter = FilterImpl(cache_dir=str(cache_dir))

        assert file_filter.should_skip(str(cache_dir), True) is True
        assert file_filter.should_skip(str(cache_dir / "abc.dat"), False) is True
        assert file_filter.should_skip(str(cache_dir) + "_other", True) is False

    def test_include_list(self, cache_dir):
        file_filter = FilterImpl(cache_dir=str(cache_dir), includes="photo")

        assert file_filter.should_skip("/data/a.JPG", False) is False
        assert file_filter.should_skip("/data/a.txt", False) is True
        # Directories are never filtered by type
        assert file_filter.should_skip("/data/folder.txt", True) is False

    def test_exclude_list(self, cache_dir):
        file_filter = FilterImpl(cache_dir=str(cache_dir), excludes="tarball")

        assert file_filter.should_skip("/data/backup.zip", False) is True
        assert file_filter.should_skip("/data/backup.txt", False) is False

    def test_include_then_exclude(self, cache_dir):
        file_filter = FilterImpl(cache_dir=str(cache_dir), includes="photo", excludes=".png")

        assert file_filter.should_skip("/data/a.jpg", False) is False
        assert file_filter.should_skip("/data/a.png", False) is True

    def test_excluded_directories_and_their_children(self, temp_dir, cache_dir):
        excluded = temp_dir / "data" / "skip"
        file_filter = FilterImpl(cache_dir=str(cache_dir), excluded_dirs=[str(excluded)])

        assert file_filter.should_skip(str(excluded), True) is True
        assert file_filter.should_skip(str(excluded / "deeper"), True) is True
        assert file_filter.should_skip(str(temp_dir / "data" / "skipper"), True) is False

    @pytest.mark.skipif(sys.platform == "win32", reason="freedesktop trash layout")
    def test_system_trash_is_skipped(self, cache_dir):
        file_filter = FilterImpl(cache_dir=str(cache_dir))

        assert file_filter.should_skip("/mnt/disk/.Trash-1000", True) is True
        assert file_filter.should_skip(os.path.join("/home/user", ".local", "share", "Trash"), True) is True
        assert file_filter.should_skip("/home/user/Trash", True) is False

    def test_spec_reflects_configuration(self, cache_dir):
        plain = FilterImpl(cache_dir=str(cache_dir))
        photos = FilterImpl(cache_dir=str(cache_dir), includes="photo")

        assert plain.spec == "include=;exclude=;dirs="
        assert plain.spec != photos.spec
        assert photos.spec == FilterImpl(cache_dir=str(cache_dir), includes="PHOTO").spec
