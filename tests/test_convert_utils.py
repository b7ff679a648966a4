"""
Tests for conversion utilities used in summaries and prompts.
"""
import time
from dedup.core.models import DeduplicationStats
from dedup.utils.convert_utils import ConvertUtils


class TestBytesToHuman:

    def test_small_sizes_in_bytes(self):
        assert ConvertUtils.bytes_to_human(0) == "0B"
        assert ConvertUtils.bytes_to_human(11) == "11B"
        assert ConvertUtils.bytes_to_human(1023) == "1023B"

    def test_binary_units(self):
        assert ConvertUtils.bytes_to_human(1024) == "1.00KB"
        assert ConvertUtils.bytes_to_human(1536) == "1.50KB"
        assert ConvertUtils.bytes_to_human(1024 * 1024) == "1.00MB"
        assert ConvertUtils.bytes_to_human(3 * 1024 ** 3) == "3.00GB"

    def test_negative_is_zero(self):
        assert ConvertUtils.bytes_to_human(-5) == "0B"


class TestNsToHuman:

    def test_formats_local_time(self):
        ns = 1_600_000_000 * 1_000_000_000
        expected = time.strftime("%Y-%m-%d", time.localtime(1_600_000_000))
        assert ConvertUtils.ns_to_human(ns, "%Y-%m-%d") == expected


class TestSummary:

    def test_summary_lines(self):
        stats = DeduplicationStats(total_files=7, total_folders=1, total_bytes=2048,
                                   removed_files=3, removed_bytes=1024)

        summary = stats.print_summary()

        assert summary.splitlines() == [
            "<Summary>",
            "Scanned Files:    7",
            "Scanned Folders:  1",
            "Scanned Size:     2.00KB",
            "Deleted Files:    3",
            "Deleted Size:     1.00KB",
        ]

    def test_list_mode_and_errors(self):
        stats = DeduplicationStats(removed_files=1, errors=2)

        summary = stats.print_summary(list_only=True)

        assert "Duplicated Files: 1" in summary
        assert summary.splitlines()[-1] == "Errors:           2"
