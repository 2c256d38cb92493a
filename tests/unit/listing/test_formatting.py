"""Tests for size, date, permission and owner column formatters."""

from __future__ import annotations

import os
import time
import unittest
from pathlib import Path
from unittest import mock

from lazydired.errors import UnknownTimeFormatError
from lazydired.listing.formatting import (
    IdDisplay,
    SizeMode,
    TimeFormat,
    format_date,
    format_group,
    format_mode,
    format_number,
    format_owner,
    format_size,
    lookup_time_format,
    time_format_name,
    trail_char,
)
from lazydired.listing.types import DirEntry

SAMPLE_TIME = time.mktime((2023, 3, 5, 14, 7, 9, 0, 0, -1))


class FormatNumberTests(unittest.TestCase):
    def test_exact_mode_prints_integer_byte_count(self) -> None:
        self.assertEqual(format_number(0, SizeMode.EXACT), "0")
        self.assertEqual(format_number(1_500_000, SizeMode.EXACT), "1500000")

    def test_decimal_mode_scales_by_thousands(self) -> None:
        self.assertEqual(format_number(999, SizeMode.HUMAN_DECIMAL), "999B")
        self.assertEqual(format_number(1000, SizeMode.HUMAN_DECIMAL), "1.0k")
        self.assertEqual(format_number(1_500_000, SizeMode.HUMAN_DECIMAL), "1.5M")
        self.assertEqual(format_number(12_345, SizeMode.HUMAN_DECIMAL), "12k")
        self.assertEqual(format_number(999_999, SizeMode.HUMAN_DECIMAL), "999k")

    def test_binary_mode_scales_by_kibibytes(self) -> None:
        self.assertEqual(format_number(1023, SizeMode.HUMAN_BINARY), "1023B")
        self.assertEqual(format_number(1024, SizeMode.HUMAN_BINARY), "1.0K")
        self.assertEqual(format_number(1_048_576, SizeMode.HUMAN_BINARY), "1.0M")
        self.assertEqual(format_number(10_240, SizeMode.HUMAN_BINARY), "10K")

    def test_human_modes_stop_at_largest_suffix(self) -> None:
        self.assertEqual(format_number(10**30, SizeMode.HUMAN_DECIMAL), "1000000Y")
        self.assertTrue(format_number(2**100, SizeMode.HUMAN_BINARY).endswith("Y"))

    def test_device_entries_show_major_and_minor(self) -> None:
        entry = DirEntry(name="sda1", full_path=Path("/dev/sda1"), mode=0o060660, rdev=os.makedev(8, 1))
        self.assertEqual(format_size(entry, SizeMode.HUMAN_DECIMAL), "  8,   1")


class FormatDateTests(unittest.TestCase):
    def test_fixed_layouts(self) -> None:
        now = SAMPLE_TIME + 86400
        self.assertEqual(format_date(SAMPLE_TIME, TimeFormat.TOUCH, now), "2303051407")
        self.assertEqual(format_date(SAMPLE_TIME, TimeFormat.TOUCH_LONG, now), "2303051407.09")
        self.assertEqual(format_date(SAMPLE_TIME, TimeFormat.DOS, now), "Mar  5 2023  14:07")
        self.assertEqual(format_date(SAMPLE_TIME, TimeFormat.DOS_LONG, now), "Mar  5 2023  14:07:09")
        self.assertEqual(format_date(SAMPLE_TIME, TimeFormat.FULL, now), "Mar  5 14:07:09 2023")
        self.assertEqual(format_date(SAMPLE_TIME, TimeFormat.SECONDS, now), f"{int(SAMPLE_TIME):10d}")

    def test_compact_shows_time_only_within_six_months(self) -> None:
        self.assertEqual(format_date(SAMPLE_TIME, TimeFormat.COMPACT, SAMPLE_TIME + 86400), "Mar  5 14:07")
        self.assertEqual(format_date(SAMPLE_TIME, TimeFormat.COMPACT, SAMPLE_TIME - 86400), "Mar  5 14:07")
        self.assertEqual(format_date(SAMPLE_TIME, TimeFormat.COMPACT, SAMPLE_TIME + 400 * 86400), "Mar  5  2023")

    def test_unconvertible_timestamp_renders_blank_padding(self) -> None:
        rendered = format_date(1e20, TimeFormat.COMPACT, 0.0)
        self.assertEqual(rendered, " " * len("Mar  5  2023"))

    def test_lookup_time_format_accepts_names_and_values(self) -> None:
        self.assertIs(lookup_time_format("default"), TimeFormat.COMPACT)
        self.assertIs(lookup_time_format("Touch-Long"), TimeFormat.TOUCH_LONG)
        self.assertIs(lookup_time_format("dos_long"), TimeFormat.DOS_LONG)
        self.assertIs(lookup_time_format(6), TimeFormat.SECONDS)
        self.assertIs(lookup_time_format("5"), TimeFormat.FULL)
        self.assertEqual(time_format_name(TimeFormat.DOS_LONG), "dos-long")

    def test_lookup_time_format_rejects_unknown_values(self) -> None:
        for value in ("iso", "", 7, -1, True):
            with self.subTest(value=value):
                with self.assertRaises(UnknownTimeFormatError):
                    lookup_time_format(value)
        with self.assertRaises(LookupError):
            lookup_time_format("nope")


class FormatModeTests(unittest.TestCase):
    def test_type_and_permission_characters(self) -> None:
        cases = {
            0o100644: "-rw-r--r--",
            0o040755: "drwxr-xr-x",
            0o120777: "lrwxrwxrwx",
            0o010644: "prw-r--r--",
            0o020666: "crw-rw-rw-",
            0o060660: "brw-rw----",
            0o140755: "srwxr-xr-x",
        }
        for mode, expected in cases.items():
            with self.subTest(mode=oct(mode)):
                self.assertEqual(format_mode(mode), expected)

    def test_special_bits_replace_execute_characters(self) -> None:
        self.assertEqual(format_mode(0o104755), "-rwsr-xr-x")
        self.assertEqual(format_mode(0o104644), "-rwSr--r--")
        self.assertEqual(format_mode(0o102755), "-rwxr-sr-x")
        self.assertEqual(format_mode(0o102745), "-rwxr-Sr-x")
        self.assertEqual(format_mode(0o041777), "drwxrwxrwt")
        self.assertEqual(format_mode(0o041776), "drwxrwxrwT")

    def test_trail_characters(self) -> None:
        self.assertEqual(trail_char(0o100755), "*")
        self.assertEqual(trail_char(0o100644), "")
        self.assertEqual(trail_char(0o040755), "/")
        self.assertEqual(trail_char(0o120777), "@")
        self.assertEqual(trail_char(0o010644), "|")
        self.assertEqual(trail_char(0o140644), "=")


class FormatOwnerTests(unittest.TestCase):
    def test_names_are_resolved_unless_numeric_display_is_forced(self) -> None:
        with mock.patch("lazydired.listing.formatting.user_name", return_value="alice"), mock.patch(
            "lazydired.listing.formatting.group_name", return_value="staff"
        ):
            self.assertEqual(format_owner(501, IdDisplay.NAME), "alice")
            self.assertEqual(format_group(20, IdDisplay.NAME), "staff")
            self.assertEqual(format_owner(501, IdDisplay.NUMERIC), "501")
            self.assertEqual(format_group(20, IdDisplay.HIDDEN), "20")

    def test_unresolvable_ids_fall_back_to_decimal(self) -> None:
        with mock.patch("lazydired.listing.formatting.user_name", return_value=None):
            self.assertEqual(format_owner(4242, IdDisplay.NAME), "4242")

    def test_long_names_are_truncated_to_field_capacity(self) -> None:
        with mock.patch("lazydired.listing.formatting.user_name", return_value="x" * 100):
            self.assertEqual(format_owner(1, IdDisplay.NAME), "x" * 31)


if __name__ == "__main__":
    unittest.main()
