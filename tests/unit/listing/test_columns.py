from __future__ import annotations

import unittest
from pathlib import Path

from lazydired.listing.columns import (
    DetailMode,
    DetailsMask,
    FieldWidths,
    clamp_name_width,
    compute_field_widths,
    layout_columns,
)
from lazydired.listing.formatting import IdDisplay, SizeMode, TimeFormat
from lazydired.listing.types import DirEntry

WIDTHS = FieldWidths(blocks=2, mode=10, links=1, uid=4, gid=4, size=4, date=12, name=10)
FULL_WIDTH = 59
DETAIL_COLUMNS = DetailsMask.ALL & ~DetailsMask.BLOCKS

# Order in which AUTO gives up columns as the width shrinks.
SHED_ORDER = (
    DetailsMask.LINKS,
    DetailsMask.GID,
    DetailsMask.UID,
    DetailsMask.MODE,
    DetailsMask.DATE,
    DetailsMask.SIZE,
)


class LayoutColumnsTests(unittest.TestCase):
    def test_all_detail_columns_fit_at_full_width(self) -> None:
        layout = layout_columns(WIDTHS, FULL_WIDTH, DetailMode.AUTO)
        self.assertEqual(layout.mask, DETAIL_COLUMNS)
        self.assertEqual(layout.name_width, 16)

    def test_link_count_sheds_first(self) -> None:
        layout = layout_columns(WIDTHS, FULL_WIDTH - 1, DetailMode.AUTO)
        self.assertEqual(layout.mask, DETAIL_COLUMNS & ~DetailsMask.LINKS)

    def test_size_is_the_last_column_standing(self) -> None:
        self.assertEqual(layout_columns(WIDTHS, 22, DetailMode.AUTO).mask, DetailsMask.SIZE)
        self.assertEqual(layout_columns(WIDTHS, 21, DetailMode.AUTO).mask, DetailsMask.NONE)
        self.assertEqual(layout_columns(WIDTHS, 0, DetailMode.AUTO).mask, DetailsMask.NONE)

    def test_dropped_columns_always_form_a_suffix_of_shed_order(self) -> None:
        for width in range(0, FULL_WIDTH + 5):
            with self.subTest(width=width):
                mask = layout_columns(WIDTHS, width, DetailMode.AUTO).mask
                dropped = [column for column in SHED_ORDER if not mask & column]
                self.assertEqual(dropped, list(SHED_ORDER[: len(dropped)]))

    def test_hide_and_show_ignore_width(self) -> None:
        for width in (0, 30, 500):
            with self.subTest(width=width):
                self.assertEqual(layout_columns(WIDTHS, width, DetailMode.HIDE).mask, DetailsMask.NONE)
                self.assertEqual(layout_columns(WIDTHS, width, DetailMode.SHOW).mask, DETAIL_COLUMNS)

    def test_hidden_ids_remove_owner_and_group(self) -> None:
        show = layout_columns(WIDTHS, 10, DetailMode.SHOW, IdDisplay.HIDDEN)
        self.assertFalse(show.mask & (DetailsMask.UID | DetailsMask.GID))
        auto = layout_columns(WIDTHS, FULL_WIDTH - 10, DetailMode.AUTO, IdDisplay.HIDDEN)
        self.assertEqual(auto.mask, DETAIL_COLUMNS & ~(DetailsMask.UID | DetailsMask.GID))

    def test_block_count_column_is_never_selected(self) -> None:
        for mode in DetailMode:
            with self.subTest(mode=mode):
                self.assertFalse(layout_columns(WIDTHS, 1000, mode).mask & DetailsMask.BLOCKS)

    def test_name_budget_is_clamped(self) -> None:
        self.assertEqual(clamp_name_width(3), 16)
        self.assertEqual(clamp_name_width(25), 25)
        self.assertEqual(clamp_name_width(300), 40)


class ComputeFieldWidthsTests(unittest.TestCase):
    def setUp(self) -> None:
        self.entries = [
            DirEntry(
                name="report.csv",
                full_path=Path("/srv/report.csv"),
                mode=0o100644,
                nlink=3,
                uid=1000,
                gid=100,
                size=12345,
                mtime=1_700_000_000,
            ),
            DirEntry(name="x", full_path=Path("/srv/x"), mode=0o100644, uid=5, gid=5, size=7, mtime=1_700_000_000),
            DirEntry(
                name=".a-very-long-hidden-name-that-is-skipped",
                full_path=Path("/srv/.hidden"),
                mode=0o100644,
                nlink=12345,
                size=10**12,
                hidden=True,
            ),
        ]

    def test_widths_cover_visible_entries_only(self) -> None:
        widths = compute_field_widths(
            self.entries,
            time_format=TimeFormat.SECONDS,
            size_mode=SizeMode.EXACT,
            id_display=IdDisplay.NUMERIC,
            detail_mode=DetailMode.AUTO,
            now=1_700_000_000,
        )
        self.assertEqual(
            widths,
            FieldWidths(blocks=2, mode=10, links=1, uid=4, gid=3, size=5, date=10, name=10),
        )

    def test_human_sizes_narrow_the_size_column(self) -> None:
        widths = compute_field_widths(
            self.entries,
            time_format=TimeFormat.SECONDS,
            size_mode=SizeMode.HUMAN_DECIMAL,
            id_display=IdDisplay.NUMERIC,
            detail_mode=DetailMode.SHOW,
            now=1_700_000_000,
        )
        self.assertEqual(widths.size, 3)

    def test_hidden_details_measure_names_only(self) -> None:
        widths = compute_field_widths(
            self.entries,
            time_format=TimeFormat.FULL,
            size_mode=SizeMode.EXACT,
            id_display=IdDisplay.NAME,
            detail_mode=DetailMode.HIDE,
            now=1_700_000_000,
        )
        self.assertEqual(widths, FieldWidths(name=10))


if __name__ == "__main__":
    unittest.main()
