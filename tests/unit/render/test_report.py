"""Tests for markdown/text report rows, content blocks and formatting helpers."""

from __future__ import annotations

import os
import re
import tempfile
import unittest
from datetime import datetime, timezone
from pathlib import Path

from srctree.render import (
    ReportOptions,
    display_text,
    format_modified,
    format_size,
    guess_language,
    highlight_spans,
    iter_report,
)
from srctree.render.format import HIGHLIGHT_END, HIGHLIGHT_START
from srctree.render.report import excerpt_lines, file_row, header_lines
from srctree.search import ContentExtract, ContentLine, Elision, ExtractStatus
from srctree.tree_model import Entry, EntryKind, SortDirection, SortKey, WalkOptions

GENERATED_AT = datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc)


class FormatHelperTests(unittest.TestCase):
    def test_format_size_uses_integer_division(self) -> None:
        self.assertEqual(format_size(0), "0B")
        self.assertEqual(format_size(1023), "1023B")
        self.assertEqual(format_size(1536), "1K")
        self.assertEqual(format_size(5 * 1_048_576 + 7), "5M")
        self.assertEqual(format_size(3 * 1_073_741_824), "3G")

    def test_format_modified(self) -> None:
        self.assertEqual(format_modified(None), "unknown")
        self.assertEqual(format_modified(0), "1970-01-01T00:00:00+00:00")

    def test_display_text_replaces_undecodable_name_bytes(self) -> None:
        self.assertEqual(display_text(os.fsdecode(b"bad\xffname")), "bad\ufffdname")
        self.assertEqual(display_text("caf\u00e9.txt"), "caf\u00e9.txt")

    def test_highlight_spans_wraps_each_occurrence(self) -> None:
        line = ContentLine(number=1, text="a TODO b TODO", is_match=True, spans=((2, 6), (9, 13)))
        self.assertEqual(
            highlight_spans(line),
            f"a {HIGHLIGHT_START}TODO{HIGHLIGHT_END} b {HIGHLIGHT_START}TODO{HIGHLIGHT_END}",
        )

    def test_guess_language_from_pygments(self) -> None:
        self.assertEqual(guess_language("main.py"), "python")
        self.assertEqual(guess_language("notes.no-such-language"), "text")


class ReportRenderingTests(unittest.TestCase):
    def test_header_mentions_filters_pattern_and_non_default_sort(self) -> None:
        walk_options = WalkOptions(filters=("ext:py",), sort_key=SortKey.DATE, sort_direction=SortDirection.DESC)
        options = ReportOptions(pattern=re.compile("TODO"))

        lines = header_lines(Path("/work/project"), walk_options, options, GENERATED_AT)

        self.assertEqual(
            lines,
            [
                "# 📁 Project Source Tree: project",
                "Generated on 2024-01-02T03:04:05+00:00",
                "Filters: ['ext:py']",
                "Content Pattern: TODO",
                "Sorting: Date (Desc)",
                "",
            ],
        )

    def test_text_header_omits_defaults(self) -> None:
        lines = header_lines(Path("."), WalkOptions(), ReportOptions(output_format="text"), GENERATED_AT)
        self.assertEqual(lines, ["Project Source Tree: .", "Generated on 2024-01-02T03:04:05+00:00", ""])

    def test_file_row_layout(self) -> None:
        entry = Entry(
            path=Path("/p/main.py"),
            name="main.py",
            is_dir=False,
            size=2048,
            mtime_ns=0,
            extension="py",
            media_type="text/x-python",
            kind=EntryKind.REGULAR,
        )
        self.assertEqual(
            file_row(entry, "  ", ReportOptions()),
            "  📄 main.py (2K, 1970-01-01T00:00:00+00:00) [text/x-python].py",
        )
        self.assertTrue(file_row(entry, "", ReportOptions(output_format="text")).startswith("[FILE] main.py"))

    def test_excerpt_rows_for_windows_and_failures(self) -> None:
        extract = ContentExtract(
            status=ExtractStatus.OK,
            items=(ContentLine(3, "hit", True), Elision(3, 7), ContentLine(7, "hit again", True)),
            total_lines=10,
            match_count=2,
        )
        self.assertEqual(
            excerpt_lines(extract, "", highlight=False),
            [
                "     ┌ Total lines: 10",
                "     │",
                "   3 │> hit",
                "     │",
                "   ⋯ │ ...",
                "     │",
                "   7 │> hit again",
                "     │",
            ],
        )
        no_matches = ContentExtract(status=ExtractStatus.NO_MATCHES, total_lines=2)
        self.assertEqual(
            excerpt_lines(no_matches, "  ", highlight=False),
            ["       ┌ Total lines: 2", "       │", "      ! No matches found", "       │"],
        )
        failed = ContentExtract(status=ExtractStatus.READ_ERROR, error=OSError("boom"))
        self.assertEqual(excerpt_lines(failed, "", highlight=False), ["    ! Cannot read file"])

    def test_full_markdown_report_with_content(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp) / "proj"
            root.mkdir()
            (root / "app.py").write_text("import os\n# TODO: fix\n", encoding="utf-8")
            (root / "big.txt").write_text("x" * 50, encoding="utf-8")
            (root / "lib").mkdir()
            (root / "lib" / "util.py").write_text("pass\n", encoding="utf-8")

            lines = list(
                iter_report(
                    root,
                    WalkOptions(max_depth=0),
                    ReportOptions(show_content=True, max_file_size=40, pattern=re.compile("TODO")),
                    GENERATED_AT,
                )
            )

        self.assertEqual(lines[0], "# 📁 Project Source Tree: proj")
        self.assertEqual(lines[-1], "_End of source tree_")
        self.assertIn("📁 **lib/**", lines)
        util_row = next(line for line in lines if "util.py" in line)
        self.assertTrue(util_row.startswith("  📄 util.py ("))
        self.assertIn("  ```python", lines)
        self.assertIn("   2 │> # TODO: fix", lines)
        self.assertNotIn("   1 │  import os", lines)
        self.assertIn("  (File not displayed - 50B)", lines)
        self.assertIn("      ! No matches found", lines)

    def test_text_report_with_highlight_and_whole_file(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            (root / "notes.txt").write_text("keep\nTODO now\n", encoding="utf-8")

            lines = list(
                iter_report(
                    root,
                    WalkOptions(),
                    ReportOptions(
                        output_format="text",
                        show_content=True,
                        pattern=re.compile("TODO"),
                        whole_file=True,
                        highlight=True,
                    ),
                    GENERATED_AT,
                )
            )

        self.assertIn("  --- Content Start ---", lines)
        self.assertIn("   1 │  keep", lines)
        self.assertIn(f"   2 │> {HIGHLIGHT_START}TODO{HIGHLIGHT_END} now", lines)
        self.assertIn("  --- Content End ---", lines)
        self.assertEqual(lines[-1], "End of source tree")

    def test_scan_failure_is_rendered_inline(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            (root / "inner").mkdir()
            (root / "inner" / "loop").symlink_to(root)

            lines = list(iter_report(root, WalkOptions(max_depth=0), ReportOptions(), GENERATED_AT))

        failure = next(line for line in lines if "Error reading directory" in line)
        self.assertTrue(failure.startswith("    ! Error reading directory '"))


if __name__ == "__main__":
    unittest.main()
