"""Tests for windowed content extraction, elision markers and match spans."""

from __future__ import annotations

import re
import tempfile
import unittest
from pathlib import Path

from srctree.search import (
    ContentLine,
    Elision,
    ExtractStatus,
    extract_content,
    match_spans,
    merge_windows,
)
from srctree.search.content import split_lines


class ContentExtractTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.root = Path(self._tmp.name)

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def write_lines(self, name: str, lines: list[str]) -> Path:
        path = self.root / name
        path.write_text("\n".join(lines) + "\n", encoding="utf-8")
        return path

    def test_no_pattern_returns_every_line_unmarked(self) -> None:
        path = self.write_lines("a.txt", ["one", "two", "three"])

        extract = extract_content(path)

        self.assertIs(extract.status, ExtractStatus.OK)
        self.assertEqual(extract.total_lines, 3)
        self.assertEqual(
            list(extract.items),
            [ContentLine(1, "one"), ContentLine(2, "two"), ContentLine(3, "three")],
        )

    def test_zero_context_yields_single_line_windows_with_one_elision(self) -> None:
        lines = [f"line {n}" for n in range(1, 11)]
        lines[2] = "hit three"
        lines[6] = "hit seven"
        path = self.write_lines("ten.txt", lines)

        extract = extract_content(path, "hit", context=0)

        self.assertEqual([line.number for line in extract.lines], [3, 7])
        elisions = [item for item in extract.items if isinstance(item, Elision)]
        self.assertEqual(elisions, [Elision(after_line=3, before_line=7)])
        self.assertIsInstance(extract.items[1], Elision)
        self.assertTrue(all(line.is_match for line in extract.lines))

    def test_overlapping_windows_merge_without_duplicate_lines(self) -> None:
        lines = [f"line {n}" for n in range(1, 11)]
        lines[2] = "match"
        lines[3] = "match"
        path = self.write_lines("ten.txt", lines)

        extract = extract_content(path, "match", context=2)

        self.assertEqual([line.number for line in extract.lines], [1, 2, 3, 4, 5, 6])
        self.assertEqual([line.number for line in extract.lines if line.is_match], [3, 4])
        self.assertFalse(any(isinstance(item, Elision) for item in extract.items))

    def test_touching_windows_merge(self) -> None:
        path = self.write_lines("todo.txt", ["foo", "TODO fix", "bar", "TODO later"])

        extract = extract_content(path, "TODO", context=1)

        self.assertEqual([line.number for line in extract.lines], [1, 2, 3, 4])
        self.assertEqual(len(extract.items), 4)
        self.assertEqual(extract.match_count, 2)

    def test_whole_file_returns_all_lines_regardless_of_matches(self) -> None:
        path = self.write_lines("todo.txt", ["foo", "TODO fix", "bar", "TODO later"])

        with_matches = extract_content(path, "TODO", whole_file=True)
        without_matches = extract_content(path, "absent", whole_file=True)

        self.assertEqual(len(with_matches.lines), 4)
        self.assertEqual([line.is_match for line in with_matches.lines], [False, True, False, True])
        self.assertIs(without_matches.status, ExtractStatus.OK)
        self.assertEqual(len(without_matches.lines), 4)
        self.assertEqual(without_matches.match_count, 0)

    def test_windowed_search_without_hits_is_no_matches(self) -> None:
        path = self.write_lines("a.txt", ["alpha", "beta"])

        extract = extract_content(path, "gamma", context=3)

        self.assertIs(extract.status, ExtractStatus.NO_MATCHES)
        self.assertEqual(extract.items, ())
        self.assertEqual(extract.total_lines, 2)
        self.assertIsNone(extract.error)

    def test_read_failure_is_reported_not_raised(self) -> None:
        extract = extract_content(self.root / "missing.txt", "x")

        self.assertIs(extract.status, ExtractStatus.READ_ERROR)
        self.assertIsInstance(extract.error, OSError)

    def test_highlight_records_non_overlapping_spans_for_matches(self) -> None:
        path = self.write_lines("a.txt", ["aaaa", "b", "xaax"])

        extract = extract_content(path, re.compile("aa"), whole_file=True, highlight=True)

        self.assertEqual(extract.lines[0].spans, ((0, 2), (2, 4)))
        self.assertEqual(extract.lines[1].spans, ())
        self.assertEqual(extract.lines[2].spans, ((1, 3),))
        self.assertEqual(extract_content(path, "aa", whole_file=True).lines[0].spans, ())

    def test_leading_bom_is_stripped_before_matching(self) -> None:
        path = self.root / "bom.py"
        path.write_bytes(b"\xef\xbb\xbfimport os\nx = 1\n")

        extract = extract_content(path, "^import")

        self.assertEqual(extract.match_count, 1)
        self.assertEqual(extract.lines[0].text, "import os")

    def test_undecodable_bytes_fall_back_to_latin1(self) -> None:
        path = self.root / "legacy.txt"
        path.write_bytes(b"caf\xe9\n")

        extract = extract_content(path)

        self.assertEqual(extract.lines[0].text, "caf\xe9")

    def test_match_spans_skip_empty_matches(self) -> None:
        self.assertEqual(match_spans(re.compile("a*"), "baab"), ((1, 3),))

    def test_merge_windows_clamps_to_file_bounds(self) -> None:
        self.assertEqual(merge_windows([1, 10], 3, 10), [(1, 4), (7, 10)])
        self.assertEqual(merge_windows([2, 5], 1, 10), [(1, 6)])

    def test_split_lines_handles_crlf_and_missing_final_newline(self) -> None:
        self.assertEqual(split_lines("a\r\nb\r\n"), ["a", "b"])
        self.assertEqual(split_lines("a\nb"), ["a", "b"])
        self.assertEqual(split_lines("a\n\n"), ["a", ""])
        self.assertEqual(split_lines(""), [])


if __name__ == "__main__":
    unittest.main()
