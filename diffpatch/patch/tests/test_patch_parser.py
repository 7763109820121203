import pytest

from diffpatch.errors import (
    InvalidChunkHeaderError,
    InvalidNumberFormatError,
    InvalidPatchFormatError,
)
from diffpatch.patch.models import Chunk, Operation
from diffpatch.patch.parser import (
    parse_chunk_header,
    parse_file_header,
    parse_patch,
    parse_range,
)

GIT_PATCH = """\
diff --git a/file.txt b/file.txt
index 1234567..89abcde 100644
--- a/file.txt
+++ b/file.txt
@@ -1,3 +1,3 @@
 line1
-line2
+line2 modified
 line3
"""

TWO_CHUNK_PATCH = (
    "--- a/src/app.py\n"
    "+++ b/src/app.py\n"
    "@@ -1,2 +1,3 @@\n"
    " import os\n"
    "+import sys\n"
    " \n"
    "@@ -10,2 +11,2 @@ def main():\n"
    "-    return 1\n"
    "+    return 0\n"
    " # end\n"
)

NO_NEWLINE_PATCH = """\
--- a/f.txt
+++ b/f.txt
@@ -1 +1 @@
-old
\\ No newline at end of file
+new
\\ No newline at end of file
"""


class TestParsePatch:
    def test_parse_git_patch(self):
        """Preamble is kept and index lines between headers are skipped."""
        patch = parse_patch(GIT_PATCH)

        assert patch.preamble == "diff --git a/file.txt b/file.txt"
        assert patch.old_file == "file.txt"
        assert patch.new_file == "file.txt"
        assert patch.chunks == [
            Chunk(
                0,
                3,
                0,
                3,
                [
                    Operation.context("line1"),
                    Operation.remove("line2"),
                    Operation.add("line2 modified"),
                    Operation.context("line3"),
                ],
            )
        ]

    def test_parse_multiple_chunks(self):
        """Chunk headers with trailing section text parse into separate chunks."""
        patch = parse_patch(TWO_CHUNK_PATCH)

        assert patch.preamble is None
        assert len(patch.chunks) == 2
        first, second = patch.chunks
        assert (first.old_start, first.old_lines, first.new_start, first.new_lines) == (0, 2, 0, 3)
        assert first.operations[2] == Operation.context("")
        assert (second.old_start, second.new_start) == (9, 10)
        assert second.operations == [
            Operation.remove("    return 1"),
            Operation.add("    return 0"),
            Operation.context("# end"),
        ]

    def test_no_newline_marker_is_skipped(self):
        """The no-newline marker does not become an operation."""
        patch = parse_patch(NO_NEWLINE_PATCH)

        assert patch.chunks[0].operations == [Operation.remove("old"), Operation.add("new")]

    def test_headers_only_patch_has_no_chunks(self):
        """A patch with headers but no hunks is a no-op patch."""
        patch = parse_patch("--- a/f\n+++ b/f\n")

        assert patch.chunks == []
        assert patch.is_empty

    def test_blank_lines_between_chunks_are_ignored(self):
        """Empty lines outside a chunk are tolerated."""
        text = "--- a/f\n+++ b/f\n\n@@ -1 +1 @@\n-a\n+b\n"
        patch = parse_patch(text)

        assert len(patch.chunks) == 1

    def test_dev_null_paths(self):
        """The /dev/null sentinel survives header parsing."""
        text = "--- /dev/null\n+++ b/new.txt\n@@ -0,0 +1,2 @@\n+a\n+b\n"
        patch = parse_patch(text)

        assert patch.old_file == "/dev/null"
        assert patch.is_creation
        assert patch.chunks[0].old_start == 0
        assert patch.chunks[0].old_lines == 0

    def test_crlf_patch_text(self):
        """Carriage returns at line ends do not leak into operations."""
        text = "--- a/f\r\n+++ b/f\r\n@@ -1 +1 @@\r\n-a\r\n+b\r\n"
        patch = parse_patch(text)

        assert patch.old_file == "f"
        assert patch.chunks[0].operations == [Operation.remove("a"), Operation.add("b")]


class TestParseErrors:
    def test_missing_old_header(self):
        """Text without any header is rejected."""
        with pytest.raises(InvalidPatchFormatError, match="Missing '---' header"):
            parse_patch("just some text\n")

    def test_missing_new_header(self):
        """A '---' header without '+++' is rejected."""
        with pytest.raises(InvalidPatchFormatError, match=r"Missing '\+\+\+' header"):
            parse_patch("--- a/f\n@@ -1 +1 @@\n-a\n+b\n")

    def test_new_header_before_old(self):
        """'+++' must follow '---'."""
        with pytest.raises(InvalidPatchFormatError, match="found before '---' header"):
            parse_patch("+++ b/f\n--- a/f\n")

    def test_duplicate_old_header(self):
        """A second '---' before '+++' names its line."""
        with pytest.raises(InvalidPatchFormatError, match="Duplicate '---' header found at line 2"):
            parse_patch("--- a/f\n--- a/g\n+++ b/g\n")

    def test_count_mismatch_names_both_counts(self):
        """Declared and observed counts both appear in the error."""
        text = "--- a/f\n+++ b/f\n@@ -1,2 +1,2 @@\n a\n-b\n"

        with pytest.raises(InvalidPatchFormatError) as exc_info:
            parse_patch(text)

        assert str(exc_info.value) == (
            "Chunk line count mismatch: Header expected (-2, +2), "
            "Parsed content counts (-2, +1)"
        )

    def test_line_without_prefix(self):
        """Every chunk body line needs a recognized prefix."""
        text = "--- a/f\n+++ b/f\n@@ -1 +1 @@\n-a\nno prefix here\n+b\n"

        with pytest.raises(InvalidPatchFormatError, match="Line without context/add/remove prefix"):
            parse_patch(text)

    def test_content_outside_chunk(self):
        """Text between the headers and the first chunk is rejected."""
        text = "--- a/f\n+++ b/f\ngarbage\n@@ -1 +1 @@\n-a\n+b\n"

        with pytest.raises(InvalidPatchFormatError, match="Unexpected content found outside of chunk"):
            parse_patch(text)

    def test_invalid_chunk_header_propagates(self):
        """A malformed '@@' line raises a header error."""
        with pytest.raises(InvalidChunkHeaderError):
            parse_patch("--- a/f\n+++ b/f\n@@ bogus @@\n")


class TestChunkHeader:
    def test_comma_form(self):
        assert parse_chunk_header("@@ -3,4 +5,6 @@") == (2, 4, 4, 6)

    def test_short_form_defaults_count_to_one(self):
        assert parse_chunk_header("@@ -7 +9 @@") == (6, 1, 8, 1)

    def test_short_form_zero_start_defaults_count_to_zero(self):
        assert parse_range("0", "old") == (0, 0)

    def test_zero_count_keeps_start(self):
        """A zero-length range names the line after which it applies."""
        assert parse_range("5,0", "old") == (5, 0)

    def test_section_text_after_header(self):
        assert parse_chunk_header("@@ -1,2 +1,2 @@ def foo():") == (0, 2, 0, 2)

    def test_missing_closing_marker(self):
        with pytest.raises(InvalidChunkHeaderError) as exc_info:
            parse_chunk_header("@@ -1,1 +1,1")
        assert exc_info.value.header == "@@ -1,1 +1,1"

    def test_missing_range_signs(self):
        with pytest.raises(InvalidChunkHeaderError):
            parse_chunk_header("@@ 1,1 1,1 @@")

    def test_non_numeric_start(self):
        with pytest.raises(InvalidNumberFormatError) as exc_info:
            parse_chunk_header("@@ -a,1 +1,1 @@")
        assert exc_info.value.value == "a"
        assert exc_info.value.field == "old start"

    def test_non_numeric_count(self):
        with pytest.raises(InvalidNumberFormatError, match="new line count"):
            parse_chunk_header("@@ -1,1 +1,x @@")


class TestFileHeader:
    def test_strips_prefix(self):
        assert parse_file_header("a/src/main.py") == "src/main.py"
        assert parse_file_header("b/src/main.py") == "src/main.py"

    def test_strips_tab_timestamp(self):
        assert parse_file_header("a/file.txt\t2024-01-01 10:00:00.000000000 +0000") == "file.txt"

    def test_strips_space_timestamp(self):
        assert parse_file_header("old.txt 2024-01-01 10:00:00 +0000") == "old.txt"

    def test_keeps_dev_null(self):
        assert parse_file_header("/dev/null") == "/dev/null"
