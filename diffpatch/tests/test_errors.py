import errno
from pathlib import Path

from diffpatch.errors import (
    ApplyError,
    DiffPatchError,
    DiffPatchErrorType,
    FileIOError,
    InvalidChunkHeaderError,
    InvalidNumberFormatError,
    InvalidPatchFormatError,
    LineNotFoundError,
    MissingFileError,
    PathEscapeError,
)


class TestErrorTaxonomy:
    """Every error carries a type, a message and structured details."""

    def test_all_errors_share_base(self):
        errors = [
            ApplyError("boom"),
            InvalidPatchFormatError("bad"),
            InvalidChunkHeaderError("@@ x @@"),
            InvalidNumberFormatError("x", "old start"),
            LineNotFoundError(4),
            MissingFileError("a.txt"),
        ]
        assert all(isinstance(e, DiffPatchError) for e in errors)
        assert {e.error_type for e in errors} == {
            DiffPatchErrorType.APPLY_ERROR,
            DiffPatchErrorType.INVALID_PATCH_FORMAT,
            DiffPatchErrorType.INVALID_CHUNK_HEADER,
            DiffPatchErrorType.INVALID_NUMBER_FORMAT,
            DiffPatchErrorType.LINE_NOT_FOUND,
            DiffPatchErrorType.FILE_NOT_FOUND,
        }

    def test_apply_error_line_number(self):
        err = ApplyError("Context mismatch at line 3", line_num=3)

        assert str(err) == "Context mismatch at line 3"
        assert err.details == {"line_num": 3}
        assert ApplyError("no line").details == {}

    def test_header_and_number_messages(self):
        assert str(InvalidChunkHeaderError("@@ -1 @@")) == "Invalid chunk header: '@@ -1 @@'"
        assert str(InvalidNumberFormatError("x", "new start")) == "Invalid number 'x' for new start"

    def test_line_not_found_message(self):
        err = LineNotFoundError(7)

        assert str(err) == "Line 7 not found in content"
        assert err.line_num == 7

    def test_file_io_error_keeps_errno(self):
        cause = PermissionError(errno.EACCES, "Permission denied")
        err = FileIOError(Path("x.txt"), cause)

        assert err.error_type == DiffPatchErrorType.IO_ERROR
        assert err.details["errno"] == errno.EACCES
        assert err.cause is cause

    def test_file_io_error_without_errno(self):
        cause = UnicodeDecodeError("utf-8", b"\xff", 0, 1, "invalid start byte")

        assert FileIOError("x.txt", cause).details["errno"] is None

    def test_path_escape_message(self):
        err = PathEscapeError(Path("/etc/passwd"), Path("/work"))

        assert str(err) == "Candidate /etc/passwd is not relative to root: /work"
        assert err.error_type == DiffPatchErrorType.PATH_ESCAPE
