from enum import StrEnum
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from diffpatch.multipatch.report import ApplyReport


class DiffPatchErrorType(StrEnum):
    APPLY_ERROR = "apply_error"
    INVALID_PATCH_FORMAT = "invalid_patch_format"
    INVALID_CHUNK_HEADER = "invalid_chunk_header"
    INVALID_NUMBER_FORMAT = "invalid_number_format"
    LINE_NOT_FOUND = "line_not_found"
    FILE_NOT_FOUND = "file_not_found"
    IO_ERROR = "io_error"
    PATH_ESCAPE = "path_escape"
    MULTIPATCH_FAILED = "multipatch_failed"


class DiffPatchError(Exception):
    def __init__(
        self,
        error_type: DiffPatchErrorType,
        message: str,
        details: dict | None = None,
    ):
        super().__init__(message)
        self.error_type = error_type
        self.message = message
        self.details = details or {}


class ApplyError(DiffPatchError):
    def __init__(self, message: str, line_num: int | None = None):
        super().__init__(
            DiffPatchErrorType.APPLY_ERROR,
            message,
            details={"line_num": line_num} if line_num is not None else None,
        )


class InvalidPatchFormatError(DiffPatchError):
    def __init__(self, message: str):
        super().__init__(DiffPatchErrorType.INVALID_PATCH_FORMAT, message)


class InvalidChunkHeaderError(DiffPatchError):
    def __init__(self, header: str):
        super().__init__(
            DiffPatchErrorType.INVALID_CHUNK_HEADER,
            f"Invalid chunk header: '{header}'",
            details={"header": header},
        )
        self.header = header


class InvalidNumberFormatError(DiffPatchError):
    def __init__(self, value: str, field: str):
        super().__init__(
            DiffPatchErrorType.INVALID_NUMBER_FORMAT,
            f"Invalid number '{value}' for {field}",
            details={"value": value, "field": field},
        )
        self.value = value
        self.field = field


class LineNotFoundError(DiffPatchError):
    def __init__(self, line_num: int):
        super().__init__(
            DiffPatchErrorType.LINE_NOT_FOUND,
            f"Line {line_num} not found in content",
            details={"line_num": line_num},
        )
        self.line_num = line_num


class MissingFileError(DiffPatchError):
    def __init__(self, path: Path | str):
        super().__init__(
            DiffPatchErrorType.FILE_NOT_FOUND,
            f"File not found: {path}",
            details={"path": str(path)},
        )
        self.path = str(path)


class FileIOError(DiffPatchError):
    def __init__(self, path: Path | str, cause: Exception):
        super().__init__(
            DiffPatchErrorType.IO_ERROR,
            f"I/O error on {path}: {cause}",
            details={"path": str(path), "errno": getattr(cause, "errno", None)},
        )
        self.path = str(path)
        self.cause = cause


class PathEscapeError(DiffPatchError):
    def __init__(self, candidate: Path, root: Path):
        super().__init__(
            DiffPatchErrorType.PATH_ESCAPE,
            f"Candidate {str(candidate)} is not relative to root: {str(root)}",
            details={"candidate": str(candidate), "root": str(root)},
        )


class MultiPatchApplyError(DiffPatchError):
    def __init__(self, report: "ApplyReport"):
        failed_paths = [result.path for result in report.failures()]
        super().__init__(
            DiffPatchErrorType.MULTIPATCH_FAILED,
            f"{report.failed} of {report.total} file(s) failed to apply: "
            + ", ".join(failed_paths),
            details={"failed_paths": failed_paths},
        )
        self.report = report
