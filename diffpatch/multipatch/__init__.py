from diffpatch.multipatch.filesystem import FileSystem, LocalFileSystem, resolve_patch_path
from diffpatch.multipatch.models import (
    Applied,
    ApplyResult,
    Deleted,
    Failed,
    MultifilePatch,
    PatchedFile,
    Skipped,
)
from diffpatch.multipatch.orchestrator import MultifilePatcher
from diffpatch.multipatch.parser import parse_multifile_file, parse_multifile_patch
from diffpatch.multipatch.report import (
    ApplyReport,
    describe_report,
    describe_result,
    summarize_results,
)

__all__ = [
    "FileSystem",
    "LocalFileSystem",
    "resolve_patch_path",
    "Applied",
    "ApplyResult",
    "Deleted",
    "Failed",
    "MultifilePatch",
    "PatchedFile",
    "Skipped",
    "MultifilePatcher",
    "parse_multifile_file",
    "parse_multifile_patch",
    "ApplyReport",
    "describe_report",
    "describe_result",
    "summarize_results",
]
