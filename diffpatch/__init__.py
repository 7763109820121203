from diffpatch.differ import DiffAlgorithm, Differ, generate_patch
from diffpatch.errors import (
    ApplyError,
    DiffPatchError,
    InvalidChunkHeaderError,
    InvalidNumberFormatError,
    InvalidPatchFormatError,
    LineNotFoundError,
)
from diffpatch.multipatch import MultifilePatch, MultifilePatcher, parse_multifile_patch
from diffpatch.patch import Chunk, Operation, Patch, format_patch, parse_patch
from diffpatch.patcher import Patcher, PatcherAlgorithm, apply_patch

__all__ = [
    "DiffAlgorithm",
    "Differ",
    "generate_patch",
    "ApplyError",
    "DiffPatchError",
    "InvalidChunkHeaderError",
    "InvalidNumberFormatError",
    "InvalidPatchFormatError",
    "LineNotFoundError",
    "MultifilePatch",
    "MultifilePatcher",
    "parse_multifile_patch",
    "Chunk",
    "Operation",
    "Patch",
    "format_patch",
    "parse_patch",
    "Patcher",
    "PatcherAlgorithm",
    "apply_patch",
]
