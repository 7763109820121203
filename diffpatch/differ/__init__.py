from diffpatch.differ.base import (
    DEFAULT_NEW_FILE,
    DEFAULT_OLD_FILE,
    DiffAlgorithm,
    Differ,
    generate_changes,
    generate_patch,
)
from diffpatch.differ.changes import Change, Delete, Equal, Insert
from diffpatch.differ.hunks import DEFAULT_CONTEXT_LINES, assemble_chunks

__all__ = [
    "DEFAULT_CONTEXT_LINES",
    "DEFAULT_NEW_FILE",
    "DEFAULT_OLD_FILE",
    "DiffAlgorithm",
    "Differ",
    "generate_changes",
    "generate_patch",
    "Change",
    "Delete",
    "Equal",
    "Insert",
    "assemble_chunks",
]
