from diffpatch.patch.format import format_chunk_header, format_patch
from diffpatch.patch.models import (
    DEV_NULL,
    Chunk,
    Operation,
    OperationKind,
    Patch,
    is_dev_null,
)
from diffpatch.patch.parser import parse_chunk_header, parse_file_header, parse_patch

__all__ = [
    "DEV_NULL",
    "Chunk",
    "Operation",
    "OperationKind",
    "Patch",
    "is_dev_null",
    "format_chunk_header",
    "format_patch",
    "parse_chunk_header",
    "parse_file_header",
    "parse_patch",
]
