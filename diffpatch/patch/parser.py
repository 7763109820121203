import logging
import re

from diffpatch.errors import (
    InvalidChunkHeaderError,
    InvalidNumberFormatError,
    InvalidPatchFormatError,
)
from diffpatch.patch.models import Chunk, Operation, OperationKind, Patch
from diffpatch.text import split_lines

logger = logging.getLogger(__name__)

NO_NEWLINE_MARKER = "\\ No newline at end of file"
TIMESTAMP_SUFFIX_RE = re.compile(r"\s+\d{4}-\d{2}-\d{2}[ T]\d{2}:\d{2}:\d{2}.*$")

_OPERATION_PREFIXES = {
    " ": OperationKind.CONTEXT,
    "-": OperationKind.REMOVE,
    "+": OperationKind.ADD,
}


def parse_file_header(raw: str) -> str:
    """
    Extract the path from the text following a '---' or '+++' marker.

    Strips an optional a/ or b/ prefix and any trailing timestamp, whether
    it is separated by a tab or by spaces.
    """
    path = raw.strip()
    path = path.split("\t", 1)[0]
    path = TIMESTAMP_SUFFIX_RE.sub("", path).strip()
    if path.startswith("a/") or path.startswith("b/"):
        path = path[2:]
    return path


def _parse_number(value: str, field: str) -> int:
    if not value or not (value.isascii() and value.isdigit()):
        raise InvalidNumberFormatError(value, field)
    return int(value)


def parse_range(text: str, side: str) -> tuple[int, int]:
    """Parse 'N' or 'N,M' into a 0-based start offset and a line count."""
    start_text, sep, count_text = text.partition(",")
    start = _parse_number(start_text, f"{side} start")
    if sep:
        count = _parse_number(count_text, f"{side} line count")
    else:
        count = 0 if start == 0 else 1
    if count == 0:
        return start, count
    return max(start - 1, 0), count


def parse_chunk_header(header: str) -> tuple[int, int, int, int]:
    if not header.startswith("@@ "):
        raise InvalidChunkHeaderError(header)
    body, sep, _ = header[3:].partition(" @@")
    if not sep:
        raise InvalidChunkHeaderError(header)
    parts = body.split()
    if len(parts) != 2 or not parts[0].startswith("-") or not parts[1].startswith("+"):
        raise InvalidChunkHeaderError(header)
    old_start, old_lines = parse_range(parts[0][1:], "old")
    new_start, new_lines = parse_range(parts[1][1:], "new")
    return old_start, old_lines, new_start, new_lines


def _parse_headers(lines: list[str]) -> tuple[str | None, str, str, int]:
    preamble: str | None = None
    old_file: str | None = None
    new_file: str | None = None
    index = 0

    while index < len(lines):
        line = lines[index]
        if line.startswith("--- "):
            if old_file is not None:
                raise InvalidPatchFormatError(
                    f"Duplicate '---' header found at line {index + 1}"
                )
            old_file = parse_file_header(line[4:])
        elif line.startswith("+++ "):
            if old_file is None:
                raise InvalidPatchFormatError("'+++' header found before '---' header")
            new_file = parse_file_header(line[4:])
            index += 1
            break
        elif line.startswith("@@ "):
            break
        elif line.startswith("diff "):
            if preamble is not None or old_file is not None:
                break
            preamble = line
        else:
            logger.debug("Skipping header line %d: %s", index + 1, line)
        index += 1

    if old_file is None:
        raise InvalidPatchFormatError("Missing '---' header")
    if new_file is None:
        raise InvalidPatchFormatError("Missing '+++' header")
    return preamble, old_file, new_file, index


def _parse_chunk(lines: list[str], index: int) -> tuple[Chunk, int]:
    header = lines[index]
    old_start, old_lines, new_start, new_lines = parse_chunk_header(header)
    index += 1

    operations: list[Operation] = []
    while index < len(lines) and not lines[index].startswith("@@ "):
        line = lines[index]
        kind = _OPERATION_PREFIXES.get(line[:1])
        if kind is not None:
            operations.append(Operation(kind, line[1:]))
        elif line.startswith("\\") or line == "":
            pass
        else:
            raise InvalidPatchFormatError(
                "Line without context/add/remove prefix found in chunk body "
                f"at line {index + 1}: '{line}'"
            )
        index += 1

    chunk = Chunk(old_start, old_lines, new_start, new_lines, operations)
    if not chunk.is_consistent():
        raise InvalidPatchFormatError(
            "Chunk line count mismatch: "
            f"Header expected (-{old_lines}, +{new_lines}), "
            f"Parsed content counts (-{chunk.counted_old_lines()}, "
            f"+{chunk.counted_new_lines()})"
        )
    return chunk, index


def parse_patch(text: str) -> Patch:
    """
    Parse a single-file unified diff.

    Raises:
        InvalidPatchFormatError: If headers are missing or out of order, or a
            chunk body is malformed
        InvalidChunkHeaderError: If an '@@' line cannot be parsed
        InvalidNumberFormatError: If a chunk range holds a non-numeric value
    """
    lines = split_lines(text)
    preamble, old_file, new_file, index = _parse_headers(lines)

    chunks: list[Chunk] = []
    while index < len(lines):
        line = lines[index]
        if not line.strip():
            index += 1
            continue
        if not line.startswith("@@"):
            raise InvalidPatchFormatError(
                f"Unexpected content found outside of chunk at line {index + 1}: '{line}'"
            )
        chunk, index = _parse_chunk(lines, index)
        chunks.append(chunk)

    logger.debug("Parsed patch %s -> %s with %d chunk(s)", old_file, new_file, len(chunks))
    return Patch(old_file=old_file, new_file=new_file, chunks=chunks, preamble=preamble)
