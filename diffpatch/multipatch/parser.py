import logging
from pathlib import Path

from diffpatch.errors import (
    DiffPatchError,
    InvalidChunkHeaderError,
    InvalidNumberFormatError,
    InvalidPatchFormatError,
)
from diffpatch.multipatch.models import MultifilePatch
from diffpatch.patch.models import Patch
from diffpatch.patch.parser import parse_chunk_header, parse_patch
from diffpatch.text import split_lines

logger = logging.getLogger(__name__)


def split_on_diff_lines(lines: list[str]) -> list[list[str]]:
    """Group lines into sections, each starting at a 'diff ' line."""
    sections: list[list[str]] = []
    current: list[str] | None = None
    for line in lines:
        if line.startswith("diff "):
            if current is not None:
                sections.append(current)
            current = [line]
        elif current is not None:
            current.append(line)
    if current is not None:
        sections.append(current)
    return sections


def split_on_file_headers(lines: list[str]) -> list[list[str]]:
    """
    Group lines into sections, each starting at a '---' / '+++' pair.

    Hunk bodies are skipped using their header counts, so a removed line
    that happens to read '--- ...' never starts a new section.
    """
    sections: list[list[str]] = []
    current: list[str] | None = None
    old_remaining = new_remaining = 0

    for idx, line in enumerate(lines):
        if current is not None and (old_remaining > 0 or new_remaining > 0):
            if line.startswith(" "):
                old_remaining -= 1
                new_remaining -= 1
            elif line.startswith("-"):
                old_remaining -= 1
            elif line.startswith("+"):
                new_remaining -= 1
            current.append(line)
            continue

        is_header_pair = (
            line.startswith("--- ")
            and idx + 1 < len(lines)
            and lines[idx + 1].startswith("+++ ")
        )
        if is_header_pair:
            if current is not None:
                sections.append(current)
            current = [line]
            continue

        if current is None:
            continue
        if line.startswith("@@ "):
            try:
                _, old_remaining, _, new_remaining = parse_chunk_header(line)
            except (InvalidChunkHeaderError, InvalidNumberFormatError):
                # Left for parse_patch to report against the section.
                old_remaining = new_remaining = 0
        current.append(line)

    if current is not None:
        sections.append(current)
    return sections


def parse_multifile_patch(text: str) -> MultifilePatch:
    """
    Parse concatenated unified diffs into one Patch per file.

    Sections that fail to parse are skipped with a warning.

    Raises:
        InvalidPatchFormatError: If no section can be found, or every section
            fails to parse
    """
    lines = split_lines(text)
    if not any(line.strip() for line in lines):
        return MultifilePatch()

    sections = split_on_diff_lines(lines)
    if not sections:
        sections = split_on_file_headers(lines)
        if not sections:
            raise InvalidPatchFormatError("No patch sections found starting with 'diff '")

    patches: list[Patch] = []
    for number, section in enumerate(sections, start=1):
        try:
            patches.append(parse_patch("\n".join(section)))
        except DiffPatchError as exc:
            logger.warning(
                "Skipping patch section %d (%s): %s", number, section[0], exc
            )

    if not patches:
        raise InvalidPatchFormatError(
            "Found 'diff' section headers, but failed to parse any valid patch sections."
        )
    logger.debug("Parsed %d of %d patch section(s)", len(patches), len(sections))
    return MultifilePatch(patches)


def parse_multifile_file(path: Path) -> MultifilePatch:
    return parse_multifile_patch(Path(path).read_text(encoding="utf-8"))
