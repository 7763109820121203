import logging
from enum import StrEnum
from typing import Callable, Sequence

from diffpatch.differ.changes import Change, Delete, Insert
from diffpatch.differ.hunks import DEFAULT_CONTEXT_LINES, assemble_chunks
from diffpatch.differ.lcs import lcs_changes
from diffpatch.differ.library import library_changes
from diffpatch.differ.myers import myers_changes
from diffpatch.differ.naive import naive_changes
from diffpatch.differ.xdiff import xdiff_changes
from diffpatch.patch.models import Patch
from diffpatch.text import split_lines

logger = logging.getLogger(__name__)

DEFAULT_OLD_FILE = "original"
DEFAULT_NEW_FILE = "modified"


class DiffAlgorithm(StrEnum):
    LCS = "lcs"
    MYERS = "myers"
    XDIFF = "xdiff"
    NAIVE = "naive"
    LIBRARY = "library"


ChangeGenerator = Callable[[Sequence[str], Sequence[str]], list[Change]]

_GENERATORS: dict[DiffAlgorithm, ChangeGenerator] = {
    DiffAlgorithm.LCS: lcs_changes,
    DiffAlgorithm.MYERS: myers_changes,
    DiffAlgorithm.XDIFF: xdiff_changes,
    DiffAlgorithm.NAIVE: naive_changes,
    DiffAlgorithm.LIBRARY: library_changes,
}


def generate_changes(
    old_lines: Sequence[str],
    new_lines: Sequence[str],
    algorithm: DiffAlgorithm = DiffAlgorithm.MYERS,
) -> list[Change]:
    if list(old_lines) == list(new_lines):
        return []
    if not old_lines:
        return [Insert(0, len(new_lines))]
    if not new_lines:
        return [Delete(0, len(old_lines))]
    return _GENERATORS[DiffAlgorithm(algorithm)](old_lines, new_lines)


class Differ:
    """Produces a Patch describing how to turn one text into another."""

    def __init__(
        self,
        old: str,
        new: str,
        algorithm: DiffAlgorithm = DiffAlgorithm.MYERS,
        context_lines: int = DEFAULT_CONTEXT_LINES,
        old_file: str = DEFAULT_OLD_FILE,
        new_file: str = DEFAULT_NEW_FILE,
    ):
        if context_lines < 0:
            raise ValueError("context_lines must be non-negative")
        self.old = old
        self.new = new
        self.algorithm = DiffAlgorithm(algorithm)
        self.context_lines = context_lines
        self.old_file = old_file
        self.new_file = new_file

    def generate(self) -> Patch:
        old_lines = split_lines(self.old)
        new_lines = split_lines(self.new)
        changes = generate_changes(old_lines, new_lines, self.algorithm)
        chunks = assemble_chunks(changes, old_lines, new_lines, self.context_lines)
        logger.debug(
            "Generated %d chunk(s) with %s for %s -> %s",
            len(chunks),
            self.algorithm,
            self.old_file,
            self.new_file,
        )
        return Patch(old_file=self.old_file, new_file=self.new_file, chunks=chunks)


def generate_patch(
    old: str,
    new: str,
    algorithm: DiffAlgorithm = DiffAlgorithm.MYERS,
    context_lines: int = DEFAULT_CONTEXT_LINES,
    old_file: str = DEFAULT_OLD_FILE,
    new_file: str = DEFAULT_NEW_FILE,
) -> Patch:
    return Differ(old, new, algorithm, context_lines, old_file, new_file).generate()
