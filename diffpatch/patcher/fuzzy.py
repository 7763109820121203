import logging

from diffpatch.errors import ApplyError
from diffpatch.patch.models import Chunk, Patch
from diffpatch.patcher.common import context_mismatch, copy_lines_until, take_line
from diffpatch.patcher.matching import (
    FUZZY_MATCH_THRESHOLD,
    LENIENT_MATCH_THRESHOLD,
    is_context_match,
    is_flexible_match,
    lines_equal,
    similarity_score,
    window_candidates,
)
from diffpatch.text import has_trailing_newline, join_lines, split_lines

logger = logging.getLogger(__name__)


class FuzzyPatcher:
    """
    Applies a patch to content that may have drifted since the diff was taken.

    Each chunk is relocated by its leading context lines. The search tries,
    in order, the recorded offset, an exact scan of the surrounding window,
    the best mean similarity in the window, the candidate with the most
    loosely matching lines, and finally the recorded offset regardless.
    Context lines keep the content's own text, so drift outside the
    changed lines survives.
    """

    def __init__(self, patch: Patch, verify_removals: bool = True):
        self.patch = patch
        self.verify_removals = verify_removals

    def apply(self, content: str, reverse: bool = False) -> str:
        patch = self.patch.reversed() if reverse else self.patch
        lines = split_lines(content)
        output: list[str] = []
        cursor = 0

        for chunk in patch.chunks:
            start = self.locate(lines, chunk, cursor)
            cursor = copy_lines_until(lines, cursor, start, output)
            cursor = self.apply_operations(lines, cursor, chunk, output)

        output.extend(lines[cursor:])
        return join_lines(output, has_trailing_newline(content))

    def locate(self, lines: list[str], chunk: Chunk, cursor: int) -> int:
        anchor = chunk.leading_context()
        expected = chunk.old_start

        if not anchor:
            if expected > len(lines):
                raise ApplyError(
                    f"Cannot locate hunk near line {expected + 1}", line_num=expected + 1
                )
            return max(expected, cursor)

        if cursor <= expected and self._matches_at(lines, anchor, expected):
            logger.debug("Chunk matched at recorded line %d", expected + 1)
            return expected

        candidates = window_candidates(len(lines), len(anchor), expected, cursor)

        for pos in candidates:
            if self._matches_at(lines, anchor, pos):
                logger.debug(
                    "Chunk expected at line %d found at line %d", expected + 1, pos + 1
                )
                return pos

        position = self._best_fuzzy(lines, anchor, candidates)
        if position is not None:
            logger.warning(
                "Fuzzy match for chunk expected at line %d placed at line %d",
                expected + 1,
                position + 1,
            )
            return position

        position = self._best_lenient(lines, anchor, candidates)
        if position is not None:
            logger.warning(
                "Lenient match for chunk expected at line %d placed at line %d",
                expected + 1,
                position + 1,
            )
            return position

        if cursor <= expected <= len(lines):
            logger.warning(
                "No context match for chunk, using recorded line %d", expected + 1
            )
            return expected

        raise ApplyError(
            f"Cannot locate hunk near line {expected + 1}", line_num=expected + 1
        )

    @staticmethod
    def _matches_at(lines: list[str], anchor: list[str], pos: int) -> bool:
        if pos < 0 or pos + len(anchor) > len(lines):
            return False
        return all(lines_equal(lines[pos + i], text) for i, text in enumerate(anchor))

    @staticmethod
    def _best_fuzzy(
        lines: list[str], anchor: list[str], candidates: list[int]
    ) -> int | None:
        best_pos = None
        best_score = 0.0
        for pos in candidates:
            scores = [similarity_score(lines[pos + i], text) for i, text in enumerate(anchor)]
            mean = sum(scores) / len(scores)
            if mean >= FUZZY_MATCH_THRESHOLD and mean > best_score:
                best_pos, best_score = pos, mean
        return best_pos

    @staticmethod
    def _best_lenient(
        lines: list[str], anchor: list[str], candidates: list[int]
    ) -> int | None:
        best_pos = None
        best_hits = 0
        for pos in candidates:
            hits = sum(
                1 for i, text in enumerate(anchor) if is_flexible_match(lines[pos + i], text)
            )
            if hits / len(anchor) >= LENIENT_MATCH_THRESHOLD and hits > best_hits:
                best_pos, best_hits = pos, hits
        return best_pos

    def apply_operations(
        self, lines: list[str], cursor: int, chunk: Chunk, output: list[str]
    ) -> int:
        for op in chunk.operations:
            if op.is_add:
                output.append(op.text)
                continue

            actual = take_line(lines, cursor)
            if op.is_context:
                if not is_context_match(actual, op.text):
                    raise context_mismatch(cursor, op.text, actual)
                output.append(actual)
            elif self.verify_removals and not is_context_match(actual, op.text):
                raise ApplyError(
                    f"Remove mismatch at line {cursor + 1}: "
                    f"Expected '{op.text}', got '{actual}'",
                    line_num=cursor + 1,
                )
            cursor += 1
        return cursor
