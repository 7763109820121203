import logging

from diffpatch.errors import ApplyError
from diffpatch.patch.models import Chunk, Patch
from diffpatch.patcher.common import context_mismatch, copy_lines_until, take_line
from diffpatch.patcher.matching import (
    FUZZY_MATCH_THRESHOLD,
    LENIENT_MATCH_THRESHOLD,
    edit_distance_score,
    normalize_whitespace,
    window_candidates,
)
from diffpatch.text import has_trailing_newline, join_lines, split_lines

logger = logging.getLogger(__name__)

HEAD_WEIGHT = 0.6
TAIL_WEIGHT = 0.4


def lines_match_flexibly(actual: str, expected: str) -> bool:
    if actual == expected:
        return True
    if normalize_whitespace(actual) == normalize_whitespace(expected):
        return True
    return edit_distance_score(actual, expected) >= FUZZY_MATCH_THRESHOLD


class SimilarPatcher:
    """
    Applies a patch by locating each chunk's full preimage (its context and
    removed lines) using edit-distance similarity.
    """

    def __init__(self, patch: Patch):
        self.patch = patch

    def apply(self, content: str, reverse: bool = False) -> str:
        patch = self.patch.reversed() if reverse else self.patch
        lines = split_lines(content)
        output: list[str] = []
        cursor = 0

        for chunk in patch.chunks:
            start = self.locate(lines, chunk, cursor)
            cursor = copy_lines_until(lines, cursor, start, output)
            for op in chunk.operations:
                if op.is_add:
                    output.append(op.text)
                    continue
                actual = take_line(lines, cursor)
                if op.is_context:
                    if not lines_match_flexibly(actual, op.text):
                        raise context_mismatch(cursor, op.text, actual)
                    output.append(actual)
                cursor += 1

        output.extend(lines[cursor:])
        return join_lines(output, has_trailing_newline(content))

    def locate(self, lines: list[str], chunk: Chunk, cursor: int) -> int:
        preimage = chunk.preimage()
        expected = chunk.old_start
        if not preimage:
            if expected > len(lines):
                raise ApplyError(
                    f"Failed to find matching context for chunk expected at line {expected + 1}",
                    line_num=expected + 1,
                )
            return max(expected, cursor)

        if cursor <= expected and expected + len(preimage) <= len(lines):
            if all(
                lines_match_flexibly(lines[expected + i], text)
                for i, text in enumerate(preimage)
            ):
                return expected

        candidates = window_candidates(len(lines), len(preimage), expected, cursor)

        for pos in candidates:
            if lines[pos:pos + len(preimage)] == preimage:
                return pos

        best_pos = None
        best_score = 0.0
        for pos in candidates:
            scores = [
                edit_distance_score(lines[pos + i], text) for i, text in enumerate(preimage)
            ]
            if min(scores) < FUZZY_MATCH_THRESHOLD:
                continue
            mean = sum(scores) / len(scores)
            if mean > best_score:
                best_pos, best_score = pos, mean
        if best_pos is not None:
            logger.warning(
                "Similarity match for chunk expected at line %d placed at line %d",
                expected + 1,
                best_pos + 1,
            )
            return best_pos

        best_pos = self._best_partial(lines, preimage, candidates)
        if best_pos is not None:
            logger.warning(
                "Partial match for chunk expected at line %d placed at line %d",
                expected + 1,
                best_pos + 1,
            )
            return best_pos

        if cursor <= expected < len(lines):
            logger.warning(
                "No similar context for chunk, using recorded line %d", expected + 1
            )
            return expected

        raise ApplyError(
            f"Failed to find matching context for chunk expected at line {expected + 1}",
            line_num=expected + 1,
        )

    @staticmethod
    def _best_partial(
        lines: list[str], preimage: list[str], candidates: list[int]
    ) -> int | None:
        # Scores the first and last two lines, weighting the head higher.
        if len(preimage) < 2:
            return None
        edge = min(2, len(preimage))
        best_pos = None
        best_score = 0.0
        for pos in candidates:
            head = sum(
                edit_distance_score(lines[pos + i], preimage[i]) for i in range(edge)
            ) / edge
            tail = sum(
                edit_distance_score(lines[pos + len(preimage) - 1 - i], preimage[-1 - i])
                for i in range(edge)
            ) / edge
            score = head * HEAD_WEIGHT + tail * TAIL_WEIGHT
            if score >= LENIENT_MATCH_THRESHOLD and score > best_score:
                best_pos, best_score = pos, score
        return best_pos
