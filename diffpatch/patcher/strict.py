import logging

from diffpatch.errors import ApplyError
from diffpatch.patch.models import Patch
from diffpatch.patcher.common import context_mismatch, copy_lines_until, take_line
from diffpatch.text import has_trailing_newline, join_lines, split_lines

logger = logging.getLogger(__name__)


class StrictPatcher:
    """Applies chunks at their recorded offsets, requiring exact line matches."""

    def __init__(self, patch: Patch):
        self.patch = patch

    def apply(self, content: str, reverse: bool = False) -> str:
        patch = self.patch.reversed() if reverse else self.patch
        lines = split_lines(content)
        output: list[str] = []
        cursor = 0

        for chunk in patch.chunks:
            if chunk.old_start < cursor:
                raise ApplyError(
                    f"Chunk at line {chunk.old_start + 1} overlaps the previous chunk",
                    line_num=chunk.old_start + 1,
                )
            cursor = copy_lines_until(lines, cursor, chunk.old_start, output)

            for op in chunk.operations:
                if op.is_add:
                    output.append(op.text)
                    continue
                actual = take_line(lines, cursor)
                if op.is_context:
                    if actual != op.text:
                        raise context_mismatch(cursor, op.text, actual)
                    output.append(actual)
                elif actual != op.text:
                    raise ApplyError(
                        f"Remove line mismatch at line {cursor + 1}: "
                        f"Expected '{op.text}', got '{actual}'",
                        line_num=cursor + 1,
                    )
                cursor += 1

        output.extend(lines[cursor:])
        logger.debug("Strictly applied %d chunk(s)", len(patch.chunks))
        return join_lines(output, has_trailing_newline(content))
