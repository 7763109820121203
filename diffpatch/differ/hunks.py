import logging

from diffpatch.differ.changes import Change, Delete, Equal, Insert
from diffpatch.patch.models import Chunk, Operation

logger = logging.getLogger(__name__)

DEFAULT_CONTEXT_LINES = 3


def assemble_chunks(
    changes: list[Change],
    old_lines: list[str],
    new_lines: list[str],
    context: int = DEFAULT_CONTEXT_LINES,
) -> list[Chunk]:
    """
    Group an edit script into chunks with surrounding context.

    Changes separated by at most 2 * context equal lines share one chunk.
    Each chunk gets up to `context` lines of leading and trailing context,
    and its line counts reflect the operations actually emitted.
    """
    if not old_lines and not new_lines:
        return []
    if not old_lines:
        return [
            Chunk(0, 0, 0, len(new_lines), [Operation.add(line) for line in new_lines])
        ]
    if not new_lines:
        return [
            Chunk(0, len(old_lines), 0, 0, [Operation.remove(line) for line in old_lines])
        ]

    chunks: list[Chunk] = []
    index = 0
    while True:
        block = find_next_block(changes, index, context)
        if block is None:
            break
        block_start, block_end = block
        chunk, index = _build_chunk(
            changes, block_start, block_end, old_lines, new_lines, context
        )
        chunks.append(chunk)

    logger.debug("Assembled %d chunk(s) from %d change(s)", len(chunks), len(changes))
    return chunks


def find_next_block(
    changes: list[Change], index: int, context: int
) -> tuple[int, int] | None:
    """Return the [start, end) span of the next run of changes to group."""
    while index < len(changes) and isinstance(changes[index], Equal):
        index += 1
    if index >= len(changes):
        return None

    merge_threshold = 2 * context
    block_start = index
    block_end = index + 1
    consecutive_equals = 0
    for pos in range(block_start + 1, len(changes)):
        if isinstance(changes[pos], Equal):
            consecutive_equals += 1
            if consecutive_equals > merge_threshold:
                break
        else:
            consecutive_equals = 0
            block_end = pos + 1
    return block_start, block_end


def _infer_new_index(changes: list[Change], pos: int) -> int:
    while pos > 0:
        previous = changes[pos - 1]
        if isinstance(previous, Equal):
            return previous.new_idx + 1
        if isinstance(previous, Insert):
            return previous.new_idx + previous.count
        pos -= 1
    return 0


def _infer_old_index(changes: list[Change], pos: int) -> int:
    while pos > 0:
        previous = changes[pos - 1]
        if isinstance(previous, Equal):
            return previous.old_idx + 1
        if isinstance(previous, Delete):
            return previous.old_idx + previous.count
        pos -= 1
    return 0


def _chunk_start(
    changes: list[Change], block_start: int, leading: list[Equal]
) -> tuple[int, int]:
    if leading:
        return leading[0].old_idx, leading[0].new_idx
    first = changes[block_start]
    if isinstance(first, Delete):
        return first.old_idx, _infer_new_index(changes, block_start)
    if isinstance(first, Insert):
        return _infer_old_index(changes, block_start), first.new_idx
    raise AssertionError(f"block cannot start with {first!r}")


def _build_chunk(
    changes: list[Change],
    block_start: int,
    block_end: int,
    old_lines: list[str],
    new_lines: list[str],
    context: int,
) -> tuple[Chunk, int]:
    context_start = max(0, block_start - context)
    leading = [c for c in changes[context_start:block_start] if isinstance(c, Equal)]
    old_start, new_start = _chunk_start(changes, block_start, leading)

    operations = [Operation.context(old_lines[eq.old_idx]) for eq in leading]
    for change in changes[block_start:block_end]:
        if isinstance(change, Equal):
            operations.append(Operation.context(old_lines[change.old_idx]))
        elif isinstance(change, Delete):
            operations.extend(
                Operation.remove(line)
                for line in old_lines[change.old_idx:change.old_idx + change.count]
            )
        else:
            operations.extend(
                Operation.add(line)
                for line in new_lines[change.new_idx:change.new_idx + change.count]
            )

    pos = block_end
    trailing = 0
    while pos < len(changes) and trailing < context and isinstance(changes[pos], Equal):
        operations.append(Operation.context(old_lines[changes[pos].old_idx]))
        pos += 1
        trailing += 1

    old_count = sum(1 for op in operations if not op.is_add)
    new_count = sum(1 for op in operations if not op.is_remove)
    return Chunk(old_start, old_count, new_start, new_count, operations), pos
