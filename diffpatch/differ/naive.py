from typing import Sequence

from diffpatch.differ.changes import Change, Delete, Equal, Insert, merge_adjacent

NAIVE_LOOKAHEAD = 10


def find_next_match(
    old_lines: Sequence[str],
    new_lines: Sequence[str],
    old_idx: int,
    new_idx: int,
    lookahead: int = NAIVE_LOOKAHEAD,
) -> tuple[int, int] | None:
    """Nearest pair of equal lines within `lookahead` lines on each side."""
    best: tuple[int, int] | None = None
    for di in range(min(lookahead, len(old_lines) - old_idx)):
        for dj in range(min(lookahead, len(new_lines) - new_idx)):
            if best is not None and di + dj >= best[0] + best[1]:
                break
            if old_lines[old_idx + di] == new_lines[new_idx + dj]:
                best = (di, dj)
                break
    return best


def naive_changes(
    old_lines: Sequence[str],
    new_lines: Sequence[str],
    lookahead: int = NAIVE_LOOKAHEAD,
) -> list[Change]:
    """
    Greedy baseline: walk both sides, resynchronizing on the nearest equal
    line within a small lookahead. Not minimal on reordered content.
    """
    changes: list[Change] = []
    i = j = 0
    while i < len(old_lines) and j < len(new_lines):
        if old_lines[i] == new_lines[j]:
            changes.append(Equal(i, j))
            i += 1
            j += 1
            continue

        match = find_next_match(old_lines, new_lines, i, j, lookahead)
        if match is None:
            changes.append(Delete(i, 1))
            changes.append(Insert(j, 1))
            i += 1
            j += 1
            continue

        di, dj = match
        if di:
            changes.append(Delete(i, di))
        if dj:
            changes.append(Insert(j, dj))
        i += di
        j += dj

    if i < len(old_lines):
        changes.append(Delete(i, len(old_lines) - i))
    if j < len(new_lines):
        changes.append(Insert(j, len(new_lines) - j))
    return merge_adjacent(changes)
