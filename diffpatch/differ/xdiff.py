"""
Divide-and-conquer diff for large, mostly identical inputs.

Lines are first interned into integer classes so comparisons are cheap.
Each segment is trimmed of its common prefix and suffix, then split around
the longest common run of lines. Segments whose comparison cost exceeds
XDIFF_MAX_COST are marked as entirely changed, which bounds the worst case
at the price of a longer (but still applicable) edit script.
"""

import logging
from typing import Sequence

from diffpatch.differ.changes import Change, Delete, Equal, Insert, merge_adjacent

logger = logging.getLogger(__name__)

XDIFF_MAX_COST = 4_000_000
XDIFF_MAX_DEPTH = 256


def classify_lines(
    old_lines: Sequence[str], new_lines: Sequence[str]
) -> tuple[list[int], list[int]]:
    classes: dict[str, int] = {}
    old_ids = [classes.setdefault(line, len(classes)) for line in old_lines]
    new_ids = [classes.setdefault(line, len(classes)) for line in new_lines]
    return old_ids, new_ids


def xdiff_changes(old_lines: Sequence[str], new_lines: Sequence[str]) -> list[Change]:
    old_ids, new_ids = classify_lines(old_lines, new_lines)
    old_changed = [False] * len(old_ids)
    new_changed = [False] * len(new_ids)

    # Explicit work stack instead of recursion.
    stack = [(0, len(old_ids), 0, len(new_ids), 0)]
    while stack:
        o_lo, o_hi, n_lo, n_hi, depth = stack.pop()
        while o_lo < o_hi and n_lo < n_hi and old_ids[o_lo] == new_ids[n_lo]:
            o_lo += 1
            n_lo += 1
        while o_lo < o_hi and n_lo < n_hi and old_ids[o_hi - 1] == new_ids[n_hi - 1]:
            o_hi -= 1
            n_hi -= 1

        if o_lo == o_hi or n_lo == n_hi:
            _mark(old_changed, o_lo, o_hi)
            _mark(new_changed, n_lo, n_hi)
            continue

        if (o_hi - o_lo) * (n_hi - n_lo) > XDIFF_MAX_COST or depth > XDIFF_MAX_DEPTH:
            logger.debug(
                "xdiff cost bound hit for old[%d:%d] new[%d:%d]", o_lo, o_hi, n_lo, n_hi
            )
            _mark(old_changed, o_lo, o_hi)
            _mark(new_changed, n_lo, n_hi)
            continue

        seed = longest_common_run(old_ids, new_ids, o_lo, o_hi, n_lo, n_hi)
        if seed is None:
            _mark(old_changed, o_lo, o_hi)
            _mark(new_changed, n_lo, n_hi)
            continue

        seed_old, seed_new, length = seed
        stack.append((seed_old + length, o_hi, seed_new + length, n_hi, depth + 1))
        stack.append((o_lo, seed_old, n_lo, seed_new, depth + 1))

    return merge_adjacent(build_script(old_changed, new_changed))


def _mark(flags: list[bool], lo: int, hi: int) -> None:
    for idx in range(lo, hi):
        flags[idx] = True


def longest_common_run(
    old_ids: list[int],
    new_ids: list[int],
    o_lo: int,
    o_hi: int,
    n_lo: int,
    n_hi: int,
) -> tuple[int, int, int] | None:
    """Return (old_start, new_start, length) of the longest shared run of lines."""
    positions: dict[int, list[int]] = {}
    for j in range(n_lo, n_hi):
        positions.setdefault(new_ids[j], []).append(j)

    best = (o_lo, n_lo, 0)
    run_lengths: dict[int, int] = {}
    for i in range(o_lo, o_hi):
        next_lengths: dict[int, int] = {}
        for j in positions.get(old_ids[i], ()):
            length = run_lengths.get(j - 1, 0) + 1
            next_lengths[j] = length
            if length > best[2]:
                best = (i - length + 1, j - length + 1, length)
        run_lengths = next_lengths

    if best[2] == 0:
        return None
    return best


def build_script(old_changed: list[bool], new_changed: list[bool]) -> list[Change]:
    """Walk the change flags of both sides in lockstep, emitting runs."""
    changes: list[Change] = []
    i = j = 0
    n, m = len(old_changed), len(new_changed)
    while i < n or j < m:
        if i < n and old_changed[i]:
            start = i
            while i < n and old_changed[i]:
                i += 1
            changes.append(Delete(start, i - start))
        elif j < m and new_changed[j]:
            start = j
            while j < m and new_changed[j]:
                j += 1
            changes.append(Insert(start, j - start))
        else:
            changes.append(Equal(i, j))
            i += 1
            j += 1
    return changes
