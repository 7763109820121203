"""
Linear-space Myers diff.

The forward and reverse greedy searches advance one edit at a time over the
diagonals k = x - y, each keeping the furthest x reached per diagonal in a
flat array offset by max_d. When the two frontiers overlap on a diagonal,
the overlap point splits the problem into two halves that are diffed
recursively.
"""

import logging
from typing import Sequence

from diffpatch.differ.changes import Change, Delete, Equal, Insert, merge_adjacent

logger = logging.getLogger(__name__)

MYERS_MAX_DEPTH = 64


def myers_changes(old_lines: Sequence[str], new_lines: Sequence[str]) -> list[Change]:
    changes: list[Change] = []
    _diff_range(old_lines, new_lines, 0, len(old_lines), 0, len(new_lines), changes, 0)
    return merge_adjacent(changes)


def _diff_range(
    a: Sequence[str],
    b: Sequence[str],
    a_lo: int,
    a_hi: int,
    b_lo: int,
    b_hi: int,
    out: list[Change],
    depth: int,
) -> None:
    while a_lo < a_hi and b_lo < b_hi and a[a_lo] == b[b_lo]:
        out.append(Equal(a_lo, b_lo))
        a_lo += 1
        b_lo += 1

    suffix = 0
    while a_lo < a_hi and b_lo < b_hi and a[a_hi - 1] == b[b_hi - 1]:
        a_hi -= 1
        b_hi -= 1
        suffix += 1

    if a_lo == a_hi:
        if b_lo < b_hi:
            out.append(Insert(b_lo, b_hi - b_lo))
    elif b_lo == b_hi:
        out.append(Delete(a_lo, a_hi - a_lo))
    else:
        split = None
        if depth < MYERS_MAX_DEPTH:
            split = bisect(a, b, a_lo, a_hi, b_lo, b_hi)
        else:
            logger.debug("Myers depth limit reached at old[%d:%d]", a_lo, a_hi)
        if split is None:
            out.append(Delete(a_lo, a_hi - a_lo))
            out.append(Insert(b_lo, b_hi - b_lo))
        else:
            x, y = split
            _diff_range(a, b, a_lo, x, b_lo, y, out, depth + 1)
            _diff_range(a, b, x, a_hi, y, b_hi, out, depth + 1)

    for offset in range(suffix):
        out.append(Equal(a_hi + offset, b_hi + offset))


def bisect(
    a: Sequence[str],
    b: Sequence[str],
    a_lo: int,
    a_hi: int,
    b_lo: int,
    b_hi: int,
) -> tuple[int, int] | None:
    """
    Find the point where the forward and reverse searches meet.

    Returns absolute (old, new) indices strictly inside the range, or None
    when the two ranges share no line at all.
    """
    n = a_hi - a_lo
    m = b_hi - b_lo
    max_d = (n + m + 1) // 2
    v_offset = max_d
    v_length = 2 * max_d + 2
    v1 = [-1] * v_length
    v2 = [-1] * v_length
    v1[v_offset + 1] = 0
    v2[v_offset + 1] = 0
    delta = n - m
    # With an odd delta the forward pass detects the overlap, else the reverse.
    front = delta % 2 != 0

    k1_start = k1_end = k2_start = k2_end = 0
    for d in range(max_d):
        for k1 in range(-d + k1_start, d + 1 - k1_end, 2):
            k1_offset = v_offset + k1
            if k1 == -d or (k1 != d and v1[k1_offset - 1] < v1[k1_offset + 1]):
                x1 = v1[k1_offset + 1]
            else:
                x1 = v1[k1_offset - 1] + 1
            y1 = x1 - k1
            while x1 < n and y1 < m and a[a_lo + x1] == b[b_lo + y1]:
                x1 += 1
                y1 += 1
            v1[k1_offset] = x1
            if x1 > n:
                k1_end += 2
            elif y1 > m:
                k1_start += 2
            elif front:
                k2_offset = v_offset + delta - k1
                if 0 <= k2_offset < v_length and v2[k2_offset] != -1:
                    x2 = n - v2[k2_offset]
                    if x1 >= x2:
                        return a_lo + x1, b_lo + y1

        for k2 in range(-d + k2_start, d + 1 - k2_end, 2):
            k2_offset = v_offset + k2
            if k2 == -d or (k2 != d and v2[k2_offset - 1] < v2[k2_offset + 1]):
                x2 = v2[k2_offset + 1]
            else:
                x2 = v2[k2_offset - 1] + 1
            y2 = x2 - k2
            while x2 < n and y2 < m and a[a_hi - x2 - 1] == b[b_hi - y2 - 1]:
                x2 += 1
                y2 += 1
            v2[k2_offset] = x2
            if x2 > n:
                k2_end += 2
            elif y2 > m:
                k2_start += 2
            elif not front:
                k1_offset = v_offset + delta - k2
                if 0 <= k1_offset < v_length and v1[k1_offset] != -1:
                    x1 = v1[k1_offset]
                    y1 = v_offset + x1 - k1_offset
                    if x1 >= n - x2:
                        return a_lo + x1, b_lo + y1
    return None
