from diffpatch.differ.changes import Change, Delete, Equal, Insert


def lcs_table(old_lines: list[str], new_lines: list[str]) -> list[list[int]]:
    n, m = len(old_lines), len(new_lines)
    table = [[0] * (m + 1) for _ in range(n + 1)]
    for i in range(1, n + 1):
        row, prev_row = table[i], table[i - 1]
        old_line = old_lines[i - 1]
        for j in range(1, m + 1):
            if old_line == new_lines[j - 1]:
                row[j] = prev_row[j - 1] + 1
            else:
                row[j] = max(prev_row[j], row[j - 1])
    return table


def lcs_changes(old_lines: list[str], new_lines: list[str]) -> list[Change]:
    """
    Edit script from a full longest-common-subsequence table.

    O(n*m) time and space. Backtracking prefers an Insert over a Delete
    when both keep the LCS length.
    """
    table = lcs_table(old_lines, new_lines)
    changes: list[Change] = []
    i, j = len(old_lines), len(new_lines)
    while i > 0 or j > 0:
        if i > 0 and j > 0 and old_lines[i - 1] == new_lines[j - 1]:
            changes.append(Equal(i - 1, j - 1))
            i -= 1
            j -= 1
        elif j > 0 and (i == 0 or table[i][j - 1] >= table[i - 1][j]):
            changes.append(Insert(j - 1, 1))
            j -= 1
        else:
            changes.append(Delete(i - 1, 1))
            i -= 1
    changes.reverse()
    return changes
