from diffpatch.errors import ApplyError, LineNotFoundError


def copy_lines_until(
    lines: list[str], cursor: int, target: int, output: list[str]
) -> int:
    """Copy untouched lines up to `target` and return the new cursor."""
    if target > len(lines):
        raise ApplyError(
            f"Calculated chunk start {target + 1} is beyond content length {len(lines)}",
            line_num=target + 1,
        )
    output.extend(lines[cursor:target])
    return max(cursor, target)


def take_line(lines: list[str], cursor: int) -> str:
    if cursor >= len(lines):
        raise LineNotFoundError(cursor + 1)
    return lines[cursor]


def context_mismatch(line_index: int, expected: str, actual: str) -> ApplyError:
    return ApplyError(
        f"Context mismatch at line {line_index + 1}: "
        f"Expected '{expected}', got '{actual}'",
        line_num=line_index + 1,
    )
