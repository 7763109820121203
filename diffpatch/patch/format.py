from diffpatch.patch.models import Chunk, Patch, is_dev_null


def format_range(start: int, count: int) -> str:
    # A zero-length range names the line after which the change applies.
    display_start = start if count == 0 else start + 1
    return f"{display_start},{count}"


def format_chunk_header(chunk: Chunk) -> str:
    old_range = format_range(chunk.old_start, chunk.old_lines)
    new_range = format_range(chunk.new_start, chunk.new_lines)
    return f"@@ -{old_range} +{new_range} @@"


def format_file_header(prefix: str, side: str, path: str) -> str:
    if is_dev_null(path):
        return f"{prefix} /dev/null"
    return f"{prefix} {side}/{path}"


def format_patch_lines(patch: Patch) -> list[str]:
    lines: list[str] = []
    if patch.preamble:
        lines.append(patch.preamble)
    lines.append(format_file_header("---", "a", patch.old_file))
    lines.append(format_file_header("+++", "b", patch.new_file))
    for chunk in patch.chunks:
        lines.append(format_chunk_header(chunk))
        lines.extend(op.to_line() for op in chunk.operations)
    return lines


def format_patch(patch: Patch) -> str:
    """Serialize a patch as unified-diff text ending with a newline."""
    return "\n".join(format_patch_lines(patch)) + "\n"
