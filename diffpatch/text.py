def split_lines(text: str) -> list[str]:
    """
    Split text into lines without terminators.

    A final newline does not produce a trailing empty line, and a trailing
    carriage return is dropped from every line.
    """
    if not text:
        return []
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


def has_trailing_newline(text: str) -> bool:
    return text.endswith("\n")


def join_lines(lines: list[str], trailing_newline: bool = False) -> str:
    """
    Join lines back into text that `split_lines` reads as the same lines.

    A trailing empty line is always terminated.
    """
    joined = "\n".join(lines)
    if lines and (trailing_newline or lines[-1] == ""):
        joined += "\n"
    return joined
