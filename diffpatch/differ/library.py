from difflib import SequenceMatcher
from typing import Sequence

from diffpatch.differ.changes import Change, Delete, Equal, Insert


def library_changes(old_lines: Sequence[str], new_lines: Sequence[str]) -> list[Change]:
    """Edit script taken from difflib's SequenceMatcher opcodes."""
    matcher = SequenceMatcher(None, old_lines, new_lines, autojunk=False)
    changes: list[Change] = []
    for tag, i1, i2, j1, j2 in matcher.get_opcodes():
        if tag == "equal":
            changes.extend(Equal(i1 + k, j1 + k) for k in range(i2 - i1))
            continue
        if tag in ("delete", "replace"):
            changes.append(Delete(i1, i2 - i1))
        if tag in ("insert", "replace"):
            changes.append(Insert(j1, j2 - j1))
    return changes
