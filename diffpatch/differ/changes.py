from dataclasses import dataclass


@dataclass(frozen=True)
class Equal:
    old_idx: int
    new_idx: int


@dataclass(frozen=True)
class Delete:
    old_idx: int
    count: int


@dataclass(frozen=True)
class Insert:
    new_idx: int
    count: int


Change = Equal | Delete | Insert


def merge_adjacent(changes: list[Change]) -> list[Change]:
    """Merge consecutive Delete or Insert runs that cover contiguous lines."""
    merged: list[Change] = []
    for change in changes:
        previous = merged[-1] if merged else None
        if (
            isinstance(change, Delete)
            and isinstance(previous, Delete)
            and previous.old_idx + previous.count == change.old_idx
        ):
            merged[-1] = Delete(previous.old_idx, previous.count + change.count)
        elif (
            isinstance(change, Insert)
            and isinstance(previous, Insert)
            and previous.new_idx + previous.count == change.new_idx
        ):
            merged[-1] = Insert(previous.new_idx, previous.count + change.count)
        else:
            merged.append(change)
    return merged


def edit_count(changes: list[Change]) -> int:
    return sum(c.count for c in changes if not isinstance(c, Equal))
