from dataclasses import dataclass, field
from enum import StrEnum

DEV_NULL = "/dev/null"


def is_dev_null(path: str | None) -> bool:
    if not path:
        return False
    return path == DEV_NULL or path.endswith(DEV_NULL)


class OperationKind(StrEnum):
    CONTEXT = " "
    REMOVE = "-"
    ADD = "+"


@dataclass(frozen=True)
class Operation:
    kind: OperationKind
    text: str

    @classmethod
    def context(cls, text: str) -> "Operation":
        return cls(OperationKind.CONTEXT, text)

    @classmethod
    def remove(cls, text: str) -> "Operation":
        return cls(OperationKind.REMOVE, text)

    @classmethod
    def add(cls, text: str) -> "Operation":
        return cls(OperationKind.ADD, text)

    @property
    def is_context(self) -> bool:
        return self.kind is OperationKind.CONTEXT

    @property
    def is_remove(self) -> bool:
        return self.kind is OperationKind.REMOVE

    @property
    def is_add(self) -> bool:
        return self.kind is OperationKind.ADD

    def reversed(self) -> "Operation":
        if self.kind is OperationKind.ADD:
            return Operation(OperationKind.REMOVE, self.text)
        if self.kind is OperationKind.REMOVE:
            return Operation(OperationKind.ADD, self.text)
        return self

    def to_line(self) -> str:
        return f"{self.kind.value}{self.text}"


@dataclass
class Chunk:
    old_start: int
    old_lines: int
    new_start: int
    new_lines: int
    operations: list[Operation] = field(default_factory=list)

    def counted_old_lines(self) -> int:
        return sum(1 for op in self.operations if not op.is_add)

    def counted_new_lines(self) -> int:
        return sum(1 for op in self.operations if not op.is_remove)

    def is_consistent(self) -> bool:
        return (
            self.old_lines == self.counted_old_lines()
            and self.new_lines == self.counted_new_lines()
        )

    def leading_context(self) -> list[str]:
        anchor = []
        for op in self.operations:
            if not op.is_context:
                break
            anchor.append(op.text)
        return anchor

    def preimage(self) -> list[str]:
        return [op.text for op in self.operations if not op.is_add]

    def reversed(self) -> "Chunk":
        return Chunk(
            old_start=self.new_start,
            old_lines=self.new_lines,
            new_start=self.old_start,
            new_lines=self.old_lines,
            operations=[op.reversed() for op in self.operations],
        )


@dataclass
class Patch:
    old_file: str
    new_file: str
    chunks: list[Chunk] = field(default_factory=list)
    preamble: str | None = None

    @property
    def is_creation(self) -> bool:
        return is_dev_null(self.old_file)

    @property
    def is_deletion(self) -> bool:
        return is_dev_null(self.new_file)

    @property
    def is_empty(self) -> bool:
        return not self.chunks

    def reversed(self) -> "Patch":
        return Patch(
            old_file=self.new_file,
            new_file=self.old_file,
            chunks=[chunk.reversed() for chunk in self.chunks],
            preamble=self.preamble,
        )

    def __str__(self) -> str:
        from diffpatch.patch.format import format_patch

        return format_patch(self)
