from dataclasses import dataclass, field
from typing import Annotated, Iterator, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

from diffpatch.errors import DiffPatchError
from diffpatch.patch.format import format_patch
from diffpatch.patch.models import Patch


@dataclass
class MultifilePatch:
    patches: list[Patch] = field(default_factory=list)

    def __iter__(self) -> Iterator[Patch]:
        return iter(self.patches)

    def __len__(self) -> int:
        return len(self.patches)

    def __str__(self) -> str:
        return "".join(format_patch(patch) for patch in self.patches)


class PatchedFile(BaseModel):
    model_config = ConfigDict(extra="forbid")

    path: str
    content: str
    is_new: bool = False
    is_deleted: bool = False


class Applied(BaseModel):
    status: Literal["applied"] = "applied"
    file: PatchedFile

    @property
    def path(self) -> str:
        return self.file.path


class Deleted(BaseModel):
    status: Literal["deleted"] = "deleted"
    path: str


class Skipped(BaseModel):
    status: Literal["skipped"] = "skipped"
    path: str
    reason: str


class Failed(BaseModel):
    model_config = ConfigDict(arbitrary_types_allowed=True)

    status: Literal["failed"] = "failed"
    path: str
    error: DiffPatchError

    @property
    def message(self) -> str:
        return str(self.error)


ApplyResult = Annotated[
    Union[Applied, Deleted, Skipped, Failed],
    Field(discriminator="status"),
]
