from enum import StrEnum
from typing import Protocol

from diffpatch.patch.models import Patch
from diffpatch.patcher.fuzzy import FuzzyPatcher
from diffpatch.patcher.similar import SimilarPatcher
from diffpatch.patcher.strict import StrictPatcher


class PatcherAlgorithm(StrEnum):
    FUZZY = "fuzzy"
    STRICT = "strict"
    SIMILAR = "similar"


class PatchApplier(Protocol):
    def apply(self, content: str, reverse: bool = False) -> str: ...


_APPLIERS: dict[PatcherAlgorithm, type] = {
    PatcherAlgorithm.FUZZY: FuzzyPatcher,
    PatcherAlgorithm.STRICT: StrictPatcher,
    PatcherAlgorithm.SIMILAR: SimilarPatcher,
}


class Patcher:
    def __init__(self, patch: Patch, algorithm: PatcherAlgorithm = PatcherAlgorithm.FUZZY):
        self.patch = patch
        self.algorithm = PatcherAlgorithm(algorithm)
        self._applier: PatchApplier = _APPLIERS[self.algorithm](patch)

    def apply(self, content: str, reverse: bool = False) -> str:
        """
        Apply the patch to `content` and return the patched text.

        Raises:
            ApplyError: If a chunk cannot be located or its context does not match
            LineNotFoundError: If the content ends before a chunk is fully applied
        """
        return self._applier.apply(content, reverse)


def apply_patch(
    patch: Patch,
    content: str,
    reverse: bool = False,
    algorithm: PatcherAlgorithm = PatcherAlgorithm.FUZZY,
) -> str:
    return Patcher(patch, algorithm).apply(content, reverse)
