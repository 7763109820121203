from diffpatch.patcher.base import Patcher, PatcherAlgorithm, apply_patch
from diffpatch.patcher.fuzzy import FuzzyPatcher
from diffpatch.patcher.similar import SimilarPatcher
from diffpatch.patcher.strict import StrictPatcher

__all__ = [
    "Patcher",
    "PatcherAlgorithm",
    "apply_patch",
    "FuzzyPatcher",
    "SimilarPatcher",
    "StrictPatcher",
]
