import logging
import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from diffpatch.differ.base import DiffAlgorithm
from diffpatch.differ.hunks import DEFAULT_CONTEXT_LINES
from diffpatch.patcher.base import PatcherAlgorithm

logger = logging.getLogger(__name__)


def _env_truthy(name: str) -> bool:
    return os.getenv(name, "").lower() in ("1", "true", "yes", "on")


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None or value == "":
        return default
    try:
        return int(value)
    except ValueError:
        logger.warning("Ignoring non-integer %s=%r", name, value)
        return default


class DiffPatchSettings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    context_lines: int = Field(default=DEFAULT_CONTEXT_LINES, ge=0)
    algorithm: DiffAlgorithm = DiffAlgorithm.MYERS
    patcher: PatcherAlgorithm = PatcherAlgorithm.FUZZY
    reverse: bool = False
    root_dir: Path | None = None


def load_settings(**overrides: Any) -> DiffPatchSettings:
    """
    Build settings from DIFFPATCH_* environment variables.

    Keyword arguments that are not None take precedence over the environment.
    """
    values: dict[str, Any] = {
        "context_lines": _env_int("DIFFPATCH_CONTEXT_LINES", DEFAULT_CONTEXT_LINES),
        "reverse": _env_truthy("DIFFPATCH_REVERSE"),
    }
    algorithm = os.getenv("DIFFPATCH_ALGORITHM")
    if algorithm:
        values["algorithm"] = algorithm.lower()
    patcher = os.getenv("DIFFPATCH_PATCHER")
    if patcher:
        values["patcher"] = patcher.lower()
    root_dir = os.getenv("DIFFPATCH_ROOT_DIR")
    if root_dir:
        values["root_dir"] = Path(root_dir)

    values.update({key: value for key, value in overrides.items() if value is not None})
    return DiffPatchSettings(**values)
