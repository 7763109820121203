import logging
from abc import ABC, abstractmethod
from pathlib import Path

from diffpatch.errors import PathEscapeError

logger = logging.getLogger(__name__)


class FileSystem(ABC):
    """File operations the multi-file orchestrator depends on."""

    @abstractmethod
    def read_to_string(self, path: Path) -> str:
        pass

    @abstractmethod
    def write(self, path: Path, content: str) -> None:
        pass

    @abstractmethod
    def create_dir_all(self, path: Path) -> None:
        pass

    @abstractmethod
    def remove_file(self, path: Path) -> None:
        pass

    @abstractmethod
    def exists(self, path: Path) -> bool:
        pass


class LocalFileSystem(FileSystem):
    def read_to_string(self, path: Path) -> str:
        return Path(path).read_bytes().decode("utf-8")

    def write(self, path: Path, content: str) -> None:
        Path(path).write_bytes(content.encode("utf-8"))
        logger.debug("Wrote %d bytes to %s", len(content), path)

    def create_dir_all(self, path: Path) -> None:
        Path(path).mkdir(parents=True, exist_ok=True)

    def remove_file(self, path: Path) -> None:
        Path(path).unlink()
        logger.debug("Removed %s", path)

    def exists(self, path: Path) -> bool:
        return Path(path).exists()


def resolve_patch_path(patch_path: str, root_dir: Path | None = None) -> Path:
    """
    Resolve a path named in a patch against an optional root directory.

    Args:
        patch_path: Path as written in the patch header
        root_dir: Directory the patch applies to, or None to use the path as is

    Returns:
        The path to read or write

    Raises:
        PathEscapeError: If the resolved path would leave root_dir
    """
    if root_dir is None:
        return Path(patch_path)

    root = Path(root_dir).resolve()
    candidate = (root / patch_path.lstrip("/")).resolve()
    if not candidate.is_relative_to(root):
        logger.warning("Path escape attempt: %s is not relative to %s", candidate, root)
        raise PathEscapeError(candidate, root)

    logger.debug("Resolved patch path: %s -> %s", patch_path, candidate)
    return candidate
