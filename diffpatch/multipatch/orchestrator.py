import logging
from pathlib import Path

from diffpatch.errors import (
    DiffPatchError,
    FileIOError,
    MissingFileError,
    PathEscapeError,
)
from diffpatch.multipatch.filesystem import FileSystem, LocalFileSystem, resolve_patch_path
from diffpatch.multipatch.models import (
    Applied,
    ApplyResult,
    Deleted,
    Failed,
    MultifilePatch,
    PatchedFile,
    Skipped,
)
from diffpatch.patch.models import Patch, is_dev_null
from diffpatch.patcher.base import Patcher, PatcherAlgorithm

logger = logging.getLogger(__name__)


class MultifilePatcher:
    """
    Applies every patch of a MultifilePatch, one file at a time.

    A failure in one file is recorded as a Failed result and never stops
    the remaining files. Results keep the order of the patches.
    """

    def __init__(
        self,
        multifile_patch: MultifilePatch,
        root_dir: Path | None = None,
        fs: FileSystem | None = None,
        algorithm: PatcherAlgorithm = PatcherAlgorithm.FUZZY,
    ):
        self.multifile_patch = multifile_patch
        self.root_dir = Path(root_dir) if root_dir is not None else None
        self.fs = fs or LocalFileSystem()
        self.algorithm = PatcherAlgorithm(algorithm)

    def apply(self, reverse: bool = False) -> list[ApplyResult]:
        """Compute the outcome for every file without touching the filesystem."""
        results = [self._apply_one(patch, reverse) for patch in self.multifile_patch]
        for result in results:
            logger.info("%s: %s", result.status, result.path)
        return results

    def apply_and_write(self, reverse: bool = False) -> list[ApplyResult]:
        """Apply every patch and write, create or remove the affected files."""
        return [self._write_result(result) for result in self.apply(reverse)]

    def _apply_one(self, patch: Patch, reverse: bool) -> ApplyResult:
        if reverse:
            source, target = patch.new_file, patch.old_file
        else:
            source, target = patch.old_file, patch.new_file
        is_new = is_dev_null(source)
        is_delete = is_dev_null(target)
        display_path = source if is_delete else target

        try:
            source_path = None if is_new else resolve_patch_path(source, self.root_dir)
            target_path = None if is_delete else resolve_patch_path(target, self.root_dir)
        except PathEscapeError as exc:
            return Failed(path=display_path, error=exc)

        content = ""
        if source_path is not None:
            try:
                content = self.fs.read_to_string(source_path)
            except FileNotFoundError:
                if reverse and (patch.is_creation or patch.is_deletion):
                    return Skipped(
                        path=str(source_path),
                        reason=(
                            "Skipping reverse for non-existent file involved in "
                            f"creation/deletion: {source_path}"
                        ),
                    )
                return Failed(path=str(source_path), error=MissingFileError(source_path))
            except (OSError, UnicodeDecodeError) as exc:
                return Failed(
                    path=str(target_path or source_path),
                    error=FileIOError(source_path, exc),
                )

        result_path = str(target_path or source_path)
        try:
            new_content = Patcher(patch, self.algorithm).apply(content, reverse)
        except DiffPatchError as exc:
            return Failed(path=result_path, error=exc)

        if is_delete:
            if new_content.strip():
                logger.warning(
                    "Deleting %s although the patch left content behind", source_path
                )
            return Deleted(path=str(source_path))

        if is_new and new_content and not new_content.endswith("\n"):
            new_content += "\n"
        return Applied(
            file=PatchedFile(
                path=result_path, content=new_content, is_new=is_new, is_deleted=False
            )
        )

    def _write_result(self, result: ApplyResult) -> ApplyResult:
        path = Path(result.path)
        try:
            if isinstance(result, Applied):
                self.fs.create_dir_all(path.parent)
                self.fs.write(path, result.file.content)
            elif isinstance(result, Deleted) and self.fs.exists(path):
                self.fs.remove_file(path)
        except OSError as exc:
            logger.error("Failed to write %s: %s", path, exc)
            return Failed(path=str(path), error=FileIOError(path, exc))
        return result
