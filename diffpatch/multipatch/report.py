from pydantic import BaseModel, ConfigDict, Field

from diffpatch.errors import MultiPatchApplyError
from diffpatch.multipatch.models import Applied, ApplyResult, Deleted, Failed, Skipped


class ApplyReport(BaseModel):
    model_config = ConfigDict(arbitrary_types_allowed=True)

    applied: int = 0
    deleted: int = 0
    skipped: int = 0
    failed: int = 0
    results: list[ApplyResult] = Field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.results)

    @property
    def ok(self) -> bool:
        return self.failed == 0

    def failures(self) -> list[Failed]:
        return [r for r in self.results if isinstance(r, Failed)]

    def raise_for_failures(self) -> None:
        if self.failed:
            raise MultiPatchApplyError(self)


def summarize_results(results: list[ApplyResult]) -> ApplyReport:
    return ApplyReport(
        applied=sum(1 for r in results if isinstance(r, Applied)),
        deleted=sum(1 for r in results if isinstance(r, Deleted)),
        skipped=sum(1 for r in results if isinstance(r, Skipped)),
        failed=sum(1 for r in results if isinstance(r, Failed)),
        results=list(results),
    )


def describe_result(result: ApplyResult) -> str:
    if isinstance(result, Applied):
        verb = "Created" if result.file.is_new else "Patched"
        return f"{verb}: {result.path}"
    if isinstance(result, Deleted):
        return f"Deleted: {result.path}"
    if isinstance(result, Skipped):
        return f"Skipped: {result.reason}"
    return f"Failed: {result.path}: {result.message}"


def describe_report(report: ApplyReport) -> str:
    return (
        f"Summary: {report.applied} applied, {report.deleted} deleted, "
        f"{report.skipped} skipped, {report.failed} failed"
    )
