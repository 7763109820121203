import logging
from pathlib import Path
from typing import NoReturn

import typer

from diffpatch.config import load_settings
from diffpatch.differ.base import DiffAlgorithm, generate_patch
from diffpatch.errors import DiffPatchError
from diffpatch.logging import setup_logging
from diffpatch.multipatch.orchestrator import MultifilePatcher
from diffpatch.multipatch.parser import parse_multifile_file
from diffpatch.multipatch.report import describe_report, describe_result, summarize_results
from diffpatch.patch.format import format_patch
from diffpatch.patch.parser import parse_patch
from diffpatch.patcher.base import PatcherAlgorithm, apply_patch

app = typer.Typer(no_args_is_help=True)


def _read_text(path: Path) -> str:
    try:
        return Path(path).read_bytes().decode("utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise typer.BadParameter(f"Cannot read {path}: {exc}")


def _write_output(path: Path | None, text: str) -> None:
    if path is None:
        typer.echo(text, nl=False)
        return
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(text.encode("utf-8"))
    typer.echo(f"Wrote {path}")


def _fail(exc: DiffPatchError) -> NoReturn:
    typer.echo(f"Error: {exc}", err=True)
    raise typer.Exit(code=1)


@app.command("generate")
def generate_cmd(
    old: Path = typer.Option(..., "--old", "-i", help="Original file"),
    new: Path = typer.Option(..., "--new", "-n", help="Modified file"),
    output: Path | None = typer.Option(None, "--output", "-o", help="Write the patch here"),
    context: int | None = typer.Option(
        None, "--context", "-c", min=0, help="Context lines around each chunk"
    ),
    algorithm: DiffAlgorithm | None = typer.Option(
        None, "--algorithm", "-a", help="Diff algorithm"
    ),
):
    settings = load_settings(context_lines=context, algorithm=algorithm)
    patch = generate_patch(
        _read_text(old),
        _read_text(new),
        algorithm=settings.algorithm,
        context_lines=settings.context_lines,
        old_file=old.name,
        new_file=new.name,
    )
    _write_output(output, format_patch(patch))


@app.command("apply")
def apply_cmd(
    patch_path: Path = typer.Option(..., "--patch", "-p", help="Unified diff to apply"),
    file: Path = typer.Option(..., "--file", "-f", help="File to patch"),
    output: Path | None = typer.Option(None, "--output", "-o", help="Write the result here"),
    reverse: bool = typer.Option(False, "--reverse", "-r", help="Undo the patch"),
    patcher: PatcherAlgorithm | None = typer.Option(
        None, "--patcher", help="Patch application strategy"
    ),
):
    settings = load_settings(reverse=reverse or None, patcher=patcher)
    try:
        patch = parse_patch(_read_text(patch_path))
        result = apply_patch(
            patch, _read_text(file), reverse=settings.reverse, algorithm=settings.patcher
        )
    except DiffPatchError as exc:
        _fail(exc)
    _write_output(output, result)


@app.command("apply-multi")
def apply_multi_cmd(
    patch_path: Path = typer.Option(..., "--patch", "-p", help="Multi-file diff to apply"),
    directory: Path | None = typer.Option(
        None, "--directory", "-d", help="Directory the patch paths are relative to"
    ),
    reverse: bool = typer.Option(False, "--reverse", "-r", help="Undo the patch"),
    dry_run: bool = typer.Option(False, "--dry-run", help="Report without writing files"),
    patcher: PatcherAlgorithm | None = typer.Option(
        None, "--patcher", help="Patch application strategy"
    ),
):
    settings = load_settings(reverse=reverse or None, root_dir=directory, patcher=patcher)
    try:
        multifile_patch = parse_multifile_file(patch_path)
    except OSError as exc:
        raise typer.BadParameter(f"Cannot read {patch_path}: {exc}")
    except DiffPatchError as exc:
        _fail(exc)

    patcher_run = MultifilePatcher(
        multifile_patch, root_dir=settings.root_dir, algorithm=settings.patcher
    )
    if dry_run:
        results = patcher_run.apply(reverse=settings.reverse)
    else:
        results = patcher_run.apply_and_write(reverse=settings.reverse)

    for result in results:
        typer.echo(describe_result(result))
    report = summarize_results(results)
    typer.echo(describe_report(report))
    if not report.ok:
        raise typer.Exit(code=1)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
):
    """
    diffpatch CLI
    """
    setup_logging(level=logging.DEBUG if verbose else logging.WARNING)
