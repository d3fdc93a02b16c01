"""apichangelog generate command - compare two codebases and write a changelog."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import click
import structlog

from apichangelog.analysis import ReleaseDecision, decide_release
from apichangelog.config import ApiChangelogConfig, load_config
from apichangelog.core.console import definition_list, pluralize, status
from apichangelog.core.errors import ApiChangelogError, RenderError
from apichangelog.core.logging import configure_logging, get_log_file_path
from apichangelog.diff import compare_checksums, diff_snapshots
from apichangelog.extract import SnapshotBuilder
from apichangelog.model import Change, FileChange, Severity
from apichangelog.render import render_changelog, render_for_file, render_json

log = structlog.get_logger(__name__)


@click.command()
@click.argument("old_path", type=click.Path(path_type=Path))
@click.argument("new_path", type=click.Path(path_type=Path))
@click.option(
    "--output",
    "-o",
    default=None,
    help="Output file, relative to NEW_PATH (default: CHANGELOG.md)",
)
@click.option("--current-version", "-c", default=None, help="Current version (default: 1.0.0)")
@click.option(
    "--ignore",
    "-i",
    "ignore_patterns",
    multiple=True,
    help="Glob pattern to ignore (repeatable; replaces the defaults)",
)
@click.option(
    "--format",
    "-f",
    "output_format",
    type=click.Choice(["markdown", "json"]),
    default=None,
    help="Output format (default: markdown)",
)
@click.option("--dry-run", is_flag=True, help="Show the result without writing a file")
@click.option(
    "--no-empty-changeset",
    is_flag=True,
    help="When nothing changed, keep the current version and write nothing",
)
@click.option(
    "--strict-semver",
    is_flag=True,
    help="Breaking changes bump major even before 1.0.0",
)
@click.option("--quiet", "-q", is_flag=True, help="Only print the recommended version")
@click.pass_context
def generate_command(
    ctx: click.Context,
    old_path: Path,
    new_path: Path,
    output: str | None,
    current_version: str | None,
    ignore_patterns: tuple[str, ...],
    output_format: str | None,
    dry_run: bool,
    no_empty_changeset: bool,
    strict_semver: bool,
    quiet: bool,
) -> None:
    """Compare OLD_PATH with NEW_PATH and generate a changelog.

    Both paths are roots of a PHP codebase. Settings not given on the
    command line come from NEW_PATH/.apichangelog.yaml, the global config
    and APICHANGELOG__* environment variables.
    """
    old_root = old_path.resolve()
    new_root = new_path.resolve()
    verbose = bool((ctx.obj or {}).get("verbose"))

    try:
        config = load_config(
            new_root if new_root.is_dir() else None,
            **_overrides(
                output=output,
                current_version=current_version,
                ignore_patterns=ignore_patterns,
                output_format=output_format,
                no_empty_changeset=no_empty_changeset,
                strict_semver=strict_semver,
            ),
        )
    except ApiChangelogError as e:
        raise click.ClickException(str(e)) from e

    if not verbose:
        configure_logging(config=config.logging)

    try:
        _run(config, old_root, new_root, dry_run=dry_run, quiet=quiet)
    except ApiChangelogError as e:
        log.error("generate_failed", **e.to_dict())
        raise click.ClickException(_with_log_pointer(str(e))) from e


def _with_log_pointer(message: str) -> str:
    log_file = get_log_file_path()
    if log_file:
        return f"{message}. See {log_file} for details."
    return message


def _overrides(
    *,
    output: str | None,
    current_version: str | None,
    ignore_patterns: tuple[str, ...],
    output_format: str | None,
    no_empty_changeset: bool,
    strict_semver: bool,
) -> dict[str, Any]:
    """Map command line options onto config sections; unset options are left out."""
    analysis: dict[str, Any] = {}
    output_section: dict[str, Any] = {}
    discovery: dict[str, Any] = {}
    if current_version is not None:
        analysis["current_version"] = current_version
    if strict_semver:
        analysis["strict_semver"] = True
    if no_empty_changeset:
        analysis["no_empty_changeset"] = True
    if output is not None:
        output_section["file"] = output
    if output_format is not None:
        output_section["format"] = output_format
    if ignore_patterns:
        discovery["ignore_patterns"] = list(ignore_patterns)

    overrides: dict[str, Any] = {}
    for key, section in (
        ("analysis", analysis),
        ("output", output_section),
        ("discovery", discovery),
    ):
        if section:
            overrides[key] = section
    return overrides


def _run(
    config: ApiChangelogConfig,
    old_root: Path,
    new_root: Path,
    *,
    dry_run: bool,
    quiet: bool,
) -> None:
    builder = SnapshotBuilder(config.discovery)

    if not quiet:
        status("Analyzing codebases", style="none")
        status("Parsing old codebase...", indent=2)
    old_snapshot = builder.build(old_root, label="Parsing old")
    old_failures = len(builder.failures)
    if not quiet:
        status("Parsing new codebase...", indent=2)
    new_snapshot = builder.build(new_root, label="Parsing new")
    failures = old_failures + len(builder.failures)

    changes = diff_snapshots(old_snapshot, new_snapshot)
    file_changes = compare_checksums(old_snapshot, new_snapshot, changes)
    decision = decide_release(
        changes,
        file_changes,
        config.analysis.current_version,
        strict=config.analysis.strict_semver,
        no_empty_changeset=config.analysis.no_empty_changeset,
    )
    log.info(
        "comparison_done",
        changes=len(changes),
        file_changes=len(file_changes),
        severity=decision.severity.value,
        recommended=decision.recommended_version,
    )

    if not quiet:
        if failures:
            status(
                f"{pluralize(failures, 'file')} could not be parsed (see log)",
                style="warning",
            )
        _print_summary(changes, file_changes, decision)

    if decision.write_changelog:
        _emit(config, new_root, changes, file_changes, decision, dry_run=dry_run, quiet=quiet)

    if quiet:
        click.echo(decision.recommended_version)


def _print_summary(
    changes: list[Change],
    file_changes: list[FileChange],
    decision: ReleaseDecision,
) -> None:
    if not changes and not file_changes:
        status("No API changes detected between versions", style="success")
    elif not changes:
        status(
            f"No API changes detected, but {pluralize(len(file_changes), 'file')} "
            "have internal modifications",
            style="info",
        )
    else:
        total = len(changes) + len(file_changes)
        status(
            f"Found {pluralize(total, 'change')} "
            f"({len(changes)} API, {len(file_changes)} internal)",
            style="info",
        )

    definition_list(
        [
            ("Current Version", decision.current_version),
            ("Recommended Version", decision.recommended_version),
            ("Severity", decision.severity.value.capitalize()),
        ]
    )

    counts = {severity: 0 for severity in Severity}
    for change in changes:
        counts[change.severity] += 1
    if counts[Severity.MAJOR]:
        status(f"{counts[Severity.MAJOR]} BREAKING changes detected", style="warning")
    if counts[Severity.MINOR]:
        status(f"{pluralize(counts[Severity.MINOR], 'new feature')} added", style="info")
    if counts[Severity.PATCH]:
        status(f"{pluralize(counts[Severity.PATCH], 'patch-level change')}", style="success")
    if file_changes:
        status("Files with internal changes:", style="info")
        for file_change in file_changes:
            status(f"- {file_change.relative_path}", indent=4, style="none")


def _emit(
    config: ApiChangelogConfig,
    new_root: Path,
    changes: list[Change],
    file_changes: list[FileChange],
    decision: ReleaseDecision,
    *,
    dry_run: bool,
    quiet: bool,
) -> None:
    output_file = new_root / config.output.file
    fmt = config.output.format

    if fmt == "json":
        text = render_json(
            changes,
            decision.current_version,
            decision.recommended_version,
            decision.severity,
            file_changes,
        )
    elif fmt == "markdown":
        if dry_run:
            text = render_changelog(
                changes, decision.recommended_version, file_changes=file_changes
            )
        else:
            existing = _read_existing(output_file)
            text = render_for_file(
                existing, changes, decision.recommended_version, file_changes=file_changes
            )
    else:
        raise RenderError.unknown_format(fmt)

    if dry_run:
        if not quiet:
            status("Generated JSON" if fmt == "json" else "Generated Changelog", style="none")
            click.echo(text)
        return

    try:
        output_file.write_text(text, encoding="utf-8")
    except OSError as e:
        raise RenderError.write_failed(str(output_file), str(e)) from e

    log.info("changelog_written", path=str(output_file), format=fmt)
    if not quiet:
        label = "JSON report" if fmt == "json" else "Changelog"
        status(f"{label} written to: {output_file}", style="success")


def _read_existing(path: Path) -> str | None:
    if not path.is_file():
        return None
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise RenderError.read_failed(str(path), str(e)) from e

