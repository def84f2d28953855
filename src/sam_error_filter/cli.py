"""
Command-line interface for the SAM error read filter.

Commands:
- check: Parse rule files and show their criteria
- apply: Run rule files over a table of stratifier values

Example:
    $ sam-error-filter --help
    $ sam-error-filter check filters/low_quality.txt
    $ sam-error-filter apply --observations strata.tsv --filter filters/low_quality.txt
"""

from __future__ import annotations

import sys
from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from sam_error_filter import __version__
from sam_error_filter.config import get_settings, load_settings
from sam_error_filter.driver import FilterRunner, read_observations
from sam_error_filter.filter import FilterFileError, ReadFilter, is_known_suffix
from sam_error_filter.models import export_report
from sam_error_filter.utils.logging import (
    bind_context,
    clear_context,
    get_logger,
    setup_logging_from_settings,
)

console = Console()


@click.group()
@click.version_option(version=__version__, prog_name="sam-error-filter")
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True, path_type=Path),
    help="Configuration file path",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose output",
)
@click.pass_context
def main(ctx: click.Context, config: Path | None, verbose: bool) -> None:
    """SAM error read filter CLI.

    Inspect read filter rule files and apply them to precomputed
    stratifier values.
    """
    ctx.ensure_object(dict)

    if config:
        settings = load_settings(config)
    else:
        settings = get_settings()

    ctx.obj["settings"] = settings
    ctx.obj["verbose"] = verbose

    setup_logging_from_settings(settings.logging, level="DEBUG" if verbose else None)


def _load(ctx: click.Context, path: Path) -> ReadFilter | None:
    settings = ctx.obj["settings"]
    try:
        return ReadFilter.from_file(
            path,
            mismatch_policy=settings.filter.on_type_mismatch,
            warn_unknown_suffixes=settings.filter.warn_unknown_suffixes,
            log=get_logger("sam_error_filter.filter"),
        )
    except FilterFileError as e:
        console.print(f"[red]Error:[/red] {e}")
        sys.exit(2)


@main.command("check")
@click.argument(
    "rule_files",
    nargs=-1,
    required=True,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.pass_context
def check(ctx: click.Context, rule_files: tuple[Path, ...]) -> None:
    """Parse rule files and show the criteria they define.

    Exits with status 1 if a file defines no filter.
    """
    missing = 0

    for path in rule_files:
        read_filter = _load(ctx, path)
        if read_filter is None:
            console.print(f"[yellow]No filter defined in[/yellow] {path}")
            missing += 1
            continue

        table = Table(title=f"{read_filter.name} ({path})")
        table.add_column("Suffix", style="cyan")
        table.add_column("Type")
        table.add_column("Comparator", justify="center")
        table.add_column("Value", justify="right")

        for suffix, group in read_filter.criteria.items():
            label = suffix if is_known_suffix(suffix) else f"{suffix} [dim](unknown)[/dim]"
            for criterion in group:
                kind, symbol, value = criterion.describe().split("\t")
                table.add_row(label, kind, symbol, value)

        console.print(table)
        if not read_filter.criteria:
            console.print("[dim]No criteria: every observation is excluded.[/dim]")

    if missing:
        sys.exit(1)


@main.command("apply")
@click.option(
    "--observations",
    "-i",
    required=True,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Tab-separated table with read_id and one column per stratifier",
)
@click.option(
    "--filter",
    "-f",
    "rule_files",
    multiple=True,
    required=True,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Rule file (repeatable)",
)
@click.option(
    "--output-dir",
    "-o",
    type=click.Path(file_okay=False, path_type=Path),
    help="Report directory (overrides config)",
)
@click.option(
    "--prefix",
    help="Report file name prefix (overrides config)",
)
@click.option(
    "--no-export",
    is_flag=True,
    help="Print the summary without writing report files",
)
@click.pass_context
def apply(
    ctx: click.Context,
    observations: Path,
    rule_files: tuple[Path, ...],
    output_dir: Path | None,
    prefix: str | None,
    no_export: bool,
) -> None:
    """Apply rule files to a table of stratifier values."""
    settings = ctx.obj["settings"]
    logger = get_logger(__name__)

    filters = []
    for path in rule_files:
        read_filter = _load(ctx, path)
        if read_filter is None:
            console.print(f"[yellow]Skipping {path}:[/yellow] no filter defined")
            continue
        filters.append(read_filter)

    if not filters:
        console.print("[red]No usable filters.[/red]")
        sys.exit(1)

    bind_context(observations=str(observations))
    try:
        runner = FilterRunner(filters)
        try:
            for _ in runner.run(read_observations(observations)):
                pass
        except ValueError as e:
            console.print(f"[red]Error:[/red] {e}")
            sys.exit(2)

        report = runner.report()
    finally:
        clear_context()

    table = Table(title="Filter Exclusions")
    table.add_column("Filter", style="cyan")
    table.add_column("Reads", justify="right")
    table.add_column("Observations", justify="right")

    for exclusion in report.filters:
        table.add_row(
            exclusion.filter_name,
            f"{exclusion.distinct_reads:,}",
            f"{exclusion.total_exclusions:,}",
        )

    console.print(table)
    console.print(
        f"Excluded [bold]{report.observations_excluded:,}[/bold] of "
        f"{report.observations_seen:,} observations ({report.exclusion_rate:.1%})"
    )

    if no_export:
        return

    written = export_report(
        report,
        output_dir or settings.report_dir,
        prefix or settings.report.prefix,
        settings.report.extension,
    )
    logger.info("reports_exported", files=len(written))
    for path in written:
        console.print(f"[green]✓[/green] {path}")


if __name__ == "__main__":
    main()
