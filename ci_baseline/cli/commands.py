"""
CLI commands for ci-baseline.

Provides the main command-line interface using Click.
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ci_baseline import __version__
from ci_baseline.core.apply import SkipFailures, parse_and_apply_ci_baseline
from ci_baseline.core.config import PROJECT_CONFIG_NAME, CiBaselineConfig, validate_config
from ci_baseline.core.results import BuildResult, CiBaselineData, format_ci_result
from ci_baseline.models.base import CiBaselineState, PackageSpec, Triplet, parse_triplet_name
from ci_baseline.models.baseline import CiBaselineLine
from ci_baseline.parsing.ci_baseline import BaselineParseError, load_ci_baseline
from ci_baseline.reporting import BaselineReport, ReportConfig, ReporterRegistry
from ci_baseline.utils.logging import get_logger, setup_logging

console = Console()
logger = get_logger("cli")

# Exit codes
EXIT_SUCCESS = 0
EXIT_REGRESSIONS = 1
EXIT_CONFIG_ERROR = 2
EXIT_RUNTIME_ERROR = 3


@click.group()
@click.version_option(version=__version__, prog_name="ci-baseline")
@click.option("-v", "--verbose", is_flag=True, help="Enable verbose output (DEBUG level)")
@click.option("-q", "--quiet", is_flag=True, help="Suppress non-error output (ERROR level)")
@click.option(
    "--log-file",
    type=click.Path(path_type=Path),
    help="Write logs to file",
)
@click.option("--json-logs", is_flag=True, help="Output logs in JSON format")
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    log_file: Optional[Path],
    json_logs: bool,
) -> None:
    """ci-baseline - expected CI build states per port and triplet.

    Parses baseline files of port:triplet=(fail|skip) entries and applies
    them to the triplets tracked by a CI run.
    """
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet

    if verbose:
        level = "DEBUG"
    elif quiet:
        level = "ERROR"
    else:
        level = "WARNING"

    setup_logging(
        level=level,
        log_file=log_file,
        json_format=json_logs,
    )


@cli.command()
@click.argument("baseline_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.pass_context
def check(ctx: click.Context, baseline_file: Path) -> None:
    """Check that a baseline file parses.

    Prints the number of fail and skip entries, or the first error.

    Examples:

        ci-baseline check scripts/ci.baseline.txt
    """
    lines = _load_or_exit(baseline_file)

    fails = sum(1 for line in lines if line.state == CiBaselineState.FAIL)
    skips = len(lines) - fails
    if not ctx.obj.get("quiet"):
        console.print(f"[green]OK[/] {len(lines)} entries ({fails} fail, {skips} skip) in {baseline_file}")


@cli.command()
@click.argument("baseline_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("-t", "--triplet", help="Target triplet tracked by this CI run")
@click.option("--host-triplet", help="Host triplet tracked by this CI run")
@click.option("--exclude", help="Comma-separated ports to exclude on the target triplet")
@click.option("--host-exclude", help="Comma-separated ports to exclude on the host triplet")
@click.option("--skip-failures", is_flag=True, help="Also exclude expected failures")
@click.option(
    "-f",
    "--format",
    "output_format",
    type=click.Choice(["console", "json"]),
    help="Output format",
)
@click.option(
    "-o",
    "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Write the report to a file",
)
@click.option(
    "-c",
    "--config",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Configuration file path",
)
def apply(
    baseline_file: Path,
    triplet: Optional[str],
    host_triplet: Optional[str],
    exclude: Optional[str],
    host_exclude: Optional[str],
    skip_failures: bool,
    output_format: Optional[str],
    output: Optional[Path],
    config: Optional[Path],
) -> None:
    """Apply a baseline to the tracked triplets.

    Reports the expected failures and the resulting exclusion sets.

    Examples:

        ci-baseline apply ci.baseline.txt --triplet x64-linux

        ci-baseline apply ci.baseline.txt -t x64-uwp --host-triplet x64-windows -f json
    """
    cfg = _load_config(
        config,
        {
            "triplet": triplet,
            "host_triplet": host_triplet,
            "exclude": exclude,
            "host_exclude": host_exclude,
            "skip_failures": skip_failures or None,
            "output_format": output_format,
        },
    )

    lines = _load_or_exit(baseline_file)
    exclusions_map = cfg.tracked_exclusions()
    expected_failures = parse_and_apply_ci_baseline(
        lines,
        exclusions_map,
        SkipFailures.YES if cfg.skip_failures else SkipFailures.NO,
    )

    report = BaselineReport.build(str(baseline_file), len(lines), expected_failures, exclusions_map)
    reporter = ReporterRegistry.create(
        cfg.reporting.format,
        ReportConfig(show_exclusions=cfg.reporting.show_exclusions),
    )
    if reporter is None:
        console.print(f"[red]Unknown output format:[/] {cfg.reporting.format}")
        sys.exit(EXIT_CONFIG_ERROR)

    if output:
        path = reporter.write(report, output)
        console.print(f"[green]Report written to:[/] {path}")
    else:
        click.echo(reporter.generate(report), nl=False)


@cli.command()
@click.argument("baseline_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("-t", "--triplet", help="Target triplet tracked by this CI run")
@click.option("--host-triplet", help="Host triplet tracked by this CI run")
@click.option(
    "-r",
    "--result",
    "results",
    multiple=True,
    help="Build result as port:triplet=RESULT (can be specified multiple times)",
)
@click.option("--allow-unexpected-passing", is_flag=True, help="Don't report expected failures that passed")
@click.option(
    "-c",
    "--config",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Configuration file path",
)
def verify(
    baseline_file: Path,
    triplet: Optional[str],
    host_triplet: Optional[str],
    results: tuple[str, ...],
    allow_unexpected_passing: bool,
    config: Optional[Path],
) -> None:
    """Compare CI build results against a baseline.

    Exits with status 1 if any result is a regression.

    Examples:

        ci-baseline verify ci.baseline.txt -t x64-linux -r zlib:x64-linux=BUILD_FAILED
    """
    cfg = _load_config(
        config,
        {
            "triplet": triplet,
            "host_triplet": host_triplet,
            "allow_unexpected_passing": allow_unexpected_passing or None,
        },
    )

    parsed_results = [_parse_result(value) for value in results]
    lines = _load_or_exit(baseline_file)
    data = CiBaselineData.from_failures(parse_and_apply_ci_baseline(lines, cfg.tracked_exclusions()))

    regressions = 0
    for spec, result in parsed_results:
        message = format_ci_result(
            spec,
            result,
            data,
            baseline_path=baseline_file,
            allow_unexpected_passing=cfg.allow_unexpected_passing,
        )
        if message is None:
            continue
        if result.is_failure:
            regressions += 1
        click.echo(message)

    logger.info("Verified build results", results=len(parsed_results), regressions=regressions)
    if regressions:
        sys.exit(EXIT_REGRESSIONS)


@cli.command()
@click.argument("path", type=click.Path(file_okay=False, path_type=Path), default=".")
@click.option("--force", is_flag=True, help="Overwrite existing configuration")
def init(path: Path, force: bool) -> None:
    """Initialize .ci-baseline.yml configuration in a directory.

    Examples:

        ci-baseline init

        ci-baseline init ./ports --force
    """
    config_path = path / PROJECT_CONFIG_NAME

    if config_path.exists() and not force:
        console.print(f"[yellow]Configuration already exists:[/] {config_path}")
        console.print("Use --force to overwrite")
        return

    path.mkdir(parents=True, exist_ok=True)
    CiBaselineConfig().to_yaml(config_path)
    console.print(f"[green]Created configuration:[/] {config_path}")


@cli.command()
def version() -> None:
    """Show version and system information."""
    import platform

    table = Table(title="ci-baseline")
    table.add_column("Component", style="cyan")
    table.add_column("Version", style="green")

    table.add_row("ci-baseline", __version__)
    table.add_row("Python", platform.python_version())
    table.add_row("Platform", platform.platform())

    console.print(table)


def _load_or_exit(baseline_file: Path) -> list[CiBaselineLine]:
    """Load a baseline file, exiting with the formatted diagnostic on error."""
    try:
        return load_ci_baseline(baseline_file)
    except BaselineParseError as e:
        click.echo(e.error.format(), err=True, nl=False)
        sys.exit(EXIT_RUNTIME_ERROR)
    except (OSError, UnicodeDecodeError) as e:
        console.print(f"[red]Cannot read baseline:[/] {escape(str(e))}")
        sys.exit(EXIT_RUNTIME_ERROR)


def _load_config(config: Optional[Path], cli_args: dict) -> CiBaselineConfig:
    """Load configuration, exiting with EXIT_CONFIG_ERROR on invalid values."""
    try:
        cfg = CiBaselineConfig.load(cli_args=cli_args, config_file=config)
    except Exception as e:
        console.print(f"[red]Configuration error:[/] {escape(str(e))}")
        sys.exit(EXIT_CONFIG_ERROR)

    for warning in validate_config(cfg):
        logger.warning(warning)
    return cfg


def _parse_result(value: str) -> tuple[PackageSpec, BuildResult]:
    """Parse a ``port:triplet=RESULT`` option value."""
    spec_text, sep, result_text = value.rpartition("=")
    port, colon, triplet_text = spec_text.partition(":")
    triplet: Optional[Triplet] = parse_triplet_name(triplet_text.strip().lower())
    if not sep or not colon or not port.strip() or triplet is None:
        raise click.BadParameter(f"expected port:triplet=RESULT, got {value!r}", param_hint="--result")
    try:
        result = BuildResult.from_string(result_text)
    except ValueError:
        choices = ", ".join(r.value for r in BuildResult)
        raise click.BadParameter(f"unknown build result {result_text!r}; expected one of {choices}", param_hint="--result") from None
    return PackageSpec(port.strip(), triplet), result


if __name__ == "__main__":
    cli()
