"""Click CLI with file, folder, and serve subcommands."""

from __future__ import annotations

import json
import logging
from pathlib import Path

import click

from dependency_dashboard import __version__
from dependency_dashboard.exceptions import DependencyDashboardError
from dependency_dashboard.models import AnalysisConfig
from dependency_dashboard.pipeline import analyze_folder, analyze_single_file

_SEVERITY_COLORS = {"critical": "red", "warning": "yellow", "info": "blue"}


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _write_json(payload: dict, output: Path | None) -> None:
    text = json.dumps(payload, indent=2)
    if output:
        output.write_text(text, encoding="utf-8")
        click.echo(f"Report written to {output}")
    else:
        click.echo(text)


def _echo_cycles(circular: dict) -> None:
    click.echo(
        f"Circular dependencies: {circular['totalCircularDependencies']} "
        f"(critical {circular['critical']}, warning {circular['warnings']}, info {circular['info']})"
    )
    for cd in circular["circularDependencies"]:
        color = _SEVERITY_COLORS.get(cd["severity"], "white")
        click.echo(f"  {click.style(cd['severity'], fg=color):>20}  {' -> '.join(cd['cycle'])}")


def _echo_depth(depth: dict) -> None:
    stats = depth["statistics"]
    click.echo(
        f"Depth: max outgoing {stats['maxOutgoingDepth']}, max incoming {stats['maxIncomingDepth']}, "
        f"avg outgoing {stats['averageOutgoingDepth']}, avg incoming {stats['averageIncomingDepth']}"
    )
    for warning in depth["deepDependencyWarnings"]:
        color = _SEVERITY_COLORS.get(warning["severity"], "white")
        click.echo(f"  {click.style(warning['file'], fg=color)}: {warning['message']}")
    for rec in depth["recommendations"]:
        click.echo(f"  [{rec['type']}] {rec['message']}. {rec['suggestion']}")


@click.group()
@click.version_option(version=__version__)
@click.option("--verbose", "-v", is_flag=True, envvar="VERBOSE", help="Dump module keys and the full matrix")
@click.pass_context
def cli(ctx: click.Context, verbose: bool):
    """dependency-dashboard: Analyze module imports, cycles and dependency depth."""
    _configure_logging(verbose)
    ctx.obj = AnalysisConfig(verbose=verbose)


@cli.command(name="file")
@click.argument("target")
@click.argument("folder", type=click.Path(exists=True, file_okay=False, path_type=Path), default=".")
@click.option("--json", "as_json", is_flag=True, help="Print the report as JSON")
@click.option("-o", "--output", type=click.Path(dir_okay=False, path_type=Path), help="Write the JSON report to a file")
@click.pass_obj
def file_command(config: AnalysisConfig, target: str, folder: Path, as_json: bool, output: Path | None):
    """Show what imports TARGET and what TARGET imports within FOLDER."""
    folder = folder.resolve()
    target_path = Path(target)
    if target_path.exists():
        # a real path on disk is made relative to the scan folder
        try:
            target = target_path.resolve().relative_to(folder).as_posix()
        except ValueError:
            pass

    try:
        report = analyze_single_file(target, folder, config=config)
    except DependencyDashboardError as e:
        raise click.ClickException(str(e))

    payload = report.to_dict()
    if as_json or output:
        _write_json(payload, output)
        return

    click.echo(click.style(f"\n{target}", fg="cyan", bold=True))
    if report.target_module is None:
        click.echo("  (not found among discovered modules)")

    click.echo(f"\nImported by ({len(report.incoming)}):")
    for importer, details in report.incoming.items():
        click.echo(f"  {importer}")
        for detail in details:
            click.echo(f"    {click.style(detail, dim=True)}")

    click.echo(f"\nImports ({len(report.outgoing)}):")
    for dependency, details in report.outgoing.items():
        click.echo(f"  {dependency}")
        for detail in details:
            click.echo(f"    {click.style(detail, dim=True)}")

    click.echo(f"\nScanned {report.total_files} file(s)")
    _echo_cycles(payload["circularDependencies"])
    _echo_depth(payload["depthAnalysis"])


@cli.command(name="folder")
@click.argument("folder", type=click.Path(exists=True, file_okay=False, path_type=Path), default=".")
@click.option("--json", "as_json", is_flag=True, help="Print the report as JSON")
@click.option("-o", "--output", type=click.Path(dir_okay=False, path_type=Path), help="Write the JSON report to a file")
@click.option("--top", "top_n", default=10, show_default=True, help="Entries per ranking")
@click.pass_obj
def folder_command(config: AnalysisConfig, folder: Path, as_json: bool, output: Path | None, top_n: int):
    """Report per-file dependency metrics for every module in FOLDER."""
    config.top_n = top_n
    try:
        report = analyze_folder(folder, config=config)
    except DependencyDashboardError as e:
        raise click.ClickException(str(e))

    payload = report.to_dict()
    if as_json or output:
        _write_json(payload, output)
        return

    click.echo(f"\nAnalyzed {report.total_files} file(s), {report.total_dependencies} dependency link(s)\n")
    rankings = [
        ("Most depended on", report.most_depended_on, lambda f: f.incoming_count),
        ("Most dependent", report.most_dependent, lambda f: f.outgoing_count),
        ("Highest ratio", report.highest_ratio, lambda f: round(f.dependency_ratio, 2)),
    ]
    for title, entries, value in rankings:
        click.echo(click.style(title, fg="cyan"))
        for entry in entries:
            click.echo(f"  {value(entry):>6}  {entry.file}")
        click.echo()

    click.echo("Summary:")
    click.echo(f"  average incoming: {report.average_incoming:.2f}")
    click.echo(f"  average outgoing: {report.average_outgoing:.2f}")
    _echo_cycles(payload["circularDependencies"])
    _echo_depth(payload["depthAnalysis"])


@cli.command()
@click.option("--port", "-p", default=8421, help="Port number")
@click.option("--host", default="127.0.0.1", help="Host address")
def serve(port: int, host: str):
    """Start the JSON analysis API."""
    try:
        import uvicorn
    except ImportError:
        raise click.ClickException(
            "uvicorn is required for the API server. "
            "Install with: pip install 'dependency-dashboard[web]'"
        )

    from dependency_dashboard.web import create_app

    click.echo(f"Starting dependency-dashboard API at http://{host}:{port}")
    uvicorn.run(create_app(), host=host, port=port, log_level="info")


if __name__ == "__main__":
    cli()
