"""
setup-coding — CLI entrypoint.

Usage:
    setup-coding environment.yml
    setup-coding --dry-run environment.yml
    setup-coding --json environment.toml
"""

from __future__ import annotations

import json
import os
import sys
from pathlib import Path

import click

from setup_coding import __version__
from setup_coding.core.observability.logging_config import setup_logging

_STATUS_STYLE: dict[str, tuple[str, str, str]] = {
    # status → (icon, colour, wording)
    "installed": ("✅", "green", "installed"),
    "updated":   ("✅", "green", "updated"),
    "present":   ("⊘ ", "white", "already present"),
    "planned":   ("📝", "cyan", "would run"),
    "failed":    ("❌", "red", "failed"),
    "aborted":   ("⏭️ ", "yellow", "not attempted"),
}


@click.command()
@click.version_option(version=__version__, prog_name="setup-coding")
@click.argument("config_path", type=click.Path(path_type=Path))
@click.option("--verbose", "-v", is_flag=True, help="Show every probe and command.")
@click.option("--quiet", "-q", is_flag=True, help="Only report errors.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.option("--dry-run", is_flag=True, help="Show what would run without running it.")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
def cli(
    config_path: Path,
    verbose: bool,
    quiet: bool,
    debug: bool,
    dry_run: bool,
    as_json: bool,
) -> None:
    """Provision this machine from a declarative CONFIG_PATH.

    Installs only the tools and keys that are missing. Individual
    failures are reported at the end and never stop the run.
    """
    # ── Logging setup (once, at process start) ──────────────────
    if debug:
        level = "DEBUG"
    elif verbose:
        level = "INFO"
    elif quiet:
        level = "ERROR"
    else:
        level = os.environ.get("SETUP_CODING_LOG_LEVEL", "WARNING")

    setup_logging(
        level=level,
        log_file=os.environ.get("SETUP_CODING_LOG_FILE"),
        log_file_level=os.environ.get("SETUP_CODING_LOG_FILE_LEVEL"),
    )

    from setup_coding.adapters.shell.pipeline import SubprocessAdapter
    from setup_coding.core.config.loader import ConfigError, load_environment
    from setup_coding.core.services.provision import PlanRunner, build_requests

    try:
        environment = load_environment(config_path)
    except ConfigError as e:
        click.secho(f"❌ {e}", fg="red", err=True)
        sys.exit(1)

    requests = build_requests(environment)
    runner = PlanRunner(SubprocessAdapter(), dry_run=dry_run)
    report = runner.execute(requests)

    if as_json:
        click.echo(json.dumps(report.to_dict(), indent=2))
    else:
        _render(report, quiet=quiet)

    if report.fatal:
        sys.exit(1)


def _render(report, *, quiet: bool) -> None:
    """Human-readable run summary."""
    if not report.results:
        click.secho("✅ Nothing to do", fg="green")
        return

    title = "Plan" if report.dry_run else "Summary"
    click.secho(f"\n📋 {title}", fg="cyan", bold=True)

    for result in report.results:
        if quiet and result.ok:
            continue
        icon, colour, wording = _STATUS_STYLE[result.status]
        click.echo(f"   {icon} {result.request.identity:<20} ", nl=False)
        click.secho(wording, fg=colour)

        if result.status == "failed" and result.failure_summary:
            click.echo(f"      {result.failure_summary}")
        if result.status == "planned" and result.pipeline is not None:
            for line in result.pipeline.render():
                click.echo(f"      $ {line}")

    if report.fatal:
        click.echo()
        click.secho(f"❌ {report.fatal}", fg="red", bold=True)

    click.echo()
    counts = (
        f"{report.succeeded} done, {report.present} present, "
        f"{report.failed} failed"
    )
    if report.aborted:
        counts += f", {report.aborted} not attempted"
    status_color = {"ok": "green", "partial": "yellow", "failed": "red"}[report.status]
    click.secho(f"   {counts}", fg=status_color)


if __name__ == "__main__":
    cli()
