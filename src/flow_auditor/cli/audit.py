"""Flow Auditor (flow-audit) - heuristic project audit.

Audits a project tree and prints the report, by default as JSON.
"""

from __future__ import annotations

import asyncio
import sys
from pathlib import Path

import click

from ..formatters import OUTPUT_FORMATS


def _split_csv(value: str | None) -> list[str] | None:
    if not value:
        return None
    return [v.strip().lower() for v in value.split(",") if v.strip()]


@click.group(invoke_without_command=True)
@click.pass_context
@click.option("--project", "-p", type=click.Path(file_okay=False), help="Project path")
@click.option("--output-format", "-f", type=click.Choice(list(OUTPUT_FORMATS)),
              help="Report format (default: output.format from config, else json)")
@click.option("--output", "-o", type=click.Path(dir_okay=False), help="Write the report to a file")
@click.option("--ci", is_flag=True, help="CI mode: exit code reflects risk level")
@click.option("--detectors", type=str, help="Comma-separated detectors to run")
@click.option("--skip-detectors", type=str, help="Comma-separated detectors to skip")
def audit_cli(
    ctx: click.Context,
    project: str | None,
    output_format: str | None,
    output: str | None,
    ci: bool,
    detectors: str | None,
    skip_detectors: str | None,
) -> None:
    """Flow Auditor - bugs, security, performance, responsiveness and route coverage."""
    if ctx.invoked_subcommand is not None:
        return

    if not project:
        click.echo("Error: --project/-p is required for audit mode.", err=True)
        ctx.exit(11)
        return

    from ..core.auditor import run_audit

    exit_code = asyncio.run(
        run_audit(
            project_path=Path(project),
            output_format=output_format,
            output_path=Path(output) if output else None,
            ci=ci,
            detectors=_split_csv(detectors),
            skip_detectors=_split_csv(skip_detectors),
        )
    )
    if ci or exit_code != 0:
        sys.exit(exit_code)


@audit_cli.command()
@click.option("--project", "-p", type=click.Path(exists=True, file_okay=False), required=True)
def init(project: str) -> None:
    """Write a starter .flow-audit/config.yaml into a project."""
    from ..core.config import write_starter_config

    config_path = write_starter_config(Path(project))
    if config_path is None:
        click.echo(f"Config already exists in {project}, left unchanged.")
    else:
        click.echo(f"Initialized {config_path}")


@audit_cli.command(name="detectors")
def list_detectors() -> None:
    """List available detectors in run order."""
    from ..detectors import DETECTOR_DEFS

    for key, detector_cls in DETECTOR_DEFS.items():
        click.echo(f"{key:<12} {detector_cls.name} ({detector_cls.prefix})")


def main() -> None:
    audit_cli()


if __name__ == "__main__":
    main()
