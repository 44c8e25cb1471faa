"""
buildhost — CLI entrypoint.

Usage:
    buildhost --help
    buildhost -v provision
    buildhost toolchain arch
    buildhost config check
    buildhost history -n 5
"""

from __future__ import annotations

import json
import os
import sys
from pathlib import Path

import click

from buildhost import __version__
from buildhost.core.observability.logging_config import setup_logging


@click.group()
@click.version_option(version=__version__, prog_name="buildhost")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=False),
    default=None,
    help="Path to provision.yml (default: auto-detect).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    debug: bool,
    config_path: str | None,
) -> None:
    """buildhost — provision a reproducible Rust CI build host."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    ctx.obj["debug"] = debug
    ctx.obj["config_path"] = Path(config_path) if config_path else None

    if debug:
        level = "DEBUG"
    elif verbose:
        level = "INFO"
    elif quiet:
        level = "ERROR"
    else:
        level = os.environ.get("BUILDHOST_LOG_LEVEL", "WARNING")

    setup_logging(
        level=level,
        log_file=os.environ.get("BUILDHOST_LOG_FILE"),
        log_file_level=os.environ.get("BUILDHOST_LOG_FILE_LEVEL"),
    )


@cli.command()
@click.option("--arch", default=None, help="Host architecture (default: dpkg --print-architecture).")
@click.option("--toolchain-version", default=None, help="Rust version (default: $RUST_VERSION or config).")
@click.option("--rustup-home", default=None, help="RUSTUP_HOME (default: $RUSTUP_HOME or config).")
@click.option("--cargo-home", default=None, help="CARGO_HOME (default: $CARGO_HOME or config).")
@click.option("--work-dir", default=None, help="Directory for the transient installer.")
@click.option("--skip-tools", is_flag=True, help="Don't install the cargo tools.")
@click.option("--skip-system-packages", is_flag=True, help="Don't run apt-get.")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def provision(
    ctx: click.Context,
    arch: str | None,
    toolchain_version: str | None,
    rustup_home: str | None,
    cargo_home: str | None,
    work_dir: str | None,
    skip_tools: bool,
    skip_system_packages: bool,
    as_json: bool,
) -> None:
    """Install the pinned Rust toolchain and cargo tools."""
    from buildhost.core.use_cases.provision import run_provision

    result = run_provision(
        config_path=ctx.obj.get("config_path"),
        arch=arch,
        toolchain_version=toolchain_version,
        rustup_home=rustup_home,
        cargo_home=cargo_home,
        work_dir=work_dir,
        skip_tools=skip_tools,
        skip_system_packages=skip_system_packages,
    )

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(0 if result.ok else 1)

    quiet = ctx.obj.get("quiet", False)
    outcome = result.outcome

    if not result.ok:
        stage = outcome.failed_at if outcome and outcome.failed_at else "setup"
        click.secho(f"❌ Provisioning failed at {stage} ({result.reason})", fg="red", bold=True)
        click.echo(f"   {result.error}")
        sys.exit(1)

    assert outcome is not None and outcome.profile is not None  # guaranteed when ok
    if quiet:
        return

    click.secho(f"✅ Rust {outcome.toolchain_version} ready", fg="green", bold=True)
    click.echo(f"   Host:      {result.request.host_arch} → {outcome.profile.target_triple}")
    click.echo(f"   Installer: sha256 {outcome.installer_sha256}")
    for tool, version in outcome.versions.items():
        click.echo(f"   {tool + ':':<10} {version}")
    for tool in result.tools_installed:
        click.echo(f"   📦 {tool}")
    click.echo()


@cli.group()
def config() -> None:
    """Provisioning configuration commands."""


@config.command("check")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def config_check(ctx: click.Context, as_json: bool) -> None:
    """Validate provision.yml."""
    from buildhost.core.use_cases.config_check import check_config

    result = check_config(config_path=ctx.obj.get("config_path"))

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(0 if result.valid else 1)

    if result.valid:
        assert result.config is not None  # guaranteed when valid
        click.secho("✅ Configuration is valid", fg="green", bold=True)
        click.echo(f"   Toolchain: {result.config.toolchain.version}")
        click.echo(f"   Cargo tools: {len(result.config.cargo_tools)}")
        click.echo(f"   System packages: {len(result.config.system_packages)}")
    else:
        click.secho("❌ Configuration errors:", fg="red", bold=True)
        for err in result.errors:
            click.echo(f"   • {err}")

    if result.warnings:
        click.echo()
        click.secho("⚠️  Warnings:", fg="yellow")
        for warn in result.warnings:
            click.echo(f"   • {warn}")

    if not result.valid:
        click.echo()
        sys.exit(1)

    click.echo()


from buildhost.ui.cli.history import history  # noqa: E402
from buildhost.ui.cli.toolchain import toolchain  # noqa: E402

cli.add_command(history)
cli.add_command(toolchain)


if __name__ == "__main__":
    cli()
