"""
CLI commands for the toolchain profile table.

Read-only helpers: which installer a host gets, where it comes from,
and whether a local copy matches the pinned checksum.
"""

from __future__ import annotations

import json
import sys
from pathlib import Path

import click

from buildhost.core.services.toolchain.data.constants import RUSTUP_VERSION
from buildhost.core.services.toolchain.domain.errors import ProvisionError


def _resolve(arch: str | None):
    from buildhost.core.services.toolchain import (
        detect_host_arch,
        resolve_architecture_profile,
    )

    try:
        return resolve_architecture_profile(arch or detect_host_arch())
    except ProvisionError as e:
        click.secho(f"❌ {e}", fg="red")
        sys.exit(1)


@click.group()
def toolchain() -> None:
    """Toolchain — architecture profiles, installer URL, checksum check."""


@toolchain.command()
@click.option("--arch", default=None, help="Architecture (default: detect).")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
def arch(arch: str | None, as_json: bool) -> None:
    """Show the installer profile for this (or the given) architecture."""
    profile = _resolve(arch)

    if as_json:
        data = profile.model_dump(mode="json")
        data["installer_version"] = RUSTUP_VERSION
        click.echo(json.dumps(data, indent=2))
        return

    click.secho(f"🖥️  {profile.arch}", fg="cyan", bold=True)
    click.echo(f"   Triple:    {profile.target_triple}")
    click.echo(f"   rustup:    {RUSTUP_VERSION}")
    click.echo(f"   sha256:    {profile.sha256}")


@toolchain.command("list")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
def list_profiles(as_json: bool) -> None:
    """List every supported architecture."""
    from buildhost.core.services.toolchain import ARCHITECTURE_PROFILES

    if as_json:
        click.echo(json.dumps(
            [p.model_dump(mode="json") for p in ARCHITECTURE_PROFILES.values()],
            indent=2,
        ))
        return

    for profile in ARCHITECTURE_PROFILES.values():
        click.echo(f"   {profile.arch:<8} {profile.target_triple}")


@toolchain.command()
@click.option("--arch", default=None, help="Architecture (default: detect).")
@click.option("--base-url", default=None, help="Artifact host (default: config or static.rust-lang.org).")
@click.pass_context
def url(ctx: click.Context, arch: str | None, base_url: str | None) -> None:
    """Print the pinned installer download URL."""
    from buildhost.core.config.loader import ConfigError, load_config_or_default
    from buildhost.core.services.toolchain import installer_url

    profile = _resolve(arch)
    if base_url is None:
        try:
            config, _ = load_config_or_default(ctx.obj.get("config_path"))
        except ConfigError as e:
            click.secho(f"❌ {e}", fg="red")
            sys.exit(1)
        base_url = config.toolchain.base_url

    try:
        click.echo(installer_url(profile, base_url))
    except ProvisionError as e:
        click.secho(f"❌ {e}", fg="red")
        sys.exit(1)


@toolchain.command()
@click.argument("installer", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--arch", default=None, help="Architecture (default: detect).")
def verify(installer: Path, arch: str | None) -> None:
    """Check a downloaded rustup-init against the pinned checksum."""
    from buildhost.core.services.toolchain import verify_file

    profile = _resolve(arch)
    try:
        digest = verify_file(installer, profile.sha256)
    except ProvisionError as e:
        click.secho(f"❌ {e}", fg="red")
        sys.exit(1)

    click.secho(f"✅ {installer.name} matches {profile.target_triple}", fg="green")
    click.echo(f"   sha256: {digest}")
