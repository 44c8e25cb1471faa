"""
CLI command for the provisioning audit ledger.

Usage::

    buildhost history
    buildhost history -n 5 --json
"""

from __future__ import annotations

import json
import sys
from pathlib import Path

import click


@click.command()
@click.option("-n", "--limit", default=20, show_default=True, help="Number of runs to show.")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def history(ctx: click.Context, limit: int, as_json: bool) -> None:
    """Show recent provisioning runs from the audit ledger."""
    from buildhost.core.config.loader import ConfigError, load_config_or_default
    from buildhost.core.persistence.audit import AuditWriter

    try:
        config, _ = load_config_or_default(ctx.obj.get("config_path"))
    except ConfigError as e:
        click.secho(f"❌ {e}", fg="red")
        sys.exit(1)

    if not config.audit_log:
        click.secho("❌ No audit_log configured in provision.yml", fg="red")
        sys.exit(1)

    entries = AuditWriter(Path(config.audit_log)).read_recent(limit)

    if as_json:
        click.echo(json.dumps([e.model_dump(mode="json") for e in entries], indent=2))
        return

    if not entries:
        click.echo("No provisioning runs recorded.")
        return

    for entry in entries:
        icon = "✅" if entry.status == "done" else "❌"
        line = f"{icon} {entry.timestamp[:19]}  {entry.run_id}  {entry.host_arch or '?'}"
        if entry.toolchain_version:
            line += f"  Rust {entry.toolchain_version}"
        if entry.reason:
            line += f"  ({entry.reason})"
        click.echo(line)
        if entry.installer_sha256:
            click.echo(f"   installer sha256 {entry.installer_sha256}")
