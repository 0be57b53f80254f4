"""
orderroots — CLI entrypoint.

Usage:
    orderroots --help
    orderroots config check
    orderroots order [MODULE] [--json]
"""

from __future__ import annotations

import json
import sys
from pathlib import Path

import click

from orderroots import __version__
from orderroots.core.observability.logging_config import level_from_flags, setup_logging


@click.group()
@click.version_option(version=__version__, prog_name="orderroots")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=False),
    default=None,
    help="Path to project.yml (default: auto-detect).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    debug: bool,
    config_path: str | None,
) -> None:
    """orderroots — inspect the ordered dependency entries of your modules."""
    ctx.ensure_object(dict)
    ctx.obj["quiet"] = quiet
    ctx.obj["config_path"] = Path(config_path) if config_path else None

    setup_logging(
        level=level_from_flags(verbose=verbose, quiet=quiet, debug=debug),
        include_third_party=debug,
    )


@cli.group()
def config() -> None:
    """Project configuration commands."""


@config.command("check")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def config_check(ctx: click.Context, as_json: bool) -> None:
    """Validate project.yml configuration."""
    from orderroots.core.use_cases.config_check import check_config

    result = check_config(config_path=ctx.obj.get("config_path"))

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(0 if result.valid else 1)

    if result.valid:
        assert result.project is not None  # guaranteed when valid
        click.secho("✅ Configuration is valid", fg="green", bold=True)
        click.echo(f"   Project: {result.project.name}")
        click.echo(f"   Modules: {len(result.project.modules)}")
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


@cli.command()
@click.argument("module", required=False)
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def order(ctx: click.Context, module: str | None, as_json: bool) -> None:
    """Show each module's entries in order (or just MODULE's)."""
    from orderroots.core.use_cases.build import get_order

    result = get_order(config_path=ctx.obj.get("config_path"), module=module)

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(1 if result.error else 0)

    if result.error:
        click.secho(f"❌ {result.error}", fg="red")
        sys.exit(1)

    project = result.project
    assert project is not None  # guaranteed after error check above

    if not ctx.obj.get("quiet", False):
        click.secho(f"\n📋 {project.name}", fg="cyan", bold=True)
        if project.sdk:
            click.echo(f"   SDK: {project.sdk}")
        click.echo()

    for name, model in result.models.items():
        click.secho(f"   {name}", fg="white", bold=True)
        for entry in model.order_entries():
            details = entry.to_dict()
            flags = []
            if details.get("scope") and details["scope"] != "compile":
                flags.append(details["scope"])
            if details.get("exported"):
                flags.append("exported")
            suffix = f" ({', '.join(flags)})" if flags else ""
            click.echo(f"     {entry.index}. [{entry.kind_name}] {entry.presentable_name}{suffix}")
        click.echo()


def main() -> None:
    cli(obj={})


if __name__ == "__main__":
    main()
