"""
Clang prebuilts — CLI entrypoint.

Usage:
    python -m clangprebuilts.main --help
    python -m clangprebuilts.main resolve
    python -m clangprebuilts.main config check
"""

from __future__ import annotations

import json
import os
import sys
from pathlib import Path

import click

from clangprebuilts import __version__
from clangprebuilts.core.errors import ConfigError
from clangprebuilts.core.observability.logging_config import (
    ENV_LOG_FILE,
    ENV_LOG_FILE_LEVEL,
    cli_log_level,
    setup_logging,
)


def _env_overrides(pairs: tuple[str, ...]) -> dict[str, str]:
    """Parse --env options, exiting on a malformed entry."""
    from clangprebuilts.core.config.loader import parse_env_overrides

    try:
        return parse_env_overrides(pairs)
    except ConfigError as e:
        click.secho(f"❌ {e}", fg="red")
        sys.exit(1)


_env_option = click.option(
    "--env",
    "env_pairs",
    multiple=True,
    metavar="KEY=VALUE",
    help="Override an environment variable (repeatable).",
)


@click.group()
@click.version_option(version=__version__, prog_name="clangprebuilts")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=False),
    default=None,
    help="Path to prebuilts.yml (default: auto-detect).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    debug: bool,
    config_path: str | None,
) -> None:
    """Clang prebuilts — resolve prebuilt compiler-runtime libraries for build modules."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    ctx.obj["debug"] = debug
    ctx.obj["config_path"] = Path(config_path) if config_path else None

    setup_logging(
        level=cli_log_level(debug=debug, verbose=verbose, quiet=quiet),
        log_file=os.environ.get(ENV_LOG_FILE),
        log_file_level=os.environ.get(ENV_LOG_FILE_LEVEL),
        quiet_third_party=not debug,
    )


@cli.command()
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.option("--module", "-m", "modules", multiple=True, help="Resolve specific modules.")
@_env_option
@click.pass_context
def resolve(
    ctx: click.Context,
    as_json: bool,
    modules: tuple[str, ...],
    env_pairs: tuple[str, ...],
) -> None:
    """Run module load hooks and show the resulting properties.

    Examples:

        clangprebuilts resolve

        clangprebuilts resolve -m prebuilt_libFuzzer --env LLVM_RELEASE_VERSION=11.0.5
    """
    from clangprebuilts.core.use_cases.resolve import run_resolve

    result = run_resolve(
        config_path=ctx.obj.get("config_path"),
        overrides=_env_overrides(env_pairs),
        module_names=list(modules) if modules else None,
    )

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        if result.error:
            sys.exit(1)
        return

    if result.error:
        click.secho(f"❌ {result.error}", fg="red")
        sys.exit(1)

    quiet = ctx.obj.get("quiet", False)
    if not quiet:
        click.secho(f"\n🔧 Resolved: {result.config_path}", fg="cyan", bold=True)
        click.echo(f"   Modules: {len(result.modules)} ({result.patched_count} patched)")
        click.echo()

    for mod in result.modules:
        if mod.patched:
            click.secho(f"   ✓ {mod.name} ", fg="green", nl=False)
        else:
            click.secho(f"   ⊘ {mod.name} ", fg="yellow", nl=False)
        click.echo(f"[{mod.module_type}]")

        if not mod.patched:
            click.echo("     (built from source, no prebuilt patch)")
            continue
        for patch in mod.patches:
            enabled = getattr(patch, "enabled", True)
            if not enabled:
                click.secho("     disabled (prebuilts base relocated)", fg="yellow")
            for src in patch.sources:
                click.echo(f"     │ {src}")
        if ctx.obj.get("verbose"):
            for line in json.dumps(mod.properties, indent=2).splitlines():
                click.echo(f"     {line}")

    if result.env_deps and not quiet:
        click.echo()
        click.secho("   Environment consulted:", fg="white", bold=True)
        for name, value in sorted(result.env_deps.items()):
            shown = value if value else "(unset)"
            click.echo(f"     {name}={shown}")

    click.echo()


@cli.command("env")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@_env_option
@click.pass_context
def env_cmd(ctx: click.Context, as_json: bool, env_pairs: tuple[str, ...]) -> None:
    """Show resolved clang versions and prebuilt directories."""
    from clangprebuilts.core.use_cases.env_info import get_env_info

    result = get_env_info(
        config_path=ctx.obj.get("config_path"),
        overrides=_env_overrides(env_pairs),
    )

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        if result.error:
            sys.exit(1)
        return

    if result.error or result.env is None:
        click.secho(f"❌ {result.error}", fg="red")
        sys.exit(1)

    env = result.env
    click.secho("\n🧭 Clang prebuilts environment", fg="cyan", bold=True)
    if result.config_path:
        click.echo(f"   Build file:   {result.config_path}")
    click.echo(f"   Prebuilts:    {env.prebuilts_version}")
    click.echo(f"   Release:      {env.release_version}")
    click.echo(f"   Prebuilt dir: {env.prebuilt_dir}")
    click.echo(f"   Resource dir: {env.resource_dir}")
    if result.prebuilts_base:
        click.echo(f"   Base override: {result.prebuilts_base}")
    if result.force_build_shared:
        click.secho("   Sanitizer shared objects: built from source", fg="yellow")
    click.echo()


@cli.command()
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
def arches(as_json: bool) -> None:
    """Show the architecture to artifact subdirectory table."""
    from clangprebuilts.core.models.arch import ARCH_SUBDIRS

    table = {arch.value: subdir for arch, subdir in ARCH_SUBDIRS.items()}

    if as_json:
        click.echo(json.dumps(table, indent=2))
        return

    width = max(len(a) for a in table)
    for arch, subdir in table.items():
        click.echo(f"{arch:<{width}}  → {subdir}")


@cli.group()
def config() -> None:
    """Build file commands."""


@config.command("check")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def config_check(ctx: click.Context, as_json: bool) -> None:
    """Validate prebuilts.yml."""
    from clangprebuilts.core.use_cases.config_check import check_config

    result = check_config(config_path=ctx.obj.get("config_path"))

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(0 if result.valid else 1)

    if result.valid:
        assert result.build_file is not None  # guaranteed when valid
        click.secho("✅ Build file is valid", fg="green", bold=True)
        click.echo(f"   Modules: {len(result.build_file.modules)}")
    else:
        click.secho("❌ Build file errors:", fg="red", bold=True)
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


if __name__ == "__main__":
    cli()
