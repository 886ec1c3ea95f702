"""
flatcgen — CLI entrypoint.

Usage:
    flatcgen --help
    flatcgen version
    flatcgen generate rust -o target/flatbuffers/ schemas/monster.fbs
    flatcgen build
    flatcgen config check
"""

from __future__ import annotations

import json
import os
import sys
from pathlib import Path

import click

from flatcgen import __version__
from flatcgen.core.observability.logging_config import (
    ENV_LOG_FILE,
    ENV_LOG_FILE_LEVEL,
    resolve_level,
    setup_logging,
)

# Compiler override read by every command that spawns flatc
ENV_FLATC = "FLATCGEN_FLATC"

_flatc_option = click.option(
    "--flatc",
    "flatc_path",
    envvar=ENV_FLATC,
    default=None,
    help=f"Path to the flatc executable (default: flatc on PATH, env: {ENV_FLATC}).",
)


@click.group()
@click.version_option(version=__version__, prog_name="flatcgen")
@click.option("--verbose", "-v", is_flag=True, help="Show spawned commands.")
@click.option("--quiet", "-q", is_flag=True, help="Only show errors.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=False),
    default=None,
    help="Path to flatc.yml (default: auto-detect).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    debug: bool,
    config_path: str | None,
) -> None:
    """flatcgen — generate FlatBuffers bindings with flatc."""
    ctx.ensure_object(dict)
    ctx.obj["quiet"] = quiet
    ctx.obj["config_path"] = Path(config_path) if config_path else None

    setup_logging(
        level=resolve_level(debug=debug, verbose=verbose, quiet=quiet),
        log_file=os.environ.get(ENV_LOG_FILE),
        log_file_level=os.environ.get(ENV_LOG_FILE_LEVEL),
    )


@cli.command()
@_flatc_option
def version(flatc_path: str | None) -> None:
    """Show the flatc version."""
    from flatcgen.adapters.flatc import Flatc, GenerationError, resolve_executable

    flatc = Flatc.from_path(flatc_path) if flatc_path else Flatc.from_env_path()
    try:
        found = flatc.version()
    except GenerationError as e:
        click.secho(f"❌ {e}", fg="red")
        sys.exit(1)

    location = resolve_executable(flatc_path) or flatc.executable
    click.echo(f"flatc {found}  ({location})")


@cli.command()
@click.argument("language")
@click.argument("schemas", nargs=-1, required=True)
@click.option("--out", "-o", "output_directory", required=True, help="Output directory.")
@click.option("--include", "-I", "includes", multiple=True, help="Schema include directory.")
@click.option(
    "--option",
    "options",
    multiple=True,
    help="Generation option, e.g. gen-object-api (repeatable).",
)
@click.option("--extra", "extra_args", multiple=True, help="Raw flatc argument (repeatable).")
@_flatc_option
@click.option("--dry-run", is_flag=True, help="Print the command instead of running it.")
@click.pass_context
def generate(
    ctx: click.Context,
    language: str,
    schemas: tuple[str, ...],
    output_directory: str,
    includes: tuple[str, ...],
    options: tuple[str, ...],
    extra_args: tuple[str, ...],
    flatc_path: str | None,
    dry_run: bool,
) -> None:
    """Run flatc once: LANGUAGE SCHEMA... -o DIR."""
    from pydantic import ValidationError

    from flatcgen.adapters.flatc import (
        CompilerFailed,
        Flatc,
        GenerationError,
        format_command,
    )
    from flatcgen.core.models.request import GenerationRequest

    try:
        request = GenerationRequest(
            output_language=language,
            output_directory=output_directory,
            input_schema_paths=schemas,
            include_directories=includes,
            options=options,
            extra_args=extra_args,
        )
    except ValidationError as e:
        click.secho("❌ Invalid request:", fg="red", bold=True)
        for err in e.errors():
            field_name = ".".join(str(p) for p in err["loc"]) or "request"
            click.echo(f"   • {field_name}: {err['msg']}")
        sys.exit(2)

    flatc = Flatc.from_path(flatc_path) if flatc_path else Flatc.from_env_path()

    if dry_run:
        click.echo(format_command(flatc.command(request)))
        return

    try:
        flatc.run(request)
    except CompilerFailed as e:
        click.secho(f"❌ flatc exited with code {e.exit_code}", fg="red", bold=True)
        if e.stderr.strip():
            click.echo(e.stderr.rstrip(), err=True)
        sys.exit(1)
    except GenerationError as e:
        click.secho(f"❌ {e}", fg="red")
        sys.exit(1)

    if not ctx.obj.get("quiet", False):
        click.secho(
            f"✅ Generated {request.output_language} bindings into {request.output_directory}",
            fg="green",
        )


@cli.command()
@click.option("--job", "-j", "jobs", multiple=True, help="Only run these jobs.")
@click.option("--dry-run", is_flag=True, help="Show commands without running flatc.")
@click.option("--keep-going", "-k", is_flag=True, help="Continue after a failed job.")
@_flatc_option
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def build(
    ctx: click.Context,
    jobs: tuple[str, ...],
    dry_run: bool,
    keep_going: bool,
    flatc_path: str | None,
    as_json: bool,
) -> None:
    """Run the generation jobs declared in flatc.yml."""
    from flatcgen.core.use_cases.build import run_build

    result = run_build(
        config_path=ctx.obj.get("config_path"),
        only=jobs,
        dry_run=dry_run,
        keep_going=keep_going,
        compiler=flatc_path,
    )

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(0 if result.ok else 1)
        return

    if result.error:
        click.secho(f"❌ {result.error}", fg="red")
        sys.exit(1)

    quiet = ctx.obj.get("quiet", False)
    if not quiet:
        click.secho(f"\n🔧 flatc: {result.flatc}", fg="cyan", bold=True)
        click.echo()

    for receipt in result.receipts:
        if receipt.ok:
            if not quiet:
                click.secho(f"   ✓ {receipt.job} ", fg="green", nl=False)
                click.echo(f"({receipt.duration_ms} ms)")
        elif receipt.failed:
            click.secho(f"   ✗ {receipt.job} ", fg="red", nl=False)
            click.echo(receipt.error or "failed")
            if receipt.stderr.strip():
                for line in receipt.stderr.rstrip().splitlines():
                    click.echo(f"       {line}")
        elif not quiet:
            click.secho(f"   – {receipt.job} ", fg="yellow", nl=False)
            click.echo(receipt.output)

    if not quiet:
        click.echo()
        click.echo(
            f"   {result.succeeded} ok, {result.failed} failed, {result.skipped} skipped"
        )
        click.echo()

    if not result.ok:
        sys.exit(1)


@cli.group()
def config() -> None:
    """Build configuration commands."""


@config.command("check")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def config_check(ctx: click.Context, as_json: bool) -> None:
    """Validate flatc.yml."""
    from flatcgen.core.use_cases.config_check import check_config

    result = check_config(config_path=ctx.obj.get("config_path"))

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(0 if result.valid else 1)
        return

    if result.valid:
        assert result.config is not None  # guaranteed when valid
        click.secho("✅ Configuration is valid", fg="green", bold=True)
        click.echo(f"   Jobs: {len(result.config.jobs)}")
        if result.config.flatc:
            click.echo(f"   flatc: {result.config.flatc}")
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


def main() -> None:
    """Console-script entry point."""
    cli(obj={})


if __name__ == "__main__":
    main()
