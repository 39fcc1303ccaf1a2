"""The `publisher` command-line interface."""

import asyncio
import importlib.metadata

import click

from .config import (
    find_project_root,
    load_compiler_config,
    load_manifest,
    load_publisher_config,
    resolve_out_dir,
)
from .exceptions import CommandFailedError, ConfigError, CopyError, PublishError, PublisherError
from .models import MANIFEST_FILENAME
from .packaging.orchestrator import PublishOrchestrator
from .scaffolding.generator import init_project

try:
    __version__ = importlib.metadata.version("tspublisher")
except importlib.metadata.PackageNotFoundError:
    __version__ = "0.0.0-dev"


@click.command(context_settings=dict(help_option_names=["-h", "--help"]))
@click.version_option(
    __version__,
    "-V",
    "--version",
    prog_name="publisher",
    message="%(prog)s version %(version)s",
)
@click.option("--init", "init", is_flag=True, help="Initialize publisher for repository.")
@click.option(
    "--dry-run",
    "--dryrun",
    "dry_run",
    is_flag=True,
    help="Do a dry-run of publisher without publishing.",
)
@click.option(
    "--checks/--no-checks",
    default=True,
    show_default=True,
    help="Whether to run the lint and test steps.",
)
@click.option(
    "--cwd",
    envvar="INIT_CWD",
    type=click.Path(exists=True, file_okay=False, resolve_path=True),
    help="Directory to start looking for package.json from (defaults to $INIT_CWD, then the current directory).",
)
@click.option(
    "--color/--no-color",
    default=None,
    help="Force colored output on or off (defaults to auto-detection).",
)
def cli(
    init: bool,
    dry_run: bool,
    checks: bool,
    cwd: str | None,
    color: bool | None,
) -> None:
    """Builds a TypeScript npm package into its output directory and publishes it from there."""
    try:
        root = find_project_root(cwd)
        manifest = load_manifest(root)
        if init:
            init_project(root, root / MANIFEST_FILENAME)
            return
        publisher_config = load_publisher_config(root)
        compiler_config = load_compiler_config(root)
    except ConfigError as e:
        click.secho(f"❌ {e}", fg="red", err=True, color=color)
        raise click.Abort() from e

    orchestrator = PublishOrchestrator(
        cwd=root,
        manifest=manifest,
        publisher_config=publisher_config,
        out_dir=resolve_out_dir(root, publisher_config, compiler_config),
        checks=checks,
        dry_run=dry_run,
        color=color,
    )
    try:
        asyncio.run(orchestrator.run())
    except PublishError as e:
        click.secho(
            "> ERR Failed to run npm publish, please review the output above.",
            fg="red",
            err=True,
            color=color,
        )
        raise SystemExit(e.exit_code) from e
    except (CommandFailedError, CopyError) as e:
        click.echo(err=True)
        click.secho(f"❌ {e}.", fg="red", err=True, color=color)
        raise click.Abort() from e
    except (PublisherError, OSError) as e:
        click.secho(f"❌ Publishing Failed:\n{e}", fg="red", err=True, color=color)
        raise click.Abort() from e


main = cli


if __name__ == "__main__":
    cli()
