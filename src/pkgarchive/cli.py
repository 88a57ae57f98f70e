# ABOUTME: Command-line interface for building package archives
# ABOUTME: Provides commands to archive packages, list formats, and preview archive names
"""pkgarchive command-line interface"""

import logging
from pathlib import Path

import click
from dotenv import load_dotenv
from rich.console import Console
from rich.table import Table

from pkgarchive.config import Config
from pkgarchive.exceptions import PkgArchiveError
from pkgarchive.filename import package_filename
from pkgarchive.logging_config import setup_logging
from pkgarchive.models import Package

logger = logging.getLogger(__name__)


@click.group()
@click.pass_context
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.option(
    "--config-dir",
    envvar="PKGARCHIVE_CONFIG_DIR",
    default=None,
    help="Configuration directory (defaults to the XDG config directory)",
)
@click.option(
    "--log-file",
    default="pkgarchive.log",
    show_default=True,
    help="Log file name, written under the state log directory",
)
def cli(ctx, debug, config_dir, log_file):
    """pkgarchive - Build distributable archives of versioned packages"""
    load_dotenv()

    ctx.ensure_object(dict)
    ctx.obj["config_dir"] = config_dir

    config = Config(config_dir=config_dir)
    ctx.obj["config"] = config

    setup_logging(
        "DEBUG" if debug else "WARNING",
        log_file=log_file,
        log_dir=str(config.get_log_dir()),
    )


def _load_config(ctx) -> Config:
    return ctx.obj.get("config") or Config(config_dir=ctx.obj.get("config_dir"))


@cli.command()
@click.pass_context
@click.argument("name", required=False)
@click.argument("version", required=False)
@click.option("--format", "-f", "format_", default=None, help="Archive format (zip, tar, tar.gz, ...)")
@click.option("--dir", "-d", "target_dir", default=None, help="Directory to write the archive to")
@click.option("--file-name", default=None, help="Archive name without extension")
@click.option("--ignore-filters", is_flag=True, help="Ignore exclude rules")
@click.option("--overwrite/--no-overwrite", default=None, help="Rebuild archives that already exist")
@click.option("--source-type", default=None, help="Source type (git, path)")
@click.option("--source-url", default=None, help="Source url or directory")
@click.option("--source-ref", default=None, help="Source reference (commit, tag, branch)")
@click.option("--dist-type", default=None, help="Dist type (path)")
@click.option("--dist-url", default=None, help="Dist url or directory")
@click.option("--dist-ref", default=None, help="Dist reference")
@click.option(
    "--project-dir",
    default=".",
    type=click.Path(file_okay=False, path_type=Path),
    help="Project directory used when archiving the root package",
)
def archive(
    ctx,
    name,
    version,
    format_,
    target_dir,
    file_name,
    ignore_filters,
    overwrite,
    source_type,
    source_url,
    source_ref,
    dist_type,
    dist_url,
    dist_ref,
    project_dir,
):
    """Create an archive of a package.

    Without NAME, archives the project in --project-dir as described by its
    descriptor file.
    """
    console = Console()
    config = _load_config(ctx)
    settings = config.settings["archive"]

    try:
        manager = config.build_manager(project_root=project_dir)
        if overwrite is not None:
            manager.set_overwrite_files(overwrite)

        if name is None:
            package = manager.metadata_reader.load_root_package(project_dir)
        else:
            package = Package(
                name=name,
                pretty_version=version or "dev-main",
                dist_type=dist_type,
                dist_url=dist_url,
                dist_reference=dist_ref,
                source_type=source_type,
                source_url=source_url,
                source_reference=source_ref,
            )

        path = manager.archive(
            package,
            format_ or settings["format"],
            target_dir or settings["target_dir"],
            file_name=file_name,
            ignore_filters=ignore_filters,
        )
    except PkgArchiveError as e:
        logger.error(f"Failed to archive package: {e}")
        click.echo(f"Error: {e}", err=True)
        raise SystemExit(1)
    except Exception as e:
        logger.error(f"Failed to archive package: {e}", exc_info=True)
        click.echo(f"Error: {e}", err=True)
        raise SystemExit(1)

    console.print(f"[green]✓[/green] Created archive: {path}", soft_wrap=True)


@cli.command()
@click.pass_context
def formats(ctx):
    """List registered archivers and the formats they write."""
    manager = _load_config(ctx).build_manager()

    table = Table(title="Archivers")
    table.add_column("Priority", justify="right")
    table.add_column("Archiver")
    table.add_column("Formats")
    for idx, archiver in enumerate(manager.archivers, 1):
        table.add_row(str(idx), type(archiver).__name__, ", ".join(sorted(archiver.formats)))

    Console().print(table)


@cli.command()
@click.argument("name")
@click.argument("version")
@click.option("--dist-ref", default=None, help="Dist reference")
@click.option("--dist-type", default=None, help="Dist type")
@click.option("--source-ref", default=None, help="Source reference")
def filename(name, version, dist_ref, dist_type, source_ref):
    """Print the archive base name generated for a package."""
    package = Package(
        name=name,
        pretty_version=version,
        dist_reference=dist_ref,
        dist_type=dist_type,
        source_reference=source_ref,
    )
    click.echo(package_filename(package))


def main():
    cli(obj={})


if __name__ == "__main__":
    main()
