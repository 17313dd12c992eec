"""Click CLI group: scan, show, list, clear-id and clear commands."""

from __future__ import annotations

import json
from pathlib import Path

import click

from classrepo.config import get_settings, validate_settings_for_env
from classrepo.errors import ClassRepoError
from classrepo.logging import bind_context, clear_context, configure_logging
from classrepo.repository.manager import ClassRepositoryManager
from classrepo.repository.types import ClassRepository


def _manager(ctx: click.Context) -> ClassRepositoryManager:
    return ctx.obj["manager"]


def _print_repository(repository: ClassRepository, json_output: bool) -> None:
    if json_output:
        click.echo(json.dumps({"id": repository.id, "classes": repository.get_classes()}, indent=2))
        return
    for name in repository.classes:
        click.echo(name)


@click.group()
@click.option(
    "--cache-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Folder holding the cache file (default: CLASSREPO_CACHE_DIR).",
)
@click.option("--log-level", type=str, default=None, help="Override LOG_LEVEL.")
@click.pass_context
def cli(ctx: click.Context, cache_dir: Path | None, log_level: str | None) -> None:
    """Cached class discovery for Python source folders."""
    settings = get_settings()
    try:
        validate_settings_for_env(settings)
    except ClassRepoError as exc:
        raise click.ClickException(str(exc)) from exc
    configure_logging(log_level or settings.log_level)

    resolved = cache_dir or (Path(settings.cache_dir) if settings.cache_dir.strip() else None)
    if resolved is None:
        raise click.UsageError("no cache folder: pass --cache-dir or set CLASSREPO_CACHE_DIR")
    try:
        manager = ClassRepositoryManager.create(resolved)
    except ClassRepoError as exc:
        raise click.ClickException(str(exc)) from exc
    bind_context(cache_file=str(manager.cache_file.path))
    ctx.obj = {"manager": manager}
    ctx.call_on_close(clear_context)
    ctx.call_on_close(manager.close)


@cli.command()
@click.argument("folder", type=click.Path(exists=True, file_okay=False, path_type=Path))
@click.option("--recursive", is_flag=True, help="Search subfolders too.")
@click.option("--instance-of", type=str, default=None, help="Dotted name of a base class; scanned classes must be importable.")
@click.option("--id", "repository_id", type=str, default=None, help="Cache ID to store under.")
@click.option("--json", "json_output", is_flag=True, help="Print structured JSON output.")
@click.pass_context
def scan(
    ctx: click.Context,
    folder: Path,
    recursive: bool,
    instance_of: str | None,
    repository_id: str | None,
    json_output: bool,
) -> None:
    """Print the classes found in FOLDER, using the cache when possible."""
    try:
        repository = _manager(ctx).find_classes_in_folder(
            folder, recursive=recursive, instance_of=instance_of, repository_id=repository_id
        )
    except ClassRepoError as exc:
        raise click.ClickException(str(exc)) from exc
    _print_repository(repository, json_output)


@cli.command()
@click.argument("repository_id")
@click.option("--json", "json_output", is_flag=True, help="Print structured JSON output.")
@click.pass_context
def show(ctx: click.Context, repository_id: str, json_output: bool) -> None:
    """Print the classes cached under REPOSITORY_ID."""
    repository = _manager(ctx).get_by_id(repository_id)
    if repository is None:
        click.echo(f"cache ID not found: {repository_id}", err=True)
        ctx.exit(1)
    _print_repository(repository, json_output)


@cli.command("list")
@click.pass_context
def list_ids(ctx: click.Context) -> None:
    """List the cached IDs with their class counts."""
    manager = _manager(ctx)
    for repository_id in manager.ids():
        click.echo(f"{repository_id}\t{len(manager.require_by_id(repository_id))}")


@cli.command("clear-id")
@click.argument("repository_id")
@click.pass_context
def clear_id(ctx: click.Context, repository_id: str) -> None:
    """Remove a single cache ID."""
    manager = _manager(ctx)
    existed = manager.id_exists(repository_id)
    manager.clear_id(repository_id)
    click.echo(f"cleared: {repository_id}" if existed else f"not cached: {repository_id}")


@cli.command()
@click.pass_context
def clear(ctx: click.Context) -> None:
    """Delete the whole class repository cache."""
    try:
        _manager(ctx).clear_cache()
    except ClassRepoError as exc:
        raise click.ClickException(str(exc)) from exc
    click.echo("class repository cache cleared")


def main() -> None:
    cli()
