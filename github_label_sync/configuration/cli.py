"""Defines the Command Line Interface (CLI) using Typer."""

import asyncio
import sys
from pathlib import Path

import typer
from dotenv import load_dotenv
from typer import Argument, Option
from typing_extensions import Annotated

from github_label_sync.configuration.env import get_settings
from github_label_sync.configuration.exceptions import ConfigurationError
from github_label_sync.configuration.models import LabelSyncConfig
from github_label_sync.configuration.reconcile import reconcile_label_sync_configuration
from github_label_sync.processing.exceptions import YAMLProcessingError
from github_label_sync.processing.yaml_processor import LabelsYAMLProcessor
from github_label_sync.schemas.labels import LabelModel, LabelStatus
from github_label_sync.synchronize.labels import LabelSynchronizer
from github_label_sync.synchronize.results import LabelOperationResult, summarize
from github_label_sync.utils.logs import configure_logging

load_dotenv()

typer_app = typer.Typer(pretty_exceptions_show_locals=False, help="Synchronize GitHub issue labels.")

repo_app = typer.Typer(help="Repository-related commands")

MaxConcurrencyOption = Annotated[
    int | None,
    Option("--max-concurrency", min=1, envvar="MAX_CONCURRENCY", help="Maximum number of simultaneous GitHub requests. Unbounded by default."),
]
LabelFilesArgument = Annotated[list[Path], Argument(help="One or more YAML files describing labels.")]


def repo_callback(
    ctx: typer.Context,
    repo: Annotated[str, Argument(help="Repository name (owner/repo).")],
    github_api_url: Annotated[str | None, Option(help="GitHub API URL. Falls back to the GITHUB_API_URL environment variable.")] = None,
    github_pat_token: Annotated[str | None, Option(envvar="GITHUB_PAT_TOKEN", help="GitHub Personal Access Token.")] = None,
    debug: Annotated[bool, Option(envvar="DEBUG", help="Enable debug logging.")] = False,
    follow_redirects: Annotated[bool, Option(help="Follow HTTP redirects.")] = False,
    timeout: Annotated[float | None, Option(help="Request timeout in seconds.")] = None,
) -> None:
    """Set the repository and GitHub credentials for the current context."""
    ctx.ensure_object(dict)
    try:
        config = asyncio.run(
            reconcile_label_sync_configuration(
                settings=get_settings(),
                cli_repo=repo,
                cli_github_pat_token=github_pat_token,
                cli_github_api_url=github_api_url,
                cli_debug=debug,
                cli_follow_redirects=follow_redirects,
                cli_timeout=timeout,
            )
        )
    except (ConfigurationError, ValueError) as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(1) from exc
    configure_logging(debug=config.options.debug)
    ctx.obj["config"] = config


repo_app.callback()(repo_callback)


def load_desired_labels(label_files: list[Path]) -> list[LabelModel]:
    """Load labels from YAML files, exiting with an error listing on failure."""
    for label_file in label_files:
        if not label_file.exists():
            typer.echo(f"Labels file not found: {label_file.absolute()}", err=True)
            raise typer.Exit(1)
    processor = LabelsYAMLProcessor()
    try:
        labels = processor.load_labels([str(label_file) for label_file in label_files])
    except YAMLProcessingError as exc:
        typer.echo("Error(s) encountered while loading labels:", err=True)
        for err in exc.errors:
            typer.echo(str(err), err=True)
        raise typer.Exit(1) from exc
    typer.echo(f"Loaded {len(labels)} labels from {len(label_files)} file(s)")
    return labels


async def build_synchronizer(config: LabelSyncConfig, max_concurrency: int | None) -> LabelSynchronizer:
    """Create an authenticated synchronizer for the configured repository."""
    return await LabelSynchronizer.create(
        repo=config.repo,
        token=config.github_pat_token,
        options=config.options,
        max_concurrency=max_concurrency,
    )


def report_results(title: str, results: list[LabelOperationResult]) -> None:
    """Print one line per label and a summary, exiting non-zero if any label failed."""
    typer.echo(f"{title}:")
    for result in results:
        line = f"  {result.status.value:<9} {result.label_name}"
        if result.status == LabelStatus.ERROR:
            detail = result.error_detail.get("message") if isinstance(result.error_detail, dict) else result.error_detail
            line += f" ({detail})"
        typer.echo(line)
    counts = summarize(results)
    typer.echo(", ".join(f"{status.value}: {count}" for status, count in counts.items()))
    if counts[LabelStatus.ERROR]:
        sys.exit(1)


@repo_app.command(name="list-labels")
def list_labels_cli(
    ctx: typer.Context,
    include_meta: Annotated[bool, Option("--include-meta", help="Also print the response metadata returned by GitHub.")] = False,
) -> None:
    """List the labels currently defined on the repository."""
    config: LabelSyncConfig = ctx.obj["config"]

    async def list_labels() -> None:
        synchronizer = await build_synchronizer(config, None)
        snapshot = await synchronizer.get_labels(include_meta=include_meta)
        for label in snapshot.labels:
            typer.echo(f"{label.color or '':<7} {label.name}")
        typer.echo(f"{len(snapshot.labels)} label(s) on {config.repo}")
        if snapshot.meta is not None:
            typer.echo(snapshot.meta.model_dump_json())

    asyncio.run(list_labels())


@repo_app.command(name="create-labels")
def create_labels_cli(ctx: typer.Context, label_files: LabelFilesArgument, max_concurrency: MaxConcurrencyOption = None) -> None:
    """Create the labels described in the given YAML files."""
    config: LabelSyncConfig = ctx.obj["config"]
    labels = load_desired_labels(label_files)

    async def create_labels() -> list[LabelOperationResult]:
        synchronizer = await build_synchronizer(config, max_concurrency)
        return await synchronizer.create_labels(labels)

    report_results("Created labels", asyncio.run(create_labels()))


@repo_app.command(name="delete-labels")
def delete_labels_cli(ctx: typer.Context, label_files: LabelFilesArgument, max_concurrency: MaxConcurrencyOption = None) -> None:
    """Delete the labels named in the given YAML files."""
    config: LabelSyncConfig = ctx.obj["config"]
    labels = load_desired_labels(label_files)

    async def delete_labels() -> list[LabelOperationResult]:
        synchronizer = await build_synchronizer(config, max_concurrency)
        return await synchronizer.delete_labels(labels)

    report_results("Deleted labels", asyncio.run(delete_labels()))


@repo_app.command(name="purge-labels")
def purge_labels_cli(ctx: typer.Context, max_concurrency: MaxConcurrencyOption = None) -> None:
    """Delete every label currently defined on the repository."""
    config: LabelSyncConfig = ctx.obj["config"]

    async def purge_labels() -> list[LabelOperationResult]:
        synchronizer = await build_synchronizer(config, max_concurrency)
        return await synchronizer.purge_labels()

    report_results("Purged labels", asyncio.run(purge_labels()))


@repo_app.command(name="import-labels")
def import_labels_cli(
    ctx: typer.Context,
    label_files: LabelFilesArgument,
    purge: Annotated[bool, Option("--purge/--no-purge", help="Delete every existing label before creating the desired ones.")] = True,
    max_concurrency: MaxConcurrencyOption = None,
) -> None:
    """Import the labels described in the given YAML files, purging existing labels first by default."""
    config: LabelSyncConfig = ctx.obj["config"]
    labels = load_desired_labels(label_files)
    if purge:
        typer.echo(f"Purging all existing labels on {config.repo} before import")

    async def import_labels() -> tuple[list[LabelModel], list[LabelOperationResult]]:
        synchronizer = await build_synchronizer(config, max_concurrency)
        created = await synchronizer.import_labels(labels, purge=purge)
        return synchronizer.deleted_labels, created

    deleted, created = asyncio.run(import_labels())
    if purge:
        failed = [label.name for label in deleted if label.status == LabelStatus.ERROR]
        typer.echo(f"Deleted {len(deleted) - len(failed)} of {len(deleted)} existing label(s)")
        for name in failed:
            typer.echo(f"  could not delete {name}", err=True)
    report_results("Imported labels", created)


# --- Register the repo_app as a sub-app of the main Typer app ---
typer_app.add_typer(repo_app, name="repo")


if __name__ == "__main__":
    typer_app()
