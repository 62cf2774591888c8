"""CLI commands for shardlog."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import typer
from rich.console import Console
from rich.logging import RichHandler

from shardlog.config import resolve_repository_root
from shardlog.core.exceptions import (
    CheckpointDecodeError,
    ConfigurationError,
    ShardlogError,
)
from shardlog.core.models import RepositoryLayout
from shardlog.core.path_utils import REMOTE_STORE_DIR


if TYPE_CHECKING:
    from shardlog.core.ports import ReportSink


app = typer.Typer(
    name="shardlog",
    help="Offline inspector for shard translog checkpoints in remote-store repositories.",
    no_args_is_help=True,
)


def configure_logging(verbose: bool = False) -> None:
    """Route library logging to stderr through Rich.

    Args:
        verbose: Log at DEBUG instead of WARNING.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def make_sink(as_json: bool) -> ReportSink:
    """Pick the report sink for the requested output format."""
    from shardlog.report import JsonReportSink, RichReportSink

    if as_json:
        return JsonReportSink()
    return RichReportSink()


def exit_with_error(error: ShardlogError, code: int = 1) -> typer.Exit:
    """Print an error and its recovery hint to stderr, returning an Exit to raise."""
    typer.echo(f"Error: {error}", err=True)
    if error.recovery_hint:
        typer.echo(f"Hint: {error.recovery_hint}", err=True)
    return typer.Exit(code)


@app.command()
def inspect(
    index_uuid: str = typer.Option(
        ...,
        "--index-uuid",
        "-u",
        help="Internal UUID of the index (from cluster metadata).",
    ),
    shard_id: int = typer.Option(
        ...,
        "--shard-id",
        "-s",
        min=0,
        help="Shard number.",
    ),
    index: str | None = typer.Option(
        None,
        "--index",
        "-i",
        help="Index name, shown in the report.",
    ),
    repo_path: str | None = typer.Option(
        None,
        "--repo-path",
        help="Repository root (local path, file:// or s3:// URI).",
    ),
    data_path: str | None = typer.Option(
        None,
        "--data-path",
        help="Node data path; the repository is taken to be its sibling 'repo'.",
    ),
    base_dir: str = typer.Option(
        REMOTE_STORE_DIR,
        "--base-dir",
        help="Remote-store directory under the repository root.",
    ),
    as_json: bool = typer.Option(
        False,
        "--json",
        help="Print the report as JSON.",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Log each lookup step.",
    ),
) -> None:
    """Find a shard's latest translog generation and print its checkpoint."""
    from shardlog.core.services import ShardInspector

    configure_logging(verbose)

    try:
        root = resolve_repository_root(repo_path=repo_path, data_path=data_path)
    except ConfigurationError as e:
        raise exit_with_error(e) from None

    try:
        layout = RepositoryLayout(
            root=root,
            index_uuid=index_uuid,
            shard_id=str(shard_id),
            index_name=index or "",
        )
    except ValueError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1) from None

    inspector = ShardInspector.from_defaults(sink=make_sink(as_json), base_dir=base_dir)
    try:
        inspector.inspect(layout)
    except CheckpointDecodeError as e:
        raise exit_with_error(e) from None
    except ValueError as e:
        # Unsupported URI scheme in the repository root
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1) from None


def main() -> None:
    """Entry point for the CLI."""
    app()
