"""Checkpoint command for CLI."""

from __future__ import annotations

import typer

from shardlog.cli.main import app, configure_logging, exit_with_error, make_sink
from shardlog.core.exceptions import (
    CheckpointDecodeError,
    CheckpointNotFoundError,
    StorageError,
)


@app.command()
def checkpoint(
    path: str = typer.Argument(
        ...,
        help="Checkpoint file (local path, file:// or s3:// URI).",
    ),
    as_json: bool = typer.Option(
        False,
        "--json",
        help="Print the checkpoint as JSON.",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable debug logging.",
    ),
) -> None:
    """Decode a single translog checkpoint (.ckp) file."""
    from shardlog.core.services import ShardInspector

    configure_logging(verbose)

    inspector = ShardInspector.from_defaults(sink=make_sink(as_json))
    try:
        inspector.decode(path)
    except CheckpointNotFoundError as e:
        # Absence is an informational outcome
        typer.echo(str(e))
    except CheckpointDecodeError as e:
        raise exit_with_error(e) from None
    except StorageError as e:
        typer.echo(f"Error: {e}", err=True)
        if e.recovery_hint:
            typer.echo(f"Hint: {e.recovery_hint}", err=True)
    except ValueError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1) from None
