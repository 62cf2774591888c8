"""Port interfaces for hexagonal architecture.

Ports define contracts that adapters must implement. The core domain
depends only on these protocols, never on concrete implementations.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable


if TYPE_CHECKING:
    from shardlog.core.models import Checkpoint, ShardReport, StorageEntry


@runtime_checkable
class StoragePort(Protocol):
    """Read-only repository storage backend (S3, local filesystem)."""

    def exists(self, path: str) -> bool:
        """Return True if a file or directory exists at path.

        For object stores a "directory" exists when any key lives under it.
        """
        ...

    def list_entries(self, prefix: str) -> list[StorageEntry]:
        """List the immediate children of a directory.

        Args:
            prefix: Directory path or URI (e.g., "s3://bucket/repo/rem/").

        Returns:
            Entries for each child, sorted by name. Order carries no
            meaning for callers.

        Raises:
            StorageNotFoundError: If the directory does not exist.
            StorageAccessError: If listing is denied.
            StorageError: For other I/O failures.
        """
        ...

    def read_bytes(self, source: str) -> bytes:
        """Read a whole file into memory.

        Raises:
            StorageNotFoundError: If the file does not exist.
            StorageAccessError: If reading is denied.
            StorageError: For other I/O failures.
        """
        ...


@runtime_checkable
class ReportSink(Protocol):
    """Renders inspection results to the user.

    The core domain hands structured results to a sink without depending
    on any specific output library. Sinks must keep checkpoint fields in
    the order given and must not filter them.
    """

    def emit(self, report: ShardReport) -> None:
        """Render the result of one shard inspection."""
        ...

    def emit_checkpoint(self, source: str, checkpoint: Checkpoint) -> None:
        """Render a single decoded checkpoint file.

        Args:
            source: Path/URI the checkpoint was read from.
            checkpoint: The decoded record.
        """
        ...


class NullReportSink:
    """A ReportSink that produces no output.

    Used as the default when no reporting is desired.
    """

    def emit(self, report: ShardReport) -> None:
        """Do nothing."""
        _ = report  # Unused but required by protocol

    def emit_checkpoint(self, source: str, checkpoint: Checkpoint) -> None:
        """Do nothing."""
        _ = source, checkpoint  # Unused but required by protocol
