"""Core domain services for shardlog."""

import logging

from shardlog.core.checkpoint import read_checkpoint
from shardlog.core.exceptions import (
    CheckpointDecodeError,
    CheckpointNotFoundError,
    StorageError,
)
from shardlog.core.locator import TranslogLocator
from shardlog.core.models import (
    Checkpoint,
    LocateResult,
    RepositoryLayout,
    ShardReport,
)
from shardlog.core.path_utils import REMOTE_STORE_DIR, resolve_shard_paths
from shardlog.core.ports import NullReportSink, ReportSink, StoragePort


logger = logging.getLogger(__name__)


class ShardInspector:
    """Resolves a shard's translog, decodes its latest checkpoint and reports it."""

    def __init__(
        self,
        storage: StoragePort,
        sink: ReportSink | None = None,
        base_dir: str = REMOTE_STORE_DIR,
    ) -> None:
        self._storage = storage
        self._sink = sink if sink is not None else NullReportSink()
        self._base_dir = base_dir
        self._locator = TranslogLocator(storage)

    @classmethod
    def from_defaults(
        cls,
        sink: ReportSink | None = None,
        base_dir: str = REMOTE_STORE_DIR,
    ) -> "ShardInspector":
        """Create a ShardInspector backed by the default storage router.

        Args:
            sink: Where reports go. Defaults to no output.
            base_dir: Remote-store directory under the repository root.

        Returns:
            ShardInspector reading local paths, file:// and s3:// URIs.
        """
        from shardlog.adapters.storage import create_router

        return cls(storage=create_router(), sink=sink, base_dir=base_dir)

    def inspect(self, layout: RepositoryLayout) -> ShardReport:
        """Locate the newest translog generation of a shard and decode its checkpoint.

        Absence of data and storage failures end up in the report's status.
        A checkpoint that exists but cannot be decoded is reported to the
        sink first, then raised.

        Args:
            layout: Repository root, index UUID and shard id.

        Returns:
            The ShardReport, which has also been emitted to the sink.

        Raises:
            CheckpointDecodeError: If the latest checkpoint is malformed.
        """
        paths = resolve_shard_paths(
            layout.root, layout.index_uuid, layout.shard_id, base_dir=self._base_dir
        )
        result = self._locator.locate(paths.translog)

        checkpoint: Checkpoint | None = None
        decode_error: CheckpointDecodeError | None = None
        if result.ok and result.latest is not None:
            ckp_path = result.latest.checkpoint_path
            try:
                checkpoint = read_checkpoint(self._storage, ckp_path)
            except CheckpointNotFoundError:
                logger.info("Checkpoint file not found: %s", ckp_path)
            except CheckpointDecodeError as e:
                logger.error("Failed to decode checkpoint %s: %s", ckp_path, e)
                decode_error = e
            except StorageError as e:
                logger.error("Error reading checkpoint file: %s", e)
                result = LocateResult.failed(str(e), cause=e, latest=result.latest)

        report = ShardReport(
            layout=layout,
            paths=paths,
            locate=result,
            checkpoint=checkpoint,
            decode_error=decode_error,
        )
        self._sink.emit(report)
        if decode_error is not None:
            raise decode_error
        return report

    def decode(self, path: str) -> Checkpoint:
        """Decode a single checkpoint file and emit it to the sink.

        Raises:
            CheckpointNotFoundError: If no file exists at path.
            CheckpointDecodeError: If the file cannot be decoded.
            StorageError: For other I/O failures.
        """
        checkpoint = read_checkpoint(self._storage, path)
        self._sink.emit_checkpoint(path, checkpoint)
        return checkpoint
