"""shardlog - Offline inspector for shard translog checkpoints.

This library locates the newest translog generation of a shard inside a
remote-store repository (local directory or S3) and decodes the checkpoint
record paired with it.

Example:
    >>> from shardlog import RepositoryLayout, ShardInspector
    >>> layout = RepositoryLayout(
    ...     root="/var/lib/opensearch/repo",
    ...     index_uuid="zX1y9Q3dR0u4",
    ...     shard_id="0",
    ... )
    >>> report = ShardInspector.from_defaults().inspect(layout)
    >>> report.checkpoint.fields()  # [("offset", ...), ("numOps", ...), ...]
"""

from shardlog.adapters.storage import (
    FilesystemStorage,
    RouterStorage,
    S3Storage,
    create_router,
)
from shardlog.config import resolve_repository_root
from shardlog.core.checkpoint import parse_checkpoint, read_checkpoint
from shardlog.core.exceptions import (
    CheckpointDecodeError,
    CheckpointNotFoundError,
    ConfigurationError,
    ShardlogError,
    SourcedError,
    StorageAccessError,
    StorageError,
    StorageNotFoundError,
)
from shardlog.core.locator import TranslogLocator
from shardlog.core.models import (
    Checkpoint,
    LatestGeneration,
    LocateResult,
    LookupStatus,
    RepositoryLayout,
    ShardPaths,
    ShardReport,
    StorageEntry,
)
from shardlog.core.path_utils import resolve_shard_paths
from shardlog.core.ports import NullReportSink, ReportSink, StoragePort
from shardlog.core.services import ShardInspector
from shardlog.report import JsonReportSink, RichReportSink


__version__ = "0.1.0"

__all__ = [
    "Checkpoint",
    "CheckpointDecodeError",
    "CheckpointNotFoundError",
    "ConfigurationError",
    "FilesystemStorage",
    "JsonReportSink",
    "LatestGeneration",
    "LocateResult",
    "LookupStatus",
    "NullReportSink",
    "ReportSink",
    "RepositoryLayout",
    "RichReportSink",
    "RouterStorage",
    "S3Storage",
    "ShardInspector",
    "ShardPaths",
    "ShardReport",
    "ShardlogError",
    "SourcedError",
    "StorageAccessError",
    "StorageEntry",
    "StorageError",
    "StorageNotFoundError",
    "StoragePort",
    "TranslogLocator",
    "__version__",
    "create_router",
    "parse_checkpoint",
    "read_checkpoint",
    "resolve_repository_root",
    "resolve_shard_paths",
]
