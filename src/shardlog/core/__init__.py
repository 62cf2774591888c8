"""Core domain module for shardlog.

This module contains pure Python domain models, port definitions and the
translog lookup and checkpoint decoding logic. It performs I/O only
through StoragePort and can be tested in isolation.
"""

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
from shardlog.core.ports import NullReportSink, ReportSink, StoragePort


__all__ = [
    "Checkpoint",
    "LatestGeneration",
    "LocateResult",
    "LookupStatus",
    "NullReportSink",
    "RepositoryLayout",
    "ReportSink",
    "ShardPaths",
    "ShardReport",
    "StorageEntry",
    "StoragePort",
]
