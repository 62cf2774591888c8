"""Core domain models for shardlog.

These models are pure Python dataclasses with no I/O dependencies.
They represent the repository layout, the located translog generation
and the decoded checkpoint record.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from enum import StrEnum
from typing import TYPE_CHECKING


if TYPE_CHECKING:
    from shardlog.core.exceptions import CheckpointDecodeError


@dataclass(frozen=True, slots=True)
class RepositoryLayout:
    """Inputs identifying one shard inside a remote-store repository.

    Attributes:
        root: Repository root path or URI (e.g., "/var/lib/repo" or
            "s3://bucket/repo").
        index_uuid: Internal identifier of the index.
        shard_id: Shard number, as it appears in the directory name.
        index_name: Human-readable index name, for display only.

    Example:
        >>> layout = RepositoryLayout(
        ...     root="/var/lib/repo",
        ...     index_uuid="zX1y9Q3dR0u4",
        ...     shard_id="0",
        ... )
        >>> layout.shard_id
        '0'
    """

    root: str
    index_uuid: str
    shard_id: str
    index_name: str = ""

    def __post_init__(self) -> None:
        """Validate layout fields after initialization."""
        if not self.root:
            raise ValueError("Repository root cannot be empty")
        if not self.index_uuid:
            raise ValueError("Index UUID cannot be empty")
        if not self.shard_id:
            raise ValueError("Shard id cannot be empty")


@dataclass(frozen=True, slots=True)
class ShardPaths:
    """Derived path chain for a shard, from repository base to translog data.

    None of these paths are checked for existence.
    """

    base: str
    index: str
    shard: str
    translog: str


@dataclass(frozen=True, slots=True)
class StorageEntry:
    """One immediate child of a listed directory or prefix.

    Attributes:
        name: Final path component (no separators).
        path: Full path/URI of the entry.
        is_dir: True for directories (or S3 common prefixes).
    """

    name: str
    path: str
    is_dir: bool


@dataclass(frozen=True, slots=True)
class LatestGeneration:
    """The newest translog generation found for a shard."""

    primary_term: int
    primary_term_path: str
    generation: int
    translog_path: str
    checkpoint_path: str


class LookupStatus(StrEnum):
    """Outcome of a translog lookup or shard inspection."""

    FOUND = "found"
    NOT_FOUND = "not_found"
    FILESYSTEM_ERROR = "filesystem_error"
    DECODE_ERROR = "decode_error"


@dataclass(frozen=True, slots=True)
class LocateResult:
    """Result value returned by the translog locator.

    Attributes:
        status: Whether a generation was found, absent, or the scan failed.
        reason: Human-readable reason for non-found outcomes.
        latest: The located generation. Set for FOUND, and for
            FILESYSTEM_ERROR when the failure came after it was located.
        cause: Underlying storage error for FILESYSTEM_ERROR outcomes.
    """

    status: LookupStatus
    reason: str = ""
    latest: LatestGeneration | None = None
    cause: Exception | None = field(default=None, compare=False)

    @property
    def ok(self) -> bool:
        """True when a generation was located."""
        return self.status is LookupStatus.FOUND and self.latest is not None

    @classmethod
    def found(cls, latest: LatestGeneration) -> LocateResult:
        return cls(status=LookupStatus.FOUND, latest=latest)

    @classmethod
    def not_found(cls, reason: str) -> LocateResult:
        return cls(status=LookupStatus.NOT_FOUND, reason=reason)

    @classmethod
    def failed(
        cls,
        reason: str,
        cause: Exception,
        latest: LatestGeneration | None = None,
    ) -> LocateResult:
        return cls(
            status=LookupStatus.FILESYSTEM_ERROR,
            reason=reason,
            latest=latest,
            cause=cause,
        )


@dataclass(frozen=True, slots=True)
class Checkpoint:
    """Decoded translog checkpoint record.

    Field order follows the on-disk layout. Each field carries its
    format name in metadata so that fields() can report it verbatim.

    Attributes:
        offset: Byte offset up to which the generation file is durable.
        num_ops: Number of operations in the generation.
        generation: Translog generation this checkpoint describes.
        min_seq_no: Lowest sequence number in the generation.
        max_seq_no: Highest sequence number in the generation.
        global_checkpoint: Global checkpoint at the time of writing.
        min_translog_generation: Oldest generation still required.
        trimmed_above_seq_no: Operations above this seq# were trimmed.
        version: Checkpoint format version read from the header.
    """

    offset: int = field(metadata={"name": "offset"})
    num_ops: int = field(metadata={"name": "numOps"})
    generation: int = field(metadata={"name": "generation"})
    min_seq_no: int = field(metadata={"name": "minSeqNo"})
    max_seq_no: int = field(metadata={"name": "maxSeqNo"})
    global_checkpoint: int = field(metadata={"name": "globalCheckpoint"})
    min_translog_generation: int = field(metadata={"name": "minTranslogGeneration"})
    trimmed_above_seq_no: int = field(metadata={"name": "trimmedAboveSeqNo"})
    version: int = field(default=0, compare=False)

    def fields(self) -> list[tuple[str, int]]:
        """Return (field name, value) pairs in on-disk order.

        The format version is header information, not a record field,
        and is not included.
        """
        return [
            (f.metadata["name"], getattr(self, f.name))
            for f in dataclasses.fields(self)
            if "name" in f.metadata
        ]


@dataclass(frozen=True, slots=True)
class ShardReport:
    """Everything one inspection produced, handed to a ReportSink.

    Attributes:
        layout: The shard that was inspected.
        paths: Derived path chain.
        locate: Locator result (status, reason and latest generation).
        checkpoint: Decoded checkpoint, if one was read.
        decode_error: Set when the checkpoint exists but failed to decode.
    """

    layout: RepositoryLayout
    paths: ShardPaths
    locate: LocateResult
    checkpoint: Checkpoint | None = None
    decode_error: CheckpointDecodeError | None = field(default=None, compare=False)

    @property
    def checkpoint_exists(self) -> bool:
        """Whether the paired checkpoint file was found (decodable or not)."""
        return self.checkpoint is not None or self.decode_error is not None

    @property
    def status(self) -> LookupStatus:
        """Overall status; a missing checkpoint downgrades FOUND to NOT_FOUND."""
        if self.decode_error is not None:
            return LookupStatus.DECODE_ERROR
        if self.locate.ok and not self.checkpoint_exists:
            return LookupStatus.NOT_FOUND
        return self.locate.status

    @property
    def reason(self) -> str:
        """Reason string matching status."""
        if self.decode_error is not None:
            return str(self.decode_error)
        if self.locate.ok and not self.checkpoint_exists:
            return "checkpoint file not found"
        return self.locate.reason
