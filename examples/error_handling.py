"""Error handling patterns with recovery hints.

This example demonstrates how to handle common errors and use
the recovery_hint property to provide actionable guidance.
"""

from shardlog import (
    Checkpoint,
    CheckpointDecodeError,
    CheckpointNotFoundError,
    LookupStatus,
    RepositoryLayout,
    ShardInspector,
    ShardlogError,
    ShardReport,
    StorageAccessError,
)


inspector = ShardInspector.from_defaults()


# Pattern 1: Missing data is a status, not an exception
def latest_checkpoint(layout: RepositoryLayout) -> Checkpoint | None:
    """Return the newest checkpoint, or None if the shard has no translog yet."""
    report = inspector.inspect(layout)
    if report.status is not LookupStatus.FOUND:
        print(f"{report.status}: {report.reason}")
        return None
    return report.checkpoint


# Pattern 2: Handle a corrupt checkpoint
def inspect_or_flag(layout: RepositoryLayout) -> ShardReport | None:
    """Inspect a shard, returning None if its latest checkpoint is corrupt."""
    try:
        return inspector.inspect(layout)
    except CheckpointDecodeError as e:
        print(f"Corrupt checkpoint: {e.source}")
        print(f"Hint: {e.recovery_hint}")
        return None


# Pattern 3: Decode one file, telling absence apart from corruption
def decode_file(path: str) -> Checkpoint | None:
    """Decode a single .ckp file."""
    try:
        return inspector.decode(path)
    except CheckpointNotFoundError as e:
        # Must come before CheckpointDecodeError (it is a subclass)
        print(f"Hint: {e.recovery_hint}")
        return None
    except CheckpointDecodeError as e:
        print(f"Corrupt checkpoint: {e}")
        return None
    except StorageAccessError as e:
        print(f"Access denied to: {e.source}")
        print(f"Hint: {e.recovery_hint}")
        return None


# Pattern 4: Catch-all for any library error
def decode_safe(path: str) -> Checkpoint | None:
    """Decode a checkpoint with comprehensive error handling."""
    try:
        return inspector.decode(path)
    except ShardlogError as e:
        print(f"Error: {e}")
        if e.recovery_hint:
            print(f"Hint: {e.recovery_hint}")
        return None
