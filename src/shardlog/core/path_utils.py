"""Path resolution utilities for remote-store repositories.

Repository roots are either plain local paths or URIs (s3://, file://).
URIs are always joined with "/", local paths with the platform separator.
Nothing here touches storage.
"""

from __future__ import annotations

from pathlib import PurePath

from shardlog.core.models import ShardPaths


# Directory under the repository root that holds remote-store shard data
REMOTE_STORE_DIR = "rem"

# Segments under a shard directory that hold translog data
TRANSLOG_DATA_DIRS = ("translog", "data")

TRANSLOG_SUFFIX = ".tlog"
CHECKPOINT_SUFFIX = ".ckp"


def uri_scheme(path: str) -> str | None:
    """Return the lower-cased URI scheme of path, or None for plain paths.

    Single-letter prefixes are Windows drive letters (C://...), not schemes.
    """
    scheme, sep, _ = path.partition("://")
    if sep and len(scheme) > 1:
        return scheme.lower()
    return None


def is_uri(path: str) -> bool:
    """Return True if path carries a URI scheme (e.g., s3://bucket/key)."""
    return uri_scheme(path) is not None


def join_path(base: str, *parts: str) -> str:
    """Join path segments onto a base path or URI.

    Args:
        base: Local path or URI. Trailing separators are tolerated.
        *parts: Segments to append.

    Returns:
        The joined path as a string.
    """
    if is_uri(base):
        scheme, rest = base.split("://", 1)
        head = rest.rstrip("/")
        tail = "/".join(p.strip("/") for p in parts if p.strip("/"))
        return f"{scheme}://{head}/{tail}" if tail else f"{scheme}://{head}"
    return str(PurePath(base, *parts))


def resolve_shard_paths(
    root: str,
    index_uuid: str,
    shard_id: str,
    base_dir: str = REMOTE_STORE_DIR,
) -> ShardPaths:
    """Derive the shard's path chain under a repository root.

    Example:
        >>> resolve_shard_paths("/repo", "abc", "0").translog
        '/repo/rem/abc/0/translog/data'
    """
    base = join_path(root, base_dir)
    index = join_path(base, index_uuid)
    shard = join_path(index, shard_id)
    translog = join_path(shard, *TRANSLOG_DATA_DIRS)
    return ShardPaths(base=base, index=index, shard=shard, translog=translog)


def checkpoint_path_for(translog_path: str) -> str:
    """Return the checkpoint path paired with a translog generation file.

    Only the trailing ".tlog" suffix is replaced.

    Raises:
        ValueError: If translog_path does not end with ".tlog".
    """
    if not translog_path.endswith(TRANSLOG_SUFFIX):
        raise ValueError(f"Not a translog file: {translog_path}")
    return translog_path[: -len(TRANSLOG_SUFFIX)] + CHECKPOINT_SUFFIX
