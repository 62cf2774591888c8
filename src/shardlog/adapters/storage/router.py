"""Scheme-based routing between storage backends."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from shardlog.adapters.storage.filesystem import FilesystemStorage
from shardlog.adapters.storage.s3 import S3Storage
from shardlog.core.path_utils import uri_scheme


if TYPE_CHECKING:
    from shardlog.core.models import StorageEntry
    from shardlog.core.ports import StoragePort


FILE_SCHEME = "file"


def local_path(uri: str) -> str:
    """Drop a leading file:// (any case) so the path can be opened locally."""
    if uri_scheme(uri) == FILE_SCHEME:
        return uri.partition("://")[2]
    return uri


class RouterStorage:
    """StoragePort that hands each call to the backend for the path's scheme.

    Plain paths go to the backend registered under None. file:// URIs are
    served with the scheme removed, so entries listed through them come
    back as plain paths.
    """

    def __init__(self, backends: dict[str | None, StoragePort]) -> None:
        self._backends = backends

    def _route(self, path: str) -> tuple[StoragePort, str]:
        scheme = uri_scheme(path)
        backend = self._backends.get(scheme)
        if backend is None:
            where = f"scheme '{scheme}'" if scheme else "local paths"
            raise ValueError(f"No storage backend registered for {where}: {path}")
        return backend, local_path(path)

    def exists(self, path: str) -> bool:
        backend, routed = self._route(path)
        return backend.exists(routed)

    def list_entries(self, prefix: str) -> list[StorageEntry]:
        backend, routed = self._route(prefix)
        return backend.list_entries(routed)

    def read_bytes(self, source: str) -> bytes:
        backend, routed = self._route(source)
        return backend.read_bytes(routed)


def create_router(s3_client: Any | None = None) -> RouterStorage:
    """Build the default router: S3 for s3://, local disk for everything else.

    Args:
        s3_client: boto3 S3 client. If omitted, one is created on first
            S3 access.
    """
    local = FilesystemStorage()
    return RouterStorage(
        {"s3": S3Storage(client=s3_client), FILE_SCHEME: local, None: local}
    )
