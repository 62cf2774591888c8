"""Storage backend adapters."""

from shardlog.adapters.storage.filesystem import FilesystemStorage
from shardlog.adapters.storage.router import RouterStorage, create_router
from shardlog.adapters.storage.s3 import S3Storage


__all__ = ["FilesystemStorage", "RouterStorage", "S3Storage", "create_router"]
