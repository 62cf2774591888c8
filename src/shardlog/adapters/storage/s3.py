"""S3 storage adapter using boto3."""

from __future__ import annotations

from typing import TYPE_CHECKING

import boto3
from botocore.exceptions import ClientError

from shardlog.core.exceptions import (
    StorageAccessError,
    StorageError,
    StorageNotFoundError,
)
from shardlog.core.models import StorageEntry


if TYPE_CHECKING:
    from mypy_boto3_s3 import S3Client


_NOT_FOUND_CODES = frozenset({"404", "NoSuchKey", "NoSuchBucket"})
_ACCESS_DENIED_CODES = frozenset({"403", "AccessDenied"})


def split_s3_uri(uri: str, require_key: bool = False) -> tuple[str, str]:
    """Split ``s3://bucket/key`` into (bucket, key).

    The key may be empty (bucket root) unless require_key is set.

    Raises:
        ValueError: If uri is not an s3:// URI, or has no key when one
            is required.
    """
    scheme, sep, rest = uri.partition("://")
    if not sep or scheme.lower() != "s3" or not rest:
        raise ValueError(f"Invalid S3 URI: {uri}")
    bucket, _, key = rest.partition("/")
    if require_key and not key:
        raise ValueError(f"Invalid S3 URI (missing key): {uri}")
    return bucket, key


def translate_client_error(error: ClientError, source: str) -> StorageError:
    """Map a botocore ClientError onto the storage error hierarchy."""
    code = error.response.get("Error", {}).get("Code", "")
    if code in _NOT_FOUND_CODES:
        return StorageNotFoundError(
            f"Not found in S3: {source}", source=source, cause=error
        )
    if code in _ACCESS_DENIED_CODES:
        return StorageAccessError(
            f"Access denied: {source}", source=source, cause=error
        )
    return StorageError(f"S3 error ({code}): {error}", source=source, cause=error)


class S3Storage:
    """Storage adapter for repositories kept in S3.

    Implements StoragePort protocol for AWS S3. Directories are key
    prefixes delimited by "/".
    """

    def __init__(self, client: S3Client | None = None) -> None:
        """Initialize S3 storage.

        Args:
            client: Optional boto3 S3 client. If not provided, a default client
                is created the first time S3 is accessed.
        """
        self._client = client

    @property
    def _s3(self) -> S3Client:
        """The boto3 client, created on first use."""
        if self._client is None:
            self._client = boto3.client("s3")
        return self._client

    def exists(self, path: str) -> bool:
        """Return True if an object exists at path or any key lives under it.

        Raises:
            StorageAccessError: If access is denied.
            StorageError: For other S3 errors.
        """
        bucket, key = split_s3_uri(path)
        key = key.rstrip("/")
        if key:
            try:
                self._s3.head_object(Bucket=bucket, Key=key)
                return True
            except ClientError as e:
                error = translate_client_error(e, path)
                if not isinstance(error, StorageNotFoundError):
                    raise error from e

        prefix = f"{key}/" if key else ""
        try:
            response = self._s3.list_objects_v2(
                Bucket=bucket, Prefix=prefix, MaxKeys=1
            )
        except ClientError as e:
            error = translate_client_error(e, path)
            if isinstance(error, StorageNotFoundError):
                return False
            raise error from e
        return response.get("KeyCount", 0) > 0

    def list_entries(self, prefix: str) -> list[StorageEntry]:
        """List objects and common prefixes directly under a prefix.

        Args:
            prefix: S3 URI prefix (e.g., "s3://bucket/repo/rem/").

        Returns:
            Entries sorted by name; common prefixes are directories.

        Raises:
            StorageNotFoundError: If no key, not even a folder marker, lives
                under the prefix.
            StorageAccessError: If access is denied.
            StorageError: For other S3 errors.
        """
        bucket, key_prefix = split_s3_uri(prefix)
        key_prefix = key_prefix.rstrip("/")
        if key_prefix:
            key_prefix += "/"

        paginator = self._s3.get_paginator("list_objects_v2")
        entries: list[StorageEntry] = []
        seen_marker = False

        try:
            for page in paginator.paginate(
                Bucket=bucket, Prefix=key_prefix, Delimiter="/"
            ):
                for common in page.get("CommonPrefixes", []):
                    dir_key = common["Prefix"].rstrip("/")
                    entries.append(
                        StorageEntry(
                            name=dir_key[len(key_prefix) :],
                            path=f"s3://{bucket}/{dir_key}",
                            is_dir=True,
                        )
                    )
                for obj in page.get("Contents", []):
                    key = obj["Key"]
                    # Zero-byte "folder" marker for the prefix itself
                    if key == key_prefix:
                        seen_marker = True
                        continue
                    entries.append(
                        StorageEntry(
                            name=key[len(key_prefix) :],
                            path=f"s3://{bucket}/{key}",
                            is_dir=False,
                        )
                    )
        except ClientError as e:
            raise translate_client_error(e, prefix) from e

        if not entries and not seen_marker:
            raise StorageNotFoundError(
                f"Prefix not found: {prefix}",
                source=prefix,
            )

        return sorted(entries, key=lambda e: e.name)

    def read_bytes(self, source: str) -> bytes:
        """Download an object's full contents into memory.

        Raises:
            StorageNotFoundError: If object does not exist.
            StorageAccessError: If access is denied.
            StorageError: For other S3 errors.
        """
        bucket, key = split_s3_uri(source, require_key=True)
        try:
            response = self._s3.get_object(Bucket=bucket, Key=key)
        except ClientError as e:
            raise translate_client_error(e, source) from e

        body = response["Body"]
        try:
            return body.read()
        finally:
            body.close()
