"""Domain exceptions for shardlog.

Everything the library raises derives from ShardlogError. Errors tied to
a path carry it as ``source`` together with the underlying ``cause``, and
every error can offer a ``recovery_hint`` for the user.
"""

from __future__ import annotations


class ShardlogError(Exception):
    """Base class for all shardlog exceptions."""

    @property
    def recovery_hint(self) -> str | None:
        """Optional guidance on how to resolve this error."""
        return None


class SourcedError(ShardlogError):
    """An error about one storage path or URI.

    Attributes:
        source: The path/URI the error concerns.
        cause: The lower-level exception, if there was one.
    """

    def __init__(self, message: str, source: str, cause: Exception | None = None):
        super().__init__(message)
        self.source = source
        self.cause = cause


class StorageError(SourcedError):
    """A listing, existence check or read against the repository failed."""


class StorageNotFoundError(StorageError):
    """The file, object, directory or prefix does not exist."""

    @property
    def recovery_hint(self) -> str:
        return f"Verify the path exists: {self.source}"


class StorageAccessError(StorageError):
    """Storage refused access (file permissions, S3 credentials or policy)."""

    @property
    def recovery_hint(self) -> str:
        return "Check credentials and bucket/path permissions"


class CheckpointDecodeError(SourcedError):
    """A translog checkpoint file could not be decoded."""

    @property
    def recovery_hint(self) -> str:
        return f"The checkpoint file may be corrupt or truncated: {self.source}"


class CheckpointNotFoundError(CheckpointDecodeError):
    """The checkpoint paired with a translog generation is absent."""

    @property
    def recovery_hint(self) -> str:
        return (
            f"No checkpoint at {self.source}; the generation may not have "
            "been uploaded yet"
        )


class ConfigurationError(ShardlogError):
    """The repository location (or another setting) is missing or invalid."""
