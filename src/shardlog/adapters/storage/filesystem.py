"""Filesystem storage adapter for local repositories."""

from __future__ import annotations

from pathlib import Path

from shardlog.core.exceptions import (
    StorageAccessError,
    StorageError,
    StorageNotFoundError,
)
from shardlog.core.models import StorageEntry


def _translate_os_error(error: OSError, source: str) -> StorageError:
    """Translate an OSError to a domain exception.

    Args:
        error: The OSError raised by the filesystem call.
        source: The path for context.

    Returns:
        Appropriate StorageError subclass.
    """
    if isinstance(error, (FileNotFoundError, NotADirectoryError)):
        return StorageNotFoundError(
            f"Not found: {source}",
            source=source,
            cause=error,
        )
    if isinstance(error, PermissionError):
        return StorageAccessError(
            f"Permission denied: {source}",
            source=source,
            cause=error,
        )
    return StorageError(
        f"Filesystem error: {error}",
        source=source,
        cause=error,
    )


class FilesystemStorage:
    """Storage adapter for local filesystem repositories.

    Implements StoragePort protocol for local directories.
    """

    def exists(self, path: str) -> bool:
        """Return True if a file or directory exists at path.

        Raises:
            StorageAccessError: If a parent directory cannot be searched.
            StorageError: For other OS errors.
        """
        try:
            Path(path).stat()
        except (FileNotFoundError, NotADirectoryError):
            return False
        except OSError as e:
            raise _translate_os_error(e, path) from e
        return True

    def list_entries(self, prefix: str) -> list[StorageEntry]:
        """List the immediate children of a directory.

        Only directories and regular files are returned; sockets, FIFOs
        and broken symlinks are left out.

        Args:
            prefix: Directory path.

        Returns:
            Entries sorted by name.

        Raises:
            StorageNotFoundError: If the directory does not exist.
            StorageAccessError: If the directory or a child cannot be read.
            StorageError: For other OS errors.
        """
        base = Path(prefix)
        try:
            children = list(base.iterdir())
        except OSError as e:
            raise _translate_os_error(e, prefix) from e

        entries: list[StorageEntry] = []
        for child in children:
            try:
                is_dir = child.is_dir()
                is_file = not is_dir and child.is_file()
            except OSError as e:
                raise _translate_os_error(e, str(child)) from e
            if is_dir or is_file:
                entries.append(
                    StorageEntry(name=child.name, path=str(child), is_dir=is_dir)
                )

        return sorted(entries, key=lambda e: e.name)

    def read_bytes(self, source: str) -> bytes:
        """Read a file's full contents.

        Raises:
            StorageNotFoundError: If the file does not exist.
            StorageAccessError: If the file cannot be read.
            StorageError: For other OS errors (including source being a directory).
        """
        try:
            return Path(source).read_bytes()
        except OSError as e:
            raise _translate_os_error(e, source) from e
