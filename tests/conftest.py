"""Pytest configuration and shared fixtures.

This module registers custom markers for CI job separation and provides
shared fixtures for the test suite: an in-memory StoragePort, a checkpoint
file builder and an on-disk tree writer.
"""

from __future__ import annotations

import struct
import zlib
from collections.abc import Callable, Iterable
from pathlib import Path

import pytest

from shardlog.core.exceptions import StorageError, StorageNotFoundError
from shardlog.core.models import StorageEntry


def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers."""
    config.addinivalue_line("markers", "core: Core models, ports, and services")
    config.addinivalue_line("markers", "storage: Storage adapters (s3, filesystem)")
    config.addinivalue_line("markers", "report: Report sinks")
    config.addinivalue_line("markers", "cli: CLI tests")
    config.addinivalue_line("markers", "e2e: End-to-end tests")
    config.addinivalue_line("markers", "property: Property-based tests (hypothesis)")
    config.addinivalue_line(
        "markers", "tra: Test Responsibility Anchor (TRA) - namespace.Anchor format"
    )
    config.addinivalue_line(
        "markers",
        "tier: Test tier for CI job separation (0=instant, 1=fast, 2=standard, 3=slow, 4=manual)",
    )


def build_checkpoint_bytes(
    *,
    offset: int = 55,
    num_ops: int = 0,
    generation: int = 1,
    min_seq_no: int = -1,
    max_seq_no: int = -1,
    global_checkpoint: int = -1,
    min_translog_generation: int = 1,
    trimmed_above_seq_no: int = -2,
    version: int = 4,
) -> bytes:
    """Encode a checkpoint file the way the storage subsystem writes it."""
    header = (
        struct.pack(">I", 0x3FD76C17) + bytes([3]) + b"ckp" + struct.pack(">i", version)
    )
    values = [
        offset,
        num_ops,
        generation,
        min_seq_no,
        max_seq_no,
        global_checkpoint,
        min_translog_generation,
    ]
    fmt = "qiqqqqq"
    if version >= 3:
        values.append(trimmed_above_seq_no)
        fmt += "q"
    order = "<" if version >= 4 else ">"
    body = struct.pack(order + fmt, *values)
    data = header + body + struct.pack(">Ii", 0xC02893E8, 0)
    return data + struct.pack(">Q", zlib.crc32(data))


class InMemoryStorage:
    """StoragePort backed by dicts, recording every call.

    Directories are implied by file paths and can also be declared
    explicitly. Paths use "/" separators.
    """

    def __init__(
        self,
        files: dict[str, bytes] | None = None,
        dirs: Iterable[str] = (),
    ) -> None:
        self.files = dict(files or {})
        self.dirs: set[str] = set()
        for path in [*dirs, *self.files]:
            self._add_parents(path)
        self.dirs.update(dirs)
        self.failures: dict[str, StorageError] = {}
        self.listed: list[str] = []
        self.read: list[str] = []

    def _add_parents(self, path: str) -> None:
        while "/" in path:
            path = path.rsplit("/", 1)[0]
            if path:
                self.dirs.add(path)

    def exists(self, path: str) -> bool:
        return path in self.files or path in self.dirs

    def list_entries(self, prefix: str) -> list[StorageEntry]:
        self.listed.append(prefix)
        if prefix in self.failures:
            raise self.failures[prefix]
        if prefix not in self.dirs:
            raise StorageNotFoundError(f"Not found: {prefix}", source=prefix)
        entries = [
            StorageEntry(name=d.rsplit("/", 1)[1], path=d, is_dir=True)
            for d in self.dirs
            if d.rsplit("/", 1)[0] == prefix
        ]
        entries += [
            StorageEntry(name=f.rsplit("/", 1)[1], path=f, is_dir=False)
            for f in self.files
            if f.rsplit("/", 1)[0] == prefix
        ]
        return sorted(entries, key=lambda e: e.name)

    def read_bytes(self, source: str) -> bytes:
        self.read.append(source)
        if source in self.failures:
            raise self.failures[source]
        try:
            return self.files[source]
        except KeyError:
            raise StorageNotFoundError(f"Not found: {source}", source=source) from None


@pytest.fixture
def checkpoint_bytes() -> Callable[..., bytes]:
    """Factory encoding checkpoint files; keyword arguments set field values."""
    return build_checkpoint_bytes


@pytest.fixture
def memory_storage() -> Callable[..., InMemoryStorage]:
    """Factory for in-memory storage with synthetic directory listings."""
    return InMemoryStorage


@pytest.fixture
def write_tree() -> Callable[[Path, dict[str, bytes | None]], Path]:
    """Factory writing a directory tree under a root.

    Keys are "/"-separated relative paths; a value of None creates a
    directory, bytes create a file.
    """

    def _write(root: Path, tree: dict[str, bytes | None]) -> Path:
        for rel, content in tree.items():
            target = root.joinpath(*rel.split("/"))
            if content is None:
                target.mkdir(parents=True, exist_ok=True)
            else:
                target.parent.mkdir(parents=True, exist_ok=True)
                target.write_bytes(content)
        return root

    return _write
