"""Translog checkpoint decoding.

A checkpoint file is a fixed-size record framed by a Lucene codec header
and footer:

    header  int32 BE magic 0x3FD76C17
            VInt length + UTF-8 codec name "ckp"
            int32 BE format version
    body    int64 offset
            int32 numOps
            int64 generation
            int64 minSeqNo
            int64 maxSeqNo
            int64 globalCheckpoint
            int64 minTranslogGeneration
            int64 trimmedAboveSeqNo      (version 3 and later)
    footer  int32 BE footer magic (bitwise not of the header magic)
            int32 BE checksum algorithm id, always 0
            int64 BE CRC32 of every preceding byte

Versions 2 and 3 store the body big-endian, version 4 little-endian.
"""

from __future__ import annotations

import struct
import zlib
from dataclasses import dataclass
from typing import TYPE_CHECKING

from shardlog.core.exceptions import (
    CheckpointDecodeError,
    CheckpointNotFoundError,
    StorageNotFoundError,
)
from shardlog.core.models import Checkpoint


if TYPE_CHECKING:
    from shardlog.core.ports import StoragePort


CODEC_MAGIC = 0x3FD76C17
FOOTER_MAGIC = ~CODEC_MAGIC & 0xFFFFFFFF
CHECKPOINT_CODEC = "ckp"

# Sequence number sentinel for checkpoints written before trimming existed
UNASSIGNED_SEQ_NO = -2

_HEADER_INT = struct.Struct(">i")
_HEADER_MAGIC = struct.Struct(">I")
_FOOTER = struct.Struct(">IiQ")
_CHECKSUM_SIZE = 8


@dataclass(frozen=True, slots=True)
class _BodyLayout:
    body: struct.Struct
    has_trimmed_above: bool

    @property
    def file_size(self) -> int:
        header = _HEADER_MAGIC.size + 1 + len(CHECKPOINT_CODEC) + _HEADER_INT.size
        return header + self.body.size + _FOOTER.size


_LAYOUTS: dict[int, _BodyLayout] = {
    2: _BodyLayout(struct.Struct(">qiqqqqq"), has_trimmed_above=False),
    3: _BodyLayout(struct.Struct(">qiqqqqqq"), has_trimmed_above=True),
    4: _BodyLayout(struct.Struct("<qiqqqqqq"), has_trimmed_above=True),
}

SUPPORTED_VERSIONS = tuple(sorted(_LAYOUTS))


def _read_vint(data: bytes, pos: int) -> tuple[int, int]:
    """Decode a Lucene VInt at pos, returning (value, next position)."""
    value = 0
    shift = 0
    while True:
        if pos >= len(data):
            raise struct.error("VInt runs past end of data")
        byte = data[pos]
        pos += 1
        value |= (byte & 0x7F) << shift
        if not byte & 0x80:
            return value, pos
        shift += 7
        if shift > 28:
            raise struct.error("VInt is too long")


def _read_header(data: bytes, source: str) -> tuple[int, int]:
    """Validate the codec header and return (version, body offset)."""
    (magic,) = _HEADER_MAGIC.unpack_from(data, 0)
    if magic != CODEC_MAGIC:
        raise CheckpointDecodeError(
            f"Bad codec header magic 0x{magic:08x} in {source}", source=source
        )

    length, pos = _read_vint(data, _HEADER_MAGIC.size)
    name_bytes = data[pos : pos + length]
    if len(name_bytes) != length:
        raise struct.error("codec name runs past end of data")
    if name_bytes != CHECKPOINT_CODEC.encode():
        raise CheckpointDecodeError(
            f"Unexpected codec {name_bytes!r} in {source}, expected "
            f"{CHECKPOINT_CODEC!r}",
            source=source,
        )
    pos += length

    (version,) = _HEADER_INT.unpack_from(data, pos)
    return version, pos + _HEADER_INT.size


def _verify_footer(data: bytes, source: str) -> None:
    footer_magic, algorithm, checksum = _FOOTER.unpack_from(
        data, len(data) - _FOOTER.size
    )
    if footer_magic != FOOTER_MAGIC:
        raise CheckpointDecodeError(
            f"Bad codec footer magic 0x{footer_magic:08x} in {source}",
            source=source,
        )
    if algorithm != 0:
        raise CheckpointDecodeError(
            f"Unknown checksum algorithm {algorithm} in {source}", source=source
        )
    actual = zlib.crc32(data[:-_CHECKSUM_SIZE])
    if checksum != actual:
        raise CheckpointDecodeError(
            f"Checksum mismatch in {source}: stored 0x{checksum:08x}, "
            f"computed 0x{actual:08x}",
            source=source,
        )


def parse_checkpoint(data: bytes, source: str = "<bytes>") -> Checkpoint:
    """Decode raw checkpoint bytes.

    Args:
        data: Complete file contents.
        source: Path/URI used in error messages.

    Returns:
        The decoded Checkpoint. Version 2 files report trimmedAboveSeqNo
        as UNASSIGNED_SEQ_NO.

    Raises:
        CheckpointDecodeError: If the data is empty, truncated, the wrong
            size for its version, of an unsupported version, or fails its
            header, footer or checksum checks.
    """
    if not data:
        raise CheckpointDecodeError(f"Checkpoint file is empty: {source}", source=source)

    try:
        version, body_start = _read_header(data, source)
    except struct.error as e:
        raise CheckpointDecodeError(
            f"Checkpoint header is truncated ({len(data)} bytes): {source}",
            source=source,
            cause=e,
        ) from e

    layout = _LAYOUTS.get(version)
    if layout is None:
        raise CheckpointDecodeError(
            f"Unsupported checkpoint version {version} in {source} "
            f"(supported: {', '.join(map(str, SUPPORTED_VERSIONS))})",
            source=source,
        )

    if len(data) != layout.file_size:
        raise CheckpointDecodeError(
            f"Checkpoint {source} is {len(data)} bytes, expected "
            f"{layout.file_size} for version {version}",
            source=source,
        )

    _verify_footer(data, source)

    values = layout.body.unpack_from(data, body_start)
    if not layout.has_trimmed_above:
        values = (*values, UNASSIGNED_SEQ_NO)
    return Checkpoint(*values, version=version)


def read_checkpoint(storage: StoragePort, path: str) -> Checkpoint:
    """Read and decode the checkpoint file at path.

    Raises:
        CheckpointNotFoundError: If no file exists at path.
        CheckpointDecodeError: If the file cannot be decoded.
        StorageError: For I/O failures other than absence.
    """
    try:
        data = storage.read_bytes(path)
    except StorageNotFoundError as e:
        raise CheckpointNotFoundError(
            f"Checkpoint file not found: {path}", source=path, cause=e
        ) from e
    return parse_checkpoint(data, source=path)
