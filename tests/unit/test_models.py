"""Unit tests for core domain models.

These tests verify RepositoryLayout, LocateResult, Checkpoint and
ShardReport. They are pure unit tests with no I/O dependencies.
"""

from __future__ import annotations

import dataclasses

import pytest

from shardlog.core.exceptions import CheckpointDecodeError, StorageError
from shardlog.core.models import (
    Checkpoint,
    LatestGeneration,
    LocateResult,
    LookupStatus,
    RepositoryLayout,
    ShardPaths,
    ShardReport,
)


def _latest() -> LatestGeneration:
    return LatestGeneration(
        primary_term=2,
        primary_term_path="/repo/rem/abc/0/translog/data/2",
        generation=10,
        translog_path="/repo/rem/abc/0/translog/data/2/translog-10.tlog",
        checkpoint_path="/repo/rem/abc/0/translog/data/2/translog-10.ckp",
    )


def _paths() -> ShardPaths:
    return ShardPaths(
        base="/repo/rem",
        index="/repo/rem/abc",
        shard="/repo/rem/abc/0",
        translog="/repo/rem/abc/0/translog/data",
    )


def _checkpoint(**overrides: int) -> Checkpoint:
    values = {
        "offset": 55,
        "num_ops": 3,
        "generation": 10,
        "min_seq_no": 0,
        "max_seq_no": 2,
        "global_checkpoint": 2,
        "min_translog_generation": 9,
        "trimmed_above_seq_no": -2,
    }
    values.update(overrides)
    return Checkpoint(**values)


class TestRepositoryLayout:
    """Tests for the RepositoryLayout model."""

    @pytest.mark.core
    def test_layout_creation_minimal(self) -> None:
        """Layout needs root, index UUID and shard id; name defaults to empty."""
        layout = RepositoryLayout(root="/repo", index_uuid="abc", shard_id="0")

        assert layout.root == "/repo"
        assert layout.index_uuid == "abc"
        assert layout.shard_id == "0"
        assert layout.index_name == ""

    @pytest.mark.core
    def test_layout_immutable(self) -> None:
        """Layout is immutable (frozen dataclass)."""
        layout = RepositoryLayout(root="/repo", index_uuid="abc", shard_id="0")

        with pytest.raises(dataclasses.FrozenInstanceError):
            layout.root = "/other"  # type: ignore[misc]

    @pytest.mark.core
    @pytest.mark.parametrize(
        ("root", "index_uuid", "shard_id", "message"),
        [
            ("", "abc", "0", "root"),
            ("/repo", "", "0", "UUID"),
            ("/repo", "abc", "", "Shard"),
        ],
    )
    def test_layout_rejects_empty_fields(
        self, root: str, index_uuid: str, shard_id: str, message: str
    ) -> None:
        """Empty root, UUID or shard id raise ValueError."""
        with pytest.raises(ValueError, match=message):
            RepositoryLayout(root=root, index_uuid=index_uuid, shard_id=shard_id)


class TestLocateResult:
    """Tests for LocateResult constructors."""

    @pytest.mark.core
    def test_found_is_ok(self) -> None:
        """found() carries the generation and reports ok."""
        result = LocateResult.found(_latest())

        assert result.status is LookupStatus.FOUND
        assert result.ok is True
        assert result.latest == _latest()
        assert result.reason == ""

    @pytest.mark.core
    def test_not_found_keeps_reason(self) -> None:
        """not_found() has a reason and no generation."""
        result = LocateResult.not_found("no translog files")

        assert result.status is LookupStatus.NOT_FOUND
        assert result.ok is False
        assert result.latest is None
        assert result.reason == "no translog files"

    @pytest.mark.core
    def test_failed_keeps_cause(self) -> None:
        """failed() records the storage error and is not ok."""
        error = StorageError("boom", source="/repo")
        result = LocateResult.failed("boom", cause=error)

        assert result.status is LookupStatus.FILESYSTEM_ERROR
        assert result.ok is False
        assert result.cause is error

    @pytest.mark.core
    def test_failed_with_latest_is_not_ok(self) -> None:
        """A failure after locating keeps the generation but is still not ok."""
        error = StorageError("boom", source="/repo")
        result = LocateResult.failed("boom", cause=error, latest=_latest())

        assert result.latest == _latest()
        assert result.ok is False

    @pytest.mark.core
    def test_status_values_are_strings(self) -> None:
        """Status values render as their wire names."""
        assert str(LookupStatus.FOUND) == "found"
        assert str(LookupStatus.NOT_FOUND) == "not_found"
        assert str(LookupStatus.FILESYSTEM_ERROR) == "filesystem_error"
        assert str(LookupStatus.DECODE_ERROR) == "decode_error"


class TestCheckpoint:
    """Tests for the Checkpoint model."""

    @pytest.mark.core
    def test_fields_in_record_order(self) -> None:
        """fields() lists every record field in on-disk order with format names."""
        checkpoint = _checkpoint()

        assert checkpoint.fields() == [
            ("offset", 55),
            ("numOps", 3),
            ("generation", 10),
            ("minSeqNo", 0),
            ("maxSeqNo", 2),
            ("globalCheckpoint", 2),
            ("minTranslogGeneration", 9),
            ("trimmedAboveSeqNo", -2),
        ]

    @pytest.mark.core
    def test_fields_excludes_version(self) -> None:
        """The format version is not reported as a field."""
        checkpoint = Checkpoint(1, 2, 3, 4, 5, 6, 7, 8, version=4)

        names = [name for name, _ in checkpoint.fields()]
        assert "version" not in names
        assert len(names) == 8

    @pytest.mark.core
    def test_equality_ignores_version(self) -> None:
        """Two checkpoints with the same fields compare equal across versions."""
        assert Checkpoint(1, 2, 3, 4, 5, 6, 7, 8, version=3) == Checkpoint(
            1, 2, 3, 4, 5, 6, 7, 8, version=4
        )


class TestShardReport:
    """Tests for ShardReport status derivation."""

    @pytest.mark.core
    def test_found_with_checkpoint(self) -> None:
        """Found generation plus decoded checkpoint is FOUND."""
        report = ShardReport(
            layout=RepositoryLayout(root="/repo", index_uuid="abc", shard_id="0"),
            paths=_paths(),
            locate=LocateResult.found(_latest()),
            checkpoint=_checkpoint(),
        )

        assert report.status is LookupStatus.FOUND
        assert report.checkpoint_exists is True
        assert report.reason == ""

    @pytest.mark.core
    def test_found_without_checkpoint_is_not_found(self) -> None:
        """A located generation whose checkpoint is missing reports NOT_FOUND."""
        report = ShardReport(
            layout=RepositoryLayout(root="/repo", index_uuid="abc", shard_id="0"),
            paths=_paths(),
            locate=LocateResult.found(_latest()),
        )

        assert report.status is LookupStatus.NOT_FOUND
        assert report.checkpoint_exists is False
        assert report.reason == "checkpoint file not found"

    @pytest.mark.core
    def test_decode_error_wins(self) -> None:
        """A decode error sets DECODE_ERROR and its message as reason."""
        error = CheckpointDecodeError("Checkpoint file is empty: x.ckp", source="x.ckp")
        report = ShardReport(
            layout=RepositoryLayout(root="/repo", index_uuid="abc", shard_id="0"),
            paths=_paths(),
            locate=LocateResult.found(_latest()),
            decode_error=error,
        )

        assert report.status is LookupStatus.DECODE_ERROR
        assert report.checkpoint_exists is True
        assert report.reason == "Checkpoint file is empty: x.ckp"

    @pytest.mark.core
    def test_locate_outcome_passes_through(self) -> None:
        """Without a located generation the locator's status and reason are used."""
        report = ShardReport(
            layout=RepositoryLayout(root="/repo", index_uuid="abc", shard_id="0"),
            paths=_paths(),
            locate=LocateResult.not_found("no primary-term directories"),
        )

        assert report.status is LookupStatus.NOT_FOUND
        assert report.reason == "no primary-term directories"
