"""JSON report sink for machine-readable output."""

from __future__ import annotations

import json
import sys
from typing import TYPE_CHECKING, Any, TextIO


if TYPE_CHECKING:
    from shardlog.core.models import Checkpoint, ShardReport


def checkpoint_to_dict(checkpoint: Checkpoint) -> dict[str, int]:
    """Ordered field mapping; dict insertion order matches record order."""
    return dict(checkpoint.fields())


def report_to_dict(report: ShardReport) -> dict[str, Any]:
    """Convert a ShardReport into a JSON-serializable dict."""
    layout = report.layout
    latest = report.locate.latest
    return {
        "status": str(report.status),
        "reason": report.reason,
        "index": {"name": layout.index_name or None, "uuid": layout.index_uuid},
        "shard_id": layout.shard_id,
        "primary_term": latest.primary_term if latest else None,
        "generation": latest.generation if latest else None,
        "paths": {
            "repository": layout.root,
            "base": report.paths.base,
            "index": report.paths.index,
            "shard": report.paths.shard,
            "translog": report.paths.translog,
            "primary_term": latest.primary_term_path if latest else None,
            "translog_file": latest.translog_path if latest else None,
            "checkpoint": (
                latest.checkpoint_path if latest and report.checkpoint_exists else None
            ),
        },
        "checkpoint": (
            checkpoint_to_dict(report.checkpoint) if report.checkpoint else None
        ),
    }


class JsonReportSink:
    """Report sink writing one JSON document per emitted result."""

    def __init__(self, stream: TextIO | None = None, indent: int | None = 2) -> None:
        """Initialize the sink.

        Args:
            stream: Text stream to write to. Defaults to the current sys.stdout.
            indent: JSON indentation; None for a single line.
        """
        self._stream = stream
        self._indent = indent

    def _write(self, document: dict[str, Any]) -> None:
        stream = self._stream if self._stream is not None else sys.stdout
        stream.write(json.dumps(document, indent=self._indent))
        stream.write("\n")

    def emit(self, report: ShardReport) -> None:
        """Write the inspection result as JSON."""
        self._write(report_to_dict(report))

    def emit_checkpoint(self, source: str, checkpoint: Checkpoint) -> None:
        """Write a single decoded checkpoint as JSON."""
        self._write(
            {
                "source": source,
                "version": checkpoint.version,
                "checkpoint": checkpoint_to_dict(checkpoint),
            }
        )
