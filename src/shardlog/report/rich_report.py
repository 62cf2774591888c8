"""Rich-based report sink for terminal output."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.console import Console
from rich.text import Text

from shardlog.core.formatting import status_to_color


if TYPE_CHECKING:
    from shardlog.core.models import Checkpoint, ShardReport


BANNER_RULE = "=" * 58


def format_status(status: str, reason: str = "") -> Text:
    """Format a status string with color coding, followed by its reason."""
    color = status_to_color(status)
    text = Text(status, style=color) if color else Text(status)
    if reason:
        text.append(f": {reason}")
    return text


class RichReportSink:
    """Report sink printing plain lines to a Rich console.

    Paths are printed in the order they were resolved, and checkpoint
    fields one per line as ``name=value`` in record order.

    Example:
        inspector = ShardInspector.from_defaults(sink=RichReportSink())
        inspector.inspect(layout)
    """

    def __init__(self, console: Console | None = None) -> None:
        """Initialize the sink.

        Args:
            console: Console to print to. Defaults to stdout without
                highlighting or wrapping, so paths stay on one line.
        """
        self._console = console or Console(highlight=False, soft_wrap=True)

    def _line(self, text: str | Text = "") -> None:
        self._console.print(text, markup=False, highlight=False, soft_wrap=True)

    def emit(self, report: ShardReport) -> None:
        """Print banner, path provenance, status and checkpoint fields."""
        layout = report.layout
        self._line(BANNER_RULE)
        self._line("Reading Remote Shard Data")
        self._line(BANNER_RULE)
        if layout.index_name:
            self._line(f"Index: {layout.index_name}")
        self._line(f"Shard ID: {layout.shard_id}")
        self._line(f"indexUUID: {layout.index_uuid}")
        self._line(f"Repo path: {layout.root}")

        paths = report.paths
        self._line()
        self._line("Constructed Paths:")
        self._line(f"Base Path: {paths.base}")
        self._line(f"Index Path: {paths.index}")
        self._line(f"Shard Path: {paths.shard}")
        self._line(f"Translog Path: {paths.translog}")

        latest = report.locate.latest
        if latest is not None:
            self._line()
            self._line(f"Latest Primary Term Directory: {latest.primary_term_path}")
            self._line(f"Latest Translog File: {latest.translog_path}")
            if report.checkpoint_exists:
                self._line(f"Corresponding Checkpoint File: {latest.checkpoint_path}")

        self._line()
        self._line(Text("Status: ").append_text(format_status(report.status, report.reason)))

        if report.checkpoint is not None:
            self._print_fields(report.checkpoint)

    def emit_checkpoint(self, source: str, checkpoint: Checkpoint) -> None:
        """Print a single checkpoint file's fields."""
        self._line(f"Checkpoint File: {source}")
        self._line(f"Format Version: {checkpoint.version}")
        self._print_fields(checkpoint)

    def _print_fields(self, checkpoint: Checkpoint) -> None:
        self._line()
        self._line("Translog Checkpoint Details:")
        self._line("=" * 26)
        for name, value in checkpoint.fields():
            self._line(f"{name}={value}")
