"""Report sinks rendering inspection results."""

from shardlog.report.json_report import JsonReportSink
from shardlog.report.rich_report import RichReportSink


__all__ = ["JsonReportSink", "RichReportSink"]
