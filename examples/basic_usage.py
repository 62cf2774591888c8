"""Basic single-shard inspection example.

This example shows the simplest usage pattern: describe the shard,
create an inspector, and inspect it. The library finds the newest
translog generation and decodes its checkpoint.
"""

from shardlog import (
    FilesystemStorage,
    RepositoryLayout,
    RichReportSink,
    ShardInspector,
)


# Describe the shard inside the repository
layout = RepositoryLayout(
    root="/var/lib/opensearch/repo",
    index_uuid="zX1y9Q3dR0u4",
    shard_id="0",
    index_name="logs-2024",
)

# Option 1: Manual wiring (full control over adapters)
# Use this when the repository is always on local disk
inspector = ShardInspector(storage=FilesystemStorage(), sink=RichReportSink())

# Option 2: Factory method (recommended for most cases)
# Wires up RouterStorage, so s3:// and file:// roots work too
# inspector = ShardInspector.from_defaults(sink=RichReportSink())

# Inspect prints the report and also returns it
report = inspector.inspect(layout)

if report.checkpoint is not None:
    for name, value in report.checkpoint.fields():
        print(f"{name}={value}")
else:
    print(f"{report.status}: {report.reason}")
