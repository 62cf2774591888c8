"""CLI for shardlog."""

# Import commands to register them with the app
# These imports have side effects (registering commands with @app.command())
from shardlog.cli.commands import checkpoint as _checkpoint_module  # noqa: F401
from shardlog.cli.main import app, main


__all__ = ["app", "main"]
