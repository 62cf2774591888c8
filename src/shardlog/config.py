"""Configuration utilities for shardlog.

This module resolves where the repository lives from command-line settings.
"""

from __future__ import annotations

from pathlib import Path

from shardlog.core.exceptions import ConfigurationError


# Directory next to the node's data directory that holds the repository
DEFAULT_REPO_DIR = "repo"


def clean_data_path(data_path: str) -> str:
    """Normalize a ``path.data`` setting value to a single path.

    The setting may be rendered as a list ("[/a/data]" or "[/a, /b]");
    brackets and whitespace are stripped and the first entry is used.
    """
    cleaned = data_path.replace("[", "").replace("]", "").strip()
    return cleaned.split(",", 1)[0].strip()


def resolve_repository_root(
    repo_path: str | None = None,
    data_path: str | None = None,
) -> str:
    """Resolve the repository root from an explicit path or the data path.

    Args:
        repo_path: Explicit repository root (local path or URI). Wins if set.
        data_path: The node's data path. The repository is assumed to be a
            sibling directory named "repo".

    Returns:
        The repository root as a string.

    Raises:
        ConfigurationError: If neither value is usable.

    Example:
        >>> resolve_repository_root(data_path="[/srv/node/data]")
        '/srv/node/repo'
    """
    if repo_path:
        return repo_path

    if data_path:
        cleaned = clean_data_path(data_path)
        if cleaned:
            return str(Path(cleaned).parent / DEFAULT_REPO_DIR)

    raise ConfigurationError(
        "Repository location is not configured: pass --repo-path or --data-path"
    )
