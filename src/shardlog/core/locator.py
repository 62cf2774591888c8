"""Latest translog generation lookup.

A shard's translog data directory holds one directory per primary term,
each holding generation files named ``translog-<gen>.tlog`` with a paired
``translog-<gen>.ckp`` checkpoint. The newest generation is the highest
generation inside the highest primary term, both compared numerically.

Selection is split into pure functions over StorageEntry listings so it
can be tested without storage; TranslogLocator drives them against a
StoragePort.
"""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING

from shardlog.core.exceptions import StorageError, StorageNotFoundError
from shardlog.core.models import LatestGeneration, LocateResult
from shardlog.core.path_utils import checkpoint_path_for


if TYPE_CHECKING:
    from collections.abc import Iterable

    from shardlog.core.models import StorageEntry
    from shardlog.core.ports import StoragePort


logger = logging.getLogger(__name__)

_PRIMARY_TERM_RE = re.compile(r"[0-9]+")
_TRANSLOG_FILE_RE = re.compile(r"translog-([0-9]+)\.tlog")

# File-name generations are parsed as signed 32-bit values
_MAX_GENERATION = 2**31 - 1

NO_TRANSLOG_DIR = "translog directory does not exist"
NO_PRIMARY_TERMS = "no primary-term directories"
NO_TRANSLOG_FILES = "no translog files"


def parse_primary_term(name: str) -> int | None:
    """Parse a primary-term directory name.

    Returns:
        The term, or None if the whole name is not a base-10 integer.
    """
    if _PRIMARY_TERM_RE.fullmatch(name) is None:
        return None
    return int(name)


def parse_generation(name: str) -> int | None:
    """Parse the generation out of a ``translog-<gen>.tlog`` file name.

    Returns:
        The generation, or None if the name does not follow the pattern.
        A digit group too large for a generation yields 0 rather than
        None, so such a file still counts as a candidate.
    """
    match = _TRANSLOG_FILE_RE.fullmatch(name)
    if match is None:
        return None
    generation = int(match.group(1))
    if generation > _MAX_GENERATION:
        logger.debug("Generation out of range in %s, treating as 0", name)
        return 0
    return generation


def select_latest_primary_term(
    entries: Iterable[StorageEntry],
) -> tuple[int, StorageEntry] | None:
    """Pick the primary-term directory with the highest numeric term.

    Files and directories whose names are not integers are ignored.
    Equal terms spelled differently ("7", "007") resolve to the
    lexicographically greatest name so the choice is stable.
    """
    candidates: list[tuple[int, StorageEntry]] = []
    for entry in entries:
        if not entry.is_dir:
            continue
        term = parse_primary_term(entry.name)
        if term is None:
            logger.debug("Skipping non-numeric directory %s", entry.path)
            continue
        candidates.append((term, entry))

    if not candidates:
        return None
    candidates.sort(key=lambda c: (c[0], c[1].name), reverse=True)
    return candidates[0]


def select_latest_generation(
    entries: Iterable[StorageEntry],
) -> tuple[int, StorageEntry] | None:
    """Pick the translog file with the highest generation.

    Directories and files not named ``translog-<digits>.tlog`` are ignored.
    """
    candidates: list[tuple[int, StorageEntry]] = []
    for entry in entries:
        if entry.is_dir:
            continue
        generation = parse_generation(entry.name)
        if generation is None:
            continue
        candidates.append((generation, entry))

    if not candidates:
        return None
    candidates.sort(key=lambda c: (c[0], c[1].name), reverse=True)
    return candidates[0]


class TranslogLocator:
    """Finds the newest translog generation under a translog data directory."""

    def __init__(self, storage: StoragePort) -> None:
        self._storage = storage

    def locate(self, translog_path: str) -> LocateResult:
        """Scan primary terms, then generations, and return the newest.

        Storage failures are logged and returned as FILESYSTEM_ERROR
        results instead of being raised. The paired checkpoint path is
        always filled in; whether it exists is for the caller to check.

        Args:
            translog_path: The shard's translog data directory.

        Returns:
            LocateResult with status FOUND, NOT_FOUND or FILESYSTEM_ERROR.
        """
        try:
            return self._locate(translog_path)
        except StorageNotFoundError as e:
            # Directory vanished between the existence check and a listing
            logger.info("Translog path disappeared during scan: %s", e.source)
            return LocateResult.not_found(NO_TRANSLOG_DIR)
        except StorageError as e:
            logger.error("Error finding latest translog file: %s", e)
            logger.debug("Storage failure detail", exc_info=True)
            return LocateResult.failed(str(e), cause=e)

    def _locate(self, translog_path: str) -> LocateResult:
        if not self._storage.exists(translog_path):
            logger.info("Translog directory does not exist: %s", translog_path)
            return LocateResult.not_found(NO_TRANSLOG_DIR)

        term_choice = select_latest_primary_term(
            self._storage.list_entries(translog_path)
        )
        if term_choice is None:
            logger.info("No primary term directories found in: %s", translog_path)
            return LocateResult.not_found(NO_PRIMARY_TERMS)

        primary_term, term_dir = term_choice
        logger.info("Latest primary term directory: %s", term_dir.path)

        try:
            term_entries = self._storage.list_entries(term_dir.path)
        except StorageNotFoundError:
            # Object stores have no empty directories
            term_entries = []
        generation_choice = select_latest_generation(term_entries)
        if generation_choice is None:
            logger.info("No translog files found in: %s", term_dir.path)
            return LocateResult.not_found(NO_TRANSLOG_FILES)

        generation, translog_file = generation_choice
        logger.info("Latest translog file: %s", translog_file.path)

        return LocateResult.found(
            LatestGeneration(
                primary_term=primary_term,
                primary_term_path=term_dir.path,
                generation=generation,
                translog_path=translog_file.path,
                checkpoint_path=checkpoint_path_for(translog_file.path),
            )
        )
