"""
Backup executor - creates one backup artifact per source path.

Workflow per path:
1. Resolve the source to a file or directory (anything else is refused)
2. Derive the artifact path from the source name
3. Copy (.bak / .bak.d) or archive (.tar.zstd) the source
4. Clean up after a failed copy or archive, keeping any earlier backup
5. Record the outcome (status: success/failed)

Files and archives are written to a '.partial' sibling and only replace the
artifact once complete. Paths are processed in order and a failure never stops
the remaining paths.
"""

import logging
import os
import shutil
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterable, List, Union

from localbak.models import BackupOutcome
from .compression import encode, get_archive_size
from .errors import BackupError, BackupIOError, NotFoundError, UnsupportedEntryError
from .mirror import copy_file, copy_tree
from .naming import (
    ARCHIVE_SUFFIX,
    BAK_DIR_SUFFIX,
    BAK_SUFFIX,
    EntryKind,
    derive_artifact_path,
    entry_kind,
)

logger = logging.getLogger(__name__)

PARTIAL_SUFFIX = '.partial'


def _discard_partial(path: Path):
    """Remove what a failed backup left behind at path."""
    kind = entry_kind(path)

    try:
        if kind is EntryKind.FILE:
            path.unlink()
        elif kind is EntryKind.DIRECTORY:
            shutil.rmtree(path)
        else:
            return
        logger.info(f"Removed incomplete backup {path}")
    except OSError as e:
        logger.warning(f"Failed to remove incomplete backup {path}: {e}")


def _write_file_artifact(source: Path, artifact: Path, compress: bool):
    """Write a .bak copy or an archive beside artifact, then move it into place."""
    partial = artifact.with_name(artifact.name + PARTIAL_SUFFIX)

    try:
        if compress:
            encode(partial, [(source.name, source)])
        else:
            copy_file(source, partial)

        try:
            os.replace(partial, artifact)
        except OSError as e:
            raise BackupIOError(f"Failed to move {partial} to {artifact}: {e}")
    except BackupError:
        if entry_kind(partial) is EntryKind.FILE:
            _discard_partial(partial)
        raise


def backup_path(source: Union[str, Path], compress: bool = False) -> Path:
    """
    Back up a single file or directory next to itself.

    A failed backup never removes an earlier artifact at the same path.

    Args:
        source: Existing file or directory
        compress: Create a .tar.zstd archive instead of a plain copy

    Returns:
        Path of the created artifact

    Raises:
        NotFoundError: If source does not exist
        UnsupportedEntryError: If source is neither a plain file nor a directory
        InvalidPathError: If source has no file name
        BackupIOError: If copying or archiving fails
    """
    source = Path(source)
    kind = entry_kind(source)

    if kind is EntryKind.MISSING:
        raise NotFoundError(f"Path does not exist: {source}")
    if kind is EntryKind.UNSUPPORTED:
        raise UnsupportedEntryError(f"Neither a file nor a directory, refusing to back up: {source}")

    if compress:
        artifact = derive_artifact_path(source, ARCHIVE_SUFFIX)
    elif kind is EntryKind.FILE:
        artifact = derive_artifact_path(source, BAK_SUFFIX)
    else:
        artifact = derive_artifact_path(source, BAK_DIR_SUFFIX)

    if compress or kind is EntryKind.FILE:
        _write_file_artifact(source, artifact, compress)
        return artifact

    # Mirrors are refreshed in place
    existed_before = entry_kind(artifact) is not EntryKind.MISSING
    try:
        copy_tree(source, artifact)
    except BackupError:
        if not existed_before:
            _discard_partial(artifact)
        raise

    return artifact


class BackupExecutor:
    """
    Backs up a list of source paths, one artifact each.
    """

    def __init__(self, paths: Iterable[Union[str, Path]], compress: bool = False):
        """
        Initialize backup executor.

        Args:
            paths: Files or directories to back up
            compress: Create .tar.zstd archives instead of plain copies
        """
        self.paths = [Path(p) for p in paths]
        self.compress = compress
        self.outcomes = []

    def execute(self) -> List[BackupOutcome]:
        """
        Back up every path in order.

        Returns:
            One BackupOutcome per path, in input order
        """
        self.outcomes = []

        for path in self.paths:
            self.outcomes.append(self._backup_one(path))

        failed = sum(1 for outcome in self.outcomes if not outcome.succeeded)
        logger.info(f"Backup finished: {len(self.outcomes) - failed} succeeded, {failed} failed")

        return self.outcomes

    def _backup_one(self, path: Path) -> BackupOutcome:
        outcome = BackupOutcome(
            source=path,
            compress=self.compress,
            started_at=datetime.now(timezone.utc)
        )

        self._log(outcome, f"Backing up {path} (compress: {self.compress})")

        try:
            outcome.artifact_path = backup_path(path, self.compress)
            outcome.status = 'success'

            if self.compress:
                size = get_archive_size(outcome.artifact_path)
                self._log(outcome, f"Archive created: {outcome.artifact_path.name} ({size / 1024 / 1024:.2f} MB)")
            else:
                self._log(outcome, f"Backup written: {outcome.artifact_path}")

        except BackupError as e:
            outcome.status = 'failed'
            outcome.error_message = str(e)
            self._log(outcome, f"Backup failed: {e}", level=logging.ERROR)

        finally:
            outcome.completed_at = datetime.now(timezone.utc)

        return outcome

    def _log(self, outcome: BackupOutcome, message: str, level: int = logging.INFO):
        """
        Add a timestamped log message to an outcome and the module logger.

        Args:
            outcome: Outcome the message belongs to
            message: Log message
            level: logging level for the module logger
        """
        timestamp = datetime.now(timezone.utc).strftime('%Y-%m-%d %H:%M:%S UTC')
        outcome.logs.append(f"[{timestamp}] {message}")
        logger.log(level, message)


def execute_backup(paths: Iterable[Union[str, Path]], compress: bool = False) -> List[BackupOutcome]:
    """
    Back up a list of paths.

    Args:
        paths: Files or directories to back up
        compress: Create .tar.zstd archives instead of plain copies

    Returns:
        One BackupOutcome per path
    """
    executor = BackupExecutor(paths, compress)
    return executor.execute()
