"""
Restore executor - rebuilds the original file or directory from a backup.

The artifact's suffix alone decides how it is restored:
- .tar.zstd / .tar.zst: archive unpacked into the output directory
- .bak: file copied back as <output>/<name>
- .bak.d: directory mirrored back as <output>/<name>

Deleting the artifact afterwards is a separate, explicitly confirmed step.
"""

import logging
import shutil
from pathlib import Path
from typing import Callable, Optional, Union

from localbak.models import RestoreOutcome
from .compression import decode
from .errors import (
    BackupIOError,
    InvalidArtifactError,
    InvalidPathError,
    NotFoundError,
    UnrecognizedFormatError,
)
from .mirror import copy_file, copy_tree
from .naming import ArtifactFormat, EntryKind, classify_artifact, entry_kind, strip_suffix

logger = logging.getLogger(__name__)


def _is_within(path: Path, directory: Path) -> bool:
    """Check whether path is directory itself or somewhere below it."""
    path = path.resolve()
    directory = directory.resolve()
    return path == directory or directory in path.parents


def _archive_target(artifact: Path, output_dir: Path) -> Path:
    """Where an archive's root entry lands; output_dir for a bare '.tar.zstd' name."""
    try:
        return output_dir / strip_suffix(artifact).name
    except InvalidPathError:
        return output_dir


def restore(artifact: Union[str, Path], output_dir: Union[str, Path]) -> Path:
    """
    Restore a backup artifact into a directory.

    Nothing is written unless the artifact and the output directory exist
    and the artifact's suffix matches what it is on disk.

    Args:
        artifact: Backup artifact (.bak, .bak.d, .tar.zstd or .tar.zst)
        output_dir: Existing directory to restore into

    Returns:
        Path of the restored file or directory

    Raises:
        NotFoundError: If the artifact or output directory does not exist
        UnrecognizedFormatError: If the artifact has no known backup suffix
        InvalidArtifactError: If the suffix implies a file but it is a directory, or vice versa
        InvalidPathError: If a .bak.d would be restored into itself
        CorruptArchiveError: If an archive cannot be unpacked
        BackupIOError: If copying or writing fails
    """
    artifact = Path(artifact)
    output_dir = Path(output_dir)

    kind = entry_kind(artifact)
    if kind is EntryKind.MISSING:
        raise NotFoundError(f"Backup does not exist: {artifact}")
    if entry_kind(output_dir) is not EntryKind.DIRECTORY:
        raise NotFoundError(f"Output directory does not exist: {output_dir}")

    artifact_format = classify_artifact(artifact)
    if artifact_format is ArtifactFormat.UNKNOWN:
        raise UnrecognizedFormatError(f"Unknown backup format: {artifact}")

    logger.info(f"Restoring from {artifact} ({artifact_format.value})")

    if artifact_format is ArtifactFormat.ARCHIVE:
        if kind is not EntryKind.FILE:
            raise InvalidArtifactError(f"Archive name but not an archive file: {artifact}")
        decode(artifact, output_dir)
        target = _archive_target(artifact, output_dir)

    elif artifact_format is ArtifactFormat.PLAIN_FILE:
        if kind is not EntryKind.FILE:
            raise InvalidArtifactError(f".{artifact_format.value} name but not a file: {artifact}")
        target = output_dir / strip_suffix(artifact).name
        copy_file(artifact, target)

    else:
        if kind is not EntryKind.DIRECTORY:
            raise InvalidArtifactError(f".{artifact_format.value} name but not a directory: {artifact}")
        if _is_within(output_dir, artifact):
            raise InvalidPathError(f"Output directory {output_dir} is inside the backup {artifact}")
        target = output_dir / strip_suffix(artifact).name
        copy_tree(artifact, target)

    logger.info(f"Restored {target}")
    return target


def delete_artifact(artifact: Union[str, Path]):
    """
    Remove a backup artifact (a file or a mirrored directory).

    Raises:
        NotFoundError: If the artifact does not exist
        BackupIOError: If removal fails
    """
    artifact = Path(artifact)
    kind = entry_kind(artifact)

    try:
        if kind is EntryKind.MISSING:
            raise NotFoundError(f"Backup does not exist: {artifact}")
        elif kind is EntryKind.DIRECTORY:
            shutil.rmtree(artifact)
        else:
            artifact.unlink()
    except OSError as e:
        raise BackupIOError(f"Failed to delete {artifact}: {e}")

    logger.info(f"Deleted backup {artifact}")


class RestoreExecutor:
    """
    Restores one artifact and optionally deletes it afterwards.
    """

    def __init__(
        self,
        artifact: Union[str, Path],
        output_dir: Union[str, Path],
        delete: bool = False,
        confirm: Optional[Callable[[], bool]] = None
    ):
        """
        Initialize restore executor.

        Args:
            artifact: Backup artifact to restore
            output_dir: Existing directory to restore into
            delete: Delete the artifact after a successful restore
            confirm: Called once before deleting; deletion only happens if it
                returns True. Without it, nothing is deleted.
        """
        self.artifact = Path(artifact)
        self.output_dir = Path(output_dir)
        self.delete = delete
        self.confirm = confirm

    def execute(self) -> RestoreOutcome:
        """
        Restore the artifact, then run the confirmed delete step.

        Returns:
            RestoreOutcome for the artifact

        Raises:
            BackupError: If the restore fails; the artifact is left untouched
        """
        outcome = RestoreOutcome(artifact_path=self.artifact, output_dir=self.output_dir)
        outcome.restored_path = restore(self.artifact, self.output_dir)

        if self.delete:
            if self.confirm is not None and self.confirm():
                delete_artifact(self.artifact)
                outcome.deleted = True
            else:
                logger.info(f"Keeping {self.artifact}")

        return outcome


def execute_restore(
    artifact: Union[str, Path],
    output_dir: Union[str, Path],
    delete: bool = False,
    confirm: Optional[Callable[[], bool]] = None
) -> RestoreOutcome:
    """
    Restore an artifact, optionally deleting it once confirmed.

    Returns:
        RestoreOutcome for the artifact
    """
    executor = RestoreExecutor(artifact, output_dir, delete, confirm)
    return executor.execute()
