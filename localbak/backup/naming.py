"""
Artifact naming for backups.

A backup artifact is identified purely by the suffix appended to the
original name:

- name.bak: plain copy of a single file
- name.bak.d: mirrored directory tree
- name.tar.zstd / name.tar.zst: zstd compressed tar archive
"""

import enum
import logging
import os
import stat
from pathlib import Path
from typing import Union

from .errors import InvalidPathError, UnrecognizedFormatError

logger = logging.getLogger(__name__)

BAK_SUFFIX = '.bak'
BAK_DIR_SUFFIX = '.bak.d'
ARCHIVE_SUFFIX = '.tar.zstd'


class EntryKind(enum.Enum):
    """Kind of filesystem entry a backup source resolves to."""
    FILE = 'file'
    DIRECTORY = 'directory'
    UNSUPPORTED = 'unsupported'
    MISSING = 'missing'


class ArtifactFormat(enum.Enum):
    """Format of a backup artifact, as implied by its suffix."""
    PLAIN_FILE = 'bak'
    PLAIN_DIR = 'bak.d'
    ARCHIVE = 'tar.zstd'
    UNKNOWN = 'unknown'


# Longest suffixes first so '.tar.zstd' wins over '.tar.zst'
# and '.bak.d' is never read as '.bak'
SUFFIX_TABLE = (
    ('.tar.zstd', ArtifactFormat.ARCHIVE),
    ('.tar.zst', ArtifactFormat.ARCHIVE),
    (BAK_DIR_SUFFIX, ArtifactFormat.PLAIN_DIR),
    (BAK_SUFFIX, ArtifactFormat.PLAIN_FILE),
)


def entry_kind(path: Union[str, Path]) -> EntryKind:
    """
    Resolve what kind of filesystem entry a path is, without following symlinks.

    Args:
        path: Path to inspect

    Returns:
        EntryKind for the path
    """
    try:
        mode = os.lstat(path).st_mode
    except FileNotFoundError:
        return EntryKind.MISSING

    if stat.S_ISREG(mode):
        return EntryKind.FILE
    if stat.S_ISDIR(mode):
        return EntryKind.DIRECTORY
    return EntryKind.UNSUPPORTED


def _match_suffix(name: str):
    for suffix, artifact_format in SUFFIX_TABLE:
        if name.endswith(suffix):
            return suffix, artifact_format
    return None, ArtifactFormat.UNKNOWN


def has_backup_suffix(path: Union[str, Path]) -> bool:
    """Check whether a path already ends in one of the known backup suffixes."""
    return _match_suffix(Path(path).name)[1] is not ArtifactFormat.UNKNOWN


def derive_artifact_path(source: Union[str, Path], suffix: str) -> Path:
    """
    Build the artifact path for a source by appending a suffix to its file name.

    The parent directory is preserved; only the final path component changes.
    A source that already carries a backup suffix is allowed and gets a second
    one, but a warning is logged.

    Args:
        source: Path being backed up
        suffix: Suffix to append (e.g. '.bak')

    Returns:
        Path of the artifact

    Raises:
        InvalidPathError: If the source has no final path component
    """
    source = Path(source)

    if source.name in ('', '.', '..'):
        raise InvalidPathError(f"Path has no file name: {source}")

    if has_backup_suffix(source):
        logger.warning(f"{source} already looks like a backup, creating {source.name}{suffix}")

    return source.with_name(source.name + suffix)


def classify_artifact(path: Union[str, Path]) -> ArtifactFormat:
    """
    Classify an artifact by its suffix.

    Args:
        path: Artifact path

    Returns:
        ArtifactFormat, ArtifactFormat.UNKNOWN if no suffix matches
    """
    return _match_suffix(Path(path).name)[1]


def strip_suffix(path: Union[str, Path]) -> Path:
    """
    Recover the original path from an artifact path.

    Args:
        path: Artifact path

    Returns:
        Path with the backup suffix removed

    Raises:
        UnrecognizedFormatError: If the path has no known backup suffix
        InvalidPathError: If nothing is left once the suffix is removed
    """
    path = Path(path)
    suffix, artifact_format = _match_suffix(path.name)

    if artifact_format is ArtifactFormat.UNKNOWN:
        raise UnrecognizedFormatError(f"Not a recognized backup: {path}")

    original_name = path.name[:-len(suffix)]
    if not original_name:
        raise InvalidPathError(f"Backup name has nothing before its suffix: {path}")

    return path.with_name(original_name)
