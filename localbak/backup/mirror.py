"""
Uncompressed copies of files and directory trees.

Used for '.bak' and '.bak.d' backups and for restoring them.
"""

import logging
import os
import shutil
from pathlib import Path
from typing import List, Union

from .errors import BackupIOError
from .naming import EntryKind, entry_kind

logger = logging.getLogger(__name__)


def copy_file(src: Union[str, Path], dst: Union[str, Path]) -> Path:
    """
    Copy a single file's bytes (and metadata) to dst, overwriting it.

    dst is always the file to write, never a directory to copy into.

    Args:
        src: File to copy
        dst: Destination file path

    Returns:
        Destination path

    Raises:
        BackupIOError: If dst is a directory or the copy fails
    """
    if entry_kind(dst) is EntryKind.DIRECTORY:
        raise BackupIOError(f"Failed to copy {src} to {dst}: destination is a directory")

    try:
        shutil.copyfile(src, dst)
        shutil.copystat(src, dst)
    except OSError as e:
        raise BackupIOError(f"Failed to copy {src} to {dst}: {e}")
    return Path(dst)


def copy_tree(src: Union[str, Path], dst: Union[str, Path]) -> List[Path]:
    """
    Recursively mirror a directory tree into dst.

    dst and any missing parents are created. Regular files are copied,
    directories are recursed into, and anything else (symlinks, devices,
    sockets) is skipped with a warning. Running it again over an existing
    mirror overwrites files in place.

    Args:
        src: Directory to mirror
        dst: Destination directory

    Returns:
        List of source paths that were skipped

    Raises:
        BackupIOError: If a directory cannot be read or a file cannot be copied
    """
    src = Path(src)
    dst = Path(dst)
    skipped = []

    try:
        dst.mkdir(parents=True, exist_ok=True)
        entries = list(os.scandir(src))
    except OSError as e:
        raise BackupIOError(f"Failed to mirror {src} to {dst}: {e}")

    for entry in entries:
        target = dst / entry.name

        if entry.is_dir(follow_symlinks=False):
            skipped.extend(copy_tree(entry.path, target))
        elif entry.is_file(follow_symlinks=False):
            copy_file(entry.path, target)
        else:
            logger.warning(f"Neither a file nor a directory, skipping: {entry.path}")
            skipped.append(Path(entry.path))

    return skipped
