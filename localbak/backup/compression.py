"""
Compressed archives for backups.

Archives are tar streams wrapped in a single zstd frame:

    file <- zstd stream writer <- tar stream ('w|')

and decoded by the reverse chain. The compression level is fixed to the
zstandard library default.
"""

import logging
import os
import tarfile
from pathlib import Path
from typing import Iterable, List, Tuple, Union

import zstandard

from .errors import BackupIOError, CorruptArchiveError, NotFoundError
from .naming import EntryKind, entry_kind

logger = logging.getLogger(__name__)


def _skip_special(tarinfo: tarfile.TarInfo):
    """tarfile filter: keep files and directories, drop everything else."""
    if tarinfo.isreg() or tarinfo.isdir() or tarinfo.islnk():
        return tarinfo

    logger.warning(f"Neither a file nor a directory, skipping: {tarinfo.name}")
    return None


def _add_entry(tar: tarfile.TarFile, name: str, path: Path):
    """
    Append one (name, path) pair to an open tar stream.

    An empty name on a directory adds the directory's children at the
    archive root instead of the directory itself.
    """
    kind = entry_kind(path)

    if kind is EntryKind.MISSING:
        raise NotFoundError(f"Path does not exist: {path}")

    if kind is EntryKind.UNSUPPORTED:
        logger.warning(f"Neither a file nor a directory, skipping: {path}")
        return

    if kind is EntryKind.DIRECTORY and not name:
        for child in sorted(path.iterdir()):
            tar.add(child, arcname=child.name, recursive=True, filter=_skip_special)
        return

    tar.add(path, arcname=name or path.name, recursive=True, filter=_skip_special)


def encode(destination: Union[str, Path], entries: Iterable[Tuple[str, Union[str, Path]]]) -> Path:
    """
    Write a zstd compressed tar archive.

    The tar end-of-archive marker is written first, then the zstd frame is
    finished, then the file is closed. If anything fails the marker is never
    written and the destination may be left incomplete; the caller should
    delete it.

    Args:
        destination: Archive file to create (overwritten if present)
        entries: (name, path) pairs; a file is stored as 'name', a directory
            as a tree rooted at 'name'

    Returns:
        Path to the archive

    Raises:
        NotFoundError: If an entry path does not exist
        BackupIOError: If reading, compressing or writing fails
    """
    destination = Path(destination)
    compressor = zstandard.ZstdCompressor()

    try:
        with open(destination, 'wb') as fh:
            with compressor.stream_writer(fh, closefd=False) as writer:
                with tarfile.open(fileobj=writer, mode='w|') as tar:
                    for name, path in entries:
                        logger.debug(f"Adding {path} as '{name}' to {destination}")
                        _add_entry(tar, name, Path(path))
    except (OSError, zstandard.ZstdError) as e:
        raise BackupIOError(f"Failed to create archive {destination}: {e}")

    return destination


def _open_members(source: Path, handle):
    """Run handle(tar) over a decompressing tar stream read from source."""
    if not source.is_file():
        raise NotFoundError(f"Archive not found: {source}")

    decompressor = zstandard.ZstdDecompressor()

    try:
        with open(source, 'rb') as fh:
            with decompressor.stream_reader(fh, closefd=False) as reader:
                with tarfile.open(fileobj=reader, mode='r|') as tar:
                    return handle(tar)
    except (zstandard.ZstdError, tarfile.TarError) as e:
        raise CorruptArchiveError(f"Corrupt archive {source}: {e}")
    except OSError as e:
        raise BackupIOError(f"Failed to read archive {source}: {e}")


def decode(source: Union[str, Path], target_directory: Union[str, Path]) -> Path:
    """
    Unpack a zstd compressed tar archive into a directory.

    Members are recreated relative to target_directory. Where the running
    interpreter supports it, tarfile's 'data' filter rejects absolute paths
    and links that would land outside target_directory.

    Args:
        source: Archive file
        target_directory: Existing directory to unpack into

    Returns:
        target_directory

    Raises:
        NotFoundError: If the archive does not exist
        CorruptArchiveError: If the zstd stream or the tar structure is malformed
        BackupIOError: If reading or writing fails
    """
    source = Path(source)
    target_directory = Path(target_directory)

    def _extract(tar):
        if hasattr(tarfile, 'data_filter'):
            tar.extractall(target_directory, filter='data')
        else:
            tar.extractall(target_directory)

    _open_members(source, _extract)
    return target_directory


def list_archive(source: Union[str, Path]) -> List[str]:
    """
    List member names of an archive without extracting it.

    Raises:
        NotFoundError, CorruptArchiveError, BackupIOError: As for decode()
    """
    return _open_members(Path(source), lambda tar: [member.name for member in tar])


def get_archive_size(archive_path: Union[str, Path]) -> int:
    """
    Get the size of an archive file in bytes.

    Args:
        archive_path: Path to the archive file

    Returns:
        File size in bytes

    Raises:
        NotFoundError: If the file doesn't exist
        BackupIOError: If it cannot be accessed
    """
    try:
        return os.path.getsize(archive_path)
    except FileNotFoundError:
        raise NotFoundError(f"Archive not found: {archive_path}")
    except OSError as e:
        raise BackupIOError(f"Failed to get archive size: {e}")
