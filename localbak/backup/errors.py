"""
Exceptions raised by the backup and restore engines.

Every failure surfaces as a subclass of BackupError so callers can
report a whole batch with a single except clause.
"""


class BackupError(Exception):
    """Base class for all backup/restore failures."""
    pass


class NotFoundError(BackupError):
    """Raised when a source, artifact or output directory does not exist."""
    pass


class InvalidPathError(BackupError):
    """Raised when no file name can be derived from a path."""
    pass


class InvalidArtifactError(BackupError):
    """Raised when an artifact's suffix disagrees with what is on disk."""
    pass


class UnrecognizedFormatError(BackupError):
    """Raised when a path carries none of the known backup suffixes."""
    pass


class CorruptArchiveError(BackupError):
    """Raised when an archive cannot be decompressed or unpacked."""
    pass


class BackupIOError(BackupError):
    """Raised when reading, writing or copying fails."""
    pass


class UnsupportedEntryError(BackupError):
    """Raised when a source is neither a plain file nor a directory."""
    pass
