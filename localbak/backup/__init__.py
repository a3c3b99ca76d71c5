"""
Backup module for localbak.

This module handles the core backup functionality including:
- Artifact naming (.bak, .bak.d, .tar.zstd)
- Directory mirroring
- Compression (zstd compressed tar archives)
- Backup and restore execution
"""

from .executor import BackupExecutor, backup_path, execute_backup
from .restore import RestoreExecutor, restore, delete_artifact, execute_restore
from .compression import encode, decode
from .mirror import copy_tree
from .errors import BackupError

__all__ = [
    'BackupExecutor',
    'backup_path',
    'execute_backup',
    'RestoreExecutor',
    'restore',
    'delete_artifact',
    'execute_restore',
    'encode',
    'decode',
    'copy_tree',
    'BackupError'
]
