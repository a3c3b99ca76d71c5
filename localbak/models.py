from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import List, Optional


@dataclass
class BackupOutcome:
    """Result of backing up one source path"""
    source: Path
    compress: bool = False
    status: str = 'running'  # running, success, failed
    artifact_path: Optional[Path] = None
    error_message: Optional[str] = None
    started_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    logs: List[str] = field(default_factory=list)

    @property
    def succeeded(self) -> bool:
        return self.status == 'success'

    def __repr__(self):
        return f'<BackupOutcome {self.source} status={self.status}>'


@dataclass
class RestoreOutcome:
    """Result of restoring one artifact"""
    artifact_path: Path
    output_dir: Path
    restored_path: Optional[Path] = None
    deleted: bool = False

    def __repr__(self):
        return f'<RestoreOutcome {self.artifact_path} -> {self.restored_path} deleted={self.deleted}>'
