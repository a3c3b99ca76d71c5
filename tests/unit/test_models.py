"""
Unit tests for outcome models (localbak/models.py).
"""

from pathlib import Path

from localbak.models import BackupOutcome, RestoreOutcome


class TestBackupOutcome:
    """Test BackupOutcome model."""

    def test_defaults(self):
        """Test a new outcome is running with no artifact."""
        outcome = BackupOutcome(source=Path('data'))

        assert outcome.status == 'running'
        assert outcome.compress is False
        assert outcome.artifact_path is None
        assert outcome.logs == []
        assert not outcome.succeeded

    def test_succeeded(self):
        """Test succeeded follows status."""
        outcome = BackupOutcome(source=Path('data'), status='success', artifact_path=Path('data.bak.d'))

        assert outcome.succeeded

    def test_logs_not_shared(self):
        """Test each outcome gets its own log list."""
        first = BackupOutcome(source=Path('a'))
        second = BackupOutcome(source=Path('b'))
        first.logs.append('entry')

        assert second.logs == []

    def test_repr(self):
        """Test string representation."""
        outcome = BackupOutcome(source=Path('data'), status='failed')

        assert repr(outcome) == '<BackupOutcome data status=failed>'


class TestRestoreOutcome:
    """Test RestoreOutcome model."""

    def test_defaults_and_repr(self):
        """Test defaults and string representation."""
        outcome = RestoreOutcome(artifact_path=Path('data.bak'), output_dir=Path('out'))

        assert outcome.restored_path is None
        assert outcome.deleted is False
        assert repr(outcome) == '<RestoreOutcome data.bak -> None deleted=False>'
