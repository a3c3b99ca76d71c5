"""
Shared pytest fixtures for localbak tests.

This module provides fixtures for:
- Temporary files and nested directory trees with random content
- Output directories for restores
- Sample archives
- Resetting package logging between tests
"""

import logging
import random

import pytest

from localbak.backup.compression import encode
from tests.helpers import random_bytes


@pytest.fixture(autouse=True)
def reset_package_logging():
    """Drop handlers configure_logging() attached during a test."""
    yield
    logger = logging.getLogger('localbak')
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def temp_files(tmp_path):
    """
    Create temporary test files and directories.

    Creates:
    - test_file1.txt
    - test_file2.log
    - nested/test_file3.txt
    """
    (tmp_path / 'test_file1.txt').write_text('Test content 1')
    (tmp_path / 'test_file2.log').write_text('Test log content')

    nested_dir = tmp_path / 'nested'
    nested_dir.mkdir()
    (nested_dir / 'test_file3.txt').write_text('Nested test content')

    return tmp_path


@pytest.fixture
def nested_tree(tmp_path):
    """
    Create a directory tree with random binary content.

    Creates:
    - ichi/{foo,bar,qux}
    - ichi/ni/{foo,bar,qux}
    - ichi/ni/san/{foo,bar,qux}
    - ichi/empty/ (no files)
    """
    rng = random.Random(133719)
    root = tmp_path / 'src' / 'ichi'
    dirs = [root, root / 'ni', root / 'ni' / 'san']

    for directory in dirs:
        directory.mkdir(parents=True)
        for name in ('foo', 'bar', 'qux'):
            (directory / name).write_bytes(random_bytes(rng, rng.randint(16, 4096)))

    (root / 'empty').mkdir()

    return root


@pytest.fixture
def output_dir(tmp_path):
    """Empty directory to restore into."""
    out = tmp_path / 'out'
    out.mkdir()
    return out


@pytest.fixture
def sample_archive(tmp_path):
    """
    Create a sample .tar.zstd archive of a small directory.
    """
    test_dir = tmp_path / 'test_data'
    test_dir.mkdir()
    (test_dir / 'file1.txt').write_text('Content 1')
    (test_dir / 'file2.txt').write_text('Content 2')

    archive_path = tmp_path / 'test_data.tar.zstd'
    encode(archive_path, [('test_data', test_dir)])

    return archive_path
