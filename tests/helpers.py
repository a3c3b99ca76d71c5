"""Helpers shared by the unit tests."""

import random
from pathlib import Path


def random_bytes(rng: random.Random, size: int) -> bytes:
    return bytes(rng.getrandbits(8) for _ in range(size))


def snapshot_tree(root: Path) -> dict:
    """Map every file and directory under root (relative path) to its bytes or None."""
    snapshot = {}
    for path in sorted(root.rglob('*')):
        relative = path.relative_to(root).as_posix()
        snapshot[relative] = path.read_bytes() if path.is_file() else None
    return snapshot
