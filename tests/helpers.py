"""Helpers shared across the test suite."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from pathlib import Path

type TreeBuilder = Callable[[Path, Mapping[str, int]], Path]


def build_tree(root: Path, files: Mapping[str, int]) -> Path:
    """Create files of the given sizes below ``root``.

    Keys are paths relative to ``root``; parent directories are created as
    needed. A key ending in ``/`` creates an empty directory.
    """
    root.mkdir(parents=True, exist_ok=True)
    for relative, size in files.items():
        target = root / relative
        if relative.endswith("/"):
            target.mkdir(parents=True, exist_ok=True)
            continue
        target.parent.mkdir(parents=True, exist_ok=True)
        _ = target.write_bytes(b"x" * size)
    return root
