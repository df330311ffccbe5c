"""Pytest configuration and shared fixtures."""

from __future__ import annotations

import logging
from collections.abc import Generator
from pathlib import Path

import pytest

from helpers import TreeBuilder, build_tree
from safari_scanner.types import ScanTarget


@pytest.fixture
def make_tree() -> TreeBuilder:
    """Factory fixture building a directory tree from a size mapping."""
    return build_tree


@pytest.fixture
def safari_home(tmp_path: Path) -> Path:
    """A fake home directory holding a small Safari data layout."""
    home = tmp_path / "home"
    _ = build_tree(
        home / "Library" / "Cookies",
        {"Cookies.binarycookies": 100, "HSTS.plist": 200},
    )
    _ = build_tree(
        home / "Library" / "Caches" / "com.apple.Safari",
        {"Cache.db": 300, "fsCachedData/A1": 50, "fsCachedData/B2": 50},
    )
    _ = build_tree(
        home / "Library" / "Safari",
        {"History.db": 400, "LocalStorage/https_a.localstorage": 10},
    )
    return home


@pytest.fixture
def scan_targets(tmp_path: Path) -> tuple[ScanTarget, ...]:
    """Two targets with known sizes: alpha (300 bytes, 2 files) and beta (50 bytes, 1 file)."""
    alpha = build_tree(tmp_path / "alpha", {"a.bin": 100, "nested/b.bin": 200})
    beta = build_tree(tmp_path / "beta", {"c.bin": 50})
    return (
        ScanTarget(name="alpha", path=alpha, label="Alpha data", icon="🅰"),
        ScanTarget(name="beta", path=beta, label="Beta data", icon="🅱"),
    )


@pytest.fixture(autouse=True)
def _restore_root_logger() -> Generator[None, None, None]:
    """Undo handler changes made by configure_logging during a test."""
    root_logger = logging.getLogger()
    handlers = list(root_logger.handlers)
    level = root_logger.level
    yield
    for handler in list(root_logger.handlers):
        if handler not in handlers:
            root_logger.removeHandler(handler)
            handler.close()
    for handler in handlers:
        if handler not in root_logger.handlers:
            root_logger.addHandler(handler)
    root_logger.setLevel(level)
