"""Filesystem operations module for directory traversal and size accumulation."""

from __future__ import annotations

from .scanner import DirectoryScanner
from .size_calculator import SizeCalculator

__all__ = [
    "DirectoryScanner",
    "SizeCalculator",
]
