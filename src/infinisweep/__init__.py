"""Deterministic infinite-grid minesweeper."""

__version__ = "0.1.0"
