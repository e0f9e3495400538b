"""Filename pattern matching for directory imports."""

from __future__ import annotations

from pathlib import Path


def matches_pattern(filename: str, pattern: str) -> bool:
    """Match a filename against a simple pattern.

    Supported forms: "*" or "*.*" (anything), "*.ext" (extension,
    case-insensitive), "prefix*", "*suffix", otherwise an exact name.

    Not Path.glob: glob is case-sensitive on POSIX, so "*.json" would miss
    "DUMP.JSON", and it accepts character classes these patterns do not.
    """
    if pattern in ("*", "*.*"):
        return True

    if pattern.startswith("*."):
        if "." not in filename:
            return False
        return filename.rsplit(".", 1)[1].lower() == pattern[2:].lower()

    if pattern.endswith("*"):
        return filename.startswith(pattern[:-1])

    if pattern.startswith("*"):
        return filename.endswith(pattern[1:])

    return filename == pattern


def list_matching_files(directory: Path, pattern: str) -> list[Path]:
    """Regular files directly inside directory that match pattern, sorted by name."""
    return sorted(
        (entry for entry in directory.iterdir() if entry.is_file() and matches_pattern(entry.name, pattern)),
        key=lambda p: p.name,
    )
