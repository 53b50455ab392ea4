"""
Constants Module

Contains application constants:
- Supported video extensions
- Scanner and watcher timing defaults
- Synthetic series naming
"""

from __future__ import annotations

from pathlib import Path
from typing import FrozenSet, Iterable, Optional

# Supported video extensions (compared lower-case)
SUPPORTED_VIDEO_EXTENSIONS: FrozenSet[str] = frozenset({
    ".mkv", ".mp4", ".avi", ".m4v", ".mov", ".wmv",
})

# Quiet window before a burst of file events turns into one rescan
SCAN_DEBOUNCE_DELAY_MS = 3000

# Series that collects loose video files at a library root
UNSORTED_SERIES_NAME = "Unsorted"

DEFAULT_SEASON_NUMBER = 1


def normalize_extensions(extensions: Optional[Iterable[str]]) -> FrozenSet[str]:
    """Lower-case and dot-prefix a configured extension list."""
    if not extensions:
        return SUPPORTED_VIDEO_EXTENSIONS
    result = set()
    for ext in extensions:
        ext = str(ext).strip().lower()
        if not ext:
            continue
        result.add(ext if ext.startswith(".") else f".{ext}")
    return frozenset(result) or SUPPORTED_VIDEO_EXTENSIONS


def is_supported_video(
    path: str | Path,
    extensions: FrozenSet[str] = SUPPORTED_VIDEO_EXTENSIONS,
) -> bool:
    """Check whether *path* has a supported video extension."""
    return Path(path).suffix.lower() in extensions
