"""
Folder Classifier Module

Maps a folder name to the episode type of the files inside it.
"""

from __future__ import annotations

import re
from typing import Dict, List, Optional, Pattern, Tuple

from ...domain.models import EpisodeType

# Exact names, compared case-insensitively
KNOWN_FOLDER_NAMES: Dict[str, EpisodeType] = {
    "special": EpisodeType.SPECIAL,
    "specials": EpisodeType.SPECIAL,
    "ova": EpisodeType.OVA,
    "ovas": EpisodeType.OVA,
    "oad": EpisodeType.OAD,
    "oads": EpisodeType.OAD,
    "ncop": EpisodeType.NCOP,
    "nced": EpisodeType.NCED,
}

# "Show S1 - OVA", "Show - Specials". Tried in this order; the order between
# categories is arbitrary, a name matching two of them takes the first.
SUFFIX_PATTERNS: List[Tuple[Pattern[str], EpisodeType]] = [
    (re.compile(r"(?:^|[\s._\-–—\[(])specials?[\])]?$", re.IGNORECASE), EpisodeType.SPECIAL),
    (re.compile(r"(?:^|[\s._\-–—\[(])ovas?[\])]?$", re.IGNORECASE), EpisodeType.OVA),
    (re.compile(r"(?:^|[\s._\-–—\[(])oads?[\])]?$", re.IGNORECASE), EpisodeType.OAD),
    (re.compile(r"(?:^|[\s._\-–—\[(])ncops?[\])]?$", re.IGNORECASE), EpisodeType.NCOP),
    (re.compile(r"(?:^|[\s._\-–—\[(])nceds?[\])]?$", re.IGNORECASE), EpisodeType.NCED),
]


def classify(folder_name: Optional[str]) -> EpisodeType:
    """
    Episode type for a folder name.

    Exact vocabulary first, then the "ends with a known type" patterns,
    otherwise EPISODE.
    """
    if not folder_name:
        return EpisodeType.EPISODE

    name = folder_name.strip()
    exact = KNOWN_FOLDER_NAMES.get(name.lower())
    if exact is not None:
        return exact

    for pattern, episode_type in SUFFIX_PATTERNS:
        if pattern.search(name):
            return episode_type

    return EpisodeType.EPISODE


def is_known_subfolder(folder_name: Optional[str]) -> bool:
    """True for folders that hold a series' extras rather than a series."""
    return classify(folder_name) != EpisodeType.EPISODE
