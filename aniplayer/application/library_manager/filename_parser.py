"""
Filename Parser Module

Best-effort extraction of episode number, title, release group and
resolution from a video file name.

The general-purpose tokenizer (GuessIt) runs first. When it finds no episode
number, an ordered list of (pattern, extractor) pairs is tried on the file
stem and the first match wins. Episode numbers may be fractional (13.5) so
recap and special episodes sort between their neighbours.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from pathlib import PurePath
from typing import Any, Callable, Dict, List, Optional, Pattern, Tuple

from guessit import guessit

logger = logging.getLogger(__name__)

Tokenizer = Callable[[str], Dict[str, Any]]
Extractor = Callable[["re.Match[str]"], Optional[float]]

_NUMBER = r"(\d{1,4}(?:\.\d(?!\d))?)"


def _first_group(match: "re.Match[str]") -> Optional[float]:
    try:
        return float(match.group(1))
    except (TypeError, ValueError):
        return None


# Ordered by specificity, first match wins
EPISODE_PATTERNS: List[Tuple[Pattern[str], Extractor]] = [
    # [Group] Title - 01 [tags]
    (re.compile(r"[-–—]\s*" + _NUMBER + r"\s*(?:\[|\(|v\d|$)"), _first_group),
    # S01E01 / S1E01
    (re.compile(r"[Ss]\d{1,2}[Ee]" + _NUMBER), _first_group),
    # EP01 / Ep.01
    (re.compile(r"[Ee][Pp]\.?\s*" + _NUMBER), _first_group),
    # Episode 01
    (re.compile(r"[Ee]pisode\s*" + _NUMBER), _first_group),
    # E01, not part of a word
    (re.compile(r"(?<![A-Za-z])[Ee](\d{2,4}(?:\.\d(?!\d))?)(?![A-Za-z])"), _first_group),
    # Title 01 / Title - 01v2
    (re.compile(r"[\s._]" + _NUMBER + r"(?:\s*v\d)?(?:\s*[\[(.]|$)"), _first_group),
]

_LEADING_GROUP = re.compile(r"^\[.*?\]\s*")
_TITLE_BEFORE_EPISODE = re.compile(
    r"^(.+?)(?:\s*[-–—]\s*\d|\s*[Ss]\d|\s*[Ee][Pp]|\s*[Ee]pisode)"
)
_BRACKETED = re.compile(r"\[.*?\]|\(.*?\)")

SEASON_FOLDER_PATTERNS: List[Pattern[str]] = [
    re.compile(r"\b(?:season|series|book|part)\s*(\d{1,2})\b", re.IGNORECASE),
    re.compile(r"\b(\d{1,2})(?:st|nd|rd|th)\s+season\b", re.IGNORECASE),
    re.compile(r"(?:^|[\s._-])s(\d{1,2})$", re.IGNORECASE),
]


@dataclass
class ParsedFilename:
    """Result of parsing one file name; every field is optional."""
    episode_number: Optional[float] = None
    title: Optional[str] = None
    release_group: Optional[str] = None
    resolution: Optional[str] = None


def _stem(file_path: str) -> str:
    return PurePath(file_path).stem


def guessit_tokenizer(file_name: str) -> Dict[str, Any]:
    """Run GuessIt in episode mode and return its matches as a plain dict."""
    return dict(guessit(file_name, {"type": "episode"}))


def parse_episode_number(file_path: str) -> Optional[float]:
    """Try the ordered fallback patterns against the file stem."""
    file_name = _stem(file_path)
    if not file_name:
        return None

    for pattern, extractor in EPISODE_PATTERNS:
        match = pattern.search(file_name)
        if match:
            number = extractor(match)
            if number is not None:
                return number
    return None


def parse_title(file_path: str) -> Optional[str]:
    """
    Heuristic title: text before the first separator or episode token.

    Returns None when nothing usable remains, so the caller can fall back to
    the bare file name.
    """
    file_name = _stem(file_path)
    if not file_name:
        return None

    cleaned = _LEADING_GROUP.sub("", file_name)

    match = _TITLE_BEFORE_EPISODE.match(cleaned)
    if match:
        title = match.group(1).strip()
        if title:
            return title

    cleaned = _BRACKETED.sub("", cleaned).strip()
    return cleaned or None


def parse_season_from_folder(folder_name: str) -> Optional[int]:
    """Season number from names like 'Season 2', 'S02', '2nd Season' or 'Show S2'."""
    if not folder_name:
        return None
    for pattern in SEASON_FOLDER_PATTERNS:
        match = pattern.search(folder_name.strip())
        if match:
            return int(match.group(1))
    return None


class FilenameParser:
    """
    Parses video file names into episode information.

    Args:
        tokenizer: General-purpose parser taking a file name and returning a
            GuessIt-style dict (keys ``episode``, ``title``,
            ``release_group``, ``screen_size``).
    """

    def __init__(self, tokenizer: Optional[Tokenizer] = None):
        self._tokenizer = tokenizer or guessit_tokenizer

    def parse(self, file_path: str) -> ParsedFilename:
        """Parse *file_path*; never raises."""
        result = ParsedFilename()
        if not file_path:
            return result

        tokens = self._tokenize(file_path)
        result.episode_number = self._episode_from_tokens(tokens, file_path)
        result.title = self._string_token(tokens, "title")
        result.release_group = self._string_token(tokens, "release_group")
        result.resolution = self._string_token(tokens, "screen_size")

        try:
            if result.episode_number is None:
                result.episode_number = parse_episode_number(file_path)
            if result.title is None:
                result.title = parse_title(file_path)
        except Exception as e:
            logger.warning("Fallback parsing failed for %s: %s", file_path, e)

        return result

    def _tokenize(self, file_path: str) -> Dict[str, Any]:
        try:
            tokens = self._tokenizer(PurePath(file_path).name)
            return tokens if isinstance(tokens, dict) else {}
        except Exception as e:
            logger.debug("Tokenizer failed for %s: %s", file_path, e)
            return {}

    @staticmethod
    def _string_token(tokens: Dict[str, Any], key: str) -> Optional[str]:
        value = tokens.get(key)
        if isinstance(value, list):
            value = value[0] if value else None
        if value is None:
            return None
        value = str(value).strip()
        return value or None

    @staticmethod
    def _episode_from_tokens(tokens: Dict[str, Any], file_path: str) -> Optional[float]:
        value = tokens.get("episode")
        if isinstance(value, list):
            value = value[0] if value else None
        if value is None or isinstance(value, bool):
            return None
        try:
            number = float(value)
        except (TypeError, ValueError):
            return None

        # GuessIt has no half episodes. Take "13.5" only from the episode
        # position, never from tags such as "DDP5.1" or "FLAC 7.1".
        if number.is_integer():
            positional = parse_episode_number(file_path)
            if positional is not None and not positional.is_integer() and int(positional) == int(number):
                number = positional
        return number


_default_parser: Optional[FilenameParser] = None


def get_filename_parser() -> FilenameParser:
    """Get the shared GuessIt-backed parser."""
    global _default_parser
    if _default_parser is None:
        _default_parser = FilenameParser()
    return _default_parser


def parse_filename(file_path: str) -> ParsedFilename:
    """Parse a file path with the shared parser."""
    return get_filename_parser().parse(file_path)
