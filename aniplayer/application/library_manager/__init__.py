"""
Library Manager Module

Provides filename parsing, folder classification, library scanning,
change watching and the library service that ties them together.
"""

from .filename_parser import (
    FilenameParser,
    ParsedFilename,
    get_filename_parser,
    parse_filename,
    parse_episode_number,
    parse_title,
    parse_season_from_folder,
)

from .folder_classifier import (
    classify,
    is_known_subfolder,
)

from .scanner import (
    CancelToken,
    LibraryScanner,
    ScanResult,
    ScanState,
)

from .debounce import Debouncer
from .file_watcher import ChangeWatcher
from .library_service import LibraryService

__all__ = [
    # Parsing
    "FilenameParser",
    "ParsedFilename",
    "get_filename_parser",
    "parse_filename",
    "parse_episode_number",
    "parse_title",
    "parse_season_from_folder",
    # Classification
    "classify",
    "is_known_subfolder",
    # Scanner
    "CancelToken",
    "LibraryScanner",
    "ScanResult",
    "ScanState",
    # Watching
    "Debouncer",
    "ChangeWatcher",
    # Service
    "LibraryService",
]
