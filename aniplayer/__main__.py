"""
AniPlayer - Application Entry Point

Command line front end for the video catalog.

Usage:
    python -m aniplayer --add "D:/Anime" --label Anime
    python -m aniplayer --scan-all
    python -m aniplayer --watch

Or via the installed command:
    aniplayer
"""

from __future__ import annotations

import argparse
import sys
import time
from typing import Optional, Sequence


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="aniplayer",
        description="Local anime library catalog"
    )

    parser.add_argument(
        "--version", "-v",
        action="store_true",
        help="Show version information"
    )

    parser.add_argument(
        "--add",
        metavar="PATH",
        help="Register a library folder"
    )

    parser.add_argument(
        "--label",
        metavar="LABEL",
        help="Display label for --add"
    )

    parser.add_argument(
        "--list",
        action="store_true",
        help="List libraries with their series and episode counts"
    )

    parser.add_argument(
        "--scan",
        metavar="ID",
        type=int,
        help="Scan one library"
    )

    parser.add_argument(
        "--scan-all",
        action="store_true",
        help="Scan every library"
    )

    parser.add_argument(
        "--watch",
        action="store_true",
        help="Watch all libraries and rescan on change until interrupted"
    )

    return parser


def _create_service():
    from aniplayer.application.library_manager import LibraryService
    from aniplayer.infrastructure.database import SqlCatalogRepository, get_db_manager
    from aniplayer.infrastructure.file_system import LocalFileSystem

    repository = SqlCatalogRepository(get_db_manager())
    return LibraryService(repository, LocalFileSystem(), progress_sink=print)


def _print_libraries(service) -> None:
    libraries = service.list_libraries()
    if not libraries:
        print("No libraries registered. Add one with --add PATH.")
        return

    for library in libraries:
        series = service.repository.list_series_by_library(library.id)
        episodes = sum(len(service.repository.list_episode_file_paths(s.id)) for s in series)
        print(f"[{library.id}] {library.display_name}  ({library.path})")
        print(f"     {len(series)} series, {episodes} episode(s)")


def _watch(service) -> int:
    service.start()
    print("Watching libraries. Press Ctrl+C to stop.")
    try:
        while True:
            time.sleep(1.0)
    except KeyboardInterrupt:
        print("\nStopping...")
    return 0


def run_cli(argv: Optional[Sequence[str]] = None) -> int:
    """
    Run the command line interface.

    Returns:
        int: Exit code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.version:
        from aniplayer import __version__
        print(f"AniPlayer v{__version__}")
        return 0

    if args.label and not args.add:
        parser.error("--label requires --add")

    if not any((args.add, args.list, args.scan is not None, args.scan_all, args.watch)):
        parser.print_help()
        return 0

    try:
        from aniplayer.runtime.bootstrap import bootstrap, BootstrapError
        bootstrap()
    except BootstrapError as e:
        print(f"Failed to initialize runtime: {e}", file=sys.stderr)
        return 1

    from aniplayer.domain.exceptions import CatalogError

    service = _create_service()
    exit_code = 0
    try:
        if args.add:
            library = service.add_library(args.add, args.label)
            print(f"Added library [{library.id}] {library.display_name}")

        if args.scan is not None:
            result = service.scan_library(args.scan)
            exit_code = 0 if result.succeeded else 1

        if args.scan_all:
            results = service.scan_all()
            exit_code = 0 if all(r.succeeded for r in results) else 1

        if args.list:
            _print_libraries(service)

        if args.watch:
            exit_code = _watch(service)

    except CatalogError as e:
        print(f"Error: {e}", file=sys.stderr)
        exit_code = 1
    finally:
        service.shutdown()

    return exit_code


if __name__ == "__main__":
    sys.exit(run_cli())
