"""Command-line interface argument parsing."""

import argparse
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional

from autoorganize.config.settings import (
    DEFAULT_CACHE_DB,
    DEFAULT_OPTIONS_FILE,
    DEFAULT_RESULTS_DB,
)


@dataclass
class CLIArgs:
    """
    Parsed command-line arguments.

    Attributes:
        command: Sub-command ('organize', 'correct' or 'results').
        paths: Files to organize.
        library_dir: Library root (overrides the options file).
        options_file: JSON options file.
        results_db: SQLite database for organization results.
        cache_db: SQLite cache for provider responses.
        overwrite: Replace existing targets and duplicates.
        copy: Copy files instead of moving them.
        auto_detect: Create unknown series from TMDB results.
        debug: Enable debug logging.
        result_id: Result to correct.
        series_id: Existing catalog series for a correction.
        new_series_name: Series to create for a correction.
        new_series_year: Year of the series to create.
        provider_ids: Provider ids of the series to create.
        season: Season number for a correction.
        episode: Episode number for a correction.
        ending_episode: Ending episode number for a correction.
        remember: Remember the correction as a smart match.
    """

    command: str = 'organize'
    paths: List[Path] = field(default_factory=list)
    library_dir: Optional[Path] = None
    options_file: Path = DEFAULT_OPTIONS_FILE
    results_db: Path = DEFAULT_RESULTS_DB
    cache_db: Path = DEFAULT_CACHE_DB
    overwrite: bool = False
    copy: Optional[bool] = None
    auto_detect: Optional[bool] = None
    debug: bool = False
    result_id: str = ''
    series_id: Optional[str] = None
    new_series_name: Optional[str] = None
    new_series_year: Optional[str] = None
    provider_ids: Dict[str, str] = field(default_factory=dict)
    season: Optional[int] = None
    episode: Optional[int] = None
    ending_episode: Optional[int] = None
    remember: bool = False


def _provider_id(value: str) -> tuple:
    """Parse a NAME=ID provider id argument."""
    name, sep, ident = value.partition('=')
    if not sep or not name or not ident:
        raise argparse.ArgumentTypeError(f"expected NAME=ID, got '{value}'")
    return name, ident


def create_parser() -> argparse.ArgumentParser:
    """
    Create the argument parser for the CLI.

    Returns:
        Configured ArgumentParser instance.
    """
    parser = argparse.ArgumentParser(
        prog='autoorganize',
        description="""
        Sorts TV episode files into a series library using configurable
        naming patterns and TMDB metadata.
        """
    )

    parser.add_argument(
        '--config',
        default=str(DEFAULT_OPTIONS_FILE),
        help=f"options file (default: {DEFAULT_OPTIONS_FILE})"
    )

    parser.add_argument(
        '--db',
        default=str(DEFAULT_RESULTS_DB),
        help=f"results database (default: {DEFAULT_RESULTS_DB})"
    )

    parser.add_argument(
        '--cache',
        default=str(DEFAULT_CACHE_DB),
        help=f"TMDB response cache (default: {DEFAULT_CACHE_DB})"
    )

    parser.add_argument(
        '-l', '--library',
        help="series library folder (overrides the options file)"
    )

    parser.add_argument(
        '--debug',
        action='store_true',
        help="enable debug mode"
    )

    subparsers = parser.add_subparsers(dest='command', required=True)

    organize = subparsers.add_parser('organize', help="organize episode files")
    organize.add_argument('paths', nargs='+', help="episode files to organize")
    organize.add_argument(
        '--overwrite',
        action='store_true',
        help="replace existing episodes and remove duplicates"
    )
    organize.add_argument(
        '--copy',
        action='store_true',
        default=None,
        help="copy files and keep the originals"
    )
    organize.add_argument(
        '--auto-detect',
        action='store_true',
        default=None,
        help="create unknown series from TMDB search results"
    )

    correct = subparsers.add_parser('correct', help="re-organize a result with a corrected series")
    correct.add_argument('result_id', help="id of the result to correct")
    series_group = correct.add_mutually_exclusive_group(required=True)
    series_group.add_argument('--series-id', help="existing catalog series id")
    series_group.add_argument('--new-series', help="name of a series to create")
    correct.add_argument('--year', help="production year of the new series")
    correct.add_argument(
        '--provider-id',
        action='append',
        type=_provider_id,
        default=[],
        metavar='NAME=ID',
        help="provider id of the new series (e.g. Tmdb=1396)"
    )
    correct.add_argument('--season', type=int, help="season number")
    correct.add_argument('--episode', type=int, help="episode number")
    correct.add_argument('--ending-episode', type=int, help="ending episode number")
    correct.add_argument(
        '--remember',
        action='store_true',
        help="remember the extracted name for this series"
    )

    subparsers.add_parser('results', help="list stored organization results")

    return parser


def parse_arguments(args: Optional[List[str]] = None) -> argparse.Namespace:
    """
    Parse command-line arguments.

    Args:
        args: List of argument strings (None for sys.argv).

    Returns:
        Parsed Namespace object.
    """
    parser = create_parser()
    return parser.parse_args(args)


def args_to_cli_args(namespace: argparse.Namespace) -> CLIArgs:
    """
    Convert argparse Namespace to CLIArgs dataclass.

    Args:
        namespace: Parsed argparse Namespace.

    Returns:
        CLIArgs instance.
    """
    cli_args = CLIArgs(
        command=namespace.command,
        library_dir=Path(namespace.library) if namespace.library else None,
        options_file=Path(namespace.config),
        results_db=Path(namespace.db),
        cache_db=Path(namespace.cache),
        debug=namespace.debug,
    )

    if namespace.command == 'organize':
        cli_args.paths = [Path(p) for p in namespace.paths]
        cli_args.overwrite = namespace.overwrite
        cli_args.copy = namespace.copy
        cli_args.auto_detect = namespace.auto_detect
    elif namespace.command == 'correct':
        cli_args.result_id = namespace.result_id
        cli_args.series_id = namespace.series_id
        cli_args.new_series_name = namespace.new_series
        cli_args.new_series_year = namespace.year
        cli_args.provider_ids = dict(namespace.provider_id)
        cli_args.season = namespace.season
        cli_args.episode = namespace.episode
        cli_args.ending_episode = namespace.ending_episode
        cli_args.remember = namespace.remember

    return cli_args
