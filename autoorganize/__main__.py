"""Entry point for the autoorganize package.

Run with: python -m autoorganize
"""

import asyncio
import os
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv
from loguru import logger
from tqdm import tqdm

from autoorganize.api import CacheDB, TmdbClient
from autoorganize.classification import GuessitEpisodeParser
from autoorganize.config import (
    DEFAULT_LIBRARY_DIR,
    AutoOrganizeOptions,
    CLIArgs,
    OptionsStore,
    args_to_cli_args,
    parse_arguments,
)
from autoorganize.exceptions import OrganizeError
from autoorganize.filesystem import LibraryMonitor, LocalFileSystem
from autoorganize.library import LibraryCatalog
from autoorganize.models import EpisodeFileOrganizationRequest, FileSortingStatus, OrganizationResult
from autoorganize.pipeline import (
    DuplicateLocator,
    EpisodeFileOrganizer,
    PathPlanner,
    SeriesResolver,
    SortExecutor,
)
from autoorganize.ui import ConsoleUI, display_results, display_summary
from autoorganize.utils import ResultStore


def setup_logging(debug: bool = False) -> None:
    """
    Configure loguru logging.

    Args:
        debug: If True, enable debug-level logging.
    """
    logger.remove()
    level = "DEBUG" if debug else "INFO"
    logger.add(
        sys.stderr,
        level=level,
        format="<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | {message}",
    )
    logger.add(
        "autoorganize.log",
        rotation="10 MB",
        retention="7 days",
        level="DEBUG",
    )


def apply_cli_overrides(options: AutoOrganizeOptions, cli_args: CLIArgs) -> AutoOrganizeOptions:
    """
    Apply command-line flags on top of the stored options.

    Returns:
        The same options object, updated.
    """
    tv_options = options.tv_options
    if cli_args.library_dir is not None:
        tv_options.default_series_library_path = str(cli_args.library_dir)
    elif not tv_options.default_series_library_path:
        tv_options.default_series_library_path = str(DEFAULT_LIBRARY_DIR)

    if cli_args.copy is not None:
        tv_options.copy_original_file = cli_args.copy
    if cli_args.auto_detect is not None:
        tv_options.auto_detect_series = cli_args.auto_detect
    return options


@dataclass
class Services:
    """Wired components of one run."""

    organizer: EpisodeFileOrganizer
    resolver: SeriesResolver
    catalog: LibraryCatalog
    store: ResultStore
    cache: CacheDB

    def close(self) -> None:
        self.store.close()
        self.cache.close()


def build_services(cli_args: CLIArgs, options: AutoOrganizeOptions, options_store: OptionsStore) -> Services:
    """
    Create and connect the organizer components.

    Args:
        cli_args: Parsed CLI arguments.
        options: Effective options.
        options_store: Options persistence, for remembered corrections.
    """
    cache = CacheDB(cli_args.cache_db)
    cache.purge_expired()
    provider = TmdbClient(api_key=os.getenv("TMDB_API_KEY"), cache=cache)
    parser = GuessitEpisodeParser()
    fs = LocalFileSystem()
    monitor = LibraryMonitor()
    store = ResultStore(cli_args.results_db)

    catalog = LibraryCatalog([Path(options.tv_options.default_series_library_path)], parser, provider)
    catalog.scan()
    monitor.add_listener(catalog.refresh_path)

    resolver = SeriesResolver(catalog, provider)
    planner = PathPlanner(catalog, provider, fs)
    executor = SortExecutor(store, planner, DuplicateLocator(catalog, fs), fs, monitor)
    organizer = EpisodeFileOrganizer(parser, resolver, executor, store, fs, monitor, options_store)

    return Services(organizer=organizer, resolver=resolver, catalog=catalog, store=store, cache=cache)


async def organize_paths(
    services: Services,
    paths: List[Path],
    options: AutoOrganizeOptions,
    overwrite: bool = False
) -> List[OrganizationResult]:
    """Organize files one after the other."""
    results = []
    for path in tqdm(paths, desc="Organizing episodes", unit="file"):
        results.append(await services.organizer.organize_episode_file(str(path), options, overwrite))
    await services.resolver.wait_for_refreshes()
    return results


async def correct_result(
    services: Services,
    cli_args: CLIArgs,
    options: AutoOrganizeOptions
) -> OrganizationResult:
    request = EpisodeFileOrganizationRequest(
        result_id=cli_args.result_id,
        series_id=cli_args.series_id,
        season_number=cli_args.season,
        episode_number=cli_args.episode,
        ending_episode_number=cli_args.ending_episode,
        remember_correction=cli_args.remember,
        new_series_name=cli_args.new_series_name,
        new_series_year=cli_args.new_series_year,
        new_series_provider_ids=cli_args.provider_ids,
        target_folder=options.tv_options.default_series_library_path,
    )
    result = await services.organizer.organize_with_correction(request, options)
    await services.resolver.wait_for_refreshes()
    return result


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point for the episode organization tool.

    Returns:
        Exit code (0 for success, non-zero for errors).
    """
    namespace = parse_arguments(argv)
    cli_args = args_to_cli_args(namespace)

    setup_logging(cli_args.debug)
    load_dotenv()
    console = ConsoleUI()

    if cli_args.command == 'results':
        with ResultStore(cli_args.results_db) as store:
            display_results(store.list_results(), show_ids=True)
        return 0

    if cli_args.command == 'correct' and cli_args.new_series_name and not cli_args.provider_ids:
        console.print_error("--new-series needs at least one --provider-id")
        return 2

    options_store = OptionsStore(cli_args.options_file)
    options = apply_cli_overrides(options_store.load(), cli_args)

    if not os.getenv("TMDB_API_KEY"):
        console.print_warning("TMDB_API_KEY is not set, episode metadata lookups will fail")

    services = build_services(cli_args, options, options_store)
    console.print_info(
        f"{len(services.catalog.list_series())} series in {options.tv_options.default_series_library_path}"
    )
    try:
        if cli_args.command == 'organize':
            paths = [p.resolve() for p in cli_args.paths]
            results = asyncio.run(organize_paths(services, paths, options, cli_args.overwrite))
            display_results(results)
            display_summary(results)
            failed = any(r.status == FileSortingStatus.FAILURE for r in results)
            return 1 if failed else 0

        result = asyncio.run(correct_result(services, cli_args, options))
        console.print_outcome(result)
        return 0 if result.status != FileSortingStatus.FAILURE else 1
    except OrganizeError as e:
        console.print_error(str(e))
        return 1
    finally:
        services.close()


if __name__ == "__main__":
    sys.exit(main())
