"""Series catalog."""

from autoorganize.library.catalog import (
    LibraryCatalog,
    parse_season_folder,
    parse_series_folder,
)

__all__ = ["LibraryCatalog", "parse_season_folder", "parse_series_folder"]
