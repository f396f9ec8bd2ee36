"""Configuration and CLI handling."""

from autoorganize.config.settings import (
    EXT_VIDEO,
    DEFAULT_LIBRARY_DIR,
    DEFAULT_OPTIONS_FILE,
    DEFAULT_RESULTS_DB,
    DEFAULT_CACHE_DB,
)
from autoorganize.config.options import (
    AutoOrganizeOptions,
    OptionsStore,
    SmartMatchInfo,
    TvFileOrganizationOptions,
)
from autoorganize.config.cli import (
    CLIArgs,
    create_parser,
    parse_arguments,
    args_to_cli_args,
)

__all__ = [
    "EXT_VIDEO",
    "DEFAULT_LIBRARY_DIR",
    "DEFAULT_OPTIONS_FILE",
    "DEFAULT_RESULTS_DB",
    "DEFAULT_CACHE_DB",
    "AutoOrganizeOptions",
    "OptionsStore",
    "SmartMatchInfo",
    "TvFileOrganizationOptions",
    "CLIArgs",
    "create_parser",
    "parse_arguments",
    "args_to_cli_args",
]
