"""Rendering of series folder, season folder and episode file names.

Patterns are expanded with ordered substitution rules: each token is
replaced over the whole string before the next one is applied, so the order
of the rule lists below is part of the naming behavior (e.g. "%sn" must go
before "%s", "%ext" and "%ed" before "%e").
"""

from pathlib import Path
from typing import Callable, List, Optional, Tuple

from autoorganize.exceptions import NamingPatternError
from autoorganize.filesystem.file_ops import sanitize_filename

Rule = Tuple[str, str]

# Episode title placeholders, filled last so that title text is never
# rewritten by the number tokens
TITLE_PLACEHOLDER = '%#1'
TITLE_DOTS_PLACEHOLDER = '%#2'
TITLE_UNDERSCORES_PLACEHOLDER = '%#3'


def apply_rules(pattern: str, rules: List[Rule]) -> str:
    """
    Apply substitution rules in order.

    Args:
        pattern: Naming pattern.
        rules: (token, replacement) pairs.

    Returns:
        Expanded string.
    """
    result = pattern
    for token, replacement in rules:
        result = result.replace(token, replacement)
    return result


def _series_name_rules(name: str) -> List[Rule]:
    return [
        ('%sn', name),
        ('%s.n', name.replace(' ', '.')),
        ('%s_n', name.replace(' ', '_')),
    ]


def _season_rules(season: int) -> List[Rule]:
    return [
        ('%s', str(season)),
        ('%0s', f'{season:02d}'),
        ('%00s', f'{season:03d}'),
    ]


def render_series_folder(
    pattern: str,
    name: str,
    year: Optional[int] = None,
    sanitize: Callable[[str], str] = sanitize_filename
) -> str:
    """
    Render the folder name of a new series.

    Tokens: %sn (name), %s.n (dots), %s_n (underscores), %sy (year) and
    %fn ("Name (Year)", or the name alone without a year).

    Raises:
        NamingPatternError: If the pattern is empty.
    """
    if not pattern or not pattern.strip():
        raise NamingPatternError("Configured series folder pattern is empty!")

    full_name = f"{name} ({year})" if year else name

    rules = _series_name_rules(name) + [
        ('%sy', str(year) if year else ''),
        ('%fn', full_name),
    ]
    return sanitize(apply_rules(pattern, rules))


def render_season_folder(
    pattern: str,
    season: int,
    sanitize: Callable[[str], str] = sanitize_filename
) -> str:
    """
    Render a season folder name with %s, %0s and %00s.

    Raises:
        NamingPatternError: If the pattern is empty.
    """
    if not pattern or not pattern.strip():
        raise NamingPatternError("Configured season folder pattern is empty!")

    return sanitize(apply_rules(pattern, _season_rules(season)))


def render_episode_filename(
    pattern: str,
    series_name: str,
    season: int,
    episode: int,
    ending_episode: Optional[int] = None,
    episode_title: Optional[str] = None,
    source_path: str = '',
    sanitize: Callable[[str], str] = sanitize_filename
) -> str:
    """
    Render an episode file name.

    Args:
        pattern: Episode name pattern (single or multi-episode).
        series_name: Name of the series.
        season: Season number.
        episode: Episode number.
        ending_episode: Last episode number of a multi-episode file.
        episode_title: Title from the metadata provider.
        source_path: Source file, for %ext and %fn.
        sanitize: Function making a string a valid file name.

    Returns:
        Sanitized file name, possibly empty.

    Raises:
        NamingPatternError: If the pattern is empty.

    Examples:
        >>> render_episode_filename("%sn %s%0e", "Foo", 1, 2)
        'Foo 102'
    """
    if not pattern or not pattern.strip():
        raise NamingPatternError("Configured episode name pattern is empty!")

    series_name = sanitize(series_name).strip()
    title = sanitize(episode_title).strip() if episode_title and episode_title.strip() else ''

    source = Path(source_path) if source_path else None
    extension = source.suffix.lstrip('.') if source else ''
    source_stem = source.stem if source else ''

    rules = _series_name_rules(series_name) + _season_rules(season) + [
        ('%ext', extension),
        ('%en', TITLE_PLACEHOLDER),
        ('%e.n', TITLE_DOTS_PLACEHOLDER),
        ('%e_n', TITLE_UNDERSCORES_PLACEHOLDER),
        ('%fn', source_stem),
    ]
    result = apply_rules(pattern, rules)

    if ending_episode is not None:
        result = apply_rules(result, [
            ('%ed', str(ending_episode)),
            ('%0ed', f'{ending_episode:02d}'),
            ('%00ed', f'{ending_episode:03d}'),
        ])

    result = apply_rules(result, [
        ('%e', str(episode)),
        ('%0e', f'{episode:02d}'),
        ('%00e', f'{episode:03d}'),
    ])

    result = apply_rules(result, [
        (TITLE_PLACEHOLDER, title),
        (TITLE_DOTS_PLACEHOLDER, title.replace(' ', '.')),
        (TITLE_UNDERSCORES_PLACEHOLDER, title.replace(' ', '_')),
    ])

    return sanitize(result).strip()
