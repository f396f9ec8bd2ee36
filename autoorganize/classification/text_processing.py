"""Text processing utilities for series names."""

import re
import unicodedata
from typing import Optional, Tuple

from rapidfuzz import fuzz

from autoorganize.config.settings import (
    EXACT_MATCH_SCORE,
    SERIES_MATCH_THRESHOLD,
    YEAR_MATCH_BONUS,
)
from autoorganize.models.library import Series

# Trailing year, bare or in brackets: "Show (2010)", "Show.2010", "Show [2010]"
YEAR_SUFFIX_PATTERN = re.compile(r'^(?P<name>.*?)[\s._-]*[(\[]?(?P<year>(?:19|20)\d{2})[)\]]?$')

# Separators and punctuation folded to spaces when comparing names
COMPARABLE_SEPARATORS = re.compile(r"[._\-:,;!?()\[\]{}/\\]+")


def normalize_accents(text: str) -> str:
    """
    Remove accents and expand common ligatures.

    Args:
        text: Input string that may contain accented characters.

    Returns:
        String with accents removed.

    Examples:
        >>> normalize_accents("Pokémon")
        'Pokemon'
    """
    if not text:
        return ""

    text = text.replace('œ', 'oe').replace('æ', 'ae').replace('Œ', 'OE').replace('Æ', 'AE')
    text = unicodedata.normalize('NFD', text)
    return ''.join(c for c in text if unicodedata.category(c) != 'Mn')


def parse_series_name(name: str) -> Tuple[str, Optional[int]]:
    """
    Split a trailing year off a series name.

    Args:
        name: Series name as extracted from a file name.

    Returns:
        Tuple of (name without year, year or None). The raw name is returned
        when removing the year would leave nothing.

    Examples:
        >>> parse_series_name("Doctor Who (2005)")
        ('Doctor Who', 2005)
        >>> parse_series_name("1923")
        ('1923', None)
    """
    if not name:
        return name, None

    match = YEAR_SUFFIX_PATTERN.match(name.strip())
    if not match:
        return name.strip(), None

    stripped = match.group('name').strip(' ._-')
    if not stripped:
        return name.strip(), None

    return stripped, int(match.group('year'))


def comparable_name(name: str) -> str:
    """
    Fold a series name for comparison.

    Lowercases, removes accents and apostrophes, treats "&" as "and" and
    turns separators into single spaces.

    Examples:
        >>> comparable_name("Marvel's Agents.of.S.H.I.E.L.D.")
        'marvels agents of s h i e l d'
    """
    if not name:
        return ""

    result = normalize_accents(name).lower()
    result = result.replace("'", "").replace("’", "")
    result = result.replace("&", " and ")
    result = COMPARABLE_SEPARATORS.sub(" ", result)
    return " ".join(result.split())


def get_match_score(name: str, year: Optional[int], series: Series) -> int:
    """
    Score how well an extracted name and year match a catalog series.

    Identical comparable names score EXACT_MATCH_SCORE, close names score
    their rapidfuzz ratio when it reaches SERIES_MATCH_THRESHOLD. When both
    years are known a matching year adds YEAR_MATCH_BONUS and a different
    year scores 0 whatever the name.

    Args:
        name: Extracted series name without year.
        year: Extracted year, if any.
        series: Catalog series to score.

    Returns:
        Score, 0 meaning no match.
    """
    series_name = series.name
    if series.production_year:
        series_name = series_name.replace(str(series.production_year), "")

    left = comparable_name(name)
    right = comparable_name(series_name)
    if not left or not right:
        return 0

    if left == right:
        score = EXACT_MATCH_SCORE
    else:
        ratio = fuzz.ratio(left, right)
        if ratio < SERIES_MATCH_THRESHOLD:
            return 0
        score = int(ratio)

    if year and series.production_year:
        if year != series.production_year:
            return 0
        score += YEAR_MATCH_BONUS

    return score
