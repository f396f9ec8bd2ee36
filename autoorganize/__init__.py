"""
Autoorganize - TV episode auto-organization tool.

Sorts loose episode files into a series library by:
- Extracting series/season/episode identity from file names
- Resolving the series against the library catalog, learned aliases or TMDB
- Rendering destination paths from configurable naming patterns
- Moving or copying files while reconciling existing duplicates
"""

__version__ = "0.3.0"
