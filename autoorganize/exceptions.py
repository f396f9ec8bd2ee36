"""Exceptions raised while organizing episode files."""


class OrganizeError(Exception):
    """Base class for all organization errors."""

    pass


class EpisodeExtractionError(OrganizeError):
    """Series name or episode numbers could not be read from the file name."""

    pass


class SeriesResolutionError(OrganizeError):
    """No catalog series, smart match or auto-detected series matched."""

    pass


class MetadataNotFoundError(OrganizeError):
    """The metadata provider returned nothing for the requested episode."""

    pass


class OrganizeBusyError(OrganizeError):
    """Another organization of the same source file is in progress."""

    pass


class FileSortingError(OrganizeError):
    """The target path could not be determined or the transfer failed."""

    pass


class NamingPatternError(OrganizeError):
    """A configured naming pattern is empty or unusable."""

    pass


class ResultNotFoundError(OrganizeError):
    """No persisted organization result exists for the given id."""

    pass
