"""Errors raised by metadata provider clients."""


class APIError(Exception):
    """Base class for metadata provider errors."""

    pass


class APIConfigurationError(APIError):
    """The client is not usable as configured (missing API key)."""

    pass


class APIConnectionError(APIError):
    """The provider could not be reached (network error, timeout)."""

    pass


class APIResponseError(APIError):
    """The provider answered with an error status or an unexpected payload.

    Attributes:
        status_code: HTTP status of the response, if any.
    """

    def __init__(self, message: str, status_code: int = 0) -> None:
        super().__init__(message)
        self.status_code = status_code
