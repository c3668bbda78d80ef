"""Errors raised while fetching from the catalog.

Every failure that can interrupt a franchise build derives from FetchError so
callers can handle the whole family with a single except clause.
"""


class FetchError(Exception):
    """Base class for all catalog fetch failures."""

    pass


class TransportError(FetchError):
    """Raised when the request could not be sent or the response not read."""

    pass


class DecodeError(FetchError):
    """Raised when a response body does not match any known response shape."""

    def __init__(self, message: str = "error decoding response body") -> None:
        """Initialize the error with a description of the decode failure."""
        super().__init__(message)


class ServiceError(FetchError):
    """Raised when the catalog service reports an error."""

    def __init__(self, status: int, message: str) -> None:
        """Initialize the error with the remote status and message."""
        super().__init__(f"{status}: {message}")
        self.status = status
        self.message = message


class BuildAbortedError(FetchError):
    """Raised when a build passes its deadline before the next request."""

    pass
