"""Exceptions raised by source adapters."""


class AdapterError(Exception):
    """Base exception for all adapter errors.

    The pipeline catches this per source: the source is counted as failed
    and the run moves on to the next one.
    """


class AdapterHTTPError(AdapterError):
    """A listing request failed at the HTTP level.

    ``status_code`` is 0 when no response was received at all.
    """

    def __init__(self, message: str, status_code: int, url: str) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.url = url

    @property
    def is_transient(self) -> bool:
        return self.status_code == 0 or self.status_code == 429 or self.status_code >= 500


class AdapterTimeoutError(AdapterError):
    """A listing request did not complete within the configured timeout."""

    def __init__(self, message: str, url: str) -> None:
        super().__init__(message)
        self.url = url


class AdapterResponseError(AdapterError):
    """A response arrived but was not the JSON shape the adapter expects."""


class AdapterConfigurationError(AdapterError):
    """The adapter was given invalid settings or an unsupported platform."""
