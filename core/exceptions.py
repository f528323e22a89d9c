"""Custom exception hierarchy for the YNAB proxy."""


class ProxyError(Exception):
    """Base exception for all proxy errors."""


class ConfigurationError(ProxyError):
    """Raised when configuration is missing or invalid."""


class UpstreamError(ProxyError):
    """Raised when the exchange with the YNAB API could not be completed.

    Attributes:
        message: Error message
        url: Upstream URL that was being requested (optional)
    """

    def __init__(self, message: str, url: str | None = None) -> None:
        super().__init__(message)
        self.url = url


class UpstreamTimeoutError(UpstreamError):
    """Raised when the upstream request times out."""


class UpstreamConnectionError(UpstreamError):
    """Raised when unable to connect to the upstream API."""
