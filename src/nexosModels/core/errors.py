"""Exception types raised by nexosModels.

Every fatal condition of a run is reported through one of these classes so
the CLI entry point can print a message and exit with a non-zero status.
"""

from typing import Optional


class NexosModelsError(Exception):
    """Base class for all nexosModels errors."""
    pass


class ConfigurationError(NexosModelsError):
    """Raised when the API credential is missing or malformed.

    The message includes remediation instructions for the user.
    """
    pass


class DependencyError(NexosModelsError):
    """Raised when a required companion program is not installed."""
    pass


class CatalogFetchError(NexosModelsError):
    """Raised when the model catalog cannot be retrieved.

    Attributes:
        status_code: HTTP status code, or None for connection failures.
        reason: HTTP status text or a short failure description.
        body: Response body text, if any.
    """

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        reason: str = "",
        body: str = "",
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.reason = reason
        self.body = body
