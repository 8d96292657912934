"""
Exception hierarchy for fatal purge failures.

Exception Hierarchy:
    PurgeError (base)
    ├── ConfigurationError  - Required settings missing (startup)
    ├── AuthError           - Current account could not be resolved
    └── EnumerationError    - Guild or DM listing failed

Failures inside a single target's search or delete loop are never raised;
they end up in SearchResult.stop_reason and DrainResult.failed instead.
"""


class PurgeError(Exception):
    """Base exception for errors that abort a whole run."""

    def __init__(self, message: str, details: str | None = None):
        self.message = message
        self.details = details
        super().__init__(self.message)

    def __str__(self) -> str:
        if self.details:
            return f"{self.message}: {self.details}"
        return self.message


class ConfigurationError(PurgeError):
    """A required setting is missing or invalid."""


class AuthError(PurgeError):
    """
    The current account could not be resolved.

    Raised on transport failure, non-2xx status or an undecodable body.
    """

    def __init__(
        self,
        message: str,
        details: str | None = None,
        status_code: int | None = None,
    ):
        super().__init__(message, details)
        self.status_code = status_code


class EnumerationError(PurgeError):
    """Listing guilds or DM channels failed; no partial target list is used."""

    def __init__(
        self,
        message: str,
        details: str | None = None,
        endpoint: str | None = None,
        status_code: int | None = None,
    ):
        super().__init__(message, details)
        self.endpoint = endpoint
        self.status_code = status_code
