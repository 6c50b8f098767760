"""Custom exceptions for jt."""


class JtError(Exception):
    """Base exception for jt operations."""


class ConfigError(JtError):
    """Missing or invalid configuration."""


class FetchError(JtError):
    """Error while talking to the Jira REST API."""


class UnauthorizedError(FetchError):
    """Jira rejected the credentials (HTTP 401/403)."""

    def __init__(
        self, message: str = "unauthorized: check your email and API token"
    ) -> None:
        super().__init__(message)


class NotFoundError(FetchError):
    """Requested Jira resource does not exist."""


class APIError(FetchError):
    """Non-success HTTP response from Jira."""

    def __init__(self, status_code: int, message: str) -> None:
        self.status_code = status_code
        self.message = message
        super().__init__(f"jira API error (HTTP {status_code}): {message}")


class ParseError(JtError):
    """Error while decoding a Jira response."""


class TicketNotFoundError(JtError):
    """No saved ticket file exists locally."""
