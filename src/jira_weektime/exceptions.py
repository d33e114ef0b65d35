"""Exception hierarchy for JIRA Weektime."""


class WeektimeError(Exception):
    """Base exception for weektime errors."""

    pass


class ConfigNotFoundError(WeektimeError):
    """Configuration file not found."""

    pass


class InvalidConfigError(WeektimeError):
    """Configuration is invalid."""

    pass


class JiraAuthError(WeektimeError):
    """JIRA authentication failed."""

    pass


class JiraConnectionError(WeektimeError):
    """Cannot connect to JIRA server."""

    pass


class JiraRateLimitError(WeektimeError):
    """JIRA rate limit exceeded."""

    pass


class IssueFetchError(WeektimeError):
    """Assigned issues could not be fetched."""

    pass


class InvalidDurationError(ValueError):
    """A duration string is not in the ``1w 2d 3h 4m`` notation."""

    def __init__(self, text, reason: str = "") -> None:
        self.text = text
        message = f"Invalid time format supplied: {text}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class WorklogRejectedError(Exception):
    """Raised when JIRA refuses a new worklog."""

    def __init__(self, status_code: int | None, body: str) -> None:
        self.status_code = status_code
        self.body = body
        super().__init__(f"Response: {status_code}\n{body}")
