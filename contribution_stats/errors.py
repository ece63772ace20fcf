"""Exceptions raised by the contribution stats tool."""


class ContributionStatsError(Exception):
    """Base class for all errors raised by this package."""


class FilterError(ContributionStatsError):
    """The repository pattern is not a valid regular expression."""

    def __init__(self, pattern: str, reason: str):
        self.pattern = pattern
        self.reason = reason
        super().__init__(f"Invalid repository pattern '{pattern}': {reason}")


class TimeParseError(ContributionStatsError):
    """One end of the time window could not be parsed."""

    def __init__(self, endpoint: str, value: str, reason: str = None):
        self.endpoint = endpoint
        self.value = value
        message = f"Invalid {endpoint} time '{value}'"
        if reason:
            message += f": {reason}"
        super().__init__(message)


class QueryError(ContributionStatsError):
    """The remote API call failed (transport, auth, API error or malformed payload)."""

    def __init__(self, message: str, cause: BaseException = None):
        self.cause = cause
        super().__init__(message)


class ConfigError(ContributionStatsError):
    """Missing or conflicting run configuration."""
