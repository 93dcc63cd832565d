"""Custom exception hierarchy for code360stats."""


class Code360Error(Exception):
    """Base exception for all code360stats errors."""


class InvalidInputError(Code360Error):
    """Missing or empty username."""


class FetchError(Code360Error):
    """Failed to fetch or render the profile page."""


class NavigationTimeoutError(FetchError):
    """Page load or a required element wait exceeded its bound."""


class ProfileNotFoundError(FetchError):
    """Profile page reports that the user does not exist."""


class CacheError(Code360Error):
    """Cache operation failed."""


class RateLimitExceededError(Code360Error):
    """Client exceeded its request quota."""
