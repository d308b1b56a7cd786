# ABOUTME: Custom exceptions for browser-driven LinkedIn operations.
# ABOUTME: Provides specific error types for login failures, timeouts and driver faults.

from linkedin_networker.errors import LinkedInNetworkerError


class LinkedInError(LinkedInNetworkerError):
    """Base exception for all LinkedIn browser errors."""

    pass


class LinkedInAuthError(LinkedInError):
    """Exception raised when login is rejected or its outcome is unrecognized."""

    pass


class LinkedInChallengeError(LinkedInAuthError):
    """Exception raised when LinkedIn redirects the login to a security challenge."""

    pass


class LinkedInTimeoutError(LinkedInError):
    """Exception raised when a navigation or selector wait exceeds its ceiling."""

    pass


class LinkedInDriverError(LinkedInError):
    """Exception raised when the browser cannot be launched or is no longer usable."""

    pass
