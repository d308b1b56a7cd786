# ABOUTME: LinkedIn integration package for browser-driven operations.
# ABOUTME: Exports LinkedInClient, login classification and exception types.

from linkedin_networker.linkedin.client import LinkedInClient, LoginOutcome, classify_login_url
from linkedin_networker.linkedin.exceptions import (
    LinkedInAuthError,
    LinkedInChallengeError,
    LinkedInDriverError,
    LinkedInError,
    LinkedInTimeoutError,
)

__all__ = [
    "LinkedInClient",
    "LoginOutcome",
    "classify_login_url",
    "LinkedInError",
    "LinkedInAuthError",
    "LinkedInChallengeError",
    "LinkedInDriverError",
    "LinkedInTimeoutError",
]
