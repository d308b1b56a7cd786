# ABOUTME: Exceptions raised by the session store.
# ABOUTME: Covers missing sessions, illegal lifecycle transitions and invalid rows.

from linkedin_networker.errors import LinkedInNetworkerError


class SessionNotFoundError(LinkedInNetworkerError):
    """Raised when a crawl session id does not exist."""

    pass


class SessionStateError(LinkedInNetworkerError):
    """Raised when a session is asked to do something its status forbids."""

    pass


class InvalidRecordError(LinkedInNetworkerError):
    """Raised when a row would break a store invariant."""

    pass
