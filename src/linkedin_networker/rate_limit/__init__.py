# ABOUTME: Rate limiting package for pacing requests against LinkedIn.
# ABOUTME: Exports the RateLimiter pacer.

from linkedin_networker.rate_limit.service import RateLimiter

__all__ = ["RateLimiter"]
