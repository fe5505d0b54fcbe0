"""Call admission control."""

from .rate_limiter import RateLimiter

__all__ = ["RateLimiter"]
