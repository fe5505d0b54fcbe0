"""Configuration schemas."""

from .provider_schema import LoggingConfig, ProviderConfig, RateLimitConfig, RetryConfig

__all__ = [
    "ProviderConfig",
    "RetryConfig",
    "RateLimitConfig",
    "LoggingConfig",
]
