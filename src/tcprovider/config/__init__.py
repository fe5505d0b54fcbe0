"""Provider configuration package."""

from .defaults import DEFAULT_CONFIG, ConfigurationManager
from .schemas import LoggingConfig, ProviderConfig, RateLimitConfig, RetryConfig

__all__ = [
    "DEFAULT_CONFIG",
    "ConfigurationManager",
    "ProviderConfig",
    "RetryConfig",
    "RateLimitConfig",
    "LoggingConfig",
]
