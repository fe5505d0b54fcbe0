"""Provider configuration schemas."""
from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class RetryConfig(BaseModel):
    """Retry and polling budgets for remote calls."""

    write_timeout: float = Field(300.0,
                                 description="Overall budget in seconds for mutating calls and task polling")
    read_timeout: float = Field(180.0, description="Overall budget in seconds for read calls")
    min_interval: float = Field(0.5, description="First delay between attempts in seconds")
    max_interval: float = Field(10.0, description="Upper bound for the delay between attempts in seconds")

    @field_validator('write_timeout', 'read_timeout')
    @classmethod
    def validate_timeout(cls, v: float) -> float:
        """Validate timeouts."""
        if v <= 0:
            raise ValueError("Timeout must be positive")
        return v

    @field_validator('min_interval', 'max_interval')
    @classmethod
    def validate_interval(cls, v: float) -> float:
        """Validate intervals."""
        if v < 0:
            raise ValueError("Interval must be non-negative")
        return v

    @model_validator(mode='after')
    def validate_interval_relationship(self) -> 'RetryConfig':
        """Validate relationship between intervals."""
        if self.min_interval > self.max_interval:
            raise ValueError("Minimum interval cannot be greater than maximum interval")
        return self


class RateLimitConfig(BaseModel):
    """Per-action admission limits."""

    default: int = Field(20, description="Requests per second allowed for each API action")
    actions: Dict[str, int] = Field(default_factory=dict, description="Per-action overrides")
    window_size: float = Field(1.0, description="Window length in seconds")

    @field_validator('default')
    @classmethod
    def validate_default(cls, v: int) -> int:
        if v < 1:
            raise ValueError("Rate limit must be at least 1")
        return v

    @field_validator('actions')
    @classmethod
    def validate_actions(cls, v: Dict[str, int]) -> Dict[str, int]:
        for action, limit in v.items():
            if limit < 1:
                raise ValueError(f"Rate limit for {action} must be at least 1")
        return v


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = Field("INFO", description="Root log level")
    destination: str = Field("stdout", description="Where logs go: file, stdout or both")
    file_path: str = Field("tcprovider.log", description="Log file path when logging to a file")
    max_size_mb: int = Field(10, description="Rotate the log file after this many megabytes")
    backup_count: int = Field(5, description="Number of rotated log files to keep")

    @field_validator('level')
    @classmethod
    def validate_level(cls, v: str) -> str:
        level = v.upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Invalid log level: {v}")
        return level

    @field_validator('destination')
    @classmethod
    def validate_destination(cls, v: str) -> str:
        destination = v.lower()
        if destination not in ("file", "stdout", "both"):
            raise ValueError(f"Invalid log destination: {v}. Must be one of: file, stdout, both")
        return destination


class ProviderConfig(BaseModel):
    """Top-level provider configuration."""
    model_config = ConfigDict(frozen=True)

    secret_id: str = Field(..., description="TencentCloud API secret id")
    secret_key: str = Field(..., description="TencentCloud API secret key")
    security_token: Optional[str] = Field(None, description="Temporary credential token")
    region: str = Field("ap-guangzhou", description="Region every API call is made against")
    protocol: str = Field("HTTPS", description="HTTP or HTTPS")
    domain: str = Field("tencentcloudapi.com", description="Root domain of the API endpoints")
    request_timeout: int = Field(60, description="Per-request timeout in seconds")
    retry: RetryConfig = Field(default_factory=RetryConfig)
    rate_limit: RateLimitConfig = Field(default_factory=RateLimitConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @field_validator('secret_id', 'secret_key')
    @classmethod
    def validate_credential(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("Credential must not be empty")
        return v.strip()

    @field_validator('protocol')
    @classmethod
    def validate_protocol(cls, v: str) -> str:
        protocol = v.upper()
        if protocol not in ("HTTP", "HTTPS"):
            raise ValueError(f"Invalid protocol: {v}")
        return protocol

    @field_validator('request_timeout')
    @classmethod
    def validate_request_timeout(cls, v: int) -> int:
        if v < 1:
            raise ValueError("Request timeout must be at least 1 second")
        return v
