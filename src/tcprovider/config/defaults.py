# src/tcprovider/config/defaults.py
import copy
import json
import os
from typing import Any, Dict, Optional

from pydantic import ValidationError as PydanticValidationError

from tcprovider.config.schemas import LoggingConfig, ProviderConfig, RateLimitConfig, RetryConfig
from tcprovider.domain.core.exceptions import ConfigurationError

CONFIG_FILE_ENV = "TENCENTCLOUD_PROVIDER_CONFIG"

DEFAULT_CONFIG = {
    # Credentials and endpoint
    "TENCENTCLOUD_SECRET_ID": "${TENCENTCLOUD_SECRET_ID:}",
    "TENCENTCLOUD_SECRET_KEY": "${TENCENTCLOUD_SECRET_KEY:}",
    "TENCENTCLOUD_SECURITY_TOKEN": "${TENCENTCLOUD_SECURITY_TOKEN:}",
    "TENCENTCLOUD_REGION": "${TENCENTCLOUD_REGION:ap-guangzhou}",
    "TENCENTCLOUD_PROTOCOL": "${TENCENTCLOUD_PROTOCOL:HTTPS}",
    "TENCENTCLOUD_DOMAIN": "${TENCENTCLOUD_DOMAIN:tencentcloudapi.com}",
    "TENCENTCLOUD_REQUEST_TIMEOUT": "${TENCENTCLOUD_REQUEST_TIMEOUT:60}",

    # Retry and polling budgets (seconds)
    "RETRY_CONFIG": {
        "write_timeout": 300,
        "read_timeout": 180,
        "min_interval": 0.5,
        "max_interval": 10
    },

    # Per-action admission limits (requests per window)
    "RATE_LIMIT_CONFIG": {
        "default": 20,
        "window_size": 1,
        "actions": {}
    },

    # Logging configuration
    "LOGGING_CONFIG": {
        "level": "${LOG_LEVEL:INFO}",
        "destination": "${LOG_DESTINATION:stdout}",
        "file": {
            "path": "${TENCENTCLOUD_PROVIDER_LOGDIR:.}/tcprovider.log",
            "max_size_mb": 10,
            "backup_count": 5
        }
    }
}


class ConfigurationManager:
    """
    Manages provider configuration with defaults and overrides.

    This class handles:
    - Loading default configuration
    - Applying user configuration from a JSON file
    - Applying environment variable overrides
    - Variable interpolation
    - Configuration validation
    """

    def __init__(self, config_file: Optional[str] = None):
        """
        Initialize configuration manager with defaults.

        Args:
            config_file: Optional path to a JSON configuration file. If not provided,
                        the TENCENTCLOUD_PROVIDER_CONFIG environment variable is consulted.
        """
        self._config = copy.deepcopy(DEFAULT_CONFIG)

        config_file = config_file or os.environ.get(CONFIG_FILE_ENV)
        if config_file:
            self._load_config_file(config_file)

        # Load environment variables (highest priority)
        self._load_env_vars()

    def _load_config_file(self, config_path: str) -> None:
        """Load configuration from file."""
        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                user_config = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise ConfigurationError(f"Failed to load configuration: {str(e)}") from e
        self.update_config(user_config)

    def _load_env_vars(self) -> None:
        """Load and apply environment variable overrides."""
        direct_mappings = [
            "TENCENTCLOUD_SECRET_ID",
            "TENCENTCLOUD_SECRET_KEY",
            "TENCENTCLOUD_SECURITY_TOKEN",
            "TENCENTCLOUD_REGION",
            "TENCENTCLOUD_PROTOCOL",
            "TENCENTCLOUD_DOMAIN",
            "TENCENTCLOUD_REQUEST_TIMEOUT",
        ]

        for env_var in direct_mappings:
            if env_var in os.environ:
                self._config[env_var] = os.environ[env_var]

    def _interpolate_values(self, config: Any) -> Any:
        """Interpolate ${VAR} and ${VAR:default} placeholders in configuration values."""
        if isinstance(config, str):
            if config.startswith("${") and config.endswith("}") and "}" not in config[2:-1]:
                var_name = config[2:-1]
                if ":" in var_name:
                    var_name, default = var_name.split(":", 1)
                    return os.environ.get(var_name, default)
                return os.environ.get(var_name, config)
            if "${" in config:
                # Embedded placeholders such as "${DIR:.}/file.log"
                head, _, rest = config.partition("${")
                placeholder, _, tail = rest.partition("}")
                return head + self._interpolate_values("${" + placeholder + "}") + self._interpolate_values(tail)
            return config
        elif isinstance(config, dict):
            return {k: self._interpolate_values(v) for k, v in config.items()}
        elif isinstance(config, list):
            return [self._interpolate_values(v) for v in config]
        return config

    def update_config(self, user_config: Dict[str, Any]) -> None:
        """
        Update configuration with user-provided values.

        Args:
            user_config: Configuration dictionary, nested sections are merged
        """
        def deep_update(target: Dict[str, Any], source: Dict[str, Any]) -> None:
            for key, value in source.items():
                if key in target and isinstance(target[key], dict) and isinstance(value, dict):
                    deep_update(target[key], value)
                else:
                    target[key] = value

        deep_update(self._config, user_config)

    def get_config(self) -> Dict[str, Any]:
        """
        Get the complete configuration with all interpolations applied.

        Returns:
            Dict containing the complete configuration
        """
        return self._interpolate_values(self._config)

    def get_provider_config(self) -> ProviderConfig:
        """
        Build and validate the typed provider configuration.

        Returns:
            Validated ProviderConfig

        Raises:
            ConfigurationError: If credentials are missing or any value is invalid
        """
        config = self.get_config()

        missing = [
            key for key in ("TENCENTCLOUD_SECRET_ID", "TENCENTCLOUD_SECRET_KEY")
            if not config.get(key)
        ]
        if missing:
            raise ConfigurationError(
                f"{', '.join(missing)} must be set in the environment or the configuration file",
                missing_fields=missing,
            )

        logging_config = config["LOGGING_CONFIG"]
        try:
            return ProviderConfig(
                secret_id=config["TENCENTCLOUD_SECRET_ID"],
                secret_key=config["TENCENTCLOUD_SECRET_KEY"],
                security_token=config.get("TENCENTCLOUD_SECURITY_TOKEN") or None,
                region=config["TENCENTCLOUD_REGION"],
                protocol=config["TENCENTCLOUD_PROTOCOL"],
                domain=config["TENCENTCLOUD_DOMAIN"],
                request_timeout=config["TENCENTCLOUD_REQUEST_TIMEOUT"],
                retry=RetryConfig(**config["RETRY_CONFIG"]),
                rate_limit=RateLimitConfig(**config["RATE_LIMIT_CONFIG"]),
                logging=LoggingConfig(
                    level=logging_config["level"],
                    destination=logging_config["destination"],
                    file_path=logging_config["file"]["path"],
                    max_size_mb=logging_config["file"]["max_size_mb"],
                    backup_count=logging_config["file"]["backup_count"],
                ),
            )
        except PydanticValidationError as e:
            raise ConfigurationError(f"Invalid provider configuration: {e}") from e
