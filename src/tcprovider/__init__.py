"""TencentCloud Resource Provider - Root Package.

This package exposes TencentCloud resources (MariaDB pricing, Auto Scaling
policy execution, MySQL disaster-recovery promotion and proxy switching,
VPC local gateways, Media Processing Service workflows and templates) as
declarative, schema-validated infrastructure primitives.

Key Components:
    - config: Default configuration, environment expansion and validation
    - domain: Schemas, resource records and asynchronous task models
    - infrastructure: API client, retry, polling and rate limiting
    - providers: TencentCloud service wrappers and resource handlers

Usage:
    >>> from tcprovider import Provider
    >>> provider = Provider.from_environment()
    >>> record = provider.create(
    ...     "tencentcloud_as_execute_scaling_policy",
    ...     {"auto_scaling_policy_id": "asp-519acdug", "trigger_source": "API"},
    ... )
    >>> record["id"]
    'asc-...'
"""

from ._package import PACKAGE_NAME, __version__
from .provider import Provider

__package_name__ = PACKAGE_NAME

__all__ = ["Provider", "__version__"]
