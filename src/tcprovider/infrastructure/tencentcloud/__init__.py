"""TencentCloud connectivity."""

from .client import AS_API, MARIADB_API, MPS_API, MYSQL_API, VPC_API, TencentCloudClient

__all__ = [
    "TencentCloudClient",
    "MYSQL_API",
    "AS_API",
    "MARIADB_API",
    "VPC_API",
    "MPS_API",
]
