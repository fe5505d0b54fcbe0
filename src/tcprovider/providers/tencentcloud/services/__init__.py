"""Service wrappers, one per TencentCloud API group."""

from .as_service import AsService
from .base_service import BaseService
from .mariadb_service import MariadbService
from .mps_service import MpsService
from .mysql_service import MysqlService
from .vpc_service import VpcService

__all__ = [
    "BaseService",
    "AsService",
    "MariadbService",
    "MpsService",
    "MysqlService",
    "VpcService",
]
