"""TencentDB for MariaDB operations."""
from typing import Any, Dict

from tcprovider.infrastructure.tencentcloud import MARIADB_API
from tcprovider.providers.tencentcloud.services.base_service import BaseService


class MariadbService(BaseService):
    api = MARIADB_API

    def describe_mariadb_upgrade_price_by_filter(self, params: Dict[str, Any]) -> Dict[str, Any]:
        """Price quote for resizing an instance (OriginalPrice, Price, Formula)."""
        return self._invoke("DescribeUpgradePrice", params)
