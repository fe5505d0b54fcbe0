"""TencentDB for MySQL (cdb) operations."""
from typing import Any, Dict, Optional, Tuple

from tcprovider.infrastructure.tencentcloud import MYSQL_API
from tcprovider.providers.tencentcloud.services.base_service import BaseService


class MysqlService(BaseService):
    api = MYSQL_API

    def describe_db_instance_by_id(self, instance_id: str) -> Optional[Dict[str, Any]]:
        """Instance record, or None when the instance does not exist."""
        response = self._invoke("DescribeDBInstances", {"InstanceIds": [instance_id]})
        return self._first(response.get("Items"))

    def switch_dr_instance_to_master(self, instance_id: str) -> str:
        """Promote a disaster-recovery instance; returns the async request id."""
        response = self._invoke("SwitchDrInstanceToMaster", {"InstanceId": instance_id})
        return response["AsyncRequestId"]

    def describe_async_request_info(self, async_request_id: str) -> Tuple[str, Optional[str]]:
        """Status and diagnostic message of an asynchronous request."""
        response = self._invoke("DescribeAsyncRequestInfo", {"AsyncRequestId": async_request_id})
        return response.get("Status", ""), response.get("Info")

    def switch_cdb_proxy(self, instance_id: str, proxy_group_id: str) -> None:
        self._invoke("SwitchCDBProxy", {"InstanceId": instance_id, "ProxyGroupId": proxy_group_id})
