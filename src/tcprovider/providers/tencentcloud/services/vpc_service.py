"""Virtual Private Cloud (vpc) operations."""
from typing import Any, Dict, Optional

from tcprovider.infrastructure.tencentcloud import VPC_API
from tcprovider.providers.tencentcloud.services.base_service import BaseService


class VpcService(BaseService):
    api = VPC_API

    def create_local_gateway(self, params: Dict[str, Any]) -> str:
        """Create a CDC local gateway; returns its unique id."""
        response = self._invoke("CreateLocalGateway", params)
        return response["LocalGateway"]["UniqLocalGwId"]

    def describe_vpc_local_gateway_by_id(self, local_gateway_id: str) -> Optional[Dict[str, Any]]:
        response = self._invoke("DescribeLocalGateway", {
            "Filters": [{"Name": "local-gateway-id", "Values": [local_gateway_id]}],
            "Offset": 0,
            "Limit": 1,
        })
        return self._first(response.get("LocalGatewaySet"))

    def modify_local_gateway(self, params: Dict[str, Any]) -> None:
        self._invoke("ModifyLocalGateway", params)

    def delete_vpc_local_gateway_by_id(self, local_gateway_id: str, cdc_id: str, vpc_id: str) -> None:
        self._invoke("DeleteLocalGateway", {
            "LocalGatewayId": local_gateway_id,
            "CdcId": cdc_id,
            "VpcId": vpc_id,
        })
