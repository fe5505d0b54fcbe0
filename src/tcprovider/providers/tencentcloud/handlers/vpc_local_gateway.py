"""Handler for CDC local gateways."""
from typing import Any, Dict, Optional

from tcprovider.domain.resource import Field, FieldType, ResourceData, Schema
from tcprovider.providers.tencentcloud.handlers.base_handler import SchemaMappedResourceHandler
from tcprovider.providers.tencentcloud.services import VpcService


class VpcLocalGatewayHandler(SchemaMappedResourceHandler):
    """Local gateway of a CDC cluster; only the name can change in place."""

    type_name = "tencentcloud_vpc_local_gateway"
    schema = Schema({
        "local_gateway_name": Field(FieldType.STRING, required=True, api_name="LocalGatewayName",
                                    description="Name of the local gateway."),
        "vpc_id": Field(FieldType.STRING, required=True, force_new=True, api_name="VpcId",
                        description="VPC instance id."),
        "cdc_id": Field(FieldType.STRING, required=True, force_new=True, api_name="CdcId",
                        description="CDC instance id."),
    })

    def __init__(self, client, rate_limiter, retry_config=None, **kwargs):
        super().__init__(client, rate_limiter, retry_config, **kwargs)
        self._service = VpcService(client, rate_limiter)

    def _create_remote(self, params: Dict[str, Any]) -> str:
        return self._service.create_local_gateway(params)

    def _describe_remote(self, resource_id: str) -> Optional[Dict[str, Any]]:
        return self._service.describe_vpc_local_gateway_by_id(resource_id)

    def _after_read(self, data: ResourceData, remote: Dict[str, Any]) -> None:
        vpc_id = remote.get("UniqVpcId") or remote.get("VpcId")
        if vpc_id:
            data.set("vpc_id", vpc_id)

    def _modify_remote(self, data: ResourceData, params: Dict[str, Any]) -> None:
        self._service.modify_local_gateway({
            "LocalGatewayId": data.id,
            "LocalGatewayName": data.get("local_gateway_name"),
            "CdcId": data.get("cdc_id"),
            "VpcId": data.get("vpc_id"),
        })

    def _delete_remote(self, data: ResourceData) -> None:
        self._service.delete_vpc_local_gateway_by_id(data.id, data.get("cdc_id"), data.get("vpc_id"))
