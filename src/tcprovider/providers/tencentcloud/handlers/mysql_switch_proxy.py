"""Handler switching a MySQL instance's database proxy to its standby."""
from typing import List

from tcprovider.domain.core.exceptions import ValidationError
from tcprovider.domain.resource import Field, FieldType, ResourceData, Schema
from tcprovider.providers.tencentcloud.handlers.base_handler import ActionResourceHandler
from tcprovider.providers.tencentcloud.services import MysqlService

FIELD_SEPARATOR = "#"


class MysqlSwitchProxyHandler(ActionResourceHandler):
    """One-shot proxy switch; the identifier joins instance and proxy group."""

    type_name = "tencentcloud_mysql_switch_proxy"
    schema = Schema({
        "instance_id": Field(FieldType.STRING, required=True, force_new=True,
                             description="Instance id."),
        "proxy_group_id": Field(FieldType.STRING, required=True, force_new=True,
                                description="Proxy group id."),
    })

    def __init__(self, client, rate_limiter, retry_config=None, **kwargs):
        super().__init__(client, rate_limiter, retry_config, **kwargs)
        self._service = MysqlService(client, rate_limiter)

    def create(self, data: ResourceData) -> None:
        instance_id = data.get("instance_id")
        proxy_group_id = data.get("proxy_group_id")

        self._retry_write(
            lambda: self._service.switch_cdb_proxy(instance_id, proxy_group_id), "SwitchCDBProxy"
        )
        data.set_id(FIELD_SEPARATOR.join([instance_id, proxy_group_id]))
        self.read(data)

    def importer(self, data: ResourceData) -> List[ResourceData]:
        parts = data.id.split(FIELD_SEPARATOR)
        if len(parts) != 2 or not all(parts):
            raise ValidationError(
                f"id is broken, expected instance_id{FIELD_SEPARATOR}proxy_group_id, got {data.id}"
            )
        data.set("instance_id", parts[0])
        data.set("proxy_group_id", parts[1])
        return [data]
