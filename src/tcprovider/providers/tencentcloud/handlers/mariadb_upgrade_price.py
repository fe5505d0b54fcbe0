"""Data source quoting the price of resizing a MariaDB instance."""
from tcprovider.domain.resource import Field, FieldType, ResourceData, Schema
from tcprovider.providers.tencentcloud.handlers.base_handler import (
    RESULT_OUTPUT_FILE,
    DataSourceHandler,
)
from tcprovider.providers.tencentcloud.services import MariadbService

_PRICE_FIELDS = (
    ("original_price", "OriginalPrice"),
    ("price", "Price"),
    ("formula", "Formula"),
)


class MariadbUpgradePriceDataSource(DataSourceHandler):
    """Quote for the new memory and storage sizes of an instance."""

    type_name = "tencentcloud_mariadb_upgrade_price"
    schema = Schema({
        "instance_id": Field(FieldType.STRING, required=True,
                             description="Instance id, such as tdsql-ow728lmc."),
        "memory": Field(FieldType.INT, required=True,
                        description="Memory size in GB after the upgrade."),
        "storage": Field(FieldType.INT, required=True,
                         description="Storage size in GB after the upgrade."),
        "node_count": Field(FieldType.INT, optional=True,
                            description="New node count, zero keeps the current count."),
        "amount_unit": Field(FieldType.STRING, optional=True,
                             description="Price unit: pent (cent, the default) or microPent."),
        "original_price": Field(FieldType.INT, computed=True,
                                description="Original price in the selected unit."),
        "price": Field(FieldType.INT, computed=True,
                       description="Price after discount in the selected unit."),
        "formula": Field(FieldType.STRING, computed=True,
                         description="How the price change was calculated."),
        RESULT_OUTPUT_FILE: Field(FieldType.STRING, optional=True,
                                  description="Used to save results."),
    })

    def __init__(self, client, rate_limiter, retry_config=None, **kwargs):
        super().__init__(client, rate_limiter, retry_config, **kwargs)
        self._service = MariadbService(client, rate_limiter)

    def read(self, data: ResourceData) -> None:
        instance_id = data.get("instance_id")
        params = {
            "InstanceId": instance_id,
            "Memory": data.get("memory"),
            "Storage": data.get("storage"),
            "NodeCount": data.get("node_count") or 0,
        }
        amount_unit, ok = data.get_ok("amount_unit")
        if ok:
            params["AmountUnit"] = amount_unit

        quote = self._retry_read(
            lambda: self._service.describe_mariadb_upgrade_price_by_filter(params), "DescribeUpgradePrice"
        )
        for name, api_name in _PRICE_FIELDS:
            if quote.get(api_name) is not None:
                data.set(name, quote[api_name])

        data.set_id(instance_id)
        self.write_output(data)
