"""TencentCloud Registration - Register resource and data source handlers by type name."""
import logging
from typing import Dict, List, Type

from tcprovider.infrastructure.exceptions import UnsupportedResourceError
from tcprovider.providers.tencentcloud.handlers import (
    AsExecuteScalingPolicyHandler,
    DataSourceHandler,
    MariadbUpgradePriceDataSource,
    MpsEnableWorkflowHandler,
    MpsTranscodeTemplateHandler,
    MpsWatermarkTemplateHandler,
    MpsWorkflowHandler,
    MysqlDrInstanceToMasterHandler,
    MysqlSwitchProxyHandler,
    ResourceHandler,
    VpcLocalGatewayHandler,
)

logger = logging.getLogger(__name__)


class HandlerRegistry:
    """Maps resource and data source type names to their handler classes."""

    def __init__(self) -> None:
        self._resources: Dict[str, Type[ResourceHandler]] = {}
        self._data_sources: Dict[str, Type[DataSourceHandler]] = {}

    def register_resource(self, handler_class: Type[ResourceHandler]) -> None:
        if handler_class.type_name in self._resources:
            raise ValueError(f"Resource type {handler_class.type_name} is already registered")
        self._resources[handler_class.type_name] = handler_class
        logger.debug(f"Registered resource type {handler_class.type_name}")

    def register_data_source(self, handler_class: Type[DataSourceHandler]) -> None:
        if handler_class.type_name in self._data_sources:
            raise ValueError(f"Data source type {handler_class.type_name} is already registered")
        self._data_sources[handler_class.type_name] = handler_class
        logger.debug(f"Registered data source type {handler_class.type_name}")

    def resource(self, type_name: str) -> Type[ResourceHandler]:
        """
        Look up a resource handler class.

        Raises:
            UnsupportedResourceError: If no handler is registered for type_name
        """
        try:
            return self._resources[type_name]
        except KeyError:
            raise UnsupportedResourceError(f"Unsupported resource type: {type_name}") from None

    def data_source(self, type_name: str) -> Type[DataSourceHandler]:
        """
        Look up a data source handler class.

        Raises:
            UnsupportedResourceError: If no handler is registered for type_name
        """
        try:
            return self._data_sources[type_name]
        except KeyError:
            raise UnsupportedResourceError(f"Unsupported data source type: {type_name}") from None

    def resource_types(self) -> List[str]:
        return sorted(self._resources)

    def data_source_types(self) -> List[str]:
        return sorted(self._data_sources)


def register_tencentcloud_handlers(registry: HandlerRegistry) -> None:
    """Register every TencentCloud handler with registry."""
    for handler_class in (
        AsExecuteScalingPolicyHandler,
        MysqlDrInstanceToMasterHandler,
        MysqlSwitchProxyHandler,
        VpcLocalGatewayHandler,
        MpsWorkflowHandler,
        MpsEnableWorkflowHandler,
        MpsTranscodeTemplateHandler,
        MpsWatermarkTemplateHandler,
    ):
        registry.register_resource(handler_class)

    registry.register_data_source(MariadbUpgradePriceDataSource)
