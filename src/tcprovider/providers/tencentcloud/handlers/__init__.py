"""Resource and data source lifecycle handlers."""

from .as_execute_scaling_policy import AsExecuteScalingPolicyHandler
from .base_handler import (
    ActionResourceHandler,
    BaseHandler,
    DataSourceHandler,
    ResourceHandler,
    SchemaMappedResourceHandler,
)
from .mariadb_upgrade_price import MariadbUpgradePriceDataSource
from .mps_template import MpsTranscodeTemplateHandler, MpsWatermarkTemplateHandler
from .mps_workflow import MpsEnableWorkflowHandler, MpsWorkflowHandler
from .mysql_dr_instance_to_master import MysqlDrInstanceToMasterHandler
from .mysql_switch_proxy import MysqlSwitchProxyHandler
from .vpc_local_gateway import VpcLocalGatewayHandler

__all__ = [
    "BaseHandler",
    "ResourceHandler",
    "ActionResourceHandler",
    "SchemaMappedResourceHandler",
    "DataSourceHandler",
    "AsExecuteScalingPolicyHandler",
    "MariadbUpgradePriceDataSource",
    "MpsTranscodeTemplateHandler",
    "MpsWatermarkTemplateHandler",
    "MpsEnableWorkflowHandler",
    "MpsWorkflowHandler",
    "MysqlDrInstanceToMasterHandler",
    "MysqlSwitchProxyHandler",
    "VpcLocalGatewayHandler",
]
