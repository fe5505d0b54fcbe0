"""Handler promoting a MySQL disaster-recovery instance to master."""
import logging

from tcprovider.domain.resource import Field, FieldType, ResourceData, Schema
from tcprovider.domain.task import MYSQL_PENDING_STATUSES, MYSQL_SUCCESS_STATUSES
from tcprovider.helpers.logger import get_log_id
from tcprovider.providers.tencentcloud.handlers.base_handler import ResourceHandler
from tcprovider.providers.tencentcloud.services import MysqlService

logger = logging.getLogger(__name__)


class MysqlDrInstanceToMasterHandler(ResourceHandler):
    """
    Promotes a DR instance and waits for the switch to finish.

    The switch is asynchronous on the remote side: the trigger returns a
    request id whose status is polled until it succeeds, fails or the write
    budget runs out. Deleting the resource leaves the instance as it is.
    """

    # The misspelling is the published resource type name.
    type_name = "tencentcloud_mysql_dr_instance_to_mater"
    schema = Schema({
        "instance_id": Field(FieldType.STRING, required=True,
                             description="Disaster recovery instance id."),
    })

    def __init__(self, client, rate_limiter, retry_config=None, **kwargs):
        super().__init__(client, rate_limiter, retry_config, **kwargs)
        self._service = MysqlService(client, rate_limiter)

    def create(self, data: ResourceData) -> None:
        data.set_id(data.get("instance_id"))
        self.update(data)

    def read(self, data: ResourceData) -> None:
        instance = self._retry_read(
            lambda: self._service.describe_db_instance_by_id(data.id), "DescribeDBInstances"
        )
        if instance is None:
            self._mark_not_found(data)
            return
        data.set("instance_id", instance.get("InstanceId", data.id))

    def update(self, data: ResourceData) -> None:
        instance_id = data.get("instance_id") or data.id

        async_request_id = self._retry_write(
            lambda: self._service.switch_dr_instance_to_master(instance_id), "SwitchDrInstanceToMaster"
        )
        logger.info(f"{get_log_id()} switching {instance_id} to master, async request {async_request_id}")

        poller = self._new_poller(
            self._service.describe_async_request_info,
            success_statuses=MYSQL_SUCCESS_STATUSES,
            pending_statuses=MYSQL_PENDING_STATUSES,
            description=f"{instance_id} update mysql drInstanceToMater",
        )
        poller.wait(async_request_id)

        data.set_id(instance_id)
        self.read(data)

    def delete(self, data: ResourceData) -> None:
        logger.debug(f"{get_log_id()} {self.type_name} [{data.id}] delete leaves the instance unchanged")
