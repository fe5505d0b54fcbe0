"""Handler triggering an Auto Scaling policy on demand."""
import logging

from tcprovider.domain.resource import Field, FieldType, ResourceData, Schema
from tcprovider.helpers.logger import get_log_id
from tcprovider.providers.tencentcloud.handlers.base_handler import ActionResourceHandler
from tcprovider.providers.tencentcloud.services import AsService

logger = logging.getLogger(__name__)


class AsExecuteScalingPolicyHandler(ActionResourceHandler):
    """
    Executes a scaling policy once.

    The identifier is the scaling activity the execution started. Every
    field forces replacement, so applying a different configuration
    executes the policy again.
    """

    type_name = "tencentcloud_as_execute_scaling_policy"
    schema = Schema({
        "auto_scaling_policy_id": Field(
            FieldType.STRING, required=True, force_new=True,
            description="Id of the alarm-triggered scaling policy to execute.",
        ),
        "honor_cooldown": Field(
            FieldType.BOOL, optional=True, force_new=True,
            description="Whether to wait for the scaling group cooldown before executing.",
        ),
        "trigger_source": Field(
            FieldType.STRING, optional=True, force_new=True,
            description="Source that triggers the policy: API or CLOUD_MONITOR.",
        ),
    })

    def __init__(self, client, rate_limiter, retry_config=None, **kwargs):
        super().__init__(client, rate_limiter, retry_config, **kwargs)
        self._service = AsService(client, rate_limiter)

    def create(self, data: ResourceData) -> None:
        params = {}
        policy_id, ok = data.get_ok("auto_scaling_policy_id")
        if ok:
            params["AutoScalingPolicyId"] = policy_id
        honor_cooldown, ok = data.get_ok_exists("honor_cooldown")
        if ok:
            params["HonorCooldown"] = honor_cooldown
        trigger_source, ok = data.get_ok("trigger_source")
        if ok:
            params["TriggerSource"] = trigger_source

        activity_id = self._retry_write(
            lambda: self._service.execute_scaling_policy(params), "ExecuteScalingPolicy"
        )
        logger.info(f"{get_log_id()} scaling policy {policy_id} started activity {activity_id}")
        data.set_id(activity_id)
        self.read(data)
