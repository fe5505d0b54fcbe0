"""Handlers for MPS workflows and their enabled state."""
from typing import Any, Dict, Optional

from tcprovider.domain.resource import Field, FieldType, ResourceData, Schema
from tcprovider.providers.tencentcloud.handlers.base_handler import (
    ResourceHandler,
    SchemaMappedResourceHandler,
)
from tcprovider.providers.tencentcloud.services import MpsService

WORKFLOW_STATUS_ENABLED = "Enabled"

COS_FILE_UPLOAD_TRIGGER_SCHEMA = Schema({
    "bucket": Field(FieldType.STRING, required=True, api_name="Bucket"),
    "region": Field(FieldType.STRING, required=True, api_name="Region"),
    "dir": Field(FieldType.STRING, optional=True, api_name="Dir"),
    "formats": Field(FieldType.LIST, optional=True, api_name="Formats", elem=FieldType.STRING),
})

TRIGGER_SCHEMA = Schema({
    "type": Field(FieldType.STRING, required=True, api_name="Type",
                  description="Trigger type, only CosFileUpload is supported."),
    "cos_file_upload_trigger": Field(FieldType.BLOCK, optional=True, api_name="CosFileUploadTrigger",
                                     elem=COS_FILE_UPLOAD_TRIGGER_SCHEMA),
})

OUTPUT_STORAGE_SCHEMA = Schema({
    "type": Field(FieldType.STRING, required=True, api_name="Type"),
    "cos_output_storage": Field(FieldType.BLOCK, optional=True, api_name="CosOutputStorage", elem=Schema({
        "bucket": Field(FieldType.STRING, optional=True, api_name="Bucket"),
        "region": Field(FieldType.STRING, optional=True, api_name="Region"),
    })),
})


class MpsWorkflowHandler(SchemaMappedResourceHandler):
    """Workflow started by file uploads to a COS bucket."""

    type_name = "tencentcloud_mps_workflow"
    schema = Schema({
        "workflow_name": Field(FieldType.STRING, required=True, api_name="WorkflowName",
                               description="Workflow name, up to 40 characters."),
        "trigger": Field(FieldType.BLOCK, required=True, api_name="Trigger", elem=TRIGGER_SCHEMA,
                         description="Input rule bound to the workflow."),
        "output_storage": Field(FieldType.BLOCK, optional=True, api_name="OutputStorage",
                                elem=OUTPUT_STORAGE_SCHEMA),
        "output_dir": Field(FieldType.STRING, optional=True, api_name="OutputDir"),
        "media_process_task": Field(FieldType.MAP, optional=True, api_name="MediaProcessTask",
                                    description="Media processing parameters, passed through as-is."),
        "task_priority": Field(FieldType.INT, optional=True, api_name="TaskPriority"),
        "task_notify_config": Field(FieldType.MAP, optional=True, api_name="TaskNotifyConfig",
                                    description="Event notification settings, passed through as-is."),
        "status": Field(FieldType.STRING, computed=True, api_name="Status",
                        description="Enabled or Disabled."),
    })

    def __init__(self, client, rate_limiter, retry_config=None, **kwargs):
        super().__init__(client, rate_limiter, retry_config, **kwargs)
        self._service = MpsService(client, rate_limiter)

    def _create_remote(self, params: Dict[str, Any]) -> int:
        return self._service.create_workflow(params)

    def _describe_remote(self, resource_id: str) -> Optional[Dict[str, Any]]:
        return self._service.describe_mps_workflow_by_id(resource_id)

    def _modify_remote(self, data: ResourceData, params: Dict[str, Any]) -> None:
        self._service.modify_workflow(dict(params, WorkflowId=int(data.id)))

    def _delete_remote(self, data: ResourceData) -> None:
        self._service.delete_mps_workflow_by_id(data.id)


class MpsEnableWorkflowHandler(ResourceHandler):
    """Enabled/disabled switch of an existing workflow."""

    type_name = "tencentcloud_mps_enable_workflow"
    schema = Schema({
        "workflow_id": Field(FieldType.INT, required=True, force_new=True,
                             description="Workflow id."),
        "enabled": Field(FieldType.BOOL, required=True,
                         description="true enables the workflow, false disables it."),
    })

    def __init__(self, client, rate_limiter, retry_config=None, **kwargs):
        super().__init__(client, rate_limiter, retry_config, **kwargs)
        self._service = MpsService(client, rate_limiter)

    def create(self, data: ResourceData) -> None:
        data.set_id(str(data.get("workflow_id")))
        self.update(data)

    def read(self, data: ResourceData) -> None:
        workflow = self._retry_read(
            lambda: self._service.describe_mps_workflow_by_id(data.id), "DescribeWorkflows"
        )
        if workflow is None:
            self._mark_not_found(data)
            return
        data.set("workflow_id", int(workflow.get("WorkflowId", data.id)))
        data.set("enabled", workflow.get("Status") == WORKFLOW_STATUS_ENABLED)

    def update(self, data: ResourceData) -> None:
        workflow_id = int(data.id)
        if data.get("enabled"):
            self._retry_write(lambda: self._service.enable_workflow(workflow_id), "EnableWorkflow")
        else:
            self._retry_write(lambda: self._service.disable_workflow(workflow_id), "DisableWorkflow")
        self.read(data)

    def delete(self, data: ResourceData) -> None:
        """Leaves the workflow in its current state."""
