"""Media Processing Service (mps) operations.

Workflow ids and template definitions are integers on the API side but are
carried as string resource identifiers, so the by-id helpers convert. An
identifier that is not a number cannot name a remote object: lookups report
it as not found and deletes have nothing to remove.
"""
import logging
from typing import Any, Dict, Optional

from tcprovider.helpers.logger import get_log_id
from tcprovider.infrastructure.tencentcloud import MPS_API
from tcprovider.providers.tencentcloud.services.base_service import BaseService

logger = logging.getLogger(__name__)


def parse_numeric_id(resource_id: str) -> Optional[int]:
    """Integer form of a workflow id or template definition, or None if it has none."""
    try:
        return int(resource_id)
    except (TypeError, ValueError):
        logger.warning(f"[WARN]{get_log_id()} '{resource_id}' is not a numeric mps identifier")
        return None


class MpsService(BaseService):
    api = MPS_API

    # Workflows

    def create_workflow(self, params: Dict[str, Any]) -> int:
        response = self._invoke("CreateWorkflow", params)
        return response["WorkflowId"]

    def describe_mps_workflow_by_id(self, workflow_id: str) -> Optional[Dict[str, Any]]:
        numeric_id = parse_numeric_id(workflow_id)
        if numeric_id is None:
            return None
        response = self._invoke("DescribeWorkflows", {"WorkflowIds": [numeric_id]})
        return self._first(response.get("WorkflowInfoSet"))

    def modify_workflow(self, params: Dict[str, Any]) -> None:
        self._invoke("ModifyWorkflow", params)

    def delete_mps_workflow_by_id(self, workflow_id: str) -> None:
        numeric_id = parse_numeric_id(workflow_id)
        if numeric_id is None:
            return
        self._invoke("DeleteWorkflow", {"WorkflowId": numeric_id})

    def enable_workflow(self, workflow_id: int) -> None:
        self._invoke("EnableWorkflow", {"WorkflowId": workflow_id})

    def disable_workflow(self, workflow_id: int) -> None:
        self._invoke("DisableWorkflow", {"WorkflowId": workflow_id})

    # Transcode templates

    def create_transcode_template(self, params: Dict[str, Any]) -> int:
        response = self._invoke("CreateTranscodeTemplate", params)
        return response["Definition"]

    def describe_mps_transcode_template_by_id(self, definition: str) -> Optional[Dict[str, Any]]:
        numeric_id = parse_numeric_id(definition)
        if numeric_id is None:
            return None
        response = self._invoke("DescribeTranscodeTemplates", {"Definitions": [numeric_id]})
        return self._first(response.get("TranscodeTemplateSet"))

    def modify_transcode_template(self, params: Dict[str, Any]) -> None:
        self._invoke("ModifyTranscodeTemplate", params)

    def delete_mps_transcode_template_by_id(self, definition: str) -> None:
        numeric_id = parse_numeric_id(definition)
        if numeric_id is None:
            return
        self._invoke("DeleteTranscodeTemplate", {"Definition": numeric_id})

    # Watermark templates

    def create_watermark_template(self, params: Dict[str, Any]) -> int:
        response = self._invoke("CreateWatermarkTemplate", params)
        return response["Definition"]

    def describe_mps_watermark_template_by_id(self, definition: str) -> Optional[Dict[str, Any]]:
        numeric_id = parse_numeric_id(definition)
        if numeric_id is None:
            return None
        response = self._invoke("DescribeWatermarkTemplates", {"Definitions": [numeric_id]})
        return self._first(response.get("WatermarkTemplateSet"))

    def modify_watermark_template(self, params: Dict[str, Any]) -> None:
        self._invoke("ModifyWatermarkTemplate", params)

    def delete_mps_watermark_template_by_id(self, definition: str) -> None:
        numeric_id = parse_numeric_id(definition)
        if numeric_id is None:
            return
        self._invoke("DeleteWatermarkTemplate", {"Definition": numeric_id})
