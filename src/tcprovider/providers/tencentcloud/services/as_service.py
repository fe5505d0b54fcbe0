"""Auto Scaling (as) operations."""
from typing import Any, Dict

from tcprovider.infrastructure.tencentcloud import AS_API
from tcprovider.providers.tencentcloud.services.base_service import BaseService


class AsService(BaseService):
    api = AS_API

    def execute_scaling_policy(self, params: Dict[str, Any]) -> str:
        """Trigger a scaling policy; returns the scaling activity id."""
        response = self._invoke("ExecuteScalingPolicy", params)
        return response["ActivityId"]
