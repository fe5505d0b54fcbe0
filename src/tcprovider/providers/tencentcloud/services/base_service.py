"""Base class for per-API-group service wrappers."""
import json
import logging
from typing import Any, Dict, List, Optional, Tuple

from tcprovider.helpers.logger import get_log_id
from tcprovider.infrastructure.protection import RateLimiter
from tcprovider.infrastructure.tencentcloud import TencentCloudClient

logger = logging.getLogger(__name__)


class BaseService:
    """
    One method per remote operation.

    Every call goes through ``_invoke``: admission check keyed by the action
    name, the API call itself, then a debug line with both bodies. Errors are
    logged and re-raised unchanged.
    """

    api: Tuple[str, str]

    def __init__(self, client: TencentCloudClient, rate_limiter: RateLimiter):
        self._client = client
        self._rate_limiter = rate_limiter

    def _invoke(self, action: str, params: Dict[str, Any]) -> Dict[str, Any]:
        log_id = get_log_id()
        request_body = json.dumps(params, ensure_ascii=False, default=str)

        self._rate_limiter.check(action)

        try:
            response = self._client.call(self.api, action, params)
        except Exception as e:
            logger.error(f"[CRITAL]{log_id} api[{action}] fail, request body [{request_body}], reason[{e}]")
            raise

        logger.debug(
            f"[DEBUG]{log_id} api[{action}] success, request body [{request_body}], "
            f"response body [{json.dumps(response, ensure_ascii=False, default=str)}]"
        )
        return response.get("Response", {})

    @staticmethod
    def _first(items: Optional[List[Dict[str, Any]]]) -> Optional[Dict[str, Any]]:
        """First element of a by-id lookup; an empty set means not found."""
        if not items:
            return None
        return items[0]
