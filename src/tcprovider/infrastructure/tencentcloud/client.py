import logging
import threading
from typing import Any, Dict, Optional, Tuple

from tencentcloud.common import credential
from tencentcloud.common.common_client import CommonClient
from tencentcloud.common.profile.client_profile import ClientProfile
from tencentcloud.common.profile.http_profile import HttpProfile

from tcprovider.config.schemas import ProviderConfig

logger = logging.getLogger(__name__)

# (service, API version) per API group
MYSQL_API = ("cdb", "2017-03-20")
AS_API = ("as", "2018-04-19")
MARIADB_API = ("mariadb", "2017-03-12")
VPC_API = ("vpc", "2017-03-12")
MPS_API = ("mps", "2019-06-12")


class TencentCloudClient:
    """
    Centralized TencentCloud connection management.
    Holds the credential and builds one API client per service on first use.
    """

    def __init__(self, config: ProviderConfig):
        """
        Initialize the connection from provider configuration.

        Args:
            config: Validated provider configuration
        """
        self.config = config
        self.region = config.region
        self.credential = credential.Credential(
            config.secret_id,
            config.secret_key,
            config.security_token
        )
        self._clients: Dict[Tuple[str, str], CommonClient] = {}
        self._lock = threading.Lock()

    def _build_profile(self, service: str) -> ClientProfile:
        http_profile = HttpProfile(
            protocol=self.config.protocol.lower(),
            endpoint=f"{service}.{self.config.domain}",
            reqTimeout=self.config.request_timeout,
        )
        return ClientProfile(httpProfile=http_profile)

    def _get_client(self, api: Tuple[str, str]) -> CommonClient:
        with self._lock:
            client = self._clients.get(api)
            if client is None:
                service, version = api
                logger.debug(f"Creating {service} client, version {version}, region {self.region}")
                client = CommonClient(service, version, self.credential, self.region,
                                      profile=self._build_profile(service))
                self._clients[api] = client
            return client

    def call(self, api: Tuple[str, str], action: str, params: Dict[str, Any]) -> Dict[str, Any]:
        """
        Invoke an API action.

        Args:
            api: (service, version) pair, e.g. MYSQL_API
            action: API action name, e.g. "SwitchDrInstanceToMaster"
            params: Request parameters keyed by API parameter name

        Returns:
            The decoded JSON response, including the top-level "Response" key

        Raises:
            TencentCloudSDKException: On any transport or API error, unchanged
        """
        return self._get_client(api).call_json(action, params)
