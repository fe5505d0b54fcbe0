"""Base TencentCloud handlers with common lifecycle functionality."""
import logging
import time
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple, TypeVar

from tcprovider.config.schemas import RetryConfig
from tcprovider.domain.resource import FieldType, ResourceData, Schema
from tcprovider.helpers.logger import get_log_id
from tcprovider.infrastructure.protection import RateLimiter
from tcprovider.infrastructure.resilience import (
    AsyncTaskPoller,
    ExponentialBackoffStrategy,
    retry_call,
)
from tcprovider.infrastructure.tencentcloud import TencentCloudClient
from tcprovider.infrastructure.utilities.file import write_json_file

T = TypeVar('T')

logger = logging.getLogger(__name__)

RESULT_OUTPUT_FILE = "result_output_file"


class BaseHandler(ABC):
    """Shared dependencies and retry helpers for every handler."""

    type_name: str
    schema: Schema

    def __init__(self,
                 client: TencentCloudClient,
                 rate_limiter: RateLimiter,
                 retry_config: Optional[RetryConfig] = None,
                 sleep: Callable[[float], None] = time.sleep,
                 clock: Callable[[], float] = time.monotonic) -> None:
        """
        Initialize handler with common dependencies.

        Args:
            client: Shared API client
            rate_limiter: Admission control shared by all services
            retry_config: Write/read budgets and polling intervals
            sleep: Sleep function, injectable for tests
            clock: Monotonic clock, injectable for tests
        """
        self._client = client
        self._rate_limiter = rate_limiter
        self._retry_config = retry_config or RetryConfig()
        self._sleep = sleep
        self._clock = clock

    def _strategy(self) -> ExponentialBackoffStrategy:
        return ExponentialBackoffStrategy(self._retry_config.min_interval, self._retry_config.max_interval)

    def _retry_write(self, operation: Callable[[], T], name: str) -> T:
        """Run a mutating call within the write retry budget."""
        return retry_call(operation, self._retry_config.write_timeout, name=name,
                          strategy=self._strategy(), sleep=self._sleep, clock=self._clock)

    def _retry_read(self, operation: Callable[[], T], name: str) -> T:
        """Run a lookup within the read retry budget."""
        return retry_call(operation, self._retry_config.read_timeout, name=name,
                          strategy=self._strategy(), sleep=self._sleep, clock=self._clock)

    def _new_poller(self,
                    query_status: Callable[[str], Tuple[str, Optional[str]]],
                    success_statuses: Iterable[str],
                    pending_statuses: Iterable[str],
                    description: str = "") -> AsyncTaskPoller:
        """Poller for a remote task triggered by a write, bounded by the write budget."""
        return AsyncTaskPoller(
            query_status,
            timeout=self._retry_config.write_timeout,
            success_statuses=success_statuses,
            pending_statuses=pending_statuses,
            min_interval=self._retry_config.min_interval,
            max_interval=self._retry_config.max_interval,
            description=description,
            sleep=self._sleep,
            clock=self._clock,
        )


class ResourceHandler(BaseHandler):
    """
    Lifecycle handler for one managed resource type.

    Subclasses without an in-place update set ``supports_update`` to False;
    the provider then treats every change as requiring replacement.
    """

    supports_update: bool = True

    @abstractmethod
    def create(self, data: ResourceData) -> None:
        """
        Create the remote object and assign data's identifier.

        Raises:
            InfrastructureError: If the remote call fails
        """

    @abstractmethod
    def read(self, data: ResourceData) -> None:
        """
        Refresh data from the remote object.

        A missing remote object clears the identifier instead of raising.
        """

    def update(self, data: ResourceData) -> None:
        raise NotImplementedError(f"{self.type_name} does not support in-place update")

    @abstractmethod
    def delete(self, data: ResourceData) -> None:
        """Remove the remote object."""

    def importer(self, data: ResourceData) -> List[ResourceData]:
        """Adopt an existing object by identifier; the default passes it through."""
        return [data]

    def _mark_not_found(self, data: ResourceData) -> None:
        logger.warning(
            f"[WARN]{get_log_id()} resource `{self.type_name}` [{data.id}] not found, "
            f"please check if it has been deleted."
        )
        data.set_id("")


class ActionResourceHandler(ResourceHandler):
    """
    Resource that triggers a one-shot remote action on create.

    Nothing persists remotely that could be read back or removed, so read and
    delete only keep the local record.
    """

    supports_update = False

    def read(self, data: ResourceData) -> None:
        logger.debug(f"{get_log_id()} {self.type_name} [{data.id}] has no remote state to refresh")

    def delete(self, data: ResourceData) -> None:
        logger.debug(f"{get_log_id()} {self.type_name} [{data.id}] has no remote state to remove")


class SchemaMappedResourceHandler(ResourceHandler):
    """
    CRUD resource whose fields map directly onto API parameters.

    Create sends every declared value, update sends only the changed ones
    and read maps the remote object back through the schema. Map-typed
    fields are pass-through documents and keep the declared value on read.
    """

    @abstractmethod
    def _create_remote(self, params: Dict[str, Any]) -> Any:
        """Create the object and return its identifier."""

    @abstractmethod
    def _describe_remote(self, resource_id: str) -> Optional[Dict[str, Any]]:
        """Remote object, or None when it does not exist."""

    @abstractmethod
    def _modify_remote(self, data: ResourceData, params: Dict[str, Any]) -> None:
        """Apply changed parameters to the object."""

    @abstractmethod
    def _delete_remote(self, data: ResourceData) -> None:
        """Delete the object."""

    def _after_read(self, data: ResourceData, remote: Dict[str, Any]) -> None:
        """Hook for values the schema mapping cannot express."""

    def create(self, data: ResourceData) -> None:
        params = self.schema.to_api(self._declared_values(data))
        resource_id = self._retry_write(lambda: self._create_remote(params), f"create {self.type_name}")
        data.set_id(str(resource_id))
        self.read(data)

    def read(self, data: ResourceData) -> None:
        remote = self._retry_read(lambda: self._describe_remote(data.id), f"read {self.type_name}")
        if remote is None:
            self._mark_not_found(data)
            return

        for name, value in self.schema.from_api(remote).items():
            if self.schema[name].type != FieldType.MAP:
                data.set(name, value)
        self._after_read(data, remote)

    def update(self, data: ResourceData) -> None:
        changed = {
            name: data.get(name) for name in data.changed_keys()
            if not self.schema[name].computed_only
        }
        if changed:
            params = self.schema.to_api(changed)
            self._retry_write(lambda: self._modify_remote(data, params), f"update {self.type_name}")
        self.read(data)

    def delete(self, data: ResourceData) -> None:
        self._retry_write(lambda: self._delete_remote(data), f"delete {self.type_name}")

    def _declared_values(self, data: ResourceData) -> Dict[str, Any]:
        return {name: data.get(name) for name in self.schema}


class DataSourceHandler(BaseHandler):
    """Read-only lookup whose result may also be written to a JSON file."""

    @abstractmethod
    def read(self, data: ResourceData) -> None:
        """Populate computed fields and assign the identifier."""

    def write_output(self, data: ResourceData) -> None:
        """Write the resolved record to ``result_output_file`` when one is configured."""
        output_file = data.get(RESULT_OUTPUT_FILE)
        if not output_file:
            return
        record = {k: v for k, v in data.to_dict().items() if k != RESULT_OUTPUT_FILE}
        write_json_file(output_file, record)
        logger.info(f"{get_log_id()} {self.type_name} result written to {output_file}")
