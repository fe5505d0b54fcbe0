"""Provider facade: lifecycle operations over registered resource types."""
import time
from typing import Any, Callable, Dict, List, Mapping, Optional

import structlog

from tcprovider.config import ConfigurationManager
from tcprovider.config.schemas import ProviderConfig
from tcprovider.domain.core.exceptions import ForceNewRequiredError
from tcprovider.domain.resource import ResourceData, ResourceLifecycle
from tcprovider.helpers.logger import log_context, log_elapsed, setup_logging
from tcprovider.infrastructure.protection import RateLimiter
from tcprovider.infrastructure.tencentcloud import TencentCloudClient
from tcprovider.providers.tencentcloud import HandlerRegistry, register_tencentcloud_handlers
from tcprovider.providers.tencentcloud.handlers import DataSourceHandler, ResourceHandler

Record = Dict[str, Any]


class Provider:
    """
    Entry point for managing TencentCloud resources declaratively.

    Each operation validates the declared configuration against the type's
    schema, runs the matching handler under a fresh log id and returns the
    resolved record: ``{"id": ..., <field>: <value>, ...}``.

    One client and one rate limiter are shared by every handler, so
    concurrent operations from several threads draw on the same admission
    budget.
    """

    def __init__(self,
                 config: ProviderConfig,
                 client: Optional[TencentCloudClient] = None,
                 rate_limiter: Optional[RateLimiter] = None,
                 sleep: Callable[[float], None] = time.sleep,
                 clock: Callable[[], float] = time.monotonic):
        """
        Initialize the provider.

        Args:
            config: Validated provider configuration
            client: API client; built from config when omitted
            rate_limiter: Admission control; built from config.rate_limit when omitted
            sleep: Sleep function used by retries and polling
            clock: Monotonic clock used by retries and polling
        """
        self.config = config
        self._client = client or TencentCloudClient(config)
        self._rate_limiter = rate_limiter or RateLimiter(
            requests_per_second=config.rate_limit.default,
            window_size=config.rate_limit.window_size,
            overrides=config.rate_limit.actions,
        )
        self._sleep = sleep
        self._clock = clock
        self._registry = HandlerRegistry()
        register_tencentcloud_handlers(self._registry)
        self._logger = structlog.get_logger(__name__)

    @classmethod
    def from_environment(cls, config_file: Optional[str] = None) -> 'Provider':
        """
        Build a provider from defaults, an optional JSON file and the environment.

        Raises:
            ConfigurationError: If credentials are missing or a value is invalid
        """
        config = ConfigurationManager(config_file).get_provider_config()
        setup_logging(config.logging)
        return cls(config)

    def resource_types(self) -> List[str]:
        return self._registry.resource_types()

    def data_source_types(self) -> List[str]:
        return self._registry.data_source_types()

    def create(self, type_name: str, config: Mapping[str, Any]) -> Record:
        """
        Create a resource.

        Args:
            type_name: Registered resource type
            config: Declared field values

        Returns:
            The resolved record, including the assigned id

        Raises:
            UnsupportedResourceError: If type_name is not registered
            SchemaValidationError: If config does not match the schema
            InfrastructureError: If a remote call, retry or poll fails
        """
        handler = self._resource_handler(type_name)
        config = self._validated(handler, config)
        data = ResourceData(handler.schema, config, type_name=type_name)

        with log_context() as log_id, log_elapsed(f"create {type_name}"):
            data.transition(ResourceLifecycle.CREATING)
            try:
                handler.create(data)
            except Exception as e:
                self._logger.error("Create failed", type_name=type_name, error=str(e))
                raise
            if data.lifecycle == ResourceLifecycle.CREATING:
                data.transition(ResourceLifecycle.PRESENT)
            self._logger.info("Resource created", type_name=type_name, resource_id=data.id, log_id=log_id)

        return data.to_dict()

    def read(self, type_name: str, resource_id: str, state: Optional[Mapping[str, Any]] = None) -> Optional[Record]:
        """
        Refresh a resource from the remote side.

        Returns:
            The refreshed record, or None if the remote object no longer exists
        """
        handler = self._resource_handler(type_name)
        data = ResourceData(handler.schema, state=state, resource_id=resource_id, type_name=type_name)

        with log_context(), log_elapsed(f"read {type_name}"):
            handler.read(data)

        if not data.id:
            self._logger.info("Resource gone", type_name=type_name, resource_id=resource_id)
            return None
        return data.to_dict()

    def update(self,
               type_name: str,
               resource_id: str,
               state: Mapping[str, Any],
               config: Mapping[str, Any]) -> Optional[Record]:
        """
        Apply a changed configuration to an existing resource.

        Args:
            type_name: Registered resource type
            resource_id: Identifier of the existing resource
            state: Values recorded after the previous operation
            config: Newly declared field values

        Returns:
            The resolved record, or None if the resource disappeared meanwhile

        Raises:
            ForceNewRequiredError: If a changed field can only change by replacement
        """
        handler = self._resource_handler(type_name)
        config = self._validated(handler, config)
        data = ResourceData(handler.schema, config, state, resource_id, type_name)

        changed = data.changed_keys()
        if not changed:
            return self.read(type_name, resource_id, state)

        forced = [name for name in changed if handler.schema[name].force_new]
        if forced:
            raise ForceNewRequiredError(type_name, forced)
        if not handler.supports_update:
            raise ForceNewRequiredError(type_name, changed)

        with log_context() as log_id, log_elapsed(f"update {type_name}"):
            data.transition(ResourceLifecycle.UPDATING)
            try:
                handler.update(data)
            except Exception as e:
                self._logger.error("Update failed", type_name=type_name, resource_id=resource_id, error=str(e))
                raise
            if data.lifecycle == ResourceLifecycle.UPDATING:
                data.transition(ResourceLifecycle.PRESENT)
            self._logger.info("Resource updated", type_name=type_name, resource_id=data.id,
                              changed=changed, log_id=log_id)

        return data.to_dict() if data.id else None

    def delete(self, type_name: str, resource_id: str, state: Optional[Mapping[str, Any]] = None) -> None:
        """Remove a resource; the remote call is skipped for one-shot actions."""
        handler = self._resource_handler(type_name)
        data = ResourceData(handler.schema, state=state, resource_id=resource_id, type_name=type_name)

        with log_context(), log_elapsed(f"delete {type_name}"):
            handler.delete(data)
            data.set_id("")
            self._logger.info("Resource deleted", type_name=type_name, resource_id=resource_id)

    def import_resource(self, type_name: str, resource_id: str) -> List[Record]:
        """
        Adopt existing remote objects by identifier.

        Returns:
            One refreshed record per imported object still present remotely
        """
        handler = self._resource_handler(type_name)
        data = ResourceData(handler.schema, resource_id=resource_id, type_name=type_name)

        records = []
        with log_context(), log_elapsed(f"import {type_name}"):
            for imported in handler.importer(data):
                handler.read(imported)
                if imported.id:
                    records.append(imported.to_dict())
        return records

    def read_data_source(self, type_name: str, config: Mapping[str, Any]) -> Record:
        """
        Run a read-only lookup.

        Raises:
            UnsupportedResourceError: If type_name is not a registered data source
            SchemaValidationError: If config does not match the schema
        """
        handler = self._data_source_handler(type_name)
        config = self._validated(handler, config)
        data = ResourceData(handler.schema, config, type_name=type_name)

        with log_context(), log_elapsed(f"read data source {type_name}"):
            handler.read(data)

        return data.to_dict()

    def _resource_handler(self, type_name: str) -> ResourceHandler:
        handler_class = self._registry.resource(type_name)
        return handler_class(self._client, self._rate_limiter, self.config.retry,
                             sleep=self._sleep, clock=self._clock)

    def _data_source_handler(self, type_name: str) -> DataSourceHandler:
        handler_class = self._registry.data_source(type_name)
        return handler_class(self._client, self._rate_limiter, self.config.retry,
                             sleep=self._sleep, clock=self._clock)

    @staticmethod
    def _validated(handler: Any, config: Mapping[str, Any]) -> Dict[str, Any]:
        config = handler.schema.apply_defaults(config)
        handler.schema.validate(config, handler.type_name)
        return config
