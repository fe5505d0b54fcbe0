"""Per-instance resource record handed to lifecycle handlers."""
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Tuple

from tcprovider.domain.core.exceptions import InvalidStateTransitionError
from tcprovider.domain.resource.schema import Schema


class ResourceLifecycle(str, Enum):
    """Lifecycle of a resource instance as seen by its handler."""
    ABSENT = "absent"
    CREATING = "creating"
    PRESENT = "present"
    UPDATING = "updating"


_ALLOWED_TRANSITIONS = {
    ResourceLifecycle.ABSENT: {ResourceLifecycle.CREATING},
    ResourceLifecycle.CREATING: {ResourceLifecycle.PRESENT, ResourceLifecycle.ABSENT},
    ResourceLifecycle.PRESENT: {ResourceLifecycle.UPDATING, ResourceLifecycle.ABSENT},
    ResourceLifecycle.UPDATING: {ResourceLifecycle.PRESENT, ResourceLifecycle.ABSENT},
}


class ResourceData:
    """
    Declared configuration and known state of one resource instance.

    Values written by the handler through ``set`` shadow the configuration;
    ``has_change`` compares the configuration against the prior state the
    record was built from, so it reflects what the user changed rather than
    what the handler refreshed.
    """

    def __init__(self,
                 schema: Schema,
                 config: Optional[Mapping[str, Any]] = None,
                 state: Optional[Mapping[str, Any]] = None,
                 resource_id: str = "",
                 type_name: str = ""):
        self.schema = schema
        self.type_name = type_name
        # Only schema fields are state; the identifier travels separately.
        self._prior: Dict[str, Any] = {k: v for k, v in (state or {}).items() if k in schema}
        self._values: Dict[str, Any] = dict(self._prior)

        if config is not None:
            for name, field in schema.items():
                if name in config:
                    self._values[name] = config[name]
                elif not field.computed:
                    self._values[name] = None

        self._changes = {
            name for name in schema
            if self._values.get(name) != self._prior.get(name)
        }
        self._id = resource_id or ""
        self._lifecycle = ResourceLifecycle.PRESENT if self._id else ResourceLifecycle.ABSENT

    @property
    def id(self) -> str:
        return self._id

    @property
    def lifecycle(self) -> ResourceLifecycle:
        return self._lifecycle

    def set_id(self, resource_id: str) -> None:
        """Assign the identifier; an empty identifier marks the resource absent."""
        self._id = resource_id or ""
        if not self._id and self._lifecycle != ResourceLifecycle.ABSENT:
            self.transition(ResourceLifecycle.ABSENT)

    def transition(self, target: ResourceLifecycle) -> None:
        if target not in _ALLOWED_TRANSITIONS[self._lifecycle]:
            raise InvalidStateTransitionError(self._lifecycle.value, target.value)
        self._lifecycle = target

    def get(self, key: str) -> Any:
        return self._values.get(key)

    def get_ok(self, key: str) -> Tuple[Any, bool]:
        """Value and whether it is set to a non-zero value."""
        value = self._values.get(key)
        return value, bool(value)

    def get_ok_exists(self, key: str) -> Tuple[Any, bool]:
        """Value and whether it is set at all, so False and 0 count as set."""
        value = self._values.get(key)
        return value, value is not None

    def set(self, key: str, value: Any) -> None:
        if key not in self.schema:
            raise KeyError(f"{self.type_name or 'resource'} has no field {key}")
        self._values[key] = value

    def has_change(self, key: str) -> bool:
        return key in self._changes

    def changed_keys(self) -> List[str]:
        return sorted(self._changes)

    def to_dict(self) -> Dict[str, Any]:
        """Resolved record: the identifier plus every set field."""
        record: Dict[str, Any] = {"id": self._id}
        record.update({k: v for k, v in self._values.items() if v is not None})
        return record
