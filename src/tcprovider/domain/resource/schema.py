"""Declarative resource schemas.

A schema describes the fields a resource type accepts, which of them the
user must supply, which ones the remote API fills in, and how each field is
named on the API side. Nested objects are expressed with ``FieldType.BLOCK``
(one object) or ``FieldType.LIST`` with a ``Schema`` element (many objects).
"""
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Iterator, List, Mapping, Optional, Tuple, Union

from tcprovider.domain.core.exceptions import SchemaValidationError


class FieldType(str, Enum):
    """Value types a field can hold."""
    STRING = "string"
    INT = "int"
    BOOL = "bool"
    FLOAT = "float"
    LIST = "list"
    MAP = "map"
    BLOCK = "block"


_SCALAR_CHECKS = {
    FieldType.STRING: lambda v: isinstance(v, str),
    FieldType.INT: lambda v: isinstance(v, int) and not isinstance(v, bool),
    FieldType.BOOL: lambda v: isinstance(v, bool),
    FieldType.FLOAT: lambda v: isinstance(v, (int, float)) and not isinstance(v, bool),
    FieldType.MAP: lambda v: isinstance(v, dict),
}


@dataclass(frozen=True)
class Field:
    """A single schema attribute."""
    type: FieldType
    required: bool = False
    optional: bool = False
    computed: bool = False
    force_new: bool = False
    default: Any = None
    description: str = ""
    api_name: Optional[str] = None
    elem: Union[FieldType, 'Schema', None] = None

    def __post_init__(self) -> None:
        if self.required and (self.optional or self.computed):
            raise ValueError("A required field cannot also be optional or computed")
        if not (self.required or self.optional or self.computed):
            raise ValueError("A field must be required, optional or computed")
        if self.default is not None and not self.optional:
            raise ValueError("Only optional fields can declare a default")
        if self.type == FieldType.BLOCK and not isinstance(self.elem, Schema):
            raise ValueError("A block field needs a nested schema")
        if self.type == FieldType.LIST and self.elem is None:
            raise ValueError("A list field needs an element type or schema")

    @property
    def computed_only(self) -> bool:
        return self.computed and not self.optional

    def check(self, value: Any, path: str) -> Dict[str, str]:
        """Return type errors for value, keyed by field path."""
        if self.type == FieldType.BLOCK:
            if not isinstance(value, dict):
                return {path: "expected an object"}
            return self.elem.collect_errors(value, prefix=f"{path}.")

        if self.type == FieldType.LIST:
            if not isinstance(value, list):
                return {path: "expected a list"}
            errors: Dict[str, str] = {}
            for index, item in enumerate(value):
                item_path = f"{path}[{index}]"
                if isinstance(self.elem, Schema):
                    if not isinstance(item, dict):
                        errors[item_path] = "expected an object"
                    else:
                        errors.update(self.elem.collect_errors(item, prefix=f"{item_path}."))
                elif not _SCALAR_CHECKS[self.elem](item):
                    errors[item_path] = f"expected {self.elem.value}"
            return errors

        if not _SCALAR_CHECKS[self.type](value):
            return {path: f"expected {self.type.value}, got {type(value).__name__}"}
        return {}


class Schema:
    """An ordered collection of named fields."""

    def __init__(self, fields: Mapping[str, Field]):
        self.fields: Dict[str, Field] = dict(fields)

    def __getitem__(self, name: str) -> Field:
        return self.fields[name]

    def __contains__(self, name: object) -> bool:
        return name in self.fields

    def __iter__(self) -> Iterator[str]:
        return iter(self.fields)

    def items(self) -> Iterator[Tuple[str, Field]]:
        return iter(self.fields.items())

    @property
    def force_new_fields(self) -> List[str]:
        return [name for name, field in self.fields.items() if field.force_new]

    def collect_errors(self, config: Mapping[str, Any], prefix: str = "") -> Dict[str, str]:
        """Collect every validation problem in config without raising."""
        errors: Dict[str, str] = {}

        for key in config:
            if key not in self.fields:
                errors[f"{prefix}{key}"] = "unknown field"

        for name, field in self.fields.items():
            path = f"{prefix}{name}"
            value = config.get(name)
            if value is None:
                if field.required:
                    errors[path] = "required field is missing"
                continue
            if field.computed_only:
                errors[path] = "computed field cannot be set"
                continue
            errors.update(field.check(value, path))

        return errors

    def validate(self, config: Mapping[str, Any], type_name: str) -> None:
        """
        Validate a declared configuration.

        Raises:
            SchemaValidationError: Listing every problem found
        """
        errors = self.collect_errors(config)
        if errors:
            raise SchemaValidationError(type_name, errors)

    def apply_defaults(self, config: Mapping[str, Any]) -> Dict[str, Any]:
        """Return a copy of config with declared defaults filled in."""
        result = dict(config)
        for name, field in self.fields.items():
            value = result.get(name)
            if value is None and field.default is not None:
                result[name] = field.default
            elif field.type == FieldType.BLOCK and isinstance(value, dict):
                result[name] = field.elem.apply_defaults(value)
        return result

    def to_api(self, values: Mapping[str, Any]) -> Dict[str, Any]:
        """Map declared values to API parameter names, dropping unset ones."""
        params: Dict[str, Any] = {}
        for name, field in self.fields.items():
            value = values.get(name)
            if field.api_name is None or value is None or field.computed_only:
                continue
            params[field.api_name] = _value_to_api(field, value)
        return params

    def from_api(self, payload: Mapping[str, Any]) -> Dict[str, Any]:
        """Map an API object back to field names, skipping absent keys."""
        values: Dict[str, Any] = {}
        for name, field in self.fields.items():
            if field.api_name is None or payload.get(field.api_name) is None:
                continue
            values[name] = _value_from_api(field, payload[field.api_name])
        return values


def _value_to_api(field: Field, value: Any) -> Any:
    if field.type == FieldType.BLOCK:
        return field.elem.to_api(value)
    if field.type == FieldType.LIST and isinstance(field.elem, Schema):
        return [field.elem.to_api(item) for item in value]
    return value


def _value_from_api(field: Field, value: Any) -> Any:
    if field.type == FieldType.BLOCK and isinstance(value, dict):
        return field.elem.from_api(value)
    if field.type == FieldType.LIST and isinstance(field.elem, Schema) and isinstance(value, list):
        return [field.elem.from_api(item) for item in value]
    return value
