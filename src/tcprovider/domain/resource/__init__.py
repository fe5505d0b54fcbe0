from .resource_data import ResourceData, ResourceLifecycle
from .schema import Field, FieldType, Schema

__all__ = [
    "Field",
    "FieldType",
    "Schema",
    "ResourceData",
    "ResourceLifecycle",
]
