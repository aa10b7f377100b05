"""The capabilities schemas of all supported WFS versions.

Importing this package registers all versions in the :data:`schema_registry`.
Adding a new protocol version only requires a new module here.
"""

from . import wfs100, wfs110, wfs200  # noqa: F401  (registers the versions)
from .base import FieldMapping, Schema, SchemaRegistry, VersionSchemaBundle, schema_registry

__all__ = (
    "FieldMapping",
    "Schema",
    "SchemaRegistry",
    "VersionSchemaBundle",
    "schema_registry",
)
