"""The building blocks for declaring how a capabilities document is read.

Each WFS version describes its capabilities in a differently shaped XML document.
Instead of writing parsing code per version, each version declares a
:class:`VersionSchemaBundle`: a set of named :class:`Schema` tables
that tell which XML node ends up at which key of the resulting object.
The :class:`~wfsclient.parsers.mapper.DocumentMapper` interprets these tables.

For example:

.. code-block:: python

    Schema(
        "FeatureType",
        [
            FieldMapping("./wfs:Name", "name"),
            FieldMapping("./wfs:Keywords", "keywords", multi=True),
        ],
    )
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

import semver

from wfsclient.exceptions import VersionNotSupported

logger = logging.getLogger(__name__)

__all__ = (
    "FieldMapping",
    "Schema",
    "VersionSchemaBundle",
    "SchemaRegistry",
    "schema_registry",
)


@dataclass(frozen=True)
class FieldMapping:
    """A single rule of a schema: which node(s) are stored under which key.

    :param selector: The ElementTree path, relative to the context element.
        It may end with an attribute step (e.g. ``./ows:ProviderSite/@xlink:href``).
    :param dest: The key to store the value in.
    :param multi: Whether all matches are collected in a list, or only the first one is used.
    :param schema: Name of the schema to map each match into a nested object.
    :param separator: Split the text of each match on this character,
        for values that are listed in a single element (e.g. ``places, amsterdam``).
        This requires ``multi=True``; the parts are collected in the same list.
    """

    selector: str
    dest: str
    multi: bool = False
    schema: str | None = None
    separator: str | None = None


@dataclass(frozen=True)
class Schema:
    """A named, ordered collection of field mappings that share one context element."""

    name: str
    fields: tuple[FieldMapping, ...]

    def __init__(self, name: str, fields):
        # Using object.__setattr__ because this is a frozen dataclass with a custom init.
        object.__setattr__(self, "name", name)
        object.__setattr__(self, "fields", tuple(fields))

    def __iter__(self):
        return iter(self.fields)


@dataclass(frozen=True)
class VersionSchemaBundle:
    """Everything needed to read the capabilities of one protocol version."""

    #: The protocol version, e.g. "2.0.0".
    version: str
    #: The namespace prefixes used by the selectors, as {prefix: uri}.
    namespaces: dict[str, str]
    #: All schemas by name. The "Main" schema is applied to the document root.
    schemas: dict[str, Schema]
    #: Known result encodings, as {code: label}. Informational only.
    result_formats: dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_schemas(cls, version, namespaces, schemas, result_formats=None):
        """Build the bundle from a list of schemas."""
        return cls(
            version=version,
            namespaces=dict(namespaces),
            schemas={schema.name: schema for schema in schemas},
            result_formats=dict(result_formats or {}),
        )


class SchemaRegistry:
    """Registry of all protocol versions that this client understands.

    The versions are kept in semantic version order, which is the order
    that version negotiation steps through.
    """

    def __init__(self):
        self._bundles: dict[str, VersionSchemaBundle] = {}
        self._versions: tuple[str, ...] = ()

    def register(self, bundle: VersionSchemaBundle) -> VersionSchemaBundle:
        """Register the schemas of a protocol version."""
        if not semver.Version.is_valid(bundle.version):
            raise ValueError(f"Invalid version number: {bundle.version!r}")
        if bundle.version in self._bundles:
            raise ValueError(f"Version {bundle.version} is already registered")

        logger.debug("Registering schemas for WFS %s", bundle.version)
        self._bundles[bundle.version] = bundle
        self._versions = tuple(sorted(self._bundles, key=semver.Version.parse))
        return bundle

    def __getitem__(self, version: str) -> VersionSchemaBundle:
        try:
            return self._bundles[version]
        except KeyError:
            raise VersionNotSupported(version) from None

    def __contains__(self, version: str) -> bool:
        return version in self._bundles

    def __len__(self):
        return len(self._bundles)

    @property
    def versions(self) -> tuple[str, ...]:
        """All supported versions, lowest first."""
        return self._versions

    @property
    def latest_version(self) -> str:
        """The highest supported version, which is used to start negotiation with."""
        if not self._versions:
            raise RuntimeError("No WFS versions are registered")
        return self._versions[-1]

    def get_result_format_label(self, version: str, code: str) -> str:
        """Tell the human-readable name of a result format.
        Unknown codes are returned as-is.
        """
        return self[version].result_formats.get(code, code)


#: The registry of all protocol versions, filled by the version modules.
schema_registry = SchemaRegistry()
