"""Translating an XML document into plain Python objects.

The :class:`DocumentMapper` has no knowledge of WFS itself.
It interprets the :class:`~wfsclient.schemas.base.Schema` tables
of a :class:`~wfsclient.schemas.base.VersionSchemaBundle`, for example:

.. code-block:: python

    mapper = DocumentMapper(schema_registry["1.0.0"])
    capabilities = mapper.build_object(root, "Main")

Which produces ``{"service": {"name": ..., ...}, "featureTypes": [...]}``.
"""

from __future__ import annotations

from dataclasses import dataclass
from xml.etree.ElementTree import Element

from django.core.exceptions import ImproperlyConfigured

from wfsclient.exceptions import ExternalParsingError
from wfsclient.schemas.base import FieldMapping, VersionSchemaBundle

from .xml import NSElement, parse_qname

__all__ = ("DocumentMapper",)


@dataclass(frozen=True)
class CompiledField:
    """A field mapping with its selector split into the element path and attribute name."""

    mapping: FieldMapping
    path: str
    attribute: str | None  # fully qualified attribute name

    def select(self, context: Element, namespaces: dict[str, str]) -> list:
        """Find the matching nodes, or attribute values, relative to the context element."""
        if self.attribute is None:
            return context.findall(self.path, namespaces)
        else:
            return [
                element.attrib[self.attribute]
                for element in context.findall(self.path, namespaces)
                if self.attribute in element.attrib
            ]


class DocumentMapper:
    """Build nested objects from an XML tree, using the schemas of a version bundle.

    All selectors are checked when the mapper is created,
    so a missing namespace prefix or unknown schema name is reported
    as a configuration error instead of surfacing while reading a document.
    """

    def __init__(self, bundle: VersionSchemaBundle):
        self.bundle = bundle
        self.namespaces = bundle.namespaces
        self._schemas = {
            name: [self._compile(name, mapping) for mapping in schema]
            for name, schema in bundle.schemas.items()
        }

    def _compile(self, schema_name, mapping: FieldMapping) -> CompiledField:
        path, attribute = mapping.selector, None
        head, _, tail = mapping.selector.rpartition("/")
        if tail.startswith("@"):
            path = head or "."
            try:
                attribute = parse_qname(tail, self.namespaces)[1:]
            except ExternalParsingError as e:
                raise ImproperlyConfigured(
                    f"WFS {self.bundle.version} schema '{schema_name}': {e}"
                ) from None

        if mapping.schema is not None and mapping.schema not in self.bundle.schemas:
            raise ImproperlyConfigured(
                f"WFS {self.bundle.version} schema '{schema_name}' references"
                f" unknown schema '{mapping.schema}'."
            )
        if mapping.schema is not None and attribute is not None:
            raise ImproperlyConfigured(
                f"WFS {self.bundle.version} schema '{schema_name}': attribute selector"
                f" '{mapping.selector}' can't be mapped into a nested schema."
            )
        if mapping.separator is not None and (not mapping.multi or mapping.schema is not None):
            raise ImproperlyConfigured(
                f"WFS {self.bundle.version} schema '{schema_name}': selector"
                f" '{mapping.selector}' can only use a separator for a list of text values."
            )

        # Let ElementTree compile the path, which reports unknown prefixes.
        try:
            Element("validate").findall(path, self.namespaces)
        except SyntaxError as e:
            raise ImproperlyConfigured(
                f"WFS {self.bundle.version} schema '{schema_name}' has an invalid"
                f" selector '{mapping.selector}': {e}"
            ) from None

        return CompiledField(mapping=mapping, path=path, attribute=attribute)

    def build_object(self, element: NSElement, schema_name: str = "Main") -> dict:
        """Apply a schema to the element, producing a plain dict.

        Single-valued keys are left out when nothing matched,
        multi-valued keys are always present (possibly as an empty list).
        """
        try:
            fields = self._schemas[schema_name]
        except KeyError:
            raise KeyError(f"No schema named '{schema_name}' for WFS {self.bundle.version}") from None

        result = {}
        for field in fields:
            matches = field.select(element, self.namespaces)
            if field.mapping.separator is not None:
                result[field.mapping.dest] = [
                    part.strip()
                    for match in matches
                    for part in self._get_value(field, match).split(field.mapping.separator)
                    if part.strip()
                ]
            elif field.mapping.multi:
                result[field.mapping.dest] = [self._get_value(field, match) for match in matches]
            elif matches:
                result[field.mapping.dest] = self._get_value(field, matches[0])

        return result

    def _get_value(self, field: CompiledField, match):
        if field.attribute is not None:
            return match  # already the attribute value
        elif field.mapping.schema is not None:
            return self.build_object(match, field.mapping.schema)
        else:
            return "".join(match.itertext()).strip()
