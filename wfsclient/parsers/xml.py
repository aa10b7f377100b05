"""XML parsing for all server responses.

This logic uses the etree logic from the standard library,
with a custom element class that offers some helper properties.
Using defusedxml, entity expansion attacks by a hostile server are prevented.
"""

from __future__ import annotations

import logging
import typing
from enum import Enum
from xml.etree.ElementTree import Element, QName, TreeBuilder

from defusedxml import DefusedXmlException
from defusedxml.ElementTree import DefusedXMLParser, ParseError

from wfsclient.exceptions import ExternalParsingError

logger = logging.getLogger(__name__)

__all__ = (
    "xmlns",
    "NSElement",
    "parse_xml_from_string",
    "parse_qname",
    "split_ns",
)


class xmlns(Enum):
    """Common namespaces within WFS land.
    Note these short aliases are arbitrary in XML syntax; the XML code may use any alias (such as ns0).
    The full qualified name (e.g. ``<{http://www.opengis.net/wfs/2.0}FeatureType>``) is the actual tag name.
    """

    # XML standard
    xlink = "http://www.w3.org/1999/xlink"

    # APIs by the Open Geospatial Consortium (OGC)
    ogc = "http://www.opengis.net/ogc"
    ows10 = "http://www.opengis.net/ows"  # OGC Web Service (OWS) base classes, used by WFS 1.1
    ows11 = "http://www.opengis.net/ows/1.1"  # used by WFS 2.0
    wfs1 = "http://www.opengis.net/wfs"  # WFS 1.0 and 1.1
    wfs20 = "http://www.opengis.net/wfs/2.0"
    fes20 = "http://www.opengis.net/fes/2.0"  # Filter Encoding Standard (FES)

    def __str__(self):
        # Python 3.11+ has StrEnum for this.
        return self.value


class NSElement(Element):
    """Custom XML element, which offers the helpers that the stdlib etree lacks.
    Server responses use all kinds of namespaces (or none at all),
    so the root elements are recognized by their local name.
    """

    @property
    def localname(self) -> str:
        """Provide the tag name without its namespace."""
        return split_ns(self.tag)[1]

    def get_text(self) -> str:
        """Provide all text content of the element, including that of child elements."""
        return "".join(self.itertext()).strip()

    if typing.TYPE_CHECKING:
        # Make sure the type checking knows the actual type of the elements.
        def find(self, path: str, namespaces: dict[str, str] | None = None) -> NSElement | None:
            return super().find(path, namespaces)

        def findall(self, path: str, namespaces: dict[str, str] | None = None) -> list[NSElement]:
            return super().findall(path, namespaces)

        def __iter__(self) -> typing.Iterator[NSElement]:
            return super().__iter__()


def parse_qname(qname: str | None, ns_aliases: dict) -> str | None:
    """Resolve the QName aliases.

    For example, ``xlink:href`` will be resolved to ``{http://www.w3.org/1999/xlink}href``.
    The attribute notation (``@xlink:href``) is also supported, and keeps its ``@`` sign.
    Names without a prefix are returned unchanged, as XML attributes don't
    inherit the default namespace.
    """
    if not qname:
        return None

    if "/" in qname:
        raise ExternalParsingError(f"Can't resolve QName '{qname}', this is an XPath notation.")

    # Allow resolving @xlink:href, remove the @ sign.
    is_attribute = qname[0] == "@"
    if is_attribute:
        qname = qname[1:]

    prefix, _, localname = qname.rpartition(":")
    if not prefix:
        full_name = localname
    else:
        try:
            uri = ns_aliases[prefix]
        except KeyError:
            logger.debug("Can't resolve QName '%s', available namespaces: %r", qname, ns_aliases)
            raise ExternalParsingError(
                f"Can't resolve QName '{qname}', an XML namespace declaration is missing."
            ) from None

        full_name = QName(uri, localname).text

    return f"@{full_name}" if is_attribute else full_name


def parse_xml_from_string(xml_string: str | bytes) -> NSElement:
    """Provide a safe and consistent way for parsing XML.

    All elements of the resulting tree are :class:`NSElement` objects.
    """
    # Passing a custom parser potentially circumvents defusedxml,
    # so note the parser is again configured in the same way.
    # Older WFS 1.0 servers still reference a DTD, so only entities are forbidden.
    parser = DefusedXMLParser(
        target=TreeBuilder(element_factory=NSElement),
        forbid_dtd=False,
        forbid_entities=True,
        forbid_external=True,
    )

    # An encoding declaration in an already decoded string confuses the parser.
    if isinstance(xml_string, str) and xml_string.startswith("<?"):
        xml_string = xml_string[xml_string.find("?>") + 2 :]

    try:
        parser.feed(xml_string)
        return parser.close()
    except (ParseError, DefusedXmlException) as e:
        # Offer consistent results for callers to check for invalid data.
        logger.debug("Parsing XML error: %s: %r", e, xml_string[:200])
        raise ExternalParsingError(f"Unable to parse XML response: {e}") from e


def split_ns(xml_name: str) -> tuple[str | None, str]:
    """Split the element tag or attribute/text value into the namespace and
    local name. The stdlib etree doesn't have the properties for this (lxml does).
    """
    # Tags may start with a `{ns}`
    if xml_name.startswith("{"):
        end = xml_name.index("}")
        return xml_name[1:end], xml_name[end + 1 :]
    else:
        return None, xml_name
