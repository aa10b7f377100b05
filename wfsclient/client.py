"""The client to read the capabilities of a WFS server.

Usage:

.. code-block:: python

    with WFSClient("https://example.com/wfs") as client:
        for feature_type in client.feature_types():
            print(feature_type["name"], feature_type.get("title"))

The protocol version is negotiated on first use, and remembered for
the lifetime of the client. Pass ``version="1.1.0"`` to skip negotiation.
"""

from __future__ import annotations

import logging
from functools import lru_cache

import requests
from requests.adapters import HTTPAdapter

import wfsclient
from wfsclient import conf
from wfsclient.exceptions import ServiceException, VersionNotSupported, wrap_transport_errors
from wfsclient.negotiation import VersionNegotiator
from wfsclient.parsers.mapper import DocumentMapper
from wfsclient.parsers.xml import NSElement, parse_xml_from_string
from wfsclient.schemas import schema_registry

logger = logging.getLogger(__name__)

DEFAULT_USER_AGENT = f"django-wfsclient/{wfsclient.__version__}"

# Tells that an argument is not given, as None has a meaning of its own.
NOT_GIVEN = object()

# Root elements of the error responses in WFS 1.1/2.0 and WFS 1.0.
EXCEPTION_ROOTS = ("ExceptionReport", "ServiceExceptionReport")

__all__ = ("WFSClient", "DEFAULT_USER_AGENT")


class WFSClient:
    """Client for a single WFS server.

    :param url: The service endpoint.
    :param version: Use this protocol version, instead of negotiating one.
    :param extra_params: Query parameters to add to every request.
    :param user_agent: The ``User-Agent`` header to send.
    :param timeout: Timeout in seconds for each request, ``None`` waits forever.
    :param max_sockets: Size of the connection pool.
    :param keep_alive: Whether connections are reused between requests.

    Settings that are not given are read from the ``WFSCLIENT_...`` Django settings.
    """

    service = "WFS"

    def __init__(
        self,
        url: str,
        version: str | None = None,
        extra_params: dict | None = None,
        user_agent: str | None = None,
        timeout: float | None = NOT_GIVEN,
        max_sockets: int | None = None,
        keep_alive: bool | None = None,
    ):
        if not url:
            raise TypeError("URL is required!")

        if version is not None and version not in schema_registry:
            raise VersionNotSupported(version)

        self.url = url
        self.version = version
        self.extra_params = {**conf.WFSCLIENT_EXTRA_PARAMS, **(extra_params or {})}
        self.user_agent = user_agent or conf.WFSCLIENT_USER_AGENT or DEFAULT_USER_AGENT
        self.timeout = timeout if timeout is not NOT_GIVEN else conf.WFSCLIENT_TIMEOUT
        self.keep_alive = keep_alive if keep_alive is not None else conf.WFSCLIENT_KEEP_ALIVE
        self.session = self._create_session(max_sockets or conf.WFSCLIENT_MAX_SOCKETS)

    def __repr__(self):
        return f"<{self.__class__.__name__}: {self.url} (version={self.version})>"

    def _create_session(self, max_sockets: int) -> requests.Session:
        """Create the connection pool that all requests of this client share."""
        session = requests.Session()
        adapter = HTTPAdapter(pool_connections=1, pool_maxsize=max_sockets)
        session.mount("http://", adapter)
        session.mount("https://", adapter)
        session.headers["User-Agent"] = self.user_agent
        if not self.keep_alive:
            session.headers["Connection"] = "close"
        return session

    def close(self):
        """Release the pooled connections."""
        self.session.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()

    def ensure_version(self) -> str:
        """Tell which protocol version is used, negotiating it on first use."""
        if not self.version:
            negotiator = VersionNegotiator(self._get_capabilities_xml, schema_registry.versions)
            result = negotiator.negotiate(schema_registry.latest_version)
            logger.debug(
                "Negotiated WFS %s with %s after %d request(s)",
                result.version,
                self.url,
                result.request_count,
            )
            self.version = result.version

        return self.version

    def _get_capabilities_xml(self, version: str) -> NSElement:
        return self._request({"request": "GetCapabilities", "version": version})

    def _request(self, query: dict) -> NSElement:
        """Perform a GET request, and parse the XML response."""
        params = {
            "service": self.service,
            **self.extra_params,
            **query,
        }

        logger.debug("Requesting %s with %r", self.url, params)
        with wrap_transport_errors(self.url):
            response = self.session.get(self.url, params=params, timeout=self.timeout)
            response.raise_for_status()

        return parse_xml_from_string(response.content)

    def capabilities(self) -> dict:
        """Retrieve the capabilities of the server, in a version independent format.

        This returns a dict with a ``service`` and ``featureTypes`` key.
        """
        version = self.ensure_version()
        root = self._get_capabilities_xml(version)
        if root.localname in EXCEPTION_ROOTS:
            raise _exception_from_report(root)

        return get_mapper(version).build_object(root, "Main")

    def feature_types(self) -> list[dict]:
        """Retrieve the feature types that the server offers."""
        return self.capabilities().get("featureTypes") or []

    def result_formats(self) -> dict[str, str]:
        """Tell which result formats are known for the negotiated version, as {code: label}."""
        return dict(schema_registry[self.ensure_version()].result_formats)


@lru_cache
def get_mapper(version: str) -> DocumentMapper:
    """Provide the document mapper for a protocol version.
    Mappers hold no state, so one instance is shared by all clients.
    """
    return DocumentMapper(schema_registry[version])


def _exception_from_report(root: NSElement) -> ServiceException:
    """Translate the exception report into a Python exception.

    This handles both the OWS format (WFS 1.1 and 2.0)::

        <ows:ExceptionReport>
          <ows:Exception exceptionCode="..." locator="...">
            <ows:ExceptionText>...</ows:ExceptionText>
          </ows:Exception>
        </ows:ExceptionReport>

    and the older WFS 1.0 format::

        <ServiceExceptionReport>
          <ServiceException code="..." locator="...">...</ServiceException>
        </ServiceExceptionReport>
    """
    for child in root:
        if child.localname == "Exception":
            texts = [node.get_text() for node in child if node.localname == "ExceptionText"]
            return ServiceException(
                text="\n".join(texts) or None,
                code=child.attrib.get("exceptionCode"),
                locator=child.attrib.get("locator"),
            )
        elif child.localname == "ServiceException":
            return ServiceException(
                text=child.get_text() or None,
                code=child.attrib.get("code"),
                locator=child.attrib.get("locator"),
            )

    return ServiceException()
