"""Exceptions raised by the WFS client.

Errors fall into three groups:

* :class:`VersionNegotiationFailed` subclasses: the client and server
  could not agree on a protocol version.
* :class:`TransportFailure`: the request itself failed (network errors,
  timeouts, non-2xx responses, unparsable XML).
* :class:`ServiceException`: the server answered with an OWS ``<ExceptionReport>``.

See:
https://docs.opengeospatial.org/is/09-025r2/09-025r2.html#35
"""

from __future__ import annotations

from contextlib import contextmanager

import requests


@contextmanager
def wrap_transport_errors(url: str):
    """Translate the errors of the HTTP library into a :class:`TransportFailure`.
    The original exception remains available as ``__cause__``.
    """
    try:
        yield
    except requests.Timeout as e:
        raise TransportFailure(f"Request to {url} timed out: {e}", url=url) from e
    except requests.HTTPError as e:
        status_code = e.response.status_code if e.response is not None else None
        raise TransportFailure(
            f"Request to {url} failed with HTTP {status_code}", url=url, status_code=status_code
        ) from e
    except requests.RequestException as e:
        raise TransportFailure(f"Request to {url} failed: {e}", url=url) from e


class WFSClientError(Exception):
    """Base class for all errors of this package."""


class VersionNotSupported(WFSClientError, ValueError):
    """The requested protocol version is not known by this client."""

    def __init__(self, version: str):
        super().__init__(f"Version {version} is not supported by the client")
        self.version = version


class VersionNegotiationFailed(WFSClientError):
    """Base class for all version negotiation errors.
    These are terminal for the negotiation attempt, and never retried.
    """

    text_template = "Version negotiation has failed."

    def __init__(self, text=None, candidates=()):
        super().__init__(text or self.text_template)
        self.text = text or self.text_template
        self.candidates = tuple(candidates)  # all versions that were probed


class UnreadableVersion(VersionNegotiationFailed):
    """The capabilities document has no (valid) version attribute."""

    text_template = "Unable to read version in Capabilities."


class NoOverlap(VersionNegotiationFailed):
    """The server only supports versions above the client's candidate."""

    def __init__(self, detected_version: str, candidate_version: str, candidates=()):
        super().__init__(
            f"Version negotiation has failed. Lowest version supported by server"
            f" is {detected_version} but candidate version was {candidate_version}.",
            candidates=candidates,
        )
        self.detected_version = detected_version
        self.candidate_version = candidate_version


class NoSmallerCandidate(VersionNegotiationFailed):
    """The server reported an unsupported version, and the client has nothing below it."""

    def __init__(self, detected_version: str, candidates=()):
        super().__init__(
            f"Version negotiation has failed. Server reported version {detected_version},"
            f" the client supports no version below it.",
            candidates=candidates,
        )
        self.detected_version = detected_version


class RecoveryExhausted(VersionNegotiationFailed):
    """The server never returned a capabilities document."""

    def __init__(self, candidate_version: str, candidates=()):
        super().__init__(
            f"Version negotiation has failed (recovery mode). No capabilities document"
            f" was returned, lowest candidate version was {candidate_version}.",
            candidates=candidates,
        )
        self.candidate_version = candidate_version


class TransportFailure(WFSClientError):
    """The request could not be completed, or the response could not be read."""

    def __init__(self, text, url=None, status_code=None):
        super().__init__(text)
        self.url = url
        self.status_code = status_code


class ExternalParsingError(TransportFailure):
    """The response is not well-formed XML."""


class ServiceException(WFSClientError):
    """The server responded with an OWS exception report.

    This mirrors the ``<ows:Exception>`` element, for example::

        <ows:Exception exceptionCode="InvalidParameterValue" locator="version">
          <ows:ExceptionText>Invalid value for 'version' parameter.</ows:ExceptionText>
        </ows:Exception>
    """

    def __init__(self, text=None, code=None, locator=None):
        text = text or "The server returned an exception report."
        super().__init__(f"{code}: {text}" if code else text)
        self.text = text
        self.code = code
        self.locator = locator
